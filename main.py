from datetime import datetime, timezone
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.core.config import settings
from app.core.error_handlers import register_exception_handlers
from app.core.logging_config import setup_logging
from app.middleware.logging import LoggingMiddleware
from app.api.v1.api import api_router

setup_logging()
logger = logging.getLogger(__name__)

# Create FastAPI app
app_config = {
    "title": settings.APP_NAME,
    "description": "Admin management and public verification of printed QR/barcode registrations",
    "version": "1.0.0",
    "docs_url": f"{settings.API_PREFIX}/docs",
    "redoc_url": f"{settings.API_PREFIX}/redoc",
    "openapi_url": f"{settings.API_PREFIX}/openapi.json",
}

app = FastAPI(**app_config)

# Add middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=settings.ALLOWED_METHODS,
    allow_headers=settings.ALLOWED_HEADERS,
)
app.add_middleware(LoggingMiddleware)

register_exception_handlers(app)

# Include routers
app.include_router(api_router, prefix=settings.API_PREFIX)

@app.get("/")
async def root():
    return {
        "message": "🔎 QR Provenance Verification Service",
        "status": "active",
        "version": "1.0.0",
        "docs": f"{settings.API_PREFIX}/docs",
    }

@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": settings.ENVIRONMENT,
    }


def run_http():
    """Run HTTP server on port 8000"""
    import uvicorn
    logger.info("🚀 Starting HTTP server on port 8000...")
    uvicorn.run(
        "main:app",  # Use string import
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
    )


if __name__ == "__main__":
    run_http()
