from fastapi import APIRouter, Depends
from app.api.dependencies import require_admin
from app.api.v1.endpoints.auth import login
from app.api.v1.endpoints.qr import admin_qr, imports, verify

api_router = APIRouter()

# Authentication routes
api_router.include_router(login.router, prefix="/admin", tags=["Authentication"])

# Admin QR management
api_router.include_router(
    admin_qr.router,
    prefix="/admin/qr",
    tags=["QR Admin"],
    dependencies=[Depends(require_admin)],
)

# Public verification
api_router.include_router(verify.router, prefix="/qr", tags=["QR Verification"])

# Bulk import
api_router.include_router(imports.router, prefix="/qr", tags=["QR Import"])
api_router.include_router(imports.template_router, prefix="/import", tags=["QR Import"])
