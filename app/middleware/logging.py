import time
import uuid
import logging
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.request_context import HDR_REQUEST_ID, get_request_context

logger = logging.getLogger("access")

# Public scan traffic is tagged so verifications can be told apart from admin calls
VERIFY_PATH_MARKER = "/qr/verify/"

class LoggingMiddleware(BaseHTTPMiddleware):
    """Log each request with its request id and echo the id back to the caller"""

    async def dispatch(self, request: Request, call_next):
        start_time = time.time()

        context = get_request_context(request)
        request_id = context["request_id"] or uuid.uuid4().hex
        request.state.request_id = request_id
        kind = "scan" if VERIFY_PATH_MARKER in request.url.path else "api"

        logger.info(
            f"🌐 [{request_id}] {kind} {context['endpoint']} - "
            f"Client: {context['ip_address'] or 'unknown'} - "
            f"User-Agent: {context['user_agent'] or 'unknown'}"
        )

        response = await call_next(request)

        process_time = time.time() - start_time

        logger.info(
            f"{'✅' if response.status_code < 400 else '⚠️'} [{request_id}] {kind} {context['endpoint']} - "
            f"Status: {response.status_code} - "
            f"Time: {process_time:.4f}s"
        )

        response.headers[HDR_REQUEST_ID] = request_id
        response.headers["X-Process-Time"] = str(process_time)

        return response
