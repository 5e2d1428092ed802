from typing import Optional, Dict
from fastapi import Request

HDR_REQUEST_ID = "X-Request-Id"

def get_request_context(request: Request) -> Dict[str, Optional[str]]:
    """
    Extracts endpoint, client IP, user-agent and request_id from the FastAPI Request.
    - request_id comes from the caller's header, else the id LoggingMiddleware assigned.
    """
    ip_address = request.client.host if request.client else None
    user_agent = request.headers.get("user-agent")
    endpoint = f"{request.method} {request.url.path}"
    request_id = request.headers.get(HDR_REQUEST_ID) or getattr(request.state, "request_id", None)
    return {
        "ip_address": ip_address,
        "user_agent": user_agent,
        "endpoint": endpoint,
        "request_id": request_id,
    }
