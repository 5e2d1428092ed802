from typing import Optional
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from app.auth.jwt_handler import decode_access_token
from app.core.exceptions import AuthenticationError
import logging

security = HTTPBearer(auto_error=False)
logger = logging.getLogger(__name__)

async def require_admin(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> str:
    """Gate admin routes behind a bearer token issued by /admin/login"""
    if credentials is None:
        raise AuthenticationError("Not authenticated")

    payload = decode_access_token(credentials.credentials)
    if payload is None or not payload.get("sub"):
        logger.warning(f"Rejected admin token on {request.method} {request.url.path}")
        raise AuthenticationError()

    # Add request info to context
    request.state.admin = payload["sub"]
    return payload["sub"]
