import logging
from fastapi import APIRouter, Request

from app.core.config import settings
from app.core.exceptions import AuthenticationError
from app.core.request_context import get_request_context
from app.core.security import create_access_token, verify_admin_credentials
from app.schemas.auth.login import AdminLoginRequest, AdminToken
from app.schemas.common.response import ApiResponse

router = APIRouter()
logger = logging.getLogger(__name__)

@router.post("/login", response_model=ApiResponse[AdminToken])
async def admin_login(login_data: AdminLoginRequest, request: Request):
    """Exchange the configured admin credentials for a bearer token"""
    context = get_request_context(request)
    origin = (
        f"{context['endpoint']} from {context['ip_address'] or 'unknown'} "
        f"(agent={context['user_agent'] or 'unknown'}, request_id={context['request_id'] or '-'})"
    )
    if not verify_admin_credentials(login_data.username, login_data.password):
        logger.warning(f"Failed admin login for '{login_data.username}' on {origin}")
        raise AuthenticationError("Invalid username or password")

    logger.info(f"Admin '{login_data.username}' logged in on {origin}")
    token = AdminToken(
        access_token=create_access_token(login_data.username),
        expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )
    return ApiResponse(message="Login successful", data=token)
