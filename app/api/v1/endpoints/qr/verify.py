from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.database import get_async_session
from app.schemas.common.response import ApiResponse
from app.schemas.qr.qr_code import QRConfig
from app.schemas.qr.verification import VerificationOutcome
from app.services.qr.verification_service import QRVerificationService

router = APIRouter()

@router.get("/verify/{qr_code_id}", response_model=ApiResponse[VerificationOutcome])
async def verify_qr_code(
    qr_code_id: str,
    db: AsyncSession = Depends(get_async_session),
):
    """Verify a scanned code and count the scan"""
    service = QRVerificationService(db)
    outcome = await service.verify(qr_code_id)
    message = "QR verified successfully" if outcome.valid else "QR scan limit exceeded"
    return ApiResponse(message=message, data=outcome)

@router.get("/config", response_model=ApiResponse[QRConfig])
async def get_qr_config():
    """Scan policy shared with scanning clients"""
    return ApiResponse(message="QR config fetched successfully", data=QRConfig(scan_limit=settings.SCAN_LIMIT))
