from typing import Optional
from fastapi import APIRouter, Depends, Query, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.database import get_async_session
from app.schemas.common.response import ApiResponse
from app.schemas.qr.qr_code import QRCodeCreate, QRCodeList, QRCodeResponse, QRCodeUpdate
from app.services.qr.qr_service import QRCodeService
from app.utils.qr_generator import QRImageService

router = APIRouter()

@router.post("", response_model=ApiResponse[QRCodeResponse])
async def create_qr_code(
    qr_data: QRCodeCreate,
    db: AsyncSession = Depends(get_async_session),
):
    """Create a new QR code"""
    service = QRCodeService(db)
    qr_code = await service.create_qr_code(qr_data)
    return ApiResponse(message="QR created successfully", data=QRCodeResponse.model_validate(qr_code))

@router.get("", response_model=ApiResponse[QRCodeList])
async def get_qr_codes(
    request: Request,
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    qrCodeId: Optional[str] = Query(None),
    url: Optional[str] = Query(None),
    isActive: Optional[str] = Query(None),
    isUsed: Optional[str] = Query(None),
    isDeleted: Optional[str] = Query(None),
    count: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_async_session),
):
    """List QR codes; unknown query keys are ignored"""
    service = QRCodeService(db)
    # the service owns the filter safelist, so hand it every raw parameter
    params = dict(request.query_params)
    result = await service.get_qr_codes(params, page=page, limit=limit)
    return ApiResponse(
        message="QRs fetched successfully",
        data=QRCodeList(
            qrs=[QRCodeResponse.model_validate(qr) for qr in result["qrs"]],
            pagination=result["pagination"],
        ),
    )

@router.get("/{qr_code_id}", response_model=ApiResponse[QRCodeResponse])
async def get_qr_code(
    qr_code_id: str,
    db: AsyncSession = Depends(get_async_session),
):
    """Get QR code by its printed identifier"""
    service = QRCodeService(db)
    qr_code = await service.get_qr_code(qr_code_id)
    return ApiResponse(message="QR fetched successfully", data=QRCodeResponse.model_validate(qr_code))

@router.put("/{qr_code_id}", response_model=ApiResponse[QRCodeResponse])
async def update_qr_code(
    qr_code_id: str,
    qr_data: QRCodeUpdate,
    db: AsyncSession = Depends(get_async_session),
):
    """Update url/flags of a QR code"""
    service = QRCodeService(db)
    qr_code = await service.update_qr_code(qr_code_id, qr_data)
    return ApiResponse(message="QR updated successfully", data=QRCodeResponse.model_validate(qr_code))

@router.delete("/{qr_code_id}", response_model=ApiResponse[QRCodeResponse])
async def delete_qr_code(
    qr_code_id: str,
    db: AsyncSession = Depends(get_async_session),
):
    """Delete QR code (soft delete)"""
    service = QRCodeService(db)
    qr_code = await service.delete_qr_code(qr_code_id)
    return ApiResponse(message="QR deleted successfully", data=QRCodeResponse.model_validate(qr_code))

@router.get("/{qr_code_id}/image", response_class=Response)
async def get_qr_code_image(
    qr_code_id: str,
    db: AsyncSession = Depends(get_async_session),
):
    """Printable PNG of the code"""
    qr_code = await QRCodeService(db).get_qr_code(qr_code_id)
    png = QRImageService().render_record(qr_code)
    return Response(
        content=png,
        media_type="image/png",
        headers={"Content-Disposition": f'inline; filename="{qr_code.qr_code_id}.png"'},
    )
