from typing import Any
from fastapi import APIRouter, Body, Depends, File, Response, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import require_admin
from app.core.database import get_async_session
from app.models.shared.enums import ImportOutcome
from app.schemas.common.response import ApiResponse
from app.schemas.qr.qr_import import ImportReport, ImportResponse, ImportTemplate, ImportTemplateExample
from app.services.qr.import_service import QRImportService
from app.utils.data_importer import IMPORT_EXAMPLE, IMPORT_HEADERS

router = APIRouter()
template_router = APIRouter()

def _import_response(report: ImportReport, response: Response) -> ImportResponse:
    outcome = report.outcome
    if outcome == ImportOutcome.FAILED:
        response.status_code = status.HTTP_400_BAD_REQUEST
        return ImportResponse(success=False, message="All imports failed", details=report)
    if outcome == ImportOutcome.PARTIAL:
        response.status_code = status.HTTP_207_MULTI_STATUS
        return ImportResponse(
            success=True,
            message=f"Partially successful: {report.successful} imported, {report.failed} failed",
            details=report,
        )
    return ImportResponse(
        success=True,
        message=f"Successfully imported {report.successful} QR code(s)",
        details=report,
    )

@router.post("/import", response_model=ImportResponse, dependencies=[Depends(require_admin)])
async def import_qr_codes(
    response: Response,
    rows: Any = Body(...),
    db: AsyncSession = Depends(get_async_session),
):
    """Bulk import a JSON array of {qrCodeId, url} rows"""
    service = QRImportService(db)
    report = await service.bulk_insert(rows)
    return _import_response(report, response)

@router.post("/import/csv", response_model=ImportResponse, dependencies=[Depends(require_admin)])
async def import_qr_codes_csv(
    response: Response,
    file: UploadFile = File(...),
    db: AsyncSession = Depends(get_async_session),
):
    """Bulk import an uploaded CSV; large files are split into chunks"""
    service = QRImportService(db)
    content = await file.read()
    report = await service.import_csv(content)
    return _import_response(report, response)

@template_router.get("/template", response_model=ApiResponse[ImportTemplate])
async def get_import_template():
    """CSV headers and an example row for the import file"""
    return ApiResponse(
        message="Import template fetched successfully",
        data=ImportTemplate(
            headers=IMPORT_HEADERS,
            example=ImportTemplateExample(
                qr_code_id=IMPORT_EXAMPLE["qrCodeId"],
                url=IMPORT_EXAMPLE["url"],
            ),
        ),
    )
