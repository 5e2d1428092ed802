from typing import List, Optional
from datetime import datetime
from pydantic import Field, field_validator

from app.models.shared.enums import QRStatus
from app.schemas.common.base import CamelModel
from app.schemas.common.pagination import PaginationMeta
from app.utils.validators.qr_validators import is_valid_qr_code_id, is_valid_url


def _clean_url(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    if not is_valid_url(value):
        raise ValueError("Must be a valid URL")
    return value


class QRCodeCreate(CamelModel):
    qr_code_id: str = Field(..., description="Printed/encoded business identifier")
    url: Optional[str] = None
    is_used: bool = False
    is_active: bool = True

    @field_validator("qr_code_id")
    @classmethod
    def validate_qr_code_id(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("qrCodeId is required")
        if not is_valid_qr_code_id(v):
            raise ValueError(
                "QR Code ID must be at most 50 characters and contain only letters, numbers, hyphens, and underscores"
            )
        return v

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: Optional[str]) -> Optional[str]:
        return _clean_url(v)


class QRCodeUpdate(CamelModel):
    """Mutable fields only; anything else in the payload is ignored"""
    url: Optional[str] = None
    is_active: Optional[bool] = None
    is_used: Optional[bool] = None
    is_deleted: Optional[bool] = None

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: Optional[str]) -> Optional[str]:
        return _clean_url(v)


class QRCodeResponse(CamelModel):
    qr_code_id: str
    url: Optional[str] = None
    is_used: bool
    is_active: bool
    is_deleted: bool
    count: int
    status: QRStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class QRCodeList(CamelModel):
    qrs: List[QRCodeResponse]
    pagination: PaginationMeta


class QRConfig(CamelModel):
    scan_limit: int
