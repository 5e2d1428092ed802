import re
from typing import Any
from pydantic import AnyUrl, TypeAdapter, ValidationError as PydanticValidationError
from app.core.config import settings
from app.core.exceptions import ValidationError

QR_CODE_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")

_url_adapter = TypeAdapter(AnyUrl)

def is_valid_url(value: str) -> bool:
    """True when value parses as an absolute URL (scheme required)"""
    try:
        _url_adapter.validate_python(value)
    except PydanticValidationError:
        return False
    return True

def is_valid_qr_code_id(value: str) -> bool:
    return 0 < len(value) <= settings.QR_ID_MAX_LENGTH and bool(QR_CODE_ID_PATTERN.match(value))

def require_qr_code_id(value: Any) -> str:
    """Trim an identifier taken from a path or payload, rejecting blanks before any store access"""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError("qrCodeId is required")
    return value.strip()
