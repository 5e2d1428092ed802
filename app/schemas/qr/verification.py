from typing import Optional
from app.models.shared.enums import ScanState
from app.schemas.common.base import CamelModel

class VerificationOutcome(CamelModel):
    qr_code_id: str
    url: Optional[str] = None
    count: int
    total_scans: int
    valid: bool
    scan_limit: int
    remaining_scans: int
    state: ScanState
