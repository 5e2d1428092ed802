import logging
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import NotFoundError
from app.models.shared.enums import ScanState
from app.schemas.qr.verification import VerificationOutcome
from app.services.qr.qr_store import QRCodeStore
from app.utils.validators.qr_validators import require_qr_code_id

logger = logging.getLogger(__name__)


def scan_state(count: int, limit: int) -> ScanState:
    if count <= 0:
        return ScanState.UNVERIFIED
    if count <= limit:
        return ScanState.WITHIN_LIMIT
    return ScanState.OVER_LIMIT


class QRVerificationService:
    """
    Public scan check.

    Each call that finds an eligible record (not deleted, active) increments
    its counter exactly once, including calls past the scan limit; those
    report valid=False. Ineligible or unknown codes leave the counter alone
    and all fail with the same 404 so a scanning client learns nothing about
    which records exist.
    """

    def __init__(self, db: AsyncSession, store: Optional[QRCodeStore] = None, scan_limit: Optional[int] = None):
        self.db = db
        self.store = store or QRCodeStore(db)
        self.scan_limit = settings.SCAN_LIMIT if scan_limit is None else scan_limit

    async def verify(self, qr_code_id: str) -> VerificationOutcome:
        qr_code_id = require_qr_code_id(qr_code_id)

        record = await self.store.find_one_and_update(
            {"qrCodeId": qr_code_id, "isDeleted": False, "isActive": True},
            {"isUsed": True},
            increment={"count": 1},
        )
        if record is None:
            logger.info(f"Verification rejected for {qr_code_id}")
            raise NotFoundError("Invalid or inactive QR")

        valid = record.count <= self.scan_limit and record.is_active and not record.is_deleted
        outcome = VerificationOutcome(
            qr_code_id=record.qr_code_id,
            url=record.url,
            count=record.count,
            total_scans=record.count,
            valid=valid,
            scan_limit=self.scan_limit,
            remaining_scans=max(self.scan_limit - record.count, 0),
            state=scan_state(record.count, self.scan_limit),
        )
        if valid:
            logger.info(f"Verified {qr_code_id}: scan {record.count}/{self.scan_limit}")
        else:
            logger.warning(f"Scan limit exceeded for {qr_code_id}: scan {record.count}/{self.scan_limit}")
        return outcome
