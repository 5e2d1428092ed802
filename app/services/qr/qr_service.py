import logging
from typing import Any, Dict, Mapping, Optional
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import ConflictError, DuplicateKeyError, NotFoundError, ValidationError
from app.models.qr.qr_code import QRCode
from app.schemas.common.pagination import PaginationMeta
from app.schemas.qr.qr_code import QRCodeCreate, QRCodeUpdate
from app.services.qr.qr_store import QRCodeStore
from app.utils.query_builder import build_query
from app.utils.validators.qr_validators import require_qr_code_id

logger = logging.getLogger(__name__)

# Listing filters outside this safelist are dropped
ALLOWED_FILTER_FIELDS = ("qrCodeId", "url", "isUsed", "isActive", "isDeleted", "count")
BOOLEAN_FIELDS = {"isUsed", "isActive", "isDeleted"}
TEXT_FIELDS = {"qrCodeId", "url"}

MUTABLE_FIELDS = {"url", "isActive", "isUsed", "isDeleted"}
NON_NULLABLE_FIELDS = {"isActive", "isUsed", "isDeleted"}


class QRCodeService:
    def __init__(self, db: AsyncSession, store: Optional[QRCodeStore] = None):
        self.db = db
        self.store = store or QRCodeStore(db)

    # ---------- Create ----------
    async def create_qr_code(self, qr_data: QRCodeCreate) -> QRCode:
        return await self.insert_record({
            "qrCodeId": qr_data.qr_code_id,
            "url": qr_data.url,
            "isUsed": qr_data.is_used,
            "isActive": qr_data.is_active,
        })

    async def insert_record(self, row: Mapping[str, Any]) -> QRCode:
        """Insert one record with lifecycle defaults applied; raises ConflictError on a taken id"""
        qr_code_id = row["qrCodeId"]

        # Fast path for a friendly error; the unique constraint is the real guard
        if await self.store.find_one({"qrCodeId": qr_code_id}):
            raise ConflictError(f"QR Code '{qr_code_id}' already exists", error={"qrCodeId": qr_code_id})

        record_data = {
            "qrCodeId": qr_code_id,
            "url": row.get("url"),
            "isUsed": bool(row.get("isUsed", False)),
            "isActive": bool(row.get("isActive", True)),
            "isDeleted": False,
            "count": 0,
        }
        try:
            record = await self.store.insert_one(record_data)
        except DuplicateKeyError as e:
            raise ConflictError(f"QR Code '{qr_code_id}' already exists", error={"qrCodeId": qr_code_id}) from e

        logger.info(f"Created QR code {qr_code_id}")
        return record

    # ---------- Getters ----------
    async def get_qr_code(self, qr_code_id: str) -> QRCode:
        qr_code_id = require_qr_code_id(qr_code_id)
        record = await self.store.find_one({"qrCodeId": qr_code_id, "isDeleted": False})
        if not record:
            raise NotFoundError("QR not found")
        return record

    async def get_qr_codes(
        self,
        params: Mapping[str, Any],
        page: int = 1,
        limit: Optional[int] = None,
    ) -> Dict[str, Any]:
        """List records matching the safelisted filters with pagination metadata"""
        limit = limit or settings.DEFAULT_PAGE_SIZE
        if page < 1 or limit < 1:
            raise ValidationError("page and limit must be positive")

        filters = self._normalize_filters(params, build_query(params, ALLOWED_FILTER_FIELDS))
        filters.setdefault("isDeleted", False)

        total = await self.store.count_documents(filters)
        records = await self.store.find(filters, skip=(page - 1) * limit, limit=limit)

        return {
            "qrs": records,
            "pagination": PaginationMeta.build(page=page, limit=limit, total_count=total),
        }

    def _normalize_filters(self, raw_params: Mapping[str, Any], query: Dict[str, Any]) -> Dict[str, Any]:
        """Check coerced values against column types before they reach the store"""
        filters: Dict[str, Any] = {}
        for field, value in query.items():
            if field in BOOLEAN_FIELDS:
                if not isinstance(value, bool):
                    raise ValidationError(f"Invalid value for {field}: expected true or false")
            elif field == "count":
                if isinstance(value, bool) or not isinstance(value, int):
                    raise ValidationError("Invalid value for count: expected an integer")
            elif field in TEXT_FIELDS:
                # text columns compare against the raw string, e.g. qrCodeId=00123
                raw = raw_params.get(field)
                value = raw if isinstance(raw, str) else str(value)
            filters[field] = value
        return filters

    # ---------- Update ----------
    async def update_qr_code(self, qr_code_id: str, qr_data: QRCodeUpdate) -> QRCode:
        qr_code_id = require_qr_code_id(qr_code_id)
        patch = {
            field: value
            for field, value in qr_data.model_dump(by_alias=True, exclude_unset=True).items()
            if field in MUTABLE_FIELDS and not (value is None and field in NON_NULLABLE_FIELDS)
        }
        if not patch:
            return await self.get_qr_code(qr_code_id)

        record = await self.store.find_one_and_update(
            {"qrCodeId": qr_code_id, "isDeleted": False},
            patch,
        )
        if not record:
            raise NotFoundError("QR not found")

        logger.info(f"Updated QR code {qr_code_id}: {sorted(patch)}")
        return record

    # ---------- Delete ----------
    async def delete_qr_code(self, qr_code_id: str) -> QRCode:
        """Soft delete; the row is kept with isDeleted=true"""
        qr_code_id = require_qr_code_id(qr_code_id)
        record = await self.store.find_one_and_update(
            {"qrCodeId": qr_code_id, "isDeleted": False},
            {"isDeleted": True},
        )
        if not record:
            raise NotFoundError("QR not found")

        logger.info(f"Soft-deleted QR code {qr_code_id}")
        return record
