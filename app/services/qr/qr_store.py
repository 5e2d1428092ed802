import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple
from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import DuplicateKeyError, StoreError
from app.models.qr.qr_code import QRCode

logger = logging.getLogger(__name__)

# API field name -> mapped attribute name
FIELD_ATTRS: Dict[str, str] = {
    "id": "id",
    "qrCodeId": "qr_code_id",
    "url": "url",
    "isUsed": "is_used",
    "isActive": "is_active",
    "isDeleted": "is_deleted",
    "count": "count",
    "createdAt": "created_at",
    "updatedAt": "updated_at",
}

ASCENDING = 1
DESCENDING = -1


def _attr(field: str) -> str:
    try:
        return FIELD_ATTRS[field]
    except KeyError:
        raise ValueError(f"Unknown QR field: {field}") from None


def _column(field: str):
    return getattr(QRCode, _attr(field))


def is_unique_violation(exc: IntegrityError) -> bool:
    orig = exc.orig
    if getattr(orig, "sqlstate", None) == "23505" or getattr(orig, "pgcode", None) == "23505":
        return True
    message = str(orig).lower()
    return "unique" in message or "duplicate" in message


class QRCodeStore:
    """
    Persistence primitives for QR records.

    Filters and values are keyed by API field names (qrCodeId, isActive, ...).
    Every write commits before returning so each call is one store round-trip.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    def _criteria(self, filters: Mapping[str, Any]) -> list:
        clauses = []
        for field, value in filters.items():
            column = _column(field)
            clauses.append(column.is_(None) if value is None else column == value)
        return clauses

    async def _fail(self, operation: str, exc: SQLAlchemyError) -> StoreError:
        await self.session.rollback()
        logger.error(f"QR store {operation} failed: {exc}")
        return StoreError(error=str(getattr(exc, "orig", None) or exc))

    # ---------- Reads ----------
    async def find_one(self, filters: Mapping[str, Any]) -> Optional[QRCode]:
        try:
            result = await self.session.execute(
                select(QRCode).where(*self._criteria(filters)).limit(1)
            )
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise await self._fail("find_one", e)

    async def find(
        self,
        filters: Mapping[str, Any],
        sort: Sequence[Tuple[str, int]] = (("createdAt", DESCENDING), ("id", DESCENDING)),
        skip: int = 0,
        limit: Optional[int] = None,
    ) -> List[QRCode]:
        query = select(QRCode).where(*self._criteria(filters))
        for field, direction in sort:
            column = _column(field)
            query = query.order_by(column.desc() if direction == DESCENDING else column.asc())
        query = query.offset(skip)
        if limit is not None:
            query = query.limit(limit)
        try:
            result = await self.session.execute(query)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            raise await self._fail("find", e)

    async def count_documents(self, filters: Mapping[str, Any]) -> int:
        try:
            result = await self.session.execute(
                select(func.count()).select_from(QRCode).where(*self._criteria(filters))
            )
            return result.scalar() or 0
        except SQLAlchemyError as e:
            raise await self._fail("count_documents", e)

    async def existing_ids(self, qr_code_ids: Iterable[str]) -> List[str]:
        """Identifiers from qr_code_ids already persisted, deleted rows included"""
        ids = list(qr_code_ids)
        if not ids:
            return []
        try:
            result = await self.session.execute(
                select(QRCode.qr_code_id).where(QRCode.qr_code_id.in_(ids))
            )
            found = set(result.scalars().all())
        except SQLAlchemyError as e:
            raise await self._fail("existing_ids", e)
        return [qr_code_id for qr_code_id in ids if qr_code_id in found]

    # ---------- Writes ----------
    async def find_one_and_update(
        self,
        filters: Mapping[str, Any],
        values: Optional[Mapping[str, Any]] = None,
        increment: Optional[Mapping[str, int]] = None,
    ) -> Optional[QRCode]:
        """
        Match and modify in a single UPDATE ... RETURNING statement.

        The filter is evaluated by the database inside the same statement that
        applies the change, so two concurrent callers can never both observe
        the same pre-update row. Returns the post-update record, or None when
        nothing matched.
        """
        assignments: Dict[str, Any] = {_attr(field): value for field, value in (values or {}).items()}
        for field, delta in (increment or {}).items():
            assignments[_attr(field)] = _column(field) + delta

        if not assignments:
            return await self.find_one(filters)

        stmt = (
            update(QRCode)
            .where(*self._criteria(filters))
            .values(**assignments)
            .returning(QRCode)
            .execution_options(populate_existing=True)
        )
        try:
            result = await self.session.execute(stmt)
            record = result.scalars().first()
            await self.session.commit()
            return record
        except IntegrityError as e:
            await self.session.rollback()
            if is_unique_violation(e):
                raise DuplicateKeyError([str(filters.get("qrCodeId", ""))]) from e
            raise StoreError(error=str(e.orig)) from e
        except SQLAlchemyError as e:
            raise await self._fail("find_one_and_update", e)

    def _build(self, row: Mapping[str, Any]) -> QRCode:
        return QRCode(**{_attr(field): value for field, value in row.items()})

    async def insert_one(self, row: Mapping[str, Any]) -> QRCode:
        record = self._build(row)
        self.session.add(record)
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            if is_unique_violation(e):
                raise DuplicateKeyError([record.qr_code_id]) from e
            raise StoreError(error=str(e.orig)) from e
        except SQLAlchemyError as e:
            raise await self._fail("insert_one", e)
        await self.session.refresh(record)
        return record

    async def insert_many(self, rows: Sequence[Mapping[str, Any]]) -> List[QRCode]:
        """
        Insert every row in one transaction.

        Raises DuplicateKeyError when any identifier is already persisted,
        either found by the pre-check or reported by the unique constraint.
        Nothing is written in that case.
        """
        duplicates = await self.existing_ids(row["qrCodeId"] for row in rows)
        if duplicates:
            raise DuplicateKeyError(duplicates)

        records = [self._build(row) for row in rows]
        self.session.add_all(records)
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            if is_unique_violation(e):
                raise DuplicateKeyError([], detail=f"Batch insert rejected: {e.orig}") from e
            raise StoreError(error=str(e.orig)) from e
        except SQLAlchemyError as e:
            raise await self._fail("insert_many", e)
        return records
