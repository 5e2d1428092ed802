import pytest
from sqlalchemy import func, select

from app.core.exceptions import ConflictError
from app.models.qr.qr_code import QRCode
from app.schemas.qr.qr_code import QRCodeCreate
from app.services.qr.import_service import QRImportService
from app.services.qr.qr_service import QRCodeService


async def _seed(session_maker, *qr_code_ids):
    async with session_maker() as session:
        service = QRCodeService(session)
        for qr_code_id in qr_code_ids:
            await service.create_qr_code(QRCodeCreate(qr_code_id=qr_code_id, url=f"https://example.com/{qr_code_id}"))


async def _row_count(session_maker, qr_code_id):
    async with session_maker() as session:
        result = await session.execute(
            select(func.count()).select_from(QRCode).where(QRCode.qr_code_id == qr_code_id)
        )
        return result.scalar()


class TestUniqueConstraintGuard:
    """A writer that slips past the existence pre-check still hits the unique constraint"""

    async def test_create_after_missed_precheck_is_conflict(self, session_maker):
        await _seed(session_maker, "B-1")

        async with session_maker() as session:
            service = QRCodeService(session)

            # another writer committed between our pre-check and insert
            async def nothing_found(filters):
                return None
            service.store.find_one = nothing_found

            with pytest.raises(ConflictError) as exc_info:
                await service.create_qr_code(QRCodeCreate(qr_code_id="B-1", url="https://example.com/other"))

        assert exc_info.value.status_code == 409
        assert exc_info.value.detail == "QR Code 'B-1' already exists"
        assert await _row_count(session_maker, "B-1") == 1

    async def test_batch_rejected_by_constraint_falls_back_per_row(self, session_maker):
        await _seed(session_maker, "B-2")

        async with session_maker() as session:
            service = QRImportService(session)

            async def none_existing(qr_code_ids):
                return []
            service.store.existing_ids = none_existing

            report = await service.bulk_insert([
                {"qrCodeId": "B-1", "url": "https://example.com/1"},
                {"qrCodeId": "B-2", "url": "https://example.com/2"},
                {"qrCodeId": "B-3", "url": "https://example.com/3"},
            ])

        assert report.successful == 2
        assert report.failed == 1
        assert report.errors == ["QR Code 'B-2' already exists"]
        assert report.inserted_ids == ["B-1", "B-3"]
        for qr_code_id in ("B-1", "B-2", "B-3"):
            assert await _row_count(session_maker, qr_code_id) == 1
