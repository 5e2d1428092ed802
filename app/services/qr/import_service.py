import logging
from typing import Any, Dict, List, Optional, Tuple
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import BaseAppException, ConflictError, NoValidRowsError, ValidationError
from app.schemas.qr.qr_import import ImportReport
from app.services.qr.qr_service import QRCodeService
from app.services.qr.qr_store import QRCodeStore
from app.utils.data_importer import parse_qr_csv
from app.utils.validators.qr_validators import is_valid_url

logger = logging.getLogger(__name__)

# first data row sits under the CSV header and rows are 1-indexed
HEADER_ROW_OFFSET = 2


class QRImportService:
    def __init__(
        self,
        db: AsyncSession,
        store: Optional[QRCodeStore] = None,
        qr_service: Optional[QRCodeService] = None,
    ):
        self.db = db
        self.store = store or QRCodeStore(db)
        self.qr_service = qr_service or QRCodeService(db, store=self.store)

    def validate_rows(self, rows: List[Any], row_offset: int = 0) -> Tuple[List[Dict[str, Any]], List[str]]:
        """Split raw rows into insertable records and per-row error messages"""
        valid_rows: List[Dict[str, Any]] = []
        seen = set()
        errors: List[str] = []
        max_length = settings.QR_ID_MAX_LENGTH

        for index, row in enumerate(rows):
            row_num = index + HEADER_ROW_OFFSET + row_offset
            row = row if isinstance(row, dict) else {}

            qr_code_id = row.get("qrCodeId")
            if not qr_code_id or not isinstance(qr_code_id, str):
                errors.append(f"Row {row_num}: Missing or invalid qrCodeId")
                continue
            qr_code_id = qr_code_id.strip()
            if not qr_code_id:
                errors.append(f"Row {row_num}: qrCodeId cannot be empty")
                continue
            if len(qr_code_id) > max_length:
                errors.append(f"Row {row_num}: qrCodeId too long (max {max_length} characters)")
                continue

            url = row.get("url")
            if not url or not isinstance(url, str):
                errors.append(f"Row {row_num}: Missing or invalid url")
                continue
            url = url.strip()
            if not url:
                errors.append(f"Row {row_num}: url cannot be empty")
                continue
            if not is_valid_url(url):
                errors.append(f"Row {row_num}: Invalid URL format")
                continue

            if qr_code_id in seen:
                errors.append(f"Row {row_num}: Duplicate qrCodeId '{qr_code_id}' in CSV")
                continue
            seen.add(qr_code_id)

            valid_rows.append({
                "qrCodeId": qr_code_id,
                "url": url,
                "isUsed": False,
                "isActive": True,
                "isDeleted": False,
                "count": 0,
            })

        return valid_rows, errors

    async def bulk_insert(self, rows: Any, row_offset: int = 0) -> ImportReport:
        """
        Validate and insert up to IMPORT_MAX_ROWS records.

        Invalid rows are reported and skipped. The whole batch is tried in one
        transaction first; if the store rejects it, every row is retried on its
        own so independent rows still land.
        """
        if not isinstance(rows, list):
            raise ValidationError("Request body must be an array")
        if not rows:
            raise ValidationError("No data provided")
        if len(rows) > settings.IMPORT_MAX_ROWS:
            raise ValidationError(f"Maximum {settings.IMPORT_MAX_ROWS} rows allowed per import")

        valid_rows, errors = self.validate_rows(rows, row_offset)
        if not valid_rows:
            raise NoValidRowsError(errors)

        report = ImportReport(errors=list(errors))
        try:
            await self.store.insert_many(valid_rows)
        except BaseAppException as bulk_error:
            logger.warning(f"Bulk insert failed, trying individual inserts: {bulk_error.detail}")
            return await self._insert_individually(valid_rows, report)

        report.successful = len(valid_rows)
        report.inserted_ids = [row["qrCodeId"] for row in valid_rows]
        logger.info(f"Bulk imported {report.successful} QR code(s)")
        return report

    async def _insert_individually(self, valid_rows: List[Dict[str, Any]], report: ImportReport) -> ImportReport:
        for row in valid_rows:
            qr_code_id = row["qrCodeId"]
            try:
                record = await self.qr_service.insert_record(row)
            except ConflictError:
                report.failed += 1
                report.errors.append(f"QR Code '{qr_code_id}' already exists")
                continue
            except BaseAppException as e:
                report.failed += 1
                report.errors.append(f"Failed to insert '{qr_code_id}': {e.error or e.detail}")
                continue
            report.successful += 1
            report.inserted_ids.append(record.qr_code_id)

        logger.info(
            f"Individual import finished: {report.successful} imported, {report.failed} failed"
        )
        return report

    async def import_csv(self, content: bytes) -> ImportReport:
        """Parse an uploaded CSV and feed it through bulk_insert in IMPORT_MAX_ROWS chunks"""
        rows = parse_qr_csv(content)
        if not rows:
            raise ValidationError("No data provided")
        if len(rows) > settings.IMPORT_MAX_FILE_ROWS:
            raise ValidationError(f"Maximum {settings.IMPORT_MAX_FILE_ROWS} rows allowed per file")

        chunk_size = settings.IMPORT_MAX_ROWS
        report = ImportReport()
        for start in range(0, len(rows), chunk_size):
            try:
                chunk_report = await self.bulk_insert(rows[start:start + chunk_size], row_offset=start)
            except NoValidRowsError as e:
                report.errors.extend(e.errors)
                continue
            report.merge(chunk_report)
        return report
