import csv
import logging
from io import StringIO
from typing import Dict, List

from app.core.exceptions import ValidationError

logger = logging.getLogger(__name__)

IMPORT_HEADERS = ["qrCodeId", "url"]
IMPORT_EXAMPLE = {"qrCodeId": "QR123", "url": "https://example.com"}


def parse_qr_csv(content: bytes) -> List[Dict[str, str]]:
    """
    Read an uploaded CSV into {qrCodeId, url} rows.

    Header names are matched case-insensitively and other columns are
    ignored. Cell values are passed through untouched; row validation
    belongs to the import pipeline.
    """
    try:
        text = content.decode("utf-8-sig")
    except UnicodeDecodeError:
        raise ValidationError("CSV file must be UTF-8 encoded")

    reader = csv.DictReader(StringIO(text))
    if not reader.fieldnames:
        raise ValidationError("CSV file is empty")

    header_map = {}
    for name in reader.fieldnames:
        if name is None:
            continue
        for expected in IMPORT_HEADERS:
            if name.strip().lower() == expected.lower():
                header_map[expected] = name

    missing = [h for h in IMPORT_HEADERS if h not in header_map]
    if missing:
        raise ValidationError(f"CSV is missing required column(s): {', '.join(missing)}", error=IMPORT_HEADERS)

    rows = [
        {field: record.get(column) for field, column in header_map.items()}
        for record in reader
    ]

    logger.info(f"Parsed {len(rows)} row(s) from CSV upload")
    return rows
