"""
QR Code Seed Data (async, idempotent)
- Demo codes for local development and manual scanning
Run:  python scripts/seed/qr_data.py
"""

import os, sys
import asyncio
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..")))

from app.core.database import async_session_maker, engine
from app.db.base import Base
from app.models.qr.qr_code import QRCode  # noqa: F401
from app.core.exceptions import ConflictError
from app.schemas.qr.qr_code import QRCodeCreate
from app.services.qr.qr_service import QRCodeService

# ----------------------------------------------------------------------
# SEED DATA
# ----------------------------------------------------------------------

QR_SEED = [
    {"qr_code_id": "DEMO-0001", "url": "https://example.com/products/0001"},
    {"qr_code_id": "DEMO-0002", "url": "https://example.com/products/0002"},
    {"qr_code_id": "DEMO-0003", "url": "https://example.com/products/0003"},
    {"qr_code_id": "DEMO-INACTIVE", "url": "https://example.com/products/recalled", "is_active": False},
]

# ----------------------------------------------------------------------

async def seed(service: QRCodeService) -> int:
    created = 0
    for data in QR_SEED:
        try:
            await service.create_qr_code(QRCodeCreate(**data))
            created += 1
            print(f"✓ Created {data['qr_code_id']}")
        except ConflictError:
            print(f"• {data['qr_code_id']} already exists - skipping")
    return created

async def main():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session_maker() as db:
        created = await seed(QRCodeService(db))

    await engine.dispose()
    print(f"✅ QR seed complete: {created} created")

if __name__ == "__main__":
    asyncio.run(main())
