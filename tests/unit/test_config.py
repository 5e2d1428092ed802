from sqlalchemy.engine import make_url

from app.core.config import settings


async def test_database_test_url_drives_test_engine(test_engine):
    assert settings.DATABASE_TEST_URL
    assert test_engine.url == make_url(settings.DATABASE_TEST_URL)


def test_scan_limit_configured():
    assert settings.SCAN_LIMIT == 10
