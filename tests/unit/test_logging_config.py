import logging
import os
from logging.handlers import RotatingFileHandler

from app.core.config import settings
from app.core.logging_config import QR_AUDIT_LOGGER, setup_logging
from app.services.qr.verification_service import logger as verification_logger


class TestQRAuditChannel:
    def test_qr_services_write_to_audit_file(self):
        setup_logging()

        handlers = [h for h in logging.getLogger(QR_AUDIT_LOGGER).handlers if isinstance(h, RotatingFileHandler)]

        assert len(handlers) == 1
        assert os.path.dirname(handlers[0].baseFilename) == os.path.abspath(os.path.join(settings.LOG_DIR, "qr"))
        assert verification_logger.name.startswith(QR_AUDIT_LOGGER + ".")

    def test_audit_records_still_reach_root_handlers(self):
        setup_logging()
        assert logging.getLogger(QR_AUDIT_LOGGER).propagate is True
