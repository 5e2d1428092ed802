import logging
import logging.config
import os
from datetime import datetime
from app.core.config import settings

# scan, import and admin-change audit trail from the QR services
QR_AUDIT_LOGGER = "app.services.qr"

def setup_logging():
    """Setup application logging configuration"""

    log_dir = settings.LOG_DIR

    # Create logs directory if it doesn't exist
    for sub_dir in ("app", "access", "error", "qr"):
        os.makedirs(os.path.join(log_dir, sub_dir), exist_ok=True)

    # Get current date for log file naming
    current_date = datetime.now().strftime("%Y-%m-%d")

    def rotating(sub_dir: str, level: str, formatter: str) -> dict:
        return {
            "class": "logging.handlers.RotatingFileHandler",
            "level": level,
            "formatter": formatter,
            "filename": os.path.join(log_dir, sub_dir, f"{sub_dir}-{current_date}.log"),
            "maxBytes": 10485760,  # 10MB
            "backupCount": 10,
        }

    logging_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "detailed": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(module)s - %(funcName)s:%(lineno)d - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "access": {
                "format": "%(asctime)s - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "audit": {
                "format": "%(asctime)s - %(levelname)s - %(module)s - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": settings.LOG_LEVEL,
                "formatter": "default",
                "stream": "ext://sys.stdout",
            },
            "app_file": rotating("app", settings.LOG_LEVEL, "detailed"),
            "error_file": rotating("error", "ERROR", "detailed"),
            "access_file": rotating("access", "INFO", "access"),
            "qr_file": rotating("qr", "INFO", "audit"),
        },
        "loggers": {
            "": {  # Root logger
                "level": settings.LOG_LEVEL,
                "handlers": ["console", "app_file", "error_file"],
                "propagate": False,
            },
            "access": {
                "level": "INFO",
                "handlers": ["access_file"],
                "propagate": False,
            },
            "uvicorn.access": {
                "level": "INFO",
                "handlers": ["access_file"],
                "propagate": False,
            },
            # Verifications and imports also reach the root handlers
            QR_AUDIT_LOGGER: {
                "level": "INFO",
                "handlers": ["qr_file"],
                "propagate": True,
            },
            "sqlalchemy.engine": {
                "level": "WARNING",  # Reduce DB query noise
                "handlers": ["app_file"],
                "propagate": False,
            },
        },
    }

    logging.config.dictConfig(logging_config)

    # Log startup message
    logger = logging.getLogger(__name__)
    logger.info("🚀 QR Provenance Verification Service - Logging configured")
    logger.info(f"📝 Log level: {settings.LOG_LEVEL}")
    logger.info(f"🔎 Scan limit: {settings.SCAN_LIMIT} verifications per code")
    logger.info(f"🗂️  Logs directory: ./{log_dir}/ (QR audit trail in ./{log_dir}/qr/)")
