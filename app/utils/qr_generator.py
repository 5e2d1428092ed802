import qrcode
from io import BytesIO
from fastapi import status
from app.core.exceptions import BaseAppException
from app.models.qr.qr_code import QRCode
import logging

logger = logging.getLogger(__name__)

class QRImageService:
    """Render printable PNGs for QR records"""

    def __init__(self, box_size: int = 10, border: int = 4):
        self.box_size = box_size
        self.border = border

    def payload_for(self, record: QRCode) -> str:
        return record.url or record.qr_code_id

    def generate_qr_image(self, data: str) -> bytes:
        """Generate QR code image as PNG bytes"""
        try:
            qr = qrcode.QRCode(
                version=None,
                error_correction=qrcode.constants.ERROR_CORRECT_M,
                box_size=self.box_size,
                border=self.border,
            )
            qr.add_data(data)
            qr.make(fit=True)

            img = qr.make_image(fill_color="black", back_color="white")

            buffer = BytesIO()
            img.save(buffer)
            return buffer.getvalue()

        except Exception as e:
            logger.error(f"Error generating QR code: {e}")
            raise BaseAppException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to generate QR code",
                error=str(e),
            )

    def render_record(self, record: QRCode) -> bytes:
        return self.generate_qr_image(self.payload_for(record))
