from app.models.qr.qr_code import QRCode
