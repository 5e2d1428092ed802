# app/models/qr/__init__.py

from .qr_code import QRCode

__all__ = [
    "QRCode",
]
