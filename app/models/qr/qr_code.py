from sqlalchemy import Column, Integer, String, Boolean, Index, UniqueConstraint, false, true
from app.db.base import BaseModel
from app.models.shared.enums import QRStatus

class QRCode(BaseModel):
    __tablename__ = 'qr_codes'
    __table_args__ = (
        # Soft-deleted rows keep their identifier reserved
        UniqueConstraint('qr_code_id', name='uq_qr_codes_qr_code_id'),
        Index('ix_qr_codes_qr_code_id_is_deleted', 'qr_code_id', 'is_deleted'),
        Index('ix_qr_codes_url_is_deleted', 'url', 'is_deleted'),
        Index('ix_qr_codes_flags', 'is_deleted', 'is_active', 'is_used'),
    )

    __mapper_args__ = {'eager_defaults': True}

    qr_code_id = Column(String(50), nullable=False)
    url = Column(String(2048), nullable=True)
    is_used = Column(Boolean, default=False, server_default=false(), nullable=False)
    is_active = Column(Boolean, default=True, server_default=true(), nullable=False)
    count = Column(Integer, default=0, server_default="0", nullable=False)  # scan counter, never decremented

    @property
    def status(self) -> QRStatus:
        if self.is_deleted:
            return QRStatus.DELETED
        if not self.is_active:
            return QRStatus.INACTIVE
        if self.is_used:
            return QRStatus.USED
        return QRStatus.VALID

    def __repr__(self) -> str:
        return f"<QRCode {self.qr_code_id} count={self.count} status={self.status.value}>"
