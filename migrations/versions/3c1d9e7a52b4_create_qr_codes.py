"""create qr_codes

Revision ID: 3c1d9e7a52b4
Revises:
Create Date: 2026-10-17 10:12:41.318204
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect

revision: str = '3c1d9e7a52b4'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    connection = op.get_bind()
    inspector = inspect(connection)

    if 'qr_codes' in inspector.get_table_names():
        print("✓ [3c1d9e7a52b4] qr_codes already exists - skipping")
        return

    op.create_table(
        'qr_codes',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('qr_code_id', sa.String(length=50), nullable=False),
        sa.Column('url', sa.String(length=2048), nullable=True),
        sa.Column('is_used', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column('is_deleted', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('count', sa.Integer(), server_default='0', nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('qr_code_id', name='uq_qr_codes_qr_code_id'),
    )
    op.create_index('ix_qr_codes_id', 'qr_codes', ['id'])
    op.create_index('ix_qr_codes_qr_code_id_is_deleted', 'qr_codes', ['qr_code_id', 'is_deleted'])
    op.create_index('ix_qr_codes_url_is_deleted', 'qr_codes', ['url', 'is_deleted'])
    op.create_index('ix_qr_codes_flags', 'qr_codes', ['is_deleted', 'is_active', 'is_used'])
    print("✓ [3c1d9e7a52b4] Created qr_codes")


def downgrade() -> None:
    connection = op.get_bind()
    inspector = inspect(connection)

    if 'qr_codes' in inspector.get_table_names():
        op.drop_index('ix_qr_codes_flags', table_name='qr_codes')
        op.drop_index('ix_qr_codes_url_is_deleted', table_name='qr_codes')
        op.drop_index('ix_qr_codes_qr_code_id_is_deleted', table_name='qr_codes')
        op.drop_index('ix_qr_codes_id', table_name='qr_codes')
        op.drop_table('qr_codes')
