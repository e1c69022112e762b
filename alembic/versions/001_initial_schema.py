"""Transaction links table.

Revision ID: 001_initial
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'transaction_links',
        sa.Column('id', sa.String(16), nullable=False),
        sa.Column('action', sa.String(16), nullable=False),
        sa.Column('payload', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('success', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('tx_hash', sa.String(66), nullable=True),
        sa.Column('approval_tx_hash', sa.String(66), nullable=True),
        sa.Column('confirmed_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_transaction_links_expires_at', 'transaction_links', ['expires_at'])
    op.create_index('ix_transaction_links_tx_hash', 'transaction_links', ['tx_hash'])


def downgrade() -> None:
    op.drop_index('ix_transaction_links_tx_hash', table_name='transaction_links')
    op.drop_index('ix_transaction_links_expires_at', table_name='transaction_links')
    op.drop_table('transaction_links')
