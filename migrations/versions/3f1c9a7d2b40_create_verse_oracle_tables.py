"""create_verse_oracle_tables

Revision ID: 3f1c9a7d2b40
Revises: 
Create Date: 2026-10-18 09:12:31.204417

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c9a7d2b40'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table('service_state',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('owner', sa.String(length=255), nullable=False),
        sa.Column('verse_price', sa.Numeric(precision=78, scale=0).with_variant(sa.String(length=78), 'sqlite'), nullable=False),
        sa.Column('gas_limit', sa.Numeric(precision=78, scale=0).with_variant(sa.String(length=78), 'sqlite'), nullable=False),
        sa.Column('balance', sa.Numeric(precision=78, scale=0).with_variant(sa.String(length=78), 'sqlite'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_table('pending_queries',
        sa.Column('query_id', sa.String(length=128), nullable=False),
        sa.Column('reference', sa.String(length=255), nullable=False),
        sa.Column('requested_by', sa.String(length=255), nullable=False),
        sa.Column('payment', sa.Numeric(precision=78, scale=0).with_variant(sa.String(length=78), 'sqlite'), nullable=False),
        sa.Column('gas_limit', sa.Numeric(precision=78, scale=0).with_variant(sa.String(length=78), 'sqlite'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.PrimaryKeyConstraint('query_id')
    )
    op.create_index(op.f('ix_pending_queries_reference'), 'pending_queries', ['reference'], unique=True)
    op.create_table('resolved_verses',
        sa.Column('reference', sa.String(length=255), nullable=False),
        sa.Column('book', sa.String(length=100), nullable=False),
        sa.Column('chapter', sa.String(length=50), nullable=False),
        sa.Column('verse', sa.String(length=50), nullable=False),
        sa.Column('text', sa.Text(), nullable=False),
        sa.Column('query_id', sa.String(length=128), nullable=False),
        sa.Column('resolved_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.PrimaryKeyConstraint('reference')
    )
    op.create_table('withdrawals',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('recipient', sa.String(length=255), nullable=False),
        sa.Column('amount', sa.Numeric(precision=78, scale=0).with_variant(sa.String(length=78), 'sqlite'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_withdrawals_id'), 'withdrawals', ['id'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_withdrawals_id'), table_name='withdrawals')
    op.drop_table('withdrawals')
    op.drop_table('resolved_verses')
    op.drop_index(op.f('ix_pending_queries_reference'), table_name='pending_queries')
    op.drop_table('pending_queries')
    op.drop_table('service_state')
