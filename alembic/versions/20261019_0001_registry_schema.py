"""Registry schema - administrator slot, validators, developers, blocks, audit log

Revision ID: 0001
Revises: 
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Administrator slot (single row)
    op.create_table(
        'administrator_slot',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('principal', sa.String(150), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )

    # Validators table
    op.create_table(
        'validators',
        sa.Column('principal', sa.String(150), primary_key=True),
        sa.Column('appointed_by', sa.String(150), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, default='active'),
        sa.Column('revoked_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )

    # Project developers table
    op.create_table(
        'project_developers',
        sa.Column('principal', sa.String(150), primary_key=True),
        sa.Column('registered_by', sa.String(150), sa.ForeignKey('validators.principal'), nullable=False, index=True),
        sa.Column('project_name', sa.String(1024), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, default='active'),
        sa.Column('sequence', sa.Integer(), nullable=False, index=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )

    # Mined blocks
    op.create_table(
        'blocks',
        sa.Column('height', sa.Integer(), primary_key=True, autoincrement=False),
        sa.Column('tx_count', sa.Integer(), nullable=False),
        sa.Column('receipts', sa.JSON(), nullable=False),
        sa.Column('mined_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )

    # Event log (append-only)
    op.create_table(
        'event_log',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('event_type', sa.String(100), nullable=False, index=True),
        sa.Column('entity_type', sa.String(50), nullable=False),
        sa.Column('entity_id', sa.String(150), nullable=False),
        sa.Column('sender', sa.String(150), nullable=True, index=True),
        sa.Column('block_height', sa.Integer(), nullable=False),
        sa.Column('tx_index', sa.Integer(), nullable=True),
        sa.Column('payload', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_event_log_entity', 'event_log', ['entity_type', 'entity_id'])
    op.create_index('ix_event_log_block', 'event_log', ['block_height', 'tx_index'])


def downgrade() -> None:
    op.drop_index('ix_event_log_block', table_name='event_log')
    op.drop_index('ix_event_log_entity', table_name='event_log')
    op.drop_table('event_log')
    op.drop_table('blocks')
    op.drop_table('project_developers')
    op.drop_table('validators')
    op.drop_table('administrator_slot')
