"""
create vector_documents and user_context tables

Revision ID: create_content_engine_0001
Revises:
Create Date: 2026-10-19 00:01:00
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'create_content_engine_0001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'vector_documents',
        sa.Column('id', sa.String(length=36), primary_key=True, nullable=False),
        sa.Column('owner_id', sa.String(length=255), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('document_type', sa.String(length=50), nullable=False),
        sa.Column('metadata', sa.JSON(), nullable=True),
        sa.Column('embedding', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False)
    )
    op.create_index('ix_vector_documents_owner_id', 'vector_documents', ['owner_id'])
    op.create_index('idx_vector_documents_owner_type', 'vector_documents', ['owner_id', 'document_type'])

    op.create_table(
        'user_context',
        sa.Column('id', sa.String(length=36), primary_key=True, nullable=False),
        sa.Column('owner_id', sa.String(length=255), nullable=False),
        sa.Column('context_type', sa.String(length=100), nullable=False),
        sa.Column('data', sa.JSON(), nullable=False),
        sa.Column('confidence', sa.Float(), nullable=False, server_default='0'),
        sa.Column('version', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('last_updated', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.UniqueConstraint('owner_id', 'context_type', 'version', name='uq_user_context_owner_type_version')
    )
    op.create_index('ix_user_context_owner_id', 'user_context', ['owner_id'])
    op.create_index('idx_user_context_owner_type', 'user_context', ['owner_id', 'context_type'])


def downgrade() -> None:
    op.drop_index('idx_user_context_owner_type', table_name='user_context')
    op.drop_index('ix_user_context_owner_id', table_name='user_context')
    op.drop_table('user_context')
    op.drop_index('idx_vector_documents_owner_type', table_name='vector_documents')
    op.drop_index('ix_vector_documents_owner_id', table_name='vector_documents')
    op.drop_table('vector_documents')
