"""Initial schema.

Revision ID: 001
Revises:
Create Date: 2026-10-19 00:00:00.000000
"""

import sqlalchemy as sa

from alembic import op

revision = "001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Documents (one row per document of every collection)
    op.create_table(
        "documents",
        sa.Column("pk", sa.String(300), primary_key=True),
        sa.Column("collection", sa.String(100), nullable=False, index=True),
        sa.Column("doc_id", sa.String(200), nullable=False),
        sa.Column("data", sa.JSON, nullable=False),
        sa.Column("created_at", sa.DateTime, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime, server_default=sa.func.now()),
        sa.UniqueConstraint("collection", "doc_id", name="uq_documents_collection_doc_id"),
    )


def downgrade() -> None:
    op.drop_table("documents")
