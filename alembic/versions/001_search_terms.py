"""Search terms table

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "search_terms",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("query_text", sa.String(255), nullable=False),
        sa.Column("store_id", sa.Integer(), nullable=False),
        sa.Column("num_results", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("popularity", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("query_text", "store_id", name="uq_search_terms_text_store"),
    )
    op.create_index("ix_search_terms_query_text", "search_terms", ["query_text"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_search_terms_query_text", "search_terms")
    op.drop_table("search_terms")
