"""Initial schema - page, action, action_collection.

Revision ID: 001
Revises:
Create Date: 2026-10-18

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    # Page and action rows are written by their owning services; read here only.
    op.create_table(
        "page",
        sa.Column("id", sa.Text(), primary_key=True),
        sa.Column("application_id", sa.Text(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False, server_default=""),
        sa.Column("policies", JSONB(), nullable=False, server_default=sa.text("'{}'::jsonb")),
    )
    op.create_index("ix_page_application_id", "page", ["application_id"])

    op.create_table(
        "action",
        sa.Column("id", sa.Text(), primary_key=True),
        sa.Column("application_id", sa.Text(), nullable=False),
        sa.Column("page_id", sa.Text(), sa.ForeignKey("page.id", ondelete="CASCADE"), nullable=False),
        sa.Column("unpublished", JSONB(), nullable=True),
        sa.Column("published", JSONB(), nullable=True),
    )
    op.create_index("ix_action_page_id", "action", ["page_id"])

    op.create_table(
        "action_collection",
        sa.Column("id", sa.Text(), primary_key=True),
        sa.Column("application_id", sa.Text(), nullable=False),
        sa.Column("page_id", sa.Text(), nullable=False),
        sa.Column("unpublished", JSONB(), nullable=False),
        sa.Column("published", JSONB(), nullable=True),
        sa.Column("policies", JSONB(), nullable=False, server_default=sa.text("'{}'::jsonb")),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_action_collection_application_id", "action_collection", ["application_id"])
    op.create_index("ix_action_collection_page_id", "action_collection", ["page_id"])


def downgrade() -> None:
    op.drop_table("action_collection")
    op.drop_table("action")
    op.drop_table("page")
