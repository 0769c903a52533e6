"""Add GIN index on action collection policies for visibility queries.

Revision ID: 002
Revises: 001
Create Date: 2026-10-18

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

revision: str = "002"
down_revision: str | None = "001"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_index(
        "ix_action_collection_policies",
        "action_collection",
        ["policies"],
        postgresql_using="gin",
    )
    op.create_index(
        "ix_action_collection_draft_name",
        "action_collection",
        ["page_id", sa.text("(unpublished->>'name')")],
    )


def downgrade() -> None:
    op.drop_index("ix_action_collection_draft_name", table_name="action_collection")
    op.drop_index("ix_action_collection_policies", table_name="action_collection")
