"""Initial schema — bugs table.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "bugs",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("title", sa.String(100), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="open"),
        sa.Column("priority", sa.String(20), nullable=False, server_default="medium"),
        sa.Column("reporter", sa.String(50), nullable=False),
        sa.Column("assignee", sa.String(50), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_bugs_status", "bugs", ["status"])
    op.create_index("ix_bugs_priority", "bugs", ["priority"])
    op.create_index("ix_bugs_created_at", "bugs", ["created_at"])


def downgrade() -> None:
    op.drop_index("ix_bugs_created_at", table_name="bugs")
    op.drop_index("ix_bugs_priority", table_name="bugs")
    op.drop_index("ix_bugs_status", table_name="bugs")
    op.drop_table("bugs")
