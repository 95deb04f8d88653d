"""Create coaching session and saved advice tables

Revision ID: 002
Revises: 001
Create Date: 2026-10-18

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

revision: str = "002"
down_revision: str | None = "001"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "coaching_session",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("coach_type", sa.String(length=32), nullable=False),
        sa.Column("messages", sa.JSON(), nullable=False),
        sa.Column("summary", sa.Text(), nullable=True),
        sa.Column("hearted", sa.Boolean(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["user.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_coaching_session_user_id"), "coaching_session", ["user_id"])

    op.create_table(
        "saved_advice",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("session_id", sa.Integer(), nullable=False),
        sa.Column("message_content", sa.Text(), nullable=False),
        sa.Column("coach_type", sa.String(length=32), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["user.id"]),
        sa.ForeignKeyConstraint(["session_id"], ["coaching_session.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_saved_advice_user_id"), "saved_advice", ["user_id"])
    op.create_index(op.f("ix_saved_advice_session_id"), "saved_advice", ["session_id"])


def downgrade() -> None:
    op.drop_index(op.f("ix_saved_advice_session_id"), table_name="saved_advice")
    op.drop_index(op.f("ix_saved_advice_user_id"), table_name="saved_advice")
    op.drop_table("saved_advice")
    op.drop_index(op.f("ix_coaching_session_user_id"), table_name="coaching_session")
    op.drop_table("coaching_session")
