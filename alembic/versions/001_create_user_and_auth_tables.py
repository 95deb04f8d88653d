"""Create user, login session and token tables

Revision ID: 001
Revises:
Create Date: 2026-10-18

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "user",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("email", sa.String(length=256), nullable=False),
        sa.Column("password_hash", sa.String(length=256), nullable=True),
        sa.Column("first_name", sa.String(length=128), nullable=True),
        sa.Column("last_name", sa.String(length=128), nullable=True),
        sa.Column("profile_image_url", sa.String(length=512), nullable=True),
        sa.Column("email_verified", sa.Boolean(), nullable=False, server_default="0"),
        sa.Column("email_verification_token", sa.String(length=128), nullable=True),
        sa.Column("email_verification_expires_at", sa.DateTime(), nullable=True),
        sa.Column("failed_login_attempts", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("account_locked_until", sa.DateTime(), nullable=True),
        sa.Column("mfa_enabled", sa.Boolean(), nullable=False, server_default="0"),
        sa.Column("mfa_secret", sa.String(length=128), nullable=True),
        sa.Column("terms_accepted", sa.Boolean(), nullable=False, server_default="0"),
        sa.Column("terms_accepted_at", sa.DateTime(), nullable=True),
        sa.Column("privacy_accepted", sa.Boolean(), nullable=False, server_default="0"),
        sa.Column("privacy_accepted_at", sa.DateTime(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="1"),
        sa.Column("last_login_at", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.Column("current_role", sa.Text(), nullable=True),
        sa.Column("industry", sa.Text(), nullable=True),
        sa.Column("career_stage", sa.Text(), nullable=True),
        sa.Column("five_year_goal", sa.Text(), nullable=True),
        sa.Column("biggest_challenge", sa.Text(), nullable=True),
        sa.Column("work_environment", sa.Text(), nullable=True),
        sa.Column("primary_coaches", sa.JSON(), nullable=True),
        sa.Column("onboarding_complete", sa.Boolean(), nullable=False, server_default="0"),
        sa.Column("email_notifications", sa.Boolean(), nullable=False, server_default="1"),
        sa.Column("marketing_emails", sa.Boolean(), nullable=False, server_default="0"),
        sa.Column("weekly_digest", sa.Boolean(), nullable=False, server_default="1"),
        sa.Column("coaching_reminders", sa.Boolean(), nullable=False, server_default="1"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_user_email"), "user", ["email"], unique=True)

    op.create_table(
        "user_session",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("session_token", sa.String(length=128), nullable=False),
        sa.Column("device_info", sa.String(length=256), nullable=True),
        sa.Column("ip_address", sa.String(length=64), nullable=True),
        sa.Column("last_active", sa.DateTime(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("expires_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["user.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_user_session_user_id"), "user_session", ["user_id"])
    op.create_index(op.f("ix_user_session_session_token"), "user_session", ["session_token"], unique=True)

    op.create_table(
        "email_verification_token",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("email", sa.String(length=256), nullable=False),
        sa.Column("token", sa.String(length=128), nullable=False),
        sa.Column("expires_at", sa.DateTime(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_email_verification_token_email"), "email_verification_token", ["email"])
    op.create_index(op.f("ix_email_verification_token_token"), "email_verification_token", ["token"], unique=True)

    op.create_table(
        "password_reset_token",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("token", sa.String(length=128), nullable=False),
        sa.Column("used", sa.Boolean(), nullable=False, server_default="0"),
        sa.Column("expires_at", sa.DateTime(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["user.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_password_reset_token_user_id"), "password_reset_token", ["user_id"])
    op.create_index(op.f("ix_password_reset_token_token"), "password_reset_token", ["token"], unique=True)


def downgrade() -> None:
    op.drop_index(op.f("ix_password_reset_token_token"), table_name="password_reset_token")
    op.drop_index(op.f("ix_password_reset_token_user_id"), table_name="password_reset_token")
    op.drop_table("password_reset_token")
    op.drop_index(op.f("ix_email_verification_token_token"), table_name="email_verification_token")
    op.drop_index(op.f("ix_email_verification_token_email"), table_name="email_verification_token")
    op.drop_table("email_verification_token")
    op.drop_index(op.f("ix_user_session_session_token"), table_name="user_session")
    op.drop_index(op.f("ix_user_session_user_id"), table_name="user_session")
    op.drop_table("user_session")
    op.drop_index(op.f("ix_user_email"), table_name="user")
    op.drop_table("user")
