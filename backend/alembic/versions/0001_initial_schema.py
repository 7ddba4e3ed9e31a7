"""initial_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19

Creates all tables for Glimmer:
users, check_ins, reminder_settings, emergency_contacts, notification_logs.
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

notification_type = sa.Enum("self", "contact", name="notificationtype")
notification_status = sa.Enum("sent", "failed", name="notificationstatus")


def upgrade() -> None:
    # --- users ---
    op.create_table(
        "users",
        sa.Column("user_id", sa.String(36), primary_key=True),
        sa.Column("email", sa.String(255), nullable=True, unique=True),
        sa.Column("display_name", sa.String(100), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # --- check_ins ---
    op.create_table(
        "check_ins",
        sa.Column("check_in_id", sa.String(36), primary_key=True),
        sa.Column("user_id", sa.String(36), sa.ForeignKey("users.user_id"), nullable=False),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("mood", sa.String(50), nullable=True),
        sa.Column("emoji", sa.String(16), nullable=False),
        sa.Column("encouragement", sa.String(500), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_check_ins_user_date", "check_ins", ["user_id", "date"])

    # --- reminder_settings ---
    op.create_table(
        "reminder_settings",
        sa.Column("settings_id", sa.String(36), primary_key=True),
        sa.Column("user_id", sa.String(36), sa.ForeignKey("users.user_id"), nullable=False, unique=True),
        sa.Column("enabled", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("enabled_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("self_reminder_enabled", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("self_reminder_days", sa.Integer, nullable=False, server_default="3"),
        sa.Column("contact_reminder_enabled", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("contact_reminder_days", sa.Integer, nullable=False, server_default="7"),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # --- emergency_contacts ---
    op.create_table(
        "emergency_contacts",
        sa.Column("contact_id", sa.String(36), primary_key=True),
        sa.Column("user_id", sa.String(36), sa.ForeignKey("users.user_id"), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("enabled", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # --- notification_logs ---
    op.create_table(
        "notification_logs",
        sa.Column("log_id", sa.String(36), primary_key=True),
        sa.Column("user_id", sa.String(36), sa.ForeignKey("users.user_id"), nullable=False),
        sa.Column("type", notification_type, nullable=False),
        sa.Column("status", notification_status, nullable=False),
        sa.Column("content", sa.Text, nullable=False, server_default=""),
        sa.Column("recipient", sa.String(255), nullable=True),
        sa.Column("error", sa.String(1000), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_notification_logs_user_created", "notification_logs", ["user_id", "created_at"])


def downgrade() -> None:
    op.drop_index("ix_notification_logs_user_created", table_name="notification_logs")
    op.drop_table("notification_logs")
    op.drop_table("emergency_contacts")
    op.drop_table("reminder_settings")
    op.drop_index("ix_check_ins_user_date", table_name="check_ins")
    op.drop_table("check_ins")
    op.drop_table("users")
    notification_status.drop(op.get_bind(), checkfirst=True)
    notification_type.drop(op.get_bind(), checkfirst=True)
