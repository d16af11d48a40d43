"""initial schema

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-19

Creates every SkillSwap table:
  • users, user_skills (teaching / learning skills on one table, split by kind)
  • user_connections (two directed rows per connection, unique per direction)
  • connection_requests
  • skill_exchanges, skill_progress (one progress row per exchange)
  • learning_sessions
  • notifications, activities
  • chats, chat_participants, messages
"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers
revision = "001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def _id():
    return sa.Column("id", sa.Uuid(), primary_key=True)


def _user_fk(name, nullable=False):
    return sa.Column(name, sa.Uuid(), sa.ForeignKey("users.id"), nullable=nullable)


def upgrade() -> None:
    op.create_table(
        "users",
        _id(),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("display_name", sa.String(length=100), nullable=False),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("photo_url", sa.Text(), nullable=True),
        sa.Column("rating", sa.Float(), nullable=False, server_default="0"),
        sa.Column("is_active", sa.Boolean(), nullable=True, server_default=sa.true()),
        sa.Column("last_active_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_is_active", "users", ["is_active"])

    op.create_table(
        "user_skills",
        _id(),
        _user_fk("user_id"),
        sa.Column("kind", sa.String(length=10), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("category", sa.String(length=20), nullable=False, server_default="other"),
        sa.Column("level", sa.String(length=20), nullable=False, server_default="Beginner"),
        sa.Column("tags", postgresql.JSONB(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_user_skills_user_kind", "user_skills", ["user_id", "kind"])
    op.create_index("ix_user_skills_name", "user_skills", ["name"])

    op.create_table(
        "user_connections",
        _id(),
        _user_fk("user_id"),
        _user_fk("connected_user_id"),
        *_timestamps(),
        sa.UniqueConstraint("user_id", "connected_user_id", name="uq_user_connection"),
    )
    op.create_index("ix_user_connections_user_id", "user_connections", ["user_id"])

    op.create_table(
        "connection_requests",
        _id(),
        _user_fk("from_user_id"),
        _user_fk("to_user_id"),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="pending"),
        sa.Column("message", sa.Text(), nullable=False, server_default=""),
        sa.Column("requester_will_learn", sa.String(length=255), nullable=False, server_default=""),
        sa.Column("recipient_will_learn", sa.String(length=255), nullable=False, server_default=""),
        sa.Column("responded_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_connection_requests_from_user_id", "connection_requests", ["from_user_id"])
    op.create_index("ix_connection_requests_to_user_id", "connection_requests", ["to_user_id"])
    op.create_index("ix_connection_requests_status", "connection_requests", ["status"])

    op.create_table(
        "skill_exchanges",
        _id(),
        _user_fk("teacher_id"),
        _user_fk("student_id"),
        sa.Column("skill_id", sa.Uuid(), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="pending"),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("rating", sa.Float(), nullable=True),
        sa.Column("feedback", sa.Text(), nullable=True),
        sa.Column("rated_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_skill_exchanges_teacher_id", "skill_exchanges", ["teacher_id"])
    op.create_index("ix_skill_exchanges_student_id", "skill_exchanges", ["student_id"])
    op.create_index("ix_skill_exchanges_status", "skill_exchanges", ["status"])

    op.create_table(
        "skill_progress",
        _id(),
        sa.Column("skill_exchange_id", sa.Uuid(), sa.ForeignKey("skill_exchanges.id"), nullable=False, unique=True),
        sa.Column("progress_percentage", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("milestones", postgresql.JSONB(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=False, server_default=""),
        *_timestamps(),
    )

    op.create_table(
        "learning_sessions",
        _id(),
        _user_fk("initiator_id"),
        _user_fk("recipient_id"),
        sa.Column("skill_id", sa.Uuid(), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="pending"),
        sa.Column("scheduled_time", sa.DateTime(timezone=True), nullable=True),
        sa.Column("completed_time", sa.DateTime(timezone=True), nullable=True),
        sa.Column("notes", sa.Text(), nullable=False, server_default=""),
        *_timestamps(),
    )
    op.create_index("ix_learning_sessions_initiator_id", "learning_sessions", ["initiator_id"])
    op.create_index("ix_learning_sessions_recipient_id", "learning_sessions", ["recipient_id"])
    op.create_index("ix_learning_sessions_status", "learning_sessions", ["status"])
    op.create_index("ix_learning_sessions_scheduled_time", "learning_sessions", ["scheduled_time"])

    op.create_table(
        "notifications",
        _id(),
        _user_fk("user_id"),
        sa.Column("type", sa.String(length=30), nullable=False),
        sa.Column("related_id", sa.Uuid(), nullable=True),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("is_read", sa.Boolean(), nullable=True, server_default=sa.false()),
        *_timestamps(),
    )
    op.create_index("ix_notifications_user_id", "notifications", ["user_id"])
    op.create_index("ix_notifications_is_read", "notifications", ["is_read"])

    op.create_table(
        "activities",
        _id(),
        _user_fk("user_id"),
        sa.Column("type", sa.String(length=30), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("related_user_id", sa.Uuid(), nullable=True),
        sa.Column("related_skill_id", sa.Uuid(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_activities_user_id", "activities", ["user_id"])

    op.create_table(
        "chats",
        _id(),
        sa.Column("title", sa.String(length=255), nullable=True),
        sa.Column("skill_exchange_id", sa.Uuid(), sa.ForeignKey("skill_exchanges.id"), nullable=True),
        sa.Column("last_message_id", sa.Uuid(), nullable=True),
        sa.Column("last_message_sender_id", sa.Uuid(), nullable=True),
        sa.Column("last_message_content", sa.Text(), nullable=True),
        sa.Column("last_message_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_chats_skill_exchange_id", "chats", ["skill_exchange_id"])

    op.create_table(
        "chat_participants",
        _id(),
        sa.Column("chat_id", sa.Uuid(), sa.ForeignKey("chats.id"), nullable=False),
        _user_fk("user_id"),
        *_timestamps(),
        sa.UniqueConstraint("chat_id", "user_id", name="uq_chat_participant"),
    )
    op.create_index("ix_chat_participants_chat_id", "chat_participants", ["chat_id"])
    op.create_index("ix_chat_participants_user_id", "chat_participants", ["user_id"])

    op.create_table(
        "messages",
        _id(),
        sa.Column("chat_id", sa.Uuid(), sa.ForeignKey("chats.id"), nullable=False),
        _user_fk("sender_id"),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("attachments", postgresql.JSONB(), nullable=True),
        sa.Column("is_read", sa.Boolean(), nullable=True, server_default=sa.false()),
        *_timestamps(),
    )
    op.create_index("ix_messages_chat_id", "messages", ["chat_id"])


def downgrade() -> None:
    op.drop_table("messages")
    op.drop_table("chat_participants")
    op.drop_table("chats")
    op.drop_table("activities")
    op.drop_table("notifications")
    op.drop_table("learning_sessions")
    op.drop_table("skill_progress")
    op.drop_table("skill_exchanges")
    op.drop_table("connection_requests")
    op.drop_table("user_connections")
    op.drop_table("user_skills")
    op.drop_table("users")
