"""initial_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-17

Creates all tables for the campus events backend:
accounts, account_roles, credentials, resources, events,
event_registrations, event_mutations.
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ROLES = ("admin", "staff", "student")
EVENT_STATUSES = ("pending", "approved", "rejected")
RESOURCE_TYPES = (
    "venue", "music_instruments", "projector", "chairs",
    "tables", "microphone", "speakers", "other",
)
ACTION_TYPES = ("create", "update", "approve", "reject", "delete")


def upgrade() -> None:
    # --- accounts ---
    op.create_table(
        "accounts",
        sa.Column("account_id", sa.String(36), primary_key=True),
        sa.Column("full_name", sa.String(150), nullable=False),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("department", sa.String(150), nullable=True),
        sa.Column("is_approved", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_accounts_email", "accounts", ["email"])

    # --- account_roles: one row per account ---
    op.create_table(
        "account_roles",
        sa.Column(
            "account_id", sa.String(36),
            sa.ForeignKey("accounts.account_id", ondelete="CASCADE"), primary_key=True,
        ),
        sa.Column("role", sa.Enum(*ROLES, name="role"), nullable=False),
        sa.Column("assigned_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # --- credentials ---
    op.create_table(
        "credentials",
        sa.Column(
            "account_id", sa.String(36),
            sa.ForeignKey("accounts.account_id", ondelete="CASCADE"), primary_key=True,
        ),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # --- resources ---
    op.create_table(
        "resources",
        sa.Column("resource_id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(150), nullable=False),
        sa.Column("type", sa.Enum(*RESOURCE_TYPES, name="resourcetype"), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("capacity", sa.Integer, nullable=True),
        sa.Column("location", sa.String(255), nullable=True),
        sa.Column("is_available", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # --- events ---
    op.create_table(
        "events",
        sa.Column("event_id", sa.String(36), primary_key=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, nullable=False, server_default=""),
        sa.Column("category", sa.String(100), nullable=True),
        sa.Column(
            "venue_id", sa.String(36),
            sa.ForeignKey("resources.resource_id", ondelete="SET NULL"), nullable=True,
        ),
        sa.Column("resources_required", sa.Text, nullable=True),
        sa.Column(
            "organizer_id", sa.String(36),
            sa.ForeignKey("accounts.account_id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("start_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("max_participants", sa.Integer, nullable=True),
        sa.Column(
            "status", sa.Enum(*EVENT_STATUSES, name="eventstatus"),
            nullable=False, server_default="pending",
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_events_organizer_id", "events", ["organizer_id"])
    op.create_index("ix_events_status", "events", ["status"])

    # --- event_registrations ---
    op.create_table(
        "event_registrations",
        sa.Column("registration_id", sa.String(36), primary_key=True),
        sa.Column(
            "event_id", sa.String(36),
            sa.ForeignKey("events.event_id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column(
            "student_id", sa.String(36),
            sa.ForeignKey("accounts.account_id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("registered_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint("event_id", "student_id", name="uq_event_registrations_event_student"),
    )
    op.create_index("ix_event_registrations_event_id", "event_registrations", ["event_id"])
    op.create_index("ix_event_registrations_student_id", "event_registrations", ["student_id"])

    # --- event_mutations (ledger) ---
    op.create_table(
        "event_mutations",
        sa.Column("mutation_id", sa.String(36), primary_key=True),
        sa.Column("event_id", sa.String(36), nullable=False),
        sa.Column("actor_id", sa.String(36), nullable=False),
        sa.Column("action_type", sa.Enum(*ACTION_TYPES, name="actiontype"), nullable=False),
        sa.Column("before_snapshot", sa.JSON, nullable=True),
        sa.Column("after_snapshot", sa.JSON, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_event_mutations_event_id", "event_mutations", ["event_id"])


def downgrade() -> None:
    op.drop_table("event_mutations")
    op.drop_table("event_registrations")
    op.drop_table("events")
    op.drop_table("resources")
    op.drop_table("credentials")
    op.drop_table("account_roles")
    op.drop_table("accounts")
    for enum_name in ("actiontype", "eventstatus", "resourcetype", "role"):
        sa.Enum(name=enum_name).drop(op.get_bind(), checkfirst=True)
