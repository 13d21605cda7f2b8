"""initial_schedule_planning_schema

Revision ID: 5f2c0d9a1b7e
Revises:
Create Date: 2026-10-19 09:12:44.118203

"""

from collections.abc import Sequence
from typing import Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "5f2c0d9a1b7e"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

REFERENCE_TABLES = (
    "client",
    "mc",
    "platform",
    "studio_room",
    "show_type",
    "show_status",
    "show_standard",
)


def _base_columns() -> list[sa.Column]:
    return [
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("uid", sa.String(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
    ]


def _metadata_column() -> sa.Column:
    return sa.Column(
        "metadata",
        postgresql.JSONB(astext_type=sa.Text()),
        server_default=sa.text("'{}'::jsonb"),
        nullable=False,
    )


def _index_base(table: str) -> None:
    op.create_index(op.f(f"ix_{table}_uid"), table, ["uid"], unique=True)
    op.create_index(op.f(f"ix_{table}_deleted_at"), table, ["deleted_at"], unique=False)


def upgrade() -> None:
    """Upgrade schema."""
    for table in REFERENCE_TABLES:
        op.create_table(
            table,
            *_base_columns(),
            sa.Column("name", sa.String(), nullable=False),
            sa.PrimaryKeyConstraint("id"),
        )
        _index_base(table)

    op.create_table(
        "schedule",
        *_base_columns(),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("status", sa.String(), server_default="draft", nullable=False),
        sa.Column("plan_document", postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column("version", sa.Integer(), server_default="1", nullable=False),
        sa.Column("client_id", sa.String(), nullable=True),
        sa.Column("created_by", sa.String(), nullable=True),
        sa.Column("published_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("published_by", sa.String(), nullable=True),
        sa.CheckConstraint("end_date > start_date", name="ck_schedule_date_range"),
        sa.CheckConstraint("status IN ('draft', 'published')", name="ck_schedule_status"),
        sa.CheckConstraint(
            "(status = 'published') = (published_at IS NOT NULL)",
            name="ck_schedule_published_at",
        ),
        sa.ForeignKeyConstraint(["client_id"], ["client.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    _index_base("schedule")
    op.create_index(op.f("ix_schedule_client_id"), "schedule", ["client_id"], unique=False)
    op.create_index("ix_schedule_status", "schedule", ["status"], unique=False)

    op.create_table(
        "schedule_snapshot",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("uid", sa.String(), nullable=False),
        sa.Column("schedule_id", sa.String(), nullable=False),
        sa.Column("plan_document", postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column("version", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(), nullable=False),
        sa.Column("snapshot_reason", sa.String(), nullable=False),
        sa.Column("created_by", sa.String(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("clock_timestamp()"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["schedule_id"], ["schedule.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_schedule_snapshot_uid"), "schedule_snapshot", ["uid"], unique=True)
    op.create_index(
        "ix_schedule_snapshot_schedule_created",
        "schedule_snapshot",
        ["schedule_id", "created_at"],
        unique=False,
    )

    op.create_table(
        "show",
        *_base_columns(),
        sa.Column("schedule_id", sa.String(), nullable=True),
        sa.Column("plan_key", sa.String(), nullable=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("start_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("client_id", sa.String(), nullable=False),
        sa.Column("studio_room_id", sa.String(), nullable=True),
        sa.Column("show_type_id", sa.String(), nullable=False),
        sa.Column("show_status_id", sa.String(), nullable=False),
        sa.Column("show_standard_id", sa.String(), nullable=False),
        _metadata_column(),
        sa.ForeignKeyConstraint(["schedule_id"], ["schedule.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["client_id"], ["client.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["studio_room_id"], ["studio_room.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["show_type_id"], ["show_type.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["show_status_id"], ["show_status.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["show_standard_id"], ["show_standard.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
    )
    _index_base("show")
    op.create_index(op.f("ix_show_schedule_id"), "show", ["schedule_id"], unique=False)
    op.create_index(op.f("ix_show_client_id"), "show", ["client_id"], unique=False)
    op.create_index(
        "uq_show_schedule_plan_key_active",
        "show",
        ["schedule_id", "plan_key"],
        unique=True,
        postgresql_where=sa.text("deleted_at IS NULL AND plan_key IS NOT NULL"),
    )

    op.create_table(
        "show_mc",
        *_base_columns(),
        sa.Column("show_id", sa.String(), nullable=False),
        sa.Column("mc_id", sa.String(), nullable=False),
        sa.Column("note", sa.Text(), nullable=True),
        _metadata_column(),
        sa.ForeignKeyConstraint(["show_id"], ["show.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["mc_id"], ["mc.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
    )
    _index_base("show_mc")
    op.create_index(op.f("ix_show_mc_show_id"), "show_mc", ["show_id"], unique=False)
    op.create_index(
        "uq_show_mc_active",
        "show_mc",
        ["show_id", "mc_id"],
        unique=True,
        postgresql_where=sa.text("deleted_at IS NULL"),
    )

    op.create_table(
        "show_platform",
        *_base_columns(),
        sa.Column("show_id", sa.String(), nullable=False),
        sa.Column("platform_id", sa.String(), nullable=False),
        sa.Column("live_stream_link", sa.String(), nullable=True),
        sa.Column("platform_show_id", sa.String(), nullable=True),
        sa.Column("viewer_count", sa.Integer(), server_default="0", nullable=False),
        _metadata_column(),
        sa.ForeignKeyConstraint(["show_id"], ["show.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["platform_id"], ["platform.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
    )
    _index_base("show_platform")
    op.create_index(op.f("ix_show_platform_show_id"), "show_platform", ["show_id"], unique=False)
    op.create_index(
        "uq_show_platform_active",
        "show_platform",
        ["show_id", "platform_id"],
        unique=True,
        postgresql_where=sa.text("deleted_at IS NULL"),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("show_platform")
    op.drop_table("show_mc")
    op.drop_table("show")
    op.drop_table("schedule_snapshot")
    op.drop_table("schedule")
    for table in reversed(REFERENCE_TABLES):
        op.drop_table(table)
