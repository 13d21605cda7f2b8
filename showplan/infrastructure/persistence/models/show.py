"""Show, ShowMC, and ShowPlatform ORM models (materialized from plan documents).

Assignment natural keys are unique among active rows only (partial unique
indexes), so soft-deleted history rows never block a re-assignment.
"""

from datetime import datetime
from typing import Any

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text, text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from showplan.infrastructure.persistence.database import Base
from showplan.infrastructure.persistence.models.mixins import SoftDeletableModel


class Show(SoftDeletableModel, Base):
    """Show. Table: show. plan_key is the plan item's tempId when materialized by publish."""

    __tablename__ = "show"

    schedule_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("schedule.id", ondelete="SET NULL"), nullable=True, index=True
    )
    plan_key: Mapped[str | None] = mapped_column(String, nullable=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    client_id: Mapped[str] = mapped_column(
        String, ForeignKey("client.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    studio_room_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("studio_room.id", ondelete="RESTRICT"), nullable=True
    )
    show_type_id: Mapped[str] = mapped_column(
        String, ForeignKey("show_type.id", ondelete="RESTRICT"), nullable=False
    )
    show_status_id: Mapped[str] = mapped_column(
        String, ForeignKey("show_status.id", ondelete="RESTRICT"), nullable=False
    )
    show_standard_id: Mapped[str] = mapped_column(
        String, ForeignKey("show_standard.id", ondelete="RESTRICT"), nullable=False
    )
    # "metadata" is reserved on declarative classes.
    extra_metadata: Mapped[dict[str, Any]] = mapped_column(
        "metadata", JSONB, nullable=False, server_default=text("'{}'::jsonb")
    )

    __table_args__ = (
        Index(
            "uq_show_schedule_plan_key_active",
            "schedule_id",
            "plan_key",
            unique=True,
            postgresql_where=text("deleted_at IS NULL AND plan_key IS NOT NULL"),
        ),
    )


class ShowMC(SoftDeletableModel, Base):
    """MC assignment on a show. Table: show_mc. Natural key (show_id, mc_id)."""

    __tablename__ = "show_mc"

    show_id: Mapped[str] = mapped_column(
        String, ForeignKey("show.id", ondelete="CASCADE"), nullable=False, index=True
    )
    mc_id: Mapped[str] = mapped_column(
        String, ForeignKey("mc.id", ondelete="RESTRICT"), nullable=False
    )
    note: Mapped[str | None] = mapped_column(Text, nullable=True)
    extra_metadata: Mapped[dict[str, Any]] = mapped_column(
        "metadata", JSONB, nullable=False, server_default=text("'{}'::jsonb")
    )

    __table_args__ = (
        Index(
            "uq_show_mc_active",
            "show_id",
            "mc_id",
            unique=True,
            postgresql_where=text("deleted_at IS NULL"),
        ),
    )


class ShowPlatform(SoftDeletableModel, Base):
    """Platform assignment on a show. Table: show_platform. Natural key (show_id, platform_id)."""

    __tablename__ = "show_platform"

    show_id: Mapped[str] = mapped_column(
        String, ForeignKey("show.id", ondelete="CASCADE"), nullable=False, index=True
    )
    platform_id: Mapped[str] = mapped_column(
        String, ForeignKey("platform.id", ondelete="RESTRICT"), nullable=False
    )
    live_stream_link: Mapped[str | None] = mapped_column(String, nullable=True)
    platform_show_id: Mapped[str | None] = mapped_column(String, nullable=True)
    viewer_count: Mapped[int] = mapped_column(Integer, nullable=False, server_default="0")
    extra_metadata: Mapped[dict[str, Any]] = mapped_column(
        "metadata", JSONB, nullable=False, server_default=text("'{}'::jsonb")
    )

    __table_args__ = (
        Index(
            "uq_show_platform_active",
            "show_id",
            "platform_id",
            unique=True,
            postgresql_where=text("deleted_at IS NULL"),
        ),
    )
