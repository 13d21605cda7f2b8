"""Schedule ORM model. Owns the plan document (JSONB) and its optimistic-lock version."""

from datetime import datetime
from typing import Any

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from showplan.infrastructure.persistence.database import Base
from showplan.infrastructure.persistence.models.mixins import (
    SoftDeletableModel,
    VersionedMixin,
)


class Schedule(SoftDeletableModel, VersionedMixin, Base):
    """Schedule. Table: schedule. published_at is set iff status = 'published'."""

    __tablename__ = "schedule"

    name: Mapped[str] = mapped_column(String, nullable=False)
    start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    status: Mapped[str] = mapped_column(String, nullable=False, server_default="draft")
    plan_document: Mapped[dict[str, Any]] = mapped_column(JSONB, nullable=False)
    client_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("client.id", ondelete="SET NULL"), nullable=True, index=True
    )
    created_by: Mapped[str | None] = mapped_column(String, nullable=True)
    published_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    published_by: Mapped[str | None] = mapped_column(String, nullable=True)

    __table_args__ = (
        CheckConstraint("end_date > start_date", name="ck_schedule_date_range"),
        CheckConstraint("status IN ('draft', 'published')", name="ck_schedule_status"),
        CheckConstraint(
            "(status = 'published') = (published_at IS NOT NULL)",
            name="ck_schedule_published_at",
        ),
        Index("ix_schedule_status", "status"),
    )
