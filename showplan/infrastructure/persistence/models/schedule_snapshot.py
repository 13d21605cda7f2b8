"""Schedule snapshot ORM: append-only copy of a plan document at a version."""

from datetime import datetime
from typing import Any

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from showplan.infrastructure.persistence.database import Base
from showplan.infrastructure.persistence.models.mixins import CuidMixin, UidMixin


class ScheduleSnapshot(CuidMixin, UidMixin, Base):
    """Snapshot of a schedule's plan document. Table: schedule_snapshot. Never updated or deleted."""

    __tablename__ = "schedule_snapshot"

    schedule_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("schedule.id", ondelete="RESTRICT"),
        nullable=False,
    )
    plan_document: Mapped[dict[str, Any]] = mapped_column(JSONB, nullable=False)
    version: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(String, nullable=False)
    snapshot_reason: Mapped[str] = mapped_column(String, nullable=False)
    created_by: Mapped[str | None] = mapped_column(String, nullable=True)
    # clock_timestamp(): snapshots taken in one transaction still order by capture time.
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.clock_timestamp(),
        nullable=False,
    )

    __table_args__ = (
        Index("ix_schedule_snapshot_schedule_created", "schedule_id", "created_at"),
    )
