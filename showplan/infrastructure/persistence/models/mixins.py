"""Column mixins shared by planning tables."""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, declared_attr, mapped_column
from sqlalchemy.sql import func

from showplan.shared.utils.generators import generate_cuid


class CuidMixin:
    """Internal CUID2 primary key; never exposed through the API."""

    @declared_attr
    def id(cls) -> Mapped[str]:
        return mapped_column(String, primary_key=True, default=generate_cuid)


class UidMixin:
    """Mixin for the external-facing uid ('<prefix>_<cuid>'), unique and indexed."""

    @declared_attr
    def uid(cls) -> Mapped[str]:
        return mapped_column(String, nullable=False, unique=True, index=True)


class TimestampMixin:
    """created_at / updated_at set by the database."""

    @declared_attr
    def created_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True), server_default=func.now(), nullable=False
        )

    @declared_attr
    def updated_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True),
            server_default=func.now(),
            onupdate=func.now(),
            nullable=False,
        )


class SoftDeleteMixin:
    """Rows are never hard-deleted; deleted_at IS NULL marks the active ones."""

    @declared_attr
    def deleted_at(cls) -> Mapped[datetime | None]:
        return mapped_column(DateTime(timezone=True), nullable=True, index=True)


class VersionedMixin:
    """Optimistic-lock counter; written only through the version guard."""

    @declared_attr
    def version(cls) -> Mapped[int]:
        return mapped_column(Integer, default=1, server_default="1", nullable=False)


class SoftDeletableModel(CuidMixin, UidMixin, TimestampMixin, SoftDeleteMixin):
    """id, uid, timestamps and soft delete."""

    __abstract__ = True
