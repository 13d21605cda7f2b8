"""Lookup-table ORM models referenced by plan documents (client, MC, platform, ...).

Managed by plain CRUD outside this service; here they are only resolved uid -> id.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from showplan.infrastructure.persistence.database import Base
from showplan.infrastructure.persistence.models.mixins import SoftDeletableModel


class ReferenceEntity(SoftDeletableModel):
    """Shared shape: id, uid, name, timestamps, deleted_at."""

    __abstract__ = True

    name: Mapped[str] = mapped_column(String, nullable=False)


class Client(ReferenceEntity, Base):
    """Client the shows are produced for. Table: client."""

    __tablename__ = "client"


class Mc(ReferenceEntity, Base):
    """Host (master of ceremonies). Table: mc."""

    __tablename__ = "mc"


class Platform(ReferenceEntity, Base):
    """Streaming platform. Table: platform."""

    __tablename__ = "platform"


class StudioRoom(ReferenceEntity, Base):
    __tablename__ = "studio_room"


class ShowType(ReferenceEntity, Base):
    __tablename__ = "show_type"


class ShowStatus(ReferenceEntity, Base):
    __tablename__ = "show_status"


class ShowStandard(ReferenceEntity, Base):
    __tablename__ = "show_standard"
