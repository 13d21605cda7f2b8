"""Domain enums: schedule lifecycle, snapshot reasons, reference kinds, validation issues."""

from enum import Enum


class _ValuesMixin:
    """Mixin providing values() for str enums."""

    @classmethod
    def values(cls) -> list[str]:
        return [m.value for m in cls]  # type: ignore[attr-defined]


class ScheduleStatus(_ValuesMixin, str, Enum):
    """Schedule lifecycle. Transitions only draft -> published."""

    DRAFT = "draft"
    PUBLISHED = "published"


class SnapshotReason(_ValuesMixin, str, Enum):
    """Why a plan document snapshot was captured."""

    AUTO_SAVE = "auto_save"
    MANUAL = "manual"
    PRE_PUBLISH = "pre_publish"
    BEFORE_RESTORE = "before_restore"


# Reasons a caller may request; pre_publish and before_restore are written only by
# publish and restore.
REQUESTABLE_SNAPSHOT_REASONS = frozenset({SnapshotReason.MANUAL, SnapshotReason.AUTO_SAVE})


class ReferenceKind(_ValuesMixin, str, Enum):
    """Kinds of natural-key references carried by a plan document."""

    CLIENT = "client"
    STUDIO_ROOM = "studio_room"
    SHOW_TYPE = "show_type"
    SHOW_STATUS = "show_status"
    SHOW_STANDARD = "show_standard"
    MC = "mc"
    PLATFORM = "platform"


class ValidationIssueType(_ValuesMixin, str, Enum):
    """Error and warning types reported by plan validation."""

    SCHEMA = "schema"
    TIME_RANGE = "time_range"
    REFERENCE_NOT_FOUND = "reference_not_found"
    CLIENT_MISMATCH = "client_mismatch"
    ROOM_CONFLICT = "room_conflict"
    MC_DOUBLE_BOOKING = "mc_double_booking"
    DUPLICATE_KEY = "duplicate_key"
    # Warnings
    NO_MCS = "no_mcs"
    NO_PLATFORMS = "no_platforms"
    TOTAL_SHOWS_MISMATCH = "total_shows_mismatch"


class SortOrder(_ValuesMixin, str, Enum):
    ASC = "asc"
    DESC = "desc"
