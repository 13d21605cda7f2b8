"""Errors raised by planning operations.

Each carries a stable error_code and a details dict; the API turns them into
JSON bodies and picks the HTTP status from the exception class.
Advisory plan problems are not exceptions: see ValidationResult.
"""

from typing import Any


class ShowplanException(Exception):
    """Root of the hierarchy.

    error_code falls back to the class name; details is always a dict.
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code or type(self).__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.error_code, "message": self.message, "details": self.details}


class ValidationException(ShowplanException):
    """Bad caller input: inverted date range, blank name, missing schedule creator."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, "VALIDATION_ERROR", {"field": field} if field else {})


class ResourceNotFoundException(ShowplanException):
    """A schedule, snapshot or show looked up by id/uid is absent or soft-deleted."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class ReferenceNotFoundException(ShowplanException):
    """Natural keys (client, MC, platform, ...) in a plan that match no active row.

    The message names the first unresolved key; details["missing"] lists all of
    them grouped by reference kind.
    """

    def __init__(self, missing: dict[str, list[str]]) -> None:
        kind, keys = next(iter(missing.items()))
        others = sum(len(v) for v in missing.values()) - 1
        message = f"{kind} not found: {keys[0]}"
        if others:
            message += f" (and {others} more unresolved reference(s))"
        super().__init__(
            message,
            "REFERENCE_NOT_FOUND",
            {"kind": kind, "key": keys[0], "missing": missing},
        )


class VersionConflictException(ShowplanException):
    def __init__(
        self, resource_type: str, resource_id: str, expected_version: int, actual_version: int
    ) -> None:
        super().__init__(
            f"{resource_type} was modified by another request "
            f"(expected version {expected_version}, current version {actual_version}); "
            "re-fetch and retry.",
            "VERSION_CONFLICT",
            {
                "resource_type": resource_type,
                "resource_id": resource_id,
                "expected_version": expected_version,
                "actual_version": actual_version,
            },
        )


class ScheduleStateException(ShowplanException):
    """Operation not allowed for the schedule's status (e.g. editing a published one)."""

    def __init__(self, schedule_id: str, status: str, operation: str) -> None:
        super().__init__(
            f"Cannot {operation} schedule in status '{status}'",
            "INVALID_SCHEDULE_STATE",
            {"schedule_id": schedule_id, "status": status, "operation": operation},
        )


class DuplicateNaturalKeyException(ShowplanException):
    """The same natural key appears twice in one desired list handed to the reconciler."""

    def __init__(self, kind: str, key: str) -> None:
        super().__init__(
            f"Duplicate {kind} key in desired list: {key}",
            "DUPLICATE_NATURAL_KEY",
            {"kind": kind, "key": key},
        )


class SchemaValidationException(ShowplanException):
    """A plan document breaks its JSON schema. details["errors"] holds '<path>: <message>' strings."""

    def __init__(self, schema_type: str, validation_errors: list[Any]) -> None:
        super().__init__(
            f"{schema_type} does not match its schema ({len(validation_errors)} error(s))",
            "SCHEMA_VALIDATION_ERROR",
            {"schema_type": schema_type, "errors": validation_errors},
        )


class PersistenceException(ShowplanException):
    """The database aborted a unit of work; its savepoint was rolled back."""

    def __init__(self, operation: str, reason: str | None = None) -> None:
        details: dict[str, Any] = {"operation": operation}
        if reason:
            details["reason"] = reason
        super().__init__(
            f"Persistence failure during {operation}; no changes were applied.",
            "PERSISTENCE_ERROR",
            details,
        )


class SqlNotConfiguredException(ShowplanException):
    def __init__(self) -> None:
        super().__init__(
            "Schedule storage is unavailable: DATABASE_URL is not configured.",
            "SERVICE_UNAVAILABLE",
        )
