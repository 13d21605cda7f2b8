"""DTOs for advisory plan validation (returned as data, never raised)."""

from dataclasses import dataclass

from showplan.domain.enums import ValidationIssueType


@dataclass(frozen=True)
class ValidationIssue:
    type: ValidationIssueType
    message: str
    show_index: int | None = None
    show_temp_id: str | None = None


@dataclass(frozen=True)
class ValidationResult:
    errors: tuple[ValidationIssue, ...] = ()
    warnings: tuple[ValidationIssue, ...] = ()

    @property
    def is_valid(self) -> bool:
        return not self.errors
