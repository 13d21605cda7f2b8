"""Plan validation response schemas."""

from pydantic import BaseModel, ConfigDict

from showplan.domain.enums import ValidationIssueType


class ValidationIssueResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    type: ValidationIssueType
    message: str
    show_index: int | None = None
    show_temp_id: str | None = None


class ValidationResultResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    is_valid: bool
    errors: list[ValidationIssueResponse]
    warnings: list[ValidationIssueResponse]
