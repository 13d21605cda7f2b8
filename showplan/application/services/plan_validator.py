"""Advisory plan document validation. Returns issues as data; never raises for plan content."""

from __future__ import annotations

from typing import TYPE_CHECKING

from showplan.application.dtos.validation import ValidationIssue, ValidationResult
from showplan.application.services.plan_document_schema import collect_schema_errors
from showplan.application.services.reference_resolver import collect_plan_references
from showplan.domain.enums import ReferenceKind, ValidationIssueType
from showplan.domain.exceptions import ValidationException
from showplan.domain.plan_document import PlanDocument, ShowPlanItem

if TYPE_CHECKING:
    from showplan.application.dtos.schedule import ScheduleResult
    from showplan.application.services.reference_resolver import (
        ReferenceResolver,
        ResolvedReferences,
    )

_KIND_LABELS = {
    ReferenceKind.CLIENT: "Client",
    ReferenceKind.STUDIO_ROOM: "Studio room",
    ReferenceKind.SHOW_TYPE: "Show type",
    ReferenceKind.SHOW_STATUS: "Show status",
    ReferenceKind.SHOW_STANDARD: "Show standard",
    ReferenceKind.MC: "MC",
    ReferenceKind.PLATFORM: "Platform",
}


class PlanValidator:
    """Structural checks over a schedule's current plan document (read-only)."""

    def __init__(self, reference_resolver: ReferenceResolver) -> None:
        self._resolver = reference_resolver

    async def validate(self, schedule: ScheduleResult) -> ValidationResult:
        schema_errors = collect_schema_errors(schedule.plan_document)
        if schema_errors:
            return ValidationResult(
                errors=tuple(
                    ValidationIssue(ValidationIssueType.SCHEMA, message) for message in schema_errors
                )
            )
        try:
            document = PlanDocument.from_dict(schedule.plan_document)
        except ValidationException as e:
            return ValidationResult(errors=(ValidationIssue(ValidationIssueType.SCHEMA, e.message),))
        references = await self._resolver.lookup(collect_plan_references(document))
        return check_plan(schedule, document, references)


def check_plan(
    schedule: ScheduleResult,
    document: PlanDocument,
    references: ResolvedReferences,
) -> ValidationResult:
    """Run every per-show and cross-show check against a parsed document."""
    errors: list[ValidationIssue] = []
    warnings: list[ValidationIssue] = []

    def error(kind: ValidationIssueType, message: str, index: int, show: ShowPlanItem) -> None:
        errors.append(ValidationIssue(kind, message, index, show.temp_id))

    def warn(kind: ValidationIssueType, message: str, index: int, show: ShowPlanItem) -> None:
        warnings.append(ValidationIssue(kind, message, index, show.temp_id))

    seen_temp_ids: dict[str, int] = {}
    for index, show in enumerate(document.shows):
        label = f"Show '{show.name}'"
        if show.temp_id in seen_temp_ids:
            error(
                ValidationIssueType.DUPLICATE_KEY,
                f"{label} reuses tempId '{show.temp_id}' of show #{seen_temp_ids[show.temp_id] + 1}",
                index,
                show,
            )
        else:
            seen_temp_ids[show.temp_id] = index

        if not show.has_valid_time_window:
            error(ValidationIssueType.TIME_RANGE, f"{label}: end time must be after start time", index, show)
        elif show.start_time < schedule.start_date or show.end_time > schedule.end_date:
            error(
                ValidationIssueType.TIME_RANGE,
                f"{label} falls outside the schedule date range",
                index,
                show,
            )

        for kind, uid in _show_references(show):
            if references.is_missing(kind, uid):
                error(
                    ValidationIssueType.REFERENCE_NOT_FOUND,
                    f"{label}: {_KIND_LABELS[kind]} not found: {uid}",
                    index,
                    show,
                )

        client_id = references.id_for(ReferenceKind.CLIENT, show.client_uid)
        if schedule.client_id and client_id and client_id != schedule.client_id:
            error(
                ValidationIssueType.CLIENT_MISMATCH,
                f"{label}: client does not match the schedule's client",
                index,
                show,
            )

        mc_uids = [mc.mc_uid for mc in show.mcs]
        for uid in sorted({u for u in mc_uids if mc_uids.count(u) > 1}):
            error(ValidationIssueType.DUPLICATE_KEY, f"{label}: MC {uid} listed more than once", index, show)
        platform_uids = [p.platform_uid for p in show.platforms]
        for uid in sorted({u for u in platform_uids if platform_uids.count(u) > 1}):
            error(
                ValidationIssueType.DUPLICATE_KEY,
                f"{label}: platform {uid} listed more than once",
                index,
                show,
            )

        if not show.mcs:
            warn(ValidationIssueType.NO_MCS, f"{label} has no MCs assigned", index, show)
        if not show.platforms:
            warn(ValidationIssueType.NO_PLATFORMS, f"{label} has no platforms assigned", index, show)

    timed = [(i, s) for i, s in enumerate(document.shows) if s.has_valid_time_window]
    for pos, (_, first) in enumerate(timed):
        for j, second in timed[pos + 1 :]:
            if not first.overlaps(second):
                continue
            if first.studio_room_uid and first.studio_room_uid == second.studio_room_uid:
                error(
                    ValidationIssueType.ROOM_CONFLICT,
                    f"Show '{second.name}' overlaps show '{first.name}' "
                    f"in studio room {second.studio_room_uid}",
                    j,
                    second,
                )
            shared_mcs = {mc.mc_uid for mc in first.mcs} & {mc.mc_uid for mc in second.mcs}
            for uid in sorted(shared_mcs):
                error(
                    ValidationIssueType.MC_DOUBLE_BOOKING,
                    f"MC {uid} is booked on overlapping shows '{first.name}' and '{second.name}'",
                    j,
                    second,
                )

    declared = document.declared_total_shows
    if declared is not None and declared != len(document.shows):
        warnings.append(
            ValidationIssue(
                ValidationIssueType.TOTAL_SHOWS_MISMATCH,
                f"metadata.totalShows is {declared} but the document has {len(document.shows)} shows",
            )
        )

    return ValidationResult(errors=tuple(errors), warnings=tuple(warnings))


def _show_references(show: ShowPlanItem) -> list[tuple[ReferenceKind, str | None]]:
    refs: list[tuple[ReferenceKind, str | None]] = [
        (ReferenceKind.CLIENT, show.client_uid),
        (ReferenceKind.STUDIO_ROOM, show.studio_room_uid),
        (ReferenceKind.SHOW_TYPE, show.show_type_uid),
        (ReferenceKind.SHOW_STATUS, show.show_status_uid),
        (ReferenceKind.SHOW_STANDARD, show.show_standard_uid),
    ]
    refs.extend((ReferenceKind.MC, uid) for uid in dict.fromkeys(m.mc_uid for m in show.mcs))
    refs.extend(
        (ReferenceKind.PLATFORM, uid) for uid in dict.fromkeys(p.platform_uid for p in show.platforms)
    )
    return refs
