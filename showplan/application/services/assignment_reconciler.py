"""Assignment reconciler: diff a desired list against persisted rows by natural key.

Same algorithm for MCs on a show, platforms on a show, and shows on a schedule:
plan_reconciliation() classifies (pure, no I/O), AssignmentReconciler applies the
plan inside one unit-of-work scope. Rows are never hard-deleted.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Sequence
from dataclasses import replace
from datetime import datetime
from typing import TYPE_CHECKING, Any

from showplan.application.dtos.reconciliation import ReconcilePlan, ReconcileResult
from showplan.application.dtos.show import (
    McAssignmentInput,
    PlatformAssignmentInput,
    ShowCreate,
    ShowInput,
    ShowMcCreate,
    ShowMcResult,
    ShowPlatformCreate,
    ShowPlatformResult,
    ShowResult,
)
from showplan.domain.exceptions import DuplicateNaturalKeyException
from showplan.shared.logging import get_logger
from showplan.shared.telemetry import add_span_attributes, traced
from showplan.shared.utils.datetime import utc_now

if TYPE_CHECKING:
    from showplan.application.interfaces.repositories import (
        IReconcilableStore,
        IShowMcRepository,
        IShowPlatformRepository,
        IShowRepository,
    )
    from showplan.application.interfaces.services import IUidGenerator, IUnitOfWork

logger = get_logger(__name__)

SHOW_UID_PREFIX = "show"
SHOW_MC_UID_PREFIX = "show_mc"
SHOW_PLATFORM_UID_PREFIX = "show_platform"


def plan_reconciliation[DesiredT, RowT](
    desired: Sequence[DesiredT],
    existing: Sequence[RowT],
    *,
    desired_key: Callable[[DesiredT], Hashable],
    existing_key: Callable[[RowT], Hashable | None],
    kind: str,
) -> ReconcilePlan[DesiredT, RowT]:
    """Classify desired items and existing rows into creates, updates and soft-deletes.

    - Existing rows with deleted_at set are ignored.
    - A natural key repeated in desired raises DuplicateNaturalKeyException.
    - Active existing rows sharing a key (or with no key): the first wins, the
      rest are soft-deleted.
    - Every active existing row lands in exactly one of updates/soft_deletes and
      every desired item in exactly one of creates/updates.
    """
    desired_keys: set[Hashable] = set()
    for item in desired:
        key = desired_key(item)
        if key in desired_keys:
            raise DuplicateNaturalKeyException(kind, str(key))
        desired_keys.add(key)

    existing_by_key: dict[Hashable, RowT] = {}
    redundant: list[RowT] = []
    for row in existing:
        if getattr(row, "deleted_at", None) is not None:
            continue
        key = existing_key(row)
        if key is None or key in existing_by_key:
            redundant.append(row)
            continue
        existing_by_key[key] = row

    creates: list[DesiredT] = []
    updates: list[tuple[RowT, DesiredT]] = []
    processed: set[Hashable] = set()
    for item in desired:
        key = desired_key(item)
        row = existing_by_key.get(key)
        if row is None:
            creates.append(item)
        else:
            updates.append((row, item))
            processed.add(key)

    soft_deletes = [row for key, row in existing_by_key.items() if key not in processed]
    soft_deletes.extend(redundant)
    return ReconcilePlan(
        creates=tuple(creates),
        updates=tuple(updates),
        soft_deletes=tuple(soft_deletes),
    )


def changed_fields(row: Any, specified: dict[str, Any]) -> dict[str, Any]:
    """Return the subset of specified fields whose value differs from the row's."""
    return {name: value for name, value in specified.items() if getattr(row, name) != value}


class AssignmentReconciler:
    """Applies reconciliation plans for shows, show MCs and show platforms.

    Inputs carry internal ids: natural-key resolution happens before this
    service (ReferenceResolver). Order of writes: soft-deletes, updates, creates,
    so a partial unique index on the natural key never sees two active rows.
    """

    def __init__(
        self,
        show_repo: IShowRepository,
        show_mc_repo: IShowMcRepository,
        show_platform_repo: IShowPlatformRepository,
        uow: IUnitOfWork,
        uid_generator: IUidGenerator,
    ) -> None:
        self._show_repo = show_repo
        self._show_mc_repo = show_mc_repo
        self._show_platform_repo = show_platform_repo
        self._uow = uow
        self._uids = uid_generator

    @traced("reconcile.show_mcs")
    async def reconcile_show_mcs(
        self,
        show_id: str,
        desired: Sequence[McAssignmentInput],
        existing: Sequence[ShowMcResult],
    ) -> ReconcileResult[ShowMcResult]:
        """Make the show's active MC rows match desired. Empty desired clears all."""
        plan = plan_reconciliation(
            desired,
            existing,
            desired_key=lambda item: item.mc_id,
            existing_key=lambda row: row.mc_id,
            kind="show_mc",
        )

        def build(item: McAssignmentInput) -> ShowMcCreate:
            return ShowMcCreate(
                uid=self._uids.new_uid(SHOW_MC_UID_PREFIX),
                show_id=show_id,
                mc_id=item.mc_id,
                note=item.note,
                metadata=item.metadata or {},
            )

        async with self._uow.atomic():
            result = await self._apply(self._show_mc_repo, plan, build, utc_now())
        _log_result("show_mc", show_id, result)
        return result

    @traced("reconcile.show_platforms")
    async def reconcile_show_platforms(
        self,
        show_id: str,
        desired: Sequence[PlatformAssignmentInput],
        existing: Sequence[ShowPlatformResult],
    ) -> ReconcileResult[ShowPlatformResult]:
        """Make the show's active platform rows match desired. Empty desired clears all."""
        plan = plan_reconciliation(
            desired,
            existing,
            desired_key=lambda item: item.platform_id,
            existing_key=lambda row: row.platform_id,
            kind="show_platform",
        )

        def build(item: PlatformAssignmentInput) -> ShowPlatformCreate:
            return ShowPlatformCreate(
                uid=self._uids.new_uid(SHOW_PLATFORM_UID_PREFIX),
                show_id=show_id,
                platform_id=item.platform_id,
                live_stream_link=item.live_stream_link,
                platform_show_id=item.platform_show_id,
                viewer_count=item.viewer_count if item.viewer_count is not None else 0,
                metadata=item.metadata or {},
            )

        async with self._uow.atomic():
            result = await self._apply(self._show_platform_repo, plan, build, utc_now())
        _log_result("show_platform", show_id, result)
        return result

    @traced("reconcile.show_set")
    async def reconcile_show_set(
        self,
        schedule_id: str,
        desired: Sequence[ShowInput],
        existing: Sequence[ShowResult],
    ) -> ReconcileResult[ShowResult]:
        """Make the schedule's active shows match desired, keyed by plan_key.

        A removed show is soft-deleted together with its active MC and platform
        rows. MC/platform lists of surviving shows are not touched here.
        """
        plan = plan_reconciliation(
            desired,
            existing,
            desired_key=lambda item: item.plan_key,
            existing_key=lambda row: row.plan_key,
            kind="show",
        )

        def build(item: ShowInput) -> ShowCreate:
            return ShowCreate(
                uid=self._uids.new_uid(SHOW_UID_PREFIX),
                schedule_id=schedule_id,
                plan_key=item.plan_key,
                name=item.name,
                start_time=item.start_time,
                end_time=item.end_time,
                client_id=item.client_id,
                studio_room_id=item.studio_room_id,
                show_type_id=item.show_type_id,
                show_status_id=item.show_status_id,
                show_standard_id=item.show_standard_id,
                metadata=item.metadata or {},
            )

        deleted_at = utc_now()
        async with self._uow.atomic():
            if plan.soft_deletes:
                removed_ids = [row.id for row in plan.soft_deletes]
                await self._show_mc_repo.soft_delete_by_shows(removed_ids, deleted_at)
                await self._show_platform_repo.soft_delete_by_shows(removed_ids, deleted_at)
            result = await self._apply(self._show_repo, plan, build, deleted_at)
        _log_result("show", schedule_id, result)
        return result

    async def _apply(
        self,
        store: IReconcilableStore[Any, Any],
        plan: ReconcilePlan[Any, Any],
        build_create: Callable[[Any], Any],
        deleted_at: datetime,
    ) -> ReconcileResult[Any]:
        soft_deleted: tuple[Any, ...] = ()
        if plan.soft_deletes:
            await store.soft_delete_many([row.id for row in plan.soft_deletes], deleted_at)
            soft_deleted = tuple(replace(row, deleted_at=deleted_at) for row in plan.soft_deletes)

        updated: list[Any] = []
        unchanged: list[Any] = []
        for row, item in plan.updates:
            changes = changed_fields(row, item.specified_fields())
            if changes:
                updated.append(await store.update_fields(row.id, changes))
            else:
                unchanged.append(row)

        created: list[Any] = []
        if plan.creates:
            created = await store.create_many([build_create(item) for item in plan.creates])

        return ReconcileResult(
            created=tuple(created),
            updated=tuple(updated),
            unchanged=tuple(unchanged),
            soft_deleted=soft_deleted,
        )


def _log_result(kind: str, owner_id: str, result: ReconcileResult[Any]) -> None:
    logger.debug(
        "Reconciled %s for %s: created=%d updated=%d unchanged=%d soft_deleted=%d",
        kind,
        owner_id,
        len(result.created),
        len(result.updated),
        len(result.unchanged),
        len(result.soft_deleted),
    )
    add_span_attributes(
        **{
            "reconcile.kind": kind,
            "reconcile.owner_id": owner_id,
            "reconcile.created": len(result.created),
            "reconcile.updated": len(result.updated),
            "reconcile.unchanged": len(result.unchanged),
            "reconcile.soft_deleted": len(result.soft_deleted),
        }
    )
