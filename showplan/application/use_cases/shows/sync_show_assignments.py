"""Sync one show's MC and platform assignments (ad-hoc shows or after publish)."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from showplan.application.dtos.reconciliation import ShowAssignmentsResult
from showplan.domain.enums import ReferenceKind
from showplan.domain.exceptions import ResourceNotFoundException

if TYPE_CHECKING:
    from showplan.application.interfaces.repositories import (
        IShowMcRepository,
        IShowPlatformRepository,
        IShowRepository,
    )
    from showplan.application.interfaces.services import IUnitOfWork
    from showplan.application.services.assignment_reconciler import AssignmentReconciler
    from showplan.application.services.reference_resolver import ReferenceResolver
    from showplan.domain.plan_document import McPlanEntry, PlatformPlanEntry


class SyncShowAssignmentsUseCase:
    """Reconcile a show's assignments against desired lists in one transaction.

    A list passed as None is left untouched; an empty list soft-deletes every
    active assignment of that kind. The show row is locked before assignments
    are read, so concurrent syncs of one show run one after the other.
    """

    def __init__(
        self,
        show_repo: IShowRepository,
        show_mc_repo: IShowMcRepository,
        show_platform_repo: IShowPlatformRepository,
        reference_resolver: ReferenceResolver,
        reconciler: AssignmentReconciler,
        uow: IUnitOfWork,
    ) -> None:
        self.show_repo = show_repo
        self.show_mc_repo = show_mc_repo
        self.show_platform_repo = show_platform_repo
        self.reference_resolver = reference_resolver
        self.reconciler = reconciler
        self.uow = uow

    async def execute(
        self,
        show_uid: str,
        mcs: Sequence[McPlanEntry] | None = None,
        platforms: Sequence[PlatformPlanEntry] | None = None,
    ) -> ShowAssignmentsResult:
        mc_result = None
        platform_result = None
        async with self.uow.atomic():
            show = await self.show_repo.get_by_uid_for_update(show_uid)
            if show is None:
                raise ResourceNotFoundException("show", show_uid)
            resolved = await self.reference_resolver.resolve(
                {
                    ReferenceKind.MC: {entry.mc_uid for entry in mcs or ()},
                    ReferenceKind.PLATFORM: {entry.platform_uid for entry in platforms or ()},
                }
            )
            mc_inputs = resolved.mc_inputs(mcs) if mcs is not None else None
            platform_inputs = (
                resolved.platform_inputs(platforms) if platforms is not None else None
            )
            if mc_inputs is not None:
                existing_mcs = await self.show_mc_repo.list_by_shows([show.id])
                mc_result = await self.reconciler.reconcile_show_mcs(
                    show.id, mc_inputs, existing_mcs
                )
            if platform_inputs is not None:
                existing_platforms = await self.show_platform_repo.list_by_shows([show.id])
                platform_result = await self.reconciler.reconcile_show_platforms(
                    show.id, platform_inputs, existing_platforms
                )
        return ShowAssignmentsResult(show_id=show.id, mcs=mc_result, platforms=platform_result)
