"""PublishScheduleUseCase: materialization, reconciliation against prior shows, all-or-nothing."""

from datetime import datetime, timezone

import pytest

from showplan.application.dtos.show import McAssignmentInput, ShowCreate
from showplan.domain.enums import ReferenceKind, ScheduleStatus, SnapshotReason
from showplan.domain.exceptions import (
    DuplicateNaturalKeyException,
    PersistenceException,
    ReferenceNotFoundException,
    ScheduleStateException,
    ValidationException,
    VersionConflictException,
)
from tests.fakes import (
    CLIENT,
    SHOW_STANDARD,
    SHOW_STATUS,
    SHOW_TYPE,
    plan_document,
    plan_show,
    reference_id,
)


def _mc(uid: str) -> str:
    return reference_id(ReferenceKind.MC, uid)


async def _seed_show(planning, schedule_id: str, plan_key: str, mcs: tuple[str, ...]):
    """Insert a materialized show exactly as publish would produce it from plan_show(plan_key)."""
    [show] = await planning.show_repo.create_many(
        [
            ShowCreate(
                uid=f"show_{plan_key}",
                schedule_id=schedule_id,
                plan_key=plan_key,
                name=f"Show {plan_key}",
                start_time=datetime(2026, 3, 5, 10, tzinfo=timezone.utc),
                end_time=datetime(2026, 3, 5, 12, tzinfo=timezone.utc),
                client_id=reference_id(ReferenceKind.CLIENT, CLIENT),
                studio_room_id=None,
                show_type_id=reference_id(ReferenceKind.SHOW_TYPE, SHOW_TYPE),
                show_status_id=reference_id(ReferenceKind.SHOW_STATUS, SHOW_STATUS),
                show_standard_id=reference_id(ReferenceKind.SHOW_STANDARD, SHOW_STANDARD),
                metadata={},
            )
        ]
    )
    await planning.reconciler.reconcile_show_mcs(
        show.id, tuple(McAssignmentInput(_mc(uid)) for uid in mcs), []
    )
    return show


async def test_publish_empty_plan(planning) -> None:
    schedule = await planning.draft()

    result = await planning.publish.execute(schedule.uid, 1, "user-2")

    assert result.shows_created == 0
    assert result.shows_deleted == 0
    assert result.shows_updated == 0
    assert result.schedule.status == ScheduleStatus.PUBLISHED
    assert result.schedule.version == 2
    assert result.schedule.published_by == "user-2"
    assert result.schedule.published_at is not None


async def test_publish_materializes_shows_and_assignments(planning) -> None:
    document = plan_document(
        plan_show(
            "S1",
            mcs=[{"mcUid": "mc_alex", "note": "host"}, "mc_sam"],
            platforms=[
                {
                    "platformUid": "platform_shopee",
                    "liveStreamLink": "https://live.example/s1",
                    "viewerCount": 10,
                }
            ],
        ),
        plan_show(
            "S2",
            start="2026-03-06T10:00:00Z",
            end="2026-03-06T11:00:00Z",
            room="room_a",
            mcs=["mc_jo"],
            platforms=["platform_tiktok"],
        ),
    )
    schedule = await planning.draft(document)

    result = await planning.publish.execute(schedule.uid, 1, "user-1")

    assert result.shows_created == 2
    shows = planning.active_shows(schedule.id)
    assert set(shows) == {"S1", "S2"}
    s1, s2 = shows["S1"], shows["S2"]
    assert s1.client_id == reference_id(ReferenceKind.CLIENT, CLIENT)
    assert s1.studio_room_id is None
    assert s2.studio_room_id == reference_id(ReferenceKind.STUDIO_ROOM, "room_a")
    assert s1.start_time == datetime(2026, 3, 5, 10, tzinfo=timezone.utc)
    assert planning.active_mc_uids(s1.id) == {"mc_alex", "mc_sam"}
    assert planning.active_mc_uids(s2.id) == {"mc_jo"}
    assert planning.active_platform_uids(s1.id) == {"platform_shopee"}
    [platform] = await planning.show_platform_repo.list_by_shows([s1.id])
    assert platform.live_stream_link == "https://live.example/s1"
    assert platform.viewer_count == 10
    [alex] = [
        row
        for row in await planning.show_mc_repo.list_by_shows([s1.id])
        if row.mc_id == _mc("mc_alex")
    ]
    assert alex.note == "host"


async def test_publish_captures_pre_publish_snapshot(planning) -> None:
    document = plan_document(plan_show("S1", mcs=["mc_alex"]))
    schedule = await planning.draft(document)

    await planning.publish.execute(schedule.uid, 1, "user-1")

    [snapshot] = planning.store.snapshots.values()
    assert snapshot.snapshot_reason == SnapshotReason.PRE_PUBLISH
    assert snapshot.version == 1
    assert snapshot.status == ScheduleStatus.DRAFT
    assert snapshot.plan_document == document


async def test_publish_reconciles_existing_show_assignments(planning) -> None:
    schedule = await planning.draft(
        plan_document(plan_show("S1", mcs=["mc_sam", "mc_jo"]))
    )
    s1 = await _seed_show(planning, schedule.id, "S1", ("mc_alex", "mc_sam"))
    old = await _seed_show(planning, schedule.id, "OLD", ("mc_alex",))
    [sam_before] = [
        row
        for row in await planning.show_mc_repo.list_by_shows([s1.id])
        if row.mc_id == _mc("mc_sam")
    ]

    result = await planning.publish.execute(schedule.uid, 1, "user-1")

    assert result.shows_created == 0
    assert result.shows_updated == 0
    assert result.shows_deleted == 1
    assert set(planning.active_shows(schedule.id)) == {"S1"}
    assert planning.active_shows(schedule.id)["S1"].id == s1.id
    assert planning.active_mc_uids(s1.id) == {"mc_sam", "mc_jo"}

    [sam_after] = [
        row
        for row in await planning.show_mc_repo.list_by_shows([s1.id])
        if row.mc_id == _mc("mc_sam")
    ]
    assert sam_after == sam_before

    history = await planning.show_mc_repo.list_by_shows([s1.id], include_deleted=True)
    [alex] = [row for row in history if row.mc_id == _mc("mc_alex")]
    assert alex.deleted_at is not None

    removed = await planning.show_repo.get_by_id(old.id, include_deleted=True)
    assert removed.deleted_at is not None
    assert planning.active_mc_uids(old.id) == set()


async def test_publish_updates_changed_show_fields(planning) -> None:
    schedule = await planning.draft(
        plan_document(plan_show("S1", "Renamed", room="room_b"))
    )
    s1 = await _seed_show(planning, schedule.id, "S1", ())

    result = await planning.publish.execute(schedule.uid, 1, "user-1")

    assert result.shows_updated == 1
    show = await planning.show_repo.get_by_id(s1.id)
    assert show.name == "Renamed"
    assert show.studio_room_id == reference_id(ReferenceKind.STUDIO_ROOM, "room_b")
    assert show.uid == s1.uid


async def test_publish_unresolved_reference_leaves_no_trace(planning) -> None:
    schedule = await planning.draft(
        plan_document(plan_show("S1", mcs=["mc_alex"]), plan_show("S2", mcs=["mc_ghost"]))
    )

    with pytest.raises(ReferenceNotFoundException) as exc_info:
        await planning.publish.execute(schedule.uid, 1, "user-1")

    assert exc_info.value.details["missing"] == {"mc": ["mc_ghost"]}
    assert "mc_ghost" in exc_info.value.message
    current = await planning.schedule_repo.get_by_id(schedule.id)
    assert current.status == ScheduleStatus.DRAFT
    assert current.version == 1
    assert current.published_at is None
    assert planning.store.shows == {}
    assert planning.store.show_mcs == {}
    assert planning.store.snapshots == {}


async def test_publish_persistence_failure_midway_rolls_back(planning, monkeypatch) -> None:
    schedule = await planning.draft(
        plan_document(plan_show("S1", mcs=["mc_alex"], platforms=["platform_shopee"]))
    )

    async def fail(items):
        raise PersistenceException("insert", "connection lost")

    monkeypatch.setattr(planning.show_platform_repo, "create_many", fail)

    with pytest.raises(PersistenceException):
        await planning.publish.execute(schedule.uid, 1, "user-1")

    current = await planning.schedule_repo.get_by_id(schedule.id)
    assert current.status == ScheduleStatus.DRAFT
    assert current.version == 1
    assert planning.store.shows == {}
    assert planning.store.show_mcs == {}


async def test_publish_duplicate_temp_id_aborts(planning) -> None:
    schedule = await planning.draft(plan_document(plan_show("S1"), plan_show("S1")))

    with pytest.raises(DuplicateNaturalKeyException):
        await planning.publish.execute(schedule.uid, 1, "user-1")

    assert planning.store.shows == {}
    assert (await planning.schedule_repo.get_by_id(schedule.id)).status == ScheduleStatus.DRAFT


async def test_publish_stale_version_conflicts(planning) -> None:
    schedule = await planning.draft(plan_document(plan_show("S1")))
    await planning.update_plan.execute(schedule.uid, plan_document(plan_show("S2")), 1, "user-1")

    with pytest.raises(VersionConflictException):
        await planning.publish.execute(schedule.uid, 1, "user-1")

    current = await planning.schedule_repo.get_by_id(schedule.id)
    assert current.status == ScheduleStatus.DRAFT
    assert current.version == 2
    assert planning.store.shows == {}
    assert len(planning.store.snapshots) == 1


async def test_publish_requires_creator(planning) -> None:
    schedule = await planning.draft(created_by=None)

    with pytest.raises(ValidationException) as exc_info:
        await planning.publish.execute(schedule.uid, 1, "user-1")
    assert exc_info.value.details == {"field": "created_by"}


async def test_publish_twice_is_state_error(planning) -> None:
    schedule = await planning.draft()
    await planning.publish.execute(schedule.uid, 1, "user-1")

    with pytest.raises(ScheduleStateException):
        await planning.publish.execute(schedule.uid, 2, "user-1")


async def test_publish_resolves_references_once_per_kind(planning) -> None:
    schedule = await planning.draft(
        plan_document(
            *(
                plan_show(f"S{i}", mcs=["mc_alex", "mc_sam"], platforms=["platform_shopee"])
                for i in range(5)
            )
        )
    )
    planning.lookup.calls.clear()

    await planning.publish.execute(schedule.uid, 1, "user-1")

    kinds = [kind for kind, _ in planning.lookup.calls]
    assert len(kinds) == len(set(kinds))
    assert dict(planning.lookup.calls)[ReferenceKind.MC] == {"mc_alex", "mc_sam"}
