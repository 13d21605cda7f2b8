"""ScheduleService: create, get, duplicate, delete."""

from datetime import datetime, timedelta, timezone

import pytest

from showplan.domain.enums import ReferenceKind, ScheduleStatus
from showplan.domain.exceptions import (
    ReferenceNotFoundException,
    ResourceNotFoundException,
    ScheduleStateException,
    SchemaValidationException,
    ValidationException,
)
from tests.fakes import SCHEDULE_END, SCHEDULE_START, plan_document, plan_show, reference_id


async def test_create_schedule_defaults(planning) -> None:
    schedule = await planning.draft(client_uid="client_acme")

    assert schedule.status == ScheduleStatus.DRAFT
    assert schedule.version == 1
    assert schedule.plan_document == {"metadata": {}, "shows": []}
    assert schedule.client_id == reference_id(ReferenceKind.CLIENT, "client_acme")
    assert schedule.created_by == "user-1"
    assert schedule.published_at is None
    assert schedule.uid.startswith("schedule_")


async def test_create_schedule_rejects_inverted_range(planning) -> None:
    with pytest.raises(ValidationException) as exc_info:
        await planning.schedules.create_schedule(
            name="Backwards",
            start_date=SCHEDULE_END,
            end_date=SCHEDULE_START,
            acting_user_id="user-1",
        )
    assert exc_info.value.details == {"field": "end_date"}


async def test_create_schedule_rejects_blank_name(planning) -> None:
    with pytest.raises(ValidationException):
        await planning.schedules.create_schedule(
            name="   ",
            start_date=SCHEDULE_START,
            end_date=SCHEDULE_END,
            acting_user_id="user-1",
        )


async def test_create_schedule_rejects_unknown_client(planning) -> None:
    with pytest.raises(ReferenceNotFoundException):
        await planning.draft(client_uid="client_ghost")
    assert planning.store.schedules == {}


async def test_create_schedule_rejects_invalid_document(planning) -> None:
    with pytest.raises(SchemaValidationException):
        await planning.draft({"metadata": {}})


async def test_get_schedule(planning) -> None:
    created = await planning.draft()
    assert await planning.schedules.get_schedule(created.uid) == created
    with pytest.raises(ResourceNotFoundException):
        await planning.schedules.get_schedule("schedule_missing")


async def test_duplicate_gives_fresh_temp_ids_and_new_draft(planning) -> None:
    source = await planning.draft(
        plan_document(
            plan_show("S1", existingShowUid="show_abc", mcs=["mc_alex"]),
            plan_show("S2"),
            totalShows=2,
        )
    )
    await planning.publish.execute(source.uid, 1, "user-1")

    copy = await planning.schedules.duplicate_schedule(source.uid, "April live shows", "user-3")

    assert copy.uid != source.uid
    assert copy.status == ScheduleStatus.DRAFT
    assert copy.version == 1
    assert copy.created_by == "user-3"
    assert copy.start_date == datetime(2026, 3, 1, tzinfo=timezone.utc)
    shows = copy.plan_document["shows"]
    assert [s["name"] for s in shows] == ["Show S1", "Show S2"]
    assert {s["tempId"] for s in shows}.isdisjoint({"S1", "S2"})
    assert len({s["tempId"] for s in shows}) == 2
    assert all("existingShowUid" not in s for s in shows)
    assert shows[0]["mcs"] == [{"mcUid": "mc_alex"}]
    assert copy.plan_document["metadata"] == {"totalShows": 2}

    source_after = await planning.schedules.get_schedule(source.uid)
    assert source_after.plan_document["shows"][0]["tempId"] == "S1"


async def test_create_schedule_treats_naive_dates_as_utc(planning) -> None:
    schedule = await planning.schedules.create_schedule(
        name="Mixed offsets",
        start_date=datetime(2026, 3, 1, 8, tzinfo=timezone(timedelta(hours=8))),
        end_date=datetime(2026, 3, 31),
        acting_user_id="user-1",
    )

    assert schedule.start_date == datetime(2026, 3, 1, 0, tzinfo=timezone.utc)
    assert schedule.start_date.tzinfo is not None
    assert schedule.end_date == datetime(2026, 3, 31, tzinfo=timezone.utc)
    assert schedule.end_date.tzinfo is not None


async def test_create_schedule_compares_mixed_dates_in_utc(planning) -> None:
    # 2026-03-01T09:00+08:00 is 01:00 UTC, before the naive 02:00 start.
    with pytest.raises(ValidationException):
        await planning.schedules.create_schedule(
            name="Inverted",
            start_date=datetime(2026, 3, 1, 2),
            end_date=datetime(2026, 3, 1, 9, tzinfo=timezone(timedelta(hours=8))),
            acting_user_id="user-1",
        )


async def test_delete_draft_schedule(planning) -> None:
    schedule = await planning.draft()

    await planning.schedules.delete_schedule(schedule.uid, "user-2")

    with pytest.raises(ResourceNotFoundException):
        await planning.schedules.get_schedule(schedule.uid)
    assert planning.store.schedules[schedule.id].deleted_at is not None
    with pytest.raises(ResourceNotFoundException):
        await planning.schedules.delete_schedule(schedule.uid, "user-2")


async def test_delete_published_schedule_is_rejected(planning) -> None:
    schedule = await planning.draft()
    await planning.publish.execute(schedule.uid, 1, "user-1")

    with pytest.raises(ScheduleStateException) as exc_info:
        await planning.schedules.delete_schedule(schedule.uid, "user-2")

    assert "delete" in exc_info.value.message
    assert (await planning.schedules.get_schedule(schedule.uid)).deleted_at is None
