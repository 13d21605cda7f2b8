"""Plan document schema, parsing and value objects."""

from datetime import datetime, timezone

import pytest

from showplan.application.services.plan_document_schema import (
    collect_schema_errors,
    parse_plan_document,
)
from showplan.domain.exceptions import SchemaValidationException, ValidationException
from showplan.domain.plan_document import (
    PlanDocument,
    clone_with_fresh_temp_ids,
    default_plan_document,
    windows_overlap,
)
from showplan.shared.utils.datetime import parse_iso_datetime
from tests.fakes import plan_document, plan_show


def test_default_document_is_schema_valid() -> None:
    assert collect_schema_errors(default_plan_document()) == []


def test_parse_full_show() -> None:
    raw = plan_document(
        plan_show(
            "S1",
            "Morning",
            room="room_a",
            mcs=[{"mcUid": "mc_alex", "note": "host", "metadata": {"slot": 1}}],
            platforms=[
                {
                    "platformUid": "platform_shopee",
                    "liveStreamLink": "https://live.example/1",
                    "platformShowId": "ext-1",
                    "viewerCount": 5,
                }
            ],
            existingShowUid="show_abc",
            metadata={"color": "red"},
        ),
        totalShows=1,
    )

    document = parse_plan_document(raw)

    [show] = document.shows
    assert show.temp_id == "S1"
    assert show.name == "Morning"
    assert show.start_time == datetime(2026, 3, 5, 10, tzinfo=timezone.utc)
    assert show.studio_room_uid == "room_a"
    assert show.existing_show_uid == "show_abc"
    assert show.metadata == {"color": "red"}
    assert show.mcs[0].mc_uid == "mc_alex"
    assert show.mcs[0].note == "host"
    assert show.platforms[0].platform_show_id == "ext-1"
    assert show.platforms[0].viewer_count == 5
    assert document.declared_total_shows == 1


def test_parse_unspecified_assignment_fields_are_none() -> None:
    document = parse_plan_document(plan_document(plan_show("S1", mcs=["mc_alex"])))
    mc = document.shows[0].mcs[0]
    assert mc.note is None
    assert mc.metadata is None
    assert document.shows[0].studio_room_uid is None


@pytest.mark.parametrize(
    "raw",
    [
        {},
        {"shows": {}},
        {"shows": [{"tempId": "S1"}]},
        {"shows": [plan_show("S1", mcs=[{"note": "no uid"}])]},
        {"shows": [plan_show("S1", platforms=[{"platformUid": "p", "viewerCount": -1}])]},
        {"shows": [], "metadata": {"totalShows": "three"}},
    ],
)
def test_schema_violations(raw) -> None:
    with pytest.raises(SchemaValidationException) as exc_info:
        parse_plan_document(raw)
    assert exc_info.value.details["errors"]


def test_schema_error_messages_carry_path() -> None:
    errors = collect_schema_errors({"shows": [{"tempId": "S1"}]})
    assert errors
    assert all(error.startswith("shows.0") for error in errors)


def test_invalid_timestamp_is_validation_error() -> None:
    with pytest.raises(ValidationException) as exc_info:
        parse_plan_document(plan_document(plan_show("S1", end="yesterday")))
    assert exc_info.value.details == {"field": "shows[0].endTime"}


def test_declared_total_shows_ignores_non_integer() -> None:
    assert PlanDocument(metadata={"totalShows": None}).declared_total_shows is None


def test_windows_overlap_is_half_open() -> None:
    t = [datetime(2026, 3, 5, h, tzinfo=timezone.utc) for h in range(4)]
    assert windows_overlap(t[0], t[2], t[1], t[3])
    assert not windows_overlap(t[0], t[1], t[1], t[2])


def test_clone_with_fresh_temp_ids_leaves_source_untouched() -> None:
    raw = plan_document(plan_show("S1", existingShowUid="show_abc"), plan_show("S2"))
    counter = iter(["tmp_1", "tmp_2"])

    cloned = clone_with_fresh_temp_ids(raw, lambda: next(counter))

    assert [s["tempId"] for s in cloned["shows"]] == ["tmp_1", "tmp_2"]
    assert "existingShowUid" not in cloned["shows"][0]
    assert raw["shows"][0]["tempId"] == "S1"
    assert raw["shows"][0]["existingShowUid"] == "show_abc"


def test_parse_iso_datetime_variants() -> None:
    expected = datetime(2026, 3, 1, 18, tzinfo=timezone.utc)
    assert parse_iso_datetime("2026-03-01T18:00:00.000Z") == expected
    assert parse_iso_datetime("2026-03-01T18:00:00") == expected
    assert parse_iso_datetime("2026-03-02T02:00:00+08:00") == expected
    with pytest.raises(ValueError):
        parse_iso_datetime("not a date")
