"""Timezone helpers. Everything stored or compared in showplan is aware UTC."""

from datetime import UTC, datetime


def utc_now() -> datetime:
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Attach UTC to naive values and convert aware ones; None passes through.

    Repositories apply this to every timestamp they read back.
    """
    if dt is None:
        return None
    return dt.replace(tzinfo=UTC) if dt.tzinfo is None else dt.astimezone(UTC)


def parse_iso_datetime(value: str) -> datetime:
    """Parse a plan document timestamp such as '2026-03-01T18:00:00.000Z'.

    A 'Z' suffix means UTC and so does no offset at all.

    Raises:
        ValueError: value is not ISO-8601.
    """
    text = value.strip()
    if text[-1:] in ("Z", "z"):
        text = f"{text[:-1]}+00:00"
    return ensure_utc(datetime.fromisoformat(text))
