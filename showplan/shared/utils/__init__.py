"""Shared utilities: datetime and generators."""

from showplan.shared.utils.datetime import (
    ensure_utc,
    parse_iso_datetime,
    utc_now,
)
from showplan.shared.utils.generators import generate_cuid, generate_uid

__all__ = [
    "generate_cuid",
    "generate_uid",
    "utc_now",
    "ensure_utc",
    "parse_iso_datetime",
]
