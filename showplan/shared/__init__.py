"""Shared utilities: logging and cross-cutting helpers.

Used by domain, application, and infrastructure. No business logic.
"""

from showplan.shared.utils import (
    ensure_utc,
    generate_cuid,
    generate_uid,
    parse_iso_datetime,
    utc_now,
)

__all__ = [
    "generate_cuid",
    "generate_uid",
    "utc_now",
    "ensure_utc",
    "parse_iso_datetime",
]
