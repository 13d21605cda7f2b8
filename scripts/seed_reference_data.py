"""Seed lookup tables (clients, MCs, platforms, rooms, show types/statuses/standards).

Rows are matched by uid; existing uids are skipped, so the script is re-runnable.
Plan documents reference these rows by uid (clientUid, mcUid, platformUid, ...).

Usage:
    python -m scripts.seed_reference_data [path/to/reference-data.json]

Default path: scripts/reference-data.json (relative to project root).
Requires: DATABASE_URL (Postgres) and `alembic upgrade head`.
"""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path

from sqlalchemy import select

from showplan.infrastructure.persistence.models import (
    Client,
    Mc,
    Platform,
    ShowStandard,
    ShowStatus,
    ShowType,
    StudioRoom,
)

_MODELS = {
    "clients": Client,
    "mcs": Mc,
    "platforms": Platform,
    "studio_rooms": StudioRoom,
    "show_types": ShowType,
    "show_statuses": ShowStatus,
    "show_standards": ShowStandard,
}


def _project_root() -> Path:
    return Path(__file__).resolve().parent.parent


async def run(path: Path) -> None:
    if not path.exists():
        print(f"Seed file not found: {path}", file=sys.stderr)
        sys.exit(1)
    with path.open() as f:
        data = json.load(f)

    from showplan.infrastructure.persistence import database as db_mod

    db_mod._ensure_engine()
    if db_mod.AsyncSessionLocal is None:
        print(
            "AsyncSessionLocal not configured. Set DATABASE_URL and run: alembic upgrade head",
            file=sys.stderr,
        )
        sys.exit(1)

    async with db_mod.AsyncSessionLocal() as session:
        async with session.begin():
            for key, model in _MODELS.items():
                rows = data.get(key, [])
                if not rows:
                    continue
                wanted = [row["uid"] for row in rows]
                existing = set(
                    (
                        await session.execute(select(model.uid).where(model.uid.in_(wanted)))
                    ).scalars()
                )
                for row in rows:
                    if row["uid"] in existing:
                        print(f"  {model.__tablename__} {row['uid']} already exists, skip")
                        continue
                    session.add(model(uid=row["uid"], name=row["name"]))
                    print(f"  {model.__tablename__} {row['uid']} ({row['name']})")

    await db_mod.dispose_engine()
    print("Seed completed.")


def main() -> None:
    root = _project_root()
    path_arg = sys.argv[1] if len(sys.argv) > 1 else None
    path = Path(path_arg) if path_arg else root / "scripts" / "reference-data.json"
    if not path.is_absolute():
        path = (root / path).resolve()
    asyncio.run(run(path))


if __name__ == "__main__":
    main()
