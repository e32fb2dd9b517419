"""Fail if Alembic migrations drift from the tenant models.

By default the migrations are replayed on a scratch SQLite file: upgrade to
head, compare against the models, downgrade to base and upgrade again. Pass
--database-url to compare an existing, already-migrated database instead.
"""

from __future__ import annotations

import argparse
import asyncio
import tempfile
from pathlib import Path

from remotable import models  # noqa: F401  # Ensure models are registered
from remotable.database import run_migrations, schema_diffs


def _replay_on_scratch_db() -> list:
    with tempfile.TemporaryDirectory() as tmp:
        url = f"sqlite+aiosqlite:///{Path(tmp) / 'migrations.db'}"
        run_migrations("head", url)
        diffs = asyncio.run(schema_diffs(url))
        # The downgrade path must leave a database that upgrades cleanly again
        run_migrations("base", url)
        run_migrations("head", url)
        return diffs


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument(
        "--database-url",
        help="Compare this database instead of replaying migrations on a scratch file",
    )
    args = parser.parse_args(argv)

    if args.database_url:
        diffs = asyncio.run(schema_diffs(args.database_url))
    else:
        diffs = _replay_on_scratch_db()

    if diffs:
        print("Detected schema differences between models and migrations:")
        for diff in diffs:
            print(diff)
        return 1

    print("No schema differences detected.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
