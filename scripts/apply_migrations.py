"""Apply the SQL files in supabase/migrations to the database configured by POSTGRES_*.

Usage: USE_LOCAL_DB=1 python scripts/apply_migrations.py [migrations_dir]
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path

from src.infrastructure.database.postgres_client import PostgresClient
from src.infrastructure.logging import configure_logging

logger = logging.getLogger("apply_migrations")

DEFAULT_DIR = Path(__file__).resolve().parents[1] / "supabase" / "migrations"


def migration_files(directory: Path) -> list[Path]:
    # Timestamp prefixes make lexical order the apply order
    return sorted(p for p in directory.glob("*.sql") if p.is_file())


def apply_all(client: PostgresClient, directory: Path) -> int:
    files = migration_files(directory)
    for path in files:
        logger.info("Applying %s", path.name)
        client.execute_script(path.read_text(encoding="utf-8"))
    return len(files)


def main(argv: list[str]) -> int:
    configure_logging()
    directory = Path(argv[1]) if len(argv) > 1 else DEFAULT_DIR
    if not directory.is_dir():
        logger.error("Migrations directory not found: %s", directory)
        return 1
    client = PostgresClient()
    try:
        count = apply_all(client, directory)
    finally:
        client.close()
    logger.info("Applied %d migration(s)", count)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
