"""Create database tables in the configured database.

Reads DATABASE_URL (or PG* variables) from .env / environment and creates all
registered ORM tables.

Usage:
  python scripts/create_tables.py
"""

from __future__ import annotations

import pathlib
import sys

from dotenv import load_dotenv
from sqlalchemy import inspect

PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

from bingo.models.base import Base
from bingo.config import resolve_database_url
from bingo.db import create_app_engine

# Import models so they register with Base.metadata
from bingo import models  # noqa: F401


def main() -> int:
    """Create all ORM tables in the target database."""

    load_dotenv()
    env_local = PROJECT_ROOT / ".env.local"
    if env_local.exists():
        load_dotenv(dotenv_path=env_local, override=True)

    database_url = resolve_database_url()

    engine = create_app_engine(database_url)
    Base.metadata.create_all(bind=engine)

    tables = sorted(inspect(engine).get_table_names())
    print(f"Tables ready on {engine.url.render_as_string(hide_password=True)}: {', '.join(tables)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
