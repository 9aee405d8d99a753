"""Create database tables and seed the lottery catalogue.

Reads DATABASE_URL (or PG* vars) from .env / environment.

Usage:
  python scripts/create_tables.py
"""

from __future__ import annotations

import logging
import pathlib
import sys

from dotenv import load_dotenv
from sqlalchemy.orm import sessionmaker

PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

from lottery_app.config import resolve_database_url  # noqa: E402
from lottery_app.db import create_app_engine  # noqa: E402
from lottery_app.models.base import Base  # noqa: E402

# Import models so they register with Base.metadata
from lottery_app import models  # noqa: E402,F401
from lottery_app.services.lottery_service import LotteryService  # noqa: E402


def main() -> int:
    """Create all ORM tables in the target database."""

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")

    load_dotenv()
    env_local = PROJECT_ROOT / ".env.local"
    if env_local.exists():
        load_dotenv(dotenv_path=env_local, override=True)

    engine = create_app_engine(resolve_database_url())
    Base.metadata.create_all(bind=engine)

    session_factory = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    with session_factory() as db:
        created = LotteryService().initialize_lotteries(db)
        db.commit()

    print(f"Tables created (or already exist). Seeded {created} lotteries.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
