"""Backfill official draw results for one lottery from a JSON feed.

The feed is a JSON array (local file or http(s) URL) of objects:
  {"contestNumber": 2700, "drawnNumbers": [4, 8, 15, 16, 23, 42],
   "drawDate": "2024-03-02T20:00:00", "specialNumber": null}

Usage:
  python scripts/import_results.py --lottery mega-sena --source ./megasena.json --skip-existing
  python scripts/import_results.py --lottery lotofacil --source https://example.org/lotofacil.json
"""

from __future__ import annotations

import argparse
import json
import logging
import pathlib
import sys
from collections.abc import Sequence
from typing import Any

import requests
from requests.adapters import HTTPAdapter
from sqlalchemy.orm import Session, sessionmaker
from tqdm import tqdm
from urllib3.util.retry import Retry

from dotenv import load_dotenv

PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

from lottery_app.config import resolve_database_url  # noqa: E402
from lottery_app.db import create_app_engine  # noqa: E402
from lottery_app.models.base import Base  # noqa: E402
from lottery_app import models  # noqa: E402,F401
from lottery_app.repositories.lottery_result_repository import LotteryResultRepository  # noqa: E402
from lottery_app.schemas.lottery import LotteryResultCreateSchema  # noqa: E402
from lottery_app.services.frequency_analysis_service import FrequencyAnalysisService  # noqa: E402
from lottery_app.services.lottery_service import LotteryService  # noqa: E402


logger = logging.getLogger(__name__)


def _build_http_session(retries: int, backoff_factor: float) -> requests.Session:
    """Create a requests session with retry/backoff for transient network errors."""

    retry = Retry(
        total=retries,
        connect=retries,
        read=retries,
        status=retries,
        backoff_factor=backoff_factor,
        status_forcelist=(429, 500, 502, 503, 504),
        allowed_methods=("GET",),
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry)

    session = requests.Session()
    session.headers.update({"User-Agent": "lottery-number-engine/0.1"})
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


def load_feed(source: str, *, retries: int = 3, backoff: float = 0.3, timeout_seconds: float = 10.0) -> list[dict[str, Any]]:
    if source.startswith(("http://", "https://")):
        http = _build_http_session(retries=retries, backoff_factor=backoff)
        resp = http.get(source, timeout=timeout_seconds)
        resp.raise_for_status()
        payload = resp.json()
    else:
        payload = json.loads(pathlib.Path(source).read_text(encoding="utf-8"))

    if not isinstance(payload, list):
        raise ValueError("Feed must be a JSON array of draws")
    return payload


def import_draws(
    session: Session,
    slug: str,
    records: Sequence[dict[str, Any]],
    *,
    skip_existing: bool = False,
) -> int:
    """Validate and append draws; returns how many rows were written."""

    lotteries = LotteryService()
    lottery = lotteries.get_lottery_by_slug(session, slug)
    draws = LotteryResultCreateSchema(many=True).load(records)

    existing = LotteryResultRepository().existing_contests(session, lottery.id) if skip_existing else set()

    imported = 0
    for draw in tqdm(sorted(draws, key=lambda d: d["contest_number"]), desc=f"Importing {slug}"):
        if draw["contest_number"] in existing:
            continue
        lotteries.add_result(session, lottery.id, **draw)
        imported += 1
    return imported


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Import lottery draws from a JSON feed")
    parser.add_argument("--lottery", dest="slug", required=True, help="Lottery slug, e.g. mega-sena")
    parser.add_argument("--source", required=True, help="JSON file path or http(s) URL")
    parser.add_argument("--timeout", dest="timeout_seconds", type=float, default=10.0)
    parser.add_argument("--retries", type=int, default=3)
    parser.add_argument("--backoff", type=float, default=0.3)
    parser.add_argument("--window", type=int, default=None, help="Draws used for the frequency table")
    parser.add_argument(
        "--database-url",
        dest="database_url",
        type=str,
        default=None,
        help="Override DB connection string (e.g. sqlite:///./app.db)",
    )
    parser.add_argument("--skip-existing", action="store_true", help="Skip contests already recorded")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")

    load_dotenv()

    database_url = str(args.database_url) if args.database_url else resolve_database_url()
    engine = create_app_engine(database_url)
    Base.metadata.create_all(bind=engine)
    session_factory = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

    records = load_feed(
        args.source,
        retries=args.retries,
        backoff=args.backoff,
        timeout_seconds=args.timeout_seconds,
    )
    logger.info("Loaded %s draws from %s", len(records), args.source)

    with session_factory() as db:
        LotteryService().initialize_lotteries(db)
        imported = import_draws(db, args.slug, records, skip_existing=args.skip_existing)
        lottery = LotteryService().get_lottery_by_slug(db, args.slug)
        FrequencyAnalysisService().recompute(db, lottery.id, window=args.window)
        db.commit()

    logger.info("Imported %s draws", imported)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
