"""Shared fixtures: an app over a throwaway sqlite file and in-memory engine readers."""

from __future__ import annotations

import random
from collections.abc import Sequence

import pytest

from lottery_app import create_app
from lottery_app.db import session_scope
from lottery_app.services.lottery_service import LotteryService
from lottery_app.services.number_selection_engine import FrequencyEntry, Game, NumberSelectionEngine


class InMemoryStore:
    """GameReader + FrequencyReader + ResultsReader backed by dicts.

    ``results`` are stored oldest first, like contest order.
    """

    def __init__(
        self,
        games: Sequence[Game],
        frequencies: dict[int, list[FrequencyEntry]] | None = None,
        results: dict[int, list[list[int]]] | None = None,
    ) -> None:
        self.games = {g.id: g for g in games}
        self.frequencies = frequencies or {}
        self.results = results or {}

    def get_game(self, game_id):
        return self.games.get(game_id)

    def get_frequencies(self, game_id):
        return list(self.frequencies.get(game_id, []))

    def get_all_results(self, game_id):
        return list(self.results.get(game_id, []))

    def get_recent_results(self, game_id, limit):
        return list(reversed(self.results.get(game_id, [])))[:limit]


def frequencies_from(draws: Sequence[Sequence[int]]) -> list[FrequencyEntry]:
    counts: dict[int, int] = {}
    for draw in draws:
        for n in draw:
            counts[n] = counts.get(n, 0) + 1
    return [FrequencyEntry(number=n, frequency=c) for n, c in sorted(counts.items())]


def random_draws(rng: random.Random, max_number: int, size: int, how_many: int) -> list[list[int]]:
    return [sorted(rng.sample(range(1, max_number + 1), size)) for _ in range(how_many)]


@pytest.fixture
def rng() -> random.Random:
    return random.Random(20240601)


@pytest.fixture
def make_engine(rng):
    def _make(store: InMemoryStore, **kwargs) -> NumberSelectionEngine:
        kwargs.setdefault("rng", rng)
        return NumberSelectionEngine(store, store, store, **kwargs)

    return _make


@pytest.fixture
def app(tmp_path):
    app = create_app(
        {
            "TESTING": True,
            "DATABASE_URL": f"sqlite:///{tmp_path / 'test.db'}",
            "SEED_LOTTERIES": True,
            "RANDOM_SEED": 1234,
            "PREDICT_RATE_LIMIT": 1000,
            "FREQUENCY_WINDOW": None,
        }
    )
    yield app
    app.extensions["engine"].dispose()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def lottery_ids(app) -> dict[str, int]:
    with session_scope(app) as session:
        return {l.slug: int(l.id) for l in LotteryService().list_lotteries(session)}


@pytest.fixture
def add_draws(app):
    """Append draws (oldest first) to a lottery, numbering contests from ``start``."""

    def _add(lottery_id: int, draws: Sequence[Sequence[int]], start: int = 1) -> None:
        service = LotteryService()
        with session_scope(app) as session:
            for offset, numbers in enumerate(draws):
                service.add_result(session, lottery_id, contest_number=start + offset, drawn_numbers=numbers)

    return _add
