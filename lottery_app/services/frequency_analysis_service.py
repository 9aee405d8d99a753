"""Business logic for number frequency analysis (heatmap data)."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from lottery_app.errors import InvalidGameError, ValidationError
from lottery_app.models.lottery import Lottery
from lottery_app.repositories.lottery_repository import LotteryRepository
from lottery_app.repositories.lottery_result_repository import LotteryResultRepository
from lottery_app.repositories.number_frequency_repository import FrequencyRow, NumberFrequencyRepository
from lottery_app.services.number_selection_engine import (
    Classification,
    FrequencyEntry,
    ScoringWeights,
    classify_numbers,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecomputeResult:
    lottery_id: int
    draws_used: int
    window: int | None
    numbers_written: int


@dataclass(frozen=True)
class HeatmapCell:
    number: int
    frequency: int
    last_drawn_contest: int | None
    is_hot: bool
    is_cold: bool


@dataclass(frozen=True)
class FrequencyAnalysisResult:
    lottery_id: int
    counts: dict[int, int]
    min_count: int
    max_count: int
    mean_frequency: float
    hot_numbers: list[int]
    cold_numbers: list[int]
    mixed_numbers: list[int]
    degraded: bool


class FrequencyAnalysisService:
    """Rebuild and read the per-number frequency table of a lottery."""

    def __init__(
        self,
        lotteries: LotteryRepository | None = None,
        results: LotteryResultRepository | None = None,
        frequencies: NumberFrequencyRepository | None = None,
        weights: ScoringWeights | None = None,
    ) -> None:
        self._lotteries = lotteries or LotteryRepository()
        self._results = results or LotteryResultRepository()
        self._frequencies = frequencies or NumberFrequencyRepository()
        self._weights = weights or ScoringWeights()

    def _lottery(self, session: Session, lottery_id: int) -> Lottery:
        lottery = self._lotteries.get_by_id(session, lottery_id)
        if lottery is None:
            raise InvalidGameError(message=f"Lottery {lottery_id} not found")
        return lottery

    def recompute(self, session: Session, lottery_id: int, *, window: int | None = None) -> RecomputeResult:
        """Replace the frequency table from the result history.

        Only numbers drawn at least once get a row, so an empty or tiny history
        leaves the table sparse and classification falls back to "all mixed".
        """

        if window is not None and window <= 0:
            raise ValidationError("window must be positive")

        lottery = self._lottery(session, lottery_id)
        max_number = int(lottery.max_number)

        if window is None:
            draws = self._results.list_all(session, lottery.id)
        else:
            draws = self._results.list_recent(session, lottery.id, window)

        counts: dict[int, int] = {}
        last_drawn: dict[int, int] = {}
        for draw in draws:
            contest = int(draw.contest_number)
            for n in draw.drawn_numbers:
                n = int(n)
                if 1 <= n <= max_number:
                    counts[n] = counts.get(n, 0) + 1
                    if contest > last_drawn.get(n, 0):
                        last_drawn[n] = contest

        classification = classify_numbers(
            max_number,
            [FrequencyEntry(number=n, frequency=c) for n, c in counts.items()],
            self._weights,
        )

        rows = [
            FrequencyRow(
                number=n,
                frequency=counts[n],
                last_drawn_contest=last_drawn.get(n),
                is_hot=n in classification.hot,
                is_cold=n in classification.cold,
            )
            for n in sorted(counts)
        ]
        written = self._frequencies.replace_all(session, lottery.id, rows)

        logger.info(
            "Recomputed frequencies for %s from %s draws (window=%s)",
            lottery.slug,
            len(draws),
            window,
        )
        return RecomputeResult(
            lottery_id=int(lottery.id),
            draws_used=len(draws),
            window=window,
            numbers_written=written,
        )

    def ensure_frequencies(self, session: Session, lottery_id: int, *, window: int | None = None) -> bool:
        """Build the table on first use when results exist but no frequencies do."""

        if self._frequencies.list_for_lottery(session, lottery_id):
            return False
        if self._results.get_latest(session, lottery_id) is None:
            return False
        self.recompute(session, lottery_id, window=window)
        return True

    def _counts(self, session: Session, lottery: Lottery) -> tuple[dict[int, int], list[FrequencyEntry]]:
        counts: dict[int, int] = {n: 0 for n in range(1, int(lottery.max_number) + 1)}
        entries: list[FrequencyEntry] = []
        for row in self._frequencies.list_for_lottery(session, lottery.id):
            if int(row.number) in counts:
                counts[int(row.number)] = int(row.frequency)
                entries.append(FrequencyEntry(number=int(row.number), frequency=int(row.frequency)))
        return counts, entries

    def analyze(self, session: Session, lottery_id: int) -> FrequencyAnalysisResult:
        lottery = self._lottery(session, lottery_id)
        counts, entries = self._counts(session, lottery)
        classification: Classification = classify_numbers(int(lottery.max_number), entries, self._weights)

        values = list(counts.values())
        return FrequencyAnalysisResult(
            lottery_id=int(lottery.id),
            counts=counts,
            min_count=min(values) if values else 0,
            max_count=max(values) if values else 0,
            mean_frequency=round(classification.mean_frequency, 4),
            hot_numbers=sorted(classification.hot, key=lambda n: (-counts[n], n)),
            cold_numbers=sorted(classification.cold, key=lambda n: (counts[n], n)),
            mixed_numbers=sorted(classification.mixed),
            degraded=classification.degraded,
        )

    def heatmap(self, session: Session, lottery_id: int) -> list[HeatmapCell]:
        """One cell per number of the range; numbers never drawn show zero."""

        lottery = self._lottery(session, lottery_id)
        counts, entries = self._counts(session, lottery)
        classification = classify_numbers(int(lottery.max_number), entries, self._weights)
        last_drawn = {
            int(r.number): r.last_drawn_contest for r in self._frequencies.list_for_lottery(session, lottery.id)
        }
        return [
            HeatmapCell(
                number=n,
                frequency=counts[n],
                last_drawn_contest=last_drawn.get(n),
                is_hot=n in classification.hot,
                is_cold=n in classification.cold,
            )
            for n in sorted(counts)
        ]
