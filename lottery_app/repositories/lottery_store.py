"""Session-bound readers feeding the number selection engine."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from lottery_app.models.lottery import Lottery
from lottery_app.repositories.lottery_repository import LotteryRepository
from lottery_app.repositories.lottery_result_repository import LotteryResultRepository
from lottery_app.repositories.number_frequency_repository import NumberFrequencyRepository
from lottery_app.services.number_selection_engine import FrequencyEntry, Game


def game_from_lottery(lottery: Lottery) -> Game:
    return Game(
        id=int(lottery.id),
        max_number=int(lottery.max_number),
        min_numbers=int(lottery.min_numbers),
        max_numbers=int(lottery.max_numbers),
        special_count=int(lottery.special_count or 0),
        special_max=int(lottery.special_max or 0),
    )


class SessionLotteryStore:
    """Implements GameReader, FrequencyReader and ResultsReader over one session."""

    def __init__(
        self,
        session: Session,
        lotteries: LotteryRepository | None = None,
        results: LotteryResultRepository | None = None,
        frequencies: NumberFrequencyRepository | None = None,
    ) -> None:
        self._session = session
        self._lotteries = lotteries or LotteryRepository()
        self._results = results or LotteryResultRepository()
        self._frequencies = frequencies or NumberFrequencyRepository()

    def get_game(self, game_id: int) -> Game | None:
        lottery = self._lotteries.get_by_id(self._session, game_id)
        return game_from_lottery(lottery) if lottery is not None else None

    def get_frequencies(self, game_id: int) -> Sequence[FrequencyEntry]:
        return [
            FrequencyEntry(number=int(row.number), frequency=int(row.frequency))
            for row in self._frequencies.list_for_lottery(self._session, game_id)
        ]

    def get_all_results(self, game_id: int) -> Sequence[Sequence[int]]:
        return [list(r.drawn_numbers) for r in self._results.list_all(self._session, game_id)]

    def get_recent_results(self, game_id: int, limit: int) -> Sequence[Sequence[int]]:
        return [list(r.drawn_numbers) for r in self._results.list_recent(self._session, game_id, limit)]
