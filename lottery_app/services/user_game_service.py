"""Service layer for user games: submission, hit checking and stats."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from sqlalchemy.orm import Session

from lottery_app.errors import NotFoundError, ValidationError
from lottery_app.models.user_game import UserGame
from lottery_app.repositories.lottery_result_repository import LotteryResultRepository
from lottery_app.repositories.user_game_repository import UserGameRepository
from lottery_app.services.lottery_service import LotteryService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CheckOutcome:
    game_id: int
    contest_number: int
    drawn_numbers: list[int]
    matched_numbers: list[int]
    hits: int
    is_winner: bool


@dataclass(frozen=True)
class GameOutcome:
    """A stored check of one game against one official draw."""

    id: int
    game_id: int
    lottery_id: int
    contest_number: int
    numbers: list[int]
    drawn_numbers: list[int]
    matched_numbers: list[int]
    hits: int
    is_winner: bool
    prize_value: Decimal
    checked_at: datetime


@dataclass(frozen=True)
class UserStats:
    total_games: int
    checked_games: int
    total_wins: int
    total_earnings: Decimal
    win_rate: float


class UserGameService:
    """User game use-cases."""

    def __init__(
        self,
        repository: UserGameRepository | None = None,
        results: LotteryResultRepository | None = None,
        lottery_service: LotteryService | None = None,
    ) -> None:
        self._repo = repository or UserGameRepository()
        self._results = results or LotteryResultRepository()
        self._lotteries = lottery_service or LotteryService()

    def create_game(
        self,
        session: Session,
        user_id: str,
        lottery_id: int,
        numbers: Sequence[int],
        contest_number: int | None = None,
        is_played: bool = False,
    ) -> UserGame:
        lottery = self._lotteries.get_lottery(session, lottery_id)

        picked = [int(n) for n in numbers]
        errors: list[str] = []
        if len(set(picked)) != len(picked):
            errors.append("Numbers must be unique")
        if any(n < 1 or n > int(lottery.max_number) for n in picked):
            errors.append(f"All numbers must be within 1..{lottery.max_number}")
        if not (int(lottery.min_numbers) <= len(picked) <= int(lottery.max_numbers)):
            errors.append(f"Pick between {lottery.min_numbers} and {lottery.max_numbers} numbers")
        if errors:
            raise ValidationError(message="Invalid game numbers", details={"numbers": errors})

        return self._repo.create(
            session,
            user_id=user_id,
            lottery_id=lottery.id,
            numbers=picked,
            contest_number=contest_number,
            is_played=is_played,
        )

    def list_games(self, session: Session, user_id: str, lottery_id: int | None = None) -> Sequence[UserGame]:
        return self._repo.list_for_user(session, user_id, lottery_id)

    def get_game(self, session: Session, user_id: str, game_id: int) -> UserGame:
        game = self._repo.get_by_id(session, game_id)
        if game is None or game.user_id != user_id:
            raise NotFoundError(message=f"Game {game_id} not found")
        return game

    def check_game(
        self,
        session: Session,
        user_id: str,
        game_id: int,
        contest_number: int | None = None,
    ) -> CheckOutcome:
        """Compare a game with an official draw and record the hits.

        Contest resolution: explicit argument, then the contest stored on the
        game, then the latest recorded draw.
        """

        game = self.get_game(session, user_id, game_id)
        lottery = self._lotteries.get_lottery(session, game.lottery_id)

        contest = contest_number if contest_number is not None else game.contest_number
        if contest is not None:
            result = self._results.get_by_contest(session, lottery.id, contest)
        else:
            result = self._results.get_latest(session, lottery.id)
        if result is None:
            raise NotFoundError(
                message="Result not available",
                details={"contestNumber": [contest] if contest is not None else []},
            )

        drawn = sorted(int(n) for n in result.drawn_numbers)
        matched = sorted(set(int(n) for n in game.numbers).intersection(drawn))
        hits = len(matched)
        is_winner = hits >= int(lottery.min_prize_hits)

        self._repo.add_result(session, user_game_id=game.id, result_id=result.id, hits=hits)
        logger.info("Checked game %s against %s contest %s: %s hits", game.id, lottery.slug, result.contest_number, hits)

        return CheckOutcome(
            game_id=int(game.id),
            contest_number=int(result.contest_number),
            drawn_numbers=drawn,
            matched_numbers=matched,
            hits=hits,
            is_winner=is_winner,
        )

    def _win_thresholds(self, session: Session) -> dict[int, int]:
        return {int(l.id): int(l.min_prize_hits) for l in self._lotteries.list_lotteries(session)}

    def user_stats(self, session: Session, user_id: str) -> UserStats:
        totals = self._repo.totals_for_user(session, user_id, self._win_thresholds(session))
        win_rate = (totals.wins / totals.total_games) * 100 if totals.total_games else 0.0
        return UserStats(
            total_games=totals.total_games,
            checked_games=totals.checked_games,
            total_wins=totals.wins,
            total_earnings=totals.earnings,
            win_rate=round(win_rate, 2),
        )

    def list_results(self, session: Session, user_id: str) -> list[GameOutcome]:
        winning = self._win_thresholds(session)
        outcomes: list[GameOutcome] = []
        for outcome, game, result in self._repo.list_results_for_user(session, user_id):
            numbers = sorted(int(n) for n in game.numbers)
            drawn = sorted(int(n) for n in result.drawn_numbers)
            outcomes.append(
                GameOutcome(
                    id=int(outcome.id),
                    game_id=int(game.id),
                    lottery_id=int(game.lottery_id),
                    contest_number=int(result.contest_number),
                    numbers=numbers,
                    drawn_numbers=drawn,
                    matched_numbers=sorted(set(numbers).intersection(drawn)),
                    hits=int(outcome.hits),
                    is_winner=int(outcome.hits) >= winning.get(int(game.lottery_id), 3),
                    prize_value=outcome.prize_value,
                    checked_at=outcome.created_at,
                )
            )
        return outcomes
