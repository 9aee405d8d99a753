"""Repository layer for user games and their checked results."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy import desc, func, select
from sqlalchemy.orm import Session

from lottery_app.models.game_result import GameResult
from lottery_app.models.lottery_result import LotteryResult
from lottery_app.models.user_game import UserGame


@dataclass(frozen=True)
class UserGameTotals:
    total_games: int
    checked_games: int
    wins: int
    earnings: Decimal


class UserGameRepository:
    """CRUD operations for UserGame and GameResult."""

    def create(
        self,
        session: Session,
        *,
        user_id: str,
        lottery_id: int,
        numbers: list[int],
        contest_number: int | None = None,
        is_played: bool = False,
    ) -> UserGame:
        game = UserGame(
            user_id=user_id,
            lottery_id=int(lottery_id),
            numbers=sorted(int(n) for n in numbers),
            contest_number=contest_number,
            is_played=bool(is_played),
        )
        session.add(game)
        session.flush()
        return game

    def get_by_id(self, session: Session, game_id: int) -> UserGame | None:
        return session.get(UserGame, int(game_id))

    def list_for_user(self, session: Session, user_id: str, lottery_id: int | None = None) -> Sequence[UserGame]:
        stmt = select(UserGame).where(UserGame.user_id == user_id)
        if lottery_id is not None:
            stmt = stmt.where(UserGame.lottery_id == int(lottery_id))
        stmt = stmt.order_by(desc(UserGame.id))
        return list(session.scalars(stmt).all())

    def add_result(
        self,
        session: Session,
        *,
        user_game_id: int,
        result_id: int,
        hits: int,
        prize_value: Decimal = Decimal("0"),
    ) -> GameResult:
        """Record the outcome of a game against one draw.

        Checking the same game against the same draw again updates the
        existing row instead of adding another.
        """

        stmt = select(GameResult).where(
            GameResult.user_game_id == int(user_game_id),
            GameResult.result_id == int(result_id),
        )
        outcome = session.scalars(stmt).first()
        if outcome is None:
            outcome = GameResult(user_game_id=int(user_game_id), result_id=int(result_id))
            session.add(outcome)

        outcome.hits = int(hits)
        outcome.prize_value = prize_value
        session.flush()
        return outcome

    def list_results_for_user(
        self, session: Session, user_id: str
    ) -> Sequence[tuple[GameResult, UserGame, LotteryResult]]:
        """Checked outcomes of a user's games, newest first."""

        stmt = (
            select(GameResult, UserGame, LotteryResult)
            .join(UserGame, GameResult.user_game_id == UserGame.id)
            .join(LotteryResult, GameResult.result_id == LotteryResult.id)
            .where(UserGame.user_id == user_id)
            .order_by(desc(GameResult.id))
        )
        return [tuple(row) for row in session.execute(stmt).all()]

    def totals_for_user(self, session: Session, user_id: str, winning: dict[int, int]) -> UserGameTotals:
        """Aggregate a user's games.

        ``winning`` maps lottery id to the minimum hits that pays a prize. A
        game counts once as a win however many draws it was checked against.
        """

        total_games = int(
            session.scalar(select(func.count()).select_from(UserGame).where(UserGame.user_id == user_id)) or 0
        )

        rows = session.execute(
            select(UserGame.lottery_id, GameResult.user_game_id, GameResult.hits, GameResult.prize_value)
            .join(UserGame, GameResult.user_game_id == UserGame.id)
            .where(UserGame.user_id == user_id)
        ).all()

        checked: set[int] = set()
        winners: set[int] = set()
        earnings = Decimal("0")
        for lottery_id, user_game_id, hits, prize_value in rows:
            checked.add(int(user_game_id))
            if int(hits) >= winning.get(int(lottery_id), 3):
                winners.add(int(user_game_id))
                earnings += Decimal(prize_value or 0)

        return UserGameTotals(
            total_games=total_games,
            checked_games=len(checked),
            wins=len(winners),
            earnings=earnings,
        )
