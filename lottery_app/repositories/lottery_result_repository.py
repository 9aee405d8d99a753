"""Repository layer for lottery draw results."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import desc, select
from sqlalchemy.orm import Session

from lottery_app.models.lottery_result import LotteryResult


class LotteryResultRepository:
    """Append-only access to official draw results."""

    def list_all(self, session: Session, lottery_id: int) -> Sequence[LotteryResult]:
        stmt = (
            select(LotteryResult)
            .where(LotteryResult.lottery_id == int(lottery_id))
            .order_by(LotteryResult.contest_number.asc())
        )
        return list(session.scalars(stmt).all())

    def list_recent(self, session: Session, lottery_id: int, limit: int) -> Sequence[LotteryResult]:
        """Most recent draws first."""

        stmt = (
            select(LotteryResult)
            .where(LotteryResult.lottery_id == int(lottery_id))
            .order_by(desc(LotteryResult.contest_number))
            .limit(int(limit))
        )
        return list(session.scalars(stmt).all())

    def get_by_contest(self, session: Session, lottery_id: int, contest_number: int) -> LotteryResult | None:
        stmt = select(LotteryResult).where(
            LotteryResult.lottery_id == int(lottery_id),
            LotteryResult.contest_number == int(contest_number),
        )
        return session.scalars(stmt).first()

    def get_latest(self, session: Session, lottery_id: int) -> LotteryResult | None:
        recent = self.list_recent(session, lottery_id, 1)
        return recent[0] if recent else None

    def existing_contests(self, session: Session, lottery_id: int) -> set[int]:
        stmt = select(LotteryResult.contest_number).where(LotteryResult.lottery_id == int(lottery_id))
        return {int(n) for n in session.scalars(stmt).all()}

    def create(
        self,
        session: Session,
        *,
        lottery_id: int,
        contest_number: int,
        drawn_numbers: list[int],
        draw_date: datetime | None = None,
        special_number: str | None = None,
        is_accumulated: bool = False,
    ) -> LotteryResult:
        result = LotteryResult(
            lottery_id=int(lottery_id),
            contest_number=int(contest_number),
            drawn_numbers=sorted(int(n) for n in drawn_numbers),
            draw_date=draw_date,
            special_number=special_number,
            is_accumulated=bool(is_accumulated),
        )
        session.add(result)
        session.flush()
        return result
