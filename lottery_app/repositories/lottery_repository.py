"""Repository layer for the lottery catalogue."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from lottery_app.models.lottery import Lottery


class LotteryRepository:
    """CRUD operations for Lottery."""

    def list_all(self, session: Session) -> Sequence[Lottery]:
        stmt = select(Lottery).order_by(Lottery.id.asc())
        return list(session.scalars(stmt).all())

    def get_by_id(self, session: Session, lottery_id: int) -> Lottery | None:
        return session.get(Lottery, int(lottery_id))

    def get_by_slug(self, session: Session, slug: str) -> Lottery | None:
        stmt = select(Lottery).where(Lottery.slug == slug)
        return session.scalars(stmt).first()

    def create(self, session: Session, **fields: Any) -> Lottery:
        lottery = Lottery(**fields)
        session.add(lottery)
        session.flush()  # assign PK
        return lottery
