"""Repository layer for per-number frequencies."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from lottery_app.models.number_frequency import NumberFrequency


@dataclass(frozen=True)
class FrequencyRow:
    number: int
    frequency: int
    last_drawn_contest: int | None = None
    is_hot: bool = False
    is_cold: bool = False


class NumberFrequencyRepository:
    """The frequency table is derived data: it is replaced wholesale, never patched."""

    def list_for_lottery(self, session: Session, lottery_id: int) -> Sequence[NumberFrequency]:
        stmt = (
            select(NumberFrequency)
            .where(NumberFrequency.lottery_id == int(lottery_id))
            .order_by(NumberFrequency.number.asc())
        )
        return list(session.scalars(stmt).all())

    def replace_all(self, session: Session, lottery_id: int, rows: Iterable[FrequencyRow]) -> int:
        session.execute(delete(NumberFrequency).where(NumberFrequency.lottery_id == int(lottery_id)))
        written = 0
        for row in rows:
            session.add(
                NumberFrequency(
                    lottery_id=int(lottery_id),
                    number=int(row.number),
                    frequency=int(row.frequency),
                    last_drawn_contest=row.last_drawn_contest,
                    is_hot=bool(row.is_hot),
                    is_cold=bool(row.is_cold),
                )
            )
            written += 1
        session.flush()
        return written
