"""Outcome of checking a user game against an official result."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, ForeignKey, Integer, Numeric, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from lottery_app.models.base import Base


class GameResult(Base):
    __tablename__ = "game_results"
    # One outcome per game and official draw; re-checking updates it.
    __table_args__ = (UniqueConstraint("user_game_id", "result_id", name="uq_game_result"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_game_id: Mapped[int] = mapped_column(Integer, ForeignKey("user_games.id"), index=True, nullable=False)
    result_id: Mapped[int] = mapped_column(Integer, ForeignKey("lottery_results.id"), nullable=False)
    hits: Mapped[int] = mapped_column(Integer, nullable=False)
    prize_value: Mapped[Decimal] = mapped_column(Numeric(15, 2), nullable=False, default=Decimal("0"))
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, server_default=func.now())
