"""Lottery (game modality) ORM model."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import JSON, DateTime, Integer, Numeric, SmallInteger, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from lottery_app.models.base import Base


class Lottery(Base):
    """One lottery modality and its numeric rules."""

    __tablename__ = "lotteries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(50), nullable=False)
    slug: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)

    max_number: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    min_numbers: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    max_numbers: Mapped[int] = mapped_column(SmallInteger, nullable=False)

    # Size of the official draw; may differ from what a player picks.
    draw_size: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    min_prize_hits: Mapped[int] = mapped_column(SmallInteger, nullable=False, default=3)

    # Auxiliary numbers (trevos, lucky month, team); 0 when unused.
    special_count: Mapped[int] = mapped_column(SmallInteger, nullable=False, default=0)
    special_max: Mapped[int] = mapped_column(SmallInteger, nullable=False, default=0)

    draw_days: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    game_type: Mapped[str] = mapped_column(String(30), nullable=False, default="standard")
    bet_value: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False, default=Decimal("2.50"))

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, server_default=func.now())
