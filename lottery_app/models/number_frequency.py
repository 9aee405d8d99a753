"""Per-number draw frequency, derived from lottery results."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, SmallInteger, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from lottery_app.models.base import Base


class NumberFrequency(Base):
    __tablename__ = "number_frequency"
    __table_args__ = (UniqueConstraint("lottery_id", "number", name="uq_lottery_number"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    lottery_id: Mapped[int] = mapped_column(Integer, ForeignKey("lotteries.id"), index=True, nullable=False)
    number: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    frequency: Mapped[int] = mapped_column(Integer, nullable=False)
    last_drawn_contest: Mapped[int | None] = mapped_column(Integer, nullable=True)
    is_hot: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_cold: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, server_default=func.now())
