"""Historical lottery results.

One row per official draw. Rows are append-only.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from lottery_app.models.base import Base


class LotteryResult(Base):
    """One official draw of a lottery."""

    __tablename__ = "lottery_results"
    __table_args__ = (UniqueConstraint("lottery_id", "contest_number", name="uq_lottery_contest"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    lottery_id: Mapped[int] = mapped_column(Integer, ForeignKey("lotteries.id"), index=True, nullable=False)
    contest_number: Mapped[int] = mapped_column(Integer, nullable=False)

    drawn_numbers: Mapped[list[int]] = mapped_column(JSON, nullable=False)
    draw_date: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    special_number: Mapped[str | None] = mapped_column(String(20), nullable=True)
    is_accumulated: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, server_default=func.now())
