"""User submitted game (ticket) ORM model."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from lottery_app.models.base import Base


class UserGame(Base):
    __tablename__ = "user_games"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(64), index=True, nullable=False)
    lottery_id: Mapped[int] = mapped_column(Integer, ForeignKey("lotteries.id"), nullable=False)
    numbers: Mapped[list[int]] = mapped_column(JSON, nullable=False)
    contest_number: Mapped[int | None] = mapped_column(Integer, nullable=True)
    is_played: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, server_default=func.now())
