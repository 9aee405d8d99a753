"""Lottery catalogue and result ingestion."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime
from decimal import Decimal
from typing import Any

from sqlalchemy.orm import Session

from lottery_app.errors import ConflictError, InvalidGameError, ValidationError
from lottery_app.models.lottery import Lottery
from lottery_app.models.lottery_result import LotteryResult
from lottery_app.repositories.lottery_repository import LotteryRepository
from lottery_app.repositories.lottery_result_repository import LotteryResultRepository

logger = logging.getLogger(__name__)


DEFAULT_LOTTERIES: tuple[dict[str, Any], ...] = (
    {
        "name": "Mega-Sena",
        "slug": "mega-sena",
        "max_number": 60,
        "min_numbers": 6,
        "max_numbers": 15,
        "draw_size": 6,
        "min_prize_hits": 4,
        "draw_days": ["quarta", "sabado"],
        "description": "Escolha de 6 a 15 números entre 1 e 60.",
        "game_type": "standard",
        "bet_value": Decimal("5.00"),
    },
    {
        "name": "Lotofácil",
        "slug": "lotofacil",
        "max_number": 25,
        "min_numbers": 15,
        "max_numbers": 20,
        "draw_size": 15,
        "min_prize_hits": 11,
        "draw_days": ["segunda", "terca", "quarta", "quinta", "sexta", "sabado"],
        "description": "Escolha de 15 a 20 números entre 1 e 25.",
        "game_type": "standard",
        "bet_value": Decimal("3.00"),
    },
    {
        "name": "Quina",
        "slug": "quina",
        "max_number": 80,
        "min_numbers": 5,
        "max_numbers": 15,
        "draw_size": 5,
        "min_prize_hits": 2,
        "draw_days": ["segunda", "terca", "quarta", "quinta", "sexta", "sabado"],
        "description": "Escolha de 5 a 15 números entre 1 e 80.",
        "game_type": "standard",
        "bet_value": Decimal("2.50"),
    },
    {
        "name": "Lotomania",
        "slug": "lotomania",
        "max_number": 100,
        "min_numbers": 50,
        "max_numbers": 50,
        "draw_size": 20,
        "min_prize_hits": 15,
        "draw_days": ["segunda", "quarta", "sexta"],
        "description": "Escolha 50 números entre 1 e 100.",
        "game_type": "standard",
        "bet_value": Decimal("3.00"),
    },
    {
        "name": "Timemania",
        "slug": "timemania",
        "max_number": 80,
        "min_numbers": 10,
        "max_numbers": 10,
        "draw_size": 7,
        "min_prize_hits": 3,
        "special_count": 1,
        "special_max": 80,
        "draw_days": ["terca", "quinta", "sabado"],
        "description": "Escolha 10 números entre 1 e 80 e um time do coração.",
        "game_type": "special",
        "bet_value": Decimal("3.50"),
    },
    {
        "name": "Dupla-Sena",
        "slug": "duplasena",
        "max_number": 50,
        "min_numbers": 6,
        "max_numbers": 15,
        "draw_size": 6,
        "min_prize_hits": 3,
        "draw_days": ["segunda", "quarta", "sexta"],
        "description": "Um bilhete, duas chances. Escolha de 6 a 15 números entre 1 e 50.",
        "game_type": "special",
        "bet_value": Decimal("2.50"),
    },
    {
        "name": "Dia de Sorte",
        "slug": "dia-de-sorte",
        "max_number": 31,
        "min_numbers": 7,
        "max_numbers": 15,
        "draw_size": 7,
        "min_prize_hits": 4,
        "special_count": 1,
        "special_max": 12,
        "draw_days": ["terca", "quinta", "sabado"],
        "description": "Escolha de 7 a 15 números entre 1 e 31 e um mês da sorte.",
        "game_type": "special",
        "bet_value": Decimal("2.00"),
    },
    {
        "name": "+Milionária",
        "slug": "mais-milionaria",
        "max_number": 50,
        "min_numbers": 6,
        "max_numbers": 12,
        "draw_size": 6,
        "min_prize_hits": 2,
        "special_count": 2,
        "special_max": 6,
        "draw_days": ["quarta", "sabado"],
        "description": "Escolha de 6 a 12 números entre 1 e 50 e 2 trevos entre 1 e 6.",
        "game_type": "special",
        "bet_value": Decimal("6.00"),
    },
    {
        "name": "Lotofácil-Independência",
        "slug": "lotofacil-independencia",
        "max_number": 25,
        "min_numbers": 15,
        "max_numbers": 20,
        "draw_size": 15,
        "min_prize_hits": 11,
        "draw_days": ["setembro"],
        "description": "Edição especial da Lotofácil para o 7 de setembro.",
        "game_type": "special",
        "bet_value": Decimal("3.00"),
    },
)


class LotteryService:
    """Lottery catalogue use-cases and append-only result ingestion."""

    def __init__(
        self,
        lotteries: LotteryRepository | None = None,
        results: LotteryResultRepository | None = None,
    ) -> None:
        self._lotteries = lotteries or LotteryRepository()
        self._results = results or LotteryResultRepository()

    def initialize_lotteries(self, session: Session) -> int:
        """Insert any default lottery that is missing. Returns how many were created."""

        created = 0
        for entry in DEFAULT_LOTTERIES:
            if self._lotteries.get_by_slug(session, entry["slug"]) is not None:
                continue
            self._lotteries.create(session, **{**entry, "draw_days": list(entry["draw_days"])})
            created += 1

        if created:
            logger.info("Seeded %s default lotteries", created)
        return created

    def list_lotteries(self, session: Session) -> Sequence[Lottery]:
        return self._lotteries.list_all(session)

    def get_lottery(self, session: Session, lottery_id: int) -> Lottery:
        lottery = self._lotteries.get_by_id(session, lottery_id)
        if lottery is None:
            raise InvalidGameError(message=f"Lottery {lottery_id} not found")
        return lottery

    def get_lottery_by_slug(self, session: Session, slug: str) -> Lottery:
        lottery = self._lotteries.get_by_slug(session, slug)
        if lottery is None:
            raise InvalidGameError(message=f"Lottery {slug!r} not found")
        return lottery

    def list_results(self, session: Session, lottery_id: int, limit: int = 20) -> Sequence[LotteryResult]:
        self.get_lottery(session, lottery_id)
        return self._results.list_recent(session, lottery_id, limit)

    def validate_draw(self, lottery: Lottery, drawn_numbers: Sequence[int]) -> list[int]:
        numbers = [int(n) for n in drawn_numbers]
        errors: list[str] = []
        if len(numbers) != int(lottery.draw_size):
            errors.append(f"Must contain exactly {lottery.draw_size} numbers")
        if len(set(numbers)) != len(numbers):
            errors.append("Numbers must be unique")
        if any(n < 1 or n > int(lottery.max_number) for n in numbers):
            errors.append(f"All numbers must be within 1..{lottery.max_number}")
        if errors:
            raise ValidationError(message="Invalid drawn numbers", details={"drawnNumbers": errors})
        return sorted(numbers)

    def add_result(
        self,
        session: Session,
        lottery_id: int,
        *,
        contest_number: int,
        drawn_numbers: Sequence[int],
        draw_date: datetime | None = None,
        special_number: str | None = None,
        is_accumulated: bool = False,
    ) -> LotteryResult:
        lottery = self.get_lottery(session, lottery_id)
        numbers = self.validate_draw(lottery, drawn_numbers)

        if self._results.get_by_contest(session, lottery.id, contest_number) is not None:
            raise ConflictError(
                message=f"Contest {contest_number} already recorded for {lottery.name}",
                details={"contestNumber": [int(contest_number)]},
            )

        result = self._results.create(
            session,
            lottery_id=lottery.id,
            contest_number=contest_number,
            drawn_numbers=numbers,
            draw_date=draw_date,
            special_number=special_number,
            is_accumulated=is_accumulated,
        )
        logger.info("Recorded %s contest %s", lottery.slug, contest_number)
        return result
