"""Caller-side use-case around the number selection engine."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass

from sqlalchemy.orm import Session

from lottery_app.errors import InvalidCountError
from lottery_app.repositories.lottery_store import SessionLotteryStore
from lottery_app.services.frequency_analysis_service import FrequencyAnalysisService
from lottery_app.services.number_selection_engine import (
    DEFAULT_MAX_ATTEMPTS,
    GenerationPreferences,
    NumberSelectionEngine,
    ScoringWeights,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PredictionResult:
    lottery_id: int
    numbers: list[int]
    special_numbers: list[int]
    repeated: bool
    degraded: bool
    attempts: int


class PredictionService:
    """Validate a prediction request against the lottery rules and run the engine.

    The engine only checks ``1 <= count <= max_number``; the lottery's own
    ``min_numbers..max_numbers`` bet range is enforced here.
    """

    def __init__(
        self,
        *,
        rng: random.Random | None = None,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        weights: ScoringWeights | None = None,
        frequency_window: int | None = None,
        frequency_service: FrequencyAnalysisService | None = None,
    ) -> None:
        self._rng = rng or random.SystemRandom()
        self._max_attempts = max_attempts
        self._weights = weights or ScoringWeights()
        self._frequency_window = frequency_window
        self._frequency_service = frequency_service or FrequencyAnalysisService(weights=self._weights)

    def engine_for(self, session: Session) -> NumberSelectionEngine:
        store = SessionLotteryStore(session)
        return NumberSelectionEngine(
            store,
            store,
            store,
            rng=self._rng,
            max_attempts=self._max_attempts,
            weights=self._weights,
        )

    def predict(
        self,
        session: Session,
        lottery_id: int,
        count: int,
        preferences: GenerationPreferences,
    ) -> PredictionResult:
        engine = self.engine_for(session)
        game = engine.get_game(lottery_id)

        if not (game.min_numbers <= int(count) <= game.max_numbers):
            raise InvalidCountError(
                message="Invalid count",
                details={"count": [f"Must be within {game.min_numbers}..{game.max_numbers} for this lottery"]},
            )

        if self._frequency_service.ensure_frequencies(session, game.id, window=self._frequency_window):
            logger.info("Built missing frequency table for lottery %s", game.id)

        generation = engine.generate_detailed(game.id, int(count), preferences)
        special = engine.generate_special_for(game.id)

        logger.info(
            "Prediction for lottery %s: count=%s hot=%s cold=%s mixed=%s attempts=%s repeated=%s",
            game.id,
            count,
            preferences.use_hot,
            preferences.use_cold,
            preferences.use_mixed,
            generation.attempts,
            generation.repeated,
        )

        return PredictionResult(
            lottery_id=game.id,
            numbers=generation.numbers,
            special_numbers=special,
            repeated=generation.repeated,
            degraded=generation.degraded,
            attempts=generation.attempts,
        )
