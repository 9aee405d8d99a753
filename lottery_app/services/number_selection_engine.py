"""Number selection engine.

Turns historical draw data and hot/cold/mixed preferences into one proposed
combination for a game. The engine only reads from its injected collaborators
(game catalogue, frequency table, results store) and keeps no per-call state,
so a single instance can serve concurrent requests.
"""

from __future__ import annotations

import logging
import random
from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass, field
from itertools import combinations
from math import ceil
from typing import Protocol

from lottery_app.errors import InvalidCountError, InvalidGameError

logger = logging.getLogger(__name__)


DEFAULT_MAX_ATTEMPTS = 1000


@dataclass(frozen=True)
class Game:
    """Numeric domain of one lottery modality."""

    id: int
    max_number: int
    min_numbers: int
    max_numbers: int
    special_count: int = 0
    special_max: int = 0

    def __post_init__(self) -> None:
        if not (1 <= self.min_numbers <= self.max_numbers <= self.max_number):
            raise ValueError(
                f"Invalid game {self.id}: need 1 <= min_numbers <= max_numbers <= max_number"
            )
        if self.special_count and not (1 <= self.special_count <= self.special_max):
            raise ValueError(f"Invalid game {self.id}: special_count must be within 1..special_max")


@dataclass(frozen=True)
class FrequencyEntry:
    number: int
    frequency: int


@dataclass(frozen=True)
class GenerationPreferences:
    use_hot: bool = False
    use_cold: bool = False
    use_mixed: bool = False

    @property
    def any_selected(self) -> bool:
        return self.use_hot or self.use_cold or self.use_mixed


@dataclass(frozen=True)
class Classification:
    hot: frozenset[int]
    cold: frozenset[int]
    mixed: frozenset[int]
    mean_frequency: float
    degraded: bool = False


@dataclass(frozen=True)
class Generation:
    numbers: list[int]
    repeated: bool
    degraded: bool
    attempts: int


@dataclass(frozen=True)
class ScoringWeights:
    """Heuristic tuning constants for number scoring."""

    hot_bonus: float = 30.0
    cold_bonus: float = 25.0
    mixed_bonus: float = 20.0

    recency_window: int = 50
    recency_max_bonus: float = 25.0
    recent_draws: int = 5
    recent_penalty: float = -10.0

    prime_bonus: float = 5.0
    middle_bonus: float = 3.0
    middle_share: float = 0.6
    boundary_margin: int = 3
    boundary_penalty: float = -2.0

    distribution_bonus: float = 10.0
    distribution_buckets: int = 3

    pair_threshold: int = 10
    pair_penalty_factor: float = 0.5

    hot_share: float = 0.3
    cold_share: float = 0.3
    min_classified: int = 3


class GameReader(Protocol):
    def get_game(self, game_id: int) -> Game | None: ...


class FrequencyReader(Protocol):
    def get_frequencies(self, game_id: int) -> Sequence[FrequencyEntry]: ...


class ResultsReader(Protocol):
    def get_all_results(self, game_id: int) -> Sequence[Sequence[int]]: ...

    def get_recent_results(self, game_id: int, limit: int) -> Sequence[Sequence[int]]: ...


def is_prime(n: int) -> bool:
    if n < 2:
        return False
    if n % 2 == 0:
        return n == 2
    i = 3
    while i * i <= n:
        if n % i == 0:
            return False
        i += 2
    return True


def classify_numbers(
    max_number: int,
    frequencies: Sequence[FrequencyEntry],
    weights: ScoringWeights | None = None,
) -> Classification:
    """Partition 1..max_number into hot/cold/mixed by draw frequency.

    Numbers missing from ``frequencies`` count as never drawn. With fewer than
    ``min_classified`` entries the whole range is returned as mixed and the
    result is flagged as degraded.
    """

    w = weights or ScoringWeights()
    counts = {n: 0 for n in range(1, max_number + 1)}
    known = 0
    for entry in frequencies:
        if 1 <= entry.number <= max_number:
            counts[entry.number] = int(entry.frequency)
            known += 1

    mean = sum(counts.values()) / max_number if max_number else 0.0
    everything = frozenset(counts)

    if known < w.min_classified or max_number < w.min_classified:
        return Classification(
            hot=frozenset(), cold=frozenset(), mixed=everything, mean_frequency=mean, degraded=True
        )

    ordered = sorted(counts, key=lambda n: (-counts[n], n))
    # Rounded first: 10 * 0.3 is 3.0000000000000004 in floating point.
    hot_count = max(1, ceil(round(max_number * w.hot_share, 6)))
    cold_count = max(1, ceil(round(max_number * w.cold_share, 6)))
    # Small ranges must still leave room for both ends.
    while hot_count + cold_count > max_number:
        if hot_count >= cold_count and hot_count > 1:
            hot_count -= 1
        elif cold_count > 1:
            cold_count -= 1
        else:
            break

    hot = frozenset(ordered[:hot_count])
    cold = frozenset(ordered[-cold_count:])
    mixed = everything - hot - cold
    return Classification(hot=hot, cold=cold, mixed=mixed, mean_frequency=mean)


@dataclass
class _AttemptBudget:
    limit: int
    used: int = 0

    def remaining(self) -> bool:
        return self.used < self.limit

    def spend(self) -> None:
        self.used += 1


@dataclass
class _ScoringContext:
    """Per-call scoring inputs; built once, read during every selection round."""

    game: Game
    weights: ScoringWeights
    base_scores: dict[int, float]
    pair_counts: Counter
    uniform: bool
    bucket_of: dict[int, int] = field(default_factory=dict)

    def round_score(self, n: int, chosen: Sequence[int]) -> float:
        if self.uniform:
            return 1.0

        w = self.weights
        score = self.base_scores[n]

        covered = {self.bucket_of[c] for c in chosen}
        if self.bucket_of[n] not in covered:
            score += w.distribution_bonus

        for s in chosen:
            key = (n, s) if n < s else (s, n)
            co = self.pair_counts.get(key, 0)
            if co > w.pair_threshold:
                score -= w.pair_penalty_factor * co

        return score


class NumberSelectionEngine:
    """Propose lottery combinations biased by historical frequency."""

    def __init__(
        self,
        games: GameReader,
        frequencies: FrequencyReader,
        results: ResultsReader,
        *,
        rng: random.Random | None = None,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        weights: ScoringWeights | None = None,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be positive")
        self._games = games
        self._frequencies = frequencies
        self._results = results
        self._rng = rng or random.SystemRandom()
        self._max_attempts = max_attempts
        self._weights = weights or ScoringWeights()

    @property
    def weights(self) -> ScoringWeights:
        return self._weights

    def get_game(self, game_id: int) -> Game:
        game = self._games.get_game(game_id)
        if game is None:
            raise InvalidGameError(message=f"Lottery {game_id} not found")
        return game

    def classify(self, game: Game, frequencies: Sequence[FrequencyEntry] | None = None) -> Classification:
        if frequencies is None:
            frequencies = self._frequencies.get_frequencies(game.id)
        return classify_numbers(game.max_number, frequencies, self._weights)

    def generate(self, game_id: int, count: int, preferences: GenerationPreferences) -> list[int]:
        """Return ``count`` distinct numbers in 1..max_number, ascending."""

        return self.generate_detailed(game_id, count, preferences).numbers

    def generate_detailed(
        self, game_id: int, count: int, preferences: GenerationPreferences
    ) -> Generation:
        game = self.get_game(game_id)
        count = int(count)
        if count <= 0 or count > game.max_number:
            raise InvalidCountError(
                message="Invalid count",
                details={"count": [f"Must be within 1..{game.max_number}"]},
            )

        classification = self.classify(game)
        if classification.degraded:
            logger.warning(
                "Degraded data for lottery %s: not enough frequency data, using uniform selection",
                game.id,
            )

        history = [tuple(int(n) for n in draw) for draw in self._results.get_all_results(game.id)]
        history_sets = {frozenset(draw) for draw in history}
        recent = self._results.get_recent_results(game.id, self._weights.recency_window)

        ctx = self._build_context(game, preferences, classification, history, recent)
        budget = _AttemptBudget(self._max_attempts)

        chosen: list[int] = []
        self._select(ctx, chosen, count, budget)

        repeated = frozenset(chosen) in history_sets
        while repeated and budget.remaining():
            discarded = chosen.pop()
            if not self._select(ctx, chosen, count, budget, excluded={discarded}):
                chosen.append(discarded)
                break
            repeated = frozenset(chosen) in history_sets

        if repeated:
            logger.info(
                "Lottery %s: returning a combination equal to a past draw after %s attempts",
                game.id,
                budget.used,
            )

        return Generation(
            numbers=sorted(chosen),
            repeated=repeated,
            degraded=classification.degraded,
            attempts=budget.used,
        )

    def generate_special(self, k: int, small_max: int) -> list[int]:
        """Uniformly pick ``k`` auxiliary numbers (e.g. trevos) from 1..small_max."""

        if k <= 0 or k > small_max:
            raise InvalidCountError(
                message="Invalid special number count",
                details={"count": [f"Must be within 1..{small_max}"]},
            )
        return sorted(self._rng.sample(range(1, small_max + 1), k))

    def generate_special_for(self, game_id: int) -> list[int]:
        game = self.get_game(game_id)
        if not game.special_count:
            return []
        return self.generate_special(game.special_count, game.special_max)

    def _build_context(
        self,
        game: Game,
        preferences: GenerationPreferences,
        classification: Classification,
        history: Sequence[Sequence[int]],
        recent: Sequence[Sequence[int]],
    ) -> _ScoringContext:
        w = self._weights
        numbers = range(1, game.max_number + 1)
        buckets = max(1, w.distribution_buckets)
        bucket_of = {n: (n - 1) * buckets // game.max_number for n in numbers}

        uniform = classification.degraded or not preferences.any_selected
        if uniform:
            return _ScoringContext(
                game=game,
                weights=w,
                base_scores={n: 1.0 for n in numbers},
                pair_counts=Counter(),
                uniform=True,
                bucket_of=bucket_of,
            )

        recent_sets = [set(int(n) for n in draw) for draw in recent]
        base_scores = {
            n: self._preference_score(n, preferences, classification)
            + self._recency_score(n, recent_sets)
            + self._structural_score(n, game.max_number)
            for n in numbers
        }

        pair_counts: Counter = Counter()
        for draw in history:
            pair_counts.update(combinations(sorted(set(draw)), 2))

        return _ScoringContext(
            game=game,
            weights=w,
            base_scores=base_scores,
            pair_counts=pair_counts,
            uniform=False,
            bucket_of=bucket_of,
        )

    def _preference_score(
        self, n: int, preferences: GenerationPreferences, classification: Classification
    ) -> float:
        w = self._weights
        score = 0.0
        if preferences.use_hot and n in classification.hot:
            score += w.hot_bonus
        if preferences.use_cold and n in classification.cold:
            score += w.cold_bonus
        if preferences.use_mixed:
            score += w.mixed_bonus
        return score

    def _recency_score(self, n: int, recent_sets: Sequence[set[int]]) -> float:
        if not recent_sets:
            return 0.0

        w = self._weights
        gap = next((i for i, draw in enumerate(recent_sets) if n in draw), len(recent_sets))
        if gap < w.recent_draws:
            return w.recent_penalty
        return min(w.recency_max_bonus, w.recency_max_bonus * gap / w.recency_window)

    def _structural_score(self, n: int, max_number: int) -> float:
        w = self._weights
        score = 0.0
        if is_prime(n):
            score += w.prime_bonus

        if max_number > 1:
            position = (n - 1) / (max_number - 1)
            edge = (1.0 - w.middle_share) / 2
            if edge <= position <= 1.0 - edge:
                score += w.middle_bonus

        if min(n - 1, max_number - n) < w.boundary_margin:
            score += w.boundary_penalty
        return score

    def _select(
        self,
        ctx: _ScoringContext,
        chosen: list[int],
        count: int,
        budget: _AttemptBudget,
        excluded: set[int] | None = None,
    ) -> bool:
        """Fill ``chosen`` up to ``count`` numbers in place.

        Returns False when the pool cannot supply enough numbers.
        """

        blocked = set(excluded or ())
        while len(chosen) < count and budget.remaining():
            budget.spend()
            taken = set(chosen)
            pool = [n for n in range(1, ctx.game.max_number + 1) if n not in taken and n not in blocked]
            if not pool:
                return False
            weights = [max(0.0, ctx.round_score(n, chosen)) for n in pool]
            if sum(weights) <= 0:
                break
            chosen.append(self._rng.choices(pool, weights=weights, k=1)[0])

        missing = count - len(chosen)
        if missing <= 0:
            return True

        taken = set(chosen)
        pool = [n for n in range(1, ctx.game.max_number + 1) if n not in taken and n not in blocked]
        if len(pool) < missing:
            return False
        chosen.extend(self._rng.sample(pool, missing))
        return True
