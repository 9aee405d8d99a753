"""
Tests for the number selection engine.
"""

import itertools
import logging
import random

import pytest

from conftest import InMemoryStore, frequencies_from, random_draws
from lottery_app.errors import InvalidCountError, InvalidGameError
from lottery_app.services.number_selection_engine import (
    FrequencyEntry,
    Game,
    GenerationPreferences,
    ScoringWeights,
    classify_numbers,
    is_prime,
)

MEGA = Game(id=1, max_number=60, min_numbers=6, max_numbers=15)
LOTOFACIL = Game(id=2, max_number=25, min_numbers=15, max_numbers=20)
MILIONARIA = Game(id=3, max_number=50, min_numbers=6, max_numbers=12, special_count=2, special_max=6)

ALL_PREFERENCES = [
    GenerationPreferences(use_hot=h, use_cold=c, use_mixed=m)
    for h, c, m in itertools.product([False, True], repeat=3)
]


def _assert_valid(numbers, count, max_number):
    assert len(numbers) == count
    assert len(set(numbers)) == count
    assert all(1 <= n <= max_number for n in numbers)
    assert all(a < b for a, b in zip(numbers, numbers[1:]))


@pytest.fixture
def mega_store():
    draws = random_draws(random.Random(7), 60, 6, 120)
    return InMemoryStore([MEGA, MILIONARIA], {MEGA.id: frequencies_from(draws)}, {MEGA.id: draws})


class TestGameRules:
    """Game construction rules."""

    def test_rejects_inverted_count_range(self):
        with pytest.raises(ValueError):
            Game(id=9, max_number=10, min_numbers=6, max_numbers=5)

    def test_rejects_count_range_above_max_number(self):
        with pytest.raises(ValueError):
            Game(id=9, max_number=7, min_numbers=7, max_numbers=21)

    def test_rejects_special_count_above_special_max(self):
        with pytest.raises(ValueError):
            Game(id=9, max_number=50, min_numbers=6, max_numbers=6, special_count=3, special_max=2)


class TestClassification:
    """Hot/cold/mixed partition."""

    def test_partition_by_frequency(self):
        freqs = [FrequencyEntry(number=n, frequency=100 - n) for n in range(1, 11)]
        result = classify_numbers(10, freqs)

        assert result.hot == {1, 2, 3}
        assert result.cold == {8, 9, 10}
        assert result.mixed == {4, 5, 6, 7}
        assert not result.degraded

    def test_sets_are_disjoint_and_cover_range(self):
        freqs = frequencies_from(random_draws(random.Random(3), 60, 6, 40))
        result = classify_numbers(60, freqs)

        assert result.hot | result.cold | result.mixed == set(range(1, 61))
        assert not result.hot & result.cold
        assert not result.hot & result.mixed
        assert not result.cold & result.mixed
        assert len(result.hot) == 18
        assert len(result.cold) == 18

    def test_missing_numbers_count_as_never_drawn(self):
        freqs = [FrequencyEntry(number=n, frequency=5) for n in range(1, 8)]
        result = classify_numbers(10, freqs)

        assert result.cold == {8, 9, 10}

    def test_sparse_data_falls_back_to_all_mixed(self):
        freqs = [FrequencyEntry(number=1, frequency=4), FrequencyEntry(number=2, frequency=1)]
        result = classify_numbers(25, freqs)

        assert result.degraded
        assert result.hot == frozenset()
        assert result.cold == frozenset()
        assert result.mixed == set(range(1, 26))

    def test_mean_frequency(self):
        freqs = [FrequencyEntry(number=n, frequency=2) for n in range(1, 6)]
        result = classify_numbers(10, freqs)

        assert result.mean_frequency == pytest.approx(1.0)

    def test_tiny_range_keeps_both_ends(self):
        freqs = [FrequencyEntry(number=n, frequency=n) for n in range(1, 4)]
        result = classify_numbers(3, freqs)

        assert result.hot == {3}
        assert result.cold == {1}
        assert result.mixed == {2}


class TestValidation:
    """Input errors are the only failures the engine raises."""

    def test_zero_count(self, make_engine, mega_store):
        with pytest.raises(InvalidCountError):
            make_engine(mega_store).generate(MEGA.id, 0, GenerationPreferences(use_hot=True))

    def test_count_above_range(self, make_engine, mega_store):
        with pytest.raises(InvalidCountError):
            make_engine(mega_store).generate(MEGA.id, MEGA.max_number + 1, GenerationPreferences())

    def test_unknown_game(self, make_engine, mega_store):
        with pytest.raises(InvalidGameError):
            make_engine(mega_store).generate(404, 6, GenerationPreferences())

    def test_rejects_non_positive_attempt_budget(self, make_engine, mega_store):
        with pytest.raises(ValueError):
            make_engine(mega_store, max_attempts=0)


class TestGenerate:
    """Shape of generated combinations."""

    @pytest.mark.parametrize("preferences", ALL_PREFERENCES)
    @pytest.mark.parametrize("count", [1, 6, 15, 60])
    def test_size_range_and_order(self, make_engine, mega_store, preferences, count):
        engine = make_engine(mega_store)
        for _ in range(5):
            _assert_valid(engine.generate(MEGA.id, count, preferences), count, MEGA.max_number)

    def test_all_false_preferences_is_uniform_fallback(self, make_engine, mega_store):
        engine = make_engine(mega_store)
        seen = set()
        for _ in range(300):
            numbers = engine.generate(MEGA.id, 6, GenerationPreferences())
            _assert_valid(numbers, 6, 60)
            seen.update(numbers)
        assert len(seen) > 50

    def test_sparse_frequency_table_still_generates(self, make_engine, caplog):
        store = InMemoryStore(
            [LOTOFACIL],
            {LOTOFACIL.id: [FrequencyEntry(number=3, frequency=9), FrequencyEntry(number=4, frequency=2)]},
        )
        engine = make_engine(store)

        with caplog.at_level(logging.WARNING, logger="lottery_app.services.number_selection_engine"):
            generation = engine.generate_detailed(LOTOFACIL.id, 15, GenerationPreferences(use_hot=True))

        _assert_valid(generation.numbers, 15, 25)
        assert generation.degraded
        assert "Degraded data" in caplog.text

    def test_no_data_at_all(self, make_engine):
        engine = make_engine(InMemoryStore([MEGA]))
        generation = engine.generate_detailed(MEGA.id, 6, GenerationPreferences(use_hot=True, use_mixed=True))

        _assert_valid(generation.numbers, 6, 60)
        assert generation.degraded
        assert not generation.repeated

    def test_small_attempt_budget_fills_uniformly(self, make_engine, mega_store):
        engine = make_engine(mega_store, max_attempts=2)
        generation = engine.generate_detailed(MEGA.id, 15, GenerationPreferences(use_hot=True))

        _assert_valid(generation.numbers, 15, 60)
        assert generation.attempts <= 2

    def test_seeded_rng_is_reproducible(self, mega_store, make_engine):
        prefs = GenerationPreferences(use_hot=True, use_mixed=True)
        first = make_engine(mega_store, rng=random.Random(99))
        second = make_engine(mega_store, rng=random.Random(99))

        assert [first.generate(MEGA.id, 6, prefs) for _ in range(20)] == [
            second.generate(MEGA.id, 6, prefs) for _ in range(20)
        ]

    def test_hot_preference_biases_toward_hot_numbers(self, make_engine):
        freqs = [FrequencyEntry(number=n, frequency=100 if n <= 18 else 1) for n in range(1, 61)]
        engine = make_engine(InMemoryStore([MEGA], {MEGA.id: freqs}))
        hot = classify_numbers(60, freqs).hot
        assert hot == set(range(1, 19))

        picks = 0
        hot_picks = 0
        for _ in range(300):
            numbers = engine.generate(MEGA.id, 6, GenerationPreferences(use_hot=True))
            picks += len(numbers)
            hot_picks += sum(1 for n in numbers if n in hot)

        # Uniform selection would land near 0.3.
        assert hot_picks / picks > 0.4


class TestAntiRepetition:
    """Best-effort avoidance of past draws."""

    def test_rarely_repeats_history(self, make_engine):
        history = random_draws(random.Random(11), 60, 6, 9)
        store = InMemoryStore([MEGA], {MEGA.id: frequencies_from(history)}, {MEGA.id: history})
        engine = make_engine(store)
        past = {frozenset(d) for d in history}

        collisions = sum(
            1
            for _ in range(1000)
            if frozenset(engine.generate(MEGA.id, 6, GenerationPreferences(use_hot=True))) in past
        )
        assert collisions < 10

    @pytest.mark.parametrize(
        "preferences",
        [GenerationPreferences(), GenerationPreferences(use_hot=True, use_cold=True, use_mixed=True)],
    )
    def test_replaces_a_number_when_candidate_matches_history(self, make_engine, preferences):
        game = Game(id=5, max_number=7, min_numbers=6, max_numbers=6)
        history = [[1, 2, 3, 4, 5, 6]]
        frequencies = [FrequencyEntry(number=n, frequency=1) for n in range(1, 7)]
        engine = make_engine(InMemoryStore([game], {game.id: frequencies}, {game.id: history}))

        for _ in range(200):
            generation = engine.generate_detailed(game.id, 6, preferences)
            assert generation.numbers != [1, 2, 3, 4, 5, 6]
            assert 7 in generation.numbers
            assert not generation.repeated

    def test_returns_repeat_when_unavoidable(self, make_engine):
        game = Game(id=6, max_number=6, min_numbers=6, max_numbers=6)
        engine = make_engine(InMemoryStore([game], {}, {game.id: [[1, 2, 3, 4, 5, 6]]}))

        generation = engine.generate_detailed(game.id, 6, GenerationPreferences(use_mixed=True))

        assert generation.numbers == [1, 2, 3, 4, 5, 6]
        assert generation.repeated


class TestLotofacilScenario:
    """25-number game, 15 picks, 50 past draws of 15 numbers."""

    def test_hot_and_mixed(self, make_engine):
        history = random_draws(random.Random(5), 25, 15, 50)
        store = InMemoryStore([LOTOFACIL], {LOTOFACIL.id: frequencies_from(history)}, {LOTOFACIL.id: history})
        engine = make_engine(store)
        past = {frozenset(d) for d in history}

        for _ in range(50):
            generation = engine.generate_detailed(
                LOTOFACIL.id, 15, GenerationPreferences(use_hot=True, use_cold=False, use_mixed=True)
            )
            _assert_valid(generation.numbers, 15, 25)
            assert frozenset(generation.numbers) not in past
            assert not generation.degraded


class TestScoring:
    """Per-round score adjustments."""

    def test_pair_penalty_and_distribution_bonus(self, make_engine):
        game = Game(id=7, max_number=30, min_numbers=6, max_numbers=6)
        history = [[1, 2, 15, 16, 25, 26]] * 20
        engine = make_engine(InMemoryStore([game], {game.id: frequencies_from(history)}, {game.id: history}))
        classification = engine.classify(game)

        ctx = engine._build_context(
            game, GenerationPreferences(use_mixed=True), classification, history, list(reversed(history))
        )

        w = engine.weights
        base = ctx.base_scores[2]
        assert ctx.round_score(2, []) == pytest.approx(base + w.distribution_bonus)
        assert ctx.round_score(2, [1]) == pytest.approx(base - w.pair_penalty_factor * 20)
        # 3 never co-occurred with 1 and shares its third: no bonus, no penalty.
        assert ctx.round_score(3, [1]) == pytest.approx(ctx.base_scores[3])

    def test_recency_penalty_and_bonus(self, make_engine):
        game = Game(id=8, max_number=60, min_numbers=6, max_numbers=6)
        # Oldest first; the last draw is the most recent.
        history = [[40, 41, 42, 43, 44, 45]] + [[1, 2, 3, 4, 5, 6]] * 49
        engine = make_engine(InMemoryStore([game], {game.id: frequencies_from(history)}, {game.id: history}))
        w = ScoringWeights()

        recent = [set(d) for d in reversed(history)]
        assert engine._recency_score(1, recent) == w.recent_penalty
        assert engine._recency_score(40, recent) == pytest.approx(w.recency_max_bonus * 49 / 50)
        assert engine._recency_score(30, recent) == pytest.approx(w.recency_max_bonus)
        assert engine._recency_score(30, []) == 0.0

    def test_structural_score(self, make_engine):
        engine = make_engine(InMemoryStore([MEGA]))

        # 2 is prime but sits on the low boundary.
        assert engine._structural_score(2, 60) == pytest.approx(5 - 2)
        # 31 is prime and in the middle of the range.
        assert engine._structural_score(31, 60) == pytest.approx(5 + 3)
        assert engine._structural_score(30, 60) == pytest.approx(3)
        assert engine._structural_score(60, 60) == pytest.approx(-2)

    def test_is_prime(self):
        assert [n for n in range(1, 30) if is_prime(n)] == [2, 3, 5, 7, 11, 13, 17, 19, 23, 29]


class TestSpecialNumbers:
    """Auxiliary numbers (trevos, lucky month)."""

    def test_two_of_six(self, make_engine):
        engine = make_engine(InMemoryStore([MILIONARIA]))
        for _ in range(100):
            numbers = engine.generate_special(2, 6)
            _assert_valid(numbers, 2, 6)

    def test_for_game(self, make_engine):
        engine = make_engine(InMemoryStore([MEGA, MILIONARIA]))

        _assert_valid(engine.generate_special_for(MILIONARIA.id), 2, 6)
        assert engine.generate_special_for(MEGA.id) == []

    @pytest.mark.parametrize("k,small_max", [(0, 6), (7, 6), (-1, 6)])
    def test_invalid_count(self, make_engine, k, small_max):
        with pytest.raises(InvalidCountError):
            make_engine(InMemoryStore([])).generate_special(k, small_max)
