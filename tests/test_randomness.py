"""Unit tests for the draw-index generator and seed sources."""

import pytest

from core.constants import LcgDefaults
from services.randomness import (
    ClockSeedSource,
    FixedSeedSource,
    LinearCongruentialGenerator,
    RoundCounterSeedSource,
    predict_draw_index,
)


def test_lcg_constants():
    assert LcgDefaults.MULTIPLIER == 1103515245
    assert LcgDefaults.INCREMENT == 12345
    assert LcgDefaults.MODULUS == 2 ** 32


@pytest.mark.parametrize(
    "seed, expected",
    [
        (0, 12345),
        (1, 1103527590),
        (7, 3429651764),
    ],
)
def test_next_value(seed, expected):
    assert LinearCongruentialGenerator().next_value(seed) == expected


def test_next_value_wraps_at_modulus():
    generator = LinearCongruentialGenerator()
    seed = 2 ** 40 + 3
    assert generator.next_value(seed) == (1103515245 * seed + 12345) % 2 ** 32
    assert 0 <= generator.next_value(seed) < 2 ** 32


def test_draw_index_stays_in_range():
    generator = LinearCongruentialGenerator()
    for seed in range(200):
        assert 0 <= generator.draw_index(seed, 7) < 7


def test_draw_index_rejects_empty_pool():
    with pytest.raises(ValueError):
        LinearCongruentialGenerator().draw_index(1, 0)


def test_predict_draw_index_matches_generator():
    """Anyone knowing the seed reproduces the draw."""
    assert predict_draw_index(0, 4) == 1
    assert predict_draw_index(7, 5) == 4
    assert predict_draw_index(123456, 97) == LinearCongruentialGenerator().draw_index(123456, 97)


def test_fixed_seed_source():
    source = FixedSeedSource(42)
    assert [source.current_seed() for _ in range(3)] == [42, 42, 42]


def test_round_counter_advances_per_read():
    source = RoundCounterSeedSource(start=10)
    assert source.last_round is None
    assert [source.current_seed() for _ in range(3)] == [10, 11, 12]
    assert source.last_round == 12


def test_clock_seed_source_truncates():
    source = ClockSeedSource(clock=lambda: 1700000000.9)
    assert source.current_seed() == 1700000000
