"""
Tests for the shared random source.
"""

import pytest

from bubble_dodge.dodge_core.rng import RandomSource


class TestRandomSource:
    """Test seeded uniform draws."""

    def test_deterministic_with_seed(self):
        """Same seed should produce same sequence."""
        a = RandomSource(seed=42)
        b = RandomSource(seed=42)

        assert [a.uniform(0, 1) for _ in range(50)] == [b.uniform(0, 1) for _ in range(50)]

    def test_different_seeds_differ(self):
        a = RandomSource(seed=42)
        b = RandomSource(seed=123)

        assert [a.uniform(0, 1) for _ in range(50)] != [b.uniform(0, 1) for _ in range(50)]

    def test_values_within_range(self):
        rng = RandomSource(seed=7)

        for _ in range(500):
            value = rng.uniform(0.1, 0.5)
            assert 0.1 <= value <= 0.5

    def test_degenerate_range(self):
        rng = RandomSource(seed=7)
        assert rng.uniform(3.0, 3.0) == 3.0

    def test_empty_range_rejected(self):
        rng = RandomSource(seed=7)

        with pytest.raises(ValueError):
            rng.uniform(1.0, 0.0)

    def test_draw_counter(self):
        rng = RandomSource(seed=1)
        for _ in range(5):
            rng.uniform(0, 1)

        assert rng.draws == 5

    def test_reset_replays_sequence(self):
        rng = RandomSource(seed=99)
        first = [rng.uniform(0, 10) for _ in range(10)]

        rng.reset()

        assert rng.draws == 0
        assert [rng.uniform(0, 10) for _ in range(10)] == first

    def test_reset_with_new_seed(self):
        rng = RandomSource(seed=1)
        rng.reset(seed=2)

        assert rng.seed == 2
        assert rng.uniform(0, 1) == RandomSource(seed=2).uniform(0, 1)

    def test_state_round_trip(self):
        rng = RandomSource(seed=5)
        rng.uniform(0, 1)
        state = rng.get_state()
        expected = [rng.uniform(0, 1) for _ in range(3)]

        rng.set_state(state)

        assert [rng.uniform(0, 1) for _ in range(3)] == expected
