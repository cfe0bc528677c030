"""
Unit tests for RandomSource class.
"""

import pytest

from neurostrand.random_source import RandomSource


# ============================================================================
# Test: Reproducibility
# ============================================================================

class TestRandomSourceSeeding:
    """Test that seeded sources are reproducible."""

    def test_same_seed_same_draws(self):
        source1 = RandomSource(seed=123)
        source2 = RandomSource(seed=123)

        draws1 = [source1.real(0, 1) for _ in range(10)]
        draws2 = [source2.real(0, 1) for _ in range(10)]

        assert draws1 == draws2

    def test_different_seeds_different_draws(self):
        draws1 = [RandomSource(seed=1).real(0, 1) for _ in range(3)]
        draws2 = [RandomSource(seed=2).real(0, 1) for _ in range(3)]

        assert draws1 != draws2


# ============================================================================
# Test: Draws
# ============================================================================

class TestRandomSourceReal:
    """Test RandomSource.real()."""

    def test_half_open_range(self):
        source = RandomSource(seed=0)

        for _ in range(500):
            value = source.real(-2.0, 3.0)
            assert -2.0 <= value < 3.0

    def test_inclusive_range(self):
        source = RandomSource(seed=0)

        for _ in range(500):
            value = source.real(0, 1, True)
            assert 0.0 <= value <= 1.0

    def test_returns_python_float(self):
        assert type(RandomSource(seed=0).real(0, 1)) is float


class TestRandomSourceBool:
    """Test RandomSource.bool()."""

    def test_certain_outcomes(self):
        source = RandomSource(seed=0)

        assert all(source.bool(1.0) for _ in range(100))
        assert not any(source.bool(0.0) for _ in range(100))

    def test_out_of_range_probabilities(self):
        source = RandomSource(seed=0)

        assert source.bool(1.5) is True
        assert source.bool(-0.5) is False

    def test_frequency_close_to_probability(self):
        source = RandomSource(seed=0)

        hits = sum(source.bool(0.3) for _ in range(10000))

        assert hits / 10000 == pytest.approx(0.3, abs=0.03)

    def test_returns_python_bool(self):
        assert type(RandomSource(seed=0).bool(0.5)) is bool


class TestRandomSourcePick:
    """Test RandomSource.pick()."""

    def test_picks_from_sequence(self):
        source = RandomSource(seed=0)
        items = ["a", "b", "c"]

        picks = {source.pick(items) for _ in range(200)}

        assert picks == set(items)

    def test_returns_the_element_itself(self):
        items = [object()]

        assert RandomSource(seed=0).pick(items) is items[0]

    def test_empty_sequence_raises_error(self):
        with pytest.raises(ValueError):
            RandomSource(seed=0).pick([])

    def test_return_annotation_is_builtin_bool(self):
        assert RandomSource.bool.__annotations__["return"] is bool
