"""
Unit tests for InnovationTracker class.

Tests cover numbering, the three deduplication policies and state management.
"""

import pytest

from neurostrand.genotype.innovation_tracker import InnovationTracker


# ============================================================================
# Test: Initialization
# ============================================================================

class TestInnovationTrackerInit:
    """Test InnovationTracker initialization."""

    def test_default_policy_is_global(self):
        assert InnovationTracker().policy == "global"

    def test_numbering_starts_at_one(self):
        tracker = InnovationTracker()

        assert tracker.get_innovation_number(1, 2) == 1
        assert tracker.get_innovation_number(1, 3) == 2

    def test_custom_start(self):
        tracker = InnovationTracker(start=100)

        assert tracker.get_innovation_number(1, 2) == 100

    def test_unknown_policy_raises_error(self):
        with pytest.raises(ValueError, match="Unknown innovation policy"):
            InnovationTracker(policy="sometimes")

    def test_reset_restarts_numbering(self):
        tracker = InnovationTracker()
        tracker.get_innovation_number(1, 2)
        tracker.get_innovation_number(1, 3)

        tracker.reset()

        assert tracker.get_innovation_number(1, 3) == 1


# ============================================================================
# Test: Policies
# ============================================================================

class TestInnovationTrackerGlobalPolicy:
    """Same pair, same number, for the tracker's lifetime."""

    def test_same_pair_same_number(self):
        tracker = InnovationTracker("global")

        first = tracker.get_innovation_number(1, 2)
        tracker.get_innovation_number(2, 3)

        assert tracker.get_innovation_number(1, 2) == first

    def test_direction_matters(self):
        tracker = InnovationTracker("global")

        assert tracker.get_innovation_number(1, 2) != tracker.get_innovation_number(2, 1)

    def test_survives_new_generation(self):
        tracker = InnovationTracker("global")
        first = tracker.get_innovation_number(1, 2)

        tracker.new_generation()

        assert tracker.get_innovation_number(1, 2) == first


class TestInnovationTrackerGenerationPolicy:
    """Same pair, same number, until the generation ends."""

    def test_same_pair_same_number_within_generation(self):
        tracker = InnovationTracker("generation")

        assert tracker.get_innovation_number(1, 2) == tracker.get_innovation_number(1, 2)

    def test_new_number_in_next_generation(self):
        tracker = InnovationTracker("generation")
        first = tracker.get_innovation_number(1, 2)

        tracker.new_generation()
        second = tracker.get_innovation_number(1, 2)

        assert second != first
        assert second > first


class TestInnovationTrackerNoDeduplication:
    """Every request gets a fresh number."""

    def test_same_pair_fresh_numbers(self):
        tracker = InnovationTracker("none")

        numbers = [tracker.get_innovation_number(1, 2) for _ in range(3)]

        assert numbers == [1, 2, 3]
