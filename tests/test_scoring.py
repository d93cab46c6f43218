"""
Tests for the score tracker.
"""

import pytest

from bubble_dodge.dodge_core.config_loader import load_config
from bubble_dodge.dodge_core.scoring import ScoreTracker


@pytest.fixture
def tracker():
    return ScoreTracker(load_config())


class TestScoreTracker:
    """Test monotonic scoring."""

    def test_starts_at_zero(self, tracker):
        assert tracker.current() == 0
        assert tracker.collections == 0

    def test_add_score(self, tracker):
        tracker.add_score(5)
        tracker.add_score(0)
        tracker.add_score(7)

        assert tracker.current() == 12
        assert tracker.score == 12

    def test_negative_rejected(self, tracker):
        tracker.add_score(10)

        with pytest.raises(ValueError):
            tracker.add_score(-1)

        assert tracker.current() == 10

    def test_apply_collection(self, tracker):
        event = tracker.apply_collection(edible_uid=9)

        assert event.points == tracker.increment == 10
        assert event.edible_uid == 9
        assert event.total == 10
        assert tracker.collections == 1

    def test_ten_collections(self, tracker):
        for uid in range(10):
            tracker.apply_collection(uid)

        assert tracker.current() == 10 * tracker.increment

    def test_never_decreases(self, tracker):
        history = [tracker.current()]
        for i in range(20):
            if i % 3:
                tracker.apply_collection(i)
            else:
                tracker.add_score(i)
            history.append(tracker.current())

        assert history == sorted(history)

    def test_reset(self, tracker):
        tracker.apply_collection(1)
        tracker.reset()

        assert tracker.current() == 0
        assert tracker.collections == 0
