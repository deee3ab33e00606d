"""Unit tests for MilestoneEngine."""

from __future__ import annotations

import pytest

from kidsgoals.engines.milestone_engine import MilestoneEngine


class TestMilestones:
    """Threshold policy by target size."""

    @pytest.mark.parametrize(
        ("target", "expected"),
        [
            (-3, []),
            (0, []),
            (1, []),
            (2, [1]),
            (10, [5]),
            (11, [2, 5, 8]),
            (16, [4, 8, 12]),
            (20, [5, 10, 15]),
            (22, [5, 10, 15, 20]),
            (50, [10, 20, 30, 40]),
            (100, [25, 50, 75]),
        ],
    )
    def test_milestones_by_target(self, target: int, expected: list[int]) -> None:
        """Small, medium and large targets use their own policy."""
        assert MilestoneEngine.milestones(target) == expected

    @pytest.mark.parametrize("target", [2, 7, 13, 20, 21, 37, 99, 250])
    def test_milestones_strictly_inside_target(self, target: int) -> None:
        """Milestones ascend and sit strictly between 0 and the target."""
        values = MilestoneEngine.milestones(target)

        assert values == sorted(set(values))
        assert all(0 < m < target for m in values)

    def test_step_size_floor(self) -> None:
        """Large targets never step by less than 5."""
        assert MilestoneEngine.step_size(21) == 5
        assert MilestoneEngine.step_size(40) == 10
        assert MilestoneEngine.step_size(1000) == 250


class TestMilestoneProgress:
    """Reached / next / crossed."""

    def test_reached_and_next(self) -> None:
        """Reached includes equality; next is strictly above."""
        assert MilestoneEngine.milestones_reached(20, 10) == [5, 10]
        assert MilestoneEngine.next_milestone(20, 10) == 15
        assert MilestoneEngine.next_milestone(20, 15) is None

    def test_just_crossed(self) -> None:
        """Crossing is previous < milestone <= current."""
        assert MilestoneEngine.just_crossed(20, 4, 5) == 5
        assert MilestoneEngine.just_crossed(20, 5, 9) is None
        assert MilestoneEngine.just_crossed(20, 0, 20) == 5

    def test_milestone_fraction(self) -> None:
        """Marker position along the bar."""
        assert MilestoneEngine.milestone_fraction(20, 5) == 0.25
        assert MilestoneEngine.milestone_fraction(0, 5) == 0.0
