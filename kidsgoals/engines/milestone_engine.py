"""Milestone Engine - Pure logic for intermediate goal thresholds.

Milestones are a step function of the target alone. They drive progress-bar
markers and one-time "you just passed a milestone" feedback; they never depend
on a goal instance or on event history.

Policy:
- target <= 0: no milestones
- target <= 10: one milestone at target // 2 (none for target 1)
- target <= 20: target // 4, target // 2, 3 * target // 4
- larger targets: every `step` points, step = max(5, (target // 4 // 5) * 5)

ARCHITECTURE: Pure logic engine. All methods are static.
"""

from __future__ import annotations

from .. import const
from ..utils.math_utils import round_down_to_step


class MilestoneEngine:
    """Pure logic engine for milestone thresholds."""

    @staticmethod
    def step_size(target: int) -> int:
        """Return the milestone spacing used for large targets.

        The spacing has no upper cap, so very large targets get widely spaced
        milestones.
        """
        return max(
            const.MILESTONE_MIN_STEP,
            round_down_to_step(target // 4, const.MILESTONE_MIN_STEP),
        )

    @staticmethod
    def milestones(target: int) -> list[int]:
        """Return ascending milestone thresholds, each in (0, target).

        Examples:
            milestones(10) → [5]
            milestones(16) → [4, 8, 12]
            milestones(22) → [5, 10, 15, 20]
            milestones(50) → [10, 20, 30, 40]
        """
        if target <= 0:
            return []

        if target <= const.MILESTONE_SMALL_TARGET_MAX:
            # target == 1 would yield 0, which is not a reachable marker
            return [target // 2] if target >= 2 else []

        if target <= const.MILESTONE_MEDIUM_TARGET_MAX:
            return [target // 4, target // 2, (target * 3) // 4]

        step = MilestoneEngine.step_size(target)
        return list(range(step, target, step))

    @staticmethod
    def milestones_reached(target: int, earned: int) -> list[int]:
        """Return milestones at or below the earned points."""
        return [m for m in MilestoneEngine.milestones(target) if m <= earned]

    @staticmethod
    def next_milestone(target: int, earned: int) -> int | None:
        """Return the first milestone strictly above the earned points."""
        return next(
            (m for m in MilestoneEngine.milestones(target) if m > earned), None
        )

    @staticmethod
    def just_crossed(target: int, previous_earned: int, current_earned: int) -> int | None:
        """Return the first milestone passed between two earned values.

        A milestone counts as crossed when previous < milestone <= current, so
        a milestone already reached before is never announced again.
        """
        return next(
            (
                m
                for m in MilestoneEngine.milestones(target)
                if previous_earned < m <= current_earned
            ),
            None,
        )

    @staticmethod
    def milestone_fraction(target: int, milestone: int) -> float:
        """Return where a milestone marker sits along the bar (0.0-1.0)."""
        if target <= 0:
            return 0.0
        return milestone / target
