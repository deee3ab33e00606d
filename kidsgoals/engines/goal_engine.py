"""Goal Engine - Pure logic for goal progress, status and lifecycle mutations.

This engine provides stateless, pure Python functions for:
- Window aggregation of earned points (attribution + discount + freeze)
- Status resolution with a fixed precedence order
- Progress / remaining derived from the same earned value
- Redemption (freeze) and soft reset, returning replacement Goal values

ARCHITECTURE: This is a pure logic engine. All functions are static methods
that operate on passed-in data. The engine never reads the system clock;
`now` is always supplied by the caller. State management belongs in
GoalManager.

Attribution rules:
- An event with an explicit goal_id counts only toward that goal
- An event without goal_id counts only toward the goal evaluated with
  is_primary=True
- Only positive amounts count; debits never reduce goal progress
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace
from typing import TYPE_CHECKING

from .. import const
from ..utils.dt_utils import dt_add_interval, dt_time_until
from ..utils.math_utils import apply_multiplier_truncated, calculate_ratio
from .milestone_engine import MilestoneEngine

if TYPE_CHECKING:
    from datetime import datetime, timedelta

    from ..models import Goal, PointEvent
    from ..type_defs import GoalEvaluation, GoalStatus


class GoalEngine:
    """Pure logic engine for goal evaluation.

    All methods are static - no instance state, no side effects.
    """

    # =========================================================================
    # WINDOW AGGREGATION
    # =========================================================================

    @staticmethod
    def event_counts_toward(goal: Goal, event: PointEvent, is_primary: bool) -> bool:
        """Return True if a single event qualifies for the goal's window."""
        if event.child_id != goal.child_id:
            return False
        if event.amount <= 0:
            return False

        window_start = goal.window_start or goal.created_at
        if event.timestamp < window_start:
            return False
        if goal.deadline is not None and event.timestamp > goal.deadline:
            return False

        if event.goal_id is not None:
            return event.goal_id == goal.internal_id
        return is_primary

    @staticmethod
    def earned_points(
        goal: Goal, events: Iterable[PointEvent], is_primary: bool
    ) -> int:
        """Sum qualifying positive points inside the goal's window.

        A redeemed goal reports its frozen points regardless of events.

        Args:
            goal: Goal being evaluated
            events: Full event snapshot (any order, any child)
            is_primary: Whether untagged events should count for this goal

        Returns:
            Discounted, truncated earned points (never negative)
        """
        if goal.redeemed and goal.frozen_earned_points is not None:
            return goal.frozen_earned_points

        raw_points = sum(
            event.amount
            for event in events
            if GoalEngine.event_counts_toward(goal, event, is_primary)
        )
        return apply_multiplier_truncated(raw_points, goal.earning_multiplier)

    # =========================================================================
    # STATUS RESOLUTION
    # =========================================================================

    @staticmethod
    def is_expired(goal: Goal, now: datetime) -> bool:
        """Deadline passed and the goal was never redeemed."""
        return goal.deadline is not None and now > goal.deadline and not goal.redeemed

    @staticmethod
    def resolve_status(goal: Goal, earned_points: int, now: datetime) -> GoalStatus:
        """Map a goal and its earned points to a lifecycle status.

        Precedence (first match wins):
            1. completed - goal was redeemed
            2. expired - deadline passed, not redeemed
            3. ready_to_redeem - earned points reached the target
            4. active_with_deadline - still running with a deadline
            5. active
        """
        if goal.redeemed:
            return const.GOAL_STATUS_COMPLETED  # type: ignore[return-value]
        if GoalEngine.is_expired(goal, now):
            return const.GOAL_STATUS_EXPIRED  # type: ignore[return-value]
        if earned_points >= goal.target:
            return const.GOAL_STATUS_READY_TO_REDEEM  # type: ignore[return-value]
        if goal.deadline is not None:
            return const.GOAL_STATUS_ACTIVE_WITH_DEADLINE  # type: ignore[return-value]
        return const.GOAL_STATUS_ACTIVE  # type: ignore[return-value]

    @staticmethod
    def status(
        goal: Goal, events: Iterable[PointEvent], is_primary: bool, now: datetime
    ) -> GoalStatus:
        """Aggregate and resolve status in one call."""
        earned = GoalEngine.earned_points(goal, events, is_primary)
        return GoalEngine.resolve_status(goal, earned, now)

    @staticmethod
    def is_terminal(status: str) -> bool:
        """Completed and expired goals accept no further actions."""
        return status in const.GOAL_TERMINAL_STATUSES

    @staticmethod
    def can_accept_points(goal: Goal, now: datetime) -> bool:
        """Goal is neither redeemed nor expired."""
        return not goal.redeemed and not GoalEngine.is_expired(goal, now)

    # =========================================================================
    # PROGRESS / REMAINING
    # =========================================================================

    @staticmethod
    def progress_from_earned(goal: Goal, earned_points: int) -> float:
        """Clamp earned/target to 0.0-1.0 (0.0 when target <= 0)."""
        return calculate_ratio(earned_points, goal.target)

    @staticmethod
    def remaining_from_earned(goal: Goal, earned_points: int) -> int:
        """Points still missing to reach the target."""
        return max(0, goal.target - earned_points)

    @staticmethod
    def progress(goal: Goal, events: Iterable[PointEvent], is_primary: bool) -> float:
        """Progress toward the target (0.0 to 1.0)."""
        earned = GoalEngine.earned_points(goal, events, is_primary)
        return GoalEngine.progress_from_earned(goal, earned)

    @staticmethod
    def remaining(goal: Goal, events: Iterable[PointEvent], is_primary: bool) -> int:
        """Points remaining to reach the target."""
        earned = GoalEngine.earned_points(goal, events, is_primary)
        return GoalEngine.remaining_from_earned(goal, earned)

    # =========================================================================
    # DEADLINES
    # =========================================================================

    @staticmethod
    def time_remaining(goal: Goal, now: datetime) -> timedelta | None:
        """Time left until the deadline (zero once passed, None without one)."""
        return dt_time_until(goal.deadline, now)

    @staticmethod
    def days_remaining(goal: Goal, now: datetime) -> int | None:
        """Whole days left until the deadline."""
        remaining = GoalEngine.time_remaining(goal, now)
        if remaining is None:
            return None
        return remaining.days

    @staticmethod
    def deadline_for_preset(preset: str, start: datetime) -> datetime | None:
        """Compute a deadline from a preset relative to `start`.

        "none" and "custom" yield None; custom deadlines are supplied directly.
        """
        interval = const.DEADLINE_PRESET_INTERVALS.get(preset)
        if interval is None:
            return None
        unit, amount = interval
        return dt_add_interval(start, unit, amount)

    # =========================================================================
    # LIFECYCLE MUTATIONS (return replacement values)
    # =========================================================================

    @staticmethod
    def redeem(
        goal: Goal, events: Iterable[PointEvent], is_primary: bool, now: datetime
    ) -> Goal:
        """Mark the goal redeemed and freeze its earned points in one step.

        Redeeming an already-redeemed goal returns it unchanged so the frozen
        value can never be overwritten.
        """
        if goal.redeemed:
            return goal
        frozen = GoalEngine.earned_points(goal, events, is_primary)
        return replace(
            goal,
            redeemed=True,
            redeemed_at=now,
            frozen_earned_points=frozen,
        )

    @staticmethod
    def soft_reset(goal: Goal, now: datetime) -> Goal:
        """Halve the earning multiplier, restart the window and clear the deadline.

        Repeated resets compound (two resets → x0.25). The window never moves
        backwards, even if `now` precedes the current window start.
        """
        window_start = goal.window_start or goal.created_at
        return replace(
            goal,
            earning_multiplier=goal.earning_multiplier * const.SOFT_RESET_FACTOR,
            window_start=max(window_start, now),
            deadline=None,
        )

    # =========================================================================
    # FULL EVALUATION
    # =========================================================================

    @staticmethod
    def evaluate(
        goal: Goal, events: Iterable[PointEvent], is_primary: bool, now: datetime
    ) -> GoalEvaluation:
        """Produce the complete derived view of one goal.

        Args:
            goal: Goal being evaluated
            events: Full event snapshot
            is_primary: Whether this goal receives untagged events
            now: Caller-supplied current time

        Returns:
            GoalEvaluation with status, earned points, progress, remaining,
            milestones and deadline info, all from one earned_points value.
        """
        earned = GoalEngine.earned_points(goal, events, is_primary)
        return {
            "goal_id": goal.internal_id,
            "status": GoalEngine.resolve_status(goal, earned, now),
            "earned_points": earned,
            "progress": GoalEngine.progress_from_earned(goal, earned),
            "remaining": GoalEngine.remaining_from_earned(goal, earned),
            "milestones": MilestoneEngine.milestones(goal.target),
            "milestones_reached": MilestoneEngine.milestones_reached(
                goal.target, earned
            ),
            "next_milestone": MilestoneEngine.next_milestone(goal.target, earned),
            "is_primary": is_primary,
            "time_remaining": GoalEngine.time_remaining(goal, now),
        }
