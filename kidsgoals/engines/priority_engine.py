"""Priority Engine - Pure logic for primary goal selection.

The primary goal is never stored. It is derived at read time: among a
child's goals that are neither redeemed nor expired, the lowest `priority`
wins, with ties kept in the order the goals were supplied (stable sort).
The primary goal is the one that receives untagged point events; an untagged
event stays with the goal that was primary when it was logged.

ARCHITECTURE: Pure logic engine. All methods are static and return new
Goal values instead of mutating the ones passed in.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace
from typing import TYPE_CHECKING

from .. import const
from .goal_engine import GoalEngine

if TYPE_CHECKING:
    from datetime import datetime

    from ..models import Goal


class PriorityEngine:
    """Pure logic engine for ordering a child's open goals."""

    @staticmethod
    def order_goals(
        goals: Iterable[Goal], child_id: str, now: datetime
    ) -> list[Goal]:
        """Return the child's non-terminal goals, primary first.

        Args:
            goals: Goals in insertion/creation order (any child)
            child_id: Child whose goals are ordered
            now: Caller-supplied current time (drives expiry)

        Returns:
            Goals sorted ascending by priority; index 0 is primary.
        """
        open_goals = [
            goal
            for goal in goals
            if goal.child_id == child_id and GoalEngine.can_accept_points(goal, now)
        ]
        return sorted(open_goals, key=lambda goal: goal.priority)

    @staticmethod
    def primary_goal(
        goals: Iterable[Goal], child_id: str, now: datetime
    ) -> Goal | None:
        """Return the goal currently receiving untagged events, if any."""
        ordered = PriorityEngine.order_goals(goals, child_id, now)
        return ordered[0] if ordered else None

    @staticmethod
    def queued_goals(goals: Iterable[Goal], child_id: str, now: datetime) -> list[Goal]:
        """Return the secondary goals waiting behind the primary, in order."""
        return PriorityEngine.order_goals(goals, child_id, now)[1:]

    @staticmethod
    def is_primary(goal: Goal, goals: Iterable[Goal], now: datetime) -> bool:
        """Whether `goal` is its child's primary goal among `goals`."""
        primary = PriorityEngine.primary_goal(goals, goal.child_id, now)
        return primary is not None and primary.internal_id == goal.internal_id

    @staticmethod
    def set_primary(
        goals: Iterable[Goal], goal_id: str, child_id: str, now: datetime
    ) -> list[Goal]:
        """Make `goal_id` the primary goal for the child.

        The selected goal gets priority 0; every other open goal of that child
        moves back to max(1, priority + 1), keeping their relative order.
        Terminal goals and other children's goals are returned unchanged.

        Returns:
            Full goal list (input order) with replacement values where changed.
        """
        updated: list[Goal] = []
        for goal in goals:
            if goal.child_id != child_id or not GoalEngine.can_accept_points(goal, now):
                updated.append(goal)
            elif goal.internal_id == goal_id:
                updated.append(replace(goal, priority=const.DEFAULT_PRIMARY_PRIORITY))
            else:
                updated.append(replace(goal, priority=max(1, goal.priority + 1)))
        return updated

    @staticmethod
    def promote_next(goals: Iterable[Goal], child_id: str, now: datetime) -> Goal | None:
        """Return the next open goal re-prioritized to 0, or None.

        Used after the primary goal is redeemed so the queue advances. The
        promoted goal's window restarts at `now`: untagged points already
        frozen into the redeemed goal must not count a second time.
        """
        next_goal = PriorityEngine.primary_goal(goals, child_id, now)
        if next_goal is None:
            return None
        window_start = next_goal.window_start or next_goal.created_at
        return replace(
            next_goal,
            priority=const.DEFAULT_PRIMARY_PRIORITY,
            window_start=max(window_start, now),
        )

    @staticmethod
    def untagged_owner(
        goals: Iterable[Goal], child_id: str, timestamp: datetime
    ) -> Goal | None:
        """Return the goal an untagged event at `timestamp` belongs to.

        That is the goal that was primary at the event's time, judged with the
        current priorities. A goal that expired or was redeemed later still
        owns the untagged points logged before then, so the goal that took
        over never counts them again.
        """
        open_then = [
            goal
            for goal in goals
            if goal.child_id == child_id
            and not (
                goal.redeemed
                and (goal.redeemed_at is None or goal.redeemed_at <= timestamp)
            )
            and not (goal.deadline is not None and timestamp > goal.deadline)
        ]
        ordered = sorted(open_then, key=lambda goal: goal.priority)
        return ordered[0] if ordered else None
