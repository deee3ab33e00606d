"""KidsGoals - goal progress engine for children's reward goals.

Aggregates timestamped, signed point events into per-goal earned points,
lifecycle status, progress and milestones, and manages the goal queue
(primary vs. queued goals), redemption and soft resets.
"""

from .engines import GoalEngine, MilestoneEngine, PriorityEngine
from .exceptions import (
    GoalLimitReachedError,
    GoalNotFoundError,
    GoalStateError,
    InvalidRecordError,
    KidsGoalsError,
)
from .managers import GoalManager
from .models import Goal, PointEvent
from .store import KidsGoalsStore

__all__ = [
    "Goal",
    "GoalEngine",
    "GoalLimitReachedError",
    "GoalManager",
    "GoalNotFoundError",
    "GoalStateError",
    "InvalidRecordError",
    "KidsGoalsError",
    "KidsGoalsStore",
    "MilestoneEngine",
    "PointEvent",
    "PriorityEngine",
]
