"""Type definitions for KidsGoals data structures.

Stored records are plain dicts (TypedDict, STATIC ANALYSIS ONLY); the engines
operate on the immutable values in models.py. Evaluation output is returned as
a TypedDict so callers can serialize it without conversion.

IMPORTANT: This file must NOT import from managers or engines to avoid
circular dependencies. Only typing machinery lives here.
"""

from datetime import timedelta
from typing import Literal, NotRequired, TypedDict

# =============================================================================
# Type Aliases (for readability)
# =============================================================================

ChildId = str  # UUID string
GoalId = str  # UUID string
EventId = str  # UUID string
ISODatetime = str  # ISO 8601 datetime string "2026-01-18T12:30:00+00:00"

# Closed set of lifecycle states (values mirror const.GOAL_STATUS_*)
GoalStatus = Literal[
    "active",
    "active_with_deadline",
    "ready_to_redeem",
    "completed",
    "expired",
]

HistoryEventType = Literal["earned", "given", "expired"]


# =============================================================================
# Stored Records
# =============================================================================


class GoalRecord(TypedDict):
    """Stored form of a goal (see models.Goal)."""

    internal_id: GoalId
    child_id: ChildId
    name: str
    icon: NotRequired[str | None]
    target: int
    created_at: ISODatetime
    window_start: ISODatetime
    deadline: ISODatetime | None
    redeemed: bool
    redeemed_at: ISODatetime | None
    earning_multiplier: float
    frozen_earned_points: int | None
    priority: int
    auto_reset_on_expire: bool


class PointEventRecord(TypedDict):
    """Stored form of a point event (see models.PointEvent)."""

    internal_id: EventId
    child_id: ChildId
    amount: int
    timestamp: ISODatetime
    goal_id: GoalId | None


class GoalHistoryEntry(TypedDict):
    """Goal lifecycle milestone kept for history display."""

    internal_id: str
    child_id: ChildId
    goal_id: GoalId
    goal_name: str
    goal_icon: str | None
    timestamp: ISODatetime
    event_type: HistoryEventType
    points_required: int
    points_earned_at_event: int


# =============================================================================
# Engine Output
# =============================================================================


class GoalEvaluation(TypedDict):
    """Derived, per-goal view produced by GoalEngine.evaluate().

    Every field is computed from a single earned_points value so status and
    progress can never disagree about readiness.
    """

    goal_id: GoalId
    status: GoalStatus
    earned_points: int
    progress: float  # 0.0 - 1.0
    remaining: int
    milestones: list[int]
    milestones_reached: list[int]
    next_milestone: int | None
    is_primary: bool
    time_remaining: timedelta | None


class GoalSelectionOption(TypedDict):
    """One row of the "which goal do these points go to" picker."""

    goal_id: GoalId
    name: str
    status: GoalStatus
    status_label: str
    time_remaining_label: str | None  # e.g. "2d 3h"; None without deadline
    is_default: bool
    can_accept_points: bool
    status_note: str | None


class GoalUpdate(TypedDict):
    """Change in a goal's earned points caused by one logged event."""

    goal_id: GoalId
    previous_earned: int
    earned: int
    milestone_crossed: int | None
    became_ready: bool
