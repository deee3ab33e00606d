"""Exceptions raised by the KidsGoals manager layer.

Engines never raise for normal edge cases; these errors describe workflow
requests a manager refuses to carry out.
"""

from __future__ import annotations


class KidsGoalsError(Exception):
    """Base class for all KidsGoals errors."""


class GoalNotFoundError(KidsGoalsError):
    """Raised when a goal id is not present in the store.

    Attributes:
        goal_id: The id that was looked up
    """

    def __init__(self, goal_id: str) -> None:
        """Initialize GoalNotFoundError."""
        self.goal_id = goal_id
        super().__init__(f"Goal not found: {goal_id}")


class GoalStateError(KidsGoalsError):
    """Raised when an operation is not allowed in the goal's current state.

    Attributes:
        goal_id: The goal being acted upon
        status: Lifecycle status at the time of the request
        operation: Name of the rejected operation (e.g. "redeem")
    """

    def __init__(self, goal_id: str, status: str, operation: str) -> None:
        """Initialize GoalStateError."""
        self.goal_id = goal_id
        self.status = status
        self.operation = operation
        super().__init__(
            f"Cannot {operation} goal {goal_id}: current status is {status}"
        )


class GoalLimitReachedError(KidsGoalsError):
    """Raised when a child already has the maximum number of open goals.

    Attributes:
        child_id: The child the goal was requested for
        limit: Configured maximum of non-terminal goals
    """

    def __init__(self, child_id: str, limit: int) -> None:
        """Initialize GoalLimitReachedError."""
        self.child_id = child_id
        self.limit = limit
        super().__init__(
            f"Child {child_id} already has the maximum of {limit} open goals"
        )


class InvalidRecordError(KidsGoalsError):
    """Raised when a stored record fails schema validation.

    Attributes:
        record_type: "goal", "event" or "options"
        reason: Human-readable validation message
    """

    def __init__(self, record_type: str, reason: str) -> None:
        """Initialize InvalidRecordError."""
        self.record_type = record_type
        self.reason = reason
        super().__init__(f"Invalid {record_type} record: {reason}")
