"""Immutable value types for goals and point events.

Goals are never mutated in place. Redemption, soft reset and re-prioritization
all produce a replacement value (dataclasses.replace) that the owning store
swaps in as a whole record, so every reader sees a consistent goal.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Any
import uuid

import voluptuous as vol

from . import const
from .exceptions import InvalidRecordError
from .schemas import GOAL_SCHEMA, POINT_EVENT_SCHEMA
from .utils.dt_utils import dt_to_iso

if TYPE_CHECKING:
    from .type_defs import GoalRecord, PointEventRecord


def new_id() -> str:
    """Return a fresh internal id."""
    return str(uuid.uuid4())


@dataclass(frozen=True)
class PointEvent:
    """A single signed point entry for a child.

    Attributes:
        internal_id: Event id
        child_id: Child the points belong to
        amount: Signed points; only positive amounts count toward goals
        timestamp: When the points were logged (aware datetime)
        goal_id: Explicit goal assignment, or None for "primary goal"
    """

    internal_id: str
    child_id: str
    amount: int
    timestamp: datetime
    goal_id: str | None = None

    @classmethod
    def from_dict(cls, record: dict[str, Any]) -> PointEvent:
        """Build an event from a stored record, validating it first."""
        try:
            data = POINT_EVENT_SCHEMA(dict(record))
        except vol.Invalid as err:
            raise InvalidRecordError("event", str(err)) from err
        return cls(
            internal_id=data[const.DATA_EVENT_ID],
            child_id=data[const.DATA_EVENT_CHILD_ID],
            amount=data[const.DATA_EVENT_AMOUNT],
            timestamp=data[const.DATA_EVENT_TIMESTAMP],
            goal_id=data[const.DATA_EVENT_GOAL_ID],
        )

    def to_dict(self) -> PointEventRecord:
        """Serialize to the stored record shape."""
        return {
            const.DATA_EVENT_ID: self.internal_id,
            const.DATA_EVENT_CHILD_ID: self.child_id,
            const.DATA_EVENT_AMOUNT: self.amount,
            const.DATA_EVENT_TIMESTAMP: dt_to_iso(self.timestamp),
            const.DATA_EVENT_GOAL_ID: self.goal_id,
        }  # type: ignore[return-value]


@dataclass(frozen=True)
class Goal:
    """A reward goal a child accumulates points toward.

    Attributes:
        internal_id: Goal id
        child_id: Owning child
        target: Points required; a target <= 0 can never be satisfied
        created_at: Creation time
        window_start: Earliest event timestamp that counts (defaults to created_at)
        deadline: Optional inclusive end of the window
        redeemed: True once the reward has been given to the child
        redeemed_at: When the goal was redeemed
        earning_multiplier: Discount applied to earned points, in (0, 1]
        frozen_earned_points: Earned points captured at redemption
        priority: Lower sorts first when choosing the primary goal
        name: Display name
        icon: Optional icon name
        auto_reset_on_expire: Soft-reset automatically when the deadline passes
    """

    internal_id: str
    child_id: str
    target: int
    created_at: datetime
    window_start: datetime | None = None
    deadline: datetime | None = None
    redeemed: bool = False
    redeemed_at: datetime | None = None
    earning_multiplier: float = const.DEFAULT_EARNING_MULTIPLIER
    frozen_earned_points: int | None = None
    priority: int = const.DEFAULT_GOAL_PRIORITY
    name: str = ""
    icon: str | None = None
    auto_reset_on_expire: bool = False

    def __post_init__(self) -> None:
        """Default the window to the creation time."""
        if self.window_start is None:
            object.__setattr__(self, "window_start", self.created_at)

    @property
    def has_deadline(self) -> bool:
        """Whether this goal is time-boxed."""
        return self.deadline is not None

    @classmethod
    def from_dict(cls, record: dict[str, Any]) -> Goal:
        """Build a goal from a stored record, validating it first."""
        try:
            data = GOAL_SCHEMA(dict(record))
        except vol.Invalid as err:
            raise InvalidRecordError("goal", str(err)) from err
        return cls(
            internal_id=data[const.DATA_GOAL_ID],
            child_id=data[const.DATA_GOAL_CHILD_ID],
            name=data[const.DATA_GOAL_NAME],
            icon=data[const.DATA_GOAL_ICON],
            target=data[const.DATA_GOAL_TARGET],
            created_at=data[const.DATA_GOAL_CREATED_AT],
            window_start=data[const.DATA_GOAL_WINDOW_START],
            deadline=data[const.DATA_GOAL_DEADLINE],
            redeemed=data[const.DATA_GOAL_REDEEMED],
            redeemed_at=data[const.DATA_GOAL_REDEEMED_AT],
            earning_multiplier=data[const.DATA_GOAL_EARNING_MULTIPLIER],
            frozen_earned_points=data[const.DATA_GOAL_FROZEN_EARNED_POINTS],
            priority=data[const.DATA_GOAL_PRIORITY],
            auto_reset_on_expire=data[const.DATA_GOAL_AUTO_RESET_ON_EXPIRE],
        )

    def to_dict(self) -> GoalRecord:
        """Serialize to the stored record shape."""
        return {
            const.DATA_GOAL_ID: self.internal_id,
            const.DATA_GOAL_CHILD_ID: self.child_id,
            const.DATA_GOAL_NAME: self.name,
            const.DATA_GOAL_ICON: self.icon,
            const.DATA_GOAL_TARGET: self.target,
            const.DATA_GOAL_CREATED_AT: dt_to_iso(self.created_at),
            const.DATA_GOAL_WINDOW_START: dt_to_iso(self.window_start),
            const.DATA_GOAL_DEADLINE: dt_to_iso(self.deadline),
            const.DATA_GOAL_REDEEMED: self.redeemed,
            const.DATA_GOAL_REDEEMED_AT: dt_to_iso(self.redeemed_at),
            const.DATA_GOAL_EARNING_MULTIPLIER: self.earning_multiplier,
            const.DATA_GOAL_FROZEN_EARNED_POINTS: self.frozen_earned_points,
            const.DATA_GOAL_PRIORITY: self.priority,
            const.DATA_GOAL_AUTO_RESET_ON_EXPIRE: self.auto_reset_on_expire,
        }  # type: ignore[return-value]
