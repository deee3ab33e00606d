"""Goal Manager - Goal lifecycle workflows over the snapshot store.

This manager handles the complete goal lifecycle:
- Add / update / delete goals (with an optional cap on open goals per child)
- Log point events and report per-goal progress changes
- Redeem: freeze earned points, record history, advance the goal queue
- Soft reset: forgive a missed deadline at a permanently halved earning rate
- Expiry sweep: record each expiration once, auto soft-reset when configured

ARCHITECTURE:
- GoalEngine / PriorityEngine / MilestoneEngine compute; this manager decides
- Every mutation is a whole-record replacement taken under the store lock
- The wall clock is read here (when `now` is omitted), never in the engines

Event Flow:
    log_event() -> emit(POINTS_LOGGED) [+ MILESTONE_REACHED | GOAL_EARNED]
    redeem_goal() -> emit(GOAL_REDEEMED) [+ PRIMARY_CHANGED]
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Any

import voluptuous as vol

from .. import const
from ..engines import GoalEngine, MilestoneEngine, PriorityEngine
from ..exceptions import (
    GoalLimitReachedError,
    GoalNotFoundError,
    GoalStateError,
    InvalidRecordError,
)
from ..models import Goal, PointEvent, new_id
from ..schemas import OPTIONS_SCHEMA
from ..store import KidsGoalsStore
from ..utils import dt_utils
from .base_manager import BaseManager

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from ..type_defs import (
        GoalEvaluation,
        GoalHistoryEntry,
        GoalSelectionOption,
        GoalStatus,
        GoalUpdate,
    )


class GoalManager(BaseManager):
    """Manager for goal workflows.

    Responsibilities:
    - Validate and store goals and point events
    - Apply redeem / soft reset / re-prioritization as atomic replacements
    - Keep goal history (earned, given, expired)
    - Emit events for celebrations and notifications

    NOT responsible for:
    - Any progress or status arithmetic (delegated to the engines)
    - Durable persistence (the store can be exported with as_records())
    """

    def __init__(
        self,
        store: KidsGoalsStore | None = None,
        options: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the GoalManager.

        Args:
            store: Snapshot store (a fresh empty store when omitted)
            options: Manager options, validated against OPTIONS_SCHEMA

        Raises:
            InvalidRecordError: If options fail validation
        """
        super().__init__(store or KidsGoalsStore())
        try:
            self.options: dict[str, Any] = OPTIONS_SCHEMA(dict(options or {}))
        except vol.Invalid as err:
            raise InvalidRecordError("options", str(err)) from err
        dt_utils.set_default_timezone(self.options[const.CONF_TIME_ZONE])
        const.LOGGER.debug(
            "GoalManager initialized for instance %s with options %s",
            self.instance_id,
            self.options,
        )

    # =========================================================================
    # Helpers
    # =========================================================================

    @staticmethod
    def _now(now: datetime | None) -> datetime:
        return dt_utils.as_utc(now) if now is not None else dt_utils.dt_now_utc()

    def _require_goal(self, goal_id: str) -> Goal:
        goal = self.store.get_goal(goal_id)
        if goal is None:
            raise GoalNotFoundError(goal_id)
        return goal

    @staticmethod
    def _owns_untagged(goal: Goal, goals: Sequence[Goal], event: PointEvent) -> bool:
        if event.child_id != goal.child_id:
            return False
        owner = PriorityEngine.untagged_owner(goals, goal.child_id, event.timestamp)
        return owner is not None and owner.internal_id == goal.internal_id

    @classmethod
    def _owned_events(
        cls, goal: Goal, goals: Sequence[Goal], events: Iterable[PointEvent]
    ) -> list[PointEvent]:
        """Events that may count toward `goal`.

        Tagged events pass through; the engine matches their goal_id. An
        untagged event is kept only if `goal` was primary when it was logged,
        so an expired goal keeps the points it collected and the goal that
        took over does not count them again.
        """
        return [
            event
            for event in events
            if event.goal_id is not None or cls._owns_untagged(goal, goals, event)
        ]

    def _earned(
        self, goal: Goal, goals: Sequence[Goal], events: Iterable[PointEvent]
    ) -> int:
        return GoalEngine.earned_points(goal, self._owned_events(goal, goals, events), True)

    def _status(
        self,
        goal: Goal,
        goals: Sequence[Goal],
        events: Iterable[PointEvent],
        now: datetime,
    ) -> GoalStatus:
        return GoalEngine.resolve_status(goal, self._earned(goal, goals, events), now)

    def _evaluate(
        self,
        goal: Goal,
        goals: Sequence[Goal],
        events: Iterable[PointEvent],
        now: datetime,
    ) -> GoalEvaluation:
        owned = self._owned_events(goal, goals, events)
        result = GoalEngine.evaluate(goal, owned, True, now)
        result["is_primary"] = PriorityEngine.is_primary(goal, goals, now)
        return result

    def _log_history(
        self, goal: Goal, event_type: str, points_earned: int, now: datetime
    ) -> GoalHistoryEntry:
        entry: GoalHistoryEntry = {
            const.DATA_HISTORY_ID: new_id(),
            const.DATA_HISTORY_CHILD_ID: goal.child_id,
            const.DATA_HISTORY_GOAL_ID: goal.internal_id,
            const.DATA_HISTORY_GOAL_NAME: goal.name,
            const.DATA_HISTORY_GOAL_ICON: goal.icon,
            const.DATA_HISTORY_TIMESTAMP: dt_utils.dt_to_iso(now),
            const.DATA_HISTORY_EVENT_TYPE: event_type,
            const.DATA_HISTORY_POINTS_REQUIRED: goal.target,
            const.DATA_HISTORY_POINTS_EARNED: points_earned,
        }  # type: ignore[typeddict-item]
        self.store.append_history(entry)
        const.LOGGER.debug(
            "History '%s' logged for goal %s (%s/%s points)",
            event_type,
            goal.internal_id,
            points_earned,
            goal.target,
        )
        return entry

    def _has_history(self, goal_id: str, event_type: str) -> bool:
        return any(
            entry[const.DATA_HISTORY_GOAL_ID] == goal_id
            and entry[const.DATA_HISTORY_EVENT_TYPE] == event_type
            for entry in self.store.history()
        )

    @staticmethod
    def _time_left_label(time_left: timedelta | None) -> str | None:
        if time_left is None:
            return None
        if time_left <= timedelta():
            return const.GOAL_STATUS_NOTE_EXPIRED
        # Under a minute still reads as time left, not "0"
        return dt_utils.dt_format_duration(max(time_left, timedelta(minutes=1)))

    # =========================================================================
    # Goal CRUD
    # =========================================================================

    def add_goal(
        self,
        child_id: str,
        target: int,
        *,
        name: str = "",
        icon: str | None = None,
        deadline: datetime | None = None,
        deadline_preset: str | None = None,
        priority: int | None = None,
        auto_reset_on_expire: bool = False,
        now: datetime | None = None,
    ) -> Goal:
        """Create a goal for a child.

        Args:
            child_id: Owning child
            target: Points required
            name: Display name
            icon: Optional icon name
            deadline: Explicit deadline (wins over deadline_preset)
            deadline_preset: One of const.DEADLINE_PRESETS
            priority: Explicit priority; defaults to the back of the queue
            auto_reset_on_expire: Soft-reset automatically once expired
            now: Creation time override

        Returns:
            The stored Goal

        Raises:
            GoalLimitReachedError: If max_active_goals open goals already exist
            InvalidRecordError: If the preset is unknown or the record fails validation
        """
        now = self._now(now)
        if deadline_preset is not None and deadline_preset not in const.DEADLINE_PRESETS:
            raise InvalidRecordError("goal", f"unknown deadline preset: {deadline_preset}")

        with self.store.lock:
            open_goals = PriorityEngine.order_goals(self.store.goals(), child_id, now)

            limit = self.options[const.CONF_MAX_ACTIVE_GOALS]
            if limit is not None and len(open_goals) >= limit:
                raise GoalLimitReachedError(child_id, limit)

            if priority is None:
                priority = (
                    max(g.priority for g in open_goals) + 1
                    if open_goals
                    else const.DEFAULT_PRIMARY_PRIORITY
                )
            if deadline is None and deadline_preset:
                deadline = GoalEngine.deadline_for_preset(deadline_preset, now)

            goal = Goal.from_dict(
                {
                    const.DATA_GOAL_ID: new_id(),
                    const.DATA_GOAL_CHILD_ID: child_id,
                    const.DATA_GOAL_NAME: name,
                    const.DATA_GOAL_ICON: icon,
                    const.DATA_GOAL_TARGET: target,
                    const.DATA_GOAL_CREATED_AT: now,
                    const.DATA_GOAL_DEADLINE: deadline,
                    const.DATA_GOAL_PRIORITY: priority,
                    const.DATA_GOAL_AUTO_RESET_ON_EXPIRE: auto_reset_on_expire,
                }
            )
            self.store.put_goal(goal)

        const.LOGGER.info(
            "Goal '%s' (%s) added for child %s: target=%s priority=%s deadline=%s",
            goal.name,
            goal.internal_id,
            child_id,
            target,
            goal.priority,
            goal.deadline,
        )
        self.emit(
            const.SIGNAL_SUFFIX_GOAL_ADDED,
            goal_id=goal.internal_id,
            child_id=child_id,
        )
        return goal

    def update_goal(self, goal: Goal) -> Goal:
        """Replace a stored goal with an edited value.

        Raises:
            GoalNotFoundError: If the goal does not exist
            GoalStateError: If the edit would change a redeemed goal's frozen points
            InvalidRecordError: If the edited record fails validation
        """
        with self.store.lock:
            existing = self._require_goal(goal.internal_id)
            if existing.redeemed and (
                not goal.redeemed
                or goal.frozen_earned_points != existing.frozen_earned_points
            ):
                raise GoalStateError(
                    goal.internal_id, const.GOAL_STATUS_COMPLETED, "update"
                )
            validated = Goal.from_dict(goal.to_dict())
            self.store.put_goal(validated)

        const.LOGGER.debug("Goal %s updated", goal.internal_id)
        self.emit(
            const.SIGNAL_SUFFIX_GOAL_UPDATED,
            goal_id=goal.internal_id,
            child_id=goal.child_id,
        )
        return validated

    def delete_goal(self, goal_id: str) -> None:
        """Delete a goal; its history entries are kept.

        Raises:
            GoalNotFoundError: If the goal does not exist
        """
        removed = self.store.remove_goal(goal_id)
        if removed is None:
            raise GoalNotFoundError(goal_id)
        const.LOGGER.info("Goal %s deleted for child %s", goal_id, removed.child_id)
        self.emit(
            const.SIGNAL_SUFFIX_GOAL_DELETED,
            goal_id=goal_id,
            child_id=removed.child_id,
        )

    # =========================================================================
    # Point Events
    # =========================================================================

    def log_event(
        self,
        child_id: str,
        amount: int,
        *,
        goal_id: str | None = None,
        timestamp: datetime | None = None,
        now: datetime | None = None,
    ) -> list[GoalUpdate]:
        """Append a point event and report which goals it moved.

        Args:
            child_id: Child receiving the points
            amount: Signed points (debits never reduce goal progress)
            goal_id: Explicit goal assignment, or None for the primary goal
            timestamp: Event time (defaults to now)
            now: Evaluation time override

        Returns:
            One GoalUpdate per goal whose earned points changed.

        Raises:
            GoalNotFoundError: If goal_id names an unknown goal
            InvalidRecordError: If goal_id names another child's goal
        """
        now = self._now(now)
        updates: list[GoalUpdate] = []
        earned_goals: list[tuple[Goal, int]] = []

        with self.store.lock:
            if goal_id is not None:
                tagged_goal = self._require_goal(goal_id)
                if tagged_goal.child_id != child_id:
                    raise InvalidRecordError(
                        "event",
                        f"goal {goal_id} belongs to child {tagged_goal.child_id}, "
                        f"not {child_id}",
                    )

            goals = self.store.goals_for_child(child_id)
            events_before = self.store.events()
            event = PointEvent.from_dict(
                {
                    const.DATA_EVENT_ID: new_id(),
                    const.DATA_EVENT_CHILD_ID: child_id,
                    const.DATA_EVENT_AMOUNT: amount,
                    const.DATA_EVENT_TIMESTAMP: timestamp or now,
                    const.DATA_EVENT_GOAL_ID: goal_id,
                }
            )
            self.store.append_event(event)
            events_after = (*events_before, event)

            for goal in goals:
                previous = self._earned(goal, goals, events_before)
                current = self._earned(goal, goals, events_after)
                if current == previous:
                    continue

                status = GoalEngine.resolve_status(goal, current, now)
                became_ready = (
                    previous < goal.target <= current
                    and status == const.GOAL_STATUS_READY_TO_REDEEM
                )
                update: GoalUpdate = {
                    "goal_id": goal.internal_id,
                    "previous_earned": previous,
                    "earned": current,
                    "milestone_crossed": MilestoneEngine.just_crossed(
                        goal.target, previous, current
                    ),
                    "became_ready": became_ready,
                }
                updates.append(update)
                if became_ready:
                    self._log_history(goal, const.HISTORY_EVENT_EARNED, current, now)
                    earned_goals.append((goal, current))

        const.LOGGER.debug(
            "Logged %s points for child %s (goal=%s); %d goal(s) changed",
            amount,
            child_id,
            goal_id,
            len(updates),
        )
        self.emit(
            const.SIGNAL_SUFFIX_POINTS_LOGGED,
            event_id=event.internal_id,
            child_id=child_id,
            amount=amount,
            goal_id=goal_id,
        )
        for update in updates:
            # Reaching the target is celebrated instead of the milestone
            if update["milestone_crossed"] is not None and not update["became_ready"]:
                self.emit(
                    const.SIGNAL_SUFFIX_MILESTONE_REACHED,
                    goal_id=update["goal_id"],
                    child_id=child_id,
                    milestone=update["milestone_crossed"],
                )
        for goal, earned in earned_goals:
            const.LOGGER.info(
                "Goal '%s' (%s) reached its target of %s",
                goal.name,
                goal.internal_id,
                goal.target,
            )
            self.emit(
                const.SIGNAL_SUFFIX_GOAL_EARNED,
                goal_id=goal.internal_id,
                child_id=child_id,
                earned_points=earned,
            )
        return updates

    # =========================================================================
    # Lifecycle Mutations
    # =========================================================================

    def redeem_goal(self, goal_id: str, *, now: datetime | None = None) -> Goal:
        """Give the reward: freeze earned points and advance the queue.

        Returns:
            The redeemed (frozen) Goal

        Raises:
            GoalNotFoundError: If the goal does not exist
            GoalStateError: If the goal is already completed or has expired
        """
        now = self._now(now)
        promoted: Goal | None = None

        with self.store.lock:
            goal = self._require_goal(goal_id)
            goals = self.store.goals_for_child(goal.child_id)
            events = self.store.events()
            was_primary = PriorityEngine.is_primary(goal, goals, now)
            owned = self._owned_events(goal, goals, events)
            status = GoalEngine.resolve_status(
                goal, GoalEngine.earned_points(goal, owned, True), now
            )
            if GoalEngine.is_terminal(status):
                raise GoalStateError(goal_id, status, "redeem")

            redeemed = GoalEngine.redeem(goal, owned, True, now)
            self.store.put_goal(redeemed)
            self._log_history(
                redeemed,
                const.HISTORY_EVENT_GIVEN,
                redeemed.frozen_earned_points or 0,
                now,
            )

            remaining = PriorityEngine.order_goals(
                self.store.goals_for_child(goal.child_id), goal.child_id, now
            )
            if was_primary and self.options[const.CONF_AUTO_PROMOTE_ON_REDEEM]:
                promoted = PriorityEngine.promote_next(remaining, goal.child_id, now)
                if promoted is not None:
                    self.store.put_goal(promoted)

        const.LOGGER.info(
            "Goal '%s' (%s) redeemed with %s points frozen",
            redeemed.name,
            goal_id,
            redeemed.frozen_earned_points,
        )
        self.emit(
            const.SIGNAL_SUFFIX_GOAL_REDEEMED,
            goal_id=goal_id,
            child_id=redeemed.child_id,
            earned_points=redeemed.frozen_earned_points,
            has_next_goal=bool(remaining),
        )
        if promoted is not None:
            self.emit(
                const.SIGNAL_SUFFIX_PRIMARY_CHANGED,
                goal_id=promoted.internal_id,
                child_id=promoted.child_id,
            )
        return redeemed

    def soft_reset_goal(self, goal_id: str, *, now: datetime | None = None) -> Goal:
        """Forgive a missed goal at a permanently halved earning rate.

        Raises:
            GoalNotFoundError: If the goal does not exist
            GoalStateError: If the goal has already been redeemed
        """
        now = self._now(now)
        with self.store.lock:
            goal = self._require_goal(goal_id)
            if goal.redeemed:
                raise GoalStateError(goal_id, const.GOAL_STATUS_COMPLETED, "soft reset")
            reset = GoalEngine.soft_reset(goal, now)
            self.store.put_goal(reset)

        const.LOGGER.info(
            "Goal %s soft reset: multiplier %s -> %s, window restarts %s",
            goal_id,
            goal.earning_multiplier,
            reset.earning_multiplier,
            reset.window_start,
        )
        self.emit(
            const.SIGNAL_SUFFIX_GOAL_SOFT_RESET,
            goal_id=goal_id,
            child_id=reset.child_id,
            earning_multiplier=reset.earning_multiplier,
        )
        return reset

    def set_goal_as_primary(self, goal_id: str, *, now: datetime | None = None) -> Goal:
        """Move a goal to the front of its child's queue.

        Raises:
            GoalNotFoundError: If the goal does not exist
            GoalStateError: If the goal is redeemed or expired
        """
        now = self._now(now)
        with self.store.lock:
            goal = self._require_goal(goal_id)
            if not GoalEngine.can_accept_points(goal, now):
                status = (
                    const.GOAL_STATUS_COMPLETED
                    if goal.redeemed
                    else const.GOAL_STATUS_EXPIRED
                )
                raise GoalStateError(goal_id, status, "prioritize")

            goals = self.store.goals_for_child(goal.child_id)
            updated = PriorityEngine.set_primary(goals, goal_id, goal.child_id, now)
            self.store.put_goals(updated)
            primary = self._require_goal(goal_id)

        const.LOGGER.debug("Goal %s set as primary for child %s", goal_id, goal.child_id)
        self.emit(
            const.SIGNAL_SUFFIX_PRIMARY_CHANGED,
            goal_id=goal_id,
            child_id=goal.child_id,
        )
        return primary

    def check_expired_goals(self, *, now: datetime | None = None) -> list[str]:
        """Record newly expired goals and apply auto soft reset.

        Each expiration is logged to history exactly once. Goals flagged with
        auto_reset_on_expire are soft-reset afterwards, which clears their
        deadline and returns them to the queue.

        Returns:
            Ids of goals whose expiration was recorded by this call.
        """
        now = self._now(now)
        newly_expired: list[Goal] = []

        with self.store.lock:
            events = self.store.events()
            all_goals = self.store.goals()
            for goal in all_goals:
                if not GoalEngine.is_expired(goal, now):
                    continue

                if not self._has_history(goal.internal_id, const.HISTORY_EVENT_EXPIRED):
                    siblings = [g for g in all_goals if g.child_id == goal.child_id]
                    earned = self._earned(goal, siblings, events)
                    self._log_history(goal, const.HISTORY_EVENT_EXPIRED, earned, now)
                    newly_expired.append(goal)

                if goal.auto_reset_on_expire:
                    self.store.put_goal(GoalEngine.soft_reset(goal, now))
                    const.LOGGER.info("Goal %s auto soft reset after expiry", goal.internal_id)

        for goal in newly_expired:
            const.LOGGER.info(
                "Goal '%s' (%s) expired at %s", goal.name, goal.internal_id, goal.deadline
            )
            self.emit(
                const.SIGNAL_SUFFIX_GOAL_EXPIRED,
                goal_id=goal.internal_id,
                child_id=goal.child_id,
                auto_reset=goal.auto_reset_on_expire,
            )
        return [goal.internal_id for goal in newly_expired]

    # =========================================================================
    # Queries
    # =========================================================================

    def evaluate_goal(self, goal_id: str, *, now: datetime | None = None) -> GoalEvaluation:
        """Evaluate one goal against the current snapshot.

        Raises:
            GoalNotFoundError: If the goal does not exist
        """
        now = self._now(now)
        goal = self._require_goal(goal_id)
        goals = self.store.goals_for_child(goal.child_id)
        return self._evaluate(goal, goals, self.store.events(), now)

    def evaluate_child(
        self, child_id: str, *, now: datetime | None = None
    ) -> list[GoalEvaluation]:
        """Evaluate all of a child's goals.

        Open goals come first in priority order (primary first), followed by
        completed and expired goals in creation order.
        """
        now = self._now(now)
        goals = self.store.goals_for_child(child_id)
        events = self.store.events()
        ordered = PriorityEngine.order_goals(goals, child_id, now)
        open_ids = {goal.internal_id for goal in ordered}
        ordered.extend(goal for goal in goals if goal.internal_id not in open_ids)
        return [self._evaluate(goal, goals, events, now) for goal in ordered]

    def primary_goal(self, child_id: str, *, now: datetime | None = None) -> Goal | None:
        """Return the child's primary goal, if any."""
        now = self._now(now)
        return PriorityEngine.primary_goal(self.store.goals_for_child(child_id), child_id, now)

    def default_point_target(
        self, child_id: str, *, now: datetime | None = None
    ) -> Goal | None:
        """Return the goal untagged points should go to by default.

        That is the primary goal, unless it has already reached its target.
        """
        now = self._now(now)
        primary = self.primary_goal(child_id, now=now)
        if primary is None:
            return None
        goals = self.store.goals_for_child(child_id)
        status = self._status(primary, goals, self.store.events(), now)
        if status == const.GOAL_STATUS_READY_TO_REDEEM or GoalEngine.is_terminal(status):
            return None
        return primary

    def goal_selection_options(
        self, child_id: str, *, now: datetime | None = None
    ) -> list[GoalSelectionOption]:
        """List the child's unredeemed goals for a "points go to" picker."""
        now = self._now(now)
        goals = self.store.goals_for_child(child_id)
        events = self.store.events()
        default = self.default_point_target(child_id, now=now)
        candidates = sorted(
            (goal for goal in goals if not goal.redeemed),
            key=lambda goal: goal.priority,
        )

        options: list[GoalSelectionOption] = []
        for goal in candidates:
            status = self._status(goal, goals, events, now)
            note = {
                const.GOAL_STATUS_READY_TO_REDEEM: const.GOAL_STATUS_NOTE_READY,
                const.GOAL_STATUS_EXPIRED: const.GOAL_STATUS_NOTE_EXPIRED,
                const.GOAL_STATUS_COMPLETED: const.GOAL_STATUS_NOTE_COMPLETED,
            }.get(status)
            time_left = GoalEngine.time_remaining(goal, now)
            options.append(
                {
                    "goal_id": goal.internal_id,
                    "name": goal.name,
                    "status": status,
                    "status_label": const.GOAL_STATUS_DISPLAY_NAMES[status],
                    "time_remaining_label": self._time_left_label(time_left),
                    "is_default": default is not None
                    and default.internal_id == goal.internal_id,
                    "can_accept_points": GoalEngine.can_accept_points(goal, now)
                    and status != const.GOAL_STATUS_READY_TO_REDEEM,
                    "status_note": note,
                }
            )
        return options

    def goals_completed(self, child_id: str) -> int:
        """Number of goals the child has redeemed."""
        return sum(1 for goal in self.store.goals_for_child(child_id) if goal.redeemed)

    def history(
        self,
        child_id: str | None = None,
        *,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[GoalHistoryEntry]:
        """Return goal history entries, newest first.

        Args:
            child_id: Only entries for this child (all children when None)
            start: Inclusive lower time bound
            end: Inclusive upper time bound
        """
        start_utc = dt_utils.as_utc(start) if start is not None else None
        end_utc = dt_utils.as_utc(end) if end is not None else None

        def _matches(entry: GoalHistoryEntry) -> bool:
            if child_id is not None and entry[const.DATA_HISTORY_CHILD_ID] != child_id:
                return False
            timestamp = dt_utils.dt_to_utc(entry[const.DATA_HISTORY_TIMESTAMP])
            if timestamp is None:
                const.LOGGER.warning(
                    "Skipping history entry %s with unreadable timestamp",
                    entry.get(const.DATA_HISTORY_ID),
                )
                return False
            if start_utc is not None and timestamp < start_utc:
                return False
            return end_utc is None or timestamp <= end_utc

        # Reverse first so entries sharing a timestamp also come out newest first
        matching = [entry for entry in reversed(self.store.history()) if _matches(entry)]
        return sorted(
            matching,
            key=lambda entry: entry[const.DATA_HISTORY_TIMESTAMP],
            reverse=True,
        )
