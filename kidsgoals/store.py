# File: store.py
"""In-memory snapshot store for KidsGoals data.

Holds goals, point events and goal history keyed by internal_id. Every write
is a whole-record replacement taken under a lock and bumps a version counter,
so a reader always sees complete records and caches can key on
(goals_version, events_version).

Durable persistence is a separate concern: callers can seed the store from
stored records with load() and export them again with as_records().
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
import threading
from typing import TYPE_CHECKING, Any

from . import const
from .models import Goal, PointEvent

if TYPE_CHECKING:
    from .type_defs import GoalHistoryEntry


class KidsGoalsStore:
    """Thread-safe in-memory store for goals, events and goal history.

    Utilizes internal_id as the primary key for goals and events. Insertion
    order is preserved and is the tie-breaker for equal goal priorities.
    """

    def __init__(self) -> None:
        """Initialize an empty store."""
        self._lock = threading.RLock()
        self._data: dict[str, Any] = self.get_default_structure()

    @staticmethod
    def get_default_structure() -> dict[str, Any]:
        """Return canonical empty data structure."""
        return {
            const.DATA_META: {
                const.DATA_META_GOALS_VERSION: 0,
                const.DATA_META_EVENTS_VERSION: 0,
            },
            const.DATA_GOALS: {},
            const.DATA_EVENTS: {},
            const.DATA_HISTORY: [],
        }

    @property
    def lock(self) -> threading.RLock:
        """Lock held by managers across read-modify-write workflows."""
        return self._lock

    # -------------------------------------------------------------------------------------
    # Loading / exporting
    # -------------------------------------------------------------------------------------

    def load(self, records: Mapping[str, Any]) -> None:
        """Replace store contents from stored records.

        Args:
            records: Mapping with optional "goals", "events" and "history"
                     buckets; goal/event buckets may be lists or dicts of
                     records. Records are validated on the way in.
        """
        goals = [Goal.from_dict(r) for r in _bucket_values(records, const.DATA_GOALS)]
        events = [
            PointEvent.from_dict(r) for r in _bucket_values(records, const.DATA_EVENTS)
        ]
        history = list(records.get(const.DATA_HISTORY, []))

        with self._lock:
            self._data = self.get_default_structure()
            self._data[const.DATA_GOALS] = {g.internal_id: g for g in goals}
            self._data[const.DATA_EVENTS] = {e.internal_id: e for e in events}
            self._data[const.DATA_HISTORY] = history
        const.LOGGER.debug(
            "KidsGoalsStore: loaded %d goals, %d events, %d history entries",
            len(goals),
            len(events),
            len(history),
        )

    def as_records(self) -> dict[str, Any]:
        """Export store contents as serializable records."""
        with self._lock:
            return {
                const.DATA_GOALS: {
                    goal_id: goal.to_dict()
                    for goal_id, goal in self._data[const.DATA_GOALS].items()
                },
                const.DATA_EVENTS: {
                    event_id: event.to_dict()
                    for event_id, event in self._data[const.DATA_EVENTS].items()
                },
                const.DATA_HISTORY: list(self._data[const.DATA_HISTORY]),
            }

    # -------------------------------------------------------------------------------------
    # Versions
    # -------------------------------------------------------------------------------------

    @property
    def goals_version(self) -> int:
        """Counter bumped on every goal write."""
        return self._data[const.DATA_META][const.DATA_META_GOALS_VERSION]

    @property
    def events_version(self) -> int:
        """Counter bumped on every event append."""
        return self._data[const.DATA_META][const.DATA_META_EVENTS_VERSION]

    def _bump(self, key: str) -> None:
        self._data[const.DATA_META][key] += 1

    # -------------------------------------------------------------------------------------
    # Goals
    # -------------------------------------------------------------------------------------

    def goals(self) -> list[Goal]:
        """Snapshot of all goals in insertion order."""
        with self._lock:
            return list(self._data[const.DATA_GOALS].values())

    def goals_for_child(self, child_id: str) -> list[Goal]:
        """Snapshot of one child's goals in insertion order."""
        return [goal for goal in self.goals() if goal.child_id == child_id]

    def get_goal(self, goal_id: str) -> Goal | None:
        """Return a goal by id, or None."""
        with self._lock:
            return self._data[const.DATA_GOALS].get(goal_id)

    def put_goal(self, goal: Goal) -> None:
        """Insert or replace a goal record (replacement keeps its position)."""
        with self._lock:
            self._data[const.DATA_GOALS][goal.internal_id] = goal
            self._bump(const.DATA_META_GOALS_VERSION)

    def put_goals(self, goals: Iterable[Goal]) -> None:
        """Replace several goal records as one write."""
        with self._lock:
            for goal in goals:
                self._data[const.DATA_GOALS][goal.internal_id] = goal
            self._bump(const.DATA_META_GOALS_VERSION)

    def remove_goal(self, goal_id: str) -> Goal | None:
        """Delete a goal record; returns the removed goal, or None."""
        with self._lock:
            removed = self._data[const.DATA_GOALS].pop(goal_id, None)
            if removed is not None:
                self._bump(const.DATA_META_GOALS_VERSION)
            return removed

    # -------------------------------------------------------------------------------------
    # Events (append-only)
    # -------------------------------------------------------------------------------------

    def events(self) -> tuple[PointEvent, ...]:
        """Immutable snapshot of the event log."""
        with self._lock:
            return tuple(self._data[const.DATA_EVENTS].values())

    def append_event(self, event: PointEvent) -> None:
        """Append an event to the log."""
        with self._lock:
            self._data[const.DATA_EVENTS][event.internal_id] = event
            self._bump(const.DATA_META_EVENTS_VERSION)

    # -------------------------------------------------------------------------------------
    # History
    # -------------------------------------------------------------------------------------

    def history(self) -> list[GoalHistoryEntry]:
        """Snapshot of the goal history in logging order."""
        with self._lock:
            return list(self._data[const.DATA_HISTORY])

    def append_history(self, entry: GoalHistoryEntry) -> None:
        """Append a history entry."""
        with self._lock:
            self._data[const.DATA_HISTORY].append(entry)


def _bucket_values(records: Mapping[str, Any], key: str) -> list[dict[str, Any]]:
    """Return the records of a bucket stored either as a list or an id-dict."""
    bucket = records.get(key) or []
    if isinstance(bucket, Mapping):
        return list(bucket.values())
    return list(bucket)
