"""Base manager class for KidsGoals managers."""

from __future__ import annotations

from collections import defaultdict
from typing import TYPE_CHECKING, Any
import uuid

from .. import const

if TYPE_CHECKING:
    from collections.abc import Callable

    from ..store import KidsGoalsStore


def get_event_signal(instance_id: str, suffix: str) -> str:
    """Build an instance-scoped signal name."""
    return f"{const.KIDSGOALS_TITLE.lower()}_{instance_id}_{suffix}"


class BaseManager:
    """Base class for all KidsGoals managers with scoped event support.

    Provides:
    - Instance-scoped event emitting (emit)
    - Instance-scoped event listening (listen), returning an unsubscribe callable

    Listeners run synchronously in registration order. A listener that raises
    propagates to the caller of the operation that emitted the event.
    """

    def __init__(self, store: KidsGoalsStore) -> None:
        """Initialize manager.

        Args:
            store: Store holding the goal and event snapshot
        """
        self.store = store
        self.instance_id = uuid.uuid4().hex[:8]
        self._listeners: defaultdict[str, list[Callable[[dict[str, Any]], Any]]] = (
            defaultdict(list)
        )

    def emit(self, suffix: str, **payload: Any) -> None:
        """Emit instance-scoped event to listeners.

        Args:
            suffix: Signal suffix constant (e.g., const.SIGNAL_SUFFIX_GOAL_REDEEMED)
            **payload: Event data dict passed to listeners

        Example:
            self.emit(
                const.SIGNAL_SUFFIX_GOAL_REDEEMED,
                goal_id=goal_id,
                child_id=child_id,
                earned_points=10,
            )
        """
        signal = get_event_signal(self.instance_id, suffix)
        const.LOGGER.debug(
            "Emitting event '%s' for instance %s with payload keys: %s",
            suffix,
            self.instance_id,
            list(payload.keys()),
        )
        for callback in list(self._listeners[signal]):
            callback(payload)

    def listen(
        self, suffix: str, callback: Callable[[dict[str, Any]], Any]
    ) -> Callable[[], None]:
        """Subscribe to an instance-scoped event.

        Args:
            suffix: Signal suffix constant to listen for
            callback: Function called with the payload dict

        Returns:
            Callable that removes the subscription.

        Example:
            def _on_goal_earned(payload: dict[str, Any]) -> None:
                celebrate(payload["goal_id"])

            unsub = manager.listen(const.SIGNAL_SUFFIX_GOAL_EARNED, _on_goal_earned)
        """
        signal = get_event_signal(self.instance_id, suffix)
        self._listeners[signal].append(callback)
        const.LOGGER.debug(
            "Manager %s listening to event '%s' for instance %s",
            self.__class__.__name__,
            suffix,
            self.instance_id,
        )

        def _unsubscribe() -> None:
            if callback in self._listeners[signal]:
                self._listeners[signal].remove(callback)

        return _unsubscribe
