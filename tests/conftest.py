"""Shared fixtures for KidsGoals tests."""

from typing import Any

import pytest

from kidsgoals import const
from kidsgoals.managers import GoalManager
from kidsgoals.store import KidsGoalsStore
from kidsgoals.utils import dt_utils


@pytest.fixture(autouse=True)
def reset_default_timezone() -> Any:
    """Keep the module-level default zone from leaking between tests."""
    yield
    dt_utils.set_default_timezone("UTC")


@pytest.fixture
def store() -> KidsGoalsStore:
    """Return an empty snapshot store."""
    return KidsGoalsStore()


@pytest.fixture
def manager(store: KidsGoalsStore) -> GoalManager:  # pylint: disable=redefined-outer-name
    """Return a GoalManager with default options over the empty store."""
    return GoalManager(store)


@pytest.fixture
def captured_events(manager: GoalManager) -> list[tuple[str, dict[str, Any]]]:  # pylint: disable=redefined-outer-name
    """Record every event the manager emits as (suffix, payload)."""
    captured: list[tuple[str, dict[str, Any]]] = []
    for suffix in (
        const.SIGNAL_SUFFIX_GOAL_ADDED,
        const.SIGNAL_SUFFIX_GOAL_UPDATED,
        const.SIGNAL_SUFFIX_GOAL_DELETED,
        const.SIGNAL_SUFFIX_GOAL_REDEEMED,
        const.SIGNAL_SUFFIX_GOAL_SOFT_RESET,
        const.SIGNAL_SUFFIX_GOAL_EXPIRED,
        const.SIGNAL_SUFFIX_GOAL_EARNED,
        const.SIGNAL_SUFFIX_MILESTONE_REACHED,
        const.SIGNAL_SUFFIX_PRIMARY_CHANGED,
        const.SIGNAL_SUFFIX_POINTS_LOGGED,
    ):
        manager.listen(
            suffix,
            lambda payload, suffix=suffix: captured.append((suffix, payload)),
        )
    return captured
