"""Test helpers for KidsGoals tests.

This module re-exports all helpers for convenient imports:

    from tests.helpers import (
        # Builders
        BASE_TIME, CHILD_ID, make_goal, make_event,

        # Scenarios
        load_scenarios,
    )

See individual modules for full documentation:
- builders.py: Minimal Goal / PointEvent builders with sensible defaults
- scenarios.py: YAML scenario loading
"""

from tests.helpers.builders import (
    BASE_TIME,
    CHILD_ID,
    OTHER_CHILD_ID,
    make_event,
    make_goal,
)
from tests.helpers.scenarios import SCENARIO_FILE, load_scenarios

__all__ = [
    "BASE_TIME",
    "CHILD_ID",
    "OTHER_CHILD_ID",
    "SCENARIO_FILE",
    "load_scenarios",
    "make_event",
    "make_goal",
]
