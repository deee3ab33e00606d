"""YAML scenario loading for goal engine tests.

Example:
    for scenario in load_scenarios():
        goal, events, now = scenario.build()
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any

import yaml

from kidsgoals.engines import GoalEngine
from kidsgoals.models import Goal, PointEvent
from tests.helpers.builders import BASE_TIME, make_event, make_goal

SCENARIO_FILE = Path(__file__).parent.parent / "scenarios" / "goal_scenarios.yaml"


def _at(hours: float | None) -> datetime | None:
    if hours is None:
        return None
    return BASE_TIME + timedelta(hours=hours)


@dataclass
class GoalScenario:
    """One scenario entry from the YAML file."""

    name: str
    goal: dict[str, Any]
    is_primary: bool
    now_hours: float
    expect: dict[str, Any]
    events: list[dict[str, Any]] = field(default_factory=list)
    soft_reset_hours: float | None = None

    def build(self) -> tuple[Goal, list[PointEvent], datetime]:
        """Materialize the goal (with any soft reset applied), events and now."""
        goal = make_goal(
            goal_id=f"goal-{self.name}",
            target=self.goal["target"],
            deadline=_at(self.goal.get("deadline_hours")),
            redeemed=self.goal.get("redeemed", False),
            redeemed_at=_at(self.goal.get("redeemed_hours")),
            frozen_earned_points=self.goal.get("frozen_earned_points"),
        )
        events = [
            make_event(
                item["amount"],
                hours=item["hours"],
                goal_id=goal.internal_id if item.get("goal") == "self" else None,
            )
            for item in self.events
        ]
        if self.soft_reset_hours is not None:
            goal = GoalEngine.soft_reset(goal, _at(self.soft_reset_hours))
        now = _at(self.now_hours)
        assert now is not None
        return goal, events, now


def load_scenarios(path: Path = SCENARIO_FILE) -> list[GoalScenario]:
    """Load all scenarios from a YAML file."""
    with path.open(encoding="utf-8") as handle:
        raw = yaml.safe_load(handle)
    return [GoalScenario(**entry) for entry in raw["scenarios"]]
