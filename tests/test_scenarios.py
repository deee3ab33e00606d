"""Reference scenarios for goal evaluation, loaded from YAML."""

from __future__ import annotations

import pytest

from kidsgoals.engines import GoalEngine
from tests.helpers import load_scenarios
from tests.helpers.scenarios import GoalScenario

SCENARIOS = load_scenarios()


@pytest.mark.parametrize("scenario", SCENARIOS, ids=[s.name for s in SCENARIOS])
def test_scenario(scenario: GoalScenario) -> None:
    """Evaluation matches every expected field of the scenario."""
    goal, events, now = scenario.build()

    result = GoalEngine.evaluate(goal, events, scenario.is_primary, now)

    for key, expected in scenario.expect.items():
        if key == "earning_multiplier":
            assert goal.earning_multiplier == expected
        else:
            assert result[key] == expected, key
