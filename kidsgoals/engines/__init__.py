"""Engine modules for KidsGoals.

Contains specialized computation engines:
- goal_engine: Window aggregation, status resolution, redeem/soft reset
- priority_engine: Primary goal selection and re-prioritization
- milestone_engine: Intermediate thresholds derived from the target
"""

from .goal_engine import GoalEngine
from .milestone_engine import MilestoneEngine
from .priority_engine import PriorityEngine

__all__ = [
    "GoalEngine",
    "MilestoneEngine",
    "PriorityEngine",
]
