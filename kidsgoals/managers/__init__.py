"""Managers for KidsGoals workflows.

Managers own state changes; engines stay pure.
"""

from .base_manager import BaseManager
from .goal_manager import GoalManager

__all__ = ["BaseManager", "GoalManager"]
