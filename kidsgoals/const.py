# File: const.py
"""Constants for the KidsGoals engine.

This file centralizes record keys, defaults, status names, history event
types and deadline presets for consistency across engines and managers.
"""

import logging

from .utils.dt_utils import TIME_UNIT_DAYS, TIME_UNIT_MONTHS, TIME_UNIT_WEEKS

# ------------------------------------------------------------------------------------------------
# General Information
# ------------------------------------------------------------------------------------------------
KIDSGOALS_TITLE = "KidsGoals"

# Logger
LOGGER = logging.getLogger(__package__)

# Storage buckets (in-memory store)
DATA_GOALS = "goals"
DATA_EVENTS = "events"
DATA_HISTORY = "history"
DATA_META = "meta"
DATA_META_GOALS_VERSION = "goals_version"
DATA_META_EVENTS_VERSION = "events_version"

# ------------------------------------------------------------------------------------------------
# Goal Record Keys
# ------------------------------------------------------------------------------------------------
DATA_GOAL_ID = "internal_id"
DATA_GOAL_CHILD_ID = "child_id"
DATA_GOAL_NAME = "name"
DATA_GOAL_ICON = "icon"
DATA_GOAL_TARGET = "target"
DATA_GOAL_CREATED_AT = "created_at"
DATA_GOAL_WINDOW_START = "window_start"
DATA_GOAL_DEADLINE = "deadline"
DATA_GOAL_REDEEMED = "redeemed"
DATA_GOAL_REDEEMED_AT = "redeemed_at"
DATA_GOAL_EARNING_MULTIPLIER = "earning_multiplier"
DATA_GOAL_FROZEN_EARNED_POINTS = "frozen_earned_points"
DATA_GOAL_PRIORITY = "priority"
DATA_GOAL_AUTO_RESET_ON_EXPIRE = "auto_reset_on_expire"

# ------------------------------------------------------------------------------------------------
# Point Event Record Keys
# ------------------------------------------------------------------------------------------------
DATA_EVENT_ID = "internal_id"
DATA_EVENT_CHILD_ID = "child_id"
DATA_EVENT_AMOUNT = "amount"
DATA_EVENT_TIMESTAMP = "timestamp"
DATA_EVENT_GOAL_ID = "goal_id"

# ------------------------------------------------------------------------------------------------
# Goal History Record Keys
# ------------------------------------------------------------------------------------------------
DATA_HISTORY_ID = "internal_id"
DATA_HISTORY_CHILD_ID = "child_id"
DATA_HISTORY_GOAL_ID = "goal_id"
DATA_HISTORY_GOAL_NAME = "goal_name"
DATA_HISTORY_GOAL_ICON = "goal_icon"
DATA_HISTORY_TIMESTAMP = "timestamp"
DATA_HISTORY_EVENT_TYPE = "event_type"
DATA_HISTORY_POINTS_REQUIRED = "points_required"
DATA_HISTORY_POINTS_EARNED = "points_earned_at_event"

HISTORY_EVENT_EARNED = "earned"  # Target reached, ready to redeem
HISTORY_EVENT_GIVEN = "given"  # Reward delivered to the child
HISTORY_EVENT_EXPIRED = "expired"  # Deadline passed before completion

# ------------------------------------------------------------------------------------------------
# Goal Status
# ------------------------------------------------------------------------------------------------
GOAL_STATUS_ACTIVE = "active"
GOAL_STATUS_ACTIVE_WITH_DEADLINE = "active_with_deadline"
GOAL_STATUS_READY_TO_REDEEM = "ready_to_redeem"
GOAL_STATUS_COMPLETED = "completed"
GOAL_STATUS_EXPIRED = "expired"

# No further actions possible once a goal reaches one of these
GOAL_TERMINAL_STATUSES = frozenset({GOAL_STATUS_COMPLETED, GOAL_STATUS_EXPIRED})

GOAL_STATUS_DISPLAY_NAMES = {
    GOAL_STATUS_ACTIVE: "Active",
    GOAL_STATUS_ACTIVE_WITH_DEADLINE: "Timed",
    GOAL_STATUS_READY_TO_REDEEM: "Earned",
    GOAL_STATUS_COMPLETED: "Completed",
    GOAL_STATUS_EXPIRED: "Expired",
}

GOAL_STATUS_NOTE_READY = "Already earned"
GOAL_STATUS_NOTE_EXPIRED = "Expired"
GOAL_STATUS_NOTE_COMPLETED = "Completed"

# ------------------------------------------------------------------------------------------------
# Deadline Presets
# ------------------------------------------------------------------------------------------------
DEADLINE_PRESET_NONE = "none"
DEADLINE_PRESET_ONE_DAY = "one_day"
DEADLINE_PRESET_THREE_DAYS = "three_days"
DEADLINE_PRESET_ONE_WEEK = "one_week"
DEADLINE_PRESET_TWO_WEEKS = "two_weeks"
DEADLINE_PRESET_ONE_MONTH = "one_month"
DEADLINE_PRESET_CUSTOM = "custom"

# Preset -> (time unit, amount); none/custom carry no computed deadline
DEADLINE_PRESET_INTERVALS: dict[str, tuple[str, int]] = {
    DEADLINE_PRESET_ONE_DAY: (TIME_UNIT_DAYS, 1),
    DEADLINE_PRESET_THREE_DAYS: (TIME_UNIT_DAYS, 3),
    DEADLINE_PRESET_ONE_WEEK: (TIME_UNIT_WEEKS, 1),
    DEADLINE_PRESET_TWO_WEEKS: (TIME_UNIT_WEEKS, 2),
    DEADLINE_PRESET_ONE_MONTH: (TIME_UNIT_MONTHS, 1),
}

DEADLINE_PRESETS = [
    DEADLINE_PRESET_NONE,
    DEADLINE_PRESET_ONE_DAY,
    DEADLINE_PRESET_THREE_DAYS,
    DEADLINE_PRESET_ONE_WEEK,
    DEADLINE_PRESET_TWO_WEEKS,
    DEADLINE_PRESET_ONE_MONTH,
    DEADLINE_PRESET_CUSTOM,
]

# ------------------------------------------------------------------------------------------------
# Defaults
# ------------------------------------------------------------------------------------------------
DEFAULT_EARNING_MULTIPLIER = 1.0
DEFAULT_GOAL_PRIORITY = 0
DEFAULT_PRIMARY_PRIORITY = 0

# Soft reset halves the earning rate each time it is applied
SOFT_RESET_FACTOR = 0.5

# Milestone policy thresholds
MILESTONE_SMALL_TARGET_MAX = 10
MILESTONE_MEDIUM_TARGET_MAX = 20
MILESTONE_MIN_STEP = 5

# ------------------------------------------------------------------------------------------------
# Manager Options
# ------------------------------------------------------------------------------------------------
CONF_MAX_ACTIVE_GOALS = "max_active_goals"
CONF_AUTO_PROMOTE_ON_REDEEM = "auto_promote_on_redeem"
CONF_TIME_ZONE = "time_zone"

DEFAULT_MAX_ACTIVE_GOALS = None
DEFAULT_AUTO_PROMOTE_ON_REDEEM = True
DEFAULT_TIME_ZONE = "UTC"

# ------------------------------------------------------------------------------------------------
# Manager Event Signals
# ------------------------------------------------------------------------------------------------
SIGNAL_SUFFIX_GOAL_ADDED = "goal_added"
SIGNAL_SUFFIX_GOAL_UPDATED = "goal_updated"
SIGNAL_SUFFIX_GOAL_DELETED = "goal_deleted"
SIGNAL_SUFFIX_GOAL_REDEEMED = "goal_redeemed"
SIGNAL_SUFFIX_GOAL_SOFT_RESET = "goal_soft_reset"
SIGNAL_SUFFIX_GOAL_EXPIRED = "goal_expired"
SIGNAL_SUFFIX_GOAL_EARNED = "goal_earned"
SIGNAL_SUFFIX_MILESTONE_REACHED = "milestone_reached"
SIGNAL_SUFFIX_PRIMARY_CHANGED = "primary_changed"
SIGNAL_SUFFIX_POINTS_LOGGED = "points_logged"
