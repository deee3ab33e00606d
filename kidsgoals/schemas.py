"""Voluptuous schemas for KidsGoals records and manager options.

Records arrive from whichever store persists goals and events. These schemas
are the owning layer's invariant check: they reject shapes the engines treat
as contract violations (for example a redeemed goal without frozen points).
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

import voluptuous as vol

from . import const
from .utils import dt_utils


# =============================================================================
# Field Validators
# =============================================================================


def utc_datetime(value: Any) -> datetime:
    """Coerce an ISO string, date or datetime into an aware UTC datetime."""
    if isinstance(value, datetime | str):
        parsed = dt_utils.dt_to_utc(value)
        if parsed is not None:
            return parsed
    raise vol.Invalid(f"invalid datetime: {value!r}")


def time_zone(value: Any) -> str:
    """Validate an IANA time zone name."""
    if isinstance(value, str) and dt_utils.is_valid_timezone(value):
        return value
    raise vol.Invalid(f"unknown time zone: {value!r}")


def _check_goal_invariants(record: dict[str, Any]) -> dict[str, Any]:
    """Cross-field goal checks that a single-field validator cannot express."""
    if record[const.DATA_GOAL_REDEEMED] and (
        record.get(const.DATA_GOAL_FROZEN_EARNED_POINTS) is None
    ):
        raise vol.Invalid(
            "redeemed goal must carry frozen_earned_points",
            path=[const.DATA_GOAL_FROZEN_EARNED_POINTS],
        )
    window_start = record.get(const.DATA_GOAL_WINDOW_START)
    created_at = record[const.DATA_GOAL_CREATED_AT]
    if window_start is None:
        record[const.DATA_GOAL_WINDOW_START] = created_at
    elif window_start < created_at:
        raise vol.Invalid(
            "window_start cannot precede created_at",
            path=[const.DATA_GOAL_WINDOW_START],
        )
    return record


# =============================================================================
# Record Schemas
# =============================================================================

GOAL_SCHEMA = vol.All(
    vol.Schema(
        {
            vol.Required(const.DATA_GOAL_ID): vol.All(str, vol.Length(min=1)),
            vol.Required(const.DATA_GOAL_CHILD_ID): vol.All(str, vol.Length(min=1)),
            vol.Optional(const.DATA_GOAL_NAME, default=""): str,
            vol.Optional(const.DATA_GOAL_ICON, default=None): vol.Any(None, str),
            vol.Required(const.DATA_GOAL_TARGET): int,
            vol.Required(const.DATA_GOAL_CREATED_AT): utc_datetime,
            vol.Optional(const.DATA_GOAL_WINDOW_START, default=None): vol.Any(
                None, utc_datetime
            ),
            vol.Optional(const.DATA_GOAL_DEADLINE, default=None): vol.Any(
                None, utc_datetime
            ),
            vol.Optional(const.DATA_GOAL_REDEEMED, default=False): bool,
            vol.Optional(const.DATA_GOAL_REDEEMED_AT, default=None): vol.Any(
                None, utc_datetime
            ),
            vol.Optional(
                const.DATA_GOAL_EARNING_MULTIPLIER,
                default=const.DEFAULT_EARNING_MULTIPLIER,
            ): vol.All(
                vol.Coerce(float),
                vol.Range(min=0.0, max=1.0, min_included=False),
            ),
            vol.Optional(const.DATA_GOAL_FROZEN_EARNED_POINTS, default=None): vol.Any(
                None, vol.All(int, vol.Range(min=0))
            ),
            vol.Optional(
                const.DATA_GOAL_PRIORITY, default=const.DEFAULT_GOAL_PRIORITY
            ): int,
            vol.Optional(const.DATA_GOAL_AUTO_RESET_ON_EXPIRE, default=False): bool,
        },
        extra=vol.REMOVE_EXTRA,
    ),
    _check_goal_invariants,
)

POINT_EVENT_SCHEMA = vol.Schema(
    {
        vol.Required(const.DATA_EVENT_ID): vol.All(str, vol.Length(min=1)),
        vol.Required(const.DATA_EVENT_CHILD_ID): vol.All(str, vol.Length(min=1)),
        vol.Required(const.DATA_EVENT_AMOUNT): int,
        vol.Required(const.DATA_EVENT_TIMESTAMP): utc_datetime,
        vol.Optional(const.DATA_EVENT_GOAL_ID, default=None): vol.Any(None, str),
    },
    extra=vol.REMOVE_EXTRA,
)

# =============================================================================
# Manager Options
# =============================================================================

OPTIONS_SCHEMA = vol.Schema(
    {
        vol.Optional(
            const.CONF_MAX_ACTIVE_GOALS, default=const.DEFAULT_MAX_ACTIVE_GOALS
        ): vol.Any(None, vol.All(int, vol.Range(min=1))),
        vol.Optional(
            const.CONF_AUTO_PROMOTE_ON_REDEEM,
            default=const.DEFAULT_AUTO_PROMOTE_ON_REDEEM,
        ): bool,
        vol.Optional(const.CONF_TIME_ZONE, default=const.DEFAULT_TIME_ZONE): time_zone,
    }
)
