"""Unit tests for PriorityEngine - primary goal selection."""

from __future__ import annotations

from datetime import timedelta

from kidsgoals.engines.priority_engine import PriorityEngine
from tests.helpers import BASE_TIME, CHILD_ID, OTHER_CHILD_ID, make_goal


class TestPrimaryGoal:
    """Derived primary goal."""

    def test_lowest_priority_wins(self) -> None:
        """Priority 0 beats priority 2 regardless of list order."""
        later = make_goal(goal_id="later", priority=2)
        first = make_goal(goal_id="first", priority=0)

        primary = PriorityEngine.primary_goal([later, first], CHILD_ID, BASE_TIME)

        assert primary is not None
        assert primary.internal_id == "first"

    def test_ties_keep_input_order(self) -> None:
        """Equal priorities resolve to the goal supplied first."""
        goals = [
            make_goal(goal_id="a", priority=1),
            make_goal(goal_id="b", priority=1),
        ]

        primary = PriorityEngine.primary_goal(goals, CHILD_ID, BASE_TIME)

        assert primary is not None
        assert primary.internal_id == "a"

    def test_redeemed_and_expired_goals_skipped(self) -> None:
        """Terminal goals never become primary."""
        deadline = BASE_TIME - timedelta(hours=1)
        goals = [
            make_goal(goal_id="done", priority=0, redeemed=True, frozen_earned_points=5),
            make_goal(
                goal_id="late",
                priority=0,
                created_at=BASE_TIME - timedelta(days=1),
                deadline=deadline,
            ),
            make_goal(goal_id="open", priority=5),
        ]

        primary = PriorityEngine.primary_goal(goals, CHILD_ID, BASE_TIME)

        assert primary is not None
        assert primary.internal_id == "open"

    def test_no_open_goals(self) -> None:
        """No primary goal when nothing is open."""
        goals = [make_goal(redeemed=True, frozen_earned_points=1)]

        assert PriorityEngine.primary_goal(goals, CHILD_ID, BASE_TIME) is None
        assert PriorityEngine.primary_goal([], CHILD_ID, BASE_TIME) is None

    def test_primary_is_per_child(self) -> None:
        """Each child has an independent primary goal."""
        mine = make_goal(goal_id="mine", priority=3)
        theirs = make_goal(goal_id="theirs", child_id=OTHER_CHILD_ID, priority=0)
        goals = [mine, theirs]

        assert PriorityEngine.is_primary(mine, goals, BASE_TIME)
        assert PriorityEngine.is_primary(theirs, goals, BASE_TIME)

    def test_queued_goals(self) -> None:
        """Queued goals follow the primary in priority order."""
        goals = [
            make_goal(goal_id="c", priority=3),
            make_goal(goal_id="a", priority=0),
            make_goal(goal_id="b", priority=1),
        ]

        queued = PriorityEngine.queued_goals(goals, CHILD_ID, BASE_TIME)

        assert [goal.internal_id for goal in queued] == ["b", "c"]


class TestSetPrimary:
    """Explicit re-prioritization."""

    def test_selected_goal_becomes_primary(self) -> None:
        """Selected goal gets 0, others shift back keeping their order."""
        goals = [
            make_goal(goal_id="a", priority=0),
            make_goal(goal_id="b", priority=1),
            make_goal(goal_id="c", priority=2),
        ]

        updated = PriorityEngine.set_primary(goals, "c", CHILD_ID, BASE_TIME)
        priorities = {goal.internal_id: goal.priority for goal in updated}

        assert priorities == {"a": 1, "b": 2, "c": 0}
        ordered = PriorityEngine.order_goals(updated, CHILD_ID, BASE_TIME)
        assert [goal.internal_id for goal in ordered] == ["c", "a", "b"]

    def test_other_children_and_terminal_goals_untouched(self) -> None:
        """Only the child's open goals are re-prioritized."""
        other = make_goal(goal_id="other", child_id=OTHER_CHILD_ID, priority=0)
        done = make_goal(goal_id="done", priority=0, redeemed=True, frozen_earned_points=2)
        target = make_goal(goal_id="target", priority=4)

        updated = PriorityEngine.set_primary(
            [other, done, target], "target", CHILD_ID, BASE_TIME
        )

        assert updated[0] is other
        assert updated[1] is done
        assert updated[2].priority == 0
        assert target.priority == 4  # input value unchanged


class TestPromoteNext:
    """Queue advance after redemption."""

    def test_promotes_next_open_goal(self) -> None:
        """The next goal in line moves to priority 0 and its window restarts."""
        redeemed = make_goal(goal_id="a", priority=0, redeemed=True, frozen_earned_points=10)
        waiting = make_goal(goal_id="b", priority=2)
        now = BASE_TIME + timedelta(hours=2)

        promoted = PriorityEngine.promote_next([redeemed, waiting], CHILD_ID, now)

        assert promoted is not None
        assert promoted.internal_id == "b"
        assert promoted.priority == 0
        assert promoted.window_start == now

    def test_promotion_never_moves_window_backwards(self) -> None:
        """A window that starts after the redeem time is kept."""
        redeemed = make_goal(goal_id="a", redeemed=True, frozen_earned_points=10)
        later_start = BASE_TIME + timedelta(hours=5)
        waiting = make_goal(goal_id="b", priority=0, window_start=later_start)

        promoted = PriorityEngine.promote_next([redeemed, waiting], CHILD_ID, BASE_TIME)

        assert promoted is not None
        assert promoted.window_start == later_start

    def test_nothing_to_promote(self) -> None:
        """No open goals left means no promotion."""
        redeemed = make_goal(redeemed=True, frozen_earned_points=10)

        assert PriorityEngine.promote_next([redeemed], CHILD_ID, BASE_TIME) is None


class TestUntaggedOwner:
    """Which goal an untagged event belongs to."""

    def test_expired_goal_owns_time_before_its_deadline(self) -> None:
        """The timed goal owns earlier events, the next goal owns later ones."""
        timed = make_goal(
            goal_id="timed", priority=0, deadline=BASE_TIME + timedelta(hours=1)
        )
        waiting = make_goal(goal_id="waiting", priority=1)
        goals = [timed, waiting]

        before = PriorityEngine.untagged_owner(
            goals, CHILD_ID, BASE_TIME + timedelta(minutes=30)
        )
        after = PriorityEngine.untagged_owner(goals, CHILD_ID, BASE_TIME + timedelta(hours=3))

        assert before is not None
        assert before.internal_id == "timed"
        assert after is not None
        assert after.internal_id == "waiting"

    def test_no_owner_without_open_goals(self) -> None:
        """An event with no open goal at its time belongs to nobody."""
        redeemed = make_goal(redeemed=True, frozen_earned_points=10)

        assert PriorityEngine.untagged_owner([redeemed], CHILD_ID, BASE_TIME) is None

    def test_redeemed_goal_owns_time_before_redemption(self) -> None:
        """Events before redeemed_at stay with the redeemed goal."""
        redeemed_at = BASE_TIME + timedelta(hours=2)
        done = make_goal(
            goal_id="done",
            priority=0,
            redeemed=True,
            redeemed_at=redeemed_at,
            frozen_earned_points=10,
        )
        waiting = make_goal(goal_id="waiting", priority=1)
        goals = [done, waiting]

        before = PriorityEngine.untagged_owner(goals, CHILD_ID, BASE_TIME + timedelta(hours=1))
        after = PriorityEngine.untagged_owner(goals, CHILD_ID, redeemed_at)

        assert before is not None
        assert before.internal_id == "done"
        assert after is not None
        assert after.internal_id == "waiting"
