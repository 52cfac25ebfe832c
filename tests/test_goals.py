"""
Tests for lifestyle goals, time blocks and goal-aligned daily metrics.

Daily metrics add up goal-tagged time blocks, goal-tagged habit check-ins
and completed goal tasks for one local day (UTC+05:30 by default), then
save the day's snapshot with its streak.
"""

import uuid
from datetime import date, datetime, timedelta

import pytest

from test_fixtures import client, auth_user, db_session, db_user, make_day_snapshot
from app.exceptions import NotFoundError, ServiceValidationError
from domain.schemas.goal_schemas import GoalCreate, GoalUpdate, TimeBlockCreate
from domain.schemas.habit_schemas import HabitCheckinCreate, HabitCreate
from domain.schemas.task_schemas import TaskCreate
from services.goal_service import GoalService
from services.habit_service import HabitService
from services.local_day import local_today
from services.task_service import TaskService


def new_goal(db, user_id, name="Deep work", color="#2563EB"):
    return GoalService.create_goal(db, user_id, GoalCreate(name=name, color=color))


def habit_minutes(db, user_id, goal, day, minutes):
    now = datetime.utcnow()
    habit = HabitService.create_habit(
        db,
        user_id,
        HabitCreate(
            habit="Run",
            value_min=minutes,
            start_date=now - timedelta(days=5),
            end_date=now + timedelta(days=30),
            goal_id=goal.goal_id,
        ),
    )
    return HabitService.create_checkin(
        db, user_id, HabitCheckinCreate(habit_id=habit.habit_id, date=day, value_min=minutes)
    )


def block(db, user_id, day, minutes, goal=None, task=None):
    return GoalService.create_block(
        db,
        user_id,
        TimeBlockCreate(
            date=day,
            duration=minutes,
            goal_id=goal.goal_id if goal else None,
            task_id=task.task_id if task else None,
        ),
    )


# =============================================================================
# GOALS
# =============================================================================


def test_goal_crud(db_session, db_user):
    goal = new_goal(db_session, db_user.user_id, name="  Fitness ")
    assert goal.name == "Fitness"

    GoalService.update_goal(db_session, db_user.user_id, goal.goal_id, GoalUpdate(is_active=False))
    assert GoalService.list_goals(db_session, db_user.user_id) == []

    GoalService.delete_goal(db_session, db_user.user_id, goal.goal_id)
    with pytest.raises(NotFoundError):
        GoalService.delete_goal(db_session, db_user.user_id, goal.goal_id)


def test_goal_color_must_be_hex():
    with pytest.raises(ValueError):
        GoalCreate(name="Fitness", color="green")


# =============================================================================
# DAILY METRICS
# =============================================================================


def test_daily_metrics_combine_sources(db_session, db_user):
    uid = db_user.user_id
    today = local_today()
    deep_work = new_goal(db_session, uid, "Deep work")
    health = new_goal(db_session, uid, "Health", color="#10B981")

    # covered by a block, so its own minutes are not counted twice
    in_block = TaskService.create_task(
        db_session,
        uid,
        TaskCreate(title="Draft report", duration_minutes=40, mindful_rating=5, goal_ids=[deep_work.goal_id]),
    )
    TaskService.create_task(
        db_session,
        uid,
        TaskCreate(
            title="Walk and think",
            duration_minutes=30,
            mindful_rating=4,
            goal_ids=[deep_work.goal_id, health.goal_id],
        ),
    )
    # not goal-aligned
    TaskService.create_task(db_session, uid, TaskCreate(title="Emails", duration_minutes=20))
    block(db_session, uid, today, 60, goal=deep_work, task=in_block)
    habit_minutes(db_session, uid, health, today, 30)

    metrics = GoalService.calculate_daily_metrics(db_session, uid, today)

    assert metrics["block_minutes"] == 60
    assert metrics["habit_minutes"] == 30
    assert metrics["task_minutes"] == 30
    assert metrics["total_goal_aligned_minutes"] == 120
    assert metrics["score24"] == 2.0
    assert metrics["score_percentage"] == 8.3
    assert metrics["tasks_goal_aligned"] == 2
    assert metrics["mindful_tasks"] == 1
    assert metrics["mindful_minutes"] == 30
    assert metrics["average_mindful_rating"] == 4.5
    assert [(g["goal_name"], g["minutes"]) for g in metrics["goal_breakdown"]] == [
        ("Deep work", 75),
        ("Health", 45),
    ]
    assert metrics["current_streak"] == 1
    assert metrics["longest_streak"] == 1


def test_default_task_minutes_and_rating(db_session, db_user):
    uid = db_user.user_id
    goal = new_goal(db_session, uid)
    TaskService.create_task(db_session, uid, TaskCreate(title="Untimed", goal_ids=[goal.goal_id]))

    metrics = GoalService.calculate_daily_metrics(db_session, uid, local_today())

    assert metrics["task_minutes"] == 25
    assert metrics["average_mindful_rating"] == 3
    assert metrics["mindful_tasks"] == 0


def test_empty_day(db_session, db_user):
    metrics = GoalService.calculate_daily_metrics(db_session, db_user.user_id, date(2025, 1, 5))

    assert metrics["total_goal_aligned_minutes"] == 0
    assert metrics["score24"] == 0
    assert metrics["score_percentage"] == 0
    assert metrics["average_mindful_rating"] == 1
    assert metrics["goal_breakdown"] == []
    assert metrics["current_streak"] == 0


def test_total_minutes_clamped_to_a_day(db_session, db_user):
    uid = db_user.user_id
    goal = new_goal(db_session, uid)
    day = date(2025, 3, 10)
    block(db_session, uid, day, 1000, goal=goal)
    block(db_session, uid, day, 1000, goal=goal)

    metrics = GoalService.calculate_daily_metrics(db_session, uid, day)

    assert metrics["total_goal_aligned_minutes"] == 1440
    assert metrics["score24"] == 24
    assert metrics["score_percentage"] == 100


def test_blocks_without_goal_do_not_count(db_session, db_user):
    day = date(2025, 3, 10)
    block(db_session, db_user.user_id, day, 90)
    metrics = GoalService.calculate_daily_metrics(db_session, db_user.user_id, day)
    assert metrics["block_minutes"] == 0


# =============================================================================
# STREAKS AND HISTORY
# =============================================================================


def test_streak_extends_and_resets(db_session, db_user):
    uid = db_user.user_id
    goal = new_goal(db_session, uid)
    day1 = date(2025, 3, 10)
    day2 = day1 + timedelta(days=1)
    day3 = day2 + timedelta(days=1)
    block(db_session, uid, day1, 30, goal=goal)
    block(db_session, uid, day2, 45, goal=goal)

    assert GoalService.calculate_daily_metrics(db_session, uid, day1)["current_streak"] == 1
    second = GoalService.calculate_daily_metrics(db_session, uid, day2)
    assert second["current_streak"] == 2
    assert second["longest_streak"] == 2

    third = GoalService.calculate_daily_metrics(db_session, uid, day3)
    assert third["current_streak"] == 0
    assert third["longest_streak"] == 2

    streak = GoalService.get_streak(db_session, uid)
    assert streak["date"] == day3
    assert streak["longest_streak"] == 2


def test_recalculating_a_day_updates_snapshot(db_session, db_user):
    uid = db_user.user_id
    goal = new_goal(db_session, uid)
    day = date(2025, 3, 10)
    block(db_session, uid, day, 30, goal=goal)
    GoalService.calculate_daily_metrics(db_session, uid, day)
    block(db_session, uid, day, 30, goal=goal)
    GoalService.calculate_daily_metrics(db_session, uid, day)

    days, total = GoalService.get_history(db_session, uid)
    assert total == 1
    assert days[0].total_goal_aligned_minutes == 60


def test_weekly_runs_sunday_to_saturday(db_session, db_user):
    uid = db_user.user_id
    # 2025-03-09 is a Sunday
    for day in (date(2025, 3, 8), date(2025, 3, 9), date(2025, 3, 15), date(2025, 3, 16)):
        GoalService.calculate_daily_metrics(db_session, uid, day)

    week = GoalService.get_weekly(db_session, uid, date(2025, 3, 12))

    assert [d["date"] for d in week] == [date(2025, 3, 9), date(2025, 3, 15)]


def test_streak_without_history(db_session, db_user):
    assert GoalService.get_streak(db_session, db_user.user_id) == {
        "current_streak": 0,
        "longest_streak": 0,
        "target_hours": 8,
        "date": None,
    }


# =============================================================================
# TIME BLOCKS
# =============================================================================


def test_block_duration_from_times_and_local_day(db_session, db_user):
    # 20:00 UTC is 01:30 the next morning at UTC+05:30
    blk = GoalService.create_block(
        db_session,
        db_user.user_id,
        TimeBlockCreate(
            start_time=datetime(2025, 3, 10, 20, 0),
            end_time=datetime(2025, 3, 10, 21, 30),
        ),
    )

    assert blk.duration == 90
    assert blk.date == date(2025, 3, 11)


@pytest.mark.parametrize(
    "payload",
    [
        {"start_time": datetime(2025, 3, 10, 9), "end_time": datetime(2025, 3, 10, 8)},
        {"start_time": datetime(2025, 3, 10, 9)},
        {},
    ],
)
def test_invalid_blocks(db_session, db_user, payload):
    with pytest.raises(ServiceValidationError):
        GoalService.create_block(db_session, db_user.user_id, TimeBlockCreate(**payload))


def test_block_references_must_exist(db_session, db_user):
    with pytest.raises(NotFoundError):
        GoalService.create_block(
            db_session, db_user.user_id, TimeBlockCreate(duration=30, goal_id=uuid.uuid4())
        )
    with pytest.raises(NotFoundError):
        GoalService.create_block(
            db_session, db_user.user_id, TimeBlockCreate(duration=30, task_id=uuid.uuid4())
        )


def test_list_and_delete_blocks(db_session, db_user):
    day = date(2025, 3, 10)
    blk = block(db_session, db_user.user_id, day, 30)
    block(db_session, db_user.user_id, day + timedelta(days=1), 30)

    assert len(GoalService.list_blocks(db_session, db_user.user_id, day=day)) == 1
    assert len(
        GoalService.list_blocks(
            db_session, db_user.user_id, start_date=day, end_date=day + timedelta(days=1)
        )
    ) == 2

    GoalService.delete_block(db_session, db_user.user_id, blk.block_id)
    with pytest.raises(NotFoundError):
        GoalService.delete_block(db_session, db_user.user_id, blk.block_id)


# =============================================================================
# ROUTES
# =============================================================================


def test_today_route_accepts_date_alias(monkeypatch, auth_user):
    seen = {}

    def fake_metrics(db, uid, day):
        seen["day"] = day
        return {
            "date": day,
            "tasks_goal_aligned": 0,
            "block_minutes": 0,
            "habit_minutes": 0,
            "task_minutes": 0,
            "total_goal_aligned_minutes": 0,
            "score24": 0,
            "score_percentage": 0,
            "goal_breakdown": [],
            "mindful_tasks": 0,
            "mindful_minutes": 0,
            "average_mindful_rating": 1,
            "current_streak": 0,
            "longest_streak": 0,
        }

    monkeypatch.setattr(GoalService, "calculate_daily_metrics", fake_metrics)

    r = client.get("/api/goals/today?date=2025-03-10")

    assert r.status_code == 200
    assert seen["day"] == date(2025, 3, 10)
    assert r.json()["average_mindful_rating"] == 1


def test_history_route_paginates(monkeypatch, auth_user):
    days = [make_day_snapshot(user_id=auth_user.user_id) for _ in range(3)]
    monkeypatch.setattr(GoalService, "get_history", lambda db, uid, page, limit: (days, 7))

    r = client.get("/api/goals/history?page=1&limit=3")

    assert r.status_code == 200
    body = r.json()
    assert len(body["days"]) == 3
    assert body["pagination"] == {"page": 1, "limit": 3, "total": 7, "pages": 3}


def test_create_goal_route_validates_color(auth_user):
    r = client.post("/api/goals", json={"name": "Fitness", "color": "blue"})
    assert r.status_code == 422
