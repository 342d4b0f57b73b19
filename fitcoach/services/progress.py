"""Member progress and dashboard aggregates.

Rows are fetched with plain range filters and grouped in Python so the same
code runs on PostgreSQL and SQLite.
"""
from collections import defaultdict
from datetime import datetime, timedelta, time

from fitcoach.extensions import db
from fitcoach.models import (
    MealLog, MealLogItem, MemberGoal, MemberProfile, WeightLog, WorkoutLog, WorkoutLogItem,
)
from fitcoach.utils.dates import utcnow
from fitcoach.utils.numbers import round_half_up

CALORIE_TOLERANCE = 0.1
DEFAULT_WEEKLY_WORKOUT_MINUTES = 300


def _meal_item_rows(member_id, since=None):
    query = (
        db.session.query(MealLog.id, MealLog.logged_at, MealLog.meal_type, MealLogItem)
        .outerjoin(MealLogItem, MealLogItem.meal_log_id == MealLog.id)
        .filter(MealLog.member_id == member_id)
    )
    if since is not None:
        query = query.filter(MealLog.logged_at >= since)
    return query.all()


def _workout_item_rows(member_id, since=None):
    query = (
        db.session.query(WorkoutLog.id, WorkoutLog.logged_at, WorkoutLogItem)
        .outerjoin(WorkoutLogItem, WorkoutLogItem.workout_log_id == WorkoutLog.id)
        .filter(WorkoutLog.member_id == member_id)
    )
    if since is not None:
        query = query.filter(WorkoutLog.logged_at >= since)
    return query.all()


def progress_summary(member_id, now=None):
    now = now or utcnow()
    today = now.date()

    profile = db.session.get(MemberProfile, member_id)
    goals = db.session.get(MemberGoal, member_id)

    calorie_target = profile.target_calories if profile and (profile.target_calories or 0) > 0 else 2000
    weekly_minutes = (
        goals.weekly_workout_minutes
        if goals and (goals.weekly_workout_minutes or 0) > 0
        else DEFAULT_WEEKLY_WORKOUT_MINUTES
    )
    weekly_sessions_target = max(1, round_half_up(weekly_minutes / 30))

    meal_logs = MealLog.query.filter_by(member_id=member_id).all()
    workout_rows = _workout_item_rows(member_id)
    weights = WeightLog.query.filter_by(member_id=member_id).order_by(WeightLog.logged_at.asc()).all()

    timestamps = [m.logged_at for m in meal_logs]
    timestamps += [row[1] for row in workout_rows]
    timestamps += [w.logged_at for w in weights]
    started_at = min(timestamps) if timestamps else None
    days_active = len({ts.date() for ts in timestamps})

    workout_items = [(logged_at, item) for _, logged_at, item in workout_rows if item is not None]
    workouts_completed = len(workout_items)
    workouts_this_month = sum(
        1 for logged_at, _ in workout_items if (logged_at.year, logged_at.month) == (today.year, today.month)
    )

    meal_count = len(meal_logs)
    meals_per_day_avg = round(meal_count / days_active, 1) if days_active else 0

    profile_weight = profile.weight_kg if profile else None
    start_weight = weights[0].weight_kg if weights else profile_weight
    current_weight = weights[-1].weight_kg if weights else profile_weight
    if start_weight is not None and current_weight is not None:
        weight_change = round(current_weight - start_weight, 1)
        total_lost = round(start_weight - current_weight, 1)
    else:
        weight_change = total_lost = None

    # Weight chart: daily average over the last 180 days
    chart_since = now - timedelta(days=180)
    by_day = defaultdict(list)
    for w in weights:
        if w.logged_at >= chart_since:
            by_day[w.logged_at.date()].append(w.weight_kg)
    weight_data = [
        {"date": day.isoformat(), "weight": sum(values) / len(values)}
        for day, values in sorted(by_day.items())
    ]
    if not weight_data and start_weight is not None and current_weight is not None:
        start_day = started_at.date().isoformat() if started_at else today.isoformat()
        weight_data = [
            {"date": start_day, "weight": start_weight},
            {"date": today.isoformat(), "weight": current_weight},
        ]

    # Workout sessions per ISO week, last four weeks
    this_week = today - timedelta(days=today.weekday())
    first_week_day = today - timedelta(days=21)
    first_week = first_week_day - timedelta(days=first_week_day.weekday())
    weeks = []
    week = first_week
    while week <= this_week:
        weeks.append(week)
        week += timedelta(days=7)
    sessions = defaultdict(int)
    for logged_at, _ in workout_items:
        d = logged_at.date()
        sessions[d - timedelta(days=d.weekday())] += 1
    workout_data = [{"week_start": w.isoformat(), "sessions": sessions.get(w, 0)} for w in weeks]

    # Calories, last seven days
    first_day = today - timedelta(days=6)
    calories_by_day = defaultdict(float)
    for _, logged_at, _, item in _meal_item_rows(member_id, datetime.combine(first_day, time.min)):
        if item is not None:
            calories_by_day[logged_at.date()] += item.calories or 0
    calorie_data = []
    for offset in range(7):
        day = first_day + timedelta(days=offset)
        calorie_data.append({
            "date": day.isoformat(),
            "day": day.strftime("%a"),
            "calories": calories_by_day.get(day, 0),
            "target": calorie_target,
        })

    consistent = sum(
        1 for row in calorie_data
        if calorie_target * (1 - CALORIE_TOLERANCE) <= row["calories"] <= calorie_target * (1 + CALORIE_TOLERANCE)
    )
    consistency_percent = round_half_up(consistent / len(calorie_data) * 100) if calorie_data else 0

    return {
        "profile": {"is_private": bool(profile.is_private) if profile else False},
        "stats": {
            "started_at": started_at.isoformat() if started_at else None,
            "days_active": days_active,
            "start_weight_kg": start_weight,
            "current_weight_kg": current_weight,
            "weight_change_kg": weight_change,
            "total_weight_lost_kg": total_lost,
            "workouts_completed": workouts_completed,
            "workouts_this_month": workouts_this_month,
            "meal_logs": meal_count,
            "meals_per_day_avg": meals_per_day_avg,
            "calorie_consistency_percent": consistency_percent,
        },
        "targets": {
            "calorie_target": calorie_target,
            "weekly_workout_sessions_target": weekly_sessions_target,
            "monthly_workout_sessions_target": weekly_sessions_target * 4,
        },
        "charts": {
            "weight": weight_data,
            "workouts": workout_data,
            "calories": calorie_data,
        },
    }


def dashboard_summary(member_id, days=14, now=None):
    now = now or utcnow()
    from_day = now.date() - timedelta(days=days - 1)
    since = datetime.combine(from_day, time.min)

    totals = defaultdict(lambda: {"calories_consumed": 0.0, "calories_burned": 0.0, "protein": 0.0, "carbs": 0.0, "fat": 0.0})
    meal_activity = {}
    for meal_id, logged_at, meal_type, item in _meal_item_rows(member_id, since):
        activity = meal_activity.setdefault(meal_id, {
            "type": "meal", "id": meal_id, "logged_at": logged_at, "meal_type": meal_type, "calories": 0.0,
        })
        if item is None:
            continue
        day = totals[logged_at.date()]
        day["calories_consumed"] += item.calories or 0
        day["protein"] += item.protein or 0
        day["carbs"] += item.carbs or 0
        day["fat"] += item.fat or 0
        activity["calories"] += item.calories or 0

    workout_activity = {}
    for log_id, logged_at, item in _workout_item_rows(member_id, since):
        activity = workout_activity.setdefault(log_id, {
            "type": "workout", "id": log_id, "logged_at": logged_at, "calories": 0.0,
        })
        if item is None:
            continue
        totals[logged_at.date()]["calories_burned"] += item.calories_burned or 0
        activity["calories"] += item.calories_burned or 0

    days_out = [
        dict({"date": day.isoformat(), "label": f"{day.strftime('%b')} {day.day}"}, **values)
        for day, values in sorted(totals.items())
    ]

    activities = sorted(
        list(meal_activity.values()) + list(workout_activity.values()),
        key=lambda a: a["logged_at"],
    )
    for activity in activities:
        activity["logged_at"] = activity["logged_at"].isoformat()

    return {"days": days_out, "activities": activities}
