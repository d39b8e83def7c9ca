"""Shared fixtures and builders for the analytics tests."""

import os

# Must be set before config/database are imported anywhere
os.environ["DATABASE_URL"] = "sqlite://"

from datetime import datetime, timedelta, timezone

import pytest

from services import ExerciseSet, WorkoutExercise, WorkoutSession, default_config

# Wednesday noon; the calendar week started Monday 2024-03-11
NOW = datetime(2024, 3, 13, 12, 0, tzinfo=timezone.utc)


def working_sets(count, weight=20.0, reps=10, rir=2, warmup=False, completed=True):
    return tuple(
        ExerciseSet(completed=completed, weight=weight, reps=reps, rir=rir, is_warmup=warmup)
        for _ in range(count)
    )


def exercise(exercise_id, *set_groups):
    sets = tuple(s for group in set_groups for s in group)
    return WorkoutExercise(exercise_id=exercise_id, sets=sets)


def session_ago(hours, *exercises, duration_minutes=60, now=NOW):
    """A session that ended `hours` before now"""
    end = now - timedelta(hours=hours)
    return WorkoutSession(start_time=end - timedelta(minutes=duration_minutes), end_time=end,
                          exercises=tuple(exercises))


def session_at(start, *exercises):
    return WorkoutSession(start_time=start, end_time=start + timedelta(hours=1), exercises=tuple(exercises))


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def config():
    return default_config()


def insert_workout(conn, workout_id, start, end=None, name=None, sets=()):
    """Insert a workout row plus (exercise_id, weight, reps, rir, completed, is_warmup) set rows"""
    from sqlalchemy import text

    conn.execute(text("INSERT INTO workouts (id, name, start_time, end_time) VALUES (:id, :name, :start, :end)"), {
        "id": workout_id,
        "name": name,
        "start": start.strftime('%Y-%m-%d %H:%M:%S'),
        "end": end.strftime('%Y-%m-%d %H:%M:%S') if end else None,
    })
    for number, (exercise_id, weight, reps, rir, completed, is_warmup) in enumerate(sets):
        conn.execute(text("""
            INSERT INTO workout_sets
            (id, workout_id, exercise_id, set_number, weight, reps, rir, completed, is_warmup, is_assisted)
            VALUES (:id, :workout_id, :exercise_id, :set_number, :weight, :reps, :rir, :completed, :is_warmup, :is_assisted)
        """), {
            "id": workout_id * 100 + number,
            "workout_id": workout_id,
            "exercise_id": exercise_id,
            "set_number": number,
            "weight": weight,
            "reps": reps,
            "rir": rir,
            "completed": completed,
            "is_warmup": is_warmup,
            "is_assisted": False,
        })


@pytest.fixture
def db_engine():
    """The shared in-memory database with empty analytics tables"""
    from sqlalchemy import text

    from database import create_tables, engine

    create_tables(engine)
    yield engine
    with engine.begin() as conn:
        conn.execute(text("DELETE FROM workout_sets"))
        conn.execute(text("DELETE FROM workouts"))
        conn.execute(text("DELETE FROM sleep_log"))
