"""
Snapshot Queries
Loads workout sessions and sleep entries from the tracker database
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import List

import pandas as pd
from sqlalchemy import text
from sqlalchemy.orm import Session

from services import ExerciseSet, SleepEntry, WorkoutExercise, WorkoutSession

logger = logging.getLogger(__name__)

WORKOUT_COLUMNS = ['id', 'name', 'start_time', 'end_time']
SET_COLUMNS = ['workout_id', 'exercise_id', 'set_number', 'weight', 'reps', 'rir',
               'completed', 'is_warmup', 'is_assisted']
SLEEP_COLUMNS = ['sleep_date', 'hours_slept', 'quality']


def _timestamp(value: datetime) -> str:
    """Bind timestamps as plain UTC strings so every backend compares them the same way"""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime('%Y-%m-%d %H:%M:%S')


def _to_utc(value):
    """Timestamp in UTC; naive values are taken to be UTC already"""
    if value is None or pd.isna(value):
        return pd.NaT
    stamp = pd.Timestamp(value)
    if stamp.tzinfo is None:
        return stamp.tz_localize('UTC')
    return stamp.tz_convert('UTC')


def _flag(value, default: bool) -> bool:
    if pd.isna(value):
        return default
    return bool(value)


def load_sessions(db: Session, now: datetime, days: int) -> List[WorkoutSession]:
    """
    Load sessions started within the last `days` days.

    Timestamps without a timezone are read as UTC.
    """
    since = _timestamp(now - timedelta(days=days))

    workouts_query = text("""
        SELECT id, name, start_time, end_time
        FROM workouts
        WHERE start_time >= :since
        ORDER BY start_time
    """)
    workouts_result = db.execute(workouts_query, {"since": since}).fetchall()
    workouts_df = pd.DataFrame(workouts_result, columns=WORKOUT_COLUMNS)

    if len(workouts_df) == 0:
        return []

    sets_query = text("""
        SELECT ws.workout_id, ws.exercise_id, ws.set_number, ws.weight, ws.reps, ws.rir,
               ws.completed, ws.is_warmup, ws.is_assisted
        FROM workout_sets ws
        JOIN workouts w ON ws.workout_id = w.id
        WHERE w.start_time >= :since
        ORDER BY ws.workout_id, ws.set_number
    """)
    sets_result = db.execute(sets_query, {"since": since}).fetchall()
    sets_df = pd.DataFrame(sets_result, columns=SET_COLUMNS)

    # Convert Decimal types to float for pandas compatibility
    sets_df['weight'] = pd.to_numeric(sets_df['weight'], errors='coerce').fillna(0)
    sets_df['reps'] = pd.to_numeric(sets_df['reps'], errors='coerce').fillna(0)
    sets_df['rir'] = pd.to_numeric(sets_df['rir'], errors='coerce')

    workouts_df['start_time'] = workouts_df['start_time'].map(_to_utc)
    workouts_df['end_time'] = workouts_df['end_time'].map(_to_utc)

    sets_by_workout = {workout_id: group for workout_id, group in sets_df.groupby('workout_id', sort=False)}

    sessions = []
    for row in workouts_df.itertuples(index=False):
        group = sets_by_workout.get(row.id)
        exercises = []
        if group is not None:
            # Exercises keep the order they were first logged in
            for exercise_id in pd.unique(group['exercise_id']):
                exercise_rows = group[group['exercise_id'] == exercise_id]
                sets = tuple(
                    ExerciseSet(
                        completed=_flag(s.completed, True),
                        weight=float(s.weight),
                        reps=int(s.reps),
                        rir=None if pd.isna(s.rir) else float(s.rir),
                        is_warmup=_flag(s.is_warmup, False),
                        is_assisted=_flag(s.is_assisted, False),
                    )
                    for s in exercise_rows.itertuples(index=False)
                )
                exercises.append(WorkoutExercise(exercise_id=str(exercise_id), sets=sets))

        sessions.append(WorkoutSession(
            id=str(row.id),
            name=None if pd.isna(row.name) else str(row.name),
            start_time=row.start_time.to_pydatetime(),
            end_time=None if pd.isna(row.end_time) else row.end_time.to_pydatetime(),
            exercises=tuple(exercises),
        ))

    logger.info("Loaded %d sessions (%d sets) since %s", len(sessions), len(sets_df), since)
    return sessions


def load_sleep_entries(db: Session, now: datetime, days: int) -> List[SleepEntry]:
    """Load sleep log rows dated within the last `days` days"""
    since = (now - timedelta(days=days)).strftime('%Y-%m-%d')

    query = text("""
        SELECT sleep_date, hours_slept, quality
        FROM sleep_log
        WHERE sleep_date >= :since
        ORDER BY sleep_date
    """)
    result = db.execute(query, {"since": since}).fetchall()
    df = pd.DataFrame(result, columns=SLEEP_COLUMNS)

    if len(df) == 0:
        return []

    df['sleep_date'] = pd.to_datetime(df['sleep_date']).dt.date
    df['hours_slept'] = pd.to_numeric(df['hours_slept'], errors='coerce').fillna(0)
    df['quality'] = pd.to_numeric(df['quality'], errors='coerce')
    df = df.dropna(subset=['quality'])

    return [
        SleepEntry(date=row.sleep_date, hours_slept=float(row.hours_slept), quality=int(row.quality))
        for row in df.itertuples(index=False)
    ]
