"""
Analytics Services Package

Contains the recovery & volume analytics core:
- compute_recovery: per-muscle recovery % and hours to full recovery
- compute_weekly_volume: weekly effective sets vs volume landmarks
- compute_balance_score: training distribution across body regions

All of them are pure functions of their inputs and an explicit `now`.
"""

from .catalog import AnalyticsConfig, ExerciseCatalog, default_config
from .models import (
    BalanceCategory,
    BalanceReport,
    ExerciseSet,
    MuscleRecoverySnapshot,
    MuscleRole,
    SleepEntry,
    TrainingDay,
    VolumeRecord,
    VolumeStatus,
    WorkoutExercise,
    WorkoutSession,
)
from .recovery import compute_recovery, summarize_recovery, training_day_readiness
from .sleep import sleep_recovery_multiplier
from .volume import compute_weekly_volume, prioritize_volume, week_bounds
from .balance import compute_balance_score, filter_sessions_by_range

__all__ = [
    'AnalyticsConfig',
    'ExerciseCatalog',
    'default_config',
    'BalanceCategory',
    'BalanceReport',
    'ExerciseSet',
    'MuscleRecoverySnapshot',
    'MuscleRole',
    'SleepEntry',
    'TrainingDay',
    'VolumeRecord',
    'VolumeStatus',
    'WorkoutExercise',
    'WorkoutSession',
    'compute_recovery',
    'summarize_recovery',
    'training_day_readiness',
    'sleep_recovery_multiplier',
    'compute_weekly_volume',
    'prioritize_volume',
    'week_bounds',
    'compute_balance_score',
    'filter_sessions_by_range',
]
