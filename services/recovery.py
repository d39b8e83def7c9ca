"""
Recovery Engine
Per-muscle recovery percentage and time to full recovery

CONCEPTS DEMONSTRATED:
1. Pipeline Composition - history index -> sleep modifier -> fatigue -> recovery
2. Explicit Clock - `now` is always passed in, never read here
3. Readiness Views - summaries for the dashboard and for planned training days
"""

import logging
import math
from datetime import datetime
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from .catalog import AnalyticsConfig, default_config
from .fatigue import compute_fatigue
from .history_index import InvolvementLookup, build_fatigue_index
from .models import (
    MuscleRecoverySnapshot,
    RecoveryStatus,
    RecoverySummary,
    SleepEntry,
    TrainingDay,
    TrainingDayReadiness,
    WorkoutSession,
    align_sessions,
)
from .numeric import clamp, round_half_up
from .sleep import sleep_recovery_multiplier

logger = logging.getLogger(__name__)


def recovery_percent(fatigue: float) -> int:
    return round_half_up(clamp((1 - fatigue) * 100, 0, 100))


def hours_remaining(percent: int, base_hours: float) -> int:
    """
    Hours until 100%, scaled from the muscle's base recovery time.

    Anything short of 100% is at least an hour away, even when the base
    time is missing or 0.
    """
    if percent >= 100:
        return 0
    return max(1, math.ceil((100 - percent) / 100 * base_hours))


def compute_recovery(sessions: Iterable[WorkoutSession],
                     sleep_entries: Iterable[SleepEntry],
                     now: datetime,
                     config: Optional[AnalyticsConfig] = None) -> Dict[str, MuscleRecoverySnapshot]:
    """
    Recovery snapshot for every tracked muscle.

    Args:
        sessions: Full workout history (older sessions simply stop mattering)
        sleep_entries: Sleep log; only the last three nights are used
        now: Reference time for all decay calculations
        config: Static tables; the standard ones when omitted

    Returns:
        muscle -> MuscleRecoverySnapshot, untrained muscles at 100%
    """
    config = config or default_config()

    sessions = align_sessions(sessions, now)
    index = build_fatigue_index(sessions, config.catalog.muscle_involvement, config.catalog.label)
    sleep_multiplier = sleep_recovery_multiplier(sleep_entries, now)
    fatigue = compute_fatigue(index, config.base_recovery_hours,
                              config.secondary_recovery_multiplier, sleep_multiplier, now)

    snapshots = {}
    for muscle in config.tracked_muscles:
        percent = recovery_percent(fatigue.get(muscle, 0.0))
        snapshots[muscle] = MuscleRecoverySnapshot(
            muscle=muscle,
            recovery_percent=percent,
            hours_remaining=hours_remaining(percent, config.recovery_hours(muscle)),
            last_trained_time=index.last_trained_time.get(muscle),
            last_exercise_label=index.last_exercise_label.get(muscle),
        )

    logger.debug("Recovery computed for %d muscles at %s", len(snapshots), now.isoformat())
    return snapshots


def _enabled(snapshots: Mapping[str, MuscleRecoverySnapshot],
             enabled_muscles: Optional[Sequence[str]]) -> List[MuscleRecoverySnapshot]:
    if enabled_muscles is None:
        return list(snapshots.values())
    return [snapshots[m] for m in enabled_muscles if m in snapshots]


def summarize_recovery(snapshots: Mapping[str, MuscleRecoverySnapshot],
                       enabled_muscles: Optional[Sequence[str]] = None) -> RecoverySummary:
    """Average recovery and traffic-light counts over the displayed muscles"""
    shown = _enabled(snapshots, enabled_muscles)
    if not shown:
        return RecoverySummary(average_recovery=100, ready_count=0, recovering_count=0, tired_count=0)

    statuses = [s.status for s in shown]
    return RecoverySummary(
        average_recovery=round_half_up(sum(s.recovery_percent for s in shown) / len(shown)),
        ready_count=statuses.count(RecoveryStatus.READY),
        recovering_count=statuses.count(RecoveryStatus.RECOVERING),
        tired_count=statuses.count(RecoveryStatus.TIRED),
    )


def training_day_readiness(training_days: Iterable[TrainingDay],
                           snapshots: Mapping[str, MuscleRecoverySnapshot],
                           involvement: InvolvementLookup,
                           enabled_muscles: Optional[Sequence[str]] = None) -> List[TrainingDayReadiness]:
    """
    How ready each planned training day's muscles are.

    Every muscle an exercise of the day touches counts once, regardless
    of role.
    """
    enabled = set(enabled_muscles) if enabled_muscles is not None else None
    readiness = []

    for day in training_days:
        seen = []
        for exercise_id in day.exercise_ids:
            for muscle_involvement in involvement(exercise_id):
                muscle = muscle_involvement.muscle
                if muscle in seen or muscle not in snapshots:
                    continue
                if enabled is not None and muscle not in enabled:
                    continue
                seen.append(muscle)

        muscles = tuple(snapshots[m] for m in seen)
        average = 100
        if muscles:
            average = round_half_up(sum(m.recovery_percent for m in muscles) / len(muscles))

        readiness.append(TrainingDayReadiness(name=day.name, average_recovery=average,
                                              muscles=muscles, id=day.id))

    return readiness
