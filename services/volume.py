"""
Volume Landmark Classifier
Weekly effective sets per muscle against min/optimal/max landmarks

CONCEPTS DEMONSTRATED:
1. Calendar Bucketing - Monday-start weeks, this week vs last week
2. Weighted Aggregation - primary sets count 1.0, secondary sets 0.5
3. Threshold Classification - under / optimal / over the landmark band
"""

import logging
from collections import defaultdict
from datetime import datetime, timedelta
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from .catalog import AnalyticsConfig, default_config
from .history_index import InvolvementLookup
from .models import MuscleRole, VolumeBand, VolumeRecord, VolumeStatus, WorkoutSession, align_sessions
from .numeric import round1, round_half_up

logger = logging.getLogger(__name__)

SECONDARY_SET_WEIGHT = 0.5

# Display precedence: undertrained first, then overtrained, then on target
STATUS_ORDER = {
    VolumeStatus.UNDER: 0,
    VolumeStatus.OVER: 1,
    VolumeStatus.OPTIMAL: 2,
}


def week_bounds(now: datetime, weeks_back: int = 0) -> Tuple[datetime, datetime]:
    """[start, end) of the Monday-start week containing now, shifted back"""
    monday = (now - timedelta(days=now.weekday())).replace(hour=0, minute=0, second=0, microsecond=0)
    start = monday - timedelta(weeks=weeks_back)
    return start, start + timedelta(days=7)


class WeightedRoleAggregator:
    """
    Sums working sets per muscle, split by role.

    Warm-up sets are not volume and are ignored here, unlike in the
    fatigue index.
    """

    def __init__(self, involvement: InvolvementLookup):
        self.involvement = involvement
        self.primary: Dict[str, int] = defaultdict(int)
        self.secondary: Dict[str, int] = defaultdict(int)

    def add_session(self, session: WorkoutSession) -> None:
        for exercise in session.exercises:
            working_sets = sum(1 for s in exercise.sets if s.counts and not s.is_warmup)
            if working_sets == 0:
                continue
            for muscle_involvement in self.involvement(exercise.exercise_id):
                if muscle_involvement.role == MuscleRole.PRIMARY:
                    self.primary[muscle_involvement.muscle] += working_sets
                else:
                    self.secondary[muscle_involvement.muscle] += working_sets

    def effective_sets(self, muscle: str) -> float:
        return self.primary.get(muscle, 0) + self.secondary.get(muscle, 0) * SECONDARY_SET_WEIGHT


def classify(effective_sets: float, band: VolumeBand) -> VolumeStatus:
    if effective_sets < band.min:
        return VolumeStatus.UNDER
    if effective_sets > band.max:
        return VolumeStatus.OVER
    return VolumeStatus.OPTIMAL


def percent_of_optimal(effective_sets: float, band: VolumeBand) -> int:
    if band.optimal <= 0:
        return 0
    return round_half_up(effective_sets / band.optimal * 100)


def aggregate_week(sessions: Iterable[WorkoutSession], involvement: InvolvementLookup,
                   start: datetime, end: datetime) -> WeightedRoleAggregator:
    aggregator = WeightedRoleAggregator(involvement)
    for session in sessions:
        if start <= session.start_time < end:
            aggregator.add_session(session)
    return aggregator


def compute_weekly_volume(sessions: Iterable[WorkoutSession],
                          now: datetime,
                          config: Optional[AnalyticsConfig] = None) -> Dict[str, VolumeRecord]:
    """
    Classify this week's volume for every muscle with a landmark band.

    Args:
        sessions: Workout history; only this and last calendar week are read
        now: Reference time deciding which week is "this week"
        config: Static tables; the standard ones when omitted

    Returns:
        muscle -> VolumeRecord (use prioritize_volume for display order)
    """
    config = config or default_config()
    sessions = align_sessions(sessions, now)
    involvement = config.catalog.muscle_involvement

    this_week = aggregate_week(sessions, involvement, *week_bounds(now))
    last_week = aggregate_week(sessions, involvement, *week_bounds(now, weeks_back=1))

    records = {}
    for muscle, band in config.volume_landmarks.items():
        effective = this_week.effective_sets(muscle)
        previous = last_week.effective_sets(muscle)
        records[muscle] = VolumeRecord(
            muscle=muscle,
            primary_sets=this_week.primary.get(muscle, 0),
            secondary_sets=this_week.secondary.get(muscle, 0),
            effective_sets=effective,
            last_week_effective_sets=previous,
            trend=round1(effective - previous),
            band=band,
            status=classify(effective, band),
            percent_of_optimal=percent_of_optimal(effective, band),
        )

    logger.debug("Weekly volume classified for %d muscles", len(records))
    return records


def prioritize_volume(records: Mapping[str, VolumeRecord]) -> List[VolumeRecord]:
    """Under first, then over, then optimal; largest deviation first within a status"""
    return sorted(records.values(), key=lambda r: (STATUS_ORDER[r.status], -r.deviation, r.muscle))
