"""
Balance Score Calculator
How evenly training is spread across eight body regions

CONCEPTS DEMONSTRATED:
1. Primary-only Aggregation - an exercise counts for its main target only
2. Normalization - each region relative to the most trained one
3. Dispersion as a Score - 100 minus the standard deviation of the
   normalized values
"""

import logging
from collections import defaultdict
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np

from .catalog import AnalyticsConfig, default_config
from .history_index import counting_sets
from .models import BalanceCategory, BalanceReport, CategoryContribution, WorkoutSession, align_sessions
from .numeric import round_half_up
from .volume import week_bounds

logger = logging.getLogger(__name__)

TIME_RANGES = ('week', 'month', 'all')


def balance_rating(score: int) -> str:
    if score >= 80:
        return 'Very balanced'
    elif score >= 60:
        return 'Well balanced'
    elif score >= 40:
        return 'Needs improvement'
    else:
        return 'Unbalanced'


def month_bounds(now: datetime) -> Tuple[datetime, datetime]:
    start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    if start.month == 12:
        end = start.replace(year=start.year + 1, month=1)
    else:
        end = start.replace(month=start.month + 1)
    return start, end


def filter_sessions_by_range(sessions: Iterable[WorkoutSession], time_range: str,
                             now: datetime) -> List[WorkoutSession]:
    """
    Restrict sessions to the current week, the current month, or keep all.

    Raises:
        ValueError: unknown time_range
    """
    if time_range not in TIME_RANGES:
        raise ValueError(f"Unknown time range '{time_range}', expected one of {TIME_RANGES}")

    sessions = align_sessions(sessions, now)
    if time_range == 'all':
        return sessions

    start, end = week_bounds(now) if time_range == 'week' else month_bounds(now)
    return [s for s in sessions if start <= s.start_time < end]


class PrimaryOnlyAggregator:
    """
    Buckets sets by the category of each exercise's first listed muscle.

    Secondary muscles are ignored entirely: the balance view compares
    broad regions, not per-muscle stimulus.
    """

    def __init__(self, config: AnalyticsConfig):
        self.config = config
        self.sets: Dict[BalanceCategory, float] = {category: 0 for category in BalanceCategory}
        self._contributions: Dict[BalanceCategory, Dict[Tuple[str, str], int]] = defaultdict(dict)

    def add_session(self, session: WorkoutSession) -> None:
        for exercise in session.exercises:
            completed = len(counting_sets(exercise.sets))
            involvement = self.config.catalog.muscle_involvement(exercise.exercise_id)
            if completed == 0 or not involvement:
                continue

            primary_muscle = involvement[0].muscle
            category = self.config.category_of.get(primary_muscle)
            if category is None:
                continue

            self.sets[category] += completed
            key = (self.config.catalog.label(exercise.exercise_id), primary_muscle)
            by_exercise = self._contributions[category]
            by_exercise[key] = by_exercise.get(key, 0) + completed

    def contributions(self) -> Dict[BalanceCategory, Tuple[CategoryContribution, ...]]:
        result = {}
        for category in BalanceCategory:
            items = [
                CategoryContribution(exercise_label=label, muscle=muscle, sets=sets)
                for (label, muscle), sets in self._contributions.get(category, {}).items()
            ]
            items.sort(key=lambda c: c.sets, reverse=True)
            result[category] = tuple(items)
        return result


def normalize(per_category_sets: Dict[BalanceCategory, float]) -> Dict[BalanceCategory, int]:
    """Each bucket as a percentage of the largest one"""
    max_sets = max(max(per_category_sets.values(), default=0), 1)
    return {category: round_half_up(sets / max_sets * 100) for category, sets in per_category_sets.items()}


def score_from_normalized(normalized: Dict[BalanceCategory, int]) -> int:
    values = np.array(list(normalized.values()), dtype=float)
    variance = float(np.var(values))  # population variance
    return max(0, round_half_up(100 - np.sqrt(variance)))


def distribution_stats(per_category_sets: Dict[BalanceCategory, float]) -> Dict:
    """Total and average sets plus the most and least trained category"""
    trained = [(category, sets) for category, sets in per_category_sets.items() if sets > 0]
    total = sum(sets for _, sets in trained)

    # Stable sort: ties keep category order
    ranked = sorted(trained, key=lambda item: item[1], reverse=True)
    untrained = [category for category, sets in per_category_sets.items() if sets <= 0]

    return {
        'total_sets': total,
        'average_sets': round_half_up(total / len(trained)) if trained else 0,
        'most_trained': ranked[0][0] if ranked else None,
        'least_trained': untrained[0] if untrained else (ranked[-1][0] if ranked else None),
    }


def compute_balance_score(sessions: Iterable[WorkoutSession],
                          config: Optional[AnalyticsConfig] = None) -> BalanceReport:
    """
    Score the distribution of training across the balance categories.

    Args:
        sessions: Workout sessions to include (pre-filter for a time range)
        config: Static tables; the standard ones when omitted

    Returns:
        BalanceReport; score is None when there are no sessions at all
    """
    config = config or default_config()
    sessions = list(sessions)

    aggregator = PrimaryOnlyAggregator(config)
    for session in sessions:
        aggregator.add_session(session)

    per_category = dict(aggregator.sets)
    normalized = normalize(per_category)
    stats = distribution_stats(per_category)

    if not sessions:
        return BalanceReport(per_category_sets=per_category, normalized=normalized, score=None,
                             contributions=aggregator.contributions(), **stats)

    score = score_from_normalized(normalized)
    logger.debug("Balance score %d over %d sessions", score, len(sessions))

    return BalanceReport(
        per_category_sets=per_category,
        normalized=normalized,
        score=score,
        rating=balance_rating(score),
        contributions=aggregator.contributions(),
        workout_count=len(sessions),
        **stats,
    )
