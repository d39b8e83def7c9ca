"""
Fatigue Decay Model
Per-muscle fatigue score from recent training

CONCEPTS DEMONSTRATED:
1. Linear Decay - a stimulus fades to zero over the muscle's recovery time
2. Multiplicative Modifiers - effort (RIR), set count and sleep scale it
3. Max Aggregation - the most fatiguing active session dominates; sessions
   never stack, so frequent training cannot push fatigue past 1
"""

import logging
import math
from datetime import datetime, timedelta
from typing import Dict, Iterable, Mapping

from .history_index import FatigueIndex
from .models import MuscleFatigueEntry, MuscleRole, align_to
from .numeric import clamp

logger = logging.getLogger(__name__)

FATIGUE_WINDOW_DAYS = 7


def rir_factor(avg_rir: float) -> float:
    """Easier sets (more reps in reserve) fatigue less"""
    return 1 - avg_rir / 20


def sets_factor(set_count: int) -> float:
    """Diminishing returns: 10 sets are not 10x as fatiguing as one"""
    return min(1.0, 0.5 + math.log2(set_count + 1) / 6)


def effective_recovery_hours(base_hours: float, role: MuscleRole,
                             secondary_multiplier: float, sleep_multiplier: float) -> float:
    effective_base = base_hours if role == MuscleRole.PRIMARY else base_hours * secondary_multiplier
    if sleep_multiplier <= 0:
        return 0.0
    return effective_base / sleep_multiplier


def entry_fatigue(entry: MuscleFatigueEntry, now: datetime, base_hours: float,
                  secondary_multiplier: float, sleep_multiplier: float) -> float:
    """Weighted fatigue left over from a single stimulus"""
    recovery_hours = effective_recovery_hours(base_hours, entry.role, secondary_multiplier, sleep_multiplier)
    hours_since = max(0.0, (now - align_to(entry.time, now)).total_seconds() / 3600)

    if recovery_hours <= 0:
        # Misconfigured table: saturate instead of dividing by zero
        contribution = 1.0
    else:
        contribution = max(0.0, 1 - hours_since / recovery_hours)

    return contribution * rir_factor(entry.avg_rir) * sets_factor(entry.set_count)


def muscle_fatigue(entries: Iterable[MuscleFatigueEntry], now: datetime, base_hours: float,
                   secondary_multiplier: float, sleep_multiplier: float) -> float:
    """
    Fatigue of one muscle in [0, 1].

    Only stimuli from the last seven days are considered; the result is
    the maximum over them, not the sum.
    """
    cutoff = now - timedelta(days=FATIGUE_WINDOW_DAYS)
    fatigue = 0.0
    for entry in entries:
        if align_to(entry.time, now) < cutoff:
            continue
        fatigue = max(fatigue, entry_fatigue(entry, now, base_hours, secondary_multiplier, sleep_multiplier))
    return clamp(fatigue, 0.0, 1.0)


def compute_fatigue(index: FatigueIndex, base_recovery_hours: Mapping[str, float],
                    secondary_multiplier: float, sleep_multiplier: float,
                    now: datetime) -> Dict[str, float]:
    """Fatigue for every muscle present in the index"""
    fatigue = {
        muscle: muscle_fatigue(entries, now, base_recovery_hours.get(muscle, 0),
                               secondary_multiplier, sleep_multiplier)
        for muscle, entries in index.entries.items()
    }
    logger.debug("Fatigue computed for %d muscles (sleep multiplier %.3f)", len(fatigue), sleep_multiplier)
    return fatigue
