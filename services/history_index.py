"""
Workout History Index
Turns raw sessions into per-muscle fatigue entries

Each (session, exercise, muscle) triple with at least one counting set
becomes one MuscleFatigueEntry. Warm-up sets are kept here: they fatigue
a muscle even though they do not count as weekly volume.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from .models import ExerciseSet, MuscleFatigueEntry, MuscleInvolvement, WorkoutSession

logger = logging.getLogger(__name__)

# RIR assumed for sets logged without one
DEFAULT_RIR = 2.0

InvolvementLookup = Callable[[str], Sequence[MuscleInvolvement]]


@dataclass(frozen=True)
class FatigueIndex:
    """Fatigue entries per muscle plus the most recent stimulus of each"""
    entries: Dict[str, Tuple[MuscleFatigueEntry, ...]] = field(default_factory=dict)
    last_trained_time: Dict[str, datetime] = field(default_factory=dict)
    last_exercise_label: Dict[str, str] = field(default_factory=dict)

    def for_muscle(self, muscle: str) -> Tuple[MuscleFatigueEntry, ...]:
        return self.entries.get(muscle, ())


def counting_sets(sets: Iterable[ExerciseSet]) -> List[ExerciseSet]:
    """Completed sets with a positive load, warm-ups included"""
    return [s for s in sets if s.counts]


def average_rir(sets: Sequence[ExerciseSet]) -> float:
    if not sets:
        return DEFAULT_RIR
    return sum(s.rir if s.rir is not None else DEFAULT_RIR for s in sets) / len(sets)


def build_fatigue_index(sessions: Iterable[WorkoutSession],
                        involvement: InvolvementLookup,
                        label: Optional[Callable[[str], str]] = None) -> FatigueIndex:
    """
    Index every session by the muscles it trained.

    Args:
        sessions: Workout history, any order
        involvement: exercise_id -> muscles it trains; unknown ids return []
        label: exercise_id -> display name (defaults to the id itself)

    Returns:
        FatigueIndex with chronologically ordered entries per muscle
    """
    label = label or (lambda exercise_id: exercise_id)
    collected: Dict[str, List[MuscleFatigueEntry]] = defaultdict(list)

    for session in sessions:
        session_time = session.time
        for exercise in session.exercises:
            completed = counting_sets(exercise.sets)
            if not completed:
                continue

            avg_rir = average_rir(completed)
            exercise_label = label(exercise.exercise_id)

            for muscle_involvement in involvement(exercise.exercise_id):
                collected[muscle_involvement.muscle].append(MuscleFatigueEntry(
                    time=session_time,
                    role=muscle_involvement.role,
                    set_count=len(completed),
                    avg_rir=avg_rir,
                    exercise_label=exercise_label,
                ))

    entries: Dict[str, Tuple[MuscleFatigueEntry, ...]] = {}
    last_time: Dict[str, datetime] = {}
    last_label: Dict[str, str] = {}

    for muscle, muscle_entries in collected.items():
        # Stable sort keeps the first-seen entry ahead on equal timestamps
        ordered = sorted(muscle_entries, key=lambda e: e.time)
        entries[muscle] = tuple(ordered)

        latest = ordered[0]
        for entry in ordered[1:]:
            if entry.time > latest.time:
                latest = entry
        last_time[muscle] = latest.time
        last_label[muscle] = latest.exercise_label

    logger.debug("Indexed %d muscles from workout history", len(entries))

    return FatigueIndex(entries=entries, last_trained_time=last_time, last_exercise_label=last_label)
