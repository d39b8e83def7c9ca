"""
Analytics Data Model
Immutable records passed into and returned from the analytics core

Every recompute builds fresh objects; nothing here is mutated after
construction.
"""

from dataclasses import dataclass, field, replace
from datetime import date, datetime, timezone
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple


class MuscleRole(str, Enum):
    """How much an exercise stresses a muscle"""
    PRIMARY = "primary"
    SECONDARY = "secondary"


class VolumeStatus(str, Enum):
    """Weekly volume relative to the landmark band"""
    UNDER = "under"
    OPTIMAL = "optimal"
    OVER = "over"


class RecoveryStatus(str, Enum):
    """Traffic-light bucket for a recovery percentage"""
    READY = "ready"
    RECOVERING = "recovering"
    TIRED = "tired"


class BalanceCategory(str, Enum):
    """Coarse body regions used for the balance score"""
    CHEST = "Chest"
    BACK = "Back"
    SHOULDERS = "Shoulders"
    BICEPS = "Biceps"
    TRICEPS = "Triceps"
    FOREARMS = "Forearms"
    LEGS = "Legs"
    CORE = "Core"


# ============================================
# Inputs
# ============================================

@dataclass(frozen=True)
class ExerciseSet:
    """
    A single logged set.

    weight may be negative for assisted exercises (the assistance load);
    the analytics only ever count sets, never sum signed weight.
    """
    completed: bool
    weight: float
    reps: int
    rir: Optional[float] = None
    is_warmup: bool = False
    is_assisted: bool = False

    @property
    def counts(self) -> bool:
        """Completed with a positive load"""
        return self.completed and self.weight > 0


@dataclass(frozen=True)
class WorkoutExercise:
    exercise_id: str
    sets: Tuple[ExerciseSet, ...] = ()


@dataclass(frozen=True)
class WorkoutSession:
    start_time: datetime
    end_time: Optional[datetime] = None
    exercises: Tuple[WorkoutExercise, ...] = ()
    id: Optional[str] = None
    name: Optional[str] = None

    @property
    def time(self) -> datetime:
        """Time the session's training stimulus is dated at"""
        return self.end_time or self.start_time


@dataclass(frozen=True)
class MuscleInvolvement:
    muscle: str
    role: MuscleRole


@dataclass(frozen=True)
class SleepEntry:
    date: date
    hours_slept: float
    quality: int  # 1..5


@dataclass(frozen=True)
class TrainingDay:
    """A planned training day: a name and the exercises it contains"""
    name: str
    exercise_ids: Tuple[str, ...] = ()
    id: Optional[str] = None


# ============================================
# Derived / outputs
# ============================================

@dataclass(frozen=True)
class MuscleFatigueEntry:
    """One (session, exercise, muscle) stimulus"""
    time: datetime
    role: MuscleRole
    set_count: int
    avg_rir: float
    exercise_label: str


@dataclass(frozen=True)
class MuscleRecoverySnapshot:
    muscle: str
    recovery_percent: int
    hours_remaining: int
    last_trained_time: Optional[datetime] = None
    last_exercise_label: Optional[str] = None

    @property
    def status(self) -> RecoveryStatus:
        return recovery_status(self.recovery_percent)


@dataclass(frozen=True)
class RecoverySummary:
    average_recovery: int
    ready_count: int
    recovering_count: int
    tired_count: int


@dataclass(frozen=True)
class TrainingDayReadiness:
    name: str
    average_recovery: int
    muscles: Tuple[MuscleRecoverySnapshot, ...]
    id: Optional[str] = None

    @property
    def ready_muscles(self) -> List[str]:
        return [m.muscle for m in self.muscles if m.status == RecoveryStatus.READY]

    @property
    def recovering_muscles(self) -> List[str]:
        return [m.muscle for m in self.muscles if m.status == RecoveryStatus.RECOVERING]

    @property
    def tired_muscles(self) -> List[str]:
        return [m.muscle for m in self.muscles if m.status == RecoveryStatus.TIRED]


@dataclass(frozen=True)
class VolumeBand:
    """Weekly effective-set landmarks for one muscle"""
    min: float
    optimal: float
    max: float


@dataclass(frozen=True)
class VolumeRecord:
    muscle: str
    primary_sets: int
    secondary_sets: int
    effective_sets: float
    last_week_effective_sets: float
    trend: float
    band: VolumeBand
    status: VolumeStatus
    percent_of_optimal: int

    @property
    def deviation(self) -> float:
        """Distance from the optimal landmark, in effective sets"""
        return abs(self.effective_sets - self.band.optimal)

    @property
    def sets_to_min(self) -> float:
        """Effective sets still missing to reach the minimum landmark"""
        return max(0.0, self.band.min - self.effective_sets)

    @property
    def sets_over_max(self) -> float:
        return max(0.0, self.effective_sets - self.band.max)


@dataclass(frozen=True)
class CategoryContribution:
    exercise_label: str
    muscle: str
    sets: int


@dataclass(frozen=True)
class BalanceReport:
    """
    Training distribution across the balance categories.

    score is None when no workouts were recorded ("no data"); an empty
    history must not read as a perfectly balanced one.

    least_trained prefers a category with no sets at all; most_trained is
    None until something was trained.
    """
    per_category_sets: Dict[BalanceCategory, float]
    normalized: Dict[BalanceCategory, int]
    score: Optional[int]
    rating: Optional[str] = None
    contributions: Dict[BalanceCategory, Tuple[CategoryContribution, ...]] = field(default_factory=dict)
    total_sets: float = 0
    average_sets: int = 0  # per trained category
    most_trained: Optional[BalanceCategory] = None
    least_trained: Optional[BalanceCategory] = None
    workout_count: int = 0

    @property
    def has_data(self) -> bool:
        return self.score is not None


# Recovery percentage thresholds for the traffic-light buckets
READY_THRESHOLD = 80
RECOVERING_THRESHOLD = 50


def recovery_status(recovery_percent: float) -> RecoveryStatus:
    if recovery_percent >= READY_THRESHOLD:
        return RecoveryStatus.READY
    if recovery_percent >= RECOVERING_THRESHOLD:
        return RecoveryStatus.RECOVERING
    return RecoveryStatus.TIRED


# ============================================
# Timezones
# ============================================

def align_to(value: Optional[datetime], reference: datetime) -> Optional[datetime]:
    """
    Express value so it compares with reference.

    Naive timestamps are read as UTC on either side: a naive value next to
    an aware reference gets UTC attached, an aware value next to a naive
    reference becomes naive UTC.
    """
    if value is None:
        return None
    if reference.tzinfo is not None:
        return value.replace(tzinfo=timezone.utc) if value.tzinfo is None else value
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def align_sessions(sessions: Iterable[WorkoutSession], now: datetime) -> List[WorkoutSession]:
    aligned = []
    for session in sessions:
        start = align_to(session.start_time, now)
        end = align_to(session.end_time, now)
        if start is session.start_time and end is session.end_time:
            aligned.append(session)
        else:
            aligned.append(replace(session, start_time=start, end_time=end))
    return aligned
