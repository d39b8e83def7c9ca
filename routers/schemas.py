"""
Request Schemas & Serializers
JSON shapes accepted and returned by the analytics endpoints

Request fields accept both snake_case and the tracker's camelCase names
(startTime, isWarmup, hoursSlept, ...).
"""

from datetime import date as calendar_date, datetime, timezone
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from services import (
    BalanceReport,
    ExerciseSet,
    MuscleRecoverySnapshot,
    SleepEntry,
    TrainingDay,
    VolumeRecord,
    WorkoutExercise,
    WorkoutSession,
)
from services.models import RecoverySummary, TrainingDayReadiness


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Timestamps without a timezone are interpreted as UTC"""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class _Schema(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SetIn(_Schema):
    completed: bool = True
    weight: float = 0
    reps: int = 0
    rir: Optional[float] = None
    is_warmup: bool = False
    is_assisted: bool = False

    def to_domain(self) -> ExerciseSet:
        return ExerciseSet(completed=self.completed, weight=self.weight, reps=self.reps, rir=self.rir,
                           is_warmup=self.is_warmup, is_assisted=self.is_assisted)


class ExerciseIn(_Schema):
    exercise_id: str
    sets: List[SetIn] = Field(default_factory=list)

    def to_domain(self) -> WorkoutExercise:
        return WorkoutExercise(exercise_id=self.exercise_id, sets=tuple(s.to_domain() for s in self.sets))


class SessionIn(_Schema):
    id: Optional[str] = None
    name: Optional[str] = None
    start_time: datetime
    end_time: Optional[datetime] = None
    exercises: List[ExerciseIn] = Field(default_factory=list)

    @field_validator('start_time', 'end_time')
    @classmethod
    def normalize_times(cls, value):
        return as_utc(value)

    def to_domain(self) -> WorkoutSession:
        return WorkoutSession(id=self.id, name=self.name, start_time=self.start_time, end_time=self.end_time,
                              exercises=tuple(e.to_domain() for e in self.exercises))


class SleepIn(_Schema):
    date: calendar_date
    hours_slept: float
    quality: int = Field(ge=1, le=5)

    def to_domain(self) -> SleepEntry:
        return SleepEntry(date=self.date, hours_slept=self.hours_slept, quality=self.quality)


class TrainingDayIn(_Schema):
    id: Optional[str] = None
    name: str
    exercise_ids: List[str] = Field(default_factory=list)

    def to_domain(self) -> TrainingDay:
        return TrainingDay(id=self.id, name=self.name, exercise_ids=tuple(self.exercise_ids))


class SnapshotRequest(_Schema):
    """Sessions plus an optional reference time"""
    sessions: List[SessionIn] = Field(default_factory=list)
    now: Optional[datetime] = None

    @field_validator('now')
    @classmethod
    def normalize_now(cls, value):
        return as_utc(value)

    def domain_sessions(self) -> List[WorkoutSession]:
        return [s.to_domain() for s in self.sessions]


class RecoveryRequest(SnapshotRequest):
    sleep_entries: List[SleepIn] = Field(default_factory=list)
    enabled_muscles: Optional[List[str]] = None
    training_days: List[TrainingDayIn] = Field(default_factory=list)


class BalanceRequest(SnapshotRequest):
    time_range: str = 'all'


# ============================================
# Serializers
# ============================================

def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def snapshot_to_dict(snapshot: MuscleRecoverySnapshot) -> Dict:
    return {
        'muscle': snapshot.muscle,
        'recovery_percent': snapshot.recovery_percent,
        'hours_remaining': snapshot.hours_remaining,
        'status': snapshot.status.value,
        'last_trained_time': _iso(snapshot.last_trained_time),
        'last_exercise': snapshot.last_exercise_label,
    }


def summary_to_dict(summary: RecoverySummary) -> Dict:
    return {
        'average_recovery': summary.average_recovery,
        'ready': summary.ready_count,
        'recovering': summary.recovering_count,
        'tired': summary.tired_count,
    }


def readiness_to_dict(readiness: TrainingDayReadiness) -> Dict:
    return {
        'id': readiness.id,
        'name': readiness.name,
        'average_recovery': readiness.average_recovery,
        'muscle_count': len(readiness.muscles),
        'muscles': [snapshot_to_dict(m) for m in readiness.muscles],
        'ready_muscles': readiness.ready_muscles,
        'recovering_muscles': readiness.recovering_muscles,
        'tired_muscles': readiness.tired_muscles,
    }


def volume_to_dict(record: VolumeRecord) -> Dict:
    return {
        'muscle': record.muscle,
        'primary_sets': record.primary_sets,
        'secondary_sets': record.secondary_sets,
        'effective_sets': record.effective_sets,
        'last_week_effective_sets': record.last_week_effective_sets,
        'trend': record.trend,
        'target_range': {
            'min': record.band.min,
            'optimal': record.band.optimal,
            'max': record.band.max,
        },
        'status': record.status.value,
        'percent_of_optimal': record.percent_of_optimal,
        'deviation': record.deviation,
        'sets_to_min': record.sets_to_min,
        'sets_over_max': record.sets_over_max,
    }


def balance_to_dict(report: BalanceReport, time_range: str) -> Dict:
    categories = [
        {
            'category': category.value,
            'sets': sets,
            'value': report.normalized[category],
            'exercises': [
                {'exercise': c.exercise_label, 'muscle': c.muscle, 'sets': c.sets}
                for c in report.contributions.get(category, ())
            ],
        }
        for category, sets in report.per_category_sets.items()
    ]
    categories.sort(key=lambda c: c['sets'], reverse=True)

    result = {
        'time_range': time_range,
        'score': report.score,
        'rating': report.rating,
        'categories': categories,
        'stats': {
            'total_sets': report.total_sets,
            'average_sets': report.average_sets,
            'most_trained': report.most_trained.value if report.most_trained else None,
            'least_trained': report.least_trained.value if report.least_trained else None,
            'workout_count': report.workout_count,
        },
    }
    if not report.has_data:
        result['message'] = 'No workouts recorded - train to see your balance'
    return result
