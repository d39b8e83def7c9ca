"""
Domain Configuration
Static tables the analytics run against

CONCEPTS DEMONSTRATED:
1. Domain Knowledge as Data - recovery times and volume landmarks as tables
2. Dependency Injection - tables travel in an AnalyticsConfig instead of
   being read as globals inside the computations
3. Lookup Collaborator - ExerciseCatalog answers exercise -> muscles
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from .models import BalanceCategory, MuscleInvolvement, MuscleRole, VolumeBand


ALL_MUSCLES: Tuple[str, ...] = (
    'chest', 'back', 'shoulders', 'biceps', 'triceps', 'forearms',
    'abs', 'quadriceps', 'hamstrings', 'calves', 'glutes', 'traps', 'lats',
    'adductors', 'abductors', 'lower_back', 'neck',
)

# Hours until a muscle trained as primary mover is fully recovered
BASE_RECOVERY_HOURS: Dict[str, float] = {
    'chest': 72, 'back': 72, 'shoulders': 48, 'biceps': 48, 'triceps': 48,
    'forearms': 24, 'abs': 24, 'quadriceps': 96, 'hamstrings': 72,
    'calves': 48, 'glutes': 72, 'traps': 48, 'lats': 72,
    'adductors': 48, 'abductors': 48, 'lower_back': 72, 'neck': 24,
}

# Secondary muscles only need 40% of their normal recovery time
SECONDARY_RECOVERY_MULTIPLIER = 0.4

# Weekly effective sets per muscle (evidence-based ranges)
VOLUME_LANDMARKS: Dict[str, VolumeBand] = {
    'chest': VolumeBand(min=10, optimal=16, max=22),
    'back': VolumeBand(min=10, optimal=16, max=22),
    'shoulders': VolumeBand(min=8, optimal=14, max=20),
    'biceps': VolumeBand(min=8, optimal=12, max=18),
    'triceps': VolumeBand(min=8, optimal=12, max=18),
    'forearms': VolumeBand(min=4, optimal=8, max=12),
    'abs': VolumeBand(min=6, optimal=10, max=15),
    'quadriceps': VolumeBand(min=10, optimal=16, max=22),
    'hamstrings': VolumeBand(min=8, optimal=12, max=18),
    'calves': VolumeBand(min=8, optimal=12, max=18),
    'glutes': VolumeBand(min=8, optimal=14, max=20),
    'traps': VolumeBand(min=6, optimal=10, max=14),
    'lats': VolumeBand(min=10, optimal=14, max=20),
    'adductors': VolumeBand(min=4, optimal=8, max=12),
    'abductors': VolumeBand(min=4, optimal=8, max=12),
    'lower_back': VolumeBand(min=4, optimal=8, max=12),
    'neck': VolumeBand(min=2, optimal=4, max=8),
}

CATEGORY_OF: Dict[str, BalanceCategory] = {
    'chest': BalanceCategory.CHEST,
    'back': BalanceCategory.BACK,
    'lats': BalanceCategory.BACK,
    'traps': BalanceCategory.BACK,
    'lower_back': BalanceCategory.BACK,
    'shoulders': BalanceCategory.SHOULDERS,
    'neck': BalanceCategory.SHOULDERS,
    'biceps': BalanceCategory.BICEPS,
    'triceps': BalanceCategory.TRICEPS,
    'forearms': BalanceCategory.FOREARMS,
    'quadriceps': BalanceCategory.LEGS,
    'hamstrings': BalanceCategory.LEGS,
    'calves': BalanceCategory.LEGS,
    'glutes': BalanceCategory.LEGS,
    'adductors': BalanceCategory.LEGS,
    'abductors': BalanceCategory.LEGS,
    'abs': BalanceCategory.CORE,
}

_P = MuscleRole.PRIMARY
_S = MuscleRole.SECONDARY

# ============================================
# Built-in exercise table
# ============================================
# id -> (display name, [(muscle, role), ...]); the first muscle listed is
# the exercise's main target

DEFAULT_EXERCISES: Dict[str, Tuple[str, List[Tuple[str, MuscleRole]]]] = {
    # Chest
    'ex1': ('Barbell Bench Press', [('chest', _P), ('triceps', _S), ('shoulders', _S)]),
    'ex2': ('Incline Bench Press', [('chest', _P), ('shoulders', _S), ('triceps', _S)]),
    'ex3': ('Dumbbell Flys', [('chest', _P)]),
    'ex4': ('Pec Deck', [('chest', _P)]),
    'ex5': ('Cable Crossover', [('chest', _P)]),
    'ex6': ('Dips', [('chest', _P), ('triceps', _S), ('shoulders', _S)]),
    'ex7': ('Push Ups', [('chest', _P), ('triceps', _S), ('shoulders', _S)]),
    # Back
    'ex8': ('Pull Ups', [('lats', _P), ('back', _P), ('biceps', _S)]),
    'ex9': ('Lat Pulldown', [('lats', _P), ('back', _S), ('biceps', _S)]),
    'ex10': ('Barbell Row', [('back', _P), ('lats', _P), ('biceps', _S)]),
    'ex11': ('Dumbbell Row', [('back', _P), ('lats', _S), ('biceps', _S)]),
    'ex12': ('T-Bar Row', [('back', _P), ('lats', _P)]),
    'ex13': ('Seated Cable Row', [('back', _P), ('lats', _S), ('biceps', _S)]),
    'ex14': ('Deadlift', [('back', _P), ('glutes', _P), ('hamstrings', _P), ('traps', _S)]),
    'ex15': ('Hyperextensions', [('back', _P), ('glutes', _S), ('hamstrings', _S)]),
    # Shoulders
    'ex16': ('Overhead Press', [('shoulders', _P), ('triceps', _S)]),
    'ex17': ('Lateral Raises', [('shoulders', _P)]),
    'ex18': ('Front Raises', [('shoulders', _P)]),
    'ex19': ('Reverse Flys', [('shoulders', _P), ('back', _S)]),
    'ex20': ('Arnold Press', [('shoulders', _P), ('triceps', _S)]),
    'ex21': ('Face Pulls', [('shoulders', _P), ('traps', _S)]),
    'ex22': ('Shrugs', [('traps', _P)]),
    # Arms
    'ex23': ('Dumbbell Curl', [('biceps', _P)]),
    'ex24': ('Hammer Curl', [('biceps', _P), ('forearms', _S)]),
    'ex25': ('Concentration Curl', [('biceps', _P)]),
    'ex26': ('Preacher Curl', [('biceps', _P)]),
    'ex27': ('Cable Curl', [('biceps', _P)]),
    'ex28': ('Skull Crushers', [('triceps', _P)]),
    'ex29': ('Tricep Pushdown', [('triceps', _P)]),
    'ex30': ('Overhead Tricep Extension', [('triceps', _P)]),
    'ex31': ('French Press', [('triceps', _P)]),
    'ex32': ('Close Grip Bench Press', [('triceps', _P), ('chest', _S)]),
    # Legs
    'ex33': ('Barbell Squat', [('quadriceps', _P), ('glutes', _P), ('hamstrings', _S)]),
    'ex34': ('Leg Press', [('quadriceps', _P), ('glutes', _S), ('hamstrings', _S)]),
    'ex35': ('Lunges', [('quadriceps', _P), ('glutes', _P), ('hamstrings', _S)]),
    'ex36': ('Leg Extension', [('quadriceps', _P)]),
    'ex37': ('Bulgarian Split Squat', [('quadriceps', _P), ('glutes', _P)]),
    'ex38': ('Front Squat', [('quadriceps', _P), ('glutes', _S)]),
    'ex39': ('Leg Curl', [('hamstrings', _P)]),
    'ex40': ('Romanian Deadlift', [('hamstrings', _P), ('glutes', _P), ('back', _S)]),
    'ex41': ('Good Mornings', [('hamstrings', _P), ('glutes', _S), ('back', _S)]),
    'ex42': ('Standing Calf Raise', [('calves', _P)]),
    'ex43': ('Seated Calf Raise', [('calves', _P)]),
    # Core
    'ex44': ('Crunches', [('abs', _P)]),
    'ex45': ('Plank', [('abs', _P)]),
    'ex46': ('Russian Twists', [('abs', _P)]),
    'ex47': ('Leg Raises', [('abs', _P)]),
    'ex48': ('Mountain Climbers', [('abs', _P)]),
    'ex49': ('Ab Wheel Rollout', [('abs', _P)]),
    'ex50': ('Hanging Leg Raise', [('abs', _P)]),
    # Hips
    'ex51': ('Adductor Machine', [('adductors', _P)]),
    'ex52': ('Cable Adduction', [('adductors', _P)]),
    'ex53': ('Sumo Squat', [('adductors', _P), ('glutes', _P), ('quadriceps', _S)]),
    'ex54': ('Copenhagen Plank', [('adductors', _P), ('abs', _S)]),
    'ex55': ('Abductor Machine', [('abductors', _P)]),
    'ex56': ('Cable Abduction', [('abductors', _P), ('glutes', _S)]),
    'ex57': ('Side Lying Hip Abduction', [('abductors', _P), ('glutes', _S)]),
    'ex58': ('Banded Lateral Walk', [('abductors', _P), ('glutes', _P)]),
    'ex59': ('Clamshells', [('abductors', _P), ('glutes', _S)]),
    'ex60': ('Back Extension', [('lower_back', _P), ('glutes', _S), ('hamstrings', _S)]),
    # Forearms & neck
    'ex61': ('Wrist Curl', [('forearms', _P)]),
    'ex62': ('Reverse Wrist Curl', [('forearms', _P)]),
    'ex63': ('Farmer Walk', [('forearms', _P), ('traps', _S), ('abs', _S)]),
    'ex64': ('Neck Curl', [('neck', _P)]),
}


class ExerciseCatalog:
    """
    Exercise -> muscle involvement lookup.

    Unknown exercise ids are not an error: they simply involve no muscles.
    """

    def __init__(self, exercises: Mapping[str, Tuple[str, Sequence[Tuple[str, MuscleRole]]]]):
        self._names: Dict[str, str] = {}
        self._involvement: Dict[str, Tuple[MuscleInvolvement, ...]] = {}
        for exercise_id, (name, muscles) in exercises.items():
            self._names[exercise_id] = name
            self._involvement[exercise_id] = tuple(
                MuscleInvolvement(muscle=muscle, role=MuscleRole(role))
                for muscle, role in muscles
            )

    def muscle_involvement(self, exercise_id: str) -> List[MuscleInvolvement]:
        return list(self._involvement.get(exercise_id, ()))

    def label(self, exercise_id: str) -> str:
        """Display name, falling back to the raw id"""
        return self._names.get(exercise_id, exercise_id)


@dataclass(frozen=True)
class AnalyticsConfig:
    """Everything static the three analytics take besides the data itself"""
    catalog: ExerciseCatalog
    base_recovery_hours: Mapping[str, float] = field(default_factory=lambda: dict(BASE_RECOVERY_HOURS))
    secondary_recovery_multiplier: float = SECONDARY_RECOVERY_MULTIPLIER
    volume_landmarks: Mapping[str, VolumeBand] = field(default_factory=lambda: dict(VOLUME_LANDMARKS))
    category_of: Mapping[str, BalanceCategory] = field(default_factory=lambda: dict(CATEGORY_OF))
    tracked_muscles: Tuple[str, ...] = ALL_MUSCLES

    def recovery_hours(self, muscle: str) -> float:
        return self.base_recovery_hours.get(muscle, 0)


def default_config(secondary_recovery_multiplier: Optional[float] = None,
                   extra_exercises: Optional[Mapping[str, Tuple[str, Iterable[Tuple[str, MuscleRole]]]]] = None
                   ) -> AnalyticsConfig:
    """Standard tables with the built-in exercise catalog"""
    exercises = dict(DEFAULT_EXERCISES)
    if extra_exercises:
        exercises.update({k: (name, list(muscles)) for k, (name, muscles) in extra_exercises.items()})

    multiplier = SECONDARY_RECOVERY_MULTIPLIER
    if secondary_recovery_multiplier is not None:
        multiplier = secondary_recovery_multiplier

    return AnalyticsConfig(
        catalog=ExerciseCatalog(exercises),
        secondary_recovery_multiplier=multiplier,
    )
