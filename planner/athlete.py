"""
Athlete input records for plan generation.

An AthleteInput bundles everything collected during onboarding:
- Body metrics (height, weight, waist, hip)
- Field test results (6-minute run distance, 1 km time)
- Running history and pain record
- Weekly availability

All records are frozen: a generation run reads its input and never
modifies it. Optional fields default to None so that the plan assembler
can report exactly which values are missing.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Dict, Any, Tuple


class Gender(Enum):
    """Biological sex used for sex-specific waist thresholds."""
    MALE = "male"
    FEMALE = "female"

    @classmethod
    def parse(cls, value: Any) -> 'Gender':
        """Accept enum members, 'male'/'female' or 'M'/'F'."""
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        if text in ('m', 'male'):
            return cls.MALE
        if text in ('f', 'female'):
            return cls.FEMALE
        raise ValueError(f"Gender must be 'male' or 'female', got '{value}'")


class RunningTimeBucket(Enum):
    """Coarse self-reported running experience from onboarding."""
    UNDER_6_MONTHS = "<6m"
    SIX_MONTHS_TO_1_YEAR = "6m-1y"
    ONE_TO_3_YEARS = "1y-3y"
    OVER_3_YEARS = "3y+"

    @property
    def inferred_months(self) -> int:
        """Representative experience in months for this bucket."""
        return {
            RunningTimeBucket.UNDER_6_MONTHS: 3,
            RunningTimeBucket.SIX_MONTHS_TO_1_YEAR: 9,
            RunningTimeBucket.ONE_TO_3_YEARS: 24,
            RunningTimeBucket.OVER_3_YEARS: 48,
        }[self]


class TrainingObjective(Enum):
    """Main goal declared by the athlete."""
    WEIGHT_LOSS = "weight_loss"
    HEALTH = "health_longevity"
    PERFORMANCE = "performance"
    COMPLETE_5K = "complete_5k"
    GENERAL_FITNESS = "general_fitness"


@dataclass(frozen=True)
class BodyMetrics:
    """Anthropometric measurements."""
    height_cm: Optional[float] = None
    weight_kg: Optional[float] = None
    waist_cm: Optional[float] = None
    hip_cm: Optional[float] = None


@dataclass(frozen=True)
class PhysicalTests:
    """
    Field test results.

    distance_m is the distance covered in a 6-minute (360 s) run,
    time_s is the time for a 1000 m run.
    """
    distance_m: Optional[float] = None
    time_s: Optional[float] = None
    perceived_effort: Optional[float] = None  # 0-10


@dataclass(frozen=True)
class RunningHistory:
    """Self-reported running background."""
    currently_running: bool = False
    experience_months: Optional[float] = None
    recent_max_distance_km: Optional[float] = None
    running_time: Optional[RunningTimeBucket] = None


@dataclass(frozen=True)
class PainRecord:
    """Current pain status."""
    has_pain: bool = False
    intensity: Optional[float] = None  # 0-10
    blocks_running: bool = False


@dataclass(frozen=True)
class Availability:
    """
    Weekly training availability.

    training_days holds weekday indices, 0 = Monday ... 6 = Sunday.
    """
    days_per_week: Optional[int] = None
    max_session_minutes: Optional[float] = None
    training_days: Tuple[int, ...] = ()


@dataclass(frozen=True)
class AthleteInput:
    """
    Complete input for one plan generation run.
    """
    gender: Gender
    body: BodyMetrics = field(default_factory=BodyMetrics)
    tests: PhysicalTests = field(default_factory=PhysicalTests)
    history: RunningHistory = field(default_factory=RunningHistory)
    pain: PainRecord = field(default_factory=PainRecord)
    availability: Availability = field(default_factory=Availability)
    objective: TrainingObjective = TrainingObjective.GENERAL_FITNESS
    name: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AthleteInput':
        """
        Build an AthleteInput from a plain mapping (e.g. parsed JSON).

        Expected layout:
            {
                "gender": "male",
                "body": {"height_cm": ..., "weight_kg": ..., "waist_cm": ..., "hip_cm": ...},
                "tests": {"distance_m": ..., "time_s": ..., "perceived_effort": ...},
                "history": {"currently_running": ..., "experience_months": ...,
                            "recent_max_distance_km": ..., "running_time": "1y-3y"},
                "pain": {"has_pain": ..., "intensity": ..., "blocks_running": ...},
                "availability": {"days_per_week": ..., "max_session_minutes": ...,
                                 "training_days": [0, 2, 4]},
                "objective": "general_fitness"
            }
        """
        history = dict(data.get('history') or {})
        if history.get('running_time') is not None:
            history['running_time'] = RunningTimeBucket(history['running_time'])

        availability = dict(data.get('availability') or {})
        availability['training_days'] = tuple(availability.get('training_days') or ())

        objective = data.get('objective')

        return cls(
            gender=Gender.parse(data.get('gender', 'female')),
            body=BodyMetrics(**(data.get('body') or {})),
            tests=PhysicalTests(**(data.get('tests') or {})),
            history=RunningHistory(**history),
            pain=PainRecord(**(data.get('pain') or {})),
            availability=Availability(**availability),
            objective=TrainingObjective(objective) if objective else TrainingObjective.GENERAL_FITNESS,
            name=data.get('name', ''),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary (inverse of from_dict)."""
        return {
            'name': self.name,
            'gender': self.gender.value,
            'body': {
                'height_cm': self.body.height_cm,
                'weight_kg': self.body.weight_kg,
                'waist_cm': self.body.waist_cm,
                'hip_cm': self.body.hip_cm,
            },
            'tests': {
                'distance_m': self.tests.distance_m,
                'time_s': self.tests.time_s,
                'perceived_effort': self.tests.perceived_effort,
            },
            'history': {
                'currently_running': self.history.currently_running,
                'experience_months': self.history.experience_months,
                'recent_max_distance_km': self.history.recent_max_distance_km,
                'running_time': self.history.running_time.value if self.history.running_time else None,
            },
            'pain': {
                'has_pain': self.pain.has_pain,
                'intensity': self.pain.intensity,
                'blocks_running': self.pain.blocks_running,
            },
            'availability': {
                'days_per_week': self.availability.days_per_week,
                'max_session_minutes': self.availability.max_session_minutes,
                'training_days': list(self.availability.training_days),
            },
            'objective': self.objective.value,
        }
