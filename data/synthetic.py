"""
Synthetic athlete generation for demos and batch runs.

Generates realistic onboarding data with:
- Varied body composition (waist/hip drive the metabolic risk tier)
- Field test results consistent with each archetype's fitness
- Running history, pain records and weekly availability

Each archetype targets a different branch of the classifier so that a
small cohort exercises novice/intermediate tiers, restricted intensity
and reduced progression.
"""

from typing import List, Optional, Dict, Callable, Tuple
import numpy as np

from planner.athlete import (
    AthleteInput,
    Availability,
    BodyMetrics,
    Gender,
    PainRecord,
    PhysicalTests,
    RunningHistory,
    RunningTimeBucket,
    TrainingObjective,
)


def _gender() -> Gender:
    return Gender.MALE if np.random.random() < 0.5 else Gender.FEMALE


def _uniform(low: float, high: float, ndigits: int = 0) -> float:
    return round(float(np.random.uniform(low, high)), ndigits)


def _body(gender: Gender, waist_male: Tuple[float, float], waist_female: Tuple[float, float],
          bmi_range: Tuple[float, float]) -> BodyMetrics:
    """Body metrics with a plausible hip circumference for the waist."""
    if gender == Gender.MALE:
        height = _uniform(168, 190)
        waist = _uniform(*waist_male)
    else:
        height = _uniform(155, 178)
        waist = _uniform(*waist_female)

    bmi = np.random.uniform(*bmi_range)
    weight = round(float(bmi * (height / 100) ** 2), 1)
    hip = round(waist * float(np.random.uniform(1.02, 1.15)), 0)

    return BodyMetrics(height_cm=height, weight_kg=weight, waist_cm=waist, hip_cm=hip)


# ═══════════════════════════════════════════════════════════════════════════════
# ATHLETE ARCHETYPES
# ═══════════════════════════════════════════════════════════════════════════════

def create_sedentary_beginner(id_num: int) -> AthleteInput:
    """Inactive adult starting from scratch."""
    gender = _gender()

    return AthleteInput(
        name=f"Sedentary Beginner {id_num}",
        gender=gender,
        body=_body(gender, (88, 100), (76, 88), (23, 28)),
        tests=PhysicalTests(distance_m=_uniform(700, 880), time_s=_uniform(420, 540),
                            perceived_effort=_uniform(7, 9)),
        history=RunningHistory(currently_running=False, experience_months=0,
                               recent_max_distance_km=_uniform(0, 2, 1),
                               running_time=RunningTimeBucket.UNDER_6_MONTHS),
        availability=Availability(days_per_week=3, max_session_minutes=40),
        objective=TrainingObjective.HEALTH,
    )


def create_overweight_beginner(id_num: int) -> AthleteInput:
    """Beginner with high waist circumference (high metabolic risk)."""
    gender = _gender()

    return AthleteInput(
        name=f"Overweight Beginner {id_num}",
        gender=gender,
        body=_body(gender, (112, 125), (98, 110), (30, 36)),
        tests=PhysicalTests(distance_m=_uniform(600, 850), time_s=_uniform(480, 600),
                            perceived_effort=_uniform(8, 10)),
        history=RunningHistory(currently_running=False, experience_months=0,
                               recent_max_distance_km=0,
                               running_time=RunningTimeBucket.UNDER_6_MONTHS),
        pain=PainRecord(has_pain=True, intensity=float(np.random.randint(2, 5))),
        availability=Availability(days_per_week=3, max_session_minutes=35,
                                  training_days=(1, 3, 5)),
        objective=TrainingObjective.WEIGHT_LOSS,
    )


def create_returning_runner(id_num: int) -> AthleteInput:
    """Runner returning after a break, has some base."""
    gender = _gender()

    return AthleteInput(
        name=f"Returning Runner {id_num}",
        gender=gender,
        body=_body(gender, (86, 98), (74, 86), (22, 26)),
        tests=PhysicalTests(distance_m=_uniform(950, 1080), time_s=_uniform(330, 390),
                            perceived_effort=_uniform(6, 8)),
        history=RunningHistory(currently_running=True, experience_months=float(np.random.randint(2, 5)),
                               recent_max_distance_km=_uniform(3, 6, 1),
                               running_time=RunningTimeBucket.SIX_MONTHS_TO_1_YEAR),
        availability=Availability(days_per_week=int(np.random.choice([3, 4])), max_session_minutes=50),
        objective=TrainingObjective.COMPLETE_5K,
    )


def create_recreational_runner(id_num: int) -> AthleteInput:
    """Regular runner with a consistent history."""
    gender = _gender()

    return AthleteInput(
        name=f"Recreational Runner {id_num}",
        gender=gender,
        body=_body(gender, (80, 92), (68, 80), (21, 25)),
        tests=PhysicalTests(distance_m=_uniform(1150, 1400), time_s=_uniform(260, 320),
                            perceived_effort=_uniform(6, 8)),
        history=RunningHistory(currently_running=True, experience_months=float(np.random.randint(12, 36)),
                               recent_max_distance_km=_uniform(8, 15, 1),
                               running_time=RunningTimeBucket.ONE_TO_3_YEARS),
        availability=Availability(days_per_week=int(np.random.choice([4, 5])), max_session_minutes=70,
                                  training_days=(0, 1, 3, 5, 6)),
        objective=TrainingObjective.PERFORMANCE,
    )


def create_injured_runner(id_num: int) -> AthleteInput:
    """Experienced runner currently managing significant pain."""
    gender = _gender()

    return AthleteInput(
        name=f"Injured Runner {id_num}",
        gender=gender,
        body=_body(gender, (84, 96), (72, 84), (22, 26)),
        tests=PhysicalTests(distance_m=_uniform(1100, 1300), time_s=_uniform(280, 330),
                            perceived_effort=_uniform(7, 9)),
        history=RunningHistory(currently_running=True, experience_months=float(np.random.randint(12, 48)),
                               recent_max_distance_km=_uniform(6, 12, 1),
                               running_time=RunningTimeBucket.ONE_TO_3_YEARS),
        pain=PainRecord(has_pain=True, intensity=float(np.random.randint(7, 9)),
                        blocks_running=bool(np.random.random() < 0.3)),
        availability=Availability(days_per_week=4, max_session_minutes=45),
        objective=TrainingObjective.GENERAL_FITNESS,
    )


def create_experienced_runner(id_num: int) -> AthleteInput:
    """Long-time runner training most days of the week."""
    gender = _gender()

    return AthleteInput(
        name=f"Experienced Runner {id_num}",
        gender=gender,
        body=_body(gender, (76, 88), (64, 76), (20, 23)),
        tests=PhysicalTests(distance_m=_uniform(1400, 1700), time_s=_uniform(200, 250),
                            perceived_effort=_uniform(7, 9)),
        history=RunningHistory(currently_running=True, experience_months=float(np.random.randint(36, 120)),
                               recent_max_distance_km=_uniform(15, 25, 1),
                               running_time=RunningTimeBucket.OVER_3_YEARS),
        availability=Availability(days_per_week=6, max_session_minutes=90),
        objective=TrainingObjective.PERFORMANCE,
    )


ARCHETYPES: Dict[str, Callable[[int], AthleteInput]] = {
    'sedentary_beginner': create_sedentary_beginner,
    'overweight_beginner': create_overweight_beginner,
    'returning_runner': create_returning_runner,
    'recreational_runner': create_recreational_runner,
    'injured_runner': create_injured_runner,
    'experienced_runner': create_experienced_runner,
}


def create_archetype(name: str, id_num: int = 1, seed: Optional[int] = None) -> AthleteInput:
    """
    Create one athlete of a named archetype.

    Args:
        name: Key of ARCHETYPES
        id_num: Number used in the athlete's name
        seed: Random seed for reproducibility

    Returns:
        AthleteInput

    Raises:
        KeyError: If the archetype does not exist
    """
    if name not in ARCHETYPES:
        raise KeyError(f"Unknown archetype '{name}'. Choose from: {', '.join(ARCHETYPES)}")

    if seed is not None:
        np.random.seed(seed)

    return ARCHETYPES[name](id_num)


def generate_athlete_profiles(
    n_profiles: int = 12,
    seed: Optional[int] = None
) -> List[AthleteInput]:
    """
    Generate a diverse synthetic cohort.

    One athlete of each archetype is created first; further athletes use
    randomly selected archetypes.

    Args:
        n_profiles: Number of athletes to generate
        seed: Random seed for reproducibility

    Returns:
        List of AthleteInput objects
    """
    if seed is not None:
        np.random.seed(seed)

    creators = list(ARCHETYPES.values())
    profiles = []

    for i, creator in enumerate(creators):
        if len(profiles) >= n_profiles:
            break
        profiles.append(creator(i + 1))

    while len(profiles) < n_profiles:
        creator = creators[np.random.randint(len(creators))]
        profiles.append(creator(len(profiles) + 1))

    return profiles
