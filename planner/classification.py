"""
Athlete Classification: experience tier, safety flags and starting load.

Performance is weighed over self-report: a weak 6-minute test makes an
athlete a low novice no matter how much running history is declared.
Safety flags derived from pain and metabolic risk gate intensity, long
runs and the rate of progression for the whole plan.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Dict, Any

from .athlete import AthleteInput
from .risk import RiskAssessment, RiskTier


class ExperienceTier(Enum):
    """Runner experience classification."""
    NOVICE_LOW = "novice_low"       # 6-min test < 900 m
    NOVICE_HIGH = "novice_high"     # Some base, no consistent history
    INTERMEDIATE = "intermediate"   # >= 6 months, >= 5 km, 6-min test >= 1100 m

    @property
    def is_novice(self) -> bool:
        return self != ExperienceTier.INTERMEDIATE


# Classification cut-offs
NOVICE_LOW_TEST_DISTANCE_M = 900
INTERMEDIATE_TEST_DISTANCE_M = 1100
MIN_EXPERIENCE_MONTHS = 6
MIN_RECENT_DISTANCE_KM = 5

# Safety cut-offs (pain on a 0-10 scale)
PAIN_REDUCE_PROGRESSION = 4
PAIN_BLOCK_INTENSITY = 7


@dataclass(frozen=True)
class Classification:
    """
    Complete athlete classification.

    Derived once per generation from the athlete input and risk assessment.
    """
    experience_tier: ExperienceTier
    risk_tier: RiskTier
    intensity_allowed: bool
    long_run_allowed: bool
    reduce_progression: bool

    @property
    def combined_tier(self) -> str:
        """Experience and risk tier, e.g. 'novice_high_moderate'."""
        return f"{self.experience_tier.value}_{self.risk_tier.value}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'experience_tier': self.experience_tier.value,
            'risk_tier': self.risk_tier.value,
            'combined_tier': self.combined_tier,
            'intensity_allowed': self.intensity_allowed,
            'long_run_allowed': self.long_run_allowed,
            'reduce_progression': self.reduce_progression,
        }


def resolve_experience_months(athlete: AthleteInput) -> float:
    """
    Experience in months, reconciling reported months and the onboarding bucket.

    The larger of the two is used so that a consistent runner who
    under-reports is not under-credited.
    """
    reported = athlete.history.experience_months or 0
    inferred = athlete.history.running_time.inferred_months if athlete.history.running_time else 0
    return max(reported, inferred)


def classify_experience(athlete: AthleteInput) -> ExperienceTier:
    """
    Classify experience, evaluating rules in priority order.

    1. 6-min test < 900 m                                   → novice_low
    2. not running, < 6 months, or recent max < 5 km        → novice_high
    3. >= 6 months, recent max >= 5 km, 6-min test >= 1100  → intermediate
    4. otherwise                                            → novice_high

    Args:
        athlete: Athlete input

    Returns:
        ExperienceTier
    """
    test_distance = athlete.tests.distance_m or 0
    experience_months = resolve_experience_months(athlete)
    recent_max_km = athlete.history.recent_max_distance_km or 0
    currently_running = athlete.history.currently_running

    if test_distance < NOVICE_LOW_TEST_DISTANCE_M:
        return ExperienceTier.NOVICE_LOW

    if (not currently_running
            or experience_months < MIN_EXPERIENCE_MONTHS
            or recent_max_km < MIN_RECENT_DISTANCE_KM):
        return ExperienceTier.NOVICE_HIGH

    if (experience_months >= MIN_EXPERIENCE_MONTHS
            and recent_max_km >= MIN_RECENT_DISTANCE_KM
            and test_distance >= INTERMEDIATE_TEST_DISTANCE_M):
        return ExperienceTier.INTERMEDIATE

    # History is fine but test performance does not confirm it
    return ExperienceTier.NOVICE_HIGH


def determine_safety_flags(
    athlete: AthleteInput,
    risk: RiskAssessment,
    high_risk_index: float = 120.0
) -> Dict[str, bool]:
    """
    Determine safety flags from pain and metabolic risk.

    Rules:
        reduce_progression = pain >= 4 or risk index >= 120
        intensity_allowed  = not (pain blocks running or pain >= 7)
        long_run_allowed   = intensity_allowed and pain < 7

    Args:
        athlete: Athlete input
        risk: Metabolic risk assessment
        high_risk_index: Index at which progression is reduced

    Returns:
        Dictionary with the three flags
    """
    pain = athlete.pain.intensity or 0
    blocks_running = athlete.pain.blocks_running

    intensity_allowed = not (blocks_running or pain >= PAIN_BLOCK_INTENSITY)

    return {
        'reduce_progression': pain >= PAIN_REDUCE_PROGRESSION or risk.risk_index >= high_risk_index,
        'intensity_allowed': intensity_allowed,
        'long_run_allowed': intensity_allowed and pain < PAIN_BLOCK_INTENSITY,
    }


def classify_athlete(
    athlete: AthleteInput,
    risk: RiskAssessment,
    high_risk_index: float = 120.0
) -> Classification:
    """
    Classify an athlete by experience and risk.

    Pure function of its inputs: the same athlete and assessment always
    give the same classification.

    Args:
        athlete: Athlete input
        risk: Metabolic risk assessment
        high_risk_index: Index at which progression is reduced

    Returns:
        Classification
    """
    flags = determine_safety_flags(athlete, risk, high_risk_index)

    return Classification(
        experience_tier=classify_experience(athlete),
        risk_tier=risk.risk_tier,
        intensity_allowed=flags['intensity_allowed'],
        long_run_allowed=flags['long_run_allowed'],
        reduce_progression=flags['reduce_progression'],
    )


def calculate_initial_weekly_volume(
    experience_tier: ExperienceTier,
    days_per_week: Optional[int] = None,
    max_session_minutes: Optional[float] = None
) -> float:
    """
    Starting weekly volume in minutes.

    novice_low 60, novice_high 90, intermediate 120, capped by what the
    athlete can fit in a week (days × max session length).

    Args:
        experience_tier: Experience tier
        days_per_week: Training days per week
        max_session_minutes: Maximum session length

    Returns:
        Weekly volume in minutes
    """
    base_volume = {
        ExperienceTier.NOVICE_LOW: 60,
        ExperienceTier.NOVICE_HIGH: 90,
        ExperienceTier.INTERMEDIATE: 120,
    }.get(experience_tier, 90)

    if days_per_week and max_session_minutes:
        return min(base_volume, days_per_week * max_session_minutes)
    return base_volume


def calculate_progression_rate(
    experience_tier: ExperienceTier,
    reduce_progression: bool
) -> float:
    """
    Weekly progression rate as a decimal (0.08 = 8%).

    Args:
        experience_tier: Experience tier
        reduce_progression: Safety flag from classification

    Returns:
        0.06 if reduced, 0.08 for novices, 0.10 for intermediates
    """
    if reduce_progression:
        return 0.06
    if experience_tier.is_novice:
        return 0.08
    return 0.10
