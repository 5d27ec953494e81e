"""
Pace Progression: week-by-week pace improvement over a mesocycle.

Improvement accrues per 4-week block at a tier-specific rate and is capped
per cycle. Within a block, improvement is applied fractionally so the first
week of a block does not get the whole block's gain at once:

    block      = ceil(week / 4)
    fraction   = ((week - 1) mod 4 + 1) / 4
    improvement = min((block - 1) × rate + fraction × rate, cap)

Zones respond differently: fast zones (threshold, interval, repetition)
improve more than slow ones (recovery, long run):

    adjusted = original × (1 - improvement × sensitivity(zone))

The improvement grows monotonically with the week number and is capped,
so adjusted paces never get slower as the cycle advances.
"""

from dataclasses import dataclass
from typing import Dict, Any, List
import math

from .classification import ExperienceTier
from .paces import PaceSet, PaceZone
from .periodization import WEEKS_PER_BLOCK, get_block_for_week, is_deload_week
from .units import round_int, format_pace


@dataclass(frozen=True)
class ImprovementRate:
    """Expected pace improvement for a tier."""
    per_block: float       # fraction per 4-week block
    max_per_cycle: float   # cap over the whole cycle


IMPROVEMENT_RATES: Dict[ExperienceTier, ImprovementRate] = {
    ExperienceTier.NOVICE_LOW: ImprovementRate(per_block=0.02, max_per_cycle=0.05),
    ExperienceTier.NOVICE_HIGH: ImprovementRate(per_block=0.015, max_per_cycle=0.04),
    ExperienceTier.INTERMEDIATE: ImprovementRate(per_block=0.008, max_per_cycle=0.025),
}

ZONE_SENSITIVITY: Dict[PaceZone, float] = {
    PaceZone.RECOVERY: 0.8,     # already slow, improves least
    PaceZone.AEROBIC: 1.0,      # reference
    PaceZone.THRESHOLD: 1.2,
    PaceZone.INTERVAL: 1.3,
    PaceZone.REPETITION: 1.4,
    PaceZone.LONG_RUN: 0.9,
}


def calculate_cumulative_improvement(week_number: int, tier: ExperienceTier) -> float:
    """
    Cumulative base improvement for a week as a fraction (0.01875 = 1.875%).

    Args:
        week_number: Week of the cycle (1-based)
        tier: Experience tier

    Returns:
        Capped cumulative improvement
    """
    rates = IMPROVEMENT_RATES.get(tier, IMPROVEMENT_RATES[ExperienceTier.NOVICE_HIGH])

    block_number = math.ceil(week_number / WEEKS_PER_BLOCK)
    week_in_block = (week_number - 1) % WEEKS_PER_BLOCK + 1
    block_progress = week_in_block / WEEKS_PER_BLOCK

    completed_blocks = block_number - 1
    total = completed_blocks * rates.per_block + block_progress * rates.per_block

    return min(total, rates.max_per_cycle)


def zone_factor(improvement: float, zone: PaceZone) -> float:
    """Multiplier applied to a zone's original pace."""
    return 1 - improvement * ZONE_SENSITIVITY[zone]


def apply_pace_progression(
    original: PaceSet,
    week_number: int,
    tier: ExperienceTier
) -> PaceSet:
    """
    Adjusted paces for a given week.

    The original PaceSet is not modified; a new one is returned with the
    reference test paces copied unchanged.

    Args:
        original: Week-1 baseline paces
        week_number: Week of the cycle (1-based)
        tier: Experience tier

    Returns:
        Adjusted PaceSet
    """
    improvement = calculate_cumulative_improvement(week_number, tier)

    def single(pace: int, zone: PaceZone) -> int:
        return round_int(pace * zone_factor(improvement, zone))

    return PaceSet(
        duration_test_pace=original.duration_test_pace,
        distance_test_pace=original.distance_test_pace,
        recovery=original.recovery.scaled(zone_factor(improvement, PaceZone.RECOVERY)),
        aerobic=original.aerobic.scaled(zone_factor(improvement, PaceZone.AEROBIC)),
        threshold=single(original.threshold, PaceZone.THRESHOLD),
        interval=single(original.interval, PaceZone.INTERVAL),
        repetition=single(original.repetition, PaceZone.REPETITION),
        long_run=original.long_run.scaled(zone_factor(improvement, PaceZone.LONG_RUN)),
    )


def calculate_pace_difference(original_pace: float, new_pace: float) -> Dict[str, Any]:
    """
    Difference between two paces.

    Args:
        original_pace: Earlier pace (s/km)
        new_pace: Later pace (s/km)

    Returns:
        Dictionary with seconds gained, percentage and a description
    """
    diff_seconds = original_pace - new_pace
    diff_percentage = diff_seconds / original_pace * 100 if original_pace else 0.0

    if diff_seconds > 0:
        description = f"{diff_seconds:g}s faster ({diff_percentage:.1f}% improvement)"
    elif diff_seconds < 0:
        description = f"{abs(diff_seconds):g}s slower"
    else:
        description = "no change"

    return {
        'seconds': diff_seconds,
        'percentage': diff_percentage,
        'description': description,
    }


def project_end_of_cycle_improvement(
    original: PaceSet,
    tier: ExperienceTier,
    cycle_weeks: int = 12
) -> Dict[str, Any]:
    """
    Expected paces and improvement at the end of a cycle.

    Args:
        original: Week-1 baseline paces
        tier: Experience tier
        cycle_weeks: Cycle length in weeks

    Returns:
        Dictionary with projected paces and improvement percentage
    """
    improvement = calculate_cumulative_improvement(cycle_weeks, tier)
    projected = apply_pace_progression(original, cycle_weeks, tier)

    return {
        'original_paces': original,
        'projected_paces': projected,
        'improvement_percentage': improvement * 100,
        'description': f"Expected improvement of {improvement * 100:.1f}% after {cycle_weeks} weeks",
    }


def generate_pace_progression_report(
    original: PaceSet,
    tier: ExperienceTier,
    weeks: int = 12
) -> List[Dict[str, Any]]:
    """
    Week-by-week pace progression for a whole cycle.

    Args:
        original: Week-1 baseline paces
        tier: Experience tier
        weeks: Number of weeks to report

    Returns:
        One dictionary per week
    """
    report = []
    for week in range(1, weeks + 1):
        improvement = calculate_cumulative_improvement(week, tier)
        paces = apply_pace_progression(original, week, tier)
        report.append({
            'week': week,
            'block': get_block_for_week(week).value,
            'week_in_block': (week - 1) % WEEKS_PER_BLOCK + 1,
            'is_deload': is_deload_week(week),
            'improvement_pct': round(improvement * 100, 3),
            'aerobic': paces.aerobic.format(),
            'threshold': format_pace(paces.threshold),
            'interval': format_pace(paces.interval),
            'paces': paces,
        })
    return report
