"""
Pace Calculation: training-zone paces from two field tests.

Tests:
- 6-minute test: distance covered in 360 s
- 1 km test: time to run 1000 m

The 6-minute test reflects sustained aerobic speed, the 1 km test
reflects speed close to VO2max. Zones blend the two:

    aerobic center = 0.6 × pace6 + 0.4 × pace1k
    aerobic        = [center × 1.05, center × 1.15]
    recovery       = [aerobic.max × 1.03, aerobic.max × 1.12]
    threshold      = min(pace6, pace1k) × 1.12
    interval       = pace1k × 1.03
    repetition     = pace1k × 0.90
    long run       = [aerobic.min × 0.98, aerobic.max × 1.05]

All paces are whole seconds per km.
"""

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Optional, Dict, Any, List

from loguru import logger

from .errors import InsufficientTestDataError, PlanWarning
from .units import round_int, format_pace

DURATION_TEST_SECONDS = 360
DISTANCE_TEST_METERS = 1000

# Plausibility limits for the field tests
MIN_PLAUSIBLE_TEST_DISTANCE_M = 300
MIN_PLAUSIBLE_1K_TIME_S = 180
MAX_PLAUSIBLE_1K_TIME_S = 900


class PaceZone(Enum):
    """Training zones that carry a target pace."""
    RECOVERY = "recovery"
    AEROBIC = "aerobic"
    THRESHOLD = "threshold"
    INTERVAL = "interval"
    REPETITION = "repetition"
    LONG_RUN = "long_run"


@dataclass(frozen=True)
class PaceRange:
    """
    Target pace range in seconds per km.

    min_s_per_km is the faster bound, max_s_per_km the slower one.
    """
    min_s_per_km: int
    max_s_per_km: int

    @classmethod
    def single(cls, pace: int) -> 'PaceRange':
        """Range collapsed to one pace."""
        return cls(pace, pace)

    def scaled(self, factor: float) -> 'PaceRange':
        """Both bounds multiplied by factor and rounded."""
        return PaceRange(round_int(self.min_s_per_km * factor),
                         round_int(self.max_s_per_km * factor))

    def format(self) -> str:
        if self.min_s_per_km == self.max_s_per_km:
            return format_pace(self.min_s_per_km)
        return f"{format_pace(self.min_s_per_km, with_unit=False)}-{format_pace(self.max_s_per_km)}"

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


@dataclass(frozen=True)
class PaceSet:
    """
    Complete set of training paces.

    The reference paces of the two tests are kept for traceability; the
    zone values are what workouts prescribe.
    """
    duration_test_pace: int     # pace of the 6-minute test
    distance_test_pace: int     # pace of the 1 km test
    recovery: PaceRange
    aerobic: PaceRange
    threshold: int
    interval: int
    repetition: int
    long_run: PaceRange

    def range_for(self, zone: PaceZone) -> PaceRange:
        """Target range for a zone (single-pace zones collapse to one value)."""
        return {
            PaceZone.RECOVERY: self.recovery,
            PaceZone.AEROBIC: self.aerobic,
            PaceZone.THRESHOLD: PaceRange.single(self.threshold),
            PaceZone.INTERVAL: PaceRange.single(self.interval),
            PaceZone.REPETITION: PaceRange.single(self.repetition),
            PaceZone.LONG_RUN: self.long_run,
        }[zone]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'duration_test_pace': self.duration_test_pace,
            'distance_test_pace': self.distance_test_pace,
            'recovery': self.recovery.to_dict(),
            'aerobic': self.aerobic.to_dict(),
            'threshold': self.threshold,
            'interval': self.interval,
            'repetition': self.repetition,
            'long_run': self.long_run.to_dict(),
        }

    def format_table(self) -> str:
        """Readable multi-line pace table."""
        lines = []
        for zone in PaceZone:
            lines.append(f"  {zone.value.replace('_', ' ').title():<12} {self.range_for(zone).format()}")
        return "\n".join(lines)


def validate_physical_tests(
    distance_m: Optional[float],
    time_s: Optional[float]
) -> List[PlanWarning]:
    """
    Flag implausible field test values.

    These warnings point to likely measurement errors but do not block
    plan generation.

    Args:
        distance_m: 6-minute test distance (m)
        time_s: 1 km test time (s)

    Returns:
        List of warnings (empty when both tests look plausible)
    """
    warnings = []

    if not distance_m or distance_m < MIN_PLAUSIBLE_TEST_DISTANCE_M:
        warnings.append(PlanWarning(
            code='duration_test_low',
            message=("6-minute test looks invalid (distance too low). "
                     "Please check the measurement."),
        ))

    if not time_s:
        warnings.append(PlanWarning(
            code='distance_test_missing',
            message="1 km test not provided.",
        ))
    elif time_s < MIN_PLAUSIBLE_1K_TIME_S or time_s > MAX_PLAUSIBLE_1K_TIME_S:
        warnings.append(PlanWarning(
            code='distance_test_out_of_range',
            message="1 km test may be incorrect. Please confirm the recorded time.",
        ))

    for warning in warnings:
        logger.warning("Physical test warning [{}]: {}", warning.code, warning.message)

    return warnings


def calculate_paces(
    distance_m: Optional[float],
    time_s: Optional[float]
) -> PaceSet:
    """
    Calculate all training paces from the two field tests.

    Args:
        distance_m: Distance covered in the 6-minute test (m)
        time_s: Time for the 1 km test (s)

    Returns:
        PaceSet

    Raises:
        InsufficientTestDataError: If either test is missing
    """
    missing = [name for name, value in (('distance_m', distance_m), ('time_s', time_s))
               if not value]
    if missing:
        raise InsufficientTestDataError(
            "Incomplete physical tests: 6-minute and 1 km tests are required",
            fields=missing,
        )

    speed_mps = distance_m / DURATION_TEST_SECONDS
    pace6 = DISTANCE_TEST_METERS / speed_mps
    pace1k = float(time_s)

    center = pace6 * 0.6 + pace1k * 0.4
    aerobic = PaceRange(round_int(center * 1.05), round_int(center * 1.15))

    threshold = round_int(min(pace6, pace1k) * 1.12)
    interval = round_int(pace1k * 1.03)
    repetition = round_int(pace1k * 0.90)

    recovery = PaceRange(round_int(aerobic.max_s_per_km * 1.03),
                         round_int(aerobic.max_s_per_km * 1.12))
    long_run = PaceRange(round_int(aerobic.min_s_per_km * 0.98),
                         round_int(aerobic.max_s_per_km * 1.05))

    return PaceSet(
        duration_test_pace=round_int(pace6),
        distance_test_pace=round_int(pace1k),
        recovery=recovery,
        aerobic=aerobic,
        threshold=threshold,
        interval=interval,
        repetition=repetition,
        long_run=long_run,
    )
