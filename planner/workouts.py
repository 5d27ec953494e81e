"""
Workout Variations: structured sessions for each workout category.

Every category has a small catalogue of variations. The variation for a
session is picked deterministically from the week number and block, so
consecutive weeks rotate through the catalogue instead of repeating the
same session:

    index = (week + block_offset) mod len(catalogue)
    block_offset: base 0, build 1, peak 2

Each variation expands a nominal duration into explicit steps (warm-up,
main segments with repeats and recoveries, cool-down). The duration of a
prescription is always the sum of its steps, never the nominal input.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Dict, Any, List, Tuple, Callable
import math

from .classification import ExperienceTier
from .paces import PaceSet, PaceRange, PaceZone
from .periodization import BlockType, WorkoutCategory
from .units import round_int, format_minutes


class StepKind(Enum):
    """Role of a step inside a session."""
    WARMUP = "warmup"
    MAIN = "main"
    RECOVERY = "recovery"     # easy jog between efforts
    COOLDOWN = "cooldown"
    WALK = "walk"


@dataclass(frozen=True)
class WorkoutStep:
    """
    One segment of a workout.

    A repeated step (e.g. 6 x 1 min hard) carries the recovery jog between
    repeats; there is no recovery after the last repeat.
    """
    kind: StepKind
    minutes: float
    label: str
    repeats: int = 1
    recovery_minutes: float = 0.0
    target_pace: Optional[PaceRange] = None

    @property
    def total_minutes(self) -> float:
        """repeats × minutes + (repeats − 1) × recovery."""
        return self.repeats * self.minutes + max(self.repeats - 1, 0) * self.recovery_minutes

    def describe(self) -> str:
        """Human-readable step line."""
        if self.repeats > 1:
            text = f"{self.repeats}x {format_minutes(self.minutes)}: {self.label}"
            if self.recovery_minutes:
                text += f" ({format_minutes(self.recovery_minutes)} easy jog between repeats)"
        else:
            text = f"{format_minutes(self.minutes)}: {self.label}"

        if self.target_pace is not None:
            text += f" @ {self.target_pace.format()}"
        return text

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'kind': self.kind.value,
            'minutes': self.minutes,
            'repeats': self.repeats,
            'recovery_minutes': self.recovery_minutes,
            'total_minutes': self.total_minutes,
            'label': self.label,
            'target_pace': self.target_pace.to_dict() if self.target_pace else None,
        }


def total_step_minutes(steps: List[WorkoutStep]) -> float:
    """Exact duration of a list of steps."""
    return sum(step.total_minutes for step in steps)


@dataclass(frozen=True)
class WorkoutPrescription:
    """
    A fully built workout, before it is placed on the calendar.
    """
    category: WorkoutCategory
    variation_id: str
    name: str
    description: str
    objective: str
    steps: Tuple[WorkoutStep, ...]
    pace_range: PaceRange

    @property
    def duration_minutes(self) -> float:
        return total_step_minutes(list(self.steps))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'category': self.category.value,
            'variation_id': self.variation_id,
            'name': self.name,
            'description': self.description,
            'objective': self.objective,
            'duration_minutes': self.duration_minutes,
            'steps': [s.to_dict() for s in self.steps],
            'pace_range': self.pace_range.to_dict(),
        }


StepBuilder = Callable[[int, PaceSet, ExperienceTier], List[WorkoutStep]]


@dataclass(frozen=True)
class WorkoutVariation:
    """Catalogue entry: metadata plus a pure step builder."""
    variation_id: str
    name: str
    description: str
    objective: str
    build_steps: StepBuilder = field(repr=False)

    def to_dict(self) -> Dict[str, str]:
        return {
            'id': self.variation_id,
            'name': self.name,
            'description': self.description,
            'objective': self.objective,
        }


# ═══════════════════════════════════════════════════════════════════════════════
# STEP HELPERS
# ═══════════════════════════════════════════════════════════════════════════════

def _warmup(minutes: float, paces: PaceSet, label: str = "Easy warm-up") -> WorkoutStep:
    return WorkoutStep(StepKind.WARMUP, minutes, label, target_pace=paces.recovery)


def _cooldown(minutes: float, paces: PaceSet, label: str = "Cool-down") -> WorkoutStep:
    return WorkoutStep(StepKind.COOLDOWN, minutes, label, target_pace=paces.recovery)


def _walk(minutes: float, label: str) -> WorkoutStep:
    return WorkoutStep(StepKind.WALK, minutes, label)


def _main(minutes: float, label: str, pace: Optional[PaceRange],
          repeats: int = 1, recovery: float = 0.0) -> WorkoutStep:
    return WorkoutStep(StepKind.MAIN, minutes, label, repeats=repeats,
                       recovery_minutes=recovery, target_pace=pace)


def _jog(minutes: float, paces: PaceSet) -> WorkoutStep:
    return WorkoutStep(StepKind.RECOVERY, minutes, "Easy recovery jog", target_pace=paces.recovery)


def _strong_finish(paces: PaceSet) -> PaceRange:
    """Zone 3 band between threshold pace and the fast end of aerobic."""
    return PaceRange(paces.threshold, paces.aerobic.min_s_per_km)


def _upper_aerobic(paces: PaceSet) -> PaceRange:
    return PaceRange.single(paces.aerobic.min_s_per_km)


# ═══════════════════════════════════════════════════════════════════════════════
# AEROBIC
# ═══════════════════════════════════════════════════════════════════════════════

def _easy_run(duration: int, paces: PaceSet, tier: ExperienceTier) -> List[WorkoutStep]:
    return [
        _warmup(5, paces, "Easy warm-up, walking or jogging"),
        _main(max(duration - 10, 10), "Continuous Zone 2 run (conversational pace)", paces.aerobic),
        _cooldown(5, paces, "Cool-down and stretching"),
    ]


def _progression_run(duration: int, paces: PaceSet, tier: ExperienceTier) -> List[WorkoutStep]:
    main_time = max(duration - 10, 8)
    easy = round_int(main_time * 0.6)
    return [
        _warmup(5, paces, "Easy Zone 1 warm-up"),
        _main(easy, "Low Zone 2 (very comfortable)", paces.aerobic),
        _main(main_time - easy, "Build gradually to high Zone 2", _upper_aerobic(paces)),
        _cooldown(5, paces),
    ]


def _tempo_finish(duration: int, paces: PaceSet, tier: ExperienceTier) -> List[WorkoutStep]:
    main_time = max(duration - 15, 15)
    easy = round_int(main_time * 0.7)
    return [
        _warmup(5, paces, "Zone 1 warm-up"),
        _main(easy, "Zone 2 run (conversational pace)", paces.aerobic),
        _main(main_time - easy, "Strong finish in Zone 3 (short sentences only)", _strong_finish(paces)),
        _cooldown(5, paces, "Easy jog and cool-down"),
    ]


# ═══════════════════════════════════════════════════════════════════════════════
# RECOVERY
# ═══════════════════════════════════════════════════════════════════════════════

def _recovery_run(duration: int, paces: PaceSet, tier: ExperienceTier) -> List[WorkoutStep]:
    return [
        _walk(3, "Easy walk"),
        _main(max(duration - 8, 10), "Very easy Zone 1 jog", paces.recovery),
        _walk(5, "Walk and gentle stretching"),
    ]


def _walk_run(duration: int, paces: PaceSet, tier: ExperienceTier) -> List[WorkoutStep]:
    cycles = max(1, (duration - 6) // 4)
    return [
        _walk(3, "Warm-up walk"),
        _main(4, "2 min easy jog + 2 min walk", paces.recovery, repeats=cycles),
        _walk(3, "Final walk and stretching"),
    ]


# ═══════════════════════════════════════════════════════════════════════════════
# THRESHOLD
# ═══════════════════════════════════════════════════════════════════════════════

def _tempo_continuous(duration: int, paces: PaceSet, tier: ExperienceTier) -> List[WorkoutStep]:
    cap = 15 if tier == ExperienceTier.NOVICE_LOW else 25
    tempo = min(max(duration - 18, 15), cap)
    threshold = PaceRange.single(paces.threshold)
    return [
        _warmup(10, paces, "Progressive warm-up (Zone 1 to Zone 2)"),
        _main(tempo, "Continuous threshold run (hard but sustainable)", threshold),
        _cooldown(8, paces, "Zone 1 cool-down"),
    ]


def _cruise_intervals(duration: int, paces: PaceSet, tier: ExperienceTier) -> List[WorkoutStep]:
    work_time = max(duration - 18, 12)
    reps = 3 if tier == ExperienceTier.NOVICE_LOW else 4
    # rep length leaves room for the recoveries
    rep_minutes = math.floor(work_time / (reps * 1.4))
    return [
        _warmup(10, paces, "Progressive warm-up"),
        _main(rep_minutes, "Threshold pace (hard but controlled)",
              PaceRange.single(paces.threshold), repeats=reps, recovery=2),
        _cooldown(8, paces),
    ]


def _tempo_ladder(duration: int, paces: PaceSet, tier: ExperienceTier) -> List[WorkoutStep]:
    short = duration < 40 or tier == ExperienceTier.NOVICE_LOW
    rungs = (4, 6, 4) if short else (5, 8, 10, 5)
    threshold = PaceRange.single(paces.threshold)

    steps = [_warmup(10, paces, "Progressive warm-up")]
    for i, minutes in enumerate(rungs):
        if i:
            steps.append(_jog(2, paces))
        steps.append(_main(minutes, "Threshold pace", threshold))
    steps.append(_cooldown(8, paces))
    return steps


# ═══════════════════════════════════════════════════════════════════════════════
# INTERVAL
# ═══════════════════════════════════════════════════════════════════════════════

def _reps_for_tier(tier: ExperienceTier, novice_low: int, novice_high: int, intermediate: int) -> int:
    return {
        ExperienceTier.NOVICE_LOW: novice_low,
        ExperienceTier.NOVICE_HIGH: novice_high,
    }.get(tier, intermediate)


def _short_intervals(duration: int, paces: PaceSet, tier: ExperienceTier) -> List[WorkoutStep]:
    reps = _reps_for_tier(tier, 6, 8, 10)
    recovery = 2 if tier == ExperienceTier.NOVICE_LOW else 1.5
    return [
        _warmup(10, paces, "Progressive warm-up with 3 x 15 s strides"),
        _main(1, "Hard Zone 5 effort", PaceRange.single(paces.interval),
              repeats=reps, recovery=recovery),
        _cooldown(8, paces),
    ]


def _long_intervals(duration: int, paces: PaceSet, tier: ExperienceTier) -> List[WorkoutStep]:
    reps = _reps_for_tier(tier, 3, 4, 5)
    return [
        _warmup(10, paces, "Progressive warm-up"),
        _main(3, "Hard Zone 5 effort", PaceRange.single(paces.interval),
              repeats=reps, recovery=2),
        _cooldown(8, paces),
    ]


def _pyramid(duration: int, paces: PaceSet, tier: ExperienceTier) -> List[WorkoutStep]:
    if tier == ExperienceTier.NOVICE_LOW:
        efforts = (1, 2, 3, 2, 1)
        recoveries = (1, 1.5, 2, 1.5)
    else:
        efforts = (1, 2, 3, 4, 3, 2, 1)
        recoveries = (1, 1.5, 2, 2, 2, 1.5)
    interval = PaceRange.single(paces.interval)

    steps = [_warmup(10, paces, "Progressive warm-up")]
    for i, minutes in enumerate(efforts):
        steps.append(_main(minutes, "Hard effort", interval))
        if i < len(recoveries):
            steps.append(_jog(recoveries[i], paces))
    steps.append(_cooldown(8, paces))
    return steps


# ═══════════════════════════════════════════════════════════════════════════════
# LONG RUN
# ═══════════════════════════════════════════════════════════════════════════════

LONG_RUN_WARMUP = 8
LONG_RUN_COOLDOWN = 8
PICKUP_EVERY_MINUTES = 12


def _long_main_time(duration: int) -> int:
    return max(duration - LONG_RUN_WARMUP - LONG_RUN_COOLDOWN, 20)


def _steady_long(duration: int, paces: PaceSet, tier: ExperienceTier) -> List[WorkoutStep]:
    return [
        _warmup(LONG_RUN_WARMUP, paces, "Easy Zone 1 warm-up"),
        _main(_long_main_time(duration), "Steady Zone 2 run (conversational, even pace)", paces.long_run),
        _cooldown(LONG_RUN_COOLDOWN, paces, "Cool-down and stretching"),
    ]


def _progressive_long(duration: int, paces: PaceSet, tier: ExperienceTier) -> List[WorkoutStep]:
    main_time = _long_main_time(duration)
    easy = round_int(main_time * 0.75)
    return [
        _warmup(LONG_RUN_WARMUP, paces, "Zone 1 warm-up"),
        _main(easy, "Low Zone 2 (very comfortable)", paces.long_run),
        _main(main_time - easy, "Lift to high Zone 2 / early Zone 3", _upper_aerobic(paces)),
        _cooldown(LONG_RUN_COOLDOWN, paces),
    ]


def _long_with_pickups(duration: int, paces: PaceSet, tier: ExperienceTier) -> List[WorkoutStep]:
    main_time = _long_main_time(duration)
    pickups = main_time // PICKUP_EVERY_MINUTES
    remainder = main_time - pickups * PICKUP_EVERY_MINUTES

    steps = [
        _warmup(LONG_RUN_WARMUP, paces, "Zone 1 warm-up"),
        _main(PICKUP_EVERY_MINUTES,
              f"{PICKUP_EVERY_MINUTES - 1} min Zone 2 + 1 min pickup (Zone 3-4)",
              paces.long_run, repeats=pickups),
    ]
    if remainder:
        steps.append(_main(remainder, "Steady Zone 2", paces.long_run))
    steps.append(_cooldown(LONG_RUN_COOLDOWN, paces))
    return steps


# ═══════════════════════════════════════════════════════════════════════════════
# CATALOGUE
# ═══════════════════════════════════════════════════════════════════════════════

# Order within each tuple is significant for selection
VARIATIONS: Dict[WorkoutCategory, Tuple[WorkoutVariation, ...]] = {
    WorkoutCategory.RECOVERY: (
        WorkoutVariation("recovery_run", "Recovery Run", "Very easy run to recover",
                         "Active recovery", _recovery_run),
        WorkoutVariation("walk_run", "Walk-Run", "Alternate walking and easy jogging",
                         "Gentle active recovery", _walk_run),
    ),
    WorkoutCategory.AEROBIC: (
        WorkoutVariation("easy_run", "Easy Run", "Continuous run at a comfortable pace",
                         "Aerobic base development", _easy_run),
        WorkoutVariation("progression_run", "Progression Run", "Start easy and finish at a moderate pace",
                         "Develop the ability to change pace", _progression_run),
        WorkoutVariation("tempo_finish", "Strong Finish", "Aerobic run with a strong finish",
                         "Prepare the body for harder efforts", _tempo_finish),
    ),
    WorkoutCategory.THRESHOLD: (
        WorkoutVariation("tempo_continuous", "Continuous Tempo", "Continuous run at threshold",
                         "Raise the lactate threshold", _tempo_continuous),
        WorkoutVariation("cruise_intervals", "Cruise Intervals", "Threshold repeats with short recoveries",
                         "Build endurance at threshold", _cruise_intervals),
        WorkoutVariation("tempo_ladder", "Tempo Ladder", "Progressive threshold blocks",
                         "Build mental and physical endurance at threshold", _tempo_ladder),
    ),
    WorkoutCategory.INTERVAL: (
        WorkoutVariation("short_intervals", "Short Intervals", "Short high-intensity repeats",
                         "Improve VO2max", _short_intervals),
        WorkoutVariation("long_intervals", "Long Intervals", "Longer repeats at high intensity",
                         "Develop maximal aerobic capacity", _long_intervals),
        WorkoutVariation("pyramid", "Pyramid", "Intervals in a pyramid pattern",
                         "Practise varying intensity", _pyramid),
    ),
    WorkoutCategory.LONG_RUN: (
        WorkoutVariation("steady_long", "Steady Long Run", "Long run at an even pace",
                         "Build aerobic endurance", _steady_long),
        WorkoutVariation("progressive_long", "Progressive Long Run", "Pick up the pace over the last 25%",
                         "Develop a finishing kick and endurance", _progressive_long),
        WorkoutVariation("long_with_pickups", "Long Run with Pickups", "Long run with periodic surges",
                         "Change pace while fatigued", _long_with_pickups),
    ),
}

BLOCK_OFFSETS: Dict[BlockType, int] = {
    BlockType.BASE: 0,
    BlockType.BUILD: 1,
    BlockType.PEAK: 2,
}

CATEGORY_PACE_ZONE: Dict[WorkoutCategory, PaceZone] = {
    WorkoutCategory.RECOVERY: PaceZone.RECOVERY,
    WorkoutCategory.AEROBIC: PaceZone.AEROBIC,
    WorkoutCategory.THRESHOLD: PaceZone.THRESHOLD,
    WorkoutCategory.INTERVAL: PaceZone.INTERVAL,
    WorkoutCategory.LONG_RUN: PaceZone.LONG_RUN,
}


def select_variation(category: WorkoutCategory, week_number: int, block: BlockType) -> str:
    """
    Pick the variation for a session.

    Deterministic: the same category, week and block always give the same
    variation.

    Args:
        category: Workout category
        week_number: Week of the cycle (1-based)
        block: Block the week belongs to

    Returns:
        Variation id
    """
    catalogue = VARIATIONS[category]
    index = (week_number + BLOCK_OFFSETS[block]) % len(catalogue)
    return catalogue[index].variation_id


def get_variation(category: WorkoutCategory, variation_id: str) -> WorkoutVariation:
    """Look up a catalogue entry by id."""
    for variation in VARIATIONS[category]:
        if variation.variation_id == variation_id:
            return variation
    raise KeyError(f"Unknown variation '{variation_id}' for {category.value}")


def list_variations(category: WorkoutCategory) -> List[Dict[str, str]]:
    """Metadata of every variation available for a category."""
    return [variation.to_dict() for variation in VARIATIONS[category]]


def pace_range_for_category(category: WorkoutCategory, paces: PaceSet) -> PaceRange:
    """Target pace range shown for a whole session."""
    return paces.range_for(CATEGORY_PACE_ZONE[category])


def build_workout(
    category: WorkoutCategory,
    nominal_minutes: float,
    paces: PaceSet,
    tier: ExperienceTier,
    week_number: int,
    block: BlockType
) -> WorkoutPrescription:
    """
    Build a complete workout for a session.

    The nominal minutes only shape the steps; the prescription's duration
    is computed from the steps, so it can differ from the nominal value
    (minimum segment lengths, fixed interval structures).

    Args:
        category: Workout category
        nominal_minutes: Minutes allotted by the weekly volume split
        paces: Paces for the week
        tier: Experience tier (shapes interval and tempo structure)
        week_number: Week of the cycle (1-based)
        block: Current block

    Returns:
        WorkoutPrescription
    """
    variation = get_variation(category, select_variation(category, week_number, block))
    steps = variation.build_steps(round_int(nominal_minutes), paces, tier)

    return WorkoutPrescription(
        category=category,
        variation_id=variation.variation_id,
        name=variation.name,
        description=variation.description,
        objective=variation.objective,
        steps=tuple(steps),
        pace_range=pace_range_for_category(category, paces),
    )
