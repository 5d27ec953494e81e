"""
Periodization: block structure of a 12-week mesocycle.

Based on:
- Block periodization (Issurin, 2010)
- Weekly undulation within blocks with a recovery week every 4th week

Three 4-week blocks run in fixed order:

    Block  | Aerobic share | Intensity              | Volume multipliers
    -------|---------------|------------------------|------------------------
    Base   | 80%           | none                   | 1.00 1.08 1.15 0.70
    Build  | 70%           | threshold              | 1.00 1.06 1.12 0.75
    Peak   | 60%           | threshold + interval   | 1.00 1.04 1.08 0.65

The 4th week of every block is a deload week. Later blocks start from a
slightly higher volume (+5% build, +10% peak).

Weekly day templates come from lookup tables keyed by block, sessions per
week and week-in-block, so the composition varies across a block instead
of repeating the same pattern every week.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Dict, Any, List, Tuple, FrozenSet, Union
import math

import numpy as np

WEEKS_PER_BLOCK = 4
MAX_CYCLE_WEEKS = 12


class WorkoutCategory(Enum):
    """Workout categories that can appear in a plan."""
    RECOVERY = "recovery"     # Zone 1
    AEROBIC = "aerobic"       # Zone 2
    THRESHOLD = "threshold"   # Lactate threshold
    INTERVAL = "interval"     # VO2max
    LONG_RUN = "long_run"     # Long aerobic run

    @property
    def is_intensity(self) -> bool:
        return self in (WorkoutCategory.THRESHOLD, WorkoutCategory.INTERVAL)


class BlockType(Enum):
    """Macro-blocks of the mesocycle, in order."""
    BASE = "base"
    BUILD = "build"
    PEAK = "peak"


@dataclass(frozen=True)
class BlockDefinition:
    """Volume and intensity policy of one block."""
    block: BlockType
    aerobic_share: float
    intensity_categories: FrozenSet[WorkoutCategory]
    volume_multipliers: Tuple[float, ...]
    description: str
    focus: str

    @property
    def weeks(self) -> int:
        return len(self.volume_multipliers)


BLOCK_DEFINITIONS: Dict[BlockType, BlockDefinition] = {
    BlockType.BASE: BlockDefinition(
        block=BlockType.BASE,
        aerobic_share=0.80,
        intensity_categories=frozenset(),
        volume_multipliers=(1.00, 1.08, 1.15, 0.70),
        description="Aerobic base construction",
        focus="Aerobic base",
    ),
    BlockType.BUILD: BlockDefinition(
        block=BlockType.BUILD,
        aerobic_share=0.70,
        intensity_categories=frozenset({WorkoutCategory.THRESHOLD}),
        volume_multipliers=(1.00, 1.06, 1.12, 0.75),
        description="Introduction of threshold work",
        focus="Threshold development",
    ),
    BlockType.PEAK: BlockDefinition(
        block=BlockType.PEAK,
        aerobic_share=0.60,
        intensity_categories=frozenset({WorkoutCategory.THRESHOLD, WorkoutCategory.INTERVAL}),
        volume_multipliers=(1.00, 1.04, 1.08, 0.65),
        description="VO2max and speed work",
        focus="VO2max work",
    ),
}

BLOCK_SEQUENCE: Tuple[BlockType, ...] = (BlockType.BASE, BlockType.BUILD, BlockType.PEAK)

# Extra volume per block position over the cycle's starting volume
BLOCK_GROWTH_PER_BLOCK = 0.05

# Relative share of weekly volume per session
CATEGORY_VOLUME_WEIGHTS: Dict[WorkoutCategory, float] = {
    WorkoutCategory.AEROBIC: 1.0,
    WorkoutCategory.RECOVERY: 0.7,
    WorkoutCategory.THRESHOLD: 0.9,
    WorkoutCategory.INTERVAL: 0.8,
    WorkoutCategory.LONG_RUN: 1.4,
}


@dataclass(frozen=True)
class WeekPlan:
    """
    Skeleton of one training week.
    """
    week_number: int
    block: BlockType
    week_in_block: int
    volume_minutes: int
    volume_multiplier: float
    is_deload: bool
    aerobic_share: float
    legal_categories: FrozenSet[WorkoutCategory]
    description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'week_number': self.week_number,
            'block': self.block.value,
            'week_in_block': self.week_in_block,
            'volume_minutes': self.volume_minutes,
            'volume_multiplier': self.volume_multiplier,
            'is_deload': self.is_deload,
            'aerobic_share': self.aerobic_share,
            'legal_categories': sorted(c.value for c in self.legal_categories),
            'description': self.description,
        }


@dataclass(frozen=True)
class PeriodizationBlock:
    """Row of the plan's block table."""
    block: BlockType
    start_week: int
    end_week: int
    focus: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'block': self.block.value,
            'start_week': self.start_week,
            'end_week': self.end_week,
            'focus': self.focus,
        }


# ═══════════════════════════════════════════════════════════════════════════════
# WEEK HELPERS
# ═══════════════════════════════════════════════════════════════════════════════

def is_deload_week(week_number: int) -> bool:
    """Weeks 4, 8 and 12 are deload weeks."""
    return week_number % WEEKS_PER_BLOCK == 0


def get_block_for_week(week_number: int) -> BlockType:
    """Block a week of the cycle belongs to."""
    index = min((week_number - 1) // WEEKS_PER_BLOCK, len(BLOCK_SEQUENCE) - 1)
    return BLOCK_SEQUENCE[max(0, index)]


def legal_categories_for_week(
    block: BlockType,
    is_deload: bool,
    intensity_allowed: bool,
    long_run_allowed: bool
) -> FrozenSet[WorkoutCategory]:
    """
    Workout categories allowed in a week.

    Recovery and aerobic runs are always allowed. Threshold and interval
    sessions need both the block policy and the athlete's intensity flag;
    long runs need the long-run flag. Deload weeks are easy weeks only.

    Args:
        block: Current block
        is_deload: Whether this is the block's deload week
        intensity_allowed: Classification flag
        long_run_allowed: Classification flag

    Returns:
        Frozen set of legal categories
    """
    categories = {WorkoutCategory.RECOVERY, WorkoutCategory.AEROBIC}

    if is_deload:
        return frozenset(categories)

    if intensity_allowed:
        categories |= BLOCK_DEFINITIONS[block].intensity_categories

    if long_run_allowed:
        categories.add(WorkoutCategory.LONG_RUN)

    return frozenset(categories)


def generate_mesocycle(
    base_volume_minutes: float,
    intensity_allowed: bool,
    long_run_allowed: bool,
    total_weeks: int = MAX_CYCLE_WEEKS
) -> List[WeekPlan]:
    """
    Build the week-by-week skeleton of a mesocycle.

    Formula:
        volume(week) = round(base × multiplier[week_in_block] × (1 + 0.05 × block_index))

    Args:
        base_volume_minutes: Starting weekly volume
        intensity_allowed: Classification flag
        long_run_allowed: Classification flag
        total_weeks: Number of weeks to build (at most 12)

    Returns:
        List of WeekPlan, one per week
    """
    total_weeks = max(0, min(total_weeks, MAX_CYCLE_WEEKS))
    weeks: List[WeekPlan] = []
    week_number = 1

    for block_index, block_type in enumerate(BLOCK_SEQUENCE):
        definition = BLOCK_DEFINITIONS[block_type]
        growth = 1 + block_index * BLOCK_GROWTH_PER_BLOCK

        for position, multiplier in enumerate(definition.volume_multipliers):
            if week_number > total_weeks:
                return weeks

            is_deload = position == definition.weeks - 1
            volume = int(math.floor(base_volume_minutes * multiplier * growth + 0.5))

            weeks.append(WeekPlan(
                week_number=week_number,
                block=block_type,
                week_in_block=position + 1,
                volume_minutes=volume,
                volume_multiplier=multiplier,
                is_deload=is_deload,
                aerobic_share=definition.aerobic_share,
                legal_categories=legal_categories_for_week(
                    block_type, is_deload, intensity_allowed, long_run_allowed
                ),
                description="Recovery week" if is_deload else definition.description,
            ))
            week_number += 1

    return weeks


def build_block_table(total_weeks: int = MAX_CYCLE_WEEKS) -> List[PeriodizationBlock]:
    """
    Block table for a cycle, truncated to its length.

    Args:
        total_weeks: Cycle length in weeks

    Returns:
        One PeriodizationBlock per block the cycle reaches
    """
    table = []
    for index, block_type in enumerate(BLOCK_SEQUENCE):
        start = index * WEEKS_PER_BLOCK + 1
        if start > total_weeks:
            break
        table.append(PeriodizationBlock(
            block=block_type,
            start_week=start,
            end_week=min(start + WEEKS_PER_BLOCK - 1, total_weeks),
            focus=BLOCK_DEFINITIONS[block_type].focus,
        ))
    return table


# ═══════════════════════════════════════════════════════════════════════════════
# WEEKLY TEMPLATES
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class LongRunSlot:
    """Template slot holding a long run, or the fallback when not allowed."""
    fallback: WorkoutCategory


TemplateSlot = Union[WorkoutCategory, LongRunSlot]

A = WorkoutCategory.AEROBIC
R = WorkoutCategory.RECOVERY
T = WorkoutCategory.THRESHOLD
I = WorkoutCategory.INTERVAL  # noqa: E741


def _long(fallback: WorkoutCategory = WorkoutCategory.AEROBIC) -> LongRunSlot:
    return LongRunSlot(fallback)


# block -> sessions per week -> week in block (1-3) -> slots
WEEK_TEMPLATES: Dict[BlockType, Dict[int, Dict[int, Tuple[TemplateSlot, ...]]]] = {
    BlockType.BASE: {
        2: {1: (A, _long()), 2: (A, _long()), 3: (A, _long())},
        3: {1: (A, A, _long()), 2: (A, A, _long()), 3: (A, R, _long())},
        4: {1: (A, A, R, _long()), 2: (A, A, A, _long()), 3: (A, R, A, _long())},
        5: {1: (A, A, R, A, _long()), 2: (A, A, A, R, _long()), 3: (A, R, A, A, _long())},
        6: {1: (A, A, R, A, A, _long()), 2: (A, A, A, R, A, _long()), 3: (A, R, A, A, R, _long())},
    },
    BlockType.BUILD: {
        2: {1: (A, _long()), 2: (T, _long()), 3: (A, _long(T))},
        3: {1: (A, T, _long()), 2: (A, T, _long()), 3: (T, A, _long())},
        4: {1: (A, T, R, _long()), 2: (A, T, A, _long()), 3: (T, A, R, _long())},
        5: {1: (A, T, R, A, _long()), 2: (A, T, A, T, _long()), 3: (T, A, R, A, _long())},
        6: {1: (A, T, R, A, A, _long()), 2: (A, T, A, T, R, _long()), 3: (T, A, R, A, T, _long())},
    },
    BlockType.PEAK: {
        2: {1: (I, _long()), 2: (T, _long()), 3: (I, _long(T))},
        3: {1: (A, I, _long()), 2: (A, T, _long(I)), 3: (I, A, _long(T))},
        4: {1: (A, I, R, _long(T)), 2: (A, T, I, _long()), 3: (I, A, T, _long())},
        5: {1: (A, I, R, T, _long()), 2: (A, T, A, I, _long()), 3: (I, A, T, R, _long())},
        6: {1: (A, I, R, T, A, _long()), 2: (A, T, A, I, R, _long()), 3: (I, A, T, A, R, _long())},
    },
}

DELOAD_TEMPLATES: Dict[int, Tuple[TemplateSlot, ...]] = {
    2: (A, _long()),
    3: (A, R, _long()),
    4: (A, R, A, _long()),
    5: (A, R, A, R, _long()),
    6: (A, R, A, R, A, _long()),
}

MIN_SESSIONS = 2
MAX_TABLE_SESSIONS = 6


def _lookup_template(week: WeekPlan, sessions: int) -> Tuple[TemplateSlot, ...]:
    """Raw template row; 7-day weeks add a recovery run before the long run."""
    table_sessions = max(MIN_SESSIONS, min(sessions, MAX_TABLE_SESSIONS))

    if week.is_deload:
        row = DELOAD_TEMPLATES[table_sessions]
    else:
        row = WEEK_TEMPLATES[week.block][table_sessions][min(week.week_in_block, 3)]

    if sessions > MAX_TABLE_SESSIONS:
        row = row[:-1] + (R,) * (sessions - MAX_TABLE_SESSIONS) + row[-1:]
    return row


def generate_week_template(week: WeekPlan, sessions: int) -> List[WorkoutCategory]:
    """
    Category for each training day of a week.

    Long-run slots resolve to a long run when it is legal, otherwise to the
    slot's fallback. Any category that is not legal for the week (intensity
    for a restricted athlete, anything hard in a deload week) becomes an
    aerobic run.

    Args:
        week: Week skeleton
        sessions: Training sessions in the week (2-7)

    Returns:
        Ordered list of categories, one per session
    """
    template = []
    for slot in _lookup_template(week, sessions):
        if isinstance(slot, LongRunSlot):
            category = WorkoutCategory.LONG_RUN if WorkoutCategory.LONG_RUN in week.legal_categories \
                else slot.fallback
        else:
            category = slot

        if category not in week.legal_categories:
            category = WorkoutCategory.AEROBIC

        template.append(category)

    return template


def distribute_weekly_volume(
    week_volume: float,
    template: List[WorkoutCategory],
    weights: Optional[Dict[WorkoutCategory, float]] = None
) -> List[int]:
    """
    Split a week's volume across its sessions by category weight.

    Formula:
        duration_i = round(volume × w_i / Σw)

    Args:
        week_volume: Weekly volume in minutes
        template: Session categories
        weights: Category weights (defaults to CATEGORY_VOLUME_WEIGHTS)

    Returns:
        Nominal minutes per session
    """
    if not template:
        return []

    weights = weights or CATEGORY_VOLUME_WEIGHTS
    w = np.array([weights[category] for category in template], dtype=float)
    shares = week_volume * w / w.sum()

    return np.floor(shares + 0.5).astype(int).tolist()
