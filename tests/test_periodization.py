"""
Tests for the mesocycle structure, workout variations and scheduling.

Run with: python -m pytest tests/test_periodization.py -v
"""

from datetime import date

import pytest

from planner.classification import ExperienceTier
from planner.periodization import (
    BlockType,
    WorkoutCategory,
    build_block_table,
    distribute_weekly_volume,
    generate_mesocycle,
    generate_week_template,
    get_block_for_week,
    is_deload_week,
)
from planner.scheduling import (
    cycle_day_index,
    plan_end_date,
    resolve_training_days,
    week_start,
    workout_date,
)
from planner.workouts import (
    StepKind,
    VARIATIONS,
    WorkoutStep,
    build_workout,
    list_variations,
    select_variation,
)

A = WorkoutCategory.AEROBIC
R = WorkoutCategory.RECOVERY
T = WorkoutCategory.THRESHOLD
I = WorkoutCategory.INTERVAL  # noqa: E741
L = WorkoutCategory.LONG_RUN


# =============================================================================
# Mesocycle Tests
# =============================================================================

class TestMesocycle:
    """Tests for block and week structure."""

    @pytest.fixture
    def cycle(self):
        return generate_mesocycle(120, intensity_allowed=True, long_run_allowed=True)

    def test_twelve_weeks(self, cycle):
        assert len(cycle) == 12
        assert [w.week_number for w in cycle] == list(range(1, 13))

    def test_block_order(self, cycle):
        assert [w.block for w in cycle[:4]] == [BlockType.BASE] * 4
        assert [w.block for w in cycle[4:8]] == [BlockType.BUILD] * 4
        assert [w.block for w in cycle[8:]] == [BlockType.PEAK] * 4

    def test_base_block_volumes(self, cycle):
        assert [w.volume_minutes for w in cycle[:4]] == [120, 130, 138, 84]

    def test_deload_weeks(self, cycle):
        deloads = [w.week_number for w in cycle if w.is_deload]
        assert deloads == [4, 8, 12]
        for week in deloads:
            assert cycle[week - 1].volume_minutes < cycle[week - 2].volume_minutes
            assert cycle[week - 1].description == "Recovery week"

    def test_later_blocks_grow(self, cycle):
        assert cycle[4].volume_minutes == 126
        assert cycle[8].volume_minutes == 132

    def test_aerobic_share(self, cycle):
        assert [cycle[i].aerobic_share for i in (0, 4, 8)] == [0.80, 0.70, 0.60]

    def test_short_cycle(self):
        cycle = generate_mesocycle(90, True, True, total_weeks=6)
        assert len(cycle) == 6
        assert cycle[-1].block == BlockType.BUILD

    def test_week_helpers(self):
        assert [w for w in range(1, 13) if is_deload_week(w)] == [4, 8, 12]
        assert get_block_for_week(4) == BlockType.BASE
        assert get_block_for_week(5) == BlockType.BUILD
        assert get_block_for_week(12) == BlockType.PEAK

    def test_block_table_truncated(self):
        table = build_block_table(6)
        assert [(b.block, b.start_week, b.end_week) for b in table] == [
            (BlockType.BASE, 1, 4),
            (BlockType.BUILD, 5, 6),
        ]
        assert table[1].focus == "Threshold development"


class TestLegalCategories:
    """Tests for what each week may contain."""

    def test_base_has_no_intensity(self):
        week = generate_mesocycle(120, True, True)[0]
        assert week.legal_categories == frozenset({R, A, L})

    def test_peak_allows_threshold_and_interval(self):
        week = generate_mesocycle(120, True, True)[8]
        assert week.legal_categories == frozenset({R, A, T, I, L})

    def test_deload_is_easy_only(self):
        week = generate_mesocycle(120, True, True)[7]
        assert week.legal_categories == frozenset({R, A})

    def test_restricted_athlete(self):
        week = generate_mesocycle(60, intensity_allowed=False, long_run_allowed=False)[8]
        assert week.legal_categories == frozenset({R, A})


# =============================================================================
# Template and Volume Tests
# =============================================================================

class TestWeekTemplates:
    """Tests for weekly day templates."""

    @pytest.fixture
    def cycle(self):
        return generate_mesocycle(120, True, True)

    def test_base_week_one_four_days(self, cycle):
        assert generate_week_template(cycle[0], 4) == [A, A, R, L]

    def test_templates_vary_within_block(self, cycle):
        assert generate_week_template(cycle[1], 4) == [A, A, A, L]
        assert generate_week_template(cycle[2], 4) == [A, R, A, L]

    def test_build_week_has_threshold(self, cycle):
        assert generate_week_template(cycle[4], 4) == [A, T, R, L]

    def test_peak_week_keeps_long_run(self, cycle):
        assert generate_week_template(cycle[8], 3) == [A, I, L]

    def test_deload_template(self, cycle):
        assert generate_week_template(cycle[3], 3) == [A, R, A]
        assert generate_week_template(cycle[3], 6) == [A, R, A, R, A, A]

    def test_seven_days_adds_recovery(self, cycle):
        assert generate_week_template(cycle[0], 7) == [A, A, R, A, A, R, L]

    def test_restricted_athlete_gets_aerobic(self):
        cycle = generate_mesocycle(90, intensity_allowed=False, long_run_allowed=False)
        for week in cycle:
            template = generate_week_template(week, 4)
            assert set(template) <= {A, R}
        # long slot with a threshold fallback still resolves to aerobic
        assert generate_week_template(cycle[8], 4) == [A, A, R, A]

    def test_two_day_build_fallback(self):
        cycle = generate_mesocycle(90, intensity_allowed=True, long_run_allowed=False)
        assert generate_week_template(cycle[6], 2) == [A, T]

    def test_template_length_matches_sessions(self, cycle):
        for week in cycle:
            for sessions in range(2, 8):
                assert len(generate_week_template(week, sessions)) == sessions


class TestVolumeDistribution:
    """Tests for splitting weekly volume across sessions."""

    def test_weighted_split(self):
        assert distribute_weekly_volume(120, [A, A, R, L]) == [29, 29, 20, 41]

    def test_equal_weights(self):
        assert distribute_weekly_volume(90, [A, A, A]) == [30, 30, 30]

    def test_returns_python_ints(self):
        minutes = distribute_weekly_volume(100, [A, L])
        assert all(type(m) is int for m in minutes)

    def test_empty_template(self):
        assert distribute_weekly_volume(100, []) == []

    def test_custom_weights(self):
        weights = {A: 1.0, R: 1.0, T: 1.0, I: 1.0, L: 2.0}
        assert distribute_weekly_volume(120, [A, L], weights) == [40, 80]


# =============================================================================
# Workout Variation Tests
# =============================================================================

class TestVariationSelection:
    """Tests for deterministic variation rotation."""

    def test_rotation(self):
        assert select_variation(R, 1, BlockType.BASE) == 'walk_run'
        assert select_variation(R, 2, BlockType.BASE) == 'recovery_run'
        assert select_variation(A, 3, BlockType.BASE) == 'easy_run'
        assert select_variation(T, 5, BlockType.BUILD) == 'tempo_continuous'
        assert select_variation(I, 9, BlockType.PEAK) == 'pyramid'

    def test_deterministic(self):
        for category in WorkoutCategory:
            for week in range(1, 13):
                block = get_block_for_week(week)
                assert select_variation(category, week, block) == select_variation(category, week, block)

    def test_consecutive_weeks_differ(self):
        assert select_variation(A, 1, BlockType.BASE) != select_variation(A, 2, BlockType.BASE)

    def test_list_variations(self):
        ids = [v['id'] for v in list_variations(L)]
        assert ids == ['steady_long', 'progressive_long', 'long_with_pickups']
        assert all(set(v) == {'id', 'name', 'description', 'objective'} for v in list_variations(A))


class TestWorkoutSteps:
    """Tests for step expansion and derived durations."""

    def _build(self, variation_id, category, minutes, paces, tier):
        variation = next(v for v in VARIATIONS[category] if v.variation_id == variation_id)
        return variation.build_steps(minutes, paces, tier)

    def test_step_total_minutes(self):
        step = WorkoutStep(StepKind.MAIN, 1, "hard", repeats=6, recovery_minutes=2)
        assert step.total_minutes == 16

    def test_easy_run_minimum(self, paces):
        steps = self._build('easy_run', A, 12, paces, ExperienceTier.NOVICE_LOW)
        assert sum(s.total_minutes for s in steps) == 20

    def test_walk_run_cycles(self, paces):
        steps = self._build('walk_run', R, 20, paces, ExperienceTier.NOVICE_LOW)
        assert steps[1].repeats == 3
        assert sum(s.total_minutes for s in steps) == 18

    def test_short_intervals_by_tier(self, paces):
        novice = self._build('short_intervals', I, 40, paces, ExperienceTier.NOVICE_LOW)
        advanced = self._build('short_intervals', I, 40, paces, ExperienceTier.INTERMEDIATE)
        assert sum(s.total_minutes for s in novice) == 34
        assert sum(s.total_minutes for s in advanced) == 41.5

    def test_pyramid_by_tier(self, paces):
        novice = self._build('pyramid', I, 40, paces, ExperienceTier.NOVICE_LOW)
        advanced = self._build('pyramid', I, 40, paces, ExperienceTier.NOVICE_HIGH)
        assert sum(s.total_minutes for s in novice) == 33
        assert sum(s.total_minutes for s in advanced) == 44

    def test_tempo_capped_for_novice_low(self, paces):
        novice = self._build('tempo_continuous', T, 50, paces, ExperienceTier.NOVICE_LOW)
        advanced = self._build('tempo_continuous', T, 50, paces, ExperienceTier.INTERMEDIATE)
        assert novice[1].minutes == 15
        assert advanced[1].minutes == 25

    def test_cruise_intervals(self, paces):
        steps = self._build('cruise_intervals', T, 40, paces, ExperienceTier.INTERMEDIATE)
        assert (steps[1].repeats, steps[1].minutes) == (4, 3)
        assert sum(s.total_minutes for s in steps) == 36

    def test_tempo_ladder_length(self, paces):
        short = self._build('tempo_ladder', T, 30, paces, ExperienceTier.INTERMEDIATE)
        long = self._build('tempo_ladder', T, 50, paces, ExperienceTier.INTERMEDIATE)
        assert sum(s.total_minutes for s in short) == 36
        assert sum(s.total_minutes for s in long) == 52

    def test_long_with_pickups(self, paces):
        steps = self._build('long_with_pickups', L, 60, paces, ExperienceTier.INTERMEDIATE)
        assert steps[1].repeats == 3
        assert sum(s.total_minutes for s in steps) == 60

    def test_prescription_duration_is_step_sum(self, paces):
        for category in WorkoutCategory:
            for week in range(1, 13):
                workout = build_workout(category, 45, paces, ExperienceTier.NOVICE_HIGH,
                                        week, get_block_for_week(week))
                assert workout.duration_minutes == sum(s.total_minutes for s in workout.steps)

    def test_pace_range_by_category(self, paces):
        tier = ExperienceTier.INTERMEDIATE
        assert build_workout(R, 30, paces, tier, 1, BlockType.BASE).pace_range == paces.recovery
        assert build_workout(L, 60, paces, tier, 1, BlockType.BASE).pace_range == paces.long_run
        threshold = build_workout(T, 45, paces, tier, 5, BlockType.BUILD).pace_range
        assert (threshold.min_s_per_km, threshold.max_s_per_km) == (310, 310)

    def test_step_description(self, paces):
        step = WorkoutStep(StepKind.MAIN, 1, "Hard effort", repeats=6, recovery_minutes=1.5)
        assert step.describe() == "6x 1 min: Hard effort (1.5 min easy jog between repeats)"


# =============================================================================
# Scheduling Tests
# =============================================================================

class TestScheduling:
    """Tests for calendar placement."""

    def test_default_days(self):
        assert resolve_training_days(2) == [0, 4]
        assert resolve_training_days(3) == [0, 2, 4]
        assert resolve_training_days(4) == [0, 1, 3, 5]
        assert resolve_training_days(7) == list(range(7))

    def test_chosen_days_sorted_and_truncated(self):
        assert resolve_training_days(3, [6, 1, 3, 1, 5]) == [1, 3, 5]

    def test_week_start_is_monday(self):
        assert week_start(date(2025, 1, 9)) == date(2025, 1, 6)
        assert week_start(date(2025, 1, 6)) == date(2025, 1, 6)

    def test_workout_dates(self):
        start = date(2025, 1, 8)
        assert workout_date(start, 0, 0) == date(2025, 1, 6)
        assert workout_date(start, 1, 4) == date(2025, 1, 17)

    def test_end_date_and_day_index(self):
        assert plan_end_date(date(2025, 1, 6), 12) == date(2025, 3, 30)
        assert cycle_day_index(0, 0) == 1
        assert cycle_day_index(1, 6) == 14
