"""
Integration tests for the plan engine, configuration, reports and
synthetic athletes.

Run with: python -m pytest tests/test_plan_engine.py -v
"""

from datetime import date, timedelta
import json

import pandas as pd
import pytest

from planner.classification import ExperienceTier
from planner.errors import ValidationError
from planner.params import EngineParams, load_params, save_params
from planner.periodization import BlockType, WorkoutCategory
from planner.plan_engine import TrainingPlanEngine, generate_training_plan, validate_athlete_input
from planner.progression import generate_pace_progression_report
from analysis.reports import (
    cohort_to_dataframe,
    generate_cohort_report,
    generate_plan_report,
    plan_to_dataframe,
    progression_report_to_dataframe,
    weekly_summary_dataframe,
)
from data.synthetic import ARCHETYPES, create_archetype, generate_athlete_profiles

from conftest import PLAN_MONDAY, build_athlete


@pytest.fixture
def engine():
    return TrainingPlanEngine()


@pytest.fixture
def plan(engine, intermediate_athlete):
    return engine.generate(intermediate_athlete, start_date=PLAN_MONDAY, today=PLAN_MONDAY)


# =============================================================================
# Validation Tests
# =============================================================================

class TestValidation:
    """Tests for up-front input validation."""

    def test_valid_input(self, intermediate_athlete):
        validate_athlete_input(intermediate_athlete)

    def test_all_missing_fields_reported(self):
        athlete = build_athlete(waist_cm=None, time_s=None, max_session_minutes=None)
        with pytest.raises(ValidationError) as exc:
            validate_athlete_input(athlete)
        assert exc.value.fields == ['waist_cm', 'time_s', 'max_session_minutes']

    def test_days_per_week_range(self):
        with pytest.raises(ValidationError) as exc:
            validate_athlete_input(build_athlete(days_per_week=1))
        assert exc.value.fields == ['days_per_week']

    def test_too_few_training_days(self):
        with pytest.raises(ValidationError) as exc:
            validate_athlete_input(build_athlete(training_days=(2, 2)))
        assert 'training_days' in exc.value.fields

    def test_invalid_weekday(self):
        with pytest.raises(ValidationError) as exc:
            validate_athlete_input(build_athlete(training_days=(0, 7)))
        assert 'training_days' in exc.value.fields

    def test_engine_validates_before_generating(self, engine):
        with pytest.raises(ValidationError):
            engine.generate(build_athlete(height_cm=None), today=PLAN_MONDAY)


# =============================================================================
# Plan Generation Tests
# =============================================================================

class TestPlanGeneration:
    """Integration tests for the full engine."""

    def test_plan_overview(self, plan):
        assert plan.cycle_weeks == 12
        assert plan.start_date == PLAN_MONDAY
        assert plan.end_date == PLAN_MONDAY + timedelta(days=83)
        assert plan.classification.experience_tier == ExperienceTier.INTERMEDIATE
        assert plan.load.base_weekly_volume == 120
        assert plan.load.progression_rate == 0.10
        assert len(plan.mesocycle) == 12
        assert len(plan.blocks) == 3
        assert plan.warnings == []

    def test_four_sessions_every_week(self, plan):
        for week in range(1, 13):
            assert len(plan.workouts_for_week(week)) == 4

    def test_first_week(self, plan):
        week = plan.workouts_for_week(1)
        assert [w.date for w in week] == [date(2025, 1, 6), date(2025, 1, 7),
                                          date(2025, 1, 9), date(2025, 1, 11)]
        assert [w.day_index for w in week] == [1, 2, 4, 6]
        assert [w.category for w in week] == [WorkoutCategory.AEROBIC, WorkoutCategory.AEROBIC,
                                              WorkoutCategory.RECOVERY, WorkoutCategory.LONG_RUN]
        assert [w.variation_id for w in week] == ['progression_run', 'progression_run',
                                                  'walk_run', 'progressive_long']
        assert [w.duration_minutes for w in week] == [29, 29, 18, 41]

    def test_intensity_appears_in_later_blocks(self, plan):
        base = {w.category for w in plan.workouts if w.block == BlockType.BASE}
        build = {w.category for w in plan.workouts if w.block == BlockType.BUILD}
        peak = {w.category for w in plan.workouts if w.block == BlockType.PEAK}

        assert not base & {WorkoutCategory.THRESHOLD, WorkoutCategory.INTERVAL}
        assert WorkoutCategory.THRESHOLD in build
        assert WorkoutCategory.INTERVAL not in build
        assert WorkoutCategory.INTERVAL in peak

    def test_deload_weeks_are_easy(self, plan):
        for w in plan.workouts:
            if w.is_deload:
                assert w.category in (WorkoutCategory.RECOVERY, WorkoutCategory.AEROBIC)

    def test_duration_derived_from_steps(self, plan):
        for w in plan.workouts:
            assert w.duration_minutes == sum(s.total_minutes for s in w.steps)

    def test_sessions_capped_by_max_minutes(self, engine):
        athlete = build_athlete(days_per_week=2, max_session_minutes=30)
        plan = engine.generate(athlete, start_date=PLAN_MONDAY, today=PLAN_MONDAY)
        # easy runs keep their 20-minute floor, the cap only bounds the allotment
        easy = [w for w in plan.workouts if w.variation_id == 'easy_run']
        assert all(w.duration_minutes <= 30 for w in easy)

    def test_workout_paces_progress(self, plan):
        aerobic = [w for w in plan.workouts if w.category == WorkoutCategory.AEROBIC]
        first, last = aerobic[0].pace_range, aerobic[-1].pace_range
        assert last.min_s_per_km < first.min_s_per_km
        assert plan.paces.aerobic.min_s_per_km == 300

    def test_deterministic(self, engine, intermediate_athlete):
        first = engine.generate(intermediate_athlete, start_date=PLAN_MONDAY, today=PLAN_MONDAY)
        second = engine.generate(intermediate_athlete, start_date=PLAN_MONDAY, today=PLAN_MONDAY)
        assert first.to_dict() == second.to_dict()

    def test_to_dict_is_json_ready(self, plan):
        data = json.loads(json.dumps(plan.to_dict()))
        assert data['classification']['combined_tier'] == 'intermediate_low'
        assert len(data['workouts']) == 48
        assert data['workouts'][0]['date'] == '2025-01-06'


class TestSafetyRestrictions:
    """Plans for athletes with pain or high risk."""

    def test_injured_athlete_gets_easy_plan(self, engine, injured_athlete):
        plan = engine.generate(injured_athlete, start_date=PLAN_MONDAY, today=PLAN_MONDAY)
        categories = {w.category for w in plan.workouts}
        assert categories <= {WorkoutCategory.RECOVERY, WorkoutCategory.AEROBIC}
        assert plan.load.progression_rate == 0.06

    def test_novice_low_plan(self, engine):
        athlete = build_athlete(distance_m=800, time_s=480, days_per_week=3, max_session_minutes=30)
        plan = engine.generate(athlete, start_date=PLAN_MONDAY, today=PLAN_MONDAY)
        assert plan.classification.experience_tier == ExperienceTier.NOVICE_LOW
        assert plan.load.base_weekly_volume == 60
        assert plan.load.progression_rate == 0.08


class TestCalendar:
    """Tests for plan dates."""

    def test_no_workout_before_today(self, engine, intermediate_athlete):
        today = date(2025, 1, 9)
        plan = engine.generate(intermediate_athlete, start_date=PLAN_MONDAY, today=today)
        assert all(w.date >= today for w in plan.workouts)
        assert [w.date for w in plan.workouts_for_week(1)] == [date(2025, 1, 9), date(2025, 1, 11)]

    def test_default_start_is_monday_of_this_week(self, engine, intermediate_athlete):
        plan = engine.generate(intermediate_athlete, today=date(2025, 1, 8))
        assert plan.start_date == PLAN_MONDAY
        assert plan.end_date == date(2025, 3, 30)
        assert plan.generated_on == date(2025, 1, 8)
        assert plan.workouts[0].date == date(2025, 1, 9)

    def test_chosen_training_days(self, engine):
        athlete = build_athlete(days_per_week=3, training_days=(6, 1, 3))
        plan = engine.generate(athlete, start_date=PLAN_MONDAY, today=PLAN_MONDAY)
        assert {w.date.weekday() for w in plan.workouts} == {1, 3, 6}

    def test_fewer_training_days_than_sessions(self, engine):
        athlete = build_athlete(days_per_week=4, training_days=(0, 3))
        plan = engine.generate(athlete, start_date=PLAN_MONDAY, today=PLAN_MONDAY)
        assert len(plan.workouts_for_week(1)) == 2
        assert [w.code for w in plan.warnings] == ['fewer_training_days']

    def test_cycle_length(self, engine, intermediate_athlete):
        plan = engine.generate(intermediate_athlete, cycle_length_weeks=6,
                               start_date=PLAN_MONDAY, today=PLAN_MONDAY)
        assert plan.cycle_weeks == 6
        assert max(w.week_number for w in plan.workouts) == 6
        assert plan.end_date == PLAN_MONDAY + timedelta(days=41)

    def test_cycle_length_clamped(self, engine, intermediate_athlete):
        plan = engine.generate(intermediate_athlete, cycle_length_weeks=20,
                               start_date=PLAN_MONDAY, today=PLAN_MONDAY)
        assert plan.cycle_weeks == 12
        assert 'cycle_length_clamped' in [w.code for w in plan.warnings]

    def test_recompute_from_later_start(self, engine, intermediate_athlete):
        """An adjustment re-runs the engine for the remaining weeks."""
        restart = PLAN_MONDAY + timedelta(weeks=4)
        plan = engine.generate(intermediate_athlete, cycle_length_weeks=8,
                               start_date=restart, today=restart)
        assert plan.workouts[0].date == restart
        assert plan.cycle_weeks == 8


class TestPlanStats:
    """Tests for the read-only plan statistics."""

    def test_fresh_plan(self, plan):
        assert plan.adherence == 0.0
        assert plan.next_workout() is plan.workouts[0]
        stats = plan.stats()
        assert stats['total_workouts'] == 48
        assert stats['deload_weeks'] == [4, 8, 12]
        assert stats['total_minutes'] == sum(w.duration_minutes for w in plan.workouts)

    def test_completion_tracking(self, plan):
        for workout in plan.workouts_for_week(1)[:2]:
            workout.completed = True

        progress = plan.weekly_progress()
        assert progress[0]['completed_workouts'] == 2
        assert progress[0]['completion_rate'] == 0.5
        assert progress[1]['completed_workouts'] == 0
        assert plan.adherence == pytest.approx(2 / 48)
        assert plan.next_workout(PLAN_MONDAY).date == date(2025, 1, 9)

    def test_warning_for_implausible_test(self, engine):
        plan = engine.generate(build_athlete(time_s=950), start_date=PLAN_MONDAY, today=PLAN_MONDAY)
        assert [w.code for w in plan.warnings] == ['distance_test_out_of_range']


# =============================================================================
# Configuration Tests
# =============================================================================

class TestEngineParams:
    """Tests for engine configuration."""

    def test_defaults_valid(self):
        valid, message = EngineParams().validate()
        assert valid, message

    def test_partial_overrides(self):
        params = EngineParams.from_dict({
            'default_cycle_weeks': 8,
            'risk': {'cardiovascular': 6.0},
            'volume_weights': {'long_run': 1.5},
        })
        assert params.default_cycle_weeks == 8
        assert params.risk.cardiovascular == 6.0
        assert params.risk.diabetes == 2.7
        assert params.volume_weights[WorkoutCategory.LONG_RUN] == 1.5
        assert params.volume_weights[WorkoutCategory.AEROBIC] == 1.0

    def test_resolve_cycle_weeks(self):
        params = EngineParams(default_cycle_weeks=8)
        assert params.resolve_cycle_weeks(None) == 8
        assert params.resolve_cycle_weeks(20) == 12
        assert params.resolve_cycle_weeks(5) == 5

    def test_invalid_params(self):
        valid, _ = EngineParams(default_cycle_weeks=15).validate()
        assert not valid

    def test_save_and_load(self, tmp_path):
        path = tmp_path / "params.json"
        save_params(EngineParams(default_cycle_weeks=6), path)
        assert load_params(path).default_cycle_weeks == 6

    def test_load_rejects_invalid(self, tmp_path):
        path = tmp_path / "params.json"
        path.write_text(json.dumps({'volume_weights': {'aerobic': 0}}))
        with pytest.raises(ValueError):
            load_params(path)

    def test_params_change_plan(self, intermediate_athlete):
        params = EngineParams(default_cycle_weeks=4)
        plan = generate_training_plan(intermediate_athlete, start_date=PLAN_MONDAY,
                                      today=PLAN_MONDAY, params=params)
        assert plan.cycle_weeks == 4


# =============================================================================
# Report Tests
# =============================================================================

class TestReports:
    """Tests for text reports and DataFrame exports."""

    def test_plan_dataframe(self, plan):
        df = plan_to_dataframe(plan)
        assert len(df) == len(plan.workouts)
        assert df['duration_minutes'].sum() == pytest.approx(plan.stats()['total_minutes'])
        assert df.loc[0, 'weekday'] == 'Mon'

    def test_weekly_summary(self, plan):
        df = weekly_summary_dataframe(plan)
        assert list(df['week_number']) == list(range(1, 13))
        assert (df['planned_workouts'] == 4).all()

    def test_progression_dataframe(self, paces):
        report = generate_pace_progression_report(paces, ExperienceTier.NOVICE_LOW)
        df = progression_report_to_dataframe(report)
        assert df.index.tolist() == list(range(1, 13))
        assert df['threshold'].is_monotonic_decreasing

    def test_plan_report(self, plan):
        text = generate_plan_report(plan, weeks=[1])
        assert "PACE ZONES" in text
        assert "WEEK 1" in text
        assert "WEEK 2\n" not in text

    def test_cohort(self, engine):
        plans = [engine.generate(a, today=PLAN_MONDAY) for a in generate_athlete_profiles(6, seed=7)]
        df = cohort_to_dataframe(plans)
        assert isinstance(df, pd.DataFrame)
        assert len(df) == 6
        assert "PER-ATHLETE BREAKDOWN" in generate_cohort_report(plans)


# =============================================================================
# Synthetic Athlete Tests
# =============================================================================

class TestSyntheticAthletes:
    """Tests for synthetic athlete generation."""

    def test_profiles_are_valid(self):
        for athlete in generate_athlete_profiles(10, seed=3):
            validate_athlete_input(athlete)

    def test_seed_reproducible(self):
        first = generate_athlete_profiles(8, seed=11)
        second = generate_athlete_profiles(8, seed=11)
        assert first == second

    def test_one_of_each_archetype_first(self):
        names = [a.name for a in generate_athlete_profiles(len(ARCHETYPES), seed=1)]
        assert names[0].startswith("Sedentary Beginner")
        assert names[-1].startswith("Experienced Runner")

    def test_injured_runner_restricted(self, engine):
        plan = engine.generate(create_archetype('injured_runner', seed=5), today=PLAN_MONDAY)
        assert not plan.classification.intensity_allowed

    def test_overweight_beginner_high_risk(self, engine):
        plan = engine.generate(create_archetype('overweight_beginner', seed=5), today=PLAN_MONDAY)
        assert plan.risk.risk_tier.value == 'high'
        assert plan.classification.reduce_progression

    def test_unknown_archetype(self):
        with pytest.raises(KeyError):
            create_archetype('marathoner')
