"""
Training Plan Engine: assembles a complete periodized plan.

This module ties the individual components together:
- Input validation
- Metabolic risk scoring and athlete classification
- Pace zones from the field tests
- Mesocycle skeleton, weekly templates and volume split
- Weekly pace progression and workout variations

Generation is a single synchronous pass: the same input and dates always
produce the same plan. Risk and classification are computed once and
shared by every week.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Optional, Dict, Any, List

from loguru import logger

from .athlete import AthleteInput, TrainingObjective
from .classification import (
    Classification,
    classify_athlete,
    calculate_initial_weekly_volume,
    calculate_progression_rate,
)
from .errors import PlanWarning, ValidationError
from .paces import PaceSet, PaceRange, calculate_paces, validate_physical_tests
from .params import EngineParams
from .periodization import (
    BlockType,
    PeriodizationBlock,
    WeekPlan,
    WorkoutCategory,
    build_block_table,
    distribute_weekly_volume,
    generate_mesocycle,
    generate_week_template,
)
from .progression import apply_pace_progression
from .risk import BodyIndices, RiskAssessment, calculate_body_indices, calculate_metabolic_risk
from .scheduling import (
    cycle_day_index,
    plan_end_date,
    resolve_training_days,
    week_start,
    workout_date,
)
from .workouts import WorkoutStep, build_workout, total_step_minutes

MIN_DAYS_PER_WEEK = 2
MAX_DAYS_PER_WEEK = 7


@dataclass
class WorkoutInstance:
    """
    A workout placed on the calendar.

    Duration is always derived from the steps. The completion flag belongs
    to whoever tracks training; the engine only reads it.
    """
    day_index: int              # 1-based day of the cycle
    date: date
    week_number: int
    block: BlockType
    is_deload: bool
    category: WorkoutCategory
    variation_id: str
    name: str
    description: str
    objective: str
    steps: List[WorkoutStep]
    pace_range: PaceRange
    completed: bool = False

    @property
    def duration_minutes(self) -> float:
        return total_step_minutes(self.steps)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'day_index': self.day_index,
            'date': self.date.isoformat(),
            'week_number': self.week_number,
            'block': self.block.value,
            'is_deload': self.is_deload,
            'category': self.category.value,
            'variation_id': self.variation_id,
            'name': self.name,
            'description': self.description,
            'objective': self.objective,
            'duration_minutes': self.duration_minutes,
            'steps': [s.to_dict() for s in self.steps],
            'pace_range': self.pace_range.to_dict(),
            'completed': self.completed,
        }


@dataclass(frozen=True)
class LoadParameters:
    """Starting load of a plan."""
    base_weekly_volume: float
    progression_rate: float
    current_week: int = 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            'base_weekly_volume': self.base_weekly_volume,
            'progression_rate': self.progression_rate,
            'current_week': self.current_week,
        }


@dataclass
class TrainingPlan:
    """
    Complete generated training plan.

    paces holds the week-1 (original) zones; each workout carries the
    adjusted target of its own week.
    """
    objective: TrainingObjective
    classification: Classification
    risk: RiskAssessment
    body_indices: BodyIndices
    cycle_weeks: int
    start_date: date
    end_date: date
    generated_on: date
    paces: PaceSet
    load: LoadParameters
    workouts: List[WorkoutInstance] = field(default_factory=list)
    mesocycle: List[WeekPlan] = field(default_factory=list)
    blocks: List[PeriodizationBlock] = field(default_factory=list)
    warnings: List[PlanWarning] = field(default_factory=list)
    athlete_name: str = ""

    def workouts_for_week(self, week_number: int) -> List[WorkoutInstance]:
        """Workouts of one cycle week, in calendar order."""
        return [w for w in self.workouts if w.week_number == week_number]

    def next_workout(self, on: Optional[date] = None) -> Optional[WorkoutInstance]:
        """First uncompleted workout on or after a date."""
        on = on or self.generated_on
        for workout in self.workouts:
            if workout.date >= on and not workout.completed:
                return workout
        return None

    def weekly_progress(self) -> List[Dict[str, Any]]:
        """
        Completion progress for every week of the cycle.

        Returns:
            One dictionary per week with planned/completed counts and minutes
        """
        progress = []
        for week in self.mesocycle:
            workouts = self.workouts_for_week(week.week_number)
            done = [w for w in workouts if w.completed]
            progress.append({
                'week_number': week.week_number,
                'block': week.block.value,
                'is_deload': week.is_deload,
                'planned_workouts': len(workouts),
                'completed_workouts': len(done),
                'planned_minutes': sum(w.duration_minutes for w in workouts),
                'completed_minutes': sum(w.duration_minutes for w in done),
                'completion_rate': len(done) / len(workouts) if workouts else 0.0,
            })
        return progress

    @property
    def adherence(self) -> float:
        """Fraction of all workouts marked completed."""
        if not self.workouts:
            return 0.0
        return sum(1 for w in self.workouts if w.completed) / len(self.workouts)

    def stats(self) -> Dict[str, Any]:
        """Aggregate numbers for the whole plan."""
        by_category = {c.value: 0 for c in WorkoutCategory}
        minutes_by_category = {c.value: 0.0 for c in WorkoutCategory}
        for workout in self.workouts:
            by_category[workout.category.value] += 1
            minutes_by_category[workout.category.value] += workout.duration_minutes

        total_minutes = sum(minutes_by_category.values())
        easy_minutes = (minutes_by_category[WorkoutCategory.RECOVERY.value]
                        + minutes_by_category[WorkoutCategory.AEROBIC.value]
                        + minutes_by_category[WorkoutCategory.LONG_RUN.value])

        return {
            'total_workouts': len(self.workouts),
            'completed_workouts': sum(1 for w in self.workouts if w.completed),
            'adherence': self.adherence,
            'total_minutes': total_minutes,
            'easy_share': easy_minutes / total_minutes if total_minutes else 1.0,
            'workouts_by_category': by_category,
            'minutes_by_category': minutes_by_category,
            'deload_weeks': [w.week_number for w in self.mesocycle if w.is_deload],
        }

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready representation of the plan."""
        return {
            'athlete_name': self.athlete_name,
            'objective': self.objective.value,
            'classification': self.classification.to_dict(),
            'risk': self.risk.to_dict(),
            'body_indices': self.body_indices.to_dict(),
            'cycle_weeks': self.cycle_weeks,
            'start_date': self.start_date.isoformat(),
            'end_date': self.end_date.isoformat(),
            'generated_on': self.generated_on.isoformat(),
            'paces': self.paces.to_dict(),
            'load': self.load.to_dict(),
            'mesocycle': [w.to_dict() for w in self.mesocycle],
            'blocks': [b.to_dict() for b in self.blocks],
            'workouts': [w.to_dict() for w in self.workouts],
            'warnings': [w.to_dict() for w in self.warnings],
        }


def validate_athlete_input(athlete: AthleteInput) -> None:
    """
    Check that an athlete input can produce a plan.

    Every problem is collected so the error names all offending fields at
    once.

    Args:
        athlete: Athlete input

    Raises:
        ValidationError: If anything required is missing or out of range
    """
    fields = []
    details = []

    required = (
        ('height_cm', athlete.body.height_cm),
        ('weight_kg', athlete.body.weight_kg),
        ('waist_cm', athlete.body.waist_cm),
        ('hip_cm', athlete.body.hip_cm),
        ('distance_m', athlete.tests.distance_m),
        ('time_s', athlete.tests.time_s),
        ('days_per_week', athlete.availability.days_per_week),
        ('max_session_minutes', athlete.availability.max_session_minutes),
    )
    for name, value in required:
        if not value:
            fields.append(name)
        elif value < 0:
            fields.append(name)
            details.append(f"{name} must be positive")

    days = athlete.availability.days_per_week
    if days and 'days_per_week' not in fields and not (MIN_DAYS_PER_WEEK <= days <= MAX_DAYS_PER_WEEK):
        fields.append('days_per_week')
        details.append(f"days_per_week must be between {MIN_DAYS_PER_WEEK} and {MAX_DAYS_PER_WEEK}")

    training_days = athlete.availability.training_days
    if training_days:
        if any(not isinstance(d, int) or not 0 <= d <= 6 for d in training_days):
            fields.append('training_days')
            details.append("training_days must be weekday indices 0-6")
        elif len(set(training_days)) < MIN_DAYS_PER_WEEK:
            fields.append('training_days')
            details.append("select at least 2 distinct training days")

    if fields:
        raise ValidationError(fields, details)


class TrainingPlanEngine:
    """
    Main engine for generating training plans.

    Holds only configuration; every call to generate() is independent.
    """

    def __init__(self, params: Optional[EngineParams] = None):
        """
        Initialize the engine.

        Args:
            params: Engine parameters (defaults if None)
        """
        self.params = params or EngineParams()

    def generate(
        self,
        athlete: AthleteInput,
        cycle_length_weeks: Optional[int] = None,
        start_date: Optional[date] = None,
        today: Optional[date] = None
    ) -> TrainingPlan:
        """
        Generate a complete plan for an athlete.

        An adjustment after a missed stretch of training re-invokes this
        with a new start date and the remaining number of weeks.

        Args:
            athlete: Athlete input
            cycle_length_weeks: Requested weeks (default and cap from params)
            start_date: First day of the plan (default: Monday of this week)
            today: Generation date; no workout is dated before it

        Returns:
            TrainingPlan

        Raises:
            ValidationError: If the input is incomplete or invalid
        """
        validate_athlete_input(athlete)

        today = today or date.today()
        weeks = self.params.resolve_cycle_weeks(cycle_length_weeks)
        start = start_date or week_start(today)
        end = plan_end_date(start, weeks)

        logger.info("Generating {}-week plan for {} starting {}",
                    weeks, athlete.name or "athlete", start.isoformat())

        warnings = validate_physical_tests(athlete.tests.distance_m, athlete.tests.time_s)
        if cycle_length_weeks and cycle_length_weeks > self.params.max_cycle_weeks:
            warnings.append(PlanWarning(
                code='cycle_length_clamped',
                message=f"Requested {cycle_length_weeks} weeks; cycles are limited to {weeks} weeks.",
            ))

        risk = calculate_metabolic_risk(athlete.gender, athlete.body.waist_cm,
                                        athlete.body.hip_cm, self.params.risk)
        body_indices = calculate_body_indices(athlete.body.height_cm, athlete.body.weight_kg,
                                              athlete.body.waist_cm, athlete.body.hip_cm)
        classification = classify_athlete(athlete, risk, self.params.risk.high_threshold)
        paces = calculate_paces(athlete.tests.distance_m, athlete.tests.time_s)

        logger.info("Classified as {} (risk index {:.1f})",
                    classification.combined_tier, risk.risk_index)

        availability = athlete.availability
        tier = classification.experience_tier
        base_volume = calculate_initial_weekly_volume(tier, availability.days_per_week,
                                                      availability.max_session_minutes)
        load = LoadParameters(
            base_weekly_volume=base_volume,
            progression_rate=calculate_progression_rate(tier, classification.reduce_progression),
        )

        training_days = resolve_training_days(availability.days_per_week, availability.training_days)
        if len(training_days) < availability.days_per_week:
            warnings.append(PlanWarning(
                code='fewer_training_days',
                message=(f"{availability.days_per_week} sessions per week requested but only "
                         f"{len(training_days)} training days selected."),
            ))

        mesocycle = generate_mesocycle(base_volume, classification.intensity_allowed,
                                       classification.long_run_allowed, weeks)

        earliest = max(start, today)
        workouts = []
        skipped = 0

        for week_index, week in enumerate(mesocycle):
            week_paces = apply_pace_progression(paces, week.week_number, tier)
            template = generate_week_template(week, len(training_days))
            allotted = distribute_weekly_volume(week.volume_minutes, template,
                                                self.params.volume_weights)

            logger.debug("Week {} ({}, deload={}): {} min, {}",
                         week.week_number, week.block.value, week.is_deload,
                         week.volume_minutes, [c.value for c in template])

            for weekday, category, nominal in zip(training_days, template, allotted):
                when = workout_date(start, week_index, weekday)
                if when < earliest:
                    skipped += 1
                    continue

                if self.params.cap_session_minutes:
                    nominal = min(nominal, availability.max_session_minutes)

                prescription = build_workout(category, nominal, week_paces, tier,
                                             week.week_number, week.block)

                workouts.append(WorkoutInstance(
                    day_index=cycle_day_index(week_index, weekday),
                    date=when,
                    week_number=week.week_number,
                    block=week.block,
                    is_deload=week.is_deload,
                    category=category,
                    variation_id=prescription.variation_id,
                    name=prescription.name,
                    description=prescription.description,
                    objective=prescription.objective,
                    steps=list(prescription.steps),
                    pace_range=prescription.pace_range,
                ))

        if skipped:
            logger.debug("Skipped {} workouts dated before {}", skipped, earliest.isoformat())

        logger.info("Plan ready: {} workouts from {} to {}",
                    len(workouts), start.isoformat(), end.isoformat())

        return TrainingPlan(
            objective=athlete.objective,
            classification=classification,
            risk=risk,
            body_indices=body_indices,
            cycle_weeks=weeks,
            start_date=start,
            end_date=end,
            generated_on=today,
            paces=paces,
            load=load,
            workouts=workouts,
            mesocycle=mesocycle,
            blocks=build_block_table(weeks),
            warnings=warnings,
            athlete_name=athlete.name,
        )


def generate_training_plan(
    athlete: AthleteInput,
    cycle_length_weeks: Optional[int] = None,
    start_date: Optional[date] = None,
    today: Optional[date] = None,
    params: Optional[EngineParams] = None
) -> TrainingPlan:
    """Generate a plan with a one-off engine (see TrainingPlanEngine.generate)."""
    return TrainingPlanEngine(params).generate(athlete, cycle_length_weeks, start_date, today)
