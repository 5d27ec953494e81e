"""
Training plan generation for recreational runners.

This package turns an athlete's onboarding data into a periodized,
day-by-day running plan:
- Metabolic risk scoring (waist-based avoidable risk index)
- Athlete classification (experience tier, safety flags)
- Pace zones from a 6-minute test and a 1 km test
- Base / build / peak mesocycle with deload weeks
- Rotating workout variations with structured steps
- Bounded week-by-week pace progression
"""

# Input records
from .athlete import (
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

# Errors
from .errors import (
    PlanGenerationError,
    IncompleteInputError,
    InsufficientTestDataError,
    ValidationError,
    PlanWarning,
)

# Risk
from .risk import (
    RiskTier,
    RiskCoefficients,
    RiskAssessment,
    BodyIndices,
    classify_risk_index,
    calculate_metabolic_risk,
    calculate_body_indices,
    explain_metabolic_risk,
)

# Classification
from .classification import (
    ExperienceTier,
    Classification,
    classify_experience,
    classify_athlete,
    determine_safety_flags,
    calculate_initial_weekly_volume,
    calculate_progression_rate,
)

# Paces
from .paces import (
    PaceZone,
    PaceRange,
    PaceSet,
    calculate_paces,
    validate_physical_tests,
)

# Progression
from .progression import (
    calculate_cumulative_improvement,
    apply_pace_progression,
    calculate_pace_difference,
    project_end_of_cycle_improvement,
    generate_pace_progression_report,
)

# Periodization
from .periodization import (
    BlockType,
    WorkoutCategory,
    WeekPlan,
    PeriodizationBlock,
    is_deload_week,
    get_block_for_week,
    generate_mesocycle,
    generate_week_template,
    distribute_weekly_volume,
    build_block_table,
)

# Workouts
from .workouts import (
    StepKind,
    WorkoutStep,
    WorkoutPrescription,
    select_variation,
    build_workout,
    list_variations,
)

# Scheduling
from .scheduling import (
    DayOfWeek,
    resolve_training_days,
)

# Configuration
from .params import (
    EngineParams,
    load_params,
    save_params,
)

# Engine
from .plan_engine import (
    TrainingPlanEngine,
    TrainingPlan,
    WorkoutInstance,
    LoadParameters,
    validate_athlete_input,
    generate_training_plan,
)

# Helpers
from .units import format_pace, parse_pace

__all__ = [
    # Input
    'AthleteInput',
    'Availability',
    'BodyMetrics',
    'Gender',
    'PainRecord',
    'PhysicalTests',
    'RunningHistory',
    'RunningTimeBucket',
    'TrainingObjective',
    # Errors
    'PlanGenerationError',
    'IncompleteInputError',
    'InsufficientTestDataError',
    'ValidationError',
    'PlanWarning',
    # Risk
    'RiskTier',
    'RiskCoefficients',
    'RiskAssessment',
    'BodyIndices',
    'classify_risk_index',
    'calculate_metabolic_risk',
    'calculate_body_indices',
    'explain_metabolic_risk',
    # Classification
    'ExperienceTier',
    'Classification',
    'classify_experience',
    'classify_athlete',
    'determine_safety_flags',
    'calculate_initial_weekly_volume',
    'calculate_progression_rate',
    # Paces
    'PaceZone',
    'PaceRange',
    'PaceSet',
    'calculate_paces',
    'validate_physical_tests',
    # Progression
    'calculate_cumulative_improvement',
    'apply_pace_progression',
    'calculate_pace_difference',
    'project_end_of_cycle_improvement',
    'generate_pace_progression_report',
    # Periodization
    'BlockType',
    'WorkoutCategory',
    'WeekPlan',
    'PeriodizationBlock',
    'is_deload_week',
    'get_block_for_week',
    'generate_mesocycle',
    'generate_week_template',
    'distribute_weekly_volume',
    'build_block_table',
    # Workouts
    'StepKind',
    'WorkoutStep',
    'WorkoutPrescription',
    'select_variation',
    'build_workout',
    'list_variations',
    # Scheduling
    'DayOfWeek',
    'resolve_training_days',
    # Configuration
    'EngineParams',
    'load_params',
    'save_params',
    # Engine
    'TrainingPlanEngine',
    'TrainingPlan',
    'WorkoutInstance',
    'LoadParameters',
    'validate_athlete_input',
    'generate_training_plan',
    # Helpers
    'format_pace',
    'parse_pace',
]
