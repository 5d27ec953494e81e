"""Plan reports and tabular exports."""

from .reports import (
    plan_to_dataframe,
    weekly_summary_dataframe,
    progression_report_to_dataframe,
    cohort_to_dataframe,
    export_plan_csv,
    format_week_schedule,
    generate_plan_report,
    generate_progression_report,
    generate_cohort_report,
)

__all__ = [
    'plan_to_dataframe',
    'weekly_summary_dataframe',
    'progression_report_to_dataframe',
    'cohort_to_dataframe',
    'export_plan_csv',
    'format_week_schedule',
    'generate_plan_report',
    'generate_progression_report',
    'generate_cohort_report',
]
