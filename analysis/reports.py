"""
Report generation utilities for training plans.

Generates text reports for a single plan or a cohort, and tabular
exports (pandas DataFrames / CSV) of workouts, weeks and pace progression.
"""

from typing import List, Dict, Any, Optional
from datetime import datetime

import pandas as pd

from planner.plan_engine import TrainingPlan
from planner.risk import explain_metabolic_risk
from planner.scheduling import DayOfWeek
from planner.units import format_pace, format_minutes


# ═══════════════════════════════════════════════════════════════════════════════
# TABULAR EXPORTS
# ═══════════════════════════════════════════════════════════════════════════════

def plan_to_dataframe(plan: TrainingPlan) -> pd.DataFrame:
    """
    One row per workout.

    Args:
        plan: Generated plan

    Returns:
        DataFrame with date, week, category, variation, duration and pace
    """
    rows = []
    for w in plan.workouts:
        rows.append({
            'date': pd.Timestamp(w.date),
            'day_index': w.day_index,
            'weekday': DayOfWeek(w.date.weekday()).short_name,
            'week': w.week_number,
            'block': w.block.value,
            'is_deload': w.is_deload,
            'category': w.category.value,
            'variation': w.variation_id,
            'name': w.name,
            'duration_minutes': w.duration_minutes,
            'pace_min_s_per_km': w.pace_range.min_s_per_km,
            'pace_max_s_per_km': w.pace_range.max_s_per_km,
            'completed': w.completed,
        })

    columns = ['date', 'day_index', 'weekday', 'week', 'block', 'is_deload', 'category',
               'variation', 'name', 'duration_minutes', 'pace_min_s_per_km',
               'pace_max_s_per_km', 'completed']
    return pd.DataFrame(rows, columns=columns)


def weekly_summary_dataframe(plan: TrainingPlan) -> pd.DataFrame:
    """
    One row per cycle week: planned volume against prescribed minutes.

    Prescribed minutes come from the workout steps and can differ from the
    nominal week volume.
    """
    progress = pd.DataFrame(plan.weekly_progress())
    skeleton = pd.DataFrame([
        {'week_number': w.week_number, 'volume_minutes': w.volume_minutes,
         'volume_multiplier': w.volume_multiplier}
        for w in plan.mesocycle
    ])
    if progress.empty:
        return skeleton
    return skeleton.merge(progress, on='week_number')


def progression_report_to_dataframe(report: List[Dict[str, Any]]) -> pd.DataFrame:
    """
    Flatten a pace progression report into a DataFrame.

    Args:
        report: Output of generate_pace_progression_report

    Returns:
        DataFrame indexed by week with numeric pace columns
    """
    rows = []
    for entry in report:
        paces = entry['paces']
        rows.append({
            'week': entry['week'],
            'block': entry['block'],
            'is_deload': entry['is_deload'],
            'improvement_pct': entry['improvement_pct'],
            'aerobic_min': paces.aerobic.min_s_per_km,
            'aerobic_max': paces.aerobic.max_s_per_km,
            'threshold': paces.threshold,
            'interval': paces.interval,
            'repetition': paces.repetition,
        })
    return pd.DataFrame(rows).set_index('week')


def cohort_to_dataframe(plans: List[TrainingPlan]) -> pd.DataFrame:
    """One row per plan with classification and volume figures."""
    rows = []
    for plan in plans:
        stats = plan.stats()
        rows.append({
            'athlete': plan.athlete_name,
            'experience_tier': plan.classification.experience_tier.value,
            'risk_tier': plan.risk.risk_tier.value,
            'combined_tier': plan.classification.combined_tier,
            'risk_index': plan.risk.risk_index,
            'bmi': plan.body_indices.bmi,
            'intensity_allowed': plan.classification.intensity_allowed,
            'long_run_allowed': plan.classification.long_run_allowed,
            'base_volume': plan.load.base_weekly_volume,
            'progression_rate': plan.load.progression_rate,
            'workouts': stats['total_workouts'],
            'total_minutes': stats['total_minutes'],
            'easy_share': stats['easy_share'],
            'threshold_pace': plan.paces.threshold,
            'warnings': len(plan.warnings),
        })
    return pd.DataFrame(rows)


def export_plan_csv(plan: TrainingPlan, filepath: str) -> None:
    """
    Export a plan's workouts to CSV.

    Args:
        plan: Generated plan
        filepath: Output file path
    """
    plan_to_dataframe(plan).to_csv(filepath, index=False)


# ═══════════════════════════════════════════════════════════════════════════════
# TEXT REPORTS
# ═══════════════════════════════════════════════════════════════════════════════

def format_week_schedule(plan: TrainingPlan, week_number: int) -> str:
    """
    Format one week as a day-by-day schedule.

    Args:
        plan: Generated plan
        week_number: Week of the cycle

    Returns:
        Formatted string, REST on days without a workout
    """
    workouts = {w.date.weekday(): w for w in plan.workouts_for_week(week_number)}
    lines = []

    for day in DayOfWeek:
        workout = workouts.get(day.value)
        if workout:
            lines.append(
                f"  {day.short_name} {workout.date.isoformat()}: {workout.name:<22s} "
                f"{format_minutes(workout.duration_minutes):>8s}  {workout.pace_range.format()}"
            )
            for step in workout.steps:
                lines.append(f"      - {step.describe()}")
        else:
            lines.append(f"  {day.short_name}: REST")

    return "\n".join(lines)


def generate_plan_report(
    plan: TrainingPlan,
    title: str = "Training Plan",
    weeks: Optional[List[int]] = None
) -> str:
    """
    Generate a full text report for a plan.

    Args:
        plan: Generated plan
        title: Report title
        weeks: Weeks to print day by day (default: all)

    Returns:
        Formatted report string
    """
    timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    c = plan.classification

    report = f"""
{'='*70}
{title}{' - ' + plan.athlete_name if plan.athlete_name else ''}
{'='*70}
Generated: {timestamp}
Objective: {plan.objective.value}
Cycle:     {plan.cycle_weeks} weeks ({plan.start_date.isoformat()} to {plan.end_date.isoformat()})

ATHLETE PROFILE
---------------
Experience tier:           {c.experience_tier.value:>14s}
Risk tier:                 {c.risk_tier.value:>14s}
Intensity allowed:         {str(c.intensity_allowed):>14s}
Long runs allowed:         {str(c.long_run_allowed):>14s}
Reduced progression:       {str(c.reduce_progression):>14s}
BMI:                       {plan.body_indices.bmi:>14.1f}
Base weekly volume:        {plan.load.base_weekly_volume:>10.0f} min
Progression rate:          {plan.load.progression_rate * 100:>12.0f} %

METABOLIC RISK
--------------
{explain_metabolic_risk(plan.risk)}

PACE ZONES (week 1)
-------------------
{plan.paces.format_table()}

BLOCKS
------
"""
    for block in plan.blocks:
        report += f"  Weeks {block.start_week:>2d}-{block.end_week:<2d} {block.block.value:<6s} {block.focus}\n"

    report += f"""
WEEKS
-----
{'Week':>4} {'Block':<6} {'Volume':>7} {'Sessions':>9} {'Prescribed':>11}  Notes
{'-'*70}
"""
    for week in plan.mesocycle:
        workouts = plan.workouts_for_week(week.week_number)
        prescribed = sum(w.duration_minutes for w in workouts)
        report += (f"{week.week_number:>4d} {week.block.value:<6s} "
                   f"{week.volume_minutes:>7d} {len(workouts):>9d} {prescribed:>11.0f}  "
                   f"{week.description}\n")

    if plan.warnings:
        report += "\nWARNINGS\n--------\n"
        for warning in plan.warnings:
            report += f"  [{warning.code}] {warning.message}\n"

    for week_number in (weeks if weeks is not None else [w.week_number for w in plan.mesocycle]):
        report += f"\nWEEK {week_number}\n{'-'*10}\n"
        report += format_week_schedule(plan, week_number) + "\n"

    report += "\n" + "=" * 70 + "\n"
    return report


def generate_progression_report(report: List[Dict[str, Any]], tier_name: str = "") -> str:
    """
    Format a pace progression report as a table.

    Args:
        report: Output of generate_pace_progression_report
        tier_name: Experience tier shown in the header

    Returns:
        Formatted table
    """
    lines = [
        f"Pace progression{' (' + tier_name + ')' if tier_name else ''}",
        "=" * 70,
        f"{'Week':>4} {'Block':<6} {'Deload':<7} {'Gain %':>7} {'Aerobic':>16} {'Threshold':>11} {'Interval':>10}",
        "-" * 70,
    ]
    for entry in report:
        lines.append(
            f"{entry['week']:>4d} {entry['block']:<6s} {'yes' if entry['is_deload'] else '':<7s} "
            f"{entry['improvement_pct']:>7.3f} {entry['aerobic']:>16s} "
            f"{entry['threshold']:>11s} {entry['interval']:>10s}"
        )
    return "\n".join(lines)


def generate_cohort_report(plans: List[TrainingPlan], title: str = "Cohort Plan Report") -> str:
    """
    Generate a summary report for a batch of plans.

    Args:
        plans: Generated plans
        title: Report title

    Returns:
        Formatted report string
    """
    df = cohort_to_dataframe(plans)
    timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")

    report = f"""
{'='*70}
{title}
{'='*70}
Generated: {timestamp}
Plans: {len(plans)}
"""
    if df.empty:
        return report + "\n" + "=" * 70 + "\n"

    report += f"""
SUMMARY
-------
Base volume (mean):        {df['base_volume'].mean():>8.1f} min/week
Total minutes (mean):      {df['total_minutes'].mean():>8.1f} min/cycle
Easy share (mean):         {df['easy_share'].mean() * 100:>8.1f} %
Intensity restricted:      {(~df['intensity_allowed']).sum():>8d}
Plans with warnings:       {(df['warnings'] > 0).sum():>8d}

TIERS
-----
"""
    counts = df.groupby('combined_tier').size().sort_index()
    for tier, count in counts.items():
        report += f"  {tier:<28s} {count:>4d}\n"

    report += f"""
PER-ATHLETE BREAKDOWN
---------------------
{'Athlete':<26} {'Tier':<26} {'Risk':>6} {'Base':>5} {'Thr':>6} {'Work':>5}
{'-'*70}
"""
    for _, row in df.iterrows():
        report += (f"{row['athlete'][:26]:<26} {row['combined_tier'][:26]:<26} "
                   f"{row['risk_index']:>6.1f} {row['base_volume']:>5.0f} "
                   f"{format_pace(row['threshold_pace'], with_unit=False):>6} "
                   f"{row['workouts']:>5d}\n")

    report += "\n" + "=" * 70 + "\n"
    return report
