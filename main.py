#!/usr/bin/env python3
"""
Run Planner - CLI Entry Point

Usage:
    python main.py generate (--athlete FILE | --archetype NAME) [--seed S] [--weeks W]
                            [--start YYYY-MM-DD] [--today YYYY-MM-DD] [--params FILE] [--json OUT]
    python main.py batch [--profiles N] [--seed S] [--weeks W]
    python main.py progression --archetype NAME [--seed S] [--weeks W]
"""

import sys
import argparse
import json
from datetime import date

from loguru import logger

from planner import (
    AthleteInput,
    EngineParams,
    PlanGenerationError,
    TrainingPlanEngine,
    calculate_metabolic_risk,
    calculate_paces,
    classify_athlete,
    generate_pace_progression_report,
    load_params,
    project_end_of_cycle_improvement,
)
from data.synthetic import ARCHETYPES, create_archetype, generate_athlete_profiles
from analysis.reports import generate_cohort_report, generate_plan_report, generate_progression_report


def configure_logging(verbose: bool = False):
    """Send log records to stderr; reports go to stdout."""
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "INFO")


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid date '{value}', expected YYYY-MM-DD")


def load_athlete(path: str) -> AthleteInput:
    """Load an athlete from a JSON file."""
    with open(path) as f:
        return AthleteInput.from_dict(json.load(f))


def _resolve_athlete(args) -> AthleteInput:
    if args.athlete:
        return load_athlete(args.athlete)
    return create_archetype(args.archetype, seed=args.seed)


def run_generate(args):
    """Generate and print a plan for one athlete."""
    params = load_params(args.params) if args.params else EngineParams()
    athlete = _resolve_athlete(args)

    engine = TrainingPlanEngine(params)
    plan = engine.generate(athlete, args.weeks, start_date=args.start, today=args.today)

    print(generate_plan_report(plan))

    if args.json:
        with open(args.json, 'w') as f:
            json.dump(plan.to_dict(), f, indent=2)
        logger.info("Plan written to {}", args.json)

    return plan


def run_batch(n_profiles: int = 12, seed: int = 42, weeks: int = 12):
    """Generate plans for a synthetic cohort."""
    print(f"Generating plans for {n_profiles} synthetic athletes over {weeks} weeks...")

    profiles = generate_athlete_profiles(n_profiles, seed=seed)
    engine = TrainingPlanEngine()

    plans = []
    for athlete in profiles:
        try:
            plans.append(engine.generate(athlete, weeks))
        except PlanGenerationError as e:
            logger.error("Skipping {}: {}", athlete.name, e)

    print(generate_cohort_report(plans))
    return plans


def run_progression(archetype: str, seed: int = 42, weeks: int = 12):
    """Print the pace progression table for an archetype."""
    athlete = create_archetype(archetype, seed=seed)

    risk = calculate_metabolic_risk(athlete.gender, athlete.body.waist_cm, athlete.body.hip_cm)
    tier = classify_athlete(athlete, risk).experience_tier
    paces = calculate_paces(athlete.tests.distance_m, athlete.tests.time_s)

    report = generate_pace_progression_report(paces, tier, weeks)
    print(generate_progression_report(report, tier.value))

    projection = project_end_of_cycle_improvement(paces, tier, weeks)
    print("\n" + projection['description'])

    return report


def main():
    parser = argparse.ArgumentParser(description='Run Planner - personalized training plans')
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging')
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Generate command
    gen_parser = subparsers.add_parser('generate', help='Generate a plan for one athlete')
    source = gen_parser.add_mutually_exclusive_group(required=True)
    source.add_argument('--athlete', help='Athlete JSON file')
    source.add_argument('--archetype', choices=sorted(ARCHETYPES), help='Synthetic athlete archetype')
    gen_parser.add_argument('--seed', type=int, default=42, help='Random seed (archetypes)')
    gen_parser.add_argument('--weeks', type=int, default=None, help='Cycle length in weeks')
    gen_parser.add_argument('--start', type=_parse_date, default=None, help='Plan start date')
    gen_parser.add_argument('--today', type=_parse_date, default=None, help='Generation date')
    gen_parser.add_argument('--params', default=None, help='Engine parameters JSON file')
    gen_parser.add_argument('--json', default=None, help='Write the plan as JSON to this file')

    # Batch command
    batch_parser = subparsers.add_parser('batch', help='Generate plans for a synthetic cohort')
    batch_parser.add_argument('--profiles', type=int, default=12, help='Number of athletes')
    batch_parser.add_argument('--seed', type=int, default=42, help='Random seed')
    batch_parser.add_argument('--weeks', type=int, default=12, help='Cycle length in weeks')

    # Progression command
    prog_parser = subparsers.add_parser('progression', help='Show pace progression for an archetype')
    prog_parser.add_argument('--archetype', choices=sorted(ARCHETYPES), required=True)
    prog_parser.add_argument('--seed', type=int, default=42, help='Random seed')
    prog_parser.add_argument('--weeks', type=int, default=12, help='Cycle length in weeks')

    args = parser.parse_args()
    configure_logging(args.verbose)

    try:
        if args.command == 'generate':
            run_generate(args)
        elif args.command == 'batch':
            run_batch(args.profiles, args.seed, args.weeks)
        elif args.command == 'progression':
            run_progression(args.archetype, args.seed, args.weeks)
        else:
            parser.print_help()
    except PlanGenerationError as e:
        logger.error("Plan generation failed: {}", e)
        sys.exit(1)


if __name__ == '__main__':
    main()
