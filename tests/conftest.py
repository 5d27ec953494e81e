"""Shared fixtures for planner tests."""

from datetime import date

import pytest

from planner.athlete import (
    AthleteInput,
    Availability,
    BodyMetrics,
    Gender,
    PainRecord,
    PhysicalTests,
    RunningHistory,
)
from planner.paces import calculate_paces

# Monday
PLAN_MONDAY = date(2025, 1, 6)


def build_athlete(
    gender=Gender.MALE,
    height_cm=178.0,
    weight_kg=72.0,
    waist_cm=85.0,
    hip_cm=95.0,
    distance_m=1300.0,
    time_s=300.0,
    currently_running=True,
    experience_months=24,
    recent_max_distance_km=10.0,
    running_time=None,
    pain_intensity=None,
    blocks_running=False,
    days_per_week=4,
    max_session_minutes=60,
    training_days=(),
    name="Test Runner",
) -> AthleteInput:
    """Athlete input with sensible defaults (an intermediate, low-risk runner)."""
    return AthleteInput(
        name=name,
        gender=gender,
        body=BodyMetrics(height_cm=height_cm, weight_kg=weight_kg, waist_cm=waist_cm, hip_cm=hip_cm),
        tests=PhysicalTests(distance_m=distance_m, time_s=time_s),
        history=RunningHistory(
            currently_running=currently_running,
            experience_months=experience_months,
            recent_max_distance_km=recent_max_distance_km,
            running_time=running_time,
        ),
        pain=PainRecord(
            has_pain=bool(pain_intensity) or blocks_running,
            intensity=pain_intensity,
            blocks_running=blocks_running,
        ),
        availability=Availability(
            days_per_week=days_per_week,
            max_session_minutes=max_session_minutes,
            training_days=tuple(training_days),
        ),
    )


@pytest.fixture
def intermediate_athlete():
    return build_athlete()


@pytest.fixture
def injured_athlete():
    return build_athlete(pain_intensity=8, name="Injured Runner")


@pytest.fixture
def paces():
    """Paces from a 1300 m six-minute test and a 300 s kilometre."""
    return calculate_paces(1300, 300)
