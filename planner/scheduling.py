"""
Scheduling: placing a week's sessions on calendar days.

Weekdays are indexed 0 = Monday ... 6 = Sunday. Every plan week starts
on a Monday; week k of a cycle starts k × 7 days after the Monday of the
start date's week.

When the athlete does not choose training days, a default spread is used
that keeps at least one rest day between sessions where the count allows:

    2 days: Mon, Fri
    3 days: Mon, Wed, Fri
    4 days: Mon, Tue, Thu, Sat
    5 days: Mon, Tue, Wed, Fri, Sat
    6 days: Mon-Sat
    7 days: every day
"""

from enum import Enum
from typing import Optional, Dict, List, Sequence, Tuple
from datetime import date, timedelta


class DayOfWeek(Enum):
    """Days of the week."""
    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @property
    def short_name(self) -> str:
        return self.name[:3].capitalize()


DEFAULT_TRAINING_DAYS: Dict[int, Tuple[int, ...]] = {
    2: (0, 4),
    3: (0, 2, 4),
    4: (0, 1, 3, 5),
    5: (0, 1, 2, 4, 5),
    6: (0, 1, 2, 3, 4, 5),
    7: (0, 1, 2, 3, 4, 5, 6),
}


def resolve_training_days(
    days_per_week: int,
    training_days: Optional[Sequence[int]] = None
) -> List[int]:
    """
    Weekday indices that receive a session.

    Chosen days are de-duplicated and sorted; sessions go to the first
    days_per_week of them. Without chosen days the default spread for the
    session count is used.

    Args:
        days_per_week: Sessions per week (2-7)
        training_days: Weekday indices chosen by the athlete

    Returns:
        Sorted weekday indices, one per session
    """
    if training_days:
        return sorted(set(training_days))[:int(days_per_week)]

    count = max(2, min(int(days_per_week), 7))
    return list(DEFAULT_TRAINING_DAYS[count])


def week_start(day: date) -> date:
    """Monday of the week containing day."""
    return day - timedelta(days=day.weekday())


def plan_end_date(start_date: date, weeks: int) -> date:
    """Last day of a plan: start + 7 × weeks − 1."""
    return start_date + timedelta(days=7 * weeks - 1)


def workout_date(start_date: date, week_index: int, weekday: int) -> date:
    """
    Calendar date of a session.

    Args:
        start_date: Plan start date
        week_index: Zero-based week of the cycle
        weekday: 0 = Monday ... 6 = Sunday

    Returns:
        Session date
    """
    return week_start(start_date) + timedelta(days=week_index * 7 + weekday)


def cycle_day_index(week_index: int, weekday: int) -> int:
    """1-based day of the cycle for a session."""
    return week_index * 7 + weekday + 1


def format_weekday_list(weekdays: Sequence[int]) -> str:
    """e.g. [0, 2, 4] -> 'Mon, Wed, Fri'."""
    return ", ".join(DayOfWeek(day).short_name for day in weekdays)
