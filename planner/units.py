"""
Rounding and pace formatting helpers.

Paces are stored as whole seconds per kilometre. Rounding is half-up so
that 0.5 always moves to the next integer (Python's built-in round() uses
banker's rounding, which would make 276.5 and 277.5 round differently).
"""

import math
from typing import Optional


def round_half_up(value: float, ndigits: int = 0) -> float:
    """
    Round a value half-up to the given number of decimals.

    Args:
        value: Number to round
        ndigits: Decimal places to keep

    Returns:
        Rounded value (float; use round_int for whole numbers)
    """
    factor = 10 ** ndigits
    return math.floor(value * factor + 0.5) / factor


def round_int(value: float) -> int:
    """Round half-up to an integer."""
    return int(math.floor(value + 0.5))


def format_pace(seconds_per_km: float, with_unit: bool = True) -> str:
    """
    Format a pace in seconds per km as "m:ss/km".

    Args:
        seconds_per_km: Pace in seconds per kilometre
        with_unit: Append the "/km" suffix

    Returns:
        Formatted pace, e.g. "5:09/km"
    """
    total = round_int(seconds_per_km)
    minutes, seconds = divmod(total, 60)
    text = f"{minutes}:{seconds:02d}"
    return f"{text}/km" if with_unit else text


def parse_pace(pace: Optional[str]) -> Optional[int]:
    """
    Parse "m:ss" or "m:ss/km" into seconds per km.

    Returns None when the string cannot be parsed.
    """
    if not pace:
        return None

    cleaned = pace.replace('/km', '').strip()
    parts = cleaned.split(':')
    if len(parts) != 2:
        return None

    try:
        minutes = int(parts[0])
        seconds = int(parts[1])
    except ValueError:
        return None

    return minutes * 60 + seconds


def format_minutes(minutes: float) -> str:
    """Format a minute count, dropping the decimal for whole minutes."""
    if float(minutes).is_integer():
        return f"{int(minutes)} min"
    return f"{minutes:g} min"
