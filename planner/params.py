"""
Engine Parameters: tunable configuration for plan generation.

Defaults reproduce the standard engine behaviour. Overrides can be read
from a JSON file, e.g.:

    {
        "default_cycle_weeks": 8,
        "risk": {"cardiovascular": 6.0},
        "volume_weights": {"long_run": 1.5}
    }
"""

from dataclasses import dataclass, field
from typing import Dict, Any, Tuple
import json
from pathlib import Path

from .periodization import CATEGORY_VOLUME_WEIGHTS, MAX_CYCLE_WEEKS, WorkoutCategory
from .risk import RiskCoefficients


def _default_volume_weights() -> Dict[WorkoutCategory, float]:
    return dict(CATEGORY_VOLUME_WEIGHTS)


@dataclass
class EngineParams:
    """
    Tunable parameters for the training plan engine.
    """

    # ═══════════════════════════════════════════════════════════════════════════
    # RISK SCORING
    # ═══════════════════════════════════════════════════════════════════════════

    risk: RiskCoefficients = field(default_factory=RiskCoefficients)

    # ═══════════════════════════════════════════════════════════════════════════
    # CYCLE LENGTH (weeks)
    # ═══════════════════════════════════════════════════════════════════════════

    max_cycle_weeks: int = MAX_CYCLE_WEEKS      # requests above this are clamped
    default_cycle_weeks: int = MAX_CYCLE_WEEKS  # used when no length is requested

    # ═══════════════════════════════════════════════════════════════════════════
    # VOLUME DISTRIBUTION
    # ═══════════════════════════════════════════════════════════════════════════

    volume_weights: Dict[WorkoutCategory, float] = field(default_factory=_default_volume_weights)

    # Nominal session minutes never exceed the athlete's max session length
    cap_session_minutes: bool = True

    def to_dict(self) -> Dict[str, Any]:
        """Convert parameters to dictionary."""
        return {
            'risk': self.risk.to_dict(),
            'max_cycle_weeks': self.max_cycle_weeks,
            'default_cycle_weeks': self.default_cycle_weeks,
            'volume_weights': {c.value: w for c, w in self.volume_weights.items()},
            'cap_session_minutes': self.cap_session_minutes,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'EngineParams':
        """
        Create parameters from dictionary.

        Missing keys keep their defaults; volume weights and risk
        coefficients may be given partially.
        """
        params = cls()

        if 'risk' in d:
            merged = params.risk.to_dict()
            merged.update(d['risk'])
            params.risk = RiskCoefficients.from_dict(merged)

        if 'volume_weights' in d:
            for key, weight in d['volume_weights'].items():
                params.volume_weights[WorkoutCategory(key)] = float(weight)

        for key in ('max_cycle_weeks', 'default_cycle_weeks'):
            if key in d:
                setattr(params, key, int(d[key]))

        if 'cap_session_minutes' in d:
            params.cap_session_minutes = bool(d['cap_session_minutes'])

        return params

    def validate(self) -> Tuple[bool, str]:
        """Validate parameter constraints."""
        issues = []

        if not (1 <= self.max_cycle_weeks <= MAX_CYCLE_WEEKS):
            issues.append(f"max_cycle_weeks must be in [1, {MAX_CYCLE_WEEKS}]")

        if not (1 <= self.default_cycle_weeks <= self.max_cycle_weeks):
            issues.append("default_cycle_weeks must be in [1, max_cycle_weeks]")

        if any(w <= 0 for w in self.volume_weights.values()):
            issues.append("Volume weights must be positive")

        missing = [c.value for c in WorkoutCategory if c not in self.volume_weights]
        if missing:
            issues.append(f"Volume weights missing for: {', '.join(missing)}")

        if not (0 < self.risk.moderate_threshold < self.risk.high_threshold):
            issues.append("Risk tier cut-offs must be positive and ascending")

        if issues:
            return False, "; ".join(issues)
        return True, "Valid"

    def resolve_cycle_weeks(self, requested: Any = None) -> int:
        """Cycle length for a request: default when absent, clamped to [1, max]."""
        if not requested:
            return self.default_cycle_weeks
        return max(1, min(int(requested), self.max_cycle_weeks))


def load_params(path: Any) -> EngineParams:
    """
    Load engine parameters from a JSON file.

    Raises:
        ValueError: If the resulting parameters are invalid
    """
    with open(Path(path)) as f:
        params = EngineParams.from_dict(json.load(f))

    valid, message = params.validate()
    if not valid:
        raise ValueError(f"Invalid engine parameters: {message}")
    return params


def save_params(params: EngineParams, path: Any) -> None:
    """Write engine parameters to a JSON file."""
    with open(Path(path), 'w') as f:
        json.dump(params.to_dict(), f, indent=2)
