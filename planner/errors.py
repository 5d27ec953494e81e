"""
Error and warning types for plan generation.

Fatal problems are raised as exceptions before any plan is built:
- IncompleteInputError: body metrics needed for risk scoring are missing
- InsufficientTestDataError: a physical test value is missing
- ValidationError: up-front input validation failed (names the fields)

Suspicious-but-present values are reported as PlanWarning entries that
travel with the generated plan.
"""

from dataclasses import dataclass
from typing import List, Sequence


class PlanGenerationError(Exception):
    """Base class for all fatal plan generation errors."""


class IncompleteInputError(PlanGenerationError):
    """Raised when body metrics required for an assessment are missing."""

    def __init__(self, message: str, fields: Sequence[str] = ()):
        self.fields = list(fields)
        super().__init__(message)


class InsufficientTestDataError(PlanGenerationError):
    """Raised when a physical test value required for pace zones is missing."""

    def __init__(self, message: str, fields: Sequence[str] = ()):
        self.fields = list(fields)
        super().__init__(message)


class ValidationError(PlanGenerationError):
    """
    Raised by the plan assembler when the athlete input is incomplete.

    Attributes:
        fields: Names of every missing or invalid field
    """

    def __init__(self, fields: Sequence[str], details: Sequence[str] = ()):
        self.fields: List[str] = list(fields)
        self.details: List[str] = list(details)
        message = "Invalid athlete input: " + ", ".join(self.fields)
        if self.details:
            message += " (" + "; ".join(self.details) + ")"
        super().__init__(message)


@dataclass(frozen=True)
class PlanWarning:
    """Non-fatal issue found while generating a plan."""
    code: str
    message: str

    def to_dict(self):
        return {'code': self.code, 'message': self.message}
