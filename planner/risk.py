"""
Metabolic Risk Scoring: body indices and the avoidable risk index.

Based on:
- Sex-specific waist circumference cut-offs (94 cm men, 80 cm women)
- Linear risk increments per centimetre of excess waist

Every centimetre of waist above the cut-off adds a fixed percentage of
avoidable risk for four condition groups. The sum of the four is the
composite avoidable risk index, which drives the risk tier and, through
the classifier, the safety flags of the plan.

The per-condition coefficients are not clinically derived here, so they
live in RiskCoefficients and can be overridden.
"""

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Optional, Dict, Any

from .athlete import Gender
from .errors import IncompleteInputError
from .units import round_half_up


class RiskTier(Enum):
    """Composite risk classification."""
    LOW = "low"             # index < 50
    MODERATE = "moderate"   # 50 <= index < 120
    HIGH = "high"           # index >= 120


@dataclass(frozen=True)
class RiskCoefficients:
    """
    Tunable parameters for the avoidable risk index.

    Risk increments are percentage points per cm of excess waist.
    """

    # ═══════════════════════════════════════════════════════════════════════════
    # WAIST CUT-OFFS (cm)
    # ═══════════════════════════════════════════════════════════════════════════

    male_waist_threshold_cm: float = 94.0
    female_waist_threshold_cm: float = 80.0

    # ═══════════════════════════════════════════════════════════════════════════
    # RISK INCREMENTS (% per cm of excess)
    # ═══════════════════════════════════════════════════════════════════════════

    diabetes: float = 2.7
    neurological: float = 2.4
    oncological: float = 4.0
    cardiovascular: float = 6.8

    # ═══════════════════════════════════════════════════════════════════════════
    # TIER CUT-OFFS (index)
    # ═══════════════════════════════════════════════════════════════════════════

    moderate_threshold: float = 50.0
    high_threshold: float = 120.0

    def waist_threshold(self, gender: Gender) -> float:
        """Waist cut-off for the given sex."""
        if gender == Gender.MALE:
            return self.male_waist_threshold_cm
        return self.female_waist_threshold_cm

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'RiskCoefficients':
        """Create from dictionary, ignoring unknown keys."""
        return cls(**{k: v for k, v in d.items() if k in cls.__dataclass_fields__})


@dataclass(frozen=True)
class RiskAssessment:
    """
    Result of the metabolic risk scoring.

    Component risks and the index are rounded to one decimal; the tier is
    decided on the unrounded index.
    """
    excess_waist_cm: float
    diabetes_risk: float
    neurological_risk: float
    oncological_risk: float
    cardiovascular_risk: float
    risk_index: float
    risk_tier: RiskTier

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'excess_waist_cm': self.excess_waist_cm,
            'diabetes_risk': self.diabetes_risk,
            'neurological_risk': self.neurological_risk,
            'oncological_risk': self.oncological_risk,
            'cardiovascular_risk': self.cardiovascular_risk,
            'risk_index': self.risk_index,
            'risk_tier': self.risk_tier.value,
        }


@dataclass(frozen=True)
class BodyIndices:
    """Body mass index and waist-hip ratio."""
    bmi: float
    waist_hip_ratio: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return {'bmi': self.bmi, 'waist_hip_ratio': self.waist_hip_ratio}


def classify_risk_index(
    risk_index: float,
    coefficients: Optional[RiskCoefficients] = None
) -> RiskTier:
    """
    Classify a composite risk index into a tier.

    Args:
        risk_index: Composite avoidable risk index (%)
        coefficients: Cut-offs to use (defaults if None)

    Returns:
        RiskTier
    """
    coefficients = coefficients or RiskCoefficients()

    if risk_index >= coefficients.high_threshold:
        return RiskTier.HIGH
    if risk_index >= coefficients.moderate_threshold:
        return RiskTier.MODERATE
    return RiskTier.LOW


def calculate_metabolic_risk(
    gender: Gender,
    waist_cm: Optional[float],
    hip_cm: Optional[float],
    coefficients: Optional[RiskCoefficients] = None
) -> RiskAssessment:
    """
    Calculate the avoidable risk index from waist circumference.

    Formula:
        excess = max(0, waist - threshold(sex))
        risk_c = excess × k_c   for each condition c
        index  = Σ risk_c

    Hip circumference does not enter the index, but the assessment is only
    made on a complete waist/hip measurement.

    Args:
        gender: Athlete sex
        waist_cm: Waist circumference (cm)
        hip_cm: Hip circumference (cm)
        coefficients: Risk coefficients (defaults if None)

    Returns:
        RiskAssessment

    Raises:
        IncompleteInputError: If waist or hip is missing
    """
    missing = [name for name, value in (('waist_cm', waist_cm), ('hip_cm', hip_cm))
               if not value]
    if missing:
        raise IncompleteInputError(
            "Incomplete body metrics: waist and hip are required for risk scoring",
            fields=missing,
        )

    coefficients = coefficients or RiskCoefficients()

    excess = max(0.0, waist_cm - coefficients.waist_threshold(gender))

    diabetes = excess * coefficients.diabetes
    neurological = excess * coefficients.neurological
    oncological = excess * coefficients.oncological
    cardiovascular = excess * coefficients.cardiovascular

    risk_index = diabetes + neurological + oncological + cardiovascular

    return RiskAssessment(
        excess_waist_cm=excess,
        diabetes_risk=round_half_up(diabetes, 1),
        neurological_risk=round_half_up(neurological, 1),
        oncological_risk=round_half_up(oncological, 1),
        cardiovascular_risk=round_half_up(cardiovascular, 1),
        risk_index=round_half_up(risk_index, 1),
        risk_tier=classify_risk_index(risk_index, coefficients),
    )


def calculate_body_indices(
    height_cm: Optional[float],
    weight_kg: Optional[float],
    waist_cm: Optional[float] = None,
    hip_cm: Optional[float] = None
) -> BodyIndices:
    """
    Calculate BMI and waist-hip ratio.

    Args:
        height_cm: Height in cm
        weight_kg: Weight in kg
        waist_cm: Waist circumference (optional)
        hip_cm: Hip circumference (optional)

    Returns:
        BodyIndices (waist_hip_ratio is None without waist and hip)

    Raises:
        IncompleteInputError: If height or weight is missing
    """
    missing = [name for name, value in (('height_cm', height_cm), ('weight_kg', weight_kg))
               if not value]
    if missing:
        raise IncompleteInputError("Height and weight are required", fields=missing)

    height_m = height_cm / 100
    bmi = round_half_up(weight_kg / (height_m ** 2), 1)

    waist_hip_ratio = None
    if waist_cm and hip_cm and hip_cm > 0:
        waist_hip_ratio = round_half_up(waist_cm / hip_cm, 2)

    return BodyIndices(bmi=bmi, waist_hip_ratio=waist_hip_ratio)


def explain_metabolic_risk(assessment: RiskAssessment) -> str:
    """
    Plain-language explanation of a risk assessment.

    Args:
        assessment: Computed risk assessment

    Returns:
        Explanation text
    """
    text = f"Your avoidable risk index is {assessment.risk_index:.1f}%, "

    if assessment.risk_tier == RiskTier.LOW:
        text += ("indicating a low risk for metabolic and cardiovascular disease. "
                 "Keep up your healthy habits!")
    else:
        level = "moderate" if assessment.risk_tier == RiskTier.MODERATE else "high"
        text += (f"indicating a {level} risk. "
                 f"You carry {assessment.diabetes_risk:.1f}% additional risk for diabetes and "
                 f"{assessment.cardiovascular_risk:.1f}% for cardiovascular disease. ")
        if assessment.risk_tier == RiskTier.MODERATE:
            text += ("Regular training and adjustments to your diet can reduce "
                     "these risks significantly.")
        else:
            text += ("Follow the plan carefully and consider medical follow-up.")

    return text
