"""Season-by-season rating development."""

from .age_curves import (
    AGE_CURVES,
    RATING_FORMULA_TAGS,
    AgeCurveFormula,
    evaluate_curve,
    formula_for,
)
from .base_change import calc_base_change, coaching_multiplier
from .develop import develop, develop_season
from .prospects import generate_prospect

__all__ = [
    "AGE_CURVES",
    "RATING_FORMULA_TAGS",
    "AgeCurveFormula",
    "calc_base_change",
    "coaching_multiplier",
    "develop",
    "develop_season",
    "evaluate_curve",
    "formula_for",
    "generate_prospect",
]
