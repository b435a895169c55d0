"""
Age curves for rating development.

Each rating key is assigned a formula tag, and each tag names one
``AgeCurveFormula`` in the registry. Keys that share a tag (the shooting
ratings, the two IQ ratings, the ball-skill ratings) always receive the same
age modifier and change limits, which keeps related skills moving together.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

import numpy as np


INF = float("inf")

ChangeLimits = Tuple[float, float]


@dataclass(frozen=True)
class AgeCurveFormula:
    """Age modifier and allowed per-season change interval for one rating family."""

    name: str
    age_modifier: Callable[[float, Optional[np.random.Generator]], float]
    change_limits: Callable[[float], ChangeLimits]


def _constant_limits(low: float, high: float) -> Callable[[float], ChangeLimits]:
    def limits(age: float) -> ChangeLimits:
        return (low, high)

    return limits


def _no_modifier(age, rng=None) -> float:
    return 0.0


def _speed_modifier(age, rng=None) -> float:
    if age <= 27:
        return 0.0
    if age <= 30:
        return -2.0
    if age <= 35:
        return -3.0
    if age <= 40:
        return -4.0
    return -8.0


def _jumping_modifier(age, rng=None) -> float:
    if age <= 26:
        return 0.0
    if age <= 30:
        return -3.0
    if age <= 35:
        return -4.0
    if age <= 40:
        return -5.0
    return -10.0


def _endurance_modifier(age, rng=None) -> float:
    if age <= 23:
        # Young players get a random endurance boost. Without a generator,
        # use the mean of U(0, 9).
        if rng is None:
            return 4.5
        return float(rng.uniform(0, 9))
    if age <= 30:
        return 0.0
    if age <= 35:
        return -2.0
    if age <= 40:
        return -4.0
    return -8.0


def _dunking_modifier(age, rng=None) -> float:
    # Like the shooting curve, except for old players
    if age <= 27:
        return 0.0
    return 0.5


def _shooting_modifier(age, rng=None) -> float:
    # Reverse most of the age-related decline in the base change
    if age <= 27:
        return 0.0
    if age <= 29:
        return 0.5
    if age <= 31:
        return 1.5
    return 2.0


def _iq_modifier(age, rng=None) -> float:
    if age <= 21:
        return 4.0
    if age <= 23:
        return 3.0
    return _shooting_modifier(age)


def _iq_limits(age: float) -> ChangeLimits:
    if age > 24:
        return (-3.0, 9.0)
    # 19 -> (-3, 32), 23 -> (-3, 12)
    return (-3.0, 7.0 + 5.0 * (24 - age))


AGE_CURVES: Dict[str, AgeCurveFormula] = {
    "strength": AgeCurveFormula("strength", _no_modifier, _constant_limits(-INF, INF)),
    "speed": AgeCurveFormula("speed", _speed_modifier, _constant_limits(-12.0, 2.0)),
    "jumping": AgeCurveFormula("jumping", _jumping_modifier, _constant_limits(-12.0, 2.0)),
    "endurance": AgeCurveFormula("endurance", _endurance_modifier, _constant_limits(-11.0, 19.0)),
    "dunking": AgeCurveFormula("dunking", _dunking_modifier, _constant_limits(-3.0, 13.0)),
    "shooting": AgeCurveFormula("shooting", _shooting_modifier, _constant_limits(-3.0, 13.0)),
    "iq": AgeCurveFormula("iq", _iq_modifier, _iq_limits),
    "skill": AgeCurveFormula("skill", _shooting_modifier, _constant_limits(-2.0, 5.0)),
}

RATING_FORMULA_TAGS: Dict[str, str] = {
    "stre": "strength",
    "spd": "speed",
    "jmp": "jumping",
    "endu": "endurance",
    "dnk": "dunking",
    "ins": "shooting",
    "ft": "shooting",
    "fg": "shooting",
    "tp": "shooting",
    "oiq": "iq",
    "diq": "iq",
    "drb": "skill",
    "pss": "skill",
    "reb": "skill",
}


def formula_for(rating_key: str) -> AgeCurveFormula:
    """Look up the age curve used by a rating key."""
    try:
        return AGE_CURVES[RATING_FORMULA_TAGS[rating_key]]
    except KeyError:
        raise KeyError(f"No age curve for rating '{rating_key}'") from None


def evaluate_curve(
    rating_key: str,
    age: float,
    rng: Optional[np.random.Generator] = None,
) -> Tuple[float, ChangeLimits]:
    """
    Evaluate the age curve for one rating.

    Args:
        rating_key: Rating to look up (height is not developed here)
        age: Player age this season
        rng: Generator for curves with a random component

    Returns:
        Tuple of (age_modifier, (low, high) change limits)
    """
    formula = formula_for(rating_key)
    return formula.age_modifier(age, rng), formula.change_limits(age)
