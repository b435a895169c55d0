"""
Minimal draft prospect source for calibration runs.

Full draft-class generation lives outside this package; this only supplies
a plausible fresh profile for the career sampler.
"""

from typing import Dict, Tuple

import numpy as np

from ..models.ratings import RATING_KEYS, RatingProfile


DRAFT_AGE = 19

# (mean, std) of each rating for an incoming prospect
PROSPECT_RATING_DISTRIBUTION: Dict[str, Tuple[float, float]] = {
    "hgt": (47.0, 20.0),
    "stre": (42.0, 12.0),
    "spd": (50.0, 12.0),
    "jmp": (48.0, 12.0),
    "endu": (32.0, 10.0),
    "ins": (36.0, 12.0),
    "dnk": (42.0, 14.0),
    "ft": (38.0, 12.0),
    "fg": (36.0, 12.0),
    "tp": (34.0, 14.0),
    "oiq": (30.0, 10.0),
    "diq": (30.0, 10.0),
    "drb": (42.0, 12.0),
    "pss": (38.0, 12.0),
    "reb": (42.0, 12.0),
}


def generate_prospect(
    rng: np.random.Generator,
    age: int = DRAFT_AGE,
) -> Tuple[RatingProfile, int]:
    """
    Generate one undrafted prospect.

    Args:
        rng: Random generator
        age: Prospect age

    Returns:
        Tuple of (ratings, age)
    """
    ratings = {
        key: rng.normal(*PROSPECT_RATING_DISTRIBUTION[key])
        for key in RATING_KEYS
    }
    return RatingProfile(ratings), age
