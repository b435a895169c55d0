"""
Season development engine.

Advances a player's ratings by one simulated season. The base change is
drawn once per rating category, so all physical ratings move with one shared
draw, all shooting ratings with another, and all mental ratings with a third.
Each rating then gets its own age modifier, a random scale in [0.4, 1.4) and
the change limits of its age curve.
"""

import logging
from typing import Dict, Optional

import numpy as np

from ..models.league import LeagueContext
from ..models.ratings import (
    CATEGORY_BY_KEY,
    DEVELOPED_RATING_KEYS,
    HEIGHT_CEILING,
    HEIGHT_KEY,
    RATING_CATEGORIES,
    RatingProfile,
)
from .age_curves import evaluate_curve
from .base_change import calc_base_change

logger = logging.getLogger(__name__)


HEIGHT_GROWTH_MAX_AGE = 21
HEIGHT_GROWTH_EARLY_MAX_AGE = 20
HEIGHT_GROWTH_EARLY_THRESHOLD = 0.99
HEIGHT_GROWTH_LATE_THRESHOLD = 0.999

CHANGE_SCALE_RANGE = (0.4, 1.4)


def _grow_height(ratings: RatingProfile, age: float, rng: np.random.Generator) -> None:
    """In young players, height can sometimes increase."""
    height_rand = rng.random()

    if (
        height_rand > HEIGHT_GROWTH_EARLY_THRESHOLD
        and age <= HEIGHT_GROWTH_EARLY_MAX_AGE
        and ratings[HEIGHT_KEY] < HEIGHT_CEILING
    ):
        ratings[HEIGHT_KEY] += 1

    if height_rand > HEIGHT_GROWTH_LATE_THRESHOLD and ratings[HEIGHT_KEY] < HEIGHT_CEILING:
        ratings[HEIGHT_KEY] += 1


def develop_season(
    ratings: RatingProfile,
    age: float,
    coaching_rank: Optional[float] = None,
    *,
    league: Optional[LeagueContext] = None,
    rng: Optional[np.random.Generator] = None,
) -> None:
    """
    Develop ratings by one season, in place.

    Args:
        ratings: Profile to mutate
        age: Player age during this season
        coaching_rank: Team coaching rank (1 is best). Defaults to a
                       league-average staff.
        league: League context; defaults to a 30-team league
        rng: Random generator; a fresh unseeded one is used if omitted
    """
    league = league or LeagueContext()
    rng = rng if rng is not None else np.random.default_rng()
    if coaching_rank is None:
        coaching_rank = league.average_coaching_rank

    if age <= HEIGHT_GROWTH_MAX_AGE:
        _grow_height(ratings, age, rng)

    base_changes: Dict[str, float] = {
        category: calc_base_change(age, coaching_rank, league.num_active_teams, rng)
        for category in RATING_CATEGORIES
    }

    low_scale, high_scale = CHANGE_SCALE_RANGE
    for key in DEVELOPED_RATING_KEYS:
        age_modifier, (low, high) = evaluate_curve(key, age, rng)
        raw_change = (base_changes[CATEGORY_BY_KEY[key]] + age_modifier) * rng.uniform(
            low_scale, high_scale
        )
        ratings[key] = ratings[key] + min(max(raw_change, low), high)


def develop(
    ratings: RatingProfile,
    age: float,
    years: int = 1,
    coaching_rank: Optional[float] = None,
    *,
    league: Optional[LeagueContext] = None,
    rng: Optional[np.random.Generator] = None,
) -> float:
    """
    Develop ratings over several consecutive seasons.

    The player ages by one year after each season.

    Returns:
        Age after the last developed season
    """
    rng = rng if rng is not None else np.random.default_rng()
    for _ in range(years):
        develop_season(ratings, age, coaching_rank, league=league, rng=rng)
        age += 1

    logger.debug("Developed %d season(s), now age %s: %r", years, age, ratings)
    return age
