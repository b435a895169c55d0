"""Rating and league data models."""

from .league import LeagueContext
from .ratings import (
    CATEGORY_BY_KEY,
    DEVELOPED_RATING_KEYS,
    HEIGHT_CEILING,
    HEIGHT_KEY,
    RATING_CATEGORIES,
    RATING_KEYS,
    RatingProfile,
    limit_rating,
)

__all__ = [
    "CATEGORY_BY_KEY",
    "DEVELOPED_RATING_KEYS",
    "HEIGHT_CEILING",
    "HEIGHT_KEY",
    "LeagueContext",
    "RATING_CATEGORIES",
    "RATING_KEYS",
    "RatingProfile",
    "limit_rating",
]
