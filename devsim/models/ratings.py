"""Player rating profile model."""

import math
from collections.abc import MutableMapping
from typing import Dict, Iterator, Tuple


RATING_MIN = 0
RATING_MAX = 100
HEIGHT_CEILING = 100

HEIGHT_KEY = "hgt"

# Development order matters: the engine walks keys in this order and each
# key draws one uniform scale factor from the shared generator.
DEVELOPED_RATING_KEYS: Tuple[str, ...] = (
    "stre",
    "spd",
    "jmp",
    "endu",
    "dnk",
    "ins",
    "ft",
    "fg",
    "tp",
    "oiq",
    "diq",
    "drb",
    "pss",
    "reb",
)

RATING_KEYS: Tuple[str, ...] = (HEIGHT_KEY,) + DEVELOPED_RATING_KEYS

RATING_CATEGORIES: Dict[str, Tuple[str, ...]] = {
    "physical": ("stre", "spd", "jmp", "endu"),
    "shooting": ("dnk", "ins", "ft", "fg", "tp"),
    "mental": ("oiq", "diq", "drb", "pss", "reb"),
}

CATEGORY_BY_KEY: Dict[str, str] = {
    key: category
    for category, keys in RATING_CATEGORIES.items()
    for key in keys
}


def limit_rating(value: float) -> int:
    """Round a rating to the nearest integer inside [0, 100]."""
    if value > RATING_MAX:
        return RATING_MAX
    if value < RATING_MIN:
        return RATING_MIN
    # round-half-up, so 49.5 -> 50 rather than banker's rounding
    return int(math.floor(value + 0.5))


class RatingProfile(MutableMapping):
    """
    Ratings for one player at one point in time.

    Behaves like a dict over the closed set of rating keys. Every write is
    clamped into the key's bound, so a profile can never hold an out-of-range
    or non-integer value.
    """

    def __init__(self, ratings: Dict[str, float]):
        unknown = sorted(set(ratings) - set(RATING_KEYS))
        if unknown:
            raise ValueError(f"Unknown rating keys: {', '.join(unknown)}")

        missing = [k for k in RATING_KEYS if k not in ratings]
        if missing:
            raise ValueError(f"Missing rating keys: {', '.join(missing)}")

        self._values: Dict[str, int] = {}
        for key in RATING_KEYS:
            self[key] = ratings[key]

    def __getitem__(self, key: str) -> int:
        return self._values[key]

    def __setitem__(self, key: str, value: float) -> None:
        if key not in RATING_KEYS:
            raise KeyError(key)
        if key == HEIGHT_KEY:
            self._values[key] = min(limit_rating(value), HEIGHT_CEILING)
        else:
            self._values[key] = limit_rating(value)

    def __delitem__(self, key: str) -> None:
        raise TypeError("Rating keys cannot be removed from a profile")

    def __iter__(self) -> Iterator[str]:
        return iter(RATING_KEYS)

    def __len__(self) -> int:
        return len(RATING_KEYS)

    def __repr__(self) -> str:
        inner = ", ".join(f"{k}={self._values[k]}" for k in RATING_KEYS)
        return f"RatingProfile({inner})"

    def copy(self) -> "RatingProfile":
        return RatingProfile(dict(self._values))

    def to_dict(self) -> Dict[str, int]:
        """Convert profile to dictionary."""
        return dict(self._values)

    @classmethod
    def from_dict(cls, data: dict) -> "RatingProfile":
        """Create profile from a dict, ignoring non-rating fields such as season."""
        return cls({k: data[k] for k in data if k in RATING_KEYS})
