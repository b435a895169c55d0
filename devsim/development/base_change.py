"""Baseline per-season rating change shared by a category of ratings."""

from typing import Tuple

import numpy as np


# sqrt(3)
NOISE_MULT = 1.732

# (max age, base value), checked in order; anything older uses the last value.
_AGE_BRACKETS: Tuple[Tuple[int, float], ...] = (
    (21, 2.0),
    (25, 1.0),
    (27, 0.0),
    (29, -1.0),
    (31, -2.0),
    (34, -3.0),
    (40, -4.0),
    (43, -5.0),
)
_OLDEST_BASE = -6.0


def bracket_base_change(age: float) -> float:
    """Deterministic part of the base change. Decreases with age."""
    for max_age, value in _AGE_BRACKETS:
        if age <= max_age:
            return value
    return _OLDEST_BASE


def _noise(age: float, rng: np.random.Generator) -> float:
    m = NOISE_MULT
    if age <= 23:
        return float(np.clip(rng.normal(0, 5 * m), -4 * m, 20 * m))
    if age <= 25:
        return float(np.clip(rng.normal(0, 5 * m), -4 * m, 10 * m))
    return float(np.clip(rng.normal(0, 3 * m), -2 * m, 4 * m))


def coaching_multiplier(value: float, coaching_rank: float, num_active_teams: int) -> float:
    """
    Scale factor applied to a base change for a team's coaching rank.

    Good coaching (rank 1) boosts improvement by 25% and softens decline by
    25%; the worst staff does the opposite. A mid-table rank is neutral.
    Leagues with a single team have no ranking, so the multiplier is 1.
    """
    if num_active_teams < 2:
        return 1.0

    rank = min(max(coaching_rank, 1), num_active_teams)
    frac = (rank - 1) / (num_active_teams - 1)
    if value >= 0:
        return -0.5 * frac + 1.25
    return 0.5 * frac + 0.75


def calc_base_change(
    age: float,
    coaching_rank: float,
    num_active_teams: int,
    rng: np.random.Generator,
) -> float:
    """
    Draw one base change for a player season.

    Args:
        age: Player age
        coaching_rank: Team coaching rank, 1 is best
        num_active_teams: Number of teams in the league
        rng: Random generator

    Returns:
        Signed base change before per-rating age modifiers and limits
    """
    val = bracket_base_change(age) + _noise(age, rng)
    return val * coaching_multiplier(val, coaching_rank, num_active_teams)
