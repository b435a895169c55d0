"""
Ordinary least squares regression of a player outcome on ratings.

Used offline to check how much each rating contributes to on-court
production (PER by default), which in turn guides the overall rating
formula and the age curves.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Mapping, Optional, Tuple

import numpy as np
import pandas as pd

from ..data.loader import RecordFormatError
from .errors import DimensionMismatchError, SingularMatrixError
from .matrix import Matrix, MatrixLike

logger = logging.getLogger(__name__)


REGRESSION_RATING_KEYS: Tuple[str, ...] = (
    "hgt",
    "stre",
    "spd",
    "jmp",
    "endu",
    "ins",
    "dnk",
    "ft",
    "fg",
    "tp",
    "oiq",
    "diq",
    "drb",
    "pss",
    "reb",
)

INTERCEPT = "intercept"


def regression_coefficients(x: MatrixLike, y: MatrixLike) -> Matrix:
    """
    Solve ``c = (X^T X)^-1 X^T y``.

    Args:
        x: Design matrix, one row per observation
        y: Outcome column vector with the same number of rows

    Returns:
        Coefficient column vector with one row per column of ``x``

    Raises:
        DimensionMismatchError: If ``x`` and ``y`` have different row counts
        SingularMatrixError: If ``X^T X`` is not invertible (collinear
            columns, or fewer observations than columns)
    """
    x = x if isinstance(x, Matrix) else Matrix(x)
    y = y if isinstance(y, Matrix) else Matrix(y)

    if x.height != y.height:
        raise DimensionMismatchError(
            f"Design matrix has {x.height} rows but outcome has {y.height}"
        )

    x_t = x.transpose()
    return x_t.multiply(x).invert().multiply(x_t).multiply(y)


@dataclass
class RegressionConfig:
    """Selection and projection of player seasons for the ratings regression."""

    outcome: str = "per"
    # Seasons at or below this many minutes are ignored
    min_minutes: float = 500.0
    rating_keys: Tuple[str, ...] = REGRESSION_RATING_KEYS
    active_only: bool = False
    fit_intercept: bool = False


@dataclass
class RegressionResult:
    """Fitted coefficients and the sample they came from."""

    coefficients: pd.Series
    num_samples: int
    outcome: str
    config: RegressionConfig = field(default_factory=RegressionConfig)

    def predict(self, ratings: Mapping[str, float]) -> float:
        return composite_rating(ratings, self.coefficients)


def select_regression_sample(
    records: pd.DataFrame,
    config: Optional[RegressionConfig] = None,
) -> pd.DataFrame:
    """Filter player-season rows down to the regular seasons used for fitting."""
    config = config or RegressionConfig()

    required = set(config.rating_keys) | {config.outcome, "min"}
    missing = sorted(required - set(records.columns))
    if missing:
        raise RecordFormatError(
            f"Player season records missing columns: {', '.join(missing)}"
        )

    sample = records
    if "playoffs" in sample.columns:
        sample = sample[~sample["playoffs"].astype(bool)]
    if config.active_only and "retired" in sample.columns:
        sample = sample[~sample["retired"].astype(bool)]
    sample = sample[sample["min"] > config.min_minutes]

    return sample.dropna(subset=list(config.rating_keys) + [config.outcome])


def fit_ratings_regression(
    records: pd.DataFrame,
    config: Optional[RegressionConfig] = None,
) -> RegressionResult:
    """
    Regress a per-season outcome on player ratings.

    Args:
        records: One row per player season with rating columns, ``min``,
                 the outcome column and optionally ``playoffs``/``retired``
        config: Sample selection settings

    Returns:
        RegressionResult with coefficients indexed by rating key
    """
    config = config or RegressionConfig()
    sample = select_regression_sample(records, config)

    columns = list(config.rating_keys)
    x = sample[columns].to_numpy(dtype=float)
    if config.fit_intercept:
        x = np.hstack([np.ones((len(x), 1)), x])
        columns = [INTERCEPT] + columns

    if len(sample) < len(columns):
        raise SingularMatrixError(
            f"Need at least {len(columns)} player seasons to fit {len(columns)} "
            f"coefficients, got {len(sample)}"
        )
    y = Matrix.column_vector(sample[config.outcome].to_numpy(dtype=float))

    logger.info(
        "Fitting %s on %d player seasons (%d dropped)",
        config.outcome, len(sample), len(records) - len(sample),
    )

    c = regression_coefficients(Matrix(x), y)
    coefficients = pd.Series(c.to_numpy()[:, 0], index=columns, name=config.outcome)

    return RegressionResult(
        coefficients=coefficients,
        num_samples=len(sample),
        outcome=config.outcome,
        config=config,
    )


def composite_rating(
    ratings: Mapping[str, float],
    coefficients: Mapping[str, float],
) -> float:
    """Weighted sum of ratings using fitted coefficients (plus intercept, if any)."""
    total = 0.0
    for key, weight in coefficients.items():
        if key == INTERCEPT:
            total += weight
        else:
            total += weight * ratings[key]
    return float(total)

