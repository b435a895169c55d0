"""Matrix algebra and least squares fitting."""

from .errors import DimensionMismatchError, LinearAlgebraError, SingularMatrixError
from .matrix import Matrix
from .regression import (
    RegressionConfig,
    RegressionResult,
    composite_rating,
    fit_ratings_regression,
    regression_coefficients,
)

__all__ = [
    "DimensionMismatchError",
    "LinearAlgebraError",
    "Matrix",
    "RegressionConfig",
    "RegressionResult",
    "SingularMatrixError",
    "composite_rating",
    "fit_ratings_regression",
    "regression_coefficients",
]
