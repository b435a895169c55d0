"""Errors raised by the matrix and regression routines."""


class LinearAlgebraError(ValueError):
    """Base class for matrix computation failures."""


class DimensionMismatchError(LinearAlgebraError):
    """Raised when matrix shapes are incompatible for an operation."""


class SingularMatrixError(LinearAlgebraError):
    """Raised when a matrix is non-square or has no inverse."""
