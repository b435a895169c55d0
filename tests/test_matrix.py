"""Tests for the Gauss-Jordan matrix routines."""

import numpy as np
import pytest

from devsim.linalg.errors import DimensionMismatchError, LinearAlgebraError, SingularMatrixError
from devsim.linalg.matrix import Matrix


@pytest.fixture
def invertible():
    rng = np.random.default_rng(42)
    return Matrix(rng.normal(0, 1, size=(5, 5)) + 5 * np.eye(5))


def test_shape_and_access():
    m = Matrix([[1, 2, 3], [4, 5, 6]])
    assert (m.height, m.width) == (2, 3)
    assert m[1, 2] == 6.0


def test_rejects_empty_or_flat_layouts():
    with pytest.raises(DimensionMismatchError):
        Matrix([])
    with pytest.raises(DimensionMismatchError):
        Matrix([1, 2, 3])


def test_rejects_ragged_rows():
    with pytest.raises(DimensionMismatchError, match="rectangular"):
        Matrix([[1, 2, 3], [4, 5]])


def test_errors_are_value_errors():
    assert issubclass(LinearAlgebraError, ValueError)
    assert issubclass(DimensionMismatchError, LinearAlgebraError)
    assert issubclass(SingularMatrixError, LinearAlgebraError)


def test_transpose_returns_new_matrix():
    m = Matrix([[1, 2, 3], [4, 5, 6]])
    t = m.transpose()
    assert t.to_list() == [[1, 4], [2, 5], [3, 6]]
    assert m.to_list() == [[1, 2, 3], [4, 5, 6]]


def test_multiply():
    a = Matrix([[1, 2], [3, 4], [5, 6]])
    b = Matrix([[7, 8, 9], [10, 11, 12]])
    assert a.multiply(b).to_list() == [[27, 30, 33], [61, 68, 75], [95, 106, 117]]


def test_multiply_dimension_mismatch():
    a = Matrix([[1, 2, 3]])
    b = Matrix([[1, 2], [3, 4]])
    with pytest.raises(DimensionMismatchError, match="1x3 by 2x2"):
        a.multiply(b)


class TestReducedRowEchelonForm:
    """Row reduction is pure and matches textbook results."""

    def test_known_system(self):
        m = Matrix([[1, 2, -1, -4], [2, 3, -1, -11], [-2, 0, -3, 22]])
        reduced = m.to_reduced_row_echelon_form()
        assert reduced.allclose([[1, 0, 0, -8], [0, 1, 0, 1], [0, 0, 1, -2]])

    def test_input_not_modified(self):
        rows = [[0, 2, 4], [3, 6, 9]]
        m = Matrix(rows)
        m.to_reduced_row_echelon_form()
        assert m.to_list() == rows

    def test_zero_leading_entry_swaps_rows(self):
        m = Matrix([[0, 1], [2, 0]])
        assert m.to_reduced_row_echelon_form().allclose([[1, 0], [0, 1]])

    def test_rank_deficient(self):
        m = Matrix([[1, 2], [2, 4]])
        assert m.to_reduced_row_echelon_form().allclose([[1, 2], [0, 0]])

    def test_zero_matrix_unchanged(self):
        m = Matrix([[0, 0], [0, 0]])
        assert m.to_reduced_row_echelon_form().allclose([[0, 0], [0, 0]])

    def test_tiny_scale_entries_are_pivots(self):
        m = Matrix([[1e-13, 0], [0, 1e-13]])
        assert m.to_reduced_row_echelon_form().allclose([[1, 0], [0, 1]])


class TestInvert:
    """Inversion via an augmented identity."""

    def test_double_inverse_round_trips(self, invertible):
        assert invertible.invert().invert().allclose(invertible, atol=1e-9)

    def test_product_with_inverse_is_identity(self, invertible):
        product = invertible.multiply(invertible.invert())
        assert product.allclose(Matrix.identity(5), atol=1e-9)

    def test_matches_numpy(self, invertible):
        expected = np.linalg.inv(invertible.to_numpy())
        assert np.allclose(invertible.invert().to_numpy(), expected)

    def test_small_exact_inverse(self):
        m = Matrix([[4, 7], [2, 6]])
        assert m.invert().allclose([[0.6, -0.7], [-0.2, 0.4]])

    def test_pivot_search_handles_zero_diagonal(self):
        m = Matrix([[0, 1], [1, 0]])
        assert m.invert().allclose([[0, 1], [1, 0]])

    def test_tiny_scale_matrix_inverts(self):
        inverse = Matrix([[1e-13]]).invert()
        assert inverse[0, 0] == pytest.approx(1e13)

    def test_scaled_matrix_inverts_like_unscaled(self, invertible):
        scale = 1e-14
        scaled = Matrix(invertible.to_numpy() * scale)
        expected = invertible.invert().to_numpy() / scale
        assert np.allclose(scaled.invert().to_numpy(), expected, rtol=1e-9)

    def test_input_not_modified(self, invertible):
        before = invertible.to_numpy()
        invertible.invert()
        assert np.array_equal(invertible.to_numpy(), before)

    def test_non_square_raises(self):
        with pytest.raises(SingularMatrixError, match="non-square"):
            Matrix([[1, 2, 3], [4, 5, 6]]).invert()

    @pytest.mark.parametrize(
        "rows",
        [
            [[1, 2], [2, 4]],
            [[0, 0], [0, 0]],
            [[1, 2, 3], [4, 5, 6], [7, 8, 9]],
            [[3, 3, 1], [3, 3, 5], [6, 6, 2]],
        ],
    )
    def test_singular_raises(self, rows):
        with pytest.raises(SingularMatrixError, match="singular"):
            Matrix(rows).invert()
