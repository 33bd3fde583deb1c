import math

import pytest

from nd_maze_raytracer.errors import DimensionMismatchError, SingularMatrixError
from nd_maze_raytracer.math_utils import Matrix, Vector, orthonormalize


def assert_vec_close(a, b, tol=1e-9):
    assert len(a) == len(b)
    for x, y in zip(a, b):
        assert x == pytest.approx(y, abs=tol)


class TestVector:
    def test_arithmetic_returns_new_vectors(self):
        a = Vector([1, 2, 3])
        b = Vector([4, 5, 6])
        assert a + b == Vector([5, 7, 9])
        assert b - a == Vector([3, 3, 3])
        assert a * 2 == Vector([2, 4, 6])
        assert 2 * a == Vector([2, 4, 6])
        assert -a == Vector([-1, -2, -3])
        assert a.translate(b) == a.add(b)
        assert a == Vector([1, 2, 3])

    def test_dot_and_norm(self):
        assert Vector([1, 2, 3]).dot(Vector([4, 5, 6])) == 32
        assert Vector([3, 4]).norm() == 5

    def test_normalize(self):
        assert_vec_close(Vector([3, 0, 4]).normalize(), [0.6, 0, 0.8])
        assert Vector([0, 3, 4, 0, 0]).normalize().norm() == pytest.approx(1.0)

    def test_normalize_zero_vector_is_unchanged(self):
        zero = Vector.zero(4)
        assert zero.normalize() == zero

    def test_basis_factory(self):
        assert Vector.basis(2, 4) == Vector([0, 0, 1, 0])
        with pytest.raises(IndexError):
            Vector.basis(4, 4)

    def test_of_unit_direction(self):
        assert_vec_close(Vector.of_unit_direction(math.pi / 2, 0), [1, 0, 0])
        assert_vec_close(Vector.of_unit_direction(0, 1.3), [0, 0, 1])

    @pytest.mark.parametrize("op", ["dot", "add", "sub"])
    def test_dimension_mismatch_fails_fast(self, op):
        with pytest.raises(DimensionMismatchError) as info:
            getattr(Vector([1, 2, 3]), op)(Vector([1, 2]))
        assert info.value.expected == 3
        assert info.value.actual == 2

    def test_mismatch_is_a_value_error(self):
        with pytest.raises(ValueError):
            Vector([1, 2]) + Vector([1, 2, 3])

    def test_vectors_are_hashable_values(self):
        assert len({Vector([1, 2]), Vector([1.0, 2.0])}) == 1


class TestMatrix:
    def test_identity_transform(self):
        v = Vector([1, -2, 3, 4])
        assert Matrix.identity(4).transform_vector(v) == v

    def test_planar_rotation_quarter_turn(self):
        r = Matrix.planar_rotation(0, 1, 3, math.pi / 2)
        assert_vec_close(r.transform_vector(Vector.basis(0, 3)), [0, 1, 0])
        assert_vec_close(r.transform_vector(Vector.basis(1, 3)), [-1, 0, 0])
        # Axes outside the plane are untouched
        assert_vec_close(r.transform_vector(Vector.basis(2, 3)), [0, 0, 1])

    def test_planar_rotation_block_layout(self):
        r = Matrix.planar_rotation(1, 3, 4, 0.3)
        c, s = math.cos(0.3), math.sin(0.3)
        assert r.rows[1][1] == pytest.approx(c)
        assert r.rows[1][3] == pytest.approx(-s)
        assert r.rows[3][1] == pytest.approx(s)
        assert r.rows[3][3] == pytest.approx(c)
        assert r.rows[0] == Vector.basis(0, 4)
        assert r.rows[2] == Vector.basis(2, 4)

    def test_planar_rotation_rejects_bad_axes(self):
        with pytest.raises(ValueError):
            Matrix.planar_rotation(1, 1, 3, 0.1)
        with pytest.raises(IndexError):
            Matrix.planar_rotation(0, 3, 3, 0.1)

    @pytest.mark.parametrize("n", [3, 4, 5])
    @pytest.mark.parametrize("theta", [0.1, 1.0, -2.5])
    def test_rotation_inverse_law(self, n, theta):
        v = Vector([0.5 * k - 1 for k in range(n)])
        for i in range(n):
            for j in range(i + 1, n):
                forward = Matrix.planar_rotation(i, j, n, theta)
                back = Matrix.planar_rotation(i, j, n, -theta)
                assert_vec_close(back.transform_vector(forward.transform_vector(v)), v)

    def test_matmul_composes_rotations(self):
        a = Matrix.planar_rotation(0, 2, 3, 0.4)
        b = Matrix.planar_rotation(0, 2, 3, 0.6)
        combined = a @ b
        expected = Matrix.planar_rotation(0, 2, 3, 1.0)
        for row, exp in zip(combined.rows, expected.rows):
            assert_vec_close(row, exp)

    def test_matmul_shape_check(self):
        a = Matrix([[1, 2, 3], [4, 5, 6]])
        with pytest.raises(DimensionMismatchError):
            a.matmul(a)
        assert (a @ a.transpose()).rows == (Vector([14, 32]), Vector([32, 77]))

    def test_transpose_and_negate(self):
        m = Matrix([[1, 2], [3, 4]])
        assert m.transpose() == Matrix([[1, 3], [2, 4]])
        assert -m == Matrix([[-1, -2], [-3, -4]])

    def test_inverse(self):
        inv = Matrix([[4, 7], [2, 6]]).inverse()
        assert_vec_close(inv.rows[0], [0.6, -0.7])
        assert_vec_close(inv.rows[1], [-0.2, 0.4])

    def test_inverse_needs_row_swap(self):
        m = Matrix([[0, 1], [1, 0]])
        assert m.inverse() == m

    def test_inverse_of_rotation_is_transpose(self):
        r = Matrix.planar_rotation(0, 3, 5, 0.7)
        for a, b in zip(r.inverse().rows, r.transpose().rows):
            assert_vec_close(a, b)

    def test_singular_matrix(self):
        with pytest.raises(SingularMatrixError):
            Matrix([[1, 2], [2, 4]]).inverse()

    def test_ragged_rows_rejected(self):
        with pytest.raises(DimensionMismatchError):
            Matrix([[1, 2], [3]])

    def test_transform_vector_dimension_check(self):
        with pytest.raises(DimensionMismatchError):
            Matrix.identity(3).transform_vector(Vector([1, 2]))

    def test_is_orthogonal(self):
        assert Matrix.planar_rotation(1, 2, 4, 1.1).is_orthogonal()
        assert not Matrix([[2, 0], [0, 1]]).is_orthogonal()
        assert not Matrix([[1, 0, 0], [0, 1, 0]]).is_orthogonal()


def test_orthonormalize_skips_dependent_vectors():
    vecs = [Vector([1, 1, 0]), Vector([2, 2, 0]), Vector([0, 1, 0]), Vector([0, 0, 5])]
    basis = orthonormalize(vecs, 3)
    assert len(basis) == 3
    assert_vec_close(basis[0], [1 / math.sqrt(2), 1 / math.sqrt(2), 0])
    for i, a in enumerate(basis):
        for j, b in enumerate(basis):
            assert a.dot(b) == pytest.approx(1.0 if i == j else 0.0, abs=1e-12)


def test_determinant():
    assert Matrix([[4, 7], [2, 6]]).determinant() == pytest.approx(10.0)
    assert Matrix([[0, 1], [1, 0]]).determinant() == pytest.approx(-1.0)
    assert Matrix([[1, 2], [2, 4]]).determinant() == 0.0
    assert Matrix.planar_rotation(1, 3, 5, 0.9).determinant() == pytest.approx(1.0)
