#
# PROJECT: nd-maze-raytracer
# MODULE: nd_maze_raytracer/math_utils.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

import math

from .errors import DimensionMismatchError, SingularMatrixError

# Pivot magnitude below which Gauss-Jordan gives up
PIVOT_EPSILON = 1e-10


def _check_dim(expected: int, actual: int, what: str = "operand"):
    if expected != actual:
        raise DimensionMismatchError(expected, actual, what)


class Vector:
    """Immutable N-component vector. Every operation returns a new vector."""
    __slots__ = ('_c',)

    def __init__(self, components):
        self._c = tuple(float(c) for c in components)

    @classmethod
    def zero(cls, n: int) -> 'Vector':
        return cls([0.0] * n)

    @classmethod
    def basis(cls, i: int, n: int) -> 'Vector':
        """The i-th canonical basis vector of R^n."""
        if not 0 <= i < n:
            raise IndexError(f"basis index {i} out of range for dimension {n}")
        return cls(1.0 if k == i else 0.0 for k in range(n))

    @classmethod
    def of_unit_direction(cls, theta: float, phi: float) -> 'Vector':
        """3-D unit vector from polar angle theta and azimuth phi."""
        return cls((math.sin(theta) * math.cos(phi),
                    math.sin(theta) * math.sin(phi),
                    math.cos(theta)))

    @property
    def dimension(self) -> int:
        return len(self._c)

    def __repr__(self):
        return "Vector(" + ", ".join(f"{c:.3f}" for c in self._c) + ")"

    def __iter__(self):
        return iter(self._c)

    def __len__(self):
        return len(self._c)

    def __getitem__(self, index):
        return self._c[index]

    def __eq__(self, other):
        if isinstance(other, Vector):
            return self._c == other._c
        return NotImplemented

    def __hash__(self):
        return hash(self._c)

    def __add__(self, other):
        if isinstance(other, Vector):
            return self.add(other)
        return NotImplemented

    def __sub__(self, other):
        if isinstance(other, Vector):
            return self.sub(other)
        return NotImplemented

    def __mul__(self, scalar):
        if isinstance(scalar, (int, float)):
            return self.scale(scalar)
        return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, scalar):
        return Vector(c / scalar for c in self._c)

    def __neg__(self):
        return self.negate()

    def dot(self, other: 'Vector') -> float:
        _check_dim(len(self._c), len(other))
        return math.fsum(a * b for a, b in zip(self._c, other))

    def add(self, other: 'Vector') -> 'Vector':
        _check_dim(len(self._c), len(other))
        return Vector(a + b for a, b in zip(self._c, other))

    # Moving a point and adding a vector are the same operation
    translate = add

    def sub(self, other: 'Vector') -> 'Vector':
        _check_dim(len(self._c), len(other))
        return Vector(a - b for a, b in zip(self._c, other))

    def scale(self, factor: float) -> 'Vector':
        return Vector(c * factor for c in self._c)

    def negate(self) -> 'Vector':
        return self.scale(-1)

    def norm(self) -> float:
        return math.sqrt(self.dot(self))

    def normalize(self) -> 'Vector':
        n = self.norm()
        if n == 0:
            return self
        return self / n

    def is_close(self, other: 'Vector', tol: float = 1e-9) -> bool:
        _check_dim(len(self._c), len(other))
        return all(abs(a - b) <= tol for a, b in zip(self._c, other))


def orthonormalize(vectors, n: int, tol: float = 1e-9):
    """
    Gram-Schmidt over `vectors` in order, skipping any that are (nearly)
    dependent on the ones already accepted. Stops once n vectors are found.
    """
    result = []
    for v in vectors:
        _check_dim(n, len(v), "basis vector")
        w = v
        for u in result:
            w = w - u * w.dot(u)
        length = w.norm()
        if length <= tol:
            continue
        result.append(w / length)
        if len(result) == n:
            break
    return result


class Matrix:
    """Immutable matrix stored as a tuple of row Vectors."""
    __slots__ = ('rows',)

    def __init__(self, rows):
        rows = tuple(r if isinstance(r, Vector) else Vector(r) for r in rows)
        if rows:
            width = len(rows[0])
            for r in rows:
                _check_dim(width, len(r), "matrix row")
        self.rows = rows

    @classmethod
    def identity(cls, n: int) -> 'Matrix':
        return cls(Vector.basis(i, n) for i in range(n))

    @classmethod
    def planar_rotation(cls, i: int, j: int, n: int, angle: float) -> 'Matrix':
        """
        Rotation by `angle` confined to the (i, j) coordinate plane.

        Identity everywhere except the 2x2 block at (i,i),(i,j),(j,i),(j,j),
        which becomes [[cos, -sin], [sin, cos]]. With i=0, j=1 in 3-D this is
        the familiar yaw matrix.
        """
        if i == j:
            raise ValueError("rotation plane needs two distinct axes")
        if not (0 <= i < n and 0 <= j < n):
            raise IndexError(f"axes ({i}, {j}) out of range for dimension {n}")
        c = math.cos(angle)
        s = math.sin(angle)
        m = [[1.0 if r == k else 0.0 for k in range(n)] for r in range(n)]
        m[i][i] = c
        m[i][j] = -s
        m[j][i] = s
        m[j][j] = c
        return cls(m)

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def col_count(self) -> int:
        return len(self.rows[0]) if self.rows else 0

    @property
    def dimension(self) -> int:
        """Side length; only meaningful for square matrices."""
        _check_dim(self.row_count, self.col_count, "matrix column count")
        return self.row_count

    def __repr__(self):
        return f"Matrix({[list(r) for r in self.rows]})"

    def __eq__(self, other):
        if isinstance(other, Matrix):
            return self.rows == other.rows
        return NotImplemented

    def __hash__(self):
        return hash(self.rows)

    def __neg__(self):
        return self.negate()

    def __matmul__(self, other):
        if isinstance(other, Matrix):
            return self.matmul(other)
        if isinstance(other, Vector):
            return self.transform_vector(other)
        return NotImplemented

    def negate(self) -> 'Matrix':
        return Matrix(r.negate() for r in self.rows)

    def transpose(self) -> 'Matrix':
        return Matrix(zip(*self.rows))

    def transform_vector(self, v: Vector) -> Vector:
        _check_dim(self.col_count, len(v), "vector")
        return Vector(row.dot(v) for row in self.rows)

    def matmul(self, other: 'Matrix') -> 'Matrix':
        _check_dim(self.col_count, other.row_count, "right-hand matrix rows")
        cols = other.transpose().rows
        return Matrix([row.dot(col) for col in cols] for row in self.rows)

    def inverse(self) -> 'Matrix':
        """Gauss-Jordan elimination with partial pivoting."""
        n = self.dimension
        # Augmented [A | I] as mutable float rows
        aug = [list(row) + [1.0 if k == r else 0.0 for k in range(n)]
               for r, row in enumerate(self.rows)]

        for col in range(n):
            pivot_row = max(range(col, n), key=lambda r: abs(aug[r][col]))
            if abs(aug[pivot_row][col]) < PIVOT_EPSILON:
                raise SingularMatrixError("matrix is not invertible")
            if pivot_row != col:
                aug[col], aug[pivot_row] = aug[pivot_row], aug[col]

            pivot = aug[col][col]
            aug[col] = [x / pivot for x in aug[col]]
            for r in range(n):
                if r == col:
                    continue
                factor = aug[r][col]
                if factor != 0.0:
                    aug[r] = [a - factor * b for a, b in zip(aug[r], aug[col])]

        return Matrix(row[n:] for row in aug)

    def determinant(self) -> float:
        """Gaussian elimination with partial pivoting; 0.0 for a singular matrix."""
        n = self.dimension
        m = [list(row) for row in self.rows]
        det = 1.0
        for col in range(n):
            pivot_row = max(range(col, n), key=lambda r: abs(m[r][col]))
            if abs(m[pivot_row][col]) < PIVOT_EPSILON:
                return 0.0
            if pivot_row != col:
                m[col], m[pivot_row] = m[pivot_row], m[col]
                det = -det
            pivot = m[col][col]
            det *= pivot
            for r in range(col + 1, n):
                factor = m[r][col] / pivot
                if factor != 0.0:
                    m[r] = [a - factor * b for a, b in zip(m[r], m[col])]
        return det

    def is_orthogonal(self, tol: float = 1e-9) -> bool:
        """True if M @ M^T is the identity within `tol`."""
        if self.row_count != self.col_count:
            return False
        product = self.matmul(self.transpose())
        ident = Matrix.identity(self.row_count)
        return all(a.is_close(b, tol) for a, b in zip(product.rows, ident.rows))
