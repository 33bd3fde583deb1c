#
# PROJECT: nd-maze-raytracer
# MODULE: nd_maze_raytracer/camera.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#

import math

from .errors import NonOrthogonalMatrixError
from .math_utils import Matrix, Vector, _check_dim, orthonormalize
from .ray import Ray


class Camera:
    """
    First-person viewpoint: a position plus an orthonormal basis.

    basis[0] is forward, basis[1] right, basis[2] up; any further vectors
    span the extra dimensions. The basis starts as the identity and is only
    changed by orthogonal matrices (planar rotations) or by align_to, which
    re-orthonormalises, so it stays orthonormal.
    """
    __slots__ = ('position', 'basis')

    def __init__(self, position: Vector, basis=None):
        n = len(position)
        if basis is None:
            basis = [Vector.basis(i, n) for i in range(n)]
        basis = list(basis)
        _check_dim(n, len(basis), "basis vector count")
        for b in basis:
            _check_dim(n, len(b), "basis vector")
        self.position = position
        self.basis = basis

    def __repr__(self):
        return f"Camera(position={self.position!r}, forward={self.forward!r})"

    @property
    def dimension(self) -> int:
        return len(self.position)

    def axis(self, index: int) -> Vector:
        return self.basis[index]

    @property
    def forward(self) -> Vector:
        return self.basis[0]

    @property
    def right(self) -> Vector:
        return self.basis[1]

    @property
    def up(self) -> Vector:
        return self.basis[2]

    # ── Orientation ─────────────────────────────────────────────────────

    def update_basis_by_matrix(self, matrix: Matrix):
        """Replace every basis vector with its image under `matrix`."""
        _check_dim(self.dimension, matrix.dimension, "matrix")
        if not matrix.is_orthogonal(1e-6):
            raise NonOrthogonalMatrixError(
                "basis updates require an orthogonal matrix; use align_to "
                "for arbitrary re-orientation")
        self.basis = [matrix.transform_vector(b) for b in self.basis]

    def apply_rotation(self, axis_i: int, axis_j: int, angle: float):
        """Rotate the basis by `angle` in the world (axis_i, axis_j) plane."""
        self.update_basis_by_matrix(
            Matrix.planar_rotation(axis_i, axis_j, self.dimension, angle))

    def align_to(self, direction: Vector):
        """
        Point forward along `direction`, rebuilding the remaining axes by
        Gram-Schmidt from the current ones (canonical axes fill any gap).
        """
        _check_dim(self.dimension, len(direction), "direction")
        if direction.norm() == 0:
            raise ValueError("cannot align to a zero direction")
        n = self.dimension
        candidates = ([direction] + self.basis[1:] + [self.basis[0]] +
                      [Vector.basis(i, n) for i in range(n)])
        basis = orthonormalize(candidates, n)
        # Gram-Schmidt can return a reflected frame; keep it a rotation
        if Matrix(basis).determinant() < 0:
            basis[1] = -basis[1]
        self.basis = basis

    def look_at(self, target: Vector):
        self.align_to(target - self.position)

    def is_orthonormal(self, tol: float = 1e-9) -> bool:
        for i, a in enumerate(self.basis):
            for j, b in enumerate(self.basis):
                expected = 1.0 if i == j else 0.0
                if abs(a.dot(b) - expected) > tol:
                    return False
        return True

    # ── Movement ────────────────────────────────────────────────────────

    def translate_along_axis(self, axis_index: int, distance: float):
        """Move relative to the current orientation, not world axes."""
        self.position = self.position + self.basis[axis_index] * distance

    # ── Rays ────────────────────────────────────────────────────────────

    def heading(self, axes=(0, 1)) -> float:
        """Azimuth of forward in the top-down plane."""
        a, b = axes
        return math.atan2(self.forward[b], self.forward[a])

    def forward_ray(self) -> Ray:
        return Ray(self.position, self.forward)

    def ray_through(self, u: float, v: float, fov: float, aspect: float) -> Ray:
        """
        Ray through normalised screen coordinates u, v in [-1, 1]
        (u to the right, v upwards) for a vertical field of view `fov`.
        """
        half_height = math.tan(fov / 2)
        half_width = aspect * half_height
        direction = self.forward + self.right * (u * half_width)
        if self.dimension >= 3:
            direction = direction + self.up * (v * half_height)
        return Ray(self.position, direction.normalize())
