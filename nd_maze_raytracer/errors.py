#
# PROJECT: nd-maze-raytracer
# MODULE: nd_maze_raytracer/errors.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-19
#


class RaytracerError(Exception):
    """Base class for every error raised by the engine."""


class DimensionMismatchError(RaytracerError, ValueError):
    """Operands of differing dimension were combined."""

    def __init__(self, expected: int, actual: int, what: str = "operand"):
        super().__init__(f"{what} has dimension {actual}, expected {expected}")
        self.expected = expected
        self.actual = actual


class SingularMatrixError(RaytracerError, ArithmeticError):
    """Matrix is not invertible (pivot below tolerance)."""


class NonOrthogonalMatrixError(RaytracerError, ValueError):
    """A basis update was attempted with a matrix that is not orthogonal."""


class SceneDescriptionError(RaytracerError, ValueError):
    """A primitive descriptor could not be turned into a primitive."""


class ControlConfigurationError(RaytracerError, ValueError):
    """Key bindings do not cover the camera's degrees of freedom."""


class InsufficientRotationBindingsError(ControlConfigurationError):
    """Fewer rotation key pairs than axis pairs (N choose 2)."""

    def __init__(self, dimension: int, required: int, supplied: int):
        super().__init__(
            f"dimension {dimension} needs {required} rotation key pairs, "
            f"only {supplied} supplied")
        self.dimension = dimension
        self.required = required
        self.supplied = supplied
