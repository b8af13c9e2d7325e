import math
from typing import Tuple, Any, Optional, Sequence
import numpy as np


class Matrix:
    """
    A 3x3 affine transformation matrix for 2D drawing.

    The layout is the conventional one, with points as column vectors:

        | xx  xy  x0 |
        | yx  yy  y0 |
        | 0   0   1  |

    Uses numpy for the underlying storage and calculations. Angles are
    in radians, matching the cairo API.
    """

    def __init__(self, data: Any = None):
        """
        Initializes a 3x3 matrix.

        Args:
            data: Can be another Matrix, a 3x3 list/tuple, a 3x3 numpy
                  array, or None to create an identity matrix.
        """
        if data is None:
            self.m: np.ndarray = np.identity(3, dtype=float)
        elif isinstance(data, Matrix):
            self.m = data.m.copy()
        else:
            try:
                self.m = np.array(data, dtype=float)
            except (TypeError, ValueError) as e:
                raise ValueError(f"Could not create Matrix from data: {e}")
            if self.m.shape != (3, 3):
                raise ValueError("Input data must be a 3x3 matrix.")

    def __matmul__(self, other: "Matrix") -> "Matrix":
        """
        Performs matrix multiplication: self @ other.

        This is the ordinary matrix product, so (A @ B) applied to a
        point p equals A applied to (B applied to p): B acts first.
        """
        if not isinstance(other, Matrix):
            return NotImplemented
        return Matrix(np.dot(self.m, other.m))

    def __eq__(self, other: Any) -> bool:
        """
        Checks for equality between two matrices.

        Uses np.allclose for floating-point comparisons.
        """
        if not isinstance(other, Matrix):
            return False
        return np.allclose(self.m, other.m)

    def __repr__(self) -> str:
        return f"Matrix({self.m.tolist()})"

    def __str__(self) -> str:
        return str(self.m)

    def __copy__(self) -> "Matrix":
        return Matrix(self)

    def copy(self) -> "Matrix":
        """Returns a new Matrix with a copy of the internal data."""
        return Matrix(self)

    def __deepcopy__(self, memo: dict) -> "Matrix":
        return Matrix(self)

    @staticmethod
    def identity() -> "Matrix":
        """Returns a new identity matrix."""
        return Matrix()

    def is_identity(self) -> bool:
        return np.allclose(self.m, np.identity(3))

    def is_affine(self) -> bool:
        """True if the bottom row is exactly (0, 0, 1)."""
        return bool(np.array_equal(self.m[2], (0.0, 0.0, 1.0)))

    @staticmethod
    def from_cairo(values: Sequence[float]) -> "Matrix":
        """
        Creates a matrix from the six-value cairo form
        (xx, yx, xy, yy, x0, y0).
        """
        xx, yx, xy, yy, x0, y0 = values[:6]
        return Matrix(
            [
                [xx, xy, x0],
                [yx, yy, y0],
                [0, 0, 1],
            ]
        )

    def for_cairo(self) -> Tuple[float, float, float, float, float, float]:
        """
        Returns the six-value cairo form (xx, yx, xy, yy, x0, y0).
        """
        m = self.m
        return (
            float(m[0, 0]),
            float(m[1, 0]),
            float(m[0, 1]),
            float(m[1, 1]),
            float(m[0, 2]),
            float(m[1, 2]),
        )

    @staticmethod
    def translation(tx: float, ty: float) -> "Matrix":
        """Creates a translation matrix."""
        return Matrix(
            [
                [1, 0, tx],
                [0, 1, ty],
                [0, 0, 1],
            ]
        )

    @staticmethod
    def scale(
        sx: float, sy: float, center: Optional[Tuple[float, float]] = None
    ) -> "Matrix":
        """
        Creates a scaling matrix.

        Args:
            sx: Scale factor for the x-axis.
            sy: Scale factor for the y-axis.
            center: Optional (x, y) point to scale around. If None,
                    scales around the origin (0, 0).
        """
        m = Matrix(
            [
                [sx, 0, 0],
                [0, sy, 0],
                [0, 0, 1],
            ]
        )
        if center:
            return Matrix._around(m, center)
        return m

    @staticmethod
    def rotation(
        angle: float, center: Optional[Tuple[float, float]] = None
    ) -> "Matrix":
        """
        Creates a rotation matrix.

        A positive angle rotates the x-axis towards the y-axis
        (counter-clockwise with the y-axis pointing up).

        Args:
            angle: The rotation angle in radians.
            center: Optional (x, y) point to rotate around. If None,
                    rotates around the origin (0, 0).
        """
        c = math.cos(angle)
        s = math.sin(angle)
        m = Matrix(
            [
                [c, -s, 0],
                [s, c, 0],
                [0, 0, 1],
            ]
        )
        if center:
            return Matrix._around(m, center)
        return m

    @staticmethod
    def shear(
        kx: float, ky: float, center: Optional[Tuple[float, float]] = None
    ) -> "Matrix":
        """
        Creates a shear matrix: x' = x + kx * y, y' = y + ky * x.
        """
        m = Matrix(
            [
                [1, kx, 0],
                [ky, 1, 0],
                [0, 0, 1],
            ]
        )
        if center:
            return Matrix._around(m, center)
        return m

    @staticmethod
    def _around(m: "Matrix", center: Tuple[float, float]) -> "Matrix":
        cx, cy = center
        # Move the center to the origin, apply m, move it back
        return Matrix.translation(cx, cy) @ m @ Matrix.translation(-cx, -cy)

    def get_translation(self) -> Tuple[float, float]:
        """
        Extracts the translation component (x0, y0) from the matrix.
        """
        return float(self.m[0, 2]), float(self.m[1, 2])

    def get_scale(self) -> Tuple[float, float]:
        """
        Extracts the scale components (sx, sy) from the matrix.

        These are the lengths of the two transformed basis vectors (the
        first two columns), so they are always positive. Shear is not
        separated out: a sheared matrix reports an inflated scale.
        """
        sx = math.hypot(self.m[0, 0], self.m[1, 0])
        sy = math.hypot(self.m[0, 1], self.m[1, 1])
        return float(sx), float(sy)

    def get_rotation(self) -> float:
        """
        Extracts the rotation angle in radians, normalized to [0, 2*pi).

        This is the angle of the transformed x-axis, which inverts
        Matrix.rotation() exactly.
        """
        angle = math.atan2(self.m[1, 0], self.m[0, 0]) % (2 * math.pi)
        # Tiny negative angles round up to exactly 2*pi
        if angle >= 2 * math.pi:
            return 0.0
        return float(angle)

    def get_determinant_2x2(self) -> float:
        """Returns the determinant of the linear (upper-left 2x2) part."""
        return float(np.linalg.det(self.m[0:2, 0:2]))

    def has_zero_scale(self, tolerance: float = 1e-6) -> bool:
        """
        Checks whether the linear part collapses the plane onto a line or
        a point, i.e. the matrix is not invertible.
        """
        return abs(self.get_determinant_2x2()) < tolerance

    def invert(self) -> "Matrix":
        """
        Computes the inverse of the matrix.

        Will raise a `numpy.linalg.LinAlgError` if the matrix is singular,
        for example a scale of zero.
        """
        return Matrix(np.linalg.inv(self.m))

    def transform_point(
        self, point: Tuple[float, float]
    ) -> Tuple[float, float]:
        """
        Applies the full affine transformation to a 2D point.
        """
        vec = np.array([point[0], point[1], 1])
        res_vec = np.dot(self.m, vec)
        return (float(res_vec[0]), float(res_vec[1]))

    def transform_vector(
        self, vector: Tuple[float, float]
    ) -> Tuple[float, float]:
        """
        Applies the transformation to a 2D vector, ignoring translation.
        """
        vec = np.array([vector[0], vector[1], 0])
        res_vec = np.dot(self.m, vec)
        return (float(res_vec[0]), float(res_vec[1]))
