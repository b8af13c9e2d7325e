"""
Conversions between the six-value cairo matrix form and 3x3 matrices,
generator matrices, ready-made six-value transforms and decomposition
into rotation, scale and translation.

The six-value form is the one cairo uses, (xx, yx, xy, yy, x0, y0),
describing the map

    x' = xx * x + xy * y + x0
    y' = yx * x + yy * y + y0

A few six-value transforms for use with context.transform():

    translate(dx, dy)       shift by dx, dy
    scale(fx, fy)           scale around the origin
    rotate(a)               rotate by a radians around the origin
    skew_x(a), skew_y(a)    skew by a radians
    flip(fx, fy, center)    scale by fx, fy keeping center fixed
    reflect_x_axis()        mirror in the x-axis, i.e. (1, 0, 0, -1, 0, 0)
"""
import math
from typing import Any, Sequence, Tuple, Union
from .matrix import Matrix


AffineMatrix6 = Tuple[float, float, float, float, float, float]

IDENTITY: AffineMatrix6 = (1.0, 0.0, 0.0, 1.0, 0.0, 0.0)


def to_matrix3x3(m: Sequence[float]) -> Matrix:
    """
    Returns the 3x3 matrix equivalent to the six-value matrix `m`.
    """
    if len(m) < 6:
        raise ValueError(f"Expected six matrix values, got {len(m)}")
    return Matrix.from_cairo(m)


def to_matrix6(M: Matrix) -> AffineMatrix6:
    """
    Returns the six-value equivalent of the 3x3 matrix `M`, whose bottom
    row must be (0, 0, 1).
    """
    if not M.is_affine():
        raise ValueError(f"Not an affine matrix, bottom row is {M.m[2]}")
    return M.for_cairo()


def rotation_matrix(a: float) -> Matrix:
    """Returns a 3x3 matrix that rotates through `a` radians."""
    return Matrix.rotation(a)


def translation_matrix(dx: float, dy: float) -> Matrix:
    """Returns a 3x3 matrix that translates by `dx`, `dy`."""
    return Matrix.translation(dx, dy)


def scaling_matrix(sx: float, sy: float) -> Matrix:
    """Returns a 3x3 matrix that scales by `sx`, `sy`."""
    return Matrix.scale(sx, sy)


def compose(a: Sequence[float], b: Sequence[float]) -> AffineMatrix6:
    """
    Composes the six-value matrix `a` into the space of `b`.

    This is what cairo does when a transform is applied to a context
    whose current matrix is `b`: the result maps a point through `a`
    first, then through `b`. In 3x3 terms it is B @ A.
    """
    a_xx, a_yx, a_xy, a_yy, a_x0, a_y0 = a[:6]
    b_xx, b_yx, b_xy, b_yy, b_x0, b_y0 = b[:6]
    return (
        a_xx * b_xx + a_yx * b_xy,
        a_xx * b_yx + a_yx * b_yy,
        a_xy * b_xx + a_yy * b_xy,
        a_xy * b_yx + a_yy * b_yy,
        a_x0 * b_xx + a_y0 * b_xy + b_x0,
        a_x0 * b_yx + a_y0 * b_yy + b_y0,
    )


def translate(dx: float, dy: float) -> AffineMatrix6:
    return (1.0, 0.0, 0.0, 1.0, float(dx), float(dy))


def scale(fx: float, fy: float) -> AffineMatrix6:
    return (float(fx), 0.0, 0.0, float(fy), 0.0, 0.0)


def rotate(a: float) -> AffineMatrix6:
    """
    Six-value rotation through `a` radians, the same rotation as
    rotation_matrix(a): (cos, sin, -sin, cos, 0, 0).
    """
    return to_matrix6(rotation_matrix(a))


def skew_x(a: float) -> AffineMatrix6:
    return (1.0, 0.0, math.tan(a), 1.0, 0.0, 0.0)


def skew_y(a: float) -> AffineMatrix6:
    return (1.0, math.tan(a), 0.0, 1.0, 0.0, 0.0)


def shear_x(k: float) -> AffineMatrix6:
    return (1.0, 0.0, float(k), 1.0, 0.0, 0.0)


def shear_y(k: float) -> AffineMatrix6:
    return (1.0, float(k), 0.0, 1.0, 0.0, 0.0)


def flip(
    fx: float, fy: float, center: Tuple[float, float] = (0.0, 0.0)
) -> AffineMatrix6:
    """
    Scales by `fx`, `fy` around `center`, which stays fixed. Use -1 for
    a mirror, e.g. flip(-1, 1, (cx, cy)) mirrors horizontally.
    """
    cx, cy = center
    return (
        float(fx),
        0.0,
        0.0,
        float(fy),
        cx * (1 - fx),
        cy * (1 - fy),
    )


def reflect_origin() -> AffineMatrix6:
    return (-1.0, 0.0, 0.0, -1.0, 0.0, 0.0)


def reflect_x_axis() -> AffineMatrix6:
    return (1.0, 0.0, 0.0, -1.0, 0.0, 0.0)


def reflect_y_axis() -> AffineMatrix6:
    return (-1.0, 0.0, 0.0, 1.0, 0.0, 0.0)


def _as_matrix(source: Union[Matrix, Any]) -> Matrix:
    if isinstance(source, Matrix):
        return source
    if hasattr(source, "get_matrix"):
        from .context import get_matrix  # Local import, context needs cairo

        return to_matrix3x3(get_matrix(source))
    # 3x3 list or numpy array
    return Matrix(source)


def get_rotation(source: Union[Matrix, Any]) -> float:
    """
    Returns the rotation in radians, in [0, 2*pi), of a 3x3 matrix or of
    the current matrix of a drawing context.
    A plain 3x3 list or numpy array is accepted as a matrix too.

    For a matrix

            | a  b  tx |
        R = | c  d  ty |
            | 0  0  1  |

    this is atan2(c, a), the angle of the transformed x-axis. It inverts
    rotation_matrix(). The result is meaningless (but finite) for a
    matrix with a zero x-axis.
    """
    return _as_matrix(source).get_rotation()


def get_scale(source: Union[Matrix, Any]) -> Tuple[float, float]:
    """
    Returns the (sx, sy) scale of a 3x3 matrix or of the current matrix
    of a drawing context.

    Shear is not separated from scale.
    """
    return _as_matrix(source).get_scale()


def get_translation(source: Union[Matrix, Any]) -> Tuple[float, float]:
    """
    Returns the (x0, y0) translation of a 3x3 matrix or of the current
    matrix of a drawing context.
    """
    return _as_matrix(source).get_translation()
