"""
Reading, replacing and composing the current transformation matrix of a
cairo drawing context.

The context is always passed in explicitly. Anything with the
`get_matrix()` / `set_matrix(cairo.Matrix)` methods of `cairo.Context`
can be used.

When a context is first created its matrix is the identity:

    get_matrix(ctx) == (1.0, 0.0, 0.0, 1.0, 0.0, 0.0)

After moving the origin to 400/400:

    get_matrix(ctx) == (1.0, 0.0, 0.0, 1.0, 400.0, 400.0)

To go back to the initial matrix, use reset_matrix(ctx), or
set_matrix(ctx, IDENTITY).
"""
import logging
from typing import Any, Optional, Sequence
import cairo
from blinker import Signal
from ..config import get_config
from .affine import AffineMatrix6, IDENTITY, compose, to_matrix3x3


logger = logging.getLogger(__name__)


class InvalidMatrixError(ValueError):
    """Raised when a matrix is refused before it reaches the context."""

    pass


# Sent with the context as sender and matrix=<six values> after every
# change made through this module.
matrix_changed = Signal()


def _coerce(m: Sequence[Any]) -> AffineMatrix6:
    if len(m) < 6:
        logger.warning(f"Refusing matrix {m}: not enough values")
        raise InvalidMatrixError(
            f"Invalid matrix {m}: expected 6 values, got {len(m)}"
        )
    try:
        return tuple(float(v) for v in m[:6])  # type: ignore[return-value]
    except (TypeError, ValueError) as e:
        logger.warning(f"Refusing matrix {m}: {e}")
        raise InvalidMatrixError(f"Invalid matrix {m}: {e}") from e


def get_matrix(ctx: Any) -> AffineMatrix6:
    """
    Returns the current matrix of `ctx` as six floats
    (xx, yx, xy, yy, x0, y0).
    """
    gm = ctx.get_matrix()
    return (gm.xx, gm.yx, gm.xy, gm.yy, gm.x0, gm.y0)


def validate_matrix(
    m: Sequence[Any], strict: Optional[bool] = None
) -> AffineMatrix6:
    """
    Coerces the first six values of `m` to floats and checks that they
    form an acceptable matrix. Values after the sixth are ignored.

    Only the all-zero matrix is refused by default. With `strict`
    (default: the configured strict_singular setting), any matrix that
    is not invertible is refused as well.

    Raises:
        InvalidMatrixError: if the matrix is refused.
    """
    values = _coerce(m)
    if not any(values):
        logger.warning(f"Refusing matrix {m}: all values are zero")
        raise InvalidMatrixError(f"Degenerate matrix {m}: all values are zero")

    config = get_config()
    if strict is None:
        strict = config.strict_singular
    if strict and to_matrix3x3(values).has_zero_scale(
        config.singular_tolerance
    ):
        logger.warning(f"Refusing matrix {m}: not invertible")
        raise InvalidMatrixError(f"Singular matrix {m}: not invertible")

    return values


def set_matrix(
    ctx: Any, m: Sequence[Any], strict: Optional[bool] = None
) -> None:
    """
    Replaces the current matrix of `ctx` with `m`, a sequence of at
    least six numbers (xx, yx, xy, yy, x0, y0).

    See validate_matrix() for which matrices are refused here. cairo
    itself refuses any matrix that is not invertible; that refusal is
    raised as InvalidMatrixError too. cairo then keeps the context in
    an error state and every later call on it fails, so pass
    strict=True to refuse such matrices before they reach cairo.

    Raises:
        InvalidMatrixError: if the matrix is refused here or by cairo.
    """
    values = validate_matrix(m, strict)
    try:
        ctx.set_matrix(cairo.Matrix(*values))
    except cairo.Error as e:
        logger.warning(f"cairo refused matrix {values}: {e}")
        raise InvalidMatrixError(
            f"Invalid matrix {values}: refused by cairo: {e}"
        ) from e
    logger.debug(f"Matrix set to {values}")
    matrix_changed.send(ctx, matrix=values)


def transform(
    ctx: Any, a: Sequence[Any], strict: Optional[bool] = None
) -> None:
    """
    Modifies the current matrix of `ctx` by applying the six-value
    matrix `a` within it: points are mapped through `a` first, then
    through the existing matrix.

    For example, to skew the current state by 45 degrees in x and move
    by 20 in the y direction:

        transform(ctx, (1, 0, math.tan(math.pi / 4), 1, 0, 20))
    """
    set_matrix(ctx, compose(_coerce(a), get_matrix(ctx)), strict)


def reset_matrix(ctx: Any) -> None:
    """Sets the current matrix of `ctx` back to the identity."""
    set_matrix(ctx, IDENTITY)
