"""
Bicubic Hermite patches on the unit cell.

Within one grid cell the surface is the polynomial::

    g(t, u) = sum_{i=0..3} sum_{j=0..3} a_ij * t**i * u**j

over ``[0, 1] x [0, 1]``, where ``t`` runs along axis 0 and ``u`` along
axis 1. The sixteen coefficients follow from matching the value, both
first derivatives and the cross derivative at the four cell corners. That
linear system has a fixed inverse, :data:`INVERSE_BICUBIC_MATRIX`, which
maps the Hermite data vector::

    [f00, f01, f10, f11, fx00, fx01, fx10, fx11,
     fy00, fy01, fy10, fy11, fxy00, fxy01, fxy10, fxy11]

to the coefficient vector ``a[4 * i + j]``. Corner ``(p, q)`` is offset
``p`` along axis 0 and ``q`` along axis 1 from the lower cell corner.

See https://en.wikipedia.org/wiki/Bicubic_interpolation.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

# fmt: off
INVERSE_BICUBIC_MATRIX: NDArray[np.float64] = np.array(
    [
        [ 1,  0,  0,  0,   0,  0,  0,  0,   0,  0,  0,  0,   0,  0,  0,  0],
        [ 0,  0,  0,  0,   0,  0,  0,  0,   1,  0,  0,  0,   0,  0,  0,  0],
        [-3,  3,  0,  0,   0,  0,  0,  0,  -2, -1,  0,  0,   0,  0,  0,  0],
        [ 2, -2,  0,  0,   0,  0,  0,  0,   1,  1,  0,  0,   0,  0,  0,  0],
        [ 0,  0,  0,  0,   1,  0,  0,  0,   0,  0,  0,  0,   0,  0,  0,  0],
        [ 0,  0,  0,  0,   0,  0,  0,  0,   0,  0,  0,  0,   1,  0,  0,  0],
        [ 0,  0,  0,  0,  -3,  3,  0,  0,   0,  0,  0,  0,  -2, -1,  0,  0],
        [ 0,  0,  0,  0,   2, -2,  0,  0,   0,  0,  0,  0,   1,  1,  0,  0],
        [-3,  0,  3,  0,  -2,  0, -1,  0,   0,  0,  0,  0,   0,  0,  0,  0],
        [ 0,  0,  0,  0,   0,  0,  0,  0,  -3,  0,  3,  0,  -2,  0, -1,  0],
        [ 9, -9, -9,  9,   6, -6,  3, -3,   6,  3, -6, -3,   4,  2,  2,  1],
        [-6,  6,  6, -6,  -4,  4, -2,  2,  -3, -3,  3,  3,  -2, -2, -1, -1],
        [ 2,  0, -2,  0,   1,  0,  1,  0,   0,  0,  0,  0,   0,  0,  0,  0],
        [ 0,  0,  0,  0,   0,  0,  0,  0,   2,  0, -2,  0,   1,  0,  1,  0],
        [-6,  6,  6, -6,  -3,  3, -3,  3,  -4, -2,  4,  2,  -2, -1, -2, -1],
        [ 4, -4, -4,  4,   2, -2,  2, -2,   2,  2, -2, -2,   1,  1,  1,  1],
    ],
    dtype=np.float64,
)
# fmt: on
INVERSE_BICUBIC_MATRIX.setflags(write=False)

# d/dt t**i = i * t**(i - 1) for i = 1..3
_POWER_RANK = np.array([1.0, 2.0, 3.0])


def hermite_field_vector(
    corners: NDArray[np.float64],
    fx: NDArray[np.float64],
    fy: NDArray[np.float64],
    fxy: NDArray[np.float64],
    out: NDArray[np.float64] | None = None,
) -> NDArray[np.float64]:
    """
    Pack the 2x2 corner blocks of a cell into the 16-element Hermite vector.

    Each argument is a ``(2, 2)`` block indexed ``[p, q]``; row-major
    flattening gives the corner order (0,0), (0,1), (1,0), (1,1).
    """
    if out is None:
        out = np.empty(16, dtype=np.float64)
    out[0:4] = np.ravel(corners)
    out[4:8] = np.ravel(fx)
    out[8:12] = np.ravel(fy)
    out[12:16] = np.ravel(fxy)
    return out


def bicubic_coefficients(field: NDArray[np.float64]) -> NDArray[np.float64]:
    """Return the 16 polynomial coefficients ``a[4 * i + j]`` for a Hermite vector."""
    return INVERSE_BICUBIC_MATRIX @ field


def monomials(t: float, u: float, out: NDArray[np.float64] | None = None) -> NDArray[np.float64]:
    """Return the 16 monomials ``t**i * u**j`` ordered ``4 * i + j``."""
    if out is None:
        out = np.empty(16, dtype=np.float64)
    tp = np.array([1.0, t, t * t, t * t * t])
    up = np.array([1.0, u, u * u, u * u * u])
    out.reshape(4, 4)[...] = np.outer(tp, up)
    return out


def evaluate_bicubic(
    coefficients: NDArray[np.float64],
    t: float,
    u: float,
    derivative: bool = False,
    powers: NDArray[np.float64] | None = None,
) -> tuple[float, float, float]:
    """
    Evaluate a bicubic patch and its partial derivatives on the unit cell.

    Parameters
    ----------
    coefficients : NDArray[np.float64]
        Coefficients ``a[4 * i + j]`` from :func:`bicubic_coefficients`.
    t, u : float
        Normalized position within the cell.
    derivative : bool, optional
        If True also differentiate the series term by term.
    powers : NDArray[np.float64], optional
        Scratch buffer of 16 elements for the monomials.

    Returns
    -------
    tuple[float, float, float]
        ``(g, dg/dt, dg/du)``. Derivatives are 0.0 when not requested.
        They are in cell units; divide by the cell spacing for physical
        units.
    """
    powers = monomials(t, u, out=powers)
    value = float(coefficients @ powers)
    if not derivative:
        return value, 0.0, 0.0

    a = coefficients.reshape(4, 4)
    table = powers.reshape(4, 4)
    tp = table[:, 0]
    up = table[0, :]
    dg_dt = float(_POWER_RANK @ (tp[:3] * (a[1:, :] @ up)))
    dg_du = float(_POWER_RANK @ (up[:3] * (tp @ a[:, 1:])))
    return value, dg_dt, dg_du
