"""
Finite-difference derivative fields for bicubic interpolation.

The bicubic Hermite evaluator needs, at every grid node, estimates of
the partial derivatives ``fx``, ``fy`` and the cross derivative ``fxy``.
They are computed once per grid with stencils that depend on where the
node sits:

- interior nodes use centered differences in both directions
- edge nodes use a one-sided difference normal to the edge and a centered
  difference along it
- corner nodes use one-sided differences in both directions

Each node therefore belongs to one of nine :class:`StencilRegion` values.
A region is the product of the node's position along each axis (first,
interior or last), and the position alone fixes which neighbour pair the
difference uses.

Every difference is divided by the local normalization increment::

    inc(k) = 2                                          at k = 0 or k = n - 1
    inc(k) = (h(k-1) + h(k+1)) / h(k)                   otherwise

where ``h(k)`` is :meth:`Axis.increment`. On an evenly spaced axis this is
always 2, so interior derivatives are expressed per cell rather than per
coordinate unit, which is the scale the unit-cell Hermite polynomial
expects.

Example
-------
>>> import numpy as np
>>> from bathygrid.core.axis import Axis
>>> from bathygrid.core.derivatives import compute_derivative_field
>>> x = Axis.linear(0.0, 1.0, 4)
>>> y = Axis.linear(0.0, 1.0, 4)
>>> values = np.add.outer(2.0 * x.values, y.values)
>>> field = compute_derivative_field(values, x, y)
>>> float(field.fx[1, 1]), float(field.fy[1, 1])
(2.0, 1.0)
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from enum import Enum

import numpy as np
from numpy.typing import NDArray

from bathygrid.core.axis import Axis
from bathygrid.core.exceptions import GridShapeError

logger = logging.getLogger(__name__)


class AxisPosition(Enum):
    """Position of a node along a single axis."""

    FIRST = "first"
    INTERIOR = "interior"
    LAST = "last"


# Neighbour offsets (lower, upper) of the difference taken along one axis.
_AXIS_STENCILS: dict[AxisPosition, tuple[int, int]] = {
    AxisPosition.FIRST: (0, 1),
    AxisPosition.INTERIOR: (-1, 1),
    AxisPosition.LAST: (-1, 0),
}


class StencilRegion(Enum):
    """The nine boundary classes of a grid node, as (row, col) positions."""

    TOP_LEFT = (AxisPosition.FIRST, AxisPosition.FIRST)
    TOP_RIGHT = (AxisPosition.FIRST, AxisPosition.LAST)
    BOTTOM_LEFT = (AxisPosition.LAST, AxisPosition.FIRST)
    BOTTOM_RIGHT = (AxisPosition.LAST, AxisPosition.LAST)
    TOP = (AxisPosition.FIRST, AxisPosition.INTERIOR)
    BOTTOM = (AxisPosition.LAST, AxisPosition.INTERIOR)
    LEFT = (AxisPosition.INTERIOR, AxisPosition.FIRST)
    RIGHT = (AxisPosition.INTERIOR, AxisPosition.LAST)
    INTERIOR = (AxisPosition.INTERIOR, AxisPosition.INTERIOR)

    @property
    def row_stencil(self) -> tuple[int, int]:
        """Row offsets (lower, upper) used for ``fx``."""
        return _AXIS_STENCILS[self.value[0]]

    @property
    def col_stencil(self) -> tuple[int, int]:
        """Column offsets (lower, upper) used for ``fy``."""
        return _AXIS_STENCILS[self.value[1]]

    @property
    def is_corner(self) -> bool:
        return AxisPosition.INTERIOR not in self.value

    @property
    def is_edge(self) -> bool:
        return self.value.count(AxisPosition.INTERIOR) == 1


# (row == first, row == last, col == first, col == last) -> region
_REGION_TABLE: dict[tuple[bool, bool, bool, bool], StencilRegion] = {
    (True, False, True, False): StencilRegion.TOP_LEFT,
    (True, False, False, True): StencilRegion.TOP_RIGHT,
    (False, True, True, False): StencilRegion.BOTTOM_LEFT,
    (False, True, False, True): StencilRegion.BOTTOM_RIGHT,
    (True, False, False, False): StencilRegion.TOP,
    (False, True, False, False): StencilRegion.BOTTOM,
    (False, False, True, False): StencilRegion.LEFT,
    (False, False, False, True): StencilRegion.RIGHT,
    (False, False, False, False): StencilRegion.INTERIOR,
}


def axis_position(index: int, size: int) -> AxisPosition:
    """Return the position of node ``index`` on an axis of ``size`` nodes."""
    if index == 0:
        return AxisPosition.FIRST
    if index == size - 1:
        return AxisPosition.LAST
    return AxisPosition.INTERIOR


def classify_node(row: int, col: int, n_rows: int, n_cols: int) -> StencilRegion:
    """
    Return the stencil region of node ``(row, col)``.

    Parameters
    ----------
    row, col : int
        Node index.
    n_rows, n_cols : int
        Grid shape. Both must be at least 2; with a single node along an
        axis a node would be both first and last.

    Raises
    ------
    GridShapeError
        If the grid is too small for the node to be classified.
    """
    key = (row == 0, row == n_rows - 1, col == 0, col == n_cols - 1)
    try:
        return _REGION_TABLE[key]
    except KeyError:
        raise GridShapeError(
            f"Cannot classify node ({row}, {col}) of a {n_rows}x{n_cols} grid",
            shape=(n_rows, n_cols),
        ) from None


def normalization_increments(axis: Axis) -> NDArray[np.float64]:
    """
    Return the local normalization increment of every node on ``axis``.

    Endpoints get 2. Interior node ``k`` gets
    ``(increment(k - 1) + increment(k + 1)) / increment(k)``.
    """
    n = axis.size
    inc = np.full(n, 2.0)
    for k in range(1, n - 1):
        inc[k] = (axis.increment(k - 1) + axis.increment(k + 1)) / axis.increment(k)
    return inc


def _neighbour_indices(size: int) -> tuple[NDArray[np.intp], NDArray[np.intp]]:
    """Lower and upper neighbour index of every node along one axis."""
    lower = np.empty(size, dtype=np.intp)
    upper = np.empty(size, dtype=np.intp)
    for k in range(size):
        lo, hi = _AXIS_STENCILS[axis_position(k, size)]
        lower[k] = k + lo
        upper[k] = k + hi
    return lower, upper


@dataclass(frozen=True)
class DerivativeField:
    """
    Precomputed derivative estimates at every grid node.

    Attributes
    ----------
    fx : NDArray[np.float64]
        Difference along axis 0 (rows), normalized per node.
    fy : NDArray[np.float64]
        Difference along axis 1 (columns), normalized per node.
    fxy : NDArray[np.float64]
        Mixed difference, normalized by the product of both increments.

    All three arrays are read-only and share the grid's shape.
    """

    fx: NDArray[np.float64]
    fy: NDArray[np.float64]
    fxy: NDArray[np.float64]

    @property
    def shape(self) -> tuple[int, int]:
        return self.fx.shape  # type: ignore[return-value]


def compute_derivative_field(
    values: NDArray[np.float64],
    axis0: Axis,
    axis1: Axis,
) -> DerivativeField:
    """
    Compute ``fx``, ``fy`` and ``fxy`` at every node of a 2-D grid.

    Parameters
    ----------
    values : NDArray[np.float64]
        Grid samples with shape ``(axis0.size, axis1.size)``.
    axis0 : Axis
        Row axis.
    axis1 : Axis
        Column axis.

    Returns
    -------
    DerivativeField
        Read-only derivative arrays.

    Raises
    ------
    GridShapeError
        If ``values`` does not match the axes.

    Notes
    -----
    For node ``(i, j)`` with row neighbours ``(im, ip)`` and column
    neighbours ``(jm, jp)`` chosen by its :class:`StencilRegion`::

        fx  = (f[ip, j] - f[im, j]) / inc0[i]
        fy  = (f[i, jp] - f[i, jm]) / inc1[j]
        fxy = (f[ip, jp] - f[ip, jm] - f[im, jp] + f[im, jm]) / (inc0[i] * inc1[j])
    """
    f = np.asarray(values, dtype=np.float64)
    n_rows, n_cols = axis0.size, axis1.size
    if f.shape != (n_rows, n_cols):
        raise GridShapeError(
            f"Values have shape {f.shape}, axes require {(n_rows, n_cols)}", shape=f.shape
        )

    inc0 = normalization_increments(axis0)
    inc1 = normalization_increments(axis1)
    im, ip = _neighbour_indices(n_rows)
    jm, jp = _neighbour_indices(n_cols)

    fx = (f[ip, :] - f[im, :]) / inc0[:, np.newaxis]
    fy = (f[:, jp] - f[:, jm]) / inc1[np.newaxis, :]
    cross = f[np.ix_(ip, jp)] - f[np.ix_(ip, jm)] - f[np.ix_(im, jp)] + f[np.ix_(im, jm)]
    fxy = cross / np.outer(inc0, inc1)

    for arr in (fx, fy, fxy):
        arr.setflags(write=False)

    if logger.isEnabledFor(logging.DEBUG):
        counts = region_counts(n_rows, n_cols)
        logger.debug(
            "Derivative field for %dx%d grid: %s",
            n_rows,
            n_cols,
            ", ".join(f"{region.name}={count}" for region, count in counts.items()),
        )

    return DerivativeField(fx=fx, fy=fy, fxy=fxy)


def region_counts(n_rows: int, n_cols: int) -> dict[StencilRegion, int]:
    """Return how many nodes of an ``n_rows`` x ``n_cols`` grid fall in each region."""
    counts: Counter[StencilRegion] = Counter(
        classify_node(i, j, n_rows, n_cols) for i in range(n_rows) for j in range(n_cols)
    )
    return {region: counts.get(region, 0) for region in StencilRegion}
