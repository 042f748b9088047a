"""
Fast non-recursive interpolation on 2-D grids.

:class:`FastGrid2D` wraps a :class:`DataGrid2D` and answers point queries
in closed form. At construction it precomputes the finite-difference
derivative fields of the whole grid; each query then only locates the
enclosing cell and evaluates one of three algorithms:

- nearest: value of the closest node, zero derivative
- linear: bilinear blend of the four cell corners
- pchip: bicubic Hermite patch built from the corner values and the
  precomputed derivatives

Both axes are assumed to share one interpolation type; the type of axis 0
selects the algorithm.

Example
-------
>>> import numpy as np
>>> from bathygrid.core.axis import Axis
>>> from bathygrid.core.grid import DataGrid2D
>>> from bathygrid.core.fast_grid import FastGrid2D
>>> x = Axis.linear(1.0, 1.0, 9)
>>> y = Axis.linear(1.0, 1.0, 9)
>>> grid = DataGrid2D.from_function(x, y, lambda x, y: x**3)
>>> fast = FastGrid2D(grid)
>>> value, slope = fast.interpolate((2.8753, 3.3265), derivative=True)
>>> round(value, 1)
23.7
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray

from bathygrid.core.axis import Axis
from bathygrid.core.bicubic import (
    bicubic_coefficients,
    evaluate_bicubic,
    hermite_field_vector,
)
from bathygrid.core.derivatives import DerivativeField, compute_derivative_field
from bathygrid.core.exceptions import GridError, GridShapeError, UnsupportedInterpolationError
from bathygrid.core.grid import DataGrid2D, InterpType
from bathygrid.core.settings import GridSettings

logger = logging.getLogger(__name__)

# Offsets of the 4x4 neighbourhood around the lower cell corner.
_WINDOW_OFFSETS = np.arange(-1, 3)


@dataclass
class QueryContext:
    """
    Scratch buffers reused across queries.

    A context must not be shared by threads running queries at the same
    time. :class:`FastGrid2D` keeps one per thread unless the caller
    passes its own.
    """

    offset: list[int] = field(default_factory=lambda: [0, 0])
    window: NDArray[np.float64] = field(default_factory=lambda: np.zeros((4, 4)))
    hermite: NDArray[np.float64] = field(default_factory=lambda: np.zeros(16))
    powers: NDArray[np.float64] = field(default_factory=lambda: np.zeros(16))


class FastGrid2D(DataGrid2D):
    """
    Non-recursive nearest, bilinear and bicubic interpolation on a 2-D grid.

    Parameters
    ----------
    grid : DataGrid2D
        Grid to wrap. Its axes, interpolation types and edge limits are
        taken over.
    copy_data : bool, optional
        If True (default) take an owned, read-only copy of the values.
        If False reference the grid's array; the derivative fields are
        computed once, so the caller must not modify the values afterwards.

    Raises
    ------
    GridShapeError
        If either axis has fewer than 3 nodes.

    Notes
    -----
    Every axis must be at least 3 nodes long so that each node falls in
    exactly one boundary stencil class.
    """

    MIN_AXIS_SIZE = 3

    def __init__(self, grid: DataGrid2D, copy_data: bool = True) -> None:
        super().__init__(grid.axis(0), grid.axis(1), grid.data, copy_data=copy_data)
        for dim in range(2):
            self._interp_types[dim] = grid.interp_type(dim)
            self._edge_limits[dim] = grid.edge_limit(dim)

        if min(self.shape) < self.MIN_AXIS_SIZE:
            raise GridShapeError(
                f"Fast interpolation needs at least {self.MIN_AXIS_SIZE} nodes per axis, "
                f"got shape {self.shape}",
                shape=self.shape,
            )
        if copy_data:
            self._data.setflags(write=False)
        if self._interp_types[0] != self._interp_types[1]:
            logger.warning(
                "Axis interpolation types differ (%s, %s); using %s for both",
                self._interp_types[0].name,
                self._interp_types[1].name,
                self._interp_types[0].name,
            )

        start = time.perf_counter()
        self._derivatives = compute_derivative_field(self._data, self._axes[0], self._axes[1])
        self._k0max = self._axes[0].size - 1
        self._k1max = self._axes[1].size - 1
        self._local = threading.local()
        logger.debug(
            "Built fast grid %s (%s) in %.3f ms",
            self.shape,
            self._interp_types[0].name,
            (time.perf_counter() - start) * 1000.0,
        )

    @classmethod
    def from_arrays(
        cls,
        axis0: Axis | ArrayLike,
        axis1: Axis | ArrayLike,
        values: ArrayLike,
        settings: GridSettings | None = None,
    ) -> FastGrid2D:
        """
        Build a grid and its fast interpolator in one step.

        Parameters
        ----------
        axis0, axis1 : Axis or array_like
            Row and column coordinates.
        values : array_like
            Samples with shape ``(len(axis0), len(axis1))``.
        settings : GridSettings, optional
            Interpolation type, edge limit and copy policy. Defaults to
            ``GridSettings()``.
        """
        settings = settings or GridSettings()
        grid = DataGrid2D(axis0, axis1, values, copy_data=False)
        grid.apply_settings(settings)
        return cls(grid, copy_data=settings.copy_data)

    @property
    def derivatives(self) -> DerivativeField:
        """Return the precomputed derivative fields."""
        return self._derivatives

    def set_value(self, row: int, col: int, value: float) -> None:
        """Grid values are fixed once the derivative fields exist."""
        raise GridError("FastGrid2D values cannot be modified after construction")

    # ------------------------------------------------------------------
    # Scalar queries
    # ------------------------------------------------------------------

    def context(self) -> QueryContext:
        """Return the scratch context of the calling thread."""
        ctx = getattr(self._local, "context", None)
        if ctx is None:
            ctx = QueryContext()
            self._local.context = ctx
        return ctx

    def interpolate(
        self,
        location: Sequence[float],
        derivative: bool = False,
        context: QueryContext | None = None,
    ) -> float | tuple[float, NDArray[np.float64]]:
        """
        Interpolate the field at a single location.

        Parameters
        ----------
        location : sequence of float
            ``(x0, x1)`` coordinates along axis 0 and axis 1.
        derivative : bool, optional
            If True also return the partial derivatives.
        context : QueryContext, optional
            Scratch buffers to use instead of the per-thread context.

        Returns
        -------
        float or tuple[float, NDArray[np.float64]]
            The value, or ``(value, array([df/dx0, df/dx1]))`` when
            ``derivative`` is True.

        Raises
        ------
        UnsupportedInterpolationError
            If the configured interpolation type is not nearest, linear
            or pchip.
        """
        ctx = context if context is not None else self.context()
        loc = [float(location[0]), float(location[1])]
        for dim in range(2):
            loc[dim], ctx.offset[dim] = self._locate(dim, loc[dim])

        kind = self._interp_types[0]
        if kind == InterpType.NEAREST:
            value = self._nearest(loc, ctx)
            grad = (0.0, 0.0)
        elif kind == InterpType.LINEAR:
            value, grad = self._bilinear(loc, ctx, derivative)
        elif kind == InterpType.PCHIP:
            value, grad = self._pchip(loc, ctx, derivative)
        else:
            raise UnsupportedInterpolationError(
                f"Interpolation type must be NEAREST, LINEAR, or PCHIP, got {kind!r}",
                interp_type=kind,
            )

        if derivative:
            return value, np.array(grad, dtype=np.float64)
        return value

    def _locate(self, dim: int, coordinate: float) -> tuple[float, int]:
        """
        Return the (possibly clamped) coordinate and its cell offset.

        With edge limiting, coordinates before the first node are moved to
        it and use cell 0; coordinates past the last node are moved to it
        and use the last cell. Without edge limiting the axis lookup is
        used as is, and the end cells extrapolate.
        """
        axis = self._axes[dim]
        if not self._edge_limits[dim]:
            return coordinate, axis.find_index(coordinate)

        first, last = axis.first, axis.last
        if axis.increment(0) > 0.0:
            before, after = coordinate <= first, coordinate >= last
        else:
            before, after = coordinate >= first, coordinate <= last
        if before:
            return first, 0
        if after:
            return last, axis.size - 2
        return coordinate, axis.find_index(coordinate)

    def _nearest(self, loc: list[float], ctx: QueryContext) -> float:
        index = [0, 0]
        for dim in range(2):
            axis = self._axes[dim]
            k = ctx.offset[dim]
            u = (loc[dim] - axis[k]) / axis.increment(k)
            index[dim] = k if u < 0.5 else k + 1
        return float(self._data[index[0], index[1]])

    def _bilinear(
        self, loc: list[float], ctx: QueryContext, derivative: bool
    ) -> tuple[float, tuple[float, float]]:
        k0, k1 = ctx.offset
        ax0, ax1 = self._axes
        x, y = loc
        x1, x2 = ax0[k0], ax0[k0 + 1]
        y1, y2 = ax1[k1], ax1[k1 + 1]
        f11 = self._data[k0, k1]
        f21 = self._data[k0 + 1, k1]
        f12 = self._data[k0, k1 + 1]
        f22 = self._data[k0 + 1, k1 + 1]
        area = (x2 - x1) * (y2 - y1)

        value = (
            f11 * (x2 - x) * (y2 - y)
            + f21 * (x - x1) * (y2 - y)
            + f12 * (x2 - x) * (y - y1)
            + f22 * (x - x1) * (y - y1)
        ) / area
        if not derivative:
            return float(value), (0.0, 0.0)

        dx = ((f21 - f11) * (y2 - y) + (f22 - f12) * (y - y1)) / area
        dy = ((f12 - f11) * (x2 - x) + (f22 - f21) * (x - x1)) / area
        return float(value), (float(dx), float(dy))

    def _pchip(
        self, loc: list[float], ctx: QueryContext, derivative: bool
    ) -> tuple[float, tuple[float, float]]:
        k0, k1 = ctx.offset
        ax0, ax1 = self._axes

        # 4x4 neighbourhood clamped into the grid; the patch reads its centre cell
        rows = np.clip(k0 + _WINDOW_OFFSETS, 0, self._k0max)
        cols = np.clip(k1 + _WINDOW_OFFSETS, 0, self._k1max)
        ctx.window[...] = self._data[np.ix_(rows, cols)]

        cell = (slice(k0, k0 + 2), slice(k1, k1 + 2))
        d = self._derivatives
        hermite_field_vector(
            ctx.window[1:3, 1:3], d.fx[cell], d.fy[cell], d.fxy[cell], out=ctx.hermite
        )
        coeffs = bicubic_coefficients(ctx.hermite)

        norm0 = ax0[k0 + 1] - ax0[k0]
        norm1 = ax1[k1 + 1] - ax1[k1]
        t = (loc[0] - ax0[k0]) / norm0
        u = (loc[1] - ax1[k1]) / norm1
        value, dg_dt, dg_du = evaluate_bicubic(coeffs, t, u, derivative, powers=ctx.powers)
        return value, (dg_dt / norm0, dg_du / norm1)

    # ------------------------------------------------------------------
    # Array queries
    # ------------------------------------------------------------------

    def interpolate_array(
        self,
        x: ArrayLike,
        y: ArrayLike,
        derivative: bool = False,
    ) -> NDArray[np.float64] | tuple[NDArray[np.float64], NDArray[np.float64], NDArray[np.float64]]:
        """
        Interpolate at every pair of coordinates in two equal-shaped arrays.

        Parameters
        ----------
        x : array_like
            Axis-0 coordinates.
        y : array_like
            Axis-1 coordinates, same shape as ``x``.
        derivative : bool, optional
            If True also return the partial derivative arrays.

        Returns
        -------
        NDArray or tuple of NDArray
            ``result``, or ``(result, dx, dy)`` when ``derivative`` is True,
            each with the shape of ``x``.

        Raises
        ------
        GridShapeError
            If ``x`` and ``y`` differ in shape.
        """
        xs = np.asarray(x, dtype=np.float64)
        ys = np.asarray(y, dtype=np.float64)
        if xs.shape != ys.shape:
            raise GridShapeError(
                f"Coordinate arrays differ in shape: {xs.shape} vs {ys.shape}", shape=xs.shape
            )

        result = np.empty(xs.shape, dtype=np.float64)
        dx = np.empty(xs.shape, dtype=np.float64) if derivative else None
        dy = np.empty(xs.shape, dtype=np.float64) if derivative else None
        ctx = self.context()

        for idx in np.ndindex(xs.shape):
            location = (xs[idx], ys[idx])
            if derivative:
                value, grad = self.interpolate(location, derivative=True, context=ctx)
                result[idx] = value
                dx[idx] = grad[0]  # type: ignore[index]
                dy[idx] = grad[1]  # type: ignore[index]
            else:
                result[idx] = self.interpolate(location, context=ctx)

        if derivative:
            return result, dx, dy  # type: ignore[return-value]
        return result

    def __call__(
        self, x: ArrayLike, y: ArrayLike, derivative: bool = False
    ) -> NDArray[np.float64] | tuple[NDArray[np.float64], NDArray[np.float64], NDArray[np.float64]]:
        """Shorthand for :meth:`interpolate_array`."""
        return self.interpolate_array(x, y, derivative=derivative)
