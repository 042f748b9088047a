"""
Two-dimensional structured data grids.

This module provides the grid data source consumed by the fast
interpolation engine:

- :class:`InterpType`: Interpolation algorithm selector (nearest, linear, pchip)
- :class:`DataGrid2D`: Scalar samples on the product of two :class:`Axis` objects

Values are stored row-major with shape ``(axis0.size, axis1.size)``: the
row index walks axis 0 and the column index walks axis 1.

Example
-------
>>> import numpy as np
>>> from bathygrid.core.axis import Axis
>>> from bathygrid.core.grid import DataGrid2D, InterpType
>>> x = Axis.linear(0.0, 1.0, 4)
>>> y = Axis.linear(0.0, 2.0, 3)
>>> grid = DataGrid2D(x, y, np.arange(12.0).reshape(4, 3))
>>> grid.value(2, 1)
7.0
>>> grid.set_interp_type(0, "linear")
>>> grid.interp_type(0)
<InterpType.LINEAR: 0>
"""

from __future__ import annotations

from enum import IntEnum
from typing import TYPE_CHECKING, Callable

import numpy as np
from numpy.typing import ArrayLike, NDArray

from bathygrid.core.axis import Axis, as_axis
from bathygrid.core.exceptions import GridIndexError, GridShapeError, UnsupportedInterpolationError

if TYPE_CHECKING:
    from bathygrid.core.settings import GridSettings


class InterpType(IntEnum):
    """Interpolation algorithm selector."""

    NEAREST = -1
    LINEAR = 0
    PCHIP = 1

    @classmethod
    def parse(cls, value: InterpType | int | str) -> InterpType:
        """
        Convert an enum member, integer code or name to :class:`InterpType`.

        ``"bicubic"`` is accepted as an alias of ``"pchip"``.

        Raises
        ------
        UnsupportedInterpolationError
            If ``value`` does not name a supported algorithm.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            name = value.strip().upper()
            if name == "BICUBIC":
                name = "PCHIP"
            try:
                return cls[name]
            except KeyError:
                pass
        elif isinstance(value, (int, np.integer)) and not isinstance(value, bool):
            try:
                return cls(int(value))
            except ValueError:
                pass
        raise UnsupportedInterpolationError(
            f"Interpolation type must be NEAREST, LINEAR, or PCHIP, got {value!r}",
            interp_type=value,
        )


class DataGrid2D:
    """
    Scalar samples on a rectangular grid.

    Parameters
    ----------
    axis0 : Axis or array_like
        Coordinates along the row direction.
    axis1 : Axis or array_like
        Coordinates along the column direction.
    values : array_like, optional
        Samples with shape ``(len(axis0), len(axis1))``. Default is zeros.
    copy_data : bool, optional
        If True (default) the grid owns a float64 copy of ``values``.
        If False the grid references ``values`` directly when it is
        already a float64 array, so later changes by the caller are seen
        by the grid.

    Raises
    ------
    GridShapeError
        If ``values`` does not match the axis lengths.

    Notes
    -----
    Both axes default to :attr:`InterpType.PCHIP` with edge limiting on.
    """

    def __init__(
        self,
        axis0: Axis | ArrayLike,
        axis1: Axis | ArrayLike,
        values: ArrayLike | None = None,
        copy_data: bool = True,
    ) -> None:
        self._axes = (as_axis(axis0), as_axis(axis1))
        shape = (self._axes[0].size, self._axes[1].size)

        if values is None:
            data = np.zeros(shape, dtype=np.float64)
        elif copy_data:
            data = np.array(values, dtype=np.float64)
        else:
            data = np.asarray(values, dtype=np.float64)

        if data.shape != shape:
            raise GridShapeError(
                f"Grid values have shape {data.shape}, axes require {shape}",
                shape=data.shape,
            )

        self._data: NDArray[np.float64] = data
        self._owns_data = values is None or copy_data or data is not values
        self._interp_types: list[InterpType] = [InterpType.PCHIP, InterpType.PCHIP]
        self._edge_limits: list[bool] = [True, True]

    @classmethod
    def from_function(
        cls,
        axis0: Axis | ArrayLike,
        axis1: Axis | ArrayLike,
        func: Callable[[NDArray[np.float64], NDArray[np.float64]], ArrayLike],
    ) -> DataGrid2D:
        """
        Sample ``func(x, y)`` at every grid node.

        ``func`` receives two broadcast coordinate arrays of the grid shape
        and must return an array of that shape.
        """
        ax0, ax1 = as_axis(axis0), as_axis(axis1)
        x, y = np.meshgrid(ax0.values, ax1.values, indexing="ij")
        values = np.broadcast_to(np.asarray(func(x, y), dtype=np.float64), x.shape)
        return cls(ax0, ax1, values)

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    @property
    def shape(self) -> tuple[int, int]:
        """Return ``(rows, cols)``."""
        return (self._axes[0].size, self._axes[1].size)

    @property
    def axes(self) -> tuple[Axis, Axis]:
        """Return both axes."""
        return self._axes

    def axis(self, dim: int) -> Axis:
        """Return the axis for dimension ``dim`` (0 or 1)."""
        self._check_dim(dim)
        return self._axes[dim]

    # ------------------------------------------------------------------
    # Values
    # ------------------------------------------------------------------

    @property
    def data(self) -> NDArray[np.float64]:
        """Return the underlying value array."""
        return self._data

    @property
    def owns_data(self) -> bool:
        """Return True if the grid holds its own copy of the values."""
        return self._owns_data

    def value(self, row: int, col: int) -> float:
        """
        Return the sample at ``(row, col)``.

        Raises
        ------
        GridIndexError
            If the index lies outside the grid. Negative indices are not
            wrapped.
        """
        self._check_index(row, col)
        return float(self._data[row, col])

    def set_value(self, row: int, col: int, value: float) -> None:
        """Set the sample at ``(row, col)``."""
        self._check_index(row, col)
        self._data[row, col] = value

    # ------------------------------------------------------------------
    # Per-axis configuration
    # ------------------------------------------------------------------

    def interp_type(self, dim: int) -> InterpType:
        """Return the interpolation type for dimension ``dim``."""
        self._check_dim(dim)
        return self._interp_types[dim]

    def set_interp_type(self, dim: int, interp_type: InterpType | int | str) -> None:
        """Set the interpolation type for dimension ``dim``."""
        self._check_dim(dim)
        self._interp_types[dim] = InterpType.parse(interp_type)

    def edge_limit(self, dim: int) -> bool:
        """Return True if queries along ``dim`` are clamped to the axis range."""
        self._check_dim(dim)
        return self._edge_limits[dim]

    def set_edge_limit(self, dim: int, flag: bool) -> None:
        """Enable or disable edge limiting for dimension ``dim``."""
        self._check_dim(dim)
        self._edge_limits[dim] = bool(flag)

    def apply_settings(self, settings: GridSettings) -> None:
        """Apply interpolation type and edge limit from ``settings`` to both axes."""
        for dim in range(2):
            self.set_interp_type(dim, settings.interp_type)
            self.set_edge_limit(dim, settings.edge_limit)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _check_dim(dim: int) -> None:
        if dim not in (0, 1):
            raise GridIndexError(f"Dimension must be 0 or 1, got {dim}")

    def _check_index(self, row: int, col: int) -> None:
        rows, cols = self.shape
        if not (0 <= row < rows and 0 <= col < cols):
            raise GridIndexError(f"Index ({row}, {col}) outside grid of shape {self.shape}")

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(shape={self.shape}, "
            f"interp={self._interp_types[0].name}, edge_limit={self._edge_limits})"
        )
