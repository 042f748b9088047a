"""
Sample grid generators for bathygrid documentation and testing.

This module provides functions to create synthetic grids with known
analytic fields, so interpolation results can be checked against the
exact surface without loading external datasets.

Example
-------
>>> from bathygrid.sample_grids import create_cubic_grid
>>> grid = create_cubic_grid()
>>> grid.shape
(9, 9)
>>> grid.value(2, 5)
27.0
"""

from __future__ import annotations

import numpy as np

from bathygrid.core.axis import Axis
from bathygrid.core.grid import DataGrid2D, InterpType


def create_linear_grid(
    a: float = 1.0,
    b: float = 2.0,
    c: float = -0.5,
    nx: int = 6,
    ny: int = 5,
    dx: float = 1.0,
    dy: float = 1.0,
    interp_type: InterpType | int | str = InterpType.LINEAR,
    edge_limit: bool = True,
) -> DataGrid2D:
    """
    Create a grid sampling the plane ``f(x, y) = a + b*x + c*y``.

    Parameters
    ----------
    a, b, c : float, optional
        Plane coefficients. Defaults are 1.0, 2.0 and -0.5.
    nx, ny : int, optional
        Number of nodes along axis 0 and axis 1. Defaults are 6 and 5.
    dx, dy : float, optional
        Node spacing along each axis, starting at 0. Default is 1.0.
    interp_type : InterpType, optional
        Interpolation type set on both axes. Default is LINEAR.
    edge_limit : bool, optional
        Edge limit set on both axes. Default is True.

    Returns
    -------
    DataGrid2D
        Grid of shape ``(nx, ny)``.
    """
    grid = DataGrid2D.from_function(
        Axis.linear(0.0, dx, nx),
        Axis.linear(0.0, dy, ny),
        lambda x, y: a + b * x + c * y,
    )
    _configure(grid, interp_type, edge_limit)
    return grid


def create_cubic_grid(
    n0: int = 9,
    n1: int = 9,
    interp_type: InterpType | int | str = InterpType.PCHIP,
    edge_limit: bool = True,
) -> DataGrid2D:
    """
    Create a grid sampling ``f(x, y) = x**3`` on the axes ``1, 2, ..., n``.

    The field does not depend on ``y``, so the exact derivatives are
    ``3 * x**2`` and 0.
    """
    grid = DataGrid2D.from_function(
        Axis.linear(1.0, 1.0, n0),
        Axis.linear(1.0, 1.0, n1),
        lambda x, y: x**3,
    )
    _configure(grid, interp_type, edge_limit)
    return grid


def create_sample_bathymetry(
    n_lat: int = 21,
    n_lon: int = 31,
    south: float = 18.0,
    north: float = 22.0,
    west: float = -160.0,
    east: float = -154.0,
    shelf_depth: float = 50.0,
    basin_depth: float = 4500.0,
    descending_latitude: bool = True,
    noise_level: float = 0.0,
    seed: int | None = None,
) -> DataGrid2D:
    """
    Create a synthetic bathymetry grid.

    The seafloor rises from an abyssal basin in the west to a continental
    shelf in the east, with a seamount near the centre of the domain.
    Values are elevations in meters, negative below sea level.

    Parameters
    ----------
    n_lat, n_lon : int, optional
        Number of latitude (axis 0) and longitude (axis 1) nodes.
    south, north, west, east : float, optional
        Domain limits in degrees.
    shelf_depth : float, optional
        Depth of the shelf in meters. Default is 50.0.
    basin_depth : float, optional
        Depth of the basin floor in meters. Default is 4500.0.
    descending_latitude : bool, optional
        If True (default) latitude runs north to south, as in many
        gridded bathymetry products.
    noise_level : float, optional
        Standard deviation of added roughness as a fraction of
        ``basin_depth``. Default is 0.0.
    seed : int, optional
        Seed for the roughness generator.

    Returns
    -------
    DataGrid2D
        Grid configured for PCHIP interpolation with edge limiting.
    """
    if descending_latitude:
        lat = Axis(np.linspace(north, south, n_lat))
    else:
        lat = Axis(np.linspace(south, north, n_lat))
    lon = Axis(np.linspace(west, east, n_lon))

    lon_break = west + 0.7 * (east - west)
    width = 0.08 * (east - west)
    lat_c = 0.5 * (south + north)
    lon_c = west + 0.35 * (east - west)
    radius = 0.1 * (north - south)

    def elevation(y: np.ndarray, x: np.ndarray) -> np.ndarray:
        rise = 0.5 * (1.0 + np.tanh((x - lon_break) / width))
        depth = basin_depth - (basin_depth - shelf_depth) * rise
        seamount = 0.6 * basin_depth * np.exp(-((y - lat_c) ** 2 + (x - lon_c) ** 2) / radius**2)
        return -(depth - seamount)

    grid = DataGrid2D.from_function(lat, lon, elevation)
    if noise_level > 0.0:
        rng = np.random.default_rng(seed)
        grid.data[...] += rng.normal(0.0, noise_level * basin_depth, grid.shape)
        # Noise must not push the shelf above sea level
        np.minimum(grid.data, -1.0, out=grid.data)

    _configure(grid, InterpType.PCHIP, True)
    return grid


def _configure(grid: DataGrid2D, interp_type: InterpType | int | str, edge_limit: bool) -> None:
    for dim in range(2):
        grid.set_interp_type(dim, interp_type)
        grid.set_edge_limit(dim, edge_limit)


__all__ = [
    "create_linear_grid",
    "create_cubic_grid",
    "create_sample_bathymetry",
]
