"""
bathygrid - fast interpolation of 2-D structured grids.

This package provides tools for:
- Describing regular grids of scalar samples (bathymetry, sound speed, ...)
- Nearest, bilinear and bicubic Hermite (PCHIP) point queries
- Analytic partial derivatives of the interpolated surface
"""

from __future__ import annotations

__version__ = "0.1.0"

from bathygrid.core.axis import Axis
from bathygrid.core.exceptions import (
    AxisError,
    BathyGridError,
    GridError,
    GridIndexError,
    GridShapeError,
    UnsupportedInterpolationError,
)
from bathygrid.core.fast_grid import FastGrid2D, QueryContext
from bathygrid.core.grid import DataGrid2D, InterpType
from bathygrid.core.settings import GridSettings
from bathygrid.sample_grids import (
    create_cubic_grid,
    create_linear_grid,
    create_sample_bathymetry,
)

__all__ = [
    "__version__",
    # Grid classes
    "Axis",
    "DataGrid2D",
    "InterpType",
    "GridSettings",
    # Interpolation
    "FastGrid2D",
    "QueryContext",
    # Sample data
    "create_linear_grid",
    "create_cubic_grid",
    "create_sample_bathymetry",
    # Exceptions
    "BathyGridError",
    "AxisError",
    "GridError",
    "GridShapeError",
    "GridIndexError",
    "UnsupportedInterpolationError",
]
