"""Core data structures and interpolation engine for bathygrid."""

from __future__ import annotations

from bathygrid.core.axis import Axis
from bathygrid.core.bicubic import (
    INVERSE_BICUBIC_MATRIX,
    bicubic_coefficients,
    evaluate_bicubic,
    hermite_field_vector,
    monomials,
)
from bathygrid.core.derivatives import (
    DerivativeField,
    StencilRegion,
    classify_node,
    compute_derivative_field,
    normalization_increments,
)
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

__all__ = [
    # Grid data source
    "Axis",
    "DataGrid2D",
    "InterpType",
    "GridSettings",
    # Derivative fields
    "DerivativeField",
    "StencilRegion",
    "classify_node",
    "compute_derivative_field",
    "normalization_increments",
    # Bicubic patches
    "INVERSE_BICUBIC_MATRIX",
    "bicubic_coefficients",
    "evaluate_bicubic",
    "hermite_field_vector",
    "monomials",
    # Engine
    "FastGrid2D",
    "QueryContext",
    # Exceptions
    "BathyGridError",
    "AxisError",
    "GridError",
    "GridShapeError",
    "GridIndexError",
    "UnsupportedInterpolationError",
]
