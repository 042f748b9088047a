"""Pytest configuration and fixtures for bathygrid tests."""

from __future__ import annotations

import numpy as np
import pytest

from bathygrid.core.axis import Axis
from bathygrid.core.grid import DataGrid2D, InterpType
from bathygrid.sample_grids import create_cubic_grid, create_linear_grid


@pytest.fixture
def uniform_axis() -> Axis:
    """Axis 1, 2, ..., 9."""
    return Axis.linear(1.0, 1.0, 9)


@pytest.fixture
def stretched_axis() -> Axis:
    """
    Four-node axis with unequal spacing.

    Nodes 0, 1, 3, 4 give increments 1, 2, 1 (the last repeated), so the
    normalization increments are 2, 1, 3, 2.
    """
    return Axis([0.0, 1.0, 3.0, 4.0])


@pytest.fixture
def small_values() -> np.ndarray:
    """
    Arbitrary 4x4 sample values for hand-checked stencils.

    Layout (row = axis 0, col = axis 1):
         1   2   4   7
         3   5   8  12
         6   9  13  18
        10  14  19  25
    """
    return np.array(
        [
            [1.0, 2.0, 4.0, 7.0],
            [3.0, 5.0, 8.0, 12.0],
            [6.0, 9.0, 13.0, 18.0],
            [10.0, 14.0, 19.0, 25.0],
        ]
    )


@pytest.fixture
def small_grid(stretched_axis: Axis, small_values: np.ndarray) -> DataGrid2D:
    """4x4 grid on a stretched row axis and a uniform column axis."""
    return DataGrid2D(stretched_axis, Axis.linear(0.0, 1.0, 4), small_values)


@pytest.fixture
def plane_grid() -> DataGrid2D:
    """Grid sampling f = 1 + 2x - 0.5y on a 6x5 node lattice."""
    return create_linear_grid(a=1.0, b=2.0, c=-0.5, nx=6, ny=5)


@pytest.fixture
def cubic_grid() -> DataGrid2D:
    """Grid sampling f = x**3 on 1..9 x 1..9 with PCHIP and edge limits."""
    return create_cubic_grid()


@pytest.fixture
def plane():
    """The analytic plane sampled by ``plane_grid``."""

    def f(x: float, y: float) -> float:
        return 1.0 + 2.0 * x - 0.5 * y

    return f


@pytest.fixture(params=[InterpType.LINEAR, InterpType.PCHIP], ids=["linear", "pchip"])
def smooth_type(request) -> InterpType:
    """Interpolation types that blend values."""
    return request.param
