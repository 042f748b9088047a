"""Unit tests for bathygrid.core.derivatives."""

from __future__ import annotations

import logging

import numpy as np
import pytest
from numpy.testing import assert_allclose

from bathygrid.core.axis import Axis
from bathygrid.core.derivatives import (
    AxisPosition,
    StencilRegion,
    axis_position,
    classify_node,
    compute_derivative_field,
    normalization_increments,
    region_counts,
)
from bathygrid.core.exceptions import GridShapeError
from bathygrid.core.grid import DataGrid2D


class TestClassifyNode:
    """Tests for node region classification."""

    @pytest.mark.parametrize(
        "row, col, expected",
        [
            (0, 0, StencilRegion.TOP_LEFT),
            (0, 4, StencilRegion.TOP_RIGHT),
            (3, 0, StencilRegion.BOTTOM_LEFT),
            (3, 4, StencilRegion.BOTTOM_RIGHT),
            (0, 2, StencilRegion.TOP),
            (3, 1, StencilRegion.BOTTOM),
            (1, 0, StencilRegion.LEFT),
            (2, 4, StencilRegion.RIGHT),
            (1, 3, StencilRegion.INTERIOR),
        ],
    )
    def test_regions(self, row: int, col: int, expected: StencilRegion) -> None:
        assert classify_node(row, col, 4, 5) is expected

    def test_single_row_rejected(self) -> None:
        with pytest.raises(GridShapeError) as exc_info:
            classify_node(0, 1, 1, 3)
        assert exc_info.value.shape == (1, 3)

    def test_corner_and_edge_flags(self) -> None:
        corners = [r for r in StencilRegion if r.is_corner]
        edges = [r for r in StencilRegion if r.is_edge]
        assert len(corners) == 4
        assert len(edges) == 4
        assert not StencilRegion.INTERIOR.is_corner
        assert not StencilRegion.INTERIOR.is_edge

    def test_stencils(self) -> None:
        assert StencilRegion.INTERIOR.row_stencil == (-1, 1)
        assert StencilRegion.TOP_RIGHT.row_stencil == (0, 1)
        assert StencilRegion.TOP_RIGHT.col_stencil == (-1, 0)
        assert StencilRegion.LEFT.col_stencil == (0, 1)

    def test_axis_position(self) -> None:
        assert axis_position(0, 5) is AxisPosition.FIRST
        assert axis_position(2, 5) is AxisPosition.INTERIOR
        assert axis_position(4, 5) is AxisPosition.LAST

    def test_region_counts(self) -> None:
        counts = region_counts(4, 5)
        assert counts[StencilRegion.INTERIOR] == 6
        assert counts[StencilRegion.TOP] == 3
        assert counts[StencilRegion.LEFT] == 2
        assert counts[StencilRegion.BOTTOM_RIGHT] == 1
        assert sum(counts.values()) == 20


class TestNormalizationIncrements:
    """Tests for per-node normalization increments."""

    def test_uniform(self, uniform_axis: Axis) -> None:
        assert_allclose(normalization_increments(uniform_axis), 2.0)

    def test_stretched(self, stretched_axis: Axis) -> None:
        assert_allclose(normalization_increments(stretched_axis), [2.0, 1.0, 3.0, 2.0])

    def test_descending_same_spacing(self) -> None:
        down = normalization_increments(Axis([4.0, 3.0, 1.0, 0.0]))
        assert_allclose(down, [2.0, 1.0, 3.0, 2.0])

    def test_two_nodes(self) -> None:
        assert_allclose(normalization_increments(Axis([0.0, 5.0])), [2.0, 2.0])


class TestComputeDerivativeField:
    """Tests for compute_derivative_field."""

    @pytest.fixture
    def field(self, small_grid: DataGrid2D):
        return compute_derivative_field(small_grid.data, *small_grid.axes)

    @pytest.mark.parametrize(
        "node, expected",
        [
            ((1, 1), (7.0, 2.5, 2.0)),
            ((3, 3), (3.5, 3.0, 0.25)),
            ((2, 3), (13.0 / 3.0, 2.5, 1.0 / 3.0)),
            ((0, 0), (1.0, 0.5, 0.25)),
            ((0, 3), (2.5, 1.5, 0.25)),
            ((3, 0), (2.0, 2.0, 0.25)),
            ((0, 1), (1.5, 1.5, 0.5)),
            ((3, 2), (3.0, 5.5, 0.5)),
            ((1, 0), (5.0, 1.0, 1.0)),
        ],
        ids=[
            "interior",
            "bottom-right",
            "right",
            "top-left",
            "top-right",
            "bottom-left",
            "top",
            "bottom",
            "left",
        ],
    )
    def test_hand_computed(self, field, node, expected) -> None:
        fx, fy, fxy = expected
        assert field.fx[node] == pytest.approx(fx)
        assert field.fy[node] == pytest.approx(fy)
        assert field.fxy[node] == pytest.approx(fxy)

    def test_all_nodes_follow_region_stencil(self, small_grid: DataGrid2D, field) -> None:
        f = small_grid.data
        inc0 = normalization_increments(small_grid.axis(0))
        inc1 = normalization_increments(small_grid.axis(1))
        rows, cols = small_grid.shape
        for i in range(rows):
            for j in range(cols):
                region = classify_node(i, j, rows, cols)
                im, ip = (i + d for d in region.row_stencil)
                jm, jp = (j + d for d in region.col_stencil)
                assert field.fx[i, j] == pytest.approx((f[ip, j] - f[im, j]) / inc0[i])
                assert field.fy[i, j] == pytest.approx((f[i, jp] - f[i, jm]) / inc1[j])
                cross = f[ip, jp] - f[ip, jm] - f[im, jp] + f[im, jm]
                assert field.fxy[i, j] == pytest.approx(cross / (inc0[i] * inc1[j]))

    def test_plane_interior_is_per_cell(self, plane_grid: DataGrid2D) -> None:
        field = compute_derivative_field(plane_grid.data, *plane_grid.axes)
        # centered differences over two unit cells divided by 2
        assert_allclose(field.fx[1:-1, :], 2.0)
        assert_allclose(field.fy[:, 1:-1], -0.5)
        assert_allclose(field.fxy, 0.0, atol=1e-12)
        # one-sided differences at the edges are halved
        assert_allclose(field.fx[0, :], 1.0)
        assert_allclose(field.fy[:, -1], -0.25)

    def test_read_only(self, field) -> None:
        assert field.shape == (4, 4)
        for arr in (field.fx, field.fy, field.fxy):
            with pytest.raises(ValueError):
                arr[0, 0] = 1.0

    def test_shape_mismatch(self, stretched_axis: Axis) -> None:
        with pytest.raises(GridShapeError):
            compute_derivative_field(np.zeros((3, 4)), stretched_axis, stretched_axis)

    def test_debug_logging(self, small_grid: DataGrid2D, caplog) -> None:
        with caplog.at_level(logging.DEBUG, logger="bathygrid.core.derivatives"):
            compute_derivative_field(small_grid.data, *small_grid.axes)
        assert "INTERIOR=4" in caplog.text
