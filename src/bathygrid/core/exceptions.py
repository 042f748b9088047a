"""Custom exceptions for bathygrid package."""

from __future__ import annotations


class BathyGridError(Exception):
    """Base exception for all bathygrid errors."""

    pass


class AxisError(BathyGridError):
    """Error raised when an axis is malformed."""

    pass


class GridError(BathyGridError):
    """Error related to grid construction or access."""

    pass


class GridShapeError(GridError):
    """Error raised when grid values and axes do not agree in shape."""

    def __init__(self, message: str, shape: tuple[int, ...] | None = None) -> None:
        super().__init__(message)
        self.shape = shape


class GridIndexError(GridError, IndexError):
    """Error raised when a node index falls outside the grid."""

    pass


class UnsupportedInterpolationError(BathyGridError, ValueError):
    """Error raised when the interpolation type is not nearest, linear or pchip."""

    def __init__(self, message: str, interp_type: object = None) -> None:
        super().__init__(message)
        self.interp_type = interp_type
