"""
Coordinate axes for structured grids.

An :class:`Axis` is a strictly monotonic sequence of coordinates along one
grid dimension. It may run in either direction: bathymetry products often
store latitude from north to south, which gives a descending axis.

Example
-------
>>> from bathygrid.core.axis import Axis
>>> axis = Axis.linear(1.0, 1.0, 9)
>>> axis.size
9
>>> axis.find_index(2.5)
1
>>> axis.increment(0)
1.0
"""

from __future__ import annotations

from typing import Iterator, Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray

from bathygrid.core.exceptions import AxisError


class Axis:
    """
    Strictly monotonic coordinate axis.

    Parameters
    ----------
    values : array_like
        Node coordinates. Must be finite, one-dimensional, contain at least
        two nodes and be strictly increasing or strictly decreasing.

    Raises
    ------
    AxisError
        If the coordinates are not a valid axis.

    Examples
    --------
    >>> axis = Axis([10.0, 8.0, 6.0])
    >>> axis.is_ascending
    False
    >>> axis.first, axis.last
    (10.0, 6.0)
    """

    def __init__(self, values: ArrayLike) -> None:
        data = np.array(values, dtype=np.float64)
        if data.ndim != 1:
            raise AxisError(f"Axis must be one-dimensional, got shape {data.shape}")
        if data.size < 2:
            raise AxisError(f"Axis needs at least 2 nodes, got {data.size}")
        if not np.all(np.isfinite(data)):
            raise AxisError("Axis coordinates must be finite")

        steps = np.diff(data)
        if not (np.all(steps > 0.0) or np.all(steps < 0.0)):
            raise AxisError("Axis coordinates must be strictly monotonic")

        data.setflags(write=False)
        self._values = data
        self._steps = steps
        self._ascending = bool(steps[0] > 0.0)
        # searchsorted needs ascending keys
        self._keys = data if self._ascending else -data

    @classmethod
    def linear(cls, first: float, increment: float, size: int) -> Axis:
        """
        Create an evenly spaced axis.

        Parameters
        ----------
        first : float
            Coordinate of the first node.
        increment : float
            Distance between nodes. Negative values give a descending axis.
        size : int
            Number of nodes.

        Returns
        -------
        Axis
            The evenly spaced axis.
        """
        if increment == 0.0:
            raise AxisError("Axis increment must be non-zero")
        return cls(first + increment * np.arange(size, dtype=np.float64))

    @property
    def values(self) -> NDArray[np.float64]:
        """Return the (read-only) node coordinates."""
        return self._values

    @property
    def size(self) -> int:
        """Return the number of nodes."""
        return int(self._values.size)

    @property
    def first(self) -> float:
        """Return the first node coordinate."""
        return float(self._values[0])

    @property
    def last(self) -> float:
        """Return the last node coordinate."""
        return float(self._values[-1])

    @property
    def is_ascending(self) -> bool:
        """Return True if coordinates increase with index."""
        return self._ascending

    def increment(self, index: int) -> float:
        """
        Return the signed spacing between node ``index`` and the next node.

        The last node has no successor, so the final interval is repeated.
        """
        if index < 0 or index >= self.size:
            raise AxisError(f"Increment index {index} out of range [0, {self.size - 1}]")
        if index == self.size - 1:
            index -= 1
        return float(self._steps[index])

    def find_index(self, coordinate: float) -> int:
        """
        Find the bracketing index for a coordinate.

        Returns the index of the node at or before ``coordinate`` in axis
        order, limited to ``[0, size - 2]`` so that the cell ``(k, k + 1)``
        always exists. Coordinates outside the axis map to the first or
        last cell, which lets callers extrapolate from the end cells.
        """
        key = coordinate if self._ascending else -coordinate
        index = int(np.searchsorted(self._keys, key, side="right")) - 1
        return min(max(index, 0), self.size - 2)

    def __len__(self) -> int:
        return self.size

    def __getitem__(self, index: int) -> float:
        return float(self._values[index])

    def __iter__(self) -> Iterator[float]:
        return iter(self._values.tolist())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Axis):
            return NotImplemented
        return bool(np.array_equal(self._values, other._values))

    def __hash__(self) -> int:
        return hash(self._values.tobytes())

    def __repr__(self) -> str:
        return f"Axis(size={self.size}, first={self.first}, last={self.last})"


def as_axis(values: Axis | Sequence[float] | ArrayLike) -> Axis:
    """Return ``values`` unchanged if already an :class:`Axis`, else wrap it."""
    if isinstance(values, Axis):
        return values
    return Axis(values)
