"""Shared data types for piecewise-linear approximation on a triangulated grid."""

from __future__ import annotations

from dataclasses import dataclass


def grid_index(i: int, j: int, n_y: int) -> int:
    """Return the position of grid node (i, j) in the flat list of unknowns."""
    return i * (n_y + 1) + j


@dataclass(frozen=True)
class ApproximationContext:
    """Problem parameters: domain [a, b] x [c, d], grid size, function and solver settings."""

    a: float
    b: float
    c: float
    d: float
    n_x: int
    n_y: int
    k: int
    eps: float
    m_i: int
    p: int

    @property
    def h_x(self) -> float:
        """Grid step along the X axis."""
        return (self.b - self.a) / self.n_x

    @property
    def h_y(self) -> float:
        """Grid step along the Y axis."""
        return (self.d - self.c) / self.n_y

    @property
    def node_count(self) -> int:
        """Number of grid nodes, which is also the number of unknowns."""
        return (self.n_x + 1) * (self.n_y + 1)

    @property
    def triangle_count(self) -> int:
        """Number of triangles: two per grid cell."""
        return 2 * self.n_x * self.n_y

    def node_coords(self, index: int) -> tuple[float, float]:
        """Return the (x, y) coordinates of the node with the given flat index."""
        i, j = divmod(index, self.n_y + 1)
        return self.a + i * self.h_x, self.c + j * self.h_y


@dataclass(frozen=True)
class Point:
    """A point in the plane."""

    x: float
    y: float


@dataclass(frozen=True)
class Triangle:
    """A grid triangle given by the flat indices of its vertices and its centroid."""

    vertices: tuple[int, int, int]
    centroid: Point