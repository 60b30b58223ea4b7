"""Test functions and evaluation of the piecewise-linear approximation."""

from __future__ import annotations

import math
from collections.abc import Sequence

from .common import ApproximationContext, Point, Triangle, grid_index

_TOLERANCE = 1e-10

_FUNCTIONS = {
    0: lambda x, y: 1.0,
    1: lambda x, y: x,
    2: lambda x, y: y,
    3: lambda x, y: x + y,
    4: lambda x, y: math.sqrt(x * x + y * y),
    5: lambda x, y: x * x + y * y,
    6: lambda x, y: math.exp(x * x - y * y),
    7: lambda x, y: 1.0 / (25.0 * (x * x + y * y) + 1.0),
}


def evaluate_function(k: int, x: float, y: float) -> float:
    """Evaluate test function number k (0..7) at (x, y)."""
    try:
        func = _FUNCTIONS[k]
    except KeyError:
        raise ValueError(f"Invalid function index k={k}") from None
    return func(x, y)


def _triangle_vertices(t: int, n_y: int) -> tuple[int, int, int]:
    """Vertex indices of triangle t in grid order."""
    i, j = divmod(t // 2, n_y)
    bl = grid_index(i, j, n_y)
    br = grid_index(i + 1, j, n_y)
    tl = grid_index(i, j + 1, n_y)
    if t % 2 == 0:
        return bl, br, tl
    tr = grid_index(i + 1, j + 1, n_y)
    return br, tr, tl


def generate_triangles(context: ApproximationContext) -> list[Triangle]:
    """Split every grid cell into two triangles and return them in grid order."""
    triangles = []
    for t in range(context.triangle_count):
        vertices = _triangle_vertices(t, context.n_y)
        coords = [context.node_coords(v) for v in vertices]
        centroid = Point(
            (coords[0][0] + coords[1][0] + coords[2][0]) / 3.0,
            (coords[0][1] + coords[1][1] + coords[2][1]) / 3.0,
        )
        triangles.append(Triangle(vertices=vertices, centroid=centroid))
    return triangles


def barycentric_coords(
    x: float, y: float,
    x1: float, y1: float,
    x2: float, y2: float,
    x3: float, y3: float,
) -> tuple[float, float, float]:
    """Barycentric coordinates of (x, y) with respect to the given triangle."""
    det = (y2 - y3) * (x1 - x3) + (x3 - x2) * (y1 - y3)
    lambda1 = ((y2 - y3) * (x - x3) + (x3 - x2) * (y - y3)) / det
    lambda2 = ((y3 - y1) * (x - x3) + (x1 - x3) * (y - y3)) / det
    return lambda1, lambda2, 1.0 - lambda1 - lambda2


def find_triangle(x: float, y: float, context: ApproximationContext) -> int:
    """Index of the triangle containing (x, y); points outside are clamped to the border cells."""
    i = min(max(int((x - context.a) / context.h_x), 0), context.n_x - 1)
    j = min(max(int((y - context.c) / context.h_y), 0), context.n_y - 1)
    first = 2 * (i * context.n_y + j)

    x1 = context.a + i * context.h_x
    y1 = context.c + j * context.h_y
    x2 = context.a + (i + 1) * context.h_x
    y2 = context.c + j * context.h_y
    x3 = context.a + i * context.h_x
    y3 = context.c + (j + 1) * context.h_y

    lambdas = barycentric_coords(x, y, x1, y1, x2, y2, x3, y3)
    if all(value >= -_TOLERANCE for value in lambdas):
        return first
    return first + 1


def evaluate_approximation(
    solution: Sequence[float], x: float, y: float, context: ApproximationContext
) -> float:
    """Value at (x, y) of the piecewise-linear function with nodal values `solution`."""
    vertices = _triangle_vertices(find_triangle(x, y, context), context.n_y)
    (x1, y1), (x2, y2), (x3, y3) = (context.node_coords(v) for v in vertices)
    lambdas = barycentric_coords(x, y, x1, y1, x2, y2, x3, y3)
    return sum(weight * solution[v] for weight, v in zip(lambdas, vertices))