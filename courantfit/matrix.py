"""Sparse Gram matrix and right-hand side for the Courant basis on a triangulated grid."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from .common import ApproximationContext, grid_index
from .functions import evaluate_function, generate_triangles

_PIVOT_TOLERANCE = 1e-10

# Offsets of the eight grid neighbours, in the order they are collected.
_NEIGHBOUR_OFFSETS = (
    (-1, 0), (1, 0), (0, -1), (0, 1),
    (-1, -1), (1, -1), (-1, 1), (1, 1),
)


@dataclass
class SparseMatrix:
    """Square matrix in modified sparse row form.

    The diagonal is stored on its own in ``diag``.  The off-diagonal entries of
    row ``i`` are ``columns[row_ptr[i]:row_ptr[i + 1]]`` with the matching
    ``values``; column indices within a row are sorted.
    """

    diag: list[float]
    row_ptr: list[int]
    columns: list[int]
    values: list[float] = field(default_factory=list)

    def __post_init__(self) -> None:
        if len(self.row_ptr) != len(self.diag) + 1:
            raise ValueError("row_ptr must have one more entry than the diagonal")
        if self.row_ptr[-1] != len(self.columns):
            raise ValueError("row_ptr does not match the number of column indices")
        if not self.values:
            self.values = [0.0] * len(self.columns)
        if len(self.values) != len(self.columns):
            raise ValueError("values and columns must have the same length")

    @property
    def n(self) -> int:
        """Matrix dimension."""
        return len(self.diag)

    @property
    def nnz(self) -> int:
        """Number of stored off-diagonal entries."""
        return len(self.columns)

    def row(self, i: int) -> range:
        """Positions of the off-diagonal entries of row ``i``."""
        return range(self.row_ptr[i], self.row_ptr[i + 1])

    def position(self, i: int, j: int) -> int | None:
        """Storage position of off-diagonal entry (i, j), or None if not stored."""
        for pos in self.row(i):
            if self.columns[pos] == j:
                return pos
        return None

    def multiply(self, x: Sequence[float]) -> list[float]:
        """Return the product A @ x."""
        if len(x) != self.n:
            raise ValueError(f"vector of length {len(x)} does not match matrix size {self.n}")
        result = [d * xi for d, xi in zip(self.diag, x)]
        for i in range(self.n):
            for pos in self.row(i):
                result[i] += self.values[pos] * x[self.columns[pos]]
        return result

    def diagonal(self) -> list[float]:
        """Return a copy of the diagonal."""
        return list(self.diag)


def build_matrix_structure(context: ApproximationContext) -> SparseMatrix:
    """Create a zero matrix whose pattern links each node to its eight grid neighbours."""
    n_x, n_y = context.n_x, context.n_y
    row_ptr = [0]
    columns: list[int] = []
    for i in range(n_x + 1):
        for j in range(n_y + 1):
            neighbours = sorted(
                grid_index(i + di, j + dj, n_y)
                for di, dj in _NEIGHBOUR_OFFSETS
                if 0 <= i + di <= n_x and 0 <= j + dj <= n_y
            )
            columns.extend(neighbours)
            row_ptr.append(len(columns))
    return SparseMatrix(
        diag=[0.0] * context.node_count,
        row_ptr=row_ptr,
        columns=columns,
    )


def _triangle_area(context: ApproximationContext, vertices: tuple[int, int, int]) -> float:
    (x1, y1), (x2, y2), (x3, y3) = (context.node_coords(v) for v in vertices)
    return 0.5 * abs((x2 - x1) * (y3 - y1) - (x3 - x1) * (y2 - y1))


def calculate_gram_matrix(matrix: SparseMatrix, context: ApproximationContext) -> SparseMatrix:
    """Add the Gram matrix of the Courant basis into ``matrix`` and return it."""
    for triangle in generate_triangles(context):
        vertices = triangle.vertices
        area = _triangle_area(context, vertices)
        for v in vertices:
            matrix.diag[v] += area / 6.0
            for w in vertices:
                if w == v:
                    continue
                pos = matrix.position(v, w)
                if pos is not None:
                    matrix.values[pos] += area / 12.0
    return matrix


def calculate_right_hand_side(context: ApproximationContext) -> list[float]:
    """Load vector: each triangle gives f(centroid) * area / 3 to each of its vertices."""
    b = [0.0] * context.node_count
    for triangle in generate_triangles(context):
        area = _triangle_area(context, triangle.vertices)
        share = evaluate_function(context.k, triangle.centroid.x, triangle.centroid.y) * area / 3.0
        for v in triangle.vertices:
            b[v] += share
    return b


def jacobi_preconditioner(matrix: SparseMatrix) -> list[float]:
    """Diagonal of the matrix, used as a Jacobi preconditioner."""
    return matrix.diagonal()


def solve_preconditioner(m: Sequence[float], b: Sequence[float]) -> list[float]:
    """Solve M z = b for diagonal M; near-zero diagonal entries leave b unchanged."""
    if len(m) != len(b):
        raise ValueError("preconditioner and right-hand side differ in length")
    return [bi / mi if abs(mi) > _PIVOT_TOLERANCE else bi for mi, bi in zip(m, b)]