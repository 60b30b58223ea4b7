"""Preconditioned iterative solver and error measures for the approximation."""

from __future__ import annotations

import math
from collections.abc import Iterator, Sequence

from .common import ApproximationContext
from .functions import evaluate_approximation, evaluate_function, generate_triangles
from .matrix import SparseMatrix, jacobi_preconditioner, solve_preconditioner

_DENOMINATOR_FLOOR = 1e-14


def _dot(u: Sequence[float], v: Sequence[float]) -> float:
    return sum(a * b for a, b in zip(u, v))


def solve_system(
    matrix: SparseMatrix, b: Sequence[float], context: ApproximationContext
) -> tuple[list[float], int]:
    """Solve A x = b by Jacobi-preconditioned conjugate gradients.

    Starts from x = 0 and stops after ``context.m_i`` iterations or once the
    residual norm has dropped below ``context.eps`` times its initial value.
    Returns the solution and the number of iterations made.
    """
    n = matrix.n
    if len(b) != n:
        raise ValueError(f"right-hand side of length {len(b)} does not match matrix size {n}")

    m = jacobi_preconditioner(matrix)
    x = [0.0] * n
    r = [bi - ai for bi, ai in zip(b, matrix.multiply(x))]
    z = solve_preconditioner(m, r)
    p = list(z)

    r0_norm = math.sqrt(_dot(r, r))
    r_norm = r0_norm
    iterations = 0
    if r0_norm == 0.0 or math.isnan(r0_norm):
        return x, iterations

    while iterations < context.m_i and r_norm / r0_norm > context.eps:
        q = matrix.multiply(p)
        rz = _dot(r, z)
        pq = _dot(p, q)
        alpha = rz / max(pq, _DENOMINATOR_FLOOR)

        x = [xi + alpha * pi for xi, pi in zip(x, p)]
        r = [ri - alpha * qi for ri, qi in zip(r, q)]
        r_norm = math.sqrt(_dot(r, r))

        z = solve_preconditioner(m, r)
        rz_new = _dot(r, z)
        beta = rz_new / max(rz, _DENOMINATOR_FLOOR)
        p = [zi + beta * pi for zi, pi in zip(z, p)]

        iterations += 1

    return x, iterations


def _chunks(total: int, parts: int) -> Iterator[range]:
    """Split range(total) into ``parts`` consecutive blocks; the last takes the remainder."""
    if parts <= 0:
        raise ValueError(f"number of parts must be positive, got {parts}")
    size = total // parts
    for part in range(parts):
        start = part * size
        end = total if part == parts - 1 else (part + 1) * size
        yield range(start, end)


def _centroid_errors(solution: Sequence[float], context: ApproximationContext) -> list[float]:
    errors = []
    for triangle in generate_triangles(context):
        x, y = triangle.centroid.x, triangle.centroid.y
        exact = evaluate_function(context.k, x, y)
        errors.append(abs(exact - evaluate_approximation(solution, x, y, context)))
    return errors


def _node_errors(solution: Sequence[float], context: ApproximationContext) -> list[float]:
    if len(solution) != context.node_count:
        raise ValueError(
            f"solution of length {len(solution)} does not match {context.node_count} grid nodes"
        )
    errors = []
    for index in range(context.node_count):
        x, y = context.node_coords(index)
        errors.append(abs(evaluate_function(context.k, x, y) - solution[index]))
    return errors


def _block_max(errors: Sequence[float], parts: int) -> float:
    return max(
        [0.0] + [max([0.0] + [errors[t] for t in block]) for block in _chunks(len(errors), parts)]
    )


def _block_sum(errors: Sequence[float], weight: float, parts: int) -> float:
    total = 0.0
    for block in _chunks(len(errors), parts):
        partial = 0.0
        for t in block:
            partial += errors[t] * weight
        total += partial
    return total


def c1_error(solution: Sequence[float], context: ApproximationContext) -> float:
    """Maximum of |f - Pf| over the triangle centroids."""
    return _block_max(_centroid_errors(solution, context), context.p)


def l1_error(solution: Sequence[float], context: ApproximationContext) -> float:
    """Sum of |f - Pf| at triangle centroids, each weighted by the triangle area."""
    weight = context.h_x * context.h_y / 2.0
    return _block_sum(_centroid_errors(solution, context), weight, context.p)


def c2_error(solution: Sequence[float], context: ApproximationContext) -> float:
    """Maximum of |f - Pf| over the grid nodes."""
    return _block_max(_node_errors(solution, context), context.p)


def l2_error(solution: Sequence[float], context: ApproximationContext) -> float:
    """Sum of |f - Pf| at grid nodes, each weighted by the cell area."""
    weight = context.h_x * context.h_y
    return _block_sum(_node_errors(solution, context), weight, context.p)