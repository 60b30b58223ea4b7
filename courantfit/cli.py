"""Command line entry point: fit a test function and report errors and timings."""

from __future__ import annotations

import math
import re
import sys
import time
from collections.abc import Sequence
from dataclasses import dataclass

from .common import ApproximationContext
from .matrix import build_matrix_structure, calculate_gram_matrix, calculate_right_hand_side
from .solver import c1_error, c2_error, l1_error, l2_error, solve_system

TASK_ID = 1
_ARGUMENT_COUNT = 10

_FLOAT_PREFIX = re.compile(
    r"\s*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)
_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")


class _UsageError(ValueError):
    """Wrong number of command line arguments."""


def _usage(prog: str) -> str:
    return "\n".join(
        [
            f"Usage: {prog} a b c d n_x n_y k ε m_i p",
            "  a, b, c, d: boundaries of area [a,b]×[c,d] (double)",
            "  n_x, n_y: number of interpolation points on X and Y axes (int)",
            "  k: function to approximate (int, 0-7)",
            "  ε: accuracy of the solution (double)",
            "  m_i: maximum number of iterations (int)",
            "  p: number of computational threads (int)",
        ]
    )


def _to_float(text: str) -> float:
    """Leading number of ``text`` as a float, 0.0 if there is none."""
    match = _FLOAT_PREFIX.match(text)
    return float(match.group(1)) if match else 0.0


def _to_int(text: str) -> int:
    """Leading integer of ``text``, 0 if there is none."""
    match = _INT_PREFIX.match(text)
    return int(match.group(1)) if match else 0


def parse_arguments(argv: Sequence[str]) -> ApproximationContext:
    """Build a context from the ten arguments a b c d n_x n_y k eps m_i p."""
    if len(argv) != _ARGUMENT_COUNT:
        raise _UsageError(f"expected {_ARGUMENT_COUNT} arguments, got {len(argv)}")
    a, b, c, d = (_to_float(text) for text in argv[0:4])
    n_x, n_y, k = (_to_int(text) for text in argv[4:7])
    eps = _to_float(argv[7])
    m_i, p = (_to_int(text) for text in argv[8:10])

    if (
        a >= b or c >= d or n_x <= 0 or n_y <= 0 or k < 0 or k > 7
        or eps <= 0 or m_i <= 0 or p <= 0
        or any(math.isnan(v) for v in (a, b, c, d, eps))
    ):
        raise ValueError("Invalid argument values!")
    return ApproximationContext(a=a, b=b, c=c, d=d, n_x=n_x, n_y=n_y, k=k, eps=eps, m_i=m_i, p=p)


@dataclass(frozen=True)
class _Report:
    r1: float
    r2: float
    r3: float
    r4: float
    t1: float
    t2: float
    iterations: int
    context: ApproximationContext

    def format(self, prog: str) -> str:
        ctx = self.context
        return (
            "%s : Task = %d R1 = %e R2 = %e R3 = %e R4 = %e T1 = %.2f T2 = %.2f "
            "It = %d E = %e K = %d Nx = %d Ny = %d P = %d"
        ) % (
            prog, TASK_ID, self.r1, self.r2, self.r3, self.r4, self.t1, self.t2,
            self.iterations, ctx.eps, ctx.k, ctx.n_x, ctx.n_y, ctx.p,
        )


def run(context: ApproximationContext) -> _Report:
    """Assemble and solve the system, then measure the four errors, timing both phases."""
    start = time.perf_counter()
    matrix = calculate_gram_matrix(build_matrix_structure(context), context)
    b = calculate_right_hand_side(context)
    solution, iterations = solve_system(matrix, b, context)
    t1 = time.perf_counter() - start

    start = time.perf_counter()
    r1 = c1_error(solution, context)
    r2 = l1_error(solution, context)
    r3 = c2_error(solution, context)
    r4 = l2_error(solution, context)
    t2 = time.perf_counter() - start

    return _Report(r1=r1, r2=r2, r3=r3, r4=r4, t1=t1, t2=t2, iterations=iterations, context=context)


def main(argv: Sequence[str] | None = None) -> int:
    """Run from the command line; returns the process exit status."""
    prog = sys.argv[0] if sys.argv and sys.argv[0] else "courantfit"
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        context = parse_arguments(args)
    except _UsageError:
        print(_usage(prog), file=sys.stderr)
        return 1
    except ValueError as exc:
        print(exc, file=sys.stderr)
        print(_usage(prog), file=sys.stderr)
        return 1

    print(run(context).format(prog))
    return 0


if __name__ == "__main__":
    sys.exit(main())