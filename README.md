# courantfit

Approximates a function of two variables on a rectangle `[a,b]×[c,d]` by a
piecewise-linear function built from Courant basis functions. The rectangle is
split into an `n_x × n_y` grid and every cell is cut into two triangles. The
coefficients come from solving the Gram system with a Jacobi-preconditioned
conjugate-gradient iteration. Four error measures are then reported.

The package is pure Python and has no runtime dependencies.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Command line

```
courantfit a b c d n_x n_y k eps m_i p
```

The same command is also available as `python -m courantfit.cli`.

| Argument     | Meaning                                                 |
|--------------|---------------------------------------------------------|
| `a b c d`    | boundaries of the area `[a,b]×[c,d]`, `a < b`, `c < d`  |
| `n_x n_y`    | number of grid intervals along X and Y (positive)       |
| `k`          | function to approximate, `0` to `7`                     |
| `eps`        | relative residual tolerance of the solver (positive)    |
| `m_i`        | maximum number of solver iterations (positive)          |
| `p`          | number of blocks the error sums are split into (positive) |

Arguments are read leniently. Only the leading number of each argument is
used, and an argument that does not start with a number counts as `0`.

The functions selected by `k`:

| `k` | f(x, y)                   |
|-----|---------------------------|
| 0   | 1                         |
| 1   | x                         |
| 2   | y                         |
| 3   | x + y                     |
| 4   | sqrt(x² + y²)             |
| 5   | x² + y²                   |
| 6   | exp(x² − y²)              |
| 7   | 1 / (25(x² + y²) + 1)     |

Example:

```
courantfit 0 1 0 1 10 10 5 1e-14 1000 4
```

This prints one line that starts with the program name:

```
<program> : Task = 1 R1 = ... R2 = ... R3 = ... R4 = ... T1 = ... T2 = ... It = ... E = 1.000000e-14 K = 5 Nx = 10 Ny = 10 P = 4
```

The fields are:

- `R1` is the maximum error at the triangle centroids.
- `R2` is the sum of the errors at the centroids, each weighted by the triangle area.
- `R3` is the maximum error at the grid nodes.
- `R4` is the sum of the errors at the nodes, each weighted by the cell area.
- `T1` is the time in seconds spent assembling and solving.
- `T2` is the time in seconds spent measuring the errors.
- `It` is the number of solver iterations.

With the wrong number of arguments, the command prints a usage message to
standard error and exits with status 1. With invalid values it prints
`Invalid argument values!` followed by the usage message, and also exits with
status 1.

## Library use

```python
from courantfit.cli import parse_arguments, run
from courantfit.matrix import build_matrix_structure, calculate_gram_matrix, calculate_right_hand_side
from courantfit.solver import solve_system, c1_error, l2_error
from courantfit.functions import evaluate_approximation

context = parse_arguments(["0", "1", "0", "1", "8", "8", "3", "1e-12", "500", "2"])

matrix = calculate_gram_matrix(build_matrix_structure(context), context)
rhs = calculate_right_hand_side(context)
solution, iterations = solve_system(matrix, rhs, context)

print(iterations, c1_error(solution, context), l2_error(solution, context))
print(evaluate_approximation(solution, 0.3, 0.7, context))
```

`run(context)` performs the whole pipeline. It returns a report object with
the following members:

- the errors `r1`, `r2`, `r3` and `r4`;
- the timings `t1` and `t2`;
- `iterations`;
- `context`;
- `format(prog)`, which gives the output line.

`parse_arguments` raises `ValueError` for invalid values.
`evaluate_function` raises `ValueError` for a `k` outside `0..7`.

The modules:

- `courantfit.common` holds `ApproximationContext`, which has the derived properties `h_x`, `h_y`, `node_count` and `triangle_count` and the method `node_coords`. It also holds `Point`, `Triangle` and `grid_index`.
- `courantfit.functions` holds the target functions (`evaluate_function`), the triangulation (`generate_triangles`, `find_triangle`, `barycentric_coords`) and `evaluate_approximation`.
- `courantfit.matrix` holds `SparseMatrix`, which stores a separate diagonal and sorted off-diagonal rows and has the methods `multiply` and `diagonal`. It also holds the functions for Gram matrix and right-hand side assembly, `jacobi_preconditioner` and `solve_preconditioner`.
- `courantfit.solver` holds `solve_system` and the error measures `c1_error`, `l1_error`, `c2_error` and `l2_error`.
- `courantfit.cli` holds `parse_arguments`, `run` and `main`, the entry point of the `courantfit` command.

## What it does not do

All computation runs sequentially in a single thread. The `p` argument only
sets how many consecutive blocks the error computations are split into. It
does not start any worker threads or processes.