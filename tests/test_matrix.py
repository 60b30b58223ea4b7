import pytest

from courantfit.common import ApproximationContext
from courantfit.matrix import (
    SparseMatrix,
    build_matrix_structure,
    calculate_gram_matrix,
    calculate_right_hand_side,
    jacobi_preconditioner,
    solve_preconditioner,
)


def make_context(a=0.0, b=1.0, c=0.0, d=1.0, n_x=3, n_y=4, k=0, p=2):
    return ApproximationContext(a=a, b=b, c=c, d=d, n_x=n_x, n_y=n_y, k=k, eps=1e-12, m_i=100, p=p)


def gram(context):
    return calculate_gram_matrix(build_matrix_structure(context), context)


def test_structure_rows_are_sorted_and_exclude_diagonal():
    matrix = build_matrix_structure(make_context())
    for i in range(matrix.n):
        cols = [matrix.columns[pos] for pos in matrix.row(i)]
        assert cols == sorted(cols)
        assert i not in cols
        assert len(set(cols)) == len(cols)


def test_structure_is_symmetric():
    matrix = build_matrix_structure(make_context())
    pairs = {(i, matrix.columns[pos]) for i in range(matrix.n) for pos in matrix.row(i)}
    assert pairs
    assert pairs == {(j, i) for i, j in pairs}
    for i, j in pairs:
        assert matrix.columns[matrix.position(j, i)] == i


def test_structure_row_sizes_corner_and_interior():
    context = make_context(n_x=2, n_y=2)
    matrix = build_matrix_structure(context)
    assert matrix.n == context.node_count
    assert len(matrix.row(0)) == 3
    assert len(matrix.row(4)) == 8
    assert all(v == 0.0 for v in matrix.values)
    assert all(v == 0.0 for v in matrix.diag)


def test_gram_entries_sum_to_domain_area():
    context = make_context(a=-1.0, b=2.0, c=0.5, d=2.5)
    matrix = gram(context)
    total = sum(matrix.diag) + sum(matrix.values)
    assert total == pytest.approx((context.b - context.a) * (context.d - context.c))


def test_gram_is_symmetric_in_values():
    matrix = gram(make_context())
    for i in range(matrix.n):
        for pos in matrix.row(i):
            j = matrix.columns[pos]
            assert matrix.values[matrix.position(j, i)] == pytest.approx(matrix.values[pos])


def test_gram_single_cell_diagonal():
    matrix = gram(make_context(n_x=1, n_y=1))
    # Node 0 lies in one triangle of area 1/2, node 2 in two.
    assert matrix.diag[0] == pytest.approx(1.0 / 12.0)
    assert matrix.diag[2] == pytest.approx(1.0 / 6.0)


def test_gram_does_not_depend_on_thread_count():
    first = gram(make_context(p=1))
    second = gram(make_context(p=5))
    assert first.diag == pytest.approx(second.diag)
    assert first.values == pytest.approx(second.values)


def test_multiply_ones_gives_row_sums():
    context = make_context()
    matrix = gram(context)
    product = matrix.multiply([1.0] * matrix.n)
    assert sum(product) == pytest.approx(1.0)
    assert product[0] == pytest.approx(matrix.diag[0] + sum(matrix.values[p] for p in matrix.row(0)))


def test_multiply_on_hand_built_matrix():
    matrix = SparseMatrix(diag=[2.0, 3.0], row_ptr=[0, 1, 2], columns=[1, 0], values=[1.0, 4.0])
    assert matrix.multiply([1.0, 2.0]) == pytest.approx([4.0, 10.0])


def test_multiply_rejects_wrong_length():
    matrix = build_matrix_structure(make_context(n_x=1, n_y=1))
    with pytest.raises(ValueError):
        matrix.multiply([1.0, 2.0])


def test_inconsistent_row_pointers_rejected():
    with pytest.raises(ValueError):
        SparseMatrix(diag=[1.0, 1.0], row_ptr=[0, 1], columns=[1])


def test_right_hand_side_constant_function_sums_to_area():
    context = make_context(a=0.0, b=2.0, c=-1.0, d=1.0, k=0)
    b = calculate_right_hand_side(context)
    assert len(b) == context.node_count
    assert sum(b) == pytest.approx(4.0)


def test_right_hand_side_matches_gram_times_nodal_values_for_constant():
    context = make_context(k=0)
    matrix = gram(context)
    b = calculate_right_hand_side(context)
    assert matrix.multiply([1.0] * matrix.n) == pytest.approx(b)


def test_right_hand_side_linear_function_integrates_exactly():
    context = make_context(a=1.0, b=3.0, c=0.0, d=1.0, k=1)
    b = calculate_right_hand_side(context)
    # Integral of x over [1, 3] x [0, 1].
    assert sum(b) == pytest.approx(4.0)


def test_jacobi_preconditioner_is_copy_of_diagonal():
    matrix = gram(make_context())
    m = jacobi_preconditioner(matrix)
    assert m == matrix.diag
    m[0] = 99.0
    assert matrix.diag[0] != 99.0


def test_solve_preconditioner_divides_and_skips_zero_pivots():
    assert solve_preconditioner([4.0, 0.0, 2.0], [8.0, 5.0, 3.0]) == pytest.approx([2.0, 5.0, 1.5])


def test_solve_preconditioner_round_trip():
    matrix = gram(make_context())
    m = jacobi_preconditioner(matrix)
    z = solve_preconditioner(m, m)
    assert z == pytest.approx([1.0] * matrix.n)


def test_solve_preconditioner_length_mismatch():
    with pytest.raises(ValueError):
        solve_preconditioner([1.0], [1.0, 2.0])