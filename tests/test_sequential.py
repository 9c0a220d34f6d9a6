import pytest

from spmvsuite.formats import (
    CooMatrix,
    CsrMatrix,
    DiaMatrix,
    EllgMatrix,
    HdiaMatrix,
    HllMatrix,
    JadMatrix,
)
from spmvsuite.sequential import (
    coo_sequential,
    csr_sequential,
    dia_sequential,
    ell_sequential,
    ellg_sequential,
    gmvm_sequential,
    hdia_sequential,
    hll_sequential,
    jad_sequential,
)

# Matrix used throughout:
#   [[1, 0, 2],
#    [0, 3, 0],
#    [4, 0, 5]]
X = [0.0, 1.0, 2.0]


@pytest.fixture
def coo():
    return CooMatrix(3, [0, 0, 1, 2, 2], [0, 2, 1, 0, 2], [1.0, 2.0, 3.0, 4.0, 5.0])


@pytest.fixture
def expected(coo):
    return coo_sequential(coo, X).y


def test_coo_worked_example(coo):
    assert coo_sequential(coo, X).y == [4.0, 3.0, 10.0]


def test_coo_accumulates_into_y(coo, expected):
    result = coo_sequential(coo, X, [1.0, 1.0, 1.0])
    assert result.y == [v + 1.0 for v in expected]


def test_coo_does_not_mutate_y(coo):
    y = [0.0, 0.0, 0.0]
    coo_sequential(coo, X, y)
    assert y == [0.0, 0.0, 0.0]


def test_elapsed_is_non_negative(coo):
    assert coo_sequential(coo, X).elapsed_ns >= 0


def test_identity_returns_x():
    identity = CooMatrix(3, [0, 1, 2], [0, 1, 2], [1.0, 1.0, 1.0])
    assert coo_sequential(identity, X).y == X


def test_wrong_vector_length(coo):
    with pytest.raises(ValueError):
        coo_sequential(coo, [1.0, 2.0])


def test_gmvm_matches_coo(coo, expected):
    assert gmvm_sequential(coo.to_dense(), X).y == expected


def test_csr_matches_coo(expected):
    csr = CsrMatrix(3, [0, 2, 3, 5], [0, 2, 1, 0, 2], [1.0, 2.0, 3.0, 4.0, 5.0])
    assert csr_sequential(csr, X).y == expected


def test_csr_with_empty_row():
    csr = CsrMatrix(3, [0, 1, 1, 2], [0, 2], [1.0, 1.0])
    coo = CooMatrix(3, [0, 2], [0, 2], [1.0, 1.0])
    assert csr_sequential(csr, X).y == coo_sequential(coo, X).y


def test_dia_matches_coo(expected):
    dia = DiaMatrix(
        3, 3, [-2, 0, 2], [0.0, 0.0, 4.0, 1.0, 3.0, 5.0, 2.0, 0.0, 0.0]
    )
    assert dia_sequential(dia, X).y == expected


@pytest.fixture
def ellg():
    return EllgMatrix(
        3,
        3,
        [2, 1, 2, 2],
        [0, 1, 0, 2, 0, 2],
        [1.0, 3.0, 4.0, 2.0, 0.0, 5.0],
    )


def test_ellg_matches_coo(ellg, expected):
    assert ellg_sequential(ellg, X).y == expected


def test_ell_matches_ellg(ellg):
    assert ell_sequential(ellg, X).y == ellg_sequential(ellg, X).y


def test_hll_matches_coo(expected):
    hll = HllMatrix(
        3,
        [2, 2],
        [0, 4],
        [0, 1, 2, 0, 0, 0, 2, 0],
        [1.0, 3.0, 2.0, 0.0, 4.0, 0.0, 5.0, 0.0],
    )
    assert hll_sequential(hll, X, hack_size=2).y == expected


def test_hdia_matches_coo(expected):
    hdia = HdiaMatrix(
        3,
        3,
        [2, 2],
        [0, 2],
        [0, 6],
        [0, 2, -2, 0],
        [1.0, 3.0, 0.0, 2.0, 0.0, 0.0, 0.0, 0.0, 4.0, 0.0, 0.0, 5.0],
    )
    assert hdia_sequential(hdia, X, hack_size=2).y == expected


def test_hack_size_must_be_positive():
    hll = HllMatrix(1, [1], [0], [0], [1.0])
    with pytest.raises(ValueError):
        hll_sequential(hll, [1.0], hack_size=0)


def test_jad_matches_coo(expected):
    jad = JadMatrix(
        3,
        [2, 1, 2, 2],
        [0, 3],
        [0, 0, 1, 2, 2],
        [1.0, 4.0, 3.0, 2.0, 5.0],
        [0, 2, 1],
    )
    assert jad_sequential(jad, X).y == expected


def test_jad_accumulates_into_y(expected):
    jad = JadMatrix(
        3,
        [2, 1, 2, 2],
        [0, 3],
        [0, 0, 1, 2, 2],
        [1.0, 4.0, 3.0, 2.0, 5.0],
        [0, 2, 1],
    )
    assert jad_sequential(jad, X, [2.0, 2.0, 2.0]).y == [v + 2.0 for v in expected]