import random

import pytest

from verkle_commit.constant import BANDERSNATCH_SCALAR_FIELD
from verkle_commit.errors import DecodingError, InvalidInput
from verkle_commit.field import Fr
from verkle_commit.lagrange import LagrangeBasis, barycentric_weights


def test_construction():

    poly = LagrangeBasis([1, 2, Fr(3)])

    assert len(poly) == 3
    assert poly.domain_size() == 3
    assert poly.values() == [Fr(1), Fr(2), Fr(3)]
    assert poly[2] == Fr(3)
    assert list(poly) == [Fr(1), Fr(2), Fr(3)]
    assert LagrangeBasis.zero(4) == LagrangeBasis([0, 0, 0, 0])

    with pytest.raises(InvalidInput):
        LagrangeBasis([])

    with pytest.raises(InvalidInput):
        LagrangeBasis([1, "2"])


def test_arithmetic():

    a = LagrangeBasis([1, 2, 3])
    b = LagrangeBasis([4, 5, 6])

    assert a + b == LagrangeBasis([5, 7, 9])
    assert b - a == LagrangeBasis([3, 3, 3])
    assert a - b == LagrangeBasis([-3, -3, -3])
    assert a * 2 == LagrangeBasis([2, 4, 6])
    assert 2 * a == a * 2
    assert a * b == LagrangeBasis([4, 10, 18])
    assert -a + a == LagrangeBasis.zero(3)

    with pytest.raises(InvalidInput):
        a + LagrangeBasis([1, 2])


def test_with_value_is_functional():

    a = LagrangeBasis([1, 2, 3])
    b = a.with_value(1, 9)

    assert a == LagrangeBasis([1, 2, 3])
    assert b == LagrangeBasis([1, 9, 3])

    with pytest.raises(InvalidInput):
        a.with_value(3, 0)

    with pytest.raises(AttributeError):
        a.foo = 1


def test_from_bytes():

    buffers = [Fr(i).to_bytes() for i in range(5)]
    assert LagrangeBasis.from_bytes(buffers) == LagrangeBasis(list(range(5)))

    buffers[3] = b"\xff" * 32
    with pytest.raises(DecodingError, match=r"scalars\[3\]"):
        LagrangeBasis.from_bytes(buffers)


def test_evaluate_in_domain():

    poly = LagrangeBasis([7, 8, 9])

    assert poly.evaluate_in_domain(0) == Fr(7)
    assert poly.evaluate(2) == Fr(9)

    with pytest.raises(InvalidInput):
        poly.evaluate_in_domain(3)


def test_evaluate_outside_domain():

    n = 16
    constant = LagrangeBasis([42] * n)
    identity = LagrangeBasis(list(range(n)))
    square = LagrangeBasis([i * i for i in range(n)])

    for _ in range(5):
        z = random.randint(n, BANDERSNATCH_SCALAR_FIELD - 1)
        assert constant.evaluate(z) == Fr(42)
        assert identity.evaluate(z) == Fr(z)
        assert square.evaluate(z) == Fr(z * z)


def test_barycentric_weights():

    # A'(i) for domain {0, 1, 2} is 2, -1, 2
    w = barycentric_weights(3)
    assert Fr(w[0]) * 2 == Fr(1)
    assert Fr(w[1]) * -1 == Fr(1)
    assert Fr(w[2]) * 2 == Fr(1)
