import random

import pytest

from verkle_commit.constant import BANDERSNATCH_MODULUS, BANDERSNATCH_SCALAR_FIELD
from verkle_commit.errors import DecodingError, InvalidInput
from verkle_commit.field import Fq, Fr, as_scalar


def test_scalar_field_arithmetic():

    r = BANDERSNATCH_SCALAR_FIELD
    a = Fr(5)
    b = Fr(r - 2)

    assert a + b == Fr(3)
    assert b - a == Fr(r - 7)
    assert a - b == Fr(7)
    assert a * b == Fr(-10)
    assert Fr.zero() + a == a
    assert a * Fr.one() == a
    assert a * a.inverse() == Fr(1)
    assert -a + a == Fr.zero()


def test_fields_are_distinct():

    assert Fr(3) != Fq(3)
    assert Fr(BANDERSNATCH_SCALAR_FIELD) == Fr(0)
    assert Fq(BANDERSNATCH_SCALAR_FIELD) != Fq(0)
    assert len({Fr(1), Fr(1), Fr(2)}) == 2


def test_scalar_bytes_encoding():

    assert Fr(0).to_bytes() == bytes(32)
    assert Fr(1).to_bytes() == b"\x01" + bytes(31)
    assert Fr(256).to_bytes()[:2] == b"\x00\x01"

    for _ in range(10):
        x = Fr(random.randint(0, BANDERSNATCH_SCALAR_FIELD - 1))
        assert Fr.from_bytes(x.to_bytes()) == x
        assert Fr.from_hex(x.hex()) == x


def test_scalar_bytes_decoding_rejects_invalid():

    with pytest.raises(DecodingError):
        Fr.from_bytes(bytes(31))

    with pytest.raises(DecodingError):
        Fr.from_bytes(bytes(33))

    # the modulus itself is not canonical
    with pytest.raises(DecodingError):
        Fr.from_bytes(BANDERSNATCH_SCALAR_FIELD.to_bytes(32, "little"))

    with pytest.raises(DecodingError):
        Fr.from_bytes(b"\xff" * 32)

    with pytest.raises(DecodingError):
        Fr.from_bytes("00" * 32)

    # decoding errors are input errors as well
    with pytest.raises(InvalidInput):
        Fr.from_bytes(bytes(8))


def test_base_field_accepts_values_above_scalar_modulus():

    x = Fq(BANDERSNATCH_SCALAR_FIELD + 1)
    assert Fq.from_bytes(x.to_bytes()) == x

    with pytest.raises(DecodingError):
        Fq.from_bytes(BANDERSNATCH_MODULUS.to_bytes(32, "little"))


def test_from_be_bytes_mod_order():

    data = (BANDERSNATCH_MODULUS + 5).to_bytes(32, "big")
    assert Fq.from_be_bytes_mod_order(data) == Fq(5)


def test_sqrt():

    for _ in range(20):
        x = Fq(random.randint(1, BANDERSNATCH_MODULUS - 1))
        square = x * x
        root = square.sqrt()
        assert root is not None
        assert root * root == square
        assert root == x or root == -x

    assert Fq(0).sqrt() == Fq(0)


def test_sqrt_of_non_residue():

    x = Fq(random.randint(1, BANDERSNATCH_MODULUS - 1))
    while x.legendre() == 1:
        x = x + 1

    assert x.legendre() == -1
    assert x.sqrt() is None


def test_as_scalar():

    assert as_scalar(7) == Fr(7)
    assert as_scalar(-1) == Fr(BANDERSNATCH_SCALAR_FIELD - 1)
    assert as_scalar(Fr(9)) == Fr(9)

    with pytest.raises(InvalidInput):
        as_scalar(True)

    with pytest.raises(InvalidInput):
        as_scalar("1")
