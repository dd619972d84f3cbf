from functools import lru_cache
from typing import Optional

from py_ecc.fields import optimized_FQ

from .constant import BANDERSNATCH_MODULUS, BANDERSNATCH_SCALAR_FIELD, SCALAR_SIZE
from .errors import DecodingError, InvalidInput


class PrimeField(optimized_FQ):
    """
    Prime field element with a fixed-width little-endian encoding.

    Subclasses only need to set `field_modulus`.
    """

    byte_size = SCALAR_SIZE

    def __eq__(self, other):
        if isinstance(other, PrimeField) and other.field_modulus != self.field_modulus:
            return False
        if isinstance(other, (optimized_FQ, int)):
            return self.n == int(other)
        return NotImplemented

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self):
        return hash((self.field_modulus, self.n))

    def __str__(self):
        return str(self.n)

    def is_zero(self) -> bool:
        return self.n == 0

    def inverse(self):
        """Return multiplicative inverse, raise `ZeroDivisionError` on zero"""
        if self.n == 0:
            raise ZeroDivisionError("Zero has no multiplicative inverse")
        return type(self)(pow(self.n, -1, self.field_modulus))

    def legendre(self) -> int:
        """Return 1 for non-zero squares, -1 for non-squares and 0 for zero"""
        if self.n == 0:
            return 0
        ls = pow(self.n, (self.field_modulus - 1) // 2, self.field_modulus)
        return -1 if ls == self.field_modulus - 1 else 1

    def sqrt(self) -> Optional["PrimeField"]:
        """
        Return a square root of the element (Tonelli-Shanks),
        or None if the element is not a quadratic residue
        """
        p = self.field_modulus
        if self.n == 0:
            return type(self)(0)
        if self.legendre() != 1:
            return None

        s, q = _two_adicity(p)
        z = _non_residue(p)

        m = s
        c = pow(z, q, p)
        t = pow(self.n, q, p)
        r = pow(self.n, (q + 1) // 2, p)

        while t != 1:
            # least i with t^(2^i) == 1
            i = 0
            t2 = t
            while t2 != 1:
                t2 = t2 * t2 % p
                i += 1

            b = pow(c, 1 << (m - i - 1), p)
            m = i
            c = b * b % p
            t = t * c % p
            r = r * b % p

        return type(self)(r)

    def to_bytes(self) -> bytes:
        """Canonical little-endian encoding"""
        return self.n.to_bytes(self.byte_size, "little")

    def hex(self) -> str:
        return self.to_bytes().hex()

    @classmethod
    def from_bytes(cls, data):
        """
        Decode canonical little-endian bytes. Values outside `[0, modulus)`
        are rejected rather than reduced.
        """
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise DecodingError(
                f"Expected bytes-like object, got {type(data).__name__}"
            )

        data = bytes(data)
        if len(data) != cls.byte_size:
            raise DecodingError(
                f"Field element must be {cls.byte_size} bytes, got {len(data)}"
            )

        value = int.from_bytes(data, "little")
        if value >= cls.field_modulus:
            raise DecodingError("Field element is not in canonical form")

        return cls(value)

    @classmethod
    def from_hex(cls, hexstring: str):
        try:
            data = bytes.fromhex(hexstring)
        except ValueError as exc:
            raise DecodingError(f"Invalid hexstring: {exc}") from exc
        return cls.from_bytes(data)

    @classmethod
    def from_be_bytes_mod_order(cls, data: bytes):
        """Interpret big-endian bytes as an integer and reduce it"""
        return cls(int.from_bytes(data, "big"))


class Fq(PrimeField):
    """Base field of Bandersnatch, where point coordinates live"""

    field_modulus = BANDERSNATCH_MODULUS


class Fr(PrimeField):
    """Scalar field of Bandersnatch, where committed values live"""

    field_modulus = BANDERSNATCH_SCALAR_FIELD


@lru_cache(maxsize=None)
def _two_adicity(p: int):
    """Write p - 1 = 2^s * q with q odd"""
    q = p - 1
    s = 0
    while q % 2 == 0:
        q //= 2
        s += 1
    return s, q


@lru_cache(maxsize=None)
def _non_residue(p: int) -> int:
    z = 2
    while pow(z, (p - 1) // 2, p) != p - 1:
        z += 1
    return z


def as_scalar(value) -> Fr:
    """Coerce an int or `Fr` into `Fr`"""
    if isinstance(value, Fr):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return Fr(value)
    raise InvalidInput(f"Expected int or Fr value, got {type(value).__name__}")
