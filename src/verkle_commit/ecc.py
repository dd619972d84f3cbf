import math
from typing import Optional, Sequence, Union

from .constant import (
    BANDERSNATCH_A,
    BANDERSNATCH_COFACTOR,
    BANDERSNATCH_D,
    BANDERSNATCH_GENERATOR,
    BANDERSNATCH_SCALAR_FIELD,
    FIELD_ELEMENT_SIZE,
    POINT_SIZE,
)
from .errors import DecodingError
from .field import Fq, Fr
from .utils import batch_modinv, split_list

A = Fq(BANDERSNATCH_A)
D = Fq(BANDERSNATCH_D)

SCALAR_BITS = BANDERSNATCH_SCALAR_FIELD.bit_length()


def _to_scalar(other) -> int:
    if isinstance(other, Fr):
        return other.n
    if isinstance(other, int) and not isinstance(other, bool):
        return other % BANDERSNATCH_SCALAR_FIELD
    raise TypeError(f"Multiplication of EdwardsPoint with {type(other)} is not allowed")


class EdwardsPoint:
    """
    Bandersnatch point in extended twisted Edwards coordinates
    `(X, Y, T, Z)` where `x = X/Z`, `y = Y/Z` and `x*y = T/Z`.

    Instances are immutable. Arithmetic follows the unified formulas of
    Hisil-Wong-Carter-Dawson (add-2008-hwcd, dbl-2008-hwcd).
    """

    __slots__ = ("x", "y", "t", "z")

    def __init__(self, x: Fq, y: Fq, t: Fq, z: Fq):
        object.__setattr__(self, "x", x)
        object.__setattr__(self, "y", y)
        object.__setattr__(self, "t", t)
        object.__setattr__(self, "z", z)

    def __setattr__(self, name, value):
        raise AttributeError("EdwardsPoint is immutable")

    def __reduce__(self):
        return (type(self), (self.x, self.y, self.t, self.z))

    @classmethod
    def identity(cls) -> "EdwardsPoint":
        return cls(Fq(0), Fq(1), Fq(0), Fq(1))

    @classmethod
    def from_affine(cls, x: Fq, y: Fq) -> "EdwardsPoint":
        return cls(x, y, x * y, Fq(1))

    def __add__(self, other):
        if not isinstance(other, EdwardsPoint):
            raise TypeError(
                f"Addition of {type(self)} with {type(other)} is not allowed"
            )

        a = self.x * other.x
        b = self.y * other.y
        c = D * self.t * other.t
        d = self.z * other.z
        e = (self.x + self.y) * (other.x + other.y) - a - b
        f = d - c
        g = d + c
        h = b - A * a

        return EdwardsPoint(e * f, g * h, e * h, f * g)

    def __radd__(self, other):
        # lets sum() start from 0
        if isinstance(other, int) and other == 0:
            return self
        return self.__add__(other)

    def __sub__(self, other):
        if not isinstance(other, EdwardsPoint):
            raise TypeError(
                f"Subtraction of {type(self)} with {type(other)} is not allowed"
            )
        return self + (-other)

    def __neg__(self):
        return EdwardsPoint(-self.x, self.y, -self.t, self.z)

    def double(self) -> "EdwardsPoint":
        a = self.x * self.x
        b = self.y * self.y
        c = self.z * self.z * 2
        d = A * a
        e = (self.x + self.y) * (self.x + self.y) - a - b
        g = d + b
        f = g - c
        h = d - b

        return EdwardsPoint(e * f, g * h, e * h, f * g)

    def __mul__(self, other):
        k = _to_scalar(other)

        # Montgomery ladder over a fixed number of bits,
        # every iteration performs one addition and one doubling
        r0 = EdwardsPoint.identity()
        r1 = self
        for i in reversed(range(SCALAR_BITS)):
            if (k >> i) & 1:
                r0 = r0 + r1
                r1 = r1.double()
            else:
                r1 = r0 + r1
                r0 = r0.double()

        return r0

    def __rmul__(self, other):
        return self.__mul__(other)

    def mul_by_cofactor(self) -> "EdwardsPoint":
        p = self
        for _ in range(BANDERSNATCH_COFACTOR.bit_length() - 1):
            p = p.double()
        return p

    def __eq__(self, other):
        if not isinstance(other, EdwardsPoint):
            return NotImplemented
        return (
            self.x * other.z == other.x * self.z
            and self.y * other.z == other.y * self.z
        )

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self):
        return hash(self.to_bytes())

    def __str__(self) -> str:
        x, y = self.affine()
        return f"({x}, {y})"

    def __repr__(self) -> str:
        return f"EdwardsPoint{self.__str__()}"

    def is_zero(self) -> bool:
        # Z = 0 is a point at infinity of the incomplete formulas, not the identity
        return self.x.is_zero() and not self.z.is_zero() and self.y == self.z

    def is_on_curve(self) -> bool:
        if self.z.is_zero():
            return False
        xx = self.x * self.x
        yy = self.y * self.y
        zz = self.z * self.z
        tt = self.t * self.t
        return A * xx + yy == zz + D * tt and self.x * self.y == self.t * self.z

    def is_in_prime_subgroup(self) -> bool:
        r = BANDERSNATCH_SCALAR_FIELD
        p = EdwardsPoint.identity()
        q = self
        # plain double-and-add, r itself would reduce to zero in __mul__
        while r:
            if r & 1:
                p = p + q
            q = q.double()
            r >>= 1
        return p.is_zero()

    def affine(self):
        """Return `(x, y)` in the base field"""
        zinv = self.z.inverse()
        return self.x * zinv, self.y * zinv

    def normalize(self) -> "EdwardsPoint":
        """Return the representative of this point with `Z = 1`"""
        x, y = self.affine()
        return EdwardsPoint.from_affine(x, y)

    def to_bytes(self) -> bytes:
        """
        Serialize as `X || Y || T || Z`, 32 bytes little-endian each,
        from the normalized representative
        """
        p = self.normalize()
        return p.x.to_bytes() + p.y.to_bytes() + p.t.to_bytes() + p.z.to_bytes()

    def hex(self) -> str:
        return self.to_bytes().hex()

    @classmethod
    def from_bytes(cls, data) -> "EdwardsPoint":
        """
        Deserialize from `X || Y || T || Z`. Any extended representative
        is accepted as long as it satisfies the curve equation.
        """
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise DecodingError(
                f"Expected bytes-like object, got {type(data).__name__}"
            )

        data = bytes(data)
        if len(data) != POINT_SIZE:
            raise DecodingError(f"Point must be {POINT_SIZE} bytes, got {len(data)}")

        coords = []
        for name, block in zip("XYTZ", split_list(data, FIELD_ELEMENT_SIZE)):
            try:
                coords.append(Fq.from_bytes(block))
            except DecodingError as exc:
                raise DecodingError(f"Coordinate {name}: {exc}") from exc

        point = cls(*coords)
        if point.z.is_zero():
            raise DecodingError("Coordinate Z must be non-zero")
        if not point.is_on_curve():
            raise DecodingError("Point is not on the curve")

        return point

    @classmethod
    def from_hex(cls, hexstring: str) -> "EdwardsPoint":
        try:
            data = bytes.fromhex(hexstring)
        except ValueError as exc:
            raise DecodingError(f"Invalid hexstring: {exc}") from exc
        return cls.from_bytes(data)


def batch_normalize(points: Sequence[EdwardsPoint]):
    """Normalize many points sharing a single field inversion"""
    zinvs = batch_modinv([p.z.n for p in points], Fq.field_modulus)
    return [
        EdwardsPoint.from_affine(p.x * zinv, p.y * zinv)
        for p, zinv in zip(points, zinvs)
    ]


def _window_size(n: int) -> int:
    if n < 32:
        return 3
    return int(math.log(n)) + 2


class EllipticCurve:
    """
    Bandersnatch curve `a*x^2 + y^2 = 1 + d*x^2*y^2` over the
    BLS12-381 scalar field
    """

    def __init__(self):
        self.name = "BANDERSNATCH"
        self.a = A
        self.d = D
        self.order = BANDERSNATCH_SCALAR_FIELD
        self.field_modulus = Fq.field_modulus
        self.cofactor = BANDERSNATCH_COFACTOR

    def generator(self) -> EdwardsPoint:
        """
        Return the standard generator of the prime-order subgroup
        """
        x, y = BANDERSNATCH_GENERATOR
        return EdwardsPoint.from_affine(Fq(x), Fq(y))

    def identity(self) -> EdwardsPoint:
        return EdwardsPoint.identity()

    def get_point_from_x(self, x: Fq, choose_largest: bool) -> Optional[EdwardsPoint]:
        """
        Recover a point from its x-coordinate, picking the smaller
        (or larger) of the two candidate y values.
        Return None if no point with this x exists.
        """
        xx = x * x
        numerator = self.a * xx - 1
        denominator = self.d * xx - 1
        if denominator.is_zero():
            return None

        y = (numerator * denominator.inverse()).sqrt()
        if y is None:
            return None

        neg_y = -y
        if (y.n < neg_y.n) ^ choose_largest:
            return EdwardsPoint.from_affine(x, y)
        return EdwardsPoint.from_affine(x, neg_y)

    def multiexp(
        self, g: Sequence[EdwardsPoint], s: Sequence[Union[Fr, int]]
    ) -> EdwardsPoint:
        """
        Perform Multi-Scalar-Multiplication (MSM)
        to compute sum of g[i] * s[i] where g is
        Elliptic Curve point and s is scalar,
        using Pippenger's bucket method
        """
        assert len(g) == len(s), "Length of points and scalars must be equal"

        pairs = [(p, _to_scalar(k)) for p, k in zip(g, s)]
        pairs = [(p, k) for p, k in pairs if k != 0]

        if not pairs:
            return EdwardsPoint.identity()

        c = _window_size(len(pairs))
        mask = (1 << c) - 1

        window_sums = []
        for w in range(0, SCALAR_BITS, c):
            buckets = [None] * mask
            for p, k in pairs:
                idx = (k >> w) & mask
                if idx:
                    b = buckets[idx - 1]
                    buckets[idx - 1] = p if b is None else b + p

            # sum_i i * bucket[i] via running sums
            running = EdwardsPoint.identity()
            total = EdwardsPoint.identity()
            for b in reversed(buckets):
                if b is not None:
                    running = running + b
                total = total + running

            window_sums.append(total)

        result = window_sums[-1]
        for total in reversed(window_sums[:-1]):
            for _ in range(c):
                result = result.double()
            result = result + total

        return result

    def from_bytes(self, data) -> EdwardsPoint:
        return EdwardsPoint.from_bytes(data)

    def from_hex(self, hexstring: str) -> EdwardsPoint:
        """
        Construct Elliptic curve point from serialized hexstring
        """
        return EdwardsPoint.from_hex(hexstring)

    def __call__(self, x, y) -> EdwardsPoint:
        point = EdwardsPoint.from_affine(Fq(int(x)), Fq(int(y)))
        if not point.is_on_curve():
            raise DecodingError("Invalid curve point!")
        return point
