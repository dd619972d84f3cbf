from functools import lru_cache
from typing import Sequence, Union

from .errors import DecodingError, InvalidInput
from .field import Fr, as_scalar
from .utils import batch_modinv


@lru_cache(maxsize=None)
def barycentric_weights(domain_size: int):
    """
    Weights `1 / A'(i)` for the domain `0, 1, ..., domain_size - 1`
    where `A(x) = prod_j (x - j)`, so that `A'(i) = prod_{j != i} (i - j)`
    """
    p = Fr.field_modulus
    weights = []
    for i in range(domain_size):
        w = 1
        for j in range(domain_size):
            if j != i:
                w = w * (i - j) % p
        weights.append(w)

    return tuple(batch_modinv(weights, p))


class LagrangeBasis:
    """
    Polynomial in evaluation form, represented by its values
    on the domain `0, 1, ..., n - 1`.
    """

    __slots__ = ("_values",)

    def __init__(self, values: Sequence[Union[Fr, int]]):
        if len(values) == 0:
            raise InvalidInput("LagrangeBasis requires at least one value")
        object.__setattr__(self, "_values", tuple(as_scalar(v) for v in values))

    def __setattr__(self, name, value):
        raise AttributeError("LagrangeBasis is immutable")

    def __reduce__(self):
        return (type(self), (self._values,))

    @classmethod
    def zero(cls, domain_size: int) -> "LagrangeBasis":
        return cls([Fr(0)] * domain_size)

    @classmethod
    def from_bytes(cls, buffers: Sequence[bytes]) -> "LagrangeBasis":
        """Decode one 32-byte little-endian scalar per evaluation"""
        values = []
        for i, buf in enumerate(buffers):
            try:
                values.append(Fr.from_bytes(buf))
            except DecodingError as exc:
                raise DecodingError(f"scalars[{i}]: {exc}") from exc
        return cls(values)

    def values(self):
        return list(self._values)

    def domain_size(self) -> int:
        return len(self._values)

    def __len__(self):
        return len(self._values)

    def __getitem__(self, index):
        return self._values[index]

    def __iter__(self):
        return iter(self._values)

    def __eq__(self, other):
        if not isinstance(other, LagrangeBasis):
            return NotImplemented
        return self._values == other._values

    def __hash__(self):
        return hash(self._values)

    def __repr__(self):
        return f"LagrangeBasis({[v.n for v in self._values]})"

    def _check_compatible(self, other):
        if not isinstance(other, LagrangeBasis):
            raise TypeError(f"Expected LagrangeBasis, got {type(other).__name__}")
        if len(other) != len(self):
            raise InvalidInput(
                f"Domain size mismatch: {len(self)} and {len(other)}"
            )

    def __add__(self, other):
        self._check_compatible(other)
        return LagrangeBasis([a + b for a, b in zip(self._values, other._values)])

    def __sub__(self, other):
        self._check_compatible(other)
        return LagrangeBasis([a - b for a, b in zip(self._values, other._values)])

    def __mul__(self, other):
        if isinstance(other, LagrangeBasis):
            self._check_compatible(other)
            return LagrangeBasis(
                [a * b for a, b in zip(self._values, other._values)]
            )
        scalar = as_scalar(other)
        return LagrangeBasis([a * scalar for a in self._values])

    def __rmul__(self, other):
        return self.__mul__(other)

    def __neg__(self):
        return LagrangeBasis([-a for a in self._values])

    def with_value(self, index: int, value) -> "LagrangeBasis":
        """Return a copy with the evaluation at `index` replaced"""
        if not 0 <= index < len(self):
            raise InvalidInput(f"Index {index} out of range [0, {len(self)})")
        values = list(self._values)
        values[index] = as_scalar(value)
        return LagrangeBasis(values)

    def evaluate_in_domain(self, index: int) -> Fr:
        if not 0 <= index < len(self):
            raise InvalidInput(f"Index {index} out of range [0, {len(self)})")
        return self._values[index]

    def evaluate(self, point) -> Fr:
        """
        Evaluate the polynomial at an arbitrary point using
        the barycentric formula:

            f(z) = A(z) * sum_i f(i) / (A'(i) * (z - i))
        """
        z = as_scalar(point)
        n = len(self)
        if z.n < n:
            return self._values[z.n]

        p = Fr.field_modulus
        weights = barycentric_weights(n)
        denominators = batch_modinv([(z.n - i) % p for i in range(n)], p)

        a_z = 1
        for i in range(n):
            a_z = a_z * (z.n - i) % p

        total = 0
        for f_i, w_i, d_i in zip(self._values, weights, denominators):
            total += f_i.n * w_i * d_i

        return Fr(a_z * total)
