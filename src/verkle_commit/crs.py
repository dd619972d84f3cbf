import hashlib
import logging
from functools import lru_cache
from typing import List, Tuple

from .constant import PEDERSEN_SEED, VECTOR_WIDTH
from .ecc import EdwardsPoint, EllipticCurve, batch_normalize
from .errors import GeneratorDerivationError, InvalidInput
from .field import Fq
from .utils import get_max_derivation_attempts

logger = logging.getLogger(__name__)


def generate_random_elements(
    num_required_points: int, seed: bytes, max_attempts: int = None
) -> List[EdwardsPoint]:
    """
    Derive `num_required_points` generators from `seed` with try-and-increment.

    The i-th candidate hashes `seed || i` (i as 8-byte big-endian) with SHA-256,
    reduces the digest into the base field and treats it as an x-coordinate.
    Candidates with no matching y are skipped. Accepted points are multiplied
    by the cofactor so they land in the prime-order subgroup. The counter keeps
    running across generators, so the output of a smaller request is always a
    prefix of a larger one.
    """
    if num_required_points < 0:
        raise InvalidInput("Number of generators must be non-negative")

    if max_attempts is None:
        max_attempts = get_max_derivation_attempts()
    E = EllipticCurve()

    points = []
    i = 0
    while len(points) < num_required_points:
        if i >= max_attempts:
            logger.error(
                "Generator derivation gave up after %d candidates (%d/%d found)",
                i,
                len(points),
                num_required_points,
            )
            raise GeneratorDerivationError(
                f"Could not derive {num_required_points} generators "
                f"within {max_attempts} attempts"
            )

        hasher = hashlib.sha256()
        hasher.update(seed)
        hasher.update(i.to_bytes(8, "big"))
        i += 1

        x = Fq.from_be_bytes_mod_order(hasher.digest())
        point = E.get_point_from_x(x, choose_largest=False)
        if point is None:
            continue

        point = point.mul_by_cofactor()
        if point.is_zero():
            continue

        points.append(point)

    logger.debug(
        "Derived %d generators from %d candidates", num_required_points, i
    )

    return batch_normalize(points)


class CRS:
    """
    Public parameters of the vector commitment: `n` generators `G`
    derived from a seed, and an auxiliary point `Q`.

    A CRS is immutable and safe to share between threads.
    """

    __slots__ = ("n", "seed", "G", "Q")

    def __init__(self, n: int, seed: bytes):
        G = tuple(generate_random_elements(n, seed))
        self.assert_dedup(G)

        object.__setattr__(self, "n", n)
        object.__setattr__(self, "seed", bytes(seed))
        object.__setattr__(self, "G", G)
        object.__setattr__(self, "Q", EllipticCurve().generator())

    def __setattr__(self, name, value):
        raise AttributeError("CRS is immutable")

    def __reduce__(self):
        return (get_crs, (self.n, self.seed))

    def __len__(self):
        return self.n

    def __getitem__(self, index):
        return self.G[index]

    def __iter__(self):
        return iter(self.G)

    def __eq__(self, other):
        if not isinstance(other, CRS):
            return NotImplemented
        return self.G == other.G and self.Q == other.Q

    def __hash__(self):
        return hash((self.n, self.seed))

    def __repr__(self):
        return f"CRS(n={self.n}, seed={self.seed!r})"

    @staticmethod
    def assert_dedup(points: Tuple[EdwardsPoint, ...]):
        encoded = {p.to_bytes() for p in points}
        if len(encoded) != len(points):
            raise GeneratorDerivationError("Generated points are not unique")

    @classmethod
    def default(cls) -> "CRS":
        """Shared CRS for 256-wide verkle nodes"""
        return get_crs(VECTOR_WIDTH, PEDERSEN_SEED)


@lru_cache(maxsize=None)
def get_crs(n: int, seed: bytes) -> CRS:
    """Memoized CRS construction, derivation is a pure function of its inputs"""
    return CRS(n, seed)
