from typing import Iterable, Sequence, Tuple

from joblib import Parallel, delayed

from ..constant import PEDERSEN_SEED, VECTOR_WIDTH
from ..crs import CRS, get_crs
from ..ecc import EdwardsPoint, EllipticCurve
from ..errors import InvalidInput
from ..field import as_scalar
from ..lagrange import LagrangeBasis
from ..utils import get_n_jobs
from .base import VectorCommitmentScheme


def _commit(E: EllipticCurve, crs: CRS, vector: LagrangeBasis) -> EdwardsPoint:
    return E.multiexp(crs.G, vector.values())


class PedersenVectorCommitment(VectorCommitmentScheme):
    """
    Homomorphic commitment to a vector in Lagrange basis:

        C = v[0] * G[0] + v[1] * G[1] + ... + v[n-1] * G[n-1]

    The generators `G` come from a seed with try-and-increment, so nobody
    knows a discrete-log relation between them. Because the commitment is
    linear in `v`, changing one entry only needs
    `C' = C + (new - old) * G[index]`.

    The scheme holds no state between calls apart from its immutable CRS.
    """

    def __init__(self, width: int = VECTOR_WIDTH, seed: bytes = PEDERSEN_SEED):
        super().__init__(width)
        self.name = "Pedersen-VC"
        self.E = EllipticCurve()
        self.order = self.E.order
        self.seed = seed
        self.crs = None

    def setup(self, crs: CRS = None):
        """
        Derive (or reuse a memoized) CRS for this width and seed.
        A pre-built `crs` can be passed to share one between schemes.
        """
        crs = crs or get_crs(self.width, self.seed)
        if len(crs) != self.width:
            raise InvalidInput(
                f"CRS has {len(crs)} generators, expected {self.width}"
            )

        self.crs = crs
        self.is_setup = True

    def zero_commitment(self) -> EdwardsPoint:
        """Commitment to the zero vector"""
        return self.E.identity()

    def _as_vector(self, vector) -> LagrangeBasis:
        if not isinstance(vector, LagrangeBasis):
            vector = LagrangeBasis(vector)

        if len(vector) != self.width:
            raise InvalidInput(
                f"Vector length must equal {self.width}, got {len(vector)}"
            )

        return vector

    def _check_index(self, index):
        if not isinstance(index, int) or isinstance(index, bool):
            raise InvalidInput(f"Index must be an integer, got {type(index).__name__}")
        if not 0 <= index < self.width:
            raise InvalidInput(f"Index {index} out of range [0, {self.width})")

    def commit(self, vector) -> EdwardsPoint:
        """
        Commit to `vector`, a `LagrangeBasis` or a sequence of ints / `Fr`
        with exactly `width` entries
        """
        assert self.is_setup, "Setup has not been run"

        vector = self._as_vector(vector)
        return _commit(self.E, self.crs, vector)

    def commit_many(self, vectors: Sequence) -> list:
        """
        Commit to independent vectors in parallel batch
        """
        assert self.is_setup, "Setup has not been run"

        vectors = [self._as_vector(v) for v in vectors]
        if len(vectors) <= 1:
            return [_commit(self.E, self.crs, v) for v in vectors]

        return Parallel(n_jobs=get_n_jobs())(
            delayed(_commit)(self.E, self.crs, v) for v in vectors
        )

    def update(
        self, commitment: EdwardsPoint, index: int, old_value, new_value
    ) -> EdwardsPoint:
        """
        Update `commitment` after the entry at `index` changed from
        `old_value` to `new_value`.

        Whether `commitment` really holds `old_value` at `index` is not
        checked, that binding belongs to the caller.
        """
        assert self.is_setup, "Setup has not been run"

        if not isinstance(commitment, EdwardsPoint):
            raise InvalidInput(
                f"Commitment must be an EdwardsPoint, got {type(commitment).__name__}"
            )
        self._check_index(index)

        delta = as_scalar(new_value) - as_scalar(old_value)
        return commitment + self.crs[index] * delta

    def update_sparse(
        self, commitment: EdwardsPoint, changes: Iterable[Tuple[int, object, object]]
    ) -> EdwardsPoint:
        """
        Apply several `(index, old_value, new_value)` changes at once.
        Every change is validated before anything is computed.
        """
        assert self.is_setup, "Setup has not been run"

        if not isinstance(commitment, EdwardsPoint):
            raise InvalidInput(
                f"Commitment must be an EdwardsPoint, got {type(commitment).__name__}"
            )

        generators = []
        deltas = []
        seen = set()
        for change in changes:
            try:
                index, old_value, new_value = change
            except (TypeError, ValueError) as exc:
                raise InvalidInput(
                    "Each change must be an (index, old_value, new_value) triple"
                ) from exc

            self._check_index(index)
            if index in seen:
                raise InvalidInput(f"Index {index} updated more than once")
            seen.add(index)

            generators.append(self.crs[index])
            deltas.append(as_scalar(new_value) - as_scalar(old_value))

        if not generators:
            return commitment

        return commitment + self.E.multiexp(generators, deltas)
