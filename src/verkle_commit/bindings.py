"""
Byte-level interface for host environments that have no curve types of
their own. Scalars travel as 32-byte little-endian buffers and commitments
as 128-byte `X || Y || T || Z` buffers. All functions use the shared
256-wide CRS derived from `PEDERSEN_SEED`.
"""

from functools import lru_cache
from typing import List, Sequence

from .commitment.pedersen import PedersenVectorCommitment
from .constant import VECTOR_WIDTH
from .ecc import EdwardsPoint
from .errors import DecodingError, InvalidInput
from .field import Fr
from .lagrange import LagrangeBasis


@lru_cache(maxsize=None)
def _scheme() -> PedersenVectorCommitment:
    scheme = PedersenVectorCommitment(VECTOR_WIDTH)
    scheme.setup()
    return scheme


def _check_buffer(name: str, data):
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise InvalidInput(f"{name}: expected bytes-like object, got {type(data).__name__}")


def _decode_scalar(name: str, data) -> Fr:
    _check_buffer(name, data)
    try:
        return Fr.from_bytes(data)
    except DecodingError as exc:
        raise DecodingError(f"{name}: {exc}") from exc


def _decode_point(name: str, data) -> EdwardsPoint:
    _check_buffer(name, data)
    try:
        point = EdwardsPoint.from_bytes(data)
    except DecodingError as exc:
        raise DecodingError(f"{name}: {exc}") from exc

    # outside the subgroup the addition formulas can land on a point at infinity
    if not point.is_in_prime_subgroup():
        raise DecodingError(f"{name}: point is not in the prime-order subgroup")

    return point


def _as_list(name: str, items) -> list:
    if isinstance(items, (bytes, bytearray, memoryview, str)):
        raise InvalidInput(f"{name}: expected a sequence, got {type(items).__name__}")
    try:
        return list(items)
    except TypeError as exc:
        raise InvalidInput(f"{name}: expected a sequence, got {type(items).__name__}") from exc


def _check_index(index):
    if not isinstance(index, int) or isinstance(index, bool):
        raise InvalidInput(f"index: expected int, got {type(index).__name__}")
    if not 0 <= index < VECTOR_WIDTH:
        raise InvalidInput(f"index: {index} out of range [0, {VECTOR_WIDTH})")


def _decode_vector(scalars: Sequence[bytes], name: str = "scalars") -> LagrangeBasis:
    scalars = _as_list(name, scalars)
    if len(scalars) != VECTOR_WIDTH:
        raise InvalidInput(
            f"{name}: expected {VECTOR_WIDTH} scalars, got {len(scalars)}"
        )
    return LagrangeBasis(
        [_decode_scalar(f"{name}[{i}]", s) for i, s in enumerate(scalars)]
    )


def commit(scalars: Sequence[bytes]) -> bytes:
    """
    Commit to 256 scalars, each a 32-byte little-endian field element.
    Return the 128-byte encoding of the commitment.
    """
    vector = _decode_vector(scalars)
    return _scheme().commit(vector).to_bytes()


def commit_batch(vectors: Sequence[Sequence[bytes]]) -> List[bytes]:
    """Commit to several independent vectors, see `commit`"""
    vectors = _as_list("vectors", vectors)
    decoded = [_decode_vector(v, f"vectors[{i}]") for i, v in enumerate(vectors)]
    return [c.to_bytes() for c in _scheme().commit_many(decoded)]


def update_commitment(index: int, old: bytes, new: bytes, old_commitment: bytes) -> bytes:
    """
    Update a 128-byte commitment after the scalar at `index` changed
    from `old` to `new`. Return the 128-byte encoding of the new commitment.
    """
    _check_index(index)
    old_value = _decode_scalar("old", old)
    new_value = _decode_scalar("new", new)
    commitment = _decode_point("old_commitment", old_commitment)

    return _scheme().update(commitment, index, old_value, new_value).to_bytes()


def update_commitment_sparse(
    indices: Sequence[int],
    old_values: Sequence[bytes],
    new_values: Sequence[bytes],
    old_commitment: bytes,
) -> bytes:
    """
    Apply several single-entry updates at once, `indices[k]` changing
    from `old_values[k]` to `new_values[k]`
    """
    indices = _as_list("indices", indices)
    old_values = _as_list("old_values", old_values)
    new_values = _as_list("new_values", new_values)
    if not len(indices) == len(old_values) == len(new_values):
        raise InvalidInput(
            "indices, old_values and new_values must have the same length"
        )

    changes = []
    for k, index in enumerate(indices):
        try:
            _check_index(index)
        except InvalidInput as exc:
            raise InvalidInput(f"indices[{k}]: {exc}") from exc
        changes.append(
            (
                index,
                _decode_scalar(f"old_values[{k}]", old_values[k]),
                _decode_scalar(f"new_values[{k}]", new_values[k]),
            )
        )

    commitment = _decode_point("old_commitment", old_commitment)
    return _scheme().update_sparse(commitment, changes).to_bytes()
