class VerkleCommitError(Exception):
    """Base class for every error raised by this package"""


class InvalidInput(VerkleCommitError, ValueError):
    """
    Malformed caller input: wrong element count, out-of-range index
    or an argument of the wrong shape
    """


class DecodingError(InvalidInput):
    """
    Byte buffer that does not encode a canonical field element
    or a point on the curve
    """


class GeneratorDerivationError(VerkleCommitError, RuntimeError):
    """Generator derivation could not produce the requested points"""
