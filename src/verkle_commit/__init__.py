"""
Pedersen vector commitments over Bandersnatch for verkle tree nodes
"""

from .commitment import PedersenVectorCommitment
from .crs import CRS
from .ecc import EdwardsPoint, EllipticCurve
from .errors import DecodingError, GeneratorDerivationError, InvalidInput
from .field import Fq, Fr
from .lagrange import LagrangeBasis
