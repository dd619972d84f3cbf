from .base import VectorCommitmentScheme
from .pedersen import PedersenVectorCommitment
