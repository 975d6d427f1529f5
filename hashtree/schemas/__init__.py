"""
Schemas

Error models/exceptions and the portable inclusion proof schema.
"""

from .errors import (
    DigestEncodingException,
    ErrorCodes,
    HashTreeError,
    HashTreeException,
    InvalidValueException,
    PolicyConfigurationException,
    ProofError,
)
from .proof import InclusionProof, ProofStepModel

__all__ = [
    "DigestEncodingException",
    "ErrorCodes",
    "HashTreeError",
    "HashTreeException",
    "InvalidValueException",
    "PolicyConfigurationException",
    "ProofError",
    "InclusionProof",
    "ProofStepModel",
]
