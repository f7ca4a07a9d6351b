"""
Schemas

Error taxonomy shared by every hashtree module. The serializable proof
document lives in hashtree.schemas.proof.
"""
from .errors import (
    ErrorCodes,
    HashTreeError,
    HashTreeException,
    OutOfRangeException,
    InvalidInputException,
    EmptyTreeException,
    ProofFormatException,
    ConfigException,
)

__all__ = [
    "ErrorCodes",
    "HashTreeError",
    "HashTreeException",
    "OutOfRangeException",
    "InvalidInputException",
    "EmptyTreeException",
    "ProofFormatException",
    "ConfigException",
]
