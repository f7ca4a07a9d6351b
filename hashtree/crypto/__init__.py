"""
Core cryptographic utilities.

Provides the hash collaborator used to build and verify trees.
"""
from .hashing import (
    DIGEST_SIZE_128,
    DEFAULT_ALGORITHM,
    DEFAULT_HASHER,
    Hasher,
    hash_function_128,
    available_algorithms,
    get_hasher,
    hash_concat,
    to_hex,
    from_hex,
)

__all__ = [
    "DIGEST_SIZE_128",
    "DEFAULT_ALGORITHM",
    "DEFAULT_HASHER",
    "Hasher",
    "hash_function_128",
    "available_algorithms",
    "get_hasher",
    "hash_concat",
    "to_hex",
    "from_hex",
]
