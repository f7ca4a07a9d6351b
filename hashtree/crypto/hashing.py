"""
Hashing Utilities
The hash collaborator used for leaf and parent digests.

This module provides:
- SHA3-256 truncated to 128 bits (the default digest)
- A Hasher abstraction over fixed-width hash algorithms
- Hex encoding/decoding helpers

The tree consumes the hasher at exactly two points:
1. Leaf hashing: leaf = H(data)
2. Parent hashing: parent = H(left + right)

Determinism Notes:
- All algorithms are deterministic; empty input hashes like any other
- Raw bytes are hashed exactly as given
"""
from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import Callable

from hashtree.schemas.errors import InvalidInputException


# Width of the default digest in bytes
DIGEST_SIZE_128: int = 16

DEFAULT_ALGORITHM: str = "sha3-128"


def hash_function_128(data: bytes) -> bytes:
    """
    SHA3-256 digest of raw bytes, truncated to 128 bits.

    Args:
        data: Raw bytes to hash

    Returns:
        16-byte digest

    Example:
        >>> len(hash_function_128(b"data1"))
        16
    """
    return hashlib.sha3_256(data).digest()[:DIGEST_SIZE_128]


def _sha3_256(data: bytes) -> bytes:
    return hashlib.sha3_256(data).digest()


def _sha256(data: bytes) -> bytes:
    return hashlib.sha256(data).digest()


def _blake2b_128(data: bytes) -> bytes:
    return hashlib.blake2b(data, digest_size=16).digest()


# name -> (function, digest size)
_ALGORITHMS: dict[str, tuple[Callable[[bytes], bytes], int]] = {
    "sha3-128": (hash_function_128, DIGEST_SIZE_128),
    "sha3-256": (_sha3_256, 32),
    "sha256": (_sha256, 32),
    "blake2b-128": (_blake2b_128, 16),
}


@dataclass(frozen=True)
class Hasher:
    """
    A named, fixed-width hash function.

    Attributes:
        name: Registry name of the algorithm (e.g. "sha3-128")
        func: The underlying bytes -> digest function
        digest_size: Width in bytes of every digest func produces
        strict: When True, hash_pair() rejects inputs that are not
                exactly digest_size bytes wide
    """
    name: str
    func: Callable[[bytes], bytes]
    digest_size: int
    strict: bool = False

    def hash(self, data: bytes) -> bytes:
        """Hash raw bytes (leaf hashing)."""
        return self.func(data)

    def hash_pair(self, left: bytes, right: bytes) -> bytes:
        """
        Hash the concatenation of two digests (parent hashing).

        Args:
            left: Left child digest
            right: Right child digest

        Returns:
            Digest of left + right

        Raises:
            InvalidInputException: In strict mode, if either input is not
                exactly digest_size bytes
        """
        if self.strict:
            for side, value in (("left", left), ("right", right)):
                if len(value) != self.digest_size:
                    raise InvalidInputException(
                        f"{side} digest must be {self.digest_size} bytes, "
                        f"got {len(value)}",
                        details={
                            "algorithm": self.name,
                            "side": side,
                            "expected": self.digest_size,
                            "actual": len(value),
                        },
                    )
        return self.func(left + right)


def available_algorithms() -> list[str]:
    """Names accepted by get_hasher()."""
    return sorted(_ALGORITHMS)


def get_hasher(name: str = DEFAULT_ALGORITHM, strict: bool = False) -> Hasher:
    """
    Look up a hasher by algorithm name.

    Raises:
        InvalidInputException: If the algorithm is unknown
    """
    try:
        func, size = _ALGORITHMS[name]
    except KeyError:
        raise InvalidInputException(
            f"Unknown hash algorithm: {name!r}",
            details={"algorithm": name, "available": available_algorithms()},
        ) from None
    return Hasher(name=name, func=func, digest_size=size, strict=strict)


DEFAULT_HASHER: Hasher = get_hasher(DEFAULT_ALGORITHM)


def hash_concat(left: bytes, right: bytes) -> bytes:
    """
    Hash the concatenation of two byte sequences with the default hasher.

    parent = H(left + right)
    """
    return DEFAULT_HASHER.hash_pair(left, right)


def to_hex(data: bytes) -> str:
    """
    Convert bytes to a lowercase hexadecimal string (no prefix).

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        'deadbeef'
    """
    return data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert a hexadecimal string to bytes.

    An optional 0x prefix is accepted.

    Raises:
        ValueError: If the string has odd length or contains
                   invalid hex characters
    """
    hex_content = hex_string[2:] if hex_string.startswith(("0x", "0X")) else hex_string

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length, got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


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
