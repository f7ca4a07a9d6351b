"""
hashtree - Merkle trees with inclusion proofs.

Build a binary hash tree over ordered data blocks, generate and verify
membership proofs, and append or replace blocks.
"""

from hashtree.crypto import Hasher, get_hasher, hash_function_128
from hashtree.merkle import (
    MerkleNode,
    MerkleProof,
    MerkleTree,
    ProofStep,
    Side,
    build_merkle_root,
    build_tree,
    verify_merkle_proof,
    verify_proof,
)
from hashtree.schemas.errors import (
    HashTreeException,
    InvalidInputException,
    OutOfRangeException,
)

__version__ = "0.1.0"

__all__ = [
    "Hasher",
    "get_hasher",
    "hash_function_128",
    "MerkleNode",
    "MerkleProof",
    "MerkleTree",
    "ProofStep",
    "Side",
    "build_merkle_root",
    "build_tree",
    "verify_merkle_proof",
    "verify_proof",
    "HashTreeException",
    "InvalidInputException",
    "OutOfRangeException",
]
