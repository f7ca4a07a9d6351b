"""
Merkle Proofs Convenience Wrappers
Thin wrappers around the tree for callers that work with raw blocks.

This module provides class-based interfaces:
- MerkleProver: Build trees and generate proofs from raw blocks
- MerkleVerifier: Verify proofs, optionally hashing the block first

These are convenience wrappers around merkle_tree.py.
"""
from __future__ import annotations

from typing import Iterable, Sequence

from hashtree.crypto.hashing import DEFAULT_HASHER, Hasher
from hashtree.merkle.merkle_tree import (
    MerkleProof,
    MerkleTree,
    ProofEntry,
    verify_merkle_proof,
    verify_proof,
)


class MerkleProver:
    """
    Convenience class for generating Merkle proofs from raw blocks.

    Example:
        >>> proof = MerkleProver.prove([b"a", b"b", b"c"], index=1)
        >>> MerkleVerifier.verify(proof)
        True
    """

    @staticmethod
    def from_blocks(blocks: Iterable[bytes], hasher: Hasher = DEFAULT_HASHER) -> MerkleTree:
        """Build a tree over raw data blocks."""
        return MerkleTree(blocks, hasher=hasher)

    @staticmethod
    def prove(
        blocks: Sequence[bytes],
        index: int,
        hasher: Hasher = DEFAULT_HASHER,
    ) -> MerkleProof:
        """
        Generate a Merkle proof for the block at the given index.

        Raises:
            OutOfRangeException: If index is out of range
        """
        return MerkleTree(blocks, hasher=hasher).generate_proof(index)

    @staticmethod
    def compute_root(blocks: Sequence[bytes], hasher: Hasher = DEFAULT_HASHER) -> bytes:
        """Compute the root digest for a sequence of raw blocks."""
        return MerkleTree(blocks, hasher=hasher).root_hash


class MerkleVerifier:
    """
    Convenience class for verifying Merkle proofs.

    Example:
        >>> proof = MerkleProver.prove(blocks, index=1)
        >>> MerkleVerifier.verify_block(blocks[1], proof)
        True
    """

    @staticmethod
    def verify(proof: MerkleProof, hasher: Hasher = DEFAULT_HASHER) -> bool:
        """Verify a proof against its own claimed root."""
        return verify_merkle_proof(proof, hasher)

    @staticmethod
    def verify_block(
        block: bytes,
        proof: MerkleProof,
        hasher: Hasher = DEFAULT_HASHER,
    ) -> bool:
        """
        Verify that a raw block is the leaf a proof commits to.

        The block is hashed and checked against the proof's root;
        the leaf digest recorded in the proof is not trusted.
        """
        return verify_proof(proof.root, hasher.hash(block), proof.steps, hasher)

    @staticmethod
    def verify_leaf_in_root(
        leaf: bytes,
        siblings: Sequence[ProofEntry],
        root: bytes,
        hasher: Hasher = DEFAULT_HASHER,
    ) -> bool:
        """Verify a leaf digest against a root using raw components."""
        return verify_proof(root, leaf, siblings, hasher)


__all__ = [
    "MerkleProver",
    "MerkleVerifier",
]
