"""
Merkle Tree and Proofs
Binary hash tree construction, proof generation/verification and mutation.

This module provides:
- MerkleTree: Tree over ordered data blocks with insert/update
- MerkleProof / ProofStep: Inclusion proofs with per-step sibling side
- build_tree / build_merkle_root: Tree construction
- verify_proof / verify_merkle_proof: Proof verification without the tree

Commitment Rules:
1. Leaf hashing: H(data)
2. Parent hashing: H(left + right)
3. Padding: Duplicate last node (by value) if odd number at any level
4. Single leaf: root = leaf
5. Empty tree: root_hash = H(b"")

Usage:
    from hashtree.merkle import MerkleTree, verify_proof

    tree = MerkleTree([b"data1", b"data2", b"data3"])
    proof = tree.generate_proof(2)
    assert verify_proof(tree.root_hash, proof.leaf, proof.steps)

    tree.insert_leaf(b"data4")
    tree.update_leaf(0, b"updated_data1")
"""
from .node import MerkleNode

from .merkle_tree import (
    EMPTY_TREE_ROOT,
    Side,
    ProofStep,
    ProofEntry,
    MerkleProof,
    MerkleTree,
    merkle_parent,
    build_tree,
    build_merkle_root,
    compute_tree_depth,
    verify_proof,
    verify_merkle_proof,
)

from .merkle_proofs import (
    MerkleProver,
    MerkleVerifier,
)


__all__ = [
    # Core types
    "MerkleNode",
    "MerkleTree",
    "MerkleProof",
    "ProofStep",
    "ProofEntry",
    "Side",
    "EMPTY_TREE_ROOT",
    # Core functions
    "merkle_parent",
    "build_tree",
    "build_merkle_root",
    "compute_tree_depth",
    "verify_proof",
    "verify_merkle_proof",
    # Convenience classes
    "MerkleProver",
    "MerkleVerifier",
]
