"""
Merkle Tree Implementation
Binary hash tree construction, proof generation, verification and mutation.

This module provides:
- Node-based tree construction with parent links for proof extraction
- Merkle proof generation for any leaf index
- Merkle proof verification without access to the tree
- Leaf insertion and update (full rebuild)

Commitment Rules (Hard Contracts):
1. Leaf hashing: leaf = H(data)
2. Parent hashing: parent = H(left + right)
3. Padding rule: an odd node at any level is paired with a new node
   carrying a copy of its digest
4. Single leaf: root = leaf
5. Empty tree: root_hash = H(b"")

Proof Format:
- Siblings are listed bottom-up, from the leaf's immediate sibling to the
  level just below the root
- Each step records which side the sibling sat on, so the verifier can
  restore the original concatenation order
- Bare digests (no side) are folded as H(current + sibling)

Determinism Notes:
- No randomness or non-deterministic ordering
- Leaf order is the caller's order; this module never sorts leaves
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Sequence, Union

from hashtree.crypto.hashing import DEFAULT_HASHER, Hasher
from hashtree.merkle.node import MerkleNode
from hashtree.schemas.errors import EmptyTreeException, OutOfRangeException


logger = logging.getLogger(__name__)


# Empty tree sentinel for the default hasher
EMPTY_TREE_ROOT: bytes = DEFAULT_HASHER.hash(b"")


class Side(str, Enum):
    """Position of a sibling relative to the node being proven."""
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class ProofStep:
    """
    One level of an authentication path.

    Attributes:
        sibling: Digest of the sibling node at this level
        side: Whether the sibling is the LEFT or RIGHT child of the parent
    """
    sibling: bytes
    side: Side


ProofEntry = Union[ProofStep, bytes]


@dataclass(frozen=True)
class MerkleProof:
    """
    A Merkle proof for a single leaf.

    Attributes:
        leaf: The leaf digest being proven
        index: The 0-based index of the leaf
        steps: Sibling steps from bottom to top of the tree
        root: The root digest this proof was generated against
    """
    leaf: bytes
    index: int
    steps: tuple[ProofStep, ...]
    root: bytes

    def __post_init__(self) -> None:
        """Validate proof structure."""
        if self.index < 0:
            raise ValueError(f"Leaf index must be non-negative, got {self.index}")
        # Accept any iterable of steps but store an immutable tuple
        object.__setattr__(self, "steps", tuple(self.steps))

    @property
    def siblings(self) -> list[bytes]:
        """Bare sibling digests, bottom-up."""
        return [step.sibling for step in self.steps]

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self):
        return iter(self.steps)


def merkle_parent(left: bytes, right: bytes, hasher: Hasher = DEFAULT_HASHER) -> bytes:
    """
    Compute the parent digest of two child digests.

    parent = H(left + right)
    """
    return hasher.hash_pair(left, right)


def build_tree(nodes: Sequence[MerkleNode], hasher: Hasher = DEFAULT_HASHER) -> MerkleNode:
    """
    Build a binary hash tree bottom-up and return its root.

    Algorithm:
    1. If a single node remains, it is the root
    2. Otherwise pair nodes left to right; each pair gets a new parent
       with hash H(left.hash + right.hash)
    3. An odd trailing node is paired with a new node holding a copy of
       its digest (duplicated by value, never by identity)
    4. Repeat on the parent level

    Every parent registers itself as the parent of both children.

    Args:
        nodes: Leaf nodes in order
        hasher: Hash collaborator for parent digests

    Returns:
        The root node

    Raises:
        EmptyTreeException: If nodes is empty
    """
    if len(nodes) == 0:
        raise EmptyTreeException()

    level: list[MerkleNode] = list(nodes)

    while len(level) > 1:
        parents: list[MerkleNode] = []
        for i in range(0, len(level), 2):
            left = level[i]
            if i + 1 < len(level):
                right = level[i + 1]
            else:
                right = MerkleNode(hash=left.hash)
            parents.append(
                MerkleNode(
                    hash=hasher.hash_pair(left.hash, right.hash),
                    left=left,
                    right=right,
                )
            )
        level = parents

    return level[0]


def build_merkle_root(leaves: Sequence[bytes], hasher: Hasher = DEFAULT_HASHER) -> bytes:
    """
    Compute the root digest of a sequence of leaf digests.

    Produces the same root as build_tree() without materialising nodes.

    Padding Rule: Duplicate last digest at each level if odd.
    Example: [a, b, c] -> [a, b, c, c] -> [parent(a,b), parent(c,c)]

    Args:
        leaves: Leaf digests, order preserved
        hasher: Hash collaborator

    Returns:
        Root digest, or H(b"") for an empty sequence
    """
    if len(leaves) == 0:
        return hasher.hash(b"")

    current_level: list[bytes] = list(leaves)

    while len(current_level) > 1:
        if len(current_level) % 2 == 1:
            current_level.append(current_level[-1])

        current_level = [
            hasher.hash_pair(current_level[i], current_level[i + 1])
            for i in range(0, len(current_level), 2)
        ]

    return current_level[0]


def compute_tree_depth(num_leaves: int) -> int:
    """
    Compute the depth of a tree with the given number of leaves.

    Depth counts levels from leaves to root inclusive: a single leaf has
    depth 1, two leaves depth 2. An empty tree has depth 0.
    """
    if num_leaves == 0:
        return 0

    depth = 1
    n = num_leaves
    while n > 1:
        n = (n + 1) // 2
        depth += 1

    return depth


def verify_proof(
    root_hash: bytes,
    leaf_hash: bytes,
    proof: Iterable[ProofEntry],
    hasher: Hasher = DEFAULT_HASHER,
) -> bool:
    """
    Verify that leaf_hash and proof reconstruct root_hash.

    Algorithm:
    1. Start with the leaf digest
    2. For each entry, bottom-up:
       - ProofStep with side LEFT:  current = H(sibling + current)
       - ProofStep with side RIGHT: current = H(current + sibling)
       - bare digest:               current = H(current + sibling)
    3. Compare the result with root_hash byte for byte

    A mismatching proof yields False, as does an entry that is neither
    a ProofStep nor a bytes digest (e.g. a hex string). Errors raised by the hasher
    itself (e.g. a strict hasher rejecting a malformed sibling width)
    propagate to the caller.

    Args:
        root_hash: The trusted root digest
        leaf_hash: Digest of the leaf being proven
        proof: Proof entries, bottom-up
        hasher: Hash collaborator the tree was built with

    Returns:
        True if the proof is valid, False otherwise
    """
    current = leaf_hash

    if not isinstance(leaf_hash, (bytes, bytearray)):
        return False

    for entry in proof:
        if isinstance(entry, ProofStep):
            if not isinstance(entry.sibling, (bytes, bytearray)):
                return False
            if entry.side == Side.LEFT:
                current = hasher.hash_pair(entry.sibling, current)
            else:
                current = hasher.hash_pair(current, entry.sibling)
        elif isinstance(entry, (bytes, bytearray)):
            current = hasher.hash_pair(current, entry)
        else:
            return False

    return current == root_hash


def verify_merkle_proof(proof: MerkleProof, hasher: Hasher = DEFAULT_HASHER) -> bool:
    """Verify a self-describing MerkleProof against its own claimed root."""
    return verify_proof(proof.root, proof.leaf, proof.steps, hasher)


class MerkleTree:
    """
    A Merkle tree over an ordered list of data blocks.

    The tree owns its nodes: `root` holds the whole structure and `leaves`
    holds the leaf nodes in input order. Mutations rebuild every internal
    node; leaf node objects survive updates.

    Example:
        >>> tree = MerkleTree([b"data1", b"data2", b"data3"])
        >>> proof = tree.generate_proof(1)
        >>> verify_merkle_proof(proof)
        True
    """

    def __init__(
        self,
        data: Iterable[bytes] = (),
        hasher: Hasher = DEFAULT_HASHER,
    ) -> None:
        self.hasher = hasher
        self.leaves: list[MerkleNode] = [
            MerkleNode(hash=hasher.hash(block)) for block in data
        ]
        self.root: MerkleNode | None = None
        self._rebuild()

    @classmethod
    def from_leaf_hashes(
        cls,
        leaf_hashes: Iterable[bytes],
        hasher: Hasher = DEFAULT_HASHER,
    ) -> "MerkleTree":
        """Build a tree from pre-computed leaf digests."""
        tree = cls(hasher=hasher)
        tree.leaves = [MerkleNode(hash=digest) for digest in leaf_hashes]
        tree._rebuild()
        return tree

    def __len__(self) -> int:
        return len(self.leaves)

    def __repr__(self) -> str:
        return (
            f"MerkleTree(leaves={len(self.leaves)}, hasher={self.hasher.name!r}, "
            f"root={self.root_hash.hex()})"
        )

    @property
    def root_hash(self) -> bytes:
        """Root digest; H(b"") for an empty tree."""
        if self.root is None:
            return self.hasher.hash(b"")
        return self.root.hash

    @property
    def leaf_hashes(self) -> list[bytes]:
        return [leaf.hash for leaf in self.leaves]

    @property
    def depth(self) -> int:
        return compute_tree_depth(len(self.leaves))

    def _check_index(self, index: int) -> None:
        if index < 0 or index >= len(self.leaves):
            raise OutOfRangeException(index=index, size=len(self.leaves))

    def _rebuild(self) -> None:
        if not self.leaves:
            self.root = None
            return
        self.root = build_tree(self.leaves, self.hasher)
        logger.debug(
            f"Rebuilt tree over {len(self.leaves)} leaves, root={self.root.hash.hex()}"
        )

    def generate_proof(self, index: int) -> MerkleProof:
        """
        Generate the authentication path for the leaf at index.

        Walks from the leaf to the root, recording at each level the
        digest in the parent slot not occupied by the current node.

        Args:
            index: 0-based leaf index

        Returns:
            MerkleProof with steps ordered bottom-up

        Raises:
            OutOfRangeException: If index is outside [0, len(leaves))
        """
        self._check_index(index)

        node = self.leaves[index]
        steps: list[ProofStep] = []

        while node is not self.root:
            parent = node.parent
            sibling = node.sibling()
            side = Side.RIGHT if parent.left is node else Side.LEFT

            if sibling is not None:
                steps.append(ProofStep(sibling=sibling.hash, side=side))
            else:
                steps.append(ProofStep(sibling=node.hash, side=side))

            node = parent

        logger.debug(f"Generated proof for leaf {index} with {len(steps)} steps")

        return MerkleProof(
            leaf=self.leaves[index].hash,
            index=index,
            steps=tuple(steps),
            root=self.root.hash,
        )

    def verify(self, leaf_hash: bytes, proof: Iterable[ProofEntry]) -> bool:
        """Verify a proof against this tree's current root."""
        return verify_proof(self.root_hash, leaf_hash, proof, self.hasher)

    def insert_leaf(self, data: bytes) -> None:
        """
        Append a new block and rebuild the tree.

        All previous internal nodes are discarded.
        """
        self.leaves.append(MerkleNode(hash=self.hasher.hash(data)))
        self._rebuild()

    def update_leaf(self, index: int, data: bytes) -> None:
        """
        Replace the block at index and rebuild the tree.

        The existing leaf node is kept and its digest overwritten, so
        outside references to it see the new content.

        Raises:
            OutOfRangeException: If index is outside [0, len(leaves));
                the tree is left unchanged
        """
        self._check_index(index)
        self.leaves[index].hash = self.hasher.hash(data)
        self._rebuild()


__all__ = [
    "EMPTY_TREE_ROOT",
    "Side",
    "ProofStep",
    "ProofEntry",
    "MerkleProof",
    "MerkleTree",
    "merkle_parent",
    "build_tree",
    "build_merkle_root",
    "compute_tree_depth",
    "verify_proof",
    "verify_merkle_proof",
]
