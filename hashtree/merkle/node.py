"""
Merkle Tree Node

A single vertex of the binary hash tree.

Ownership:
- A node owns its children through `left` / `right`
- The `parent` link is a weak reference and never keeps a node alive;
  it exists only so proof generation can walk from a leaf up to the root
"""
from __future__ import annotations

import weakref
from dataclasses import dataclass, field
from typing import Optional


@dataclass(eq=False)
class MerkleNode:
    """
    One node of a Merkle tree.

    Nodes compare by identity: two distinct nodes carrying the same digest
    (e.g. an odd node and its synthetic duplicate) are never equal.

    Attributes:
        hash: Fixed-width digest of this node
        left: Left child, None for a leaf
        right: Right child, None for a leaf
    """
    hash: bytes
    left: Optional[MerkleNode] = None
    right: Optional[MerkleNode] = None
    _parent_ref: Optional[weakref.ReferenceType] = field(
        default=None, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        if self.left is not None:
            self.left.parent = self
        if self.right is not None:
            self.right.parent = self

    @property
    def parent(self) -> Optional[MerkleNode]:
        """The parent node, or None for a root."""
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    @parent.setter
    def parent(self, node: Optional[MerkleNode]) -> None:
        self._parent_ref = weakref.ref(node) if node is not None else None

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def sibling(self) -> Optional[MerkleNode]:
        """
        The node occupying the other slot of this node's parent.

        Returns None for a root, or if the other slot is empty.
        """
        parent = self.parent
        if parent is None:
            return None
        if parent.left is self:
            return parent.right
        return parent.left


__all__ = ["MerkleNode"]
