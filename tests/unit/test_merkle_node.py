"""
Merkle Node Unit Tests
Tests for hashtree/merkle/node.py
"""
import gc

from hashtree.crypto.hashing import hash_function_128 as H
from hashtree.merkle.node import MerkleNode


class TestMerkleNode:
    """Tests for node construction and linkage."""

    def test_leaf(self):
        node = MerkleNode(hash=H(b"a"))

        assert node.is_leaf
        assert node.parent is None
        assert node.sibling() is None

    def test_children_get_parent(self):
        left = MerkleNode(hash=H(b"a"))
        right = MerkleNode(hash=H(b"b"))

        parent = MerkleNode(hash=H(left.hash + right.hash), left=left, right=right)

        assert not parent.is_leaf
        assert left.parent is parent
        assert right.parent is parent

    def test_sibling(self):
        left = MerkleNode(hash=H(b"a"))
        right = MerkleNode(hash=H(b"b"))
        parent = MerkleNode(hash=H(left.hash + right.hash), left=left, right=right)

        assert left.sibling() is right
        assert right.sibling() is left
        assert parent.sibling() is None

    def test_sibling_of_duplicated_node(self):
        """The synthetic partner of an odd node is a distinct node."""
        odd = MerkleNode(hash=H(b"c"))
        copy = MerkleNode(hash=odd.hash)
        parent = MerkleNode(hash=H(odd.hash + copy.hash), left=odd, right=copy)

        assert odd.sibling() is copy
        assert copy.sibling() is odd
        assert odd.parent is parent

    def test_identity_equality(self):
        """Nodes with the same digest are distinct."""
        a = MerkleNode(hash=H(b"same"))
        b = MerkleNode(hash=H(b"same"))

        assert a != b
        assert a == a

    def test_parent_link_is_weak(self):
        """A child does not keep its parent alive."""
        child = MerkleNode(hash=H(b"a"))
        parent = MerkleNode(hash=H(child.hash + child.hash), left=child, right=MerkleNode(hash=child.hash))

        assert child.parent is parent

        del parent
        gc.collect()

        assert child.parent is None

    def test_parent_setter_clears(self):
        child = MerkleNode(hash=H(b"a"))
        parent = MerkleNode(hash=H(b"p"), left=child, right=MerkleNode(hash=H(b"b")))
        assert child.parent is parent

        child.parent = None

        assert child.parent is None
        assert child.sibling() is None
        assert parent.left is child

    def test_repr_omits_parent(self):
        node = MerkleNode(hash=b"\x00")

        assert "_parent_ref" not in repr(node)
