"""
CLI Demo Command

Walks through building a tree, proving and verifying a leaf, then
inserting and updating blocks.

Usage:
    hashtree demo
"""

from __future__ import annotations

import sys
from argparse import Namespace

from hashtree.crypto.hashing import to_hex
from hashtree.merkle import MerkleTree
from hashtree.schemas.errors import OutOfRangeException


EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1

DEMO_BLOCKS = [b"data1", b"data2", b"data3", b"data4"]


def demo_cmd(args: Namespace) -> int:
    """Handle demo command."""
    hasher = args.runtime_config.build_hasher()
    tree = MerkleTree(DEMO_BLOCKS, hasher=hasher)
    print(f"Merkle Root Hash: {to_hex(tree.root_hash)}")

    leaf_index = 0
    try:
        proof = tree.generate_proof(leaf_index)
    except OutOfRangeException as e:
        print(f"Error generating proof: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    print(f"Merkle proof for leaf {leaf_index}:")
    for step in proof.steps:
        print(f"  {to_hex(step.sibling)} ({step.side.value})")

    leaf_hash = hasher.hash(DEMO_BLOCKS[leaf_index])
    print(f"Proof valid: {tree.verify(leaf_hash, proof.steps)}")

    tree.insert_leaf(b"data5")
    print(f"New Merkle Root Hash after insertion: {to_hex(tree.root_hash)}")

    update_index = 1
    try:
        tree.update_leaf(update_index, b"updated_data2")
    except OutOfRangeException as e:
        print(f"Error updating leaf: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    print(f"New Merkle Root Hash after updating leaf {update_index}: {to_hex(tree.root_hash)}")

    return EXIT_SUCCESS
