"""
CLI Tree Commands

Build a tree over data blocks and print its root or a proof.

Usage:
    hashtree root data1 data2 data3 [--lines FILE] [--json]
    hashtree prove 1 data1 data2 data3 [--lines FILE] [--out proof.json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from pathlib import Path

from hashtree.crypto.hashing import to_hex
from hashtree.merkle import MerkleTree, Side
from hashtree.schemas.errors import OutOfRangeException
from hashtree.schemas.proof import ProofDocument


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


def load_blocks(args: Namespace) -> list[bytes]:
    """
    Collect data blocks from positional arguments and --lines.

    Positional blocks come first, then one block per line of the file.
    """
    blocks = [block.encode("utf-8") for block in getattr(args, "blocks", None) or []]

    lines_path = getattr(args, "lines", None)
    if lines_path:
        content = Path(lines_path).read_bytes()
        blocks.extend(content.splitlines())

    return blocks


def build_tree_from_args(args: Namespace) -> MerkleTree:
    config = args.runtime_config
    blocks = load_blocks(args)
    logger.info(f"Building tree over {len(blocks)} blocks with {config.hash.algorithm}")
    return MerkleTree(blocks, hasher=config.build_hasher())


def root_cmd(args: Namespace) -> int:
    """Print the root digest of a tree."""
    tree = build_tree_from_args(args)

    if args.json:
        print(json.dumps({
            "algorithm": tree.hasher.name,
            "leaves": len(tree),
            "depth": tree.depth,
            "root": to_hex(tree.root_hash),
        }, indent=2))
    else:
        print(to_hex(tree.root_hash))

    return EXIT_SUCCESS


def prove_cmd(args: Namespace) -> int:
    """Generate a proof document for one block."""
    tree = build_tree_from_args(args)

    try:
        proof = tree.generate_proof(args.index)
    except OutOfRangeException as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if args.runtime_config.proof.format == "legacy" and any(
        step.side == Side.LEFT for step in proof.steps
    ):
        logger.warning(
            f"Leaf {args.index} has a left-hand sibling; its legacy proof "
            "will not verify. Use proof.format: positional instead."
        )

    document = ProofDocument.from_proof(
        proof,
        algorithm=tree.hasher.name,
        format=args.runtime_config.proof.format,
    )
    output = document.to_json()

    if args.out:
        Path(args.out).write_text(output + "\n")
        logger.info(f"Wrote proof for leaf {args.index} to {args.out}")
    else:
        print(output)

    return EXIT_SUCCESS
