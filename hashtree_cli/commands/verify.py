"""
CLI Verify Command

Verify a proof document offline, without the tree:
- Recompute the root from the leaf digest and the proof steps
- Compare against the document's root (or a trusted --root)

Usage:
    hashtree verify proof.json [--block DATA] [--root HEX] [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import asdict, dataclass
from pathlib import Path

from hashtree.crypto.hashing import from_hex, get_hasher, to_hex
from hashtree.merkle import verify_proof
from hashtree.schemas.errors import ProofFormatException
from hashtree.schemas.proof import ProofDocument


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


@dataclass
class VerifySummary:
    """Summary of proof verification for CLI output."""
    proof_path: str = ""
    algorithm: str = ""
    format: str = ""
    index: int = 0
    leaf: str = ""
    root: str = ""
    steps: int = 0
    valid: bool = False

    def to_dict(self) -> dict:
        return asdict(self)


def load_document(path: Path) -> ProofDocument:
    """Read and parse a proof document."""
    if not path.exists():
        raise FileNotFoundError(f"Proof file not found: {path}")
    return ProofDocument.from_json(path.read_text())


def verify_cmd(args: Namespace) -> int:
    """Handle verify command."""
    proof_path = Path(args.proof_path)

    try:
        document = load_document(proof_path)
    except ProofFormatException as e:
        if args.json:
            print(e.to_error_model().model_dump_json(), file=sys.stderr)
            return EXIT_RUNTIME_ERROR
        print(f"Error: {e.message}", file=sys.stderr)
        for msg in e.details.get("errors", []):
            print(f"  - {msg}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    hasher = get_hasher(document.algorithm, strict=args.runtime_config.hash.strict)

    if args.block is not None:
        leaf = hasher.hash(args.block.encode("utf-8"))
    else:
        leaf = document.leaf_bytes

    root = from_hex(args.root) if args.root else document.root_bytes

    logger.info(f"Verifying {document.format} proof for leaf {document.index} from {proof_path}")
    valid = verify_proof(root, leaf, document.entries(), hasher)

    summary = VerifySummary(
        proof_path=str(proof_path),
        algorithm=document.algorithm,
        format=document.format,
        index=document.index,
        leaf=to_hex(leaf),
        root=to_hex(root),
        steps=len(document.steps),
        valid=valid,
    )

    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        status = "VALID" if valid else "INVALID"
        print(f"Proof {status}")
        print(f"  leaf {summary.index}: {summary.leaf}")
        print(f"  root: {summary.root}")
        print(f"  steps: {summary.steps} ({summary.format}, {summary.algorithm})")

    return EXIT_SUCCESS if valid else EXIT_VERIFICATION_FAILED
