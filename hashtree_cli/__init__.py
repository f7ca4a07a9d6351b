"""
hashtree CLI

Command-line interface for building Merkle trees and checking proofs.

Usage:
    python -m hashtree_cli root data1 data2 data3
    python -m hashtree_cli prove 1 data1 data2 data3 --out proof.json
    python -m hashtree_cli verify proof.json --block data2
    python -m hashtree_cli demo
"""

__version__ = "0.1.0"
