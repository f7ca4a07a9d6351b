"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m hashtree_cli root <block>... [--lines FILE] [--json]
    python -m hashtree_cli prove <index> <block>... [--lines FILE] [--out PATH]
    python -m hashtree_cli verify <proof_path> [--block DATA] [--root HEX] [--json]
    python -m hashtree_cli demo
    python -m hashtree_cli config --init | --show

Environment Variables:
    HASHTREE_HASH_ALGORITHM     Hash algorithm (default: sha3-128)
    HASHTREE_STRICT_HASH        Enforce digest widths (default: false)
    HASHTREE_PROOF_FORMAT       positional or legacy (default: positional)
    HASHTREE_LOG_LEVEL          Log level (default: INFO)
    HASHTREE_LOG_FILE           Also log to this file
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from hashtree.config import get_default_config_template
from hashtree.crypto.hashing import available_algorithms
from hashtree.schemas.errors import HashTreeException
from hashtree_cli import __version__
from hashtree_cli.commands import demo, tree, verify
from hashtree_cli.config import load_config


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )


def _add_block_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "blocks",
        nargs="*",
        type=str,
        help="Data blocks (UTF-8), in order",
    )
    parser.add_argument(
        "--lines",
        type=str,
        default=None,
        help="File with one additional data block per line",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="hashtree",
        description="Build Merkle trees, generate inclusion proofs and verify them.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to YAML configuration file (default: ./hashtree.yaml or ~/.config/hashtree/config.yaml)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--algorithm",
        type=str,
        default=None,
        choices=available_algorithms(),
        help="Hash algorithm (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- root command ---
    root_parser = subparsers.add_parser(
        "root",
        help="Print the root hash of a tree over the given blocks",
    )
    _add_block_arguments(root_parser)
    root_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON",
    )
    root_parser.set_defaults(func=tree.root_cmd)

    # --- prove command ---
    prove_parser = subparsers.add_parser(
        "prove",
        help="Generate an inclusion proof for one block",
    )
    prove_parser.add_argument(
        "index",
        type=int,
        help="0-based index of the block to prove",
    )
    _add_block_arguments(prove_parser)
    prove_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Write the proof document to this path instead of stdout",
    )
    prove_parser.set_defaults(func=tree.prove_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify a proof document offline",
    )
    verify_parser.add_argument(
        "proof_path",
        type=str,
        help="Path to a JSON proof document",
    )
    verify_parser.add_argument(
        "--block",
        type=str,
        default=None,
        help="Raw block to hash and check instead of the document's leaf digest",
    )
    verify_parser.add_argument(
        "--root",
        type=str,
        default=None,
        help="Trusted root hash (hex) to check against instead of the document's root",
    )
    verify_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON report",
    )
    verify_parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Print tracebacks on errors",
    )
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- demo command ---
    demo_parser = subparsers.add_parser(
        "demo",
        help="Build, prove, verify, insert and update on a sample tree",
    )
    demo_parser.set_defaults(func=demo.demo_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default="hashtree.yaml",
        help="Path for config file (default: hashtree.yaml)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("You can also use environment variables (HASHTREE_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        print(json.dumps(args.runtime_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    print("Usage: hashtree config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if args.algorithm:
        config.hash.algorithm = args.algorithm

    log_level = args.log_level or config.logging.level
    setup_logging(level=log_level, log_file=config.logging.file)

    args.runtime_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if getattr(args, "debug", False):
            traceback.print_exc()
        elif getattr(args, "json", False) and isinstance(e, HashTreeException):
            print(e.to_error_model().model_dump_json(), file=sys.stderr)
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
