"""
CLI command modules.
"""

from hashtree_cli.commands import demo, tree, verify

__all__ = ["demo", "tree", "verify"]
