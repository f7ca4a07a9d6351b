"""
Runtime Configuration Module

Provides configuration loading and management for hashtree.
"""

from .runtime import (
    RuntimeConfig,
    HashConfig,
    ProofConfig,
    LoggingConfig,
    get_default_config,
    set_default_config,
    get_default_config_template,
)

__all__ = [
    "RuntimeConfig",
    "HashConfig",
    "ProofConfig",
    "LoggingConfig",
    "get_default_config",
    "set_default_config",
    "get_default_config_template",
]
