"""
Runtime Configuration

Central configuration for hash selection, proof format and logging.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from hashtree.crypto.hashing import DEFAULT_ALGORITHM, Hasher, available_algorithms, get_hasher
from hashtree.schemas.errors import ConfigException
from hashtree.schemas.proof import PROOF_FORMATS

load_dotenv()


# Environment variable prefix
ENV_PREFIX = "HASHTREE_"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _env_flag(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def _parse_flag(value: str, field_path: str) -> bool:
    normalized = value.strip().lower()
    if normalized in ("1", "true", "yes", "on"):
        return True
    if normalized in ("0", "false", "no", "off"):
        return False
    raise ConfigException(
        f"{field_path} must be a boolean, got {value!r}",
        field_path=field_path,
    )


@dataclass
class HashConfig:
    """Configuration for the hash collaborator."""
    algorithm: str = DEFAULT_ALGORITHM
    strict: bool = False

    def __post_init__(self):
        if self.algorithm not in available_algorithms():
            raise ConfigException(
                f"Unknown hash algorithm: {self.algorithm!r}",
                field_path="hash.algorithm",
                details={"available": available_algorithms()},
            )
        if isinstance(self.strict, str):
            self.strict = _parse_flag(self.strict, "hash.strict")
        elif not isinstance(self.strict, bool):
            raise ConfigException(
                f"hash.strict must be a boolean, got {self.strict!r}",
                field_path="hash.strict",
            )


@dataclass
class ProofConfig:
    """Configuration for emitted proofs."""
    format: str = "positional"

    def __post_init__(self):
        if self.format not in PROOF_FORMATS:
            raise ConfigException(
                f"Unknown proof format: {self.format!r}",
                field_path="proof.format",
            )


@dataclass
class LoggingConfig:
    """Configuration for logging."""
    level: str = "INFO"
    file: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.level, str):
            raise ConfigException(
                f"logging.level must be a string, got {self.level!r}",
                field_path="logging.level",
            )
        self.level = self.level.upper()
        if self.level not in _LOG_LEVELS:
            raise ConfigException(
                f"Unknown log level: {self.level!r}",
                field_path="logging.level",
            )


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables (and a .env file)
    - YAML file
    - Programmatic construction
    """
    hash: HashConfig = field(default_factory=HashConfig)
    proof: ProofConfig = field(default_factory=ProofConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - HASHTREE_HASH_ALGORITHM: Hash algorithm name
        - HASHTREE_STRICT_HASH: Enforce digest widths on parent hashing (true/false)
        - HASHTREE_PROOF_FORMAT: positional or legacy
        - HASHTREE_LOG_LEVEL: Log level
        - HASHTREE_LOG_FILE: Log file path
        """
        overrides: dict[str, Any] = {}

        if os.getenv(f"{ENV_PREFIX}HASH_ALGORITHM"):
            overrides.setdefault("hash", {})["algorithm"] = os.getenv(f"{ENV_PREFIX}HASH_ALGORITHM")
        if os.getenv(f"{ENV_PREFIX}STRICT_HASH"):
            overrides.setdefault("hash", {})["strict"] = _env_flag(os.getenv(f"{ENV_PREFIX}STRICT_HASH", ""))

        if os.getenv(f"{ENV_PREFIX}PROOF_FORMAT"):
            overrides.setdefault("proof", {})["format"] = os.getenv(f"{ENV_PREFIX}PROOF_FORMAT")

        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides.setdefault("logging", {})["level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
        if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            overrides.setdefault("logging", {})["file"] = os.getenv(f"{ENV_PREFIX}LOG_FILE")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """Load configuration purely from environment variables."""
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f)

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigException(f"Config file must contain a mapping: {path}")

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        try:
            hash_config = HashConfig(**(data.get("hash") or {}))
            proof_config = ProofConfig(**(data.get("proof") or {}))
            logging_config = LoggingConfig(**(data.get("logging") or {}))
        except TypeError as e:
            raise ConfigException(f"Invalid configuration: {e}") from e

        return cls(
            hash=hash_config,
            proof=proof_config,
            logging=logging_config,
            extra=data.get("extra", {}),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        data = self.to_dict()
        for section, values in overrides.items():
            data.setdefault(section, {}).update(values)
        return self.from_dict(copy.deepcopy(data))

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "hash": {
                "algorithm": self.hash.algorithm,
                "strict": self.hash.strict,
            },
            "proof": {
                "format": self.proof.format,
            },
            "logging": {
                "level": self.logging.level,
                "file": self.logging.file,
            },
            "extra": self.extra,
        }

    def build_hasher(self) -> Hasher:
        """Hasher described by this configuration."""
        return get_hasher(self.hash.algorithm, strict=self.hash.strict)


def get_default_config_template() -> str:
    """Get a template YAML configuration file."""
    return """\
hash:
  algorithm: sha3-128   # sha3-128, sha3-256, sha256, blake2b-128
  strict: false
proof:
  format: positional    # positional or legacy
logging:
  level: INFO
  file: null
"""


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def set_default_config(config: Optional[RuntimeConfig]) -> None:
    """Set the default runtime configuration (None resets it)."""
    global _default_config
    _default_config = config
