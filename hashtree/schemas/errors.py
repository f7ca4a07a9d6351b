"""
Schemas - Error Taxonomy
File: errors.py

Purpose: Standard error taxonomy for hash tree operations.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    # Tree access errors
    OUT_OF_RANGE = "OUT_OF_RANGE"
    EMPTY_TREE = "EMPTY_TREE"

    # Hash collaborator errors
    INVALID_INPUT = "INVALID_INPUT"

    # Proof document errors
    PROOF_FORMAT_ERROR = "PROOF_FORMAT_ERROR"

    # Configuration errors
    CONFIG_ERROR = "CONFIG_ERROR"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class HashTreeError(BaseModel):
    """
    Base error model for structured error communication.

    Used when an error has to cross a boundary as data rather than as a
    raised exception. The CLI writes it to stderr for `--json` commands.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.OUT_OF_RANGE],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )

    def to_exception(self) -> "HashTreeException":
        """Convert this error model to a raised exception."""
        return HashTreeException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class HashTreeException(Exception):
    """
    Base exception for all hash tree errors.

    This exception carries structured error information and can be
    converted to/from HashTreeError models.
    """

    def __init__(
        self,
        message: str,
        code: str = "HASHTREE_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> HashTreeError:
        """Convert this exception to a HashTreeError model."""
        return HashTreeError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class OutOfRangeException(HashTreeException, IndexError):
    """Raised when a leaf index falls outside [0, len(leaves))."""

    def __init__(
        self,
        index: int,
        size: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        full_details["index"] = index
        full_details["size"] = size
        super().__init__(
            message=f"index out of bounds: {index} not in [0, {size})",
            code=ErrorCodes.OUT_OF_RANGE,
            details=full_details,
            retryable=False,
        )
        self.index = index
        self.size = size


class InvalidInputException(HashTreeException, ValueError):
    """Raised by the hash collaborator when its input contract is violated."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_INPUT,
            details=details,
            retryable=False,
        )


class EmptyTreeException(HashTreeException, ValueError):
    """Raised when a tree is built from an empty leaf sequence."""

    def __init__(
        self,
        message: str = "cannot build a tree from zero leaves",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.EMPTY_TREE,
            details=details,
            retryable=False,
        )


class ProofFormatException(HashTreeException, ValueError):
    """Raised when a serialized proof document cannot be decoded."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.PROOF_FORMAT_ERROR,
            details=details,
            retryable=False,
        )


class ConfigException(HashTreeException, ValueError):
    """Raised when configuration values are invalid."""

    def __init__(
        self,
        message: str,
        field_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if field_path:
            full_details["field_path"] = field_path
        super().__init__(
            message=message,
            code=ErrorCodes.CONFIG_ERROR,
            details=full_details,
            retryable=False,
        )


__all__ = [
    "ErrorCodes",
    "HashTreeError",
    "HashTreeException",
    "OutOfRangeException",
    "InvalidInputException",
    "EmptyTreeException",
    "ProofFormatException",
    "ConfigException",
]
