"""
Schemas - Proof Document
File: proof.py

Purpose: Serializable form of a Merkle inclusion proof, exchanged between
a prover and an offline verifier as JSON. Digests are lowercase hex.

Two formats are supported:
- "positional": every step carries the sibling's side (left/right)
- "legacy": bare sibling digests, folded as H(current + sibling)
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from hashtree.crypto.hashing import DEFAULT_ALGORITHM, from_hex, to_hex
from hashtree.merkle.merkle_tree import MerkleProof, ProofEntry, ProofStep, Side
from hashtree.schemas.errors import ProofFormatException


ProofFormat = Literal["positional", "legacy"]

PROOF_FORMATS: tuple[str, ...] = ("positional", "legacy")


def _validate_hex(value: str) -> str:
    from_hex(value)
    return value.lower()


class ProofStepModel(BaseModel):
    """One level of a serialized authentication path."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    sibling: str = Field(..., description="Sibling digest (hex)", min_length=2)
    side: Optional[Side] = Field(
        default=None,
        description="Side of the sibling; absent in legacy proofs",
    )

    @field_validator("sibling")
    @classmethod
    def validate_sibling_hex(cls, v: str) -> str:
        """Ensure the sibling digest is valid hex."""
        return _validate_hex(v)


class ProofDocument(BaseModel):
    """
    A self-contained Merkle proof.

    Carries everything an offline verifier needs: the hash algorithm,
    the leaf digest, the claimed root and the authentication path.
    """

    model_config = ConfigDict(extra="forbid")

    algorithm: str = Field(default=DEFAULT_ALGORITHM, description="Hash algorithm name")
    format: ProofFormat = Field(default="positional", description="Proof step format")
    index: int = Field(..., ge=0, description="0-based leaf index")
    leaf: str = Field(..., description="Leaf digest (hex)", min_length=2)
    root: str = Field(..., description="Root digest (hex)", min_length=2)
    steps: list[ProofStepModel] = Field(default_factory=list)

    @field_validator("leaf", "root")
    @classmethod
    def validate_digest_hex(cls, v: str) -> str:
        """Ensure digests are valid hex."""
        return _validate_hex(v)

    @model_validator(mode="after")
    def validate_steps_match_format(self) -> "ProofDocument":
        """Positional proofs need a side on every step; legacy proofs none."""
        for i, step in enumerate(self.steps):
            if self.format == "positional" and step.side is None:
                raise ValueError(f"step {i} is missing a side in a positional proof")
            if self.format == "legacy" and step.side is not None:
                raise ValueError(f"step {i} carries a side in a legacy proof")
        return self

    @classmethod
    def from_proof(
        cls,
        proof: MerkleProof,
        algorithm: str = DEFAULT_ALGORITHM,
        format: ProofFormat = "positional",
    ) -> "ProofDocument":
        """Serialize a MerkleProof."""
        steps = [
            ProofStepModel(
                sibling=to_hex(step.sibling),
                side=step.side if format == "positional" else None,
            )
            for step in proof.steps
        ]
        return cls(
            algorithm=algorithm,
            format=format,
            index=proof.index,
            leaf=to_hex(proof.leaf),
            root=to_hex(proof.root),
            steps=steps,
        )

    @classmethod
    def from_json(cls, text: str) -> "ProofDocument":
        """
        Parse a JSON proof document.

        Raises:
            ProofFormatException: If the document is malformed
        """
        try:
            return cls.model_validate_json(text)
        except ValidationError as e:
            raise ProofFormatException(
                f"Invalid proof document: {e.error_count()} error(s)",
                details={"errors": [err["msg"] for err in e.errors()]},
            ) from e

    def to_json(self) -> str:
        return self.model_dump_json(indent=2, exclude_none=True)

    @property
    def leaf_bytes(self) -> bytes:
        return from_hex(self.leaf)

    @property
    def root_bytes(self) -> bytes:
        return from_hex(self.root)

    def entries(self) -> list[ProofEntry]:
        """Proof entries ready for verify_proof()."""
        if self.format == "legacy":
            return [from_hex(step.sibling) for step in self.steps]
        return [
            ProofStep(sibling=from_hex(step.sibling), side=step.side)
            for step in self.steps
        ]

    def to_proof(self) -> MerkleProof:
        """
        Convert back to a MerkleProof.

        Raises:
            ProofFormatException: For legacy documents, which carry no sides
        """
        if self.format != "positional":
            raise ProofFormatException(
                "Only positional proof documents convert to MerkleProof",
                details={"format": self.format},
            )
        return MerkleProof(
            leaf=self.leaf_bytes,
            index=self.index,
            steps=tuple(self.entries()),
            root=self.root_bytes,
        )


__all__ = [
    "PROOF_FORMATS",
    "ProofFormat",
    "ProofStepModel",
    "ProofDocument",
]
