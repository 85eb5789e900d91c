"""JSON request models for proofs exchanged as files."""
from typing import List

from pydantic import BaseModel, Field, field_validator

from .digest import Digest
from .merkle import MultiProof


def _hex_digest(value: str) -> str:
    # Normalises to 0x-prefixed lowercase hex, rejecting other widths
    return Digest.from_hex(value).to_hex()


class SingleProofRequest(BaseModel):
    """A single-leaf proof: ``{"root", "leaf", "proof": [...]}``."""

    root: str
    leaf: str
    proof: List[str] = Field(default_factory=list)

    @field_validator("root", "leaf")
    @classmethod
    def _check_digest(cls, value: str) -> str:
        return _hex_digest(value)

    @field_validator("proof")
    @classmethod
    def _check_proof(cls, value: List[str]) -> List[str]:
        return [_hex_digest(v) for v in value]

    def root_digest(self) -> Digest:
        return Digest.from_hex(self.root)

    def leaf_digest(self) -> Digest:
        return Digest.from_hex(self.leaf)

    def proof_digests(self) -> List[Digest]:
        return [Digest.from_hex(p) for p in self.proof]


class MultiProofRequest(BaseModel):
    """A multiproof: ``{"root", "leaves": [...], "proof": [...], "flags": [...]}``."""

    root: str
    leaves: List[str] = Field(default_factory=list)
    proof: List[str] = Field(default_factory=list)
    flags: List[bool] = Field(default_factory=list)

    @field_validator("root")
    @classmethod
    def _check_root(cls, value: str) -> str:
        return _hex_digest(value)

    @field_validator("leaves", "proof")
    @classmethod
    def _check_digests(cls, value: List[str]) -> List[str]:
        return [_hex_digest(v) for v in value]

    def root_digest(self) -> Digest:
        return Digest.from_hex(self.root)

    def leaf_digests(self) -> List[Digest]:
        return [Digest.from_hex(leaf) for leaf in self.leaves]

    def multi_proof(self) -> MultiProof:
        return MultiProof(proof=tuple(self.proof), flags=tuple(self.flags))
