"""Exceptions raised for malformed Merkle proofs.

A proof that is well formed but simply does not lead to the expected root is
not an error: verification returns ``False`` for it. The classes here mark
proofs whose *shape* is wrong, which usually means a broken or malicious
proof generator.
"""


class MerkleProofError(Exception):
    """Base class for every error raised by this package."""
    pass


class MultiProofError(MerkleProofError):
    """A multiproof is structurally invalid."""
    pass


class InvalidTotalHashesError(MultiProofError):
    """``len(leaves) + len(proof) - 1`` does not equal ``len(flags)``."""

    def __init__(self, leaves_len: int, proof_len: int, flags_len: int):
        self.leaves_len = leaves_len
        self.proof_len = proof_len
        self.flags_len = flags_len
        super().__init__(
            f"leaves ({leaves_len}) + proof ({proof_len}) - 1 != flags ({flags_len})"
        )


class InvalidProofLengthError(MultiProofError):
    """Proof nodes were exhausted early or left unconsumed."""

    def __init__(self, consumed: int, proof_len: int):
        self.consumed = consumed
        self.proof_len = proof_len
        super().__init__(
            f"multiproof consumed {consumed} of {proof_len} proof nodes"
        )


class InvalidRootChildError(MultiProofError):
    """A step referenced an intermediate hash that had not been computed yet."""

    def __init__(self, step: int):
        self.step = step
        super().__init__(f"step {step} reads an intermediate hash that does not exist yet")


class ProofTooLargeError(MultiProofError):
    """An input sequence exceeds the configured size limit."""

    def __init__(self, field: str, size: int, limit: int):
        self.field = field
        self.size = size
        self.limit = limit
        super().__init__(f"{field} has {size} entries, limit is {limit}")


class AccessDenied(MerkleProofError):
    """A gated operation was attempted without a valid membership proof."""
    pass
