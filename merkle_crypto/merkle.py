"""
Merkle proof verification with commutative (sorted-pair) hashing.

Proofs are the ones produced by OpenZeppelin-style tree tooling: siblings are
never tagged left or right because every pair is hashed in sorted order.
Two kinds of proof are supported:

- single proofs: the bottom-up list of siblings for one leaf
- multiproofs: one set of proof nodes plus one flag per combination step,
  proving several leaves at once

Verification is a pure function of its arguments. A proof that does not
reproduce the root yields ``False``; a multiproof whose shape is inconsistent
raises a :class:`~merkle_crypto.errors.MultiProofError`.
"""
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import structlog

from .config.settings import MerkleSettings, get_settings
from .digest import Digest, DigestLike
from .errors import (
    InvalidProofLengthError,
    InvalidRootChildError,
    InvalidTotalHashesError,
    MultiProofError,
    ProofTooLargeError,
)
from .hashing import BuildHasher, KeccakBuilder, commutative_hash_pair

logger = structlog.get_logger()


@dataclass(frozen=True)
class MultiProof:
    """Proof nodes and step flags for verifying several leaves at once."""

    proof: Tuple[Digest, ...]
    flags: Tuple[bool, ...]

    def __post_init__(self):
        object.__setattr__(self, "proof", tuple(Digest(p) for p in self.proof))
        for flag in self.flags:
            if not isinstance(flag, bool):
                raise TypeError(f"MultiProof flags must be bool, got {type(flag).__name__}")
        object.__setattr__(self, "flags", tuple(self.flags))

    def verify(self, root: DigestLike, leaves: Sequence[DigestLike],
               builder: Optional[BuildHasher] = None) -> bool:
        return Verifier(builder).verify_multi_proof(self.proof, self.flags, root, leaves)

    def process(self, leaves: Sequence[DigestLike],
                builder: Optional[BuildHasher] = None) -> Digest:
        return Verifier(builder).process_multi_proof(self.proof, self.flags, leaves)


class Verifier:
    """
    Merkle proof verifier bound to one hash builder.

    Instances hold no per-call state and can be shared between threads.
    """

    def __init__(self, builder: Optional[BuildHasher] = None,
                 settings: Optional[MerkleSettings] = None):
        """
        Args:
            builder: Hash builder used for pair hashing (Keccak-256 if omitted)
            settings: Input size limits (process-wide settings if omitted)
        """
        self.builder = builder if builder is not None else KeccakBuilder()
        self._settings = settings

    @property
    def settings(self) -> MerkleSettings:
        return self._settings if self._settings is not None else get_settings()

    def __repr__(self) -> str:
        return f"Verifier(builder={self.builder!r})"

    def process_proof(self, proof: Sequence[DigestLike], leaf: DigestLike) -> Digest:
        """
        Rebuild the root implied by ``leaf`` and its sibling path.

        Args:
            proof: Sibling digests, bottom-up
            leaf: Leaf digest

        Returns:
            The recomputed root
        """
        computed = Digest(leaf)
        for sibling in proof:
            computed = commutative_hash_pair(computed, Digest(sibling), self.builder)
        return computed

    def verify(self, proof: Sequence[DigestLike], root: DigestLike,
               leaf: DigestLike) -> bool:
        """
        Check that ``leaf`` belongs to the tree committed to by ``root``.

        An empty proof verifies only when the leaf is the root itself.

        Args:
            proof: Sibling digests, bottom-up
            root: Trusted root
            leaf: Leaf digest

        Returns:
            True if the proof reproduces the root
        """
        return self.process_proof(proof, leaf) == Digest(root)

    def process_multi_proof(self, proof: Sequence[DigestLike], flags: Sequence[bool],
                            leaves: Sequence[DigestLike]) -> Digest:
        """
        Rebuild the root implied by a multiproof.

        Raises:
            MultiProofError: If the proof is malformed, including the case
                where no leaves or proof nodes are given at all
        """
        computed = self._reconstruct(proof, flags, leaves)
        if computed is None:
            raise InvalidTotalHashesError(len(leaves), len(proof), len(flags))
        return computed

    def verify_multi_proof(self, proof: Sequence[DigestLike], flags: Sequence[bool],
                           root: DigestLike, leaves: Sequence[DigestLike]) -> bool:
        """
        Check that every leaf in ``leaves`` belongs to the tree committed to
        by ``root``.

        ``flags[i]`` says where the second operand of step ``i`` comes from:
        True takes the next pending leaf or intermediate hash, False takes the
        next proof node. The first operand always comes from the pending
        leaves, then from the intermediate hashes once leaves run out.

        Args:
            proof: Sibling digests not derivable from ``leaves``
            flags: One flag per combination step
            root: Trusted root
            leaves: Leaf digests, in the order the proof generator emitted them

        Returns:
            True if the multiproof reproduces the root

        Raises:
            MultiProofError: If the lengths are inconsistent, if the flags
                walk outside the supplied data or if any proof node is left
                unconsumed
        """
        try:
            computed = self._reconstruct(proof, flags, leaves)
        except MultiProofError as e:
            logger.debug("multiproof_rejected",
                         reason=type(e).__name__,
                         leaves=len(leaves),
                         proof_nodes=len(proof),
                         flags=len(flags))
            raise
        if computed is None:
            return False
        return computed == Digest(root)

    def _check_bounds(self, leaves_len: int, proof_len: int, flags_len: int) -> None:
        settings = self.settings
        for field, size, limit in (
            ("leaves", leaves_len, settings.MAX_LEAVES),
            ("proof", proof_len, settings.MAX_PROOF_LENGTH),
            ("flags", flags_len, settings.MAX_FLAGS),
        ):
            if size > limit:
                raise ProofTooLargeError(field, size, limit)

    def _reconstruct(self, proof: Sequence[DigestLike], flags: Sequence[bool],
                     leaves: Sequence[DigestLike]) -> Optional[Digest]:
        """Returns None for the degenerate no-step case without a sole candidate."""
        leaves_len = len(leaves)
        proof_len = len(proof)
        total_hashes = len(flags)

        self._check_bounds(leaves_len, proof_len, total_hashes)

        if total_hashes == 0:
            # No combination step: a lone leaf or proof node is the root candidate
            if leaves_len + proof_len != 1:
                return None
            return Digest(leaves[0] if leaves_len else proof[0])

        if leaves_len + proof_len - 1 != total_hashes:
            raise InvalidTotalHashesError(leaves_len, proof_len, total_hashes)

        pending_leaves = [Digest(leaf) for leaf in leaves]
        proof_nodes = [Digest(node) for node in proof]
        hashes: List[Digest] = []
        leaf_pos = 0
        hash_pos = 0
        proof_pos = 0

        def next_pending(step: int) -> Digest:
            nonlocal leaf_pos, hash_pos
            if leaf_pos < leaves_len:
                leaf_pos += 1
                return pending_leaves[leaf_pos - 1]
            if hash_pos >= len(hashes):
                raise InvalidRootChildError(step)
            hash_pos += 1
            return hashes[hash_pos - 1]

        for step, flag in enumerate(flags):
            a = next_pending(step)
            if flag:
                b = next_pending(step)
            else:
                if proof_pos >= proof_len:
                    raise InvalidProofLengthError(proof_pos + 1, proof_len)
                b = proof_nodes[proof_pos]
                proof_pos += 1
            hashes.append(commutative_hash_pair(a, b, self.builder))

        # An unconsumed proof node means the flags skipped part of the proof
        if proof_pos != proof_len:
            raise InvalidProofLengthError(proof_pos, proof_len)

        return hashes[total_hashes - 1]


def process_proof(proof: Sequence[DigestLike], leaf: DigestLike,
                  builder: Optional[BuildHasher] = None) -> Digest:
    return Verifier(builder).process_proof(proof, leaf)


def verify(proof: Sequence[DigestLike], root: DigestLike, leaf: DigestLike,
           builder: Optional[BuildHasher] = None) -> bool:
    """Verify a single proof (Keccak-256 unless ``builder`` is given)."""
    return Verifier(builder).verify(proof, root, leaf)


def process_multi_proof(proof: Sequence[DigestLike], flags: Sequence[bool],
                        leaves: Sequence[DigestLike],
                        builder: Optional[BuildHasher] = None) -> Digest:
    return Verifier(builder).process_multi_proof(proof, flags, leaves)


def verify_multi_proof(proof: Sequence[DigestLike], flags: Sequence[bool],
                       root: DigestLike, leaves: Sequence[DigestLike],
                       builder: Optional[BuildHasher] = None) -> bool:
    """Verify a multiproof (Keccak-256 unless ``builder`` is given)."""
    return Verifier(builder).verify_multi_proof(proof, flags, root, leaves)
