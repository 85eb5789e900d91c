"""Allowlist gate: deny an action unless a Merkle proof admits the caller."""
from typing import Optional, Sequence

import structlog

from .config.settings import MerkleSettings
from .digest import Digest, DigestLike
from .errors import AccessDenied, MultiProofError
from .hashing import BuildHasher
from .merkle import Verifier

logger = structlog.get_logger()


class MerkleAllowlist:
    """
    Gate operations on membership in a committed set.

    The root is fixed when the gate is created, the way a contract fixes it at
    deployment. Proofs come from the caller at check time. Anything short of a
    successful verification, a malformed multiproof included, is a denial.
    """

    def __init__(self, root: DigestLike, builder: Optional[BuildHasher] = None,
                 settings: Optional[MerkleSettings] = None):
        self._root = Digest(root)
        self._verifier = Verifier(builder, settings)

    @property
    def root(self) -> Digest:
        return self._root

    def is_allowed(self, leaf: DigestLike, proof: Sequence[DigestLike]) -> bool:
        return self._verifier.verify(proof, self._root, leaf)

    def are_allowed(self, leaves: Sequence[DigestLike], proof: Sequence[DigestLike],
                    flags: Sequence[bool]) -> bool:
        """Multiproof check; a malformed proof counts as not allowed."""
        try:
            return self._verifier.verify_multi_proof(proof, flags, self._root, leaves)
        except MultiProofError:
            return False

    def require_allowed(self, leaf: DigestLike, proof: Sequence[DigestLike]) -> None:
        """
        Raise unless ``leaf`` is proven to be in the set.

        Raises:
            AccessDenied: If the proof does not reproduce the root
        """
        if not self.is_allowed(leaf, proof):
            raise AccessDenied(f"{Digest(leaf).to_hex()} is not in the allowlist")

    def require_all_allowed(self, leaves: Sequence[DigestLike],
                            proof: Sequence[DigestLike],
                            flags: Sequence[bool]) -> None:
        """
        Raise unless every leaf is proven to be in the set.

        Raises:
            AccessDenied: If the multiproof is malformed or does not reproduce
                the root. A malformed proof is chained as the cause.
        """
        try:
            allowed = self._verifier.verify_multi_proof(proof, flags, self._root, leaves)
        except MultiProofError as e:
            logger.info("allowlist_malformed_proof", leaves=len(leaves),
                        reason=type(e).__name__)
            raise AccessDenied(f"malformed multiproof: {e}") from e
        if not allowed:
            raise AccessDenied(f"{len(leaves)} leaves are not all in the allowlist")
