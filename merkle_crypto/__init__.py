"""
merkle-crypto: Merkle proof verification for contract allowlists and claims.

Verifies single-leaf proofs and multiproofs built with sorted-pair hashing,
over a pluggable hash function (Keccak-256 by default).
"""

from .digest import Digest, DIGEST_SIZE
from .hashing import (
    BuildHasher,
    Hasher,
    KeccakBuilder,
    Sha256Builder,
    Sha3Builder,
    commutative_hash_pair,
    get_builder,
    hash_pair,
    keccak256,
)
from .errors import (
    AccessDenied,
    InvalidProofLengthError,
    InvalidRootChildError,
    InvalidTotalHashesError,
    MerkleProofError,
    MultiProofError,
    ProofTooLargeError,
)
from .merkle import (
    MultiProof,
    Verifier,
    process_multi_proof,
    process_proof,
    verify,
    verify_multi_proof,
)
from .allowlist import MerkleAllowlist

__version__ = "0.1.0"

__all__ = [
    'Digest',
    'DIGEST_SIZE',
    # Hashing
    'BuildHasher',
    'Hasher',
    'KeccakBuilder',
    'Sha256Builder',
    'Sha3Builder',
    'commutative_hash_pair',
    'get_builder',
    'hash_pair',
    'keccak256',
    # Verification
    'MultiProof',
    'Verifier',
    'process_multi_proof',
    'process_proof',
    'verify',
    'verify_multi_proof',
    'MerkleAllowlist',
    # Errors
    'AccessDenied',
    'InvalidProofLengthError',
    'InvalidRootChildError',
    'InvalidTotalHashesError',
    'MerkleProofError',
    'MultiProofError',
    'ProofTooLargeError',
]
