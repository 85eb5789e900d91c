"""
Pluggable hash primitives for Merkle verification.

Verification routines never pick a hash function themselves. They receive a
*builder*: any object whose ``build_hasher()`` returns a fresh hasher with
``update(data)`` and ``finalize()``. Keccak-256 is the reference builder since
it matches the hashing done by on-chain verifiers and the JS tree tooling.
"""
import hashlib
from typing import Callable, Dict, Protocol

from Crypto.Hash import SHA256, keccak

from .digest import Digest


class Hasher(Protocol):
    """Incremental hash state. ``finalize`` must return 32 bytes."""

    def update(self, data: bytes) -> None:
        ...

    def finalize(self) -> bytes:
        ...


class BuildHasher(Protocol):
    """Factory of independent :class:`Hasher` instances."""

    def build_hasher(self) -> Hasher:
        ...


class _WrappedHasher:
    """Adapts an object exposing ``update``/``digest`` to the Hasher protocol."""

    __slots__ = ("_state",)

    def __init__(self, state):
        self._state = state

    def update(self, data: bytes) -> None:
        self._state.update(data)

    def finalize(self) -> bytes:
        return self._state.digest()


class KeccakBuilder:
    """Keccak-256 with the original (Ethereum) padding, not NIST SHA3-256."""

    name = "keccak256"

    def build_hasher(self) -> Hasher:
        return _WrappedHasher(keccak.new(digest_bits=256))

    def __repr__(self) -> str:
        return "KeccakBuilder()"


class Sha256Builder:
    name = "sha256"

    def build_hasher(self) -> Hasher:
        return _WrappedHasher(SHA256.new())

    def __repr__(self) -> str:
        return "Sha256Builder()"


class Sha3Builder:
    name = "sha3_256"

    def build_hasher(self) -> Hasher:
        return _WrappedHasher(hashlib.sha3_256())

    def __repr__(self) -> str:
        return "Sha3Builder()"


_BUILDERS: Dict[str, Callable[[], BuildHasher]] = {
    KeccakBuilder.name: KeccakBuilder,
    Sha256Builder.name: Sha256Builder,
    Sha3Builder.name: Sha3Builder,
}

HASHER_NAMES = tuple(_BUILDERS)


def get_builder(name: str) -> BuildHasher:
    """
    Resolve a builder by name.

    Args:
        name: One of ``keccak256``, ``sha256`` or ``sha3_256`` (case-insensitive)

    Returns:
        A new builder instance

    Raises:
        ValueError: If the name is not a known hash function
    """
    try:
        return _BUILDERS[name.lower()]()
    except KeyError:
        raise ValueError(
            f"Unknown hash function {name!r}; expected one of {', '.join(HASHER_NAMES)}"
        ) from None


def hash_with(builder: BuildHasher, *chunks: bytes) -> Digest:
    """Hash the concatenation of ``chunks`` with a fresh hasher from ``builder``."""
    hasher = builder.build_hasher()
    for chunk in chunks:
        hasher.update(chunk)
    return Digest(hasher.finalize())


def keccak256(data: bytes) -> Digest:
    """One-shot Keccak-256."""
    return hash_with(KeccakBuilder(), data)


def hash_pair(a: bytes, b: bytes, builder: BuildHasher) -> Digest:
    """Hash ``a || b`` in the order given."""
    return hash_with(builder, a, b)


def commutative_hash_pair(a: bytes, b: bytes, builder: BuildHasher) -> Digest:
    """
    Hash two digests in sorted order.

    ``commutative_hash_pair(a, b) == commutative_hash_pair(b, a)`` for any
    inputs, so proofs never need to say which side a sibling sits on.
    """
    if a < b:
        return hash_pair(a, b, builder)
    return hash_pair(b, a, builder)
