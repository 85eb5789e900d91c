"""Fixed-width digest type shared by every Merkle primitive."""
from typing import Union

DIGEST_SIZE = 32

DigestLike = Union[bytes, bytearray, memoryview, str]


class Digest(bytes):
    """
    A 32-byte hash value.

    Digests compare and sort like the unsigned big-endian integers their bytes
    encode. For equal widths that is plain lexicographic byte order, so the
    comparison operators inherited from ``bytes`` already do the right thing.
    """

    __slots__ = ()

    def __new__(cls, value: DigestLike) -> 'Digest':
        if isinstance(value, cls):
            return value
        if not isinstance(value, (bytes, bytearray, memoryview, str)):
            raise TypeError(
                f"Digest expects bytes or a hex string, got {type(value).__name__}"
            )
        if isinstance(value, str):
            value = _parse_hex(value)
        raw = bytes(value)
        if len(raw) != DIGEST_SIZE:
            raise ValueError(
                f"Digest must be {DIGEST_SIZE} bytes, got {len(raw)}"
            )
        return super().__new__(cls, raw)

    @classmethod
    def from_hex(cls, value: str) -> 'Digest':
        """Create a digest from a hex string, with or without a 0x prefix."""
        return cls(_parse_hex(value))

    @classmethod
    def zero(cls) -> 'Digest':
        return cls(bytes(DIGEST_SIZE))

    def to_int(self) -> int:
        """Numeric value used for ordering."""
        return int.from_bytes(self, "big")

    def to_hex(self, prefix: bool = True) -> str:
        return ("0x" if prefix else "") + self.hex()

    def __repr__(self) -> str:
        return f"Digest({self.to_hex()})"


def _parse_hex(value: str) -> bytes:
    text = value.strip()
    if text[:2].lower() == "0x":
        text = text[2:]
    try:
        return bytes.fromhex(text)
    except ValueError as e:
        raise ValueError(f"Invalid hex digest: {value!r}") from e
