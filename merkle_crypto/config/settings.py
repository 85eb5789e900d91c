"""Runtime configuration for merkle-crypto."""
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..hashing import HASHER_NAMES


class MerkleSettings(BaseSettings):
    """Settings read from ``MERKLE_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="MERKLE_",
        case_sensitive=False,
        extra="ignore",
    )

    # Input bounds, checked before any scratch storage is allocated
    MAX_LEAVES: int = Field(
        default=65536,
        gt=0,
        description="Maximum number of leaves accepted by a multiproof"
    )
    MAX_PROOF_LENGTH: int = Field(
        default=65536,
        gt=0,
        description="Maximum number of proof nodes accepted by a multiproof"
    )
    MAX_FLAGS: int = Field(
        default=131072,
        gt=0,
        description="Maximum number of multiproof flags (combination steps)"
    )

    DEFAULT_HASHER: str = Field(
        default="keccak256",
        description="Hash function used when none is given explicitly"
    )
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level"
    )

    @field_validator("DEFAULT_HASHER")
    @classmethod
    def _known_hasher(cls, value: str) -> str:
        value = value.lower()
        if value not in HASHER_NAMES:
            raise ValueError(f"must be one of {', '.join(HASHER_NAMES)}")
        return value

    @field_validator("LOG_LEVEL")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()


@lru_cache()
def get_settings() -> MerkleSettings:
    """Process-wide settings instance."""
    return MerkleSettings()
