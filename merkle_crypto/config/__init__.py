"""merkle-crypto configuration module"""

from .settings import MerkleSettings, get_settings
from .logging import configure_logging, log_error

__all__ = ['MerkleSettings', 'get_settings', 'configure_logging', 'log_error']
