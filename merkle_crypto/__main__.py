"""Entry point for ``python -m merkle_crypto``."""
from .cli import main

if __name__ == "__main__":
    main()
