from setuptools import setup, find_packages

setup(
    name="merkle-crypto",
    version="0.1.0",
    description="Merkle proof and multiproof verification with sorted-pair hashing",
    packages=find_packages(include=["merkle_crypto", "merkle_crypto.*"]),
    install_requires=[
        "pydantic>=2.0",
        "pydantic-settings",
        "structlog",
        "pycryptodome",
        "click",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    python_requires=">=3.8",
    entry_points={
        "console_scripts": [
            "merkle-crypto=merkle_crypto.cli:main",
        ],
    }
)
