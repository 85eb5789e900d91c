"""Shared fixtures: a reference tree builder for producing proofs in tests.

Trees use the OpenZeppelin merkle-tree array layout: node ``i`` has children
``2i+1`` and ``2i+2``, leaves fill the tail of the array in reverse order and
every parent is the sorted-pair hash of its children.
"""
import os
import sys

import pytest

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from merkle_crypto.config.settings import get_settings
from merkle_crypto.digest import Digest
from merkle_crypto.hashing import KeccakBuilder, commutative_hash_pair, keccak256


def _sibling(i):
    return i + 1 if i % 2 == 1 else i - 1


def _parent(i):
    return (i - 1) // 2


class SortedPairTree:
    """Minimal tree builder used only to generate test proofs."""

    def __init__(self, leaves, builder=None):
        if not leaves:
            raise ValueError("Expected at least one leaf")
        self.builder = builder or KeccakBuilder()
        self.leaves = [Digest(leaf) for leaf in leaves]
        size = 2 * len(self.leaves) - 1
        self.nodes = [None] * size
        for i, leaf in enumerate(self.leaves):
            self.nodes[size - 1 - i] = leaf
        for i in range(size - 1 - len(self.leaves), -1, -1):
            self.nodes[i] = commutative_hash_pair(
                self.nodes[2 * i + 1], self.nodes[2 * i + 2], self.builder
            )

    @property
    def root(self):
        return self.nodes[0]

    def _tree_index(self, leaf_index):
        return len(self.nodes) - 1 - leaf_index

    def get_proof(self, leaf_index):
        j = self._tree_index(leaf_index)
        proof = []
        while j > 0:
            proof.append(self.nodes[_sibling(j)])
            j = _parent(j)
        return proof

    def get_multi_proof(self, leaf_indices):
        """Returns (leaves, proof, flags) for a set of distinct leaf indices."""
        tree_indices = sorted((self._tree_index(i) for i in leaf_indices), reverse=True)
        queue = list(tree_indices)
        proof = []
        flags = []
        while queue and queue[0] > 0:
            j = queue.pop(0)
            s = _sibling(j)
            if queue and queue[0] == s:
                flags.append(True)
                queue.pop(0)
            else:
                flags.append(False)
                proof.append(self.nodes[s])
            queue.append(_parent(j))
        if not tree_indices:
            proof.append(self.root)
        return [self.nodes[j] for j in tree_indices], proof, flags


def make_leaves(count, tag="leaf"):
    return [keccak256(f"{tag}{i}".encode()) for i in range(count)]


@pytest.fixture
def build_tree():
    """Factory for SortedPairTree instances."""
    return SortedPairTree


@pytest.fixture
def make_leaf_set():
    """Factory for lists of distinct leaf digests."""
    return make_leaves


@pytest.fixture
def leaves():
    """Eight committed leaf digests."""
    return make_leaves(8)


@pytest.fixture
def tree(leaves):
    return SortedPairTree(leaves)


@pytest.fixture
def four_leaf_tree():
    """The L0..L3 tree with its intermediate nodes named."""
    l0, l1, l2, l3 = make_leaves(4)
    builder = KeccakBuilder()
    n01 = commutative_hash_pair(l0, l1, builder)
    n23 = commutative_hash_pair(l2, l3, builder)
    root = commutative_hash_pair(n01, n23, builder)
    return {
        "L0": l0, "L1": l1, "L2": l2, "L3": l3,
        "N01": n01, "N23": n23, "root": root,
    }


@pytest.fixture(autouse=True)
def fresh_settings():
    """Drop cached settings so environment overrides take effect per test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
