"""Deterministic, per-client ordering of the photo collection."""

import hashlib
from collections.abc import Sequence
from typing import TypeVar

FALLBACK_SEED = "inspirat"

T = TypeVar("T")


def shuffle(collection: Sequence[T], seed: str | None) -> list[T]:
    """Return a permutation that depends only on the collection order and the seed.

    Each position is ranked by the SHA-256 digest of ``"{seed}:{position}"``,
    so the result is stable across processes and Python versions. An absent
    or empty seed uses a fixed fallback so every anonymous client shares one
    ordering.
    """
    seed = seed or FALLBACK_SEED
    ranked = sorted(range(len(collection)), key=lambda i: _rank(seed, i))
    return [collection[i] for i in ranked]


def _rank(seed: str, position: int) -> bytes:
    return hashlib.sha256(f"{seed}:{position}".encode("utf-8")).digest()
