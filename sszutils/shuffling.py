"""Deterministic in-place style shuffling driven by a seed."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TypeVar

from sszutils.rng import ShuffleRng

T = TypeVar("T")


class ShuffleError(ValueError):
    """Raised when a list is too long to be shuffled."""


def shuffle(seed: bytes, items: Iterable[T]) -> list[T]:
    """Return ``items`` shuffled in an order fixed by successive hashes of ``seed``."""
    result = list(items)
    rng = ShuffleRng(seed)
    if len(result) > rng.rand_max:
        raise ShuffleError("list length exceeds the maximum the generator can index")
    count = len(result)
    for i in range(count - 1):
        j = rng.rand_range(count - i) + i
        result[i], result[j] = result[j], result[i]
    return result