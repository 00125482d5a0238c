"""Deterministic pseudo-random numbers drawn from successive BLAKE2s hashes."""

from __future__ import annotations

import hashlib

SEED_SIZE = 32
_RAND_BYTES = 3
RAND_MAX = 1 << 24


def blake2s_hash(data: bytes) -> bytes:
    """Unkeyed 32-byte BLAKE2s digest of ``data``."""
    return hashlib.blake2s(bytes(data), digest_size=SEED_SIZE).digest()


def int_from_bytes24(source: bytes, offset: int) -> int:
    """Read three bytes of ``source`` from ``offset`` as a big-endian integer."""
    chunk = bytes(source[offset:offset + _RAND_BYTES])
    if len(chunk) != _RAND_BYTES:
        raise IndexError(f"need {_RAND_BYTES} bytes at offset {offset}, got {len(chunk)}")
    return int.from_bytes(chunk, "big")


class ShuffleRng:
    """Generator that takes 24-bit values from a seed, rehashing it when used up."""

    def __init__(self, seed: bytes) -> None:
        self._seed = blake2s_hash(seed)
        self._idx = 0
        self.rand_max = RAND_MAX

    def _rehash_seed(self) -> None:
        self._seed = blake2s_hash(self._seed)
        self._idx = 0

    def _rand(self) -> int:
        while True:
            self._idx += _RAND_BYTES
            if self._idx < SEED_SIZE:
                return int_from_bytes24(self._seed, self._idx - _RAND_BYTES)
            self._rehash_seed()

    def rand_range(self, n: int) -> int:
        """Return an unbiased value in ``range(n)``, discarding draws that would bias it."""
        if n >= RAND_MAX:
            raise ValueError("RAND_MAX exceeded")
        if n <= 0:
            raise ValueError("range must be positive")
        limit = self.rand_max - (self.rand_max % n)
        value = self._rand()
        while value >= limit:
            value = self._rand()
        return value % n