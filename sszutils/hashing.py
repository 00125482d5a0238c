"""Merkle hash-tree roots of values described by SSZ type descriptors."""

from __future__ import annotations

import hashlib
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import Any, BinaryIO

from sszutils.codec import (
    Boolean,
    ByteList,
    Fixed,
    FixedBytes,
    Int,
    ListOf,
    SszType,
    Tuple,
    Uint,
    Vector,
)

Hasher = Callable[[bytes], bytes]

_LENGTH_MASK = 0xFFFFFFFF


def sha256(data: bytes) -> bytes:
    """SHA-256 digest of ``data``."""
    return hashlib.sha256(data).digest()


@dataclass(frozen=True)
class RawRoot(SszType):
    """A value that already is a hash-tree root; its root is the value itself."""

    def prefixed(self) -> bool:
        return False

    def encode(self, value: Any) -> bytes:
        raise TypeError("a raw root has no serialized form")

    def decode_as(self, stream: BinaryIO) -> tuple[Any, int]:
        raise TypeError("a raw root has no serialized form")


def is_power_of_two(value: int) -> bool:
    """True when ``value`` is a positive power of two."""
    return value > 0 and value & (value - 1) == 0


def chunkify(data: bytes, chunk_size: int = 32) -> list[bytes]:
    """Split ``data`` into chunks, zero-padding the last one."""
    data = bytes(data)
    return [
        data[start:start + chunk_size].ljust(chunk_size, b"\x00")
        for start in range(0, len(data), chunk_size)
    ]


def pack(element_type: SszType, values: Iterable[Any], chunk_size: int = 32) -> list[bytes]:
    """Serialize ``values`` back to back and split the result into chunks."""
    return chunkify(b"".join(element_type.encode(value) for value in values), chunk_size)


def _digest_size(hasher: Hasher) -> int:
    return len(hasher(b""))


def merkleize(chunks: Sequence[bytes], hasher: Hasher = sha256) -> bytes:
    """Root of the binary Merkle tree over ``chunks``, padded with zero chunks."""
    layer = [bytes(chunk) for chunk in chunks]
    chunk_size = len(layer[0]) if layer else _digest_size(hasher)
    while not is_power_of_two(len(layer)):
        layer.append(bytes(chunk_size))
    while len(layer) > 1:
        layer = [hasher(left + right) for left, right in zip(layer[::2], layer[1::2])]
    return layer[0]


def mix_in_length(root: bytes, length: int, hasher: Hasher = sha256) -> bytes:
    """Hash ``root`` together with a chunk holding ``length`` as a little-endian u32."""
    root = bytes(root)
    length_chunk = (length & _LENGTH_MASK).to_bytes(4, "little").ljust(len(root), b"\x00")
    return hasher(root + length_chunk)


def _is_basic(ssz_type: SszType) -> bool:
    return isinstance(ssz_type, (Uint, Int, Boolean))


def _elements_root(element: SszType, values: Sequence[Any], hasher: Hasher) -> bytes:
    if _is_basic(element):
        return merkleize(pack(element, values, _digest_size(hasher)), hasher)
    return merkleize([hash_tree_root(element, value, hasher) for value in values], hasher)


def _root(ssz_type: SszType, value: Any, hasher: Hasher, truncated: bool) -> bytes:
    if isinstance(ssz_type, RawRoot):
        return bytes(value)

    field_roots = getattr(ssz_type, "field_roots", None)
    if field_roots is not None:
        return merkleize(field_roots(value, hasher, truncated), hasher)

    if _is_basic(ssz_type):
        return merkleize(pack(ssz_type, [value], _digest_size(hasher)), hasher)

    if isinstance(ssz_type, ByteList):
        data = bytes(value)
        root = merkleize(chunkify(data, _digest_size(hasher)), hasher)
        return mix_in_length(root, len(data), hasher)

    if isinstance(ssz_type, FixedBytes):
        return merkleize(chunkify(ssz_type.encode(value), _digest_size(hasher)), hasher)

    if isinstance(ssz_type, Vector):
        if len(value) != ssz_type.length:
            raise ValueError(f"expected {ssz_type.length} elements, got {len(value)}")
        return _elements_root(ssz_type.element, value, hasher)

    if isinstance(ssz_type, Fixed):
        return _elements_root(ssz_type.element, value, hasher)

    if isinstance(ssz_type, ListOf):
        return mix_in_length(_elements_root(ssz_type.element, value, hasher), len(value), hasher)

    if isinstance(ssz_type, Tuple):
        if len(value) != len(ssz_type.elements):
            raise ValueError(f"expected {len(ssz_type.elements)} values, got {len(value)}")
        return merkleize(
            [hash_tree_root(element, item, hasher) for element, item in zip(ssz_type.elements, value)],
            hasher,
        )

    raise TypeError(f"values of {type(ssz_type).__name__} cannot be hashed")


def hash_tree_root(ssz_type: SszType, value: Any, hasher: Hasher = sha256) -> bytes:
    """Hash-tree root of ``value`` as described by ``ssz_type``."""
    return _root(ssz_type, value, hasher, truncated=False)


def truncated_hash_tree_root(ssz_type: SszType, value: Any, hasher: Hasher = sha256) -> bytes:
    """Like :func:`hash_tree_root`, but containers leave out fields marked for truncation."""
    return _root(ssz_type, value, hasher, truncated=True)