"""Simple serialization (SSZ) codec: type descriptors that encode and decode values."""

from __future__ import annotations

import io
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, BinaryIO, Union

_MAX_LENGTH = 0xFFFFFFFF
_LENGTH_SIZE = 4

Readable = Union[bytes, bytearray, memoryview, BinaryIO]


class DecodeError(ValueError):
    """Raised when input bytes cannot be decoded as the requested type."""


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    data = stream.read(size)
    if data is None or len(data) != size:
        raise DecodeError(f"expected {size} bytes, got {0 if data is None else len(data)}")
    return bytes(data)


def _encode_length(length: int) -> bytes:
    if length > _MAX_LENGTH:
        raise ValueError("attempted to serialize a collection with too many elements")
    return length.to_bytes(_LENGTH_SIZE, "little")


def _decode_length(stream: BinaryIO) -> int:
    return int.from_bytes(_read_exact(stream, _LENGTH_SIZE), "little")


def _with_prefix(body: bytes) -> bytes:
    return _encode_length(len(body)) + body


class SszType(ABC):
    """Description of how one kind of value is serialized."""

    @abstractmethod
    def prefixed(self) -> bool:
        """Whether encodings of this type carry a length prefix."""

    @abstractmethod
    def encode(self, value: Any) -> bytes:
        """Serialize ``value`` to bytes."""

    @abstractmethod
    def decode_as(self, stream: BinaryIO) -> tuple[Any, int]:
        """Read one value from ``stream``; return it with the number of bytes consumed."""

    def decode(self, data: Readable) -> Any:
        """Read one value from a bytes-like object or a binary stream."""
        if isinstance(data, (bytes, bytearray, memoryview)):
            data = io.BytesIO(bytes(data))
        return self.decode_as(data)[0]


@dataclass(frozen=True)
class Uint(SszType):
    """Unsigned little-endian integer of ``bits`` width."""

    bits: int

    def __post_init__(self) -> None:
        if self.bits <= 0 or self.bits % 8:
            raise ValueError(f"integer width must be a positive multiple of 8, got {self.bits}")

    @property
    def size(self) -> int:
        return self.bits // 8

    def prefixed(self) -> bool:
        return False

    def encode(self, value: int) -> bytes:
        value = int(value)
        if not 0 <= value < 1 << self.bits:
            raise ValueError(f"{value} does not fit in an unsigned {self.bits}-bit integer")
        return value.to_bytes(self.size, "little")

    def decode_as(self, stream: BinaryIO) -> tuple[int, int]:
        return int.from_bytes(_read_exact(stream, self.size), "little"), self.size


@dataclass(frozen=True)
class Int(SszType):
    """Signed two's-complement little-endian integer of ``bits`` width."""

    bits: int

    def __post_init__(self) -> None:
        if self.bits <= 0 or self.bits % 8:
            raise ValueError(f"integer width must be a positive multiple of 8, got {self.bits}")

    @property
    def size(self) -> int:
        return self.bits // 8

    def prefixed(self) -> bool:
        return False

    def encode(self, value: int) -> bytes:
        value = int(value)
        limit = 1 << (self.bits - 1)
        if not -limit <= value < limit:
            raise ValueError(f"{value} does not fit in a signed {self.bits}-bit integer")
        return value.to_bytes(self.size, "little", signed=True)

    def decode_as(self, stream: BinaryIO) -> tuple[int, int]:
        raw = _read_exact(stream, self.size)
        return int.from_bytes(raw, "little", signed=True), self.size


@dataclass(frozen=True)
class Boolean(SszType):
    """A single byte holding 0 or 1."""

    def prefixed(self) -> bool:
        return False

    def encode(self, value: bool) -> bytes:
        return b"\x01" if value else b"\x00"

    def decode_as(self, stream: BinaryIO) -> tuple[bool, int]:
        byte = _read_exact(stream, 1)[0]
        if byte > 1:
            raise DecodeError(f"invalid boolean byte {byte:#04x}")
        return bool(byte), 1


@dataclass(frozen=True)
class ByteList(SszType):
    """Variable-length bytes with a 32-bit length prefix."""

    def prefixed(self) -> bool:
        return True

    def encode(self, value: bytes) -> bytes:
        return _with_prefix(bytes(value))

    def decode_as(self, stream: BinaryIO) -> tuple[bytes, int]:
        length = _decode_length(stream)
        return _read_exact(stream, length), length + _LENGTH_SIZE


@dataclass(frozen=True)
class String(SszType):
    """UTF-8 text encoded like a byte list; invalid sequences decode as replacement characters."""

    def prefixed(self) -> bool:
        return True

    def encode(self, value: str) -> bytes:
        return ByteList().encode(value.encode("utf-8"))

    def decode_as(self, stream: BinaryIO) -> tuple[str, int]:
        raw, consumed = ByteList().decode_as(stream)
        return raw.decode("utf-8", errors="replace"), consumed


@dataclass(frozen=True)
class FixedBytes(SszType):
    """Exactly ``length`` raw bytes, such as a hash, with no prefix."""

    length: int

    def __post_init__(self) -> None:
        if self.length <= 0:
            raise ValueError("fixed byte length must be positive")

    def prefixed(self) -> bool:
        return False

    def encode(self, value: bytes) -> bytes:
        value = bytes(value)
        if len(value) != self.length:
            raise ValueError(f"expected {self.length} bytes, got {len(value)}")
        return value

    def decode_as(self, stream: BinaryIO) -> tuple[bytes, int]:
        return _read_exact(stream, self.length), self.length


@dataclass(frozen=True)
class ListOf(SszType):
    """Variable-length list of ``element`` values, prefixed by its byte length."""

    element: SszType

    def prefixed(self) -> bool:
        return True

    def encode(self, value: Sequence[Any]) -> bytes:
        return _with_prefix(b"".join(self.element.encode(item) for item in value))

    def decode_as(self, stream: BinaryIO) -> tuple[list[Any], int]:
        length = _decode_length(stream)
        items: list[Any] = []
        read = 0
        while read < length:
            item, consumed = self.element.decode_as(stream)
            if consumed == 0:
                raise DecodeError("list element consumed no bytes")
            items.append(item)
            read += consumed
        if read != length:
            raise DecodeError(f"list body is {read} bytes, prefix says {length}")
        return items, read + _LENGTH_SIZE


@dataclass(frozen=True)
class Vector(SszType):
    """Fixed-count sequence of ``element`` values with no outer prefix."""

    element: SszType
    length: int

    def __post_init__(self) -> None:
        if self.length <= 0:
            raise ValueError("vector length must be positive")

    def prefixed(self) -> bool:
        return self.element.prefixed()

    def encode(self, value: Sequence[Any]) -> bytes:
        if len(value) != self.length:
            raise ValueError(f"expected {self.length} elements, got {len(value)}")
        return b"".join(self.element.encode(item) for item in value)

    def decode_as(self, stream: BinaryIO) -> tuple[list[Any], int]:
        items: list[Any] = []
        total = 0
        for _ in range(self.length):
            item, consumed = self.element.decode_as(stream)
            items.append(item)
            total += consumed
        return items, total


@dataclass(frozen=True)
class Fixed(SszType):
    """Sequence of any count encoded as bare concatenation; it cannot be decoded."""

    element: SszType

    def prefixed(self) -> bool:
        return self.element.prefixed()

    def encode(self, value: Sequence[Any]) -> bytes:
        return b"".join(self.element.encode(item) for item in value)

    def decode_as(self, stream: BinaryIO) -> tuple[Any, int]:
        raise TypeError("a Fixed sequence carries no length and cannot be decoded")


@dataclass(frozen=True, init=False)
class Tuple(SszType):
    """Heterogeneous fixed sequence; prefixed by byte length if any member is prefixed."""

    elements: tuple[SszType, ...]

    def __init__(self, *args: SszType) -> None:
        if not args:
            raise ValueError("a tuple needs at least one element type")
        object.__setattr__(self, "elements", tuple(args))

    def prefixed(self) -> bool:
        return any(element.prefixed() for element in self.elements)

    def encode(self, value: Sequence[Any]) -> bytes:
        if len(value) != len(self.elements):
            raise ValueError(f"expected {len(self.elements)} values, got {len(value)}")
        body = b"".join(element.encode(item) for element, item in zip(self.elements, value))
        return _with_prefix(body) if self.prefixed() else body

    def decode_as(self, stream: BinaryIO) -> tuple[tuple[Any, ...], int]:
        prefixed = self.prefixed()
        expected = _decode_length(stream) if prefixed else None
        values = []
        inner = 0
        for element in self.elements:
            item, consumed = element.decode_as(stream)
            values.append(item)
            inner += consumed
        if expected is not None and inner != expected:
            raise DecodeError(f"tuple body is {inner} bytes, prefix says {expected}")
        return tuple(values), inner + (_LENGTH_SIZE if prefixed else 0)