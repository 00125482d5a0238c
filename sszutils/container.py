"""Composite SSZ types built from named or positional fields."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, BinaryIO, Union

from sszutils.codec import (
    ByteList,
    DecodeError,
    Fixed,
    FixedBytes,
    ListOf,
    SszType,
    Uint,
    Vector,
)
from sszutils.hashing import Hasher, hash_tree_root, sha256

FieldName = Union[str, int]

_LENGTH_SIZE = 4


@dataclass(frozen=True)
class Field:
    """One member of a container.

    ``name`` is an attribute or mapping key (``str``) or a position (``int``).
    A ``skip_default`` field is never serialized or hashed; on decoding it takes
    ``default_factory()`` (or ``None``). A ``use_fixed`` field is serialized as the
    bare concatenation of its elements, which makes the container undecodable.
    A ``truncate`` field is left out of the truncated hash-tree root.
    """

    name: FieldName
    ssz_type: SszType
    skip_default: bool = False
    default_factory: Callable[[], Any] | None = None
    use_fixed: bool = False
    truncate: bool = False

    def value_of(self, value: Any) -> Any:
        """Read this field out of a container value."""
        if isinstance(self.name, int) or isinstance(value, Mapping):
            return value[self.name]
        return getattr(value, self.name)

    def default(self) -> Any:
        """The value a skipped field takes when decoded."""
        return self.default_factory() if self.default_factory is not None else None

    def effective_type(self) -> SszType:
        """The type used to serialize and hash this field's value."""
        if not self.use_fixed:
            return self.ssz_type
        return Fixed(_element_of(self.ssz_type))


def _element_of(ssz_type: SszType) -> SszType:
    if isinstance(ssz_type, (ListOf, Vector, Fixed)):
        return ssz_type.element
    if isinstance(ssz_type, (ByteList, FixedBytes)):
        return Uint(8)
    raise TypeError(f"{type(ssz_type).__name__} is not a sequence and cannot be used as fixed")


def _sort_key(field: Field) -> str:
    # Positional fields carry no name and keep their declared order.
    return field.name if isinstance(field.name, str) else ""


class Container(SszType):
    """A struct-like type: its fields serialized in order, prefixed if any field is."""

    def __init__(
        self,
        fields: Sequence[Field],
        *,
        sorted: bool = False,
        no_decode: bool = False,
        no_encode: bool = False,
        factory: Callable[..., Any] | None = None,
    ) -> None:
        self.fields: tuple[Field, ...] = tuple(fields)
        names = [field.name for field in self.fields]
        if len(set(names)) != len(names):
            raise ValueError("container field names must be unique")
        self.sorted = sorted
        self.no_decode = no_decode
        self.no_encode = no_encode
        self.factory = factory
        ordered = list(self.fields)
        if sorted:
            ordered.sort(key=_sort_key)
        self._codec_order: tuple[Field, ...] = tuple(ordered)

    def __repr__(self) -> str:
        return f"Container({list(self.fields)!r}, sorted={self.sorted})"

    def _serialized(self) -> list[Field]:
        return [field for field in self._codec_order if not field.skip_default]

    def prefixed(self) -> bool:
        return any(
            field.ssz_type.prefixed() for field in self.fields if not field.skip_default
        )

    def decodable(self) -> bool:
        """False when decoding is switched off or a field is encoded as fixed."""
        if self.no_decode:
            return False
        return not any(field.use_fixed for field in self.fields if not field.skip_default)

    def encode(self, value: Any) -> bytes:
        if self.no_encode:
            raise TypeError("encoding is disabled for this container")
        body = b"".join(
            field.effective_type().encode(field.value_of(value)) for field in self._serialized()
        )
        if self.prefixed():
            return len(body).to_bytes(_LENGTH_SIZE, "little") + body
        return body

    def decode_as(self, stream: BinaryIO) -> tuple[Any, int]:
        if not self.decodable():
            raise TypeError("this container cannot be decoded")
        consumed = 0
        expected: int | None = None
        if self.prefixed():
            expected, consumed = Uint(32).decode_as(stream)
        start = consumed
        values: dict[FieldName, Any] = {}
        for field in self._codec_order:
            if field.skip_default:
                values[field.name] = field.default()
                continue
            item, used = field.ssz_type.decode_as(stream)
            values[field.name] = item
            consumed += used
        if expected is not None and consumed - start != expected:
            raise DecodeError(
                f"container body is {consumed - start} bytes, prefix says {expected}"
            )
        return self._build(values), consumed

    def _build(self, values: dict[FieldName, Any]) -> Any:
        positional = bool(self.fields) and all(isinstance(f.name, int) for f in self.fields)
        if positional:
            args = [values[field.name] for field in self.fields]
            return self.factory(*args) if self.factory is not None else tuple(args)
        kwargs = {field.name: values[field.name] for field in self.fields}
        return self.factory(**kwargs) if self.factory is not None else kwargs

    def field_roots(
        self, value: Any, hasher: Hasher = sha256, truncated: bool = False
    ) -> list[bytes]:
        """Hash-tree roots of the hashed fields, in declared order."""
        return [
            hash_tree_root(field.effective_type(), field.value_of(value), hasher)
            for field in self.fields
            if not field.skip_default and not (truncated and field.truncate)
        ]