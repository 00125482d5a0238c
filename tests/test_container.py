from dataclasses import dataclass, field as dc_field
from typing import NamedTuple

import pytest

from sszutils.codec import Boolean, ByteList, DecodeError, ListOf, Tuple, Uint
from sszutils.container import Container, Field
from sszutils.hashing import hash_tree_root, truncated_hash_tree_root


def assert_ed(ssz_type, value, encoded):
    assert ssz_type.encode(value) == encoded
    assert ssz_type.decode(encoded) == value


@dataclass(frozen=True)
class Unit:
    pass


class IndexedFixed(NamedTuple):
    first: bool
    second: bool


class IndexedVar(NamedTuple):
    first: bytes
    second: bool


@dataclass
class NamedFixed:
    b: bool
    a: bool


@dataclass
class NamedVar:
    b: bytes
    a: bool


@dataclass
class Skipped:
    marker: list = dc_field(default_factory=list)


UNIT = Container([], factory=Unit)
INDEXED_FIXED = Container([Field(0, Boolean()), Field(1, Boolean())], factory=IndexedFixed)
INDEXED_VAR = Container([Field(0, ByteList()), Field(1, Boolean())], factory=IndexedVar)
NAMED_FIXED = Container([Field("b", Boolean()), Field("a", Boolean())], factory=NamedFixed)
NAMED_VAR = Container([Field("b", ByteList()), Field("a", Boolean())], factory=NamedVar)


def test_unit_ed():
    assert UNIT.prefixed() is False
    assert_ed(UNIT, Unit(), b"")


def test_indexed_fixed_ed():
    assert INDEXED_FIXED.prefixed() is False
    assert_ed(INDEXED_FIXED, IndexedFixed(True, False), b"\x01\x00")


def test_indexed_var_ed():
    assert INDEXED_VAR.prefixed() is True
    assert_ed(
        INDEXED_VAR,
        IndexedVar(b"hello", False),
        b"\n\x00\x00\x00\x05\x00\x00\x00hello\x00",
    )


def test_named_fixed_ed():
    assert NAMED_FIXED.prefixed() is False
    assert_ed(NAMED_FIXED, NamedFixed(b=True, a=False), b"\x01\x00")


def test_named_var_ed():
    assert NAMED_VAR.prefixed() is True
    assert_ed(
        NAMED_VAR,
        NamedVar(b=b"hello", a=False),
        b"\n\x00\x00\x00\x05\x00\x00\x00hello\x00",
    )


@pytest.mark.parametrize(
    "first, expected",
    [(Boolean(), False), (ByteList(), True)],
)
def test_generic_prefixed(first, expected):
    indexed = Container([Field(0, first), Field(1, Boolean())])
    named = Container([Field("a", first), Field("b", Boolean())])
    assert indexed.prefixed() is expected
    assert named.prefixed() is expected


def test_skipped():
    skipped = Container(
        [Field("marker", ListOf(Uint(8)), skip_default=True, default_factory=list)],
        factory=Skipped,
    )
    skipped2 = Container([Field(0, ByteList(), skip_default=True)])
    encoded = skipped.encode(Skipped())
    encoded2 = skipped2.encode((b"ignored",))
    assert encoded == b""
    assert encoded2 == b""
    assert skipped.prefixed() is False
    assert_ed(skipped, Skipped(), encoded)
    assert skipped2.decode(encoded2) == (None,)


def test_sorted_orders_fields_by_name():
    sorted_named = Container(
        [Field("b", Boolean()), Field("a", Boolean())], sorted=True, factory=NamedFixed
    )
    assert_ed(sorted_named, NamedFixed(b=True, a=False), b"\x00\x01")


def test_default_factories_give_dict_and_tuple():
    named = Container([Field("x", Uint(16)), Field("y", Boolean())])
    indexed = Container([Field(0, Uint(16)), Field(1, Boolean())])
    assert named.decode(b"\x05\x00\x01") == {"x": 5, "y": True}
    assert indexed.decode(b"\x05\x00\x01") == (5, True)
    assert named.encode({"x": 5, "y": True}) == b"\x05\x00\x01"


def test_use_fixed_encodes_without_prefix_and_is_not_decodable():
    container = Container([Field("data", ListOf(Uint(8)), use_fixed=True)])
    assert container.decodable() is False
    assert container.encode({"data": [1, 2, 3]}) == b"\x01\x02\x03"
    with pytest.raises(TypeError):
        container.decode(b"\x01\x02\x03")


def test_no_decode_and_no_encode():
    no_decode = Container([Field("a", Boolean())], no_decode=True)
    no_encode = Container([Field("a", Boolean())], no_encode=True)
    assert no_decode.decodable() is False
    assert no_decode.encode({"a": True}) == b"\x01"
    with pytest.raises(TypeError):
        no_decode.decode(b"\x01")
    with pytest.raises(TypeError):
        no_encode.encode({"a": True})
    assert no_encode.decode(b"\x01") == {"a": True}


def test_prefix_mismatch_raises():
    with pytest.raises(DecodeError):
        NAMED_VAR.decode(b"\x0b\x00\x00\x00\x05\x00\x00\x00hello\x00\x00")


def test_duplicate_field_names_rejected():
    with pytest.raises(ValueError):
        Container([Field("a", Boolean()), Field("a", Boolean())])


def test_hash_matches_known_composite_root():
    container = Container(
        [Field("x", ByteList()), Field("y", ByteList()), Field("z", Boolean())]
    )
    root = hash_tree_root(container, {"x": b"hello", "y": b"world", "z": True})
    assert root == (
        b"x\xb19 \x9f\xb2\xec\x07\xff\x1e\x82\x0b\xa4\x83\xa3\x95"
        b"\xc9%\x86\xd4\x8f\x85\xfao\xe2\xe8\x0eH!\xaa\xd7\t"
    )


def test_hash_equals_tuple_of_same_fields():
    value = NamedFixed(b=True, a=False)
    expected = hash_tree_root(Tuple(Boolean(), Boolean()), (True, False))
    assert hash_tree_root(NAMED_FIXED, value) == expected


def test_truncated_hash_leaves_out_truncated_fields():
    full = Container([Field("a", Uint(64)), Field("sig", ByteList(), truncate=True)])
    short = Container([Field("a", Uint(64))])
    value = {"a": 7, "sig": b"signature"}
    assert truncated_hash_tree_root(full, value) == hash_tree_root(short, {"a": 7})
    assert hash_tree_root(full, value) != truncated_hash_tree_root(full, value)


def test_field_roots_skip_skipped_fields():
    container = Container(
        [Field("a", Boolean()), Field("b", Boolean(), skip_default=True)]
    )
    roots = container.field_roots({"a": True, "b": False})
    assert roots == [b"\x01" + b"\x00" * 31]


def test_empty_container_root_is_zero_chunk():
    assert hash_tree_root(UNIT, Unit()) == b"\x00" * 32