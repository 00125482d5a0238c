# sszutils

A library for the SimpleSerialize (SSZ) format: encoding and decoding values,
computing their Merkle hash-tree roots, and a deterministic seed-driven shuffle.

## Modules

- `sszutils.codec`: type descriptors that encode Python values to bytes and
  decode them back. Every descriptor is an `SszType` with `prefixed()`,
  `encode(value)`, `decode_as(stream)` (returns the value and the number of
  bytes read) and `decode(data)` (accepts bytes or a binary stream).
  - `Uint(bits)`, `Int(bits)`: little-endian integers; values out of range
    raise `ValueError`.
  - `Boolean()`: one byte, `0` or `1`.
  - `ByteList()`: bytes with a 4-byte little-endian length prefix.
  - `String()`: UTF-8 text encoded like a byte list; invalid sequences decode
    as replacement characters.
  - `FixedBytes(length)`: exactly `length` raw bytes with no prefix.
  - `ListOf(element)`: a list prefixed by the byte length of its body.
  - `Vector(element, length)`: a fixed number of elements with no outer prefix.
  - `Fixed(element)`: any number of elements as a bare concatenation; it can
    be encoded but not decoded.
  - `Tuple(*element_types)`: mixed members, prefixed by byte length when any
    member is prefixed.

  Malformed or short input raises `DecodeError` (a `ValueError`).

- `sszutils.hashing`: Merkle hashing. `hash_tree_root(ssz_type, value, hasher)`
  and `truncated_hash_tree_root(...)` compute roots (`hasher` defaults to
  `sha256`); the building blocks are `chunkify`, `pack`, `merkleize`,
  `mix_in_length` and `is_power_of_two`. `RawRoot()` marks a value that already
  is a root. Any function taking `bytes` and returning a digest can serve as
  the hasher.

- `sszutils.container`: `Container(fields, *, sorted=False, no_decode=False,
  no_encode=False, factory=None)` describes a record made of `Field`s. A
  field's `name` is an attribute or mapping key (`str`) or a position (`int`).
  Field options:
  - `skip_default`: never encoded or hashed; on decoding it takes
    `default_factory()` or `None`.
  - `use_fixed`: the field's elements are encoded as a bare concatenation,
    which makes the container undecodable (`decodable()` returns `False`).
  - `truncate`: left out of `truncated_hash_tree_root`.

  With `sorted=True`, named fields are encoded and decoded in alphabetical
  order; hashing always uses the declared order. Decoding builds the value with
  `factory` if given, otherwise a `dict` (named fields) or a `tuple` (positional
  fields).

- `sszutils.rng`: `ShuffleRng(seed)` draws 24-bit big-endian values from
  successive BLAKE2s hashes of the seed; `rand_range(n)` returns an unbiased
  value below `n`. Helpers: `blake2s_hash(data)`, `int_from_bytes24(source, offset)`.

- `sszutils.shuffling`: `shuffle(seed, items)` returns a new list in an order
  fixed by the seed. `ShuffleError` is raised when the list is longer than the
  generator can index.

- `sszutils.keccak`: `keccak256(data)`, with the constants `KECCAK_EMPTY` and
  `KECCAK_NULL_RLP`. `keccak256` can be passed as the hasher to the hashing
  functions.

## Installation

```
pip install .
```

## Examples

Encoding and decoding:

```python
from sszutils.codec import Boolean, ByteList, ListOf, Tuple, Uint

Uint(32).encode(76465737)               # b"I\xc6\x8e\x04"
ByteList().encode(b"hello, world!")     # b"\r\x00\x00\x00hello, world!"

pair = Tuple(ByteList(), Boolean())
data = pair.encode((b"hello", False))   # b"\n\x00\x00\x00\x05\x00\x00\x00hello\x00"
pair.decode(data)                       # (b"hello", False)

ListOf(Boolean()).decode(b"\x02\x00\x00\x00\x01\x00")   # [True, False]
```

Containers:

```python
from sszutils.codec import Boolean, ByteList
from sszutils.container import Container, Field

record = Container([Field("b", ByteList()), Field("a", Boolean())])
data = record.encode({"b": b"hello", "a": False})
record.decode(data)                     # {"b": b"hello", "a": False}
```

Hash-tree roots:

```python
from sszutils.codec import ByteList
from sszutils.hashing import hash_tree_root, sha256
from sszutils.keccak import keccak256

hash_tree_root(ByteList(), b"hello, world!", sha256)
hash_tree_root(ByteList(), b"hello, world!", keccak256)
```

Shuffling:

```python
from sszutils.rng import blake2s_hash
from sszutils.shuffling import shuffle

shuffle(blake2s_hash(b"4kn4driuctg8"), range(12))
# [7, 4, 8, 6, 5, 3, 0, 11, 1, 2, 10, 9]
```

## What it does not do

This is a library only: it has no command-line tool, it does not read test
files in YAML or any other format, and it keeps no Merkle tree storage or
database of values. Roots are computed from whole values in memory each time.

## Running the tests

```
pip install .[test]
pytest
```