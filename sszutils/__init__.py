"""SimpleSerialize encoding and decoding, Merkle hash-tree roots, Keccak-256 and deterministic shuffling."""

__version__ = "0.1.0"
__all__ = ["codec", "hashing", "container", "rng", "shuffling", "keccak"]