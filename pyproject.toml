[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sszutils"
version = "0.1.0"
description = "SimpleSerialize encoding, decoding and Merkle hashing, with a deterministic shuffle"
requires-python = ">=3.10"
dependencies = ["pycryptodome"]
keywords = ["ssz", "serialization", "merkle", "hash-tree-root", "shuffle", "keccak", "blake2s"]
classifiers = [
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["sszutils"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
