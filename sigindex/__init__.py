"""Signature-indexed relation files with tuple, page and bit-sliced signatures."""

__version__ = "0.1.0"

__all__ = [
    "bits",
    "cli",
    "gendata",
    "hashing",
    "page",
    "query",
    "randomness",
    "reln",
    "signatures",
    "tuples",
    "util",
]