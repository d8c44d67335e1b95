"""Shared constants, errors and small helpers for signature indexed files."""

PAGESIZE = 4096
COUNT_SIZE = 4
NO_PAGE = 0xFFFFFFFF
MAXTUPLEN = 200
MAXRELNAME = 200


class SignatureFileError(Exception):
    """Raised when a relation or one of its files cannot be used."""


def iceil(val: int, base: int) -> int:
    """Return val / base rounded up to the next whole number."""
    if base <= 0:
        raise ValueError("base must be positive")
    result = val // base if val >= 0 else -((-val) // base)
    if val % base > 0 and val > 0:
        result += 1
    return result