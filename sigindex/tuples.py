"""Tuples: comma-separated attribute values stored as fixed-size page items."""

from typing import TextIO

from .page import Page
from .util import MAXTUPLEN, SignatureFileError

_ENCODING = "utf-8"


def read_tuple(nattrs: int, stream: TextIO) -> str | None:
    """Read the next tuple from a stream.

    Returns None at end of input or when the line does not hold exactly
    `nattrs` comma-separated fields. At most MAXTUPLEN - 2 characters of a
    line are read.
    """
    line = stream.readline(MAXTUPLEN - 2)
    if not line:
        return None
    if line.endswith("\n"):
        line = line[:-1]
    if line.count(",") + 1 != nattrs:
        return None
    return line


def tuple_vals(tup: str) -> list[str]:
    """Split a tuple into its attribute values."""
    return tup.split(",")


def tuple_match(t1: str, t2: str, nattrs: int) -> bool:
    """Compare two tuples attribute by attribute; '?' matches anything."""
    v1 = tuple_vals(t1)
    v2 = tuple_vals(t2)
    if len(v1) < nattrs or len(v2) < nattrs:
        raise ValueError(f"tuples must have at least {nattrs} attributes")
    return all(
        a.startswith("?") or b.startswith("?") or a == b
        for a, b in zip(v1[:nattrs], v2[:nattrs])
    )


def add_tuple_to_page(page: Page, tup: str, tupsize: int, tup_pp: int) -> None:
    """Append a tuple to a data page.

    Raises SignatureFileError when the page already holds `tup_pp` tuples and
    ValueError when the tuple is not exactly `tupsize` bytes long.
    """
    if page.nitems == tup_pp:
        raise SignatureFileError("no room for another tuple on this page")
    data = tup.encode(_ENCODING)
    if len(data) != tupsize:
        raise ValueError(f"tuple is {len(data)} bytes, expected {tupsize}")
    page.write_item(page.nitems, data)
    page.add_one_item()


def get_tuple_from_page(page: Page, index: int, tupsize: int) -> str:
    """Return tuple number `index` from a data page."""
    if index < 0 or index > page.nitems:
        raise IndexError(f"tuple {index} is not on this page")
    raw = page.read_item(index, tupsize)
    return raw.split(b"\0", 1)[0].decode(_ENCODING)