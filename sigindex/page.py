"""Fixed-size pages holding an item count followed by equal-sized items."""

import os
import struct
from typing import BinaryIO

from .util import COUNT_SIZE, PAGESIZE, SignatureFileError

_NITEMS = struct.Struct("<I")


class Page:
    """A PAGESIZE-byte buffer: a 4-byte item count then packed items."""

    def __init__(self, data: bytes | None = None) -> None:
        if data is None:
            self._buf = bytearray(PAGESIZE)
        else:
            if len(data) != PAGESIZE:
                raise ValueError(f"page data must be {PAGESIZE} bytes, got {len(data)}")
            self._buf = bytearray(data)

    @property
    def nitems(self) -> int:
        return _NITEMS.unpack_from(self._buf, 0)[0]

    def add_one_item(self) -> None:
        """Increase the item count by one."""
        _NITEMS.pack_into(self._buf, 0, (self.nitems + 1) & 0xFFFFFFFF)

    def _span(self, index: int, size: int) -> slice:
        start = COUNT_SIZE + size * index
        if index < 0 or size < 0 or start + size > PAGESIZE:
            raise ValueError(f"item {index} of size {size} does not fit in a page")
        return slice(start, start + size)

    def read_item(self, index: int, size: int) -> bytes:
        """Return the bytes of item `index`, each item being `size` bytes."""
        return bytes(self._buf[self._span(index, size)])

    def write_item(self, index: int, data: bytes) -> None:
        """Store `data` as item `index`, items being len(data) bytes each."""
        self._buf[self._span(index, len(data))] = data

    def to_bytes(self) -> bytes:
        return bytes(self._buf)


def new_page() -> Page:
    """Return an empty, zero-filled page."""
    return Page()


def add_page(f: BinaryIO) -> int:
    """Append an empty page to a file and return its page id."""
    end = f.seek(0, os.SEEK_END)
    f.write(bytes(PAGESIZE))
    return end // PAGESIZE


def get_page(f: BinaryIO, pid: int) -> Page:
    """Read page `pid` from a file."""
    if pid < 0:
        raise ValueError(f"invalid page id {pid}")
    f.seek(pid * PAGESIZE)
    data = f.read(PAGESIZE)
    if len(data) != PAGESIZE:
        raise SignatureFileError(f"page {pid} could not be read")
    return Page(data)


def put_page(f: BinaryIO, pid: int, page: Page) -> None:
    """Write a page to position `pid` in a file."""
    if pid < 0:
        raise ValueError(f"invalid page id {pid}")
    f.seek(pid * PAGESIZE)
    f.write(page.to_bytes())