"""Fixed-length bit-strings; bit 0 is the least significant."""

from __future__ import annotations

from .page import Page
from .util import iceil


class Bits:
    """A bit-string of `nbits` bits stored in whole bytes."""

    def __init__(self, nbits: int) -> None:
        if nbits < 0:
            raise ValueError("nbits must not be negative")
        self.nbits = nbits
        self.nbytes = iceil(nbits, 8)
        self._value = 0

    @property
    def _mask(self) -> int:
        return (1 << self.nbits) - 1

    def _check(self, position: int) -> None:
        if not 0 <= position < self.nbits:
            raise IndexError(f"bit {position} out of range 0..{self.nbits - 1}")

    def _check_same_size(self, other: Bits) -> None:
        if self.nbytes != other.nbytes:
            raise ValueError("bit-strings differ in size")

    def is_set(self, position: int) -> bool:
        self._check(position)
        return bool(self._value >> position & 1)

    def is_subset(self, other: Bits) -> bool:
        """True if every bit set here is also set in `other`."""
        self._check_same_size(other)
        return self._value & other._value == self._value

    def set(self, position: int) -> None:
        self._check(position)
        self._value |= 1 << position

    def set_all(self) -> None:
        self._value = self._mask

    def unset(self, position: int) -> None:
        self._check(position)
        self._value &= ~(1 << position)

    def unset_all(self) -> None:
        self._value = 0

    def and_with(self, other: Bits) -> None:
        self._check_same_size(other)
        self._value &= other._value

    def or_with(self, other: Bits) -> None:
        self._check_same_size(other)
        self._value = (self._value | other._value) & ((1 << 8 * self.nbytes) - 1)

    def shift(self, n: int) -> None:
        """Shift left by n bits (right for negative n), dropping overflow."""
        if n >= 0:
            self._value = (self._value << n) & self._mask
        else:
            self._value >>= -n

    def __len__(self) -> int:
        return self.nbits

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Bits):
            return NotImplemented
        return self.nbits == other.nbits and self._value == other._value

    def __bytes__(self) -> bytes:
        return self._value.to_bytes(self.nbytes, "little")

    def __str__(self) -> str:
        """Bits from most to least significant, whole bytes shown."""
        width = 8 * self.nbytes
        return format(self._value, f"0{width}b") if width else ""

    def __repr__(self) -> str:
        return f"Bits({self.nbits}, {str(self)!r})"


def get_bits(page: Page, pos: int, nbits: int) -> Bits:
    """Read the bit-string stored as item `pos` of a page."""
    bits = Bits(nbits)
    bits._value = int.from_bytes(page.read_item(pos, bits.nbytes), "little")
    return bits


def put_bits(page: Page, pos: int, bits: Bits) -> None:
    """Store a bit-string as item `pos` of a page."""
    page.write_item(pos, bytes(bits))