"""The 32-bit hash function used to seed codeword generation."""

_MASK = 0xFFFFFFFF

# Register (0=a, 1=b, 2=c) and shift for each of the trailing 11 bytes.
_TAIL = (
    (0, 0), (0, 8), (0, 16), (0, 24),
    (1, 0), (1, 8), (1, 16), (1, 24),
    (2, 8), (2, 16), (2, 24),
)


def _rot(x: int, k: int) -> int:
    return ((x << k) | (x >> (32 - k))) & _MASK


def _mix(a: int, b: int, c: int) -> tuple[int, int, int]:
    a = (a - c) & _MASK; a ^= _rot(c, 4); c = (c + b) & _MASK
    b = (b - a) & _MASK; b ^= _rot(a, 6); a = (a + c) & _MASK
    c = (c - b) & _MASK; c ^= _rot(b, 8); b = (b + a) & _MASK
    a = (a - c) & _MASK; a ^= _rot(c, 16); c = (c + b) & _MASK
    b = (b - a) & _MASK; b ^= _rot(a, 19); a = (a + c) & _MASK
    c = (c - b) & _MASK; c ^= _rot(b, 4); b = (b + a) & _MASK
    return a, b, c


def _final(a: int, b: int, c: int) -> int:
    c ^= b; c = (c - _rot(b, 14)) & _MASK
    a ^= c; a = (a - _rot(c, 11)) & _MASK
    b ^= a; b = (b - _rot(a, 25)) & _MASK
    c ^= b; c = (c - _rot(b, 16)) & _MASK
    a ^= c; a = (a - _rot(c, 4)) & _MASK
    b ^= a; b = (b - _rot(a, 14)) & _MASK
    c ^= b; c = (c - _rot(b, 24)) & _MASK
    return c


def _char_word(byte: int) -> int:
    """Widen a byte the way a signed char becomes a 32-bit word."""
    return byte if byte < 0x80 else (byte - 0x100) & _MASK


def _word(chunk: bytes) -> int:
    return sum(_char_word(byte) << (8 * i) for i, byte in enumerate(chunk)) & _MASK


def hash_any(key: bytes | str) -> int:
    """Hash a string or byte string to an unsigned 32-bit value."""
    data = key.encode("utf-8") if isinstance(key, str) else bytes(key)
    a = b = 0x9E3779B9
    c = 3923095

    full = len(data) - len(data) % 12
    for start in range(0, full, 12):
        a = (a + _word(data[start:start + 4])) & _MASK
        b = (b + _word(data[start + 4:start + 8])) & _MASK
        c = (c + _word(data[start + 8:start + 12])) & _MASK
        a, b, c = _mix(a, b, c)

    regs = [a, b, c]
    for (reg, shift), byte in zip(_TAIL, data[full:]):
        regs[reg] = (regs[reg] + (_char_word(byte) << shift)) & _MASK
    return _final(*regs)