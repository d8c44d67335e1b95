"""A reproducible generator matching the C library's additive random()."""

_MASK = 0xFFFFFFFF
_DEGREE = 31
_SEPARATION = 3
_DISCARD = _DEGREE * 10


def _to_int32(value: int) -> int:
    value &= _MASK
    return value - 0x100000000 if value & 0x80000000 else value


def _trunc_divmod(value: int, divisor: int) -> tuple[int, int]:
    quotient = abs(value) // divisor
    if value < 0:
        quotient = -quotient
    return quotient, value - quotient * divisor


class GlibcRandom:
    """Additive feedback generator with the default 31-word state."""

    def __init__(self, seed: int = 1) -> None:
        self._state: list[int] = []
        self._front = 0
        self._rear = 0
        self.seed(seed)

    def seed(self, seed: int) -> None:
        """Reset the generator as srandom(seed) would."""
        seed &= _MASK
        if seed == 0:
            seed = 1
        word = _to_int32(seed)
        state = [word & _MASK]
        for _ in range(1, _DEGREE):
            hi, lo = _trunc_divmod(word, 127773)
            word = _to_int32(16807 * lo - 2836 * hi)
            if word < 0:
                word += 2147483647
            state.append(word & _MASK)
        self._state = state
        self._front = _SEPARATION
        self._rear = 0
        for _ in range(_DISCARD):
            self.random()

    def random(self) -> int:
        """Return the next value in [0, 2**31)."""
        state = self._state
        state[self._front] = (state[self._front] + state[self._rear]) & _MASK
        result = state[self._front] >> 1
        self._front = (self._front + 1) % _DEGREE
        self._rear = (self._rear + 1) % _DEGREE
        return result