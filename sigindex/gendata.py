"""Generate reproducible random tuples for loading into a relation."""

from __future__ import annotations

import re
import string
import sys
from typing import Iterator

from .randomness import GlibcRandom

USAGE = "Usage: gendata  #tuples  #attributes  [startID]  [seed]"
ALPHA = string.ascii_lowercase + string.ascii_uppercase

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")


def _atoi(text: str) -> int:
    match = _INT_PREFIX.match(text)
    return int(match.group(1)) if match else 0


def rand_word(rng: GlibcRandom, nchars: int) -> str:
    """Return `nchars` random letters drawn from `rng`."""
    return "".join(ALPHA[rng.random() % len(ALPHA)] for _ in range(nchars))


def generate_tuples(ntups: int, natts: int, start_id: int = 1000000,
                    seed: int = 0) -> Iterator[str]:
    """Return an iterator over `ntups` distinct tuples of `natts` attributes.

    Raises ValueError for out-of-range arguments.
    """
    if ntups < 1 or ntups > 100000:
        raise ValueError(f"Invalid #tuples: {ntups} (must be 0 < # < 10^6)")
    if natts < 2 or natts > 9:
        raise ValueError(f"Invalid #attrs: {natts} (must be 1 < # < 10)")
    if start_id < 0 or start_id > 9000000:
        raise ValueError(
            f"Invalid startID: {start_id} (must be 0 <= # < 9000000)"
        )
    return _tuples(ntups, natts, start_id, GlibcRandom(seed))


def _tuples(ntups: int, natts: int, start_id: int,
            rng: GlibcRandom) -> Iterator[str]:
    for i in range(ntups):
        fields = [f"{start_id + i:07d}", rand_word(rng, 20)]
        for j in range(natts - 2):
            period = (j + 3) * 83
            fields.append(f"a{j + 3}-{i % period:03d}")
        yield ",".join(fields)


def main(argv: list[str] | None = None) -> int:
    """Print generated tuples, one per line."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) < 2:
        print(USAGE, file=sys.stderr)
        return 1
    ntups = _atoi(args[0])
    natts = _atoi(args[1])
    start_id = _atoi(args[2]) if len(args) > 2 else 1000000
    seed = _atoi(args[3]) if len(args) > 3 else 0
    try:
        tuples = generate_tuples(ntups, natts, start_id, seed)
    except ValueError as err:
        print(err, file=sys.stderr)
        return 1
    for tup in tuples:
        print(tup)
    return 0