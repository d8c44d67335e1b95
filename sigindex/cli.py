"""Command-line entry points: create, insert, select, stats and dump."""

from __future__ import annotations

import math
import re
import struct
import sys

from .query import start_query
from .reln import exists_relation, new_relation, open_relation
from .tuples import read_tuple
from .util import PAGESIZE, COUNT_SIZE, SignatureFileError, iceil

CREATE_USAGE = "Usage: create  RelName  SigType  #tuples  #attrs  1/pF"
INSERT_USAGE = "Usage: insert  [-v]  RelName"
SELECT_USAGE = "Usage: select  [-v]  RelName  v1,v2,v3,v4,...  [t|p|b]"
STATS_USAGE = "Usage: stats  RelName"
DUMP_USAGE = "Usage: dump  RelName"

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")


def _atoi(text: str) -> int:
    match = _INT_PREFIX.match(text)
    return int(match.group(1)) if match else 0


def _as_float32(value: float) -> float:
    return struct.unpack("<f", struct.pack("<f", value))[0]


def _fail(*lines: str) -> int:
    for line in lines:
        print(line, file=sys.stderr)
    return 1


def _args(argv: list[str] | None) -> list[str]:
    return sys.argv[1:] if argv is None else list(argv)


def create_main(argv: list[str] | None = None) -> int:
    """Create an empty relation sized for the expected number of tuples."""
    args = _args(argv)
    if len(args) < 5:
        return _fail(CREATE_USAGE)
    name, sigarg = args[0], args[1]
    if sigarg not in ("simc", "catc"):
        return _fail("Invalid signature type (must be simc or catc)")
    stype = sigarg[0]

    ntuples = _atoi(args[2])
    if ntuples < 10:
        return _fail(f"Invalid #tuples: {ntuples} (must be >= 10)")
    nattrs = _atoi(args[3])
    if nattrs < 2 or nattrs > 9:
        return _fail(f"Invalid #attrs: {nattrs} (must be 1 < # < 10)")
    inverse = _atoi(args[4])
    pf = math.inf if inverse == 0 else _as_float32(1.0 / inverse)
    if not 0 < pf <= 0.01:
        return _fail(f"Invalid pF: {pf:f} (must be > 100)")

    tsize = 28 + 7 * (nattrs - 2)
    capacity = (PAGESIZE - COUNT_SIZE) // tsize
    log2 = 1.0 / math.log(2.0)
    log_f = math.log(1.0 / pf)
    tk = int(log2 * log_f)
    tm = int(log2 * log2 * nattrs * log_f)
    pm = int(log2 * log2 * nattrs * capacity * log_f)
    bm = iceil(ntuples, capacity)

    if exists_relation(name):
        return _fail(f"Relation {name} already exists")
    try:
        new_relation(name, nattrs, pf, stype, tk, tm, pm, bm)
    except (SignatureFileError, ValueError):
        return _fail(f"Problems while creating relation {name}")
    return 0


def insert_main(argv: list[str] | None = None) -> int:
    """Read tuples from standard input and add them to a relation."""
    args = _args(argv)
    verbose = bool(args) and args[0] == "-v"
    if verbose:
        args = args[1:]
    if not args:
        return _fail(INSERT_USAGE)
    rname = args[0]
    try:
        rel = open_relation(rname)
    except SignatureFileError:
        return _fail(f"Can't open relation: {rname}")
    with rel:
        while (tup := read_tuple(rel.params.nattrs, sys.stdin)) is not None:
            try:
                pid = rel.add(tup)
            except (SignatureFileError, ValueError, IndexError):
                return _fail(f"Insert of {tup} failed")
            if verbose:
                print(f"{tup} -> {pid}")
    return 0


def select_main(argv: list[str] | None = None) -> int:
    """Run a query on a relation and print matching tuples and statistics."""
    args = _args(argv)
    if args and args[0] == "-v":
        args = args[1:]
    if len(args) < 2:
        return _fail(SELECT_USAGE)
    rname, qstr = args[0], args[1]
    sigs = args[2][:1] if len(args) > 2 else "?"
    try:
        rel = open_relation(rname)
    except SignatureFileError:
        return _fail(f"Can't open relation: {rname}")
    with rel:
        try:
            query = start_query(rel, qstr, sigs)
        except ValueError:
            return _fail(f"Invalid query: {qstr}")
        for tup in query.scan():
            print(tup)
        print("Query Stats:")
        print(query.stats(), end="")
    return 0


def stats_main(argv: list[str] | None = None) -> int:
    """Print the parameters and sizes of a relation."""
    args = _args(argv)
    if not args:
        return _fail(STATS_USAGE)
    try:
        rel = open_relation(args[0])
    except SignatureFileError:
        return _fail("No such relation", STATS_USAGE)
    with rel:
        print(rel.stats(), end="")
    return 0


def dump_main(argv: list[str] | None = None) -> int:
    """Print every tuple in a relation."""
    args = _args(argv)
    if not args:
        return _fail(DUMP_USAGE)
    try:
        rel = open_relation(args[0])
    except SignatureFileError:
        return _fail(f"Can't open relation: {args[0]}")
    with rel:
        for tup in rel.tuples():
            print(tup)
    return 0