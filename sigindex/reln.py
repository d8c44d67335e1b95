"""Relations: a data file plus tuple, page and bit-sliced signature files."""

from __future__ import annotations

import os
import struct
from dataclasses import astuple, dataclass
from typing import BinaryIO, Iterator

from .bits import Bits, get_bits, put_bits
from .page import add_page, get_page, new_page, put_page
from .signatures import make_page_sig, make_tuple_sig
from .tuples import add_tuple_to_page, get_tuple_from_page
from .util import COUNT_SIZE, PAGESIZE, SignatureFileError, iceil

_SUFFIXES = ("info", "data", "tsig", "psig", "bsig")
_AVAILABLE = PAGESIZE - COUNT_SIZE


@dataclass
class RelnParams:
    """Relation parameters as kept in the .info file."""

    # dynamic parameters
    npages: int = 0
    ntups: int = 0
    tsig_npages: int = 0
    ntsigs: int = 0
    psig_npages: int = 0
    npsigs: int = 0
    bsig_npages: int = 0
    nbsigs: int = 0
    # fixed parameters
    nattrs: int = 0
    sigtype: str = "s"
    pf: float = 0.0
    tupsize: int = 0
    tup_pp: int = 0
    tk: int = 0
    tm: int = 0
    tsig_size: int = 0
    tsig_pp: int = 0
    pm: int = 0
    psig_size: int = 0
    psig_pp: int = 0
    bm: int = 0
    bsig_size: int = 0
    bsig_pp: int = 0

    _STRUCT = struct.Struct("<9Ic3xf12I")

    def to_bytes(self) -> bytes:
        values = list(astuple(self))
        values[9] = self.sigtype.encode("ascii")
        return self._STRUCT.pack(*values)

    @classmethod
    def from_bytes(cls, data: bytes) -> RelnParams:
        if len(data) < cls._STRUCT.size:
            raise SignatureFileError("relation info file is truncated")
        values = list(cls._STRUCT.unpack_from(data))
        values[9] = values[9].decode("ascii")
        return cls(*values)


def _open_file(name: str, suffix: str) -> BinaryIO:
    fd = os.open(f"{name}.{suffix}", os.O_RDWR | os.O_CREAT, 0o644)
    return os.fdopen(fd, "r+b")


def _round_to_byte(nbits: int) -> int:
    return nbits + (8 - nbits % 8) % 8


class Relation:
    """An open relation: its parameters and its five files."""

    def __init__(self, name: str, params: RelnParams) -> None:
        self.name = name
        self.params = params
        files = [_open_file(name, suffix) for suffix in _SUFFIXES]
        self.infof, self.dataf, self.tsigf, self.psigf, self.bsigf = files
        self._closed = False

    def close(self) -> None:
        """Write the parameters to the info file and close all files."""
        if self._closed:
            return
        self.infof.seek(0)
        self.infof.write(self.params.to_bytes())
        for f in (self.infof, self.dataf, self.tsigf, self.psigf, self.bsigf):
            f.close()
        self._closed = True

    def __enter__(self) -> Relation:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def add(self, tup: str) -> int:
        """Insert a tuple and return the id of the data page holding it."""
        rp = self.params
        if len(tup.encode("utf-8")) != rp.tupsize:
            raise ValueError(f"tuple must be {rp.tupsize} bytes long")

        pid = rp.npages - 1
        page = get_page(self.dataf, pid)
        if page.nitems == rp.tup_pp:
            add_page(self.dataf)
            rp.npages += 1
            pid += 1
            page = new_page()
        add_tuple_to_page(page, tup, rp.tupsize, rp.tup_pp)
        rp.ntups += 1
        put_page(self.dataf, pid, page)

        self._add_tuple_sig(tup)
        psig = make_page_sig(rp, tup)
        self._add_page_sig(pid, psig)
        self._update_bit_slices(pid, psig)
        return rp.npages - 1

    def _add_tuple_sig(self, tup: str) -> None:
        rp = self.params
        tsig = make_tuple_sig(rp, tup)
        tsigpid = rp.tsig_npages - 1
        page = get_page(self.tsigf, tsigpid)
        if page.nitems == rp.tsig_pp:
            add_page(self.tsigf)
            rp.tsig_npages += 1
            tsigpid += 1
            page = new_page()
        put_bits(page, page.nitems, tsig)
        rp.ntsigs += 1
        page.add_one_item()
        put_page(self.tsigf, tsigpid, page)

    def _add_page_sig(self, pid: int, psig: Bits) -> None:
        rp = self.params
        psigpid = rp.psig_npages - 1
        page = get_page(self.psigf, psigpid)
        if rp.npsigs != rp.npages:
            if page.nitems == rp.psig_pp:
                add_page(self.psigf)
                rp.psig_npages += 1
                psigpid += 1
                page = new_page()
            rp.npsigs += 1
            put_bits(page, page.nitems, psig)
            page.add_one_item()
        else:
            slot = pid % rp.psig_pp
            current = get_bits(page, slot, rp.pm)
            current.or_with(psig)
            put_bits(page, slot, current)
        put_page(self.psigf, psigpid, page)

    def _update_bit_slices(self, pid: int, psig: Bits) -> None:
        rp = self.params
        curpid = None
        page = None
        for i in range(rp.pm):
            if not psig.is_set(i):
                continue
            bsigpid = i // rp.bsig_pp
            if bsigpid != curpid:
                if page is not None:
                    put_page(self.bsigf, curpid, page)
                curpid = bsigpid
                page = get_page(self.bsigf, bsigpid)
            slot = i % rp.bsig_pp
            slice_ = get_bits(page, slot, rp.bm)
            slice_.set(pid)
            put_bits(page, slot, slice_)
        if page is not None:
            put_page(self.bsigf, curpid, page)

    def tuples(self) -> Iterator[str]:
        """Yield every tuple in the relation, page by page."""
        for pid in range(self.params.npages):
            page = get_page(self.dataf, pid)
            for i in range(page.nitems):
                yield get_tuple_from_page(page, i, self.params.tupsize)

    def stats(self) -> str:
        """Describe the relation's parameters and sizes."""
        p = self.params
        sigs = "  sigs   " + ("catc" if p.sigtype == "c" else "simc")
        if p.sigtype == "s":
            sigs += f"  bits/attr: {p.tk}"
        lines = [
            "Global Info:",
            "Dynamic:",
            f"  #items:  tuples: {p.ntups}  tsigs: {p.ntsigs}  "
            f"psigs: {p.npsigs}  bsigs: {p.nbsigs}",
            f"  #pages:  tuples: {p.npages}  tsigs: {p.tsig_npages}  "
            f"psigs: {p.psig_npages}  bsigs: {p.bsig_npages}",
            "Static:",
            f"  tups   #attrs: {p.nattrs}  size: {p.tupsize} bytes  "
            f"max/page: {p.tup_pp}",
            sigs,
            f"  tsigs  size: {p.tm} bits ({p.tsig_size} bytes)  max/page: {p.tsig_pp}",
            f"  psigs  size: {p.pm} bits ({p.psig_size} bytes)  max/page: {p.psig_pp}",
            f"  bsigs  size: {p.bm} bits ({p.bsig_size} bytes)  max/page: {p.bsig_pp}",
        ]
        return "\n".join(lines) + "\n"


def new_relation(name: str, nattrs: int, pf: float, sigtype: str,
                 tk: int, tm: int, pm: int, bm: int) -> None:
    """Create the five files of an empty relation.

    Raises SignatureFileError when page or bit-slice signatures are too
    wide to fit at least two to a page.
    """
    if sigtype not in ("s", "c"):
        raise ValueError("signature type must be 's' or 'c'")
    tupsize = 28 + 7 * (nattrs - 2)
    if tupsize <= 0:
        raise ValueError(f"invalid number of attributes: {nattrs}")
    tm, pm, bm = _round_to_byte(tm), _round_to_byte(pm), _round_to_byte(bm)
    if 0 in (tm, pm, bm):
        raise ValueError("signature widths must be positive")
    params = RelnParams(
        nattrs=nattrs, sigtype=sigtype, pf=pf,
        tupsize=tupsize, tup_pp=_AVAILABLE // tupsize, tk=tk,
        tm=tm, tsig_size=tm // 8, tsig_pp=_AVAILABLE // (tm // 8),
        pm=pm, psig_size=pm // 8, psig_pp=_AVAILABLE // (pm // 8),
        bm=bm, bsig_size=bm // 8, bsig_pp=_AVAILABLE // (bm // 8),
    )
    if params.psig_pp < 2:
        raise SignatureFileError("page signatures too wide for a page")
    if params.bsig_pp < 2:
        raise SignatureFileError("bit-slices too wide for a page")

    with Relation(name, params) as rel:
        for f in (rel.dataf, rel.tsigf, rel.psigf, rel.bsigf):
            add_page(f)
        params.npages = params.tsig_npages = params.psig_npages = 1
        for bsigpid in range(iceil(params.pm, params.bsig_pp)):
            page = new_page()
            count = min(params.bsig_pp, params.pm - params.nbsigs)
            for bid in range(count):
                put_bits(page, bid, Bits(params.bm))
                page.add_one_item()
                params.nbsigs += 1
            put_page(rel.bsigf, bsigpid, page)
        params.bsig_npages = iceil(params.pm, params.bsig_pp)


def exists_relation(name: str) -> bool:
    """True if the relation's info file exists."""
    return os.path.isfile(f"{name}.info")


def open_relation(name: str) -> Relation:
    """Open an existing relation, reading its parameters from the info file."""
    if not exists_relation(name):
        raise SignatureFileError(f"Can't open relation: {name}")
    with open(f"{name}.info", "rb") as f:
        params = RelnParams.from_bytes(f.read(RelnParams._STRUCT.size))
    return Relation(name, params)