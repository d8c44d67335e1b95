"""Tuple signatures, page signatures and bit-sliced signatures.

Relation parameters are read from an object with the attributes
nattrs, sigtype ('s' for simc, 'c' for catc), tk, tm, pm, bm, tup_pp,
tsig_pp, psig_pp, bsig_pp, npages, tsig_npages and psig_npages.
A query object supplies rel (with params, tsigf, psigf and bsigf),
qstring, pages (a Bits of npages bits), nsigs and nsigpages.
"""

from .bits import Bits, get_bits
from .hashing import hash_any
from .page import get_page
from .randomness import GlibcRandom
from .tuples import tuple_vals


def gen_codeword(attr_value: str, m: int, u: int, k: int) -> Bits:
    """Return an m-bit codeword with k distinct bits set among the low u bits.

    The bit positions are drawn from a generator seeded with the hash of
    the attribute value, so equal values always give equal codewords.
    """
    if k > u:
        raise ValueError(f"cannot set {k} distinct bits among {u}")
    if k > 0 and u > m:
        raise ValueError(f"range of {u} bits exceeds codeword width {m}")
    cword = Bits(m)
    rng = GlibcRandom(hash_any(attr_value))
    nbits = 0
    while nbits < k:
        i = rng.random() % u
        if not cword.is_set(i):
            cword.set(i)
            nbits += 1
    return cword


def _values(params, tup: str) -> list[str]:
    vals = tuple_vals(tup)
    if len(vals) != params.nattrs:
        raise ValueError(
            f"tuple has {len(vals)} attributes, expected {params.nattrs}"
        )
    return vals


def _make_sig(params, tup: str, width: int, catc_bits) -> Bits:
    sig = Bits(width)
    nattrs = params.nattrs
    shifted = 0
    for i, value in enumerate(_values(params, tup)):
        u = width // nattrs
        if i == 0:
            u += width % nattrs
        if value == "?":
            cw = Bits(width)
        elif params.sigtype == "s":
            cw = gen_codeword(value, width, width, params.tk)
        else:
            cw = gen_codeword(value, width, u, catc_bits(u))
        if params.sigtype == "c":
            cw.shift(shifted)
            shifted += u
        sig.or_with(cw)
    return sig


def make_tuple_sig(params, tup: str) -> Bits:
    """Build the tm-bit signature of a tuple or query string."""
    return _make_sig(params, tup, params.tm, lambda u: u // 2)


def make_page_sig(params, tup: str) -> Bits:
    """Build the pm-bit page signature contribution of a tuple or query."""
    return _make_sig(
        params, tup, params.pm, lambda u: u // (2 * params.tup_pp)
    )


def find_pages_using_tup_sigs(query) -> None:
    """Mark in query.pages every data page holding a matching tuple signature."""
    rel = query.rel
    params = rel.params
    qsig = make_tuple_sig(params, query.qstring)
    query.pages.unset_all()
    for pid in range(params.tsig_npages):
        page = get_page(rel.tsigf, pid)
        for tid in range(page.nitems):
            tsig = get_bits(page, tid, params.tm)
            if qsig.is_subset(tsig):
                datapid = (tid + pid * params.tsig_pp) // params.tup_pp
                query.pages.set(datapid)
            query.nsigs += 1
        query.nsigpages += 1


def find_pages_using_page_sigs(query) -> None:
    """Mark in query.pages every data page whose signature matches the query."""
    rel = query.rel
    params = rel.params
    qsig = make_page_sig(params, query.qstring)
    query.pages.unset_all()
    for pid in range(params.psig_npages):
        page = get_page(rel.psigf, pid)
        for psigid in range(page.nitems):
            psig = get_bits(page, psigid, params.pm)
            if qsig.is_subset(psig):
                query.pages.set(psigid + pid * params.psig_pp)
            query.nsigs += 1
        query.nsigpages += 1


def find_pages_using_bit_slices(query) -> None:
    """Narrow query.pages using the bit-slices for the query's set bits."""
    rel = query.rel
    params = rel.params
    qsig = make_page_sig(params, query.qstring)
    query.pages.set_all()
    curpid = None
    page = None
    for i in range(params.pm):
        if not qsig.is_set(i):
            continue
        bsigpid = i // params.bsig_pp
        if curpid != bsigpid:
            curpid = bsigpid
            page = get_page(rel.bsigf, bsigpid)
            query.nsigpages += 1
        query.nsigs += 1
        slice_ = get_bits(page, i % params.bsig_pp, params.bm)
        for si in range(params.npages):
            if not slice_.is_set(si):
                query.pages.unset(si)