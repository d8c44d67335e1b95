import io
from types import SimpleNamespace

import pytest

from sigindex.bits import Bits, put_bits
from sigindex.page import get_page, new_page, put_page
from sigindex.signatures import (
    find_pages_using_bit_slices,
    find_pages_using_page_sigs,
    find_pages_using_tup_sigs,
    gen_codeword,
    make_page_sig,
    make_tuple_sig,
)

TUPLES = ["1,aa,x", "2,bb,y", "3,cc,z", "4,dd,w", "5,ee,v"]


def _params(sigtype="s", npages=3):
    return SimpleNamespace(
        nattrs=3, sigtype=sigtype, tk=4, tm=64, pm=128, bm=8,
        tup_pp=2, tsig_pp=4092 // 8, psig_pp=4092 // 16, bsig_pp=4092,
        npages=npages, tsig_npages=1, psig_npages=1,
    )


def _count(bits):
    return str(bits).count("1")


def _build_relation(sigtype="s"):
    params = _params(sigtype, npages=3)
    tsigf, psigf, bsigf = io.BytesIO(), io.BytesIO(), io.BytesIO()

    tpage = new_page()
    for n, tup in enumerate(TUPLES):
        put_bits(tpage, n, make_tuple_sig(params, tup))
        tpage.add_one_item()
    put_page(tsigf, 0, tpage)

    psigs = []
    for pid in range(params.npages):
        psig = Bits(params.pm)
        for tup in TUPLES[pid * 2:pid * 2 + 2]:
            psig.or_with(make_page_sig(params, tup))
        psigs.append(psig)
    ppage = new_page()
    for pid, psig in enumerate(psigs):
        put_bits(ppage, pid, psig)
        ppage.add_one_item()
    put_page(psigf, 0, ppage)

    bpage = new_page()
    for i in range(params.pm):
        slice_ = Bits(params.bm)
        for pid, psig in enumerate(psigs):
            if psig.is_set(i):
                slice_.set(pid)
        put_bits(bpage, i, slice_)
        bpage.add_one_item()
    put_page(bsigf, 0, bpage)

    return SimpleNamespace(params=params, tsigf=tsigf, psigf=psigf, bsigf=bsigf)


def _query(rel, qstring):
    return SimpleNamespace(
        rel=rel, qstring=qstring, pages=Bits(rel.params.npages),
        nsigs=0, nsigpages=0,
    )


def test_gen_codeword_sets_k_bits_within_range():
    cw = gen_codeword("hello", 64, 20, 7)
    assert len(cw) == 64
    assert _count(cw) == 7
    assert all(not cw.is_set(i) for i in range(20, 64))


def test_gen_codeword_is_deterministic():
    first = gen_codeword("abc", 32, 32, 5)
    second = gen_codeword("abc", 32, 32, 5)
    assert str(first) == str(second)
    assert _count(first) == 5
    assert len(str(first)) == 32


def test_gen_codeword_too_many_bits():
    with pytest.raises(ValueError):
        gen_codeword("abc", 16, 4, 5)


def test_all_unknown_query_gives_empty_signature():
    params = _params()
    assert _count(make_tuple_sig(params, "?,?,?")) == 0
    assert _count(make_page_sig(params, "?,?,?")) == 0


def test_simc_single_attribute_sets_tk_bits():
    params = _params("s")
    assert _count(make_tuple_sig(params, "?,aa,?")) == params.tk


@pytest.mark.parametrize("sigtype", ["s", "c"])
def test_partial_query_is_subset_of_tuple_sig(sigtype):
    params = _params(sigtype)
    full = make_tuple_sig(params, "1,aa,x")
    assert make_tuple_sig(params, "1,?,?").is_subset(full)
    assert make_tuple_sig(params, "?,aa,x").is_subset(full)
    assert make_page_sig(params, "?,aa,?").is_subset(make_page_sig(params, "1,aa,x"))


def test_catc_attributes_occupy_their_segments():
    params = _params("c")
    first = make_tuple_sig(params, "1,?,?")
    second = make_tuple_sig(params, "?,aa,?")
    assert _count(first) == 11
    assert _count(second) == 10
    assert all(not first.is_set(i) for i in range(22, 64))
    assert all(not second.is_set(i) for i in list(range(22)) + list(range(43, 64)))


def test_catc_tuple_sig_is_union_of_attribute_sigs():
    params = _params("c")
    combined = Bits(params.tm)
    for q in ("1,?,?", "?,aa,?", "?,?,x"):
        combined.or_with(make_tuple_sig(params, q))
    assert combined == make_tuple_sig(params, "1,aa,x")


def test_wrong_attribute_count_raises():
    with pytest.raises(ValueError):
        make_tuple_sig(_params(), "1,aa")


@pytest.mark.parametrize("sigtype", ["s", "c"])
def test_tup_sigs_find_page_of_tuple(sigtype):
    rel = _build_relation(sigtype)
    q = _query(rel, "3,cc,z")
    find_pages_using_tup_sigs(q)
    assert q.pages.is_set(1)
    assert q.nsigs == len(TUPLES)
    assert q.nsigpages == 1


@pytest.mark.parametrize("sigtype", ["s", "c"])
def test_page_sigs_find_page_of_tuple(sigtype):
    rel = _build_relation(sigtype)
    q = _query(rel, "5,ee,v")
    find_pages_using_page_sigs(q)
    assert q.pages.is_set(2)
    assert q.nsigs == rel.params.npages
    assert q.nsigpages == 1


@pytest.mark.parametrize("sigtype", ["s", "c"])
def test_bit_slices_agree_with_page_sigs(sigtype):
    rel = _build_relation(sigtype)
    via_psig = _query(rel, "2,bb,y")
    find_pages_using_page_sigs(via_psig)
    via_bsig = _query(rel, "2,bb,y")
    find_pages_using_bit_slices(via_bsig)
    assert via_bsig.pages.is_set(0)
    assert via_bsig.pages == via_psig.pages
    assert via_bsig.nsigs == _count(make_page_sig(rel.params, "2,bb,y"))
    assert via_bsig.nsigpages == 1


def test_bit_slices_unknown_query_keeps_all_pages():
    rel = _build_relation()
    q = _query(rel, "?,?,?")
    find_pages_using_bit_slices(q)
    assert str(q.pages) == "00000111"
    assert q.nsigs == 0
    assert q.nsigpages == 0


def test_tsig_file_round_trips_signature():
    rel = _build_relation()
    page = get_page(rel.tsigf, 0)
    assert page.nitems == len(TUPLES)