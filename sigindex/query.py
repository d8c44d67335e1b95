"""Queries over a relation, using signatures to choose which pages to read."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from .bits import Bits
from .page import get_page
from .reln import Relation
from .signatures import (
    find_pages_using_bit_slices,
    find_pages_using_page_sigs,
    find_pages_using_tup_sigs,
)
from .tuples import get_tuple_from_page, tuple_match

_PAGE_FINDERS = {
    "t": find_pages_using_tup_sigs,
    "p": find_pages_using_page_sigs,
    "b": find_pages_using_bit_slices,
}


def check_query(rel: Relation, qstring: str) -> bool:
    """True if the query string has as many attributes as the relation."""
    return bool(qstring) and qstring.count(",") + 1 == rel.params.nattrs


@dataclass
class Query:
    """A query on a relation, with the pages it will read and its statistics."""

    rel: Relation
    qstring: str
    pages: Bits
    curpage: int = 0
    nsigs: int = 0
    nsigpages: int = 0
    ntuples: int = 0
    ntuppages: int = 0
    nfalse: int = 0

    def scan(self) -> Iterator[str]:
        """Yield matching tuples from the selected pages, counting as it goes.

        The statistics are complete once the iterator is exhausted.
        """
        params = self.rel.params
        for pid in range(params.npages):
            if not self.pages.is_set(pid):
                continue
            self.curpage = pid
            page = get_page(self.rel.dataf, pid)
            matched = False
            for i in range(page.nitems):
                tup = get_tuple_from_page(page, i, params.tupsize)
                self.ntuples += 1
                if tuple_match(tup, self.qstring, params.nattrs):
                    matched = True
                    yield tup
            self.ntuppages += 1
            if not matched:
                self.nfalse += 1

    def stats(self) -> str:
        """Describe how much work the query did."""
        return (
            f"# sig pages read:    {self.nsigpages}\n"
            f"# signatures read:   {self.nsigs}\n"
            f"# data pages read:   {self.ntuppages}\n"
            f"# tuples examined:   {self.ntuples}\n"
            f"# false match pages: {self.nfalse}\n"
        )


def start_query(rel: Relation, qstring: str, sigs: str) -> Query:
    """Set up a query and select candidate pages.

    `sigs` chooses tuple ('t'), page ('p') or bit-sliced ('b') signatures;
    anything else selects every page. Raises ValueError for a query string
    that does not fit the relation.
    """
    if not check_query(rel, qstring):
        raise ValueError(f"Invalid query: {qstring}")
    query = Query(rel=rel, qstring=qstring, pages=Bits(rel.params.npages))
    finder = _PAGE_FINDERS.get(sigs[:1])
    if finder is None:
        query.pages.set_all()
    else:
        finder(query)
    return query