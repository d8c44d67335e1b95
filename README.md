# sigindex

A small file-based relation store that answers partial-match queries with
signature indexes. Every relation keeps its tuples in fixed-size 4096-byte
pages and maintains three signature files alongside them:

- **tuple signatures**: one signature per tuple,
- **page signatures**: one signature per data page,
- **bit-sliced signatures**: the page signatures stored column-wise.

Signatures are built with either superimposed codewords (`simc`) or
concatenated codewords (`catc`).

A relation named `R` lives in five files in the current directory:
`R.info`, `R.data`, `R.tsig`, `R.psig` and `R.bsig`.

## Installation

```
pip install .
```

The package has no runtime dependencies. To run the test suite:

```
pip install ".[test]"
pytest
```

## Command-line tools

Every command prints its usage or an error message to standard error and
exits with status 1 when something is wrong.

### Create a relation

```
sigindex-create RelName SigType #tuples #attrs 1/pF
```

- `SigType` is `simc` or `catc`,
- `#tuples` is the expected number of tuples (at least 10),
- `#attrs` is the number of attributes per tuple (2 to 9),
- `1/pF` is the inverse of the false-match probability (at least 100).

The signature widths and the number of bits set per attribute are derived
from these values; the bit-slices get one bit per data page needed for
`#tuples` tuples.

```
sigindex-create R simc 1000 3 1000
```

Creating a relation that already exists is an error.

### Generate test data

```
sigindex-gendata #tuples #attributes [startID] [seed]
```

Writes tuples of the form `1000000,<20 letters>,a3-000,...` to standard
output, one per line. `#tuples` must be between 1 and 100000 and
`#attributes` between 2 and 9. The start ID defaults to 1000000 and the
seed to 0, so the output is repeatable.

### Insert tuples

```
sigindex-gendata 1000 3 1234 | sigindex-insert R
```

Tuples are read from standard input, one comma-separated tuple per line.
Reading stops at the first line that does not have the relation's number of
attributes. With `-v` each tuple is echoed together with the page it went
into:

```
sigindex-insert -v R < tuples.txt
```

### Query

```
sigindex-select [-v] RelName v1,v2,...,vn [t|p|b]
```

Any value may be `?`, meaning "any value". The last argument chooses the
index used to narrow down the data pages:

- `t`: tuple signatures,
- `p`: page signatures,
- `b`: bit-sliced signatures,
- omitted or anything else: scan every data page.

`-v` is accepted and has no effect.

```
sigindex-select R '?,?,a3-001' b
```

Matching tuples are printed, followed by `Query Stats:` and the number of
signature pages read, signatures read, data pages read, tuples examined and
data pages that held no matching tuple (false matches).

### Inspect a relation

```
sigindex-stats R
sigindex-dump R
```

`sigindex-stats` prints the relation's item and page counts and its
signature parameters; `sigindex-dump` prints every stored tuple.

## Library use

Assuming `R` was created with `sigindex-create R simc 1000 3 1000`:

```python
from sigindex.gendata import generate_tuples
from sigindex.query import start_query
from sigindex.reln import open_relation

with open_relation("R") as rel:
    for tup in generate_tuples(100, 3, start_id=1000000, seed=0):
        rel.add(tup)

with open_relation("R") as rel:
    query = start_query(rel, "?,?,a3-000", "b")
    for tup in query.scan():
        print(tup)
    print(query.stats(), end="")
```

- `sigindex.reln`: `new_relation(name, nattrs, pf, sigtype, tk, tm, pm, bm)`
  creates the files of an empty relation from explicit signature
  parameters; `exists_relation(name)` tells whether `name.info` exists;
  `open_relation(name)` returns a `Relation`, which is a context manager
  and offers `add(tup)` (returns the data page id), `tuples()`, `stats()`
  and `close()`. Its parameters are a `RelnParams` dataclass.
- `sigindex.query`: `check_query(rel, qstring)` and
  `start_query(rel, qstring, sigs)`, which returns a `Query`.
  `Query.scan()` yields matching tuples and fills in the statistics;
  `Query.stats()` returns them as text. An ill-formed query string raises
  `ValueError`.
- `sigindex.signatures`: `gen_codeword`, `make_tuple_sig`, `make_page_sig`
  and the three page finders.
- `sigindex.bits`: the `Bits` bit-string class, with `get_bits` and
  `put_bits` for storing bit-strings in pages.
- `sigindex.page`, `sigindex.tuples`: page and tuple storage helpers.
- `sigindex.hashing.hash_any` and `sigindex.randomness.GlibcRandom`: the
  hash and the seeded generator behind the codewords, so signatures are the
  same from run to run.
- `sigindex.util.SignatureFileError` is raised when a relation or one of
  its files cannot be used.

## Limitations

- Tuples must be exactly `28 + 7 * (#attrs - 2)` bytes long, the shape
  that `sigindex-gendata` produces.
- Tuples cannot be deleted or updated.
- The bit-slices are sized when the relation is created. Once the data
  needs more pages than `#tuples` allowed for, further inserts fail
  (`sigindex-insert` reports `Insert of ... failed`).
- There is no locking; a relation should be used by one process at a time.