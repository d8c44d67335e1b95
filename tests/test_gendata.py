import pytest

from sigindex.gendata import ALPHA, generate_tuples, main, rand_word
from sigindex.randomness import GlibcRandom


def test_rand_word_length_and_alphabet():
    word = rand_word(GlibcRandom(7), 20)
    assert len(word) == 20
    assert all(ch in ALPHA for ch in word)


def test_rand_word_reproducible():
    first = rand_word(GlibcRandom(3), 15)
    second = rand_word(GlibcRandom(3), 15)
    assert first == second
    assert len(first) == 15
    assert all(ch in ALPHA for ch in first)


def test_tuple_shape():
    tuples = list(generate_tuples(5, 4))
    assert len(tuples) == 5
    for i, tup in enumerate(tuples):
        fields = tup.split(",")
        assert len(fields) == 4
        assert fields[0] == f"{1000000 + i:07d}"
        assert len(fields[1]) == 20 and fields[1].isalpha()
        assert fields[2] == f"a3-{i:03d}"
        assert fields[3] == f"a4-{i:03d}"


def test_tuple_size_matches_relation_layout():
    for natts in range(2, 10):
        tup = next(generate_tuples(1, natts))
        assert len(tup) == 28 + 7 * (natts - 2)


def test_period_wraps():
    tuples = list(generate_tuples(250, 3))
    assert tuples[249].split(",")[2] == "a3-000"
    assert tuples[248].split(",")[2] == "a3-248"


def test_start_id_zero_padded():
    assert next(generate_tuples(1, 2, 42)).startswith("0000042,")


def test_seed_determinism():
    assert list(generate_tuples(10, 3, 5, 99)) == list(generate_tuples(10, 3, 5, 99))
    assert list(generate_tuples(10, 3, 5, 99)) != list(generate_tuples(10, 3, 5, 100))


def test_seed_zero_same_as_one():
    assert list(generate_tuples(4, 2, 0, 0)) == list(generate_tuples(4, 2, 0, 1))


@pytest.mark.parametrize(
    "args",
    [(0, 3, 1000000), (100001, 3, 1000000), (5, 1, 1000000),
     (5, 10, 1000000), (5, 3, -1), (5, 3, 9000001)],
)
def test_invalid_arguments(args):
    with pytest.raises(ValueError):
        generate_tuples(*args)


def test_main_prints_tuples(capsys):
    assert main(["3", "3", "100", "1234"]) == 0
    out = capsys.readouterr().out
    assert out.splitlines() == list(generate_tuples(3, 3, 100, 1234))


def test_main_defaults(capsys):
    assert main(["2", "2"]) == 0
    assert capsys.readouterr().out.splitlines() == list(generate_tuples(2, 2))


def test_main_usage(capsys):
    assert main(["5"]) == 1
    assert "gendata" in capsys.readouterr().err


def test_main_invalid(capsys):
    assert main(["0", "3"]) == 1
    assert "Invalid #tuples: 0" in capsys.readouterr().err