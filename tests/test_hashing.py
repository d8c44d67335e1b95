import pytest

from sigindex.hashing import hash_any


@pytest.mark.parametrize("key", ["", "a", "abcdefghijk", "abcdefghijkl", "1000000", "x" * 40])
def test_value_fits_in_32_bits(key):
    value = hash_any(key)
    assert 0 <= value <= 0xFFFFFFFF


def test_deterministic():
    first = hash_any("RandomWordHere")
    second = hash_any("RandomWordHere")
    assert first == second
    assert 0 <= first <= 0xFFFFFFFF
    assert hash_any("RandomWordHerf") != first


def test_str_and_bytes_agree():
    assert hash_any("a3-017") == hash_any(b"a3-017")


def test_distinct_keys_spread():
    values = {hash_any(f"{i:07d}") for i in range(1000)}
    assert len(values) == 1000


def test_every_prefix_length_differs():
    text = "abcdefghijklmnopqrstuvwx"
    values = [hash_any(text[:n]) for n in range(len(text) + 1)]
    assert len(set(values)) == len(values)


def test_high_bytes_differ_from_low_bytes():
    assert hash_any(b"\x80") != hash_any(b"\x00")
    assert hash_any(b"\xff" * 12) != hash_any(b"\x7f" * 12)