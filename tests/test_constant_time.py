import pytest

from rosenpass.constant_time import xor


def test_documented_example():
    assert xor(b"world", b"hello") == b"\x1f\n\x1e\x00\x0b"


def test_xor_is_an_involution():
    src = bytes(range(32))
    dst = bytes(reversed(range(32)))
    assert xor(src, xor(src, dst)) == dst


def test_xor_with_self_is_zero():
    data = b"some bytes"
    assert xor(data, data) == bytes(len(data))


def test_xor_is_commutative():
    a = b"abcdef"
    b = b"123456"
    assert xor(a, b) == xor(b, a)


def test_empty_inputs():
    assert xor(b"", b"") == b""


def test_length_mismatch_raises():
    with pytest.raises(ValueError):
        xor(b"abc", b"ab")