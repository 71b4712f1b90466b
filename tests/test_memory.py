import pytest
from hypothesis import given
from hypothesis import strategies as st

from rcclib.memory import memcmp, memcpy, memmove, memset


def test_memset_fills_prefix_and_returns_buffer():
    buf = bytearray(b"abcdefgh")
    result = memset(buf, ord("z"), 5)
    assert result is buf
    assert buf == bytearray(b"zzzzzfgh")


def test_memset_uses_low_byte_of_value():
    buf = bytearray(4)
    memset(buf, 0x141, 4)
    assert buf == bytearray(b"AAAA")


def test_memset_zero_count_leaves_buffer():
    buf = bytearray(b"keep")
    memset(buf, 0, 0)
    assert buf == bytearray(b"keep")


def test_memset_large_buffer_all_set():
    buf = bytearray(100)
    memset(buf, 0xFF, 100)
    assert set(buf) == {0xFF}


def test_memset_count_too_large():
    with pytest.raises(ValueError):
        memset(bytearray(3), 0, 4)


def test_memset_negative_count():
    with pytest.raises(ValueError):
        memset(bytearray(3), 0, -1)


def test_memset_readonly_buffer():
    with pytest.raises(TypeError):
        memset(b"abc", 0, 1)


def test_memcpy_copies_and_returns_dst():
    dst = bytearray(6)
    result = memcpy(dst, b"hello!", 6)
    assert result is dst
    assert dst == bytearray(b"hello!")


def test_memcpy_partial_copy():
    dst = bytearray(b"......")
    memcpy(dst, b"abcdef", 3)
    assert dst == bytearray(b"abc...")


def test_memcpy_into_memoryview_slice():
    dst = bytearray(b"0123456789")
    memcpy(memoryview(dst)[4:], b"xyz", 3)
    assert dst == bytearray(b"0123xyz789")


def test_memcpy_source_too_short():
    with pytest.raises(ValueError):
        memcpy(bytearray(8), b"ab", 3)


def test_memcpy_non_buffer_source():
    with pytest.raises(TypeError):
        memcpy(bytearray(3), "abc", 3)


def test_memmove_overlap_forward():
    buf = bytearray(b"abcdefgh")
    memmove(memoryview(buf)[2:], buf, 6)
    assert buf == bytearray(b"ababcdef")


def test_memmove_overlap_backward():
    buf = bytearray(b"abcdefgh")
    memmove(buf, memoryview(buf)[2:], 6)
    assert buf == bytearray(b"cdefghgh")


@given(st.binary(min_size=1, max_size=64), st.data())
def test_memmove_matches_slice_assignment(data, draw):
    size = len(data)
    src_off = draw.draw(st.integers(0, size - 1))
    dst_off = draw.draw(st.integers(0, size - 1))
    n = draw.draw(st.integers(0, size - max(src_off, dst_off)))
    buf = bytearray(data)
    expected = bytearray(data)
    expected[dst_off : dst_off + n] = data[src_off : src_off + n]
    view = memoryview(buf)
    result = memmove(view[dst_off:], view[src_off:], n)
    assert bytes(result[:n]) == data[src_off : src_off + n]
    assert buf == expected


@given(st.binary(max_size=64))
def test_memcpy_round_trip(data):
    dst = bytearray(len(data))
    memcpy(dst, data, len(data))
    assert bytes(dst) == data
    assert memcmp(dst, data, len(data)) == 0


def test_memcmp_equal():
    assert memcmp(b"same bytes", b"same bytes", 10) == 0


def test_memcmp_difference_of_first_differing_byte():
    assert memcmp(b"\x05\x00", b"\x02\xff", 2) == 3
    assert memcmp(b"\x02\xff", b"\x05\x00", 2) == -3


def test_memcmp_bytes_are_unsigned():
    assert memcmp(b"\x80", b"\x01", 1) > 0


def test_memcmp_ignores_bytes_past_count():
    assert memcmp(b"abcX", b"abcY", 3) == 0


def test_memcmp_count_too_large():
    with pytest.raises(ValueError):
        memcmp(b"ab", b"abc", 3)


@given(st.binary(max_size=40), st.binary(max_size=40))
def test_memcmp_sign_matches_bytes_ordering(a, b):
    n = min(len(a), len(b))
    result = memcmp(a, b, n)
    x, y = a[:n], b[:n]
    if x == y:
        assert result == 0
    elif x < y:
        assert result < 0
    else:
        assert result > 0


@given(st.binary(min_size=1, max_size=40))
def test_memcmp_antisymmetric(a):
    b = bytes(reversed(a))
    assert memcmp(a, b, len(a)) == -memcmp(b, a, len(a))