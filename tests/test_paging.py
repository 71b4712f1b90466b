import pytest
from hypothesis import given
from hypothesis import strategies as st

from rcclib.paging import (
    SATP_SV39,
    PTEFlags,
    make_satp,
    pte_executable,
    pte_flags,
    pte_is_valid,
    pte_new,
    pte_ppn,
    pte_readable,
    pte_writable,
)


@given(st.integers(0, (1 << 44) - 1), st.integers(0, 0xFF))
def test_ppn_and_flags_round_trip(ppn, flags):
    pte = pte_new(ppn, flags)
    assert pte_ppn(pte) == ppn
    assert pte_flags(pte) == flags


def test_entry_bit_layout():
    assert pte_new(0, PTEFlags.V) == 1
    assert pte_new(0, PTEFlags.D) == 128
    assert pte_new(1, PTEFlags.NONE) == 1 << 10


def test_predicates_follow_flags():
    pte = pte_new(0x80000, PTEFlags.V | PTEFlags.R | PTEFlags.W)
    assert pte_is_valid(pte)
    assert pte_readable(pte)
    assert pte_writable(pte)
    assert not pte_executable(pte)


def test_empty_entry_is_invalid():
    assert pte_is_valid(0) is False
    assert pte_flags(0) == PTEFlags.NONE


def test_executable_only():
    pte = pte_new(7, PTEFlags.X)
    assert pte_executable(pte)
    assert not pte_readable(pte)
    assert not pte_is_valid(pte)


def test_flags_stay_out_of_ppn_field():
    pte = pte_new(0, 0xFF)
    assert pte_ppn(pte) == 0


def test_make_satp_mode_and_root():
    assert make_satp(0x1000) == SATP_SV39 | 1
    assert make_satp(0) == SATP_SV39


@given(st.integers(0, (1 << 56) - 1))
def test_make_satp_mode_field_is_sv39(address):
    assert make_satp(address) >> 60 == 8


def test_negative_ppn_rejected():
    with pytest.raises(ValueError):
        pte_new(-1, PTEFlags.V)


def test_negative_pte_rejected():
    with pytest.raises(ValueError):
        pte_ppn(-5)


def test_non_integer_rejected():
    with pytest.raises(TypeError):
        make_satp(1.5)