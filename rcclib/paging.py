"""Sv39 page-table entries and the satp register value."""

from __future__ import annotations

import enum
import operator

__all__ = [
    "PTEFlags",
    "SATP_SV39",
    "MMAP_MAX_SIZE",
    "pte_new",
    "pte_ppn",
    "pte_flags",
    "pte_is_valid",
    "pte_readable",
    "pte_writable",
    "pte_executable",
    "make_satp",
]

SATP_SV39 = 8 << 60
MMAP_MAX_SIZE = 1 << 30
PPN_BITS = 44
_U64_MASK = (1 << 64) - 1


class PTEFlags(enum.IntFlag):
    """Flag bits in the low byte of a page-table entry."""

    NONE = 0
    V = 1 << 0
    R = 1 << 1
    W = 1 << 2
    X = 1 << 3
    U = 1 << 4
    G = 1 << 5
    A = 1 << 6
    D = 1 << 7


def _unsigned(value: int, name: str) -> int:
    number = operator.index(value)
    if number < 0:
        raise ValueError(f"{name} must not be negative: {number}")
    return number


def pte_new(ppn: int, flags: int) -> int:
    """Build an entry mapping physical page ``ppn`` with ``flags``."""
    return ((_unsigned(ppn, "ppn") << 10) | _unsigned(flags, "flags")) & _U64_MASK


def pte_ppn(pte: int) -> int:
    """Physical page number held in ``pte``."""
    return (_unsigned(pte, "pte") >> 10) & ((1 << PPN_BITS) - 1)


def pte_flags(pte: int) -> PTEFlags:
    """Flag bits held in ``pte``."""
    return PTEFlags(_unsigned(pte, "pte") & 0xFF)


def pte_is_valid(pte: int) -> bool:
    """Whether the V bit of ``pte`` is set."""
    return bool(_unsigned(pte, "pte") & PTEFlags.V)


def pte_readable(pte: int) -> bool:
    """Whether the R bit of ``pte`` is set."""
    return bool(_unsigned(pte, "pte") & PTEFlags.R)


def pte_writable(pte: int) -> bool:
    """Whether the W bit of ``pte`` is set."""
    return bool(_unsigned(pte, "pte") & PTEFlags.W)


def pte_executable(pte: int) -> bool:
    """Whether the X bit of ``pte`` is set."""
    return bool(_unsigned(pte, "pte") & PTEFlags.X)


def make_satp(pagetable: int) -> int:
    """satp value selecting Sv39 with the root table at address ``pagetable``."""
    return (SATP_SV39 | (_unsigned(pagetable, "pagetable") >> 12)) & _U64_MASK