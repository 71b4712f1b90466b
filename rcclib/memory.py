"""Byte-buffer primitives: fill, copy, move and compare."""

from __future__ import annotations

import operator
from typing import Any

__all__ = ["memset", "memcpy", "memmove", "memcmp"]


def _byte_view(obj: Any, name: str) -> memoryview:
    try:
        view = memoryview(obj)
    except TypeError:
        raise TypeError(
            f"{name} must support the buffer protocol, not {type(obj).__name__}"
        ) from None
    return view.cast("B") if view.format != "B" or view.ndim != 1 else view


def _writable_view(obj: Any, name: str) -> memoryview:
    view = _byte_view(obj, name)
    if view.readonly:
        raise TypeError(f"{name} must be a writable buffer")
    return view


def _byte_count(count: Any, **buffers: memoryview) -> int:
    n = operator.index(count)
    if n < 0:
        raise ValueError(f"count must not be negative: {n}")
    for name, view in buffers.items():
        if n > len(view):
            raise ValueError(
                f"count {n} exceeds the size of {name} ({len(view)} bytes)"
            )
    return n


def memset(buffer: Any, value: int, count: int) -> Any:
    """Set the first ``count`` bytes of ``buffer`` to ``value`` and return it.

    Only the low eight bits of ``value`` are used.
    """
    view = _writable_view(buffer, "buffer")
    n = _byte_count(count, buffer=view)
    view[:n] = bytes([operator.index(value) & 0xFF]) * n
    return buffer


def memcpy(dst: Any, src: Any, count: int) -> Any:
    """Copy ``count`` bytes from ``src`` to the start of ``dst`` and return ``dst``."""
    target = _writable_view(dst, "dst")
    source = _byte_view(src, "src")
    n = _byte_count(count, dst=target, src=source)
    target[:n] = source[:n].tobytes()
    return dst


def memmove(dst: Any, src: Any, count: int) -> Any:
    """Copy ``count`` bytes from ``src`` to ``dst``; the two may overlap."""
    target = _writable_view(dst, "dst")
    source = _byte_view(src, "src")
    n = _byte_count(count, dst=target, src=source)
    # Taking a snapshot of the source makes overlapping regions safe.
    snapshot = source[:n].tobytes()
    target[:n] = snapshot
    return dst


def memcmp(a: Any, b: Any, count: int) -> int:
    """Compare the first ``count`` bytes of ``a`` and ``b`` as unsigned bytes.

    Returns zero when they are equal, otherwise the difference between the
    first pair of bytes that differ.
    """
    left = _byte_view(a, "a")
    right = _byte_view(b, "b")
    n = _byte_count(count, a=left, b=right)
    first = left[:n].tobytes()
    second = right[:n].tobytes()
    if first == second:
        return 0
    return next(x - y for x, y in zip(first, second) if x != y)