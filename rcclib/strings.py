"""NUL-terminated byte strings kept in byte buffers.

A string ends at its first NUL byte. A string with no NUL ends at the end of
its buffer.
"""

from __future__ import annotations

import operator
from typing import Any

from rcclib.memory import memcpy, memset

__all__ = ["strlen", "strnlen", "strcpy", "strncpy", "strcat", "strcmp", "strncmp"]


def _view(obj: Any, name: str) -> memoryview:
    try:
        view = memoryview(obj)
    except TypeError:
        raise TypeError(
            f"{name} must support the buffer protocol, not {type(obj).__name__}"
        ) from None
    if view.format != "B" or view.ndim != 1:
        view = view.cast("B")
    return view


def _limit(n: Any, name: str = "n") -> int:
    value = operator.index(n)
    if value < 0:
        raise ValueError(f"{name} must not be negative: {value}")
    return value


def _find_nul(view: memoryview, stop: int) -> int:
    """Return the index of the first NUL before ``stop``, or ``stop``."""
    index = view[:stop].tobytes().find(b"\0")
    return stop if index < 0 else index


def _contents(obj: Any, name: str) -> bytes:
    view = _view(obj, name)
    return view[: _find_nul(view, len(view))].tobytes()


def strlen(s: Any) -> int:
    """Return the number of bytes in ``s`` before its terminating NUL."""
    view = _view(s, "s")
    return _find_nul(view, len(view))


def strnlen(s: Any, maxlen: int) -> int:
    """Return the length of ``s``, scanning at most ``maxlen`` bytes."""
    limit = _limit(maxlen, "maxlen")
    view = _view(s, "s")
    return _find_nul(view, min(limit, len(view)))


def strcpy(dst: Any, src: Any) -> Any:
    """Copy ``src`` and its terminating NUL to the start of ``dst``; return ``dst``."""
    data = _contents(src, "src") + b"\0"
    target = _view(dst, "dst")
    if len(data) > len(target):
        raise ValueError(
            f"dst holds {len(target)} bytes but {len(data)} are needed"
        )
    memcpy(dst, data, len(data))
    return dst


def strncpy(dst: Any, src: Any, n: int) -> Any:
    """Copy at most ``n`` bytes of ``src`` into ``dst``, padding with NULs to ``n``.

    If ``src`` is ``n`` bytes or longer, no terminating NUL is written.
    """
    count = _limit(n)
    target = _view(dst, "dst")
    if count > len(target):
        raise ValueError(f"n {count} exceeds the size of dst ({len(target)} bytes)")
    size = strnlen(src, count)
    if size != count:
        memset(target[size:count], 0, count - size)
    memcpy(dst, _view(src, "src")[:size], size)
    return dst


def strcat(dst: Any, src: Any) -> Any:
    """Append ``src`` to the string held in ``dst``; return ``dst``."""
    target = _view(dst, "dst")
    end = _find_nul(target, len(target))
    data = _contents(src, "src") + b"\0"
    if end + len(data) > len(target):
        raise ValueError(
            f"dst holds {len(target)} bytes but {end + len(data)} are needed"
        )
    memcpy(target[end:], data, len(data))
    return dst


def strcmp(s1: Any, s2: Any) -> int:
    """Compare two strings as unsigned bytes.

    Returns zero when equal, otherwise the difference of the first pair of
    bytes that differ.
    """
    return _compare(_contents(s1, "s1") + b"\0", _contents(s2, "s2") + b"\0")


def strncmp(s1: Any, s2: Any, n: int) -> int:
    """Compare at most the first ``n`` bytes of two strings."""
    count = _limit(n)
    first = (_contents(s1, "s1") + b"\0")[:count]
    second = (_contents(s2, "s2") + b"\0")[:count]
    return _compare(first, second)


def _compare(first: bytes, second: bytes) -> int:
    for x, y in zip(first, second):
        if x == 0 or x != y:
            return x - y
    return 0