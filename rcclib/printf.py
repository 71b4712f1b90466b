"""The printf family: format strings with C conversion specifications."""

from __future__ import annotations

import operator
import re
import sys
from collections.abc import Callable, Iterable, Sequence

from rcclib.conversions import (
    FormatFlags,
    format_exponent,
    format_fixed,
    format_integer,
)

_U64_MASK = (1 << 64) - 1
_POINTER_WIDTH = 16

_SPEC = re.compile(
    r"%(?P<flags>[-+ #0]*)"
    r"(?P<width>\d+|\*)?"
    r"(?P<dot>\.(?P<precision>\d+|\*)?)?"
    r"(?P<length>hh|h|ll|l|[tjz])?"
    r"(?P<conv>.?)",
    re.DOTALL,
)

_FLAG_CHARS = {
    "0": FormatFlags.ZEROPAD,
    "-": FormatFlags.LEFT,
    "+": FormatFlags.PLUS,
    " ": FormatFlags.SPACE,
    "#": FormatFlags.HASH,
}

# ptrdiff_t, intmax_t and size_t all have the width of long.
_LENGTH_FLAGS = {
    "hh": FormatFlags.SHORT | FormatFlags.CHAR,
    "h": FormatFlags.SHORT,
    "l": FormatFlags.LONG,
    "ll": FormatFlags.LONG | FormatFlags.LONG_LONG,
    "t": FormatFlags.LONG,
    "j": FormatFlags.LONG,
    "z": FormatFlags.LONG,
}

_BASES = {"d": 10, "i": 10, "u": 10, "x": 16, "X": 16, "o": 8, "b": 2}


class _Arguments:
    """Hands out the arguments of a format call in order."""

    def __init__(self, args: Iterable[object]) -> None:
        self._it = iter(args)

    def _take(self) -> object:
        try:
            return next(self._it)
        except StopIteration:
            raise TypeError("not enough arguments for format string") from None

    def integer(self) -> int:
        value = self._take()
        try:
            return operator.index(value)
        except TypeError:
            raise TypeError(
                f"an integer is required, not {type(value).__name__}"
            ) from None

    def real(self) -> float:
        value = self._take()
        if isinstance(value, (int, float)):
            return float(value)
        raise TypeError(f"a real number is required, not {type(value).__name__}")

    def character(self) -> str:
        value = self._take()
        if isinstance(value, str) and len(value) == 1:
            return value
        if isinstance(value, (bytes, bytearray)) and len(value) == 1:
            return chr(value[0])
        try:
            return chr(operator.index(value) & 0xFF)
        except TypeError:
            raise TypeError(
                f"a character or integer is required, not {type(value).__name__}"
            ) from None

    def text(self) -> str:
        value = self._take()
        if isinstance(value, str):
            return value
        if isinstance(value, (bytes, bytearray)):
            return bytes(value).decode("latin-1")
        raise TypeError(f"a string is required, not {type(value).__name__}")


def _wrap_signed(value: int, bits: int) -> int:
    value &= (1 << bits) - 1
    if value >= 1 << (bits - 1):
        value -= 1 << bits
    return value


def _integer_bits(flags: FormatFlags) -> int:
    if flags & (FormatFlags.LONG | FormatFlags.LONG_LONG):
        return 64
    if flags & FormatFlags.CHAR:
        return 8
    if flags & FormatFlags.SHORT:
        return 16
    return 32


def _convert_integer(
    conv: str, args: _Arguments, precision: int, width: int, flags: FormatFlags
) -> str:
    base = _BASES[conv]
    if base == 10:
        flags &= ~FormatFlags.HASH
    if conv == "X":
        flags |= FormatFlags.UPPERCASE
    if conv not in "di":
        flags &= ~(FormatFlags.PLUS | FormatFlags.SPACE)
    if flags & FormatFlags.PRECISION:
        flags &= ~FormatFlags.ZEROPAD

    bits = _integer_bits(flags)
    raw = args.integer()
    if conv in "di":
        value = _wrap_signed(raw, bits)
        return format_integer(abs(value), value < 0, base, precision, width, flags)
    value = raw & ((1 << bits) - 1)
    return format_integer(value, False, base, precision, width, flags)


def _pad_field(text: str, width: int, flags: FormatFlags) -> str:
    return text.ljust(width) if flags & FormatFlags.LEFT else text.rjust(width)


def _convert(match: re.Match[str], args: _Arguments) -> str:
    flags = FormatFlags.NONE
    for ch in match["flags"]:
        flags |= _FLAG_CHARS[ch]

    width = 0
    width_field = match["width"]
    if width_field == "*":
        requested = _wrap_signed(args.integer(), 32)
        if requested < 0:
            flags |= FormatFlags.LEFT
            width = -requested
        else:
            width = requested
    elif width_field:
        width = int(width_field)

    precision = 0
    if match["dot"]:
        flags |= FormatFlags.PRECISION
        precision_field = match["precision"]
        if precision_field == "*":
            precision = max(_wrap_signed(args.integer(), 32), 0)
        elif precision_field:
            precision = int(precision_field)

    if match["length"]:
        flags |= _LENGTH_FLAGS[match["length"]]

    conv = match["conv"]
    if conv in _BASES:
        return _convert_integer(conv, args, precision, width, flags)
    if conv in ("f", "F"):
        if conv == "F":
            flags |= FormatFlags.UPPERCASE
        return format_fixed(args.real(), precision, width, flags)
    if conv in ("e", "E", "g", "G"):
        if conv in ("g", "G"):
            flags |= FormatFlags.ADAPT_EXP
        if conv in ("E", "G"):
            flags |= FormatFlags.UPPERCASE
        return format_exponent(args.real(), precision, width, flags)
    if conv == "c":
        return _pad_field(args.character(), width, flags)
    if conv == "s":
        text = args.text().split("\0", 1)[0]
        if flags & FormatFlags.PRECISION:
            text = text[:precision]
        return _pad_field(text, width, flags)
    if conv == "p":
        flags |= FormatFlags.ZEROPAD | FormatFlags.UPPERCASE
        address = args.integer() & _U64_MASK
        return format_integer(address, False, 16, precision, _POINTER_WIDTH, flags)
    # "%%" yields "%", an unknown conversion yields itself, a lone "%" at the end nothing.
    return conv


def _render(fmt: str, args: Iterable[object]) -> str:
    if not isinstance(fmt, str):
        raise TypeError(f"format must be a string, not {type(fmt).__name__}")
    supply = _Arguments(args)
    pieces: list[str] = []
    pos = 0
    for match in _SPEC.finditer(fmt):
        pieces.append(fmt[pos : match.start()])
        pieces.append(_convert(match, supply))
        pos = match.end()
    pieces.append(fmt[pos:])
    return "".join(pieces)


def sprintf(fmt: str, *args: object) -> str:
    """Return ``fmt`` with its conversion specifications filled from ``args``."""
    return _render(fmt, args)


def vsnprintf(count: int, fmt: str, args: Sequence[object]) -> tuple[str, int]:
    """Format into a buffer of ``count`` characters including the terminator.

    Returns the text that fits and the length the full output would have; a
    length of ``count`` or more means the text was truncated.
    """
    if count < 0:
        raise ValueError(f"count must not be negative: {count}")
    full = _render(fmt, args)
    return (full[: count - 1] if count else ""), len(full)


def snprintf(count: int, fmt: str, *args: object) -> tuple[str, int]:
    """Like :func:`vsnprintf`, taking the arguments directly."""
    return vsnprintf(count, fmt, args)


def fctprintf(out: Callable[[str], object], fmt: str, *args: object) -> int:
    """Send each formatted character to ``out``; return the number produced.

    NUL characters are counted but not passed on.
    """
    text = _render(fmt, args)
    for ch in text:
        if ch != "\0":
            out(ch)
    return len(text)


def printf(fmt: str, *args: object) -> int:
    """Write the formatted text to standard output; return its length."""
    text = _render(fmt, args)
    sys.stdout.write(text)
    return len(text)