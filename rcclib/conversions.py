"""Integer and floating-point conversions behind the printf family."""

from __future__ import annotations

import enum
import math
import struct

NTOA_BUFFER_SIZE = 32
FTOA_BUFFER_SIZE = 32
DEFAULT_FLOAT_PRECISION = 6
MAX_FLOAT = 1e9

_POW10 = tuple(10.0**i for i in range(10))
_U64_MASK = (1 << 64) - 1


class FormatFlags(enum.IntFlag):
    """Flags collected while parsing a conversion specification."""

    NONE = 0
    ZEROPAD = 1 << 0
    LEFT = 1 << 1
    PLUS = 1 << 2
    SPACE = 1 << 3
    HASH = 1 << 4
    UPPERCASE = 1 << 5
    CHAR = 1 << 6
    SHORT = 1 << 7
    LONG = 1 << 8
    LONG_LONG = 1 << 9
    PRECISION = 1 << 10
    ADAPT_EXP = 1 << 11


def _check_sizes(precision: int, width: int) -> None:
    if precision < 0:
        raise ValueError(f"precision must not be negative: {precision}")
    if width < 0:
        raise ValueError(f"width must not be negative: {width}")


def _pad(text: str, width: int, flags: FormatFlags) -> str:
    """Apply space padding up to ``width`` the way the output stage does."""
    if not flags & (FormatFlags.LEFT | FormatFlags.ZEROPAD):
        text = text.rjust(width)
    if flags & FormatFlags.LEFT:
        text = text.ljust(width)
    return text


def _emit(reversed_chars: list[str], width: int, flags: FormatFlags) -> str:
    return _pad("".join(reversed(reversed_chars)), width, flags)


def _append_sign(buf: list[str], negative: bool, flags: FormatFlags, limit: int) -> None:
    if len(buf) < limit:
        if negative:
            buf.append("-")
        elif flags & FormatFlags.PLUS:
            buf.append("+")
        elif flags & FormatFlags.SPACE:
            buf.append(" ")


def _finish_integer(
    buf: list[str],
    negative: bool,
    base: int,
    precision: int,
    width: int,
    flags: FormatFlags,
) -> str:
    limit = NTOA_BUFFER_SIZE
    if not flags & FormatFlags.LEFT:
        if (
            width
            and flags & FormatFlags.ZEROPAD
            and (negative or flags & (FormatFlags.PLUS | FormatFlags.SPACE))
        ):
            width -= 1
        while len(buf) < precision and len(buf) < limit:
            buf.append("0")
        while flags & FormatFlags.ZEROPAD and len(buf) < width and len(buf) < limit:
            buf.append("0")

    if flags & FormatFlags.HASH:
        if (
            not flags & FormatFlags.PRECISION
            and buf
            and (len(buf) == precision or len(buf) == width)
        ):
            buf.pop()
            if buf and base == 16:
                buf.pop()
        if len(buf) < limit:
            if base == 16:
                buf.append("X" if flags & FormatFlags.UPPERCASE else "x")
            elif base == 2:
                buf.append("b")
        if len(buf) < limit:
            buf.append("0")

    _append_sign(buf, negative, flags, limit)
    return _emit(buf, width, flags)


def _integer(
    value: int, negative: bool, base: int, precision: int, width: int, flags: FormatFlags
) -> str:
    if not value:
        flags &= ~FormatFlags.HASH
    letters = "A" if flags & FormatFlags.UPPERCASE else "a"
    buf: list[str] = []
    if not flags & FormatFlags.PRECISION or value:
        while True:
            value, digit = divmod(value, base)
            buf.append(chr(ord("0") + digit) if digit < 10 else chr(ord(letters) + digit - 10))
            if not value or len(buf) >= NTOA_BUFFER_SIZE:
                break
    return _finish_integer(buf, negative, base, precision, width, flags)


def format_integer(
    value: int, negative: bool, base: int, precision: int, width: int, flags: int
) -> str:
    """Render the magnitude ``value`` in ``base``, with a minus sign if ``negative``."""
    if value < 0:
        raise ValueError("value is a magnitude and must not be negative")
    if not 2 <= base <= 36:
        raise ValueError(f"unsupported base: {base}")
    _check_sizes(precision, width)
    return _integer(value, bool(negative), base, precision, width, FormatFlags(flags))


def _fixed(value: float, precision: int, width: int, flags: FormatFlags) -> str:
    if math.isnan(value):
        return _pad("nan", width, flags)
    if math.isinf(value):
        if value < 0:
            return _pad("-inf", width, flags)
        return _pad("+inf" if flags & FormatFlags.PLUS else "inf", width, flags)

    if value > MAX_FLOAT or value < -MAX_FLOAT:
        return _exponent(value, precision, width, flags)

    negative = value < 0
    if negative:
        value = 0 - value

    if not flags & FormatFlags.PRECISION:
        precision = DEFAULT_FLOAT_PRECISION

    buf: list[str] = []
    while len(buf) < FTOA_BUFFER_SIZE and precision > 9:
        buf.append("0")
        precision -= 1

    whole = int(value)
    tmp = (value - whole) * _POW10[precision]
    frac = int(tmp)
    diff = tmp - frac

    if diff > 0.5:
        frac += 1
        if frac >= _POW10[precision]:
            frac = 0
            whole += 1
    elif diff < 0.5:
        pass
    elif frac == 0 or frac & 1:
        frac += 1

    if precision == 0:
        diff = value - float(whole)
        if (not diff < 0.5 or diff > 0.5) and whole & 1:
            whole += 1
    else:
        count = precision
        while len(buf) < FTOA_BUFFER_SIZE:
            count -= 1
            buf.append(str(frac % 10))
            frac //= 10
            if not frac:
                break
        # A negative count stands for the wrapped-around unsigned counter.
        while len(buf) < FTOA_BUFFER_SIZE and count != 0:
            buf.append("0")
            count -= 1
        if len(buf) < FTOA_BUFFER_SIZE:
            buf.append(".")

    while len(buf) < FTOA_BUFFER_SIZE:
        buf.append(str(whole % 10))
        whole //= 10
        if not whole:
            break

    if not flags & FormatFlags.LEFT and flags & FormatFlags.ZEROPAD:
        if width and (negative or flags & (FormatFlags.PLUS | FormatFlags.SPACE)):
            width -= 1
        while len(buf) < width and len(buf) < FTOA_BUFFER_SIZE:
            buf.append("0")

    _append_sign(buf, negative, flags, FTOA_BUFFER_SIZE)
    return _emit(buf, width, flags)


def format_fixed(value: float, precision: int, width: int, flags: int) -> str:
    """Render ``value`` in fixed-point notation (``%f``)."""
    _check_sizes(precision, width)
    return _fixed(float(value), precision, width, FormatFlags(flags))


def _bits_of(value: float) -> int:
    return struct.unpack("<Q", struct.pack("<d", value))[0]


def _from_bits(bits: int) -> float:
    return struct.unpack("<d", struct.pack("<Q", bits & _U64_MASK))[0]


def _exponent(value: float, precision: int, width: int, flags: FormatFlags) -> str:
    if math.isnan(value) or math.isinf(value):
        return _fixed(value, precision, width, flags)

    negative = value < 0
    if negative:
        value = -value

    if not flags & FormatFlags.PRECISION:
        precision = DEFAULT_FLOAT_PRECISION

    bits = _bits_of(value)
    exp2 = ((bits >> 52) & 0x7FF) - 1023
    mantissa = _from_bits((bits & ((1 << 52) - 1)) | (1023 << 52))
    expval = int(
        0.1760912590558 + exp2 * 0.301029995663981 + (mantissa - 1.5) * 0.289529654602168
    )
    exp2 = int(expval * 3.321928094887362 + 0.5)
    z = expval * 2.302585092994046 - exp2 * 0.6931471805599453
    z2 = z * z
    scale = _from_bits((exp2 + 1023) << 52)
    scale *= 1 + 2 * z / (2 - z + (z2 / (6 + (z2 / (10 + z2 / 14)))))
    if value < scale:
        expval -= 1
        scale /= 10

    minwidth = 4 if -100 < expval < 100 else 5

    if flags & FormatFlags.ADAPT_EXP:
        if 1e-4 <= value < 1e6:
            precision = precision - expval - 1 if precision > expval else 0
            flags |= FormatFlags.PRECISION
            minwidth = 0
            expval = 0
        elif precision > 0 and flags & FormatFlags.PRECISION:
            precision -= 1

    fwidth = width - minwidth if width > minwidth else 0
    if flags & FormatFlags.LEFT and minwidth:
        fwidth = 0

    if expval:
        value /= scale

    text = _fixed(-value if negative else value, precision, fwidth, flags & ~FormatFlags.ADAPT_EXP)

    if minwidth:
        text += "E" if flags & FormatFlags.UPPERCASE else "e"
        text += _integer(
            abs(expval),
            expval < 0,
            10,
            0,
            minwidth - 1,
            FormatFlags.ZEROPAD | FormatFlags.PLUS,
        )
        if flags & FormatFlags.LEFT:
            text = text.ljust(width)
    return text


def format_exponent(value: float, precision: int, width: int, flags: int) -> str:
    """Render ``value`` in exponential notation (``%e``), or ``%g`` with ADAPT_EXP."""
    _check_sizes(precision, width)
    return _exponent(float(value), precision, width, FormatFlags(flags))