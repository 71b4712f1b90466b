# rcclib

Small building blocks that behave like a minimal C runtime, for Python code
that needs to reproduce its output or manipulate raw byte buffers the same way.

| Module | What it provides |
| --- | --- |
| `rcclib.printf` | `sprintf`, `snprintf`, `vsnprintf`, `fctprintf`, `printf` |
| `rcclib.conversions` | `format_integer`, `format_fixed`, `format_exponent`, `FormatFlags` |
| `rcclib.memory` | `memset`, `memcpy`, `memmove`, `memcmp` |
| `rcclib.strings` | `strlen`, `strnlen`, `strcpy`, `strncpy`, `strcat`, `strcmp`, `strncmp` |
| `rcclib.log` | `Logger`, `LogLevel`, `KernelPanic` |
| `rcclib.paging` | `PTEFlags`, `pte_new`, `pte_ppn`, `pte_flags`, `pte_is_valid`, `pte_readable`, `pte_writable`, `pte_executable`, `make_satp` |

The package has no dependencies beyond the standard library.

## Installation

```
pip install rcclib
```

To run the tests:

```
pip install "rcclib[test]"
pytest
```

## Formatting

`rcclib.printf` understands conversion specifications of the form
`%[flags][width][.precision][length]conversion`:

- flags `0`, `-`, `+`, space and `#`;
- width and precision as digits or `*` (taken from the arguments; a negative
  `*` width left-aligns, a negative `*` precision counts as zero);
- length modifiers `hh`, `h`, `l`, `ll`, `t`, `j`, `z`. Integers are wrapped to
  32 bits by default, 8 bits with `hh`, 16 with `h` and 64 with the others;
- conversions `d i u x X o b f F e E g G c s p %`. `%b` prints binary, `%p`
  prints an address as 16 upper-case hex digits. An unknown conversion
  character is printed as itself.

`%f` values beyond ±1e9 are printed in exponential form; `nan` and `inf` are
spelt out.

```python
from rcclib.printf import sprintf, snprintf, fctprintf, printf

sprintf("%-6d|%+.3f|%#x", 42, 3.14159, 255)
# '42    |+3.142|0xff'

# snprintf returns the text that fits in `count` characters (including the
# terminator) and the length the full output would have had.
text, needed = snprintf(5, "%s", "hello world")
# text == 'hell', needed == 11

chars = []
fctprintf(chars.append, "%05.1f", 2.25)   # each character goes to the callback

printf("%s\n", "to standard output")      # returns the number of characters
```

Too few arguments, or an argument of the wrong kind, raises `TypeError`.

The converters in `rcclib.conversions` can also be called directly with
`FormatFlags` values, e.g. `format_integer(255, False, 16, 0, 0, FormatFlags.HASH)`.

## Byte buffers

`rcclib.memory` works on any object that supports the buffer protocol; the
destination must be writable. A count larger than a buffer raises
`ValueError`, a read-only destination raises `TypeError`.

```python
from rcclib.memory import memset, memmove, memcmp

buf = bytearray(b"abcdef")
memmove(memoryview(buf)[2:], buf, 4)   # overlapping copies are safe
# buf == bytearray(b'ababcd')
memcmp(b"abc", b"abd", 3)              # -1: difference of the first unequal bytes
memset(buf, 0, 2)
```

## NUL-terminated strings

In `rcclib.strings` a string ends at its first NUL byte, or at the end of its
buffer if there is none. Copies that would not fit in the destination raise
`ValueError`.

```python
from rcclib.strings import strcpy, strcat, strcmp, strlen

dst = bytearray(16)
strcpy(dst, b"foo\0")
strcat(dst, b"bar\0")
strlen(dst)                 # 6
strcmp(dst, b"foobar\0")    # 0
```

## Logging

`Logger` writes messages at or above its level (`ERROR`, `WARN`, `INFO`,
`DEBUG`, `TRACE`; `INFO` by default) wrapped in ANSI colour codes and tagged
with the level name. Messages are formatted with `rcclib.printf` and written to
standard output, or to a callable passed as `out`.

```python
from rcclib.log import Logger, LogLevel, KernelPanic

lines = []
log = Logger(level=LogLevel.DEBUG, out=lines.append)
log.info("booting hart %d\n", 0)
# lines == ['\x1b[34m[INFO] booting hart 0\n\x1b[0m']

log.check(1 + 1 == 2)       # passes silently
try:
    log.panic("out of memory\n")
except KernelPanic as exc:
    print(exc)              # the formatted message
```

`panic` writes a red `[PANIC]` line and raises `KernelPanic`; `check` panics
with `[ASSERT]` when its condition is false.

## Sv39 page-table entries

```python
from rcclib.paging import PTEFlags, pte_new, pte_ppn, pte_flags, pte_is_valid, make_satp

pte = pte_new(0x80200, PTEFlags.V | PTEFlags.R | PTEFlags.W)
pte_ppn(pte)        # 0x80200
pte_flags(pte)      # PTEFlags.V | PTEFlags.R | PTEFlags.W
pte_is_valid(pte)   # True
make_satp(0x80200000)
```

Negative arguments raise `ValueError`.

## What the package does not do

These are helpers only. `rcclib.paging` encodes and decodes entries but does
not walk or build page tables, allocate frames or map memory, and nothing here
runs on or talks to hardware: output goes to Python's standard output or to a
callable you supply.