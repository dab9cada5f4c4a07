"""Console I/O over numbered file descriptors, with printf and scanf."""

from __future__ import annotations

import io
from enum import IntEnum
from typing import Any, TextIO

from .strings import num_to_str_base
from .system import SyscallError

_UINT64_MASK = (1 << 64) - 1
_INT32_MASK = 0xFFFFFFFF
FLOAT_PRECISION = 6


class Fd(IntEnum):
    """Standard descriptors; the colour ones print in that colour."""

    STDIN = 0
    STDOUT = 1
    STDERR = 2
    STDGREEN = 3
    STDBLUE = 4
    STDCYAN = 5
    STDMAGENTA = 6
    STDYELLOW = 7


FDS_COUNT = len(Fd)


def _signed64(value: int) -> int:
    value &= _UINT64_MASK
    return value - (1 << 64) if value >= 1 << 63 else value


def _format_float(number: float) -> str:
    sign = ""
    if number < 0:
        sign = "-"
        number = -number
    whole = int(number)
    fraction = number - whole
    for _ in range(FLOAT_PRECISION):
        fraction *= 10
    fraction_digits = int(fraction + 0.5)
    padding = []
    divisor = 10 ** (FLOAT_PRECISION - 1)
    while fraction_digits < divisor:
        padding.append("0")
        divisor //= 10
    return f"{sign}{whole}.{''.join(padding)}{fraction_digits}"


def _convert(spec: str, value: Any) -> str:
    if spec in "di":
        number = _signed64(int(value))
        if number < 0:
            return "-" + num_to_str_base(-number, 10)
        return num_to_str_base(number, 10)
    if spec == "u":
        return num_to_str_base(int(value), 10)
    if spec in "xX":
        return num_to_str_base(int(value), 16).upper()
    if spec == "o":
        return num_to_str_base(int(value), 8)
    if spec == "b":
        return num_to_str_base(int(value), 2)
    if spec == "p":
        return "0x" + num_to_str_base(int(value), 16)
    if spec == "s":
        return "" if value is None else str(value)
    if spec == "c":
        return value[:1] if isinstance(value, str) else chr(int(value) & 0xFF)
    if spec == "f":
        return _format_float(float(value))
    return ""


def format_printf(fmt: str, *args: Any) -> str:
    """Expand a printf-style format.

    Supports %d %i %u %x %X %o %b %p %s %c %f and %%; other conversions
    take an argument and print nothing. Hexadecimal digits are upper case.
    """
    pieces = []
    pending = iter(args)
    chars = iter(fmt)
    for ch in chars:
        if ch != "%":
            pieces.append(ch)
            continue
        spec = next(chars, None)
        if spec is None:
            break
        if spec == "%":
            pieces.append("%")
            continue
        try:
            value = next(pending)
        except StopIteration:
            raise ValueError(f"missing argument for %{spec}") from None
        pieces.append(_convert(spec, value))
    return "".join(pieces)


def _digits_to_int(text: str) -> int:
    total = 0
    for ch in text:
        total = (total * 10 + ord(ch) - ord("0")) & _UINT64_MASK
    total &= _INT32_MASK
    return total - (1 << 32) if total >= 1 << 31 else total


class Console:
    """Reads characters from an input stream and records output per descriptor.

    Everything written is also copied to ``display`` when one is given.
    """

    def __init__(self, stdin: str | TextIO = "", display: TextIO | None = None) -> None:
        self._stdin = io.StringIO(stdin) if isinstance(stdin, str) else stdin
        self._display = display
        self._written: dict[Fd, list[str]] = {fd: [] for fd in Fd}

    def write(self, fd: int, text: str) -> int:
        """Write ``text`` to ``fd`` and return the number of characters written."""
        try:
            target = Fd(fd)
        except ValueError:
            raise SyscallError(-1, f"bad file descriptor: {fd}") from None
        if target is Fd.STDIN:
            raise SyscallError(-1, "cannot write to standard input")
        self._written[target].append(text)
        if self._display is not None and text:
            self._display.write(text)
            self._display.flush()
        return len(text)

    def getchar(self) -> str | None:
        """Read one character, or None at end of input."""
        return self._stdin.read(1) or None

    def putchar(self, char: str) -> int:
        if len(char) != 1:
            raise ValueError("putchar takes exactly one character")
        return self.write(Fd.STDOUT, char)

    def fprint(self, fd: int, text: str | None) -> int:
        if text is None:
            return 0
        return self.write(fd, text)

    def print(self, text: str | None) -> int:
        return self.fprint(Fd.STDOUT, text)

    def print_err(self, text: str | None) -> int:
        return self.fprint(Fd.STDERR, text)

    def printf(self, fmt: str, *args: Any) -> int:
        return self.write(Fd.STDOUT, format_printf(fmt, *args))

    def _read_line(self) -> str:
        chars = []
        while (ch := self.getchar()) is not None and ch != "\n":
            chars.append(ch)
        return "".join(chars)

    def scanf(self, fmt: str) -> list[Any]:
        """Read values for %c, %s and %d in ``fmt``; %s and %d consume a whole line."""
        values: list[Any] = []
        chars = iter(fmt)
        for ch in chars:
            if ch != "%":
                continue
            spec = next(chars, None)
            if spec is None:
                break
            if spec == "c":
                values.append(self.getchar())
            elif spec == "s":
                values.append(self._read_line())
            elif spec == "d":
                values.append(_digits_to_int(self._read_line()))
        return values

    def output(self, fd: int) -> str:
        """Everything written so far to ``fd``."""
        return "".join(self._written[Fd(fd)])