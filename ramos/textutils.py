"""Stream filters and small printing programs run from the shell."""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from itertools import cycle

from .console import Console, Fd

OK = 0
ERROR = -1

_VOWELS = frozenset("aeiouAEIOU")
_WORD_SEPARATORS = frozenset(" \t\n")


def _characters(console: Console) -> Iterator[str]:
    while (ch := console.getchar()) is not None:
        yield ch


def cat_main(console: Console, args: Sequence[str]) -> int:
    """Copy standard input to standard output."""
    for ch in _characters(console):
        console.write(Fd.STDOUT, ch)
    return OK


def red_main(console: Console, args: Sequence[str]) -> int:
    """Copy standard input to standard error."""
    for ch in _characters(console):
        console.write(Fd.STDERR, ch)
    return OK


def rainbow_main(console: Console, args: Sequence[str]) -> int:
    """Copy standard input, sending each character to the next output descriptor in turn."""
    targets = cycle([fd for fd in Fd if fd is not Fd.STDIN])
    for ch, fd in zip(_characters(console), targets):
        console.write(fd, ch)
    return OK


def filter_main(console: Console, args: Sequence[str]) -> int:
    """Copy standard input to standard output without its vowels."""
    if args:
        console.print_err("Filter requires no arguments\n")
        return ERROR
    for ch in _characters(console):
        if ch not in _VOWELS:
            console.putchar(ch)
    return OK


def wc_main(console: Console, args: Sequence[str]) -> int:
    """Count lines, words and characters of standard input."""
    lines = 1
    words = 0
    chars = 0
    in_word = False
    for ch in _characters(console):
        chars += 1
        if ch == "\n":
            lines += 1
        if ch in _WORD_SEPARATORS:
            if in_word:
                words += 1
                in_word = False
        else:
            in_word = True
    if in_word:
        words += 1

    console.printf(
        "%d line%s, %d word%s, %d character%s\n",
        lines,
        "" if lines == 1 else "s",
        words,
        "" if words == 1 else "s",
        chars,
        "" if chars == 1 else "s",
    )
    return OK


def echo_main(console: Console, args: Sequence[str]) -> int:
    """Print every argument followed by a space."""
    for arg in args:
        console.print(arg)
        console.putchar(" ")
    return OK


def print_main(console: Console, args: Sequence[str], yield_: Callable[[], bool]) -> int:
    """Print the first argument repeatedly, calling ``yield_`` after each time.

    Printing goes on for as long as ``yield_`` returns a true value.
    """
    if not args:
        console.print_err("Invalid Arguments\n")
        console.print_err("Use: print <string_to_print>")
        return ERROR
    while True:
        console.print(args[0])
        if not yield_():
            return OK