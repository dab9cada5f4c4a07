"""String helpers shared by the shell and its programs."""

from __future__ import annotations

_UINT64_MASK = (1 << 64) - 1
_DIGITS = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"


def num_to_str_base(value: int, base: int) -> str:
    """Render ``value`` as an unsigned 64-bit number in ``base``.

    Digits above nine are written as upper-case letters.
    """
    if not 2 <= base <= len(_DIGITS):
        raise ValueError(f"unsupported base: {base}")
    value &= _UINT64_MASK
    digits = []
    while True:
        value, remainder = divmod(value, base)
        digits.append(_DIGITS[remainder])
        if not value:
            break
    return "".join(reversed(digits))


def satoi(text: str | None) -> int:
    """Parse an optionally negative decimal integer.

    Anything that is not a plain run of ASCII digits (after an optional
    leading minus sign) yields 0.
    """
    if not text:
        return 0
    sign = 1
    body = text
    if body.startswith("-"):
        sign = -1
        body = body[1:]
    if not all("0" <= ch <= "9" for ch in body):
        return 0
    return sign * int(body) if body else 0


def strcmp(first: str, second: str) -> int:
    """Compare two strings, returning the difference of the first differing characters."""
    for left, right in zip(first, second):
        if left != right:
            return ord(left) - ord(right)
    if len(first) > len(second):
        return ord(first[len(second)])
    if len(second) > len(first):
        return -ord(second[len(first)])
    return 0