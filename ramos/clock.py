"""The date and time programs, which print the real-time clock's BCD fields."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime, timezone

from .console import Console
from .strings import num_to_str_base

OK = 0


def to_bcd(value: int) -> int:
    """Encode a number from 0 to 99 as packed binary-coded decimal."""
    if not 0 <= value <= 99:
        raise ValueError(f"value out of BCD range: {value}")
    tens, units = divmod(value, 10)
    return tens << 4 | units


def format_fields(fields: Iterable[int], separator: str) -> str:
    """Print each byte as two hexadecimal digits, joined by ``separator``, ending in a newline."""
    parts = []
    for field in fields:
        if not 0 <= field <= 0xFF:
            raise ValueError(f"field is not a byte: {field}")
        parts.append(num_to_str_base(field, 16).rjust(2, "0"))
    return separator.join(parts) + "\n"


def _moment(now: datetime | None) -> datetime:
    return now if now is not None else datetime.now(timezone.utc)


def date_main(console: Console, args: Sequence[str], now: datetime | None = None) -> int:
    """Print the date as dd/mm/yy."""
    moment = _moment(now)
    fields = (to_bcd(moment.day), to_bcd(moment.month), to_bcd(moment.year % 100))
    console.print(format_fields(fields, "/"))
    return OK


def time_main(console: Console, args: Sequence[str], now: datetime | None = None) -> int:
    """Print the time as hh:mm:ss."""
    moment = _moment(now)
    fields = (to_bcd(moment.hour), to_bcd(moment.minute), to_bcd(moment.second))
    console.print(format_fields(fields, ":"))
    return OK