"""An 8x16 bitmap font for the ASCII range and a text renderer built on it."""

from __future__ import annotations

FONT_WIDTH = 8
FONT_HEIGHT = 16
GLYPH_COUNT = 128

_ROWS = (
    "00 00 00 00 00 00 00 00 00 00 00 00 00 00 00 00",  # 0x00
    "00 00 7E 81 A5 81 81 BD 99 81 81 7E 00 00 00 00",  # 0x01
    "00 00 7E FF DB FF FF C3 E7 FF FF 7E 00 00 00 00",  # 0x02
    "00 00 00 00 6C FE FE FE FE 7C 38 10 00 00 00 00",  # 0x03
    "00 00 00 00 10 38 7C FE 7C 38 10 00 00 00 00 00",  # 0x04
    "00 00 00 18 3C 3C E7 E7 E7 18 18 3C 00 00 00 00",  # 0x05
    "00 00 00 18 3C 7E FF FF 7E 18 18 3C 00 00 00 00",  # 0x06
    "00 00 00 00 00 00 18 3C 3C 18 00 00 00 00 00 00",  # 0x07
    "FF FF FF FF FF FF E7 C3 C3 E7 FF FF FF FF FF FF",  # 0x08
    "00 00 00 00 00 3C 66 42 42 66 3C 00 00 00 00 00",  # 0x09
    "FF FF FF FF FF C3 99 BD BD 99 C3 FF FF FF FF FF",  # 0x0A
    "00 00 1E 0E 1A 32 78 CC CC CC CC 78 00 00 00 00",  # 0x0B
    "00 00 3C 66 66 66 66 3C 18 7E 18 18 00 00 00 00",  # 0x0C
    "00 00 3F 33 3F 30 30 30 30 70 F0 E0 00 00 00 00",  # 0x0D
    "00 00 7F 63 7F 63 63 63 63 67 E7 E6 C0 00 00 00",  # 0x0E
    "00 00 00 18 18 DB 3C E7 3C DB 18 18 00 00 00 00",  # 0x0F
    "00 80 C0 E0 F0 F8 FE F8 F0 E0 C0 80 00 00 00 00",  # 0x10
    "00 02 06 0E 1E 3E FE 3E 1E 0E 06 02 00 00 00 00",  # 0x11
    "00 00 18 3C 7E 18 18 18 7E 3C 18 00 00 00 00 00",  # 0x12
    "00 00 66 66 66 66 66 66 66 00 66 66 00 00 00 00",  # 0x13
    "00 00 7F DB DB DB 7B 1B 1B 1B 1B 1B 00 00 00 00",  # 0x14
    "00 7C C6 60 38 6C C6 C6 6C 38 0C C6 7C 00 00 00",  # 0x15
    "00 00 00 00 00 00 00 00 FE FE FE FE 00 00 00 00",  # 0x16
    "00 00 18 3C 7E 18 18 18 7E 3C 18 7E 00 00 00 00",  # 0x17
    "00 00 18 3C 7E 18 18 18 18 18 18 18 00 00 00 00",  # 0x18
    "00 00 18 18 18 18 18 18 18 7E 3C 18 00 00 00 00",  # 0x19
    "00 00 00 00 00 18 0C FE 0C 18 00 00 00 00 00 00",  # 0x1A
    "00 00 00 00 00 30 60 FE 60 30 00 00 00 00 00 00",  # 0x1B
    "00 00 00 00 00 00 C0 C0 C0 FE 00 00 00 00 00 00",  # 0x1C
    "00 00 00 00 00 28 6C FE 6C 28 00 00 00 00 00 00",  # 0x1D
    "00 00 00 00 10 38 38 7C 7C FE FE 00 00 00 00 00",  # 0x1E
    "00 00 00 00 FE FE 7C 7C 38 38 10 00 00 00 00 00",  # 0x1F
    "00 00 00 00 00 00 00 00 00 00 00 00 00 00 00 00",  # ' '
    "00 00 18 3C 3C 3C 18 18 18 00 18 18 00 00 00 00",  # '!'
    "00 66 66 66 24 00 00 00 00 00 00 00 00 00 00 00",  # '"'
    "00 00 00 6C 6C FE 6C 6C 6C FE 6C 6C 00 00 00 00",  # '#'
    "18 18 7C C6 C2 C0 7C 06 06 86 C6 7C 18 18 00 00",  # '$'
    "00 00 00 00 C2 C6 0C 18 30 60 C6 86 00 00 00 00",  # '%'
    "00 00 38 6C 6C 38 76 DC CC CC CC 76 00 00 00 00",  # '&'
    "00 30 30 30 60 00 00 00 00 00 00 00 00 00 00 00",  # "'"
    "00 00 0C 18 30 30 30 30 30 30 18 0C 00 00 00 00",  # '('
    "00 00 30 18 0C 0C 0C 0C 0C 0C 18 30 00 00 00 00",  # ')'
    "00 00 00 00 00 66 3C FF 3C 66 00 00 00 00 00 00",  # '*'
    "00 00 00 00 00 18 18 7E 18 18 00 00 00 00 00 00",  # '+'
    "00 00 00 00 00 00 00 00 00 18 18 18 30 00 00 00",  # ','
    "00 00 00 00 00 00 00 FE 00 00 00 00 00 00 00 00",  # '-'
    "00 00 00 00 00 00 00 00 00 00 18 18 00 00 00 00",  # '.'
    "00 00 00 00 02 06 0C 18 30 60 C0 80 00 00 00 00",  # '/'
    "00 00 38 6C C6 C6 D6 D6 C6 C6 6C 38 00 00 00 00",  # '0'
    "00 00 18 38 78 18 18 18 18 18 18 7E 00 00 00 00",  # '1'
    "00 00 7C C6 06 0C 18 30 60 C0 C6 FE 00 00 00 00",  # '2'
    "00 00 7C C6 06 06 3C 06 06 06 C6 7C 00 00 00 00",  # '3'
    "00 00 0C 1C 3C 6C CC FE 0C 0C 0C 1E 00 00 00 00",  # '4'
    "00 00 FE C0 C0 C0 FC 06 06 06 C6 7C 00 00 00 00",  # '5'
    "00 00 38 60 C0 C0 FC C6 C6 C6 C6 7C 00 00 00 00",  # '6'
    "00 00 FE C6 06 06 0C 18 30 30 30 30 00 00 00 00",  # '7'
    "00 00 7C C6 C6 C6 7C C6 C6 C6 C6 7C 00 00 00 00",  # '8'
    "00 00 7C C6 C6 C6 7E 06 06 06 0C 78 00 00 00 00",  # '9'
    "00 00 00 00 18 18 00 00 00 18 18 00 00 00 00 00",  # ':'
    "00 00 00 00 18 18 00 00 00 18 18 30 00 00 00 00",  # ';'
    "00 00 00 06 0C 18 30 60 30 18 0C 06 00 00 00 00",  # '<'
    "00 00 00 00 00 7E 00 00 7E 00 00 00 00 00 00 00",  # '='
    "00 00 00 60 30 18 0C 06 0C 18 30 60 00 00 00 00",  # '>'
    "00 00 7C C6 C6 0C 18 18 18 00 18 18 00 00 00 00",  # '?'
    "00 00 00 7C C6 C6 DE DE DE DC C0 7C 00 00 00 00",  # '@'
    "00 00 10 38 6C C6 C6 FE C6 C6 C6 C6 00 00 00 00",  # 'A'
    "00 00 FC 66 66 66 7C 66 66 66 66 FC 00 00 00 00",  # 'B'
    "00 00 3C 66 C2 C0 C0 C0 C0 C2 66 3C 00 00 00 00",  # 'C'
    "00 00 F8 6C 66 66 66 66 66 66 6C F8 00 00 00 00",  # 'D'
    "00 00 FE 66 62 68 78 68 60 62 66 FE 00 00 00 00",  # 'E'
    "00 00 FE 66 62 68 78 68 60 60 60 F0 00 00 00 00",  # 'F'
    "00 00 3C 66 C2 C0 C0 DE C6 C6 66 3A 00 00 00 00",  # 'G'
    "00 00 C6 C6 C6 C6 FE C6 C6 C6 C6 C6 00 00 00 00",  # 'H'
    "00 00 3C 18 18 18 18 18 18 18 18 3C 00 00 00 00",  # 'I'
    "00 00 1E 0C 0C 0C 0C 0C CC CC CC 78 00 00 00 00",  # 'J'
    "00 00 E6 66 66 6C 78 78 6C 66 66 E6 00 00 00 00",  # 'K'
    "00 00 F0 60 60 60 60 60 60 62 66 FE 00 00 00 00",  # 'L'
    "00 00 C6 EE FE FE D6 C6 C6 C6 C6 C6 00 00 00 00",  # 'M'
    "00 00 C6 E6 F6 FE DE CE C6 C6 C6 C6 00 00 00 00",  # 'N'
    "00 00 7C C6 C6 C6 C6 C6 C6 C6 C6 7C 00 00 00 00",  # 'O'
    "00 00 FC 66 66 66 7C 60 60 60 60 F0 00 00 00 00",  # 'P'
    "00 00 7C C6 C6 C6 C6 C6 C6 D6 DE 7C 0C 0E 00 00",  # 'Q'
    "00 00 FC 66 66 66 7C 6C 66 66 66 E6 00 00 00 00",  # 'R'
    "00 00 7C C6 C6 60 38 0C 06 C6 C6 7C 00 00 00 00",  # 'S'
    "00 00 7E 7E 5A 18 18 18 18 18 18 3C 00 00 00 00",  # 'T'
    "00 00 C6 C6 C6 C6 C6 C6 C6 C6 C6 7C 00 00 00 00",  # 'U'
    "00 00 C6 C6 C6 C6 C6 C6 C6 6C 38 10 00 00 00 00",  # 'V'
    "00 00 C6 C6 C6 C6 D6 D6 D6 FE EE 6C 00 00 00 00",  # 'W'
    "00 00 C6 C6 6C 7C 38 38 7C 6C C6 C6 00 00 00 00",  # 'X'
    "00 00 66 66 66 66 3C 18 18 18 18 3C 00 00 00 00",  # 'Y'
    "00 00 FE C6 86 0C 18 30 60 C2 C6 FE 00 00 00 00",  # 'Z'
    "00 00 3C 30 30 30 30 30 30 30 30 3C 00 00 00 00",  # '['
    "00 00 00 80 C0 E0 70 38 1C 0E 06 02 00 00 00 00",  # backslash
    "00 00 3C 0C 0C 0C 0C 0C 0C 0C 0C 3C 00 00 00 00",  # ']'
    "10 38 6C C6 00 00 00 00 00 00 00 00 00 00 00 00",  # '^'
    "00 00 00 00 00 00 00 00 00 00 00 00 00 FF 00 00",  # '_'
    "30 30 18 00 00 00 00 00 00 00 00 00 00 00 00 00",  # '`'
    "00 00 00 00 00 78 0C 7C CC CC CC 76 00 00 00 00",  # 'a'
    "00 00 E0 60 60 78 6C 66 66 66 66 7C 00 00 00 00",  # 'b'
    "00 00 00 00 00 7C C6 C0 C0 C0 C6 7C 00 00 00 00",  # 'c'
    "00 00 1C 0C 0C 3C 6C CC CC CC CC 76 00 00 00 00",  # 'd'
    "00 00 00 00 00 7C C6 FE C0 C0 C6 7C 00 00 00 00",  # 'e'
    "00 00 38 6C 64 60 F0 60 60 60 60 F0 00 00 00 00",  # 'f'
    "00 00 00 00 00 76 CC CC CC CC CC 7C 0C CC 78 00",  # 'g'
    "00 00 E0 60 60 6C 76 66 66 66 66 E6 00 00 00 00",  # 'h'
    "00 00 18 18 00 38 18 18 18 18 18 3C 00 00 00 00",  # 'i'
    "00 00 06 06 00 0E 06 06 06 06 06 06 66 66 3C 00",  # 'j'
    "00 00 E0 60 60 66 6C 78 78 6C 66 E6 00 00 00 00",  # 'k'
    "00 00 38 18 18 18 18 18 18 18 18 3C 00 00 00 00",  # 'l'
    "00 00 00 00 00 EC FE D6 D6 D6 D6 C6 00 00 00 00",  # 'm'
    "00 00 00 00 00 DC 66 66 66 66 66 66 00 00 00 00",  # 'n'
    "00 00 00 00 00 7C C6 C6 C6 C6 C6 7C 00 00 00 00",  # 'o'
    "00 00 00 00 00 DC 66 66 66 66 66 7C 60 60 F0 00",  # 'p'
    "00 00 00 00 00 76 CC CC CC CC CC 7C 0C 0C 1E 00",  # 'q'
    "00 00 00 00 00 DC 76 66 60 60 60 F0 00 00 00 00",  # 'r'
    "00 00 00 00 00 7C C6 60 38 0C C6 7C 00 00 00 00",  # 's'
    "00 00 10 30 30 FC 30 30 30 30 36 1C 00 00 00 00",  # 't'
    "00 00 00 00 00 CC CC CC CC CC CC 76 00 00 00 00",  # 'u'
    "00 00 00 00 00 66 66 66 66 66 3C 18 00 00 00 00",  # 'v'
    "00 00 00 00 00 C6 C6 D6 D6 D6 FE 6C 00 00 00 00",  # 'w'
    "00 00 00 00 00 C6 6C 38 38 38 6C C6 00 00 00 00",  # 'x'
    "00 00 00 00 00 C6 C6 C6 C6 C6 C6 7E 06 0C F8 00",  # 'y'
    "00 00 00 00 00 FE CC 18 30 60 C6 FE 00 00 00 00",  # 'z'
    "00 00 0E 18 18 18 70 18 18 18 18 0E 00 00 00 00",  # '{'
    "00 00 18 18 18 18 00 18 18 18 18 18 00 00 00 00",  # '|'
    "00 00 70 18 18 18 0E 18 18 18 18 70 00 00 00 00",  # '}'
    "00 00 76 DC 00 00 00 00 00 00 00 00 00 00 00 00",  # '~'
    "00 00 00 00 00 00 00 00 00 00 00 00 00 00 00 00",  # delete
)

_GLYPHS: tuple[bytes, ...] = tuple(bytes.fromhex(row) for row in _ROWS)


def _code_of(code: int | str) -> int:
    if isinstance(code, str):
        if len(code) != 1:
            raise ValueError(f"expected a single character, got {code!r}")
        code = ord(code)
    if not 0 <= code < GLYPH_COUNT:
        raise ValueError(f"no glyph for character code {code}")
    return code


def glyph(code: int | str) -> bytes:
    """The 16 row bytes of a character; the high bit of each row is its leftmost pixel."""
    return _GLYPHS[_code_of(code)]


def render(text: str, on: str = "#", off: str = " ") -> list[str]:
    """Draw ``text`` as 16 rows, writing ``on`` for lit pixels and ``off`` for the rest."""
    glyphs = [glyph(ch) for ch in text]
    masks = [1 << (FONT_WIDTH - 1 - bit) for bit in range(FONT_WIDTH)]
    return [
        "".join(on if rows[line] & mask else off for rows in glyphs for mask in masks)
        for line in range(FONT_HEIGHT)
    ]