import pytest

from ramos.font import FONT_HEIGHT, FONT_WIDTH, GLYPH_COUNT, glyph, render


def test_every_glyph_has_sixteen_rows():
    assert all(len(glyph(code)) == FONT_HEIGHT for code in range(GLYPH_COUNT))


def test_letter_a_matches_table():
    assert glyph("A") == bytes(
        [0x00, 0x00, 0x10, 0x38, 0x6C, 0xC6, 0xC6, 0xFE, 0xC6, 0xC6, 0xC6, 0xC6, 0x00, 0x00, 0x00, 0x00]
    )


def test_character_and_code_agree():
    assert glyph("z") == glyph(0x7A)


def test_space_nul_and_delete_are_blank():
    blank = bytes(FONT_HEIGHT)
    assert glyph(" ") == blank
    assert glyph(0) == blank
    assert glyph(0x7F) == blank


@pytest.mark.parametrize("plain, inverse", [(0x07, 0x08), (0x09, 0x0A)])
def test_inverse_glyph_pairs(plain, inverse):
    assert bytes(b ^ 0xFF for b in glyph(plain)) == glyph(inverse)


@pytest.mark.parametrize("code", [-1, GLYPH_COUNT, 255])
def test_out_of_range_code(code):
    with pytest.raises(ValueError):
        glyph(code)


def test_multi_character_string_rejected():
    with pytest.raises(ValueError):
        glyph("ab")


def test_render_round_trips_to_glyph_bytes():
    text = "Hi!"
    rows = render(text, "1", "0")
    for position, ch in enumerate(text):
        columns = slice(position * FONT_WIDTH, (position + 1) * FONT_WIDTH)
        recovered = bytes(int(row[columns], 2) for row in rows)
        assert recovered == glyph(ch)


def test_render_dimensions():
    rows = render("abcd")
    assert len(rows) == FONT_HEIGHT
    assert all(len(row) == 4 * FONT_WIDTH for row in rows)


def test_render_space_uses_only_off():
    rows = render("  ", on="#", off=".")
    assert set("".join(rows)) == {"."}


def test_render_empty_text():
    assert render("") == [""] * FONT_HEIGHT


def test_render_rejects_non_ascii():
    with pytest.raises(ValueError):
        render("é")