"""
Tests for row rendering.

Checks the exact text of rows and border rows, and that colored rows keep
the same visible width as plain ones.
"""

import re

from binview.border import BorderStyle
from binview.layout import PanelsMode, resolve
from binview.line_builder import Line, LineBuilder
from binview.numeric import Endianness
from binview.printer import PrinterConfig

ANSI = re.compile(r"\x1b\[[0-9;]*m")


def make_builder(**kwargs) -> LineBuilder:
    config = PrinterConfig(**kwargs)
    layout = resolve(
        config.panels,
        config.group_size,
        config.terminal_width,
        config.show_characters,
        base=config.base,
        show_offset=config.show_offset,
        columns=config.columns,
    )
    return LineBuilder(config, layout)


class TestBuild:
    """Plain rows"""

    def test_short_line(self):
        builder = make_builder()
        row = builder.build(Line(0, b"spam", is_last_line=True))

        expected = (
            "│00000000│ 73 70 61 6d"
            + " " * 13
            + "┊"
            + " " * 25
            + "│spam    ┊        │"
        )
        assert row == expected
        assert len(row) == 80

    def test_full_line(self):
        builder = make_builder()
        row = builder.build(Line(0, bytes(range(0x41, 0x51))))

        assert row == (
            "│00000000│ 41 42 43 44 45 46 47 48 ┊ 49 4a 4b 4c 4d 4e 4f 50 │"
            "ABCDEFGH┊IJKLMNOP│"
        )

    def test_display_offset_bias(self):
        builder = make_builder(display_offset_bias=0xDEADBEEF)
        row = builder.build(Line(0, b"A"))
        assert row.startswith("│deadbeef│")

    def test_offset_is_stream_position(self):
        builder = make_builder()
        assert builder.build(Line(0x30, b"A")).startswith("│00000030│")

    def test_wide_offset_is_not_truncated(self):
        builder = make_builder(display_offset_bias=0x1_0000_0000)
        row = builder.build(Line(0x10, b"A"))

        assert row.startswith("│100000010│")
        assert len(row) == builder.layout.width + 1

    def test_whitespace_and_null_glyphs(self):
        builder = make_builder()
        row = builder.build(Line(0, b"a\nb\x00"))
        assert row.endswith("│a_b⋄    ┊        │")

    def test_group_size_two_big_endian(self):
        builder = make_builder(group_size=2, endianness=Endianness.BIG)
        row = builder.build(Line(0, b"\x01\x02\x03\x04"))
        assert row.startswith("│00000000│ 0201 0403 ")

    def test_group_size_two_little_endian(self):
        builder = make_builder(group_size=2)
        row = builder.build(Line(0, b"\x01\x02\x03\x04"))
        assert row.startswith("│00000000│ 0102 0304 ")

    def test_no_border(self):
        builder = make_builder(border_style=BorderStyle.NONE)
        row = builder.build(Line(0, b"AB"))
        assert "│" not in row and "┊" not in row
        assert row.startswith(" 00000000  41 42 ")

    def test_ascii_border(self):
        builder = make_builder(border_style=BorderStyle.ASCII)
        row = builder.build(Line(0, b"AB"))
        assert row.startswith("|00000000| 41 42 ")

    def test_hidden_position(self):
        builder = make_builder(show_offset=False)
        row = builder.build(Line(0, b"AB"))
        assert row.startswith("│ 41 42 ")
        assert len(row) == 71

    def test_hex_panel_only(self):
        builder = make_builder(panels=PanelsMode.ONE)
        row = builder.build(Line(0, b"AB"))
        assert len(row) == 62
        assert row.endswith("│")
        assert "AB" not in row

    def test_colored_row_has_same_visible_text(self):
        data = b"A \x00\x01\xff\nzz"
        plain = make_builder().build(Line(0, data))
        colored = make_builder(show_color=True).build(Line(0, data))

        assert colored != plain
        assert ANSI.sub("", colored) == plain


class TestBorders:
    def test_header(self):
        builder = make_builder()
        assert builder.header() == (
            "┌" + "─" * 8 + "┬" + "─" * 25 + "┬" + "─" * 25 + "┬"
            + "─" * 8 + "┬" + "─" * 8 + "┐"
        )

    def test_footer(self):
        builder = make_builder()
        footer = builder.footer()
        assert footer.startswith("└" + "─" * 8 + "┴")
        assert footer.endswith("┘")
        assert len(footer) == 80

    def test_border_matches_row_width(self):
        builder = make_builder(group_size=4, show_offset=False)
        row = builder.build(Line(0, b"x" * 16))
        assert len(builder.header()) == len(row)

    def test_ascii_header(self):
        builder = make_builder(border_style=BorderStyle.ASCII, panels=PanelsMode.ONE)
        assert builder.header() == "+" + "-" * 8 + "+" + "-" * 25 + "+" + "-" * 25 + "+"

    def test_no_border_rows(self):
        builder = make_builder(border_style=BorderStyle.NONE)
        assert builder.header() is None
        assert builder.footer() is None
