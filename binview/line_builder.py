"""
Rendering of single hexdump rows and of the border rows around them.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence

from .border import BorderElements
from .categories import classify, glyph
from .colors import paint
from .layout import COLUMN_BYTES, Layout, hex_column_width
from .numeric import Endianness, format_byte, format_group


@dataclass(frozen=True)
class Line:
    """One window of input bytes, at most bytes_per_line long."""

    offset: int
    data: bytes
    is_last_line: bool = False


class LineBuilder:
    """Formats Lines according to a printer configuration and its resolved layout."""

    def __init__(self, config, layout: Layout):
        self.config = config
        self.layout = layout
        self.group_size = config.group_size
        self._theme = config.theme if config.show_color else None
        self._digits = config.base.digits

        border = config.border_style
        self._outer = self._paint_border(border.outer_separator)
        self._inner = self._paint_border(border.inner_separator)

    def _paint_border(self, text: str) -> str:
        if self._theme is None:
            return text
        return paint(text, self._theme.border)

    def _separator(self, column: int) -> str:
        return self._outer if column == self.layout.columns - 1 else self._inner

    def format_offset(self, offset: int) -> str:
        text = f"{offset + self.config.display_offset_bias:08x}"
        if self._theme is None:
            return text
        return paint(text, self._theme.offset)

    def _group_token(self, group: Sequence[int]) -> str:
        if not group:
            return " " * (self._digits * self.group_size)
        if self._theme is None:
            return format_group(
                group, self.config.base, self.config.endianness, self.group_size
            )

        ordered = reversed(group) if self.config.endianness is Endianness.BIG else group
        token = "".join(
            paint(format_byte(b, self.config.base), self._theme.for_category(classify(b)))
            for b in ordered
        )
        return token + " " * (self._digits * (self.group_size - len(group)))

    def _glyph(self, position: int, data: bytes) -> str:
        if position >= len(data):
            return " "
        byte = data[position]
        text = glyph(byte, self.config.character_table)
        if self._theme is None:
            return text
        return paint(text, self._theme.for_category(classify(byte)))

    def build(self, line: Line) -> str:
        """Render one row (without line terminator)."""
        data = line.data
        parts: List[str] = []

        if self.config.show_offset:
            parts.append(self._outer + self.format_offset(line.offset) + self._outer)
        else:
            parts.append(self._outer)

        for column in range(self.layout.columns):
            start = column * COLUMN_BYTES
            parts.append(" ")
            for group_start in range(start, start + COLUMN_BYTES, self.group_size):
                group = data[group_start : group_start + self.group_size]
                parts.append(self._group_token(group) + " ")
            parts.append(self._separator(column))

        if self.layout.show_characters:
            for column in range(self.layout.columns):
                start = column * COLUMN_BYTES
                for position in range(start, start + COLUMN_BYTES):
                    parts.append(self._glyph(position, data))
                parts.append(self._separator(column))

        return "".join(parts)

    def _border_row(self, elements: Optional[BorderElements]) -> Optional[str]:
        if elements is None:
            return None

        h = elements.horizontal_line
        segments = []
        if self.config.show_offset:
            segments.append(h * 8)
        hex_width = hex_column_width(self.config.base, self.group_size)
        segments.extend([h * hex_width] * self.layout.columns)
        if self.layout.show_characters:
            segments.extend([h * COLUMN_BYTES] * self.layout.columns)

        row = (
            elements.left_corner
            + elements.column_separator.join(segments)
            + elements.right_corner
        )
        return self._paint_border(row)

    def header(self) -> Optional[str]:
        """Top border row, None without border."""
        return self._border_row(self.config.border_style.header_elements())

    def footer(self) -> Optional[str]:
        """Bottom border row, None without border."""
        return self._border_row(self.config.border_style.footer_elements())
