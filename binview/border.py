"""
Border glyphs framing the offset, hex and character panels.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class BorderElements:
    """Glyphs of a horizontal border row."""

    left_corner: str
    horizontal_line: str
    column_separator: str
    right_corner: str


class BorderStyle(Enum):
    """Style of the border around bytes and characters."""

    UNICODE = "unicode"
    ASCII = "ascii"
    NONE = "none"

    def header_elements(self) -> Optional[BorderElements]:
        if self is BorderStyle.UNICODE:
            return BorderElements("┌", "─", "┬", "┐")
        if self is BorderStyle.ASCII:
            return BorderElements("+", "-", "+", "+")
        return None

    def footer_elements(self) -> Optional[BorderElements]:
        if self is BorderStyle.UNICODE:
            return BorderElements("└", "─", "┴", "┘")
        if self is BorderStyle.ASCII:
            return BorderElements("+", "-", "+", "+")
        return None

    @property
    def outer_separator(self) -> str:
        """Separator at the panel edges."""
        return {"unicode": "│", "ascii": "|"}.get(self.value, " ")

    @property
    def inner_separator(self) -> str:
        """Separator between the 8-byte columns inside a panel."""
        return {"unicode": "┊", "ascii": "|"}.get(self.value, " ")
