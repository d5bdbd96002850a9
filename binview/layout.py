"""
Panel layout: bytes per line and which panels are shown.

A row is made of 8-byte columns. Each column appears once in the hex panel
and, when visible, once in the character panel:

    │00000000│ 73 70 61 6d 73 70 61 6d ┊ 73 70 61 6d 73 70 61 6d │spamspam┊spamspam│
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from .errors import ConfigInvariantViolation
from .numeric import Base

COLUMN_BYTES = 8
DEFAULT_COLUMNS = 2
GROUP_SIZES = (1, 2, 4, 8)

OFFSET_DIGITS = 8
# outer separator + 8 offset digits + outer separator
OFFSET_FIELD_WIDTH = OFFSET_DIGITS + 2


class PanelsMode(Enum):
    """Requested panels: AUTO fits the terminal, ONE is hex only, TWO adds characters."""

    AUTO = "auto"
    ONE = 1
    TWO = 2

    @classmethod
    def parse(cls, value: Union[str, int]) -> "PanelsMode":
        text = str(value).strip().lower()
        if text == "auto":
            return cls.AUTO
        if text in ("1", "2"):
            return cls(int(text))
        raise ValueError(f"Invalid panels value {value!r} (expected auto, 1 or 2)")


class ActivePanels(Enum):
    HEX = "hex"
    HEX_AND_CHAR = "hex+char"


@dataclass(frozen=True)
class Layout:
    """Resolved geometry of every row of one dump."""

    bytes_per_line: int
    active_panels: ActivePanels
    columns: int
    width: int

    @property
    def show_characters(self) -> bool:
        return self.active_panels is ActivePanels.HEX_AND_CHAR


def check_group_size(group_size: int) -> None:
    if group_size not in GROUP_SIZES:
        raise ConfigInvariantViolation(
            f"Invalid group size {group_size}: possible sizes are 1, 2, 4 or 8"
        )


def hex_column_width(base: Base, group_size: int) -> int:
    """Width of one 8-byte column in the hex panel, separator excluded."""
    groups = COLUMN_BYTES // group_size
    return 1 + groups * (base.digits * group_size + 1)


def line_width(
    columns: int,
    base: Base = Base.HEXADECIMAL,
    group_size: int = 1,
    show_offset: bool = True,
    show_characters: bool = True,
) -> int:
    """Exact rendered width of a row in terminal columns."""
    width = OFFSET_FIELD_WIDTH if show_offset else 1
    width += columns * (hex_column_width(base, group_size) + 1)
    if show_characters:
        width += columns * (COLUMN_BYTES + 1)
    return width


def fit_columns(
    terminal_width: int,
    base: Base = Base.HEXADECIMAL,
    group_size: int = 1,
    show_offset: bool = True,
    show_characters: bool = True,
) -> int:
    """Largest number of 8-byte columns whose row fits the width (at least 1)."""
    check_group_size(group_size)
    fixed = line_width(0, base, group_size, show_offset, show_characters)
    per_column = line_width(1, base, group_size, show_offset, show_characters) - fixed
    return max(1, (terminal_width - fixed) // per_column)


def resolve(
    panels_mode: PanelsMode,
    group_size: int,
    terminal_width: Optional[int],
    show_characters: bool,
    *,
    base: Base = Base.HEXADECIMAL,
    show_offset: bool = True,
    columns: int = DEFAULT_COLUMNS,
) -> Layout:
    """
    Resolve bytes per line and the visible panels.

    AUTO keeps the character panel only when the full row fits the terminal;
    a row that does not even fit without it is still rendered. An unknown
    terminal width behaves like TWO.

    Raises:
        ConfigInvariantViolation: Invalid group size or column count
    """
    check_group_size(group_size)
    if columns < 1:
        raise ConfigInvariantViolation(f"Column count must be positive, got {columns}")

    with_chars = show_characters
    if panels_mode is PanelsMode.ONE:
        with_chars = False
    elif panels_mode is PanelsMode.AUTO and terminal_width is not None and with_chars:
        full = line_width(columns, base, group_size, show_offset, True)
        if full > terminal_width:
            with_chars = False

    active = ActivePanels.HEX_AND_CHAR if with_chars else ActivePanels.HEX
    return Layout(
        bytes_per_line=columns * COLUMN_BYTES,
        active_panels=active,
        columns=columns,
        width=line_width(columns, base, group_size, show_offset, with_chars),
    )
