"""
Byte classification and character panel glyphs.

Every byte value belongs to exactly one ByteCategory. The category decides
the color of both the numeric token and the glyph shown in the character
panel.
"""

from enum import Enum
from typing import Dict, Tuple


class ByteCategory(Enum):
    """Category of a single byte value."""

    NULL = "null"
    ASCII_PRINTABLE = "ascii_printable"
    ASCII_WHITESPACE = "ascii_whitespace"
    ASCII_OTHER = "ascii_other"  # control characters except whitespace and NULL
    NON_ASCII = "nonascii"


# space, \t, \n, \r, \v, \f
WHITESPACE_BYTES = frozenset((0x20, 0x09, 0x0A, 0x0D, 0x0B, 0x0C))


def _categorize(byte: int) -> ByteCategory:
    if byte == 0x00:
        return ByteCategory.NULL
    if byte in WHITESPACE_BYTES:
        return ByteCategory.ASCII_WHITESPACE
    if byte < 0x20 or byte == 0x7F:
        return ByteCategory.ASCII_OTHER
    if byte < 0x7F:
        return ByteCategory.ASCII_PRINTABLE
    return ByteCategory.NON_ASCII


_CATEGORY_TABLE: Tuple[ByteCategory, ...] = tuple(_categorize(b) for b in range(256))


def classify(byte: int) -> ByteCategory:
    """
    Return the category of a byte value.

    Args:
        byte: Value in range 0..255

    Returns:
        ByteCategory of the value

    Raises:
        ValueError: If the value is not a byte
    """
    if not 0 <= byte <= 0xFF:
        raise ValueError(f"Not a byte value: {byte}")
    return _CATEGORY_TABLE[byte]


class CharacterTable(Enum):
    """How bytes are mapped to glyphs in the character panel."""

    DEFAULT = "default"
    ASCII = "ascii"
    CODEPAGE_437 = "codepage-437"


NULL_GLYPH = "⋄"

_PRINTABLE_ASCII = "".join(chr(b) for b in range(0x20, 0x7F))

# Graphic variant of code page 437, 0x01-0x1F and 0x7F included.
_CP437 = (
    NULL_GLYPH
    + "☺☻♥♦♣♠•◘○◙♂♀♪♫☼"
    + "►◄↕‼¶§▬↨↑↓→←∟↔▲▼"
    + _PRINTABLE_ASCII
    + "⌂"
    + "ÇüéâäàåçêëèïîìÄÅ"
    + "ÉæÆôöòûùÿÖÜ¢£¥₧ƒ"
    + "áíóúñÑªº¿⌐¬½¼¡«»"
    + "░▒▓│┤╡╢╖╕╣║╗╝╜╛┐"
    + "└┴┬├─┼╞╟╚╔╩╦╠═╬╧"
    + "╨╤╥╙╘╒╓╫╪┘┌█▄▌▐▀"
    + "αßΓπΣσµτΦΘΩδ∞φε∩"
    + "≡±≥≤⌠⌡÷≈°∙·√ⁿ²■ﬀ"
)


def _default_glyph(byte: int) -> str:
    category = _CATEGORY_TABLE[byte]
    if category is ByteCategory.NULL:
        return NULL_GLYPH
    if category is ByteCategory.ASCII_PRINTABLE or byte == 0x20:
        return chr(byte)
    if category is ByteCategory.ASCII_WHITESPACE:
        return "_"
    if category is ByteCategory.ASCII_OTHER:
        return "•"
    return "×"


def _ascii_glyph(byte: int) -> str:
    if _CATEGORY_TABLE[byte] is ByteCategory.ASCII_PRINTABLE or byte == 0x20:
        return chr(byte)
    return "."


_GLYPH_TABLES: Dict[CharacterTable, Tuple[str, ...]] = {
    CharacterTable.DEFAULT: tuple(_default_glyph(b) for b in range(256)),
    CharacterTable.ASCII: tuple(_ascii_glyph(b) for b in range(256)),
    CharacterTable.CODEPAGE_437: tuple(_CP437),
}


def glyph(byte: int, table: CharacterTable = CharacterTable.DEFAULT) -> str:
    """Single-column glyph for a byte in the given character table."""
    return _GLYPH_TABLES[table][byte]
