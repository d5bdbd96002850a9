"""
Numeric formatting of byte groups (binary, octal, decimal, hexadecimal).
"""

from enum import Enum
from typing import Sequence


class Base(Enum):
    """Base used for the numeric byte tokens."""

    BINARY = 2
    OCTAL = 8
    DECIMAL = 10
    HEXADECIMAL = 16

    @property
    def digits(self) -> int:
        """Digits needed for one byte."""
        return _DIGITS[self]

    @classmethod
    def parse(cls, text: str) -> "Base":
        """
        Parse a base given as number or name.

        Accepts "2", "b", "bin", "binary" (and the same forms for octal,
        decimal and hexadecimal).

        Raises:
            ValueError: If the text names no known base
        """
        value = str(text).strip().lower()
        for base, names in _NAMES.items():
            if value in names:
                return base
        raise ValueError(
            f"The base provided is not valid: {text!r}. "
            'Valid bases are 2, 8, 10, 16 or "b", "o", "d", "x".'
        )


_DIGITS = {
    Base.BINARY: 8,
    Base.OCTAL: 3,
    Base.DECIMAL: 3,
    Base.HEXADECIMAL: 2,
}

_FORMATS = {
    Base.BINARY: "08b",
    Base.OCTAL: "03o",
    Base.DECIMAL: "03d",
    Base.HEXADECIMAL: "02x",
}

_NAMES = {
    Base.BINARY: ("2", "b", "bin", "binary"),
    Base.OCTAL: ("8", "o", "oct", "octal"),
    Base.DECIMAL: ("10", "d", "dec", "decimal"),
    Base.HEXADECIMAL: ("16", "x", "hex", "hexadecimal"),
}


class Endianness(Enum):
    """Byte order inside a group."""

    LITTLE = "little"  # stream order
    BIG = "big"  # reversed inside each group


def format_byte(byte: int, base: Base = Base.HEXADECIMAL) -> str:
    """Format one byte zero-padded to the digit count of the base."""
    return format(byte, _FORMATS[base])


def format_group(
    group: Sequence[int],
    base: Base = Base.HEXADECIMAL,
    endianness: Endianness = Endianness.LITTLE,
    group_size: int = 0,
) -> str:
    """
    Format a group of bytes as one fixed-width token.

    Bytes are formatted one by one and concatenated. LITTLE keeps the
    stream order, BIG reverses the bytes of the group first.

    Args:
        group: 1..8 raw bytes
        base: Numeric base
        endianness: Order of the bytes inside the group
        group_size: Full group size; a shorter group is padded with spaces
            to this width (only happens on the last, partial line)

    Returns:
        Token string of `len(group) * base.digits` characters (or the padded
        width of a full group)

    Raises:
        ValueError: If the group is empty
    """
    if not group:
        raise ValueError("Cannot format an empty byte group")

    ordered = reversed(group) if endianness is Endianness.BIG else group
    token = "".join(format_byte(byte, base) for byte in ordered)

    if group_size > len(group):
        token = token.ljust(group_size * base.digits)
    return token
