"""
Parsing of human-readable byte counts and offsets

Supported forms: "64", "4KiB", "2blocks", "0xff", "+16" (relative to the
current position), "-1kb" (from the end of the input).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

DEFAULT_BLOCK_SIZE = 512
HEX_PREFIX = "0x"
I64_MAX = 2**63 - 1

UNIT_MULTIPLIERS = {
    "": 1,
    "kb": 1000,
    "mb": 1000**2,
    "gb": 1000**3,
    "tb": 1000**4,
    "kib": 1 << 10,
    "mib": 1 << 20,
    "gib": 1 << 30,
    "tib": 1 << 40,
}
BLOCK_UNITS = ("block", "blocks")


class ByteOffsetParseError(ValueError):
    """A byte offset or count could not be parsed."""


class ByteOffsetKind(Enum):
    FORWARD_FROM_BEGINNING = "forward_from_beginning"
    FORWARD_FROM_LAST_OFFSET = "forward_from_last_offset"
    BACKWARD_FROM_END = "backward_from_end"


@dataclass(frozen=True)
class ByteOffset:
    value: int
    kind: ByteOffsetKind = ByteOffsetKind.FORWARD_FROM_BEGINNING

    def assume_forward_offset_from_start(self) -> int:
        if self.kind is ByteOffsetKind.BACKWARD_FROM_END:
            raise ByteOffsetParseError(
                "negative offset specified, but only positive offsets (counts) "
                "are accepted in this context"
            )
        return self.value


def process_sign_of(text: str) -> Tuple[str, ByteOffsetKind]:
    """Strip a leading sign and return the offset kind it stands for."""
    if not text:
        raise ByteOffsetParseError("no character data found, did you forget to write it?")
    if text[0] in "+-":
        rest = text[1:]
        if not rest:
            raise ByteOffsetParseError(
                "no digits found after sign, did you forget to write them?"
            )
        if text[0] == "+":
            return rest, ByteOffsetKind.FORWARD_FROM_LAST_OFFSET
        return rest, ByteOffsetKind.BACKWARD_FROM_END
    return text, ByteOffsetKind.FORWARD_FROM_BEGINNING


def try_parse_as_hex_number(text: str):
    """
    Parse "0x..." text.

    Returns:
        The integer value, or None when the text has no hex prefix
    """
    if not text.startswith(HEX_PREFIX):
        return None

    digits = text[len(HEX_PREFIX):]
    if digits[:1] in ("+", "-"):
        if len(digits) == 1:
            raise ByteOffsetParseError(
                "no digits found after sign, did you forget to write them?"
            )
        raise ByteOffsetParseError(
            f"found {digits[0]!r} sign after hex prefix ({HEX_PREFIX!r}); "
            "signs should go before it"
        )
    try:
        value = int(digits, 16)
    except ValueError as e:
        raise ByteOffsetParseError(f"failed to parse integer part: {e}") from e
    if value > I64_MAX:
        raise ByteOffsetParseError("failed to parse integer part: number too large")
    return value


def extract_num_and_unit_from(text: str) -> Tuple[int, str]:
    """
    Split "<digits><unit>" into its number and lowercase unit.

    No normalization is performed: "1024kb" is (1024, "kb").
    """
    if not text:
        raise ByteOffsetParseError("no character data found, did you forget to write it?")

    split = len(text)
    for index, char in enumerate(text):
        if char not in "0123456789":
            split = index
            break
    number, raw_unit = text[:split], text[split:]
    unit = raw_unit.lower()

    if unit not in UNIT_MULTIPLIERS and unit not in BLOCK_UNITS:
        if not number:
            raise ByteOffsetParseError(
                f"{raw_unit!r} is not of the expected form <pos-integer>[<unit>]"
            )
        raise ByteOffsetParseError(f"invalid unit {raw_unit!r}")
    if not number:
        raise ByteOffsetParseError(
            f"{raw_unit!r} is a valid unit, but an integer should come before it"
        )

    value = int(number)
    if value > I64_MAX:
        raise ByteOffsetParseError("failed to parse integer part: number too large")
    return value, unit


def _multiply(value: int, multiplier: int) -> int:
    result = value * multiplier
    if result > I64_MAX:
        raise ByteOffsetParseError(
            "count multiplied by the unit overflowed a signed 64-bit integer; "
            "are you sure it should be that big?"
        )
    return result


def parse_byte_offset(text: str, block_size: int = DEFAULT_BLOCK_SIZE) -> ByteOffset:
    """
    Parse an offset such as "+4KiB", "-0x10" or "3blocks".

    Raises:
        ByteOffsetParseError: Invalid text
    """
    rest, kind = process_sign_of(text)

    hex_value = try_parse_as_hex_number(rest)
    if hex_value is not None:
        return ByteOffset(hex_value, kind)

    value, unit = extract_num_and_unit_from(rest)
    multiplier = block_size if unit in BLOCK_UNITS else UNIT_MULTIPLIERS[unit]
    return ByteOffset(_multiply(value, multiplier), kind)


def parse_byte_count(text: str, block_size: int = DEFAULT_BLOCK_SIZE) -> int:
    """Parse a non-negative byte count (no "-" prefix allowed)."""
    return parse_byte_offset(text, block_size).assume_forward_offset_from_start()


def parse_block_size(text: str) -> int:
    """Parse the size of the block unit; must be positive and cannot use blocks."""
    value = try_parse_as_hex_number(text)
    if value is None:
        number, unit = extract_num_and_unit_from(text)
        if unit in BLOCK_UNITS:
            raise ByteOffsetParseError(
                "can not use 'block(s)' as a unit to specify block size"
            )
        value = _multiply(number, UNIT_MULTIPLIERS[unit])
    if value < 1:
        raise ByteOffsetParseError("block size argument must be positive")
    return value
