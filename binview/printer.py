#!/usr/bin/env python3
"""
binview - Printer

Drives a whole dump: reads the byte source in row-sized windows, runs every
window through the squeezer and renders the rows that survive.
"""

import io
import logging
import sys
from dataclasses import dataclass, field
from typing import IO, Iterator, List, Optional, Union

from .border import BorderStyle
from .categories import CharacterTable
from .colors import Theme
from .errors import ConfigInvariantViolation, ReadError
from .layout import DEFAULT_COLUMNS, Layout, PanelsMode, check_group_size, resolve
from .line_builder import Line, LineBuilder
from .numeric import Base, Endianness
from .squeezer import SQUEEZE_MARKER, SqueezeEngine

logger = logging.getLogger(__name__)

NO_CONTENT_WARNING = "!No content to print"


@dataclass(frozen=True)
class PrinterConfig:
    """Fully resolved settings of one dump. Immutable while the dump runs."""

    group_size: int = 1
    panels: PanelsMode = PanelsMode.AUTO
    base: Base = Base.HEXADECIMAL
    endianness: Endianness = Endianness.LITTLE
    border_style: BorderStyle = BorderStyle.UNICODE
    show_color: bool = False
    show_characters: bool = True
    show_offset: bool = True
    squeeze_enabled: bool = True
    display_offset_bias: int = 0
    skip: int = 0  # position of the first byte, already applied to the source
    length: Optional[int] = None  # None = until end of input
    columns: int = DEFAULT_COLUMNS
    character_table: CharacterTable = CharacterTable.DEFAULT
    theme: Theme = field(default_factory=Theme)
    terminal_width: Optional[int] = None  # None when stdout is not a terminal

    def __post_init__(self):
        check_group_size(self.group_size)
        if self.columns < 1:
            raise ConfigInvariantViolation(
                f"Column count must be positive, got {self.columns}"
            )
        if self.skip < 0:
            raise ConfigInvariantViolation(f"Negative start offset: {self.skip}")
        if self.length is not None and self.length < 0:
            raise ConfigInvariantViolation(f"Negative length: {self.length}")
        if self.skip + self.display_offset_bias < 0:
            raise ConfigInvariantViolation(
                f"Display offset {self.display_offset_bias} moves the first "
                f"position ({self.skip}) below zero"
            )


ByteSource = Union[IO[bytes], bytes, bytearray]


class Printer:
    """Produces the formatted lines of a hexdump."""

    def __init__(self, config: PrinterConfig):
        self.config = config
        self.layout: Layout = resolve(
            config.panels,
            config.group_size,
            config.terminal_width,
            config.show_characters,
            base=config.base,
            show_offset=config.show_offset,
            columns=config.columns,
        )
        self.builder = LineBuilder(config, self.layout)
        self.squeezer = SqueezeEngine(config.squeeze_enabled, self.layout.bytes_per_line)
        self.warnings: List[str] = []
        self.bytes_read = 0

        logger.debug(
            "Layout: %d bytes per line, panels %s, width %d",
            self.layout.bytes_per_line,
            self.layout.active_panels.value,
            self.layout.width,
        )

    @property
    def bytes_per_line(self) -> int:
        return self.layout.bytes_per_line

    def _fill(self, source: IO[bytes], size: int) -> bytes:
        """Read up to size bytes, retrying short reads until EOF."""
        chunks = []
        missing = size
        while missing > 0:
            try:
                chunk = source.read(missing)
            except ReadError:
                raise
            except OSError as e:
                raise ReadError(f"Failed to read input: {e}") from e
            if not chunk:
                break
            chunks.append(chunk)
            missing -= len(chunk)
        return b"".join(chunks)

    def _windows(self, source: IO[bytes]) -> Iterator[bytes]:
        remaining = self.config.length
        while True:
            size = self.bytes_per_line
            if remaining is not None:
                size = min(size, remaining)
            if size == 0:
                return

            window = self._fill(source, size)
            if not window:
                return
            if remaining is not None:
                remaining -= len(window)
            yield window

            if len(window) < size:
                return

    def lines(self, source: ByteSource) -> Iterator[Line]:
        """
        Split the source into Lines.

        Reads one window ahead so the final line is flagged as such.
        """
        if isinstance(source, (bytes, bytearray)):
            source = io.BytesIO(source)

        offset = self.config.skip
        pending = None
        for window in self._windows(source):
            if pending is not None:
                yield Line(offset, pending, is_last_line=False)
                offset += len(pending)
            pending = window

        if pending is not None:
            yield Line(offset, pending, is_last_line=True)

    def run(self, source: ByteSource) -> Iterator[str]:
        """
        Yield every output line of the dump, without line terminators.

        Order: top border, rows and squeeze markers, bottom border. Borders
        appear only when there is content.

        Raises:
            ReadError: The source failed while reading
        """
        self.squeezer.reset()
        self.warnings = []
        self.bytes_read = 0
        header_done = False

        for line in self.lines(source):
            self.bytes_read += len(line.data)
            decision = self.squeezer.process(line)

            if not header_done:
                header_done = True
                header = self.builder.header()
                if header is not None:
                    yield header

            if decision.emits_marker:
                yield SQUEEZE_MARKER
            if decision.emits_line:
                yield self.builder.build(line)

        if not header_done:
            self.warnings.append(NO_CONTENT_WARNING)
            logger.warning("No content to print")
            return

        footer = self.builder.footer()
        if footer is not None:
            yield footer

    def print_all(self, source: ByteSource, out: Optional[IO[str]] = None) -> int:
        """Write the dump to a text stream. Returns the number of lines written."""
        if out is None:
            out = sys.stdout

        count = 0
        for text in self.run(source):
            out.write(text + "\n")
            count += 1
        return count
