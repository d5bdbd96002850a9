"""
Byte source for binview: a file or standard input, positioned at the
requested start offset.
"""

import io
import logging
import sys
from pathlib import Path
from typing import IO, Optional, Union

from .units import ByteOffset, ByteOffsetKind

logger = logging.getLogger(__name__)

DISCARD_CHUNK_SIZE = 64 * 1024


class Input:
    """Readable binary input with best-effort skipping."""

    def __init__(self, stream: IO[bytes], name: str = "<stdin>", owned: bool = False):
        self.stream = stream
        self.name = name
        self._owned = owned

    @classmethod
    def open(cls, path: Optional[Union[str, Path]] = None) -> "Input":
        """
        Open a file, or standard input when path is None or "-".

        Raises:
            FileNotFoundError, PermissionError, IsADirectoryError: From open()
        """
        if path is None or str(path) == "-":
            return cls(sys.stdin.buffer)
        return cls(open(path, "rb"), name=str(path), owned=True)

    def read(self, size: int = -1) -> bytes:
        return self.stream.read(size)

    def _seekable(self) -> bool:
        try:
            return self.stream.seekable()
        except (AttributeError, ValueError):
            return False

    def _discard(self, count: int) -> int:
        """Read and drop count bytes. Returns how many were actually dropped."""
        dropped = 0
        while dropped < count:
            chunk = self.stream.read(min(DISCARD_CHUNK_SIZE, count - dropped))
            if not chunk:
                break
            dropped += len(chunk)
        return dropped

    def skip(self, offset: ByteOffset) -> int:
        """
        Move to the given offset.

        Returns:
            Absolute position of the next byte read

        Raises:
            OSError: The input can not be positioned as requested (e.g. a
                negative offset on a pipe, or beyond the start of a file)
        """
        if self._seekable():
            if offset.kind is ByteOffsetKind.BACKWARD_FROM_END:
                return self.stream.seek(-offset.value, io.SEEK_END)
            return self.stream.seek(offset.value, io.SEEK_CUR)

        if offset.kind is ByteOffsetKind.BACKWARD_FROM_END:
            raise OSError(
                f"{self.name}: only forward skips are supported on pipes and standard input"
            )
        logger.debug("%s is not seekable, discarding %d bytes", self.name, offset.value)
        return self._discard(offset.value)

    def close(self) -> None:
        if self._owned:
            self.stream.close()

    def __enter__(self) -> "Input":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
