"""
Squeezing: collapse runs of identical full-width lines into one '*' marker.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .line_builder import Line

SQUEEZE_MARKER = "*"


class SqueezeDecision(Enum):
    """What to emit for one line."""

    PRINT = "print"
    SUPPRESS = "suppress"
    MARKER = "marker"  # suppress the line, emit the marker in its place
    MARKER_THEN_PRINT = "marker_then_print"  # final repeated line

    @property
    def emits_marker(self) -> bool:
        return self in (SqueezeDecision.MARKER, SqueezeDecision.MARKER_THEN_PRINT)

    @property
    def emits_line(self) -> bool:
        return self in (SqueezeDecision.PRINT, SqueezeDecision.MARKER_THEN_PRINT)


@dataclass
class SqueezeState:
    """Raw bytes of the last full-width line seen and whether a run is being suppressed."""

    previous_line_bytes: Optional[bytes] = None
    is_squeezing: bool = False


class SqueezeEngine:
    """State machine deciding, line by line, what is printed."""

    def __init__(self, enabled: bool = True, bytes_per_line: int = 16):
        self.enabled = enabled
        self.bytes_per_line = bytes_per_line
        self._state = SqueezeState()

    @property
    def state(self) -> SqueezeState:
        return SqueezeState(self._state.previous_line_bytes, self._state.is_squeezing)

    def reset(self) -> None:
        self._state = SqueezeState()

    def process(self, line: Line) -> SqueezeDecision:
        """
        Decide what to emit for the next line of the stream.

        Lines must be passed in stream order. The last line of the stream is
        always printed; if it repeats the previous line and no marker was
        emitted for the run yet, the marker comes first.
        """
        if not self.enabled:
            return SqueezeDecision.PRINT

        state = self._state
        data = bytes(line.data)
        full_width = len(data) == self.bytes_per_line
        repeated = (
            full_width
            and state.previous_line_bytes is not None
            and data == state.previous_line_bytes
        )

        if not repeated:
            state.previous_line_bytes = data if full_width else None
            state.is_squeezing = False
            return SqueezeDecision.PRINT

        if line.is_last_line:
            was_squeezing = state.is_squeezing
            state.is_squeezing = False
            if was_squeezing:
                return SqueezeDecision.PRINT
            return SqueezeDecision.MARKER_THEN_PRINT

        if state.is_squeezing:
            return SqueezeDecision.SUPPRESS
        state.is_squeezing = True
        return SqueezeDecision.MARKER
