"""
binview - colored hex dumps for the terminal
"""

from .__version__ import __version__
from .border import BorderStyle
from .categories import ByteCategory, CharacterTable, classify, glyph
from .colors import Theme
from .errors import BinviewError, ConfigInvariantViolation, ReadError
from .layout import ActivePanels, Layout, PanelsMode, resolve
from .line_builder import Line, LineBuilder
from .numeric import Base, Endianness, format_group
from .printer import Printer, PrinterConfig
from .squeezer import SQUEEZE_MARKER, SqueezeDecision, SqueezeEngine, SqueezeState

__all__ = [
    "__version__",
    "ActivePanels",
    "Base",
    "BinviewError",
    "BorderStyle",
    "ByteCategory",
    "CharacterTable",
    "ConfigInvariantViolation",
    "Endianness",
    "Layout",
    "Line",
    "LineBuilder",
    "PanelsMode",
    "Printer",
    "PrinterConfig",
    "ReadError",
    "SQUEEZE_MARKER",
    "SqueezeDecision",
    "SqueezeEngine",
    "SqueezeState",
    "Theme",
    "classify",
    "format_group",
    "glyph",
    "resolve",
]
