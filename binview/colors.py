#!/usr/bin/env python3
"""
Color theme for binview output

Colors are plain ANSI foreground codes taken from colorama. A theme can be
adjusted from the config file and from BINVIEW_COLOR_<NAME> environment
variables.
"""

import os
from dataclasses import dataclass, fields, replace
from typing import Dict, List, Mapping, Optional, Tuple

from colorama import Fore

from .categories import ByteCategory

ENV_PREFIX = "BINVIEW_COLOR_"

_BASE_COLORS = ("black", "red", "green", "yellow", "blue", "magenta", "cyan", "white")


def _color_names() -> Dict[str, str]:
    names = {"default": Fore.RESET}
    for color in _BASE_COLORS:
        names[color] = getattr(Fore, color.upper())
        # colorama calls the bright variants LIGHT<COLOR>_EX
        names[f"bright_{color}"] = getattr(Fore, f"LIGHT{color.upper()}_EX")
    return names


COLOR_NAMES: Dict[str, str] = _color_names()


def parse_color(name: str) -> str:
    """
    Convert a color name to its ANSI code.

    Args:
        name: Color name, e.g. "cyan", "bright_black", "bright-black"

    Returns:
        ANSI escape sequence

    Raises:
        ValueError: Unknown color name
    """
    key = str(name).strip().lower().replace("-", "_").replace(" ", "_")
    if key not in COLOR_NAMES:
        raise ValueError(
            f"Unknown color '{name}' (valid: {', '.join(sorted(COLOR_NAMES))})"
        )
    return COLOR_NAMES[key]


@dataclass(frozen=True)
class Theme:
    """ANSI codes per output element. Empty string means uncolored."""

    offset: str = Fore.LIGHTBLACK_EX
    border: str = ""
    null: str = Fore.LIGHTBLACK_EX
    ascii_printable: str = Fore.CYAN
    ascii_whitespace: str = Fore.GREEN
    ascii_other: str = Fore.GREEN
    nonascii: str = Fore.YELLOW

    def for_category(self, category: ByteCategory) -> str:
        return getattr(self, category.value)

    def with_overrides(self, overrides: Mapping[str, str]) -> Tuple["Theme", List[str]]:
        """
        Apply color names on top of this theme.

        Unknown keys or color names are skipped and reported as warnings.

        Returns:
            (new theme, warnings)
        """
        names = {f.name for f in fields(self)}
        changes = {}
        warnings = []
        for key, value in overrides.items():
            if value is None:
                continue
            field_name = key.lower()
            if field_name not in names:
                warnings.append(f"!Unknown theme element '{key}'")
                continue
            try:
                changes[field_name] = parse_color(value)
            except ValueError as e:
                warnings.append(f"!Theme element '{key}': {e}")
        return replace(self, **changes), warnings


def env_overrides(environ: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """Collect BINVIEW_COLOR_<NAME> variables, e.g. BINVIEW_COLOR_OFFSET=blue."""
    if environ is None:
        environ = os.environ
    return {
        key[len(ENV_PREFIX):].lower(): value
        for key, value in environ.items()
        if key.startswith(ENV_PREFIX)
    }


def paint(text: str, color: str) -> str:
    """Wrap text in a color code followed by a foreground reset."""
    if not color:
        return text
    return f"{color}{text}{Fore.RESET}"
