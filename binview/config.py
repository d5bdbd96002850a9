#!/usr/bin/env python3
"""
binview - settings file management

Optional YAML file with display defaults and theme colors:

    config:
      display:
        border: ascii
        group_size: 2
      theme:
        offset: bright_blue
"""

import logging
import os
import re
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Set, Tuple, Union

import yaml

from .border import BorderStyle
from .categories import CharacterTable
from .colors import Theme, env_overrides
from .layout import GROUP_SIZES
from .numeric import Base, Endianness
from .units import ByteOffsetParseError, parse_block_size

logger = logging.getLogger(__name__)


# --- Settings Key Definitions ---
# Each key defines: type, default, description, and optional choices
SETTINGS_KEYS: Dict[str, Dict[str, Any]] = {
    "display.border": {
        "type": "enum",
        "default": "unicode",
        "description": "Border drawn around the panels",
        "choices": [style.value for style in BorderStyle],
        "path": ["config", "display", "border"],
    },
    "display.color": {
        "type": "enum",
        "default": "always",
        "description": "When to use colors (NO_COLOR is honoured except for 'force')",
        "choices": ["always", "auto", "never", "force"],
        "path": ["config", "display", "color"],
    },
    "display.squeeze": {
        "type": "boolean",
        "default": True,
        "description": "Replace repeated lines with a single '*'",
        "path": ["config", "display", "squeeze"],
    },
    "display.characters": {
        "type": "boolean",
        "default": True,
        "description": "Show the character panel",
        "path": ["config", "display", "characters"],
    },
    "display.position": {
        "type": "boolean",
        "default": True,
        "description": "Show the offset panel",
        "path": ["config", "display", "position"],
    },
    "display.character_table": {
        "type": "enum",
        "default": "default",
        "description": "How bytes are mapped to characters",
        "choices": [table.value for table in CharacterTable],
        "path": ["config", "display", "character_table"],
    },
    "display.group_size": {
        "type": "enum",
        "default": 1,
        "description": "Number of bytes grouped into one token",
        "choices": list(GROUP_SIZES),
        "path": ["config", "display", "group_size"],
    },
    "display.base": {
        "type": "string",
        "default": "hexadecimal",
        "description": "Base of the byte tokens (binary, octal, decimal, hexadecimal)",
        "path": ["config", "display", "base"],
    },
    "display.endianness": {
        "type": "enum",
        "default": "little",
        "description": "Byte order inside a group (big reverses each group)",
        "choices": [e.value for e in Endianness],
        "path": ["config", "display", "endianness"],
    },
    "display.panels": {
        "type": "enum",
        "default": "auto",
        "description": "Panels to show: auto, 1 (hex only) or 2 (hex and characters)",
        "choices": ["auto", 1, 2],
        "path": ["config", "display", "panels"],
    },
    "display.columns": {
        "type": "number",
        "default": 2,
        "description": "Number of 8-byte columns per line, or 'auto' to fill the terminal",
        "path": ["config", "display", "columns"],
    },
    "display.block_size": {
        "type": "string",
        "default": "512",
        "description": "Size of the 'block' unit",
        "path": ["config", "display", "block_size"],
    },
}

THEME_ELEMENTS = [f.name for f in fields(Theme)]


def expand_env_vars(value: Any, missing_vars: Set[str] = None) -> Any:
    """Expand ${VAR} and ${VAR:-default} in strings, lists and dicts."""
    if missing_vars is None:
        missing_vars = set()

    if isinstance(value, str):

        def replace_env_var(match):
            var_expr = match.group(1)
            if ":-" in var_expr:
                var_name, default_value = var_expr.split(":-", 1)
                env_value = os.getenv(var_name)
                if env_value is None:
                    missing_vars.add(var_name)
                    return default_value
                return env_value

            env_value = os.getenv(var_expr)
            if env_value is None:
                missing_vars.add(var_expr)
                return f"${{{var_expr}}}"  # keep undefined variables as written
            return env_value

        return re.sub(r"\$\{([^}]+)\}", replace_env_var, value)

    elif isinstance(value, dict):
        return {k: expand_env_vars(v, missing_vars) for k, v in value.items()}

    elif isinstance(value, list):
        return [expand_env_vars(item, missing_vars) for item in value]

    return value


def _default(key: str) -> Any:
    return SETTINGS_KEYS[key]["default"]


@dataclass
class DisplayConfig:
    """Display defaults"""

    border: str = _default("display.border")
    color: str = _default("display.color")
    squeeze: bool = _default("display.squeeze")
    characters: bool = _default("display.characters")
    position: bool = _default("display.position")
    character_table: str = _default("display.character_table")
    group_size: int = _default("display.group_size")
    base: str = _default("display.base")
    endianness: str = _default("display.endianness")
    panels: Union[str, int] = _default("display.panels")
    columns: Union[str, int] = _default("display.columns")
    block_size: str = _default("display.block_size")


@dataclass
class Config:
    """binview settings"""

    display: DisplayConfig = field(default_factory=DisplayConfig)
    theme: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "Config":
        """Create a Config from the parsed YAML document."""
        config_data = (data or {}).get("config") or {}

        display_data = config_data.get("display") or {}
        known = {f.name for f in fields(DisplayConfig)}
        display = DisplayConfig(
            **{key: value for key, value in display_data.items() if key in known}
        )

        theme_data = config_data.get("theme") or {}
        theme = {str(key): str(value) for key, value in theme_data.items()}

        return cls(display=display, theme=theme)


class ConfigManager:
    """Loads and validates the settings file"""

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        self.config_path = Path(config_path) if config_path else None
        self._config = None
        self._raw: Dict[str, Any] = {}
        self._missing_env_vars: Set[str] = set()

    def load_config(self) -> Config:
        """Load the settings file. Without a path the defaults are used."""
        if self.config_path is None:
            self._raw = {}
            self._config = Config()
            return self._config

        if not self.config_path.exists():
            raise FileNotFoundError(f"Config file not found: {self.config_path}")

        with open(self.config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

        self._missing_env_vars.clear()
        self._raw = expand_env_vars(data or {}, self._missing_env_vars)
        self._config = Config.from_dict(self._raw)
        logger.debug("Loaded settings from %s", self.config_path)
        return self._config

    @property
    def config(self) -> Config:
        """Settings object (loaded lazily)"""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    @property
    def missing_env_vars(self) -> Set[str]:
        if self._config is None:
            self.load_config()
        return self._missing_env_vars.copy()

    def validate_config(self) -> List[str]:
        """Check the settings. Messages start with '✗' (error) or '!' (warning)."""
        errors = []
        warnings = []

        for var in sorted(self.missing_env_vars):
            warnings.append(f"!Environment variable '{var}' is not defined")

        display_data = ((self._raw.get("config") or {}).get("display")) or {}
        known = {f.name for f in fields(DisplayConfig)}
        for key in display_data:
            if key not in known:
                warnings.append(f"!Unknown display setting '{key}'")

        display = self.config.display
        for key, spec in SETTINGS_KEYS.items():
            value = getattr(display, key.split(".", 1)[1])
            choices = spec.get("choices")
            if choices is not None and value not in choices:
                errors.append(
                    f"✗{key}: invalid value {value!r} (choices: {', '.join(map(str, choices))})"
                )
            elif spec["type"] == "boolean" and not isinstance(value, bool):
                errors.append(f"✗{key}: must be true or false, got {value!r}")

        try:
            Base.parse(display.base)
        except ValueError as e:
            errors.append(f"✗display.base: {e}")

        columns = display.columns
        if columns != "auto" and (
            isinstance(columns, bool) or not isinstance(columns, int) or columns < 1
        ):
            errors.append(
                f"✗display.columns: must be a positive integer or 'auto', got {columns!r}"
            )

        try:
            parse_block_size(str(display.block_size))
        except ByteOffsetParseError as e:
            errors.append(f"✗display.block_size: {e}")

        for key in self.config.theme:
            if key not in THEME_ELEMENTS:
                warnings.append(
                    f"!Unknown theme element '{key}' (valid: {', '.join(THEME_ELEMENTS)})"
                )

        return warnings + errors

    def get_validation_errors(self) -> List[str]:
        """Errors only (warnings excluded)"""
        return [result for result in self.validate_config() if result.startswith("✗")]

    def build_theme(self, environ=None) -> Tuple[Theme, List[str]]:
        """
        Default theme with the file's theme section and BINVIEW_COLOR_* applied.

        Returns:
            (theme, warnings)
        """
        theme, warnings = Theme().with_overrides(self.config.theme)
        theme, env_warnings = theme.with_overrides(env_overrides(environ))
        return theme, warnings + env_warnings
