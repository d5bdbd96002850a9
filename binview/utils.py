#!/usr/bin/env python3
"""
Utility functions for binview
"""

import io
import os
import shutil
import sys
from pathlib import Path
from typing import Mapping, Optional


def get_binview_dir() -> Path:
    """Get the binview settings directory.

    Returns:
        Path: Absolute, resolved directory path

    Note:
        Uses BINVIEW_DIR when set, ~/.config/binview otherwise.
    """
    return Path(os.getenv("BINVIEW_DIR", "~/.config/binview")).expanduser().resolve()


def find_config_file() -> Optional[Path]:
    """Find config.yml inside the binview directory.

    Returns:
        Config file path if found, None otherwise.
    """
    config_path = get_binview_dir() / "config.yml"
    if config_path.exists():
        return config_path
    return None


def _is_terminal(stream) -> bool:
    try:
        return os.isatty(stream.fileno())
    except (AttributeError, ValueError, io.UnsupportedOperation):
        return False


def stdout_is_terminal() -> bool:
    return _is_terminal(sys.stdout)


def stderr_is_terminal() -> bool:
    return _is_terminal(sys.stderr)


def detect_terminal_width() -> Optional[int]:
    """Columns of the terminal on stdout, None when stdout is not a terminal."""
    if not stdout_is_terminal():
        return None
    return shutil.get_terminal_size().columns


def should_use_color(
    when: str, is_terminal: bool, environ: Optional[Mapping[str, str]] = None
) -> bool:
    """
    Decide whether to emit colors.

    Args:
        when: "always", "auto", "never" or "force"
        is_terminal: Whether the output goes to an interactive terminal
        environ: Environment (defaults to os.environ), checked for NO_COLOR

    Returns:
        True if colors should be used
    """
    if environ is None:
        environ = os.environ
    no_color = "NO_COLOR" in environ

    if when == "force":
        return True
    if when == "never" or no_color:
        return False
    if when == "auto":
        return is_terminal
    return True
