#!/usr/bin/env python3
"""
Version information for binview
"""

from importlib.metadata import PackageNotFoundError, version
from typing import Optional

# Static version (fallback)
__version__ = "0.4.0"


def get_installed_version() -> Optional[str]:
    """
    Get the version recorded in the installed distribution metadata

    Returns:
        Installed version if available, None otherwise
    """
    try:
        return version("binview")
    except PackageNotFoundError:
        return None


def get_version() -> str:
    """Get the application version (always the static version)."""
    return __version__


def get_version_info() -> dict:
    """
    Get detailed version information

    Returns:
        Dictionary with version details
    """
    installed_version = get_installed_version()

    return {
        "version": get_version(),
        "installed_version": installed_version,
        "static_version": __version__,
        "source": "metadata" if installed_version else "static",
    }


if __name__ == "__main__":
    print(get_version())
