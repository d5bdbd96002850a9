#!/usr/bin/env python3
"""
binview - Main CLI
"""

import io
import logging
import os
import sys
from typing import Optional

import rich_click as click
from colorama import Fore, Style

from .__version__ import get_version_info
from .border import BorderStyle
from .categories import CharacterTable
from .config import ConfigManager
from .display import MessageDisplay
from .input import Input
from .layout import PanelsMode, fit_columns
from .numeric import Base, Endianness
from .printer import Printer, PrinterConfig
from .units import parse_block_size, parse_byte_count, parse_byte_offset
from .utils import (
    detect_terminal_width,
    find_config_file,
    should_use_color,
    stderr_is_terminal,
    stdout_is_terminal,
)

FALLBACK_TERMINAL_WIDTH = 80


def _configure_logging(debug: bool, colored: bool) -> None:
    """Send binview log records to stderr (DEBUG with --debug, WARNING otherwise)."""
    prefix = f"{Fore.YELLOW}Warning:{Style.RESET_ALL}" if colored else "Warning:"
    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            "[%(levelname)s] %(name)s: %(message)s"
            if debug
            else f"{prefix} %(message)s"
        )
    )
    logger = logging.getLogger("binview")
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if debug else logging.WARNING)
    logger.propagate = False


def _silence_stdout() -> None:
    """Point stdout at devnull so the final flush at exit can not fail again."""
    try:
        fd = sys.stdout.fileno()
    except (AttributeError, ValueError, io.UnsupportedOperation):
        return
    devnull = os.open(os.devnull, os.O_WRONLY)
    os.dup2(devnull, fd)


def _load_settings(config_path: Optional[str]) -> ConfigManager:
    """Load the settings file (--config, else BINVIEW_DIR/config.yml, else defaults)."""
    path = config_path or find_config_file()
    config_manager = ConfigManager(path)
    config_manager.load_config()

    if not MessageDisplay.display_validation_results(config_manager.validate_config()):
        sys.exit(1)
    return config_manager


def _single_length(length, bytes_, count) -> Optional[str]:
    given = [value for value in (length, bytes_, count) if value is not None]
    if len(given) > 1:
        raise click.UsageError("--length, --bytes and -l are aliases; use only one of them")
    return given[0] if given else None


def _show_version() -> None:
    version_info = get_version_info()
    click.echo(f"{Fore.CYAN}binview {Fore.GREEN}{version_info['version']}{Style.RESET_ALL}")
    if version_info["installed_version"]:
        click.echo(f"Installed version: {version_info['installed_version']}")


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("file", required=False, type=click.Path(dir_okay=False, allow_dash=True))
@click.option(
    "-n",
    "--length",
    metavar="N",
    help="Only read N bytes from the input. N may carry a unit (kB, MiB, block, ..) "
    "or be a hex number. Examples: --length=64, --length=4KiB, --length=0xff",
)
@click.option("-c", "--bytes", "bytes_", metavar="N", help="An alias for -n/--length")
@click.option("-l", "count", metavar="N", hidden=True, help="Yet another alias for -n/--length")
@click.option(
    "-s",
    "--skip",
    metavar="N",
    help="Skip the first N bytes of the input (see --length for units). "
    "A negative value seeks from the end of the file.",
)
@click.option(
    "--block-size",
    metavar="SIZE",
    help="Size of the 'block' unit (default 512). Examples: --block-size=1024, --block-size=4kB",
)
@click.option(
    "-v",
    "--no-squeezing",
    is_flag=True,
    help="Display all input data instead of replacing repeated lines with a single '*'",
)
@click.option(
    "--color",
    type=click.Choice(["always", "auto", "never", "force"]),
    help="When to use colors. 'auto' colors only an interactive terminal, "
    "'force' overrides NO_COLOR.",
)
@click.option(
    "--border",
    type=click.Choice([style.value for style in BorderStyle]),
    help="Draw the border with Unicode characters, ASCII characters or none at all",
)
@click.option(
    "-p",
    "--plain",
    is_flag=True,
    help="Display output with --no-characters, --no-position, --border=none and --color=never",
)
@click.option(
    "-C",
    "--characters/--no-characters",
    default=None,
    help="Show or hide the character panel on the right",
)
@click.option(
    "--character-table",
    type=click.Choice([table.value for table in CharacterTable]),
    help="How bytes are mapped to characters: 'default' ('⋄' NULL, '_' whitespace, "
    "'•' control, '×' non-ASCII), 'ascii' ('.' for non-printable) or 'codepage-437'",
)
@click.option("-P", "--no-position", is_flag=True, help="Hide the offset panel on the left")
@click.option(
    "-o",
    "--display-offset",
    metavar="N",
    help="Add N bytes to the displayed file position (see --length for units)",
)
@click.option(
    "--panels",
    type=click.Choice(["auto", "1", "2"]),
    help="'1' hex panel only, '2' hex and character panels, 'auto' drops the "
    "character panel when the terminal is too narrow",
)
@click.option(
    "--columns",
    metavar="N|auto",
    help="Number of 8-byte columns per line (default 2); 'auto' fills the terminal width",
)
@click.option(
    "-g",
    "--group-size",
    "--groupsize",
    type=click.Choice(["1", "2", "4", "8"]),
    help="Number of bytes shown together as one token",
)
@click.option(
    "--endianness",
    type=click.Choice([e.value for e in Endianness]),
    help="Byte order inside a group: 'little' keeps input order, 'big' reverses each group",
)
@click.option("-e", "little_endian", is_flag=True, hidden=True, help="Alias for --endianness=little")
@click.option(
    "-b",
    "--base",
    metavar="B",
    help="Base of the byte values: binary, octal, decimal or hexadecimal (2, 8, 10, 16)",
)
@click.option(
    "--terminal-width",
    type=click.IntRange(min=1),
    help="Terminal columns to lay the output out for",
)
@click.option(
    "--config",
    "config_path",
    default=None,
    help="Settings file (default: $BINVIEW_DIR/config.yml)",
)
@click.option("--debug", is_flag=True, help="Log debug information to stderr")
@click.option("--version", is_flag=True, help="Show version information")
def cli(
    file,
    length,
    bytes_,
    count,
    skip,
    block_size,
    no_squeezing,
    color,
    border,
    plain,
    characters,
    character_table,
    no_position,
    display_offset,
    panels,
    columns,
    group_size,
    endianness,
    little_endian,
    base,
    terminal_width,
    config_path,
    debug,
    version,
):
    """Colored hex dump of FILE, or of standard input when FILE is missing or '-'.

    \b
    Examples:
      binview /bin/ls -n 256
      binview --skip=-1KiB --group-size=4 firmware.bin
      cat data.bin | binview --plain
    """
    _configure_logging(
        debug,
        should_use_color("never" if plain else (color or "auto"), stderr_is_terminal()),
    )

    if version:
        _show_version()
        return

    try:
        settings = _load_settings(config_path)
        display = settings.config.display

        block = parse_block_size(block_size or str(display.block_size))
        length_text = _single_length(length, bytes_, count)
        byte_count = parse_byte_count(length_text, block) if length_text else None
        bias = parse_byte_count(display_offset, block) if display_offset else 0

        show_color = should_use_color(
            color or ("never" if plain else display.color), stdout_is_terminal()
        )
        border_style = BorderStyle(border or ("none" if plain else display.border))
        show_characters = not plain and (
            characters if characters is not None else display.characters
        )
        show_offset = not plain and not no_position and display.position

        numeric_base = Base.parse(base or display.base)
        group = int(group_size or display.group_size)
        byte_order = Endianness(
            "little" if little_endian else (endianness or display.endianness)
        )
        panels_mode = PanelsMode.parse(panels or display.panels)
        width = terminal_width or detect_terminal_width()

        columns_value = columns or str(display.columns)
        if columns_value == "auto":
            column_count = fit_columns(
                width or FALLBACK_TERMINAL_WIDTH,
                numeric_base,
                group,
                show_offset,
                show_characters and panels_mode is not PanelsMode.ONE,
            )
        else:
            try:
                column_count = int(columns_value)
            except ValueError:
                raise click.BadParameter(
                    f"{columns_value!r} is not a number or 'auto'", param_hint="--columns"
                )

        theme, theme_warnings = settings.build_theme()
        if show_color:
            MessageDisplay.show_warnings(theme_warnings)

        with Input.open(file) as source:
            position = source.skip(parse_byte_offset(skip, block)) if skip else 0

            printer = Printer(
                PrinterConfig(
                    group_size=group,
                    panels=panels_mode,
                    base=numeric_base,
                    endianness=byte_order,
                    border_style=border_style,
                    show_color=show_color,
                    show_characters=show_characters,
                    show_offset=show_offset,
                    squeeze_enabled=not no_squeezing and display.squeeze,
                    display_offset_bias=bias,
                    skip=position,
                    length=byte_count,
                    columns=column_count,
                    character_table=CharacterTable(
                        character_table or display.character_table
                    ),
                    theme=theme,
                    terminal_width=width,
                )
            )
            printer.print_all(source, sys.stdout)
            sys.stdout.flush()

    except click.ClickException:
        raise
    except BrokenPipeError:
        # Output closed early (e.g. piped into head): stop quietly
        _silence_stdout()
        sys.exit(0)
    except KeyboardInterrupt:
        sys.exit(130)
    except Exception as e:
        MessageDisplay.show_error(str(e))
        sys.exit(1)


def main():
    cli()


if __name__ == "__main__":
    main()
