"""
Helpers presenting warnings and errors on stderr

Messages carry a one-character prefix: '✗' error, '!' warning, 'i' info.
"""

from typing import List, Tuple

import click
from colorama import Fore, Style


class MessageDisplay:
    """Uniform display of prefixed messages"""

    ERROR_PREFIX = "✗"
    WARNING_PREFIX = "!"
    INFO_PREFIX = "i"

    @classmethod
    def categorize(cls, messages: List[str]) -> Tuple[List[str], List[str]]:
        """Split messages into (warnings and info, errors)"""
        warnings_and_info = [
            m for m in messages if m.startswith((cls.WARNING_PREFIX, cls.INFO_PREFIX))
        ]
        errors = [m for m in messages if m.startswith(cls.ERROR_PREFIX)]
        return warnings_and_info, errors

    @classmethod
    def strip_prefix(cls, message: str) -> str:
        if message[:1] in (cls.ERROR_PREFIX, cls.WARNING_PREFIX, cls.INFO_PREFIX):
            return message[1:]
        return message

    @classmethod
    def show_warnings(cls, messages: List[str]) -> None:
        for message in messages:
            click.echo(
                f"{Fore.YELLOW}Warning:{Style.RESET_ALL} {cls.strip_prefix(message)}",
                err=True,
            )

    @classmethod
    def show_error(cls, message: str) -> None:
        click.echo(f"{Fore.RED}Error: {cls.strip_prefix(message)}{Style.RESET_ALL}", err=True)

    @classmethod
    def display_validation_results(cls, messages: List[str]) -> bool:
        """
        Show config validation results.

        Returns:
            bool: True when there are no errors
        """
        warnings_and_info, errors = cls.categorize(messages)
        cls.show_warnings([m for m in warnings_and_info if m.startswith(cls.WARNING_PREFIX)])

        if errors:
            click.echo(f"{Fore.RED}Configuration errors:{Style.RESET_ALL}", err=True)
            for error in errors:
                click.echo(
                    f"  {Fore.RED}{cls.ERROR_PREFIX}{Style.RESET_ALL} {cls.strip_prefix(error)}",
                    err=True,
                )
            return False
        return True
