"""
BaseCommand — What every tfsnip command can reach

A command holds the SnippetCLI and reads config, symbols, the reporter
and the snippet stream off it.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..cli import SnippetCLI


class BaseCommand:
    """
    Base class for CLI commands with access to shared resources.

    Config, symbols and the reporter are created once by the CLI and shared.
    """

    def __init__(self, cli: 'SnippetCLI'):
        self._cli = cli

    @property
    def config_manager(self):
        return self._cli.config_manager

    @property
    def config(self):
        """Loaded configuration."""
        return self._cli.config

    @property
    def symbols(self):
        """Symbol set for display (Unicode/ASCII)."""
        return self._cli.symbols

    @property
    def reporter(self):
        """Diagnostics on stderr."""
        return self._cli.reporter

    @property
    def stdout(self):
        return self._cli.stdout
