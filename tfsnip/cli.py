"""
CLI — Command interface

Generates editor snippets for Terraform resources from the provider
source code. Snippets go to stdout (or --output); diagnostics to stderr.

Exit codes:
  0  success
  1  fatal error (parse, structure, template, config)
  2  usage error (argparse)
"""

import argparse
import os
import sys
from pathlib import Path
from typing import List, Optional, TextIO

from .config import Config, ConfigManager
from .core.errors import TfsnipError
from .presentation.report import Reporter
from .presentation.symbols import SymbolSet, get_symbols
from .commands.generate_cmd import GenerateCommand
from .commands.inspect_cmd import InspectCommand
from .commands.config_cmd import ConfigCommand
from . import __version__


class SnippetCLI:
    """Holds the resources shared by every command."""

    def __init__(
        self,
        project_dir: Path,
        verbose: bool = False,
        symbols: Optional[str] = None,
        stdout: Optional[TextIO] = None,
    ):
        self.project_dir = Path(project_dir)
        self.config_manager = ConfigManager(self.project_dir)
        self.verbose = verbose
        self._symbols_preference = symbols
        self._stdout = stdout
        self._symbols: Optional[SymbolSet] = None
        self._reporter: Optional[Reporter] = None

        self._generate_cmd = GenerateCommand(self)
        self._inspect_cmd = InspectCommand(self)
        self._config_cmd = ConfigCommand(self)

    @property
    def config(self) -> Config:
        """Configuration, loaded on first use (may raise ConfigError)."""
        return self.config_manager.load()

    @property
    def symbols(self) -> SymbolSet:
        if self._symbols is None:
            preference = self._symbols_preference
            if preference is None:
                try:
                    preference = self.config.output.symbols
                except TfsnipError:
                    preference = "auto"
            self._symbols = get_symbols(preference)
        return self._symbols

    @property
    def reporter(self) -> Reporter:
        if self._reporter is None:
            self._reporter = Reporter(self.symbols, verbose=self.verbose)
        return self._reporter

    @property
    def stdout(self) -> TextIO:
        return self._stdout or sys.stdout


def build_parser() -> argparse.ArgumentParser:
    """Main parser with every registered command."""
    parser = argparse.ArgumentParser(
        prog="tfsnip",
        description="tfsnip -- Editor snippets from Terraform provider sources",
    )

    parser.add_argument(
        '--project', '-p',
        default=os.environ.get("TFSNIP_PROJECT_PATH", "."),
        help='Directory holding .tfsnip/config.yaml (default: TFSNIP_PROJECT_PATH or current)'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Report progress and every extracted resource on stderr'
    )
    parser.add_argument(
        '--ascii',
        action='store_const', const='ascii', dest='symbols', default=None,
        help='Use ASCII symbols in diagnostics'
    )
    parser.add_argument(
        '--version', '-V',
        action='version',
        version=f'tfsnip {__version__}'
    )

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # Register all commands from command modules (self-registration pattern)
    from .commands import register_all
    register_all(subparsers)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for tfsnip CLI.

    Returns:
        Process exit code
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    cli = SnippetCLI(Path(args.project), verbose=args.verbose, symbols=args.symbols)

    from .commands import dispatch
    try:
        return dispatch(args.command, cli, args)
    except TfsnipError as e:
        cli.reporter.fail(str(e))
        return 1
    except KeyError as e:
        cli.reporter.fail(str(e))
        parser.print_help()
        return 1


if __name__ == '__main__':
    sys.exit(main())
