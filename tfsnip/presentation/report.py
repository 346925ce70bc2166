"""
Reporter — Operator-facing diagnostics

Snippets own stdout; everything the operator should read about the run
(skipped fields, fatal errors, progress in verbose mode) goes to stderr.
"""

import sys
from typing import Optional, TextIO

from ..core.schema import FieldOutcome
from .symbols import SymbolSet, get_symbols, safe_print


class Reporter:
    """
    Prints warnings, failures and verbose progress.

    Counts warnings so commands can summarize a run.
    """

    def __init__(
        self,
        symbols: Optional[SymbolSet] = None,
        verbose: bool = False,
        stream: Optional[TextIO] = None,
    ):
        self.symbols = symbols or get_symbols()
        self.verbose = verbose
        self._stream = stream
        self.warnings = 0

    @property
    def stream(self) -> TextIO:
        # Resolved late so pytest's capsys sees the output
        return self._stream or sys.stderr

    def info(self, message: str) -> None:
        """Progress detail, shown only in verbose mode."""
        if self.verbose:
            safe_print(f"{self.symbols.bullet} {message}", file=self.stream)

    def success(self, message: str) -> None:
        if self.verbose:
            safe_print(f"{self.symbols.check_pass} {message}", file=self.stream)

    def warn(self, message: str) -> None:
        self.warnings += 1
        safe_print(f"{self.symbols.check_warn} {message}", file=self.stream)

    def fail(self, message: str) -> None:
        safe_print(f"{self.symbols.check_fail} Error: {message}", file=self.stream)

    def skipped(self, outcome: FieldOutcome, unit: str = "") -> None:
        """Report one skipped field: file:line: name: reason"""
        where = f"{unit}:{outcome.line}" if unit else f"line {outcome.line}"
        name = outcome.name if outcome.name is not None else "<non-literal key>"
        self.warn(f"{where}: skipped field {name!r}: {outcome.reason}")
