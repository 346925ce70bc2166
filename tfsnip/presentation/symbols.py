"""
Symbols — Markers used in diagnostics

Unicode markers where stderr can show them, ASCII otherwise. The choice
follows output.symbols (unicode | ascii | auto).

safe_print() never lets an encoding problem take down a run: field names
and reasons are copied out of third-party source files and may hold
anything.
"""

import os
import sys
from dataclasses import dataclass
from typing import Optional


# Markers and punctuation with an ASCII spelling
UNICODE_TO_ASCII = {
    '✓': '[+]',
    '⚠': '[!]',
    '✗': '[x]',
    '→': '->',
    '•': '*',
    '…': '...',
}


def to_ascii(text: str) -> str:
    """Replace known markers with their ASCII spelling."""
    for symbol, ascii_text in UNICODE_TO_ASCII.items():
        text = text.replace(symbol, ascii_text)
    return text


def safe_print(text: str, end: str = '\n', file=None) -> None:
    """
    print() that degrades instead of raising UnicodeEncodeError.

    Markers are spelled in ASCII first; anything still unencodable
    becomes '?'.
    """
    file = file or sys.stdout
    try:
        print(text, end=end, file=file)
        return
    except UnicodeEncodeError:
        text = to_ascii(text)

    try:
        print(text, end=end, file=file)
    except UnicodeEncodeError:
        encoding = getattr(file, 'encoding', None) or 'utf-8'
        print(text.encode(encoding, errors='replace').decode(encoding), end=end, file=file)


@dataclass(frozen=True)
class SymbolSet:
    """Markers prefixed to operator-facing messages."""
    check_pass: str
    check_warn: str
    check_fail: str
    bullet: str


UNICODE = SymbolSet(
    check_pass='✓',
    check_warn='⚠',
    check_fail='✗',
    bullet='•',
)

ASCII = SymbolSet(
    check_pass='[+]',
    check_warn='[!]',
    check_fail='[x]',
    bullet='*',
)


def _env_flag(name: str) -> bool:
    return os.environ.get(name, '').lower() in ('1', 'true', 'yes')


def supports_unicode() -> bool:
    """
    Guess whether stderr can display the Unicode markers.

    TFSNIP_ASCII_ONLY / TFSNIP_UNICODE force the answer. Otherwise the
    stderr encoding decides, then the locale; unknown means no.
    """
    if _env_flag('TFSNIP_ASCII_ONLY'):
        return False
    if _env_flag('TFSNIP_UNICODE'):
        return True

    encoding = (getattr(sys.stderr, 'encoding', None) or '').lower().replace('-', '').replace('_', '')
    if encoding.startswith('utf'):
        return True
    if encoding.startswith('cp') or encoding in ('ascii', 'latin1', 'iso88591'):
        return False

    locale = ' '.join(os.environ.get(var, '') for var in ('LC_ALL', 'LANG')).lower()
    return 'utf-8' in locale or 'utf8' in locale


def get_symbols(preference: Optional[str] = None) -> SymbolSet:
    """
    Symbol set for a preference: "unicode", "ascii", or "auto"/None.
    """
    if preference == 'unicode':
        return UNICODE
    if preference == 'ascii':
        return ASCII
    return UNICODE if supports_unicode() else ASCII
