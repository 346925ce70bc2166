"""
Presentation — Output layer for tfsnip

- Symbols: Visual vocabulary (unicode/ascii) and safe_print
- Reporter: Diagnostics on stderr
- Renderer: Jinja2 editor templates
"""

from .symbols import SymbolSet, get_symbols, safe_print, UNICODE, ASCII
from .report import Reporter
from .renderer import SnippetRenderer, TEMPLATE_HELPERS, TEMPLATE_DIR, available_editors, increment

__all__ = [
    "SymbolSet", "get_symbols", "safe_print", "UNICODE", "ASCII",
    "Reporter",
    "SnippetRenderer", "TEMPLATE_HELPERS", "TEMPLATE_DIR", "available_editors", "increment",
]
