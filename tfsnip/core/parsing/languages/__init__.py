"""
Language configurations for schema extraction.

Supported languages:
- go.py: Go (.go) - Terraform provider sources
"""

from .go import GO_CONFIG

__all__ = [
    'GO_CONFIG',
]
