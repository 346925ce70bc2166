"""
Services — Orchestration on top of core and presentation
"""

from .generator import SnippetGenerator, UnitResult, RunSummary

__all__ = ['SnippetGenerator', 'UnitResult', 'RunSummary']
