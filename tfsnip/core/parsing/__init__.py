"""
Parsing module — Schema extraction from Go sources via tree-sitter.

This module provides the structural analysis behind snippet generation:
- SourceParser: Go source -> SourceUnit (tree + bytes)
- walk_schema: locate the declaration function and its Schema map
- extract_attributes: one Schema map value -> FieldOutcome
- SchemaPattern: the shape constants both of them match against

Usage:
    from tfsnip.core.parsing import SourceParser, walk_schema, extract_attributes

    unit = SourceParser().parse_file(Path("resource_aws_instance.go"))
    walk = walk_schema(unit, "resourceAwsInstance")
    for raw in walk.fields:
        outcome = extract_attributes(raw.value, unit)
"""

from .config import LanguageConfig, SchemaPattern
from .source import SourceParser, SourceUnit
from .walker import WalkStatus, WalkResult, RawField, walk_schema, find_function
from .attributes import extract_attributes
from .languages import GO_CONFIG

__all__ = [
    'LanguageConfig',
    'SchemaPattern',
    'SourceParser',
    'SourceUnit',
    'WalkStatus',
    'WalkResult',
    'RawField',
    'walk_schema',
    'find_function',
    'extract_attributes',
    'GO_CONFIG',
]
