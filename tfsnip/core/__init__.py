"""
Core — Schema extraction, independent of output format

- naming: file names to Go function names
- schema: FieldAttributes, SchemaEntity, FieldOutcome
- parsing: tree-sitter walker and attribute extractor
- assembler: raw entries to a filtered SchemaEntity
- discovery: source units of a provider
"""

from .errors import (
    TfsnipError, ParseError, ShapeError, DiscoveryError, RenderError, ConfigError,
)
from .naming import underscore_to_camel, strip_file_extension, function_name_for, strip_prefix
from .schema import FieldAttributes, SchemaEntity, FieldStatus, FieldOutcome
from .assembler import Assembly, assemble, entity_name, KIND_PREFIXES
from .discovery import provider_path, find_source_units, unit_pattern

__all__ = [
    'TfsnipError', 'ParseError', 'ShapeError', 'DiscoveryError', 'RenderError', 'ConfigError',
    'underscore_to_camel', 'strip_file_extension', 'function_name_for', 'strip_prefix',
    'FieldAttributes', 'SchemaEntity', 'FieldStatus', 'FieldOutcome',
    'Assembly', 'assemble', 'entity_name', 'KIND_PREFIXES',
    'provider_path', 'find_source_units', 'unit_pattern',
]
