"""
tfsnip — Editor snippets from Terraform provider sources

Reads the Go source of a Terraform provider, finds each resource's schema
declaration and renders it through an editor template.

Usage:
    tfsnip generate --source ~/src/terraform --provider aws
    tfsnip generate --source ~/src/terraform --provider aws --editor sublime
    tfsnip inspect builtin/providers/aws/resource_aws_instance.go
    tfsnip config --set output.editor=sublime
"""

__version__ = "0.1.0"

# Core layer
from .core.errors import TfsnipError, ParseError, ShapeError, DiscoveryError, RenderError, ConfigError
from .core.naming import underscore_to_camel, function_name_for
from .core.schema import FieldAttributes, SchemaEntity, FieldStatus, FieldOutcome
from .core.assembler import assemble, Assembly
from .core.parsing import SourceParser, SchemaPattern, walk_schema, extract_attributes

# Services layer
from .services.generator import SnippetGenerator, UnitResult

# Presentation layer
from .presentation.renderer import SnippetRenderer, TEMPLATE_HELPERS

# Config
from .config import Config, ConfigManager, get_config

__all__ = [
    # Errors
    'TfsnipError', 'ParseError', 'ShapeError', 'DiscoveryError', 'RenderError', 'ConfigError',
    # Core
    'underscore_to_camel', 'function_name_for',
    'FieldAttributes', 'SchemaEntity', 'FieldStatus', 'FieldOutcome',
    'assemble', 'Assembly',
    'SourceParser', 'SchemaPattern', 'walk_schema', 'extract_attributes',
    # Services
    'SnippetGenerator', 'UnitResult',
    # Presentation
    'SnippetRenderer', 'TEMPLATE_HELPERS',
    # Config
    'Config', 'ConfigManager', 'get_config',
]
