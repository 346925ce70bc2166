"""
Parsing configuration data structures.

Defines LanguageConfig and SchemaPattern — what grammar to parse with and
which declarative shape to match inside it.

Design principle: Pattern constants live in config, not in the walker.
"""

from dataclasses import dataclass, field
from typing import Dict, FrozenSet


@dataclass
class LanguageConfig:
    """
    Configuration for parsing one source language.

    Attributes:
        name: Human-readable name (e.g., "Go")
        tree_sitter_name: Grammar name in tree-sitter-language-pack
        max_file_size: Refuse files larger than this (bytes)
    """
    name: str
    tree_sitter_name: str
    max_file_size: int = 1_000_000


# Go struct keys -> FieldAttributes attribute names
DEFAULT_ATTRIBUTE_KEYS = {
    "ForceNew": "force_new",
    "Optional": "optional",
    "Computed": "computed",
}


@dataclass(frozen=True)
class SchemaPattern:
    """
    The declarative shape a resource function is expected to follow:

        func resourceX() *schema.Resource {
            return &schema.Resource{
                Schema: map[string]*schema.Schema{
                    "name": &schema.Schema{Type: schema.TypeString, Optional: true},
                },
            }
        }

    Attributes:
        schema_field: Key of the outer literal holding the field map
        marker_package: Package qualifier whose selectors mark a real field
                        declaration (schema.TypeString, schema.TypeList, ...)
        nested_key: Key whose resource-typed value makes a field nested
        reserved_fields: Field names always skipped
        attribute_keys: Go key -> FieldAttributes attribute
    """
    schema_field: str = "Schema"
    marker_package: str = "schema"
    nested_key: str = "Elem"
    reserved_fields: FrozenSet[str] = frozenset({"tags"})
    attribute_keys: Dict[str, str] = field(
        default_factory=lambda: dict(DEFAULT_ATTRIBUTE_KEYS)
    )

    @property
    def nested_type(self) -> str:
        """Type name of a nested block literal (schema.Resource)."""
        return f"{self.marker_package}.Resource"
