"""
Attribute extraction — One schema field value to FieldAttributes.

A leaf field is declared as a pointer to a composite literal whose elements
are all Key: value pairs, one of which references the schema package:

    &schema.Schema{
        Type:     schema.TypeString,   <- marker
        Optional: true,
        ForceNew: true,
    }

Anything else is reported through the returned FieldOutcome rather than
guessed at.
"""

from typing import Dict, TYPE_CHECKING

from ..schema import FieldAttributes, FieldOutcome, FieldStatus
from .config import SchemaPattern
from .source import SourceUnit, unwrap
from .walker import address_of_literal, keyed_parts, literal_elements

if TYPE_CHECKING:
    from tree_sitter import Node


BOOL_LITERALS = {'true': True, 'false': False}


def _is_marker(value: 'Node', unit: SourceUnit, pattern: SchemaPattern) -> bool:
    """True for a selector on the marker package, e.g. schema.TypeString."""
    if value.type != 'selector_expression':
        return False
    operand = unwrap(value.child_by_field_name('operand'))
    return (
        operand is not None
        and operand.type == 'identifier'
        and unit.text(operand) == pattern.marker_package
    )


def _is_nested_block(value: 'Node', unit: SourceUnit, pattern: SchemaPattern) -> bool:
    """True for &schema.Resource{...}, the shape of a nested block."""
    literal = address_of_literal(value)
    if literal is None:
        return False
    literal_type = literal.child_by_field_name('type')
    return literal_type is not None and unit.text(literal_type) == pattern.nested_type


def _bool_value(value: 'Node', unit: SourceUnit) -> bool:
    """
    Boolean literal value; anything that is not a literal reads as false.
    """
    if value.type in BOOL_LITERALS:
        return BOOL_LITERALS[value.type]
    if value.type == 'identifier':
        return BOOL_LITERALS.get(unit.text(value), False)
    return False


def extract_attributes(
    value: 'Node',
    unit: SourceUnit,
    pattern: SchemaPattern = SchemaPattern(),
) -> FieldOutcome:
    """
    Determine the attributes declared by one schema field value.

    Args:
        value: The value node of a "name": value schema entry
        unit: Source unit the node belongs to
        pattern: Shape constants

    Returns:
        FieldOutcome with status EXTRACTED and the full record (computed
        fields included), or UNSUPPORTED_SHAPE / NESTED / SCHEMA_NOT_FOUND.
        The name is left empty for the caller to bind.
    """
    line = value.start_point[0] + 1

    literal = address_of_literal(value)
    if literal is None:
        found = unwrap(value)
        return FieldOutcome(
            name=None,
            status=FieldStatus.UNSUPPORTED_SHAPE,
            reason=f"expected &{pattern.marker_package}.Schema{{...}}, "
                   f"found {found.type if found is not None else 'nothing'}",
            line=line,
        )

    schema_found = False
    nested = False
    flags: Dict[str, bool] = {}

    for element in literal_elements(literal):
        parts = keyed_parts(element)
        if parts is None:
            return FieldOutcome(
                name=None,
                status=FieldStatus.UNSUPPORTED_SHAPE,
                reason=f"expected Key: value element, found {element.type}",
                line=element.start_point[0] + 1,
            )
        key, item = parts
        if item is None:
            continue
        key_name = unit.text(key)

        if _is_marker(item, unit, pattern):
            schema_found = True
        elif key_name == pattern.nested_key and _is_nested_block(item, unit, pattern):
            nested = True
        elif key_name in pattern.attribute_keys:
            flags[pattern.attribute_keys[key_name]] = _bool_value(item, unit)
        # Unrecognized keys (Description, Default, ValidateFunc, ...) are ignored

    if nested:
        return FieldOutcome(
            name=None,
            status=FieldStatus.NESTED,
            reason=f"{pattern.nested_key} declares a nested {pattern.nested_type}",
            line=line,
        )

    if not schema_found:
        return FieldOutcome(
            name=None,
            status=FieldStatus.SCHEMA_NOT_FOUND,
            reason="schema not found",
            line=line,
        )

    return FieldOutcome(
        name=None,
        status=FieldStatus.EXTRACTED,
        attributes=FieldAttributes(**flags),
        line=line,
    )
