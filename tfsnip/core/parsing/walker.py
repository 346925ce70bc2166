"""
Schema walker — Locates the field map of a resource declaration.

Descends a fixed idiomatic shape:

    func <name>() ... {
        return &<T>{
            <schema_field>: <map literal>{
                "<field>": <value>,
                ...
            },
        }
    }

Each level either matches and yields its payload or reports a mismatch
naming the node kind that was found instead. Nothing is assumed about a
node before its type has been checked.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple, TYPE_CHECKING

from .config import SchemaPattern
from .source import SourceUnit, named_children, unwrap

if TYPE_CHECKING:
    from tree_sitter import Node


class WalkStatus(Enum):
    """Walk outcome for a whole unit."""
    MATCHED = "matched"
    FUNCTION_NOT_FOUND = "function_not_found"
    MISMATCH = "mismatch"


@dataclass
class RawField:
    """One entry of the schema map, not yet interpreted."""
    name: Optional[str]  # None when the key is not a string literal
    value: 'Node'
    line: int = 0


@dataclass
class WalkResult:
    """Result of walking one unit."""
    status: WalkStatus
    function_name: str
    fields: List[RawField] = field(default_factory=list)
    reason: str = ""
    line: int = 0

    @property
    def matched(self) -> bool:
        return self.status != WalkStatus.MISMATCH


class _Mismatch(Exception):
    """Internal: unwinds the descent to a single MISMATCH result."""

    def __init__(self, reason: str, node: Optional['Node'] = None):
        super().__init__(reason)
        self.reason = reason
        self.line = node.start_point[0] + 1 if node is not None else 0


# =============================================================================
# Shape predicates
# =============================================================================

def address_of_literal(node: Optional['Node']) -> Optional['Node']:
    """
    Return the composite_literal behind &T{...}, or None.
    """
    node = unwrap(node)
    if node is None or node.type != 'unary_expression':
        return None
    operator = node.child_by_field_name('operator')
    if operator is None or operator.type != '&':
        return None
    operand = unwrap(node.child_by_field_name('operand'))
    if operand is None or operand.type != 'composite_literal':
        return None
    return operand


def literal_elements(literal: 'Node') -> List['Node']:
    """Elements of a composite_literal's body."""
    body = literal.child_by_field_name('body')
    if body is None:
        return []
    return named_children(body)


def keyed_parts(element: 'Node') -> Optional[Tuple['Node', 'Node']]:
    """Split a keyed_element into (key, value), or None if not keyed."""
    if element.type != 'keyed_element':
        return None
    parts = named_children(element)
    if len(parts) < 2:
        return None
    return unwrap(parts[0]), unwrap(parts[-1])


def string_literal_value(node: 'Node', unit: SourceUnit) -> Optional[str]:
    """Value of a Go string literal node, or None for anything else."""
    text = unit.text(node)
    if node.type == 'raw_string_literal':
        return text[1:-1]
    if node.type == 'interpreted_string_literal':
        return _unquote(text[1:-1])
    return None


def _unquote(body: str) -> str:
    """Resolve the backslash escapes of a Go interpreted string."""
    if '\\' not in body:
        return body
    return body.encode('latin-1', errors='backslashreplace').decode('unicode_escape')


def _kind(node: Optional['Node']) -> str:
    return node.type if node is not None else "nothing"


# =============================================================================
# Walk
# =============================================================================

def find_function(unit: SourceUnit, name: str) -> Optional['Node']:
    """
    Find the top-level function declaration named exactly `name`.

    Methods are never candidates.
    """
    for decl in named_children(unit.root):
        if decl.type != 'function_declaration':
            continue
        ident = decl.child_by_field_name('name')
        if ident is not None and unit.text(ident) == name:
            return decl
    return None


def _body_statements(function: 'Node') -> List['Node']:
    body = function.child_by_field_name('body')
    if body is None:
        return []
    statements = []
    for child in named_children(body):
        # Newer grammars group block contents under statement_list
        if child.type == 'statement_list':
            statements.extend(named_children(child))
        else:
            statements.append(child)
    return statements


def _returned_expressions(statement: 'Node') -> List['Node']:
    exprs = named_children(statement)
    if len(exprs) == 1 and exprs[0].type == 'expression_list':
        return named_children(exprs[0])
    return exprs


def _schema_entries(
    outer: 'Node',
    unit: SourceUnit,
    pattern: SchemaPattern,
) -> List[RawField]:
    """Collect the entries of the Schema map inside an outer literal."""
    fields: List[RawField] = []

    for element in literal_elements(outer):
        parts = keyed_parts(element)
        if parts is None:
            raise _Mismatch(
                f"expected keyed element in returned literal, found {element.type}",
                element,
            )
        key, value = parts
        if unit.text(key) != pattern.schema_field:
            continue

        value = unwrap(value)
        if value is None or value.type != 'composite_literal':
            raise _Mismatch(
                f"expected map literal for {pattern.schema_field}, found {_kind(value)}",
                value or element,
            )

        for entry in literal_elements(value):
            entry_parts = keyed_parts(entry)
            if entry_parts is None:
                raise _Mismatch(
                    f"expected keyed entry in {pattern.schema_field} map, found {entry.type}",
                    entry,
                )
            entry_key, entry_value = entry_parts
            fields.append(RawField(
                name=string_literal_value(entry_key, unit),
                value=entry_value,
                line=entry.start_point[0] + 1,
            ))

    return fields


def walk_schema(
    unit: SourceUnit,
    function_name: str,
    pattern: SchemaPattern = SchemaPattern(),
) -> WalkResult:
    """
    Extract the raw schema entries declared by `function_name`.

    Args:
        unit: Parsed source unit
        function_name: Exact name of the declaration function
        pattern: Shape constants (schema field name, marker, ...)

    Returns:
        WalkResult. A missing function is FUNCTION_NOT_FOUND with no
        fields; a structural surprise anywhere above the field level is
        MISMATCH with a reason and line.
    """
    function = find_function(unit, function_name)
    if function is None:
        return WalkResult(
            status=WalkStatus.FUNCTION_NOT_FOUND,
            function_name=function_name,
            reason=f"no function named {function_name}",
        )

    returns = [s for s in _body_statements(function) if s.type == 'return_statement']
    if not returns:
        return WalkResult(
            status=WalkStatus.MISMATCH,
            function_name=function_name,
            reason=f"function {function_name} has no return statement",
            line=function.start_point[0] + 1,
        )

    fields: List[RawField] = []
    try:
        for statement in returns:
            expressions = _returned_expressions(statement)
            if not expressions:
                raise _Mismatch("return statement returns nothing", statement)
            for expression in expressions:
                outer = address_of_literal(expression)
                if outer is None:
                    raise _Mismatch(
                        f"expected &{pattern.marker_package}.Resource{{...}}, "
                        f"found {_kind(unwrap(expression))}",
                        expression,
                    )
                fields.extend(_schema_entries(outer, unit, pattern))
    except _Mismatch as e:
        return WalkResult(
            status=WalkStatus.MISMATCH,
            function_name=function_name,
            reason=e.reason,
            line=e.line,
        )

    return WalkResult(
        status=WalkStatus.MATCHED,
        function_name=function_name,
        fields=fields,
    )
