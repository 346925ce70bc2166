"""
Schema assembler — Raw schema entries to one SchemaEntity.

Single pass over the walker's entries, in source order:
  1. reserved names are dropped before anything else looks at them
  2. every other entry goes through extract_attributes()
  3. failures are recorded (and handed to on_skip), iteration continues
  4. computed fields are dropped, everything else is kept

The resulting entity is complete on return and is never mutated after.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from .naming import strip_prefix
from .parsing.attributes import extract_attributes
from .parsing.config import SchemaPattern
from .parsing.source import SourceUnit
from .parsing.walker import WalkResult
from .schema import FieldAttributes, FieldOutcome, FieldStatus, SchemaEntity


# Source kinds: file/function prefix per kind of Terraform object
KIND_PREFIXES = {
    "resource": "resource_",
    "data": "data_source_",
}


@dataclass
class Assembly:
    """The entity plus what happened to every field on the way."""
    entity: SchemaEntity
    outcomes: List[FieldOutcome] = field(default_factory=list)

    @property
    def problems(self) -> List[FieldOutcome]:
        """Skipped fields worth reporting to the operator."""
        return [o for o in self.outcomes if o.reportable]


def entity_name(unit_name: str, kind: str = "resource") -> str:
    """resource_aws_instance -> aws_instance"""
    return strip_prefix(unit_name, KIND_PREFIXES.get(kind, ""))


def assemble(
    walk: WalkResult,
    unit: SourceUnit,
    unit_name: str,
    pattern: SchemaPattern = SchemaPattern(),
    kind: str = "resource",
    on_skip: Optional[Callable[[FieldOutcome], None]] = None,
) -> Assembly:
    """
    Build the SchemaEntity for one unit.

    Args:
        walk: Raw entries from walk_schema()
        unit: Source unit the entries point into
        unit_name: File name without extension (resource_aws_instance)
        pattern: Shape constants, including the reserved field names
        kind: "resource" or "data", selects the prefix to strip
        on_skip: Called with every reportable skipped field

    Returns:
        Assembly with the entity and one outcome per entry
    """
    fields: Dict[str, FieldAttributes] = {}
    outcomes: List[FieldOutcome] = []

    for raw in walk.fields:
        if raw.name is None:
            outcome = FieldOutcome(
                name=None,
                status=FieldStatus.UNSUPPORTED_SHAPE,
                reason="schema key is not a string literal",
                line=raw.line,
            )
        elif raw.name in pattern.reserved_fields:
            outcome = FieldOutcome(
                name=raw.name,
                status=FieldStatus.RESERVED,
                reason="reserved field",
                line=raw.line,
            )
        else:
            outcome = extract_attributes(raw.value, unit, pattern).with_name(raw.name, raw.line)

        if outcome.kept and outcome.attributes.computed:
            outcome = FieldOutcome(
                name=outcome.name,
                status=FieldStatus.COMPUTED,
                attributes=outcome.attributes,
                reason="computed",
                line=outcome.line,
            )
        elif outcome.kept:
            fields[outcome.name] = outcome.attributes

        if outcome.reportable and on_skip is not None:
            on_skip(outcome)
        outcomes.append(outcome)

    return Assembly(
        entity=SchemaEntity(name=entity_name(unit_name, kind), kind=kind, fields=fields),
        outcomes=outcomes,
    )
