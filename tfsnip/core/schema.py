"""
Schema model — What one resource declares

FieldAttributes is the three-flag record of a single schema field.
SchemaEntity is the filtered, assembled view of one source unit and is the
only thing handed to the renderer.

FieldOutcome carries the per-field result of extraction so the assembler
and the reporter share a single, explicit vocabulary for why a field was
kept or dropped.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Any


@dataclass(frozen=True)
class FieldAttributes:
    """Mutability flags declared on one schema field."""
    force_new: bool = False
    optional: bool = False
    computed: bool = False

    def to_dict(self) -> Dict[str, bool]:
        return {
            "force_new": self.force_new,
            "optional": self.optional,
            "computed": self.computed,
        }


@dataclass
class SchemaEntity:
    """
    Assembled schema of one resource.

    Attributes:
        name: Terraform type name (file name without the kind prefix)
        kind: "resource" or "data"
        fields: Field name -> attributes, in source order.
                Never contains computed or reserved fields.
    """
    name: str
    kind: str = "resource"
    fields: Dict[str, FieldAttributes] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "kind": self.kind,
            "fields": {k: v.to_dict() for k, v in self.fields.items()},
        }


class FieldStatus(Enum):
    """Why a schema field was kept or dropped."""
    EXTRACTED = "extracted"
    COMPUTED = "computed"                    # Valid, excluded by policy
    RESERVED = "reserved"                    # Name on the reserved list
    NESTED = "nested"                        # Elem holds a nested resource
    UNSUPPORTED_SHAPE = "unsupported_shape"  # Not &schema.Schema{Key: value}
    SCHEMA_NOT_FOUND = "schema_not_found"    # Marker selector absent


# Statuses worth telling the operator about
REPORTABLE_STATUSES = frozenset({
    FieldStatus.NESTED,
    FieldStatus.UNSUPPORTED_SHAPE,
    FieldStatus.SCHEMA_NOT_FOUND,
})


@dataclass(frozen=True)
class FieldOutcome:
    """Result of examining one schema field."""
    name: Optional[str]
    status: FieldStatus
    attributes: Optional[FieldAttributes] = None
    reason: str = ""
    line: int = 0

    @property
    def kept(self) -> bool:
        return self.status == FieldStatus.EXTRACTED

    @property
    def skipped(self) -> bool:
        return not self.kept

    @property
    def reportable(self) -> bool:
        return self.status in REPORTABLE_STATUSES

    def with_name(self, name: Optional[str], line: int = 0) -> 'FieldOutcome':
        """Copy of this outcome bound to a field name and source line."""
        return FieldOutcome(
            name=name,
            status=self.status,
            attributes=self.attributes,
            reason=self.reason,
            line=line or self.line,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "status": self.status.value,
            "attributes": self.attributes.to_dict() if self.attributes else None,
            "reason": self.reason,
            "line": self.line,
        }
