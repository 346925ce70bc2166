"""
SnippetGenerator — The per-unit pipeline

    file name -> function name -> parse -> walk -> assemble -> render

Units are processed strictly one after another; nothing is shared between
them except the (stateless) parser and renderer.

Error policy:
- ParseError: fatal, propagates.
- Walk mismatch: ShapeError, fatal, unless keep_going is set, in which
  case the unit is reported and skipped.
- Field-level problems: reported, field skipped, unit continues.
- RenderError: fatal, propagates. Rendering happens before writing so a
  failed unit never leaves partial output behind.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, TextIO, TYPE_CHECKING

from ..config import Config
from ..core.assembler import Assembly, assemble
from ..core.errors import ShapeError
from ..core.naming import function_name_for, strip_file_extension
from ..core.parsing.config import SchemaPattern
from ..core.parsing.source import SourceParser
from ..core.parsing.walker import WalkStatus, walk_schema
from ..core.schema import FieldOutcome, SchemaEntity
from ..presentation.report import Reporter

if TYPE_CHECKING:
    from ..presentation.renderer import SnippetRenderer


@dataclass
class UnitResult:
    """Everything known about one processed unit."""
    path: Path
    function_name: str
    walk_status: WalkStatus
    entity: Optional[SchemaEntity] = None
    outcomes: List[FieldOutcome] = field(default_factory=list)
    reason: str = ""

    @property
    def ok(self) -> bool:
        return self.entity is not None

    def to_dict(self):
        return {
            "path": str(self.path),
            "function": self.function_name,
            "walk": self.walk_status.value,
            "reason": self.reason,
            "entity": self.entity.to_dict() if self.entity else None,
            "outcomes": [o.to_dict() for o in self.outcomes],
        }


@dataclass
class RunSummary:
    """Counts for one generate run."""
    rendered: int = 0
    skipped_units: int = 0
    skipped_fields: int = 0


class SnippetGenerator:
    """
    Builds SchemaEntities from source units and renders them.

    Args:
        config: Loaded configuration (pattern, kind)
        reporter: Where diagnostics go
        parser: Source parser (one is created if omitted)
        keep_going: Skip units with an unexpected structure instead of
                    stopping the run
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        reporter: Optional[Reporter] = None,
        parser: Optional[SourceParser] = None,
        keep_going: bool = False,
    ):
        self.config = config or Config()
        self.reporter = reporter or Reporter()
        self.parser = parser or SourceParser()
        self.keep_going = keep_going

    @property
    def pattern(self) -> SchemaPattern:
        return self.config.schema.to_pattern()

    @property
    def kind(self) -> str:
        return self.config.scan.kind

    def build_entity(self, path: Path) -> UnitResult:
        """
        Parse one unit and assemble its SchemaEntity.

        Field problems are reported as they are found. A structural
        mismatch returns a UnitResult without an entity; deciding whether
        that is fatal is left to generate().

        Raises:
            ParseError: If the file cannot be read or parsed
        """
        path = Path(path)
        unit_name = strip_file_extension(path.name)
        function_name = function_name_for(path)
        pattern = self.pattern

        unit = self.parser.parse_file(path)
        walk = walk_schema(unit, function_name, pattern)

        if walk.status == WalkStatus.MISMATCH:
            where = f"{path}:{walk.line}" if walk.line else str(path)
            return UnitResult(
                path=path,
                function_name=function_name,
                walk_status=walk.status,
                reason=f"{where}: {walk.reason}",
            )

        if walk.status == WalkStatus.FUNCTION_NOT_FOUND:
            self.reporter.info(f"{path}: {walk.reason}, no fields extracted")

        assembly: Assembly = assemble(
            walk,
            unit,
            unit_name,
            pattern=pattern,
            kind=self.kind,
            on_skip=lambda outcome: self.reporter.skipped(outcome, str(path)),
        )
        return UnitResult(
            path=path,
            function_name=function_name,
            walk_status=walk.status,
            entity=assembly.entity,
            outcomes=assembly.outcomes,
        )

    def generate(
        self,
        paths: Iterable[Path],
        renderer: 'SnippetRenderer',
        stream: TextIO,
    ) -> RunSummary:
        """
        Build, render and write every unit in order.

        Raises:
            ParseError: On the first unit that cannot be parsed
            ShapeError: On a structural mismatch, unless keep_going
            RenderError: On the first template failure
        """
        summary = RunSummary()

        for path in paths:
            result = self.build_entity(path)

            if not result.ok:
                if not self.keep_going:
                    raise ShapeError(result.reason)
                self.reporter.warn(f"skipped unit: {result.reason}")
                summary.skipped_units += 1
                continue

            text = renderer.render(result.entity)
            stream.write(text)
            summary.rendered += 1
            summary.skipped_fields += sum(1 for o in result.outcomes if o.reportable)
            self.reporter.success(
                f"{result.entity.name}: {len(result.entity.fields)} field(s)"
            )

        return summary
