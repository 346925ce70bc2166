"""
InspectCommand — Show what tfsnip extracts from one file

Prints the assembled entity together with the outcome of every schema
entry (kept, computed, reserved, nested, ...), which is what one needs
when a snippet comes out missing a field.

Usage:
    tfsnip inspect builtin/providers/aws/resource_aws_instance.go
    tfsnip inspect resource_aws_instance.go --format json
"""

import dataclasses
import json
from pathlib import Path
from typing import Optional

import yaml

from ..commands.base import BaseCommand
from ..core.assembler import KIND_PREFIXES
from ..services.generator import SnippetGenerator


def kind_for(path: Path) -> str:
    """Infer the kind from the file name prefix."""
    for kind, prefix in KIND_PREFIXES.items():
        if kind != "resource" and path.name.startswith(prefix):
            return kind
    return "resource"


class InspectCommand(BaseCommand):
    """Dumps the extraction result of a single source unit."""

    def inspect(self, file: str, output_format: str = "yaml", kind: Optional[str] = None) -> int:
        """
        Extract and print one unit.

        Returns:
            Exit code (0 extracted, 1 structural mismatch)

        Raises:
            ParseError: If the file cannot be parsed
        """
        path = Path(file)
        config = self.config
        config = dataclasses.replace(
            config, scan=dataclasses.replace(config.scan, kind=kind or kind_for(path))
        )

        generator = SnippetGenerator(config=config, reporter=self.reporter)
        result = generator.build_entity(path)

        data = result.to_dict()
        if output_format == "json":
            text = json.dumps(data, indent=2)
        else:
            text = yaml.safe_dump(data, default_flow_style=False, sort_keys=False)
        self.stdout.write(text.rstrip("\n") + "\n")

        if not result.ok:
            self.reporter.fail(result.reason)
            return 1
        return 0


# =============================================================================
# Registration
# =============================================================================

COMMAND_NAME = 'inspect'


def register_parser(subparsers):
    """Register inspect command parser."""
    p = subparsers.add_parser('inspect', help='Show the schema extracted from one file')
    p.add_argument('file', help='Go source file (resource_*.go or data_source_*.go)')
    p.add_argument('--format', '-f', dest='output_format', choices=['yaml', 'json'],
                   default='yaml', help='Output format (default: yaml)')
    p.add_argument('--kind', choices=list(KIND_PREFIXES), default=None,
                   help='Override the kind inferred from the file name')
    return p


def handle(cli, args):
    """Handle inspect command dispatch."""
    return cli._inspect_cmd.inspect(args.file, output_format=args.output_format, kind=args.kind)
