"""
GenerateCommand — Snippets for every resource of a provider

Usage:
    tfsnip generate --source ~/go/src/github.com/hashicorp/terraform --provider aws
    tfsnip generate --source . --provider aws --editor sublime --output aws.snippets
    tfsnip generate --source . --provider aws --kind data --keep-going
"""

import dataclasses
from pathlib import Path
from typing import Optional

from ..commands.base import BaseCommand
from ..core.assembler import KIND_PREFIXES
from ..core.discovery import find_source_units, provider_path, unit_pattern
from ..presentation.renderer import SnippetRenderer
from ..services.generator import SnippetGenerator


class GenerateCommand(BaseCommand):
    """Walks a provider directory and writes one snippet per source unit."""

    def generate(
        self,
        source: str,
        provider: str,
        editor: Optional[str] = None,
        kind: Optional[str] = None,
        template_dir: Optional[str] = None,
        output: Optional[str] = None,
        keep_going: bool = False,
    ) -> int:
        """
        Generate snippets for one provider.

        Args:
            source: Root of the Terraform source tree
            provider: Provider name (directory under builtin/providers)
            editor: Template to render with (config output.editor if None)
            kind: "resource" or "data" (config scan.kind if None)
            template_dir: Template directory override
            output: Write snippets here instead of stdout
            keep_going: Skip units with an unexpected structure

        Returns:
            Exit code (0 success, 1 failure)

        Raises:
            TfsnipError: On any fatal parse, shape, discovery or render error
        """
        config = self.config
        if kind:
            config = dataclasses.replace(config, scan=dataclasses.replace(config.scan, kind=kind))

        editor = editor or config.output.editor
        template_dir = template_dir or config.output.template_dir

        provider_dir = provider_path(source, provider, config.scan.providers_dir)
        paths = find_source_units(provider_dir, config.scan.kind)
        if not paths:
            self.reporter.warn(
                f"No {unit_pattern(config.scan.kind)} files in {provider_dir}"
            )
            return 0

        # Fail on a missing template before anything is written
        renderer = SnippetRenderer(editor, template_dir)
        renderer.load()

        generator = SnippetGenerator(
            config=config,
            reporter=self.reporter,
            keep_going=keep_going,
        )
        self.reporter.info(f"{len(paths)} {config.scan.kind} file(s) in {provider_dir}")

        if output:
            out_path = Path(output)
            try:
                with open(out_path, 'w', encoding='utf-8') as stream:
                    summary = generator.generate(paths, renderer, stream)
            except OSError as e:
                self.reporter.fail(f"Cannot write {out_path}: {e.strerror or e}")
                return 1
        else:
            summary = generator.generate(paths, renderer, self.stdout)

        self.reporter.info(
            f"{summary.rendered} snippet(s) rendered, "
            f"{summary.skipped_units} unit(s) skipped, "
            f"{summary.skipped_fields} field(s) skipped, "
            f"{self.reporter.warnings} warning(s)"
        )
        if output:
            self.reporter.success(f"Wrote {summary.rendered} snippet(s) to {output}")
        return 0


# =============================================================================
# Registration
# =============================================================================

COMMAND_NAME = 'generate'


def register_parser(subparsers):
    """Register generate command parser."""
    p = subparsers.add_parser('generate', help='Generate editor snippets for a provider')
    p.add_argument('--source', '-s', required=True,
                   help='Path to the Terraform source code')
    p.add_argument('--provider', required=True,
                   help='Provider to generate snippets for')
    p.add_argument('--editor', '-e', default=None,
                   help='Editor to generate snippets for (default: output.editor, vim)')
    p.add_argument('--kind', choices=list(KIND_PREFIXES), default=None,
                   help='Generate for resources or data sources (default: scan.kind)')
    p.add_argument('--template-dir', default=None,
                   help='Directory containing <editor>.tmpl templates')
    p.add_argument('--output', '-o', default=None,
                   help='Write snippets to this file instead of stdout')
    p.add_argument('--keep-going', '-k', action='store_true',
                   help='Skip resources with an unexpected structure instead of stopping')
    return p


def handle(cli, args):
    """Handle generate command dispatch."""
    return cli._generate_cmd.generate(
        source=args.source,
        provider=args.provider,
        editor=args.editor,
        kind=args.kind,
        template_dir=args.template_dir,
        output=args.output,
        keep_going=args.keep_going,
    )
