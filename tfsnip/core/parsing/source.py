"""
SourceParser — Go source units parsed with tree-sitter.

Wraps tree-sitter-language-pack so the walker and the attribute extractor
only ever see a SourceUnit: the tree plus the exact bytes it was built from.

Usage:
    from tfsnip.core.parsing import SourceParser

    parser = SourceParser()
    unit = parser.parse_file(Path("resource_aws_instance.go"))
    unit.tree.root_node
"""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, TYPE_CHECKING

from tree_sitter_language_pack import get_parser

from ..errors import ParseError
from .config import LanguageConfig
from .languages.go import GO_CONFIG

if TYPE_CHECKING:
    from tree_sitter import Node, Parser, Tree


@dataclass
class SourceUnit:
    """One parsed source file."""
    tree: 'Tree'
    source: bytes
    path: Optional[Path] = None

    @property
    def root(self) -> 'Node':
        return self.tree.root_node

    def text(self, node: 'Node') -> str:
        """Source text covered by node."""
        return node_text(node, self.source)


# =============================================================================
# Node helpers
# =============================================================================

def node_text(node: 'Node', source: bytes) -> str:
    """Decode the bytes a node spans."""
    return source[node.start_byte:node.end_byte].decode('utf-8', errors='replace')


def named_children(node: 'Node') -> List['Node']:
    """Named children without comments."""
    return [child for child in node.named_children if child.type != 'comment']


def unwrap(node: Optional['Node']) -> Optional['Node']:
    """
    Strip grammar wrappers that carry no meaning of their own.

    Newer tree-sitter-go grammars wrap every element of a literal in a
    literal_element node; older ones do not. Parentheses are dropped too.
    """
    while node is not None and node.type in ('literal_element', 'parenthesized_expression'):
        inner = named_children(node)
        if not inner:
            break
        node = inner[0]
    return node


def first_error(node: 'Node') -> Optional['Node']:
    """Depth-first search for the first ERROR or missing node."""
    if node.type == 'ERROR' or node.is_missing:
        return node
    for child in node.children:
        if child.has_error:
            found = first_error(child)
            if found is not None:
                return found
    return None


# =============================================================================
# Parser
# =============================================================================

class SourceParser:
    """
    Parses source files into SourceUnits.

    The tree-sitter parser is created on first use and reused for every
    unit afterwards.
    """

    def __init__(self, language: LanguageConfig = GO_CONFIG):
        self.language = language
        self._parser: Optional['Parser'] = None

    def _get_parser(self) -> 'Parser':
        if self._parser is None:
            self._parser = get_parser(self.language.tree_sitter_name)
        return self._parser

    def parse(self, content: bytes, path: Optional[Path] = None) -> SourceUnit:
        """
        Parse source bytes.

        Raises:
            ParseError: If the content is too large or has syntax errors
        """
        label = str(path) if path else "<source>"

        if len(content) > self.language.max_file_size:
            raise ParseError(
                f"{label}: file is {len(content)} bytes, "
                f"limit is {self.language.max_file_size}"
            )

        tree = self._get_parser().parse(content)
        root = tree.root_node
        if root.has_error:
            error = first_error(root) or root
            line, column = error.start_point
            raise ParseError(
                f"{label}:{line + 1}:{column + 1}: syntax error "
                f"near {node_text(error, content)[:40]!r}"
            )

        return SourceUnit(tree=tree, source=content, path=path)

    def parse_file(self, path: Path) -> SourceUnit:
        """
        Read and parse one file.

        Raises:
            ParseError: If the file cannot be read or parsed
        """
        path = Path(path)
        try:
            content = path.read_bytes()
        except OSError as e:
            raise ParseError(f"{path}: cannot read file: {e.strerror or e}") from e
        return self.parse(content, path=path)
