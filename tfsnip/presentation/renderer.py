"""
SnippetRenderer — SchemaEntity to editor snippet text via Jinja2.

Templates are resolved by convention: editor "vim" -> "vim.tmpl" in the
template directory (the packaged tfsnip/templates by default).

A template sees exactly one binding, `resource` (the SchemaEntity), plus
the host helpers listed in TEMPLATE_HELPERS.

Usage:
    renderer = SnippetRenderer("vim")
    text = renderer.render(entity)
"""

from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError, TemplateNotFound

from ..core.errors import RenderError
from ..core.schema import SchemaEntity


TEMPLATE_DIR = Path(__file__).parent.parent / "templates"
TEMPLATE_EXTENSION = ".tmpl"


def increment(i: int) -> int:
    """Next tabstop number."""
    return i + 1


# Functions callable from templates; nothing else from the host is exposed
TEMPLATE_HELPERS: Dict[str, Callable] = {
    "increment": increment,
}


def available_editors(template_dir: Optional[Union[str, Path]] = None) -> List[str]:
    """Editors with a template in the directory, sorted."""
    directory = Path(template_dir) if template_dir else TEMPLATE_DIR
    if not directory.is_dir():
        return []
    return sorted(p.stem for p in directory.glob(f"*{TEMPLATE_EXTENSION}"))


class SnippetRenderer:
    """
    Renders SchemaEntities with one editor's template.

    The template is loaded once, on first render.
    """

    def __init__(self, editor: str, template_dir: Optional[Union[str, Path]] = None):
        self.editor = editor
        self.template_dir = Path(template_dir) if template_dir else TEMPLATE_DIR
        self._env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            autoescape=False,
        )
        self._env.globals.update(TEMPLATE_HELPERS)
        self._template = None

    @property
    def template_name(self) -> str:
        return f"{self.editor}{TEMPLATE_EXTENSION}"

    def load(self):
        """
        Resolve and compile the template now.

        Raises:
            RenderError: If the template is missing or invalid
        """
        if self._template is None:
            try:
                self._template = self._env.get_template(self.template_name)
            except TemplateNotFound as e:
                known = available_editors(self.template_dir)
                hint = f" Available: {', '.join(known)}" if known else ""
                raise RenderError(
                    f"No template for editor '{self.editor}' "
                    f"({self.template_dir / self.template_name}).{hint}"
                ) from e
            except TemplateError as e:
                raise RenderError(f"{self.template_name}: {e}") from e
        return self._template

    def render(self, entity: SchemaEntity) -> str:
        """
        Render one entity.

        Raises:
            RenderError: If the template is missing or fails to render
        """
        template = self.load()
        try:
            return template.render(resource=entity)
        except TemplateError as e:
            raise RenderError(f"{self.template_name}: {e}") from e
