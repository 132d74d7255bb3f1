"""Per-output-file rendering state threaded through the node handlers"""

import posixpath
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Iterator, Optional
from urllib.parse import unquote, urlsplit

from markdown_it.tree import SyntaxTreeNode

from mdgen.core.cache import DocumentCache
from mdgen.core.models import ParsedDoc
from mdgen.core.utils.naming import qualify
from mdgen.logging import LoggingReporter

if TYPE_CHECKING:
    from mdgen.core.render.renderer import NodeRenderer


def is_markdown_ref(ref: str) -> bool:
    """True for scheme-less references whose path part names a .md file."""
    parts = urlsplit(ref)
    return not parts.scheme and not parts.netloc and parts.path.lower().endswith('.md')


class RenderContext:
    """Mutable state for rendering one markdown file into one Kotlin file.

    Holds the target package and function name, the imports accumulated so far
    (deduplicated, first-seen order), the document cache used to resolve links
    and includes, and the reporter collecting non-fatal diagnostics. One
    instance per file; never shared.
    """

    def __init__(
        self,
        package: str,
        fun_name: str,
        cache: DocumentCache,
        source_path: str,
        group: str = "",
        default_root: Optional[str] = None,
        imports: Optional[list[str]] = None,
        reporter: Optional[LoggingReporter] = None,
        ):
        self.package = package
        self.fun_name = fun_name
        self.cache = cache
        self.source_path = source_path
        self.group = group
        self.default_root = default_root or None
        self.reporter = reporter or LoggingReporter()
        self.renderer: Optional["NodeRenderer"] = None
        self._imports: dict[str, None] = {}
        self._include_stack: list[Path] = []
        for name in imports or []:
            self.add_import(name)

    @property
    def imports(self) -> list[str]:
        return list(self._imports)

    def add_import(self, name: str) -> None:
        """Record an import; '.'-prefixed names are resolved against the project group."""
        name = name.strip()
        if name:
            self._imports.setdefault(qualify(name, self.group), None)

    def warn(self, message: str) -> None:
        self.reporter.warn(f"{self.source_path}: {message}")

    def render_node(self, node: SyntaxTreeNode) -> str:
        return self.renderer.render_node(node, self)

    def render_children(self, node: SyntaxTreeNode) -> str:
        return self.renderer.render_children(node, self)

    def resolve(self, ref: str) -> Optional[ParsedDoc]:
        """Resolve a markdown reference found in the current document, or None.

        '/x.md' is relative to the markdown roots; anything else is relative to
        the directory of the document currently being rendered.
        """
        target = unquote(urlsplit(ref).path)
        if not target:
            return None
        if target.startswith('/'):
            relative = target.lstrip('/')
        else:
            relative = posixpath.join(posixpath.dirname(self.source_path), target)
        doc = self.cache.get_relative(relative)
        if doc is None:
            self.warn(f"could not resolve markdown reference '{ref}'")
        return doc

    @contextmanager
    def rendering(self, doc: ParsedDoc) -> Iterator[ParsedDoc]:
        """Make doc the current document for relative references and cycle checks."""
        previous = self.source_path
        self._include_stack.append(doc.path)
        self.source_path = doc.relative_path
        try:
            yield doc
        finally:
            self.source_path = previous
            self._include_stack.pop()

    def include(self, ref: str) -> Optional[str]:
        """Render the body of the referenced document in place, or None if it can't be included."""
        doc = self.resolve(ref)
        if doc is None:
            return None
        if doc.path in self._include_stack:
            self.warn(f"include of '{ref}' would recurse into {doc.relative_path}; left as a reference")
            return None
        for name in frontmatter_imports(doc):
            self.add_import(name)
        with self.rendering(doc):
            return self.render_children(doc.tree)


def frontmatter_imports(doc: ParsedDoc) -> list[str]:
    """Frontmatter 'imports' as strings; a single scalar counts as one import."""
    value = doc.frontmatter.get('imports')
    if not isinstance(value, list):
        value = [value]
    return [str(v) for v in value if v is not None]
