"""Node-kind dispatch over markdown syntax trees and Kotlin file assembly"""

from typing import Any, Mapping, Optional

from markdown_it.tree import SyntaxTreeNode

from mdgen.core.context import RenderContext, frontmatter_imports
from mdgen.core.models import ParsedDoc
from mdgen.core.render.handlers import DEFAULT_HANDLERS, Handler, render_default
from mdgen.core.render.kotlin import block, kotlin_string
from mdgen.core.utils.naming import qualify, simple_name


SEED_IMPORTS = [
    "androidx.compose.runtime.*",
    "com.varabyte.kobweb.core.*",
    "org.jetbrains.compose.web.dom.*",
]
MARKDOWN_ARTIFACT_IMPORT = "com.varabyte.kobwebx.markdown.*"


def _kind(key: Any) -> str:
    return str(getattr(key, 'value', key))


def _frontmatter_map(frontmatter: dict[str, Any]) -> str:
    """Kotlin mapOf(...) literal with every value as a list of strings."""
    entries = []
    for key, value in frontmatter.items():
        values = value if isinstance(value, list) else [value]
        items = ', '.join(kotlin_string('' if v is None else str(v)) for v in values)
        entries.append(f"{kotlin_string(str(key))} to listOf({items})")
    return f"mapOf({', '.join(entries)})"


class NodeRenderer:
    """Renders a parsed document into one Kotlin source file.

    Nodes are visited depth-first in document order; each node goes to the
    handler registered for its kind, or to the default handler when there is
    none. Handlers may add imports to the context and resolve other documents
    through it, so the import block is emitted only after the body is rendered.
    """

    def __init__(
        self,
        handlers: Optional[Mapping[Any, Handler]] = None,
        default_handler: Handler = render_default,
        depends_on_markdown_artifact: bool = True,
        ):
        table = DEFAULT_HANDLERS if handlers is None else handlers
        self.handlers: dict[str, Handler] = {_kind(k): h for k, h in table.items()}
        self.default_handler = default_handler
        self.depends_on_markdown_artifact = depends_on_markdown_artifact

    def render_node(self, node: SyntaxTreeNode, context: RenderContext) -> str:
        return self.handlers.get(node.type, self.default_handler)(node, context)

    def render_children(self, node: SyntaxTreeNode, context: RenderContext) -> str:
        parts = (self.render_node(child, context) for child in node.children)
        return '\n'.join(p for p in parts if p)

    def render(self, doc: ParsedDoc, context: RenderContext) -> str:
        """Return the full Kotlin source for doc."""
        context.renderer = self
        for name in frontmatter_imports(doc):
            context.add_import(name)

        root = doc.frontmatter.get('root') or context.default_root
        root = qualify(str(root).strip(), context.group) if root else None
        if root and '.' in root:
            context.add_import(root)
        if self.depends_on_markdown_artifact:
            context.add_import(MARKDOWN_ARTIFACT_IMPORT)

        with context.rendering(doc):
            body = self.render_children(doc.tree, context)

        if root:
            body = block(simple_name(root), body)
        if self.depends_on_markdown_artifact:
            provider = (
                "CompositionLocalProvider(LocalMarkdownContext provides MarkdownContext("
                f"{kotlin_string(doc.relative_path)}, {_frontmatter_map(doc.frontmatter)}))"
            )
            body = block(provider, body)

        lines = [f"package {context.package}", ""]
        lines.extend(f"import {name}" for name in context.imports)
        lines.extend(["", "@Page", "@Composable", block(f"fun {context.fun_name}()", body)])
        return '\n'.join(lines) + '\n'
