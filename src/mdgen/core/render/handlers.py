"""Default node handlers: markdown-it nodes to Kotlin Compose HTML calls

Every handler has the signature ``(node, context) -> str`` and returns the
Kotlin statements for its node, unindented. Container handlers recurse
through ``context.render_children``.
"""

import re
from typing import Callable

from markdown_it.tree import SyntaxTreeNode

from mdgen.core.context import RenderContext, is_markdown_ref
from mdgen.core.models import NodeKind
from mdgen.core.render.kotlin import block, kotlin_string
from mdgen.core.utils.naming import route_for, simple_name
from mdgen.core.utils.slug import slugify


Handler = Callable[[SyntaxTreeNode, RenderContext], str]

KOBWEB_CALL_RE = re.compile(r'^\{\{\{\s*(?P<name>\.?[A-Za-z_][\w.]*)\s*(?P<args>\(.*\))?\s*\}\}\}$', re.DOTALL)


def _text_of(node: SyntaxTreeNode) -> str:
    """Plain text of a subtree (text and inline code only)."""
    return ''.join(
        n.content for n in node.walk()
        if n.type in (NodeKind.text, NodeKind.code_inline)
    )


def _wrap(head: str) -> Handler:
    def handler(node: SyntaxTreeNode, context: RenderContext) -> str:
        return block(head, context.render_children(node))
    handler.__name__ = f"render_{head.lower()}"
    return handler


def render_default(node: SyntaxTreeNode, context: RenderContext) -> str:
    """Fallback for unhandled kinds: recurse into children, else emit the raw content as text."""
    if node.children:
        return context.render_children(node)
    content = '' if node.is_root else node.content
    return f"Text({kotlin_string(content)})" if content else ''


def render_inline(node: SyntaxTreeNode, context: RenderContext) -> str:
    return context.render_children(node)


def render_text(node: SyntaxTreeNode, context: RenderContext) -> str:
    return f"Text({kotlin_string(node.content)})" if node.content else ''


def render_softbreak(node: SyntaxTreeNode, context: RenderContext) -> str:
    return 'Text(" ")'


def render_hardbreak(node: SyntaxTreeNode, context: RenderContext) -> str:
    return 'Br()'


def render_hr(node: SyntaxTreeNode, context: RenderContext) -> str:
    return 'Hr()'


def _sole_inline_child(node: SyntaxTreeNode):
    """The only meaningful inline child of a paragraph, else None."""
    if len(node.children) != 1 or node.children[0].type != NodeKind.inline:
        return None
    children = [c for c in node.children[0].children if not (c.type == NodeKind.text and not c.content.strip())]
    return children[0] if len(children) == 1 else None


def _kobweb_call(node: SyntaxTreeNode, context: RenderContext):
    """Render a '{{{ Widget }}}' paragraph as a composable call, or None."""
    if len(node.children) != 1 or node.children[0].type != NodeKind.inline:
        return None
    match = KOBWEB_CALL_RE.match(node.children[0].content.strip())
    if match is None:
        return None
    name = match.group('name')
    if '.' in name:
        context.add_import(name)
    return f"{simple_name(name)}{match.group('args') or '()'}"


def render_paragraph(node: SyntaxTreeNode, context: RenderContext) -> str:
    call = _kobweb_call(node, context)
    if call is not None:
        return call
    sole = _sole_inline_child(node)
    if sole is not None and sole.type == NodeKind.image and is_markdown_ref(sole.attrs.get('src', '')):
        return context.render_node(sole)
    if node.hidden:                 # tight list items
        return context.render_children(node)
    return block('P', context.render_children(node))


def render_heading(node: SyntaxTreeNode, context: RenderContext) -> str:
    tag = node.tag.upper()
    anchor = slugify(_text_of(node))
    head = f"{tag}(attrs = {{ id({kotlin_string(anchor)}) }})" if anchor else tag
    return block(head, context.render_children(node))


def render_code_inline(node: SyntaxTreeNode, context: RenderContext) -> str:
    return block('Code', f"Text({kotlin_string(node.content)})")


def render_code_block(node: SyntaxTreeNode, context: RenderContext) -> str:
    language = (node.info or '').strip().split(' ')[0] if node.type == NodeKind.fence else ''
    code = f"Code(attrs = {{ classes({kotlin_string('language-' + language)}) }})" if language else 'Code'
    return block('Pre', block(code, f"Text({kotlin_string(node.content)})"))


def render_link(node: SyntaxTreeNode, context: RenderContext) -> str:
    href = node.attrs.get('href', '')
    if is_markdown_ref(href):
        doc = context.resolve(href)
        if doc is not None:
            anchor = href.partition('#')[2]
            href = route_for(doc.relative_path) + (f"#{anchor}" if anchor else '')
    return block(f"A(href = {kotlin_string(str(href))})", context.render_children(node))


def render_image(node: SyntaxTreeNode, context: RenderContext) -> str:
    src = str(node.attrs.get('src', ''))
    if is_markdown_ref(src):
        included = context.include(src)
        if included is not None:
            return included
    return f"Img(src = {kotlin_string(src)}, alt = {kotlin_string(node.content)})"


DEFAULT_HANDLERS: dict[str, Handler] = {
    NodeKind.inline:       render_inline,
    NodeKind.paragraph:    render_paragraph,
    NodeKind.heading:      render_heading,
    NodeKind.text:         render_text,
    NodeKind.softbreak:    render_softbreak,
    NodeKind.hardbreak:    render_hardbreak,
    NodeKind.em:           _wrap('Em'),
    NodeKind.strong:       _wrap('B'),
    NodeKind.s:            _wrap('S'),
    NodeKind.link:         render_link,
    NodeKind.image:        render_image,
    NodeKind.code_inline:  render_code_inline,
    NodeKind.code_block:   render_code_block,
    NodeKind.fence:        render_code_block,
    NodeKind.blockquote:   _wrap('Blockquote'),
    NodeKind.bullet_list:  _wrap('Ul'),
    NodeKind.ordered_list: _wrap('Ol'),
    NodeKind.list_item:    _wrap('Li'),
    NodeKind.hr:           render_hr,
    NodeKind.table:        _wrap('Table'),
    NodeKind.thead:        _wrap('Thead'),
    NodeKind.tbody:        _wrap('Tbody'),
    NodeKind.tr:           _wrap('Tr'),
    NodeKind.th:           _wrap('Th'),
    NodeKind.td:           _wrap('Td'),
}
