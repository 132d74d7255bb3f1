"""Shared fixtures for core unit tests"""

import pytest

from mdgen.core.cache import DocumentCache
from mdgen.core.context import RenderContext
from mdgen.core.parse import MarkdownParser
from mdgen.core.render.renderer import SEED_IMPORTS, NodeRenderer


SAMPLE_MD = """\
# Heading 1

A paragraph with **bold** text.

## Heading 2

- item one
- item two

```python
print("hello")
```
"""


class CountingParser(MarkdownParser):
    """MarkdownParser that records how many times it was invoked."""

    def __init__(self):
        super().__init__()
        self.calls = 0

    def __call__(self, text):
        self.calls += 1
        return super().__call__(text)


@pytest.fixture(name="content_root")
def content_root_fixture(tmp_path):
    root = tmp_path / "content"
    root.mkdir()
    return root


@pytest.fixture(name="write_md")
def write_md_fixture(content_root):
    """Write a markdown file under content_root and return its path."""
    def _write(relative: str, text: str):
        path = content_root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path
    return _write


@pytest.fixture(name="parser")
def parser_fixture():
    return CountingParser()


@pytest.fixture(name="cache")
def cache_fixture(content_root, parser):
    return DocumentCache([content_root], parser)


@pytest.fixture(name="render")
def render_fixture(cache):
    """Render a file under content_root; returns (kotlin_source, context)."""
    def _render(path, artifact=False, handlers=None, **context_kwargs):
        doc = cache.get(path)
        context_kwargs.setdefault("group", "com.example")
        context_kwargs.setdefault("imports", list(SEED_IMPORTS))
        context = RenderContext(
            package="com.example.pages",
            fun_name="TestPage",
            cache=cache,
            source_path=doc.relative_path,
            **context_kwargs,
        )
        renderer = NodeRenderer(handlers, depends_on_markdown_artifact=artifact)
        return renderer.render(doc, context), context
    return _render


@pytest.fixture(name="render_body")
def render_body_fixture(cache):
    """Render only the document body (no package/imports/function); returns (body, context)."""
    def _render_body(path, handlers=None):
        doc = cache.get(path)
        context = RenderContext("com.example.pages", "TestPage", cache, doc.relative_path, group="com.example")
        renderer = NodeRenderer(handlers, depends_on_markdown_artifact=False)
        context.renderer = renderer
        with context.rendering(doc):
            return renderer.render_children(doc.tree, context), context
    return _render_body


@pytest.fixture(name="sample_path")
def sample_path_fixture(write_md):
    return write_md("sample.md", SAMPLE_MD)
