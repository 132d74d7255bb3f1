"""Unit tests for core/context.py"""

import pytest

from mdgen.core.context import RenderContext, is_markdown_ref


@pytest.fixture(name="make_context")
def make_context_fixture(cache):
    def _make(source_path="index.md", **kwargs):
        kwargs.setdefault("group", "com.example")
        return RenderContext("com.example.pages", "IndexPage", cache, source_path, **kwargs)
    return _make


@pytest.mark.parametrize("ref,expected", [
    ("guide.md", True),
    ("docs/Guide.MD", True),
    ("guide.md#setup", True),
    ("/docs/guide.md?x=1", True),
    ("https://example.com/readme.md", False),
    ("mailto:someone@example.com", False),
    ("image.png", False),
    ("", False),
])
def test_is_markdown_ref(ref, expected):
    assert is_markdown_ref(ref) is expected


def test_add_import_dedups_in_first_seen_order(make_context):
    context = make_context(imports=["b.B", "a.A"])
    context.add_import("a.A")
    context.add_import("c.C")
    assert context.imports == ["b.B", "a.A", "c.C"]


def test_add_import_resolves_group_shortcut(make_context):
    context = make_context()
    context.add_import(".components.Layout")
    context.add_import("com.example.components.Layout")
    assert context.imports == ["com.example.components.Layout"]


def test_default_root_blank_is_none(make_context):
    assert make_context(default_root="").default_root is None


def test_resolve_relative_to_current_document(make_context, write_md):
    write_md("docs/setup.md", "setup\n")
    context = make_context(source_path="docs/guide.md")
    assert context.resolve("setup.md").relative_path == "docs/setup.md"


def test_resolve_root_relative(make_context, write_md):
    write_md("about.md", "about\n")
    context = make_context(source_path="docs/guide.md")
    assert context.resolve("/about.md").relative_path == "about.md"


def test_resolve_parent_directory(make_context, write_md):
    write_md("about.md", "about\n")
    context = make_context(source_path="docs/guide.md")
    assert context.resolve("../about.md").relative_path == "about.md"


def test_resolve_strips_anchor_and_decodes(make_context, write_md):
    write_md("getting started.md", "x\n")
    context = make_context()
    assert context.resolve("getting%20started.md#install").relative_path == "getting started.md"


def test_resolve_missing_warns(make_context):
    context = make_context(source_path="docs/guide.md")
    assert context.resolve("missing.md") is None
    assert context.reporter.warnings == ["docs/guide.md: could not resolve markdown reference 'missing.md'"]


def test_resolve_escape_warns_like_missing(make_context, tmp_path):
    """Escaping the roots reads exactly like a missing file."""
    (tmp_path / "outside").mkdir()
    (tmp_path / "outside" / "secret.md").write_text("secret")
    context = make_context()
    assert context.resolve("../outside/secret.md") is None
    assert context.reporter.warnings == ["index.md: could not resolve markdown reference '../outside/secret.md'"]


def test_rendering_switches_source_path(make_context, cache, write_md):
    doc = cache.get(write_md("docs/part.md", "part\n"))
    context = make_context(source_path="index.md")
    with context.rendering(doc):
        assert context.source_path == "docs/part.md"
    assert context.source_path == "index.md"
