"""File discovery, frontmatter extraction, and markdown-it tree building"""

import re
from pathlib import Path
from typing import Any

import yaml
from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode


FRONTMATTER_RE = re.compile(r'^---\s*\n(.*?)\n---\s*(?:\n|$)', re.DOTALL)
MD_EXTENSIONS = {'.md'}


class MarkdownParseError(ValueError):
    """A markdown file could not be read or its frontmatter is malformed."""


def make_parser(preset: str = 'gfm-like') -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset name."""
    return MarkdownIt(preset, options_update={"linkify": False})


def _strip_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Return (frontmatter_dict, body) with YAML header removed."""
    m = FRONTMATTER_RE.match(text)
    if m:
        try:
            fm = yaml.safe_load(m.group(1)) or {}
        except yaml.YAMLError as e:
            raise MarkdownParseError(f"Invalid YAML frontmatter: {e}") from e
        if not isinstance(fm, dict):
            raise MarkdownParseError(f"Invalid YAML frontmatter: expected a mapping, got {type(fm).__name__}")
        return fm, text[m.end():]
    return {}, text


def discover_files(path: Path) -> list[Path]:
    """Return sorted .md files under path, or [path] if a single file."""
    if path.is_file():
        return [path] if path.suffix in MD_EXTENSIONS else []
    if not path.is_dir():
        return []
    return sorted(p for p in path.rglob('*') if p.suffix in MD_EXTENSIONS and p.is_file())


class MarkdownParser:
    """Callable turning markdown text into (frontmatter, syntax tree)."""

    def __init__(self, preset: str = 'gfm-like'):
        self.preset = preset
        self._md = make_parser(preset)

    def __call__(self, text: str) -> tuple[dict[str, Any], SyntaxTreeNode]:
        frontmatter, body = _strip_frontmatter(text)
        return frontmatter, SyntaxTreeNode(self._md.parse(body))


def read_markdown(path: Path) -> str:
    """Read a markdown file as UTF-8, reporting failures as MarkdownParseError."""
    try:
        return path.read_text(encoding='utf-8')
    except UnicodeDecodeError as e:
        raise MarkdownParseError(f"{path} is not valid UTF-8: {e}") from e
    except OSError as e:
        raise MarkdownParseError(f"Cannot read {path}: {e}") from e
