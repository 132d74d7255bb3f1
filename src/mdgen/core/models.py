"""Data models shared by the cache, renderer and pipeline"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from markdown_it.tree import SyntaxTreeNode


class NodeKind(str, Enum):
    """Node types produced by markdown-it that the default handler table knows about"""
    root = "root"
    inline = "inline"
    paragraph = "paragraph"
    heading = "heading"
    text = "text"
    softbreak = "softbreak"
    hardbreak = "hardbreak"
    em = "em"
    strong = "strong"
    s = "s"
    link = "link"
    image = "image"
    code_inline = "code_inline"
    code_block = "code_block"
    fence = "fence"
    blockquote = "blockquote"
    bullet_list = "bullet_list"
    ordered_list = "ordered_list"
    list_item = "list_item"
    hr = "hr"
    html_block = "html_block"
    html_inline = "html_inline"
    table = "table"
    thead = "thead"
    tbody = "tbody"
    tr = "tr"
    th = "th"
    td = "td"


@dataclass
class ParsedDoc:
    """A parsed markdown file as held by the document cache; not persisted."""
    path:          Path              # canonical path
    root:          Path              # canonical root the file lives under
    relative_path: str               # POSIX path relative to root
    frontmatter:   dict[str, Any]
    tree:          SyntaxTreeNode


@dataclass(frozen=True)
class OutputTarget:
    """Where one markdown source is rendered to."""
    source:        Path
    root:          Path
    relative_path: str
    package:       str
    fun_name:      str
    output_path:   Path
    route:         str
