"""Kotlin package, file, function and route names derived from markdown paths"""

import re
from pathlib import PurePosixPath

from mdgen.core.utils.slug import slugify


KOTLIN_HARD_KEYWORDS = {
    'as', 'break', 'class', 'continue', 'do', 'else', 'false', 'for', 'fun', 'if', 'in',
    'interface', 'is', 'null', 'object', 'package', 'return', 'super', 'this', 'throw',
    'true', 'try', 'typealias', 'typeof', 'val', 'var', 'when', 'while',
}

_NON_IDENT_RE = re.compile(r'\W')
_WORD_SPLIT_RE = re.compile(r'[^0-9A-Za-z]+')


def resolve_package_shortcut(group: str, package: str) -> str:
    """Expand a leading '.' to the project group ('.pages' -> 'com.example.pages')."""
    if not package:
        return group
    if package.startswith('.'):
        return f"{group}{package}" if group else package[1:]
    return package


def sanitize_package_part(part: str) -> str:
    """Make a single directory name a legal Kotlin package segment."""
    part = _NON_IDENT_RE.sub('_', part)
    if not part or part[0].isdigit() or part in KOTLIN_HARD_KEYWORDS:
        part = f"_{part}"
    return part


def package_parts(relative_path: str) -> list[str]:
    """Package segments for the directories of a root-relative markdown path."""
    return [sanitize_package_part(p) for p in PurePosixPath(relative_path).parent.parts]


def package_for(group: str, pages_package: str, relative_path: str) -> str:
    return '.'.join([resolve_package_shortcut(group, pages_package), *package_parts(relative_path)])


def kt_file_name(relative_path: str) -> str:
    """'docs/guide.md' -> 'Guide.kt'"""
    stem = PurePosixPath(relative_path).stem
    return f"{stem[:1].upper()}{stem[1:]}.kt"


def fun_name_for(relative_path: str) -> str:
    """'docs/getting-started.md' -> 'GettingStartedPage'"""
    stem = PurePosixPath(relative_path).stem
    words = [w for w in _WORD_SPLIT_RE.split(stem) if w]
    name = ''.join(f"{w[:1].upper()}{w[1:]}" for w in words) + 'Page'
    return f"_{name}" if name[0].isdigit() else name


def route_for(relative_path: str) -> str:
    """Site route for a root-relative markdown path ('docs/Getting Started.md' -> '/docs/getting-started')."""
    path = PurePosixPath(relative_path)
    dirs = [slugify(p) for p in path.parent.parts]
    if path.stem.lower() == 'index':
        return '/' + ''.join(f"{d}/" for d in dirs)
    return '/' + '/'.join([*dirs, slugify(path.stem)])


def qualify(name: str, group: str) -> str:
    """Resolve a '.'-prefixed reference against the project group."""
    return resolve_package_shortcut(group, name) if name.startswith('.') else name


def simple_name(qualified: str) -> str:
    return qualified.rsplit('.', 1)[-1]
