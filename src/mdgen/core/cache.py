"""Per-run cache of parsed markdown documents keyed by canonical path"""

from pathlib import Path
from typing import Any, Callable, Iterable, Optional

from markdown_it.tree import SyntaxTreeNode

from mdgen.core.models import ParsedDoc
from mdgen.core.parse import MarkdownParseError, MarkdownParser, read_markdown
from mdgen.core.paths import canonical_roots, canonicalize, relative_to_roots, resolve_canonical
from mdgen.logging import get_logger


ParseFn = Callable[[str], tuple[dict[str, Any], SyntaxTreeNode]]

logger = get_logger("cache")


class DocumentCache:
    """Parsed markdown documents, each file parsed at most once.

    Markdown files can reference other markdown files, so while converting a
    collection the same file may be requested many times. Build one cache per
    conversion run and discard it afterwards; files edited between runs must be
    picked up again.

    Only files under one of the roots are ever parsed. A direct `get` of a file
    outside the roots, or of a file that fails to parse, raises; `get_relative`
    reports the same conditions as None.
    """

    def __init__(self, roots: Iterable[Path], parse: Optional[ParseFn] = None):
        self.roots = canonical_roots(roots)
        self._parse = parse or MarkdownParser()
        self._docs: dict[Path, ParsedDoc] = {}

    def __contains__(self, path: Path) -> bool:
        canonical = canonicalize(path)
        return canonical is not None and canonical in self._docs

    def __len__(self) -> int:
        return len(self._docs)

    def get(self, path: Path) -> ParsedDoc:
        """Return the parsed document for path, parsing it on first access."""
        canonical = canonicalize(path)
        located = relative_to_roots(canonical, self.roots) if canonical is not None else None
        if located is None:
            raise ValueError(
                f"File {path} is not under any of the markdown roots: "
                f"{', '.join(str(r) for r in self.roots)}"
            )
        if canonical in self._docs:
            logger.debug("Cache hit: %s", canonical)
            return self._docs[canonical]

        root, relative_path = located
        frontmatter, tree = self._parse(read_markdown(canonical))
        logger.debug("Parsed %s", canonical)
        doc = ParsedDoc(
            path=canonical,
            root=root,
            relative_path=relative_path,
            frontmatter=frontmatter,
            tree=tree,
        )
        self._docs[canonical] = doc
        return doc

    def get_relative(self, relative_path: str) -> Optional[ParsedDoc]:
        """Resolve relative_path against the roots and return its document, or None.

        None is returned when no root holds a matching regular file, when the
        path escapes the root it was resolved against (e.g. '../public/license.md',
        which may deliberately point at a raw file served as is), or when the
        referenced file cannot be read or parsed.
        """
        canonical = resolve_canonical(relative_path, self.roots)
        if canonical is None:
            logger.debug("No markdown file for reference %r", relative_path)
            return None
        try:
            return self.get(canonical)
        except MarkdownParseError as e:
            logger.debug("Referenced file %s failed to parse: %s", canonical, e)
            return None
