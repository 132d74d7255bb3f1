"""Canonical path resolution and markdown root containment checks"""

from pathlib import Path
from typing import Iterable, Optional

from mdgen.logging import get_logger


logger = get_logger("paths")


def canonicalize(path: Path) -> Optional[Path]:
    """Return the symlink- and '..'-resolved absolute path, or None if it cannot be resolved."""
    try:
        return Path(path).resolve()
    except (OSError, RuntimeError, ValueError) as e:    # RuntimeError: symlink loop; ValueError: NUL byte
        logger.debug("Cannot resolve %s: %s", path, e)
        return None


def canonical_roots(roots: Iterable[Path]) -> list[Path]:
    """Canonicalize roots, keeping order and dropping duplicates."""
    result: list[Path] = []
    for root in roots:
        canonical = canonicalize(root)
        if canonical is None:
            raise ValueError(f"Markdown root cannot be resolved: {root}")
        if canonical not in result:
            result.append(canonical)
    return result


def is_contained(canonical: Path, roots: Iterable[Path]) -> bool:
    """True if canonical lies at or below at least one (canonical) root."""
    return any(canonical.is_relative_to(root) for root in roots)


def _is_file(path: Path) -> bool:
    try:
        return path.is_file()
    except (OSError, ValueError) as e:
        logger.debug("Cannot stat %s: %s", path, e)
        return False


def resolve_canonical(path: Path | str, roots: list[Path]) -> Optional[Path]:
    """Resolve path to a canonical regular file inside the roots, or None.

    Absolute paths are accepted when they land inside any root. Relative paths
    are tried against each root in order; a candidate only counts when it stays
    inside the root it was joined to. Missing files, non-files, unreadable
    entries and root escapes all produce the same None.
    """
    path = Path(path)
    if path.is_absolute():
        canonical = canonicalize(path)
        if canonical is not None and _is_file(canonical) and is_contained(canonical, roots):
            return canonical
        return None

    for root in roots:
        canonical = canonicalize(root / path)
        if canonical is None:
            continue
        if _is_file(canonical) and is_contained(canonical, [root]):
            return canonical
    return None


def relative_to_roots(canonical: Path, roots: list[Path]) -> Optional[tuple[Path, str]]:
    """Return (root, POSIX relative path) for the first root containing canonical."""
    for root in roots:
        if canonical.is_relative_to(root):
            return root, canonical.relative_to(root).as_posix()
    return None
