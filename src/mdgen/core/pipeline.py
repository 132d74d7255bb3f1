"""Pipeline steps: discovery, output planning, output dir preparation, and conversion"""

import shutil
from pathlib import Path
from typing import Iterable, Mapping, Optional

from mdgen.config import Settings
from mdgen.core.cache import DocumentCache
from mdgen.core.context import RenderContext
from mdgen.core.models import OutputTarget
from mdgen.core.parse import MarkdownParseError, MarkdownParser, discover_files
from mdgen.core.paths import canonical_roots, canonicalize, relative_to_roots
from mdgen.core.render.handlers import Handler
from mdgen.core.render.loader import build_handlers
from mdgen.core.render.renderer import SEED_IMPORTS, NodeRenderer
from mdgen.core.utils.naming import fun_name_for, kt_file_name, package_for, route_for
from mdgen.logging import LoggingReporter, get_logger


logger = get_logger("pipeline")


class ConvertError(RuntimeError):
    """A conversion run cannot complete."""


class OutputCollisionError(ConvertError):
    """Two markdown sources would be written to the same generated file."""


def discover_markdown(roots: Iterable[Path]) -> list[Path]:
    """All .md files under the roots, deduplicated by canonical path, sorted."""
    found: set[Path] = set()
    for root in roots:
        for p in discover_files(Path(root)):
            canonical = canonicalize(p)
            if canonical is not None:
                found.add(canonical)
    return sorted(found, key=str)


def plan_outputs(
    files: Iterable[Path],
    roots: Iterable[Path],
    output_dir: Path,
    group: str,
    pages_package: str,
    ) -> list[OutputTarget]:
    """Map each source to its generated file. Raises on files outside the roots or colliding outputs."""
    roots = canonical_roots(roots)
    sources = sorted({canonicalize(Path(f)) or Path(f) for f in files}, key=str)
    targets: list[OutputTarget] = []
    claimed: dict[Path, Path] = {}

    for src in sources:
        located = relative_to_roots(src, roots)
        if located is None:
            raise ConvertError(f"{src} is not under any of the markdown roots")
        root, relative_path = located
        package = package_for(group, pages_package, relative_path)
        output_path = Path(output_dir, *package.split('.'), kt_file_name(relative_path))

        if output_path in claimed:
            raise OutputCollisionError(
                f"{claimed[output_path]} and {src} both map to {output_path}"
            )
        claimed[output_path] = src
        targets.append(OutputTarget(
            source=src,
            root=root,
            relative_path=relative_path,
            package=package,
            fun_name=fun_name_for(relative_path),
            output_path=output_path,
            route=route_for(relative_path),
        ))
    return targets


def prepare_output_dir(output_dir: Path, roots: Iterable[Path]) -> None:
    """Clear and recreate output_dir, which is owned entirely by the converter."""
    target = canonicalize(output_dir)
    if target is None:
        raise ConvertError(f"Cannot resolve output directory {output_dir}")
    for root in canonical_roots(roots):
        if root.is_relative_to(target):
            raise ConvertError(f"Refusing to clear {output_dir}: it contains markdown root {root}")
    try:
        if target.exists():
            shutil.rmtree(target)
        target.mkdir(parents=True)
    except OSError as e:
        raise ConvertError(f"Cannot prepare output directory {output_dir}: {e}") from e


def run_convert(
    files: Iterable[Path],
    roots: Iterable[Path],
    output_dir: Path,
    group: str = "com.example",
    pages_package: str = ".pages",
    default_root: Optional[str] = None,
    imports: Iterable[str] = (),
    depends_on_markdown_artifact: bool = True,
    parser_config: str = "gfm-like",
    handlers: Optional[Mapping[str, Handler]] = None,
    reporter: Optional[LoggingReporter] = None,
    ) -> list[OutputTarget]:
    """Render each markdown file to its Kotlin source under output_dir. Returns the written targets.

    Fails before touching output_dir when a file is outside the roots or two files
    collide; fails mid-run when a source file cannot be parsed.
    """
    roots = canonical_roots(roots)
    targets = plan_outputs(files, roots, output_dir, group, pages_package)
    prepare_output_dir(output_dir, roots)

    cache = DocumentCache(roots, MarkdownParser(parser_config))
    renderer = NodeRenderer(handlers, depends_on_markdown_artifact=depends_on_markdown_artifact)
    reporter = reporter or LoggingReporter()
    seed = [*SEED_IMPORTS, *imports]

    for target in targets:
        try:
            doc = cache.get(target.source)
        except MarkdownParseError as e:
            raise ConvertError(f"Failed to parse {target.source}: {e}") from e
        context = RenderContext(
            package=target.package,
            fun_name=target.fun_name,
            cache=cache,
            source_path=target.relative_path,
            group=group,
            default_root=default_root,
            imports=seed,
            reporter=reporter,
        )
        source = renderer.render(doc, context)
        try:
            target.output_path.parent.mkdir(parents=True, exist_ok=True)
            target.output_path.write_text(source, encoding='utf-8')
        except OSError as e:
            raise ConvertError(f"Cannot write {target.output_path}: {e}") from e
        logger.info("%s -> %s", target.relative_path, target.output_path)
    return targets


def convert_project(settings: Settings, reporter: Optional[LoggingReporter] = None) -> list[OutputTarget]:
    """Discover markdown under the configured roots and convert it all."""
    roots = settings.roots()
    try:
        handlers = build_handlers(settings.handlers)
    except ValueError as e:
        raise ConvertError(str(e)) from e
    return run_convert(
        discover_markdown(roots),
        roots,
        Path(settings.output_dir),
        group=settings.group,
        pages_package=settings.pages_package,
        default_root=settings.default_root,
        imports=settings.imports,
        depends_on_markdown_artifact=settings.depends_on_markdown_artifact,
        parser_config=settings.parser_config,
        handlers=handlers,
        reporter=reporter,
    )
