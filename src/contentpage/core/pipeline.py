"""Build pipeline: discover, parse, render, and index a content tree"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from contentpage.core.export import output_path, write_index, write_page
from contentpage.core.models import ContentPage
from contentpage.core.ordering import build_navigation
from contentpage.core.parse import discover_files, parse_file
from contentpage.errors import MalformedDocument


logger = logging.getLogger(__name__)


@dataclass
class BuildResult:
    """Outcome of a build: written pages, skipped drafts, and per-file errors."""
    written: list[tuple[str, Path]] = field(default_factory=list)
    drafts:  list[str] = field(default_factory=list)
    errors:  list[MalformedDocument] = field(default_factory=list)
    index:   Path | None = None

    @property
    def ok(self) -> bool:
        return not self.errors


def load_pages(path: Path, parser_config: str = 'gfm-like') -> tuple[list[ContentPage], list[MalformedDocument]]:
    """Parse every content file under path. Malformed files are excluded and returned as errors."""
    pages, errors = [], []
    for p in discover_files(path):
        try:
            pages.append(parse_file(p, parser_config))
        except MalformedDocument as e:
            logger.error("Excluding %s: %s", p, e.reason)
            errors.append(e)
    return pages, errors


def run_build(
    path: str,
    output_dir: Path,
    fmt: str = 'html',
    parser_config: str = 'gfm-like',
    include_drafts: bool = False,
    standalone: bool = True,
    ) -> BuildResult:
    """Render every page under path into output_dir and write the navigation index."""
    src = Path(path)
    root = src if src.is_dir() else src.parent
    pages, errors = load_pages(src, parser_config)
    result = BuildResult(errors=errors)

    published = []
    for page in pages:
        if page.draft and not include_drafts:
            logger.info("Skipping draft %s", page.path)
            result.drafts.append(page.path)
            continue
        published.append(page)

    outputs = {}
    claimed: dict[Path, str] = {}
    written = []
    for page in published:
        dest = output_path(page, output_dir, fmt, root)
        if dest in claimed:
            error = MalformedDocument(f"output {dest} already written by {claimed[dest]}", page.path)
            logger.error("Excluding %s: %s", page.path, error.reason)
            result.errors.append(error)
            continue
        claimed[dest] = page.path
        written.append(page)
        write_page(page, output_dir, fmt, root, standalone, parser_config)
        outputs[page.path] = dest.relative_to(output_dir).as_posix()
        result.written.append((page.path, dest))

    result.index = write_index(build_navigation(written, root, outputs), output_dir)
    return result
