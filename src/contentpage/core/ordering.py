"""Sibling ordering and navigation listing by front matter weight"""

from pathlib import Path
from typing import Any, Iterable, Optional

from contentpage.core.models import ContentPage


def sort_key(page: ContentPage) -> tuple:
    """Ascending weight; unweighted pages last; ties by title, then path."""
    return (
        page.weight is None,
        page.weight or 0,
        (page.title or '').casefold(),
        page.path or '',
    )


def sort_pages(pages: Iterable[ContentPage]) -> list[ContentPage]:
    return sorted(pages, key=sort_key)


def _section(page: ContentPage, root: Optional[Path]) -> str:
    if not page.path:
        return '.'
    parent = Path(page.path).parent
    if root is not None:
        try:
            parent = parent.relative_to(root)
        except ValueError:
            pass
    return parent.as_posix()


def nav_entry(page: ContentPage, output_path: Optional[str] = None) -> dict[str, Any]:
    return {
        "title": page.title,
        "weight": page.weight,
        "date": page.date.isoformat() if page.date else None,
        "slug": page.slug,
        "path": page.path,
        "output": output_path,
    }


def build_navigation(
    pages: Iterable[ContentPage],
    root: Optional[Path] = None,
    outputs: Optional[dict[str, str]] = None,
    ) -> dict[str, list[dict[str, Any]]]:
    """Group pages by parent directory and order each sibling group by weight.

    outputs maps page path to its rendered output path, when known.
    """
    groups: dict[str, list[ContentPage]] = {}
    for page in pages:
        groups.setdefault(_section(page, root), []).append(page)
    outputs = outputs or {}
    return {
        section: [nav_entry(p, outputs.get(p.path)) for p in sort_pages(siblings)]
        for section, siblings in sorted(groups.items())
    }
