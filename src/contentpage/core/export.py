"""Export: write rendered pages and the navigation index to the output directory"""

import json
import logging
from pathlib import Path
from typing import Optional

from contentpage.core.models import ContentPage
from contentpage.core.render import render, render_document


logger = logging.getLogger(__name__)

EXTENSIONS = {'html': 'html', 'md': 'md', 'markdown': 'md', 'json': 'json'}
INDEX_FILE = '_index.json'


def output_path(page: ContentPage, output_dir: Path, fmt: str = 'html', root: Optional[Path] = None) -> Path:
    """Output path mirrors the source directory structure:
      output_dir / <page dir relative to root> / page.slug.<ext>
    """
    rel_dir = Path()
    if page.path:
        parent = Path(page.path).parent
        if root is not None:
            try:
                parent = parent.relative_to(root)
            except ValueError:
                parent = Path()
        rel_dir = Path() if parent.is_absolute() else parent
    return output_dir / rel_dir / f"{page.slug}.{EXTENSIONS[fmt]}"


def write_page(
    page: ContentPage,
    output_dir: Path,
    fmt: str = 'html',
    root: Optional[Path] = None,
    standalone: bool = True,
    parser_config: str = 'gfm-like',
    ) -> Path:
    """Render page in fmt and write it under output_dir. Returns the written path."""
    dest = output_path(page, output_dir, fmt, root)
    dest.parent.mkdir(parents=True, exist_ok=True)

    content = render(page, fmt, parser_config)
    if fmt == 'html' and standalone:
        content = render_document(page, content)
    dest.write_text(content, encoding='utf-8')
    logger.debug("Wrote %s", dest)
    return dest


def write_index(navigation: dict, output_dir: Path) -> Path:
    """Write the navigation listing as JSON next to the rendered pages."""
    output_dir.mkdir(parents=True, exist_ok=True)
    dest = output_dir / INDEX_FILE
    dest.write_text(json.dumps(navigation, indent=2, ensure_ascii=False), encoding='utf-8')
    return dest
