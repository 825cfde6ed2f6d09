"""Render a ContentPage body to HTML, normalized Markdown, or a JSON sidecar"""

import json
import logging
from typing import Any

from markdown_it import MarkdownIt
from markdown_it.common.utils import escapeHtml

from contentpage.core.extract.blocks import split_attribution
from contentpage.core.models import Block, BlockType, ContentPage
from contentpage.core.parse import dump_metadata, make_parser


logger = logging.getLogger(__name__)

FORMAT_ALIASES = {'html': 'html', 'md': 'markdown', 'markdown': 'markdown', 'json': 'json'}
LANG_PREFIX = 'language-'


def _code_html(block: Block) -> str:
    cls = f' class="{LANG_PREFIX}{escapeHtml(block.language)}"' if block.language else ''
    return f"<pre><code{cls}>{escapeHtml(block.code or '')}</code></pre>\n"


def _quote_html(block: Block, md: MarkdownIt, env: dict) -> str:
    """Quote body and attribution go into separate figure children."""
    inner, attribution = split_attribution(block.content)
    return (
        '<figure class="quote">\n'
        f'<blockquote>\n{md.render(inner, env)}</blockquote>\n'
        f'<figcaption>{md.renderInline(attribution, env)}</figcaption>\n'
        '</figure>\n'
    )


def render_block_html(block: Block, md: MarkdownIt, references: dict[str, Any]) -> str:
    """Render a single block to an HTML fragment."""
    env = {"references": dict(references)}
    if block.type == BlockType.code:
        return _code_html(block)
    if block.type == BlockType.quote and block.attribution:
        return _quote_html(block, md, env)
    if block.type == BlockType.raw:
        return block.content + "\n"
    return md.render(block.content + "\n", env)


def render_html(page: ContentPage, parser_config: str = 'gfm-like') -> str:
    """Concatenate block fragments in body order."""
    md = make_parser(parser_config)
    return ''.join(render_block_html(b, md, page.references) for b in page.blocks)


def _escape_title(title: str) -> str:
    return title.replace("\\", "\\\\").replace('"', '\\"')


def _reference_definitions(references: dict[str, Any]) -> list[str]:
    lines = []
    for label, ref in references.items():
        title = ref.get("title")
        title = f' "{_escape_title(title)}"' if title else ''
        lines.append(f'[{label}]: {ref["href"]}{title}')
    return lines


def render_markdown(page: ContentPage) -> str:
    """Return body blocks with a YAML front matter block prepended."""
    parts = [b.content for b in page.blocks]
    if page.references:
        parts.append('\n'.join(_reference_definitions(page.references)))
    body = '\n\n'.join(parts)
    return f"---\n{dump_metadata(page)}---\n\n{body}\n"


def build_sidecar(page: ContentPage) -> dict[str, Any]:
    """Build the JSON sidecar: identity, front matter, outline, links, and blocks."""
    data = page.model_dump(mode='json', include={'metadata'})
    return {
        "slug": page.slug,
        "path": page.path,
        "front_matter_format": page.front_matter_format,
        "metadata": data["metadata"],
        "outline": page.outline(),
        "links": [link.model_dump(exclude_none=True) for link in page.links],
        "blocks": [b.model_dump(mode='json', exclude_defaults=True) for b in page.blocks],
    }


def render(page: ContentPage, target_format: str = 'html', parser_config: str = 'gfm-like') -> str:
    """Render page body to target_format ('html', 'markdown'/'md', or 'json')."""
    fmt = FORMAT_ALIASES.get(target_format.lower())
    if fmt is None:
        raise ValueError(f"Unsupported target format: {target_format!r}")
    logger.debug("Rendering %s as %s", page.slug, fmt)
    if fmt == 'html':
        return render_html(page, parser_config)
    if fmt == 'markdown':
        return render_markdown(page)
    return json.dumps(build_sidecar(page), indent=2, ensure_ascii=False)


def render_document(page: ContentPage, fragment: str) -> str:
    """Wrap an HTML fragment in a minimal standalone document."""
    title = escapeHtml(page.title or page.slug)
    return (
        "<!DOCTYPE html>\n"
        "<html>\n<head>\n"
        '<meta charset="utf-8">\n'
        f"<title>{title}</title>\n"
        "</head>\n<body>\n<article>\n"
        f"{fragment}"
        "</article>\n</body>\n</html>\n"
    )
