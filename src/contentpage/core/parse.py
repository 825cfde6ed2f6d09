"""File discovery, front matter extraction, and markdown-it tokenization"""

import datetime as dt
import logging
import tomllib
from pathlib import Path
from typing import Any, Optional

import yaml
from markdown_it import MarkdownIt
from pydantic import ValidationError

from contentpage.core.extract.blocks import tokens_to_blocks
from contentpage.core.models import ContentPage, PageMetadata
from contentpage.core.utils.slug import slugify
from contentpage.errors import MalformedDocument


logger = logging.getLogger(__name__)

FRONT_MATTER_MARKERS = {'---': 'yaml', '+++': 'toml'}
MD_EXTENSIONS = {'.md', '.markdown'}


class MetadataDumper(yaml.SafeDumper):
    """SafeDumper that also writes TOML local times, as ISO strings."""


MetadataDumper.add_representer(dt.time, lambda dumper, value: dumper.represent_str(value.isoformat()))


def make_parser(preset: str = 'gfm-like') -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset name."""
    return MarkdownIt(preset, options_update={"linkify": False})


def _load_mapping(text: str, fmt: str, path: Optional[str]) -> dict[str, Any]:
    """Decode a front matter block; anything but a mapping is malformed."""
    try:
        data = tomllib.loads(text) if fmt == 'toml' else yaml.safe_load(text)
    except (yaml.YAMLError, tomllib.TOMLDecodeError) as e:
        raise MalformedDocument(f"invalid {fmt.upper()} front matter: {e}", path) from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise MalformedDocument(f"front matter must be a key/value mapping, got {type(data).__name__}", path)
    return data


def split_front_matter(text: str, path: Optional[str] = None) -> tuple[dict[str, Any], str, str]:
    """Return (front_matter, body, format) for a content file.

    The first line must be a marker line and the same marker must close the block.
    """
    lines = text.removeprefix('\ufeff').splitlines(keepends=True)
    opener = lines[0].strip() if lines else ''
    fmt = FRONT_MATTER_MARKERS.get(opener)
    if fmt is None:
        raise MalformedDocument("missing front matter", path)

    for end, line in enumerate(lines[1:], start=1):
        if line.strip() == opener:
            break
    else:
        raise MalformedDocument("unterminated front matter", path)

    front_matter = _load_mapping(''.join(lines[1:end]), fmt, path)
    return front_matter, ''.join(lines[end + 1:]), fmt


def _page_slug(meta: PageMetadata, path: Optional[str]) -> str:
    for candidate in (meta.slug, Path(path).stem if path else None, meta.title):
        if candidate and (slug := slugify(str(candidate))):
            return slug
    return 'page'


def parse(raw_text: str, path: Optional[str] = None, parser_config: str = 'gfm-like') -> ContentPage:
    """Parse a content file into a ContentPage. Raises MalformedDocument on bad front matter."""
    front_matter, body, fmt = split_front_matter(raw_text, path)
    try:
        meta = PageMetadata.model_validate(front_matter)
    except ValidationError as e:
        raise MalformedDocument(f"invalid front matter values: {e}", path) from e

    env: dict[str, Any] = {}
    tokens = make_parser(parser_config).parse(body, env)
    blocks = tokens_to_blocks(tokens, body.splitlines(keepends=True))
    logger.debug("Parsed %s: %d block(s)", path or '<text>', len(blocks))

    return ContentPage(
        slug=_page_slug(meta, path),
        path=path,
        metadata=front_matter,
        meta=meta,
        front_matter_format=fmt,
        body=body,
        blocks=blocks,
        references=env.get('references', {}),
    )


def parse_file(path: Path, parser_config: str = 'gfm-like') -> ContentPage:
    """Read and parse a single content file."""
    try:
        raw = Path(path).read_text(encoding='utf-8')
    except UnicodeDecodeError as e:
        raise MalformedDocument(f"not valid UTF-8 text: {e.reason} at byte {e.start}", str(path)) from e
    return parse(raw, str(path), parser_config)


def discover_files(path: Path) -> list[Path]:
    """Return sorted Markdown files under path, or [path] if a single file."""
    path = Path(path)
    if path.is_file():
        return [path] if path.suffix in MD_EXTENSIONS else []
    return sorted(p for p in path.rglob('*') if p.suffix in MD_EXTENSIONS)


def dump_metadata(page: ContentPage) -> str:
    """Serialize front matter back to YAML, keeping source key order.

    TOML local times have no YAML type and are written as ISO strings.
    """
    if not page.metadata:
        return ''
    return yaml.dump(page.metadata, Dumper=MetadataDumper, default_flow_style=False, allow_unicode=True, sort_keys=False)
