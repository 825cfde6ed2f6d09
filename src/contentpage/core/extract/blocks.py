"""Token-to-Block conversion using source line positions"""

import logging
import re

from contentpage.core.models import Block, BlockType, Link
from contentpage.core.utils.tokens import block_span, heading_level


logger = logging.getLogger(__name__)

BLOCK_TYPE_MAP: dict[str, BlockType] = {
    'heading_open':      BlockType.heading,
    'paragraph_open':    BlockType.paragraph,
    'bullet_list_open':  BlockType.list,
    'ordered_list_open': BlockType.list,
    'fence':             BlockType.code,
    'code_block':        BlockType.code,
    'table_open':        BlockType.table,
    'html_block':        BlockType.html,
    'blockquote_open':   BlockType.quote,
    'hr':                BlockType.rule,
}

QUOTE_MARKER_RE = re.compile(r'^ {0,3}> ?')
ATTRIBUTION_RE = re.compile(r'^(?:—|―|--(?!-))\s*(\S.*?)\s*$')


def _source_slice(token, source_lines: list[str]) -> str:
    """Extract raw source for a block via token.map; fallback to token.content."""
    if token.map:
        start, end = token.map
        return ''.join(source_lines[start:end]).rstrip()
    return token.content.rstrip()


def _links(group: list) -> list[Link]:
    """Collect hyperlinks from the inline tokens of a block."""
    links: list[Link] = []
    for tok in group:
        if tok.type != 'inline' or not tok.children:
            continue
        current = None
        for child in tok.children:
            if child.type == 'link_open':
                current = {"href": child.attrGet('href') or '', "title": child.attrGet('title'), "text": []}
            elif child.type == 'link_close' and current is not None:
                links.append(Link(href=current["href"], title=current["title"], text=''.join(current["text"])))
                current = None
            elif current is not None and child.type in ('text', 'code_inline'):
                current["text"].append(child.content)
    return links


def split_attribution(content: str) -> tuple[str, str | None]:
    """Strip one level of quote markers; return (quoted markdown, attribution or None)."""
    lines = [QUOTE_MARKER_RE.sub('', line) for line in content.splitlines()]
    while lines and not lines[-1].strip():
        lines.pop()
    if lines:
        m = ATTRIBUTION_RE.match(lines[-1].strip())
        if m:
            inner = lines[:-1]
            while inner and not inner[-1].strip():
                inner.pop()
            return '\n'.join(inner), m.group(1)
    return '\n'.join(lines), None


def _list_items(group: list, source_lines: list[str]) -> list[str]:
    """Source slice of each direct child item of the list opened at group[0]."""
    item_level = group[0].level + 1
    return [
        _source_slice(tok, source_lines)
        for tok in group
        if tok.type == 'list_item_open' and tok.level == item_level
    ]


def _build_block(block_type: BlockType, group: list, source_lines: list[str]) -> Block:
    tok = group[0]
    content = _source_slice(tok, source_lines)
    fields = {"type": block_type, "content": content, "links": _links(group)}

    if block_type == BlockType.heading:
        fields["level"] = heading_level(tok)
        fields["text"] = group[1].content if len(group) > 1 and group[1].type == 'inline' else ''
    elif block_type == BlockType.list:
        fields["ordered"] = tok.type == 'ordered_list_open'
        if fields["ordered"]:
            fields["start"] = int(tok.attrGet('start') or 1)
        fields["items"] = _list_items(group, source_lines)
    elif block_type == BlockType.code:
        info = (tok.info or '').strip()
        fields["language"] = info.split()[0] if info else None
        fields["code"] = tok.content
    elif block_type == BlockType.quote:
        _, fields["attribution"] = split_attribution(content)

    return Block(**fields)


def tokens_to_blocks(tokens: list, source_lines: list[str]) -> list[Block]:
    """Convert a body token stream to typed Blocks, one per top-level element.

    Constructs without a known BlockType become raw blocks carrying their source.
    """
    blocks: list[Block] = []
    i = 0
    while i < len(tokens):
        tok = tokens[i]
        if tok.level != 0 or tok.nesting == -1:
            i += 1
            continue

        end = block_span(tokens, i)
        block_type = BLOCK_TYPE_MAP.get(tok.type)
        if block_type is None:
            logger.debug("Passing through unrecognized token %s as raw", tok.type)
            block_type = BlockType.raw
        blocks.append(_build_block(block_type, tokens[i:end + 1], source_lines))
        i = end + 1

    return blocks
