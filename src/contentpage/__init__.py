"""contentpage: parse and render front-matter Markdown content pages"""

from contentpage.core.models import Block, BlockType, ContentPage, Link, PageMetadata
from contentpage.core.parse import parse, parse_file
from contentpage.core.render import render
from contentpage.errors import MalformedDocument

__all__ = [
    "Block",
    "BlockType",
    "ContentPage",
    "Link",
    "MalformedDocument",
    "PageMetadata",
    "parse",
    "parse_file",
    "render",
]
