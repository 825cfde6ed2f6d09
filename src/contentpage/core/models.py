"""Content page data model: typed metadata and ordered body blocks"""

import datetime as dt
from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictInt


class BlockType(str, Enum):
    """Structural units a page body is made of"""
    heading = "heading"
    paragraph = "paragraph"
    list = "list"
    quote = "quote"
    code = "code"
    table = "table"
    html = "html"
    rule = "rule"
    raw = "raw"


class Link(BaseModel):
    """A hyperlink found in a block's inline content."""
    model_config = ConfigDict(frozen=True)

    href: str
    text: str
    title: Optional[str] = None


class Block(BaseModel):
    """A single typed block element of a page body."""
    model_config = ConfigDict(frozen=True)

    type: BlockType
    content: str                        # verbatim source slice
    level: Optional[int] = None         # heading level (1-6); None for non-headings
    text: Optional[str] = None          # heading text
    ordered: bool = False
    start: Optional[int] = None         # first number of an ordered list
    items: list[str] = Field(default_factory=list)
    language: Optional[str] = None
    code: Optional[str] = None          # literal code text without fences
    attribution: Optional[str] = None
    links: list[Link] = Field(default_factory=list)


class PageMetadata(BaseModel):
    """Typed view over the front matter keys the site generator relies on.

    Unknown keys are accepted and kept as extras.
    """
    model_config = ConfigDict(frozen=True, extra="allow")

    title: Optional[str] = None
    date: Optional[Union[dt.datetime, dt.date]] = None
    weight: Optional[StrictInt] = None
    slug: Optional[str] = None
    draft: bool = False


class ContentPage(BaseModel):
    """A parsed content file: front matter plus an ordered sequence of body blocks."""
    model_config = ConfigDict(frozen=True)

    slug: str
    path: Optional[str] = None
    metadata: dict[str, Any] = Field(default_factory=dict)   # front matter as written, in source key order
    meta: PageMetadata = Field(default_factory=PageMetadata)
    front_matter_format: str = "yaml"
    body: str = ""
    blocks: list[Block] = Field(default_factory=list)
    references: dict[str, Any] = Field(default_factory=dict)

    @property
    def title(self) -> Optional[str]:
        return self.meta.title

    @property
    def weight(self) -> Optional[int]:
        return self.meta.weight

    @property
    def date(self) -> Optional[Union[dt.datetime, dt.date]]:
        return self.meta.date

    @property
    def draft(self) -> bool:
        return self.meta.draft

    @property
    def links(self) -> list[Link]:
        return [link for b in self.blocks for link in b.links]

    def outline(self) -> list[dict[str, Any]]:
        """Return heading entries (level, text) in document order."""
        return [
            {"level": b.level, "text": b.text}
            for b in self.blocks
            if b.type == BlockType.heading
        ]
