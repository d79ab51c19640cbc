"""
Title resolution for scraped tasks.

Finds the best human-readable title for a candidate block. Page-wide headings
are tried before headings near the block, because on the sites we target the
page heading is usually the assignment name while nested headings are often
widget labels.
"""

from dataclasses import dataclass
from typing import Optional

from bs4 import Tag

from .config import DEFAULT_TITLE
from .document import HEADING_TAGS, PageDocument
from .models import TextBlock


@dataclass(frozen=True)
class TitleContext:
    """Page-wide title sources, looked up once per document."""
    primary_heading: str = ""       # Text of the first <h1>
    secondary_heading: str = ""     # Text of the first <h2>
    page_title: str = ""            # Text of <title>
    fallback: str = DEFAULT_TITLE

    @classmethod
    def from_document(cls, document: PageDocument, fallback: str = DEFAULT_TITLE) -> "TitleContext":
        return cls(
            primary_heading=document.heading_text('h1').strip(),
            secondary_heading=document.heading_text('h2').strip(),
            page_title=document.title.strip(),
            fallback=fallback,
        )


class TitleResolver:
    """Resolves a title for each candidate block of one document."""

    def __init__(self, document: PageDocument, context: Optional[TitleContext] = None):
        """Initialize resolver.

        Args:
            document: Page the blocks were collected from
            context: Page-wide title sources (built from the document if None)
        """
        self.document = document
        self.context = context or TitleContext.from_document(document)

    def resolve(self, block: TextBlock) -> str:
        """Find a title for a block. Never fails.

        Order: page <h1>, page <h2>, nearest heading walking up from the
        block's element, page <title>, fixed fallback.
        """
        if self.context.primary_heading:
            return self.context.primary_heading

        if self.context.secondary_heading:
            return self.context.secondary_heading

        nearby = self.find_nearby_heading(block.source_node)
        if nearby:
            return nearby

        if self.context.page_title:
            return self.context.page_title

        return self.context.fallback

    def find_nearby_heading(self, node: Optional[Tag]) -> str:
        """Walk up from node looking for a heading inside or just before each ancestor."""
        body = self.document.body
        current = node
        while isinstance(current, Tag) and current is not body and current is not self.document.soup:
            for heading in current.find_all(HEADING_TAGS):
                text = self.document.visible_text(heading).strip()
                if text:
                    return text

            previous = current.find_previous_sibling()
            if previous is not None and previous.name in HEADING_TAGS:
                text = self.document.visible_text(previous).strip()
                if text:
                    return text

            current = current.parent

        return ""
