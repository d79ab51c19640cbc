"""
Page document model.

Wraps a parsed HTML page (BeautifulSoup) and provides what the extraction
engine needs from it:
- a visibility check per element
- the flattened visible text of an element (an approximation of innerText)
- document-order traversal of elements
- page-wide heading and title lookup

The engine only reads from the document; nothing here modifies the tree.
"""

import logging
import re
from typing import Iterator, List, Optional

import requests
from bs4 import BeautifulSoup, Comment, NavigableString, Tag
from bs4.element import CData, Declaration, Doctype, ProcessingInstruction

from .config import REQUEST_TIMEOUT, USER_AGENT
from .errors import FetchError

logger = logging.getLogger(__name__)

# Elements that never carry readable page content
NON_CONTENT_TAGS = {
    'script', 'style', 'noscript', 'template', 'svg', 'path',
    'head', 'title', 'meta', 'link',
}

# Elements rendered on their own line
BLOCK_TAGS = {
    'address', 'article', 'aside', 'blockquote', 'body', 'dd', 'details', 'dialog',
    'div', 'dl', 'dt', 'fieldset', 'figcaption', 'figure', 'footer', 'form',
    'h1', 'h2', 'h3', 'h4', 'h5', 'h6', 'header', 'hgroup', 'hr', 'html', 'li',
    'main', 'nav', 'ol', 'p', 'pre', 'section', 'summary', 'table', 'tbody',
    'thead', 'tfoot', 'tr', 'ul', 'caption', 'option', 'legend',
}

# Elements rendered as separate cells on the same line
CELL_TAGS = {'td', 'th'}

HEADING_TAGS = ['h1', 'h2', 'h3', 'h4']

# String subclasses that are not rendered text
_SKIPPED_STRINGS = (Comment, CData, Declaration, Doctype, ProcessingInstruction)

_DISPLAY_NONE = re.compile(r'(?:^|;)\s*display\s*:\s*none\b', re.IGNORECASE)
_VISIBILITY_HIDDEN = re.compile(r'(?:^|;)\s*visibility\s*:\s*(?:hidden|collapse)\b', re.IGNORECASE)
_OPACITY_ZERO = re.compile(r'(?:^|;)\s*opacity\s*:\s*(?:0+(?:\.0*)?|\.0+)\s*(?:;|$|!)', re.IGNORECASE)


def _is_self_hidden(tag: Tag) -> bool:
    """Check the element's own markup for anything that hides it."""
    if tag.name in NON_CONTENT_TAGS:
        return True
    if tag.has_attr('hidden'):
        return True
    style = tag.get('style')
    if style:
        if _DISPLAY_NONE.search(style) or _VISIBILITY_HIDDEN.search(style) or _OPACITY_ZERO.search(style):
            return True
    if tag.name == 'input' and str(tag.get('type', '')).lower() == 'hidden':
        return True
    return False


class PageDocument:
    """A read-only view of one rendered page."""

    def __init__(self, soup: BeautifulSoup, url: str = ""):
        """Initialize document.

        Args:
            soup: Parsed page
            url: Address the page was loaded from (if known)
        """
        self.soup = soup
        self.url = url

    @classmethod
    def from_html(cls, html: str, url: str = "") -> "PageDocument":
        """Parse an HTML string."""
        return cls(BeautifulSoup(html or "", 'html.parser'), url=url)

    @classmethod
    def from_url(cls, url: str, session: Optional[requests.Session] = None) -> "PageDocument":
        """Download and parse a page.

        Raises:
            FetchError: If the page can't be downloaded or isn't HTML
        """
        http = session or requests
        try:
            response = http.get(
                url,
                timeout=REQUEST_TIMEOUT,
                headers={"User-Agent": USER_AGENT},
                allow_redirects=True,
            )
        except requests.exceptions.RequestException as e:
            raise FetchError(f"Could not fetch {url}: {e}") from e

        if not 200 <= response.status_code < 300:
            raise FetchError(f"Could not fetch {url}: HTTP {response.status_code}")

        content_type = response.headers.get("Content-Type", "").lower()
        if content_type and "html" not in content_type:
            raise FetchError(f"Not an HTML page ({content_type}): {url}")

        logger.info("Fetched %s (%d bytes)", url, len(response.content))
        return cls.from_html(response.text, url=url)

    @property
    def body(self) -> Optional[Tag]:
        return self.soup.body

    @property
    def title(self) -> str:
        """Text of the <title> element, or an empty string."""
        if self.soup.title is None:
            return ""
        return " ".join(self.soup.title.get_text().split())

    def iter_elements(self) -> Iterator[Tag]:
        """All elements in document order."""
        return iter(self.soup.find_all(True))

    def is_visible(self, node: Tag) -> bool:
        """Check if an element would be rendered.

        An element is visible when neither it nor any of its ancestors is a
        non-content element, carries the hidden attribute or has an inline
        style that hides it.
        """
        if not isinstance(node, Tag):
            return False
        current = node
        while current is not None and current is not self.soup:
            if _is_self_hidden(current):
                return False
            current = current.parent
        return True

    def visible_text(self, node: Tag) -> str:
        """Flattened visible text of an element.

        Block elements and <br> start new lines; whitespace inside a line is
        collapsed and empty lines are dropped. Hidden subtrees contribute
        nothing.
        """
        if node is None or not self.is_visible(node):
            return ""

        parts: List[str] = []
        self._collect_text(node, parts)

        lines = []
        for line in "".join(parts).split("\n"):
            line = " ".join(line.split())
            if line:
                lines.append(line)
        return "\n".join(lines)

    def _collect_text(self, node, parts: List[str]) -> None:
        for child in node.children:
            if isinstance(child, NavigableString):
                if isinstance(child, _SKIPPED_STRINGS):
                    continue
                parts.append(str(child).replace("\n", " "))
            elif isinstance(child, Tag):
                if _is_self_hidden(child):
                    continue
                if child.name == 'br':
                    parts.append("\n")
                elif child.name in BLOCK_TAGS:
                    parts.append("\n")
                    self._collect_text(child, parts)
                    parts.append("\n")
                elif child.name in CELL_TAGS:
                    parts.append(" ")
                    self._collect_text(child, parts)
                    parts.append(" ")
                else:
                    self._collect_text(child, parts)

    def first_heading(self, name: str) -> Optional[Tag]:
        """First element with the given heading tag name anywhere in the page."""
        return self.soup.find(name)

    def heading_text(self, name: str) -> str:
        """Visible text of the first heading with the given tag name."""
        heading = self.first_heading(name)
        if heading is None:
            return ""
        return self.visible_text(heading)
