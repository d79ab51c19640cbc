"""
Candidate collection.

Walks the visible elements of a page and yields distinct blocks of text that
are long enough to describe a task and short enough not to be the whole page.
"""

import logging
from typing import Iterator, Set

from .config import MAX_BLOCK_LENGTH, MIN_BLOCK_LENGTH
from .document import PageDocument
from .models import TextBlock

logger = logging.getLogger(__name__)


class CandidateCollector:
    """Collects candidate text blocks from a page."""

    def __init__(self, document: PageDocument,
                 min_length: int = MIN_BLOCK_LENGTH,
                 max_length: int = MAX_BLOCK_LENGTH):
        self.document = document
        self.min_length = min_length
        self.max_length = max_length

    def collect(self) -> Iterator[TextBlock]:
        """Yield visible text blocks in document order.

        Nested containers often repeat an ancestor's full text, so each
        distinct text is only yielded for the first element that has it.
        """
        seen: Set[str] = set()

        for element in self.document.iter_elements():
            if not self.document.is_visible(element):
                continue

            text = self.document.visible_text(element).strip()
            if not text or len(text) < self.min_length or len(text) > self.max_length:
                continue

            if text in seen:
                continue
            seen.add(text)

            yield TextBlock(source_node=element, text=text)

        logger.debug("Collected %d distinct text blocks", len(seen))
