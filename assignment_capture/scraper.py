"""
Task scraping pipeline.

Combines the extraction steps into one pass over a page:
1. Candidate collection (visible, distinct text blocks)
2. Keyword gate (does the block mention a due date?)
3. Date/time parsing (drop the block if no date is found)
4. Title resolution and description cleanup
5. Deduplication by (title, due date), keeping the first occurrence

A scrape only reads the page. It has no network or storage side effects and
never raises because of a single bad candidate; the worst case is an empty
result.
"""

import logging
from typing import List, Optional, Set, Tuple

from .collector import CandidateCollector
from .config import DEFAULT_TIMEZONE
from .date_parser import DateTimeParser
from .document import PageDocument
from .keywords import is_due_candidate
from .models import ScrapedTask
from .text_cleaner import TextNormalizer
from .title_resolver import TitleContext, TitleResolver

logger = logging.getLogger(__name__)


class TaskScraper:
    """Extracts due tasks from page documents."""

    def __init__(self,
                 parser: Optional[DateTimeParser] = None,
                 normalizer: Optional[TextNormalizer] = None,
                 timezone_str: str = DEFAULT_TIMEZONE):
        """Initialize scraper.

        Args:
            parser: Date/time parser (a new one for timezone_str if None)
            normalizer: Description cleaner (default junk rules if None)
            timezone_str: Timezone for the default parser
        """
        self.parser = parser or DateTimeParser(timezone_str)
        self.normalizer = normalizer or TextNormalizer()

    def scrape(self, document: PageDocument) -> List[ScrapedTask]:
        """Scrape one page.

        Args:
            document: Page to scrape

        Returns:
            Distinct tasks in the order their text appears on the page
        """
        results: List[ScrapedTask] = []
        seen: Set[Tuple[str, str]] = set()

        resolver = TitleResolver(document, TitleContext.from_document(document))
        collector = CandidateCollector(document)

        for block in collector.collect():
            if not is_due_candidate(block.text):
                continue

            due_date = self.parser.parse_date_time(block.text)
            if due_date is None:
                logger.debug("No date in due candidate: %r", block.text[:80])
                continue

            task = ScrapedTask(
                title=resolver.resolve(block),
                due_date=due_date,
                raw=self.normalizer.clean(block.text),
            )
            if task.key in seen:
                continue
            seen.add(task.key)
            results.append(task)

        logger.info("Scraped %d task(s)%s", len(results), f" from {document.url}" if document.url else "")
        return results

    def scrape_html(self, html: str, url: str = "") -> List[ScrapedTask]:
        """Parse an HTML string and scrape it."""
        return self.scrape(PageDocument.from_html(html, url=url))


def scrape(document: PageDocument) -> List[ScrapedTask]:
    """Scrape a page with the default configuration."""
    return TaskScraper().scrape(document)
