"""Capture assignments and due dates from rendered web pages."""

from .document import PageDocument
from .models import CapturedTask, ScrapedTask, TextBlock
from .scraper import TaskScraper, scrape

__version__ = "0.1.0"

__all__ = [
    "CapturedTask",
    "PageDocument",
    "ScrapedTask",
    "TaskScraper",
    "TextBlock",
    "scrape",
]
