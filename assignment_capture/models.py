"""
Data models for the assignment capture engine.

This module defines the data structures passed between the stages of a scrape.
All models use Python dataclasses, which keep the code small and give us
__init__, __repr__ and __eq__ for free.

These models represent:
- Text blocks collected from a page (with a borrowed reference to the element)
- Parsed date and time components
- Scraped tasks produced by one scrape pass
- Captured tasks handed to the transport boundary (API submission, review)
"""

from dataclasses import dataclass, field, asdict
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Tuple

import pytz


FALLBACK_TITLE = "Captured task"


@dataclass
class TextBlock:
    """One unit of visible text considered for extraction.

    The source_node is a bs4 Tag borrowed from the page document. It is only
    used to look for nearby headings and is never modified.
    """
    source_node: Any            # bs4 Tag the text was read from
    text: str                   # Trimmed visible text of the element


@dataclass
class ParsedDate:
    """A fully resolved calendar date.

    Month is zero-based (0 = January, 11 = December) so that it lines up with
    the month lookup table used by the parser.
    """
    year: int
    month: int                  # 0-11
    day: int

    def to_date(self) -> date:
        """Convert to a datetime.date (raises ValueError for impossible dates)."""
        return date(self.year, self.month + 1, self.day)


@dataclass
class ParsedTime:
    """A time of day on the 24-hour clock."""
    hours: int                  # 0-23
    minutes: int                # 0-59


@dataclass(frozen=True)
class ScrapedTask:
    """A task found on a page during one scrape pass.

    Instances are immutable. Within one pass the (title, due_date) pair is
    unique.
    """
    title: str                  # Best human-readable title (heading, page title, or fallback)
    due_date: str               # ISO-8601 instant, e.g. "2026-01-26T05:00:00.000Z"
    raw: str                    # Cleaned description text (breadcrumb + details)

    @property
    def key(self) -> Tuple[str, str]:
        """Deduplication key."""
        return (self.title, self.due_date)

    def to_dict(self) -> Dict[str, str]:
        return {"title": self.title, "dueDate": self.due_date, "raw": self.raw}


@dataclass
class CapturedTask:
    """A task record as handed to the review surface and the remote API.

    This is a ScrapedTask plus the submission metadata (status, priority,
    labels and source URL) that the engine itself never deals with.
    """
    title: str = FALLBACK_TITLE
    description: str = ""
    due_date: Optional[str] = None
    labels: List[str] = field(default_factory=lambda: ["capture", "web"])
    status: str = "todo"
    priority: str = "medium"
    url: str = ""
    raw: str = ""

    @classmethod
    def from_scraped(cls, task: ScrapedTask, url: str = "") -> "CapturedTask":
        """Wrap a freshly scraped task for review."""
        return cls(
            title=task.title,
            due_date=task.due_date,
            labels=["capture"],
            url=url,
            raw=task.raw,
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any], url: Optional[str] = None) -> "CapturedTask":
        """Build a record from a (possibly partial) JSON payload.

        Missing or empty fields fall back to the defaults; the url argument is
        used when the payload carries none.
        """
        labels = data.get("labels")
        return cls(
            title=data.get("title") or FALLBACK_TITLE,
            description=data.get("description") or "",
            due_date=data.get("dueDate") or None,
            labels=labels if labels else ["capture", "web"],
            status=data.get("status") or "todo",
            priority=data.get("priority") or "medium",
            url=data.get("url") or url or "",
            raw=data.get("raw") or "",
        )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["dueDate"] = data.pop("due_date")
        return data


# Serialization helpers for JSON conversion

def to_iso_timestamp(dt: datetime) -> str:
    """Convert an aware datetime to a UTC ISO-8601 instant with millisecond precision.

    Example: 2026-01-26 00:00 America/Toronto -> "2026-01-26T05:00:00.000Z"
    """
    utc_dt = dt.astimezone(pytz.utc)
    return utc_dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc_dt.microsecond // 1000:03d}Z"


def serialize_datetime(dt: datetime) -> str:
    """Convert datetime to ISO format string."""
    return dt.isoformat()


def deserialize_datetime(s: str) -> datetime:
    """Convert ISO format string to datetime.

    Accepts the trailing "Z" used by to_iso_timestamp.
    """
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    return datetime.fromisoformat(s)
