"""
Date and time parsing for due-date text.

Extracts a calendar date and an optional time of day from free text found on
a page. Several date formats may appear in the same block, so the formats are
tried in a fixed order and the first one that matches wins:

1. ISO numeric dates ("2026-01-26")
2. Month name, day and year ("Mon, Jan 26, 2026", "January 26th. 2026")
3. Month name and day without a year ("Jan 26")
4. Relative words ("today", "tomorrow")

More specific formats come first so that a looser pattern never overrides a
fully specified date elsewhere in the same text.
"""

import logging
import re
from datetime import datetime, timedelta
from typing import Callable, Optional, Tuple, Union

from pytz import timezone

from .config import DEFAULT_TIMEZONE
from .models import ParsedDate, ParsedTime, to_iso_timestamp

logger = logging.getLogger(__name__)

# Month abbreviations -> zero-based month index
MONTHS = {
    'jan': 0, 'feb': 1, 'mar': 2, 'apr': 3, 'may': 4, 'jun': 5,
    'jul': 6, 'aug': 7, 'sep': 8, 'sept': 8, 'oct': 9, 'nov': 10, 'dec': 11,
}

_MONTH = r'(jan|feb|mar|apr|may|jun|jul|aug|sep|sept|oct|nov|dec)[a-z]*'
_WEEKDAY_PREFIX = r'(?:(?:mon|tue|tues|wed|thu|thur|thurs|fri|sat|sun)[a-z]*[,.]?\s*)?'

DATE_PATTERNS = {
    # "2026-01-26"
    'iso': re.compile(r'\b(\d{4})-(\d{2})-(\d{2})\b'),
    # "Mon, Jan 26, 2026", "Jan 26, 2026", "January 26th 2026"
    'month_day_year': re.compile(
        r'\b' + _WEEKDAY_PREFIX + _MONTH + r'\.?\s+(\d{1,2})(?:st|nd|rd|th)?[,.]?\s*(\d{4})\b',
        re.IGNORECASE
    ),
    # "Jan 26" (no year)
    'month_day': re.compile(
        r'\b' + _MONTH + r'\.?\s+(\d{1,2})(?:st|nd|rd|th)?\b',
        re.IGNORECASE
    ),
    # "today", "tomorrow"
    'relative': re.compile(r'\b(today|tomorrow)\b', re.IGNORECASE),
}

# "at 17:00", "at 5:00 PM", "until 5 pm", "by 11:59pm"
PROXIMITY_TIME_PATTERN = re.compile(
    r'\b(?:at|until|by)\s+(\d{1,2})(?!\d)(?::(\d{2}))?\s*(am|pm)?\b',
    re.IGNORECASE
)

# Any "17:00", "5:00pm", "5 pm", "17:00 pm"
TIME_PATTERN = re.compile(r'\b(\d{1,2})(?::(\d{2}))?\s*(am|pm)?\b', re.IGNORECASE)


def parse_month(token: str) -> Optional[int]:
    """Map a month name or abbreviation to its zero-based index.

    Only the first three letters are considered, so "Sept", "September" and
    "Sep." all map to 8. Returns None for anything unrecognized.
    """
    if not token:
        return None
    return MONTHS.get(token.lower()[:3])


def normalize_time(hours: int, minutes: int, meridian: Optional[str]) -> ParsedTime:
    """Convert an hour/minute/meridian reading to the 24-hour clock.

    An hour above 12 is already a 24-hour reading, so any meridian attached to
    it is ignored ("17:00 pm" is 17:00).
    """
    if hours > 12:
        return ParsedTime(hours=hours, minutes=minutes)

    meridian = meridian.lower() if meridian else None
    if meridian == 'pm' and hours < 12:
        hours += 12
    elif meridian == 'am' and hours == 12:
        hours = 0

    return ParsedTime(hours=hours, minutes=minutes)


class DateTimeParser:
    """Parses due dates and times out of free text.

    All dates are interpreted as local calendar dates in the configured
    timezone. The reference "now" can be fixed for deterministic results.
    """

    def __init__(self, timezone_str: str = DEFAULT_TIMEZONE,
                 now: Union[datetime, Callable[[], datetime], None] = None):
        """Initialize parser.

        Args:
            timezone_str: Timezone used to interpret dates (default: DEFAULT_TIMEZONE)
            now: Reference time, fixed or a callable returning it. Naive values
                 are taken as local time in timezone_str. If None, the current
                 time is used on every call.
        """
        self.tz = timezone(timezone_str)
        self.now = now

    def current_time(self) -> datetime:
        """Reference time in the parser's timezone."""
        now = self.now() if callable(self.now) else self.now
        if now is None:
            return datetime.now(self.tz)
        if now.tzinfo is None:
            now = self.tz.localize(now)
        return now.astimezone(self.tz)

    def parse_date_time(self, text: str) -> Optional[str]:
        """Extract a due instant from text.

        Args:
            text: Free text that passed the keyword gate

        Returns:
            ISO-8601 instant string, or None if no date was found
        """
        parsed_date = self.parse_date(text)
        if parsed_date is None:
            return None

        parsed_time = self.parse_time(text)
        local_dt = datetime(parsed_date.year, parsed_date.month + 1, parsed_date.day)
        if parsed_time is not None:
            local_dt = local_dt.replace(hour=parsed_time.hours, minute=parsed_time.minutes)

        try:
            return to_iso_timestamp(self.tz.localize(local_dt))
        except OverflowError:
            # Real local date whose UTC instant is outside the datetime range
            logger.debug("Skipping out of range date: %r", text[:80])
            return None

    def parse_date(self, text: str) -> Optional[ParsedDate]:
        """Extract a calendar date using the fixed format precedence.

        A match whose components don't form a real date (month 13, Feb 30)
        is skipped and the next format is tried.
        """
        if not text:
            return None

        for name, handler in (
            ('iso', self._match_iso),
            ('month_day_year', self._match_month_day_year),
            ('month_day', self._match_month_day),
            ('relative', self._match_relative),
        ):
            match = DATE_PATTERNS[name].search(text)
            if not match:
                continue
            parsed = handler(match)
            if parsed is not None:
                return parsed
            logger.debug("Skipping malformed %s date: %r", name, match.group(0))

        return None

    def _match_iso(self, match) -> Optional[ParsedDate]:
        return self._checked(int(match.group(1)), int(match.group(2)) - 1, int(match.group(3)))

    def _match_month_day_year(self, match) -> Optional[ParsedDate]:
        month = parse_month(match.group(1))
        if month is None:
            return None
        return self._checked(int(match.group(3)), month, int(match.group(2)))

    def _match_month_day(self, match) -> Optional[ParsedDate]:
        month = parse_month(match.group(1))
        if month is None:
            return None
        day = int(match.group(2))

        now = self.current_time()
        # A date that has already passed this year most likely means next year.
        # Feb 29 moves on to the next leap year, at most 8 years away.
        for year in range(now.year, now.year + 9):
            candidate = self._checked(year, month, day)
            if candidate is None:
                continue
            if year > now.year or self.tz.localize(datetime(year, month + 1, day)) >= now:
                return candidate
        return None

    def _match_relative(self, match) -> Optional[ParsedDate]:
        today = self.current_time().date()
        if match.group(1).lower() == 'tomorrow':
            today = today + timedelta(days=1)
        return ParsedDate(year=today.year, month=today.month - 1, day=today.day)

    @staticmethod
    def _checked(year: int, month: int, day: int) -> Optional[ParsedDate]:
        """Build a ParsedDate only if it is a real calendar date."""
        parsed = ParsedDate(year=year, month=month, day=day)
        try:
            parsed.to_date()
        except ValueError:
            return None
        return parsed

    def parse_time(self, text: str) -> Optional[ParsedTime]:
        """Extract a time of day from text.

        A time right after "at", "until" or "by" is preferred since it is
        most likely tied to the deadline. Otherwise the whole text is
        scanned: times with am/pm win over plain 24-hour readings, and bare
        numbers without minutes or am/pm are ignored.
        """
        if not text:
            return None

        keyword_match = PROXIMITY_TIME_PATTERN.search(text)
        if keyword_match:
            reading = self._reading(keyword_match)
            if reading is not None:
                return normalize_time(*reading)

        times = []
        for match in TIME_PATTERN.finditer(text):
            # Skip bare numbers (page numbers, the "26" in a date)
            if not match.group(2) and not match.group(3):
                continue
            reading = self._reading(match)
            if reading is None:
                continue
            times.append(reading)

        if not times:
            return None

        with_meridian = [t for t in times if t[2]]
        if with_meridian:
            return normalize_time(*with_meridian[0])

        return normalize_time(*times[0])

    @staticmethod
    def _reading(match) -> Optional[Tuple[int, int, Optional[str]]]:
        """Pull (hours, minutes, meridian) out of a time match, or None if out of range."""
        hours = int(match.group(1))
        minutes = int(match.group(2) or 0)
        if hours > 23 or minutes > 59:
            return None
        meridian = match.group(3).lower() if match.group(3) else None
        return hours, minutes, meridian


def parse_date_time(text: str, timezone_str: str = DEFAULT_TIMEZONE) -> Optional[str]:
    """Parse a due instant from text using the current time as reference."""
    return DateTimeParser(timezone_str).parse_date_time(text)
