"""
iCalendar generation module.

Exports scraped tasks as due events in a standards-compliant .ics file.
"""

import uuid
from datetime import timedelta
from typing import Iterable

from icalendar import Calendar, Event
from pytz import timezone

from .config import DEFAULT_TIMEZONE
from .models import ScrapedTask, deserialize_datetime


class ICalendarGenerator:
    """Generates iCalendar (.ics) files from scraped tasks."""

    def __init__(self, timezone_str: str = DEFAULT_TIMEZONE):
        """Initialize calendar generator.

        Args:
            timezone_str: Timezone the due events are shown in
        """
        self.tz = timezone(timezone_str)

    def generate_calendar(self, tasks: Iterable[ScrapedTask], source_url: str = "") -> Calendar:
        """Generate a calendar with one due event per task.

        Args:
            tasks: Scraped tasks
            source_url: Page the tasks came from (added to descriptions)

        Returns:
            Calendar object ready for export
        """
        cal = Calendar()
        cal.add('prodid', '-//Assignment Capture//EN')
        cal.add('version', '2.0')
        cal.add('calscale', 'GREGORIAN')
        cal.add('method', 'PUBLISH')

        for task in tasks:
            cal.add_component(self._create_due_event(task, source_url))

        return cal

    def _create_due_event(self, task: ScrapedTask, source_url: str = "") -> Event:
        """Create event for a task's due date.

        The UID is derived from the dedup key, so exporting the same page
        twice updates events instead of duplicating them.
        """
        due_dt = deserialize_datetime(task.due_date).astimezone(self.tz)

        event = Event()
        event.add('uid', f"{uuid.uuid5(uuid.NAMESPACE_URL, task.title + '|' + task.due_date)}@assignment-capture")
        event.add('dtstart', due_dt)
        event.add('dtend', due_dt + timedelta(minutes=1))
        event.add('summary', f"DUE: {task.title}")

        desc_parts = []
        if source_url:
            desc_parts.append(f"Captured from: {source_url}")
        if task.raw:
            desc_parts.append(task.raw)
        if desc_parts:
            event.add('description', "\n\n".join(desc_parts))
        event.add('priority', 5)

        return event

    def export_to_file(self, calendar: Calendar, filepath: str):
        """Export calendar to .ics file.

        Args:
            calendar: Calendar object
            filepath: Path to output file
        """
        with open(filepath, 'wb') as f:
            f.write(calendar.to_ical())
