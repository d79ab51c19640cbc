"""
Main CLI entry point for assignment capture.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional
from urllib.parse import urlparse

import pytz

from .config import DEFAULT_TIMEZONE
from .date_parser import DateTimeParser
from .document import PageDocument
from .errors import CaptureError
from .icalendar_gen import ICalendarGenerator
from .models import CapturedTask, ScrapedTask
from .scraper import TaskScraper
from .settings import SettingsStore
from .submission import TaskSubmitter, capture_tasks, resolve_mode, resolve_origin


def load_document(args: argparse.Namespace) -> PageDocument:
    """Load the page to scrape from a file or a URL.

    Raises:
        CaptureError: If the page can't be loaded
    """
    if args.html_path:
        html_path = Path(args.html_path)
        if not html_path.exists():
            raise CaptureError(f"HTML file not found: {html_path}")
        html = html_path.read_text(encoding="utf-8", errors="replace")
        return PageDocument.from_html(html, url=args.url or "")

    print(f"Fetching page: {args.url}")
    return PageDocument.from_url(args.url)


def output_base_name(args: argparse.Namespace) -> str:
    """File name stem for the JSON and .ics outputs."""
    if args.html_path:
        return Path(args.html_path).stem
    parsed = urlparse(args.url)
    stem = Path(parsed.path).stem or parsed.netloc.replace(".", "_")
    return stem or "page"


def print_tasks(tasks: List[ScrapedTask]):
    """Show scraped tasks."""
    print(f"\n{len(tasks)} task{'s' if len(tasks) != 1 else ''} found:")
    for i, task in enumerate(tasks, start=1):
        print(f"\n{i}. {task.title}")
        print(f"   Due: {task.due_date}")
        if task.raw:
            for line in task.raw.split("\n"):
                print(f"   {line}")


def save_to_api(captured: List[CapturedTask], mode_or_url: str) -> int:
    """Submit tasks and report the outcome. Returns the process exit code."""
    origin = resolve_origin(mode_or_url)
    print(f"\nSaving to {origin} ({resolve_mode(origin)})...")
    submitter = TaskSubmitter(origin)
    try:
        results = submitter.save_tasks(captured)
    except CaptureError as e:
        print(f"Error: {e}")
        return 1
    print(f"Saved {len(results)} task{'s' if len(results) != 1 else ''}!")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Capture assignments and due dates from a web page"
    )
    parser.add_argument(
        "html_path",
        nargs="?",
        help="Path to a saved HTML page"
    )
    parser.add_argument(
        "--url",
        help="Page URL (fetched if no HTML file is given, otherwise recorded as the source)"
    )
    parser.add_argument(
        "--timezone",
        default=DEFAULT_TIMEZONE,
        help=f"Timezone for dates on the page (default: {DEFAULT_TIMEZONE})"
    )
    parser.add_argument(
        "--output-dir",
        default=".",
        help="Output directory for JSON and .ics files (default: current directory)"
    )
    parser.add_argument(
        "--ics",
        action="store_true",
        help="Also write an .ics calendar file"
    )
    parser.add_argument(
        "--save",
        action="store_true",
        help="Submit the captured tasks to the task API"
    )
    parser.add_argument(
        "--env",
        help="API origin for this run: 'prod', 'dev' or a URL (default: stored setting)"
    )
    parser.add_argument(
        "--set-env",
        help="Store the default API origin: 'prod', 'dev' or a URL"
    )
    parser.add_argument(
        "--data-dir",
        help="Directory for stored settings"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show debug logging"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    settings = SettingsStore(Path(args.data_dir) if args.data_dir else None)

    if args.set_env:
        origin = settings.set_origin_mode(args.set_env)
        print(f"API origin set to {origin} ({resolve_mode(origin)})")
        if not args.html_path and not args.url:
            return 0

    if not args.html_path and not args.url:
        parser.error("an HTML file or --url is required")

    try:
        date_parser = DateTimeParser(args.timezone)
    except pytz.UnknownTimeZoneError:
        print(f"Error: Unknown timezone: {args.timezone}")
        return 1

    try:
        document = load_document(args)
    except CaptureError as e:
        print(f"Error: {e}")
        return 1

    scraper = TaskScraper(parser=date_parser)
    tasks = scraper.scrape(document)

    if not tasks:
        print("No tasks with due dates found on this page.")
        return 0

    print_tasks(tasks)

    output_dir = Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    base_name = output_base_name(args)

    captured = capture_tasks(tasks, url=document.url)

    json_path = output_dir / f"{base_name}_tasks.json"
    with open(json_path, 'w') as f:
        json.dump([c.to_dict() for c in captured], f, indent=2)
    print(f"\nSaved captured tasks to: {json_path}")

    if args.ics:
        cal_gen = ICalendarGenerator(timezone_str=args.timezone)
        calendar = cal_gen.generate_calendar(tasks, source_url=document.url)
        ics_path = output_dir / f"{base_name}.ics"
        cal_gen.export_to_file(calendar, str(ics_path))
        print(f"Saved calendar to: {ics_path}")

    if args.save:
        return save_to_api(captured, args.env or settings.get_origin_mode())

    return 0


if __name__ == "__main__":
    sys.exit(main())
