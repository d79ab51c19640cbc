"""
Submission of captured tasks to the remote task API.

Scraped tasks are wrapped into CapturedTask records (adding status, priority,
labels and the source URL), reviewed, and then posted one at a time to
<origin>/api/tasks. The origin is chosen by a mode: "prod", "dev" or a custom
http(s) URL.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

import dateparser
import requests

from .config import API_TASKS_PATH, DEFAULT_TIMEZONE, DEV_ORIGIN, PROD_ORIGIN, REQUEST_TIMEOUT, USER_AGENT
from .errors import SubmissionError
from .models import FALLBACK_TITLE, CapturedTask, ScrapedTask, to_iso_timestamp

logger = logging.getLogger(__name__)


def resolve_origin(mode_or_url: Optional[str]) -> str:
    """Map an origin mode ('prod', 'dev' or a URL) to an API origin.

    Anything unrecognized falls back to the production origin.
    """
    if not mode_or_url or mode_or_url == "prod":
        return PROD_ORIGIN
    if mode_or_url == "dev":
        return DEV_ORIGIN
    if isinstance(mode_or_url, str) and mode_or_url.startswith("http"):
        return mode_or_url.rstrip("/")
    return PROD_ORIGIN


def resolve_mode(origin: str) -> str:
    """Name the mode of an origin: 'dev', 'prod' or 'custom'."""
    if origin == DEV_ORIGIN:
        return "dev"
    if origin == PROD_ORIGIN:
        return "prod"
    return "custom"


def normalize_labels(labels: Any) -> List[str]:
    """Accept labels as a list or a comma-separated string."""
    if not labels:
        return []
    if isinstance(labels, list):
        return labels
    if isinstance(labels, str):
        return [s.strip() for s in labels.split(",") if s.strip()]
    return []


def format_description(task: CapturedTask) -> str:
    """Default description: source URL and cleaned text, separated by a blank line."""
    parts = []
    if task.url:
        parts.append(f"Captured from: {task.url}")
    if task.raw:
        parts.append(task.raw)
    return "\n\n".join(parts)


def normalize_due_date(value: Optional[str], timezone_str: str = DEFAULT_TIMEZONE) -> Optional[str]:
    """Normalize a due date typed or edited during review.

    Args:
        value: Anything dateparser understands ("2026-01-26T17:00",
               "Jan 26 2026 5pm", an ISO instant ...). Empty means no due date.
        timezone_str: Timezone for values without an explicit offset

    Returns:
        ISO-8601 instant string, or None for an empty value

    Raises:
        ValueError: If the value can't be parsed as a date
    """
    if value is None or not str(value).strip():
        return None

    parsed = dateparser.parse(
        str(value).strip(),
        settings={
            'TIMEZONE': timezone_str,
            'RETURN_AS_TIMEZONE_AWARE': True,
        },
    )
    if parsed is None:
        raise ValueError(f"Invalid due date: {value}")
    return to_iso_timestamp(parsed)


def capture_tasks(tasks: Iterable[ScrapedTask], url: str = "") -> List[CapturedTask]:
    """Wrap scraped tasks for review and submission."""
    return [CapturedTask.from_scraped(task, url=url) for task in tasks]


def build_payload(task: CapturedTask) -> Dict[str, Any]:
    """JSON body for one POST to the task API."""
    return {
        "title": task.title or FALLBACK_TITLE,
        "description": task.description or format_description(task),
        "status": task.status or "todo",
        "priority": task.priority or "medium",
        "dueDate": task.due_date or None,
        "labels": normalize_labels(task.labels or ["capture", "web"]),
    }


class TaskSubmitter:
    """Posts captured tasks to the remote task API."""

    def __init__(self, origin: str = PROD_ORIGIN,
                 session: Optional[requests.Session] = None,
                 timeout: float = REQUEST_TIMEOUT):
        """Initialize submitter.

        Args:
            origin: API origin, e.g. "https://polychrome.appwrite.network"
            session: HTTP session (carries the login cookie). A new one if None.
            timeout: Request timeout in seconds
        """
        self.origin = origin.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    @property
    def tasks_url(self) -> str:
        return f"{self.origin}{API_TASKS_PATH}"

    def post_task(self, task: CapturedTask) -> Any:
        """Create one task.

        Returns:
            Decoded JSON response from the API

        Raises:
            SubmissionError: On a non-2xx response or a network failure
        """
        try:
            response = self.session.post(
                self.tasks_url,
                json=build_payload(task),
                headers={"User-Agent": USER_AGENT},
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            raise SubmissionError(f"API request failed: {e}") from e

        if not response.ok:
            body = response.text or "no body"
            raise SubmissionError(f"API {response.status_code}: {body}", status_code=response.status_code)

        return response.json()

    def save_tasks(self, tasks: Iterable[CapturedTask]) -> List[Any]:
        """Create tasks one at a time, in order. Stops at the first failure."""
        results = []
        for task in tasks:
            results.append(self.post_task(task))
            logger.info("Saved task %r", task.title)
        return results
