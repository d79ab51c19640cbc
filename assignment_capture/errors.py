"""Exceptions raised outside the extraction engine.

The engine itself never raises during a scrape; these cover fetching pages
and talking to the remote task API.
"""

from typing import Optional


class CaptureError(Exception):
    """Base class for assignment capture errors."""


class FetchError(CaptureError):
    """A page could not be downloaded."""


class SubmissionError(CaptureError):
    """The task API rejected a request or could not be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
