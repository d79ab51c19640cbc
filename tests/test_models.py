"""Unit tests for data models."""

import pytest
from datetime import date, datetime

import pytz

from assignment_capture.models import (
    FALLBACK_TITLE, CapturedTask, ParsedDate, ScrapedTask,
    to_iso_timestamp, serialize_datetime, deserialize_datetime
)


def test_parsed_date_zero_based_month():
    """Test ParsedDate month is zero-based."""
    parsed = ParsedDate(year=2026, month=0, day=26)
    assert parsed.to_date() == date(2026, 1, 26)


def test_parsed_date_impossible():
    """Test impossible dates raise on conversion."""
    with pytest.raises(ValueError):
        ParsedDate(year=2026, month=1, day=30).to_date()


def test_scraped_task_key_and_dict():
    """Test ScrapedTask dedup key and JSON shape."""
    task = ScrapedTask(title="Essay", due_date="2026-01-26T05:00:00.000Z", raw="Due Jan 26")
    assert task.key == ("Essay", "2026-01-26T05:00:00.000Z")
    assert task.to_dict() == {
        "title": "Essay",
        "dueDate": "2026-01-26T05:00:00.000Z",
        "raw": "Due Jan 26",
    }


def test_scraped_task_is_immutable():
    """Test ScrapedTask can't be modified."""
    task = ScrapedTask(title="Essay", due_date="2026-01-26T05:00:00.000Z", raw="")
    with pytest.raises(AttributeError):
        task.title = "Other"


def test_captured_task_from_scraped():
    """Test wrapping a scraped task for review."""
    task = ScrapedTask(title="Lab 2", due_date="2026-02-01T04:59:00.000Z", raw="Due Jan 31")
    captured = CapturedTask.from_scraped(task, url="https://lms.example.com/a/2")

    assert captured.title == "Lab 2"
    assert captured.due_date == "2026-02-01T04:59:00.000Z"
    assert captured.labels == ["capture"]
    assert captured.status == "todo"
    assert captured.priority == "medium"
    assert captured.url == "https://lms.example.com/a/2"


def test_captured_task_from_partial_dict():
    """Test missing fields fall back to defaults."""
    captured = CapturedTask.from_dict({"dueDate": ""}, url="https://lms.example.com")

    assert captured.title == FALLBACK_TITLE
    assert captured.due_date is None
    assert captured.labels == ["capture", "web"]
    assert captured.url == "https://lms.example.com"


def test_captured_task_to_dict():
    """Test CapturedTask JSON uses dueDate."""
    captured = CapturedTask(title="Quiz", due_date="2026-03-02T05:00:00.000Z")
    data = captured.to_dict()

    assert data["dueDate"] == "2026-03-02T05:00:00.000Z"
    assert "due_date" not in data
    assert CapturedTask.from_dict(data).title == "Quiz"


def test_to_iso_timestamp():
    """Test conversion to a UTC instant with milliseconds."""
    tz = pytz.timezone("America/Toronto")
    assert to_iso_timestamp(tz.localize(datetime(2026, 1, 26))) == "2026-01-26T05:00:00.000Z"
    # Daylight saving time
    assert to_iso_timestamp(tz.localize(datetime(2026, 7, 1, 17, 0))) == "2026-07-01T21:00:00.000Z"


def test_datetime_serialization():
    """Test datetime serialization round trip, including the Z suffix."""
    dt = datetime(2026, 9, 15, 10, 30, tzinfo=pytz.utc)
    assert deserialize_datetime(serialize_datetime(dt)) == dt
    assert deserialize_datetime("2026-09-15T10:30:00.000Z") == dt
