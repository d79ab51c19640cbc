"""Unit tests for description cleanup."""

import re

from assignment_capture.text_cleaner import (
    TextNormalizer, clean, looks_like_person_name, pattern_rule
)


def test_breadcrumb_from_course_page():
    """Test course, week and assignment lines become a breadcrumb."""
    text = "Section B\nJane Doe\nWeek 3\nEssay Draft\nDue Jan 26"
    assert clean(text) == "Section B > Week 3 > Essay Draft\n\nDue Jan 26"


def test_duplicates_and_numbers_in_details():
    """Test repeated due lines and stray numbers don't reach the details."""
    text = "\n".join(["Section B", "Week 3", "Essay Draft", "Due Jan 26", "Due Jan 26", "35"])
    assert clean(text) == "Section B > Week 3 > Essay Draft\n\nDue Jan 26"


def test_junk_lines_removed():
    """Test navigation and footer lines are dropped."""
    text = "Skip to content\nHome\nGrades\n35\nHomework 4\nDue Jan 26\n© 2026 Example LMS"
    assert clean(text) == "Homework 4\nDue Jan 26"


def test_consecutive_duplicates_collapsed():
    """Test repeated lines only appear once."""
    assert clean("Quiz 1\nQuiz 1\n\n  Due today  ") == "Quiz 1\nDue today"


def test_no_hierarchy_keeps_lines_as_details():
    """Test text without breadcrumb lines is kept in order."""
    text = "Read chapter 4\nAnswer the questions\nDue Friday"
    assert clean(text) == "Read chapter 4\nAnswer the questions\nDue Friday"


def test_weekday_and_unit_lines():
    """Test units and weekdays join the breadcrumb."""
    text = "Period 2 Math\nUnit 5\nMonday\nWorksheet 5.1\nDue tomorrow\nShow all work"
    assert clean(text) == "Period 2 Math > Unit 5 > Monday > Worksheet 5.1\n\nDue tomorrow\nShow all work"


def test_short_text_not_restructured():
    """Test fewer than three lines are joined as-is."""
    assert clean("Jane Doe\nDue Jan 26") == "Jane Doe\nDue Jan 26"
    assert clean("") == ""


def test_looks_like_person_name():
    """Test the name heuristic."""
    assert looks_like_person_name("Jane Doe")
    assert not looks_like_person_name("Essay Draft")
    assert not looks_like_person_name("Lab Report")
    assert not looks_like_person_name("Jane")
    assert not looks_like_person_name("jane doe")


def test_custom_junk_rules():
    """Test junk rules can be replaced."""
    normalizer = TextNormalizer(junk_rules=[pattern_rule(r'^announcements$', re.IGNORECASE)])
    assert normalizer.is_junk("Announcements")
    assert not normalizer.is_junk("Home")
    assert normalizer.clean("Announcements\nHome\nDue Jan 26") == "Home\nDue Jan 26"


def test_callable_junk_rule():
    """Test any predicate works as a junk rule."""
    normalizer = TextNormalizer(junk_rules=[lambda line: line.startswith("#")])
    assert normalizer.filter_lines(["# nav", "Essay", "Due today"]) == ["Essay", "Due today"]


def test_due_line_is_not_a_name():
    """Test "Due Friday" style lines are kept in the details."""
    assert not looks_like_person_name("Due Friday")
    assert not looks_like_person_name("Deadline Monday")

    text = "Section A\nProject Proposal\nJane Doe\nDue Friday"
    assert clean(text) == "Section A > Project Proposal\n\nDue Friday"
