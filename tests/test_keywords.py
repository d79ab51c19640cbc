"""Unit tests for the due keyword gate."""

from assignment_capture.keywords import is_due_candidate


def test_due_keywords_match():
    """Test common due phrases pass the gate."""
    assert is_due_candidate("Due Jan 26")
    assert is_due_candidate("DEADLINE: Friday")
    assert is_due_candidate("Quiz closes at 5pm")
    assert is_due_candidate("Available until Mar 3")
    assert is_due_candidate("Submit  by Monday")
    assert is_due_candidate("This assignment is overdue")


def test_keywords_are_whole_words():
    """Test keywords inside other words don't count."""
    assert not is_due_candidate("Residue analysis lab")
    assert not is_due_candidate("Enclosed reading list")


def test_no_keyword():
    """Test text without due phrases fails the gate."""
    assert not is_due_candidate("Unit 3 readings posted")
    assert not is_due_candidate("")
