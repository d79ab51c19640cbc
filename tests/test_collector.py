"""Unit tests for candidate collection."""

from assignment_capture.collector import CandidateCollector
from assignment_capture.document import PageDocument


def test_collect_distinct_blocks():
    """Test nested containers with the same text are yielded once."""
    document = PageDocument.from_html(
        "<body><div><p>Short</p><p>Due Jan 26 at 5pm</p></div></body>"
    )
    blocks = list(CandidateCollector(document).collect())

    assert [b.text for b in blocks] == ["Short\nDue Jan 26 at 5pm", "Due Jan 26 at 5pm"]
    # The first element with the text is kept
    assert blocks[0].source_node.name == "body"
    assert blocks[1].source_node.name == "p"


def test_length_bounds():
    """Test too-short and too-long blocks are skipped."""
    longest = "x" * 1000
    too_long = "y" * 1001
    document = PageDocument.from_html(
        f"<p>1234567</p><p>12345678</p><p>{longest}</p><p>{too_long}</p>"
    )
    texts = [b.text for b in CandidateCollector(document).collect()]

    # Both bounds are inclusive
    assert texts == ["12345678", longest]


def test_custom_length_bounds():
    """Test the length window is configurable."""
    document = PageDocument.from_html("<p>Due now</p><p>Due tomorrow at noon</p>")
    texts = [b.text for b in CandidateCollector(document, min_length=3, max_length=10).collect()]

    assert texts == ["Due now"]


def test_hidden_blocks_skipped():
    """Test hidden elements are not collected."""
    document = PageDocument.from_html(
        "<div style='display:none'><p>Due Jan 26, 2026</p></div><p>Visible text here</p>"
    )
    texts = [b.text for b in CandidateCollector(document).collect()]

    assert texts == ["Visible text here"]


def test_empty_document():
    """Test an empty page yields nothing."""
    assert list(CandidateCollector(PageDocument.from_html("")).collect()) == []
