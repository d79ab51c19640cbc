"""Unit tests for title resolution."""

from assignment_capture.document import PageDocument
from assignment_capture.models import FALLBACK_TITLE, TextBlock
from assignment_capture.title_resolver import TitleContext, TitleResolver


def block_for(document, element_id):
    node = document.soup.find(id=element_id)
    return TextBlock(source_node=node, text=document.visible_text(node))


def test_h1_wins():
    """Test the page <h1> is preferred over everything else."""
    document = PageDocument.from_html(
        "<title>Page</title><h1>Essay 1</h1><h2>Details</h2>"
        "<section><h3>Widget</h3><p id='due'>Due Jan 26</p></section>"
    )
    assert TitleResolver(document).resolve(block_for(document, "due")) == "Essay 1"


def test_h2_when_no_h1():
    """Test the page <h2> is used without an <h1>."""
    document = PageDocument.from_html("<h2>Lab 2</h2><p id='due'>Due Jan 26</p>")
    assert TitleResolver(document).resolve(block_for(document, "due")) == "Lab 2"


def test_nearby_heading_inside_ancestor():
    """Test a heading inside an enclosing container."""
    document = PageDocument.from_html(
        "<body><div class='card'><div><h3>Quiz 4</h3></div><div><p id='due'>Due Feb 2</p></div></div></body>"
    )
    assert TitleResolver(document).resolve(block_for(document, "due")) == "Quiz 4"


def test_nearby_heading_previous_sibling():
    """Test a heading just before an ancestor."""
    document = PageDocument.from_html(
        "<body><h4>Reading Response</h4><div><p id='due'>Due Feb 2</p></div></body>"
    )
    assert TitleResolver(document).resolve(block_for(document, "due")) == "Reading Response"


def test_empty_heading_skipped():
    """Test headings without visible text are ignored."""
    document = PageDocument.from_html(
        "<title>Unit 5 Project</title>"
        "<body><div><h3> </h3><h3 hidden>Hidden</h3><p id='due'>Due Feb 2</p></div></body>"
    )
    assert TitleResolver(document).resolve(block_for(document, "due")) == "Unit 5 Project"


def test_fallback_title():
    """Test the fallback when the page offers nothing."""
    document = PageDocument.from_html("<body><p id='due'>Due Feb 2</p></body>")
    assert TitleResolver(document).resolve(block_for(document, "due")) == FALLBACK_TITLE


def test_context_from_document():
    """Test page-wide title sources are looked up once."""
    document = PageDocument.from_html("<title>T</title><h1> Essay </h1><h2>Sub</h2>")
    context = TitleContext.from_document(document, fallback="Untitled")

    assert context == TitleContext(
        primary_heading="Essay",
        secondary_heading="Sub",
        page_title="T",
        fallback="Untitled",
    )


def test_explicit_context():
    """Test a caller-supplied context is used as-is."""
    document = PageDocument.from_html("<div><h1>Ignored</h1></div><div><p id='due'>Due Feb 2</p></div>")
    resolver = TitleResolver(document, TitleContext(fallback="Untitled"))
    assert resolver.resolve(block_for(document, "due")) == "Untitled"
