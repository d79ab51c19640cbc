"""
Due-date keyword gate.

Decides whether a block of text plausibly describes a due date or deadline.
Blocks that fail this test are dropped before any date parsing is attempted.
"""

import re

# Phrases that indicate a due date is present
DUE_KEYWORDS = [
    'due', 'overdue', 'deadline', 'open until', 'available until',
    'closes at', 'closes', 'closing', 'submit by', 'turn in by',
    'due by', 'due on', 'due date',
]

DUE_KEYWORD_PATTERN = re.compile(
    r'\b(?:' + '|'.join(kw.replace(' ', r'\s+') for kw in DUE_KEYWORDS) + r')\b',
    re.IGNORECASE
)


def is_due_candidate(text: str) -> bool:
    """Check if text mentions a due date or deadline.

    Args:
        text: Visible text of a candidate block

    Returns:
        True if any due keyword appears as a whole word (case-insensitive)
    """
    if not text:
        return False
    return DUE_KEYWORD_PATTERN.search(text) is not None
