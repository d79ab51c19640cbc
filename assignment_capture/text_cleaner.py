"""
Text cleanup for captured task descriptions.

Turns the raw visible text of a candidate block into a short description:
1. Junk lines (navigation labels, footers, vendor chrome) are removed
2. Consecutive duplicate lines are collapsed
3. A breadcrumb hierarchy (course > unit/week > assignment) is rebuilt from
   the remaining lines, with everything else kept as details

Which lines count as junk depends heavily on the sites being scraped, so the
junk rules are an ordered list of predicates that callers can replace.
"""

import re
from typing import Callable, Iterable, List, Optional

from .keywords import is_due_candidate

JunkRule = Callable[[str], bool]


def pattern_rule(pattern: str, flags: int = 0) -> JunkRule:
    """Build a junk rule that matches lines with a regular expression search."""
    compiled = re.compile(pattern, flags)

    def rule(line: str) -> bool:
        return compiled.search(line) is not None

    rule.pattern = compiled
    return rule


# Lines to remove (navigation, footer, UI elements)
DEFAULT_JUNK_PATTERNS = [
    (r'^!+$', 0),
    (r'^skip to content$', re.IGNORECASE),
    (r'^courses$', re.IGNORECASE),
    (r'^groups$', re.IGNORECASE),
    (r'^resources$', re.IGNORECASE),
    (r'^more$', re.IGNORECASE),
    (r'^home$', re.IGNORECASE),
    (r'^grades$', re.IGNORECASE),
    (r'^\d+$', 0),  # standalone numbers like "35"
    (r'^start attempt$', re.IGNORECASE),
    (r'^english$', re.IGNORECASE),
    (r'^change language$', re.IGNORECASE),
    (r'^support$', re.IGNORECASE),
    (r'^privacy policy$', re.IGNORECASE),
    (r'^terms of use$', re.IGNORECASE),
    (r'^powerschool', re.IGNORECASE),
    (r'©\s*\d{4}', 0),
    (r'^assignment$', re.IGNORECASE),
    (r'^my document$', re.IGNORECASE),
    (r'^assignmentmy document$', re.IGNORECASE),  # concatenated version
    (r'^assignment\s*my document$', re.IGNORECASE),
]

DEFAULT_JUNK_RULES: List[JunkRule] = [pattern_rule(p, f) for p, f in DEFAULT_JUNK_PATTERNS]

# Words that make a "Firstname Lastname" looking line an assignment instead
ASSESSMENT_NOUNS = {
    'exam', 'examination', 'midterm', 'final', 'test', 'quiz',
    'assignment', 'homework', 'hw', 'project', 'lab', 'laboratory',
    'participation', 'presentation', 'essay', 'report', 'draft',
    'paper', 'portfolio', 'tutorial', 'exercise', 'worksheet', 'reading',
    'reflection', 'discussion', 'journal', 'review', 'practice', 'problem',
}

PERSON_NAME_PATTERN = re.compile(r'^[A-Z][a-z]+\s+[A-Z][a-z]+$')
COURSE_PATTERN = re.compile(r'section|period|class|block', re.IGNORECASE)
UNIT_PATTERN = re.compile(r'^unit\s+\d+', re.IGNORECASE)
WEEK_PATTERN = re.compile(r'^week\s+\d+', re.IGNORECASE)
WEEKDAY_PATTERN = re.compile(
    r'^(monday|tuesday|wednesday|thursday|friday|saturday|sunday)$', re.IGNORECASE
)

BREADCRUMB_SEPARATOR = " > "


def looks_like_person_name(line: str) -> bool:
    """Check if a line is just a "Firstname Lastname" pair.

    Two capitalized words that include an assessment noun ("Essay Draft",
    "Lab Report") or a due keyword ("Due Friday") are not names.
    """
    if not PERSON_NAME_PATTERN.match(line):
        return False
    if is_due_candidate(line):
        return False
    words = {w.lower() for w in line.split()}
    return not (words & ASSESSMENT_NOUNS)


class TextNormalizer:
    """Cleans raw block text into a breadcrumb plus details."""

    def __init__(self, junk_rules: Optional[Iterable[JunkRule]] = None):
        """Initialize normalizer.

        Args:
            junk_rules: Ordered predicates; a line matching any of them is
                        dropped. Defaults to DEFAULT_JUNK_RULES.
        """
        self.junk_rules = list(DEFAULT_JUNK_RULES if junk_rules is None else junk_rules)

    def is_junk(self, line: str) -> bool:
        return any(rule(line) for rule in self.junk_rules)

    def clean(self, text: str) -> str:
        """Clean raw block text.

        Args:
            text: Visible text of a candidate block

        Returns:
            Cleaned description text
        """
        lines = self.filter_lines((text or "").split("\n"))
        return self.format_as_breadcrumb(lines)

    def filter_lines(self, lines: Iterable[str]) -> List[str]:
        """Drop empty and junk lines, then collapse consecutive duplicates."""
        cleaned = []
        for line in lines:
            trimmed = line.strip()
            if not trimmed or self.is_junk(trimmed):
                continue
            if cleaned and cleaned[-1] == trimmed:
                continue
            cleaned.append(trimmed)
        return cleaned

    def format_as_breadcrumb(self, lines: List[str]) -> str:
        """Rebuild a "Course > Week > Assignment" breadcrumb from flat lines.

        Lines before the assignment that look like a class/section, unit,
        week or weekday go into the breadcrumb. The first other line after
        at least one breadcrumb entry is taken as the assignment itself.
        Everything else becomes details below a blank line.
        """
        if len(lines) < 3:
            return "\n".join(lines).strip()

        hierarchy = []
        details = []
        found_assignment = False

        for line in lines:
            trimmed = line.strip()

            if looks_like_person_name(trimmed):
                continue

            if not found_assignment and COURSE_PATTERN.search(trimmed):
                hierarchy.append(trimmed)
                continue

            if not found_assignment and (
                UNIT_PATTERN.search(trimmed)
                or WEEK_PATTERN.search(trimmed)
                or WEEKDAY_PATTERN.search(trimmed)
            ):
                hierarchy.append(trimmed)
                continue

            if not found_assignment and hierarchy:
                hierarchy.append(trimmed)
                found_assignment = True
                continue

            details.append(trimmed)

        output = []
        if hierarchy:
            output.append(BREADCRUMB_SEPARATOR.join(hierarchy))
        if details:
            output.append("")
            output.extend(details)

        return "\n".join(output).strip()


def clean(text: str) -> str:
    """Clean block text with the default junk rules."""
    return TextNormalizer().clean(text)
