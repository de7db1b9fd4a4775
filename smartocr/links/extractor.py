"""
Link detection in extracted text.

Four patterns are applied line by line: http(s) URLs, email addresses,
bare domains with an optional path, and root-relative paths to web or
document files. Matches are trimmed of trailing sentence punctuation,
length-checked and run through a small false-positive table.

Only lines shorter than MAX_LINE_LENGTH are scanned: long lines are
prose, and links in prose are rarely the clickable elements a screenshot
or flyer is being scanned for.

Example:
    >>> extract_links("Visit https://example.com/page or citizensadvice.org.uk/help")
    ['https://example.com/page', 'citizensadvice.org.uk/help']
    >>> extract_links("Visit example.com or test.org today")
    []
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

logger = logging.getLogger(__name__)

MAX_LINE_LENGTH = 200
MIN_LINK_LENGTH = 8
MAX_LINK_LENGTH = 200

# =============================================================================
# PATTERNS (applied in order; earlier patterns win first-seen ordering)
# =============================================================================

URL_PATTERN = re.compile(r"\bhttps?://[^\s<>\"{}|\\^`\[\]]{8,}\b", re.I)

EMAIL_PATTERN = re.compile(r"\b[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}\b")

_LABEL = r"[a-zA-Z0-9](?:[a-zA-Z0-9\-]{0,61}[a-zA-Z0-9])?"
DOMAIN_BODY = rf"(?:www\.)?{_LABEL}(?:\.{_LABEL})*\.[a-zA-Z]{{2,}}(?:/[a-zA-Z0-9\-_/]+)?"
DOMAIN_PATTERN = re.compile(rf"\b{DOMAIN_BODY}\b")

# A path must not continue a word, a domain or another path
PATH_PATTERN = re.compile(
    r"(?<![\w/.])/(?:[a-zA-Z0-9\-_/]+\.(?:html?|php|asp|jsp|js|css|png|jpg|gif|svg|pdf))\b",
    re.I,
)

LINK_PATTERNS: tuple[re.Pattern[str], ...] = (
    URL_PATTERN,
    EMAIL_PATTERN,
    DOMAIN_PATTERN,
    PATH_PATTERN,
)

FALSE_POSITIVE_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"^[a-z]+\.(?:com|org|net)$", re.I),  # "example.com"
    re.compile(r"^[a-z]+\.[a-z]+$", re.I),  # "word.word"
    re.compile(r"^\d+\.\d+\.\d+\.\d+$"),  # dotted-quad IP
)

TRAILING_PUNCTUATION = re.compile(r"[.,;!?]+$")


def is_false_positive(link: str) -> bool:
    """Whether ``link`` looks like a link but almost never is one."""
    return any(pattern.match(link) for pattern in FALSE_POSITIVE_PATTERNS)


@dataclass(frozen=True)
class LinkCandidate:
    """A cleaned match and its span within its line."""

    text: str
    start: int
    end: int

    def within(self, other: LinkCandidate) -> bool:
        return (
            self is not other
            and other.start <= self.start
            and self.end <= other.end
            and (self.start, self.end) != (other.start, other.end)
        )


def _line_candidates(line: str) -> list[LinkCandidate]:
    """Accepted candidates on one line, in pattern order then position order."""
    candidates = []
    for pattern in LINK_PATTERNS:
        for match in pattern.finditer(line):
            cleaned = TRAILING_PUNCTUATION.sub("", match.group(0)).strip()
            if not MIN_LINK_LENGTH <= len(cleaned) <= MAX_LINK_LENGTH:
                continue
            if is_false_positive(cleaned):
                continue
            candidates.append(LinkCandidate(cleaned, match.start(), match.start() + len(cleaned)))

    # The domain inside a URL or an email is not a link of its own
    return [c for c in candidates if not any(c.within(other) for other in candidates)]


def extract_links(text: str) -> list[str]:
    """
    Find the links in ``text``.

    Args:
        text: Extracted document text.

    Returns:
        Unique links in first-seen order. Non-string input yields [].
    """
    if not isinstance(text, str):
        logger.warning(
            "extract_links expected str, got %s; returning no links", type(text).__name__
        )
        return []

    seen: dict[str, None] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or len(line) >= MAX_LINE_LENGTH:
            continue
        for candidate in _line_candidates(line):
            seen.setdefault(candidate.text, None)

    return list(seen)
