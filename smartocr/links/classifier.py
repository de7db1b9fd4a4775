"""
Link categorisation and link records for reports.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from smartocr.links.extractor import DOMAIN_BODY
from smartocr.models import LinkRecord, LinkType

# A bare domain (optionally with a path), matching the whole link
BARE_DOMAIN_PATTERN = re.compile(rf"^{DOMAIN_BODY}$")

CONTEXT_WIDTH = 100

# Keys used by categorize_links() and the JSON reports
CATEGORY_KEYS = {
    LinkType.URL: "urls",
    LinkType.EMAIL: "emails",
    LinkType.FILE_PATH: "file_paths",
    LinkType.RELATIVE: "relative",
    LinkType.OTHER: "other",
}


def is_bare_domain(link: str) -> bool:
    return BARE_DOMAIN_PATTERN.match(link) is not None


def categorize_link(link: str) -> LinkType:
    """
    Assign exactly one category to a link.

    Example:
        >>> categorize_link("a@b.com")
        <LinkType.EMAIL: 'email'>
        >>> categorize_link("../c")
        <LinkType.RELATIVE: 'relative'>
    """
    if "@" in link:
        return LinkType.EMAIL
    if link.startswith("http") or is_bare_domain(link):
        return LinkType.URL
    if link.startswith("/") and not link.startswith("//"):
        return LinkType.FILE_PATH
    if link.startswith(("./", "../")):
        return LinkType.RELATIVE
    return LinkType.OTHER


def categorize_links(links: Iterable[str]) -> dict[str, int]:
    """Count links per category; every category key is present."""
    counts = dict.fromkeys(CATEGORY_KEYS.values(), 0)
    for link in links:
        counts[CATEGORY_KEYS[categorize_link(link)]] += 1
    return counts


def find_link_context(text: str, link: str, width: int = CONTEXT_WIDTH) -> str:
    """
    Text surrounding the first occurrence of ``link``, on one line.

    Returns an empty string when the link does not occur in ``text``.
    """
    position = text.find(link)
    if position == -1:
        return ""
    start = max(0, position - width)
    end = min(len(text), position + len(link) + width)
    return text[start:end].replace("\n", " ").strip()


def build_link_records(links: Iterable[str], text: str | None = None) -> list[LinkRecord]:
    """Number links from 1, categorise them and attach context when text is given."""
    return [
        LinkRecord(
            url=link,
            type=categorize_link(link),
            id=number,
            context=find_link_context(text, link) if text is not None else None,
        )
        for number, link in enumerate(links, start=1)
    ]
