"""
Link detection, categorisation and HTML rendering.

Example:
    >>> from smartocr.links import extract_links, make_links_clickable
    >>> text = "Contact help@example.org.uk for details"
    >>> make_links_clickable(text, extract_links(text))
"""

from smartocr.links.classifier import (
    build_link_records,
    categorize_link,
    categorize_links,
    find_link_context,
    is_bare_domain,
)
from smartocr.links.extractor import extract_links, is_false_positive
from smartocr.links.renderer import link_href, make_links_clickable

__all__ = [
    "extract_links",
    "is_false_positive",
    "categorize_link",
    "categorize_links",
    "build_link_records",
    "find_link_context",
    "is_bare_domain",
    "link_href",
    "make_links_clickable",
]
