"""
Render links in plain text as HTML anchors.

All links are substituted in one pass of a single alternation pattern,
longest link first, so an inserted anchor is never matched again and a
short link never eats part of a longer one.
"""

from __future__ import annotations

import html
import logging
import re
from collections.abc import Sequence

from smartocr.links.classifier import is_bare_domain

logger = logging.getLogger(__name__)

ANCHOR_TEMPLATE = '<a href="{href}" target="_blank" rel="noopener noreferrer">{label}</a>'

# Whole-link bounds: no word, email, path or domain character on either side.
# A following "." is allowed only when it ends a sentence.
_LEFT_BOUND = r"(?<![\w@./-])"
_RIGHT_BOUND = r"(?![\w@/-]|\.\w)"


def link_href(link: str) -> str:
    """The href an anchor for ``link`` points at."""
    if "@" in link:
        return f"mailto:{link}"
    if link.startswith("http"):
        return link
    if link.startswith("/") and not link.startswith("//"):
        return f"file://{link}"
    if link.startswith(("./", "../")):
        return link
    if is_bare_domain(link):
        return f"https://{link}"
    return link


def make_links_clickable(text: str, links: Sequence[str]) -> str:
    """
    Wrap every whole-word occurrence of each link in an anchor.

    Args:
        text: Plain text.
        links: Links to render, e.g. from extract_links().

    Returns:
        Text with anchors inserted. If ``links`` is not a list or tuple
        the text is returned unchanged.

    Example:
        >>> make_links_clickable("Mail help@example.org", ["help@example.org"])
        'Mail <a href="mailto:help@example.org" target="_blank" rel="noopener noreferrer">help@example.org</a>'
    """
    if not isinstance(links, (list, tuple)):
        logger.warning(
            "make_links_clickable expected a list of links, got %s", type(links).__name__
        )
        return text

    unique = {link for link in links if isinstance(link, str) and link}
    if not unique:
        return text

    ordered = sorted(unique, key=lambda link: (-len(link), link))
    alternation = "|".join(re.escape(link) for link in ordered)
    pattern = re.compile(f"{_LEFT_BOUND}(?:{alternation}){_RIGHT_BOUND}")

    def anchor(match: re.Match[str]) -> str:
        link = match.group(0)
        return ANCHOR_TEMPLATE.format(
            href=html.escape(link_href(link), quote=True), label=html.escape(link, quote=False)
        )

    return pattern.sub(anchor, text)
