"""Headline decomposition: trailing tags and leading state keyword."""

import re
from typing import Optional

from org_outline.nodes import Section

KEYWORDS = frozenset({"TODO", "DONE"})

TAGS_RE = re.compile(r"(.*?)\s*(:[\w:]*:)\s*")
MARKERS_RE = re.compile(r"\*+\s+(.*)")
WHITESPACE_RE = re.compile(r"\s+")


def strip_tags(text: str) -> tuple[str, list[str]]:
    """Remove a trailing :tag1:tag2: group.

    Only a group at the very end of the text (trailing whitespace aside)
    counts; colons elsewhere in the text are left alone.

    Returns:
        Tuple of (text without the tag group, tags in source order)

    Examples:
        >>> strip_tags("Buy milk :errand:home:")
        ('Buy milk', ['errand', 'home'])
        >>> strip_tags("Meet at 10:30 today")
        ('Meet at 10:30 today', [])
    """
    match = TAGS_RE.fullmatch(text)
    if not match:
        return text, []

    remaining, group = match.groups()
    tags = [tag for tag in group.split(":") if tag.strip()]
    return remaining, tags


def strip_keyword(text: str) -> tuple[str, Optional[str]]:
    """Remove a leading TODO/DONE keyword.

    Only the first whitespace-separated token is checked.

    Returns:
        Tuple of (text without keyword, keyword or None)
    """
    words = WHITESPACE_RE.split(text, maxsplit=1)
    if words and words[0] in KEYWORDS:
        rest = words[1] if len(words) > 1 else ""
        return rest.lstrip(), words[0]
    return text, None


def decompose_headline(text: str) -> tuple[str, list[str], Optional[str]]:
    """Split headline text into (clean text, tags, keyword).

    Accepts either the text captured after the '*' markers or a complete
    headline line; leading markers followed by whitespace are dropped.
    Tags are stripped before the keyword is looked for.

    Examples:
        >>> decompose_headline("** TODO Buy milk :errand:home:")
        ('Buy milk', ['errand', 'home'], 'TODO')
        >>> decompose_headline("Just text")
        ('Just text', [], None)
    """
    markers = MARKERS_RE.fullmatch(text)
    if markers:
        text = markers.group(1)

    text, tags = strip_tags(text)
    text, keyword = strip_keyword(text)
    return text, tags, keyword


def parse_headline(markers: str, text: str) -> Section:
    """Build a Section from a classified headline capture."""
    text, tags = strip_tags(text)
    name, keyword = strip_keyword(text)
    return Section(level=len(markers), name=name, tags=tags, keyword=keyword)
