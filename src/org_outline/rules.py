"""Line classification rules.

A rule table is an ordered sequence of ``Rule(tag, extractor)`` pairs. The
extractor receives one line and returns ``None`` when it does not match, or
the captured payload when it does. Classification walks the table in order
and the first match wins, so the position of a rule is its precedence.

All patterns are anchored to the whole line (``re.fullmatch``).
"""

import re
from typing import Any, Callable, NamedTuple, Optional, Sequence

Extractor = Callable[[str], Any]


class Rule(NamedTuple):
    """Classification tag paired with the extractor that recognises it."""

    tag: str
    extractor: Extractor


HEADLINE_RE = re.compile(r"(\*+)\s*(.*)")
DEFINITION_LIST_RE = re.compile(r"\s*(-|\+|\s+[*])\s*(.*?)::.*")
ORDERED_LIST_RE = re.compile(r"\s*\d+(\.|\))\s+.*")
UNORDERED_LIST_RE = re.compile(r"\s*(-|\+|\s+[*])\s+.*")
DRAWER_BEGIN_RE = re.compile(r"\s*:PROPERTIES:")
DRAWER_END_RE = re.compile(r"\s*:END:")
DRAWER_ITEM_RE = re.compile(r"\s*:(.+):\s*(.+)\s*")
METADATA_RE = re.compile(r"\s*(CLOCK|DEADLINE|START|CLOSED|SCHEDULED):.*")
BEGIN_BLOCK_RE = re.compile(r"#\+(BEGIN)_(\w+)\s*([\w\-]*)?.*")
END_BLOCK_RE = re.compile(r"#\+(END)_(\w+)\s*([\w\-]*)?.*")
COMMENT_RE = re.compile(r"\s*# (.*)")
PROPERTY_RE = re.compile(r"#\+(.+):\s*(.+)")
TABLE_SEPARATOR_RE = re.compile(r"\s*\|[-|+]*\s*")
TABLE_ROW_RE = re.compile(r"\s*\|.*")
INLINE_EXAMPLE_RE = re.compile(r"\s*:\s.*")
HORIZONTAL_RULE_RE = re.compile(r"\s*-{5,}\s*")


def match_line(pattern: re.Pattern) -> Extractor:
    """Build an extractor capturing the whole line when ``pattern`` matches."""

    def extract(line: str) -> Optional[str]:
        match = pattern.fullmatch(line)
        return match.group(0) if match else None

    return extract


def match_groups(pattern: re.Pattern) -> Extractor:
    """Build an extractor capturing the pattern's groups as a tuple."""

    def extract(line: str) -> Optional[tuple]:
        match = pattern.fullmatch(line)
        return match.groups() if match else None

    return extract


def _blank(line: str) -> Optional[str]:
    return "" if not line.strip() else None


def _block_marker(pattern: re.Pattern) -> Extractor:
    def extract(line: str) -> Optional[tuple[str, str, Optional[str]]]:
        match = pattern.fullmatch(line)
        if not match:
            return None
        marker, block_type, qualifier = match.groups()
        return marker, block_type, qualifier or None

    return extract


def _comment(line: str) -> Optional[str]:
    match = COMMENT_RE.fullmatch(line)
    return match.group(1) if match else None


def _paragraph(line: str) -> str:
    return line


DEFAULT_RULES: tuple[Rule, ...] = (
    Rule("headline", match_groups(HEADLINE_RE)),
    Rule("blank", _blank),
    Rule("definition-list", match_line(DEFINITION_LIST_RE)),
    Rule("ordered-list", match_line(ORDERED_LIST_RE)),
    Rule("unordered-list", match_line(UNORDERED_LIST_RE)),
    Rule("property-drawer-begin-block", match_line(DRAWER_BEGIN_RE)),
    Rule("property-drawer-end-block", match_line(DRAWER_END_RE)),
    Rule("property-drawer-item", match_groups(DRAWER_ITEM_RE)),
    Rule("metadata", match_line(METADATA_RE)),
    Rule("begin-block", _block_marker(BEGIN_BLOCK_RE)),
    Rule("end-block", _block_marker(END_BLOCK_RE)),
    Rule("comment", _comment),
    Rule("property", match_groups(PROPERTY_RE)),
    Rule("table-separator", match_line(TABLE_SEPARATOR_RE)),
    Rule("table-row", match_line(TABLE_ROW_RE)),
    Rule("inline-example", match_line(INLINE_EXAMPLE_RE)),
    Rule("horizontal-rule", match_line(HORIZONTAL_RULE_RE)),
    Rule("paragraph", _paragraph),
)


def classify_line(line: str, rules: Optional[Sequence[Rule]] = None) -> tuple[str, Any]:
    """Classify a line using the first matching rule.

    Args:
        line: Line of text (without line terminator)
        rules: Rule table to use (defaults to DEFAULT_RULES)

    Returns:
        Tuple of (tag, captured payload). A table without a matching
        catch-all falls back to ("paragraph", line).

    Examples:
        >>> classify_line("* TODO Write report :work:")
        ('headline', ('*', 'TODO Write report :work:'))
        >>> classify_line("#+BEGIN_SRC python")
        ('begin-block', ('BEGIN', 'SRC', 'python'))
    """
    if rules is None:
        rules = DEFAULT_RULES

    for tag, extractor in rules:
        value = extractor(line)
        # "" is a valid capture (blank lines), only None means no match
        if value is not None:
            return tag, value

    return "paragraph", line


def remove_rule(rules: Sequence[Rule], tag: str) -> tuple[Rule, ...]:
    """Return a copy of ``rules`` without any rule for ``tag``.

    Raises:
        KeyError: If no rule has that tag
    """
    if not any(rule.tag == tag for rule in rules):
        raise KeyError(f"No rule for tag: {tag}")
    return tuple(rule for rule in rules if rule.tag != tag)


def add_rule(
    rules: Sequence[Rule], rule: Rule, before: Optional[str] = None
) -> tuple[Rule, ...]:
    """Return a copy of ``rules`` with ``rule`` inserted.

    Args:
        rules: Existing rule table
        rule: Rule to insert
        before: Tag of the rule that the new rule should take precedence over.
                If None, the rule is placed just before the final catch-all.

    Raises:
        KeyError: If ``before`` names a tag not present in the table
    """
    rules = tuple(rules)
    if before is None:
        position = max(len(rules) - 1, 0)
    else:
        tags = [existing.tag for existing in rules]
        if before not in tags:
            raise KeyError(f"No rule for tag: {before}")
        position = tags.index(before)

    return rules[:position] + (rule,) + rules[position:]
