"""Org outline parser - Parse Org-style outline documents into structured nodes.

This package classifies each line of an outline document with an ordered,
replaceable rule table and folds the classified lines into a flat sequence
of nodes with a single-pass stack machine.

Key features:
- Headlines become Section nodes with level, name, tags and TODO/DONE keyword
- #+BEGIN_<TYPE> ... #+END_<TYPE> regions become Block nodes
- :PROPERTIES: ... :END: regions become Drawer nodes
- Everything else becomes a Line record tagged with its classification
- Rule tables can be extended or trimmed for other dialects

Example:
    >>> from org_outline import parse_text
    >>> root, section = parse_text("* DONE Ship release :work:\\nNotes here")
    >>> section.name, section.tags, section.keyword
    ('Ship release', ['work'], 'DONE')
    >>> section.content[0]
    Line(line_type='paragraph', text='Notes here')
"""

from org_outline.config import ParserSettings, load_settings
from org_outline.exceptions import OutlineError, OutlineStructureError
from org_outline.headline import decompose_headline, parse_headline
from org_outline.nodes import Block, Drawer, Line, Node, Root, Section
from org_outline.parser import OutlineParser, parse_file, parse_lines, parse_text
from org_outline.rules import DEFAULT_RULES, Rule, add_rule, classify_line, remove_rule

__version__ = "0.1.0"

__all__ = [
    "Block",
    "DEFAULT_RULES",
    "Drawer",
    "Line",
    "Node",
    "OutlineError",
    "OutlineParser",
    "OutlineStructureError",
    "ParserSettings",
    "Root",
    "Rule",
    "Section",
    "add_rule",
    "classify_line",
    "decompose_headline",
    "load_settings",
    "parse_file",
    "parse_headline",
    "parse_lines",
    "parse_text",
    "remove_rule",
]
