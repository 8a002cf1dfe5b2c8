"""Node types produced by the outline parser.

The parser emits a flat sequence of containers. Each container keeps an
ordered ``content`` list holding leaf ``Line`` records and any fully closed
``Block``/``Drawer`` subtrees.
"""

from dataclasses import dataclass, field
from typing import Any, ClassVar, Optional, Union


@dataclass(frozen=True)
class Line:
    """Leaf classification result for a single source line.

    Attributes:
        line_type: Classification tag (e.g. "paragraph", "comment", "table-row")
        text: Captured payload. Shape depends on line_type:
              the raw line for most tags, the trailing text for comments,
              a (key, value) tuple for properties and drawer items.
    """

    line_type: str
    text: Any

    def to_dict(self) -> dict[str, Any]:
        text = list(self.text) if isinstance(self.text, tuple) else self.text
        return {"line_type": self.line_type, "text": text}


@dataclass
class Node:
    """Base container. Subclasses set ``node_type``."""

    node_type: ClassVar[str] = "node"

    content: list[Union["Node", Line]] = field(default_factory=list, kw_only=True)

    def append(self, item: Union["Node", Line]) -> None:
        """Append an item to this node's content (insertion order is kept)."""
        self.content.append(item)

    def _attributes(self) -> dict[str, Any]:
        return {}

    def to_dict(self) -> dict[str, Any]:
        """Convert node and its content to plain dicts/lists (JSON-ready)."""
        data: dict[str, Any] = {"type": self.node_type}
        data.update(self._attributes())
        data["content"] = [item.to_dict() for item in self.content]
        return data


@dataclass
class Root(Node):
    """Implicit top-level container holding content before the first headline."""

    node_type: ClassVar[str] = "root"


@dataclass
class Section(Node):
    """One headline and everything up to the next headline.

    Attributes:
        level: Number of leading '*' markers (metadata only, not used for nesting)
        name: Headline text with tags and keyword removed
        tags: Tags from a trailing :tag1:tag2: group
        keyword: State keyword ("TODO"/"DONE") or None
    """

    node_type: ClassVar[str] = "section"

    level: int
    name: str
    tags: list[str] = field(default_factory=list)
    keyword: Optional[str] = None

    def _attributes(self) -> dict[str, Any]:
        return {
            "level": self.level,
            "name": self.name,
            "tags": list(self.tags),
            "keyword": self.keyword,
        }


@dataclass
class Block(Node):
    """A #+BEGIN_<TYPE> ... #+END_<TYPE> region.

    Attributes:
        block_type: Type taken verbatim from the begin marker (e.g. "SRC", "QUOTE")
        qualifier: Optional word following the type (e.g. a source language)
    """

    node_type: ClassVar[str] = "block"

    block_type: str
    qualifier: Optional[str] = None

    def _attributes(self) -> dict[str, Any]:
        return {"block_type": self.block_type, "qualifier": self.qualifier}


@dataclass
class Drawer(Node):
    """A :PROPERTIES: ... :END: region."""

    node_type: ClassVar[str] = "drawer"
