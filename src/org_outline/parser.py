"""Single-pass stack machine turning classified lines into outline nodes.

The parser keeps a stack of open containers, starting with the implicit
Root. Headlines, blocks and drawers push new containers; end markers pop the
top container and append it to the one below. Headlines never close anything,
so sections accumulate side by side and the finished stack, read bottom to
top, is the parse result:

    [Root, Section, Section, ...]

Blocks and drawers only end up inside a section once their end marker is
seen. One left open at end of input stays on the stack and shows up as an
extra top-level entry.
"""

from typing import Iterable, Optional, Sequence

import httpx

from org_outline.config import ParserSettings
from org_outline.exceptions import OutlineStructureError
from org_outline.headline import parse_headline
from org_outline.nodes import Block, Drawer, Line, Node, Root
from org_outline.rules import DEFAULT_RULES, Rule, classify_line
from org_outline.sources import Source, open_source, split_lines
from org_outline.utils.logging import get_logger

logger = get_logger(__name__)


class OutlineParser:
    """Outline parser configured with a rule table and settings.

    Attributes:
        rules: Ordered rule table used to classify lines
        settings: Parser settings (strictness, encoding, URL timeout)

    Example:
        >>> parser = OutlineParser()
        >>> nodes = parser.parse_text("* TODO Plan trip :travel:\\nBook flights")
        >>> nodes[1].name, nodes[1].tags, nodes[1].keyword
        ('Plan trip', ['travel'], 'TODO')
    """

    def __init__(
        self,
        rules: Optional[Sequence[Rule]] = None,
        settings: Optional[ParserSettings] = None,
    ):
        self.rules = tuple(rules) if rules is not None else DEFAULT_RULES
        self.settings = settings or ParserSettings()

    @property
    def strict(self) -> bool:
        return self.settings.strict

    def handle_line(
        self, stack: list[Node], line: str, line_number: Optional[int] = None
    ) -> list[Node]:
        """Classify one line and apply its transition to the stack.

        Args:
            stack: Open containers, bottom (Root) first. Modified in place.
            line: Line text without terminator
            line_number: 1-based line number, used in error messages

        Returns:
            The same stack, for folding

        Raises:
            OutlineStructureError: If an end marker has nothing to close
                                   (or on a strict-mode violation)
        """
        tag, value = classify_line(line, self.rules)

        if tag == "headline":
            if self.strict:
                self._check_no_open_region(stack, line_number, line)
            stack.append(parse_headline(*value))
        elif tag == "begin-block":
            _marker, block_type, qualifier = value
            stack.append(Block(block_type=block_type, qualifier=qualifier))
        elif tag == "end-block":
            if self.strict:
                self._check_closes_block(stack, value[1], line_number, line)
            self._close_top(stack, line_number, line)
        elif tag == "property-drawer-begin-block":
            stack.append(Drawer())
        elif tag == "property-drawer-end-block":
            if self.strict and not isinstance(stack[-1], Drawer):
                raise OutlineStructureError(
                    "Drawer end marker without an open drawer", line_number, line
                )
            self._close_top(stack, line_number, line)
        else:
            stack[-1].append(Line(tag, value))

        return stack

    def parse_lines(self, lines: Iterable[str]) -> list[Node]:
        """Parse an iterable of lines into the top-level node sequence.

        Returns:
            [Root, Section, ...] plus any containers left open, in stack order

        Raises:
            OutlineStructureError: On a stray end marker, or strict-mode violations
        """
        stack: list[Node] = [Root()]
        line_count = 0

        try:
            for line_number, line in enumerate(lines, start=1):
                self.handle_line(stack, line, line_number)
                line_count = line_number

            open_regions = [node for node in stack if isinstance(node, (Block, Drawer))]
            if open_regions:
                if self.strict:
                    raise OutlineStructureError(
                        f"Input ended with {_describe(open_regions[-1])} still open"
                    )
                logger.warning(
                    "unclosed_containers",
                    count=len(open_regions),
                    types=[node.node_type for node in open_regions],
                )
        except OutlineStructureError as e:
            logger.error(
                "structure_error",
                error=e.message,
                line_number=e.line_number,
                strict=self.strict,
            )
            raise

        logger.debug("outline_parsed", line_count=line_count, node_count=len(stack))
        return stack

    def parse_text(self, text: str) -> list[Node]:
        """Parse a multi-line string (split on \\n or \\r\\n)."""
        return self.parse_lines(split_lines(text))

    def parse_file(self, source: Source, client: Optional[httpx.Client] = None) -> list[Node]:
        """Parse a file path, http(s) URL or open stream.

        The source is opened and released within this call. I/O errors
        propagate unchanged.

        Args:
            source: File path, URL, or open text/binary stream
            client: Optional httpx.Client used for URL sources
        """
        with open_source(
            source,
            encoding=self.settings.encoding,
            timeout=self.settings.url_timeout,
            client=client,
        ) as lines:
            return self.parse_lines(lines)

    def _close_top(self, stack: list[Node], line_number: Optional[int], line: str) -> None:
        """Pop the top container and append it to its parent."""
        if len(stack) < 2:
            raise OutlineStructureError(
                "End marker with no open container to close", line_number, line
            )
        top = stack.pop()
        stack[-1].append(top)

    def _check_no_open_region(
        self, stack: list[Node], line_number: Optional[int], line: str
    ) -> None:
        top = stack[-1]
        if isinstance(top, (Block, Drawer)):
            raise OutlineStructureError(
                f"Headline inside unterminated {_describe(top)}", line_number, line
            )

    def _check_closes_block(
        self, stack: list[Node], block_type: str, line_number: Optional[int], line: str
    ) -> None:
        top = stack[-1]
        if not isinstance(top, Block):
            raise OutlineStructureError(
                f"END_{block_type} without an open block", line_number, line
            )
        if top.block_type != block_type:
            raise OutlineStructureError(
                f"END_{block_type} does not match open {_describe(top)}", line_number, line
            )


def _describe(node: Node) -> str:
    if isinstance(node, Block):
        return f"BEGIN_{node.block_type} block"
    return node.node_type


def parse_lines(
    lines: Iterable[str],
    rules: Optional[Sequence[Rule]] = None,
    settings: Optional[ParserSettings] = None,
) -> list[Node]:
    """Parse a sequence of lines. See OutlineParser.parse_lines."""
    return OutlineParser(rules, settings).parse_lines(lines)


def parse_text(
    text: str,
    rules: Optional[Sequence[Rule]] = None,
    settings: Optional[ParserSettings] = None,
) -> list[Node]:
    """Parse a multi-line string. See OutlineParser.parse_text."""
    return OutlineParser(rules, settings).parse_text(text)


def parse_file(
    source: Source,
    rules: Optional[Sequence[Rule]] = None,
    settings: Optional[ParserSettings] = None,
    client: Optional[httpx.Client] = None,
) -> list[Node]:
    """Parse a file path, URL or open stream. See OutlineParser.parse_file."""
    return OutlineParser(rules, settings).parse_file(source, client=client)
