"""Unit tests for outline node types."""

import json

import pytest

from org_outline.nodes import Block, Drawer, Line, Root, Section


class TestLine:
    """Tests for Line records."""

    def test_fields(self):
        line = Line("paragraph", "Some text")
        assert line.line_type == "paragraph"
        assert line.text == "Some text"

    def test_frozen(self):
        line = Line("comment", "note")
        with pytest.raises(Exception):  # dataclasses.FrozenInstanceError
            line.text = "changed"

    def test_to_dict_converts_tuple_payload(self):
        assert Line("property", ("TITLE", "Notes")).to_dict() == {
            "line_type": "property",
            "text": ["TITLE", "Notes"],
        }


class TestContainers:
    """Tests for Root, Section, Block and Drawer."""

    def test_node_types(self):
        assert Root().node_type == "root"
        assert Section(level=1, name="A").node_type == "section"
        assert Block(block_type="SRC").node_type == "block"
        assert Drawer().node_type == "drawer"

    def test_content_starts_empty_and_is_not_shared(self):
        first, second = Root(), Root()
        first.append(Line("paragraph", "x"))

        assert first.content == [Line("paragraph", "x")]
        assert second.content == []

    def test_append_keeps_insertion_order(self):
        section = Section(level=1, name="A")
        section.append(Line("paragraph", "one"))
        section.append(Drawer())
        section.append(Line("paragraph", "two"))

        assert [type(item) for item in section.content] == [Line, Drawer, Line]
        assert section.content[2].text == "two"

    def test_section_defaults(self):
        section = Section(level=2, name="Heading")
        assert section.tags == []
        assert section.keyword is None

    def test_block_defaults(self):
        assert Block(block_type="QUOTE").qualifier is None

    def test_equality_depends_on_variant(self):
        """Test that a Root and a Drawer with equal content are not equal."""
        assert Root() != Drawer()
        assert Root() == Root()

    def test_equality_includes_content(self):
        assert Block(block_type="SRC", content=[Line("paragraph", "x")]) != Block(block_type="SRC")


class TestToDict:
    """Tests for JSON-ready conversion."""

    def test_nested_to_dict(self):
        section = Section(
            level=1,
            name="Task",
            tags=["work"],
            keyword="TODO",
            content=[
                Drawer(content=[Line("property-drawer-item", ("ID", "42"))]),
                Block(block_type="SRC", qualifier="sh", content=[Line("paragraph", "ls")]),
            ],
        )

        assert section.to_dict() == {
            "type": "section",
            "level": 1,
            "name": "Task",
            "tags": ["work"],
            "keyword": "TODO",
            "content": [
                {
                    "type": "drawer",
                    "content": [{"line_type": "property-drawer-item", "text": ["ID", "42"]}],
                },
                {
                    "type": "block",
                    "block_type": "SRC",
                    "qualifier": "sh",
                    "content": [{"line_type": "paragraph", "text": "ls"}],
                },
            ],
        }

    def test_to_dict_is_json_serialisable(self):
        root = Root(content=[Line("blank", ""), Line("property", ("TITLE", "T"))])
        assert json.loads(json.dumps(root.to_dict())) == root.to_dict()
