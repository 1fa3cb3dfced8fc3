"""Unit tests for the parser module."""

import json
from datetime import datetime, timezone

import pytest

from mindlayout.models import MindmapDocument, MindmapNode
from mindlayout.parser import ParseError, Parser, create_document, parse_mindmap

VALID = json.dumps(
    {
        "id": "root",
        "label": "Keyboard",
        "note": "Input device.",
        "children": [
            {"id": "types", "label": "Types", "children": [{"id": "usb", "label": "USB"}]}
        ],
    }
)


class TestParserClean:
    """Tests for code fence stripping."""

    def test_json_fence(self):
        assert Parser().clean("```json\n{}\n```") == "{}"

    def test_bare_fence(self):
        assert Parser().clean("```\n[1]\n```  ") == "[1]"

    def test_no_fence(self):
        assert Parser().clean("  {\"a\": 1} ") == '{"a": 1}'


class TestParserParse:
    """Tests for Parser.parse."""

    def test_valid(self):
        root = Parser().parse(VALID)
        assert isinstance(root, MindmapNode)
        assert root.id == "root"
        assert root.note == "Input device."
        assert root.children[0].children[0].label == "USB"

    def test_fenced(self):
        root = parse_mindmap(f"Here you go:\n```json\n{VALID}\n```")
        assert root.label == "Keyboard"

    def test_invalid_json(self):
        with pytest.raises(ParseError, match="Invalid JSON"):
            parse_mindmap("{not json")

    def test_empty(self):
        with pytest.raises(ParseError, match="No mindmap JSON"):
            parse_mindmap("   ")

    def test_root_must_be_object(self):
        with pytest.raises(ParseError, match="JSON object"):
            parse_mindmap("[1, 2]")

    @pytest.mark.parametrize(
        "data",
        [
            {"label": "L", "children": []},
            {"id": "r", "children": []},
            {"id": "r", "label": "L"},
            {"id": "r", "label": "L", "children": "x"},
        ],
    )
    def test_root_structure(self, data):
        with pytest.raises(ParseError, match="id, label, and children"):
            parse_mindmap(json.dumps(data))

    def test_nested_nodes_are_sanitized(self):
        text = json.dumps(
            {"id": "r", "label": "R", "children": [None, {"label": 5, "children": 3}]}
        )
        root = parse_mindmap(text)
        assert len(root.children) == 1
        child = root.children[0]
        assert child.id == "r.1"
        assert child.label == "5"
        assert child.children == []


class TestCreateDocument:
    """Tests for building stored documents."""

    def test_document(self):
        created = datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)
        document = create_document("  Keyboards ", VALID, "Hardware", created_at=created)
        assert isinstance(document, MindmapDocument)
        assert document.id == str(int(created.timestamp() * 1000))
        assert document.title == "Keyboards"
        assert document.description == "Hardware"
        assert document.created_at == "2024-05-01T12:30:00+00:00"
        assert document.root.id == "root"

    def test_default_timestamp(self):
        document = Parser().create_document("Topic", VALID)
        assert document.id.isdigit()
        assert document.created_at

    def test_missing_title(self):
        with pytest.raises(ParseError, match="topic"):
            create_document("  ", VALID)

    def test_bad_json(self):
        with pytest.raises(ParseError):
            create_document("Topic", "")
