"""
Parser module for mindmap import.

Mindmaps are imported as JSON text, typically pasted from a chat assistant,
so the text may be wrapped in markdown code fences.
"""

import json
import re
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .models import MindmapDocument, MindmapNode


class ParseError(Exception):
    """Raised when mindmap input parsing fails."""

    pass


class Parser:
    """Parses mindmap JSON text into typed trees and documents."""

    # ```json ... ``` or bare ``` fences anywhere in the text
    FENCE_PATTERN = re.compile(r"```(?:json)?", re.IGNORECASE)

    def clean(self, text: str) -> str:
        """Strip markdown code fences and surrounding whitespace."""
        return self.FENCE_PATTERN.sub("", text).strip()

    def parse_json(self, text: str) -> Dict[str, Any]:
        """
        Decode and validate the root object of a mindmap.

        Args:
            text: JSON text, optionally fenced.

        Returns:
            The decoded root mapping.

        Raises:
            ParseError: If the text is empty, not JSON, or the root lacks
                id, label or a children list.
        """
        if text is None or not text.strip():
            raise ParseError("No mindmap JSON provided")

        try:
            data = json.loads(self.clean(text))
        except json.JSONDecodeError as e:
            raise ParseError(f"Invalid JSON: {e.msg} (line {e.lineno}, column {e.colno})") from e

        if not isinstance(data, dict):
            raise ParseError("Invalid structure. Root must be a JSON object.")
        if not data.get("id") or not data.get("label") or not isinstance(
            data.get("children"), list
        ):
            raise ParseError(
                "Invalid structure. Root must have id, label, and children array."
            )
        return data

    def parse(self, text: str) -> MindmapNode:
        """
        Parse mindmap JSON into a MindmapNode tree.

        Args:
            text: JSON text, optionally fenced.

        Returns:
            Root MindmapNode.

        Raises:
            ParseError: If input is invalid.
        """
        return MindmapNode.from_dict(self.parse_json(text))

    def create_document(
        self,
        title: str,
        json_text: str,
        description: str = "",
        created_at: Optional[datetime] = None,
    ) -> MindmapDocument:
        """
        Build a new stored mindmap from an imported tree.

        The document id is the creation time in milliseconds since the epoch.

        Args:
            title: Topic name; must not be blank.
            json_text: Root node JSON.
            description: Optional context text.
            created_at: Creation time (defaults to now, UTC).

        Returns:
            MindmapDocument

        Raises:
            ParseError: If the title is blank or the JSON is invalid.
        """
        if not title or not title.strip():
            raise ParseError("Missing topic: please enter a topic name")

        root = self.parse(json_text)
        created_at = created_at or datetime.now(timezone.utc)
        return MindmapDocument(
            id=str(int(created_at.timestamp() * 1000)),
            title=title.strip(),
            description=description or "",
            root=root,
            created_at=created_at.isoformat(),
        )


def parse_mindmap(text: str) -> MindmapNode:
    """
    Convenience function to parse mindmap JSON.

    Args:
        text: JSON text, optionally fenced.

    Returns:
        Root MindmapNode.
    """
    parser = Parser()
    return parser.parse(text)


def create_document(
    title: str,
    json_text: str,
    description: str = "",
    created_at: Optional[datetime] = None,
) -> MindmapDocument:
    """Convenience wrapper around Parser.create_document."""
    return Parser().create_document(title, json_text, description, created_at)
