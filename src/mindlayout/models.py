"""
Data models for mindmap layout.

This module contains the dataclasses passed into and out of the layout
engine. Input trees are described by MindmapNode (or plain decoded-JSON
mappings of the same shape); the engine builds LayoutNode records while it
works and hands back a PositionedGraph for rendering.

Classes:
    MindmapNode: One node of a user-authored mindmap tree (input).
    MindmapDocument: A stored mindmap with its metadata (input).
    NodeFields: Shallow, sanitized view of one raw input node.
    LayoutNode: Working record of one positioned node inside a layout pass.
    PositionedNode: Flat output record of one node.
    EdgeEndpoint: Output metadata for one end of an edge.
    EdgePath: Anchor and control points for drawing an edge.
    PositionedEdge: Output record of one parent->child relation.
    PositionedGraph: Complete layout result handed to the renderer.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, List, NamedTuple, Optional, Tuple


@dataclass
class MindmapNode:
    """
    A node of a user-authored mindmap.

    The layout engine never mutates these. Ids are expected to be unique but
    nothing enforces it; the engine copes with repeats.

    Attributes:
        id: Identifier of the node within its mindmap.
        label: Display text.
        note: Optional secondary annotation.
        children: Ordered child nodes.
    """

    id: str
    label: str = ""
    note: Optional[str] = None
    children: List["MindmapNode"] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping, fallback_id: str = "root") -> "MindmapNode":
        """
        Build a typed tree from decoded JSON.

        The conversion is iterative so very deep documents do not hit the
        interpreter recursion limit. Malformed entries are sanitized the same
        way the layout engine reads them. An object that contains itself
        somewhere below is cut at the repeat; the same object reused in
        unrelated places (e.g. shared siblings) is copied each time.

        Args:
            data: Mapping with id, label, note and children keys.
            fallback_id: Id to use when the root carries none.

        Returns:
            The root MindmapNode.
        """
        root_fields = read_node(data, fallback_id)
        if root_fields is None:
            raise TypeError("Mindmap root must be a mapping")

        root = cls(id=root_fields.id, label=root_fields.label, note=root_fields.note)
        # Object identities along the current path only
        stack = [(root, root_fields, frozenset([id(data)]))]
        while stack:
            parent, parent_fields, ancestors = stack.pop()
            for index, raw_child in enumerate(parent_fields.children):
                if id(raw_child) in ancestors:
                    continue
                child_fields = read_node(raw_child, f"{parent.id}.{index}")
                if child_fields is None:
                    continue
                child = cls(
                    id=child_fields.id, label=child_fields.label, note=child_fields.note
                )
                parent.children.append(child)
                if isinstance(raw_child, (Mapping, MindmapNode)):
                    stack.append((child, child_fields, ancestors | {id(raw_child)}))
        return root

    def _own_fields(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"id": self.id, "label": self.label}
        if self.note is not None:
            data["note"] = self.note
        data["children"] = []
        return data

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert back to a JSON-ready dict.

        Iterative like from_dict; a node that appears below itself is left
        out at the repeat.
        """
        data = self._own_fields()
        stack = [(self, data, frozenset([id(self)]))]
        while stack:
            node, node_data, ancestors = stack.pop()
            for child in node.children:
                if id(child) in ancestors:
                    continue
                child_data = child._own_fields()
                node_data["children"].append(child_data)
                stack.append((child, child_data, ancestors | {id(child)}))
        return data


@dataclass
class MindmapDocument:
    """
    A mindmap as stored by the document store.

    Attributes:
        id: Document identifier (creation timestamp in milliseconds).
        title: Topic shown in the header.
        description: Free text context.
        root: Root of the tree, or None when the stored document is broken.
        created_at: ISO-8601 creation time.
    """

    id: str
    title: str
    description: str = ""
    root: Optional[MindmapNode] = None
    created_at: str = ""

    @classmethod
    def from_dict(cls, data: Mapping) -> "MindmapDocument":
        raw_root = data.get("root")
        root = MindmapNode.from_dict(raw_root) if isinstance(raw_root, Mapping) else None
        return cls(
            id=str(data.get("id", "")),
            title=str(data.get("title", "")),
            description=str(data.get("description") or ""),
            root=root,
            created_at=str(data.get("createdAt", "")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "root": self.root.to_dict() if self.root is not None else None,
            "createdAt": self.created_at,
        }


class NodeFields(NamedTuple):
    """Sanitized view of one raw input node."""

    id: str
    label: str
    note: Optional[str]
    children: Tuple[Any, ...]


def read_node(raw: Any, fallback_id: str) -> Optional[NodeFields]:
    """
    Read one input node without trusting its shape.

    Accepts a MindmapNode, a mapping, or a bare scalar (read as a leaf whose
    label is the scalar's text). Missing or non-list children read as an
    empty tuple; a missing id is replaced with fallback_id.

    Args:
        raw: The raw node.
        fallback_id: Id used when the node has none.

    Returns:
        NodeFields, or None for a None node.
    """
    if raw is None:
        return None

    if isinstance(raw, MindmapNode):
        node_id, label, note, children = raw.id, raw.label, raw.note, raw.children
    elif isinstance(raw, Mapping):
        node_id = raw.get("id")
        label = raw.get("label")
        note = raw.get("note")
        children = raw.get("children")
    else:
        return NodeFields(id=fallback_id, label=str(raw), note=None, children=())

    if node_id is None or node_id == "":
        node_id = fallback_id
    if not isinstance(children, (list, tuple)):
        children = ()

    return NodeFields(
        id=str(node_id),
        label="" if label is None else str(label),
        note=None if note is None or note == "" else str(note),
        children=tuple(children),
    )


@dataclass
class LayoutNode:
    """
    Working record for one node during a layout pass.

    Owned by exactly one pass and exactly one parent; never shared.

    Attributes:
        id: Node id (synthetic for marker leaves).
        label: Display text.
        note: Optional annotation.
        depth: Distance from the root (root is 0).
        side: -1 left, 1 right, 0 for the root and radial layouts.
        branch_index: Ordinal of the top-level branch this node descends from.
        x: Horizontal position.
        y: Vertical position.
        node_height: Estimated footprint of this node alone.
        total_height: Vertical space claimed by this node's subtree.
        processed_children: Laid out children, at most as many as the input had.
        marker: None, "cycle" or "depth" for synthetic pruned leaves.
        angle: Polar angle in radial mode.
    """

    id: str
    label: str = ""
    note: Optional[str] = None
    depth: int = 0
    side: int = 0
    branch_index: int = 0
    x: float = 0.0
    y: float = 0.0
    node_height: float = 0.0
    total_height: float = 0.0
    processed_children: List["LayoutNode"] = field(default_factory=list)
    marker: Optional[str] = None
    angle: float = 0.0

    @property
    def is_leaf(self) -> bool:
        return not self.processed_children

    def walk(self):
        """Yield this node and its descendants in pre-order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.processed_children))


@dataclass
class PositionedNode:
    """
    A node in the final graph.

    Attributes:
        id: Input id (or synthetic id for marker leaves).
        key: Identifier unique within this graph, safe for render keys.
        label: Display text.
        note: Optional annotation.
        x: Center x on the canvas.
        y: Center y on the canvas.
        depth: Distance from the root.
        side: Fan direction (-1, 0 or 1).
        branch_index: Top-level branch ordinal, for colouring.
        marker: None, "cycle" or "depth".
    """

    id: str
    key: str
    label: str
    note: Optional[str]
    x: float
    y: float
    depth: int
    side: int
    branch_index: int
    marker: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "key": self.key,
            "label": self.label,
            "note": self.note,
            "x": self.x,
            "y": self.y,
            "depth": self.depth,
            "side": self.side,
            "branchIndex": self.branch_index,
            "marker": self.marker,
        }


@dataclass
class EdgeEndpoint:
    """Position and lineage metadata for one end of an edge."""

    x: float
    y: float
    side: int
    depth: int
    branch_index: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "x": self.x,
            "y": self.y,
            "side": self.side,
            "depth": self.depth,
            "branchIndex": self.branch_index,
        }


@dataclass
class EdgePath:
    """
    Cubic Bezier description of an edge.

    Straight edges use the anchors as control points.

    Attributes:
        start: Anchor on the parent box.
        control1: First control point.
        control2: Second control point.
        end: Anchor on the child box.
        straight: True when the edge is drawn as a line segment.
    """

    start: Tuple[float, float]
    control1: Tuple[float, float]
    control2: Tuple[float, float]
    end: Tuple[float, float]
    straight: bool = False

    def point_at(self, t: float) -> Tuple[float, float]:
        """Evaluate the curve at parameter t in [0, 1]."""
        u = 1 - t
        coefficients = (u * u * u, 3 * u * u * t, 3 * u * t * t, t * t * t)
        points = (self.start, self.control1, self.control2, self.end)
        x = sum(c * p[0] for c, p in zip(coefficients, points))
        y = sum(c * p[1] for c, p in zip(coefficients, points))
        return x, y

    def to_svg(self) -> str:
        """SVG path data for this edge."""
        sx, sy = self.start
        ex, ey = self.end
        if self.straight:
            return f"M{sx:g},{sy:g} L{ex:g},{ey:g}"
        c1x, c1y = self.control1
        c2x, c2y = self.control2
        return f"M{sx:g},{sy:g} C{c1x:g},{c1y:g} {c2x:g},{c2y:g} {ex:g},{ey:g}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "start": list(self.start),
            "control1": list(self.control1),
            "control2": list(self.control2),
            "end": list(self.end),
            "straight": self.straight,
            "d": self.to_svg(),
        }


@dataclass
class PositionedEdge:
    """
    A parent->child relation in the final graph.

    Attributes:
        from_point: Parent endpoint metadata.
        to_point: Child endpoint metadata.
        source: Key of the parent node.
        target: Key of the child node.
        path: Drawing geometry, filled in once coordinates are final.
    """

    from_point: EdgeEndpoint
    to_point: EdgeEndpoint
    source: str = ""
    target: str = ""
    path: Optional[EdgePath] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "from": self.from_point.to_dict(),
            "to": self.to_point.to_dict(),
            "source": self.source,
            "target": self.target,
        }
        if self.path is not None:
            data["path"] = self.path.to_dict()
        return data


@dataclass
class PositionedGraph:
    """
    Result of a layout pass.

    Coordinates are non-negative and lie inside [0, width] x [0, height].

    Attributes:
        nodes: Pre-order list of positioned nodes.
        edges: One edge per parent->child relation.
        width: Canvas width.
        height: Canvas height.
        mode: Layout mode that produced the graph.
    """

    nodes: List[PositionedNode] = field(default_factory=list)
    edges: List[PositionedEdge] = field(default_factory=list)
    width: float = 0.0
    height: float = 0.0
    mode: str = "tree"

    @property
    def is_empty(self) -> bool:
        return not self.nodes

    @property
    def root(self) -> Optional[PositionedNode]:
        return self.nodes[0] if self.nodes else None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nodes": [node.to_dict() for node in self.nodes],
            "edges": [edge.to_dict() for edge in self.edges],
            "width": self.width,
            "height": self.height,
            "mode": self.mode,
        }
