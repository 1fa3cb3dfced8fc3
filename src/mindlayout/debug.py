"""
Debug utilities for mindlayout.

Key Components:
- GraphInspector: queries and sanity checks over a PositionedGraph
- graph_diff: compare two layouts node by node

Usage:
    >>> from mindlayout.debug import GraphInspector, graph_diff
    >>> inspector = GraphInspector(graph)
    >>> inspector.out_of_bounds()
    []
    >>> print(graph_diff(first, second))
    Graphs are identical
"""

import math
from typing import List, Optional

from .models import PositionedGraph, PositionedNode


class GraphInspector:
    """
    Utilities for inspecting a layout result.

    Example:
        >>> inspector = GraphInspector(graph)
        >>> inspector.find("a").side
        -1
        >>> [n.id for n in inspector.children_of("r")]
        ['a', 'b', 'c']
    """

    def __init__(self, graph: PositionedGraph):
        self.graph = graph
        self._by_key = {node.key: node for node in graph.nodes}

    def find(self, node_id: str) -> Optional[PositionedNode]:
        """First node with the given input id."""
        for node in self.graph.nodes:
            if node.id == node_id:
                return node
        return None

    def find_all(self, node_id: str) -> List[PositionedNode]:
        """Every node with the given input id."""
        return [node for node in self.graph.nodes if node.id == node_id]

    def get(self, key: str) -> Optional[PositionedNode]:
        return self._by_key.get(key)

    def root(self) -> Optional[PositionedNode]:
        return self.graph.root

    def children_of(self, key: str) -> List[PositionedNode]:
        """Direct children of the node with the given key, in order."""
        return [
            self._by_key[edge.target]
            for edge in self.graph.edges
            if edge.source == key
        ]

    def markers(self, kind: Optional[str] = None) -> List[PositionedNode]:
        """Synthetic marker leaves, optionally filtered by kind."""
        return [
            node
            for node in self.graph.nodes
            if node.marker is not None and (kind is None or node.marker == kind)
        ]

    def non_finite(self) -> List[str]:
        """Descriptions of every non-finite number in the graph."""
        problems = []
        for name in ("width", "height"):
            if not math.isfinite(getattr(self.graph, name)):
                problems.append(f"canvas {name}")
        for node in self.graph.nodes:
            for name in ("x", "y"):
                if not math.isfinite(getattr(node, name)):
                    problems.append(f"{node.key}.{name}")
        for index, edge in enumerate(self.graph.edges):
            for end, point in (("from", edge.from_point), ("to", edge.to_point)):
                if not (math.isfinite(point.x) and math.isfinite(point.y)):
                    problems.append(f"edge {index} {end}")
        return problems

    def out_of_bounds(self) -> List[str]:
        """Keys of nodes whose center lies outside the canvas."""
        return [
            node.key
            for node in self.graph.nodes
            if not (0 <= node.x <= self.graph.width and 0 <= node.y <= self.graph.height)
        ]

    def describe(self) -> str:
        """Indented outline of the graph, one node per line."""
        lines = [
            f"{self.graph.mode} layout: {len(self.graph.nodes)} nodes, "
            f"{len(self.graph.edges)} edges, "
            f"canvas {self.graph.width:g}x{self.graph.height:g}"
        ]
        for node in self.graph.nodes:
            marker = f" [{node.marker}]" if node.marker else ""
            lines.append(
                f"{'  ' * node.depth}{node.label or node.id}{marker} "
                f"@ ({node.x:.1f}, {node.y:.1f}) side={node.side} "
                f"branch={node.branch_index}"
            )
        return "\n".join(lines)


def graph_diff(expected: PositionedGraph, actual: PositionedGraph) -> str:
    """
    Compare two layouts node by node.

    Nodes are matched by key. Reports canvas size changes, missing and extra
    nodes, and moved nodes.

    Args:
        expected: The reference graph.
        actual: The graph to check.

    Returns:
        A human-readable report; "Graphs are identical" when nothing differs.
    """
    lines = []

    if (expected.width, expected.height) != (actual.width, actual.height):
        lines.append(
            f"Canvas: expected {expected.width:g}x{expected.height:g}, "
            f"got {actual.width:g}x{actual.height:g}"
        )

    expected_nodes = {node.key: node for node in expected.nodes}
    actual_nodes = {node.key: node for node in actual.nodes}

    for key in expected_nodes:
        if key not in actual_nodes:
            lines.append(f"Missing node: {key}")
    for key in actual_nodes:
        if key not in expected_nodes:
            lines.append(f"Extra node: {key}")

    for key, node in expected_nodes.items():
        other = actual_nodes.get(key)
        if other is None:
            continue
        if node.to_dict() != other.to_dict():
            lines.append(
                f"Changed node {key}: ({node.x:g}, {node.y:g}) side={node.side} "
                f"-> ({other.x:g}, {other.y:g}) side={other.side}"
            )

    if len(expected.edges) != len(actual.edges):
        lines.append(f"Edges: expected {len(expected.edges)}, got {len(actual.edges)}")

    if not lines:
        return "Graphs are identical"
    return "\n".join(lines)
