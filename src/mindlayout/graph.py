"""
Graph analysis helpers built on networkx.

Two views are provided:
- The *source* graph: input ids as vertices and parent->child relations as
  edges. Repeated ids collapse into one vertex, so an id that reappears
  below its own ancestor shows up as a real cycle.
- The *output* graph: a PositionedGraph as a DiGraph keyed by node key,
  which must always be an arborescence.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

import networkx as nx

from .models import PositionedGraph, read_node

DEFAULT_MAX_NODES = 100_000


@dataclass
class SourceSummary:
    """
    Shape of an input tree.

    Attributes:
        node_count: Nodes reachable from the root (each object counted once).
        distinct_ids: Number of distinct ids.
        duplicate_ids: Ids that appear on more than one node, sorted.
        has_cycles: True when the merged id graph contains a cycle.
        cycle: One cycle as a list of (parent_id, child_id) edges, if any.
        max_depth: Deepest level reached during the walk.
        truncated: True when the walk stopped at max_nodes.
    """

    node_count: int = 0
    distinct_ids: int = 0
    duplicate_ids: List[str] = field(default_factory=list)
    has_cycles: bool = False
    cycle: List[Tuple[str, str]] = field(default_factory=list)
    max_depth: int = 0
    truncated: bool = False


def _walk_source(root: Any, max_nodes: int):
    """
    Yield (node_id, parent_id, depth) for every input node.

    Iterative. An object is not expanded again below itself, so
    self-referencing Python objects terminate; an object shared between
    unrelated branches is walked in each of them.
    """
    stack = [(root, None, 0, "root", frozenset())]
    emitted = 0
    while stack and emitted < max_nodes:
        raw, parent_id, depth, fallback_id, ancestors = stack.pop()
        fields = read_node(raw, fallback_id)
        if fields is None:
            continue
        yield fields.id, parent_id, depth
        emitted += 1

        if id(raw) in ancestors:
            continue
        child_ancestors = ancestors | {id(raw)}
        for index in range(len(fields.children) - 1, -1, -1):
            stack.append(
                (
                    fields.children[index],
                    fields.id,
                    depth + 1,
                    f"{fields.id}.{index}",
                    child_ancestors,
                )
            )
    # Only entries that would read as nodes count as skipped
    if any(entry[0] is not None for entry in stack):
        yield None, None, -1


def source_digraph(root: Any, max_nodes: int = DEFAULT_MAX_NODES) -> nx.DiGraph:
    """
    Build the merged id graph of an input tree.

    Vertices carry a "count" attribute with the number of nodes sharing the
    id and a "label" from the first of them.

    Args:
        root: MindmapNode, mapping, or None.
        max_nodes: Upper bound on visited nodes.

    Returns:
        A networkx DiGraph (empty for a None root).
    """
    graph = nx.DiGraph()
    graph.graph["max_depth"] = 0
    graph.graph["node_count"] = 0
    graph.graph["truncated"] = False

    for node_id, parent_id, depth in _walk_source(root, max_nodes):
        if node_id is None:
            graph.graph["truncated"] = True
            break
        graph.graph["node_count"] += 1
        graph.graph["max_depth"] = max(graph.graph["max_depth"], depth)
        if node_id in graph:
            graph.nodes[node_id]["count"] += 1
        else:
            graph.add_node(node_id, count=1)
        if parent_id is not None:
            graph.add_edge(parent_id, node_id)
    return graph


def analyze_source(root: Any, max_nodes: int = DEFAULT_MAX_NODES) -> SourceSummary:
    """
    Summarize an input tree before layout.

    Args:
        root: MindmapNode, mapping, or None.
        max_nodes: Upper bound on visited nodes.

    Returns:
        SourceSummary describing counts, duplicate ids and id cycles.
    """
    graph = source_digraph(root, max_nodes)
    summary = SourceSummary(
        node_count=graph.graph["node_count"],
        distinct_ids=graph.number_of_nodes(),
        duplicate_ids=sorted(n for n, count in graph.nodes(data="count") if count > 1),
        max_depth=graph.graph["max_depth"],
        truncated=graph.graph["truncated"],
    )
    if graph.number_of_nodes() and not nx.is_directed_acyclic_graph(graph):
        summary.has_cycles = True
        summary.cycle = [(u, v) for u, v in nx.find_cycle(graph)]
    return summary


def to_networkx(graph: PositionedGraph) -> nx.DiGraph:
    """
    Convert a layout result to a DiGraph keyed by node key.

    Node attributes mirror PositionedNode fields; edge attributes carry the
    SVG path when one was computed.
    """
    digraph = nx.DiGraph(width=graph.width, height=graph.height, mode=graph.mode)
    for node in graph.nodes:
        attributes = node.to_dict()
        attributes.pop("key")
        digraph.add_node(node.key, **attributes)
    for edge in graph.edges:
        digraph.add_edge(
            edge.source, edge.target, d=edge.path.to_svg() if edge.path else None
        )
    return digraph


def is_tree(graph: PositionedGraph) -> bool:
    """True when the layout result forms a single rooted tree."""
    if graph.is_empty:
        return True
    return nx.is_arborescence(to_networkx(graph))


def subtree_keys(graph: PositionedGraph, key: str) -> Optional[List[str]]:
    """Keys of a node and all its descendants, or None for an unknown key."""
    digraph = to_networkx(graph)
    if key not in digraph:
        return None
    return [key] + sorted(nx.descendants(digraph, key))
