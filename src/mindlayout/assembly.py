"""
Graph assembly.

Turns a laid out LayoutNode tree into the flat PositionedGraph handed to the
renderer: pre-order node list, one edge per parent->child relation, a padded
canvas and a global shift that makes every coordinate non-negative. Edge
drawing geometry is computed here too, because the anchor offsets depend on
the per-depth node widths.
"""

import logging
from typing import Dict, List, Optional, Tuple

from . import constants
from .config import DEFAULT_CONFIG, LayoutConfig
from .models import (
    EdgeEndpoint,
    EdgePath,
    LayoutNode,
    PositionedEdge,
    PositionedGraph,
    PositionedNode,
)
from .sizing import node_width, safe_number
from .tracer import LayoutTrace

logger = logging.getLogger(__name__)


def empty_graph(
    config: LayoutConfig = DEFAULT_CONFIG, mode: str = constants.LAYOUT_TREE
) -> PositionedGraph:
    """Graph returned for a missing root."""
    return PositionedGraph(
        nodes=[],
        edges=[],
        width=config.empty_canvas_size,
        height=config.empty_canvas_size,
        mode=mode,
    )


def _endpoint(node: PositionedNode) -> EdgeEndpoint:
    return EdgeEndpoint(
        x=node.x,
        y=node.y,
        side=node.side,
        depth=node.depth,
        branch_index=node.branch_index,
    )


def flatten(layout_root: LayoutNode) -> Tuple[List[PositionedNode], List[PositionedEdge]]:
    """
    Flatten a layout tree in pre-order.

    Repeated input ids get distinct keys ("id", "id#2", "id#3", ...).

    Args:
        layout_root: Root of a laid out tree.

    Returns:
        Tuple of (nodes, edges) in pre-order.
    """
    nodes: List[PositionedNode] = []
    edges: List[PositionedEdge] = []
    key_counts: Dict[str, int] = {}

    stack: List[Tuple[LayoutNode, Optional[PositionedNode]]] = [(layout_root, None)]
    while stack:
        layout_node, parent = stack.pop()

        count = key_counts.get(layout_node.id, 0) + 1
        key_counts[layout_node.id] = count
        key = layout_node.id if count == 1 else f"{layout_node.id}#{count}"

        node = PositionedNode(
            id=layout_node.id,
            key=key,
            label=layout_node.label,
            note=layout_node.note,
            x=safe_number(layout_node.x, 0.0),
            y=safe_number(layout_node.y, 0.0),
            depth=layout_node.depth,
            side=layout_node.side,
            branch_index=layout_node.branch_index,
            marker=layout_node.marker,
        )
        nodes.append(node)

        if parent is not None:
            edges.append(
                PositionedEdge(
                    from_point=_endpoint(parent),
                    to_point=_endpoint(node),
                    source=parent.key,
                    target=node.key,
                )
            )

        for child in reversed(layout_node.processed_children):
            stack.append((child, node))

    return nodes, edges


def compute_bounds(nodes: List[PositionedNode]) -> Tuple[float, float, float, float]:
    """Return (min_x, min_y, max_x, max_y) over node centers."""
    min_x = min(node.x for node in nodes)
    max_x = max(node.x for node in nodes)
    min_y = min(node.y for node in nodes)
    max_y = max(node.y for node in nodes)
    return min_x, min_y, max_x, max_y


def edge_path(
    edge: PositionedEdge, mode: str, config: LayoutConfig = DEFAULT_CONFIG
) -> EdgePath:
    """
    Drawing geometry for one edge.

    Tree edges leave the parent box on the child's side (the root has no
    side of its own) and enter the child box on the side facing the parent;
    control points are pulled horizontally by half the level gap so the
    curve forms an S. Radial edges are straight center-to-center segments.

    Args:
        edge: Edge with final coordinates.
        mode: "tree" or "radial".
        config: Layout configuration for widths and gaps.

    Returns:
        EdgePath for the renderer.
    """
    source, target = edge.from_point, edge.to_point

    if mode == constants.LAYOUT_RADIAL:
        start = (source.x, source.y)
        end = (target.x, target.y)
        return EdgePath(start=start, control1=start, control2=end, end=end, straight=True)

    direction = target.side
    source_half = node_width(source.depth, config) / 2
    target_half = node_width(target.depth, config) / 2

    if source.depth == 0:
        from_x = source.x + direction * source_half
    else:
        from_x = source.x + source.side * source_half
    to_x = target.x - direction * target_half

    pull = direction * config.level_gap / 2
    return EdgePath(
        start=(from_x, source.y),
        control1=(from_x + pull, source.y),
        control2=(to_x - pull, target.y),
        end=(to_x, target.y),
    )


def assemble(
    layout_root: Optional[LayoutNode],
    config: Optional[LayoutConfig] = None,
    mode: str = constants.LAYOUT_TREE,
    trace: Optional[LayoutTrace] = None,
) -> PositionedGraph:
    """
    Build the final graph from a layout tree.

    Args:
        layout_root: Output of TreeLayout or RadialLayout; None gives the
            empty graph.
        config: Layout configuration (padding, widths, gaps).
        mode: Layout mode, recorded on the graph and used for edge shape.
        trace: Optional trace.

    Returns:
        PositionedGraph with all coordinates inside [0, width] x [0, height].
    """
    config = config or DEFAULT_CONFIG
    if layout_root is None:
        logger.debug("No root to assemble, returning empty graph")
        return empty_graph(config, mode)

    nodes, edges = flatten(layout_root)
    if trace is not None:
        trace.add_stage("flatten", {"nodes": len(nodes), "edges": len(edges)})

    min_x, min_y, max_x, max_y = compute_bounds(nodes)
    if trace is not None:
        trace.add_stage(
            "bounds", {"min_x": min_x, "min_y": min_y, "max_x": max_x, "max_y": max_y}
        )

    padding = config.canvas_padding
    width = safe_number((max_x - min_x) + padding, padding)
    height = safe_number((max_y - min_y) + padding, padding)
    shift_x = safe_number(-min_x + padding / 2, 0.0)
    shift_y = safe_number(-min_y + padding / 2, 0.0)

    for node in nodes:
        node.x += shift_x
        node.y += shift_y
    for edge in edges:
        for point in (edge.from_point, edge.to_point):
            point.x += shift_x
            point.y += shift_y
        edge.path = edge_path(edge, mode, config)

    if trace is not None:
        trace.add_stage(
            "shift",
            {"shift_x": shift_x, "shift_y": shift_y, "width": width, "height": height},
        )
    logger.debug(
        "Assembled %d nodes and %d edges on a %sx%s canvas",
        len(nodes),
        len(edges),
        width,
        height,
    )

    return PositionedGraph(nodes=nodes, edges=edges, width=width, height=height, mode=mode)
