"""
Radial layout.

Depth maps to radius and siblings divide their parent's angular slice. The
root sits at the origin; top-level branches share the full circle evenly,
and each deeper level narrows its children's arc so related clusters stay
tight instead of spreading around the circle.
"""

import logging
import math
from typing import FrozenSet, Optional, Tuple

from . import constants
from .assembly import assemble
from .config import DEFAULT_CONFIG, LayoutConfig
from .context import LayoutContext
from .models import LayoutNode, NodeFields, PositionedGraph, read_node
from .sizing import estimate_node_height, safe_number
from .tracer import LayoutTrace

logger = logging.getLogger(__name__)

FULL_CIRCLE = 2 * math.pi


class RadialLayout:
    """Polar mindmap layout; side is always 0."""

    def __init__(self, config: LayoutConfig = DEFAULT_CONFIG):
        self.config = config

    def layout(
        self, root, trace: Optional[LayoutTrace] = None
    ) -> Optional[LayoutNode]:
        """
        Position every node of the tree on concentric rings.

        Args:
            root: MindmapNode or mapping; None yields None.
            trace: Optional trace to record stages and pruned nodes.

        Returns:
            The positioned root LayoutNode, or None for a missing root.
        """
        root_fields = read_node(root, "root")
        if root_fields is None:
            return None

        context = LayoutContext(self.config, trace)
        layout_root = self._layout_node(
            root_fields,
            depth=0,
            angle=0.0,
            arc=FULL_CIRCLE,
            branch_index=-1,
            path=frozenset(),
            trail=(),
            context=context,
        )

        if trace is not None:
            trace.add_stage(
                "radial",
                {
                    "branches": len(layout_root.processed_children),
                    "rings": max(node.depth for node in layout_root.walk()),
                },
            )
        logger.debug(
            "Radial layout placed %d top-level branches",
            len(layout_root.processed_children),
        )
        return layout_root

    def _layout_node(
        self,
        fields: NodeFields,
        depth: int,
        angle: float,
        arc: float,
        branch_index: int,
        path: FrozenSet[str],
        trail: Tuple[str, ...],
        context: LayoutContext,
    ) -> LayoutNode:
        config = self.config
        radius = depth * config.column_pitch
        x = safe_number(math.cos(angle) * radius, 0.0)
        y = safe_number(math.sin(angle) * radius, 0.0)

        reason = context.prune_reason(fields, depth, path)
        if reason is not None:
            marker = context.make_marker(fields, reason, depth, 0, branch_index, trail)
            marker.x, marker.y, marker.angle = x, y, angle
            marker.total_height = marker.node_height
            return marker

        children = []
        for index, raw_child in enumerate(fields.children):
            child_fields = read_node(raw_child, f"{fields.id}.{index}")
            if child_fields is not None:
                children.append(child_fields)

        processed = []
        if children:
            count = len(children)
            if depth == 0:
                start_angle = 0.0
                per_child = FULL_CIRCLE / count
            else:
                start_angle = angle - arc / 2
                per_child = arc / count

            child_path = path | {fields.id}
            child_trail = trail + (fields.id,)
            for index, child_fields in enumerate(children):
                if depth == 0:
                    child_angle = index / count * FULL_CIRCLE
                    child_arc = per_child
                    child_branch = index
                else:
                    child_angle = start_angle + (index + 0.5) * per_child
                    child_arc = per_child * config.radial_arc_narrowing
                    child_branch = branch_index
                processed.append(
                    self._layout_node(
                        child_fields,
                        depth + 1,
                        safe_number(child_angle, 0.0),
                        safe_number(child_arc, 0.0),
                        child_branch,
                        child_path,
                        child_trail,
                        context,
                    )
                )

        node_height = estimate_node_height(fields.label, fields.note, depth, config)
        return LayoutNode(
            id=fields.id,
            label=fields.label,
            note=fields.note,
            depth=depth,
            side=0,
            branch_index=branch_index,
            x=x,
            y=y,
            node_height=node_height,
            total_height=node_height,
            processed_children=processed,
            angle=angle,
        )


def layout_radial(
    root,
    config: Optional[LayoutConfig] = None,
    trace: Optional[LayoutTrace] = None,
) -> PositionedGraph:
    """
    Convenience function: radial layout followed by graph assembly.

    Args:
        root: MindmapNode, mapping, or None.
        config: Optional configuration (defaults to DEFAULT_CONFIG).
        trace: Optional trace.

    Returns:
        PositionedGraph for the tree.
    """
    config = config or DEFAULT_CONFIG
    layout_root = RadialLayout(config).layout(root, trace=trace)
    return assemble(layout_root, config=config, mode=constants.LAYOUT_RADIAL, trace=trace)
