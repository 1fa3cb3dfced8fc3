"""
Bidirectional tree layout.

The root sits in the middle; its children are split into a left half and a
right half that fan out horizontally. Within each half a running vertical
cursor hands out one slot per leaf, and every parent is centered between its
first and last child. The shorter half is then shifted down so both halves
are centered on the root.

Algorithm:
1. Split root's children: the first ceil(n/2) go left, the rest go right.
2. Lay out each half depth-first with its own cursor.
3. x = side * depth * (node_width + level_gap); side and branch index are
   inherited from the top-level branch.
4. Balance the halves and place the root at half the tallest half.
"""

import logging
import math
from typing import FrozenSet, List, Optional, Tuple

from . import constants
from .assembly import assemble
from .config import DEFAULT_CONFIG, LayoutConfig
from .context import LayoutContext, YCursor
from .models import LayoutNode, NodeFields, PositionedGraph, read_node
from .sizing import estimate_node_height, min_node_height, safe_number
from .tracer import LayoutTrace

logger = logging.getLogger(__name__)

ROOT_BRANCH_INDEX = -1

LEFT = -1
RIGHT = 1


def split_children(children: List) -> Tuple[List, List]:
    """Split top-level branches into (left, right); left gets the extra one."""
    mid = math.ceil(len(children) / 2)
    return children[:mid], children[mid:]


def shift_subtree(node: LayoutNode, shift: float) -> None:
    """Move a laid out subtree vertically."""
    for descendant in node.walk():
        descendant.y = safe_number(descendant.y + shift, 0.0)


class TreeLayout:
    """
    Tiered left/right mindmap layout.

    The instance only holds configuration; every call to layout() works on
    its own context and cursors.

    Example:
        >>> layout = TreeLayout()
        >>> root = layout.layout({"id": "r", "label": "Root", "children": []})
        >>> root.y
        50.0
    """

    def __init__(self, config: LayoutConfig = DEFAULT_CONFIG):
        self.config = config

    def layout(
        self, root, trace: Optional[LayoutTrace] = None
    ) -> Optional[LayoutNode]:
        """
        Position every node of the tree.

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
        branches = self._read_children(root_fields)
        left_branches, right_branches = split_children(branches)

        if trace is not None:
            trace.add_stage(
                "split",
                {
                    "left": [fields.id for _, fields in left_branches],
                    "right": [fields.id for _, fields in right_branches],
                },
            )

        path = frozenset([root_fields.id])
        trail = (root_fields.id,)

        left_cursor = YCursor()
        left_results = [
            self._layout_subtree(fields, 1, LEFT, ordinal, left_cursor, path, trail, context)
            for ordinal, fields in left_branches
        ]
        right_cursor = YCursor()
        right_results = [
            self._layout_subtree(fields, 1, RIGHT, ordinal, right_cursor, path, trail, context)
            for ordinal, fields in right_branches
        ]

        left_total = safe_number(left_cursor.value, 0.0)
        right_total = safe_number(right_cursor.value, 0.0)
        if trace is not None:
            trace.add_stage("left_half", {"total": left_total, "branches": len(left_results)})
            trace.add_stage("right_half", {"total": right_total, "branches": len(right_results)})

        max_height = max(left_total, right_total, min_node_height(0, self.config))
        left_shift = (max_height - left_total) / 2
        right_shift = (max_height - right_total) / 2
        for result in left_results:
            shift_subtree(result, left_shift)
        for result in right_results:
            shift_subtree(result, right_shift)

        root_y = safe_number(max_height / 2, 0.0)
        if trace is not None:
            trace.add_stage(
                "balance",
                {
                    "max_height": max_height,
                    "left_shift": left_shift,
                    "right_shift": right_shift,
                    "root_y": root_y,
                },
            )
        logger.debug(
            "Tree layout balanced: left=%s right=%s max_height=%s",
            left_total,
            right_total,
            max_height,
        )

        return LayoutNode(
            id=root_fields.id,
            label=root_fields.label,
            note=root_fields.note,
            depth=0,
            side=0,
            branch_index=ROOT_BRANCH_INDEX,
            x=0.0,
            y=root_y,
            node_height=estimate_node_height(
                root_fields.label, root_fields.note, 0, self.config
            ),
            total_height=max_height,
            processed_children=left_results + right_results,
        )

    def _read_children(self, fields: NodeFields) -> List[Tuple[int, NodeFields]]:
        """Sanitized children paired with their ordinal, None entries dropped."""
        children = []
        for index, raw_child in enumerate(fields.children):
            child_fields = read_node(raw_child, f"{fields.id}.{index}")
            if child_fields is not None:
                children.append(child_fields)
        return list(enumerate(children))

    def _layout_subtree(
        self,
        fields: NodeFields,
        depth: int,
        side: int,
        branch_index: int,
        cursor: YCursor,
        path: FrozenSet[str],
        trail: Tuple[str, ...],
        context: LayoutContext,
    ) -> LayoutNode:
        config = self.config
        x = safe_number(side * depth * config.column_pitch, 0.0)

        reason = context.prune_reason(fields, depth, path)
        if reason is not None:
            marker = context.make_marker(fields, reason, depth, side, branch_index, trail)
            slot = marker.node_height + config.node_gap
            marker.x = x
            marker.y = safe_number(cursor.claim(slot), 0.0)
            marker.total_height = slot
            return marker

        child_path = path | {fields.id}
        child_trail = trail + (fields.id,)
        processed = [
            self._layout_subtree(
                child_fields,
                depth + 1,
                side,
                branch_index,
                cursor,
                child_path,
                child_trail,
                context,
            )
            for _, child_fields in self._read_children(fields)
        ]

        node_height = estimate_node_height(fields.label, fields.note, depth, config)
        if processed:
            total_height = sum(child.total_height for child in processed)
            y = (processed[0].y + processed[-1].y) / 2
        else:
            total_height = node_height + config.node_gap
            y = cursor.claim(total_height)

        return LayoutNode(
            id=fields.id,
            label=fields.label,
            note=fields.note,
            depth=depth,
            side=side,
            branch_index=branch_index,
            x=x,
            y=safe_number(y, 0.0),
            node_height=node_height,
            total_height=safe_number(total_height, min_node_height(depth, config)),
            processed_children=processed,
        )


def layout_tree(
    root,
    config: Optional[LayoutConfig] = None,
    trace: Optional[LayoutTrace] = None,
) -> PositionedGraph:
    """
    Convenience function: tree layout followed by graph assembly.

    Args:
        root: MindmapNode, mapping, or None.
        config: Optional configuration (defaults to DEFAULT_CONFIG).
        trace: Optional trace.

    Returns:
        PositionedGraph for the tree.
    """
    config = config or DEFAULT_CONFIG
    layout_root = TreeLayout(config).layout(root, trace=trace)
    return assemble(layout_root, config=config, mode=constants.LAYOUT_TREE, trace=trace)
