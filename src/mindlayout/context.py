"""
Per-call working state shared by both layout algorithms.

A LayoutContext is created at the start of every layout request and thrown
away at the end. It owns the marker counter and the optional trace; the
tree layout additionally uses one YCursor per half.
"""

import logging
from typing import FrozenSet, Optional, Tuple

from . import constants
from .config import LayoutConfig
from .models import LayoutNode, NodeFields
from .sizing import estimate_node_height
from .tracer import LayoutTrace, PruneEvent

logger = logging.getLogger(__name__)


class YCursor:
    """Running vertical offset for one half of a tree layout."""

    def __init__(self):
        self.value = 0.0

    def claim(self, height: float) -> float:
        """Reserve a slot of the given height and return its center."""
        center = self.value + height / 2
        self.value += height
        return center


class LayoutContext:
    """
    Working state for one layout invocation.

    Attributes:
        config: Layout configuration.
        trace: Optional trace receiving prune events.
        marker_count: Number of marker leaves created so far.
    """

    def __init__(self, config: LayoutConfig, trace: Optional[LayoutTrace] = None):
        self.config = config
        self.trace = trace
        self.marker_count = 0

    def prune_reason(
        self, fields: NodeFields, depth: int, path: FrozenSet[str]
    ) -> Optional[str]:
        """Return the marker kind a node must be replaced with, if any."""
        if depth > self.config.max_depth:
            return constants.DEPTH_MARKER
        if fields.id in path:
            return constants.CYCLE_MARKER
        return None

    def make_marker(
        self,
        fields: NodeFields,
        kind: str,
        depth: int,
        side: int,
        branch_index: int,
        trail: Tuple[str, ...],
    ) -> LayoutNode:
        """
        Build a synthetic leaf standing in for a pruned subtree.

        Marker ids are numbered per call so repeated layouts of the same
        tree produce identical ids.
        """
        self.marker_count += 1
        if kind == constants.CYCLE_MARKER:
            marker_id = f"{fields.id}__cycle_{self.marker_count}"
            label = f"{fields.label}{constants.CYCLE_LABEL_SUFFIX}"
            logger.warning(
                "Cycle detected: node %r repeats an ancestor id at depth %d",
                fields.id,
                depth,
            )
        else:
            marker_id = f"{fields.id}__max_depth_{self.marker_count}"
            label = f"{fields.label}{constants.DEPTH_LABEL_SUFFIX}"
            logger.warning(
                "Max depth %d exceeded at node %r, subtree pruned",
                self.config.max_depth,
                fields.id,
            )

        if self.trace is not None:
            self.trace.add_prune(
                PruneEvent(
                    kind=kind,
                    node_id=fields.id,
                    replacement_id=marker_id,
                    depth=depth,
                    path=list(trail),
                )
            )

        height = estimate_node_height(label, None, depth, self.config)
        return LayoutNode(
            id=marker_id,
            label=label,
            note=None,
            depth=depth,
            side=side,
            branch_index=branch_index,
            node_height=height,
            marker=kind,
        )
