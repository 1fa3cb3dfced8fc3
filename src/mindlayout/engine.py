"""
Main layout engine module.

Combines the tree and radial layouts with graph assembly behind one facade
whose mode is fixed when the engine is built.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional

from . import constants
from .assembly import assemble, empty_graph
from .config import DEFAULT_CONFIG, LayoutConfig
from .graph import analyze_source
from .models import MindmapDocument, PositionedGraph
from .radial_layout import RadialLayout
from .tracer import LayoutTrace
from .tree_layout import TreeLayout

logger = logging.getLogger(__name__)


@dataclass
class LayoutOutcome:
    """
    Result of a guarded layout call.

    Attributes:
        graph: The layout, or the empty graph when layout failed.
        error: Error message when layout failed, otherwise None.
    """

    graph: PositionedGraph
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class MindmapLayoutEngine:
    """
    Compute positioned graphs from mindmap trees.

    The engine holds configuration only. Each call builds its own working
    state, so one engine may serve concurrent callers.

    Example:
        >>> engine = MindmapLayoutEngine()
        >>> graph = engine.layout({
        ...     "id": "r", "label": "Root",
        ...     "children": [{"id": "a", "label": "A"}],
        ... })
        >>> [node.side for node in graph.nodes]
        [0, -1]
    """

    def __init__(
        self,
        mode: Optional[str] = None,
        config: Optional[LayoutConfig] = None,
        **overrides,
    ):
        """
        Initialize the layout engine.

        Args:
            mode: "tree" (bidirectional, default) or "radial". Overrides the
                mode of config when given.
            config: Base configuration (defaults to DEFAULT_CONFIG).
            **overrides: Individual LayoutConfig fields to replace, e.g.
                level_gap=80 or max_depth=20.

        Raises:
            ValueError: For an unknown mode, an unknown option or an invalid
                value.
        """
        config = config or DEFAULT_CONFIG
        if mode is not None:
            overrides["mode"] = mode.lower()
        if overrides:
            config = config.with_overrides(**overrides)

        self.config = config
        if config.mode == constants.LAYOUT_RADIAL:
            self.layout_engine = RadialLayout(config)
        else:
            self.layout_engine = TreeLayout(config)

    @property
    def mode(self) -> str:
        return self.config.mode

    def layout(self, root: Any, trace: Optional[LayoutTrace] = None) -> PositionedGraph:
        """
        Lay out one mindmap tree.

        Args:
            root: MindmapNode or mapping; None yields the empty graph.
            trace: Optional LayoutTrace to collect stages and pruned nodes.

        Returns:
            PositionedGraph ready for rendering.
        """
        if trace is not None:
            trace.mode = self.mode
            summary = analyze_source(root)
            trace.add_stage(
                "source",
                {
                    "node_count": summary.node_count,
                    "distinct_ids": summary.distinct_ids,
                    "duplicate_ids": summary.duplicate_ids,
                    "has_cycles": summary.has_cycles,
                    "max_depth": summary.max_depth,
                },
            )

        if root is None:
            return empty_graph(self.config, self.mode)

        layout_root = self.layout_engine.layout(root, trace=trace)
        return assemble(layout_root, config=self.config, mode=self.mode, trace=trace)

    def layout_document(
        self, document: Any, trace: Optional[LayoutTrace] = None
    ) -> PositionedGraph:
        """
        Lay out a stored mindmap document.

        Args:
            document: MindmapDocument, its dict form, or None.
            trace: Optional trace.

        Returns:
            PositionedGraph; the empty graph when the document or its root
            is missing.
        """
        if isinstance(document, MindmapDocument):
            root = document.root
        elif isinstance(document, Mapping):
            root = document.get("root")
        else:
            root = None

        if root is None:
            logger.info("Mindmap document has no root, nothing to lay out")
            return empty_graph(self.config, self.mode)
        return self.layout(root, trace=trace)

    def safe_layout(self, root: Any, trace: Optional[LayoutTrace] = None) -> LayoutOutcome:
        """
        Lay out a tree without letting failures escape.

        Intended for the boundary between the engine and a host UI: any
        exception (including RecursionError from extreme max_depth settings)
        is logged and reported in the outcome alongside the empty graph.

        Args:
            root: MindmapNode, mapping, or None.
            trace: Optional trace.

        Returns:
            LayoutOutcome with the graph and an error message on failure.
        """
        try:
            return LayoutOutcome(graph=self.layout(root, trace=trace))
        except Exception as e:
            logger.exception("Layout calculation failed")
            return LayoutOutcome(
                graph=empty_graph(self.config, self.mode),
                error=str(e) or type(e).__name__,
            )


def compute_layout(
    root: Any, mode: str = constants.LAYOUT_MODE, **overrides
) -> PositionedGraph:
    """
    Convenience function to lay out a tree.

    Args:
        root: MindmapNode, mapping, or None.
        mode: "tree" or "radial".
        **overrides: LayoutConfig fields to replace.

    Returns:
        PositionedGraph
    """
    engine = MindmapLayoutEngine(mode=mode, **overrides)
    return engine.layout(root)
