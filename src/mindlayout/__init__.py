"""
mindlayout - Deterministic Mindmap Layout

A Python library that turns user-authored mindmap trees into positioned
node/edge graphs for pan/zoom rendering, in a bidirectional tree layout or a
radial layout.

Example:
    >>> from mindlayout import MindmapLayoutEngine
    >>> engine = MindmapLayoutEngine()
    >>> graph = engine.layout({
    ...     "id": "r", "label": "Root",
    ...     "children": [{"id": "a", "label": "A"}, {"id": "b", "label": "B"}],
    ... })
    >>> len(graph.nodes), len(graph.edges)
    (3, 2)

Debug Mode Example:
    >>> trace = LayoutTrace()
    >>> graph = engine.layout(root, trace=trace)
    >>> print(trace.summary())
"""

import logging

from .assembly import assemble, empty_graph
from .config import DEFAULT_CONFIG, LayoutConfig
from .debug import GraphInspector, graph_diff
from .engine import LayoutOutcome, MindmapLayoutEngine, compute_layout
from .export import MindmapExporter, branch_color, export_png
from .graph import SourceSummary, analyze_source, to_networkx
from .models import (
    EdgeEndpoint,
    EdgePath,
    LayoutNode,
    MindmapDocument,
    MindmapNode,
    PositionedEdge,
    PositionedGraph,
    PositionedNode,
)
from .parser import ParseError, Parser, create_document, parse_mindmap
from .radial_layout import RadialLayout, layout_radial
from .sizing import estimate_node_height, node_width
from .tracer import LayoutTrace, PipelineStage, PruneEvent
from .tree_layout import TreeLayout, layout_tree

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    # Main API
    "MindmapLayoutEngine",
    "LayoutOutcome",
    "compute_layout",
    # Configuration
    "LayoutConfig",
    "DEFAULT_CONFIG",
    # Models
    "MindmapNode",
    "MindmapDocument",
    "LayoutNode",
    "PositionedNode",
    "PositionedEdge",
    "PositionedGraph",
    "EdgeEndpoint",
    "EdgePath",
    # Layout algorithms
    "TreeLayout",
    "layout_tree",
    "RadialLayout",
    "layout_radial",
    "assemble",
    "empty_graph",
    "estimate_node_height",
    "node_width",
    # Parser
    "Parser",
    "ParseError",
    "parse_mindmap",
    "create_document",
    # Analysis
    "analyze_source",
    "to_networkx",
    "SourceSummary",
    # Export
    "MindmapExporter",
    "export_png",
    "branch_color",
    # Debug/Tracing
    "LayoutTrace",
    "PipelineStage",
    "PruneEvent",
    "GraphInspector",
    "graph_diff",
]
