"""
Node sizing heuristics.

Nodes are drawn as boxes whose height grows with their text, so the layout
estimates each node's vertical footprint from label and note length instead
of using a fixed constant. Widths shrink with depth.
"""

import math
from typing import Optional

from .config import DEFAULT_CONFIG, LayoutConfig, per_depth


def safe_number(value: float, fallback: float = 0.0) -> float:
    """Return value, or fallback when value is NaN or infinite."""
    try:
        if math.isfinite(value):
            return value
    except TypeError:
        pass
    return fallback


def node_width(depth: int, config: LayoutConfig = DEFAULT_CONFIG) -> float:
    """Drawn box width for a node at the given depth."""
    return per_depth(config.node_widths, depth)


def min_node_height(depth: int, config: LayoutConfig = DEFAULT_CONFIG) -> float:
    """Smallest footprint a node at the given depth may claim."""
    return per_depth(config.min_node_heights, depth)


def _line_count(text: str, chars_per_line: int) -> int:
    if not text:
        return 0
    return math.ceil(len(text) / chars_per_line)


def estimate_node_height(
    label: str,
    note: Optional[str],
    depth: int,
    config: LayoutConfig = DEFAULT_CONFIG,
) -> float:
    """
    Estimate the vertical footprint of one node.

    footprint = base + title_lines * title_line_height
                + (note_lines * note_line_height + note_padding if note)

    floored at the per-depth minimum.

    Args:
        label: Node label.
        note: Optional note text.
        depth: Node depth (selects characters per line and the floor).
        config: Layout configuration.

    Returns:
        Estimated height in layout units, always finite.
    """
    floor = min_node_height(depth, config)

    title_lines = max(1, _line_count(label, per_depth(config.title_chars_per_line, depth)))
    height = config.base_height + title_lines * config.title_line_height

    if note:
        note_lines = _line_count(note, per_depth(config.note_chars_per_line, depth))
        height += note_lines * config.note_line_height + config.note_padding

    return safe_number(max(height, floor), floor)

