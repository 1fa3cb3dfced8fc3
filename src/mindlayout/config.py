"""
Layout configuration.

LayoutConfig bundles the build-time constants from constants.py into one
immutable object so a layout pass never reads module globals directly.
"""

from dataclasses import dataclass, fields, replace
from typing import Tuple

from . import constants


@dataclass(frozen=True)
class LayoutConfig:
    """
    Immutable tuning parameters for one layout engine.

    Attributes:
        mode: Layout algorithm, "tree" (bidirectional) or "radial".
        node_width: Column pitch used for horizontal placement and radius.
        node_widths: Drawn box width per depth; deeper levels reuse the last.
        level_gap: Gap between depth columns (or rings in radial mode).
        node_gap: Vertical gap added to every leaf slot.
        min_node_heights: Footprint floor per depth.
        title_chars_per_line: Approximate label characters per line by depth.
        note_chars_per_line: Approximate note characters per line by depth.
        title_line_height: Height of one label line.
        note_line_height: Height of one note line.
        base_height: Fixed vertical chrome of a node box.
        note_padding: Extra space between label and note.
        max_depth: Recursion ceiling; deeper nodes become marker leaves.
        canvas_padding: Total padding added to each canvas dimension.
        empty_canvas_size: Width and height of the canvas for an empty graph.
        radial_arc_narrowing: Fraction of a child's slice its own children share.
    """

    mode: str = constants.LAYOUT_MODE
    node_width: float = constants.NODE_WIDTH
    node_widths: Tuple[float, ...] = constants.NODE_WIDTHS
    level_gap: float = constants.LEVEL_GAP
    node_gap: float = constants.NODE_GAP
    min_node_heights: Tuple[float, ...] = constants.MIN_NODE_HEIGHTS
    title_chars_per_line: Tuple[int, ...] = constants.TITLE_CHARS_PER_LINE
    note_chars_per_line: Tuple[int, ...] = constants.NOTE_CHARS_PER_LINE
    title_line_height: float = constants.TITLE_LINE_HEIGHT
    note_line_height: float = constants.NOTE_LINE_HEIGHT
    base_height: float = constants.NODE_BASE_HEIGHT
    note_padding: float = constants.NOTE_PADDING
    max_depth: int = constants.MAX_DEPTH
    canvas_padding: float = constants.CANVAS_PADDING
    empty_canvas_size: float = constants.EMPTY_CANVAS_SIZE
    radial_arc_narrowing: float = constants.RADIAL_ARC_NARROWING

    def __post_init__(self):
        if self.mode not in constants.LAYOUT_MODES:
            raise ValueError(
                f"mode must be one of {', '.join(constants.LAYOUT_MODES)}, "
                f"got {self.mode!r}"
            )
        if self.max_depth < 1:
            raise ValueError("max_depth must be at least 1")
        for name in ("node_width", "level_gap", "node_gap", "canvas_padding"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative")
        for name in (
            "node_widths",
            "min_node_heights",
            "title_chars_per_line",
            "note_chars_per_line",
        ):
            table = getattr(self, name)
            if not table:
                raise ValueError(f"{name} must have at least one entry")
        for name in ("title_chars_per_line", "note_chars_per_line"):
            if any(value <= 0 for value in getattr(self, name)):
                raise ValueError(f"{name} entries must be positive")
        if not 0 < self.radial_arc_narrowing <= 1:
            raise ValueError("radial_arc_narrowing must be in (0, 1]")

    @property
    def column_pitch(self) -> float:
        """Horizontal distance between depth levels."""
        return self.node_width + self.level_gap

    def with_overrides(self, **overrides) -> "LayoutConfig":
        """Return a copy with the given fields replaced."""
        known = {f.name for f in fields(self)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise ValueError(f"Unknown layout option(s): {', '.join(unknown)}")
        return replace(self, **overrides)


def per_depth(table: Tuple, depth: int):
    """Look up a per-depth table entry, reusing the last one for deeper levels."""
    if depth < 0:
        depth = 0
    if depth >= len(table):
        return table[-1]
    return table[depth]


DEFAULT_CONFIG = LayoutConfig()
