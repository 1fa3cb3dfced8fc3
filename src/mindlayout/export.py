"""
File export functionality for mindmap layouts.

This module handles exporting positioned graphs to files:
- JSON (.json) - The layout contract consumed by renderers
- PNG images - A static preview drawn with Pillow

The PNG preview draws each node as a box centered on its coordinates, sized
by the same per-depth widths and height estimate the layout used, and each
edge as its cubic Bezier path.
"""

import json
import math
import textwrap
from pathlib import Path
from typing import List, Optional, Tuple

from PIL import Image, ImageDraw, ImageFont

from .config import DEFAULT_CONFIG, LayoutConfig, per_depth
from .models import PositionedGraph, PositionedNode
from .sizing import estimate_node_height, node_width

# Branch palette, cycled by branch index
NODE_COLORS = [
    "#FF6B6B",  # Coral
    "#4ECDC4",  # Teal
    "#45B7D1",  # Sky Blue
    "#96CEB4",  # Sage
    "#FFEEAD",  # Cream
    "#D4A5A5",  # Dusty Rose
]
ROOT_COLOR = "#F97316"
BACKGROUND_COLOR = "#F8FAFC"
CARD_COLOR = "#FFFFFF"
BORDER_COLOR = "#111827"
TEXT_COLOR = "#111827"
NOTE_COLOR = "#6B7280"
EDGE_COLOR = "#C4C7CC"

CURVE_SAMPLES = 24


def branch_color(branch_index: int) -> str:
    """Colour for a top-level branch; the root (negative index) gets ROOT_COLOR."""
    if branch_index < 0:
        return ROOT_COLOR
    return NODE_COLORS[branch_index % len(NODE_COLORS)]


class MindmapExporter:
    """
    Exports positioned graphs to JSON and PNG.

    Attributes:
        config: Layout configuration used to size node boxes.
        default_font: Default font name for PNG export.
    """

    def __init__(
        self,
        config: LayoutConfig = DEFAULT_CONFIG,
        default_font: Optional[str] = None,
    ):
        """
        Initialize the exporter.

        Args:
            config: Configuration the graph was laid out with.
            default_font: Default font name for PNG export (e.g., "DejaVu Sans").
        """
        self.config = config
        self.default_font = default_font

    def save_json(self, graph: PositionedGraph, filename: str, indent: int = 2) -> None:
        """
        Save the layout contract as JSON.

        Args:
            graph: Layout result.
            filename: Output filename (should end in .json).
            indent: JSON indentation.
        """
        output_path = Path(filename)
        output_path.write_text(
            json.dumps(graph.to_dict(), indent=indent, ensure_ascii=False),
            encoding="utf-8",
        )

    def node_box(self, node: PositionedNode) -> Tuple[float, float, float, float]:
        """Return (left, top, width, height) of a node's box."""
        width = node_width(node.depth, self.config)
        height = estimate_node_height(node.label, node.note, node.depth, self.config)
        return node.x - width / 2, node.y - height / 2, width, height

    def save_png(
        self,
        graph: PositionedGraph,
        filename: str,
        font_size: int = 13,
        scale: float = 1.0,
        font: Optional[str] = None,
        edge_width: int = 4,
    ) -> None:
        """
        Save a PNG preview of the layout.

        Args:
            graph: Layout result.
            filename: Output filename (should end in .png).
            font_size: Label font size in points before scaling.
            scale: Resolution multiplier.
            font: Font name (overrides default_font if provided).
            edge_width: Edge stroke width before scaling.

        Example:
            >>> exporter = MindmapExporter()
            >>> exporter.save_png(graph, "mindmap.png", scale=2)
        """
        if scale <= 0:
            raise ValueError("scale must be positive")

        img_width = max(1, int(math.ceil(graph.width * scale)))
        img_height = max(1, int(math.ceil(graph.height * scale)))
        img = Image.new("RGB", (img_width, img_height), BACKGROUND_COLOR)
        draw = ImageDraw.Draw(img)

        font_name = font or self.default_font
        label_font = self._load_font(max(1, int(font_size * scale)), font_name)
        note_font = self._load_font(max(1, int(font_size * 0.8 * scale)), font_name)

        stroke = max(1, int(edge_width * scale))
        for edge in graph.edges:
            if edge.path is None:
                continue
            points = [
                (px * scale, py * scale)
                for px, py in (
                    edge.path.point_at(i / CURVE_SAMPLES) for i in range(CURVE_SAMPLES + 1)
                )
            ]
            draw.line(points, fill=EDGE_COLOR, width=stroke, joint="curve")

        # Deeper nodes on top, matching the renderer's z-order
        for node in sorted(graph.nodes, key=lambda n: n.depth):
            self._draw_node(draw, node, scale, label_font, note_font)

        img.save(Path(filename), "PNG")

    def _draw_node(
        self,
        draw: ImageDraw.ImageDraw,
        node: PositionedNode,
        scale: float,
        label_font: ImageFont.ImageFont,
        note_font: ImageFont.ImageFont,
    ) -> None:
        left, top, width, height = self.node_box(node)
        box = [left * scale, top * scale, (left + width) * scale, (top + height) * scale]
        is_root = node.depth == 0
        color = branch_color(node.branch_index)
        border = max(1, int(3 * scale))

        draw.rounded_rectangle(
            box,
            radius=int(15 * scale),
            fill=color if is_root else CARD_COLOR,
            outline=BORDER_COLOR,
            width=border,
        )
        if not is_root:
            # Colour stripe on the side facing the parent
            stripe = max(2, int(6 * scale))
            if node.side < 0:
                stripe_box = [box[2] - stripe, box[1], box[2], box[3]]
            else:
                stripe_box = [box[0], box[1], box[0] + stripe, box[3]]
            draw.rectangle(stripe_box, fill=color)

        lines = self._wrap(node.label, self.config.title_chars_per_line, node.depth)
        note_lines = (
            self._wrap(node.note, self.config.note_chars_per_line, node.depth)
            if node.note
            else []
        )
        rendered = [(line, label_font, TEXT_COLOR) for line in lines]
        rendered += [(line, note_font, NOTE_COLOR) for line in note_lines]

        heights = [self._text_size(draw, text, f)[1] for text, f, _ in rendered]
        spacing = 4 * scale
        total = sum(heights) + spacing * max(0, len(rendered) - 1)
        cursor_y = (box[1] + box[3]) / 2 - total / 2
        for (text, f, fill), line_height in zip(rendered, heights):
            text_width, _ = self._text_size(draw, text, f)
            text_x = (box[0] + box[2]) / 2 - text_width / 2
            draw.text(
                (text_x, cursor_y), text, font=f, fill="#FFFFFF" if is_root else fill
            )
            cursor_y += line_height + spacing

    def _wrap(self, text: str, table, depth: int) -> List[str]:
        if not text:
            return []
        return textwrap.wrap(text, width=per_depth(table, depth)) or [text]

    def _text_size(
        self, draw: ImageDraw.ImageDraw, text: str, font: ImageFont.ImageFont
    ) -> Tuple[float, float]:
        bbox = draw.textbbox((0, 0), text, font=font)
        return bbox[2] - bbox[0], bbox[3] - bbox[1]

    def _load_font(
        self, font_size: int, font_name: Optional[str] = None
    ) -> ImageFont.ImageFont:
        """
        Load a font for PNG rendering.

        Tries the following in order:
        1. User-specified font name if provided
        2. Common system sans-serif fonts
        3. Pillow's default font

        Args:
            font_size: Font size in points.
            font_name: Optional font name.

        Returns:
            A PIL ImageFont object.
        """
        fonts_to_try = []
        if font_name:
            fonts_to_try.append(font_name)

        fonts_to_try.extend(
            [
                # Linux
                "DejaVuSans-Bold",
                "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
                "/usr/share/fonts/truetype/liberation/LiberationSans-Bold.ttf",
                # macOS
                "Helvetica",
                "/System/Library/Fonts/Helvetica.ttc",
                # Windows
                "arialbd.ttf",
                "C:/Windows/Fonts/arialbd.ttf",
            ]
        )

        for candidate in fonts_to_try:
            try:
                return ImageFont.truetype(candidate, font_size)
            except OSError:
                continue

        # Fall back to Pillow's default font
        try:
            return ImageFont.load_default(size=font_size)
        except TypeError:
            # Older Pillow versions don't support size parameter
            return ImageFont.load_default()


def export_png(graph: PositionedGraph, filename: str, **kwargs) -> str:
    """
    Convenience function to save a PNG preview.

    Args:
        graph: Layout result.
        filename: Output path.
        **kwargs: Additional parameters for MindmapExporter.save_png.

    Returns:
        The output path.
    """
    MindmapExporter().save_png(graph, filename, **kwargs)
    return filename
