"""
Build-time layout constants.

All distances are in layout units (the renderer treats them as pixels before
zoom). These are the defaults bundled by LayoutConfig; the engine never
reads them at runtime except through a config object.
"""

# Layout mode selector
LAYOUT_TREE = "tree"
LAYOUT_RADIAL = "radial"
LAYOUT_MODES = (LAYOUT_TREE, LAYOUT_RADIAL)
LAYOUT_MODE = LAYOUT_TREE

# Horizontal geometry
NODE_WIDTH = 150  # Column pitch width, independent of drawn box width
NODE_WIDTHS = (200, 170, 150, 130)  # Drawn box width by depth, last entry repeats
LEVEL_GAP = 120

# Vertical geometry
NODE_GAP = 20
MIN_NODE_HEIGHTS = (100, 80, 70, 60)  # Footprint floor by depth, last entry repeats

# Height estimation heuristic
TITLE_CHARS_PER_LINE = (16, 14, 13, 11)
NOTE_CHARS_PER_LINE = (30, 26, 24, 20)
TITLE_LINE_HEIGHT = 18
NOTE_LINE_HEIGHT = 12
NODE_BASE_HEIGHT = 28  # Vertical padding plus border
NOTE_PADDING = 4

# Termination ceiling
MAX_DEPTH = 50

# Canvas
CANVAS_PADDING = 600
EMPTY_CANVAS_SIZE = 100

# Radial mode keeps grandchildren clustered inside 80% of their parent slice
RADIAL_ARC_NARROWING = 0.8

# Synthetic marker leaves
CYCLE_MARKER = "cycle"
DEPTH_MARKER = "depth"
CYCLE_LABEL_SUFFIX = " (Cycle)"
DEPTH_LABEL_SUFFIX = " (Max Depth)"
