"""Pytest configuration and shared fixtures for mindlayout tests."""

import pytest

from mindlayout import MindmapLayoutEngine


def leaf(node_id, label=None, note=None):
    node = {"id": node_id, "label": label or node_id.upper(), "children": []}
    if note is not None:
        node["note"] = note
    return node


def make_chain(length):
    """Single path of `length` nodes: n0 -> n1 -> ... (built iteratively)."""
    node = leaf(f"n{length - 1}")
    for index in range(length - 2, -1, -1):
        node = {"id": f"n{index}", "label": f"N{index}", "children": [node]}
    return node


def make_tree(depth, breadth, prefix="t"):
    """Complete tree with unique ids; returns (root, node_count)."""
    count = 0

    def build(level, node_id):
        nonlocal count
        count += 1
        children = []
        if level < depth:
            children = [build(level + 1, f"{node_id}.{i}") for i in range(breadth)]
        return {"id": node_id, "label": node_id, "children": children}

    return build(0, prefix), count


@pytest.fixture
def engine():
    """Default (tree mode) engine."""
    return MindmapLayoutEngine()


@pytest.fixture
def radial_engine():
    """Radial mode engine."""
    return MindmapLayoutEngine(mode="radial")


@pytest.fixture
def simple_tree():
    """Root with three leaves: two go left, one goes right."""
    return {
        "id": "r",
        "label": "Root",
        "children": [leaf("a"), leaf("b"), leaf("c")],
    }


@pytest.fixture
def four_branch_tree():
    """Root with four branches; the left half is taller than the right."""
    return {
        "id": "r",
        "label": "Root",
        "children": [
            {"id": "a", "label": "A", "children": [leaf("a1"), leaf("a2")]},
            leaf("b"),
            leaf("c"),
            leaf("d"),
        ],
    }


@pytest.fixture
def cyclic_tree():
    """A grandchild repeats the root's id and carries its own subtree."""
    return {
        "id": "r",
        "label": "Root",
        "children": [
            {
                "id": "a",
                "label": "A",
                "children": [
                    {"id": "r", "label": "Root again", "children": [leaf("x")]},
                ],
            },
            leaf("b"),
        ],
    }


@pytest.fixture
def keyboard_tree():
    """Realistic imported mindmap with notes."""
    return {
        "id": "root",
        "label": "Keyboard",
        "note": "An input device with keys for typing and control.",
        "children": [
            {
                "id": "types",
                "label": "Types",
                "note": "Families of keyboards by switch technology.",
                "children": [
                    leaf("mechanical", "Mechanical"),
                    leaf("membrane", "Membrane"),
                    leaf("wireless", "Wireless"),
                    leaf("ergonomic", "Ergonomic"),
                ],
            },
            {
                "id": "layout",
                "label": "Layout",
                "children": [
                    leaf("qwerty", "QWERTY"),
                    leaf("azerty", "AZERTY"),
                    leaf("dvorak", "Dvorak"),
                    leaf("numeric_pad", "Numeric pad"),
                ],
            },
            {
                "id": "keys",
                "label": "Keys",
                "children": [
                    leaf("alphanumeric", "Alphanumeric"),
                    leaf("function_keys", "Function keys"),
                    leaf("modifier_keys", "Modifier keys"),
                    leaf("navigation_keys", "Navigation keys"),
                ],
            },
            {
                "id": "connection",
                "label": "Connection",
                "children": [
                    leaf("usb", "USB"),
                    leaf("bluetooth", "Bluetooth"),
                    leaf("ps2", "PS/2"),
                ],
            },
            {
                "id": "features",
                "label": "Features",
                "children": [
                    leaf("backlight", "Backlight"),
                    leaf(
                        "programmable_keys",
                        "Programmable keys",
                        note="Keys that can be remapped to run macros.",
                    ),
                    leaf("media_controls", "Media controls"),
                ],
            },
        ],
    }
