"""End-to-end tests: input tree through layout, assembly and export."""

import json
import math

import pytest

from conftest import make_chain, make_tree
from mindlayout import (
    GraphInspector,
    LayoutTrace,
    MindmapLayoutEngine,
    compute_layout,
    create_document,
)
from mindlayout.graph import is_tree

MODES = ["tree", "radial"]


def positions(graph):
    return {node.key: (node.x, node.y) for node in graph.nodes}


class TestConcreteExample:
    """A root with three leaves, laid out in tree mode."""

    def test_positions(self, simple_tree):
        graph = compute_layout(simple_tree)
        assert positions(graph) == {
            "r": (570, 350),
            "a": (300, 300),
            "b": (300, 400),
            "c": (840, 350),
        }
        assert (graph.width, graph.height) == (1140, 700)

    def test_lineage(self, simple_tree):
        graph = compute_layout(simple_tree)
        lineage = {n.id: (n.depth, n.side, n.branch_index) for n in graph.nodes}
        assert lineage == {
            "r": (0, 0, -1),
            "a": (1, -1, 0),
            "b": (1, -1, 1),
            "c": (1, 1, 2),
        }

    def test_edges(self, simple_tree):
        graph = compute_layout(simple_tree)
        assert [(e.source, e.target) for e in graph.edges] == [("r", "a"), ("r", "b"), ("r", "c")]
        assert graph.edges[2].path.to_svg() == "M670,350 C730,350 695,350 755,350"


@pytest.mark.parametrize("mode", MODES)
class TestLayoutInvariants:
    """Properties that hold for every input in both modes."""

    def test_deterministic(self, mode, keyboard_tree, cyclic_tree):
        engine = MindmapLayoutEngine(mode=mode)
        for tree in (keyboard_tree, cyclic_tree):
            assert engine.layout(tree).to_dict() == engine.layout(tree).to_dict()

    def test_node_count_preserved(self, mode):
        root, count = make_tree(depth=3, breadth=3)
        graph = compute_layout(root, mode=mode)
        assert len(graph.nodes) == count
        assert len(graph.edges) == count - 1
        assert is_tree(graph)

    def test_inside_canvas(self, mode, keyboard_tree):
        graph = compute_layout(keyboard_tree, mode=mode)
        inspector = GraphInspector(graph)
        assert inspector.out_of_bounds() == []
        assert inspector.non_finite() == []
        assert min(n.x for n in graph.nodes) == pytest.approx(300)
        assert min(n.y for n in graph.nodes) == pytest.approx(300)
        assert max(n.x for n in graph.nodes) == pytest.approx(graph.width - 300)
        assert max(n.y for n in graph.nodes) == pytest.approx(graph.height - 300)

    def test_malformed_input_stays_finite(self, mode):
        tree = {
            "id": "",
            "label": None,
            "note": "",
            "children": [
                None,
                "bare text",
                42,
                {"label": "no id", "children": "not a list"},
                {"id": "ok", "children": [{}, {"id": "ok"}]},
            ],
        }
        graph = compute_layout(tree, mode=mode)
        assert GraphInspector(graph).non_finite() == []
        assert graph.root.id == "root"
        assert len(graph.nodes) == 7
        assert is_tree(graph)

    def test_cycle_terminates_with_one_marker(self, mode, cyclic_tree):
        graph = compute_layout(cyclic_tree, mode=mode)
        markers = GraphInspector(graph).markers("cycle")
        assert len(markers) == 1
        assert markers[0].label == "Root again (Cycle)"
        assert "x" not in {n.id for n in graph.nodes}

    def test_deep_chain(self, mode):
        graph = compute_layout(make_chain(500), mode=mode)
        inspector = GraphInspector(graph)
        assert len(graph.nodes) == 52
        assert len(inspector.markers("depth")) == 1
        assert inspector.non_finite() == []

    def test_empty_root(self, mode):
        graph = compute_layout(None, mode=mode)
        assert graph.nodes == []
        assert (graph.width, graph.height) == (100, 100)


class TestTreeModeShape:
    """Shape properties specific to tree mode."""

    def test_root_centered_on_shorter_half(self, four_branch_tree):
        nodes = {n.id: n for n in compute_layout(four_branch_tree).nodes}
        assert nodes["c"].y + nodes["d"].y == 2 * nodes["r"].y

    def test_sides_inherited(self, keyboard_tree):
        graph = compute_layout(keyboard_tree)
        by_key = {n.key: n for n in graph.nodes}
        for edge in graph.edges:
            if edge.source == "root":
                continue
            assert by_key[edge.target].side == by_key[edge.source].side
            assert by_key[edge.target].branch_index == by_key[edge.source].branch_index

    def test_columns_by_depth(self, keyboard_tree):
        graph = compute_layout(keyboard_tree)
        root = graph.root
        for node in graph.nodes:
            assert node.x == root.x + node.side * node.depth * 270

    def test_keyboard_split(self, keyboard_tree):
        nodes = {n.id: n for n in compute_layout(keyboard_tree).nodes}
        assert [nodes[k].side for k in ("types", "layout", "keys")] == [-1, -1, -1]
        assert [nodes[k].side for k in ("connection", "features")] == [1, 1]

    def test_siblings_do_not_overlap(self, keyboard_tree):
        graph = compute_layout(keyboard_tree)
        inspector = GraphInspector(graph)
        for parent in graph.nodes[1:]:
            children = inspector.children_of(parent.key)
            ys = [child.y for child in children]
            assert ys == sorted(ys)
            assert all(b - a >= 60 for a, b in zip(ys, ys[1:]))


class TestRadialModeShape:
    """Shape properties specific to radial mode."""

    def test_rings(self, keyboard_tree):
        graph = compute_layout(keyboard_tree, mode="radial")
        root = graph.root
        for node in graph.nodes:
            distance = math.hypot(node.x - root.x, node.y - root.y)
            assert distance == pytest.approx(node.depth * 270)


class TestImportToLayout:
    """Pasted text through document creation, layout and export."""

    def test_pipeline(self, keyboard_tree, tmp_path):
        text = "```json\n" + json.dumps(keyboard_tree) + "\n```"
        document = create_document("Keyboards", text)
        trace = LayoutTrace()
        engine = MindmapLayoutEngine()

        graph = engine.layout_document(document, trace=trace)

        assert graph.root.label == "Keyboard"
        assert len(graph.nodes) == 24
        assert trace.get_stage("source").data["node_count"] == 24
        assert trace.pruned == []

        outcome = engine.safe_layout(document.root)
        assert outcome.ok
        assert outcome.graph.to_dict() == graph.to_dict()

    def test_document_round_trip(self, keyboard_tree):
        document = create_document("Keyboards", json.dumps(keyboard_tree))
        restored = type(document).from_dict(json.loads(json.dumps(document.to_dict())))
        assert compute_layout(restored.root).to_dict() == compute_layout(document.root).to_dict()
