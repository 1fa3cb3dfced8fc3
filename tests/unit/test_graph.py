"""Unit tests for the graph module."""

import networkx as nx

from conftest import make_chain
from mindlayout.graph import analyze_source, is_tree, source_digraph, subtree_keys, to_networkx
from mindlayout.models import MindmapNode, PositionedGraph


class TestSourceDigraph:
    """Tests for the merged id graph of an input tree."""

    def test_none_root(self):
        graph = source_digraph(None)
        assert graph.number_of_nodes() == 0
        assert graph.graph["node_count"] == 0

    def test_simple_tree(self, simple_tree):
        graph = source_digraph(simple_tree)
        assert set(graph.nodes) == {"r", "a", "b", "c"}
        assert set(graph.successors("r")) == {"a", "b", "c"}
        assert graph.graph["max_depth"] == 1

    def test_repeated_ids_are_counted(self, cyclic_tree):
        graph = source_digraph(cyclic_tree)
        assert graph.nodes["r"]["count"] == 2
        assert graph.nodes["a"]["count"] == 1
        assert graph.has_edge("a", "r")

    def test_truncation(self):
        graph = source_digraph(make_chain(50), max_nodes=10)
        assert graph.graph["truncated"] is True
        assert graph.graph["node_count"] == 10

    def test_trailing_none_children_are_not_truncation(self):
        tree = {"id": "r", "label": "R", "children": [{"id": "a", "label": "A"}, None, None]}
        graph = source_digraph(tree, max_nodes=2)
        assert graph.graph["node_count"] == 2
        assert graph.graph["truncated"] is False

    def test_shared_subtree_walked_in_each_place(self):
        shared = {"id": "s", "label": "S", "children": [{"id": "s1", "label": "S1"}]}
        tree = {"id": "r", "label": "R", "children": [shared, shared]}
        graph = source_digraph(tree)
        assert graph.graph["node_count"] == 5
        assert graph.nodes["s1"]["count"] == 2
        assert graph.graph["truncated"] is False

    def test_self_referencing_object_terminates(self):
        data = {"id": "loop", "label": "L", "children": []}
        data["children"].append(data)
        graph = source_digraph(data)
        assert graph.has_edge("loop", "loop")
        assert graph.graph["node_count"] == 2


class TestAnalyzeSource:
    """Tests for analyze_source."""

    def test_acyclic(self, four_branch_tree):
        summary = analyze_source(four_branch_tree)
        assert summary.node_count == 7
        assert summary.distinct_ids == 7
        assert summary.duplicate_ids == []
        assert not summary.has_cycles
        assert summary.max_depth == 2

    def test_cycle(self, cyclic_tree):
        summary = analyze_source(cyclic_tree)
        assert summary.has_cycles
        assert summary.node_count == 5
        assert summary.distinct_ids == 4
        assert summary.duplicate_ids == ["r"]
        assert set(summary.cycle) == {("r", "a"), ("a", "r")}
        assert summary.max_depth == 3

    def test_typed_nodes(self):
        root = MindmapNode(id="r", label="R", children=[MindmapNode(id="a", label="A")])
        assert analyze_source(root).node_count == 2


class TestOutputGraph:
    """Tests for converting layout results to networkx."""

    def test_to_networkx(self, engine, simple_tree):
        graph = engine.layout(simple_tree)
        digraph = to_networkx(graph)
        assert isinstance(digraph, nx.DiGraph)
        assert set(digraph.nodes) == {"r", "a", "b", "c"}
        assert digraph.nodes["a"]["side"] == -1
        assert digraph.graph["mode"] == "tree"
        assert digraph.edges["r", "c"]["d"].startswith("M")

    def test_layout_is_tree(self, engine, cyclic_tree):
        assert is_tree(engine.layout(cyclic_tree))

    def test_duplicate_ids_still_a_tree(self, engine):
        tree = {
            "id": "r",
            "label": "R",
            "children": [
                {"id": "x", "label": "X", "children": []},
                {"id": "x", "label": "X", "children": []},
            ],
        }
        assert is_tree(engine.layout(tree))

    def test_empty_is_tree(self):
        assert is_tree(PositionedGraph())

    def test_subtree_keys(self, engine, four_branch_tree):
        graph = engine.layout(four_branch_tree)
        assert subtree_keys(graph, "a") == ["a", "a1", "a2"]
        assert subtree_keys(graph, "b") == ["b"]
        assert subtree_keys(graph, "missing") is None
