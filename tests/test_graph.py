"""
Unit tests for the graph model: nodes, edges, ingestion, adjacency, layout.
"""

import math

import pytest

import config
from graph import (
    Edge,
    Graph,
    Node,
    build_adjacency,
    circle_layout,
    edge_key,
    format_edge_key,
    parse_edge_list,
    spring_layout,
)


class TestEdgeKey:
    """Canonical, direction-independent edge keys."""

    def test_symmetric(self):
        """Both directions should produce the same key."""
        assert edge_key("B", "A") == edge_key("A", "B") == ("A", "B")

    def test_format(self):
        """String form joins the sorted ids."""
        assert format_edge_key(edge_key("E", "B")) == "B--E"

    def test_edge_key_property(self):
        """Edge.key should match edge_key of its endpoints."""
        assert Edge("Z", "M", 3).key == ("M", "Z")


class TestNode:
    """Node identity and geometry."""

    def test_label_defaults_to_id(self):
        assert Node("A").label == "A"

    def test_distance_between_positioned_nodes(self):
        """Euclidean distance for positioned nodes."""
        assert Node("A", 0, 0).distance_to(Node("C", 3, 4)) == 5

    def test_distance_without_position_is_infinite(self):
        """Missing coordinates should give an infinite heuristic."""
        assert math.isinf(Node("A").distance_to(Node("B", 1, 1)))

    def test_round_trip_dict(self):
        node = Node.from_dict(Node("A", 1.5, 2.5).to_dict())
        assert (node.id, node.x, node.y) == ("A", 1.5, 2.5)


class TestParseEdgeList:
    """Edge-list text ingestion."""

    def test_first_seen_node_order(self):
        """Node ids should be collected in first-seen order."""
        ids, edges = parse_edge_list("C A 1\nA B 2\nB D 3")
        assert ids == ["C", "A", "B", "D"]
        assert [(e.source, e.target, e.weight) for e in edges] == [
            ("C", "A", 1), ("A", "B", 2), ("B", "D", 3),
        ]

    def test_skips_malformed_lines(self):
        """Blank lines, wrong token counts and non-integer weights are dropped."""
        text = "A B 1\n\nA B\nA B C 4\nA C x\nA D 2.5\n  B C 3  "
        ids, edges = parse_edge_list(text)
        assert ids == ["A", "B", "C"]
        assert [(e.source, e.target, e.weight) for e in edges] == [("A", "B", 1), ("B", "C", 3)]

    def test_negative_weights_kept(self):
        _, edges = parse_edge_list("A B -3")
        assert edges[0].weight == -3

    def test_empty_text(self):
        assert parse_edge_list("") == ([], [])

    def test_directed_flag(self):
        _, edges = parse_edge_list("A B 1", directed=True)
        assert edges[0].directed is True


class TestBuildAdjacency:
    """Adjacency view construction."""

    def test_undirected_edges_both_ways(self, default_graph):
        """Each undirected edge should appear under both endpoints, in edge order."""
        adj = default_graph.adjacency()
        assert adj["A"] == [("B", 4), ("D", 2)]
        assert adj["B"] == [("A", 4), ("C", 3), ("E", 1)]
        assert adj["G"] == [("F", 6)]

    def test_isolated_node_maps_to_empty_list(self):
        g = Graph.from_edge_list("A B 1")
        g.create_node("Lonely")
        assert g.adjacency()["Lonely"] == []

    def test_directed_edge_one_way(self, negative_graph):
        adj = negative_graph.adjacency()
        assert adj["B"] == [("A", -4)]
        assert ("B", -4) not in adj["A"]

    def test_edge_with_unknown_endpoint(self):
        """Only the known endpoint records the edge."""
        adj = build_adjacency([Node("A")], [Edge("A", "Ghost", 2)])
        assert adj == {"A": [("Ghost", 2)]}

    def test_self_loop_recorded_twice(self):
        adj = build_adjacency([Node("A")], [Edge("A", "A", 1)])
        assert adj["A"] == [("A", 1), ("A", 1)]

    def test_fresh_view_per_call(self, default_graph):
        """Mutating one adjacency view must not leak into the next."""
        first = default_graph.adjacency()
        first["A"].clear()
        assert default_graph.adjacency()["A"] == [("B", 4), ("D", 2)]


class TestGraph:
    """Graph container behaviour."""

    def test_from_edge_list_counts(self, default_graph):
        assert default_graph.node_count() == 7
        assert default_graph.edge_count() == 8
        assert default_graph.node_ids() == ["A", "B", "D", "C", "E", "F", "G"]

    def test_move_node(self, default_graph):
        assert default_graph.move_node("A", 10, 20) is True
        assert (default_graph.get_node("A").x, default_graph.get_node("A").y) == (10, 20)

    def test_move_unknown_node(self, default_graph):
        assert default_graph.move_node("nope", 1, 1) is False

    def test_has_negative_edges(self, default_graph, negative_graph):
        assert not default_graph.has_negative_edges()
        assert negative_graph.has_negative_edges()

    def test_directed_edge_kept_as_written(self, negative_graph):
        edge = next(e for e in negative_graph.edges if e.key == edge_key("A", "B"))
        assert (edge.source, edge.target, edge.directed) == ("B", "A", True)

    def test_round_trip_dict(self, triangle_graph):
        g = Graph.from_dict(triangle_graph.to_dict())
        assert g.adjacency() == triangle_graph.adjacency()
        assert g.get_node("C").y == 4


class TestLayout:
    """Layout writes positions inside the canvas."""

    @pytest.mark.parametrize("layout", [circle_layout, spring_layout])
    def test_positions_inside_canvas(self, default_graph, layout):
        layout(default_graph, canvas_w=config.CANVAS_WIDTH, canvas_h=config.CANVAS_HEIGHT)
        for node in default_graph.nodes.values():
            assert node.has_position
            assert 0 <= node.x <= config.CANVAS_WIDTH
            assert 0 <= node.y <= config.CANVAS_HEIGHT

    def test_spring_layout_deterministic(self):
        """Same seed, same picture."""
        a = spring_layout(Graph.from_edge_list(config.DEFAULT_EDGE_LIST), seed=7)
        b = spring_layout(Graph.from_edge_list(config.DEFAULT_EDGE_LIST), seed=7)
        for nid in a.nodes:
            assert a.nodes[nid].x == pytest.approx(b.nodes[nid].x)
            assert a.nodes[nid].y == pytest.approx(b.nodes[nid].y)

    def test_empty_graph(self):
        assert spring_layout(Graph()).node_count() == 0
        assert circle_layout(Graph()).node_count() == 0
