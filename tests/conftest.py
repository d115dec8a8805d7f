"""
Pytest configuration and shared fixtures.

This file is automatically loaded by pytest and provides
fixtures available to all test files.
"""

import pytest

import config
from graph import Graph


@pytest.fixture
def default_graph() -> Graph:
    """The built-in A..G fixture (A→G shortest distance is 14)."""
    return Graph.from_edge_list(config.DEFAULT_EDGE_LIST)


@pytest.fixture
def triangle_graph() -> Graph:
    """A(0,0) B(3,0) C(3,4); A-B 3, B-C 4, A-C 10.  Euclidean h is admissible."""
    g = Graph()
    g.create_node("A", 0, 0)
    g.create_node("B", 3, 0)
    g.create_node("C", 3, 4)
    g.create_edge("A", "B", 3)
    g.create_edge("B", "C", 4)
    g.create_edge("A", "C", 10)
    return g


@pytest.fixture
def split_graph() -> Graph:
    """Two components: {A, B, C} and {X, Y, Z}."""
    return Graph.from_edge_list("A B 1\nB C 2\nX Y 1\nY Z 3")


@pytest.fixture
def negative_graph() -> Graph:
    """Directed; S→B→A→T costs 2 thanks to B→A = -4, Dijkstra settles for 3."""
    return Graph.from_edge_list("S A 2\nS B 5\nB A -4\nA T 1", directed=True)


@pytest.fixture
def ten_node_graph() -> Graph:
    """Connected 10-node fixture with uneven weights."""
    return Graph.from_edge_list(
        "\n".join([
            "n0 n1 7", "n0 n2 9", "n0 n5 14", "n1 n2 10", "n1 n3 15",
            "n2 n3 11", "n2 n5 2", "n3 n4 6", "n4 n5 9", "n4 n6 3",
            "n6 n7 1", "n7 n8 8", "n8 n9 4", "n6 n9 12", "n3 n8 5",
        ])
    )
