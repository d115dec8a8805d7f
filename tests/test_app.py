"""
Tests for the Flask web surface, using Flask's test client.
"""

import pytest

import config
import main
from algorithms.step import Result, Visit
from assistant import AssistantError


@pytest.fixture
def app():
    app = main.create_app()
    app.config["TESTING"] = True
    yield app
    workspace = app.extensions["workspace"]
    workspace.player.cancel()
    workspace.player.wait(2)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def workspace(app):
    return app.extensions["workspace"]


class TestPages:
    """Read-only endpoints."""

    def test_index(self, client):
        res = client.get("/")
        assert res.status_code == 200
        assert b"<svg" in res.data
        assert b"edge-list" in res.data

    def test_algorithms(self, client):
        keys = [a["key"] for a in client.get("/api/algorithms").get_json()["algorithms"]]
        assert keys == ["bfs", "dfs", "dijkstra", "astar", "bellman_ford", "floyd_warshall"]

    def test_state_idle(self, client):
        data = client.get("/api/state").get_json()
        assert data["running"] is False
        assert data["state"]["status"] == "idle"
        assert data["distance"] is None


class TestGraphRoutes:
    """Building and editing the graph."""

    def test_build(self, client):
        res = client.post("/api/graph/build", json={"text": "X Y 3\nY Z 4", "layout": "circle"})
        data = res.get_json()
        assert res.status_code == 200
        assert data["node_ids"] == ["X", "Y", "Z"]
        assert (data["start"], data["end"]) == ("X", "Z")
        assert "<svg" in data["svg"]

    def test_build_unknown_layout(self, client):
        res = client.post("/api/graph/build", json={"text": "A B 1", "layout": "hexagonal"})
        assert res.status_code == 400

    def test_build_empty_text(self, client):
        data = client.post("/api/graph/build", json={"text": ""}).get_json()
        assert data["node_ids"] == []
        assert data["start"] is None

    def test_reset(self, client):
        client.post("/api/graph/build", json={"text": "X Y 3"})
        data = client.post("/api/graph/reset").get_json()
        assert data["text"] == config.DEFAULT_EDGE_LIST
        assert data["node_ids"][0] == "A"

    def test_move(self, client, workspace):
        res = client.post("/api/graph/move", json={"id": "A", "x": 12, "y": 34})
        assert res.status_code == 200
        node = workspace.graph.get_node("A")
        assert (node.x, node.y) == (12, 34)

    def test_move_unknown_node(self, client):
        assert client.post("/api/graph/move", json={"id": "nope", "x": 1, "y": 1}).status_code == 404

    def test_move_bad_coordinates(self, client):
        assert client.post("/api/graph/move", json={"id": "A", "x": "left"}).status_code == 400

    @pytest.mark.parametrize("node_id", [["A"], {"id": "A"}, 7, None])
    def test_move_non_string_id(self, client, node_id):
        res = client.post("/api/graph/move", json={"id": node_id, "x": 1, "y": 1})
        assert res.status_code == 400

    def test_build_non_string_layout(self, client):
        assert client.post("/api/graph/build", json={"text": "A B 1", "layout": ["spring"]}).status_code == 400

    def test_build_non_object_body(self, client):
        data = client.post("/api/graph/build", json=["A B 1"]).get_json()
        assert data["node_ids"] == []

    def test_spring_layout_uses_configured_seed(self, client, workspace, monkeypatch):
        """Rebuilding with a different seed moves the nodes."""
        client.post("/api/graph/build", json={"text": config.DEFAULT_EDGE_LIST, "layout": "spring"})
        first = {n.id: (n.x, n.y) for n in workspace.graph.nodes.values()}
        client.post("/api/graph/build", json={"text": config.DEFAULT_EDGE_LIST, "layout": "spring"})
        again = {n.id: (n.x, n.y) for n in workspace.graph.nodes.values()}
        assert again == first

        monkeypatch.setattr(config, "LAYOUT_SEED", config.LAYOUT_SEED + 1)
        client.post("/api/graph/build", json={"text": config.DEFAULT_EDGE_LIST, "layout": "spring"})
        moved = {n.id: (n.x, n.y) for n in workspace.graph.nodes.values()}
        assert moved != first


class TestGenerate:
    """Edge-list generation through the assistant."""

    def test_empty_prompt(self, client):
        assert client.post("/api/graph/generate", json={"prompt": "  "}).status_code == 400

    def test_non_string_prompt(self, client):
        assert client.post("/api/graph/generate", json={"prompt": ["towns"]}).status_code == 400

    def test_success(self, client, monkeypatch):
        monkeypatch.setattr(main, "generate_edge_list", lambda prompt: "P Q 5")
        data = client.post("/api/graph/generate", json={"prompt": "two towns"}).get_json()
        assert data == {"text": "P Q 5"}

    def test_upstream_failure(self, client, monkeypatch):
        def boom(prompt):
            raise AssistantError("Gemini API error 500: oops")

        monkeypatch.setattr(main, "generate_edge_list", boom)
        res = client.post("/api/graph/generate", json={"prompt": "two towns"})
        assert res.status_code == 502
        assert "500" in res.get_json()["error"]


class TestConfig:
    """Selection and speed."""

    def test_select_algorithm(self, client, workspace):
        res = client.post("/api/config", json={"algorithm": "astar"})
        assert res.status_code == 200
        assert workspace.algorithm == "astar"

    def test_unknown_algorithm(self, client):
        assert client.post("/api/config", json={"algorithm": "quantum"}).status_code == 400

    def test_unknown_node(self, client):
        assert client.post("/api/config", json={"start": "nope"}).status_code == 400

    @pytest.mark.parametrize("payload", [
        {"start": ["A"]},
        {"end": {"id": "G"}},
        {"algorithm": ["bfs"]},
    ])
    def test_non_string_selection(self, client, payload):
        assert client.post("/api/config", json=payload).status_code == 400

    def test_speed_clamped(self, client, workspace):
        data = client.post("/api/config", json={"speed_ms": 5}).get_json()
        assert data["speed_ms"] == config.MIN_DELAY_MS
        assert workspace.player.delay == config.MIN_DELAY_MS / 1000
        data = client.post("/api/config", json={"speed_ms": 99999}).get_json()
        assert data["speed_ms"] == config.MAX_DELAY_MS

    def test_bad_speed(self, client):
        assert client.post("/api/config", json={"speed_ms": "fast"}).status_code == 400


class TestRun:
    """Running and controlling playback."""

    def test_run_to_completion(self, client, workspace):
        workspace.player.set_delay(0)
        res = client.post("/api/run")
        data = res.get_json()
        assert res.status_code == 200
        assert data["algorithm"] == config.DEFAULT_ALGORITHM
        assert data["result"]["distance"] == 14
        assert data["total_steps"] == len(data["result"]["steps"])

        assert workspace.player.wait(5)
        state = client.get("/api/state").get_json()
        assert state["state"]["status"] == "finished"
        assert state["distance"] == "14"
        assert "A--B" in state["state"]["final_path"]

    def test_missing_endpoint(self, client):
        client.post("/api/config", json={"end": ""})
        assert client.post("/api/run").status_code == 400

    def test_all_pairs_without_endpoints(self, client, workspace):
        workspace.player.set_delay(0)
        client.post("/api/config", json={"algorithm": "floyd_warshall", "start": "", "end": ""})
        data = client.post("/api/run").get_json()
        assert data["result"]["distance"] == "Infinity"
        assert workspace.player.wait(10)

    def test_busy_while_playing(self, client, workspace):
        workspace.player.start(Result((Visit("A"),), 0), paused=True)
        assert client.post("/api/run").status_code == 409
        assert client.post("/api/config", json={"algorithm": "bfs"}).status_code == 409
        assert client.post("/api/graph/build", json={"text": "A B 1"}).status_code == 409

    def test_pause_and_cancel(self, client, workspace):
        workspace.player.start(Result((Visit("A"), Visit("B")), 1), paused=True)
        assert client.post("/api/pause").get_json() == {"paused": False}
        assert client.post("/api/pause").get_json() == {"paused": True}
        data = client.post("/api/cancel").get_json()
        assert data["state"]["status"] == "cancelled"
        assert workspace.player.wait(2)

    def test_pause_when_idle(self, client):
        assert client.post("/api/pause").status_code == 409
