"""
Tests for the Gemini edge-list client.  requests.post is always stubbed.
"""

from unittest.mock import MagicMock

import pytest
import requests

import config
from assistant import AssistantError, build_prompt, generate_edge_list
from assistant import gemini


def gemini_response(text, status_code=200):
    response = MagicMock()
    response.status_code = status_code
    response.text = text if status_code != 200 else "{...}"
    response.json.return_value = {"candidates": [{"content": {"parts": [{"text": text}]}}]}
    return response


@pytest.fixture
def no_sleep(monkeypatch):
    monkeypatch.setattr(gemini.time, "sleep", lambda seconds: None)


class TestPrompt:
    """Prompt construction."""

    def test_contains_format_rules(self):
        prompt = build_prompt("  a ring of six cities ")
        assert '"node1 node2 weight"' in prompt
        assert "between 1 and 20" in prompt
        assert "between 5 and 15 nodes" in prompt
        assert prompt.endswith('Description: "a ring of six cities"')


class TestGenerateEdgeList:
    """HTTP behaviour."""

    def test_success(self, monkeypatch):
        post = MagicMock(return_value=gemini_response("A B 3\nB C 4\n"))
        monkeypatch.setattr(gemini.requests, "post", post)

        text = generate_edge_list("small graph", api_key="k", model="gemini-test", timeout=5)

        assert text == "A B 3\nB C 4"
        url = post.call_args.args[0]
        kwargs = post.call_args.kwargs
        assert url == f"{config.GEMINI_BASE_URL}/gemini-test:generateContent"
        assert kwargs["params"] == {"key": "k"}
        assert kwargs["timeout"] == 5
        parts = kwargs["json"]["contents"][0]["parts"]
        assert parts[0]["text"] == build_prompt("small graph")

    def test_strips_code_fences(self, monkeypatch):
        monkeypatch.setattr(gemini.requests, "post", MagicMock(return_value=gemini_response("```\nA B 3\n```")))
        assert generate_edge_list("x", api_key="k") == "A B 3"

    def test_missing_key(self, monkeypatch):
        monkeypatch.setattr(config, "GEMINI_API_KEY", None)
        with pytest.raises(AssistantError):
            generate_edge_list("small graph")

    def test_empty_description(self):
        with pytest.raises(AssistantError):
            generate_edge_list("   ", api_key="k")

    def test_http_error(self, monkeypatch):
        monkeypatch.setattr(gemini.requests, "post", MagicMock(return_value=gemini_response("denied", 403)))
        with pytest.raises(AssistantError, match="403"):
            generate_edge_list("x", api_key="k")

    def test_unexpected_body(self, monkeypatch):
        response = gemini_response("")
        response.json.return_value = {"candidates": []}
        monkeypatch.setattr(gemini.requests, "post", MagicMock(return_value=response))
        with pytest.raises(AssistantError, match="Unexpected"):
            generate_edge_list("x", api_key="k")

    def test_no_valid_edges(self, monkeypatch):
        monkeypatch.setattr(gemini.requests, "post", MagicMock(return_value=gemini_response("Sorry, I can't.")))
        with pytest.raises(AssistantError):
            generate_edge_list("x", api_key="k")

    def test_timeout_retries_then_fails(self, monkeypatch):
        post = MagicMock(side_effect=requests.exceptions.Timeout())
        monkeypatch.setattr(gemini.requests, "post", post)
        with pytest.raises(AssistantError, match="timed out"):
            generate_edge_list("x", api_key="k", max_retries=2)
        assert post.call_count == 2

    def test_connection_error(self, monkeypatch):
        post = MagicMock(side_effect=requests.exceptions.ConnectionError("dns"))
        monkeypatch.setattr(gemini.requests, "post", post)
        with pytest.raises(AssistantError):
            generate_edge_list("x", api_key="k")

    def test_rate_limit_backoff(self, monkeypatch, no_sleep):
        post = MagicMock(side_effect=[gemini_response("slow down", 429), gemini_response("A B 1")])
        monkeypatch.setattr(gemini.requests, "post", post)
        assert generate_edge_list("x", api_key="k") == "A B 1"
        assert post.call_count == 2

    def test_rate_limit_exhausted_skips_final_backoff(self, monkeypatch):
        """Backoff only runs between attempts, never after the last one."""
        sleeps = []
        monkeypatch.setattr(gemini.time, "sleep", sleeps.append)
        post = MagicMock(return_value=gemini_response("slow down", 429))
        monkeypatch.setattr(gemini.requests, "post", post)
        with pytest.raises(AssistantError, match="Rate limited"):
            generate_edge_list("x", api_key="k", max_retries=3)
        assert post.call_count == 3
        assert sleeps == [1, 2]
