# tests/test_api.py
"""Tests for the HTTP surface using FastAPI's TestClient."""

from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from citerag import __version__
from citerag.api.app import create_app
from citerag.core.exceptions import ConfigurationError, GenerationError


@pytest.fixture
def client(app_context):
    return TestClient(create_app(app_context))


def ingest(client, text="Orbital lander codename is Nightjar.", **extra):
    return client.post("/ingest", json={"text": text, **extra})


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"ok": True, "version": __version__}


class TestIngestEndpoint:
    def test_ingest_ok(self, client):
        """Counts come back with camelCase insertedCount."""
        response = ingest(client, title="Brief", docId="brief-1")

        assert response.status_code == 200
        body = response.json()
        assert body["ok"] is True
        assert body["doc_id"] == "brief-1"
        assert body["chunks"] == 1
        assert body["embedded"] == 1
        assert body["insertedCount"] == 1

    @pytest.mark.parametrize("payload", [{"text": ""}, {"text": "   "}, {}, {"title": "no text"}])
    def test_invalid_body_rejected(self, client, payload, fake_embedding_plugin):
        """Bad input is a 400 with an error message and no service calls."""
        response = client.post("/ingest", json=payload)

        assert response.status_code == 400
        assert response.json()["ok"] is False
        assert response.json()["error"]
        assert fake_embedding_plugin.calls == []


class TestAskEndpoint:
    def test_ask_ok(self, client):
        """Answer, numbered sources and timing are returned."""
        ingest(client, title="Brief")

        response = client.post("/ask", json={"query": "lander codename", "topK": 5, "finalN": 2})

        assert response.status_code == 200
        body = response.json()
        assert body["ok"] is True
        assert body["answer"] == "Nightjar is the codename [1]."
        assert body["sources"][0]["n"] == 1
        assert body["sources"][0]["title"] == "Brief"
        assert set(body["sources"][0]) == {"n", "title", "section", "position", "source", "url", "snippet"}
        assert body["timingMs"] >= 0

    def test_ask_empty_index(self, client):
        """No indexed data answers "I don't know." rather than failing."""
        response = client.post("/ask", json={"query": "anything"})

        assert response.status_code == 200
        assert response.json()["answer"] == "I don't know."
        assert response.json()["sources"] == []

    def test_doc_id_scope(self, client):
        ingest(client, text="Lander notes.", title="A", docId="a")
        ingest(client, text="Lander budget.", title="B", docId="b")

        body = client.post("/ask", json={"query": "lander", "docId": "b"}).json()

        assert [s["title"] for s in body["sources"]] == ["B"]

    @pytest.mark.parametrize(
        "payload",
        [{"query": ""}, {"query": "  "}, {"query": "x", "topK": 0}, {"query": "x", "finalN": -1}, {}],
    )
    def test_invalid_body_rejected(self, client, payload):
        response = client.post("/ask", json=payload)
        assert response.status_code == 400
        assert response.json()["ok"] is False

    def test_upstream_failure_is_502(self, client, app_context):
        """A failing Generation Service maps to 502."""
        ingest(client)
        app_context._chat_plugin = MagicMock()
        app_context._chat_plugin.chat.side_effect = GenerationError("model overloaded")

        response = client.post("/ask", json={"query": "lander"})

        assert response.status_code == 502
        assert response.json() == {"ok": False, "error": "model overloaded"}

    def test_configuration_error_is_500(self, client, app_context):
        app_context._rerank_plugin = None
        app_context.config.rerank.plugin_name = "unknown"

        response = client.post("/ask", json={"query": "lander"})

        assert response.status_code == 500
        assert response.json()["ok"] is False

    def test_internal_error_is_500_without_traceback(self, client, app_context):
        app_context._vector_store = MagicMock()
        app_context._vector_store.query.side_effect = ZeroDivisionError("secret internals")

        response = client.post("/ask", json={"query": "lander"})

        assert response.status_code == 500
        assert response.json()["ok"] is False
        assert "Traceback" not in response.text


class TestCreateApp:
    def test_logging_configured_from_context(self, app_context):
        """The factory applies the configured log level."""
        with patch("citerag.api.app.configure_logging") as configure:
            create_app(app_context)

        configure.assert_called_once_with(app_context.config.logging.level)
