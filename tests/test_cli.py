# tests/test_cli.py
"""Tests for the citerag CLI (typer CliRunner, fake context)."""

from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from citerag.cli.cli import app
from citerag.core.exceptions import ConfigurationError, RerankError

runner = CliRunner()


@pytest.fixture
def use_context(app_context):
    with patch("citerag.cli.commands.common.AppContext.from_config_path", return_value=app_context) as loader:
        yield loader


@pytest.fixture
def doc_file(tmp_path):
    path = tmp_path / "brief.txt"
    path.write_text("Orbital lander codename is Nightjar.\n", encoding="utf-8")
    return path


class TestHelp:
    def test_root_help_lists_commands(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for name in ("init-index", "ingest", "ask", "serve"):
            assert name in result.stdout

    @pytest.mark.parametrize("name", ["init-index", "ingest", "ask", "serve"])
    def test_command_help(self, name):
        result = runner.invoke(app, [name, "--help"])
        assert result.exit_code == 0, f"Help failed for '{name}'"


class TestIngestCommand:
    def test_ingest_file(self, use_context, doc_file, memory_store):
        """The file is ingested with its stem as the default title."""
        result = runner.invoke(app, ["ingest", str(doc_file), "--doc-id", "brief"])

        assert result.exit_code == 0, result.output
        assert "brief" in result.stdout
        assert len(memory_store) == 1
        assert next(iter(memory_store._records.values())).title == "brief"

    def test_config_path_forwarded(self, use_context, doc_file, tmp_path):
        config = tmp_path / "c.yaml"
        config.write_text("")
        runner.invoke(app, ["ingest", str(doc_file), "--config", str(config)])
        use_context.assert_called_once_with(config)

    def test_missing_file(self, use_context, tmp_path):
        result = runner.invoke(app, ["ingest", str(tmp_path / "missing.txt")])
        assert result.exit_code != 0

    def test_non_utf8_file_exits_1(self, use_context, tmp_path, memory_store):
        """An undecodable file is reported and nothing is ingested."""
        path = tmp_path / "latin.txt"
        path.write_bytes("café latin-1 text\n".encode("latin-1"))

        result = runner.invoke(app, ["ingest", str(path)])

        assert result.exit_code == 1
        assert not isinstance(result.exception, UnicodeDecodeError)
        assert "UTF-8" in result.output
        assert len(memory_store) == 0

    def test_unexpected_ingest_failure_exits_1(self, use_context, app_context, doc_file):
        """Failures outside the service errors still end with a message, not a traceback."""
        app_context._vector_store = MagicMock()
        app_context._vector_store.ensure_index.side_effect = RuntimeError("disk gone")

        result = runner.invoke(app, ["ingest", str(doc_file)])

        assert result.exit_code == 1
        assert not isinstance(result.exception, RuntimeError)
        assert "disk gone" in result.output

    def test_bad_config_exits_1(self, doc_file):
        with patch(
            "citerag.cli.commands.common.AppContext.from_config_path",
            side_effect=ConfigurationError("Config file not found: x.yaml"),
        ):
            result = runner.invoke(app, ["ingest", str(doc_file)])
        assert result.exit_code == 1


class TestAskCommand:
    def test_ask_prints_answer_and_sources(self, use_context, doc_file):
        runner.invoke(app, ["ingest", str(doc_file), "--title", "Brief"])

        result = runner.invoke(app, ["ask", "lander codename", "--final-n", "2"])

        assert result.exit_code == 0, result.output
        assert "Nightjar is the codename [1]." in result.stdout
        assert "Brief" in result.stdout

    def test_ask_empty_index(self, use_context):
        result = runner.invoke(app, ["ask", "anything"])
        assert result.exit_code == 0
        assert "I don't know." in result.stdout

    def test_service_failure_exits_1(self, use_context, app_context, doc_file):
        runner.invoke(app, ["ingest", str(doc_file)])
        app_context._rerank_plugin = MagicMock()
        app_context._rerank_plugin.rerank.side_effect = RerankError("rerank unavailable")

        result = runner.invoke(app, ["ask", "lander"])

        assert result.exit_code == 1


class TestInitIndexCommand:
    def test_recreates_with_configured_size(self, use_context, app_context):
        app_context._vector_store = MagicMock()

        result = runner.invoke(app, ["init-index", "--yes"])

        assert result.exit_code == 0, result.output
        app_context._vector_store.recreate_index.assert_called_once_with(1024)

    def test_vector_size_option(self, use_context, app_context):
        app_context._vector_store = MagicMock()
        runner.invoke(app, ["init-index", "--yes", "--vector-size", "384"])
        app_context._vector_store.recreate_index.assert_called_once_with(384)

    def test_declined_confirmation(self, use_context, app_context):
        app_context._vector_store = MagicMock()
        result = runner.invoke(app, ["init-index"], input="n\n")
        assert result.exit_code != 0
        app_context._vector_store.recreate_index.assert_not_called()


class TestServeCommand:
    def test_serve_runs_uvicorn(self, use_context):
        with patch("citerag.cli.commands.serve.uvicorn.run") as run:
            result = runner.invoke(app, ["serve", "--port", "9001"])
        assert result.exit_code == 0, result.output
        assert run.call_args.kwargs["port"] == 9001
        assert run.call_args.kwargs["host"] == "127.0.0.1"
