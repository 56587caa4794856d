"""Tests for crud-up CLI helpers."""
import functools
import logging
import os

import httpx
import pytest

from crud_uploader.cli import (
    CLIError,
    _check_input_file,
    _load_env_file,
    _setup_logging,
    run_cli,
)
from crud_uploader.orchestrator import GenerationOrchestrator


ENV_NAMES = ("CRUD_UPLOADER_API_URL", "CRUD_UPLOADER_OUTPUT_DIR", "CRUD_UPLOADER_TIMEOUT")


@pytest.fixture(autouse=True)
def _isolated(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)
    root_logger = logging.getLogger()
    handlers, level = list(root_logger.handlers), root_logger.level
    yield
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)
    # _load_env_file writes os.environ directly
    for name in ENV_NAMES:
        os.environ.pop(name, None)
    logging.disable(logging.NOTSET)


def _use_transport(monkeypatch, handler):
    monkeypatch.setattr(
        "crud_uploader.cli.GenerationOrchestrator",
        functools.partial(GenerationOrchestrator, transport=httpx.MockTransport(handler)),
    )


def test_load_env_file(tmp_path, monkeypatch):
    env_path = tmp_path / ".env"
    env_path.write_text(
        "\n".join(
            [
                "# generator",
                "CRUD_UPLOADER_API_URL=http://localhost:8080",
                "CRUD_UPLOADER_OUTPUT_DIR='/tmp/zips'",
                "export CRUD_UPLOADER_TIMEOUT=45",
            ]
        ),
        encoding="utf-8",
    )

    _load_env_file(env_path)

    assert os.environ["CRUD_UPLOADER_API_URL"] == "http://localhost:8080"
    assert os.environ["CRUD_UPLOADER_OUTPUT_DIR"] == "/tmp/zips"
    assert os.environ["CRUD_UPLOADER_TIMEOUT"] == "45"


def test_load_env_file_keeps_existing_values(tmp_path, monkeypatch):
    env_path = tmp_path / ".env"
    env_path.write_text("CRUD_UPLOADER_API_URL=http://from-file", encoding="utf-8")
    monkeypatch.setenv("CRUD_UPLOADER_API_URL", "http://from-shell")

    _load_env_file(env_path)

    assert os.environ["CRUD_UPLOADER_API_URL"] == "http://from-shell"


def test_load_env_file_missing(tmp_path):
    with pytest.raises(CLIError, match="env file not found"):
        _load_env_file(tmp_path / "nope.env")


def test_check_input_file(tmp_path):
    assert _check_input_file(None, "overrides") is None
    with pytest.raises(CLIError, match="SQL file does not exist"):
        _check_input_file(tmp_path / "missing.sql", "SQL")
    with pytest.raises(CLIError, match="not a file"):
        _check_input_file(tmp_path, "SQL")


def test_setup_logging_defaults_to_silent():
    mode = _setup_logging(debug=False, silent=False, log_level=None)
    assert mode == "silent"
    assert logging.getLogger().isEnabledFor(logging.ERROR) is False


def test_setup_logging_debug_mode():
    mode = _setup_logging(debug=True, silent=False, log_level=None)
    assert mode == "DEBUG"
    assert logging.getLogger().isEnabledFor(logging.DEBUG) is True


def test_setup_logging_explicit_level():
    mode = _setup_logging(debug=False, silent=False, log_level="warning")
    assert mode == "WARNING"
    assert logging.getLogger().isEnabledFor(logging.INFO) is False


def test_run_cli_without_sql_prints_help(capsys):
    assert run_cli([]) == 0
    assert "crud-up" in capsys.readouterr().out


def test_run_cli_missing_sql_file(tmp_path, capsys):
    assert run_cli([str(tmp_path / "missing.sql"), "-p", "shop"]) == 1
    assert "ERROR: SQL file does not exist" in capsys.readouterr().err


def test_run_cli_downloads_zip(tmp_path, monkeypatch, capsys):
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(
            200,
            content=b"PK\x03\x04",
            headers={"Content-Disposition": "attachment; filename*=UTF-8''shop%20api.zip"},
        )

    _use_transport(monkeypatch, handler)
    sql = tmp_path / "schema.sql"
    sql.write_bytes(b"CREATE TABLE t (id INT);")

    code = run_cli([str(sql), "-p", "shop", "-d", str(tmp_path / "out"), "--api-url", "http://gen"])

    assert code == 0
    assert (tmp_path / "out" / "shop api.zip").read_bytes() == b"PK\x03\x04"
    assert str(requests[0].url) == "http://gen/api/generate/upload"
    assert "Download started" in capsys.readouterr().out


def test_run_cli_blank_project_name_fails_without_request(tmp_path, monkeypatch, capsys):
    requests = []
    _use_transport(monkeypatch, lambda request: requests.append(request) or httpx.Response(200))
    sql = tmp_path / "schema.sql"
    sql.write_bytes(b"CREATE TABLE t (id INT);")

    code = run_cli([str(sql), "-p", "   "])

    assert code == 1
    assert requests == []
    assert "Please enter a project name." in capsys.readouterr().out


def test_run_cli_server_error_exit_code(tmp_path, monkeypatch, capsys):
    _use_transport(monkeypatch, lambda request: httpx.Response(500, text="boom"))
    sql = tmp_path / "schema.sql"
    sql.write_bytes(b"CREATE TABLE t (id INT);")

    code = run_cli([str(sql), "-p", "shop"])

    assert code == 1
    assert "Server error: 500 - boom" in capsys.readouterr().out
    assert list(tmp_path.glob("*.zip")) == []


def test_run_cli_invalid_timeout_env(tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("CRUD_UPLOADER_TIMEOUT", "soon")
    sql = tmp_path / "schema.sql"
    sql.write_bytes(b"CREATE TABLE t (id INT);")

    assert run_cli([str(sql), "-p", "shop"]) == 1
    assert "CRUD_UPLOADER_TIMEOUT" in capsys.readouterr().err
