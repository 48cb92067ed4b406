import json

import pytest
from typer.testing import CliRunner

from miru import __version__
from miru.backend.local import InProcessBackend
from miru.bridge.dispatch import CommandBridge
from miru.cli import commands as cli_commands
from miru.cli.commands import app
from miru.commands.registry import get_command_schema

runner = CliRunner()

FAVORITES = {
    "id": "c1",
    "name": "Favorites",
    "description": "Rewatch list",
    "animeIds": ["a1"],
    "createdAt": "2025-01-01T00:00:00Z",
    "updatedAt": "2025-01-01T00:00:00Z",
}


def _backend() -> InProcessBackend:
    collections = {"c1": dict(FAVORITES)}
    backend = InProcessBackend()

    @backend.procedure("getAllCollections")
    def _all():
        return {"status": "ok", "data": list(collections.values())}

    @backend.procedure("getCollection")
    def _get(request):
        return {"status": "ok", "data": collections.get(request["id"])}

    @backend.procedure("getCollectionAnime")
    def _anime(request):
        return {"status": "ok", "data": [{"id": "a1", "title": {"main": "Sousou no Frieren", "english": "Frieren"}}]}

    @backend.procedure("deleteCollection")
    def _delete(request):
        if collections.pop(request["id"], None) is None:
            return {"status": "error", "error": "Collection not found"}
        return {"status": "ok", "data": None}

    @backend.procedure("createCollection")
    def _create(request):
        row = dict(FAVORITES, id="c2", name=request["name"], description=request["description"])
        collections["c2"] = row
        return {"status": "ok", "data": row}

    return backend


@pytest.fixture
def cli_env(isolated_home, monkeypatch):
    monkeypatch.setenv("MIRU_LOGGING__FILE", "false")
    monkeypatch.setattr(cli_commands.console, "width", 200)
    backend = _backend()
    monkeypatch.setattr(
        "miru.cli.shared.bridge_utils.create_bridge",
        lambda config: CommandBridge(get_command_schema(), backend),
    )
    return backend


def test_version(cli_env):
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_commands_table_lists_registry(cli_env):
    result = runner.invoke(app, ["commands"])
    assert result.exit_code == 0
    assert "getAllCollections" in result.output
    assert "importValidatedAnime" in result.output


def test_call_prints_payload_as_json(cli_env):
    result = runner.invoke(app, ["call", "getCollection", "--args", '[{"id": "c1"}]'])
    assert result.exit_code == 0, result.output
    assert json.loads(result.output)["name"] == "Favorites"


def test_call_accepts_named_arguments(cli_env):
    result = runner.invoke(app, ["call", "getCollection", "--args", '{"request": {"id": "nope"}}'])
    assert result.exit_code == 0, result.output
    assert json.loads(result.output) is None


def test_call_unknown_command_exits_with_schema_code(cli_env):
    result = runner.invoke(app, ["call", "dropDatabase"])
    assert result.exit_code == 2
    assert "[UNKNOWN_COMMAND] command not found: dropDatabase" in result.output


@pytest.mark.parametrize("raw", ["{not json", "42"])
def test_call_rejects_bad_args(cli_env, raw):
    result = runner.invoke(app, ["call", "getAllCollections", "--args", raw])
    assert result.exit_code == 2


def test_backend_failure_exits_with_detail(cli_env):
    result = runner.invoke(app, ["collections", "delete", "missing"])
    assert result.exit_code == 1
    assert "deleteCollection failed" in result.output
    assert "Collection not found" in result.output


def test_collections_list(cli_env):
    result = runner.invoke(app, ["collections", "list"])
    assert result.exit_code == 0, result.output
    assert "Favorites" in result.output
    assert "c1" in result.output


def test_collections_show_uses_preferred_title(cli_env):
    result = runner.invoke(app, ["collections", "show", "c1"])
    assert result.exit_code == 0, result.output
    assert "Rewatch list" in result.output
    assert "Sousou no Frieren" in result.output


def test_collections_show_missing(cli_env):
    result = runner.invoke(app, ["collections", "show", "c9"])
    assert result.exit_code == 1
    assert "Collection not found: c9" in result.output


def test_collections_create_and_delete(cli_env):
    result = runner.invoke(app, ["collections", "create", "Winter 2025", "-d", "cozy"])
    assert result.exit_code == 0, result.output
    assert "Created collection Winter 2025 (c2)" in result.output
    result = runner.invoke(app, ["collections", "delete", "c2"])
    assert result.exit_code == 0, result.output
    assert "Deleted collection c2" in result.output
