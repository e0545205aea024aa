"""
CLI tests (Typer CliRunner) against the in-memory resource.
"""

import json

import pytest
import typer
from typer.testing import CliRunner

from cli.main import app, parse_entity_id, parse_fields

runner = CliRunner()


@pytest.fixture(autouse=True)
def _settings(isolated_settings):
    return isolated_settings


def test_list_memory_shows_sample_records():
    result = runner.invoke(app, ["list", "--memory"])
    assert result.exit_code == 0, result.output
    assert "Bulbasaur" in result.output
    assert "SUCCESS" in result.output


def test_add_memory():
    result = runner.invoke(app, ["add", "25", "-f", "name=Pikachu", "-f", "level=12", "--memory"])
    assert result.exit_code == 0, result.output
    assert "Pikachu" in result.output


def test_update_memory_loads_first():
    result = runner.invoke(app, ["update", "1", "--field", "name=Ivysaur", "--memory"])
    assert result.exit_code == 0, result.output
    assert "Ivysaur" in result.output
    assert "Charmander" in result.output


def test_delete_unknown_id_fails_with_exit_code():
    result = runner.invoke(app, ["delete", "999", "--memory"])
    assert result.exit_code == 1
    assert "FAILED" in result.output
    assert "not found" in result.output


def test_seed_path_is_used(tmp_path, monkeypatch):
    seed = tmp_path / "seed.json"
    seed.write_text(json.dumps({"entities": [{"id": "mew", "name": "Mew"}]}), encoding="utf-8")
    monkeypatch.setenv("RECORDSYNC_SEED_PATH", str(seed))

    result = runner.invoke(app, ["list", "--memory"])
    assert result.exit_code == 0, result.output
    assert "Mew" in result.output
    assert "Bulbasaur" not in result.output


def test_demo_runs():
    result = runner.invoke(app, ["demo", "--no-banner"])
    assert result.exit_code == 0, result.output
    assert "Pikachu" in result.output
    assert "Eevee" in result.output
    assert "Ivysaur" in result.output
    assert "FAILED" in result.output


def test_parse_helpers():
    assert parse_entity_id("12") == 12
    assert parse_entity_id("abc") == "abc"
    assert parse_fields(["name=Mew", "level=5", "tags=[\"a\"]"]) == {"name": "Mew", "level": 5, "tags": ["a"]}
    with pytest.raises(typer.BadParameter):
        parse_fields(["oops"])
