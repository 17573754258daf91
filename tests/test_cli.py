from __future__ import annotations

import json
import re
from pathlib import Path

from typer.testing import CliRunner

from tac_config import __version__
from tac_config.cli import app
from tac_config.defaults import default_entries
from tac_config.store import ConfigStore

_ENV = {"COLUMNS": "160", "NO_COLOR": "1"}


def _plain(text: str) -> str:
    return re.sub(r"\x1b\[[0-9;?]*[A-Za-z]", "", text)


def test_version_prints_version() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.stdout


def test_edit_requires_tty(tmp_path: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["edit", "--file", str(tmp_path / "tac.json")])
    assert result.exit_code == 2
    assert "requires a TTY" in result.stderr


def test_get_reads_defaults_when_file_is_missing(tmp_path: Path) -> None:
    runner = CliRunner()
    path = str(tmp_path / "tac.json")

    result = runner.invoke(app, ["get", "hours color", "--file", path])
    assert result.exit_code == 0
    assert result.stdout.strip() == "RED"

    result = runner.invoke(app, ["get", "hours color", "--file", path, "--as", "option"])
    assert result.stdout.strip() == "1"

    result = runner.invoke(app, ["get", "clock width", "--file", path, "--as", "int"])
    assert result.stdout.strip() == "5"

    result = runner.invoke(app, ["get", "continuous minutes", "--file", path, "--as", "bool"])
    assert result.stdout.strip() == "true"


def test_get_unknown_key_and_category(tmp_path: Path) -> None:
    runner = CliRunner()
    path = str(tmp_path / "tac.json")

    result = runner.invoke(app, ["get", "nope", "--file", path])
    assert result.exit_code == 1
    assert "Unknown key" in result.stderr

    result = runner.invoke(app, ["get", "Colors", "--file", path])
    assert result.exit_code == 1

    result = runner.invoke(app, ["get", "Colors", "--file", path, "--as", "float"])
    assert result.exit_code == 2


def test_set_dispatches_on_entry_kind(tmp_path: Path) -> None:
    runner = CliRunner()
    path = tmp_path / "tac.json"

    result = runner.invoke(app, ["set", "clock border", "HOURS", "--file", str(path)])
    assert result.exit_code == 0, result.output
    assert result.stdout.strip() == "hours"

    assert runner.invoke(app, ["set", "circle color", "4", "-f", str(path)]).exit_code == 0
    assert runner.invoke(app, ["set", "-f", str(path), "--", "clock width", "-2"]).exit_code == 0
    assert runner.invoke(app, ["set", "continuous minutes", "off", "-f", str(path)]).exit_code == 0
    assert runner.invoke(app, ["set", "quit", "x", "-f", str(path)]).exit_code == 0

    store = ConfigStore.load(path)
    assert store.get_option("clock border") == 2
    assert store.get_string("circle color") == "BLUE"
    assert store.get_int("clock width") == -2
    assert store.get_bool("continuous minutes") is False
    assert store.get_string("quit") == "x"


def test_set_rejections_leave_file_untouched(tmp_path: Path) -> None:
    runner = CliRunner()
    path = tmp_path / "tac.json"
    ConfigStore.default(path).save()
    before = path.read_text(encoding="utf-8")

    for args in (
        ["set", "quit", "xy"],
        ["set", "numbers", "7"],
        ["set", "numbers", "roman"],
        ["set", "clock width", "wide"],
        ["set", "continuous minutes", "maybe"],
        ["set", "Colors", "x"],
        ["set", "missing", "1"],
    ):
        result = runner.invoke(app, [*args, "--file", str(path)])
        assert result.exit_code == 1, args

    assert path.read_text(encoding="utf-8") == before


def test_show_prints_all_entries(tmp_path: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["show", "--file", str(tmp_path / "tac.json")], env=_ENV)
    assert result.exit_code == 0
    plain = _plain(result.stdout)
    for entry in default_entries():
        assert entry.key in plain
    assert '"HOURS" (max 32)' in plain


def test_reset_writes_defaults(tmp_path: Path) -> None:
    runner = CliRunner()
    path = tmp_path / "tac.json"
    path.write_text(json.dumps({"entries": []}), encoding="utf-8")

    result = runner.invoke(app, ["reset", "--yes", "--file", str(path)])

    assert result.exit_code == 0
    doc = json.loads(path.read_text(encoding="utf-8"))
    assert doc["filename"] == str(path)
    assert len(doc["entries"]) == len(default_entries())


def test_reset_asks_for_confirmation(tmp_path: Path) -> None:
    runner = CliRunner()
    path = tmp_path / "tac.json"
    result = runner.invoke(app, ["reset", "--file", str(path)], input="n\n")
    assert result.exit_code == 1
    assert not path.exists()


def test_file_path_from_environment(tmp_path: Path) -> None:
    runner = CliRunner()
    path = tmp_path / "env.json"
    result = runner.invoke(
        app, ["set", "numbers", "stars"], env={"TAC_CONFIG_PATH": str(path)}
    )
    assert result.exit_code == 0
    assert ConfigStore.load(path).get_option("numbers") == 1


def test_set_option_index_is_decimal(tmp_path: Path) -> None:
    runner = CliRunner()
    path = str(tmp_path / "tac.json")

    result = runner.invoke(app, ["set", "circle color", "07", "-f", path])
    assert result.exit_code == 0, result.output
    assert ConfigStore.load(Path(path)).get_string("circle color") == "WHITE"

    assert runner.invoke(app, ["set", "circle color", "0x1", "-f", path]).exit_code == 1
    assert ConfigStore.load(Path(path)).get_string("circle color") == "WHITE"
