import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from scrub_core.cli.main import app
from scrub_core.version import __version__

runner = CliRunner()


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("scrub_core.config.runtime_config_dir", lambda: tmp_path / "user")


def test_scan_file(tmp_path: Path) -> None:
    source = tmp_path / "notes.txt"
    source.write_text("The email is foo@bar.com or bar@foo.com", encoding="utf-8")
    result = runner.invoke(app, ["scan", str(source)])
    assert result.exit_code == 0
    assert result.stdout == "The email is [redacted:email] or [redacted:email]"


def test_find_lists_spans_without_values(tmp_path: Path) -> None:
    source = tmp_path / "notes.txt"
    source.write_text("mail foo@bar.com", encoding="utf-8")
    result = runner.invoke(app, ["find", str(source)])
    assert result.exit_code == 0
    detections = json.loads(result.stdout)
    assert detections == [{"detector": "email", "span": {"start": 5, "end": 16}, "strategy": "literal"}]
    assert "foo@bar.com" not in result.stdout


def test_classify() -> None:
    result = runner.invoke(app, ["classify", "Username", "foo"])
    assert result.exit_code == 0
    assert result.stdout.strip() == "[redacted:md5:acbd18db4cc2f85cedef654fccc4a4d8]"


def test_json_from_stdin() -> None:
    result = runner.invoke(app, ["json"], input='{"ok": true, "email": "foo@bar.com"}')
    assert result.exit_code == 0
    assert result.stdout.strip() == '{"email":"[redacted]","ok":true}'


def test_json_to_output_file(tmp_path: Path) -> None:
    source = tmp_path / "in.json"
    source.write_text('["foo@bar.com"]', encoding="utf-8")
    target = tmp_path / "out.json"
    result = runner.invoke(app, ["json", str(source), "-o", str(target)])
    assert result.exit_code == 0
    assert target.read_bytes() == b'["[redacted:email]"]'


def test_json_parse_error_exit_code() -> None:
    result = runner.invoke(app, ["json"], input="{not json")
    assert result.exit_code == 1
    assert "Malformed JSON" in result.output


def test_rules_reflect_config(tmp_path: Path) -> None:
    config = tmp_path / "config.yaml"
    config.write_text("rules:\n  hashed_names: [accountID]\n  disabled_detectors: [workspaceID]\n", encoding="utf-8")
    result = runner.invoke(app, ["--config", str(config), "rules"])
    assert result.exit_code == 0
    document = json.loads(result.stdout)
    assert "accountid" in document["hashed_names"]
    assert [detector["name"] for detector in document["detectors"]] == ["email"]


def test_invalid_config_exit_code(tmp_path: Path) -> None:
    config = tmp_path / "config.yaml"
    config.write_text("rules:\n  detectors: [{name: x, pattern: '('}]\n", encoding="utf-8")
    result = runner.invoke(app, ["--config", str(config), "version"])
    assert result.exit_code == 2


def test_init_config(tmp_path: Path) -> None:
    target = tmp_path / "scrub.yaml"
    result = runner.invoke(app, ["init-config", str(target)])
    assert result.exit_code == 0
    assert target.is_file()
    again = runner.invoke(app, ["init-config", str(target)])
    assert again.exit_code == 1


def test_version() -> None:
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert result.stdout.strip() == __version__
