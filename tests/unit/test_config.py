from pathlib import Path

import pytest
import yaml

from scrub_core import RedactionEngine
from scrub_core.config import AppConfig, DEFAULT_CONFIG, dump_default_config, load_config


def _write(path: Path, data: dict) -> Path:
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return path


def test_defaults_when_no_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("scrub_core.config.runtime_config_dir", lambda: tmp_path / "user")
    config = load_config()
    assert config == DEFAULT_CONFIG
    assert config is not DEFAULT_CONFIG


def test_project_config_is_discovered(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / ".scrub").mkdir()
    _write(tmp_path / ".scrub" / "config.yaml", {"logging": {"level": "debug"}})
    monkeypatch.chdir(tmp_path)
    assert load_config().logging.normalized_level() == "DEBUG"


def test_missing_explicit_path_is_an_error(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        load_config(tmp_path / "absent.yaml")


def test_custom_rules_extend_builtins(tmp_path: Path) -> None:
    path = _write(
        tmp_path / "config.yaml",
        {
            "rules": {
                "hashed_names": ["accountID"],
                "redacted_names": ["api[_-]?key", "pin$"],
                "detectors": [
                    {"name": "github_token", "pattern": "gh[pousr]_[A-Za-z0-9]{36}"},
                    {"name": "order", "pattern": "ORD-\\d{6}", "strategy": "hash"},
                ],
            }
        },
    )
    engine = RedactionEngine.from_config(load_config(path))
    token = "ghp_" + "a" * 36
    assert engine.scan_text(f"push with {token}") == "push with [redacted:github_token]"
    assert engine.scan_text("mail foo@bar.com") == "mail [redacted:email]"
    assert engine.scan_text("ORD-123456").startswith("[redacted:md5:")
    record = {"accountID": "foo", "card_pin": "1234", "password": "x", "pinned": "yes"}
    engine.redact_record(record)
    assert record == {
        "accountID": "[redacted:md5:acbd18db4cc2f85cedef654fccc4a4d8]",
        "card_pin": "[redacted]",
        "password": "[redacted]",
        "pinned": "yes",
    }


def test_builtins_can_be_excluded_and_disabled(tmp_path: Path) -> None:
    path = _write(
        tmp_path / "config.yaml",
        {
            "rules": {
                "include_builtin": False,
                "redacted_names": ["secret"],
            }
        },
    )
    engine = RedactionEngine.from_config(load_config(path))
    assert engine.scan_text("foo@bar.com") == "foo@bar.com"
    assert engine.classify_keyed("password", "x") == "x"
    assert engine.classify_keyed("client_secret", "x") == "[redacted]"

    config = AppConfig.model_validate({"rules": {"disabled_detectors": ["email"]}})
    engine = RedactionEngine.from_config(config)
    assert engine.scan_text("foo@bar.com") == "foo@bar.com"
    assert engine.scan_text("gitpodio-gitpod-uesaddev73c").startswith("[redacted:md5:")


@pytest.mark.parametrize(
    "rules",
    [
        {"detectors": [{"name": "bad name", "pattern": "x"}]},
        {"detectors": [{"name": "broken", "pattern": "("}]},
        {"detectors": [{"name": "a", "pattern": "x"}, {"name": "a", "pattern": "y"}]},
        {"detectors": [{"name": "a", "pattern": "x", "strategy": "encrypt"}]},
        {"redacted_names": ["[unclosed"]},
    ],
)
def test_invalid_rules_are_rejected(tmp_path: Path, rules: dict) -> None:
    path = _write(tmp_path / "config.yaml", {"rules": rules})
    with pytest.raises(ValueError, match="Invalid configuration"):
        load_config(path)


def test_dump_default_config_round_trips(tmp_path: Path) -> None:
    target = tmp_path / "nested" / "config.yaml"
    dump_default_config(target)
    assert load_config(target) == DEFAULT_CONFIG
