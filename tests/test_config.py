"""Tests for configuration lookup."""

from argparse import Namespace
from pathlib import Path

from tasklists.config import ENV_STATE_FILE, Config, default_state_path


def test_default_path_uses_xdg(monkeypatch, tmp_path):
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))
    assert default_state_path() == tmp_path / "tasklists" / "state.json"


def test_default_path_without_xdg(monkeypatch):
    monkeypatch.delenv("XDG_DATA_HOME", raising=False)
    assert default_state_path() == Path.home() / ".local" / "share" / "tasklists" / "state.json"


def test_explicit_file_wins(monkeypatch, tmp_path):
    monkeypatch.setenv(ENV_STATE_FILE, str(tmp_path / "env.json"))
    config = Config(state_file=str(tmp_path / "flag.json"))
    assert config.state_path == tmp_path / "flag.json"


def test_env_var_used_without_flag(monkeypatch, tmp_path):
    monkeypatch.setenv(ENV_STATE_FILE, str(tmp_path / "env.json"))
    assert Config().state_path == tmp_path / "env.json"


def test_falls_back_to_default(monkeypatch, tmp_path):
    monkeypatch.delenv(ENV_STATE_FILE, raising=False)
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))
    assert Config().state_path == tmp_path / "tasklists" / "state.json"


def test_from_args(tmp_path):
    args = Namespace(file=str(tmp_path / "s.json"), json=True, verbose=2)
    config = Config.from_args(args)
    assert config.state_path == tmp_path / "s.json"
    assert config.json is True
    assert config.verbose == 2


def test_from_args_missing_attributes(monkeypatch, tmp_path):
    monkeypatch.setenv(ENV_STATE_FILE, str(tmp_path / "env.json"))
    config = Config.from_args(Namespace())
    assert config.state_path == tmp_path / "env.json"
    assert config.json is False
    assert config.verbose == 0
