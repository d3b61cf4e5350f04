from pathlib import Path

from oxysound.utils import expand_path_aliases


def test_expands_home_aliases():
    assert expand_path_aliases("$HOME/lists") == Path.home() / "lists"
    assert expand_path_aliases("~/lists") == Path.home() / "lists"


def test_expands_xdg_variable_when_set(monkeypatch, tmp_path):
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))

    assert expand_path_aliases("$XDG_DATA_HOME/oxysound") == tmp_path / "oxysound"


def test_xdg_defaults_when_unset(monkeypatch):
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    monkeypatch.delenv("XDG_DATA_HOME", raising=False)

    assert expand_path_aliases("$XDG_CONFIG_HOME/x") == Path.home() / ".config" / "x"
    assert expand_path_aliases("$XDG_DATA_HOME") == Path.home() / ".local" / "share"


def test_other_paths_are_untouched():
    assert expand_path_aliases("/srv/$OTHER/lists") == Path("/srv/$OTHER/lists")
