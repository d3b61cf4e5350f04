import pytest
import tomli_w
from typer.testing import CliRunner

from oxysound import cli
from oxysound.i18n import set_lang


@pytest.fixture(autouse=True)
def english_and_clean_env(monkeypatch):
    """Tests assert English messages and must never see the user's setup."""
    set_lang("en")
    for var in ("OXYSOUND_API_KEY", "OXYSOUND_SAVE_DIRECTORY", "OXYSOUND_CONFIG"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setitem(cli.state, "config_path", None)
    yield
    set_lang("en")


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def save_dir(tmp_path):
    return tmp_path / "playlists"


@pytest.fixture
def config_file(tmp_path, save_dir):
    """A complete configuration file pointing at a temporary save directory."""
    path = tmp_path / "config" / "config.toml"
    path.parent.mkdir(parents=True)
    with open(path, "wb") as file:
        tomli_w.dump(
            {"youtube_api_key": "test-key", "save_directory": str(save_dir)}, file
        )
    return path
