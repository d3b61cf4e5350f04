import logging
import tomllib
from pathlib import Path
from typing import Callable, Optional

import tomli_w
import typer
from pymonad.either import Either, Left, Right

from .domain.errors import (
    AppError,
    ConfigInvalidError,
    ConfigMissingError,
    StorageError,
)
from .domain.models import Config
from .domain.ports import ConfigSource
from .utils import expand_path_aliases

logger = logging.getLogger(__name__)

APP_NAME = "oxysound"
CONFIG_FILE_NAME = "config.toml"
DEFAULT_SAVE_DIRECTORY = "$XDG_DATA_HOME/oxysound/playlists"

API_KEY_FIELD = "youtube_api_key"
SAVE_DIRECTORY_FIELD = "save_directory"


def get_config_path() -> Path:
    """Returns the OS specific location of the configuration file."""
    return Path(typer.get_app_dir(APP_NAME)) / CONFIG_FILE_NAME


def _read_raw(path: Path) -> Either[AppError, dict]:
    if not path.is_file():
        logger.info(f"No configuration file at '{path}'.")
        return Left(
            ConfigMissingError(
                f"No configuration file found at '{path}'.", config_path=str(path)
            )
        )
    try:
        with open(path, "rb") as file:
            return Right(tomllib.load(file))
    except tomllib.TOMLDecodeError as e:
        logger.error(f"Malformed configuration file '{path}': {e}")
        return Left(
            ConfigInvalidError(
                f"Configuration file '{path}' is not valid TOML: {e}",
                config_path=str(path),
            )
        )
    except OSError as e:
        logger.error(f"Could not read configuration file '{path}': {e}")
        return Left(
            ConfigInvalidError(
                f"Could not read configuration file '{path}': {e}",
                config_path=str(path),
            )
        )


def _validate(data: dict, path: Path) -> Either[AppError, Config]:
    for key in (API_KEY_FIELD, SAVE_DIRECTORY_FIELD):
        value = data.get(key, "")
        if not isinstance(value, str):
            return Left(
                ConfigInvalidError(
                    f"'{key}' in '{path}' must be a string.", config_path=str(path)
                )
            )
        if not value.strip():
            logger.info(f"Configuration value '{key}' is missing in '{path}'.")
            return Left(
                ConfigMissingError(
                    f"Missing configuration value '{key}' in '{path}'.",
                    config_path=str(path),
                    missing_key=key,
                )
            )
    return Right(
        Config(
            api_key=data[API_KEY_FIELD].strip(),
            save_directory=data[SAVE_DIRECTORY_FIELD].strip(),
        )
    )


def load_config(path: Optional[Path] = None) -> Either[AppError, Config]:
    """
    Reads and validates the configuration file.

    Args:
        path: Location of the file, defaults to get_config_path().

    Returns:
        Either: A Right(Config), a Left(ConfigMissingError) when the file or one
        of its values is absent, or a Left(ConfigInvalidError) when it cannot
        be parsed.
    """
    path = Path(path) if path else get_config_path()
    return _read_raw(path).bind(lambda data: _validate(data, path))


def save_config(config: Config, path: Optional[Path] = None) -> Either[AppError, Path]:
    path = Path(path) if path else get_config_path()
    data = {
        API_KEY_FIELD: config.api_key,
        SAVE_DIRECTORY_FIELD: config.save_directory,
    }
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "wb") as file:
            tomli_w.dump(data, file)
    except OSError as e:
        logger.error(f"Could not write configuration file '{path}': {e}")
        return Left(
            ConfigInvalidError(
                f"Could not write configuration file '{path}': {e}",
                config_path=str(path),
            )
        )
    logger.info(f"Configuration saved to '{path}'.")
    return Right(path)


def _partial_config(path: Path) -> Optional[Config]:
    """Returns whatever values an incomplete file holds, to use as defaults."""
    raw = _read_raw(path)
    if raw.is_left():
        return None
    data = raw.value
    return Config(
        api_key=str(data.get(API_KEY_FIELD, "") or ""),
        save_directory=str(data.get(SAVE_DIRECTORY_FIELD, "") or ""),
    )


def run_setup(
    source: ConfigSource,
    path: Optional[Path] = None,
    on_written: Optional[Callable[[Path], None]] = None,
) -> Either[AppError, Config]:
    """Asks the source for a configuration and writes it, unconditionally."""
    path = Path(path) if path else get_config_path()
    logger.info(f"Running configuration setup for '{path}'.")

    def write(config: Config) -> Either[AppError, Config]:
        written = save_config(config, path)
        if written.is_right() and on_written:
            on_written(written.value)
        return written.map(lambda _: config)

    return (
        source.request_config(_partial_config(path))
        .bind(lambda config: _validate(
            {API_KEY_FIELD: config.api_key, SAVE_DIRECTORY_FIELD: config.save_directory},
            path,
        ))
        .bind(write)
    )


def ensure_config(
    source: ConfigSource,
    path: Optional[Path] = None,
    on_written: Optional[Callable[[Path], None]] = None,
) -> Either[AppError, Config]:
    """
    Loads the configuration, running first-run setup when it is missing.

    Only a ConfigMissingError leads to setup. An unparsable file is returned
    as is so the user can fix it by hand.
    """
    path = Path(path) if path else get_config_path()
    loaded = load_config(path)
    if loaded.is_right():
        return loaded

    error = loaded.monoid[0]
    if not isinstance(error, ConfigMissingError):
        return loaded

    logger.info(f"Configuration incomplete ({error.message}), starting setup.")
    return run_setup(source, path, on_written)


def resolve_save_directory(config: Config) -> Path:
    return expand_path_aliases(config.save_directory)


def prepare_save_directory(config: Config) -> Either[AppError, Path]:
    """Expands the configured save directory and creates it if needed."""
    directory = resolve_save_directory(config)
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.error(f"Could not create save directory '{directory}': {e}")
        return Left(StorageError(f"Could not create save directory '{directory}': {e}"))
    return Right(directory)
