import logging
from typing import Optional

import typer
from pymonad.either import Either, Left, Right
from rich.console import Console

from ..domain.errors import AppError, ConfigMissingError
from ..domain.models import Config
from ..domain.ports import ConfigSource
from ..i18n import get_message

logger = logging.getLogger(__name__)


class ConsoleConfigSource(ConfigSource):
    """
    Asks the user for the configuration values on the terminal.
    """

    def __init__(self, console: Optional[Console] = None, default_save_directory: str = ""):
        self._console = console or Console()
        self._default_save_directory = default_save_directory

    def request_config(self, current: Optional[Config] = None) -> Either[AppError, Config]:
        self._console.print(f"🛠  {get_message('setup_intro')}")
        try:
            api_key = typer.prompt(
                get_message("prompt_api_key"),
                default=(current.api_key if current and current.api_key else None),
                hide_input=True,
                show_default=False,
            )
            save_directory = typer.prompt(
                get_message("prompt_save_directory"),
                default=(
                    current.save_directory
                    if current and current.save_directory
                    else self._default_save_directory
                ),
            )
        except typer.Abort:
            logger.error("Configuration prompt aborted by the user.")
            return Left(ConfigMissingError(get_message("setup_aborted")))

        logger.info("Configuration values collected from the console.")
        return Right(Config(api_key=api_key.strip(), save_directory=save_directory.strip()))
