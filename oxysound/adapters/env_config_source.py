import logging
import os
from typing import Mapping, Optional

from pymonad.either import Either, Left, Right

from ..domain.errors import AppError, ConfigMissingError
from ..domain.models import Config
from ..domain.ports import ConfigSource

logger = logging.getLogger(__name__)

API_KEY_VAR = "OXYSOUND_API_KEY"
SAVE_DIRECTORY_VAR = "OXYSOUND_SAVE_DIRECTORY"


class EnvironmentConfigSource(ConfigSource):
    """
    Non-interactive configuration source reading environment variables.
    """

    def __init__(self, environ: Optional[Mapping[str, str]] = None, default_save_directory: str = ""):
        self._environ = os.environ if environ is None else environ
        self._default_save_directory = default_save_directory

    def request_config(self, current: Optional[Config] = None) -> Either[AppError, Config]:
        api_key = self._environ.get(API_KEY_VAR, "").strip()
        if not api_key:
            logger.error(f"Environment variable '{API_KEY_VAR}' is not set.")
            return Left(
                ConfigMissingError(
                    f"Environment variable '{API_KEY_VAR}' is not set.",
                    missing_key="youtube_api_key",
                )
            )

        save_directory = (
            self._environ.get(SAVE_DIRECTORY_VAR, "").strip()
            or (current.save_directory if current else "")
            or self._default_save_directory
        )
        logger.info("Configuration values read from the environment.")
        return Right(Config(api_key=api_key, save_directory=save_directory))
