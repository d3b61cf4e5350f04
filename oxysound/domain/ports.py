from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional

from pymonad.either import Either

from .errors import AppError
from .models import Config, Playlist


class ConfigSource(ABC):
    """
    Port defining where first-run configuration values come from.
    """

    @abstractmethod
    def request_config(self, current: Optional[Config] = None) -> Either[AppError, Config]:
        """
        Collects an API key and a save directory.

        Args:
            current: Values already on disk, offered as defaults.

        Returns:
            Either: A Right(Config) or a Left(AppError).
        """
        pass


class PlaylistRepository(ABC):
    """
    Port defining the contract for playlist persistence.
    """

    @abstractmethod
    def save(self, playlist: Playlist) -> Either[AppError, Path]:
        pass

    @abstractmethod
    def load(self, name: str) -> Either[AppError, Playlist]:
        pass

    @abstractmethod
    def list(self) -> Either[AppError, List[str]]:
        pass

    @abstractmethod
    def exists(self, name: str) -> bool:
        pass
