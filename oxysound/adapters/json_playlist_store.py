import json
import logging
from dataclasses import replace
from pathlib import Path
from typing import List, Union

from pymonad.either import Either, Left, Right

from ..domain.errors import AppError, InvalidNameError, NotFoundError, StorageError
from ..domain.models import Playlist
from ..domain.ports import PlaylistRepository

logger = logging.getLogger(__name__)

PLAYLIST_SUFFIX = ".json"


class JsonPlaylistStore(PlaylistRepository):
    """
    Stores each playlist as `<save_directory>/<title>.json`.
    """

    def __init__(self, save_directory: Union[str, Path]):
        self._directory = Path(save_directory)

    @property
    def directory(self) -> Path:
        return self._directory

    def path_for(self, name: str) -> Either[AppError, Path]:
        if not name or not name.strip():
            return Left(InvalidNameError("Playlist name must not be empty."))
        if "/" in name or "\\" in name or name.startswith("."):
            return Left(
                InvalidNameError(f"'{name}' cannot be used as a playlist name.")
            )
        return Right(self._directory / f"{name}{PLAYLIST_SUFFIX}")

    def exists(self, name: str) -> bool:
        path = self.path_for(name)
        return path.is_right() and path.value.is_file()

    def save(self, playlist: Playlist) -> Either[AppError, Path]:
        """
        Writes the playlist to disk, replacing any file with the same name.

        Returns:
            Either: A Right(path) or a Left(AppError).
        """
        def write(path: Path) -> Either[AppError, Path]:
            if path.exists():
                logger.info(f"Overwriting existing playlist file '{path}'.")
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_text(
                    json.dumps(playlist.to_dict(), indent=2, ensure_ascii=False),
                    encoding="utf-8",
                )
            except OSError as e:
                logger.error(f"Could not save playlist '{playlist.title}': {e}")
                return Left(StorageError(f"Could not save playlist '{playlist.title}': {e}"))
            logger.info(f"Playlist '{playlist.title}' saved to '{path}'.")
            return Right(path)

        return self.path_for(playlist.title).bind(write)

    def load(self, name: str) -> Either[AppError, Playlist]:
        """
        Reads a playlist by name. A missing file is a NotFoundError and
        nothing is created on disk. The file name wins over any title stored
        inside it, so a later save writes back to the same file.
        """
        def read(path: Path) -> Either[AppError, Playlist]:
            if not path.is_file():
                logger.info(f"Playlist file '{path}' does not exist.")
                return Left(NotFoundError(f"Playlist '{name}' not found in '{self._directory}'."))
            try:
                data = json.loads(path.read_text(encoding="utf-8"))
                playlist = replace(Playlist.from_dict(data), title=name)
            except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
                logger.error(f"Could not read playlist file '{path}': {e}")
                return Left(StorageError(f"Playlist file '{path}' is unreadable: {e}"))
            logger.info(f"Playlist '{name}' loaded from '{path}'.")
            return Right(playlist)

        return self.path_for(name).bind(read)

    def list(self) -> Either[AppError, List[str]]:
        if not self._directory.is_dir():
            return Right([])
        try:
            names = sorted(
                path.stem
                for path in self._directory.glob(f"*{PLAYLIST_SUFFIX}")
                if path.is_file()
            )
        except OSError as e:
            logger.error(f"Could not list playlists in '{self._directory}': {e}")
            return Left(StorageError(f"Could not list playlists in '{self._directory}': {e}"))
        return Right(names)
