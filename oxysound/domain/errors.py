# oxysound/domain/errors.py
from dataclasses import dataclass


@dataclass(frozen=True)
class AppError:
    """Base class for application errors."""
    message: str


@dataclass(frozen=True)
class ConfigMissingError(AppError):
    """The configuration file is absent or lacks a required value."""
    config_path: str = ""
    missing_key: str = ""


@dataclass(frozen=True)
class ConfigInvalidError(AppError):
    """The configuration file exists but cannot be parsed."""
    config_path: str = ""


@dataclass(frozen=True)
class AuthenticationError(AppError):
    """The YouTube API rejected (or was never given) an API key."""
    pass


@dataclass(frozen=True)
class YouTubeApiError(AppError):
    """Error while talking to the YouTube Data API."""
    pass


@dataclass(frozen=True)
class NotFoundError(AppError):
    """A playlist file or a video identifier could not be found."""
    pass


@dataclass(frozen=True)
class EmptyInputError(AppError):
    """An operation that needs at least one video ID received none."""
    pass


@dataclass(frozen=True)
class InvalidNameError(AppError):
    """A playlist name cannot be used as a file name."""
    pass


@dataclass(frozen=True)
class StorageError(AppError):
    """Reading or writing a file in the save directory failed."""
    pass
