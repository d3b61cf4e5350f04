import logging
import re
from typing import Iterable, List
from urllib.parse import parse_qs, urlparse

from pymonad.either import Either, Left, Right

from .domain.errors import EmptyInputError

logger = logging.getLogger(__name__)

PLAYLIST_BASE_URL = "http://www.youtube.com/watch_videos?video_ids="
VIDEO_BASE_URL = "https://www.youtube.com/watch?v="


def video_url(video_id: str) -> str:
    return f"{VIDEO_BASE_URL}{video_id}"


def split_ids(tokens: Iterable[str]) -> List[str]:
    """
    Normalises raw command line tokens into a list of video IDs.

    Each token may hold several IDs separated by commas or whitespace,
    blank pieces are dropped. Order is kept and duplicates are not removed.
    """
    ids = []
    for token in tokens or []:
        ids.extend(piece for piece in re.split(r"[,\s]+", token) if piece)
    return ids


def compose_playlist_url(ids: Iterable[str]) -> Either[EmptyInputError, str]:
    """
    Builds the anonymous playlist URL for the given video IDs.

    Args:
        ids: Video IDs in playback order.

    Returns:
        Either: A Right(url) or a Left(EmptyInputError) when no ID is given.
    """
    ids = list(ids)
    if not ids:
        logger.error("Cannot compose a playlist URL without video IDs.")
        return Left(EmptyInputError("At least one video ID is required."))

    return Right(PLAYLIST_BASE_URL + ",".join(ids))


def parse_playlist_url(url: str) -> List[str]:
    """Returns the video IDs encoded in a watch_videos URL, in order."""
    values = parse_qs(urlparse(url).query).get("video_ids", [])
    return [video_id for value in values for video_id in value.split(",") if video_id]
