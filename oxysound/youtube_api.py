import json
import logging
from typing import Any, Dict, Iterable, List, Set

from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from pymonad.either import Either, Left, Right

from .domain.errors import AppError, AuthenticationError, YouTubeApiError
from .domain.models import FetchResult, Video

logger = logging.getLogger(__name__)

# videos.list accepts at most 50 IDs per request
MAX_IDS_PER_REQUEST = 50

# error reasons that mean the key itself was refused
KEY_ERROR_REASONS = frozenset(
    {"keyInvalid", "keyExpired", "ipRefererBlocked", "API_KEY_INVALID", "API_KEY_EXPIRED"}
)


def build_service(api_key: str):
    """Builds a YouTube Data API v3 client authenticated by API key."""
    logger.info("Building YouTube service with API key.")
    return build("youtube", "v3", developerKey=api_key, cache_discovery=False)


def _chunks(ids: List[str], size: int) -> Iterable[List[str]]:
    for start in range(0, len(ids), size):
        yield ids[start:start + size]


def _video_from_item(item: Dict[str, Any]) -> Video:
    snippet = item.get("snippet", {})
    return Video(
        id=item["id"],
        title=snippet.get("title", ""),
        published_at=snippet.get("publishedAt", ""),
        channel=snippet.get("channelTitle", ""),
        fetched=True,
    )


def _error_reasons(content: str) -> Set[str]:
    """Collects `error.errors[].reason` and `error.details[].reason` from an API error body."""
    try:
        error = json.loads(content).get("error", {})
    except (ValueError, AttributeError):
        return set()
    if not isinstance(error, dict):
        return set()
    entries = list(error.get("errors") or []) + list(error.get("details") or [])
    return {
        entry["reason"] for entry in entries
        if isinstance(entry, dict) and isinstance(entry.get("reason"), str)
    }


def _error_from_http(e: HttpError) -> AppError:
    content = e.content.decode("utf-8") if isinstance(e.content, bytes) else str(e.content)
    reasons = _error_reasons(content)
    if reasons & KEY_ERROR_REASONS or (
        not reasons and getattr(e.resp, "status", None) == 400 and "API key not valid" in content
    ):
        return AuthenticationError(f"YouTube API rejected the API key: {content}")
    return YouTubeApiError(f"API error while fetching video metadata: {content}")


def fetch_metadata(ids: Iterable[str], api_key: str, service=None) -> Either[AppError, FetchResult]:
    """
    Resolves video metadata through the YouTube Data API.

    Args:
        ids: Video IDs to look up. Duplicates are requested once.
        api_key: YouTube Data API key.
        service: Prebuilt API client, built from the key when omitted.

    Returns:
        Either: A Right(FetchResult) holding the resolved videos and the IDs
        the API did not return, or a Left(AuthenticationError) /
        Left(YouTubeApiError) when the request itself fails.
    """
    ids = list(dict.fromkeys(ids))
    if not api_key or not api_key.strip():
        logger.error("No API key configured, cannot fetch metadata.")
        return Left(AuthenticationError("A YouTube API key is required to fetch metadata."))
    if not ids:
        return Right(FetchResult())

    try:
        youtube = service or build_service(api_key)
        videos: Dict[str, Video] = {}
        for batch in _chunks(ids, MAX_IDS_PER_REQUEST):
            logger.info(f"Requesting metadata for {len(batch)} video(s).")
            response = youtube.videos().list(
                part="snippet",
                id=",".join(batch),
                maxResults=MAX_IDS_PER_REQUEST,
            ).execute()
            for item in response.get("items", []):
                video = _video_from_item(item)
                videos[video.id] = video

    except HttpError as e:
        error = _error_from_http(e)
        logger.error(f"Failed to fetch metadata: {error.message}")
        return Left(error)
    except Exception as e:
        logger.error(f"An unexpected error occurred while fetching metadata: {e}")
        return Left(YouTubeApiError(f"An unexpected error occurred while fetching metadata: {e}"))

    missing = tuple(video_id for video_id in ids if video_id not in videos)
    for video_id in missing:
        logger.info(f"Video '{video_id}' not found.")
    logger.info(f"Fetched metadata for {len(videos)} of {len(ids)} video(s).")
    return Right(FetchResult(videos=videos, missing=missing))
