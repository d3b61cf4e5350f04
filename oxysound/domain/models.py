from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, Mapping, Tuple

from ..urls import PLAYLIST_BASE_URL, video_url


@dataclass(frozen=True)
class Video:
    """A single YouTube video, optionally enriched with API metadata."""
    id: str
    title: str = ""
    published_at: str = ""
    channel: str = ""
    fetched: bool = False

    @property
    def url(self) -> str:
        return video_url(self.id)

    @property
    def published_date(self) -> str:
        return self.published_at.split("T")[0] if self.published_at else "unknown date"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "publishedAt": self.published_at,
            "channel": self.channel,
            "url": self.url,
            "fetched": self.fetched,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Video":
        return cls(
            id=data["id"],
            title=data.get("title") or "",
            published_at=data.get("publishedAt") or "",
            channel=data.get("channel") or "",
            fetched=bool(data.get("fetched", False)),
        )


@dataclass(frozen=True)
class Playlist:
    """
    A named, ordered list of videos.

    Playlists are immutable: every operation returns a new instance. The item
    count and the playlist URL are always derived from the videos.
    """
    title: str = "untitled"
    videos: Tuple[Video, ...] = field(default_factory=tuple)

    @property
    def ids(self) -> Tuple[str, ...]:
        return tuple(video.id for video in self.videos)

    @property
    def num_items(self) -> int:
        return len(self.videos)

    @property
    def url(self) -> str:
        return PLAYLIST_BASE_URL + ",".join(self.ids)

    @property
    def unfetched_ids(self) -> Tuple[str, ...]:
        return tuple(video.id for video in self.videos if not video.fetched)

    def add_videos(self, ids: Iterable[str]) -> "Playlist":
        """Appends the IDs not already in the playlist, keeping their order."""
        known = set(self.ids)
        new_videos = []
        for video_id in ids:
            if video_id not in known:
                known.add(video_id)
                new_videos.append(Video(id=video_id))
        return replace(self, videos=self.videos + tuple(new_videos))

    def remove_videos(self, ids: Iterable[str]) -> "Playlist":
        """Drops every video whose ID is given. Unknown IDs are ignored."""
        to_remove = set(ids)
        return replace(
            self, videos=tuple(v for v in self.videos if v.id not in to_remove)
        )

    def with_metadata(self, fetched: Mapping[str, Video]) -> "Playlist":
        """Replaces videos by their fetched counterpart, in place."""
        return replace(
            self, videos=tuple(fetched.get(v.id, v) for v in self.videos)
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "numItems": self.num_items,
            "videos": [video.to_dict() for video in self.videos],
            "url": self.url,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Playlist":
        return cls(
            title=data.get("title") or "untitled",
            videos=tuple(Video.from_dict(v) for v in data.get("videos", [])),
        )


@dataclass(frozen=True)
class Config:
    """User configuration, loaded once per process and passed explicitly."""
    api_key: str
    save_directory: str


@dataclass(frozen=True)
class FetchResult:
    """Outcome of a metadata request: resolved videos and unknown IDs."""
    videos: Dict[str, Video] = field(default_factory=dict)
    missing: Tuple[str, ...] = ()
