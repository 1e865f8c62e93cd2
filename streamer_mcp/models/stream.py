"""Stream status value objects"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

CHANNEL_BASE_URL = "https://www.twitch.tv"
THUMBNAIL_WIDTH = 640
THUMBNAIL_HEIGHT = 360


@dataclass
class StreamStatus:
    """Live/offline state of one channel, recomputed on every query"""
    name: str
    is_live: bool
    user_name: Optional[str] = None
    user_login: Optional[str] = None
    game_name: Optional[str] = None
    title: Optional[str] = None
    viewer_count: Optional[int] = None
    thumbnail_url: Optional[str] = None
    started_at: Optional[str] = None

    @classmethod
    def offline(cls, name: str) -> 'StreamStatus':
        return cls(name=name, is_live=False)

    @classmethod
    def from_helix(cls, name: str, stream: Dict[str, Any]) -> 'StreamStatus':
        """Build a live status from one element of the Helix ``data`` array"""
        viewer_count = stream.get('viewer_count')
        try:
            viewer_count = int(viewer_count) if viewer_count is not None else None
        except (TypeError, ValueError):
            viewer_count = None

        return cls(
            name=name,
            is_live=True,
            user_name=stream.get('user_name') or name,
            user_login=stream.get('user_login') or name.lower(),
            game_name=stream.get('game_name'),
            title=stream.get('title'),
            viewer_count=viewer_count,
            thumbnail_url=stream.get('thumbnail_url'),
            started_at=stream.get('started_at')
        )

    @property
    def url(self) -> str:
        login = self.user_login or self.name.lower()
        return f"{CHANNEL_BASE_URL}/{login}"

    def thumbnail(self, width: int = THUMBNAIL_WIDTH, height: int = THUMBNAIL_HEIGHT) -> Optional[str]:
        """Thumbnail URL with the ``{width}``/``{height}`` placeholders filled in"""
        if not self.thumbnail_url:
            return None
        return (self.thumbnail_url
                .replace('{width}', str(width))
                .replace('{height}', str(height)))


@dataclass
class StreamLookup:
    """Per-channel outcome of a bulk status check"""
    name: str
    status: Optional[StreamStatus] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is not None and self.error is None

    @property
    def is_live(self) -> bool:
        return self.ok and self.status.is_live
