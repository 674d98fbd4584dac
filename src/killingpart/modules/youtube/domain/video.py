import re
from dataclasses import dataclass
from urllib.parse import parse_qs, urlsplit

from pydantic import BaseModel, field_validator

_DURATION_RE = re.compile(r'^PT(?:(\d+)H)?(?:(\d+)M)?(?:(\d+(?:\.\d+)?)S)?$')


def parse_iso_duration(value: str) -> float | None:
    match = _DURATION_RE.match(value)
    if match is None:
        return None
    hours, minutes, seconds = (float(group) if group else 0.0 for group in match.groups())
    return hours * 3600 + minutes * 60 + seconds


def extract_video_id(value: str) -> str | None:
    """Video id from an ``/embed/<id>`` path or a ``?v=<id>`` query."""
    parts = urlsplit(value)
    path_components = [component for component in parts.path.split('/') if component]
    if 'embed' in path_components:
        index = path_components.index('embed')
        if index + 1 < len(path_components):
            return path_components[index + 1]

    video_ids = parse_qs(parts.query).get('v')
    if video_ids and video_ids[0]:
        return video_ids[0]
    return None


class YoutubeVideo(BaseModel):
    title: str
    duration: float
    url: str

    @field_validator('duration', mode='before')
    @classmethod
    def _parse_duration(cls, value):
        if isinstance(value, str):
            parsed = parse_iso_duration(value)
            if parsed is None:
                raise ValueError(f'Unsupported duration format: {value}')
            return parsed
        return value

    @property
    def id(self) -> str:
        return extract_video_id(self.url) or self.url

    @property
    def _fallback_video_id(self) -> str | None:
        return None if 'http' in self.id else self.id

    @property
    def thumbnail_url(self) -> str | None:
        video_id = extract_video_id(self.url) or self._fallback_video_id
        if video_id is None:
            return None
        return f'https://i.ytimg.com/vi/{video_id}/hqdefault.jpg'

    @property
    def embed_url(self) -> str | None:
        if urlsplit(self.url).scheme:
            return self.url
        video_id = extract_video_id(self.id) or self._fallback_video_id
        if video_id is None:
            return None
        return f'https://www.youtube.com/embed/{video_id}?playsinline=1'


class YoutubeSearchRequest(BaseModel):
    title: str
    artist: str


@dataclass(frozen=True, slots=True)
class YoutubeSearchQuery:
    id: str
    artist: str
    title: str

    def query_params(self) -> tuple[tuple[str, str], ...]:
        return (('id', self.id), ('artist', self.artist), ('title', self.title))
