from dataclasses import dataclass
from enum import Enum

from killingpart.common.schema import CamelModel
from killingpart.common.time_format import minute_second_text, parse_seconds, seconds_string


class DiaryScope(Enum):
    PUBLIC = 'PUBLIC'
    PRIVATE = 'PRIVATE'
    KILLING_PART = 'KILLING_PART'

    @property
    def display_name(self) -> str:
        match self:
            case DiaryScope.PRIVATE:
                return "전체 비공개"
            case DiaryScope.KILLING_PART:
                return "킬링파트만 공개"
            case DiaryScope.PUBLIC:
                return "전체 공개"


class DiaryFeed(CamelModel):
    diary_id: int
    artist: str
    music_title: str
    album_image_url: str
    content: str
    video_url: str
    scope: DiaryScope
    duration: str
    total_duration: str
    start: str
    end: str
    create_date: str
    update_date: str
    is_liked: bool
    is_stored: bool
    like_count: int
    user_id: int
    username: str | None = None
    tag: str | None = None
    profile_image_url: str | None = None

    @property
    def id(self) -> int:
        return self.diary_id

    @property
    def resolved_album_image_url(self) -> str | None:
        """Album art URL with a scheme; scheme-less values are assumed https."""
        trimmed = self.album_image_url.strip()
        if not trimmed:
            return None
        if '://' in trimmed:
            return trimmed
        if trimmed.startswith('//'):
            return f'https:{trimmed}'
        return f'https://{trimmed}'

    @property
    def start_seconds(self) -> float:
        return parse_seconds(self.start) or 0.0

    @property
    def end_seconds(self) -> float:
        parsed_end = parse_seconds(self.end)
        if parsed_end is None:
            parsed_end = self.start_seconds
        return max(parsed_end, self.start_seconds + 0.1)

    @property
    def total_seconds(self) -> float:
        return max(parse_seconds(self.total_duration) or 0.0, self.end_seconds, 1.0)

    def clip_range_text(self) -> str:
        return f"{minute_second_text(self.start_seconds)} - {minute_second_text(self.end_seconds)}"


class DiaryFeedPage(CamelModel):
    size: int
    number: int
    total_elements: int
    total_pages: int


class MyDiaryFeeds(CamelModel):
    content: list[DiaryFeed]
    page: DiaryFeedPage

    def has_next(self) -> bool:
        return self.page.number + 1 < self.page.total_pages


class DiaryCreateRequest(CamelModel):
    artist: str
    music_title: str
    album_image_url: str
    video_url: str
    scope: DiaryScope
    content: str
    duration: str
    total_duration: str
    start: str
    end: str

    @classmethod
    def from_clip(
            cls,
            *,
            artist: str,
            music_title: str,
            album_image_url: str,
            video_url: str,
            scope: DiaryScope,
            content: str,
            start_seconds: float,
            end_seconds: float,
            total_seconds: float,
    ) -> 'DiaryCreateRequest':
        return cls(
            artist=artist,
            music_title=music_title,
            album_image_url=album_image_url,
            video_url=video_url,
            scope=scope,
            content=content,
            duration=seconds_string(end_seconds - start_seconds),
            total_duration=seconds_string(total_seconds),
            start=seconds_string(start_seconds),
            end=seconds_string(end_seconds),
        )


class DiaryUpdateRequest(CamelModel):
    artist: str | None = None
    music_title: str | None = None
    album_image_url: str | None = None
    video_url: str | None = None
    scope: DiaryScope | None = None
    content: str | None = None
    duration: str | None = None
    total_duration: str | None = None
    start: str | None = None
    end: str | None = None


@dataclass(frozen=True, slots=True)
class DiaryCreateResult:
    diary_id: int | None
    location: str | None

    @classmethod
    def from_location(cls, location: str | None) -> 'DiaryCreateResult':
        return cls(diary_id=extract_diary_id(location), location=location)


def extract_diary_id(location: str | None) -> int | None:
    if location is None:
        return None
    trimmed = location.strip().strip('/')
    if not trimmed:
        return None
    last_component = trimmed.split('/')[-1]
    try:
        return int(last_component)
    except ValueError:
        return None
