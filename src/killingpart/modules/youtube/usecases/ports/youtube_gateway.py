from typing import Protocol

from ...domain.video import YoutubeSearchQuery, YoutubeVideo


class YoutubeGateway(Protocol):
    async def search_videos(self, title: str, artist: str) -> list[YoutubeVideo]: ...

    async def search_videos_by_query(self, query: YoutubeSearchQuery) -> list[YoutubeVideo]: ...
