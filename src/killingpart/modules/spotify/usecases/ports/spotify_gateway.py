from typing import Protocol

from ...domain.track import SpotifySimpleTrack


class SpotifyGateway(Protocol):
    async def search_tracks(self, query: str, limit: int = 5, offset: int = 0) -> list[SpotifySimpleTrack]: ...
