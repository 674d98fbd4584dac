from typing import override

import httpx

from killingpart.common.errors import ServiceErrorCode
from killingpart.common.http import APIClientError, APIRequest, HTTPMethod
from killingpart.common.http.client import APIClient
from killingpart.common.http.request import json_body

from ...domain.errors import YoutubeServiceError
from ...domain.video import YoutubeSearchQuery, YoutubeSearchRequest, YoutubeVideo
from ...usecases.ports.youtube_gateway import YoutubeGateway


class ApiYoutubeGateway(YoutubeGateway):
    def __init__(self, client: APIClient, music_base_url: str):
        self._client = client
        self._music_base_url = music_base_url

    @override
    async def search_videos(self, title: str, artist: str) -> list[YoutubeVideo]:
        trimmed_title = title.strip()
        if not trimmed_title:
            return []

        try:
            body = json_body(YoutubeSearchRequest(title=trimmed_title, artist=artist.strip()))
        except ValueError as e:
            raise YoutubeServiceError(ServiceErrorCode.REQUEST_ENCODING_FAILED) from e

        # the music base url already ends with /api
        request = APIRequest(
            path='/youtube/search',
            method=HTTPMethod.POST,
            requires_auth=True,
            body=body,
            base_url=self._music_base_url,
        )
        return await self._search(request)

    @override
    async def search_videos_by_query(self, query: YoutubeSearchQuery) -> list[YoutubeVideo]:
        request = APIRequest(
            path='/youtube',
            method=HTTPMethod.GET,
            query_params=query.query_params(),
            requires_auth=True,
            base_url=self._music_base_url,
        )
        return await self._search(request)

    async def _search(self, request: APIRequest) -> list[YoutubeVideo]:
        try:
            return await self._client.request_json(request, list[YoutubeVideo])
        except (APIClientError, httpx.HTTPError) as e:
            raise YoutubeServiceError.from_exception(e) from e
