from typing import override

import httpx

from killingpart.common.errors import ServiceErrorCode
from killingpart.common.events import AppEvent, EventBus
from killingpart.common.http import APIClientError, APIRequest, HTTPMethod
from killingpart.common.http.client import APIClient
from killingpart.common.http.request import json_body

from ...domain.diary import (
    DiaryCreateRequest,
    DiaryCreateResult,
    DiaryUpdateRequest,
    MyDiaryFeeds,
)
from ...domain.errors import DiaryServiceError
from ...usecases.ports.diary_gateway import DiaryGateway

DEFAULT_PAGE = 0
DEFAULT_SIZE = 5


class ApiDiaryGateway(DiaryGateway):
    def __init__(self, client: APIClient, events: EventBus):
        self._client = client
        self._events = events

    @override
    async def fetch_my_feeds(self, page: int = DEFAULT_PAGE, size: int = DEFAULT_SIZE) -> MyDiaryFeeds:
        resolved_page = max(page, DEFAULT_PAGE)
        resolved_size = size if size > 0 else DEFAULT_SIZE

        request = APIRequest(
            path='/diaries/my',
            method=HTTPMethod.GET,
            query_params=(('page', str(resolved_page)), ('size', str(resolved_size))),
            requires_auth=True,
        )
        try:
            return await self._client.request_json(request, MyDiaryFeeds)
        except (APIClientError, httpx.HTTPError) as e:
            raise DiaryServiceError.from_exception(e) from e

    @override
    async def create_diary(self, request: DiaryCreateRequest) -> DiaryCreateResult:
        api_request = APIRequest(
            path='/diaries',
            method=HTTPMethod.POST,
            requires_auth=True,
            body=self._encode(request),
        )
        try:
            response = await self._client.request_with_response(api_request)
        except (APIClientError, httpx.HTTPError) as e:
            raise DiaryServiceError.from_exception(e) from e

        self._events.emit(AppEvent.DIARY_CHANGED)
        return DiaryCreateResult.from_location(response.headers.get('Location'))

    @override
    async def update_diary(self, diary_id: int, request: DiaryUpdateRequest) -> None:
        api_request = APIRequest(
            path=f'/diaries/{diary_id}',
            method=HTTPMethod.PUT,
            requires_auth=True,
            body=self._encode(request, exclude_none=True),
        )
        try:
            await self._client.request(api_request)
        except (APIClientError, httpx.HTTPError) as e:
            raise DiaryServiceError.from_exception(e) from e

        self._events.emit(AppEvent.DIARY_CHANGED)

    @override
    async def delete_diary(self, diary_id: int) -> None:
        request = APIRequest(
            path=f'/diaries/{diary_id}',
            method=HTTPMethod.DELETE,
            requires_auth=True,
        )
        try:
            await self._client.request(request)
        except (APIClientError, httpx.HTTPError) as e:
            raise DiaryServiceError.from_exception(e) from e

        self._events.emit(AppEvent.DIARY_CHANGED)

    @staticmethod
    def _encode(request: DiaryCreateRequest | DiaryUpdateRequest, exclude_none: bool = False) -> bytes:
        try:
            return json_body(request, exclude_none=exclude_none)
        except ValueError as e:
            raise DiaryServiceError(ServiceErrorCode.REQUEST_ENCODING_FAILED) from e
