import asyncio
from typing import TypeVar

import httpx
import structlog
from pydantic import TypeAdapter, ValidationError

from killingpart.common.events import AppEvent, EventBus
from killingpart.logger import LogLike
from killingpart.modules.auth.domain.entities import TokenExchangeResponse
from killingpart.modules.auth.usecases.ports.token_store import TokenStoring

from .errors import (
    APIClientError,
    DecodingFailed,
    InvalidResponse,
    MissingAccessToken,
    MissingRefreshToken,
    ServerError,
    Unauthorized,
)
from .redaction import masked_headers, response_message
from .request import APIRequest, HTTPMethod, endpoint

T = TypeVar('T')

TOKEN_EXCHANGE_PATH = '/jwt/exchange'
REFRESH_TOKEN_HEADER = 'X-Refresh-Token'


def _clean(token: str | None) -> str | None:
    if token is None:
        return None
    return token.strip() or None


def _is_success(response: httpx.Response) -> bool:
    return 200 <= response.status_code < 300


class APIClient:
    """Executes ``APIRequest`` descriptors against the backend.

    Authenticated requests carry ``Authorization: Bearer <token>``. A 401 on
    the first attempt triggers one refresh-token exchange and one retry; any
    failure past that point ends the session and raises ``Unauthorized``.
    """

    def __init__(
            self,
            http_client: httpx.AsyncClient,
            token_store: TokenStoring,
            events: EventBus,
            base_url: str,
            logger: LogLike | None = None,
    ):
        self._client = http_client
        self._token_store = token_store
        self._events = events
        self._base_url = base_url
        self._logger = logger or structlog.get_logger('http')
        self._refresh_lock = asyncio.Lock()

    async def request(self, request: APIRequest) -> None:
        response = await self._execute(request)
        self._ensure_success(response)

    async def request_json(self, request: APIRequest, response_type: type[T]) -> T:
        response = await self._execute(request)
        self._ensure_success(response)
        try:
            return TypeAdapter(response_type).validate_json(response.content)
        except ValidationError as e:
            raise DecodingFailed() from e

    async def request_with_response(self, request: APIRequest) -> httpx.Response:
        response = await self._execute(request)
        self._ensure_success(response)
        return response

    async def _execute(self, request: APIRequest) -> httpx.Response:
        response, used_token = await self._send_request(request)
        if response.status_code != httpx.codes.UNAUTHORIZED or not request.requires_auth:
            return response

        self._logger.info("token_refresh_start", path=request.path)
        try:
            await self._refresh_tokens(stale_access_token=used_token)
            response, _ = await self._send_request(request)
        except (APIClientError, httpx.HTTPError) as e:
            self._logger.warning("token_refresh_fail", path=request.path, error=repr(e))
            self._expire_session(only_if_active=True)
            raise Unauthorized() from e

        if response.status_code == httpx.codes.UNAUTHORIZED:
            self._logger.warning("token_refresh_rejected", path=request.path)
            self._expire_session(only_if_active=True)
            raise Unauthorized()

        return response

    async def _refresh_tokens(self, stale_access_token: str | None) -> None:
        async with self._refresh_lock:
            current = _clean(self._token_store.access_token)
            if current is not None and current != stale_access_token:
                self._logger.debug("token_refresh_skipped", reason="already_rotated")
                return

            refresh_token = _clean(self._token_store.refresh_token)
            if refresh_token is None:
                raise MissingRefreshToken()

            exchange = APIRequest(
                path=TOKEN_EXCHANGE_PATH,
                method=HTTPMethod.POST,
                headers={REFRESH_TOKEN_HEADER: refresh_token},
            )
            response, _ = await self._send_request(exchange)
            self._ensure_success(response)

            try:
                tokens = TokenExchangeResponse.model_validate_json(response.content)
            except ValidationError as e:
                raise DecodingFailed() from e

            self._token_store.save(tokens.access_token, tokens.refresh_token)
            self._logger.info("token_refresh_success")

    async def _send_request(self, request: APIRequest) -> tuple[httpx.Response, str | None]:
        http_request, access_token = self._build_request(request)
        response = await self._send(http_request)
        return response, access_token

    def _build_request(self, request: APIRequest) -> tuple[httpx.Request, str | None]:
        headers = dict(request.headers)
        headers.setdefault('Accept', 'application/json')
        if request.body is not None:
            headers.setdefault('Content-Type', 'application/json')

        access_token = None
        if request.requires_auth:
            access_token = _clean(self._token_store.access_token)
            if access_token is None:
                self._expire_session()
                raise MissingAccessToken()
            headers['Authorization'] = f'Bearer {access_token}'

        http_request = self._client.build_request(
            request.method.value,
            endpoint(request.base_url or self._base_url, request.path),
            params=list(request.query_params) or None,
            headers=headers,
            content=request.body,
        )
        return http_request, access_token

    async def _send(self, http_request: httpx.Request) -> httpx.Response:
        self._logger.debug(
            "http_request",
            method=http_request.method,
            url=str(http_request.url),
            headers=masked_headers(dict(http_request.headers)),
        )
        try:
            response = await self._client.send(http_request)
        except (httpx.DecodingError, httpx.RemoteProtocolError) as e:
            self._logger.error("http_request_fail", url=str(http_request.url), error=repr(e))
            raise InvalidResponse() from e
        except httpx.HTTPError as e:
            self._logger.error("http_request_fail", url=str(http_request.url), error=repr(e))
            raise

        self._logger.debug(
            "http_response",
            status=response.status_code,
            url=str(response.url),
            size=len(response.content),
        )
        return response

    def _ensure_success(self, response: httpx.Response) -> None:
        if not _is_success(response):
            raise ServerError(response.status_code, response_message(response.content))

    def _expire_session(self, only_if_active: bool = False) -> None:
        # a concurrent caller may already have ended this session
        if only_if_active and self._token_store.access_token is None and self._token_store.refresh_token is None:
            return
        self._token_store.clear()
        self._logger.warning("session_expired")
        self._events.emit(AppEvent.SESSION_EXPIRED)
