from typing import override

import httpx
import structlog
from pydantic import ValidationError

from killingpart.common.errors import ServiceErrorCode
from killingpart.common.http.redaction import masked_headers, response_message
from killingpart.common.settings import SpotifySettings
from killingpart.logger import LogLike

from ...domain.errors import SpotifyServiceError
from ...domain.track import SpotifySearchResponse, SpotifySimpleTrack, SpotifyTokenResponse
from ...usecases.ports.spotify_gateway import SpotifyGateway
from ..token_cache import SpotifyTokenCache

_ERROR_MESSAGE_PATHS = (("error", "message"), ("error_description",))


class HttpxSpotifyGateway(SpotifyGateway):
    def __init__(
            self,
            client: httpx.AsyncClient,
            token_cache: SpotifyTokenCache,
            settings: SpotifySettings,
            logger: LogLike | None = None,
    ):
        self._client = client
        self._token_cache = token_cache
        self._settings = settings
        self._logger = logger or structlog.get_logger('spotify')

    @override
    async def search_tracks(self, query: str, limit: int = 5, offset: int = 0) -> list[SpotifySimpleTrack]:
        trimmed_query = query.strip()
        if not trimmed_query:
            return []
        safe_offset = max(offset, 0)

        token = await self._access_token()
        try:
            return await self._search(trimmed_query, limit, safe_offset, token)
        except SpotifyServiceError as e:
            if e.code is not ServiceErrorCode.UNAUTHORIZED:
                raise

        self._logger.info("spotify_token_retry")
        refreshed_token = await self._access_token(stale_token=token)
        return await self._search(trimmed_query, limit, safe_offset, refreshed_token)

    async def _search(self, query: str, limit: int, offset: int, bearer_token: str) -> list[SpotifySimpleTrack]:
        response = await self._send(
            'GET',
            f"{self._settings.api_url.rstrip('/')}/search",
            params={
                'q': query,
                'type': 'track',
                'market': self._settings.market,
                'limit': str(limit),
                'offset': str(offset),
            },
            headers={
                'Authorization': f'Bearer {bearer_token}',
                'Accept-Language': self._settings.accept_language,
                'Accept': 'application/json',
            },
        )

        if response.is_success:
            try:
                decoded = SpotifySearchResponse.model_validate_json(response.content)
            except ValidationError as e:
                raise SpotifyServiceError(ServiceErrorCode.DECODING_FAILED) from e
            return [item.to_simple_track() for item in decoded.tracks.items]

        if response.status_code == httpx.codes.UNAUTHORIZED:
            self._token_cache.invalidate(bearer_token)
            raise SpotifyServiceError(ServiceErrorCode.UNAUTHORIZED)

        raise self._server_error(response)

    async def _access_token(self, stale_token: str | None = None) -> str:
        return await self._token_cache.get_or_fetch(self._fetch_token, stale_token=stale_token)

    async def _fetch_token(self) -> tuple[str, int]:
        authorization = self._settings.authorization_header()
        if authorization is None:
            raise SpotifyServiceError(ServiceErrorCode.MISSING_BASIC_AUTH)

        response = await self._send(
            'POST',
            self._settings.accounts_url,
            data={'grant_type': 'client_credentials'},
            headers={
                'Authorization': authorization,
                'Accept': 'application/json',
            },
        )

        if response.is_success:
            try:
                decoded = SpotifyTokenResponse.model_validate_json(response.content)
            except ValidationError as e:
                raise SpotifyServiceError(ServiceErrorCode.DECODING_FAILED) from e
            self._logger.info("spotify_token_fetched", expires_in=decoded.expires_in)
            return decoded.access_token, decoded.expires_in

        if response.status_code == httpx.codes.UNAUTHORIZED:
            self._token_cache.clear()
            raise SpotifyServiceError(ServiceErrorCode.UNAUTHORIZED)

        raise self._server_error(response)

    async def _send(self, method: str, url: str, **kwargs) -> httpx.Response:
        self._logger.debug(
            "spotify_request",
            method=method,
            url=url,
            headers=masked_headers(kwargs.get('headers') or {}),
        )
        try:
            return await self._client.request(method, url, **kwargs)
        except (httpx.DecodingError, httpx.RemoteProtocolError) as e:
            raise SpotifyServiceError(ServiceErrorCode.INVALID_RESPONSE) from e
        except httpx.HTTPError as e:
            self._logger.error("spotify_request_fail", url=url, error=repr(e))
            raise SpotifyServiceError(ServiceErrorCode.NETWORK_FAILURE) from e

    @staticmethod
    def _server_error(response: httpx.Response) -> SpotifyServiceError:
        return SpotifyServiceError(
            ServiceErrorCode.SERVER_ERROR,
            status_code=response.status_code,
            detail=response_message(response.content, _ERROR_MESSAGE_PATHS),
        )
