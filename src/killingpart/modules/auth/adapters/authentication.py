from typing import override

import httpx
import structlog

from killingpart.common.errors import ServiceErrorCode
from killingpart.common.http import APIClientError, APIRequest, HTTPMethod
from killingpart.common.http.client import APIClient
from killingpart.common.http.request import json_body
from killingpart.logger import LogLike
from killingpart.modules.auth.domain.entities import KakaoSocialLoginRequest, KakaoSocialLoginResponse
from killingpart.modules.auth.domain.errors import AuthenticationServiceError
from killingpart.modules.auth.usecases.ports.auth import AuthGateway
from killingpart.modules.auth.usecases.ports.token_store import TokenStoring


class ApiAuthGateway(AuthGateway):
    def __init__(self, client: APIClient, token_store: TokenStoring, logger: LogLike | None = None):
        self._client = client
        self._token_store = token_store
        self._logger = logger or structlog.get_logger('auth')

    @override
    async def login_with_kakao(self, access_token: str) -> KakaoSocialLoginResponse:
        trimmed_token = access_token.strip()
        if not trimmed_token:
            raise AuthenticationServiceError(ServiceErrorCode.INVALID_KAKAO_ACCESS_TOKEN)

        try:
            body = json_body(KakaoSocialLoginRequest(access_token=trimmed_token))
        except ValueError as e:
            raise AuthenticationServiceError(ServiceErrorCode.REQUEST_ENCODING_FAILED) from e

        request = APIRequest(path='/oauth2/kakao', method=HTTPMethod.POST, body=body)
        try:
            response = await self._client.request_json(request, KakaoSocialLoginResponse)
        except (APIClientError, httpx.HTTPError) as e:
            raise self._map_error(e) from e

        self._token_store.save(response.access_token, response.refresh_token)
        self._logger.info("kakao_login_success", is_new=response.is_new)
        return response

    @override
    async def logout(self) -> None:
        request = APIRequest(path='/users/logout', method=HTTPMethod.POST, requires_auth=True)
        try:
            await self._client.request(request)
        except (APIClientError, httpx.HTTPError) as e:
            raise self._map_error(e) from e
        self._token_store.clear()

    @override
    async def delete_my_account(self) -> None:
        request = APIRequest(path='/users/my', method=HTTPMethod.DELETE, requires_auth=True)
        try:
            await self._client.request(request)
        except (APIClientError, httpx.HTTPError) as e:
            raise self._map_error(e) from e
        self._token_store.clear()

    def _map_error(self, error: Exception) -> AuthenticationServiceError:
        mapped = AuthenticationServiceError.from_exception(error)
        if mapped.code is ServiceErrorCode.SERVER_ERROR:
            self._logger.warning(
                "auth_request_failed",
                status=mapped.status_code,
                message=mapped.detail,
            )
        return mapped
