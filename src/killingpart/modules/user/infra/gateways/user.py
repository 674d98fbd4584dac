from typing import override

import httpx

from killingpart.common.http import APIClientError, APIRequest, HTTPMethod
from killingpart.common.http.client import APIClient

from ...domain.errors import UserServiceError
from ...domain.user import UserModel, UserStatics
from ...usecases.ports.user_gateway import UserGateway


class ApiUserGateway(UserGateway):
    def __init__(self, client: APIClient):
        self._client = client

    @override
    async def fetch_my_user(self) -> UserModel:
        request = APIRequest(path='/users/my', method=HTTPMethod.GET, requires_auth=True)
        try:
            return await self._client.request_json(request, UserModel)
        except (APIClientError, httpx.HTTPError) as e:
            raise UserServiceError.from_exception(e) from e

    @override
    async def fetch_user_statics(self, user_id: int) -> UserStatics:
        request = APIRequest(path=f'/users/{user_id}/statics', method=HTTPMethod.GET, requires_auth=True)
        try:
            return await self._client.request_json(request, UserStatics)
        except (APIClientError, httpx.HTTPError) as e:
            raise UserServiceError.from_exception(e) from e
