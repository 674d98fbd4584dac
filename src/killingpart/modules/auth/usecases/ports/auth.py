from typing import Protocol

from killingpart.modules.auth.domain.entities import KakaoSocialLoginResponse


class AuthGateway(Protocol):

    async def login_with_kakao(self, access_token: str) -> KakaoSocialLoginResponse: ...

    async def logout(self) -> None: ...

    async def delete_my_account(self) -> None: ...


class KakaoTokenProvider(Protocol):
    """Native Kakao SDK login; yields the provider access token."""

    async def login(self) -> str: ...
