from dataclasses import dataclass

from killingpart.common.schema import CamelModel


@dataclass(frozen=True, slots=True)
class Session:
    access_token: str | None = None
    refresh_token: str | None = None

    def is_valid(self) -> bool:
        return bool(
            self.access_token and self.access_token.strip()
            and self.refresh_token and self.refresh_token.strip()
        )


class TokenPairResponse(CamelModel):
    access_token: str
    refresh_token: str
    is_new: bool = False


class TokenExchangeResponse(TokenPairResponse):
    pass


class KakaoSocialLoginResponse(TokenPairResponse):
    pass


class KakaoSocialLoginRequest(CamelModel):
    access_token: str
