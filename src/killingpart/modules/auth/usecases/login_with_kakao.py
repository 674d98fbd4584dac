from killingpart.modules.auth.domain.entities import KakaoSocialLoginResponse
from killingpart.modules.auth.domain.errors import MissingKakaoAccessToken
from killingpart.modules.auth.usecases.ports.auth import AuthGateway, KakaoTokenProvider


async def login_with_kakao(kakao: KakaoTokenProvider, auth: AuthGateway) -> KakaoSocialLoginResponse:
    kakao_access_token = await kakao.login()
    if not kakao_access_token:
        raise MissingKakaoAccessToken()
    return await auth.login_with_kakao(kakao_access_token)
