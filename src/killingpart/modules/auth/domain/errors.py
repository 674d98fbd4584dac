from killingpart.common.errors import ServiceError, ServiceErrorCode


class AuthenticationServiceError(ServiceError):
    messages = {
        **ServiceError.messages,
        ServiceErrorCode.INVALID_KAKAO_ACCESS_TOKEN: "카카오 액세스 토큰이 유효하지 않아요.",
    }

    @property
    def user_message(self) -> str:
        # server details are logged, never shown
        if self.code is ServiceErrorCode.SERVER_ERROR:
            return self.messages[ServiceErrorCode.SERVER_ERROR]
        return super().user_message


class KakaoLoginError(Exception):
    pass


class MissingKakaoAccessToken(KakaoLoginError):
    def __init__(self):
        super().__init__("카카오 액세스 토큰을 가져오지 못했어요.")
