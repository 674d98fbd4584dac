class APIClientError(Exception):
    default_message = "요청 처리에 실패했어요."

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)


class InvalidResponse(APIClientError):
    default_message = "서버 응답을 확인할 수 없어요."


class SessionInvalid(APIClientError):
    default_message = "세션이 만료되었어요. 다시 로그인해 주세요."


class MissingAccessToken(SessionInvalid):
    pass


class MissingRefreshToken(SessionInvalid):
    pass


class Unauthorized(SessionInvalid):
    pass


class ServerError(APIClientError):
    def __init__(self, status_code: int, message: str | None = None):
        self.status_code = status_code
        self.message = message
        super().__init__(message)


class DecodingFailed(APIClientError):
    default_message = "응답 데이터 파싱에 실패했어요."
