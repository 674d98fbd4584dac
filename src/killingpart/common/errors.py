from collections.abc import Mapping
from enum import Enum
from typing import ClassVar, Self

from killingpart.common.http.errors import (
    DecodingFailed,
    InvalidResponse,
    ServerError,
    SessionInvalid,
)


class ServiceErrorCode(Enum):
    INVALID_RESPONSE = "invalid_response"
    SERVER_ERROR = "server_error"
    DECODING_FAILED = "decoding_failed"
    REQUEST_ENCODING_FAILED = "request_encoding_failed"
    SESSION_EXPIRED = "session_expired"
    NETWORK_FAILURE = "network_failure"
    UNAUTHORIZED = "unauthorized"
    MISSING_BASIC_AUTH = "missing_basic_auth"
    INVALID_KAKAO_ACCESS_TOKEN = "invalid_kakao_access_token"


class ServiceError(Exception):
    """Domain-level failure with a user-facing message.

    Subclasses tune ``messages`` per service; ``from_exception`` translates
    client-layer errors into the subclass.
    """

    messages: ClassVar[Mapping[ServiceErrorCode, str]] = {
        ServiceErrorCode.INVALID_RESPONSE: "서버 응답을 확인할 수 없어요.",
        ServiceErrorCode.SERVER_ERROR: "요청 처리에 실패했어요.",
        ServiceErrorCode.DECODING_FAILED: "응답 파싱에 실패했어요.",
        ServiceErrorCode.REQUEST_ENCODING_FAILED: "요청 생성에 실패했어요.",
        ServiceErrorCode.SESSION_EXPIRED: "세션이 만료되었어요. 다시 로그인해 주세요.",
        ServiceErrorCode.NETWORK_FAILURE: "네트워크 요청 중 오류가 발생했어요.",
    }
    fallback_message: ClassVar[str] = "요청 처리에 실패했어요."

    def __init__(
            self,
            code: ServiceErrorCode,
            *,
            status_code: int | None = None,
            detail: str | None = None,
    ):
        self.code = code
        self.status_code = status_code
        self.detail = detail
        super().__init__(self.user_message)

    @property
    def user_message(self) -> str:
        if self.code is ServiceErrorCode.SERVER_ERROR and self.detail:
            return self.detail
        return self.messages.get(self.code, self.fallback_message)

    @classmethod
    def from_exception(cls, error: Exception) -> Self:
        if isinstance(error, cls):
            return error

        match error:
            case InvalidResponse():
                return cls(ServiceErrorCode.INVALID_RESPONSE)
            case SessionInvalid():
                return cls(ServiceErrorCode.SESSION_EXPIRED)
            case ServerError(status_code=status_code, message=message):
                return cls(ServiceErrorCode.SERVER_ERROR, status_code=status_code, detail=message)
            case DecodingFailed():
                return cls(ServiceErrorCode.DECODING_FAILED)
            case _:
                return cls(ServiceErrorCode.NETWORK_FAILURE)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(code={self.code.value!r}, "
            f"status_code={self.status_code!r}, detail={self.detail!r})"
        )
