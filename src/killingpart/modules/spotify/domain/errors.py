from killingpart.common.errors import ServiceError, ServiceErrorCode


class SpotifyServiceError(ServiceError):
    messages = {
        ServiceErrorCode.MISSING_BASIC_AUTH: "Spotify 인증 설정이 누락되었어요.",
        ServiceErrorCode.INVALID_RESPONSE: "Spotify 응답을 확인할 수 없어요.",
        ServiceErrorCode.UNAUTHORIZED: "Spotify 인증에 실패했어요. 잠시 후 다시 시도해 주세요.",
        ServiceErrorCode.SERVER_ERROR: "Spotify 검색 처리에 실패했어요.",
        ServiceErrorCode.DECODING_FAILED: "Spotify 응답 파싱에 실패했어요.",
        ServiceErrorCode.NETWORK_FAILURE: "Spotify 요청 중 네트워크 오류가 발생했어요.",
    }
