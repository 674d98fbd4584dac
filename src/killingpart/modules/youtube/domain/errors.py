from killingpart.common.errors import ServiceError, ServiceErrorCode


class YoutubeServiceError(ServiceError):
    messages = {
        **ServiceError.messages,
        ServiceErrorCode.SERVER_ERROR: "유튜브 검색 처리에 실패했어요.",
        ServiceErrorCode.DECODING_FAILED: "유튜브 검색 응답 파싱에 실패했어요.",
        ServiceErrorCode.REQUEST_ENCODING_FAILED: "유튜브 검색 요청 생성에 실패했어요.",
        ServiceErrorCode.NETWORK_FAILURE: "유튜브 검색 요청 중 네트워크 오류가 발생했어요.",
    }
