from killingpart.common.errors import ServiceError


class DiaryServiceError(ServiceError):
    pass
