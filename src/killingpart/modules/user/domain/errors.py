from killingpart.common.errors import ServiceError


class UserServiceError(ServiceError):
    pass
