from .errors import (
    APIClientError,
    DecodingFailed,
    InvalidResponse,
    MissingAccessToken,
    MissingRefreshToken,
    ServerError,
    SessionInvalid,
    Unauthorized,
)
from .request import APIRequest, HTTPMethod

__all__ = [
    "APIClientError",
    "APIRequest",
    "DecodingFailed",
    "HTTPMethod",
    "InvalidResponse",
    "MissingAccessToken",
    "MissingRefreshToken",
    "ServerError",
    "SessionInvalid",
    "Unauthorized",
]
