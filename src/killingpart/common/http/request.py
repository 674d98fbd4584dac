from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, replace
from enum import Enum
from urllib.parse import quote

from pydantic import BaseModel


class HTTPMethod(Enum):
    GET = 'GET'
    POST = 'POST'
    PUT = 'PUT'
    PATCH = 'PATCH'
    DELETE = 'DELETE'


@dataclass(frozen=True, slots=True)
class APIRequest:
    path: str
    method: HTTPMethod
    query_params: Sequence[tuple[str, str]] = ()
    requires_auth: bool = False
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes | None = None
    base_url: str | None = None

    def with_headers(self, headers: Mapping[str, str]) -> 'APIRequest':
        return replace(self, headers={**self.headers, **headers})


def endpoint(base_url: str, path: str) -> str:
    """Append each non-empty component of ``path`` to ``base_url``."""
    url = base_url.rstrip('/')
    components = [quote(component) for component in path.split('/') if component]
    if not components:
        return url
    return f"{url}/{'/'.join(components)}"


def json_body(model: BaseModel, *, exclude_none: bool = False) -> bytes:
    return model.model_dump_json(by_alias=True, exclude_none=exclude_none).encode()
