import json
from collections.abc import Mapping, Sequence

SENSITIVE_HEADERS = {"authorization", "x-refresh-token"}


def mask_token(value: str) -> str:
    if len(value) <= 12:
        return "***"
    return value[:8] + "..." + value[-4:]


def masked_headers(headers: Mapping[str, str]) -> dict[str, str]:
    return {
        key: mask_token(value) if key.lower() in SENSITIVE_HEADERS else value
        for key, value in headers.items()
    }


def response_message(
        content: bytes,
        paths: Sequence[Sequence[str]] = (("message",),),
) -> str | None:
    """Best-effort error text from a response body.

    Each path is tried against the JSON body in order; the first non-blank
    string wins. Falls back to the raw body text.
    """
    if not content:
        return None

    try:
        payload = json.loads(content)
    except ValueError:
        payload = None

    for path in paths:
        value = payload
        for key in path:
            value = value.get(key) if isinstance(value, dict) else None
        if isinstance(value, str) and value.strip():
            return value.strip()

    try:
        raw = content.decode('utf-8').strip()
    except UnicodeDecodeError:
        return None
    return raw or None
