import asyncio
import time
from collections.abc import Awaitable, Callable

EXPIRY_SAFETY_MARGIN = 60

TokenFetcher = Callable[[], Awaitable[tuple[str, int]]]


class SpotifyTokenCache:
    """App-level client-credentials token, refetched at most once at a time.

    ``get_or_fetch`` holds a lock across the fetch, so callers arriving while
    a fetch is in flight wait for it and reuse the token it stored.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._token: str | None = None
        self._expires_at: float | None = None
        self._lock = asyncio.Lock()

    def valid_token(self) -> str | None:
        if self._token is None or self._expires_at is None:
            return None
        if self._clock() >= self._expires_at:
            return None
        return self._token

    def save(self, token: str, expires_in: int) -> None:
        self._token = token
        self._expires_at = self._clock() + max(expires_in - EXPIRY_SAFETY_MARGIN, 0)

    def clear(self) -> None:
        self._token = None
        self._expires_at = None

    def invalidate(self, token: str) -> None:
        if self._token == token:
            self.clear()

    async def get_or_fetch(self, fetch: TokenFetcher, stale_token: str | None = None) -> str:
        async with self._lock:
            token = self.valid_token()
            if token is not None and token != stale_token:
                return token

            token, expires_in = await fetch()
            self.save(token, expires_in)
            return token
