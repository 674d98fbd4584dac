from typing import Protocol


class TokenStoring(Protocol):
    @property
    def access_token(self) -> str | None: ...

    @property
    def refresh_token(self) -> str | None: ...

    def has_valid_session(self) -> bool: ...

    def save(self, access_token: str, refresh_token: str) -> None: ...

    def clear(self) -> None: ...
