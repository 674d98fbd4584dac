from collections.abc import Iterable, Mapping
from typing import Protocol


class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set_many(self, values: Mapping[str, str]) -> None: ...

    def delete_many(self, keys: Iterable[str]) -> None: ...
