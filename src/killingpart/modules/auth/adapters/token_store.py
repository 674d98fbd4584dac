import json
import os
import tempfile
import threading
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import override

from killingpart.modules.auth.domain.entities import Session
from killingpart.modules.auth.usecases.ports.key_value_store import KeyValueStore
from killingpart.modules.auth.usecases.ports.token_store import TokenStoring


class InMemoryKeyValueStore(KeyValueStore):
    def __init__(self, initial: Mapping[str, str] | None = None):
        self._values: dict[str, str] = dict(initial or {})

    @override
    def get(self, key: str) -> str | None:
        return self._values.get(key)

    @override
    def set_many(self, values: Mapping[str, str]) -> None:
        self._values.update(values)

    @override
    def delete_many(self, keys: Iterable[str]) -> None:
        for key in keys:
            self._values.pop(key, None)


class JsonFileKeyValueStore(KeyValueStore):
    """String values kept in one JSON object on disk.

    Every write replaces the whole file through a temp file in the same
    directory, so readers never observe a half-written pair.
    """

    def __init__(self, path: str | Path):
        self._path = Path(path)
        self._values: dict[str, str] = self._load()

    def _load(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        data = json.loads(self._path.read_text(encoding='utf-8') or '{}')
        if not isinstance(data, dict):
            raise ValueError(f'Token file {self._path} must contain a JSON object')
        return {str(k): str(v) for k, v in data.items() if v is not None}

    def _flush(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self._path.parent, prefix=self._path.name, suffix='.tmp')
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as tmp_file:
                json.dump(self._values, tmp_file, ensure_ascii=False)
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    @override
    def get(self, key: str) -> str | None:
        return self._values.get(key)

    @override
    def set_many(self, values: Mapping[str, str]) -> None:
        self._values.update(values)
        self._flush()

    @override
    def delete_many(self, keys: Iterable[str]) -> None:
        for key in keys:
            self._values.pop(key, None)
        self._flush()


class TokenStore(TokenStoring):
    ACCESS_TOKEN_KEY = 'auth.accessToken'
    REFRESH_TOKEN_KEY = 'auth.refreshToken'

    def __init__(self, storage: KeyValueStore):
        self._storage = storage
        self._lock = threading.Lock()

    @property
    def access_token(self) -> str | None:
        with self._lock:
            return self._storage.get(self.ACCESS_TOKEN_KEY)

    @property
    def refresh_token(self) -> str | None:
        with self._lock:
            return self._storage.get(self.REFRESH_TOKEN_KEY)

    def session(self) -> Session:
        with self._lock:
            return Session(
                access_token=self._storage.get(self.ACCESS_TOKEN_KEY),
                refresh_token=self._storage.get(self.REFRESH_TOKEN_KEY),
            )

    @override
    def has_valid_session(self) -> bool:
        return self.session().is_valid()

    @override
    def save(self, access_token: str, refresh_token: str) -> None:
        with self._lock:
            self._storage.set_many({
                self.ACCESS_TOKEN_KEY: access_token,
                self.REFRESH_TOKEN_KEY: refresh_token,
            })

    @override
    def clear(self) -> None:
        with self._lock:
            self._storage.delete_many((self.ACCESS_TOKEN_KEY, self.REFRESH_TOKEN_KEY))
