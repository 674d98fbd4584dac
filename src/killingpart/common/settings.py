import base64
from enum import Enum
from functools import cached_property

from pydantic import HttpUrl, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class RunMode(Enum):
    PROD = 'prod'
    TEST = 'test'
    DEV = 'dev'


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file_encoding='utf-8', extra='ignore')

    run_mode: RunMode = RunMode.DEV
    base_url: HttpUrl
    music_base_url: HttpUrl
    http_timeout: float = 10.0

    def is_dev(self) -> bool:
        return self.run_mode == RunMode.DEV

    @cached_property
    def api_base(self) -> str:
        return str(self.base_url).rstrip('/')

    @cached_property
    def music_api_base(self) -> str:
        return str(self.music_base_url).rstrip('/')


class SpotifySettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file_encoding='utf-8', extra='ignore', env_prefix='SPOTIFY_'
    )

    basic_auth: SecretStr | None = None
    client_id: str | None = None
    client_secret: SecretStr | None = None
    accounts_url: str = 'https://accounts.spotify.com/api/token'
    api_url: str = 'https://api.spotify.com/v1'
    market: str = 'KR'
    accept_language: str = 'ko-KR'

    def authorization_header(self) -> str | None:
        """Value for the client-credentials ``Authorization`` header, if configured.

        A ready ``Basic ...`` value wins over the client id/secret pair. An
        unexpanded build placeholder counts as missing.
        """
        if self.basic_auth is not None:
            raw = self.basic_auth.get_secret_value().strip()
            if raw and raw != '$(SPOTIFY_BASIC_AUTH)':
                return raw

        if self.client_id and self.client_secret:
            pair = f'{self.client_id}:{self.client_secret.get_secret_value()}'
            return 'Basic ' + base64.b64encode(pair.encode()).decode()

        return None


class TokenStoreSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file_encoding='utf-8', extra='ignore', env_prefix='TOKEN_STORE_'
    )

    path: str | None = None
