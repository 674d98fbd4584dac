import os
from collections.abc import AsyncIterable
from os import PathLike

from dishka import AsyncContainer, Provider, Scope, make_async_container, provide
from httpx import AsyncClient

from killingpart.common.events import EventBus
from killingpart.common.http.client import APIClient
from killingpart.common.settings import AppSettings, SpotifySettings, TokenStoreSettings
from killingpart.modules.auth.adapters.authentication import ApiAuthGateway
from killingpart.modules.auth.adapters.token_store import (
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    TokenStore,
)
from killingpart.modules.auth.usecases.ports.auth import AuthGateway
from killingpart.modules.auth.usecases.ports.key_value_store import KeyValueStore
from killingpart.modules.auth.usecases.ports.token_store import TokenStoring
from killingpart.modules.diary.infra.gateways.diary import ApiDiaryGateway
from killingpart.modules.diary.usecases.ports.diary_gateway import DiaryGateway
from killingpart.modules.spotify.infra.gateways.spotify import HttpxSpotifyGateway
from killingpart.modules.spotify.infra.token_cache import SpotifyTokenCache
from killingpart.modules.spotify.usecases.ports.spotify_gateway import SpotifyGateway
from killingpart.modules.user.infra.gateways.user import ApiUserGateway
from killingpart.modules.user.usecases.ports.user_gateway import UserGateway
from killingpart.modules.youtube.infra.gateways.youtube import ApiYoutubeGateway
from killingpart.modules.youtube.usecases.ports.youtube_gateway import YoutubeGateway

_ENV_PATH = os.environ.get("ENV_PATH", None)


class SettingsProvider(Provider):
    """App-scoped settings, read once per container."""

    scope = Scope.APP

    def __init__(self, env_file: str | PathLike | None):
        super().__init__()
        self._env_file = str(env_file) if env_file is not None else env_file

    @provide
    def app_settings(self) -> AppSettings:
        return AppSettings(_env_file=self._env_file)

    @provide
    def spotify_settings(self) -> SpotifySettings:
        return SpotifySettings(_env_file=self._env_file)

    @provide
    def token_store_settings(self) -> TokenStoreSettings:
        return TokenStoreSettings(_env_file=self._env_file)


class StorageProvider(Provider):
    scope = Scope.APP

    @provide
    def key_value_store(self, settings: TokenStoreSettings) -> KeyValueStore:
        if settings.path is None:
            return InMemoryKeyValueStore()
        return JsonFileKeyValueStore(settings.path)

    @provide(provides=TokenStoring)
    def token_store(self, storage: KeyValueStore) -> TokenStore:
        return TokenStore(storage)

    @provide
    def events(self) -> EventBus:
        return EventBus()


class HttpProvider(Provider):
    scope = Scope.APP

    @provide
    async def httpx_client(self, settings: AppSettings) -> AsyncIterable[AsyncClient]:
        async with AsyncClient(timeout=settings.http_timeout) as client:
            yield client

    @provide
    def api_client(
            self,
            http_client: AsyncClient,
            token_store: TokenStoring,
            events: EventBus,
            settings: AppSettings,
    ) -> APIClient:
        return APIClient(http_client, token_store, events, base_url=settings.api_base)

    @provide
    def spotify_token_cache(self) -> SpotifyTokenCache:
        return SpotifyTokenCache()


class GatewayProvider(Provider):
    scope = Scope.APP

    @provide(provides=AuthGateway)
    def auth_gateway(self, client: APIClient, token_store: TokenStoring) -> ApiAuthGateway:
        return ApiAuthGateway(client, token_store)

    @provide(provides=DiaryGateway)
    def diary_gateway(self, client: APIClient, events: EventBus) -> ApiDiaryGateway:
        return ApiDiaryGateway(client, events)

    @provide(provides=UserGateway)
    def user_gateway(self, client: APIClient) -> ApiUserGateway:
        return ApiUserGateway(client)

    @provide(provides=YoutubeGateway)
    def youtube_gateway(self, client: APIClient, settings: AppSettings) -> ApiYoutubeGateway:
        return ApiYoutubeGateway(client, music_base_url=settings.music_api_base)

    @provide(provides=SpotifyGateway)
    def spotify_gateway(
            self,
            http_client: AsyncClient,
            token_cache: SpotifyTokenCache,
            settings: SpotifySettings,
    ) -> HttpxSpotifyGateway:
        return HttpxSpotifyGateway(http_client, token_cache, settings)


def build_container(env_file: str | PathLike | None = _ENV_PATH) -> AsyncContainer:
    return make_async_container(
        SettingsProvider(env_file=env_file),
        StorageProvider(),
        HttpProvider(),
        GatewayProvider(),
    )
