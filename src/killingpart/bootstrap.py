from os import PathLike

from dishka import AsyncContainer
from pydantic import ValidationError

from killingpart.common.exceptions import InitializationError
from killingpart.common.provider import build_container, _ENV_PATH
from killingpart.common.settings import AppSettings
from killingpart.logger import setup_logger


async def create_container(env_file: str | PathLike | None = _ENV_PATH) -> AsyncContainer:
    """Build the DI container and fail fast on missing base URLs."""
    container = build_container(env_file)
    try:
        settings = await container.get(AppSettings)
    except ValidationError as e:
        await container.close()
        raise InitializationError(f'Invalid client configuration: {e}') from e

    setup_logger(settings.is_dev())
    return container
