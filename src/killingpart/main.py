import asyncio

import structlog

from killingpart.bootstrap import create_container
from killingpart.common.events import AppEvent, EventBus
from killingpart.modules.auth.usecases import has_session
from killingpart.modules.auth.usecases.ports.token_store import TokenStoring
from killingpart.modules.user.usecases.load_profile import load_profile
from killingpart.modules.user.usecases.ports.user_gateway import UserGateway


async def run() -> None:
    container = await create_container()
    logger = structlog.get_logger('main')
    try:
        events = await container.get(EventBus)
        events.subscribe(AppEvent.SESSION_EXPIRED, lambda _: logger.warning("login_required"))

        if not has_session(await container.get(TokenStoring)):
            logger.info("no_session")
            return

        profile = await load_profile(await container.get(UserGateway))
        logger.info(
            "profile_loaded",
            username=profile.user.username,
            killing_parts=profile.statics.killing_part_count,
            fans=profile.statics.fan_count,
            picks=profile.statics.pick_count,
        )
    finally:
        await container.close()


if __name__ == '__main__':
    asyncio.run(run())
