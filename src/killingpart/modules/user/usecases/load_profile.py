from dataclasses import dataclass

from ..domain.user import UserModel, UserStatics
from .ports.user_gateway import UserGateway


@dataclass(frozen=True, slots=True)
class Profile:
    user: UserModel
    statics: UserStatics


async def load_profile(users: UserGateway) -> Profile:
    user = await users.fetch_my_user()
    statics = await users.fetch_user_statics(user.user_id)
    return Profile(user=user, statics=statics)
