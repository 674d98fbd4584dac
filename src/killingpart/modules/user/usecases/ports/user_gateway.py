from typing import Protocol

from ...domain.user import UserModel, UserStatics


class UserGateway(Protocol):
    async def fetch_my_user(self) -> UserModel: ...

    async def fetch_user_statics(self, user_id: int) -> UserStatics: ...
