from killingpart.modules.auth.usecases.ports.auth import AuthGateway


async def logout(auth: AuthGateway) -> None:
    await auth.logout()


async def delete_my_account(auth: AuthGateway) -> None:
    await auth.delete_my_account()
