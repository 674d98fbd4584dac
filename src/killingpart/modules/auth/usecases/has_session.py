from killingpart.modules.auth.usecases.ports.token_store import TokenStoring


def has_session(token_store: TokenStoring) -> bool:
    return token_store.has_valid_session()
