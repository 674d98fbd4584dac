class InitializationError(Exception):
    pass
