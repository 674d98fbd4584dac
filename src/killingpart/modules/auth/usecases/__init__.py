from .login_with_kakao import login_with_kakao
from .logout import logout, delete_my_account
from .has_session import has_session

__all__ = [
    "login_with_kakao",
    "logout",
    "delete_my_account",
    "has_session",
]
