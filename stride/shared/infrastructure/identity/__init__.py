from .user_info import InMemoryUserInfo, UserInfoStore

__all__ = ["InMemoryUserInfo", "UserInfoStore"]
