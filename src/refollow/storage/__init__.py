from refollow.storage.cache import COOKIE_NAME, RefollowCache

__all__ = ["COOKIE_NAME", "RefollowCache"]
