from refollow.models.profile import AggregatedResult, CacheEntry, Direction, FidSet, Profile

__all__ = ["AggregatedResult", "CacheEntry", "Direction", "FidSet", "Profile"]
