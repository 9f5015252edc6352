from refollow.upstream.client import NeynarClient, Upstream

__all__ = ["NeynarClient", "Upstream"]
