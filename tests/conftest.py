"""Shared fixtures: settings without an .env file and an in-memory Neynar fake."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Tuple

import pytest

from refollow.config import Settings
from refollow.errors import UpstreamError


class FakeNeynar:
    """Answers the handful of Neynar endpoints the service uses.

    Pages are sliced from the configured lists with integer-offset cursors,
    and every call is recorded as ``(path, query)``.
    """

    def __init__(
        self,
        *,
        following: Optional[Mapping[int, List[int]]] = None,
        followers: Optional[Mapping[int, List[int]]] = None,
        users: Optional[Mapping[int, Dict[str, Any]]] = None,
        usernames: Optional[Mapping[str, int]] = None,
    ) -> None:
        self.following = dict(following or {})
        self.followers = dict(followers or {})
        self.users = dict(users or {})
        self.usernames = dict(usernames or {})
        self.failures: Dict[str, UpstreamError] = {}
        self.calls: List[Tuple[str, Dict[str, Any]]] = []

    def fail(self, path_prefix: str, status_code: int = 500, body: str = "boom") -> None:
        self.failures[path_prefix] = UpstreamError(status_code, body)

    def paths(self) -> List[str]:
        return [path for path, _ in self.calls]

    def call(self, path: str, query: Optional[Mapping[str, Any]] = None) -> Any:
        query = dict(query or {})
        self.calls.append((path, query))
        for prefix, error in self.failures.items():
            if path.startswith(prefix):
                raise error

        if path in ("/v2/farcaster/following/", "/v2/farcaster/followers/"):
            source = self.following if "following" in path else self.followers
            return self._page(source.get(int(query["fid"]), []), query)
        if path == "/v2/farcaster/user/bulk":
            fids = [int(fid) for fid in query["fids"].split(",")]
            return {"users": [self.users[fid] for fid in fids if fid in self.users]}
        if path == "/v2/farcaster/user/by_username":
            handle = query["username"]
            if handle not in self.usernames:
                raise UpstreamError(404, '{"message":"User not found"}')
            return {"user": {"fid": self.usernames[handle], "username": handle}}
        raise AssertionError(f"unexpected upstream path {path}")

    def _page(self, fids: List[int], query: Mapping[str, Any]) -> Dict[str, Any]:
        limit = int(query["limit"])
        offset = int(query.get("cursor") or 0)
        chunk = fids[offset : offset + limit]
        more = offset + limit < len(fids)
        return {
            "users": [{"object": "follow", "user": {"fid": fid}} for fid in chunk],
            "next": {"cursor": str(offset + limit) if more else None},
        }


def user_record(fid: int, username: Optional[str] = None) -> Dict[str, Any]:
    name = username or f"user{fid}"
    return {
        "fid": fid,
        "username": name,
        "display_name": name.title(),
        "pfp_url": f"https://img.example/{fid}.png",
    }


@pytest.fixture
def settings() -> Settings:
    return Settings(neynar_api_key="test-key", required_creators=[])


@pytest.fixture
def fake_neynar() -> FakeNeynar:
    return FakeNeynar(
        following={100: [1, 2, 3]},
        followers={100: [2, 4]},
        users={fid: user_record(fid) for fid in (1, 2, 4)},
    )
