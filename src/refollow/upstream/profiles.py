from __future__ import annotations

from typing import Dict, Iterable, Optional

from refollow.logging import get_logger
from refollow.models.profile import Profile
from refollow.upstream.client import Upstream
from refollow.upstream.decoding import decode_profiles, decode_single_user

LOGGER = get_logger(__name__)


class ProfileHydrator:
    """Resolve bare identifiers into display profiles with one bulk lookup."""

    def __init__(self, client: Upstream) -> None:
        self.client = client

    def hydrate(self, fids: Iterable[int]) -> Dict[int, Profile]:
        ids = list(fids)
        if not ids:
            return {}

        payload = self.client.call(
            "/v2/farcaster/user/bulk",
            {"fids": ",".join(str(fid) for fid in ids)},
        )
        profiles = {profile.fid: profile for profile in decode_profiles(payload)}
        if len(profiles) < len(ids):
            LOGGER.debug("Hydrated %d of %d identifiers", len(profiles), len(ids))
        return profiles

    def lookup_username(self, username: str) -> Optional[Profile]:
        payload = self.client.call("/v2/farcaster/user/by_username", {"username": username})
        return decode_single_user(payload)


__all__ = ["ProfileHydrator"]
