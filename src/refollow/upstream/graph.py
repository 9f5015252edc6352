from __future__ import annotations

from typing import Dict, Optional, Union

from refollow.config import Settings, get_settings
from refollow.logging import get_logger
from refollow.models.profile import Direction, FidSet
from refollow.upstream.client import Upstream
from refollow.upstream.decoding import decode_user_page

LOGGER = get_logger(__name__)


class GraphFetcher:
    """Collects follower/following identifiers page by page, up to a page cap."""

    def __init__(self, client: Upstream, *, settings: Optional[Settings] = None) -> None:
        self.client = client
        self.settings = settings or get_settings()

    def fetch_identifiers(self, direction: Union[Direction, str], fid: int) -> FidSet:
        direction = Direction(direction)
        fids = FidSet()
        cursor: Optional[str] = None

        for _ in range(self.settings.max_pages):
            query: Dict[str, str] = {"fid": str(fid), "limit": str(self.settings.page_size)}
            if cursor:
                query["cursor"] = cursor

            decoded = decode_user_page(
                self.client.call(f"/v2/farcaster/{direction.value}/", query)
            )
            for neighbor in decoded.fids:
                fids.add(neighbor)

            if not decoded.next_cursor:
                break
            cursor = decoded.next_cursor
        else:
            LOGGER.info(
                "Stopped %s pagination for %s at the %d page cap",
                direction.value,
                fid,
                self.settings.max_pages,
            )

        LOGGER.debug("Fetched %d %s identifiers for %s", len(fids), direction.value, fid)
        return fids

    def following(self, fid: int) -> FidSet:
        return self.fetch_identifiers(Direction.FOLLOWING, fid)

    def followers(self, fid: int) -> FidSet:
        return self.fetch_identifiers(Direction.FOLLOWERS, fid)


__all__ = ["GraphFetcher"]
