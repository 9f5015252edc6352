from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from refollow.analysis.aggregation import aggregate, assemble
from refollow.analysis.gate import CreatorRequirement
from refollow.config import Settings, get_settings
from refollow.errors import ValidationError
from refollow.logging import get_logger
from refollow.models.profile import AggregatedResult
from refollow.storage.cache import RefollowCache, cached_entry_for
from refollow.upstream.client import Upstream
from refollow.upstream.graph import GraphFetcher
from refollow.upstream.profiles import ProfileHydrator

LOGGER = get_logger(__name__)


def parse_fid(raw: Optional[str]) -> int:
    value = (raw or "").strip()
    if not value:
        raise ValidationError("Missing fid")
    try:
        fid = int(value)
    except ValueError as exc:
        raise ValidationError("Invalid fid") from exc
    if fid <= 0:
        raise ValidationError("Invalid fid")
    return fid


@dataclass(frozen=True)
class RefollowOutcome:
    result: AggregatedResult
    from_cache: bool
    computed_at: int


class RefollowService:
    """Per-request flow: gate, cache decision, fetch, aggregate, hydrate, store."""

    def __init__(
        self,
        *,
        fetcher: GraphFetcher,
        hydrator: ProfileHydrator,
        cache: RefollowCache,
        requirement: Optional[CreatorRequirement] = None,
    ) -> None:
        self.fetcher = fetcher
        self.hydrator = hydrator
        self.cache = cache
        self.requirement = requirement if requirement is not None else CreatorRequirement()

    @classmethod
    def from_client(
        cls,
        client: Upstream,
        *,
        settings: Optional[Settings] = None,
        cache: Optional[RefollowCache] = None,
        requirement: Optional[CreatorRequirement] = None,
    ) -> "RefollowService":
        settings = settings or get_settings()
        return cls(
            fetcher=GraphFetcher(client, settings=settings),
            hydrator=ProfileHydrator(client),
            cache=cache if cache is not None else RefollowCache(ttl_ms=settings.cache_ttl_ms),
            requirement=requirement,
        )

    def refollow(self, fid: int, *, force_refresh: bool = False, cookie_ts: float = 0) -> RefollowOutcome:
        now = self.cache.clock()
        entry = cached_entry_for(
            self.cache,
            fid,
            force_refresh=force_refresh,
            cookie_ts=cookie_ts,
            now=now,
        )
        if entry is not None:
            self.requirement.check(entry.result.following_fids())
            LOGGER.info("Serving cached refollow data for %s", fid)
            return RefollowOutcome(result=entry.result, from_cache=True, computed_at=entry.computed_at)

        result = self.build(fid, enforce_gate=True)
        self.cache.put(fid, result, now=now)
        LOGGER.info(
            "Built refollow data for %s (following=%d, followers=%d, not following back=%d)",
            fid,
            len(result.following),
            len(result.followers),
            len(result.not_following_back),
        )
        return RefollowOutcome(result=result, from_cache=False, computed_at=now)

    def build(self, fid: int, *, enforce_gate: bool = False) -> AggregatedResult:
        """Fetch both directions and hydrate, bypassing the cache."""
        following = self.fetcher.following(fid)
        if enforce_gate:
            self.requirement.check(following)
        followers = self.fetcher.followers(fid)

        aggregation = aggregate(following, followers)
        profiles = self.hydrator.hydrate(aggregation.hydration_set())
        return assemble(aggregation, profiles)


__all__ = ["RefollowOutcome", "RefollowService", "parse_fid"]
