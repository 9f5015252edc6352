from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Mapping

from refollow.models.profile import AggregatedResult, FidSet, Profile


@dataclass(frozen=True)
class Aggregation:
    following: FidSet
    followers: FidSet
    not_following_back: FidSet

    def hydration_set(self) -> FidSet:
        """Every identifier that needs a profile, following first."""
        return self.following.union(self.followers)


def aggregate(following: Iterable[int], followers: Iterable[int]) -> Aggregation:
    """Split the two directional sets into following/followers/not-following-back."""
    following_set = following if isinstance(following, FidSet) else FidSet(following)
    followers_set = followers if isinstance(followers, FidSet) else FidSet(followers)
    return Aggregation(
        following=following_set,
        followers=followers_set,
        not_following_back=following_set.difference(followers_set),
    )


def build_list(fids: Iterable[int], profiles: Mapping[int, Profile]) -> List[Profile]:
    return [profiles.get(fid) or Profile(fid=fid) for fid in fids]


def assemble(aggregation: Aggregation, profiles: Mapping[int, Profile]) -> AggregatedResult:
    return AggregatedResult(
        following=build_list(aggregation.following, profiles),
        followers=build_list(aggregation.followers, profiles),
        not_following_back=build_list(aggregation.not_following_back, profiles),
    )


__all__ = ["Aggregation", "aggregate", "assemble", "build_list"]
