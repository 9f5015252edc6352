from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Direction(str, Enum):
    FOLLOWING = "following"
    FOLLOWERS = "followers"


class Profile(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    fid: int
    username: Optional[str] = None
    display_name: Optional[str] = Field(None, alias="displayName")
    pfp_url: Optional[str] = Field(None, alias="pfpUrl")


class AggregatedResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    following: List[Profile] = Field(default_factory=list)
    followers: List[Profile] = Field(default_factory=list)
    not_following_back: List[Profile] = Field(default_factory=list, alias="notFollowingBack")

    def to_payload(self) -> dict:
        """Wire form: camelCase keys, absent profile fields omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def following_fids(self) -> "FidSet":
        return FidSet(profile.fid for profile in self.following)


class FidSet:
    """Set of identifiers that iterates in first-insertion order."""

    __slots__ = ("_items",)

    def __init__(self, fids: Iterable[int] = ()) -> None:
        self._items: Dict[int, None] = dict.fromkeys(fids)

    def add(self, fid: int) -> None:
        self._items.setdefault(fid, None)

    def __contains__(self, fid: object) -> bool:
        return fid in self._items

    def __iter__(self) -> Iterator[int]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def issuperset(self, fids: Iterable[int]) -> bool:
        return all(fid in self._items for fid in fids)

    def difference(self, other: "FidSet") -> "FidSet":
        return FidSet(fid for fid in self if fid not in other)

    def union(self, *others: "FidSet") -> "FidSet":
        merged = FidSet(self)
        for other in others:
            for fid in other:
                merged.add(fid)
        return merged


@dataclass(frozen=True)
class CacheEntry:
    fid: int
    result: AggregatedResult
    computed_at: int


__all__ = ["AggregatedResult", "CacheEntry", "Direction", "FidSet", "Profile"]
