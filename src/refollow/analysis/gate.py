from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional, Tuple

from refollow.errors import GateDenied, UpstreamError
from refollow.logging import get_logger
from refollow.models.profile import FidSet
from refollow.upstream.profiles import ProfileHydrator

LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class Creator:
    handle: str
    fid: int


@dataclass(frozen=True)
class CreatorRequirement:
    creators: Tuple[Creator, ...] = ()

    @property
    def fids(self) -> Tuple[int, ...]:
        return tuple(creator.fid for creator in self.creators)

    @property
    def handles(self) -> Tuple[str, ...]:
        return tuple(creator.handle for creator in self.creators)

    def __bool__(self) -> bool:
        return bool(self.creators)

    def check(self, following: Iterable[int]) -> None:
        """Raise ``GateDenied`` unless ``following`` covers every creator."""
        if not self.creators:
            return
        following_set = following if isinstance(following, FidSet) else FidSet(following)
        if not following_set.issuperset(self.fids):
            raise GateDenied(self.handles)


@dataclass(frozen=True)
class CreatorResolution:
    requirement: CreatorRequirement = field(default_factory=CreatorRequirement)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def resolve_creators(hydrator: ProfileHydrator, handles: Iterable[str]) -> CreatorResolution:
    """Look up each creator handle once; unresolvable handles are skipped."""
    try:
        creators = []
        for handle in handles:
            try:
                profile = hydrator.lookup_username(handle)
            except UpstreamError as exc:
                LOGGER.warning("Could not resolve creator @%s: %s", handle, exc.status_code or exc)
                continue
            if profile is None:
                LOGGER.warning("Creator @%s not found upstream", handle)
                continue
            creators.append(Creator(handle=handle, fid=profile.fid))
    except Exception as exc:  # noqa: BLE001
        LOGGER.error("Creator resolution failed: %s", exc)
        return CreatorResolution(error=str(exc))

    requirement = CreatorRequirement(tuple(creators))
    LOGGER.info(
        "Creator gate requires %s",
        ", ".join(f"@{c.handle} ({c.fid})" for c in creators) or "nothing",
    )
    return CreatorResolution(requirement=requirement)


__all__ = ["Creator", "CreatorRequirement", "CreatorResolution", "resolve_creators"]
