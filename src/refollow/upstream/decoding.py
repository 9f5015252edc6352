"""Normalize Neynar response bodies into internal structures.

The provider has shipped the same payloads in a few shapes over time:
lists at ``users`` or ``result.users``, cursors at ``next`` or
``result.next`` (either ``{"cursor": ...}`` or a bare string), follow
entries flat or wrapped in ``{"user": {...}}``, and profile fields in
snake_case or camelCase. Everything shape-specific lives here.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Mapping, Optional

from refollow.models.profile import Profile


@dataclass(frozen=True)
class UserPage:
    fids: List[int]
    next_cursor: Optional[str]


def coerce_fid(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def _result(payload: Any) -> Mapping[str, Any]:
    if isinstance(payload, Mapping):
        nested = payload.get("result")
        if isinstance(nested, Mapping):
            return nested
    return {}


def _users(payload: Any) -> List[Any]:
    if isinstance(payload, Mapping) and isinstance(payload.get("users"), list):
        return payload["users"]
    users = _result(payload).get("users")
    return users if isinstance(users, list) else []


def _user_record(entry: Any) -> Optional[Mapping[str, Any]]:
    if not isinstance(entry, Mapping):
        return None
    if "fid" not in entry and isinstance(entry.get("user"), Mapping):
        return entry["user"]
    return entry


def _next_cursor(payload: Any) -> Optional[str]:
    next_obj = payload.get("next") if isinstance(payload, Mapping) else None
    if not next_obj:
        next_obj = _result(payload).get("next")
    if isinstance(next_obj, Mapping):
        cursor = next_obj.get("cursor")
    else:
        cursor = next_obj
    if not cursor or not isinstance(cursor, str):
        return None
    return cursor


def decode_user_page(payload: Any) -> UserPage:
    fids: List[int] = []
    for entry in _users(payload):
        record = _user_record(entry)
        fid = coerce_fid(record.get("fid")) if record is not None else None
        if fid is not None:
            fids.append(fid)
    return UserPage(fids=fids, next_cursor=_next_cursor(payload))


def decode_profile(record: Any) -> Optional[Profile]:
    record = _user_record(record)
    if record is None:
        return None
    fid = coerce_fid(record.get("fid"))
    if fid is None:
        return None
    return Profile(
        fid=fid,
        username=record.get("username") or None,
        display_name=record.get("display_name") or record.get("displayName") or None,
        pfp_url=record.get("pfp_url") or record.get("pfpUrl") or None,
    )


def decode_profiles(payload: Any) -> List[Profile]:
    profiles: List[Profile] = []
    for entry in _users(payload):
        profile = decode_profile(entry)
        if profile is not None:
            profiles.append(profile)
    return profiles


def decode_single_user(payload: Any) -> Optional[Profile]:
    """Decode a username lookup; ``None`` when the body names no user."""
    user = payload.get("user") if isinstance(payload, Mapping) else None
    if not isinstance(user, Mapping):
        user = _result(payload).get("user")
    return decode_profile(user)


__all__ = [
    "UserPage",
    "coerce_fid",
    "decode_profile",
    "decode_profiles",
    "decode_single_user",
    "decode_user_page",
]
