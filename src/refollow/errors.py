from __future__ import annotations

from typing import Optional, Sequence


class RefollowError(Exception):
    """Base class for every error the service raises on purpose."""


class ValidationError(RefollowError):
    """The caller's input is missing or malformed."""


class GateDenied(RefollowError):
    """The subject does not follow every required creator account."""

    def __init__(self, handles: Sequence[str]) -> None:
        self.handles = tuple(handles)
        names = " and ".join(f"@{handle}" for handle in self.handles)
        super().__init__(f"Follow {names} to use Refollow")


class UpstreamError(RefollowError):
    """The social-graph provider failed or answered with a non-2xx status."""

    def __init__(self, status_code: Optional[int], body: str) -> None:
        self.status_code = status_code
        self.body = body
        status = status_code if status_code is not None else "transport"
        super().__init__(f"Upstream error {status}: {body}")


class StartupError(RefollowError):
    """The process cannot start serving traffic."""


__all__ = [
    "RefollowError",
    "ValidationError",
    "GateDenied",
    "UpstreamError",
    "StartupError",
]
