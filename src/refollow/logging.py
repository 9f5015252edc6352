from __future__ import annotations

import logging
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

# Loggers that are chatty at INFO; they follow the root level only in debug runs
NOISY_LOGGERS = ("httpx", "httpcore")


def resolve_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


def _rich_handler() -> Optional[RichHandler]:
    for handler in logging.getLogger().handlers:
        if isinstance(handler, RichHandler):
            return handler
    return None


def install_handler() -> None:
    """Attach the Rich stderr handler to the root logger once per process."""
    if _rich_handler() is not None:
        return
    handler = RichHandler(console=Console(stderr=True), rich_tracebacks=True, markup=False)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="%Y-%m-%d %H:%M:%S"))
    root = logging.getLogger()
    root.addHandler(handler)
    if root.level == logging.WARNING:
        root.setLevel(logging.INFO)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def configure_logging(level: Union[int, str] = logging.INFO) -> None:
    """Install the handler and set the root level; safe to call repeatedly."""
    install_handler()
    resolved = resolve_level(level)
    logging.getLogger().setLevel(resolved)
    noisy_level = logging.NOTSET if resolved <= logging.DEBUG else logging.WARNING
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(noisy_level)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    install_handler()
    return logging.getLogger(name)


__all__ = ["configure_logging", "get_logger", "install_handler", "resolve_level"]
