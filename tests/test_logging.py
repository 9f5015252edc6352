import logging

import pytest
from rich.logging import RichHandler

from refollow.logging import configure_logging, get_logger, resolve_level


@pytest.fixture(autouse=True)
def restore_levels():
    names = ("", "httpx", "httpcore")
    saved = {name: logging.getLogger(name).level for name in names}
    yield
    for name, level in saved.items():
        logging.getLogger(name).setLevel(level)


def rich_handlers():
    return [h for h in logging.getLogger().handlers if isinstance(h, RichHandler)]


def test_resolve_level():
    assert resolve_level("debug") == logging.DEBUG
    assert resolve_level(" Warning ") == logging.WARNING
    assert resolve_level(logging.ERROR) == logging.ERROR
    with pytest.raises(ValueError):
        resolve_level("chatty")


def test_handler_installed_once():
    get_logger("refollow.test")
    configure_logging("INFO")
    configure_logging("DEBUG")

    assert len(rich_handlers()) == 1


def test_httpx_quiet_unless_debug():
    configure_logging("INFO")
    assert logging.getLogger().level == logging.INFO
    assert logging.getLogger("httpx").level == logging.WARNING

    configure_logging("DEBUG")
    assert logging.getLogger().level == logging.DEBUG
    assert logging.getLogger("httpx").getEffectiveLevel() == logging.DEBUG
