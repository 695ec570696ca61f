"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import logging
import os
from collections.abc import Callable, Iterator
from datetime import UTC, datetime
from pathlib import Path

import pytest

# Fixed reference time; integral so that mtimes set with os.utime are exact
NOW_TS = 1_700_000_000
NOW = datetime.fromtimestamp(NOW_TS, tz=UTC)

_OPTION_ENV_VARS = (
    "POLL",
    "MAXAGE",
    "LOGLEVEL",
    "AGEWARNING",
    "SLACKWARNLEVEL",
    "SLACKWEBHOOK",
    "SLACKCHANNEL",
    "SLACKICON",
    "DIRECTORY",
    "IGNOREFOLDERS",
    "ONERROR",
    "CONFIG",
)


@pytest.fixture(autouse=True)
def isolated_config_home(
    tmp_path_factory: pytest.TempPathFactory,
    monkeypatch: pytest.MonkeyPatch,
) -> Path:
    """Point XDG_CONFIG_HOME at an empty directory and clear option env vars."""
    config_home = tmp_path_factory.mktemp("xdg-config")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    for name in _OPTION_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return config_home


@pytest.fixture(autouse=True)
def reset_agewatch_logger() -> Iterator[None]:
    """Undo setup_logging() so records propagate to caplog again."""
    yield
    pkg_logger = logging.getLogger("agewatch")
    for handler in list(pkg_logger.handlers):
        pkg_logger.removeHandler(handler)
    pkg_logger.setLevel(logging.NOTSET)
    pkg_logger.propagate = True


@pytest.fixture
def now() -> datetime:
    """The fixed reference time used by ``clock`` and ``touch``."""
    return NOW


@pytest.fixture
def clock() -> Callable[[], datetime]:
    """Clock frozen at NOW."""
    return lambda: NOW


@pytest.fixture
def touch() -> Callable[..., Path]:
    """Create a file or directory whose mtime is ``age`` seconds before NOW."""

    def _touch(path: Path, age: int, *, directory: bool = False, content: str = "x") -> Path:
        if directory:
            path.mkdir(parents=True, exist_ok=True)
        else:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content)
        mtime = NOW_TS - age
        os.utime(path, (mtime, mtime))
        return path

    return _touch
