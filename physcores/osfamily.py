from __future__ import annotations

import platform
from enum import Enum

from .log import logger


class OsFamily(str, Enum):
    LINUX = "LINUX"
    WINDOWS = "WINDOWS"
    MACOS = "MACOS"
    FREEBSD = "FREEBSD"
    UNKNOWN = "UNKNOWN"


_PREFIXES: tuple[tuple[str, OsFamily], ...] = (
    ("Linux", OsFamily.LINUX),
    ("LINUX", OsFamily.LINUX),
    ("Windows", OsFamily.WINDOWS),
    ("Mac OS X", OsFamily.MACOS),
    ("macOS", OsFamily.MACOS),
    ("Darwin", OsFamily.MACOS),
    ("FreeBSD", OsFamily.FREEBSD),
)


def read_os_name() -> str | None:
    """Return the host platform name, or None if it cannot be read."""
    try:
        name = platform.system()
    except OSError:
        logger.exception("Could not read the OS name. Will not be able to provide physical core count.")
        return None
    if not name:
        logger.error("Failed to read OS name. Will not be able to provide physical core count.")
        return None
    return name


def classify(os_name: str | None) -> OsFamily:
    """Map a platform name to its family by prefix. Matching is case-sensitive."""
    if os_name is None:
        return OsFamily.UNKNOWN
    for prefix, family in _PREFIXES:
        if os_name.startswith(prefix):
            return family
    return OsFamily.UNKNOWN
