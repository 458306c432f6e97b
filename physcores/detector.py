from __future__ import annotations

import functools
from typing import Callable, Dict, cast

from . import strategies
from .commands import CommandRunner, SubprocessRunner
from .log import logger
from .osfamily import OsFamily, classify, read_os_name

_UNSET = object()


@functools.lru_cache(maxsize=None)
def host_os_name() -> str | None:
    """Platform name of this process, read once."""
    return read_os_name()


class PhysicalCoreDetector:
    """Detects the number of physical CPU cores on the host.

    On a machine with hyperthreading this may be less than ``os.cpu_count()``.
    Inside a virtual machine the value is the number of cores assigned to the VM.

    Detection runs a native command on most platforms and can be slow,
    especially on Windows, so callers should store the result instead of
    calling ``detect`` repeatedly.
    """

    def __init__(
        self,
        os_name: str | None | object = _UNSET,
        runner: CommandRunner | None = None,
        cpuinfo_path: str = strategies.CPUINFO_PATH,
    ) -> None:
        self._os_name: str | None = host_os_name() if os_name is _UNSET else cast("str | None", os_name)
        self._family: OsFamily = classify(self._os_name)
        self._runner: CommandRunner = runner if runner is not None else SubprocessRunner()
        self._cpuinfo_path = cpuinfo_path
        self._strategies: Dict[OsFamily, Callable[[], int | None]] = {
            OsFamily.LINUX: lambda: strategies.read_from_proc(self._cpuinfo_path),
            OsFamily.WINDOWS: lambda: strategies.read_from_wmic(self._runner),
            OsFamily.MACOS: lambda: strategies.read_from_sysctl_macos(self._runner),
            OsFamily.FREEBSD: lambda: strategies.read_from_sysctl_freebsd(self._runner),
        }

    @property
    def os_name(self) -> str | None:
        return self._os_name

    @property
    def family(self) -> OsFamily:
        return self._family

    def detect(self) -> int | None:
        """Return the number of physical cores, or None if it could not be determined."""
        if self.os_name is None:
            return None
        strategy = self._strategies.get(self.family)
        if strategy is None:
            logger.warning('Unknown OS "%s". Please report this so a case can be added.', self.os_name)
            return None
        try:
            return strategy()
        except Exception:
            logger.exception("Unexpected error while detecting physical cores on %s", self.os_name)
            return None


def physical_core_count() -> int | None:
    """Convenience function: detect physical cores on the current host."""
    return PhysicalCoreDetector().detect()
