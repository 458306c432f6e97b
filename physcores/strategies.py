from __future__ import annotations

import os
from typing import Iterable, Set

from .commands import CommandRunner
from .log import logger

CPUINFO_PATH = "/proc/cpuinfo"
WMIC_COMMAND = ("WMIC", "/OUTPUT:STDOUT", "CPU", "Get", "/Format:List")

_UNAVAILABLE = "Will not be able to provide physical core count."


def _positive(value: int | None, source: str) -> int | None:
    if value is None:
        return None
    if value < 1:
        logger.error("%s reported %d physical cores. %s", source, value, _UNAVAILABLE)
        return None
    return value


# ----- Linux -----
def parse_cpuinfo(text: str) -> int | None:
    """Count distinct ``core id`` rows. Hyperthread siblings share a row."""
    core_id_rows: Set[str] = {row for row in text.split("\n") if row.startswith("core id")}
    return len(core_id_rows) if core_id_rows else None


def read_from_proc(path: str = CPUINFO_PATH) -> int | None:
    if not os.path.exists(path):
        logger.info("Old Linux without %s. Will not be able to provide core count.", path)
        return None
    try:
        with open(path, "rb") as fp:
            text = fp.read().decode("utf-8", errors="replace")
    except OSError:
        logger.exception("Error while reading %s", path)
        return None
    count = parse_cpuinfo(text)
    if count is None:
        logger.error("No core id rows found in %s. %s", path, _UNAVAILABLE)
        logger.debug("%s contents: %r", path, text)
    return count


# ----- Windows -----
def parse_wmic_output(wmic_output: str) -> int | None:
    """Sum ``NumberOfCores`` over all CPU packages.

    One unparseable value discards the whole result.
    """
    core_count = 0
    for row in wmic_output.split("\n"):
        if not row.startswith("NumberOfCores"):
            continue
        _key, _sep, num = row.partition("=")
        try:
            cores = int(num.strip())
        except ValueError:
            cores = 0
        if cores < 1:
            logger.error('Unexpected output from WMIC: "%s". %s', wmic_output, _UNAVAILABLE)
            return None
        core_count += cores
    return core_count if core_count > 0 else None


def read_from_wmic(runner: CommandRunner) -> int | None:
    try:
        result = runner.run(WMIC_COMMAND, encoding="ascii")
    except OSError:
        logger.exception("Failed to run WMIC process. %s", _UNAVAILABLE)
        return None
    if result.returncode != 0:
        logger.error("WMIC failed with exit status %d: %s", result.returncode, result.output.strip())
        return None
    logger.debug("WMIC output: %r", result.output)
    if not any(row.startswith("NumberOfCores") for row in result.output.split("\n")):
        logger.error("No NumberOfCores rows in WMIC output. %s", _UNAVAILABLE)
        return None
    return parse_wmic_output(result.output)


# ----- sysctl (macOS, FreeBSD) -----
def read_sysctl(runner: CommandRunner, variable: str, *options: str) -> str | None:
    """Return the stripped output of ``sysctl [options] variable`` or None on failure."""
    command = ["sysctl", *options, variable]
    try:
        result = runner.run(command, encoding="utf-8")
    except OSError:
        logger.exception("Failed to run sysctl process. %s", _UNAVAILABLE)
        return None
    if result.returncode != 0:
        logger.error("Could not read sysctl variable %s. Exit status was %d", variable, result.returncode)
        return None
    return result.output.strip()


def parse_sysctl_number(text: str) -> int | None:
    try:
        return int(text.strip())
    except ValueError:
        logger.error('sysctl returned something that was not a number: "%s"', text)
        return None


def read_from_sysctl_macos(runner: CommandRunner) -> int | None:
    # hw.physicalcpu is already the total across packages
    result = read_sysctl(runner, "hw.physicalcpu", "-n")
    if result is None:
        return None
    return _positive(parse_sysctl_number(result), "sysctl hw.physicalcpu")


def _locations(rows: Iterable[str]) -> Set[str]:
    found: Set[str] = set()
    for row in rows:
        if "location" not in row:
            continue
        fields = row.split("\\")
        if len(fields) < 2:
            logger.debug("Skipping dev.cpu location row without a backslash: %r", row)
            continue
        found.add(fields[1])
    return found


def parse_freebsd_locations(text: str) -> int | None:
    """Count distinct CPU locations in a ``sysctl dev.cpu`` dump."""
    cpu_locations = _locations(text.split("\n"))
    return len(cpu_locations) if cpu_locations else None


def read_from_sysctl_freebsd(runner: CommandRunner) -> int | None:
    result = read_sysctl(runner, "dev.cpu")
    if result is None:
        return None
    count = parse_freebsd_locations(result)
    if count is None:
        logger.error("No CPU locations found in sysctl dev.cpu output. %s", _UNAVAILABLE)
        logger.debug("sysctl dev.cpu output: %r", result)
    return count
