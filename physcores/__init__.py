from .commands import CommandResult, CommandRunner, SubprocessRunner
from .detector import PhysicalCoreDetector, physical_core_count
from .log import LOGGER_NAME
from .osfamily import OsFamily, classify



__all__ = [
    "CommandResult",
    "CommandRunner",
    "OsFamily",
    "PhysicalCoreDetector",
    "SubprocessRunner",
    "classify",
    "physical_core_count",
    "LOGGER_NAME",
]
