from __future__ import annotations

import io
import subprocess
from dataclasses import dataclass
from typing import BinaryIO, Protocol, Sequence, cast

_CHUNK_SIZE = 10000


def read_to_string(stream: BinaryIO, encoding: str) -> str:
    """Read a binary stream to exhaustion and decode it.

    Malformed bytes are replaced; I/O errors propagate to the caller.
    """
    buf = io.StringIO()
    reader = io.TextIOWrapper(stream, encoding=encoding, errors="replace", newline="")
    try:
        while True:
            chunk = reader.read(_CHUNK_SIZE)
            if not chunk:
                break
            buf.write(chunk)
    finally:
        reader.detach()
    return buf.getvalue()


@dataclass(frozen=True)
class CommandResult:
    output: str
    returncode: int


class CommandRunner(Protocol):
    def run(self, args: Sequence[str], encoding: str) -> CommandResult:
        """Run a command and return its combined stdout/stderr and exit code.

        Raises OSError if the command cannot be spawned.
        """
        ...


class SubprocessRunner:
    """Runs native commands with stdin closed and stderr merged into stdout.

    The wait is blocking with no timeout; a hung command hangs the caller.
    """

    def run(self, args: Sequence[str], encoding: str) -> CommandResult:
        proc = subprocess.Popen(
            list(args),
            stdin=subprocess.DEVNULL,  # WMIC blocks forever with an open stdin
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
        )
        stdout = cast(BinaryIO, proc.stdout)
        try:
            with stdout:
                output = read_to_string(stdout, encoding)
        finally:
            returncode = proc.wait()
        return CommandResult(output=output, returncode=returncode)
