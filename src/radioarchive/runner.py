"""External process invocation behind a swappable runner."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, Sequence

from .errors import ExternalToolError


@dataclass(frozen=True)
class ProcessResult:
    returncode: int
    stdout: str = ""
    stderr: str = ""


class ProcessRunner(Protocol):
    def run(self, args: Sequence[str]) -> ProcessResult: ...


class SubprocessRunner:
    """Run commands to completion with captured text output."""

    def run(self, args: Sequence[str]) -> ProcessResult:
        try:
            proc = subprocess.run(list(args), capture_output=True, text=True)
        except FileNotFoundError as e:
            raise ExternalToolError(Path(args[0]).name, 127, str(e)) from e
        return ProcessResult(proc.returncode, proc.stdout, proc.stderr)


def run_checked(runner: ProcessRunner, args: Sequence[str]) -> ProcessResult:
    """Run args and raise ExternalToolError on a non-zero exit status."""
    result = runner.run(args)
    if result.returncode != 0:
        raise ExternalToolError(Path(args[0]).name, result.returncode, result.stderr)
    return result
