"""Bridge for invoking the external command that regenerates an output directory.

The API is intentionally small: a runner takes a program plus its arguments,
lets the child share this process's stdin/stdout/stderr so interactive output
stays visible, and returns the exit status. Tests swap in their own runner.
"""
from __future__ import annotations

import subprocess
from typing import List, Protocol, Sequence

from .errors import GenerationError


class CommandRunner(Protocol):
    def run(self, program: str, args: Sequence[str]) -> int:
        ...


class SubprocessRunner:
    """Runs commands as child processes with inherited standard streams."""

    def run(self, program: str, args: Sequence[str]) -> int:
        argv: List[str] = [program, *args]
        try:
            proc = subprocess.run(argv)
        except OSError as e:
            raise GenerationError(f"Failed to start `{format_command(program, args)}`: {e}") from e
        return proc.returncode


def format_command(program: str, args: Sequence[str]) -> str:
    return " ".join([program, *args])


__all__ = ["CommandRunner", "SubprocessRunner", "format_command"]
