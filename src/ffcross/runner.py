"""External command execution with explicit results instead of exit-on-error."""

from __future__ import annotations

import subprocess
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from ffcross.errors import CommandError

COMMAND_NOT_FOUND = 127
STDERR_TAIL = 2000


@dataclass(frozen=True, slots=True)
class CommandResult:
    argv: tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def command(self) -> str:
        return " ".join(self.argv)

    def check(self, *, operation: str, hint: str | None = None) -> CommandResult:
        if not self.ok:
            raise CommandError(
                f"{operation} failed.",
                returncode=self.returncode,
                hint=hint,
                context=self.error_context(operation),
            )
        return self

    def error_context(self, operation: str) -> dict[str, str]:
        return {
            "operation": operation,
            "command": self.command,
            "returncode": str(self.returncode),
            "stderr": self.stderr[-STDERR_TAIL:] if self.stderr else "",
        }


class Runner(Protocol):
    def __call__(
        self,
        argv: Sequence[str],
        *,
        cwd: Path | None = None,
        env: Mapping[str, str] | None = None,
        capture: bool = False,
    ) -> CommandResult:
        """Run ``argv`` to completion and report its status."""


@dataclass(slots=True)
class SubprocessRunner:
    """Run tools synchronously; output is inherited unless ``capture`` is set."""

    def __call__(
        self,
        argv: Sequence[str],
        *,
        cwd: Path | None = None,
        env: Mapping[str, str] | None = None,
        capture: bool = False,
    ) -> CommandResult:
        command = tuple(str(arg) for arg in argv)
        try:
            completed = subprocess.run(
                list(command),
                cwd=str(cwd) if cwd is not None else None,
                env=dict(env) if env is not None else None,
                capture_output=capture,
                text=True,
                check=False,
            )
        except FileNotFoundError as exc:
            return CommandResult(argv=command, returncode=COMMAND_NOT_FOUND, stderr=str(exc))
        return CommandResult(
            argv=command,
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )
