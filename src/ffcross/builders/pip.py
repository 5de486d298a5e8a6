"""User-scoped pip install for auxiliary Python tools needed by the build."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field

from ffcross.environment import BuildEnvironment
from ffcross.errors import BuildError
from ffcross.models import BuildOutcome, DependencyDescriptor, OutcomeStatus
from ffcross.runner import Runner


@dataclass(slots=True)
class PipBuilder:
    python: str = field(default_factory=lambda: sys.executable or "python3")

    def build(
        self,
        descriptor: DependencyDescriptor,
        environment: BuildEnvironment,
        *,
        runner: Runner,
    ) -> BuildOutcome:
        command = (
            self.python,
            "-m",
            "pip",
            "install",
            "--user",
            "--no-cache-dir",
            "--break-system-packages",
            *descriptor.extra_args,
            descriptor.source,
        )
        result = runner(command, env=environment.env)
        if not result.ok:
            raise BuildError(
                f"pip install failed for {descriptor.name}.",
                returncode=result.returncode,
                stage="install",
                hint="Check that pip is available for this interpreter.",
                context={
                    "builder": "pip",
                    "dependency": descriptor.name,
                    "command": result.command,
                    "returncode": str(result.returncode),
                },
            )
        return BuildOutcome(
            name=descriptor.name,
            status=OutcomeStatus.INSTALLED,
            project=descriptor.project,
            strategy=descriptor.strategy,
        )
