"""Plain Makefile builder for projects with a bespoke install target."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ffcross.builders.base import BuildStep
from ffcross.builders.materialize import build_from_source
from ffcross.environment import BuildEnvironment
from ffcross.models import BuildOutcome, DependencyDescriptor
from ffcross.runner import Runner


@dataclass(slots=True)
class MakeBuilder:
    tool: str = "make"

    def build(
        self,
        descriptor: DependencyDescriptor,
        environment: BuildEnvironment,
        *,
        runner: Runner,
    ) -> BuildOutcome:
        def steps(_: Path) -> list[BuildStep]:
            return [
                BuildStep("compile", (self.tool, f"-j{environment.jobs}", *descriptor.extra_args)),
                BuildStep(
                    "install",
                    (self.tool, "install", f"PREFIX={environment.prefix}", "STATIC=1"),
                ),
            ]

        return build_from_source(
            builder_name="make",
            descriptor=descriptor,
            environment=environment,
            runner=runner,
            steps=steps,
        )
