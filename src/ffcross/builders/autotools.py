"""GNU autotools builder."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from ffcross.builders.base import BuildStep
from ffcross.builders.materialize import build_from_source
from ffcross.environment import BuildEnvironment
from ffcross.models import BuildOutcome, DependencyDescriptor
from ffcross.runner import Runner


@dataclass(slots=True)
class AutotoolsBuilder:
    make: str = "make"

    def build(
        self,
        descriptor: DependencyDescriptor,
        environment: BuildEnvironment,
        *,
        runner: Runner,
    ) -> BuildOutcome:
        def steps(checkout: Path) -> list[BuildStep]:
            autogen = checkout / "autogen.sh"
            if autogen.is_file() and os.access(autogen, os.X_OK):
                bootstrap = ("./autogen.sh",)
            else:
                bootstrap = ("autoreconf", "-fiv")
            return [
                BuildStep("configure", bootstrap),
                BuildStep(
                    "configure",
                    (
                        "./configure",
                        f"--prefix={environment.prefix}",
                        "--enable-static",
                        "--disable-shared",
                        *descriptor.extra_args,
                    ),
                ),
                BuildStep("compile", (self.make, f"-j{environment.jobs}")),
                BuildStep("install", (self.make, "install")),
            ]

        return build_from_source(
            builder_name="autotools",
            descriptor=descriptor,
            environment=environment,
            runner=runner,
            steps=steps,
        )
