"""Meson/ninja builder."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ffcross.builders.base import BuildStep
from ffcross.builders.materialize import build_from_source
from ffcross.environment import BuildEnvironment
from ffcross.models import BuildOutcome, DependencyDescriptor
from ffcross.runner import Runner


@dataclass(slots=True)
class MesonBuilder:
    tool: str = "meson"
    driver: str = "ninja"
    build_dir: str = "build"

    def build(
        self,
        descriptor: DependencyDescriptor,
        environment: BuildEnvironment,
        *,
        runner: Runner,
    ) -> BuildOutcome:
        def steps(_: Path) -> list[BuildStep]:
            return [
                BuildStep(
                    "configure",
                    (
                        self.tool,
                        "setup",
                        self.build_dir,
                        f"--prefix={environment.prefix}",
                        "--buildtype=release",
                        "-Ddefault_library=static",
                        *descriptor.extra_args,
                    ),
                ),
                BuildStep("compile", (self.driver, "-C", self.build_dir)),
                BuildStep("install", (self.driver, "-C", self.build_dir, "install")),
            ]

        return build_from_source(
            builder_name="meson",
            descriptor=descriptor,
            environment=environment,
            runner=runner,
            steps=steps,
        )
