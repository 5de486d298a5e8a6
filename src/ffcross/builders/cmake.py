"""CMake builder."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ffcross.builders.base import BuildStep
from ffcross.builders.materialize import build_from_source
from ffcross.environment import BuildEnvironment
from ffcross.models import BuildOutcome, DependencyDescriptor
from ffcross.runner import Runner


@dataclass(slots=True)
class CMakeBuilder:
    tool: str = "cmake"
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
                        "-B",
                        self.build_dir,
                        "-S",
                        ".",
                        "-DCMAKE_BUILD_TYPE=Release",
                        f"-DCMAKE_INSTALL_PREFIX={environment.prefix}",
                        "-DBUILD_SHARED_LIBS=OFF",
                        *descriptor.extra_args,
                    ),
                ),
                BuildStep(
                    "compile",
                    (self.tool, "--build", self.build_dir, f"-j{environment.jobs}"),
                ),
                BuildStep("install", (self.tool, "--install", self.build_dir)),
            ]

        return build_from_source(
            builder_name="cmake",
            descriptor=descriptor,
            environment=environment,
            runner=runner,
            steps=steps,
        )
