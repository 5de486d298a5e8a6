"""Typed interfaces for dependency build strategies."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Protocol

from ffcross.environment import BuildEnvironment
from ffcross.models import BuildOutcome, DependencyDescriptor
from ffcross.runner import Runner

Stage = Literal["configure", "compile", "install"]


@dataclass(frozen=True, slots=True)
class BuildStep:
    stage: Stage
    argv: tuple[str, ...]


class Builder(Protocol):
    def build(
        self,
        descriptor: DependencyDescriptor,
        environment: BuildEnvironment,
        *,
        runner: Runner,
    ) -> BuildOutcome:
        """Fetch, build and install one dependency, raising on any tool failure."""
