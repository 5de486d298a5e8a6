"""Data model for dependency descriptors and build outcomes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path


class BuildStrategy(StrEnum):
    AUTOTOOLS = "autotools"
    MESON = "meson"
    CMAKE = "cmake"
    MAKE = "make"
    PIP = "pip"


class OutcomeStatus(StrEnum):
    INSTALLED = "installed"
    UNSUPPORTED = "unsupported"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class DependencyDescriptor:
    """How to fetch and build one package the system repositories lack.

    ``source`` is a git URL for compiled strategies and a requirement string
    for :attr:`BuildStrategy.PIP`. ``project`` names the scratch checkout.
    """

    name: str
    project: str
    source: str
    strategy: BuildStrategy
    extra_args: tuple[str, ...] = ()

    @property
    def compiled(self) -> bool:
        return self.strategy is not BuildStrategy.PIP


@dataclass(frozen=True, slots=True)
class BuildOutcome:
    name: str
    status: OutcomeStatus
    project: str | None = None
    strategy: BuildStrategy | None = None
    checkout: Path | None = None
    error: str | None = None


@dataclass(slots=True)
class FallbackReport:
    outcomes: list[BuildOutcome] = field(default_factory=list)

    @property
    def installed(self) -> list[str]:
        return [o.name for o in self.outcomes if o.status is OutcomeStatus.INSTALLED]

    def outcome_for(self, name: str) -> BuildOutcome | None:
        for outcome in self.outcomes:
            if outcome.name == name:
                return outcome
        return None
