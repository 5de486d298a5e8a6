"""Build strategies and the strategy registry."""

from collections.abc import Mapping
from types import MappingProxyType

from ffcross.models import BuildStrategy

from .autotools import AutotoolsBuilder
from .base import Builder, BuildStep
from .cmake import CMakeBuilder
from .make import MakeBuilder
from .meson import MesonBuilder
from .pip import PipBuilder

BUILDERS: Mapping[BuildStrategy, Builder] = MappingProxyType(
    {
        BuildStrategy.AUTOTOOLS: AutotoolsBuilder(),
        BuildStrategy.MESON: MesonBuilder(),
        BuildStrategy.CMAKE: CMakeBuilder(),
        BuildStrategy.MAKE: MakeBuilder(),
        BuildStrategy.PIP: PipBuilder(),
    }
)


def builder_for(strategy: BuildStrategy) -> Builder:
    return BUILDERS[strategy]


__all__ = [
    "BUILDERS",
    "AutotoolsBuilder",
    "BuildStep",
    "Builder",
    "CMakeBuilder",
    "MakeBuilder",
    "MesonBuilder",
    "PipBuilder",
    "builder_for",
]
