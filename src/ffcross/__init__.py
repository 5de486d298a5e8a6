"""Public package entrypoint for the FFmpeg ARM64 cross-build tooling."""

from .catalog import DESCRIPTORS, lookup, supported_names
from .environment import BuildEnvironment
from .errors import (
    BuildError,
    CommandError,
    CrossBuildError,
    ErrorCode,
    FetchError,
    FfcrossError,
    UnsupportedDependencyError,
    ValidationError,
)
from .fallback import build_missing
from .models import (
    BuildOutcome,
    BuildStrategy,
    DependencyDescriptor,
    FallbackReport,
    OutcomeStatus,
)

__all__ = [
    "DESCRIPTORS",
    "BuildEnvironment",
    "BuildError",
    "BuildOutcome",
    "BuildStrategy",
    "CommandError",
    "CrossBuildError",
    "DependencyDescriptor",
    "ErrorCode",
    "FallbackReport",
    "FetchError",
    "FfcrossError",
    "OutcomeStatus",
    "UnsupportedDependencyError",
    "ValidationError",
    "build_missing",
    "lookup",
    "supported_names",
]
