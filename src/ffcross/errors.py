"""Typed error model with stable, machine-readable error codes and exit statuses."""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ffcross.models import FallbackReport


class ErrorCode(StrEnum):
    """Stable error identifiers used across the CLI and logs."""

    VALIDATION = "E_VALIDATION"
    UNSUPPORTED_DEPENDENCY = "E_UNSUPPORTED_DEPENDENCY"
    COMMAND = "E_COMMAND"
    FETCH = "E_FETCH"
    BUILD = "E_BUILD"
    CROSS_BUILD = "E_CROSS_BUILD"


class FfcrossError(Exception):
    """Base error class that carries code, exit status, optional hint, and context."""

    code: str
    exit_code: int
    hint: str | None
    context: Mapping[str, str]
    report: FallbackReport | None = None

    def __init__(
        self,
        message: str,
        *,
        code: ErrorCode,
        exit_code: int = 1,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code.value
        self.exit_code = exit_code if exit_code != 0 else 1
        self.hint = hint
        self.context = dict(context or {})

    def __str__(self) -> str:
        parts = [super().__str__()]
        if self.hint:
            parts.append(f"Hint: {self.hint}")
        if self.context:
            for k, v in self.context.items():
                if v:
                    parts.append(f"  {k}: {v}")
        return "\n".join(parts)

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {
            "code": self.code,
            "exit_code": self.exit_code,
            "message": str(self),
            "context": dict(self.context),
        }
        if self.hint is not None:
            payload["hint"] = self.hint
        return payload


class ValidationError(FfcrossError):
    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(message, code=ErrorCode.VALIDATION, hint=hint, context=context)


class UnsupportedDependencyError(FfcrossError):
    """Raised for a package name with no entry in the descriptor table."""

    def __init__(self, name: str, *, hint: str | None = None) -> None:
        super().__init__(
            f"No source fallback defined for missing package: {name}",
            code=ErrorCode.UNSUPPORTED_DEPENDENCY,
            exit_code=1,
            hint=hint or "Add a descriptor for this package to ffcross.catalog.",
            context={"dependency": name},
        )
        self.name = name


class CommandError(FfcrossError):
    """An external tool exited non-zero; ``exit_code`` is the tool's own status."""

    def __init__(
        self,
        message: str,
        *,
        returncode: int,
        code: ErrorCode = ErrorCode.COMMAND,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(message, code=code, exit_code=returncode, hint=hint, context=context)
        self.returncode = returncode


class FetchError(CommandError):
    def __init__(
        self,
        message: str,
        *,
        returncode: int,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(
            message,
            returncode=returncode,
            code=ErrorCode.FETCH,
            hint=hint,
            context=context,
        )


class BuildError(CommandError):
    def __init__(
        self,
        message: str,
        *,
        returncode: int,
        stage: str,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(
            message,
            returncode=returncode,
            code=ErrorCode.BUILD,
            hint=hint,
            context={"stage": stage, **(context or {})},
        )
        self.stage = stage


class CrossBuildError(FfcrossError):
    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(message, code=ErrorCode.CROSS_BUILD, hint=hint, context=context)


__all__ = [
    "BuildError",
    "CommandError",
    "CrossBuildError",
    "ErrorCode",
    "FetchError",
    "FfcrossError",
    "UnsupportedDependencyError",
    "ValidationError",
]
