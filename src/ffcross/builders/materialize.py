"""Shared clone-then-build procedure for compiled dependencies."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path

from ffcross.builders.base import BuildStep
from ffcross.environment import BuildEnvironment
from ffcross.errors import BuildError
from ffcross.fetch import shallow_clone
from ffcross.models import BuildOutcome, DependencyDescriptor, OutcomeStatus
from ffcross.runner import Runner


def build_from_source(
    *,
    builder_name: str,
    descriptor: DependencyDescriptor,
    environment: BuildEnvironment,
    runner: Runner,
    steps: Callable[[Path], Sequence[BuildStep]],
) -> BuildOutcome:
    """Clone ``descriptor`` fresh and run ``steps(checkout)`` inside the checkout.

    The first step with a non-zero exit raises :class:`BuildError` carrying
    that tool's status; later steps are not run.
    """
    checkout = environment.checkout_dir(descriptor.project)
    shallow_clone(descriptor.source, checkout, runner=runner, env=environment.env)

    for step in steps(checkout):
        result = runner(step.argv, cwd=checkout, env=environment.env)
        if not result.ok:
            raise BuildError(
                f"{builder_name} {step.stage} step failed for {descriptor.name}.",
                returncode=result.returncode,
                stage=step.stage,
                hint=f"Inspect the {builder_name} output above for {descriptor.project}.",
                context={
                    "builder": builder_name,
                    "dependency": descriptor.name,
                    "checkout": str(checkout),
                    "command": result.command,
                    "returncode": str(result.returncode),
                },
            )

    return BuildOutcome(
        name=descriptor.name,
        status=OutcomeStatus.INSTALLED,
        project=descriptor.project,
        strategy=descriptor.strategy,
        checkout=checkout,
    )
