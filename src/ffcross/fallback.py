"""Build dependencies the system package repositories could not supply.

Names are handled strictly in order and the first failure aborts the whole
run: an unknown name raises :class:`UnsupportedDependencyError`, and any tool
failure raises the :class:`CommandError` from the builder. Dependencies that
were already installed stay in the prefix.
"""

from __future__ import annotations

from collections.abc import Sequence

from ffcross.builders import builder_for
from ffcross.catalog import lookup
from ffcross.environment import BuildEnvironment
from ffcross.errors import CommandError, UnsupportedDependencyError
from ffcross.models import BuildOutcome, FallbackReport, OutcomeStatus
from ffcross.observability import StructuredLogger
from ffcross.runner import Runner, SubprocessRunner

OPERATION = "build_missing"


def build_missing(
    names: Sequence[str],
    *,
    environment: BuildEnvironment,
    runner: Runner | None = None,
    logger: StructuredLogger | None = None,
    report: FallbackReport | None = None,
) -> FallbackReport:
    """Build and install every name in ``names`` into ``environment.prefix``.

    On failure the raised error carries the partial report as ``report``;
    pass ``report`` to fill a caller-owned one instead.
    """
    runner = runner or SubprocessRunner()
    logger = logger or StructuredLogger()
    report = report if report is not None else FallbackReport()

    if not names:
        logger.info(OPERATION, "No missing packages specified for source fallback.")
        return report

    directories_ready = False
    for name in names:
        try:
            descriptor = lookup(name)
        except UnsupportedDependencyError as exc:
            report.outcomes.append(
                BuildOutcome(name=name, status=OutcomeStatus.UNSUPPORTED, error=str(exc))
            )
            logger.error(OPERATION, f"No source fallback defined for {name}", dependency=name)
            exc.report = report
            raise

        if descriptor.compiled and not directories_ready:
            environment.ensure_directories()
            directories_ready = True

        logger.info(
            OPERATION,
            f"Building {name} from {descriptor.source} ({descriptor.strategy})",
            dependency=name,
            strategy=descriptor.strategy.value,
        )
        try:
            outcome = builder_for(descriptor.strategy).build(descriptor, environment, runner=runner)
        except CommandError as exc:
            report.outcomes.append(
                BuildOutcome(
                    name=name,
                    status=OutcomeStatus.FAILED,
                    project=descriptor.project,
                    strategy=descriptor.strategy,
                    checkout=environment.checkout_dir(descriptor.project)
                    if descriptor.compiled
                    else None,
                    error=str(exc),
                )
            )
            logger.error(
                OPERATION,
                f"{name} failed with exit status {exc.returncode}",
                dependency=name,
                strategy=descriptor.strategy.value,
                extra={"code": exc.code},
            )
            exc.report = report
            raise

        report.outcomes.append(outcome)
        logger.success(
            OPERATION,
            f"Installed {name}",
            dependency=name,
            strategy=descriptor.strategy.value,
        )

    return report
