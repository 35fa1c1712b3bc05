"""Aggregate result of a build run."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from shaderbuild.data import CompileInvocation
from shaderbuild.logging import get_logger

from .launcher import LaunchError, ProcessResult

EXIT_SUCCESS = 0
EXIT_COMPILE_FAILURE = 1
EXIT_LAUNCH_FAILURE = 2


@dataclass
class RunOutcome:
    """Everything observed during one run, filled in while handles are drained."""

    results: List[ProcessResult] = field(default_factory=list)
    """Terminal status of every waited-on process, in wait order."""
    launch_errors: List[LaunchError] = field(default_factory=list)
    """Invocations that could not be launched (``collect`` launch policy only)."""
    skipped: List[CompileInvocation] = field(default_factory=list)
    """Invocations that were deliberately not launched, e.g. a program build gated on shaders."""

    def record(self, result: ProcessResult) -> None:
        self.results.append(result)

    @property
    def launched(self) -> int:
        return len(self.results)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if not r.succeeded) + len(self.launch_errors)

    @property
    def failures(self) -> List[Tuple[CompileInvocation, str]]:
        """``(invocation, detail)`` for every failed launch and every failed process."""
        failures = [
            (e.invocation, f"could not be launched: {e.cause}") for e in self.launch_errors
        ]
        failures.extend((r.invocation, r.detail()) for r in self.results if not r.succeeded)
        return failures

    @property
    def succeeded(self) -> bool:
        return self.failed == 0 and not self.skipped

    @property
    def exit_code(self) -> int:
        if self.launch_errors:
            return EXIT_LAUNCH_FAILURE
        if not self.succeeded:
            return EXIT_COMPILE_FAILURE
        return EXIT_SUCCESS

    def failed_labels(self) -> List[str]:
        return [invocation.label for invocation, _ in self.failures]


def report(outcome: RunOutcome, logger: Optional[logging.Logger] = None) -> int:
    """Log a summary of the run and return the process exit code.

    Parameters
    ----------
    outcome : RunOutcome
        The drained run.
    logger : Optional[logging.Logger]
        Destination of the summary. Defaults to the ``shaderbuild.Report`` logger.

    Returns
    -------
    int
        ``0`` if every process succeeded, ``1`` if any compile failed or was skipped, ``2`` if
        any invocation could not be launched.
    """
    logger = logger or get_logger("Report")
    for invocation, detail in outcome.failures:
        logger.error(f"FAILED {invocation.label}: {detail}")
    for invocation in outcome.skipped:
        logger.warning(f"SKIPPED {invocation.label}")

    if outcome.succeeded:
        logger.info(f"Build succeeded: {outcome.launched} process(es) completed")
    else:
        logger.error(
            f"Build failed: {outcome.failed} of {outcome.launched + len(outcome.launch_errors)} "
            f"invocation(s) failed, {len(outcome.skipped)} skipped"
        )
    return outcome.exit_code
