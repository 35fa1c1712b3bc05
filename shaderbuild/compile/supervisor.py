"""Wait on launched processes and record their outcome."""

from __future__ import annotations

import time
from typing import Optional, Sequence

from shaderbuild.logging import get_logger

from .launcher import ProcessHandle
from .report import RunOutcome

logger = get_logger("Supervisor")


def supervise(
    handles: Sequence[ProcessHandle],
    timeout: Optional[float] = None,
    grace: float = 5.0,
    outcome: Optional[RunOutcome] = None,
) -> RunOutcome:
    """Wait on every handle exactly once, in launch order, and record each exit status.

    All processes are already running when the first wait starts, so a later handle may finish
    first; only the traversal order is fixed. A failed process never stops the drain.

    Parameters
    ----------
    handles : Sequence[ProcessHandle]
        Handles in launch order. None of them may have been waited on.
    timeout : Optional[float]
        Overall deadline in seconds, measured from the start of the drain. Processes still
        running past it are terminated and recorded as timed out. ``None`` waits forever.
    grace : float
        Seconds between terminating and killing a process that outlived the deadline.
    outcome : Optional[RunOutcome]
        Outcome to append to. A fresh one is created if omitted.

    Returns
    -------
    RunOutcome
        The outcome with one result per handle.
    """
    outcome = outcome if outcome is not None else RunOutcome()
    deadline = time.monotonic() + timeout if timeout is not None else None

    for handle in handles:
        remaining = None if deadline is None else max(0.0, deadline - time.monotonic())
        result = handle.wait(timeout=remaining, grace=grace)
        outcome.record(result)
        if result.succeeded:
            logger.info(f"{result.invocation.label} finished in {result.elapsed:.2f}s")
        else:
            logger.error(f"{result.invocation.label} {result.detail()}")
    return outcome
