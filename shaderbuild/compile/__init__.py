"""Compile subsystem package.

This package turns a unit registry into running compiler processes and collects their results.
It includes:
- synthesize / synthesize_program_build: pure command-line synthesis
- launch / launch_all: start processes without waiting, with a launch-error policy
- supervise: wait on every process exactly once
- RunOutcome / report: aggregate result and exit code

The typical workflow is:
1. Synthesize invocations: invocations = synthesize_all(registry, config)
2. Launch them: batch = launch_all(invocations)
3. Drain them: outcome = supervise(batch.handles)
4. Report: exit_code = report(outcome)
"""

from .launcher import LaunchBatch, LaunchError, ProcessHandle, ProcessResult, launch, launch_all
from .report import EXIT_COMPILE_FAILURE, EXIT_LAUNCH_FAILURE, EXIT_SUCCESS, RunOutcome, report
from .supervisor import supervise
from .synthesizer import synthesize, synthesize_all, synthesize_program_build

__all__ = [
    "EXIT_COMPILE_FAILURE",
    "EXIT_LAUNCH_FAILURE",
    "EXIT_SUCCESS",
    "LaunchBatch",
    "LaunchError",
    "ProcessHandle",
    "ProcessResult",
    "RunOutcome",
    "launch",
    "launch_all",
    "report",
    "supervise",
    "synthesize",
    "synthesize_all",
    "synthesize_program_build",
]
