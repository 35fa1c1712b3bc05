"""Launch external compiler invocations as independent child processes."""

from __future__ import annotations

import signal
import subprocess
import time
from dataclasses import dataclass, field
from typing import List, Literal, Optional, Sequence

from shaderbuild.data import CompileInvocation
from shaderbuild.logging import get_logger

logger = get_logger("Launcher")


class LaunchError(RuntimeError):
    """Raised when the OS cannot create the process for an invocation.

    Typical causes are a missing executable, a permission error or resource exhaustion. A
    compiler that starts and then fails is not a launch error.
    """

    def __init__(self, invocation: CompileInvocation, cause: OSError) -> None:
        self.invocation = invocation
        self.cause = cause
        super().__init__(f"Failed to launch {invocation.label}: {cause}")

    def describe(self) -> str:
        """Multi-line description of the failed invocation for operators."""
        lines = [
            f"Launch failed for {self.invocation.label}",
            f"  command: {' '.join(self.invocation.argv)}",
            f"  error:   {type(self.cause).__name__}: {self.cause}",
        ]
        if self.invocation.source is not None:
            lines.append(f"  source:  {self.invocation.source}")
        if self.invocation.destination is not None:
            lines.append(f"  output:  {self.invocation.destination}")
        return "\n".join(lines)


@dataclass
class ProcessResult:
    """Terminal status of one waited-on process."""

    invocation: CompileInvocation
    returncode: int
    elapsed: float = 0.0
    timed_out: bool = False

    @property
    def succeeded(self) -> bool:
        return self.returncode == 0 and not self.timed_out

    @property
    def signal(self) -> Optional[int]:
        """Number of the signal that ended the process, if it was killed by one."""
        return -self.returncode if self.returncode < 0 else None

    def detail(self) -> str:
        if self.timed_out:
            return f"timed out after {self.elapsed:.1f}s and was terminated"
        if self.signal is not None:
            try:
                name = signal.Signals(self.signal).name
            except ValueError:
                name = str(self.signal)
            return f"terminated by signal {name}"
        if self.returncode != 0:
            return f"exited with status {self.returncode}"
        return "succeeded"


class ProcessHandle:
    """A running child process and the invocation that spawned it.

    A handle is waited on exactly once, either through ``wait`` or ``terminate``. A second
    wait is a programming error.
    """

    invocation: CompileInvocation
    """The invocation this process runs."""

    _process: subprocess.Popen
    _started: float
    _result: Optional[ProcessResult]

    def __init__(self, invocation: CompileInvocation, process: subprocess.Popen) -> None:
        self.invocation = invocation
        self._process = process
        self._started = time.monotonic()
        self._result = None

    @property
    def pid(self) -> int:
        return self._process.pid

    @property
    def waited(self) -> bool:
        return self._result is not None

    @property
    def result(self) -> Optional[ProcessResult]:
        return self._result

    def wait(self, timeout: Optional[float] = None, grace: float = 5.0) -> ProcessResult:
        """Block until the process exits and release it.

        Parameters
        ----------
        timeout : Optional[float]
            Seconds to wait before the process is considered hung. ``None`` waits forever.
        grace : float
            Seconds between terminating a hung process and killing it.

        Returns
        -------
        ProcessResult
            The exit status. A hung process is reported with ``timed_out=True``.

        Raises
        ------
        RuntimeError
            If the handle was already waited on.
        """
        self._ensure_not_waited()
        try:
            returncode = self._process.wait(timeout=timeout)
        except subprocess.TimeoutExpired:
            logger.warning(
                f"{self.invocation.label} (pid {self.pid}) is still running, terminating"
            )
            returncode = self._stop(grace)
            return self._finish(returncode, timed_out=True)
        return self._finish(returncode)

    def terminate(self, grace: float = 5.0) -> ProcessResult:
        """Stop the process if it is still running and reap it."""
        self._ensure_not_waited()
        return self._finish(self._stop(grace))

    def _stop(self, grace: float) -> int:
        if self._process.poll() is None:
            self._process.terminate()
            try:
                return self._process.wait(timeout=grace)
            except subprocess.TimeoutExpired:
                self._process.kill()
        return self._process.wait()

    def _ensure_not_waited(self) -> None:
        if self._result is not None:
            raise RuntimeError(f"Process for {self.invocation.label} was already waited on")

    def _finish(self, returncode: int, timed_out: bool = False) -> ProcessResult:
        self._result = ProcessResult(
            invocation=self.invocation,
            returncode=returncode,
            elapsed=time.monotonic() - self._started,
            timed_out=timed_out,
        )
        return self._result

    def __repr__(self) -> str:
        return f"ProcessHandle({self.invocation.label!r}, pid={self.pid})"


@dataclass
class LaunchBatch:
    """Handles created by ``launch_all`` in launch order, plus collected launch errors."""

    handles: List[ProcessHandle] = field(default_factory=list)
    errors: List[LaunchError] = field(default_factory=list)


def launch(invocation: CompileInvocation) -> ProcessHandle:
    """Start the invocation without waiting for it.

    The child inherits this process's standard streams, so compiler diagnostics reach the
    operator unchanged.

    Parameters
    ----------
    invocation : CompileInvocation
        The command to run.

    Returns
    -------
    ProcessHandle
        Handle of the running process.

    Raises
    ------
    LaunchError
        If the OS could not create the process.
    """
    logger.debug(f"Launching {invocation.label}: {' '.join(invocation.argv)}")
    try:
        process = subprocess.Popen(invocation.argv)
    except OSError as e:
        raise LaunchError(invocation, e) from e
    return ProcessHandle(invocation, process)


def launch_all(
    invocations: Sequence[CompileInvocation],
    policy: Literal["fail_fast", "collect"] = "fail_fast",
    grace: float = 5.0,
) -> LaunchBatch:
    """Launch every invocation in order without waiting on any of them.

    Parameters
    ----------
    invocations : Sequence[CompileInvocation]
        Commands to start.
    policy : Literal["fail_fast", "collect"]
        With ``fail_fast``, the first launch error stops the batch: later invocations are not
        launched and the processes already started are terminated and reaped before the error
        propagates. With ``collect``, every invocation is attempted and launch errors are
        returned in ``LaunchBatch.errors``.
    grace : float
        Seconds between terminating and killing processes stopped by a fail-fast abort.

    Returns
    -------
    LaunchBatch
        The handles in launch order and, under ``collect``, the launch errors.

    Raises
    ------
    LaunchError
        Under ``fail_fast``, for the first invocation that could not be launched.
    """
    batch = LaunchBatch()
    for invocation in invocations:
        try:
            batch.handles.append(launch(invocation))
        except LaunchError as e:
            if policy == "collect":
                logger.error(e.describe())
                batch.errors.append(e)
                continue
            abort(batch.handles, grace)
            raise
    return batch


def abort(handles: Sequence[ProcessHandle], grace: float = 5.0) -> None:
    """Terminate and reap every handle that has not been waited on yet."""
    for handle in handles:
        if not handle.waited:
            logger.warning(f"Aborting {handle.invocation.label} (pid {handle.pid})")
            handle.terminate(grace)
