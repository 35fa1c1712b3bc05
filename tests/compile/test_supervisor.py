"""Tests for compile/supervisor.py."""

import sys
from typing import List
from unittest.mock import MagicMock

import pytest

from shaderbuild.compile import ProcessHandle, ProcessResult, RunOutcome, launch, supervise
from shaderbuild.data import CompileInvocation, ShaderStage


def _make_handle(unit: str, returncode: int = 0, order: List[str] = None) -> MagicMock:
    invocation = CompileInvocation(executable="slangc", unit=unit, stage=ShaderStage.FRAGMENT)
    handle = MagicMock(spec=ProcessHandle)
    handle.invocation = invocation

    def _wait(timeout=None, grace=5.0):
        if order is not None:
            order.append(unit)
        return ProcessResult(invocation, returncode)

    handle.wait.side_effect = _wait
    return handle


def test_supervise_waits_on_every_handle_once_in_launch_order():
    order: List[str] = []
    handles = [_make_handle(name, order=order) for name in ["a", "b", "c", "d"]]

    outcome = supervise(handles)

    for handle in handles:
        handle.wait.assert_called_once()
    assert order == ["a", "b", "c", "d"]
    assert outcome.launched == 4
    assert outcome.failed == 0
    assert outcome.succeeded


def test_supervise_drains_everything_after_a_failure():
    handles = [
        _make_handle("a", returncode=0),
        _make_handle("b", returncode=1),
        _make_handle("c", returncode=-9),
        _make_handle("d", returncode=0),
    ]

    outcome = supervise(handles)

    assert sum(h.wait.call_count for h in handles) == 4
    assert outcome.launched == 4
    assert outcome.failed == 2
    assert outcome.failed_labels() == ["b [fragment]", "c [fragment]"]
    assert not outcome.succeeded


def test_supervise_without_timeout_waits_forever():
    handle = _make_handle("a")
    supervise([handle])
    assert handle.wait.call_args.kwargs["timeout"] is None


def test_supervise_passes_remaining_time_budget():
    handles = [_make_handle("a"), _make_handle("b")]
    supervise(handles, timeout=30.0, grace=1.5)
    for handle in handles:
        timeout = handle.wait.call_args.kwargs["timeout"]
        assert 0.0 <= timeout <= 30.0
        assert handle.wait.call_args.kwargs["grace"] == 1.5


def test_supervise_appends_to_existing_outcome():
    outcome = RunOutcome()
    supervise([_make_handle("a")], outcome=outcome)
    returned = supervise([_make_handle("b", returncode=2)], outcome=outcome)
    assert returned is outcome
    assert outcome.launched == 2
    assert outcome.failed == 1


def test_supervise_nothing():
    outcome = supervise([])
    assert outcome.launched == 0
    assert outcome.succeeded


@pytest.mark.requires_posix
def test_supervise_real_processes_out_of_completion_order():
    slow = CompileInvocation(
        executable=sys.executable, arguments=["-c", "import time; time.sleep(0.5)"], unit="slow"
    )
    fast = CompileInvocation(
        executable=sys.executable, arguments=["-c", "import sys; sys.exit(4)"], unit="fast"
    )
    handles = [launch(slow), launch(fast)]

    outcome = supervise(handles, timeout=30.0)

    assert [r.invocation.unit for r in outcome.results] == ["slow", "fast"]
    assert [r.returncode for r in outcome.results] == [0, 4]
    assert all(h.waited for h in handles)


@pytest.mark.requires_posix
def test_supervise_terminates_stragglers_past_deadline():
    hung = CompileInvocation(
        executable=sys.executable, arguments=["-c", "import time; time.sleep(60)"], unit="hung"
    )
    quick = CompileInvocation(executable=sys.executable, arguments=["-c", "pass"], unit="quick")
    handles = [launch(hung), launch(quick)]

    outcome = supervise(handles, timeout=0.5, grace=5.0)

    hung_result, quick_result = outcome.results
    assert hung_result.timed_out
    assert quick_result.succeeded
    assert outcome.failed_labels() == ["hung"]


if __name__ == "__main__":
    pytest.main(sys.argv)
