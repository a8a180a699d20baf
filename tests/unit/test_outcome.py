"""Unit tests for the shared outcome vocabulary."""

from __future__ import annotations

import pytest

from action_core.workflow.outcome import RESERVED_TRANSITIONS, JobStatus, Transition


def test_reserved_transitions_always_exist() -> None:
    assert Transition.OK.name == "OK"
    assert Transition.NOK.name == "NOK"
    assert RESERVED_TRANSITIONS == {Transition.OK, Transition.NOK}
    assert Transition.OK.is_reserved


def test_custom_transitions_compare_by_name() -> None:
    wait = Transition.of("wait")
    assert wait == Transition("WAIT")
    assert wait != Transition.OK
    assert not wait.is_reserved
    assert str(wait) == "WAIT"
    assert Transition(" ok ") == Transition.OK


@pytest.mark.parametrize("name", ["", "   "])
def test_transition_rejects_empty_names(name: str) -> None:
    with pytest.raises(ValueError):
        Transition(name)


def test_job_status_severity_order() -> None:
    assert JobStatus.SUCCESS.severity < JobStatus.WARNING.severity < JobStatus.ERROR.severity
    assert JobStatus.ABORTED.severity is None


def test_worst_status_prefers_aborted_then_severity() -> None:
    assert JobStatus.worst() == JobStatus.SUCCESS
    assert JobStatus.worst(JobStatus.SUCCESS, JobStatus.WARNING) == JobStatus.WARNING
    assert JobStatus.worst(JobStatus.ERROR, JobStatus.WARNING) == JobStatus.ERROR
    assert JobStatus.worst(JobStatus.ERROR, JobStatus.ABORTED) == JobStatus.ABORTED
