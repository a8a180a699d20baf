from __future__ import annotations

from action_core.workflow.result import ErrorKind, Result, capture


def test_capture_wraps_return_value() -> None:
    result = capture(lambda x: x * 2, 21)
    assert result.ok
    assert result.value == 42


def test_capture_contains_exceptions_with_the_given_kind() -> None:
    def boom() -> None:
        raise RuntimeError("upstream unreachable")

    result = capture(boom, kind=ErrorKind.ITEM_FAILURE)
    assert not result.ok
    assert result.error_kind is ErrorKind.ITEM_FAILURE
    assert isinstance(result.error, RuntimeError)
    assert result.message == "upstream unreachable"


def test_capture_passes_returned_results_through() -> None:
    failed = Result.failure(ErrorKind.ITEM_FAILURE, message="bad record")
    assert capture(lambda: failed) is failed


def test_failure_message_falls_back_to_exception_type() -> None:
    result = Result.failure(ErrorKind.LOGIC_FAILURE, ValueError())
    assert result.message == "ValueError"
