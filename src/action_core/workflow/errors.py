"""Exceptions raised for host-side misuse of the action core.

Action, item, parameter and driver failures never surface as exceptions;
they are reported through Transition, JobStatus and RuleActionResult.
"""

from __future__ import annotations


class ActionCoreError(Exception):
    """Base class for action core setup errors."""


class DuplicateActionError(ActionCoreError, ValueError):
    def __init__(self, kind: str, name: str) -> None:
        super().__init__(f"{kind} action already registered: {name}")
        self.kind = kind
        self.name = name


class UnknownActionError(ActionCoreError, KeyError):
    def __init__(self, kind: str, name: str) -> None:
        super().__init__(f"No {kind} action registered under: {name}")
        self.kind = kind
        self.name = name

    def __str__(self) -> str:
        # KeyError would otherwise render the message with quotes.
        return str(self.args[0])


class JobRunFinishedError(ActionCoreError, RuntimeError):
    """Raised when a finished JobRun is modified."""
