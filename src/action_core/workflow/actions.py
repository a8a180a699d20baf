from __future__ import annotations

import logging
from collections.abc import Collection
from typing import Protocol

from .context import ActionContext, context_code, describe_entity
from .outcome import RESERVED_TRANSITIONS, Transition
from .result import ErrorKind, Result, capture


class SimpleDecisionAction(Protocol):
    """A binary decision over the workflow subject.

    `decide` returns True for the OK path and False for the NOK path.
    """

    name: str
    entity: str

    def decide(self, subject: object, context: ActionContext) -> bool: ...


class DecisionAction(Protocol):
    """A decision with more than two outcomes.

    `transitions` declares the custom labels `decide` may return in addition
    to OK and NOK.
    """

    name: str
    entity: str
    transitions: Collection[Transition]

    def decide(self, subject: object, context: ActionContext) -> Transition: ...


class ActionExecutor:
    """Run one decision action against a context and return exactly one Transition.

    Never raises: a missing subject, a failing decision, or an undeclared
    outcome all map to `Transition.NOK`. No retries happen here; the
    orchestrator re-invokes if it wants another attempt.
    """

    def __init__(
        self,
        action: SimpleDecisionAction | DecisionAction,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        self._action = action
        self._logger = logger or logging.getLogger(__name__)
        declared = getattr(action, "transitions", ())
        self._allowed = RESERVED_TRANSITIONS | frozenset(declared)

    @property
    def action(self) -> SimpleDecisionAction | DecisionAction:
        return self._action

    @property
    def allowed_transitions(self) -> frozenset[Transition]:
        return self._allowed

    def execute(self, context: ActionContext) -> Transition:
        name = self._action.name
        code = context_code(context)

        resolved = capture(
            lambda: context.entity(self._action.entity), kind=ErrorKind.MISSING_INPUT
        )
        if not resolved.ok or resolved.value is None:
            self._logger.warning(
                "Action subject missing",
                extra={
                    "action": name,
                    "code": code,
                    "entity": self._action.entity,
                    "error_kind": ErrorKind.MISSING_INPUT.value,
                    "reason": resolved.message or "not found",
                },
            )
            return Transition.NOK

        subject = resolved.value
        entity_id = describe_entity(subject)
        self._logger.debug(
            "Executing action", extra={"action": name, "code": code, "entity_id": entity_id}
        )

        decided = capture(self._action.decide, subject, context)
        outcome = self._to_transition(decided)
        if not outcome.ok:
            self._logger.error(
                "Action failed unexpectedly",
                exc_info=outcome.error,
                extra={
                    "action": name,
                    "code": code,
                    "entity_id": entity_id,
                    "error_kind": ErrorKind.LOGIC_FAILURE.value,
                    "reason": outcome.message,
                },
            )
            return Transition.NOK

        transition = outcome.value or Transition.NOK
        level = logging.INFO if transition != Transition.NOK else logging.WARNING
        self._logger.log(
            level,
            "Action completed",
            extra={
                "action": name,
                "code": code,
                "entity_id": entity_id,
                "transition": transition.name,
            },
        )
        return transition

    def _to_transition(self, decided: Result[object]) -> Result[Transition]:
        if not decided.ok:
            return decided  # type: ignore[return-value]

        value = decided.value
        if isinstance(value, bool):
            return Result.success(Transition.OK if value else Transition.NOK)
        if isinstance(value, Transition):
            if value in self._allowed:
                return Result.success(value)
            return Result.failure(
                ErrorKind.LOGIC_FAILURE, message=f"Undeclared transition: {value.name}"
            )
        return Result.failure(
            ErrorKind.LOGIC_FAILURE,
            message=f"Decision returned {type(value).__name__}, expected bool or Transition",
        )
