"""Rule-triggered actions.

A rule engine resolves a rule's action parameters and calls
`RuleActionAdapter.apply`. The adapter validates the parameters against the
action's pydantic model, runs the action, and hands back the derived facts.
Inserting those facts into working memory stays with the rule engine.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, ClassVar, Protocol

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .context import ActionContext, context_code
from .result import ErrorKind, Result, capture


class RuleAction(Protocol):
    """An action executed when a rule fires.

    `parameters` is a pydantic model class declaring parameter names, types
    and domain checks. `perform` receives a validated instance of it and
    returns (or yields) the facts describing the action's effect.
    """

    name: str
    parameters: type[BaseModel]

    def perform(self, params: Any, context: ActionContext) -> Iterable[object] | None: ...


@dataclass(frozen=True, slots=True)
class RuleActionResult:
    applied: bool
    facts: tuple[object, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "facts", tuple(self.facts))
        if not self.applied and self.facts:
            raise ValueError("A rejected rule action cannot emit facts")

    @classmethod
    def rejected(cls) -> RuleActionResult:
        return cls(applied=False)


class RuleActionAdapter:
    """Apply one RuleAction with the same containment as ActionExecutor.

    Invalid parameters are an expected outcome: `applied=False`, no facts,
    a warning in the log. Unexpected failures inside the action are logged
    as errors and also reported as `applied=False`.
    """

    def __init__(
        self,
        action: RuleAction,
        *,
        log_parameters: bool = True,
        logger: logging.Logger | None = None,
    ) -> None:
        self._action = action
        self._log_parameters = log_parameters
        self._logger = logger or logging.getLogger(__name__)

    @property
    def action(self) -> RuleAction:
        return self._action

    def apply(self, context: ActionContext) -> RuleActionResult:
        name = self._action.name
        code = context_code(context)

        parsed = self._parse(context)
        if parsed.error_kind is ErrorKind.LOGIC_FAILURE:
            self._logger.error(
                "Rule action parameters could not be validated",
                exc_info=parsed.error,
                extra={
                    "action": name,
                    "code": code,
                    "error_kind": ErrorKind.LOGIC_FAILURE.value,
                },
            )
            return RuleActionResult.rejected()
        if not parsed.ok:
            self._logger.warning(
                "Invalid rule action parameters",
                extra={
                    "action": name,
                    "code": code,
                    "error_kind": (parsed.error_kind or ErrorKind.INVALID_PARAMETER).value,
                    "errors": self._describe_errors(parsed),
                },
            )
            return RuleActionResult.rejected()

        performed = capture(self._collect, parsed.value, context)
        if not performed.ok:
            self._logger.error(
                "Rule action failed unexpectedly",
                exc_info=performed.error,
                extra={
                    "action": name,
                    "code": code,
                    "error_kind": ErrorKind.LOGIC_FAILURE.value,
                    "parameters": self._loggable_parameters(parsed.value),
                },
            )
            return RuleActionResult.rejected()

        facts = performed.value or ()
        self._logger.info(
            "Rule action applied",
            extra={"action": name, "code": code, "facts": len(facts)},
        )
        return RuleActionResult(applied=True, facts=facts)

    def _parse(self, context: ActionContext) -> Result[BaseModel]:
        try:
            raw = dict(context.parameters)
        except Exception as exc:
            return Result.failure(ErrorKind.MISSING_INPUT, exc)
        try:
            params = self._action.parameters.model_validate(raw, strict=True)
        except ValidationError as exc:
            return Result.failure(ErrorKind.INVALID_PARAMETER, exc)
        except Exception as exc:
            # Validators raising anything but ValueError/AssertionError bypass ValidationError.
            return Result.failure(ErrorKind.LOGIC_FAILURE, exc)
        return Result.success(params)

    def _collect(self, params: BaseModel, context: ActionContext) -> tuple[object, ...]:
        return tuple(self._action.perform(params, context) or ())

    def _describe_errors(self, parsed: Result[BaseModel]) -> object:
        if isinstance(parsed.error, ValidationError):
            return parsed.error.errors(
                include_url=False,
                include_context=False,
                include_input=self._log_parameters,
            )
        return parsed.message

    def _loggable_parameters(self, params: BaseModel | None) -> object:
        if params is None or not self._log_parameters:
            return None
        dumped = capture(params.model_dump, mode="json")
        return dumped.value if dumped.ok else None


class LoyaltyPointsParameters(BaseModel):
    model_config = ConfigDict(frozen=True)

    points: Decimal = Field(gt=0, description="Loyalty points to award")


@dataclass(frozen=True, slots=True)
class LoyaltyPointsAward:
    """Fact: loyalty points granted by a promotion rule."""

    points: Decimal
    rule_code: str | None = None


class AwardLoyaltyPoints:
    """Award loyalty points as a promotion benefit."""

    name: ClassVar[str] = "award_loyalty_points"
    parameters: ClassVar[type[BaseModel]] = LoyaltyPointsParameters

    def perform(
        self, params: LoyaltyPointsParameters, context: ActionContext
    ) -> Iterable[object]:
        return [LoyaltyPointsAward(points=params.points, rule_code=context.code or None)]
