"""Registration-based dispatch of decision actions, batch jobs and rule actions.

Hosts register concrete implementations under a name and dispatch by name.
Lookups with `get_*` raise `UnknownActionError`; the dispatch methods
(`execute`, `run_job`, `apply_rule`) never raise and report an unknown name
through the normal outcome type instead.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from .actions import ActionExecutor, DecisionAction, SimpleDecisionAction
from .context import ActionContext
from .errors import DuplicateActionError, UnknownActionError
from .jobs import AbortCheck, BatchJob, JobRun, JobRunner
from .outcome import JobStatus, Transition
from .result import ErrorKind
from .rules import RuleAction, RuleActionAdapter, RuleActionResult

DECISION = "decision"
JOB = "job"
RULE = "rule"


def _key(name: str) -> str:
    return (name or "").strip().upper()


class ActionRegistry:
    def __init__(
        self,
        *,
        runner: JobRunner | None = None,
        disabled: Iterable[str] = (),
        log_rule_parameters: bool = True,
        logger: logging.Logger | None = None,
    ) -> None:
        self._logger = logger or logging.getLogger(__name__)
        # Components keep their own module loggers unless the host injects one.
        self._component_logger = logger
        self._runner = runner or JobRunner(logger=logger)
        self._disabled = frozenset(_key(n) for n in disabled if _key(n))
        self._log_rule_parameters = log_rule_parameters
        self._decisions: dict[str, ActionExecutor] = {}
        self._jobs: dict[str, BatchJob[Any]] = {}
        self._rules: dict[str, RuleActionAdapter] = {}

    @classmethod
    def from_settings(cls, settings: Any, *, logger: logging.Logger | None = None) -> ActionRegistry:
        return cls(
            runner=JobRunner.from_settings(settings, logger=logger),
            disabled=settings.disabled_action_names,
            log_rule_parameters=settings.log_rule_parameters,
            logger=logger,
        )

    def register_decision(self, action: SimpleDecisionAction | DecisionAction) -> bool:
        """Register a decision action. Returns False if its name is disabled."""

        key = self._admit(DECISION, action.name, self._decisions)
        if key is None:
            return False
        self._decisions[key] = ActionExecutor(action, logger=self._component_logger)
        return True

    def register_job(self, job: BatchJob[Any]) -> bool:
        key = self._admit(JOB, job.name, self._jobs)
        if key is None:
            return False
        self._jobs[key] = job
        return True

    def register_rule(self, action: RuleAction) -> bool:
        key = self._admit(RULE, action.name, self._rules)
        if key is None:
            return False
        self._rules[key] = RuleActionAdapter(
            action, log_parameters=self._log_rule_parameters, logger=self._component_logger
        )
        return True

    def get_decision(self, name: str) -> ActionExecutor:
        return self._lookup(DECISION, name, self._decisions)

    def get_job(self, name: str) -> BatchJob[Any]:
        return self._lookup(JOB, name, self._jobs)

    def get_rule(self, name: str) -> RuleActionAdapter:
        return self._lookup(RULE, name, self._rules)

    def names(self) -> dict[str, list[str]]:
        return {
            DECISION: sorted(self._decisions),
            JOB: sorted(self._jobs),
            RULE: sorted(self._rules),
        }

    def execute(self, name: str, context: ActionContext) -> Transition:
        executor = self._decisions.get(_key(name))
        if executor is None:
            self._log_unknown(DECISION, name)
            return Transition.NOK
        return executor.execute(context)

    def run_job(self, name: str, abort_check: AbortCheck | None = None) -> JobRun:
        job = self._jobs.get(_key(name))
        if job is None:
            self._log_unknown(JOB, name)
            run = JobRun(job_name=name)
            run.finish(JobStatus.ERROR, error=f"No job registered under: {name}")
            return run
        return self._runner.perform(job, abort_check)

    def apply_rule(self, name: str, context: ActionContext) -> RuleActionResult:
        adapter = self._rules.get(_key(name))
        if adapter is None:
            self._log_unknown(RULE, name)
            return RuleActionResult.rejected()
        return adapter.apply(context)

    def _admit(self, kind: str, name: str, table: dict[str, Any]) -> str | None:
        key = _key(name)
        if not key:
            raise ValueError(f"{kind} action must have a name")
        if key in self._disabled:
            self._logger.info("Action disabled by configuration", extra={"action": key, "kind": kind})
            return None
        if key in table:
            raise DuplicateActionError(kind, key)
        return key

    def _lookup(self, kind: str, name: str, table: dict[str, Any]) -> Any:
        try:
            return table[_key(name)]
        except KeyError:
            raise UnknownActionError(kind, name) from None

    def _log_unknown(self, kind: str, name: str) -> None:
        self._logger.warning(
            "No action registered under name",
            extra={"action": name, "kind": kind, "error_kind": ErrorKind.MISSING_INPUT.value},
        )
