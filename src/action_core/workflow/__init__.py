"""Pluggable action execution.

This package provides first-class types for:
- Decision actions invoked by a process orchestrator (return a Transition)
- Abortable batch jobs invoked by a job scheduler (return a JobRun)
- Rule actions invoked by a rule engine (return a RuleActionResult)

Every public operation is total: failures are contained at the component
boundary and reported through the returned value.
"""

from .actions import ActionExecutor, DecisionAction, SimpleDecisionAction
from .context import ActionContext, SimpleActionContext, describe_entity
from .errors import (
    ActionCoreError,
    DuplicateActionError,
    JobRunFinishedError,
    UnknownActionError,
)
from .jobs import BatchJob, JobRun, JobRunner, JobRunRecord
from .outcome import JobStatus, Transition
from .registry import ActionRegistry
from .result import ErrorKind, Result, capture
from .rules import (
    AwardLoyaltyPoints,
    LoyaltyPointsAward,
    LoyaltyPointsParameters,
    RuleAction,
    RuleActionAdapter,
    RuleActionResult,
)

__all__ = [
    "ActionContext",
    "ActionCoreError",
    "ActionExecutor",
    "ActionRegistry",
    "AwardLoyaltyPoints",
    "BatchJob",
    "DecisionAction",
    "DuplicateActionError",
    "ErrorKind",
    "JobRun",
    "JobRunFinishedError",
    "JobRunRecord",
    "JobRunner",
    "JobStatus",
    "LoyaltyPointsAward",
    "LoyaltyPointsParameters",
    "Result",
    "RuleAction",
    "RuleActionAdapter",
    "RuleActionResult",
    "SimpleActionContext",
    "SimpleDecisionAction",
    "Transition",
    "UnknownActionError",
    "capture",
    "describe_entity",
]
