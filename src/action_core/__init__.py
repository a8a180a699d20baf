"""Action Core.

An in-process execution contract for orchestrated units of logic:
- decision actions in an order-processing workflow
- long-running, cooperatively abortable batch jobs
- rule-triggered reward actions
"""

__version__ = "0.1.0"

from action_core.config import ActionCoreSettings
from action_core.workflow import (
    ActionExecutor,
    ActionRegistry,
    JobRun,
    JobRunner,
    JobStatus,
    RuleActionAdapter,
    RuleActionResult,
    SimpleActionContext,
    Transition,
)

__all__ = [
    "__version__",
    "ActionCoreSettings",
    "ActionExecutor",
    "ActionRegistry",
    "JobRun",
    "JobRunner",
    "JobStatus",
    "RuleActionAdapter",
    "RuleActionResult",
    "SimpleActionContext",
    "Transition",
]
