"""Test configuration and fixtures."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

import pytest

from action_core.workflow.context import ActionContext, SimpleActionContext


@dataclass
class Order:
    code: str
    total: float = 0.0


@dataclass
class CountingDecision:
    """Simple decision action that records how often it was called."""

    name: str = "check_order"
    entity: str = "order"
    result: bool = True
    calls: int = 0
    seen: list[object] = field(default_factory=list)

    def decide(self, subject: object, context: ActionContext) -> bool:
        self.calls += 1
        self.seen.append(subject)
        return self.result


@pytest.fixture
def order() -> Order:
    return Order(code="00001000", total=42.0)


@pytest.fixture
def order_context(order: Order) -> SimpleActionContext:
    """Provide a context whose workflow subject is present."""
    return SimpleActionContext(code="order-process-00001000", entities={"order": order})


@pytest.fixture
def empty_context() -> SimpleActionContext:
    """Provide a context with no workflow subject attached."""
    return SimpleActionContext(code="order-process-orphan")


@pytest.fixture
def counting_decision() -> CountingDecision:
    return CountingDecision()


@pytest.fixture
def abort_before() -> Callable[[int], Callable[[], bool]]:
    """Build an abort check that fires right before the k-th item (1-based)."""

    def build(k: int) -> Callable[[], bool]:
        calls = {"n": 0}

        def check() -> bool:
            calls["n"] += 1
            return calls["n"] >= k

        return check

    return build
