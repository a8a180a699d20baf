#!/usr/bin/env python3
"""Programmatic usage example.

This demonstrates wiring the action core into a host:

* load settings from `.env`
* register a decision action, a batch job and a rule action
* dispatch each by name and print the outcome

The "orchestrator" here is just this script.
"""

from __future__ import annotations

import argparse
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from decimal import Decimal

from action_core.config import ActionCoreSettings
from action_core.logging import configure_logging
from action_core.workflow import ActionContext, ActionRegistry, AwardLoyaltyPoints
from action_core.workflow.context import SimpleActionContext


@dataclass(frozen=True)
class Order:
    code: str
    total: Decimal


class CheckOrderTotal:
    name = "check_order_total"
    entity = "order"

    def decide(self, subject: Order, context: ActionContext) -> bool:
        return subject.total > 0


class ReindexProducts:
    name = "reindex_products"
    abortable = True

    def __init__(self, count: int, bad: set[int]) -> None:
        self._count = count
        self._bad = bad

    def items(self) -> Iterator[int]:
        yield from range(1, self._count + 1)

    def process(self, item: int) -> None:
        if item in self._bad:
            raise ValueError(f"product {item} has no catalog version")

    def item_key(self, item: int) -> str:
        return f"product-{item}"


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run sample actions through the action core.")
    parser.add_argument("--order-total", default="19.99", help="Total of the sample order")
    parser.add_argument("--items", type=int, default=10, help="Number of products to reindex")
    parser.add_argument("--points", type=Decimal, default=Decimal("150"), help="Loyalty points parameter")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    settings = ActionCoreSettings()
    configure_logging(settings.log_level)

    registry = ActionRegistry.from_settings(settings)
    registry.register_decision(CheckOrderTotal())
    registry.register_job(ReindexProducts(count=args.items, bad={3, 7}))
    registry.register_rule(AwardLoyaltyPoints())

    order = Order(code="00001000", total=Decimal(args.order_total))
    transition = registry.execute(
        "check_order_total", SimpleActionContext(code="order-process-1", entities={"order": order})
    )
    print(f"Decision: {transition}")

    run = registry.run_job("reindex_products")
    print(f"Job: {run.status.value if run.status else None} ({run.processed} processed, {run.failed} failed)")

    result = registry.apply_rule(
        "award_loyalty_points",
        SimpleActionContext(code="loyalty-rule", parameters={"points": args.points}),
    )
    print(f"Rule applied: {result.applied}, facts: {list(result.facts)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
