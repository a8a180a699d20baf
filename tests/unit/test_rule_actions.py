"""Unit tests for rule action parameter validation and fact emission."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from decimal import Decimal

import pytest
from pydantic import BaseModel, Field, field_validator

from action_core.workflow.context import ActionContext, SimpleActionContext
from action_core.workflow.rules import (
    AwardLoyaltyPoints,
    LoyaltyPointsAward,
    RuleActionAdapter,
    RuleActionResult,
)


class DiscountParameters(BaseModel):
    amount: Decimal = Field(gt=0)
    currency: str = "EUR"


@dataclass(frozen=True)
class DiscountFact:
    amount: Decimal
    currency: str


class GrantDiscount:
    name = "grant_discount"
    parameters = DiscountParameters

    def __init__(self) -> None:
        self.calls = 0

    def perform(self, params: DiscountParameters, context: ActionContext) -> Iterator[object]:
        self.calls += 1
        yield DiscountFact(amount=params.amount, currency=params.currency)


class ExplodingAction:
    name = "exploding"
    parameters = DiscountParameters

    def perform(self, params: DiscountParameters, context: ActionContext) -> Iterator[object]:
        yield DiscountFact(amount=params.amount, currency=params.currency)
        raise RuntimeError("cart calculation failed")


def test_scenario_e_negative_amount_is_rejected() -> None:
    action = GrantDiscount()
    result = RuleActionAdapter(action).apply(
        SimpleActionContext(parameters={"amount": Decimal("-5")})
    )

    assert result == RuleActionResult(applied=False, facts=())
    assert result.facts == ()
    assert action.calls == 0


@pytest.mark.parametrize(
    "parameters",
    [
        {},
        {"amount": None},
        {"amount": "lots"},
        {"amount": Decimal("0")},
        {"amount": {"value": 3}},
        {"amount": "10"},
        {"amount": Decimal("10"), "currency": 978},
    ],
)
def test_missing_or_invalid_parameters_are_rejected(parameters: dict[str, object]) -> None:
    result = RuleActionAdapter(GrantDiscount()).apply(SimpleActionContext(parameters=parameters))
    assert not result.applied
    assert result.facts == ()


def test_valid_parameters_emit_facts() -> None:
    context = SimpleActionContext(code="rule-10-off", parameters={"amount": Decimal("10")})
    result = RuleActionAdapter(GrantDiscount()).apply(context)

    assert result.applied
    assert result.facts == (DiscountFact(amount=Decimal("10"), currency="EUR"),)


def test_failure_during_domain_logic_emits_no_facts(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.ERROR)
    result = RuleActionAdapter(ExplodingAction()).apply(
        SimpleActionContext(parameters={"amount": Decimal("3")})
    )

    assert result == RuleActionResult.rejected()
    [record] = [r for r in caplog.records if r.message == "Rule action failed unexpectedly"]
    assert record.error_kind == "logic_failure"
    assert record.parameters == {"amount": "3", "currency": "EUR"}


def test_rejection_log_can_hide_parameter_values(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.WARNING)
    adapter = RuleActionAdapter(GrantDiscount(), log_parameters=False)

    adapter.apply(SimpleActionContext(parameters={"amount": Decimal("-5")}))

    [record] = [r for r in caplog.records if r.message == "Invalid rule action parameters"]
    assert record.error_kind == "invalid_parameter"
    assert record.errors
    assert all("input" not in err for err in record.errors)


def test_rejection_log_includes_parameter_values_by_default(
    caplog: pytest.LogCaptureFixture,
) -> None:
    caplog.set_level(logging.WARNING)
    RuleActionAdapter(GrantDiscount()).apply(SimpleActionContext(parameters={"amount": Decimal("-5")}))

    [record] = [r for r in caplog.records if r.message == "Invalid rule action parameters"]
    assert record.errors[0]["input"] == Decimal("-5")


def test_rejected_result_cannot_carry_facts() -> None:
    with pytest.raises(ValueError):
        RuleActionResult(applied=False, facts=("award",))


def test_award_loyalty_points() -> None:
    context = SimpleActionContext(code="loyalty-rule", parameters={"points": Decimal("150")})
    result = RuleActionAdapter(AwardLoyaltyPoints()).apply(context)

    assert result.applied
    assert result.facts == (LoyaltyPointsAward(points=Decimal("150"), rule_code="loyalty-rule"),)


@pytest.mark.parametrize("points", [None, 0, Decimal("-1")])
def test_award_loyalty_points_requires_positive_points(points: object) -> None:
    result = RuleActionAdapter(AwardLoyaltyPoints()).apply(
        SimpleActionContext(parameters={"points": points})
    )
    assert result == RuleActionResult.rejected()


def test_award_loyalty_points_rejects_numeric_string() -> None:
    action = AwardLoyaltyPoints()
    result = RuleActionAdapter(action).apply(SimpleActionContext(parameters={"points": "150"}))

    assert result == RuleActionResult.rejected()


class VoucherParameters(BaseModel):
    voucher: str

    @field_validator("voucher")
    @classmethod
    def check_voucher(cls, value: str) -> str:
        if not value.isupper():
            raise TypeError("voucher lookup returned an unexpected type")
        return value


class RedeemVoucher:
    name = "redeem_voucher"
    parameters = VoucherParameters

    def __init__(self) -> None:
        self.calls = 0

    def perform(self, params: VoucherParameters, context: ActionContext) -> list[object]:
        self.calls += 1
        return [params.voucher]


def test_validator_error_outside_validation_is_logic_failure(
    caplog: pytest.LogCaptureFixture,
) -> None:
    caplog.set_level(logging.ERROR)
    action = RedeemVoucher()

    result = RuleActionAdapter(action).apply(
        SimpleActionContext(code="voucher-rule", parameters={"voucher": "summer"})
    )

    assert result == RuleActionResult.rejected()
    assert action.calls == 0
    [record] = [
        r for r in caplog.records if r.message == "Rule action parameters could not be validated"
    ]
    assert record.levelno == logging.ERROR
    assert record.error_kind == "logic_failure"
    assert record.code == "voucher-rule"
    assert isinstance(record.exc_info[1], TypeError)


def test_validator_accepts_valid_voucher() -> None:
    result = RuleActionAdapter(RedeemVoucher()).apply(
        SimpleActionContext(parameters={"voucher": "SUMMER"})
    )
    assert result == RuleActionResult(applied=True, facts=("SUMMER",))


class DetachedRuleContext:
    parameters = {"amount": Decimal("20")}

    @property
    def code(self) -> str:
        raise RuntimeError("rule context detached")

    def entity(self, name: str) -> object | None:
        return None

    def abort_requested(self) -> bool:
        return False


def test_unreadable_context_code_does_not_escape(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO)
    result = RuleActionAdapter(GrantDiscount()).apply(DetachedRuleContext())

    assert result.facts == (DiscountFact(amount=Decimal("20"), currency="EUR"),)
    [record] = [r for r in caplog.records if r.message == "Rule action applied"]
    assert record.code == ""
