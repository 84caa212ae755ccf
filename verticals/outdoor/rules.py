"""Outdoor business rules — pure functions.

Builds on the rules engine pattern with the checks the POS and booking
flows run before recording a transaction.
"""

from patterns.domain_config import SummitBaseConfig
from patterns.rules_engine import (
    RuleResult,
    RuleSetResult,
    check_customer_name,
    check_duration,
    check_not_empty,
    check_price_listed,
    check_stock_availability,
    evaluate_rules,
)
from verticals.outdoor.models.schemas import Product


class RuleViolation(ValueError):
    """One or more business rules rejected an action."""

    def __init__(self, outcome: RuleSetResult):
        self.outcome = outcome
        super().__init__("; ".join(outcome.messages))


def check_sale_line(product: Product, branch: str, quantity: int) -> list[RuleResult]:
    return [
        check_price_listed(product.name, product.sale_price(branch), "sale"),
        check_stock_availability(product.name, product.stock_at(branch), quantity),
    ]


def checkout_rules(lines: list[tuple[Product, int]], branch: str) -> RuleSetResult:
    """Cart checks: not empty, every line sold here and in stock."""
    results = [check_not_empty(lines, "cart")]
    for product, quantity in lines:
        results.extend(check_sale_line(product, branch, quantity))
    return evaluate_rules(*results)


def booking_rules(
    product: Product,
    branch: str,
    customer_name: str | None,
    days: int,
    config: SummitBaseConfig,
) -> RuleSetResult:
    """Rental checks: named customer, sane duration, item rentable here."""
    return evaluate_rules(
        check_customer_name(customer_name),
        check_duration(days, config.rental.min_days, config.rental.max_days),
        check_price_listed(product.name, product.rent_price(branch), "rent"),
        check_stock_availability(product.name, product.stock_at(branch), 1),
    )


def enforce(outcome: RuleSetResult) -> None:
    if not outcome.all_passed:
        raise RuleViolation(outcome)


__all__ = [
    "RuleResult",
    "RuleSetResult",
    "RuleViolation",
    "booking_rules",
    "checkout_rules",
    "enforce",
]
