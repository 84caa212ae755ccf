"""Pure-function rules engine pattern.

Rules are stateless functions: (values, context) -> RuleResult.
No database, no side effects, no LLM calls. This makes them:
- Trivially testable (pure input/output)
- Composable (chain multiple rules)
- Auditable (deterministic, explainable)

Example domain: a gear shop checking stock, listed prices and booking
lengths before it records a sale or a rental.
"""

from dataclasses import dataclass, field
from typing import Any


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------

@dataclass
class RuleResult:
    """Outcome of a single rule evaluation."""

    passed: bool
    rule_name: str
    message: str
    details: dict[str, Any] = field(default_factory=dict)


@dataclass
class RuleSetResult:
    """Aggregate outcome of multiple rules."""

    all_passed: bool
    results: list[RuleResult]
    failed: list[RuleResult] = field(default_factory=list)

    def __post_init__(self):
        self.failed = [r for r in self.results if not r.passed]
        self.all_passed = len(self.failed) == 0

    @property
    def messages(self) -> list[str]:
        return [r.message for r in self.failed]


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------

def check_stock_availability(name: str, available: int, quantity: int = 1) -> RuleResult:
    """Check if an item has sufficient stock."""
    passed = available >= quantity

    return RuleResult(
        passed=passed,
        rule_name="stock_availability",
        message=(
            f"In stock: {available} available"
            if passed
            else f"Insufficient stock for {name}: {available} available, {quantity} requested"
        ),
        details={"available": available, "requested": quantity},
    )


def check_price_listed(name: str, price: float, price_kind: str = "sale") -> RuleResult:
    """Check that an item carries a positive price of the given kind.

    A zero price is how a branch marks an item as not offered.
    """
    passed = price > 0
    return RuleResult(
        passed=passed,
        rule_name=f"{price_kind}_price_listed",
        message=(
            f"{name} is offered for {price_kind}"
            if passed
            else f"{name} is not offered for {price_kind} at this branch"
        ),
        details={"price": price},
    )


def check_duration(days: int, min_days: int, max_days: int) -> RuleResult:
    """Check that a booking length sits inside the allowed window."""
    passed = min_days <= days <= max_days
    return RuleResult(
        passed=passed,
        rule_name="booking_duration",
        message=(
            f"{days} day(s) booked"
            if passed
            else f"Duration must be between {min_days} and {max_days} days, got {days}"
        ),
        details={"days": days, "min_days": min_days, "max_days": max_days},
    )


def check_customer_name(name: str | None) -> RuleResult:
    """A booking needs someone to hand the gear to."""
    passed = bool(name and name.strip())
    return RuleResult(
        passed=passed,
        rule_name="customer_name",
        message="Customer identified" if passed else "Customer name is required",
    )


def check_not_empty(items: list, label: str = "cart") -> RuleResult:
    passed = len(items) > 0
    return RuleResult(
        passed=passed,
        rule_name=f"{label}_not_empty",
        message=f"{len(items)} line(s) in {label}" if passed else f"The {label} is empty",
        details={"lines": len(items)},
    )


# ---------------------------------------------------------------------------
# Rule composition
# ---------------------------------------------------------------------------

def evaluate_rules(*rules: RuleResult) -> RuleSetResult:
    """Compose multiple rule results into a single aggregate.

    Example::

        result = evaluate_rules(
            check_stock_availability("Tent", available=4, quantity=2),
            check_price_listed("Tent", price=150000, price_kind="rent"),
        )
        if result.all_passed:
            record_rental(...)
    """
    return RuleSetResult(
        all_passed=all(r.passed for r in rules),
        results=list(rules),
    )
