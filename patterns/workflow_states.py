"""Enum-based workflow state machine pattern.

Defines workflow states as Python enums with explicit transition validation.
Two lifecycles are tracked here: laundry orders moving across the service
board, and rentals going out and coming back.

The enum values are the labels stored in transaction details, so they are
the human-readable strings rather than slugs.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any


# ---------------------------------------------------------------------------
# State definitions
# ---------------------------------------------------------------------------

class LaundryStatus(str, Enum):
    """Laundry order stages."""

    RECEIVED = "Received"
    WASHING = "Washing"
    DRYING = "Drying"
    READY = "Ready"
    DELIVERED = "Delivered"


class RentalStatus(str, Enum):
    """Rental lifecycle states."""

    BOOKED = "Booked"
    ACTIVE = "Active (Out)"
    RETURNED = "Returned"
    OVERDUE = "Overdue"


# ---------------------------------------------------------------------------
# Transition rules
# ---------------------------------------------------------------------------

# Laundry is strictly linear.
LAUNDRY_SEQUENCE: list[LaundryStatus] = [
    LaundryStatus.RECEIVED,
    LaundryStatus.WASHING,
    LaundryStatus.DRYING,
    LaundryStatus.READY,
    LaundryStatus.DELIVERED,
]

_LAUNDRY_TRANSITIONS: dict[LaundryStatus, list[LaundryStatus]] = {
    current: LAUNDRY_SEQUENCE[i + 1: i + 2]
    for i, current in enumerate(LAUNDRY_SEQUENCE)
}

_RENTAL_TRANSITIONS: dict[RentalStatus, list[RentalStatus]] = {
    RentalStatus.BOOKED: [RentalStatus.ACTIVE],
    RentalStatus.ACTIVE: [RentalStatus.RETURNED, RentalStatus.OVERDUE],
    RentalStatus.OVERDUE: [RentalStatus.RETURNED],
    RentalStatus.RETURNED: [],  # terminal
}


def next_laundry_status(current: LaundryStatus | str) -> LaundryStatus | None:
    """Return the stage after ``current``, or None once delivered."""
    try:
        current = LaundryStatus(current)
    except ValueError:
        return None
    allowed = _LAUNDRY_TRANSITIONS[current]
    return allowed[0] if allowed else None


# ---------------------------------------------------------------------------
# State machine
# ---------------------------------------------------------------------------

class InvalidTransition(ValueError):
    """Raised when a workflow is asked to move to a state it cannot reach."""


@dataclass
class WorkflowTransition:
    """Record of a single state transition."""

    from_state: str
    to_state: str
    timestamp: datetime
    actor: str = "system"


@dataclass
class WorkflowInstance:
    """A workflow instance loaded from a stored status label.

    Usage::

        wf = WorkflowInstance.for_laundry("tx-123", "Received")
        record = wf.transition(LaundryStatus.WASHING, actor="front_desk")

    Unknown labels raise ValueError from the enum constructor.
    """

    workflow_id: str
    current_state: Enum
    transitions: dict[Any, list[Any]]

    @classmethod
    def for_laundry(cls, workflow_id: str, state: LaundryStatus | str) -> "WorkflowInstance":
        return cls(workflow_id, LaundryStatus(state), _LAUNDRY_TRANSITIONS)

    @classmethod
    def for_rental(cls, workflow_id: str, state: RentalStatus | str) -> "WorkflowInstance":
        return cls(workflow_id, RentalStatus(state), _RENTAL_TRANSITIONS)

    def can_transition(self, to_state: Enum) -> bool:
        """Check if a transition is allowed from the current state."""
        allowed = self.transitions.get(self.current_state, [])
        return to_state in allowed

    def transition(self, to_state: Enum, actor: str = "system") -> WorkflowTransition:
        """Execute a state transition.

        Raises InvalidTransition if the transition is not allowed.
        """
        if not self.can_transition(to_state):
            allowed = self.transitions.get(self.current_state, [])
            allowed_names = [s.value for s in allowed]
            raise InvalidTransition(
                f"Cannot transition from {self.current_state.value} to {to_state.value}. "
                f"Allowed: {allowed_names}"
            )

        record = WorkflowTransition(
            from_state=self.current_state.value,
            to_state=to_state.value,
            timestamp=datetime.now(timezone.utc),
            actor=actor,
        )
        self.current_state = to_state
        return record

    @property
    def is_terminal(self) -> bool:
        """Check if the workflow is in a terminal state."""
        return len(self.transitions.get(self.current_state, [])) == 0
