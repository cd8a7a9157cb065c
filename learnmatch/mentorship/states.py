"""
Lifecycle states for opportunities and mentorship requests.

An opportunity starts ``open`` and moves once, to ``accepted`` or
``declined``. Both are terminal. Transitions are checked against an explicit
table rather than by comparing strings at call sites.
"""

from __future__ import annotations

from enum import Enum

from learnmatch.errors import ConflictError, InvalidInputError


class OpportunityStatus(str, Enum):
    """Opportunity lifecycle state."""

    OPEN = "open"
    ACCEPTED = "accepted"
    DECLINED = "declined"

    @property
    def is_terminal(self) -> bool:
        return not OPPORTUNITY_TRANSITIONS[self]


OPPORTUNITY_TRANSITIONS: dict[OpportunityStatus, frozenset[OpportunityStatus]] = {
    OpportunityStatus.OPEN: frozenset({OpportunityStatus.ACCEPTED, OpportunityStatus.DECLINED}),
    OpportunityStatus.ACCEPTED: frozenset(),
    OpportunityStatus.DECLINED: frozenset(),
}


def ensure_transition(current: OpportunityStatus, target: OpportunityStatus) -> None:
    """Raise ConflictError unless ``current -> target`` is in the transition table."""
    if target not in OPPORTUNITY_TRANSITIONS[current]:
        raise ConflictError(
            f"Opportunity is already {current.value}; cannot move to {target.value}"
        )


class Decision(str, Enum):
    """A learner's answer to an opportunity."""

    ACCEPT = "accept"
    DECLINE = "decline"

    @property
    def target_status(self) -> OpportunityStatus:
        if self is Decision.ACCEPT:
            return OpportunityStatus.ACCEPTED
        return OpportunityStatus.DECLINED

    @classmethod
    def parse(cls, value: str | None) -> Decision:
        """Parse a decision, also accepting the status spellings ``accepted``/``declined``."""
        aliases = {
            "accept": cls.ACCEPT,
            "accepted": cls.ACCEPT,
            "decline": cls.DECLINE,
            "declined": cls.DECLINE,
        }
        decision = aliases.get((value or "").strip().lower())
        if decision is None:
            raise InvalidInputError("Invalid status")
        return decision


class RequestStatus(str, Enum):
    """Mentorship request status."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"
    RECOMMENDED = "recommended"


# Statuses a participant may set directly; "recommended" is reserved for admins.
UPDATABLE_REQUEST_STATUSES = frozenset(
    {RequestStatus.PENDING, RequestStatus.ACCEPTED, RequestStatus.DECLINED}
)
