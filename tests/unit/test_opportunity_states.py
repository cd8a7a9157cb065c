"""
Unit tests for opportunity and request state definitions.
"""

import pytest

from learnmatch.errors import ConflictError, InvalidInputError
from learnmatch.mentorship.states import (
    UPDATABLE_REQUEST_STATUSES,
    Decision,
    OpportunityStatus,
    RequestStatus,
    ensure_transition,
)


class TestOpportunityTransitions:
    """Tests for the transition table."""

    @pytest.mark.parametrize("target", [OpportunityStatus.ACCEPTED, OpportunityStatus.DECLINED])
    def test_open_moves_to_terminal(self, target):
        ensure_transition(OpportunityStatus.OPEN, target)

    @pytest.mark.parametrize("current", [OpportunityStatus.ACCEPTED, OpportunityStatus.DECLINED])
    @pytest.mark.parametrize("target", list(OpportunityStatus))
    def test_terminal_states_reject_everything(self, current, target):
        with pytest.raises(ConflictError):
            ensure_transition(current, target)

    def test_open_to_open_is_rejected(self):
        with pytest.raises(ConflictError):
            ensure_transition(OpportunityStatus.OPEN, OpportunityStatus.OPEN)

    def test_terminal_flags(self):
        assert not OpportunityStatus.OPEN.is_terminal
        assert OpportunityStatus.ACCEPTED.is_terminal
        assert OpportunityStatus.DECLINED.is_terminal


class TestDecision:
    """Tests for decision parsing."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("accept", Decision.ACCEPT),
            ("accepted", Decision.ACCEPT),
            (" Accepted ", Decision.ACCEPT),
            ("decline", Decision.DECLINE),
            ("declined", Decision.DECLINE),
        ],
    )
    def test_parse(self, raw, expected):
        assert Decision.parse(raw) is expected

    @pytest.mark.parametrize("raw", ["open", "maybe", "", None])
    def test_parse_rejects_other_values(self, raw):
        with pytest.raises(InvalidInputError, match="Invalid status"):
            Decision.parse(raw)

    def test_target_status(self):
        assert Decision.ACCEPT.target_status is OpportunityStatus.ACCEPTED
        assert Decision.DECLINE.target_status is OpportunityStatus.DECLINED


def test_recommended_is_not_directly_settable():
    assert RequestStatus.RECOMMENDED not in UPDATABLE_REQUEST_STATUSES
    assert RequestStatus.PENDING in UPDATABLE_REQUEST_STATUSES
