"""
Mentorship module: opportunities, matches and mentorship requests.

Provides:
- OpportunityMatcher (matcher.py): opportunity lifecycle and match creation
- MentorshipRequestService (requests.py): learner requests and admin recommendations
- Status enums and the opportunity transition table (states.py)
"""

from .states import Decision, OpportunityStatus, RequestStatus, ensure_transition

__all__ = [
    "Decision",
    "OpportunityStatus",
    "RequestStatus",
    "ensure_transition",
]
