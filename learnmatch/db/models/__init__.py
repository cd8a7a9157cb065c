# SQLAlchemy models
from .base import Base
from .catalog import Module
from .mentorship import Match, MentorshipRequest, Opportunity
from .users import CompletedModule, Role, User

__all__ = [
    # Base
    "Base",
    # Catalog
    "Module",
    # Users
    "Role",
    "User",
    "CompletedModule",
    # Mentorship
    "Opportunity",
    "Match",
    "MentorshipRequest",
]
