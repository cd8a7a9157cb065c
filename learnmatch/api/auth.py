"""
Authentication boundary.

Credential checks happen upstream (gateway or login service). The verified
user id arrives in a header; this module only resolves it to a Principal.
"""

from __future__ import annotations

from collections.abc import Callable

from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from config import get_settings
from learnmatch.db.database import get_session
from learnmatch.db.models import Role
from learnmatch.db.repository import Repository
from learnmatch.principal import Principal


def get_principal(request: Request, db: Session = Depends(get_session)) -> Principal:
    """FastAPI dependency: the verified caller."""
    user_id = request.headers.get(get_settings().auth_user_header)
    if not user_id:
        raise HTTPException(status_code=401, detail="Authentication required")
    user = Repository(db).get_user(user_id)
    if user is None:
        raise HTTPException(status_code=401, detail="Unknown user")
    return Principal.from_user(user)


def require_role(role: Role) -> Callable[..., Principal]:
    """Dependency factory: the caller, who must have ``role``."""

    def dependency(principal: Principal = Depends(get_principal)) -> Principal:
        principal.require(role)
        return principal

    return dependency
