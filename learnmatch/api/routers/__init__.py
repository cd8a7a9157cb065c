"""API routers for learnmatch."""

from learnmatch.api.routers import (
    admin_router,
    mentorship_router,
    modules_router,
    users_router,
)

__all__ = [
    "modules_router",
    "users_router",
    "admin_router",
    "mentorship_router",
]
