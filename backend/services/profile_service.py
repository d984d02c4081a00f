"""Profile registration for upstream-authenticated users."""

import logging

from models.requests import ProfileRequest
from models.schemas import Profile
from services.errors import ConflictError
from services.store import Store

logger = logging.getLogger(__name__)


def save_profile(user_id: str, request: ProfileRequest, store: Store) -> Profile:
    """Create the caller's profile or update its details.

    The role is fixed once the profile exists: recruiters own jobs and job
    seekers own applications, so switching would orphan either.
    """
    existing = store.get_profile(user_id)
    if existing is not None and existing.role != request.role:
        raise ConflictError(f"Profile role is {existing.role} and cannot be changed")

    profile = store.upsert_profile(Profile(id=user_id, **request.model_dump()))
    if existing is None:
        logger.info("Registered %s profile %s", profile.role, user_id)
    return profile
