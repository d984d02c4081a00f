"""Shared dependencies for API routes."""

from fastapi import Depends, Header, HTTPException

from config import settings
from models.context import UserContext
from services import github_client
from services.store import Store

_store: Store | None = None


def get_store() -> Store:
    global _store
    if _store is None:
        _store = Store(settings.database_path)
    return _store


def get_github_client() -> github_client.GitHubClient:
    return github_client.get_client()


def get_user_id(x_user_id: str | None = Header(None)) -> str:
    """Identity forwarded by the authenticating gateway."""
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=401, detail="Missing X-User-Id header")
    return x_user_id.strip()


def get_current_user(
    user_id: str = Depends(get_user_id),
    store: Store = Depends(get_store),
) -> UserContext:
    profile = store.get_profile(user_id)
    if profile is None:
        raise HTTPException(
            status_code=403,
            detail="No profile for this user; create one with PUT /profiles/me",
        )
    return UserContext.from_profile(profile)
