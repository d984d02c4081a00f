"""Caller identity passed explicitly to services."""

from pydantic import BaseModel

from models.schemas.profile import Profile, Role


class UserContext(BaseModel):
    """The authenticated caller and their stored profile."""
    user_id: str
    role: Role
    profile: Profile

    @classmethod
    def from_profile(cls, profile: Profile) -> "UserContext":
        return cls(user_id=profile.id, role=profile.role, profile=profile)

    @property
    def is_recruiter(self) -> bool:
        return self.role == "recruiter"
