# User schemas.
# Created: 2026-10-03

from __future__ import annotations

from pydantic import BaseModel, Field

from homeboard.models import User, UserRole


class UserPublic(BaseModel):
    """User as returned by the API; the PIN is reduced to a flag."""

    id: str
    name: str
    color: str | None = None
    avatar: str | None = None
    role: UserRole
    order: int
    has_pin: bool

    @classmethod
    def from_user(cls, user: User) -> UserPublic:
        return cls(
            id=user.id,
            name=user.name,
            color=user.color,
            avatar=user.avatar,
            role=user.role,
            order=user.order,
            has_pin=bool(user.pin),
        )


class CreateUserRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=50)
    color: str | None = None
    avatar: str | None = None
    role: UserRole = UserRole.ADULT
    pin: str | None = Field(default=None, pattern=r"^\d{4}$")


class UpdateUserRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=50)
    color: str | None = None
    avatar: str | None = None
    role: UserRole | None = None
    pin: str | None = Field(default=None, pattern=r"^(\d{4})?$")
