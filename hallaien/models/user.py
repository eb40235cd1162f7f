"""Principal and profile models for authorization."""

from __future__ import annotations

from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from hallaien.models.program import Program

Role = Literal["teacher", "student", "admin"]


class Principal(BaseModel):
    """Authenticated caller. Represents a row in the profiles table."""

    id: UUID
    role: Role = "student"
    first_name: str | None = None
    avatar_url: str | None = None

    @property
    def can_manage_assistants(self) -> bool:
        return self.role in ("teacher", "admin")


class UpdateProfileRequest(BaseModel):
    """
    What a user sends to edit their own profile. Empty strings clear a field.

    The role is managed by the identity provider and cannot be changed here.
    """

    model_config = ConfigDict(extra="forbid")

    first_name: str | None = Field(default=None, max_length=100)
    avatar_url: str | None = Field(default=None, max_length=2000)


class ProfileResponse(BaseModel):
    """What GET and PATCH /api/me return."""

    id: UUID
    role: Role
    first_name: str | None
    avatar_url: str | None
    programs: list[Program]

    @classmethod
    def from_principal(cls, principal: Principal, programs: list[Program]) -> ProfileResponse:
        """Combine the principal with their program memberships."""
        return cls(
            id=principal.id,
            role=principal.role,
            first_name=principal.first_name,
            avatar_url=principal.avatar_url,
            programs=programs,
        )
