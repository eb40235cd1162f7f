"""Assistant models — teacher-owned references to external voice agents."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class Assistant(BaseModel):
    """Core assistant model. Represents a row in the assistants table."""

    id: UUID
    teacher_id: UUID
    name: str
    external_agent_ref: str
    description: str | None = None
    avatar_url: str | None = None
    created_at: datetime
    updated_at: datetime


class CreateAssistantRequest(BaseModel):
    """What a teacher sends to register an assistant."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1, max_length=200)
    external_agent_ref: str = Field(min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    avatar_url: str | None = Field(default=None, max_length=2000)
    program_ids: list[UUID] = Field(default_factory=list)


class UpdateAssistantRequest(BaseModel):
    """
    What a teacher sends to edit an assistant. All fields optional.

    program_ids=None leaves the program links untouched; a list (even empty)
    replaces them.
    """

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, min_length=1, max_length=200)
    external_agent_ref: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    avatar_url: str | None = Field(default=None, max_length=2000)
    program_ids: list[UUID] | None = None


class AssistantResponse(BaseModel):
    """What the teacher API returns."""

    id: UUID
    name: str
    external_agent_ref: str
    description: str | None
    avatar_url: str | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, assistant: Assistant) -> AssistantResponse:
        """Convert internal Assistant model to public API response."""
        return cls(
            id=assistant.id,
            name=assistant.name,
            external_agent_ref=assistant.external_agent_ref,
            description=assistant.description,
            avatar_url=assistant.avatar_url,
            created_at=assistant.created_at,
            updated_at=assistant.updated_at,
        )


class AssistantSummary(BaseModel):
    """What students see. No agent reference, no owner."""

    id: UUID
    name: str
    description: str | None
    avatar_url: str | None

    @classmethod
    def from_model(cls, assistant: Assistant) -> AssistantSummary:
        return cls(
            id=assistant.id,
            name=assistant.name,
            description=assistant.description,
            avatar_url=assistant.avatar_url,
        )
