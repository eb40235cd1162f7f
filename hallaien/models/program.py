"""Program (utdanningsprogram) models."""

from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel


class Program(BaseModel):
    """An academic track. Represents a row in the programs table."""

    id: UUID
    code: str
    name: str


class AssistantProgramsResponse(BaseModel):
    """Program ids an assistant is linked to."""

    assistant_id: UUID
    program_ids: list[UUID]
