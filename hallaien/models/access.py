"""Access grant records and access-resolution outcomes."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal, Union
from uuid import UUID

from pydantic import BaseModel, Field

from hallaien.models.assistant import AssistantSummary


class AccessGrant(BaseModel):
    """A redeemed share code. One row per (student_id, assistant_id) in access_grants."""

    id: UUID
    student_id: UUID
    assistant_id: UUID
    expires_at: datetime
    created_at: datetime
    updated_at: datetime


class AccessDenied(BaseModel):
    """Neither an unexpired grant nor a program link applies."""

    via: Literal["denied"] = "denied"
    expires_at: None = None

    @property
    def granted(self) -> bool:
        return False


class ShareCodeAccess(BaseModel):
    """Access through a redeemed share code, valid until expires_at."""

    via: Literal["share_code"] = "share_code"
    expires_at: datetime

    @property
    def granted(self) -> bool:
        return True


class ProgramAccess(BaseModel):
    """Standing access through one of the student's programs. Never expires."""

    via: Literal["program"] = "program"
    expires_at: None = None

    @property
    def granted(self) -> bool:
        return True


AccessDecision = Annotated[
    Union[AccessDenied, ShareCodeAccess, ProgramAccess],
    Field(discriminator="via"),
]


class AccessibleAssistant(BaseModel):
    """One entry in a student's dashboard listing."""

    assistant: AssistantSummary
    via: Literal["share_code", "program"]
    expires_at: datetime | None = None


class StudentAssistantResponse(BaseModel):
    """An assistant together with the reason the student may open it."""

    assistant: AssistantSummary
    access: AccessDecision


class RedeemResult(BaseModel):
    """Outcome of a successful share code redemption."""

    assistant_id: UUID
    expires_at: datetime
