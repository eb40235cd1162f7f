"""Share code models for time-limited assistant access."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class ShareCode(BaseModel):
    """Core share code model. Maps 1:1 to the share_codes table."""

    id: UUID
    code: str
    assistant_id: UUID
    teacher_id: UUID
    created_at: datetime
    expires_at: datetime


class ShareCodeResponse(BaseModel):
    """Public response after issuing or listing share codes."""

    code: str
    assistant_id: UUID
    created_at: datetime
    expires_at: datetime

    @classmethod
    def from_model(cls, share_code: ShareCode) -> ShareCodeResponse:
        return cls(
            code=share_code.code,
            assistant_id=share_code.assistant_id,
            created_at=share_code.created_at,
            expires_at=share_code.expires_at,
        )


class RedeemRequest(BaseModel):
    """What a student sends to redeem a share code."""

    model_config = ConfigDict(extra="forbid")

    # Malformed codes are rejected by redeem() as InvalidOrExpired
    code: str


class RedeemResponse(BaseModel):
    """Where to go after a successful redemption."""

    assistant_id: UUID
    expires_at: datetime
