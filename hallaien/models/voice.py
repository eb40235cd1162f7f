"""Voice session handshake models."""

from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, ConfigDict


class SignedUrlRequest(BaseModel):
    """Which assistant the caller wants to talk to."""

    model_config = ConfigDict(extra="forbid")

    assistant_id: UUID


class SignedUrlResponse(BaseModel):
    """Short-lived URL the browser uses to open the voice conversation."""

    signed_url: str
