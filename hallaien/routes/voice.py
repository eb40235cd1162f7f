"""Voice session route — signed URL for the browser's voice widget."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from hallaien.auth import get_current_principal
from hallaien.models.user import Principal
from hallaien.models.voice import SignedUrlRequest, SignedUrlResponse
from hallaien.services.voice_sessions import voice_session_service

router = APIRouter(prefix="/api/voice", tags=["voice"])


@router.post("/signed-url", status_code=200)
async def create_signed_url(
    req: SignedUrlRequest,
    principal: Principal = Depends(get_current_principal),
) -> SignedUrlResponse:
    """
    Start a voice conversation.

    Owners always pass; everyone else needs a granted access resolution.
    The voice service is only contacted after that check.
    """
    signed_url = await voice_session_service.signed_url(principal, req.assistant_id)
    return SignedUrlResponse(signed_url=signed_url)
