"""Share code routes — issue and list (teacher), redeem (student)."""

from __future__ import annotations

import logging
from uuid import UUID

from fastapi import APIRouter, Depends

from hallaien import config
from hallaien.auth import get_current_principal, require_teacher
from hallaien.errors import RateLimited
from hallaien.middleware.rate_limit import rate_limiter
from hallaien.models.share_code import RedeemRequest, RedeemResponse, ShareCodeResponse
from hallaien.models.user import Principal
from hallaien.services.share_codes import share_code_issuer

logger = logging.getLogger(__name__)

router = APIRouter(tags=["share_codes"])


@router.post("/api/assistants/{assistant_id}/share-codes", status_code=201)
async def issue_share_code(
    assistant_id: UUID,
    principal: Principal = Depends(require_teacher),
) -> ShareCodeResponse:
    """Issue a 24-hour share code for an owned assistant."""
    share_code = await share_code_issuer.issue(principal.id, assistant_id)
    return ShareCodeResponse.from_model(share_code)


@router.get("/api/assistants/{assistant_id}/share-codes", status_code=200)
async def list_share_codes(
    assistant_id: UUID,
    principal: Principal = Depends(require_teacher),
) -> list[ShareCodeResponse]:
    """List the teacher's unexpired codes for an assistant."""
    codes = await share_code_issuer.list_active(principal.id, assistant_id)
    return [ShareCodeResponse.from_model(c) for c in codes]


@router.post("/api/share-codes/redeem", status_code=200)
async def redeem_share_code(
    req: RedeemRequest,
    principal: Principal = Depends(get_current_principal),
) -> RedeemResponse:
    """
    Redeem a share code.

    Grants (or refreshes) 24-hour access to the code's assistant and
    returns its id so the client can open the chat.
    """
    rate_key = f"redeem:{principal.id}"
    if not rate_limiter.check_rate_limit(
        rate_key,
        max_requests=config.settings.REDEEM_RATE_LIMIT_PER_STUDENT,
        window_minutes=config.settings.REDEEM_RATE_WINDOW_MINUTES,
    ):
        logger.warning("Redeem rate limit hit for %s", principal.id)
        raise RateLimited()

    result = await share_code_issuer.redeem(principal.id, req.code)
    return RedeemResponse(assistant_id=result.assistant_id, expires_at=result.expires_at)
