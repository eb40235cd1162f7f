"""Student dashboard routes: accessible assistants and per-assistant access."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends

from hallaien.auth import get_current_principal
from hallaien.errors import AccessDeniedError, AssistantNotFound
from hallaien.models.access import AccessibleAssistant, StudentAssistantResponse
from hallaien.models.assistant import AssistantSummary
from hallaien.models.user import Principal
from hallaien.repos.assistant_repo import AssistantRepo
from hallaien.services.access_resolver import access_resolver

router = APIRouter(prefix="/api/student", tags=["student"])
assistant_repo = AssistantRepo()


@router.get("/assistants", status_code=200)
async def list_accessible_assistants(
    principal: Principal = Depends(get_current_principal),
) -> list[AccessibleAssistant]:
    """Every assistant the student can open, share code entries first."""
    return await access_resolver.list_accessible(principal.id)


@router.get("/assistants/{assistant_id}", status_code=200)
async def get_accessible_assistant(
    assistant_id: UUID,
    principal: Principal = Depends(get_current_principal),
) -> StudentAssistantResponse:
    """Assistant details plus why the student may open it. 403 when denied."""
    assistant = await assistant_repo.get(assistant_id)
    if not assistant:
        raise AssistantNotFound(assistant_id)

    decision = await access_resolver.resolve(principal.id, assistant_id)
    if not decision.granted:
        raise AccessDeniedError("You do not have access to this assistant.")

    return StudentAssistantResponse(assistant=AssistantSummary.from_model(assistant), access=decision)
