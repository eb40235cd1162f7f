"""Teacher assistant routes."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends

from hallaien.auth import require_teacher
from hallaien.models.assistant import AssistantResponse, CreateAssistantRequest, UpdateAssistantRequest
from hallaien.models.program import AssistantProgramsResponse
from hallaien.models.user import Principal
from hallaien.services.assistants import assistant_service

router = APIRouter(prefix="/api/assistants", tags=["assistants"])


@router.get("", status_code=200)
async def list_assistants(principal: Principal = Depends(require_teacher)) -> list[AssistantResponse]:
    """List the teacher's assistants, newest first."""
    assistants = await assistant_service.list_mine(principal)
    return [AssistantResponse.from_model(a) for a in assistants]


@router.post("", status_code=201)
async def create_assistant(
    req: CreateAssistantRequest,
    principal: Principal = Depends(require_teacher),
) -> AssistantResponse:
    """Register a new assistant, optionally linked to programs."""
    assistant = await assistant_service.create(principal, req)
    return AssistantResponse.from_model(assistant)


@router.get("/{assistant_id}", status_code=200)
async def get_assistant(
    assistant_id: UUID,
    principal: Principal = Depends(require_teacher),
) -> AssistantResponse:
    """Get one of the teacher's assistants."""
    assistant = await assistant_service.get(principal, assistant_id)
    return AssistantResponse.from_model(assistant)


@router.patch("/{assistant_id}", status_code=200)
async def update_assistant(
    assistant_id: UUID,
    req: UpdateAssistantRequest,
    principal: Principal = Depends(require_teacher),
) -> AssistantResponse:
    """Edit an assistant. program_ids, when present, replaces the links."""
    assistant = await assistant_service.update(principal, assistant_id, req)
    return AssistantResponse.from_model(assistant)


@router.delete("/{assistant_id}", status_code=200)
async def delete_assistant(
    assistant_id: UUID,
    principal: Principal = Depends(require_teacher),
) -> dict:
    """Delete an assistant together with its codes, grants and links."""
    await assistant_service.delete(principal, assistant_id)
    return {"message": "Assistant deleted."}


@router.get("/{assistant_id}/programs", status_code=200)
async def get_assistant_programs(
    assistant_id: UUID,
    principal: Principal = Depends(require_teacher),
) -> AssistantProgramsResponse:
    """Program ids the assistant grants standing access to."""
    program_ids = await assistant_service.program_ids(principal, assistant_id)
    return AssistantProgramsResponse(assistant_id=assistant_id, program_ids=program_ids)
