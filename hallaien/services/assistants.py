"""Teacher-side assistant management with best-effort program linking."""

from __future__ import annotations

import logging
from uuid import UUID

import asyncpg

from hallaien.errors import AssistantNotFound, NotTeacher
from hallaien.models.assistant import Assistant, CreateAssistantRequest, UpdateAssistantRequest
from hallaien.models.user import Principal
from hallaien.repos.assistant_repo import AssistantRepo
from hallaien.repos.program_repo import ProgramRepo

logger = logging.getLogger(__name__)


class AssistantService:
    """Owner-scoped CRUD. Every mutation is filtered on teacher_id."""

    def __init__(
        self,
        assistants: AssistantRepo | None = None,
        programs: ProgramRepo | None = None,
    ) -> None:
        self._assistants = assistants or AssistantRepo()
        self._programs = programs or ProgramRepo()

    async def _link_programs(self, teacher_id: UUID, assistant_id: UUID, program_ids: list[UUID]) -> None:
        # Program links are secondary to the assistant row: log and carry on.
        try:
            await self._programs.link_assistant(teacher_id, assistant_id, program_ids)
        except asyncpg.PostgresError:
            logger.exception("Failed to link programs %s to assistant %s", program_ids, assistant_id)

    async def create(self, principal: Principal, req: CreateAssistantRequest) -> Assistant:
        """
        Register an assistant for a teacher and link it to programs.

        Raises:
            NotTeacher: The principal is a student
        """
        if not principal.can_manage_assistants:
            raise NotTeacher()

        assistant = await self._assistants.create(principal.id, req)
        logger.info("Teacher %s created assistant %s", principal.id, assistant.id)

        if req.program_ids:
            await self._link_programs(principal.id, assistant.id, req.program_ids)
        return assistant

    async def get(self, principal: Principal, assistant_id: UUID) -> Assistant:
        """
        Raises:
            AssistantNotFound: Missing or owned by someone else
        """
        assistant = await self._assistants.get_owned(principal.id, assistant_id)
        if assistant is None:
            raise AssistantNotFound(assistant_id)
        return assistant

    async def list_mine(self, principal: Principal) -> list[Assistant]:
        return await self._assistants.list_for_teacher(principal.id)

    async def update(self, principal: Principal, assistant_id: UUID, req: UpdateAssistantRequest) -> Assistant:
        """
        Update an owned assistant. When program_ids is given the links are
        replaced in one transaction. If that fails the old links are
        kept and the failure is logged.

        Raises:
            AssistantNotFound: Missing or owned by someone else
        """
        assistant = await self._assistants.update(principal.id, assistant_id, req)
        if assistant is None:
            raise AssistantNotFound(assistant_id)

        if req.program_ids is not None:
            try:
                await self._programs.replace_links(principal.id, assistant_id, req.program_ids)
            except asyncpg.PostgresError:
                logger.exception("Failed to replace programs of assistant %s, keeping old links", assistant_id)
        return assistant

    async def delete(self, principal: Principal, assistant_id: UUID) -> None:
        """
        Raises:
            AssistantNotFound: Missing or owned by someone else
        """
        deleted = await self._assistants.delete(principal.id, assistant_id)
        if not deleted:
            raise AssistantNotFound(assistant_id)
        logger.info("Teacher %s deleted assistant %s", principal.id, assistant_id)

    async def program_ids(self, principal: Principal, assistant_id: UUID) -> list[UUID]:
        """
        Raises:
            AssistantNotFound: Missing or owned by someone else
        """
        await self.get(principal, assistant_id)
        return await self._programs.list_program_ids_for_assistant(principal.id, assistant_id)


assistant_service = AssistantService()
