"""
Access resolution — may this student open a voice session with this assistant?

Two independent grant paths, either one is sufficient:

1. A redeemed share code (access_grants row) that has not expired.
2. A program link between the assistant and a program the student belongs to.

Share code access is checked first because it carries an expiry the
dashboard can count down. Program access is standing and has no expiry.
Nothing is cached, so removing a program link or letting a grant lapse
takes effect on the next call.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from uuid import UUID

from hallaien.models.access import (
    AccessDecision,
    AccessDenied,
    AccessibleAssistant,
    ProgramAccess,
    ShareCodeAccess,
)
from hallaien.models.assistant import AssistantSummary
from hallaien.repos.access_grant_repo import AccessGrantRepo
from hallaien.repos.program_repo import ProgramRepo

logger = logging.getLogger(__name__)


class AccessResolver:
    """Decides grant or deny for a (student, assistant) pair."""

    def __init__(
        self,
        grants: AccessGrantRepo | None = None,
        programs: ProgramRepo | None = None,
    ) -> None:
        self._grants = grants or AccessGrantRepo()
        self._programs = programs or ProgramRepo()

    async def resolve(self, student_id: UUID, assistant_id: UUID, now: datetime | None = None) -> AccessDecision:
        """
        Resolve access for a student, first match wins.

        A grant whose expires_at equals now is expired.

        Args:
            student_id: Student UUID
            assistant_id: Assistant UUID
            now: Reference time (defaults to current UTC time)

        Returns:
            ShareCodeAccess, ProgramAccess or AccessDenied
        """
        now = now or datetime.now(UTC)

        grant = await self._grants.get(student_id, assistant_id)
        if grant is not None and grant.expires_at > now:
            return ShareCodeAccess(expires_at=grant.expires_at)

        program_ids = await self._programs.list_program_ids_for_student(student_id)
        if program_ids and await self._programs.assistant_linked_to_any(assistant_id, program_ids):
            return ProgramAccess()

        logger.debug("Access denied for student %s to assistant %s", student_id, assistant_id)
        return AccessDenied()

    async def list_accessible(self, student_id: UUID, now: datetime | None = None) -> list[AccessibleAssistant]:
        """
        Every assistant the student can reach, each listed once.

        When a share code grant and a program link reach the same assistant,
        the share code entry wins because it carries the expiry.

        Args:
            student_id: Student UUID
            now: Reference time (defaults to current UTC time)

        Returns:
            Share code entries (latest expiry first), then program entries by name
        """
        now = now or datetime.now(UTC)

        entries: dict[UUID, AccessibleAssistant] = {}
        for grant, assistant in await self._grants.list_active_for_student(student_id, now):
            if grant.expires_at <= now or assistant.id in entries:
                continue
            entries[assistant.id] = AccessibleAssistant(
                assistant=AssistantSummary.from_model(assistant),
                via="share_code",
                expires_at=grant.expires_at,
            )

        for assistant in await self._programs.list_assistants_for_student(student_id):
            if assistant.id in entries:
                continue
            entries[assistant.id] = AccessibleAssistant(
                assistant=AssistantSummary.from_model(assistant),
                via="program",
            )

        return list(entries.values())


access_resolver = AccessResolver()
