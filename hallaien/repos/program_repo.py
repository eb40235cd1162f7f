"""Repository for programs, program memberships and assistant program links."""

from __future__ import annotations

from uuid import UUID

import asyncpg

from hallaien.db import system_conn, user_conn
from hallaien.models.assistant import Assistant
from hallaien.models.program import Program
from hallaien.repos.assistant_repo import _row_to_assistant

# Inserts links only for an assistant owned by $2; existing links are kept
_LINK_SQL = """
    INSERT INTO assistant_programs (assistant_id, program_id)
    SELECT a.id, p.program_id
    FROM assistants a, unnest($3::uuid[]) AS p(program_id)
    WHERE a.id = $1 AND a.teacher_id = $2
    ON CONFLICT (assistant_id, program_id) DO NOTHING
"""


def _row_to_program(row: asyncpg.Record) -> Program:
    """Convert a database row to a Program model."""
    return Program(id=row["id"], code=row["code"], name=row["name"])


class ProgramRepo:
    """Program reference data plus the two link tables that grant standing access."""

    async def list_programs(self) -> list[Program]:
        """List every program ordered by code."""
        async with system_conn() as conn:
            rows = await conn.fetch("SELECT id, code, name FROM programs ORDER BY code")
            return [_row_to_program(row) for row in rows]

    async def list_for_student(self, student_id: UUID) -> list[Program]:
        """
        List the programs a profile is a member of.

        Args:
            student_id: Profile UUID

        Returns:
            Programs ordered by code
        """
        async with system_conn() as conn:
            rows = await conn.fetch(
                """
                SELECT p.id, p.code, p.name
                FROM programs p
                JOIN profile_programs pp ON pp.program_id = p.id
                WHERE pp.profile_id = $1
                ORDER BY p.code
                """,
                student_id,
            )
            return [_row_to_program(row) for row in rows]

    async def list_program_ids_for_student(self, student_id: UUID) -> list[UUID]:
        """
        Program ids a profile belongs to.

        Args:
            student_id: Profile UUID

        Returns:
            Possibly empty list of program UUIDs
        """
        async with system_conn() as conn:
            rows = await conn.fetch(
                "SELECT program_id FROM profile_programs WHERE profile_id = $1",
                student_id,
            )
            return [row["program_id"] for row in rows]

    async def assistant_linked_to_any(self, assistant_id: UUID, program_ids: list[UUID]) -> bool:
        """
        Whether any program grant links the assistant to one of the programs.

        Existence only. Several matching links count once.

        Args:
            assistant_id: Assistant UUID
            program_ids: Candidate program UUIDs

        Returns:
            True if at least one link exists
        """
        if not program_ids:
            return False
        async with system_conn() as conn:
            linked = await conn.fetchval(
                """
                SELECT EXISTS (
                    SELECT 1 FROM assistant_programs
                    WHERE assistant_id = $1 AND program_id = ANY($2::uuid[])
                )
                """,
                assistant_id,
                program_ids,
            )
            return bool(linked)

    async def list_assistants_for_student(self, student_id: UUID) -> list[Assistant]:
        """
        Assistants linked to any program the student belongs to.

        Args:
            student_id: Profile UUID

        Returns:
            Distinct assistants ordered by name
        """
        async with system_conn() as conn:
            rows = await conn.fetch(
                """
                SELECT DISTINCT a.*
                FROM assistants a
                JOIN assistant_programs ap ON ap.assistant_id = a.id
                JOIN profile_programs pp ON pp.program_id = ap.program_id
                WHERE pp.profile_id = $1
                ORDER BY a.name
                """,
                student_id,
            )
            return [_row_to_assistant(row) for row in rows]

    async def list_program_ids_for_assistant(self, teacher_id: UUID, assistant_id: UUID) -> list[UUID]:
        """
        Program ids an owned assistant is linked to.

        Args:
            teacher_id: Owner UUID
            assistant_id: Assistant UUID

        Returns:
            Program UUIDs (empty when unlinked or not owned)
        """
        async with user_conn(teacher_id) as conn:
            rows = await conn.fetch(
                """
                SELECT ap.program_id
                FROM assistant_programs ap
                JOIN assistants a ON a.id = ap.assistant_id
                WHERE ap.assistant_id = $1 AND a.teacher_id = $2
                """,
                assistant_id,
                teacher_id,
            )
            return [row["program_id"] for row in rows]

    async def link_assistant(self, teacher_id: UUID, assistant_id: UUID, program_ids: list[UUID]) -> int:
        """
        Link an owned assistant to programs. Existing links are kept.

        Args:
            teacher_id: Owner UUID
            assistant_id: Assistant UUID
            program_ids: Program UUIDs to link

        Returns:
            Number of new links
        """
        if not program_ids:
            return 0
        async with user_conn(teacher_id) as conn:
            result = await conn.execute(
                _LINK_SQL,
                assistant_id,
                teacher_id,
                list(dict.fromkeys(program_ids)),
            )
            # asyncpg returns "INSERT 0 N"
            parts = result.split()
            return int(parts[2]) if len(parts) == 3 else 0

    async def replace_links(self, teacher_id: UUID, assistant_id: UUID, program_ids: list[UUID]) -> int:
        """
        Replace every program link of an owned assistant, in one transaction.

        If the insert fails (e.g. an unknown program id) the delete is rolled
        back too and the previous links stay in place.

        Args:
            teacher_id: Owner UUID
            assistant_id: Assistant UUID
            program_ids: The complete new set; empty removes all links

        Returns:
            Number of links after the replace

        Raises:
            asyncpg.PostgresError: Nothing was changed
        """
        async with user_conn(teacher_id) as conn:
            await conn.execute(
                """
                DELETE FROM assistant_programs
                WHERE assistant_id = $1
                  AND EXISTS (SELECT 1 FROM assistants a WHERE a.id = $1 AND a.teacher_id = $2)
                """,
                assistant_id,
                teacher_id,
            )
            if not program_ids:
                return 0
            result = await conn.execute(
                _LINK_SQL,
                assistant_id,
                teacher_id,
                list(dict.fromkeys(program_ids)),
            )
            return int(result.split()[2])
