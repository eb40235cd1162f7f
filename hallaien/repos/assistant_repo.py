"""Repository for assistant operations."""

from __future__ import annotations

from datetime import UTC, datetime
from uuid import UUID, uuid4

import asyncpg

from hallaien.db import system_conn, user_conn
from hallaien.models.assistant import Assistant, CreateAssistantRequest, UpdateAssistantRequest

# Columns a teacher may change through UpdateAssistantRequest
_EDITABLE_COLUMNS = ("name", "external_agent_ref", "description", "avatar_url")


def _row_to_assistant(row: asyncpg.Record) -> Assistant:
    """Convert a database row to an Assistant model."""
    return Assistant(
        id=row["id"],
        teacher_id=row["teacher_id"],
        name=row["name"],
        external_agent_ref=row["external_agent_ref"],
        description=row["description"],
        avatar_url=row["avatar_url"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class AssistantRepo:
    """All assistant-related database operations."""

    async def create(self, teacher_id: UUID, req: CreateAssistantRequest) -> Assistant:
        """
        Register a new assistant owned by a teacher.

        Args:
            teacher_id: Owner UUID
            req: CreateAssistantRequest with assistant details

        Returns:
            Newly created Assistant
        """
        assistant_id = uuid4()
        now = datetime.now(UTC)

        async with user_conn(teacher_id) as conn:
            row = await conn.fetchrow(
                """
                INSERT INTO assistants (
                    id, teacher_id, name, external_agent_ref, description, avatar_url, created_at, updated_at
                )
                VALUES ($1, $2, $3, $4, $5, $6, $7, $7)
                RETURNING *
                """,
                assistant_id,
                teacher_id,
                req.name,
                req.external_agent_ref,
                req.description or None,
                req.avatar_url or None,
                now,
            )
            return _row_to_assistant(row)

    async def get(self, assistant_id: UUID) -> Assistant | None:
        """
        Get an assistant by ID regardless of owner.

        Used by access resolution and share code issuing, which check
        ownership or entitlement themselves.

        Args:
            assistant_id: Assistant UUID

        Returns:
            Assistant if found, None otherwise
        """
        async with system_conn() as conn:
            row = await conn.fetchrow("SELECT * FROM assistants WHERE id = $1", assistant_id)
            return _row_to_assistant(row) if row else None

    async def get_owned(self, teacher_id: UUID, assistant_id: UUID) -> Assistant | None:
        """
        Get an assistant only if the teacher owns it.

        Args:
            teacher_id: Owner UUID
            assistant_id: Assistant UUID

        Returns:
            Assistant if found and owned by teacher, None otherwise
        """
        async with user_conn(teacher_id) as conn:
            row = await conn.fetchrow(
                "SELECT * FROM assistants WHERE id = $1 AND teacher_id = $2",
                assistant_id,
                teacher_id,
            )
            return _row_to_assistant(row) if row else None

    async def list_for_teacher(self, teacher_id: UUID) -> list[Assistant]:
        """
        List a teacher's assistants, newest first.

        Args:
            teacher_id: Owner UUID

        Returns:
            List of Assistant objects ordered by created_at DESC
        """
        async with user_conn(teacher_id) as conn:
            rows = await conn.fetch(
                "SELECT * FROM assistants WHERE teacher_id = $1 ORDER BY created_at DESC",
                teacher_id,
            )
            return [_row_to_assistant(row) for row in rows]

    async def update(self, teacher_id: UUID, assistant_id: UUID, req: UpdateAssistantRequest) -> Assistant | None:
        """
        Update the fields the teacher sent. Empty description or avatar clears it.

        Args:
            teacher_id: Owner UUID
            assistant_id: Assistant UUID
            req: UpdateAssistantRequest with fields to update

        Returns:
            Updated Assistant if found and owned by teacher, None otherwise
        """
        updates = {}
        for column in _EDITABLE_COLUMNS:
            if column not in req.model_fields_set:
                continue
            value = getattr(req, column)
            if column in ("name", "external_agent_ref"):
                if value is None:
                    continue
                updates[column] = value
            else:
                updates[column] = value or None

        if not updates:
            return await self.get_owned(teacher_id, assistant_id)

        set_clause = ", ".join(f"{k} = ${i + 3}" for i, k in enumerate(updates))
        values = list(updates.values())

        async with user_conn(teacher_id) as conn:
            # set_clause only contains column names from _EDITABLE_COLUMNS
            row = await conn.fetchrow(
                f"""
                UPDATE assistants
                SET {set_clause}, updated_at = now()
                WHERE id = $1 AND teacher_id = $2
                RETURNING *
                """,  # nosec B608
                assistant_id,
                teacher_id,
                *values,
            )
            return _row_to_assistant(row) if row else None

    async def delete(self, teacher_id: UUID, assistant_id: UUID) -> bool:
        """
        Delete an assistant. Links, codes and grants cascade.

        Args:
            teacher_id: Owner UUID
            assistant_id: Assistant UUID

        Returns:
            True if deleted, False if not found or not owned by teacher
        """
        async with user_conn(teacher_id) as conn:
            result = await conn.execute(
                "DELETE FROM assistants WHERE id = $1 AND teacher_id = $2",
                assistant_id,
                teacher_id,
            )
            return result == "DELETE 1"
