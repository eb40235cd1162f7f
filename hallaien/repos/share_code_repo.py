"""Repository for share code operations."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID, uuid4

import asyncpg

from hallaien.db import system_conn, user_conn
from hallaien.models.share_code import ShareCode


def _row_to_share_code(row: asyncpg.Record) -> ShareCode:
    """Convert a database row to a ShareCode model."""
    return ShareCode(
        id=row["id"],
        code=row["code"],
        assistant_id=row["assistant_id"],
        teacher_id=row["teacher_id"],
        created_at=row["created_at"],
        expires_at=row["expires_at"],
    )


class ShareCodeRepo:
    """
    All share code database operations.

    Codes are never deleted. Expired rows stay in the table and are
    filtered out by every read with expires_at > now.
    """

    async def code_in_use(self, code: str, now: datetime) -> bool:
        """
        Whether an unexpired share code with this value exists.

        Collisions with expired codes are not reported.

        Args:
            code: Normalized 6-char code
            now: Reference time

        Returns:
            True if a live code with this value exists
        """
        async with system_conn() as conn:
            in_use = await conn.fetchval(
                "SELECT EXISTS (SELECT 1 FROM share_codes WHERE code = $1 AND expires_at > $2)",
                code,
                now,
            )
            return bool(in_use)

    async def create(
        self,
        teacher_id: UUID,
        assistant_id: UUID,
        code: str,
        created_at: datetime,
        expires_at: datetime,
    ) -> ShareCode:
        """
        Store a new share code issued by a teacher.

        Args:
            teacher_id: Issuer UUID
            assistant_id: Assistant the code grants access to
            code: Normalized 6-char code
            created_at: Issue time
            expires_at: Time after which the code is inert

        Returns:
            Newly created ShareCode
        """
        async with user_conn(teacher_id) as conn:
            row = await conn.fetchrow(
                """
                INSERT INTO share_codes (id, code, assistant_id, teacher_id, created_at, expires_at)
                VALUES ($1, $2, $3, $4, $5, $6)
                RETURNING *
                """,
                uuid4(),
                code,
                assistant_id,
                teacher_id,
                created_at,
                expires_at,
            )
            return _row_to_share_code(row)

    async def get_active_by_code(self, code: str, now: datetime) -> ShareCode | None:
        """
        Look up an unexpired share code. Uses system_conn because the
        caller is a student, not the issuing teacher.

        Args:
            code: Normalized 6-char code
            now: Reference time

        Returns:
            Newest live ShareCode with this value, None otherwise
        """
        async with system_conn() as conn:
            row = await conn.fetchrow(
                """
                SELECT * FROM share_codes
                WHERE code = $1
                  AND expires_at > $2
                ORDER BY created_at DESC
                LIMIT 1
                """,
                code,
                now,
            )
            return _row_to_share_code(row) if row else None

    async def list_active(self, teacher_id: UUID, assistant_id: UUID, now: datetime) -> list[ShareCode]:
        """
        List a teacher's unexpired codes for one assistant, newest first.

        Args:
            teacher_id: Issuer UUID
            assistant_id: Assistant UUID
            now: Reference time

        Returns:
            List of live ShareCode objects
        """
        async with user_conn(teacher_id) as conn:
            rows = await conn.fetch(
                """
                SELECT * FROM share_codes
                WHERE assistant_id = $1
                  AND teacher_id = $2
                  AND expires_at > $3
                ORDER BY created_at DESC
                """,
                assistant_id,
                teacher_id,
                now,
            )
            return [_row_to_share_code(row) for row in rows]
