"""Repository for access grants created by share code redemption."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID, uuid4

import asyncpg

from hallaien.db import system_conn
from hallaien.models.access import AccessGrant
from hallaien.models.assistant import Assistant
from hallaien.repos.assistant_repo import _row_to_assistant


def _row_to_access_grant(row: asyncpg.Record) -> AccessGrant:
    """Convert a database row to an AccessGrant model."""
    return AccessGrant(
        id=row["id"],
        student_id=row["student_id"],
        assistant_id=row["assistant_id"],
        expires_at=row["expires_at"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class AccessGrantRepo:
    """All access grant database operations. One row per (student, assistant)."""

    async def get(self, student_id: UUID, assistant_id: UUID) -> AccessGrant | None:
        """
        Get the grant for a pair, expired or not.

        Args:
            student_id: Student UUID
            assistant_id: Assistant UUID

        Returns:
            AccessGrant if one was ever redeemed, None otherwise
        """
        async with system_conn() as conn:
            row = await conn.fetchrow(
                "SELECT * FROM access_grants WHERE student_id = $1 AND assistant_id = $2",
                student_id,
                assistant_id,
            )
            return _row_to_access_grant(row) if row else None

    async def upsert(self, student_id: UUID, assistant_id: UUID, expires_at: datetime, now: datetime) -> AccessGrant:
        """
        Insert a grant or move the expiry of the existing one, in one statement.

        The unique constraint on (student_id, assistant_id) makes concurrent
        redemptions for the same pair converge on a single row.

        Args:
            student_id: Student UUID
            assistant_id: Assistant UUID
            expires_at: New expiry
            now: Redemption time

        Returns:
            The inserted or refreshed AccessGrant
        """
        async with system_conn() as conn:
            row = await conn.fetchrow(
                """
                INSERT INTO access_grants (id, student_id, assistant_id, expires_at, created_at, updated_at)
                VALUES ($1, $2, $3, $4, $5, $5)
                ON CONFLICT (student_id, assistant_id)
                DO UPDATE SET expires_at = EXCLUDED.expires_at, updated_at = EXCLUDED.updated_at
                RETURNING *
                """,
                uuid4(),
                student_id,
                assistant_id,
                expires_at,
                now,
            )
            return _row_to_access_grant(row)

    async def list_active_for_student(self, student_id: UUID, now: datetime) -> list[tuple[AccessGrant, Assistant]]:
        """
        Unexpired grants of a student with their assistants, latest expiry first.

        Args:
            student_id: Student UUID
            now: Reference time

        Returns:
            List of (AccessGrant, Assistant) pairs
        """
        async with system_conn() as conn:
            rows = await conn.fetch(
                """
                SELECT g.id AS grant_id, g.student_id, g.expires_at,
                       g.created_at AS grant_created_at, g.updated_at AS grant_updated_at,
                       a.*
                FROM access_grants g
                JOIN assistants a ON a.id = g.assistant_id
                WHERE g.student_id = $1
                  AND g.expires_at > $2
                ORDER BY g.expires_at DESC
                """,
                student_id,
                now,
            )
            return [
                (
                    AccessGrant(
                        id=row["grant_id"],
                        student_id=row["student_id"],
                        assistant_id=row["id"],
                        expires_at=row["expires_at"],
                        created_at=row["grant_created_at"],
                        updated_at=row["grant_updated_at"],
                    ),
                    _row_to_assistant(row),
                )
                for row in rows
            ]
