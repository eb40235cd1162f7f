"""Repository for profile reads and self-service edits."""

from __future__ import annotations

from uuid import UUID

import asyncpg

from hallaien.db import system_conn, user_conn
from hallaien.models.user import Principal, UpdateProfileRequest

# Columns a user may change on their own profile
_EDITABLE_COLUMNS = ("first_name", "avatar_url")


def _row_to_principal(row: asyncpg.Record) -> Principal:
    """Convert a profiles row to a Principal model."""
    return Principal(
        id=row["id"],
        role=row["role"],
        first_name=row["first_name"],
        avatar_url=row["avatar_url"],
    )


class ProfileRepo:
    """Profiles are created by the identity provider; users may edit their own name and avatar."""

    async def get(self, profile_id: UUID) -> Principal | None:
        """
        Get the profile for an authenticated identity.

        System conn because the role is needed before any user scoping.

        Args:
            profile_id: Identity UUID (the token's sub claim)

        Returns:
            Principal if a profile exists, None otherwise
        """
        async with system_conn() as conn:
            row = await conn.fetchrow(
                "SELECT id, role, first_name, avatar_url FROM profiles WHERE id = $1",
                profile_id,
            )
            return _row_to_principal(row) if row else None

    async def update(self, profile_id: UUID, req: UpdateProfileRequest) -> Principal | None:
        """
        Update the fields the user sent on their own profile.

        Args:
            profile_id: Identity UUID of the caller
            req: UpdateProfileRequest; empty strings clear a field

        Returns:
            Updated Principal, None if no profile exists
        """
        updates = {
            column: getattr(req, column) or None for column in _EDITABLE_COLUMNS if column in req.model_fields_set
        }
        if not updates:
            return await self.get(profile_id)

        set_clause = ", ".join(f"{k} = ${i + 2}" for i, k in enumerate(updates))

        async with user_conn(profile_id) as conn:
            # set_clause only contains column names from _EDITABLE_COLUMNS
            row = await conn.fetchrow(
                f"""
                UPDATE profiles
                SET {set_clause}
                WHERE id = $1
                RETURNING id, role, first_name, avatar_url
                """,  # nosec B608
                profile_id,
                *updates.values(),
            )
            return _row_to_principal(row) if row else None
