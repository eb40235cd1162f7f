"""
Share codes — short reusable capability tokens for 24-hour access.

A teacher issues a code for one of their assistants. Any student who
redeems it before it expires gets (or refreshes) an access grant for that
assistant. Redemption does not consume the code.
"""

from __future__ import annotations

import logging
import secrets
from datetime import UTC, datetime, timedelta
from uuid import UUID

from hallaien import config
from hallaien.errors import AssistantNotFound, InvalidOrExpired, NotOwner, ShareCodeExhausted
from hallaien.models.access import RedeemResult
from hallaien.models.assistant import Assistant
from hallaien.models.share_code import ShareCode
from hallaien.repos.access_grant_repo import AccessGrantRepo
from hallaien.repos.assistant_repo import AssistantRepo
from hallaien.repos.share_code_repo import ShareCodeRepo

logger = logging.getLogger(__name__)

# Digits and uppercase letters without 0/O and 1/I
SHARE_CODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
SHARE_CODE_LENGTH = 6


def generate_code() -> str:
    """Generate a 6-char code from SHARE_CODE_ALPHABET (e.g. 'K7QX2M')."""
    return "".join(secrets.choice(SHARE_CODE_ALPHABET) for _ in range(SHARE_CODE_LENGTH))


def normalize_code(code: str) -> str:
    """Strip surrounding whitespace and uppercase."""
    return code.strip().upper()


class ShareCodeIssuer:
    """Issues, lists and redeems share codes."""

    def __init__(
        self,
        assistants: AssistantRepo | None = None,
        codes: ShareCodeRepo | None = None,
        grants: AccessGrantRepo | None = None,
        ttl: timedelta | None = None,
        max_attempts: int | None = None,
    ) -> None:
        self._assistants = assistants or AssistantRepo()
        self._codes = codes or ShareCodeRepo()
        self._grants = grants or AccessGrantRepo()
        self._ttl = ttl or timedelta(hours=config.settings.SHARE_CODE_TTL_HOURS)
        self._max_attempts = max_attempts or config.settings.SHARE_CODE_MAX_ATTEMPTS

    async def _owned_assistant(self, teacher_id: UUID, assistant_id: UUID) -> Assistant:
        assistant = await self._assistants.get(assistant_id)
        if assistant is None:
            raise AssistantNotFound(assistant_id)
        if assistant.teacher_id != teacher_id:
            raise NotOwner()
        return assistant

    async def issue(self, teacher_id: UUID, assistant_id: UUID, now: datetime | None = None) -> ShareCode:
        """
        Issue a new share code for an assistant the teacher owns.

        Candidates are checked against unexpired codes only. After
        max_attempts collisions the issue fails instead of handing out a
        code that is already live for someone else.

        Args:
            teacher_id: Issuer UUID
            assistant_id: Assistant UUID
            now: Issue time (defaults to current UTC time)

        Returns:
            The stored ShareCode, valid for the configured TTL

        Raises:
            AssistantNotFound: No such assistant
            NotOwner: The teacher does not own the assistant
            ShareCodeExhausted: Every candidate collided with a live code
        """
        await self._owned_assistant(teacher_id, assistant_id)
        now = now or datetime.now(UTC)

        for attempt in range(1, self._max_attempts + 1):
            code = generate_code()
            if not await self._codes.code_in_use(code, now):
                break
            logger.warning("Share code collision on attempt %d for assistant %s", attempt, assistant_id)
        else:
            logger.error("Gave up issuing a share code for assistant %s after %d attempts", assistant_id, self._max_attempts)
            raise ShareCodeExhausted()

        share_code = await self._codes.create(
            teacher_id=teacher_id,
            assistant_id=assistant_id,
            code=code,
            created_at=now,
            expires_at=now + self._ttl,
        )
        logger.info("Issued share code for assistant %s, expires %s", assistant_id, share_code.expires_at.isoformat())
        return share_code

    async def list_active(self, teacher_id: UUID, assistant_id: UUID, now: datetime | None = None) -> list[ShareCode]:
        """
        Unexpired codes the teacher issued for an owned assistant, newest first.

        Raises:
            AssistantNotFound: No such assistant
            NotOwner: The teacher does not own the assistant
        """
        await self._owned_assistant(teacher_id, assistant_id)
        return await self._codes.list_active(teacher_id, assistant_id, now or datetime.now(UTC))

    async def redeem(self, student_id: UUID, code: str, now: datetime | None = None) -> RedeemResult:
        """
        Redeem a share code for a student.

        Creates the student's grant for the code's assistant, or moves the
        expiry of an existing one to now + TTL. A code whose expires_at
        equals now is expired.

        Args:
            student_id: Student UUID
            code: Code as typed by the student, any case
            now: Redemption time (defaults to current UTC time)

        Returns:
            RedeemResult with the assistant to open and the grant expiry

        Raises:
            InvalidOrExpired: Unknown or expired code; no grant is touched
        """
        now = now or datetime.now(UTC)
        normalized = normalize_code(code)
        if len(normalized) != SHARE_CODE_LENGTH:
            raise InvalidOrExpired()

        share_code = await self._codes.get_active_by_code(normalized, now)
        if share_code is None or share_code.expires_at <= now:
            raise InvalidOrExpired()

        grant = await self._grants.upsert(
            student_id=student_id,
            assistant_id=share_code.assistant_id,
            expires_at=now + self._ttl,
            now=now,
        )
        logger.info("Student %s redeemed a share code for assistant %s", student_id, grant.assistant_id)
        return RedeemResult(assistant_id=grant.assistant_id, expires_at=grant.expires_at)


share_code_issuer = ShareCodeIssuer()
