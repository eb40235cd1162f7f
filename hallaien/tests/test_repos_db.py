"""
Repository tests against a real Postgres.

Run the migrations first (alembic upgrade head). Every test here depends on
initialize_pool through the profile fixtures and is skipped when the
database is not reachable.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from uuid import uuid4

import asyncpg
import pytest

from hallaien import db
from hallaien.models.assistant import CreateAssistantRequest, UpdateAssistantRequest
from hallaien.models.user import UpdateProfileRequest
from hallaien.repos.access_grant_repo import AccessGrantRepo
from hallaien.repos.assistant_repo import AssistantRepo
from hallaien.repos.profile_repo import ProfileRepo
from hallaien.repos.program_repo import ProgramRepo
from hallaien.repos.share_code_repo import ShareCodeRepo
from hallaien.services.share_codes import generate_code

pytestmark = pytest.mark.asyncio(loop_scope="session")

assistant_repo = AssistantRepo()
grant_repo = AccessGrantRepo()
program_repo = ProgramRepo()
share_code_repo = ShareCodeRepo()


async def _create_assistant(teacher_id, name="Norsk muntlig"):
    return await assistant_repo.create(teacher_id, CreateAssistantRequest(name=name, external_agent_ref="agent_norsk"))


# ── access grants ───────────────────────────────────────────────────────────


async def test_upsert_same_pair_twice_keeps_one_row(teacher_id, student_id):
    assistant = await _create_assistant(teacher_id)
    now = datetime.now(UTC)

    first = await grant_repo.upsert(student_id, assistant.id, now + timedelta(hours=1), now)
    second = await grant_repo.upsert(student_id, assistant.id, now + timedelta(hours=24), now + timedelta(minutes=5))

    assert second.id == first.id
    assert second.expires_at == now + timedelta(hours=24)
    async with db.system_conn() as conn:
        count = await conn.fetchval(
            "SELECT count(*) FROM access_grants WHERE student_id = $1 AND assistant_id = $2",
            student_id,
            assistant.id,
        )
    assert count == 1


async def test_grant_expiring_now_is_not_active(teacher_id, student_id):
    assistant = await _create_assistant(teacher_id)
    now = datetime.now(UTC)
    await grant_repo.upsert(student_id, assistant.id, now, now - timedelta(hours=24))

    assert await grant_repo.list_active_for_student(student_id, now) == []
    assert len(await grant_repo.list_active_for_student(student_id, now - timedelta(microseconds=1))) == 1


# ── share codes ─────────────────────────────────────────────────────────────


async def test_code_expiring_exactly_now_is_not_live(teacher_id):
    assistant = await _create_assistant(teacher_id)
    code = generate_code()
    now = datetime.now(UTC)
    await share_code_repo.create(teacher_id, assistant.id, code, now - timedelta(hours=24), now)

    assert await share_code_repo.get_active_by_code(code, now) is None
    assert await share_code_repo.code_in_use(code, now) is False

    just_before = now - timedelta(microseconds=1)
    found = await share_code_repo.get_active_by_code(code, just_before)
    assert found is not None
    assert found.assistant_id == assistant.id
    assert await share_code_repo.code_in_use(code, just_before) is True


async def test_get_active_by_code_returns_newest_live(teacher_id):
    older = await _create_assistant(teacher_id, name="Eldre")
    newer = await _create_assistant(teacher_id, name="Nyere")
    code = generate_code()
    now = datetime.now(UTC)
    await share_code_repo.create(teacher_id, older.id, code, now - timedelta(hours=2), now + timedelta(hours=1))
    await share_code_repo.create(teacher_id, newer.id, code, now - timedelta(hours=1), now + timedelta(hours=1))

    found = await share_code_repo.get_active_by_code(code, now)

    assert found.assistant_id == newer.id


# ── owner isolation ─────────────────────────────────────────────────────────


async def test_other_teacher_cannot_read_or_change_assistant(teacher_id, second_teacher_id):
    assistant = await _create_assistant(teacher_id)

    assert await assistant_repo.get_owned(second_teacher_id, assistant.id) is None
    assert assistant.id not in {a.id for a in await assistant_repo.list_for_teacher(second_teacher_id)}
    assert await assistant_repo.update(second_teacher_id, assistant.id, UpdateAssistantRequest(name="Kapret")) is None
    assert await assistant_repo.delete(second_teacher_id, assistant.id) is False

    unchanged = await assistant_repo.get_owned(teacher_id, assistant.id)
    assert unchanged.name == "Norsk muntlig"


async def test_other_teacher_cannot_list_share_codes(teacher_id, second_teacher_id):
    assistant = await _create_assistant(teacher_id)
    now = datetime.now(UTC)
    await share_code_repo.create(teacher_id, assistant.id, generate_code(), now, now + timedelta(hours=24))

    assert await share_code_repo.list_active(second_teacher_id, assistant.id, now) == []
    assert len(await share_code_repo.list_active(teacher_id, assistant.id, now)) == 1


async def test_other_teacher_cannot_change_program_links(teacher_id, second_teacher_id, program_ids):
    assistant = await _create_assistant(teacher_id)
    await program_repo.link_assistant(teacher_id, assistant.id, [program_ids[0]])

    assert await program_repo.list_program_ids_for_assistant(second_teacher_id, assistant.id) == []
    assert await program_repo.link_assistant(second_teacher_id, assistant.id, [program_ids[1]]) == 0
    assert await program_repo.replace_links(second_teacher_id, assistant.id, [program_ids[1]]) == 0
    assert await program_repo.replace_links(second_teacher_id, assistant.id, []) == 0

    assert await program_repo.list_program_ids_for_assistant(teacher_id, assistant.id) == [program_ids[0]]


# ── programs ────────────────────────────────────────────────────────────────


async def test_assistant_in_several_student_programs_is_listed_once(teacher_id, student_id, program_ids):
    assistant = await _create_assistant(teacher_id)
    await program_repo.link_assistant(teacher_id, assistant.id, program_ids)
    async with db.system_conn() as conn:
        for program_id in program_ids:
            await conn.execute(
                "INSERT INTO profile_programs (profile_id, program_id) VALUES ($1, $2)",
                student_id,
                program_id,
            )

    listed = await program_repo.list_assistants_for_student(student_id)

    assert [a.id for a in listed] == [assistant.id]
    assert await program_repo.assistant_linked_to_any(assistant.id, program_ids) is True


async def test_replace_links_swaps_the_set(teacher_id, program_ids):
    assistant = await _create_assistant(teacher_id)
    await program_repo.link_assistant(teacher_id, assistant.id, [program_ids[0]])

    assert await program_repo.replace_links(teacher_id, assistant.id, [program_ids[1]]) == 1

    assert await program_repo.list_program_ids_for_assistant(teacher_id, assistant.id) == [program_ids[1]]


async def test_failed_replace_keeps_old_links(teacher_id, program_ids):
    assistant = await _create_assistant(teacher_id)
    await program_repo.link_assistant(teacher_id, assistant.id, program_ids)

    with pytest.raises(asyncpg.ForeignKeyViolationError):
        await program_repo.replace_links(teacher_id, assistant.id, [uuid4()])

    assert set(await program_repo.list_program_ids_for_assistant(teacher_id, assistant.id)) == set(program_ids)


# ── profiles ────────────────────────────────────────────────────────────────


async def test_update_profile_first_name(student_id):
    updated = await ProfileRepo().update(student_id, UpdateProfileRequest(first_name="Ingrid"))

    assert updated.first_name == "Ingrid"
    assert updated.role == "student"
    assert (await ProfileRepo().get(student_id)).first_name == "Ingrid"


async def test_update_missing_profile_returns_none(initialize_pool):
    assert await ProfileRepo().update(uuid4(), UpdateProfileRequest(first_name="Ingrid")) is None
