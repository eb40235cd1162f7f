"""Program and profile routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from hallaien.auth import get_current_principal
from hallaien.errors import NotAuthenticated
from hallaien.models.program import Program
from hallaien.models.user import Principal, ProfileResponse, UpdateProfileRequest
from hallaien.repos.profile_repo import ProfileRepo
from hallaien.repos.program_repo import ProgramRepo

router = APIRouter(prefix="/api", tags=["programs"])
program_repo = ProgramRepo()
profile_repo = ProfileRepo()


@router.get("/programs", status_code=200)
async def list_programs(_: Principal = Depends(get_current_principal)) -> list[Program]:
    """All programs, for the assistant form's program picker."""
    return await program_repo.list_programs()


@router.get("/me", status_code=200)
async def get_me(principal: Principal = Depends(get_current_principal)) -> ProfileResponse:
    """The caller's profile with their program memberships."""
    programs = await program_repo.list_for_student(principal.id)
    return ProfileResponse.from_principal(principal, programs)


@router.patch("/me", status_code=200)
async def update_me(
    req: UpdateProfileRequest,
    principal: Principal = Depends(get_current_principal),
) -> ProfileResponse:
    """Edit the caller's first name or avatar URL."""
    updated = await profile_repo.update(principal.id, req)
    if not updated:
        raise NotAuthenticated("Profile not found. Please sign in again.")

    programs = await program_repo.list_for_student(updated.id)
    return ProfileResponse.from_principal(updated, programs)
