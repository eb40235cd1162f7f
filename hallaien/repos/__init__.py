"""
Repository layer for Hallaien.

All SQL lives here and ONLY here. No database access outside this module.
"""

from hallaien.repos.access_grant_repo import AccessGrantRepo
from hallaien.repos.assistant_repo import AssistantRepo
from hallaien.repos.profile_repo import ProfileRepo
from hallaien.repos.program_repo import ProgramRepo
from hallaien.repos.share_code_repo import ShareCodeRepo

__all__ = [
    "ProfileRepo",
    "AssistantRepo",
    "ProgramRepo",
    "ShareCodeRepo",
    "AccessGrantRepo",
]
